"""Unified settings: overrides, env vars, and pyproject.toml in one object.

Priority chain (highest to lowest):
  1. Init kwargs: explicit overrides from the caller
  2. Env vars: ``EXTRAKIT_*`` prefix (``EXTRAKIT_EXTRAS`` takes JSON)
  3. TOML file: ``[tool.extrakit]`` of the discovered pyproject.toml
  4. Code defaults: baked into the section models

Uses Pydantic Settings v2 with a custom :class:`PyprojectSettingsSource`
that reuses the walk-up discovery from :mod:`extrakit.config.discovery`.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from extrakit.config.discovery import find_pyproject, read_tool_table
from extrakit.config.logging import configure_logging
from extrakit.config.models import ExtrasConfig


class PyprojectSettingsSource(PydanticBaseSettingsSource):
    """Read the ``[tool.extrakit]`` table into the ``extras`` field."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            table = read_tool_table(toml_path)
            if table:
                self._data = {"extras": table}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for the pyproject path during construction.
_tls = threading.local()


class ExtrakitSettings(BaseSettings):
    """Unified settings for a project using extrakit.

    Attributes:
        project_root: Directory holding ``pyproject.toml``, or CWD if none
            was found.
        config_path: The pyproject.toml in use, or None.
        extras: The ``[tool.extrakit]`` table.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "EXTRAKIT_",
    }

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    verbose: bool = False
    log_json: bool = False

    extras: ExtrasConfig = Field(default_factory=ExtrasConfig)

    def configure_logging(self) -> None:
        """Apply ``verbose`` and ``log_json`` to extrakit's logging output."""
        configure_logging(
            verbose=self.verbose,
            log_json=self.log_json,
            project_root=self.project_root,
        )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the pyproject source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            PyprojectSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_project(
        cls,
        *,
        config_path: str | Path | None = None,
        project_root: Path | None = None,
        **overrides: Any,
    ) -> ExtrakitSettings:
        """Construct settings for a project.

        Discovers ``pyproject.toml`` via walk-up from *project_root* (or uses
        an explicit *config_path*), resolves *project_root* from the file's
        parent directory, and applies *overrides* with highest priority.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_pyproject(project_root)

        resolved_root = project_root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(
                project_root=resolved_root,
                config_path=toml_path,
                **overrides,
            )
        finally:
            _tls.toml_path = None
