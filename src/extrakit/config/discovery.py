"""pyproject.toml discovery and loading.

Walk-up finder locates pyproject.toml, similar to how git finds .git/.
Supports the EXTRAKIT_CONFIG env var override.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from extrakit.config.models import ExtrasConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "pyproject.toml"
CONFIG_ENV_VAR = "EXTRAKIT_CONFIG"
TOOL_TABLE = "extrakit"


class ConfigError(ValueError):
    """Raised when a configuration file cannot be read."""


def find_pyproject(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for pyproject.toml.

    Returns the path to the file, or None if not found.
    Checks EXTRAKIT_CONFIG env var first.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p
        logger.warning("%s points to a missing file: %s", CONFIG_ENV_VAR, env_path)
        return None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            logger.debug("Found %s at %s", CONFIG_FILENAME, candidate)
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def _subtable(document: dict[str, Any], path: Path, *keys: str) -> dict[str, Any]:
    """Follow *keys* through nested tables; a missing key yields ``{}``."""
    current = document
    for depth, key in enumerate(keys, start=1):
        value = current.get(key, {})
        if not isinstance(value, dict):
            dotted = ".".join(keys[:depth])
            msg = f"Invalid {path}: [{dotted}] must be a table, not {type(value).__name__}"
            raise ConfigError(msg)
        current = value
    return current


def read_tool_table(path: Path) -> dict[str, Any]:
    """Return the ``[tool.extrakit]`` table of *path*.

    When the table has no ``provides-extras`` key, it is filled from the
    keys of ``[project.optional-dependencies]``.

    Raises:
        ConfigError: the file is not valid TOML, or one of the tables on
            the way is some other TOML value.
    """
    raw = path.read_text(encoding="utf-8")
    try:
        document: dict[str, Any] = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigError(msg) from exc

    table = dict(_subtable(document, path, "tool", TOOL_TABLE))
    if "provides-extras" not in table and "provides_extras" not in table:
        optional = _subtable(document, path, "project", "optional-dependencies")
        if optional:
            table["provides-extras"] = list(optional)
    logger.debug("Loaded [tool.%s] from %s: %s", TOOL_TABLE, path, sorted(table))
    return table


def load_config(path: Path | None = None, cwd: Path | None = None) -> ExtrasConfig:
    """Load and validate the extras config from a pyproject.toml.

    If *path* is None, uses find_pyproject(*cwd*) to discover the file.
    Returns default ExtrasConfig if no file is found.
    """
    if path is None:
        path = find_pyproject(cwd)

    if path is None:
        return ExtrasConfig()

    return ExtrasConfig.model_validate(read_tool_table(path))
