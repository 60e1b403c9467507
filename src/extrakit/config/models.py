"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: the ``[tool.extrakit]`` table of ``pyproject.toml``
only contains overrides. Keys are kebab-case, as in the table itself.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from extrakit.domain.extras import DefaultExtras, ExtraName


def _kebab(field_name: str) -> str:
    return field_name.replace("_", "-")


class ExtrasConfig(BaseModel):
    """[tool.extrakit] table."""

    model_config = {
        "frozen": True,
        "extra": "forbid",
        "alias_generator": _kebab,
        "populate_by_name": True,
    }

    default_extras: DefaultExtras = Field(default_factory=DefaultExtras)
    provides_extras: tuple[ExtraName, ...] = ()

    def resolved_default_extras(self) -> tuple[ExtraName, ...]:
        """Default extras with ``all`` expanded against ``provides-extras``."""
        return self.default_extras.resolve(self.provides_extras)
