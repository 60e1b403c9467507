"""Structured-data codec for extra names and default-extras selections.

pydantic-core is the host codec: decoded builtins (from JSON, TOML, YAML)
go in, ``pydantic.ValidationError`` comes out on bad input with the
messages defined by the domain types.
"""

from __future__ import annotations

from pydantic import TypeAdapter

from extrakit.domain.extras import DefaultExtras, ExtraName

_EXTRA_NAME_ADAPTER: TypeAdapter[ExtraName] = TypeAdapter(ExtraName)
_DEFAULT_EXTRAS_ADAPTER: TypeAdapter[DefaultExtras] = TypeAdapter(DefaultExtras)


def _adapter(value: ExtraName | DefaultExtras) -> TypeAdapter[ExtraName] | TypeAdapter[DefaultExtras]:
    if isinstance(value, ExtraName):
        return _EXTRA_NAME_ADAPTER
    if isinstance(value, DefaultExtras):
        return _DEFAULT_EXTRAS_ADAPTER
    msg = f"Cannot serialize {type(value).__name__}"
    raise TypeError(msg)


def to_data(value: ExtraName | DefaultExtras) -> str | list[str]:
    """Serialize to builtin data: ``"name"``, ``"all"`` or ``["a", "b"]``."""
    return _adapter(value).dump_python(value, mode="json")


def dump_json(value: ExtraName | DefaultExtras) -> bytes:
    return _adapter(value).dump_json(value)


def load_extra_name(data: object) -> ExtraName:
    return _EXTRA_NAME_ADAPTER.validate_python(data)


def load_extra_name_json(raw: str | bytes) -> ExtraName:
    return _EXTRA_NAME_ADAPTER.validate_json(raw)


def load_default_extras(data: object) -> DefaultExtras:
    """Validate builtin data into a DefaultExtras.

    Raises:
        pydantic.ValidationError: the data is neither ``"all"`` nor a list
            of valid extra names.
    """
    return _DEFAULT_EXTRAS_ADAPTER.validate_python(data)


def load_default_extras_json(raw: str | bytes) -> DefaultExtras:
    return _DEFAULT_EXTRAS_ADAPTER.validate_json(raw)
