"""ExtraName and DefaultExtras value types.

ExtraName wraps the canonical form of an extra name and can only be built
through :func:`~extrakit.domain.names.validate_and_normalize`.

DefaultExtras is either the ``all`` sentinel or an ordered list of extra
names. Its serialized form has two shapes:

- ``"all"`` for the sentinel
- ``["list", "of", "extras"]`` for an explicit list

INVARIANT: ``DefaultExtras.all()`` and ``DefaultExtras()`` (the empty list)
are distinct values and serialize differently.
"""

from __future__ import annotations

import functools
from collections.abc import Iterable
from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import PydanticCustomError, core_schema

from extrakit.domain.names import InvalidNameError, validate_and_normalize

ALL_SENTINEL = "all"
SENTINEL_MISMATCH_MESSAGE = 'default-extras must be "all" or a ["list", "of", "extras"]'
EXTRA_NAME_EXPECTING = "a string"
DEFAULT_EXTRAS_EXPECTING = 'the string "all" or a list of strings'


class ExtrasFormatError(ValueError):
    """Raised when serialized extras data has the wrong shape."""


def describe_value(value: object) -> str:
    """Describe the kind of a decoded value for type-mismatch messages."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return f"boolean `{str(value).lower()}`"
    if isinstance(value, int):
        return f"integer `{value}`"
    if isinstance(value, float):
        return f"floating point `{value}`"
    if isinstance(value, str):
        return f"string {value!r}"
    if isinstance(value, (bytes, bytearray)):
        return "byte array"
    if isinstance(value, dict):
        return "map"
    if isinstance(value, (list, tuple)):
        return "sequence"
    return type(value).__name__


def _type_mismatch(value: object, expecting: str) -> ExtrasFormatError:
    return ExtrasFormatError(f"invalid type: {describe_value(value)}, expected {expecting}")


def _to_pydantic_error(exc: ValueError) -> PydanticCustomError:
    error_type = "invalid_extra_name" if isinstance(exc, InvalidNameError) else "default_extras"
    return PydanticCustomError(error_type, "{reason}", {"reason": str(exc)})


@functools.total_ordering
class ExtraName:
    """The normalized name of an extra dependency.

    Converts the name to lowercase and collapses runs of ``-``, ``_`` and
    ``.`` into a single ``-``: ``---``, ``.`` and ``__`` all become ``-``.

    See https://peps.python.org/pep-0685/ and
    https://packaging.python.org/en/latest/specifications/name-normalization/
    """

    __slots__ = ("_name",)

    _name: str

    def __init__(self, name: str | ExtraName) -> None:
        if isinstance(name, ExtraName):
            canonical = name._name
        else:
            canonical = validate_and_normalize(name)
        object.__setattr__(self, "_name", canonical)

    @classmethod
    def from_str(cls, name: str) -> ExtraName:
        """Create a validated, normalized extra name."""
        return cls(name)

    @classmethod
    def from_owned(cls, name: str) -> ExtraName:
        """Same as :meth:`from_str`; kept for callers that hand over their string."""
        return cls(name)

    @classmethod
    def from_data(cls, value: object) -> ExtraName:
        """Parse a decoded scalar into an ExtraName.

        Raises:
            ExtrasFormatError: *value* is not a string.
            InvalidNameError: the string is not a valid extra name.
        """
        if isinstance(value, ExtraName):
            return value
        if not isinstance(value, str):
            raise _type_mismatch(value, EXTRA_NAME_EXPECTING)
        return cls(value)

    def as_str(self) -> str:
        """Return the canonical extra name."""
        return self._name

    def to_data(self) -> str:
        return self._name

    def __setattr__(self, key: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, key: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self) -> tuple[type[ExtraName], tuple[str]]:
        return (type(self), (self._name,))

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExtraName):
            return NotImplemented
        return self._name == other._name

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ExtraName):
            return NotImplemented
        return self._name < other._name

    def __hash__(self) -> int:
        return hash(self._name)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            _validate_extra_name,
            serialization=core_schema.plain_serializer_function_ser_schema(
                cls.to_data, return_schema=core_schema.str_schema()
            ),
        )


def _validate_extra_name(value: object) -> ExtraName:
    try:
        return ExtraName.from_data(value)
    except (ExtrasFormatError, InvalidNameError) as exc:
        raise _to_pydantic_error(exc) from exc


@functools.total_ordering
class DefaultExtras:
    """Either the literal ``all`` or a list of extras.

    ``DefaultExtras()`` is the empty list. Order and duplicates are kept
    as given; deduplication is left to callers.
    """

    __slots__ = ("_extras",)

    # None marks the ``all`` sentinel.
    _extras: tuple[ExtraName, ...] | None

    def __init__(self, extras: Iterable[ExtraName | str] = ()) -> None:
        if isinstance(extras, str):
            raise TypeError("DefaultExtras takes an iterable of names; use DefaultExtras.all()")
        object.__setattr__(self, "_extras", tuple(ExtraName(extra) for extra in extras))

    @classmethod
    def all(cls) -> DefaultExtras:
        """Select every extra the project provides."""
        instance = cls.__new__(cls)
        object.__setattr__(instance, "_extras", None)
        return instance

    @classmethod
    def from_list(cls, extras: Iterable[ExtraName | str]) -> DefaultExtras:
        return cls(extras)

    @classmethod
    def default(cls) -> DefaultExtras:
        return cls()

    @classmethod
    def from_data(cls, value: object) -> DefaultExtras:
        """Parse decoded data: the string ``"all"`` or a list of strings.

        The sentinel must match exactly; ``["all"]`` is a list holding the
        extra named ``all``.

        Raises:
            ExtrasFormatError: *value* has the wrong shape or is a string
                other than ``"all"``.
            InvalidNameError: a list element is not a valid extra name.
        """
        if isinstance(value, DefaultExtras):
            return value
        if isinstance(value, str):
            if value != ALL_SENTINEL:
                raise ExtrasFormatError(SENTINEL_MISMATCH_MESSAGE)
            return cls.all()
        if isinstance(value, (list, tuple)):
            return cls(ExtraName.from_data(item) for item in value)
        raise _type_mismatch(value, DEFAULT_EXTRAS_EXPECTING)

    @property
    def is_all(self) -> bool:
        return self._extras is None

    @property
    def extras(self) -> tuple[ExtraName, ...] | None:
        """The listed extras, or None for the ``all`` sentinel."""
        return self._extras

    def resolve(self, available: Iterable[ExtraName]) -> tuple[ExtraName, ...]:
        """Expand to concrete extra names.

        ``all`` yields *available* in its given order; a list yields its
        own entries unchanged, whether or not they appear in *available*.
        """
        if self._extras is None:
            return tuple(available)
        return self._extras

    def to_data(self) -> str | list[str]:
        """Serialize to ``"all"`` or a list of canonical names."""
        if self._extras is None:
            return ALL_SENTINEL
        return [extra.as_str() for extra in self._extras]

    def _sort_key(self) -> tuple[int, tuple[ExtraName, ...]]:
        if self._extras is None:
            return (0, ())
        return (1, self._extras)

    def __setattr__(self, key: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, key: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self) -> tuple[Any, tuple[Any, ...]]:
        if self._extras is None:
            return (DefaultExtras.all, ())
        return (type(self), (self._extras,))

    def __repr__(self) -> str:
        if self._extras is None:
            return f"{type(self).__name__}.all()"
        return f"{type(self).__name__}({list(self._extras)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DefaultExtras):
            return NotImplemented
        return self._extras == other._extras

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, DefaultExtras):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __hash__(self) -> int:
        return hash(self._sort_key())

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            _validate_default_extras,
            serialization=core_schema.plain_serializer_function_ser_schema(cls.to_data),
        )


def _validate_default_extras(value: object) -> DefaultExtras:
    try:
        return DefaultExtras.from_data(value)
    except (ExtrasFormatError, InvalidNameError) as exc:
        raise _to_pydantic_error(exc) from exc
