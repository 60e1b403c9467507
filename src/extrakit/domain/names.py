"""Package and extra name normalization (PEP 503 / PEP 685).

Lowercases ASCII letters and collapses runs of ``-``, ``_`` and ``.``
into a single ``-``.

INVARIANT: ``validate_and_normalize(validate_and_normalize(s))`` equals
``validate_and_normalize(s)`` for every accepted ``s``.
"""

from __future__ import annotations

import re

VALID_NAME_PATTERN = re.compile(r"[A-Za-z0-9](?:[A-Za-z0-9._-]*[A-Za-z0-9])?", re.ASCII)
NORMALIZED_NAME_PATTERN = re.compile(r"[a-z0-9]+(?:-[a-z0-9]+)*", re.ASCII)
SEPARATOR_RUN_PATTERN = re.compile(r"[-_.]+")


class InvalidNameError(ValueError):
    """Raised when a string is not a valid package or extra name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f'Not a valid package or extra name: "{name}". Names must start and end with '
            "a letter or digit and may only contain -, _, ., and alphanumeric characters."
        )


def is_normalized(name: str) -> bool:
    """Check whether *name* is already in canonical form."""
    return NORMALIZED_NAME_PATTERN.fullmatch(name) is not None


def validate_and_normalize(name: str) -> str:
    """Validate *name* and return its canonical form.

    Examples:
        >>> validate_and_normalize("Foo__Bar.--baz")
        'foo-bar-baz'
        >>> validate_and_normalize("foo-bar-baz")
        'foo-bar-baz'

    Raises:
        InvalidNameError: *name* is empty, contains characters other than
            ASCII letters, digits, ``-``, ``_`` and ``.``, or does not start
            and end with a letter or digit.
        TypeError: *name* is not a ``str``.
    """
    if not isinstance(name, str):
        msg = f"Names must be str, not {type(name).__name__}"
        raise TypeError(msg)
    if is_normalized(name):
        return name
    if VALID_NAME_PATTERN.fullmatch(name) is None:
        raise InvalidNameError(name)
    return SEPARATOR_RUN_PATTERN.sub("-", name).lower()
