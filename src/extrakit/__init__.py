"""extrakit: normalized extra names and default-extras selection."""

from __future__ import annotations

from extrakit.domain.extras import DefaultExtras, ExtraName, ExtrasFormatError
from extrakit.domain.names import InvalidNameError, validate_and_normalize

__all__ = [
    "DefaultExtras",
    "ExtraName",
    "ExtrasFormatError",
    "InvalidNameError",
    "validate_and_normalize",
]
