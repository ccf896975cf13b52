from __future__ import annotations

import string
from typing import Any

from .errors import FormatError

COLOR_LENGTH = 7  # '#' + RRGGBB


def is_valid_color(value: Any) -> bool:
    """True only for exactly '#RRGGBB' (either case, no 3-digit shorthand)."""
    if not isinstance(value, str) or len(value) != COLOR_LENGTH:
        return False
    if value[0] != "#":
        return False
    return all(c in string.hexdigits for c in value[1:])


def require_valid_color(value: Any) -> str:
    if not is_valid_color(value):
        raise FormatError(f"not a #RRGGBB hex color: {value!r}")
    return value


__all__ = ["COLOR_LENGTH", "is_valid_color", "require_valid_color"]
