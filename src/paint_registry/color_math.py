# color_math.py – integer-only colour helpers
#   - hex string parsing (#RRGGBB → three 0..255 channels)
#   - fixed-point division with round-half-up at the last kept digit
#   - RGB → HSL without floats, so every caller gets bit-identical results

from __future__ import annotations

import string
from typing import Tuple

from .errors import DivideByZeroError, FormatError

Hex = str
RGB = Tuple[int, int, int]
HSL = Tuple[int, int, int]  # degrees, percent, percent

# --- constants ---------------------------------------------------------------
PRECISION = 5
_SCALE = 10**PRECISION  # 1.0 in fixed point
_HALF = _SCALE // 2
_HEX_DIGITS = frozenset(string.hexdigits)


# --- 1) hex parsing ----------------------------------------------------------
def remove_hash_prefix(color: Hex) -> str:
    """'#32502E' → '32502E'. Only a single leading '#' is removed."""
    if not isinstance(color, str) or not color.startswith("#"):
        raise FormatError(f"color must start with '#': {color!r}")
    return color[1:]


def hex_to_rgb(color: Hex) -> RGB:
    raw = remove_hash_prefix(color)
    # int(x, 16) alone would accept '+f', ' f' and 'f_f'
    if len(raw) != 6 or not all(ch in _HEX_DIGITS for ch in raw):
        raise FormatError(f"expected '#' followed by 6 hex digits: {color!r}")
    r, g, b = (int(raw[i : i + 2], 16) for i in (0, 2, 4))
    return r, g, b


# --- 2) helpers ----------------------------------------------------------------
def min_of3(a: int, b: int, c: int) -> int:
    m = a
    if b < m:
        m = b
    if c < m:
        m = c
    return m


def max_of3(a: int, b: int, c: int) -> int:
    m = a
    if b > m:
        m = b
    if c > m:
        m = c
    return m


def fixed_divide(numerator: int, denominator: int, precision: int = PRECISION) -> int:
    """
    numerator / denominator scaled by 10**precision, integers only.

    One extra digit is computed and then rounded half up:
        fixed_divide(3, 2)    == 150000
        fixed_divide(80, 255) == 31373   (31372.549…)
        fixed_divide(46, 255) == 18039   (18039.215…)
    """
    if denominator == 0:
        raise DivideByZeroError(f"cannot divide {numerator} by zero")
    if numerator < 0 or denominator < 0 or precision < 0:
        raise ValueError("fixed_divide expects non-negative operands")
    return ((numerator * 10 ** (precision + 1)) // denominator + 5) // 10


def _round_scaled(value: int, factor: int) -> int:
    # value is fixed point (scale 10**PRECISION); floor division keeps
    # round-half-up correct for negative hue segments as well
    return (value * factor + _HALF) // _SCALE


def _signed_divide(numerator: int, denominator: int) -> int:
    q = fixed_divide(abs(numerator), denominator)
    return -q if numerator < 0 else q


# --- 3) RGB → HSL ----------------------------------------------------------------
def _check_channel(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 255:
        raise FormatError(f"channel must be an integer in 0..255: {value!r}")
    return value


def rgb_to_hsl(r: int, g: int, b: int) -> HSL:
    """
    Standard HSL in fixed point. Hue in whole degrees (0..359), saturation and
    lightness in whole percent (0..100).

    >>> rgb_to_hsl(160, 80, 70)
    (7, 39, 45)
    """
    rn, gn, bn = (fixed_divide(_check_channel(c), 255) for c in (r, g, b))

    hi = max_of3(rn, gn, bn)
    lo = min_of3(rn, gn, bn)
    lightness = (hi + lo) // 2
    delta = hi - lo

    if delta == 0:
        # achromatic: hue and saturation are undefined, report 0
        return 0, 0, _round_scaled(lightness, 100)

    if lightness < _HALF:
        saturation = fixed_divide(delta, hi + lo)
    else:
        saturation = fixed_divide(delta, 2 * _SCALE - hi - lo)

    # 6-piece hue, in sixths of the wheel
    if hi == rn:
        sector = _signed_divide(gn - bn, delta)
    elif hi == gn:
        sector = 2 * _SCALE + _signed_divide(bn - rn, delta)
    else:
        sector = 4 * _SCALE + _signed_divide(rn - gn, delta)

    hue = _round_scaled(sector, 60) % 360
    return hue, _round_scaled(saturation, 100), _round_scaled(lightness, 100)


def hex_to_hsl(color: Hex) -> HSL:
    return rgb_to_hsl(*hex_to_rgb(color))


__all__ = [
    "PRECISION",
    "fixed_divide",
    "hex_to_hsl",
    "hex_to_rgb",
    "max_of3",
    "min_of3",
    "remove_hash_prefix",
    "rgb_to_hsl",
]
