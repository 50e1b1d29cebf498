"""
Units conversion for manuscript styles.

Handles CSS-like length strings (pt, in, mm, cm, px, em, rem) and converts
them to the two integer units WordprocessingML uses: half-points for font
sizes and twips (1/20 pt) for spacing, indentation and page geometry.

Every converter here is total: unparseable input resolves to a safe default
instead of raising.
"""

from __future__ import annotations

import logging
import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)

Number = Union[int, float, Decimal]

HALF_POINTS_PER_POINT = 2
TWIPS_PER_POINT = 20
TWIPS_PER_INCH = 1440
LINE_UNITS_PER_LINE = 240  # "auto" line rule counts 240ths of a line

DEFAULT_HALF_POINTS = 24  # 12pt
DEFAULT_TWIPS = 0
DEFAULT_BASE_FONT_SIZE_PX = 16

# Points per unit
POINTS_PER_UNIT = {
    "pt": Decimal("1"),
    "in": Decimal("72"),
    "mm": Decimal("2.835"),
    "cm": Decimal("28.35"),
    "px": Decimal("0.75"),  # 96 dpi approximation
}

RELATIVE_UNITS = ("em", "rem")

_LENGTH_RE = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+))\s*([a-zA-Z%]*)")


def _to_decimal(value: Any) -> Optional[Decimal]:
    if isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value
    if isinstance(value, (int, float)):
        try:
            result = Decimal(str(value))
        except InvalidOperation:
            return None
        return result if result.is_finite() else None
    return None


def round_half_away(value: Number) -> int:
    """Round to the nearest integer, ties away from zero (1.5 -> 2, -1.5 -> -2)."""
    decimal_value = value if isinstance(value, Decimal) else Decimal(str(value))
    # ROUND_HALF_UP in the decimal module rounds ties away from zero
    return int(decimal_value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def split_length(value: Any) -> Optional[tuple]:
    """
    Split a length into ``(number, unit)``.

    Bare numbers come back with an empty unit. Returns None when no leading
    number can be read.
    """
    number = _to_decimal(value)
    if number is not None:
        return number, ""
    if not isinstance(value, str):
        return None

    match = _LENGTH_RE.match(value)
    if not match:
        return None
    try:
        number = Decimal(match.group(1))
    except InvalidOperation:
        return None
    return number, match.group(2).lower()


def has_length_unit(value: Any) -> bool:
    """True if value is a string carrying a unit this module converts."""
    parts = split_length(value)
    if parts is None:
        return False
    unit = parts[1]
    return unit in POINTS_PER_UNIT or unit in RELATIVE_UNITS


def to_points(value: Any, base_font_size: Number = DEFAULT_BASE_FONT_SIZE_PX) -> Optional[Decimal]:
    """
    Convert a length to points.

    Args:
        value: Bare number (already points) or string such as ``"0.3in"``
        base_font_size: Root font size in px used for em/rem

    Returns:
        Points as Decimal, or None when the value cannot be parsed
    """
    parts = split_length(value)
    if parts is None:
        return None

    number, unit = parts
    if unit in POINTS_PER_UNIT:
        return number * POINTS_PER_UNIT[unit]
    if unit in RELATIVE_UNITS:
        base = _to_decimal(base_font_size) or Decimal(DEFAULT_BASE_FONT_SIZE_PX)
        return number * base * POINTS_PER_UNIT["px"]
    if unit:
        logger.debug(f"Unknown unit '{unit}' in {value!r}, treating number as points")
    return number


def _scaled(points: Decimal, factor: int, scale: Number) -> int:
    scale_decimal = _to_decimal(scale)
    if scale_decimal is None:
        scale_decimal = Decimal("1")
    return round_half_away(points * factor * scale_decimal)


def to_half_points(value: Any, scale: Number = 1.0,
                   base_font_size: Number = DEFAULT_BASE_FONT_SIZE_PX) -> int:
    """
    Convert a length to half-points (font size unit).

    Unparseable values resolve to 24 (12pt).
    """
    points = to_points(value, base_font_size)
    if points is None:
        logger.debug(f"Cannot parse font size {value!r}, using {DEFAULT_HALF_POINTS} half-points")
        return DEFAULT_HALF_POINTS
    return _scaled(points, HALF_POINTS_PER_POINT, scale)


def to_twips(value: Any, scale: Number = 1.0,
             base_font_size: Number = DEFAULT_BASE_FONT_SIZE_PX) -> int:
    """
    Convert a length to twips (spacing, indentation, geometry).

    Unparseable values resolve to 0.
    """
    points = to_points(value, base_font_size)
    if points is None:
        logger.debug(f"Cannot parse length {value!r}, using {DEFAULT_TWIPS} twips")
        return DEFAULT_TWIPS
    return _scaled(points, TWIPS_PER_POINT, scale)


def inches_to_twips(value: Any, default: Optional[int] = TWIPS_PER_INCH) -> Optional[int]:
    """Convert inches (number or numeric string) to twips."""
    parts = split_length(value)
    if parts is None:
        return default
    number, unit = parts
    if unit and unit != "in":
        # Explicit units other than inches go through the length table
        return to_twips(value)
    return round_half_away(number * TWIPS_PER_INCH)


def line_multiplier_to_twips(value: Any) -> Optional[int]:
    """Convert a unitless line-height multiplier to 240ths of a line."""
    parts = split_length(value)
    if parts is None or parts[1]:
        return None
    return round_half_away(parts[0] * LINE_UNITS_PER_LINE)


def parse_percent(value: Any) -> Optional[Decimal]:
    """
    Parse a percentage such as ``"100%"`` or ``"2%"``.

    Bare numbers are returned as is.
    """
    parts = split_length(value)
    if parts is None:
        return None
    number, unit = parts
    if unit not in ("", "%"):
        return None
    return number
