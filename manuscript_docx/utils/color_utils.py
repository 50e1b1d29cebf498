"""Color utilities for style conversion."""

import re
from typing import Optional, Tuple

NAMED_COLORS = {
    'black': (0, 0, 0),
    'white': (255, 255, 255),
    'red': (255, 0, 0),
    'green': (0, 128, 0),
    'blue': (0, 0, 255),
    'yellow': (255, 255, 0),
    'cyan': (0, 255, 255),
    'magenta': (255, 0, 255),
    'gray': (128, 128, 128),
    'grey': (128, 128, 128),
}

_HEX_RE = re.compile(r'^[0-9a-fA-F]{6}$')
_SHORT_HEX_RE = re.compile(r'^[0-9a-fA-F]{3}$')
_RGB_RE = re.compile(r'^rgba?\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*(?:,[^)]*)?\)$')


def rgb_to_hex(rgb_color: Tuple[int, int, int]) -> Optional[str]:
    """Convert an RGB triple to six upper-case hex digits (no '#')."""
    try:
        r, g, b = [int(c) for c in rgb_color]
    except (TypeError, ValueError):
        return None
    if not all(0 <= c <= 255 for c in (r, g, b)):
        return None
    return f"{r:02X}{g:02X}{b:02X}"


def normalize_color(color_value) -> Optional[str]:
    """
    Normalize a CSS-ish color to the six-digit hex form Word expects.

    Accepts ``#RRGGBB``, ``RRGGBB``, ``#RGB``, ``rgb(r, g, b)``, a handful of
    named colors and ``auto``. Anything else returns None.
    """
    if not color_value or not isinstance(color_value, str):
        return None

    value = color_value.strip()
    if value.lower() == 'auto':
        return 'auto'

    bare = value.replace('#', '')
    if _HEX_RE.match(bare):
        return bare.upper()
    if _SHORT_HEX_RE.match(bare):
        return ''.join(c * 2 for c in bare).upper()

    match = _RGB_RE.match(value.lower())
    if match:
        return rgb_to_hex(tuple(int(part) for part in match.groups()))

    named = NAMED_COLORS.get(value.lower())
    if named:
        return rgb_to_hex(named)
    return None
