"""
Utils module for manuscript export helpers.

Unit conversion, color normalization, XML helpers and logging setup.
"""

from .units import (
    to_half_points,
    to_twips,
    to_points,
    inches_to_twips,
    round_half_away,
    parse_percent,
)
from .color_utils import normalize_color
from .xml_utils import WORD_NS, REL_NS, w, r, to_xml_bytes
from .logger import setup_logging, get_logger

__all__ = [
    "to_half_points",
    "to_twips",
    "to_points",
    "inches_to_twips",
    "round_half_away",
    "parse_percent",
    "normalize_color",
    "WORD_NS",
    "REL_NS",
    "w",
    "r",
    "to_xml_bytes",
    "setup_logging",
    "get_logger",
]
