"""
Styles module for manuscript style sheets.

Converts semantic style sheets into Word paragraph styles and ships the
built-in manuscript sheet.
"""

from .converter import (
    StyleConverter,
    ConversionResult,
    DocumentDefaults,
    VariableContext,
    convert_styles,
    parse_scale_percent,
    resolve_variables,
    clean_font_stack,
)
from .defaults import DEFAULT_STYLES, get_default_styles

__all__ = [
    "StyleConverter",
    "ConversionResult",
    "DocumentDefaults",
    "VariableContext",
    "convert_styles",
    "parse_scale_percent",
    "resolve_variables",
    "clean_font_stack",
    "DEFAULT_STYLES",
    "get_default_styles",
]
