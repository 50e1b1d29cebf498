"""
Style converter for manuscript style sheets.

Turns a semantic style sheet (``{"body": {"font-size": "11.5pt", ...}}``)
into Word paragraph styles with integer half-point and twip values, plus the
lookup table from semantic key to Word style id used by the serializer.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..models.style import (
    Alignment,
    Indent,
    LineRule,
    ParagraphProperties,
    RESERVED_STYLE_IDS,
    RESERVED_STYLE_KEYS,
    ResolvedParagraphStyle,
    RunProperties,
    Spacing,
    StyleDefinition,
)
from ..utils.color_utils import normalize_color
from ..utils.units import (
    DEFAULT_BASE_FONT_SIZE_PX,
    DEFAULT_HALF_POINTS,
    TWIPS_PER_POINT,
    line_multiplier_to_twips,
    parse_percent,
    round_half_away,
    split_length,
    to_half_points,
    to_points,
    to_twips,
)

logger = logging.getLogger(__name__)

DEFAULT_GLOBAL_FONT = "Minion 3"
DEFAULT_SCALE_PERCENT = 100
MAX_VARIABLE_DEPTH = 10

# Font stack tokens that never name a real font
_INVALID_FONT_TOKENS = {"??", "undefined", "null", "inherit", "initial"}

_VAR_START = "var("


class VariableContext:
    """
    Resolution context for ``var(--name)`` references and em/rem lengths.

    Variable names are accepted with or without the leading ``--``.
    """

    def __init__(self, variables: Optional[Mapping[str, Any]] = None,
                 base_font_size: float = DEFAULT_BASE_FONT_SIZE_PX):
        self.variables: Dict[str, str] = {}
        for name, value in (variables or {}).items():
            self.variables[self._normalize_name(name)] = str(value)
        self.base_font_size = base_font_size

    @staticmethod
    def _normalize_name(name: str) -> str:
        name = str(name).strip()
        return name if name.startswith("--") else f"--{name}"

    def get_variable(self, name: str) -> Optional[str]:
        return self.variables.get(self._normalize_name(name))


@dataclass(frozen=True)
class DocumentDefaults:
    font: str
    size: int = DEFAULT_HALF_POINTS


@dataclass
class ConversionResult:
    """Paragraph styles, key -> style id map and document defaults."""

    styles: List[ResolvedParagraphStyle] = field(default_factory=list)
    style_id_map: Dict[str, str] = field(default_factory=dict)
    document_defaults: DocumentDefaults = field(default_factory=lambda: DocumentDefaults(DEFAULT_GLOBAL_FONT))

    @property
    def fonts(self) -> List[str]:
        """Distinct fonts in use, document default first."""
        fonts = [self.document_defaults.font]
        for style in self.styles:
            if style.run.font and style.run.font not in fonts:
                fonts.append(style.run.font)
        return fonts


def parse_scale_percent(value: Any, default: float = DEFAULT_SCALE_PERCENT) -> float:
    """
    Parse the ``scale`` metadata of a style sheet into a percentage.

    ``"100%"`` and ``"85"`` are percentages; bare numbers up to 10 are
    factors (``1.0`` -> 100, ``0.5`` -> 50).
    """
    if value is None or isinstance(value, bool):
        return default
    number = parse_percent(value)
    if number is None or not number.is_finite() or number <= 0:
        logger.debug(f"Invalid scale {value!r}, using {default}%")
        return default
    is_percent = isinstance(value, str) and value.strip().endswith("%")
    if not is_percent and number <= 10:
        number = number * 100
    return float(number)


def _explicit_scale_percent(value: Any) -> float:
    """Caller-supplied scales are percentages (``85``, ``"85%"``)."""
    number = parse_percent(value)
    if number is None or not number.is_finite() or number <= 0:
        logger.warning(f"Invalid scale {value!r}, using {DEFAULT_SCALE_PERCENT}%")
        return DEFAULT_SCALE_PERCENT
    return float(number)


def _find_closing_paren(value: str, start: int) -> int:
    depth = 0
    for index in range(start, len(value)):
        char = value[index]
        if char == "(":
            depth += 1
        elif char == ")":
            if depth == 0:
                return index
            depth -= 1
    return -1


def _split_var_arguments(inner: str) -> Tuple[str, Optional[str]]:
    if "," not in inner:
        return inner.strip(), None
    name, fallback = inner.split(",", 1)
    return name.strip(), fallback.strip()


def resolve_variables(value: Any, context: Any = None, _depth: int = 0) -> Any:
    """
    Substitute every ``var(--name[, fallback])`` in value.

    Unresolvable references (no context, unknown name, no fallback, or a
    reference cycle) are removed. Non-string values are returned unchanged.
    """
    if not isinstance(value, str) or _VAR_START not in value:
        return value
    if _depth > MAX_VARIABLE_DEPTH:
        logger.warning(f"Variable reference too deep, dropping: {value!r}")
        return ""

    parts = []
    position = 0
    while True:
        start = value.find(_VAR_START, position)
        if start < 0:
            parts.append(value[position:])
            break
        parts.append(value[position:start])
        end = _find_closing_paren(value, start + len(_VAR_START))
        if end < 0:
            logger.debug(f"Unterminated var() in {value!r}")
            break

        name, fallback = _split_var_arguments(value[start + len(_VAR_START):end])
        resolved = None
        if context is not None and hasattr(context, "get_variable"):
            resolved = context.get_variable(name)
        if resolved in (None, "") and fallback is not None:
            resolved = fallback
        if resolved in (None, ""):
            logger.debug(f"Unresolved variable {name}")
            resolved = ""
        parts.append(str(resolve_variables(resolved, context, _depth + 1)))
        position = end + 1

    return "".join(parts)


def clean_font_stack(font_stack: Any) -> Optional[str]:
    """First usable family of a comma-separated font stack, quotes stripped."""
    if not isinstance(font_stack, str):
        return None
    for token in font_stack.split(","):
        font = re.sub(r"[\"']", "", token).strip()
        if font and font.lower() not in _INVALID_FONT_TOKENS and _VAR_START not in font:
            return font
    return None


def _non_negative(value: Optional[int], what: str, key: str) -> Optional[int]:
    if value is not None and value < 0:
        logger.debug(f"Negative {what} in style '{key}' clamped to 0")
        return 0
    return value


class StyleConverter:
    """
    Converts semantic style sheets into Word paragraph styles.

    A converter holds no state between calls; every export creates its own.
    """

    def __init__(self, global_font: str = DEFAULT_GLOBAL_FONT, context: Any = None):
        self.global_font = global_font or DEFAULT_GLOBAL_FONT
        self.context = context

    @property
    def base_font_size(self) -> float:
        size = getattr(self.context, "base_font_size", None)
        if isinstance(size, (int, float, Decimal)) and not isinstance(size, bool) and size > 0:
            return size
        return DEFAULT_BASE_FONT_SIZE_PX

    def convert_styles(self, style_config: Optional[Mapping[str, Any]],
                       scale_percent: Optional[float] = None) -> ConversionResult:
        """
        Convert a style sheet.

        Args:
            style_config: Semantic key -> style definition mapping
            scale_percent: Scale in percent; defaults to the sheet's own
                ``scale`` entry, or 100

        Returns:
            ConversionResult with styles in sheet order
        """
        style_config = style_config or {}
        if scale_percent is None:
            scale_percent = parse_scale_percent(style_config.get("scale"))
        else:
            scale_percent = _explicit_scale_percent(scale_percent)
        scale = Decimal(str(scale_percent)) / Decimal(100)

        definitions = self._collect_definitions(style_config)
        style_id_map = {key: style_id for key, (style_id, _) in definitions.items()}

        styles = []
        for key, (style_id, definition) in definitions.items():
            styles.append(self._map_paragraph_style(key, style_id, definition, scale, style_id_map))

        logger.debug(f"Converted {len(styles)} paragraph styles at {scale_percent}%")
        return ConversionResult(
            styles=styles,
            style_id_map=style_id_map,
            document_defaults=DocumentDefaults(font=self.global_font, size=DEFAULT_HALF_POINTS),
        )

    def _collect_definitions(self, style_config: Mapping[str, Any]) -> Dict[str, Tuple[str, StyleDefinition]]:
        definitions: Dict[str, Tuple[str, StyleDefinition]] = {}
        for key, raw in style_config.items():
            if key in RESERVED_STYLE_KEYS:
                continue
            if not isinstance(raw, Mapping):
                logger.debug(f"Skipping style '{key}': value is not a mapping")
                continue
            definition = StyleDefinition.from_mapping(raw)
            if not definition.is_paragraph_style:
                logger.debug(f"Skipping style '{key}' of type '{definition.type}'")
                continue
            style_id = RESERVED_STYLE_IDS.get(key, definition.name or key)
            definitions[key] = (style_id, definition)
        return definitions

    def _resolve(self, value: Any) -> Any:
        resolved = resolve_variables(value, self.context)
        if isinstance(resolved, str):
            resolved = resolved.strip()
            return resolved or None
        return resolved

    def _map_paragraph_style(self, key: str, style_id: str, definition: StyleDefinition,
                             scale: Decimal, style_id_map: Mapping[str, str]) -> ResolvedParagraphStyle:
        run = self._map_run_properties(key, definition, scale)
        paragraph = self._map_paragraph_properties(key, definition, scale)
        return ResolvedParagraphStyle(
            id=style_id,
            name=definition.name or key,
            run=run,
            paragraph=paragraph,
            based_on=self._style_reference(key, "based-on", definition.based_on, style_id_map),
            next_style=self._style_reference(key, "following-style", definition.following_style, style_id_map),
        )

    def _style_reference(self, key: str, field_name: str, target: Optional[str],
                         style_id_map: Mapping[str, str]) -> Optional[str]:
        if not target:
            return None
        if target in style_id_map:
            return style_id_map[target]
        if target in style_id_map.values():
            return target
        logger.debug(f"Style '{key}' {field_name} '{target}' names no converted style, ignoring")
        return None

    def _map_font(self, definition: StyleDefinition) -> str:
        if not definition.font_family:
            return self.global_font
        font = clean_font_stack(resolve_variables(definition.font_family, self.context))
        return font or self.global_font

    def _map_run_properties(self, key: str, definition: StyleDefinition, scale: Decimal) -> RunProperties:
        size = None
        font_size = self._resolve(definition.font_size)
        if font_size is not None:
            size = _non_negative(to_half_points(font_size, scale, self.base_font_size), "font size", key)

        weight = (self._resolve(definition.font_weight) or "").lower()
        variant = (self._resolve(definition.font_variant) or "").lower()
        capitalization = (self._resolve(definition.capitalization) or "").lower()

        color = None
        raw_color = self._resolve(definition.color)
        if raw_color is not None:
            color = normalize_color(raw_color)
            if color is None:
                logger.debug(f"Dropping unrecognized color {raw_color!r} in style '{key}'")

        return RunProperties(
            font=self._map_font(definition),
            size=size,
            bold=weight == "bold" or variant == "bold",
            italic=variant == "italic",
            small_caps=capitalization == "small-caps" or variant == "small-caps",
            color=color,
            character_spacing=self._map_character_spacing(key, definition, size, scale),
        )

    def _map_character_spacing(self, key: str, definition: StyleDefinition,
                               size: Optional[int], scale: Decimal) -> Optional[int]:
        value = self._resolve(definition.character_spacing)
        if value is None:
            return None
        parts = split_length(value)
        if parts is not None and parts[1] == "%":
            # Percent of the font size; size is already scaled
            font_points = Decimal(size if size is not None else DEFAULT_HALF_POINTS) / 2
            twips = round_half_away(parts[0] / 100 * font_points * TWIPS_PER_POINT)
        else:
            twips = to_twips(value, scale, self.base_font_size)
        return _non_negative(twips, "character spacing", key)

    def _length(self, key: str, what: str, value: Any, scale: Decimal) -> Optional[int]:
        value = self._resolve(value)
        if value is None:
            return None
        return _non_negative(to_twips(value, scale, self.base_font_size), what, key)

    def _summed_length(self, key: str, what: str, explicit: Any, margin: Any,
                       padding: Any, scale: Decimal) -> Optional[int]:
        """Explicit indent wins; otherwise margin and padding add up."""
        if self._resolve(explicit) is not None:
            return self._length(key, what, explicit, scale)
        parts = [self._length(key, what, margin, scale), self._length(key, what, padding, scale)]
        present = [part for part in parts if part is not None]
        return sum(present) if present else None

    def _map_line_spacing(self, key: str, value: Any, scale: Decimal) -> Tuple[Optional[int], Optional[LineRule]]:
        value = self._resolve(value)
        if value is None:
            return None, None
        multiplier = line_multiplier_to_twips(value)
        if multiplier is not None:
            return _non_negative(multiplier, "line spacing", key), LineRule.AUTO
        if to_points(value, self.base_font_size) is None:
            logger.debug(f"Cannot parse line spacing {value!r} in style '{key}', ignoring")
            return None, None
        return _non_negative(to_twips(value, scale, self.base_font_size), "line spacing", key), LineRule.EXACT

    def _map_paragraph_properties(self, key: str, definition: StyleDefinition,
                                  scale: Decimal) -> ParagraphProperties:
        alignment = None
        text_align = self._resolve(definition.text_align)
        if text_align is not None:
            alignment = Alignment.from_css(text_align)
            if alignment is None:
                logger.debug(f"Unknown text-align {text_align!r} in style '{key}'")

        indent = Indent(
            left=self._summed_length(key, "left indent", definition.left_indent,
                                     definition.margin_left, definition.padding_left, scale),
            right=self._summed_length(key, "right indent", definition.right_indent,
                                      definition.margin_right, definition.padding_right, scale),
            first_line=self._length(key, "first indent", definition.first_indent, scale),
        )

        line, line_rule = self._map_line_spacing(key, definition.line_spacing, scale)
        spacing = Spacing(
            before=self._length(key, "space before", definition.space_before, scale),
            after=self._length(key, "space after", definition.space_after, scale),
            line=line,
            line_rule=line_rule,
        )

        return ParagraphProperties(
            alignment=alignment,
            indent=indent,
            spacing=spacing,
            keep_next=definition.keep_with_next,
        )


def convert_styles(style_config: Optional[Mapping[str, Any]], scale_percent: Optional[float] = None,
                   global_font: str = DEFAULT_GLOBAL_FONT, context: Any = None) -> ConversionResult:
    """Convert a style sheet with a fresh StyleConverter."""
    return StyleConverter(global_font=global_font, context=context).convert_styles(style_config, scale_percent)
