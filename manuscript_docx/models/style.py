"""
Style models.

``StyleDefinition`` is the typed view of one entry of a semantic style sheet
(the loose, string-keyed mapping an author edits). ``ResolvedParagraphStyle``
is the Word-native result of converting it: integer half-points and twips,
resolved font and style ids.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional


# Style sheet keys that carry metadata, never styles
RESERVED_STYLE_KEYS = frozenset({"scale", "footnote-symbol"})

# Semantic keys with reserved Word style ids
RESERVED_STYLE_IDS = {
    "body": "BodyText",
    "footnote": "FootnoteText",
}

FOOTNOTE_TEXT_STYLE_ID = "FootnoteText"
FOOTNOTE_REFERENCE_STYLE_ID = "FootnoteReference"

_FALSE_STRINGS = {"false", "no", "0", "off", "none", ""}


class StyleType(str, Enum):
    """Semantic style families found in style sheets."""

    PARAGRAPH = "paragraph"
    HEADING = "heading"
    FOOTNOTE = "footnote"
    LIST = "list"


PARAGRAPH_STYLE_TYPES = frozenset({None, StyleType.PARAGRAPH.value, StyleType.HEADING.value,
                                   StyleType.FOOTNOTE.value})


class Alignment(str, Enum):
    """Paragraph alignment; values are the WordprocessingML ``w:jc`` tokens."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    JUSTIFIED = "both"

    @classmethod
    def from_css(cls, value: Any) -> Optional["Alignment"]:
        if not isinstance(value, str):
            return None
        return _CSS_ALIGNMENT.get(value.strip().lower())


_CSS_ALIGNMENT = {
    "left": Alignment.LEFT,
    "center": Alignment.CENTER,
    "right": Alignment.RIGHT,
    "justify": Alignment.JUSTIFIED,
}


class LineRule(str, Enum):
    """Line spacing rule: exact twips or 240ths of a line."""

    EXACT = "exact"
    AUTO = "auto"


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return str(value)


def _length(value: Any) -> Any:
    """Keep numbers and non-empty strings; anything else is absent."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return value
    return _text(value)


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in _FALSE_STRINGS
    return bool(value)


def _first(data: Mapping[str, Any], *keys: str) -> Any:
    """Value of the first key present with a usable value."""
    for key in keys:
        value = _length(data.get(key))
        if value is not None:
            return value
    return None


@dataclass(frozen=True)
class StyleDefinition:
    """One semantic style sheet entry with every field optional."""

    name: Optional[str] = None
    type: Optional[str] = None
    font_family: Optional[str] = None
    font_size: Any = None
    font_weight: Optional[str] = None
    font_variant: Optional[str] = None
    color: Optional[str] = None
    text_align: Optional[str] = None
    first_indent: Any = None
    left_indent: Any = None
    margin_left: Any = None
    padding_left: Any = None
    right_indent: Any = None
    margin_right: Any = None
    padding_right: Any = None
    space_before: Any = None
    space_after: Any = None
    line_spacing: Any = None
    capitalization: Optional[str] = None
    character_spacing: Any = None
    keep_with_next: bool = False
    following_style: Optional[str] = None
    based_on: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "StyleDefinition":
        """
        Build a definition from a style sheet entry.

        Explicit keys win over their CSS aliases (``first-indent`` over
        ``text-indent``, ``before-paragraph`` over ``margin-top``...).
        """
        style_type = _text(data.get("type"))
        return cls(
            name=_text(data.get("name")),
            type=style_type.lower() if style_type else None,
            font_family=_text(data.get("font-family")),
            font_size=_length(data.get("font-size")),
            font_weight=_text(data.get("font-weight")),
            font_variant=_text(data.get("font-variant")),
            color=_text(data.get("color")),
            text_align=_text(data.get("text-align")),
            first_indent=_first(data, "first-indent", "text-indent"),
            left_indent=_length(data.get("left-indent")),
            margin_left=_length(data.get("margin-left")),
            padding_left=_length(data.get("padding-left")),
            right_indent=_length(data.get("right-indent")),
            margin_right=_length(data.get("margin-right")),
            padding_right=_length(data.get("padding-right")),
            space_before=_first(data, "before-paragraph", "margin-top"),
            space_after=_first(data, "after-paragraph", "margin-bottom"),
            line_spacing=_first(data, "line-height", "line-spacing"),
            capitalization=_text(data.get("capitalization")),
            character_spacing=_length(data.get("character-spacing")),
            keep_with_next=_flag(data.get("keep-with-next", False)),
            following_style=_text(data.get("following-style")),
            based_on=_text(data.get("based-on")),
        )

    @property
    def is_paragraph_style(self) -> bool:
        return self.type in PARAGRAPH_STYLE_TYPES


@dataclass(frozen=True)
class Indent:
    left: Optional[int] = None
    right: Optional[int] = None
    first_line: Optional[int] = None

    def is_empty(self) -> bool:
        return self.left is None and self.right is None and self.first_line is None


@dataclass(frozen=True)
class Spacing:
    before: Optional[int] = None
    after: Optional[int] = None
    line: Optional[int] = None
    line_rule: Optional[LineRule] = None

    def is_empty(self) -> bool:
        return self.before is None and self.after is None and self.line is None


@dataclass(frozen=True)
class RunProperties:
    """Character formatting of a paragraph style (size in half-points)."""

    font: Optional[str] = None
    size: Optional[int] = None
    bold: bool = False
    italic: bool = False
    small_caps: bool = False
    color: Optional[str] = None
    character_spacing: Optional[int] = None


@dataclass(frozen=True)
class ParagraphProperties:
    """Paragraph formatting of a paragraph style (lengths in twips)."""

    alignment: Optional[Alignment] = None
    indent: Indent = field(default_factory=Indent)
    spacing: Spacing = field(default_factory=Spacing)
    keep_next: bool = False


@dataclass(frozen=True)
class ResolvedParagraphStyle:
    """A Word paragraph style ready to be written to styles.xml."""

    id: str
    name: str
    run: RunProperties = field(default_factory=RunProperties)
    paragraph: ParagraphProperties = field(default_factory=ParagraphProperties)
    based_on: Optional[str] = None
    next_style: Optional[str] = None
