"""
Document tree models.

An immutable snapshot of the editor's document: block nodes (paragraphs
and headings) holding inline nodes (text, footnote references, hard
breaks). Trees are usually parsed from the editor's JSON form::

    {"type": "doc", "content": [
        {"type": "paragraph", "attrs": {"class": "body-first"},
         "content": [{"type": "text", "text": "Hello", "marks": [{"type": "bold"}]}]}
    ]}

Node types this exporter does not model are kept as ``UnsupportedNode`` so
the serializer can skip them explicitly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, FrozenSet, Iterable, Mapping, Optional, Tuple, Union

logger = logging.getLogger(__name__)

MIN_HEADING_LEVEL = 1
MAX_HEADING_LEVEL = 6


class Mark(str, Enum):
    """Inline text marks carried over to Word runs."""

    BOLD = "bold"
    ITALIC = "italic"
    STRIKE = "strike"
    UNDERLINE = "underline"
    SUPERSCRIPT = "superscript"
    SUBSCRIPT = "subscript"
    SMALL_CAPS = "smallCaps"

    @classmethod
    def from_name(cls, name: Any) -> Optional["Mark"]:
        """Map an editor mark name to a Mark, None for marks Word runs do not carry."""
        if not isinstance(name, str):
            return None
        return _MARK_ALIASES.get(name.strip().lower())


_MARK_ALIASES = {
    "bold": Mark.BOLD,
    "strong": Mark.BOLD,
    "italic": Mark.ITALIC,
    "em": Mark.ITALIC,
    "strike": Mark.STRIKE,
    "strikethrough": Mark.STRIKE,
    "underline": Mark.UNDERLINE,
    "superscript": Mark.SUPERSCRIPT,
    "subscript": Mark.SUBSCRIPT,
    "smallcaps": Mark.SMALL_CAPS,
    "small_caps": Mark.SMALL_CAPS,
    "small-caps": Mark.SMALL_CAPS,
}


@dataclass(frozen=True)
class TextNode:
    text: str
    marks: FrozenSet[Mark] = frozenset()


@dataclass(frozen=True)
class FootnoteNode:
    """Reference to a footnote by the application's internal id."""

    footnote_id: Optional[str] = None


@dataclass(frozen=True)
class HardBreakNode:
    pass


@dataclass(frozen=True)
class UnsupportedNode:
    """A node type outside the exported vocabulary (lists, quotes, images...)."""

    node_type: str


InlineNode = Union[TextNode, FootnoteNode, HardBreakNode, UnsupportedNode]


@dataclass(frozen=True)
class ParagraphNode:
    content: Tuple[InlineNode, ...] = ()
    style_class: Optional[str] = None


@dataclass(frozen=True)
class HeadingNode:
    level: int = MIN_HEADING_LEVEL
    content: Tuple[InlineNode, ...] = ()
    style_class: Optional[str] = None


BlockNode = Union[ParagraphNode, HeadingNode, UnsupportedNode]


@dataclass(frozen=True)
class DocumentTree:
    """Root of a document snapshot."""

    content: Tuple[BlockNode, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> "DocumentTree":
        return parse_document(data)

    def is_empty(self) -> bool:
        return not self.content


def _attrs(data: Mapping[str, Any]) -> Mapping[str, Any]:
    attrs = data.get("attrs")
    return attrs if isinstance(attrs, Mapping) else {}


def _style_class(attrs: Mapping[str, Any]) -> Optional[str]:
    value = attrs.get("class")
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _heading_level(value: Any) -> int:
    try:
        level = int(value)
    except (TypeError, ValueError):
        return MIN_HEADING_LEVEL
    if level < MIN_HEADING_LEVEL or level > MAX_HEADING_LEVEL:
        return MIN_HEADING_LEVEL
    return level


def _parse_marks(raw_marks: Any) -> FrozenSet[Mark]:
    marks = set()
    if not isinstance(raw_marks, Iterable) or isinstance(raw_marks, (str, bytes)):
        return frozenset()
    for raw in raw_marks:
        name = raw.get("type") if isinstance(raw, Mapping) else raw
        mark = Mark.from_name(name)
        if mark is None:
            logger.debug(f"Ignoring unsupported mark: {name!r}")
            continue
        marks.add(mark)
    return frozenset(marks)


def parse_inline(data: Any) -> InlineNode:
    """Parse one inline node from its JSON form."""
    if not isinstance(data, Mapping):
        return UnsupportedNode(type(data).__name__)

    node_type = data.get("type")
    if node_type == "text":
        return TextNode(text=str(data.get("text") or ""), marks=_parse_marks(data.get("marks")))
    if node_type in ("footnote", "footnoteReference", "footnote_reference"):
        footnote_id = _attrs(data).get("id")
        return FootnoteNode(footnote_id=str(footnote_id) if footnote_id not in (None, "") else None)
    if node_type in ("hard_break", "hardBreak"):
        return HardBreakNode()
    return UnsupportedNode(str(node_type))


def _parse_inline_content(data: Mapping[str, Any]) -> Tuple[InlineNode, ...]:
    content = data.get("content")
    if not isinstance(content, list):
        return ()
    return tuple(parse_inline(child) for child in content)


def parse_block(data: Any) -> BlockNode:
    """Parse one block node from its JSON form."""
    if not isinstance(data, Mapping):
        return UnsupportedNode(type(data).__name__)

    node_type = data.get("type")
    attrs = _attrs(data)
    if node_type == "paragraph":
        return ParagraphNode(content=_parse_inline_content(data), style_class=_style_class(attrs))
    if node_type == "heading":
        return HeadingNode(
            level=_heading_level(attrs.get("level")),
            content=_parse_inline_content(data),
            style_class=_style_class(attrs),
        )
    return UnsupportedNode(str(node_type))


def parse_document(data: Any) -> DocumentTree:
    """
    Parse a document tree.

    Args:
        data: ``{"type": "doc", "content": [...]}``, a bare list of block
            nodes, or an existing DocumentTree

    Returns:
        DocumentTree snapshot
    """
    if isinstance(data, DocumentTree):
        return data
    if isinstance(data, Mapping):
        blocks = data.get("content")
    else:
        blocks = data
    if not isinstance(blocks, list):
        logger.debug("Document has no block content, exporting an empty body")
        return DocumentTree()
    return DocumentTree(content=tuple(parse_block(block) for block in blocks))
