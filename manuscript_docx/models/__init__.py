"""
Models for manuscript export.

Document tree snapshot, style definitions, footnote store and the
paragraph/run records handed to the package writer.
"""

from .document import (
    Mark,
    TextNode,
    FootnoteNode,
    HardBreakNode,
    UnsupportedNode,
    ParagraphNode,
    HeadingNode,
    DocumentTree,
    parse_document,
)
from .footnote import FootnoteStore
from .package import PageSize, Margins, DocxPackageModel, PAGE_SIZES
from .records import (
    TextRun,
    FootnoteReferenceRun,
    FootnoteMarkerRun,
    BreakRun,
    ParagraphRecord,
    FootnoteRecord,
)
from .style import (
    StyleDefinition,
    StyleType,
    Alignment,
    LineRule,
    Indent,
    Spacing,
    RunProperties,
    ParagraphProperties,
    ResolvedParagraphStyle,
    FOOTNOTE_TEXT_STYLE_ID,
    FOOTNOTE_REFERENCE_STYLE_ID,
)

__all__ = [
    "Mark",
    "TextNode",
    "FootnoteNode",
    "HardBreakNode",
    "UnsupportedNode",
    "ParagraphNode",
    "HeadingNode",
    "DocumentTree",
    "parse_document",
    "FootnoteStore",
    "PageSize",
    "Margins",
    "DocxPackageModel",
    "PAGE_SIZES",
    "TextRun",
    "FootnoteReferenceRun",
    "FootnoteMarkerRun",
    "BreakRun",
    "ParagraphRecord",
    "FootnoteRecord",
    "StyleDefinition",
    "StyleType",
    "Alignment",
    "LineRule",
    "Indent",
    "Spacing",
    "RunProperties",
    "ParagraphProperties",
    "ResolvedParagraphStyle",
    "FOOTNOTE_TEXT_STYLE_ID",
    "FOOTNOTE_REFERENCE_STYLE_ID",
]
