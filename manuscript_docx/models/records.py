"""
Paragraph, run and footnote records.

The serializer's output and the package writer's input: a flat list of
styled paragraphs whose runs are plain text, a footnote reference, the
footnote marker (first run of every footnote body) or a line break.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Union

from .document import Mark


@dataclass(frozen=True)
class TextRun:
    text: str
    marks: FrozenSet[Mark] = frozenset()
    font: Optional[str] = None
    size: Optional[int] = None  # half-points
    color: Optional[str] = None


@dataclass(frozen=True)
class FootnoteReferenceRun:
    """Reference from the body to footnote ``footnote_id`` (1-based)."""

    footnote_id: int


@dataclass(frozen=True)
class FootnoteMarkerRun:
    """The numeral at the head of a footnote body."""

    pass


@dataclass(frozen=True)
class BreakRun:
    pass


RunRecord = Union[TextRun, FootnoteReferenceRun, FootnoteMarkerRun, BreakRun]


@dataclass
class ParagraphRecord:
    style_id: str
    runs: List[RunRecord] = field(default_factory=list)
    heading_level: Optional[int] = None


@dataclass
class FootnoteRecord:
    footnote_id: int
    paragraphs: List[ParagraphRecord] = field(default_factory=list)
