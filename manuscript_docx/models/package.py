"""
Package model: everything the package writer needs for one .docx file.

Page geometry is in twips, font sizes in half-points.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .records import FootnoteRecord, ParagraphRecord
from .style import ResolvedParagraphStyle
from ..utils.units import DEFAULT_HALF_POINTS, TWIPS_PER_INCH


@dataclass(frozen=True)
class PageSize:
    width: int
    height: int


LETTER = PageSize(width=12240, height=15840)
A4 = PageSize(width=11906, height=16838)
LEGAL = PageSize(width=12240, height=20160)

PAGE_SIZES = {
    "Letter": LETTER,
    "A4": A4,
    "Legal": LEGAL,
}


@dataclass(frozen=True)
class Margins:
    top: int = TWIPS_PER_INCH
    bottom: int = TWIPS_PER_INCH
    left: int = TWIPS_PER_INCH
    right: int = TWIPS_PER_INCH


@dataclass
class DocxPackageModel:
    """Input of PackageWriter.generate."""

    paragraphs: List[ParagraphRecord] = field(default_factory=list)
    styles: List[ResolvedParagraphStyle] = field(default_factory=list)
    footnotes: List[FootnoteRecord] = field(default_factory=list)
    fonts: Optional[List[str]] = None
    page_size: Optional[PageSize] = None
    margins: Optional[Margins] = None
    default_font: str = "Minion 3"
    default_font_size: int = DEFAULT_HALF_POINTS

    def resolved_fonts(self) -> List[str]:
        """Fonts as given, or the default font followed by every style font."""
        candidates = list(self.fonts) if self.fonts else [self.default_font]
        if not self.fonts:
            candidates.extend(style.run.font for style in self.styles if style.run.font)
        fonts: List[str] = []
        for font in candidates:
            if font and font not in fonts:
                fonts.append(font)
        return fonts
