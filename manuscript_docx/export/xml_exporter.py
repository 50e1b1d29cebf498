"""
XML exporter for manuscript packages.

Builds the WordprocessingML parts (document, styles, footnotes, font table,
settings) from paragraph records and resolved styles. Elements are emitted
in schema order so Word opens the result without repair.
"""

import logging
import xml.etree.ElementTree as ET
from typing import Iterable, List, Optional

from ..models.document import Mark
from ..models.package import LETTER, Margins, PageSize
from ..models.records import (
    BreakRun,
    FootnoteMarkerRun,
    FootnoteRecord,
    FootnoteReferenceRun,
    ParagraphRecord,
    RunRecord,
    TextRun,
)
from ..models.style import (
    FOOTNOTE_REFERENCE_STYLE_ID,
    ParagraphProperties,
    ResolvedParagraphStyle,
    RunProperties,
)
from ..utils.units import DEFAULT_HALF_POINTS
from ..utils.xml_utils import XML_NS, clean_text, register_namespaces, sub_element, to_xml_bytes, w

logger = logging.getLogger(__name__)

SEPARATOR_FOOTNOTE_ID = -1
CONTINUATION_SEPARATOR_FOOTNOTE_ID = 0

HEADER_FOOTER_DISTANCE = 720
DEFAULT_TAB_STOP = 720


class XMLExporter:
    """
    Generates WordML parts for one package.

    Every ``export_*_xml`` method returns the serialized part as bytes with
    an XML declaration.
    """

    def __init__(self, default_font: str = "Minion 3", default_font_size: int = DEFAULT_HALF_POINTS):
        self.default_font = default_font
        self.default_font_size = default_font_size

        # Keep the w: prefix instead of ns0:
        register_namespaces()

        logger.debug("XML exporter initialized")

    # ------------------------------------------------------------------
    # Runs and paragraphs

    def _add_fonts(self, rPr: ET.Element, font: str) -> None:
        sub_element(rPr, 'rFonts', ascii=font, hAnsi=font, cs=font, eastAsia=font)

    def _add_size(self, rPr: ET.Element, size: int) -> None:
        sub_element(rPr, 'sz', size)
        sub_element(rPr, 'szCs', size)

    def _add_text_run_properties(self, run: TextRun, r_el: ET.Element) -> None:
        """Only marks and explicit overrides; everything else comes from the style."""
        marks = run.marks
        if not marks and run.font is None and run.size is None and run.color is None:
            return

        rPr = ET.SubElement(r_el, w('rPr'))
        if run.font:
            self._add_fonts(rPr, run.font)
        if Mark.BOLD in marks:
            sub_element(rPr, 'b')
        if Mark.ITALIC in marks:
            sub_element(rPr, 'i')
        if Mark.SMALL_CAPS in marks:
            sub_element(rPr, 'smallCaps')
        if Mark.STRIKE in marks:
            sub_element(rPr, 'strike')
        if run.color:
            sub_element(rPr, 'color', run.color)
        if run.size is not None:
            self._add_size(rPr, run.size)
        if Mark.UNDERLINE in marks:
            sub_element(rPr, 'u', 'single')
        if Mark.SUPERSCRIPT in marks:
            sub_element(rPr, 'vertAlign', 'superscript')
        elif Mark.SUBSCRIPT in marks:
            sub_element(rPr, 'vertAlign', 'subscript')

    def _reference_run(self, parent: ET.Element) -> ET.Element:
        r_el = ET.SubElement(parent, w('r'))
        rPr = ET.SubElement(r_el, w('rPr'))
        sub_element(rPr, 'rStyle', FOOTNOTE_REFERENCE_STYLE_ID)
        return r_el

    def export_run_xml(self, run: RunRecord, parent: ET.Element) -> Optional[ET.Element]:
        """Append one run to parent."""
        if isinstance(run, TextRun):
            r_el = ET.SubElement(parent, w('r'))
            self._add_text_run_properties(run, r_el)
            t_el = ET.SubElement(r_el, w('t'))
            t_el.set(f'{{{XML_NS}}}space', 'preserve')
            t_el.text = clean_text(run.text)
            return r_el
        if isinstance(run, FootnoteReferenceRun):
            r_el = self._reference_run(parent)
            sub_element(r_el, 'footnoteReference', id=run.footnote_id)
            return r_el
        if isinstance(run, FootnoteMarkerRun):
            r_el = self._reference_run(parent)
            sub_element(r_el, 'footnoteRef')
            return r_el
        if isinstance(run, BreakRun):
            r_el = ET.SubElement(parent, w('r'))
            sub_element(r_el, 'br')
            return r_el
        logger.debug(f"Skipping unknown run record: {run!r}")
        return None

    def export_paragraph_xml(self, paragraph: ParagraphRecord, parent: Optional[ET.Element] = None) -> ET.Element:
        """Build one ``w:p`` for a paragraph record."""
        p_el = ET.SubElement(parent, w('p')) if parent is not None else ET.Element(w('p'))

        pPr = ET.SubElement(p_el, w('pPr'))
        sub_element(pPr, 'pStyle', paragraph.style_id)
        if paragraph.heading_level:
            sub_element(pPr, 'outlineLvl', paragraph.heading_level - 1)

        for run in paragraph.runs:
            self.export_run_xml(run, p_el)
        return p_el

    # ------------------------------------------------------------------
    # Parts

    def _export_sect_pr(self, body: ET.Element, page_size: PageSize, margins: Margins) -> None:
        sectPr = ET.SubElement(body, w('sectPr'))
        sub_element(sectPr, 'pgSz', w=page_size.width, h=page_size.height)
        sub_element(
            sectPr, 'pgMar',
            top=margins.top,
            right=margins.right,
            bottom=margins.bottom,
            left=margins.left,
            header=HEADER_FOOTER_DISTANCE,
            footer=HEADER_FOOTER_DISTANCE,
            gutter=0,
        )

    def export_document_xml(self, paragraphs: Iterable[ParagraphRecord],
                            page_size: Optional[PageSize] = None,
                            margins: Optional[Margins] = None) -> bytes:
        """
        Generate word/document.xml.

        Args:
            paragraphs: Paragraph records in document order
            page_size: Page size in twips (Letter when missing)
            margins: Page margins in twips (1 inch when missing)
        """
        root = ET.Element(w('document'))
        body = ET.SubElement(root, w('body'))

        count = 0
        for paragraph in paragraphs:
            self.export_paragraph_xml(paragraph, body)
            count += 1

        self._export_sect_pr(body, page_size or LETTER, margins or Margins())
        logger.debug(f"Generated document.xml with {count} paragraphs")
        return to_xml_bytes(root)

    def _add_style_paragraph_properties(self, style_el: ET.Element, props: ParagraphProperties) -> None:
        pPr = ET.Element(w('pPr'))
        if props.keep_next:
            sub_element(pPr, 'keepNext')
        spacing = props.spacing
        if not spacing.is_empty():
            sub_element(
                pPr, 'spacing',
                before=spacing.before,
                after=spacing.after,
                line=spacing.line,
                lineRule=spacing.line_rule.value if spacing.line_rule is not None and spacing.line is not None else None,
            )
        indent = props.indent
        if not indent.is_empty():
            sub_element(pPr, 'ind', left=indent.left, right=indent.right, firstLine=indent.first_line)
        if props.alignment is not None:
            sub_element(pPr, 'jc', props.alignment.value)
        if len(pPr):
            style_el.append(pPr)

    def _add_style_run_properties(self, style_el: ET.Element, props: RunProperties) -> None:
        rPr = ET.SubElement(style_el, w('rPr'))
        self._add_fonts(rPr, props.font or self.default_font)
        if props.bold:
            sub_element(rPr, 'b')
        if props.italic:
            sub_element(rPr, 'i')
        if props.small_caps:
            sub_element(rPr, 'smallCaps')
        if props.color:
            sub_element(rPr, 'color', props.color)
        if props.character_spacing is not None:
            sub_element(rPr, 'spacing', props.character_spacing)
        self._add_size(rPr, props.size if props.size is not None else self.default_font_size)

    def export_style_xml(self, style: ResolvedParagraphStyle, parent: ET.Element) -> ET.Element:
        style_el = ET.SubElement(parent, w('style'), {w('type'): 'paragraph', w('styleId'): style.id})
        sub_element(style_el, 'name', style.name)
        if style.based_on:
            sub_element(style_el, 'basedOn', style.based_on)
        if style.next_style:
            sub_element(style_el, 'next', style.next_style)
        sub_element(style_el, 'qFormat')
        self._add_style_paragraph_properties(style_el, style.paragraph)
        self._add_style_run_properties(style_el, style.run)
        return style_el

    def export_styles_xml(self, styles: Iterable[ResolvedParagraphStyle]) -> bytes:
        """Generate word/styles.xml: document defaults, paragraph styles, footnote reference style."""
        root = ET.Element(w('styles'))

        doc_defaults = ET.SubElement(root, w('docDefaults'))
        rPr = ET.SubElement(ET.SubElement(doc_defaults, w('rPrDefault')), w('rPr'))
        self._add_fonts(rPr, self.default_font)
        self._add_size(rPr, self.default_font_size)
        ET.SubElement(doc_defaults, w('pPrDefault'))

        seen = set()
        for style in styles:
            if style.id in seen:
                logger.warning(f"Duplicate style id '{style.id}', keeping the first definition")
                continue
            seen.add(style.id)
            self.export_style_xml(style, root)

        reference = ET.SubElement(root, w('style'), {w('type'): 'character', w('styleId'): FOOTNOTE_REFERENCE_STYLE_ID})
        sub_element(reference, 'name', 'footnote reference')
        ref_rPr = ET.SubElement(reference, w('rPr'))
        sub_element(ref_rPr, 'vertAlign', 'superscript')

        logger.debug(f"Generated styles.xml with {len(seen)} paragraph styles")
        return to_xml_bytes(root)

    def _export_separator(self, root: ET.Element, footnote_type: str, footnote_id: int) -> None:
        footnote = ET.SubElement(root, w('footnote'), {w('type'): footnote_type, w('id'): str(footnote_id)})
        p_el = ET.SubElement(footnote, w('p'))
        pPr = ET.SubElement(p_el, w('pPr'))
        sub_element(pPr, 'spacing', after=0, line=240, lineRule='auto')
        r_el = ET.SubElement(p_el, w('r'))
        sub_element(r_el, footnote_type)

    def export_footnotes_xml(self, footnotes: Iterable[FootnoteRecord]) -> bytes:
        """Generate word/footnotes.xml with the two separators first."""
        root = ET.Element(w('footnotes'))
        self._export_separator(root, 'separator', SEPARATOR_FOOTNOTE_ID)
        self._export_separator(root, 'continuationSeparator', CONTINUATION_SEPARATOR_FOOTNOTE_ID)

        count = 0
        for record in footnotes:
            footnote = ET.SubElement(root, w('footnote'), {w('id'): str(record.footnote_id)})
            for paragraph in record.paragraphs:
                self.export_paragraph_xml(paragraph, footnote)
            count += 1

        logger.debug(f"Generated footnotes.xml with {count} footnotes")
        return to_xml_bytes(root)

    def export_font_table_xml(self, fonts: Iterable[str]) -> bytes:
        """Generate word/fontTable.xml with one entry per distinct font."""
        root = ET.Element(w('fonts'))
        seen: List[str] = []
        for font in fonts:
            if not font or font in seen:
                continue
            seen.append(font)
            font_el = ET.SubElement(root, w('font'), {w('name'): font})
            sub_element(font_el, 'charset', '00')
            sub_element(font_el, 'family', 'auto')
            sub_element(font_el, 'pitch', 'variable')
        return to_xml_bytes(root)

    def export_settings_xml(self) -> bytes:
        """Generate word/settings.xml; footnotePr points at the separators."""
        root = ET.Element(w('settings'))
        sub_element(root, 'zoom', percent=100)
        sub_element(root, 'defaultTabStop', DEFAULT_TAB_STOP)
        sub_element(root, 'characterSpacingControl', 'doNotCompress')

        footnote_pr = ET.SubElement(root, w('footnotePr'))
        sub_element(footnote_pr, 'footnote', id=SEPARATOR_FOOTNOTE_ID)
        sub_element(footnote_pr, 'footnote', id=CONTINUATION_SEPARATOR_FOOTNOTE_ID)

        compat = ET.SubElement(root, w('compat'))
        sub_element(compat, 'compatSetting', name='compatibilityMode',
                    uri='http://schemas.microsoft.com/office/word', val=15)
        return to_xml_bytes(root)
