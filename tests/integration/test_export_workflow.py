"""
End-to-end export: style sheet + document + footnotes -> .docx.
"""

import io
import zipfile
import xml.etree.ElementTree as ET

import pytest

from manuscript_docx import (
    ExportSettings,
    PackageValidator,
    VariableContext,
    build_package_model,
    export_manuscript,
    export_to_file,
)
from manuscript_docx.utils.xml_utils import NAMESPACES, w


def _part(data, name):
    with zipfile.ZipFile(io.BytesIO(data)) as zip_file:
        return ET.fromstring(zip_file.read(name))


@pytest.mark.integration
class TestExportWorkflow:
    """Full pipeline through the public API."""

    def test_package_is_valid(self, sample_document, sample_styles, sample_footnotes):
        data = export_manuscript(sample_document, sample_styles, sample_footnotes)

        validator = PackageValidator(data)
        validator.validate()
        assert validator.is_valid

    def test_body_paragraphs(self, sample_document, sample_styles, sample_footnotes):
        data = export_manuscript(sample_document, sample_styles, sample_footnotes)
        body = _part(data, 'word/document.xml').find('w:body', NAMESPACES)
        paragraphs = body.findall('w:p', NAMESPACES)

        # bulletList is skipped
        assert len(paragraphs) == 3
        styles = [p.find('w:pPr/w:pStyle', NAMESPACES).get(w('val')) for p in paragraphs]
        assert styles == ["Heading 1", "Body First", "BodyText"]
        assert paragraphs[0].find('w:pPr/w:outlineLvl', NAMESPACES).get(w('val')) == "0"
        assert body[-1].tag == w('sectPr')

    def test_footnotes_numbered_by_first_reference(self, sample_document, sample_styles, sample_footnotes):
        data = export_manuscript(sample_document, sample_styles, sample_footnotes)

        document = _part(data, 'word/document.xml')
        references = [ref.get(w('id')) for ref in document.iter(w('footnoteReference'))]
        assert references == ["1", "2", "1"]

        footnotes = _part(data, 'word/footnotes.xml')
        ids = [note.get(w('id')) for note in footnotes.findall('w:footnote', NAMESPACES)]
        assert ids == ["-1", "0", "1", "2"]

    def test_nested_footnote_body(self, sample_document, sample_styles, sample_footnotes):
        data = export_manuscript(sample_document, sample_styles, sample_footnotes)
        footnotes = _part(data, 'word/footnotes.xml')
        note = [n for n in footnotes.findall('w:footnote', NAMESPACES) if n.get(w('id')) == "2"][0]
        paragraphs = note.findall('w:p', NAMESPACES)

        assert len(paragraphs) == 2
        for paragraph in paragraphs:
            assert paragraph.find('w:pPr/w:pStyle', NAMESPACES).get(w('val')) == "FootnoteText"
        assert paragraphs[0].find('.//w:footnoteRef', NAMESPACES) is not None
        assert paragraphs[1].find('.//w:footnoteRef', NAMESPACES) is None

    def test_text_is_escaped(self, sample_document, sample_styles, sample_footnotes):
        data = export_manuscript(sample_document, sample_styles, sample_footnotes)
        with zipfile.ZipFile(io.BytesIO(data)) as zip_file:
            document_xml = zip_file.read('word/document.xml')

        assert b'stormy &amp; cold.' in document_xml
        texts = [t.text for t in ET.fromstring(document_xml).iter(w('t'))]
        assert "and stormy & cold." in texts

    def test_default_styles_when_none(self, sample_document):
        model = build_package_model(sample_document)

        style_ids = {style.id for style in model.styles}
        assert "BodyText" in style_ids
        assert "FootnoteText" in style_ids
        assert model.default_font == "Minion 3"

    def test_settings_and_context(self, sample_document, sample_styles):
        sample_styles["body"]["font-family"] = "var(--font-text-theme)"
        model = build_package_model(
            sample_document,
            sample_styles,
            settings={"pageSize": "A4", "margins": {"left": "1.25"}},
            context=VariableContext({"font-text-theme": "EB Garamond"}),
        )

        assert model.page_size.width == 11906
        assert model.margins.left == 1800
        assert model.margins.top == 1440
        body = [style for style in model.styles if style.id == "BodyText"][0]
        assert body.run.font == "EB Garamond"
        assert "EB Garamond" in model.resolved_fonts()

    def test_scale_halves_sizes(self, sample_document, sample_styles):
        model = build_package_model(sample_document, sample_styles, settings=ExportSettings(scale=50))
        body = [style for style in model.styles if style.id == "BodyText"][0]
        assert body.run.size == 12

    def test_percent_scale_from_settings(self, sample_document):
        data = export_manuscript(
            sample_document,
            {"body": {"font-size": "12pt"}},
            settings=ExportSettings.from_dict({"pageSize": "A4", "scale": "85%"}),
        )

        styles = _part(data, 'word/styles.xml')
        body = [s for s in styles.findall('w:style', NAMESPACES) if s.get(w('styleId')) == "BodyText"][0]
        # 12pt * 0.85 = 10.2pt -> 20.4 half-points
        assert body.find('w:rPr/w:sz', NAMESPACES).get(w('val')) == "20"


@pytest.mark.e2e
class TestExportToFile:
    """Writing packages to disk."""

    def test_writes_valid_file(self, temp_dir, sample_document, sample_styles, sample_footnotes):
        output = temp_dir / "chapter.docx"
        written = export_to_file(sample_document, output, sample_styles, sample_footnotes)

        assert written == output
        validator = PackageValidator(output)
        validator.validate()
        assert validator.is_valid

    def test_repeat_exports_are_independent(self, sample_document, sample_styles, sample_footnotes):
        first = export_manuscript(sample_document, sample_styles, sample_footnotes)
        second = export_manuscript(sample_document, sample_styles, sample_footnotes)

        assert _part(first, 'word/footnotes.xml').findall('w:footnote', NAMESPACES)[-1].get(w('id')) == "2"
        assert _part(second, 'word/footnotes.xml').findall('w:footnote', NAMESPACES)[-1].get(w('id')) == "2"
