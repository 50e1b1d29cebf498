"""
Tests for PackageValidator.
"""

import io
import zipfile

import pytest

from manuscript_docx.export.docx_exporter import PackageWriter
from manuscript_docx.models.package import DocxPackageModel
from manuscript_docx.models.records import FootnoteRecord, FootnoteReferenceRun, ParagraphRecord, TextRun
from manuscript_docx.models.style import ResolvedParagraphStyle
from manuscript_docx.validator import PackageValidator, ValidationLevel, validate_package


def _package(**kwargs):
    return PackageWriter().generate(DocxPackageModel(**kwargs))


def _rewrite(data, replace=None, drop=()):
    """Copy a package, replacing or dropping parts."""
    replace = replace or {}
    source = zipfile.ZipFile(io.BytesIO(data))
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, 'w') as target:
        for name in source.namelist():
            if name in drop:
                continue
            target.writestr(name, replace.get(name, source.read(name)))
    return buffer.getvalue()


def _messages(issues, level=ValidationLevel.ERROR):
    return [issue.message for issue in issues if issue.level is level]


@pytest.mark.unit
class TestPackageValidator:
    """Validation of generated packages."""

    def test_clean_package(self):
        data = _package(
            paragraphs=[ParagraphRecord("BodyText", [TextRun("x"), FootnoteReferenceRun(1)])],
            styles=[ResolvedParagraphStyle("BodyText", "Body")],
            footnotes=[FootnoteRecord(1, [ParagraphRecord("BodyText", [])])],
        )
        validator = PackageValidator(data)

        assert validator.validate() == []
        assert validator.is_valid

    def test_missing_part(self):
        data = _rewrite(_package(), drop=('word/fontTable.xml',))
        validator = PackageValidator(data)
        issues = validator.validate()

        assert not validator.is_valid
        assert any(issue.part == 'word/fontTable.xml' for issue in issues)
        assert "Required part is missing" in _messages(issues)

    def test_malformed_xml(self):
        data = _rewrite(_package(), replace={'word/styles.xml': b'<w:styles'})
        issues = validate_package(data)
        assert any(message.startswith("Malformed XML") for message in _messages(issues))

    def test_dangling_footnote_reference(self):
        data = _package(paragraphs=[ParagraphRecord("X", [FootnoteReferenceRun(5)])])
        issues = validate_package(data)
        assert "Footnote reference 5 has no footnote" in _messages(issues)

    def test_undefined_style_is_warning(self):
        data = _package(paragraphs=[ParagraphRecord("Nowhere", [])])
        validator = PackageValidator(data)
        issues = validator.validate()

        assert validator.is_valid
        assert _messages(issues, ValidationLevel.WARNING) == ["Style 'Nowhere' is referenced but not defined"]

    def test_not_a_zip(self):
        validator = PackageValidator(b"plain bytes")
        validator.validate()
        assert not validator.is_valid

    def test_reads_path(self, temp_dir):
        path = temp_dir / "out.docx"
        path.write_bytes(_package())
        assert PackageValidator(path).validate() == []

    def test_issue_to_dict(self):
        issues = validate_package(_package(paragraphs=[ParagraphRecord("Nowhere", [])]))
        assert issues[0].to_dict() == {
            'level': 'warning',
            'message': "Style 'Nowhere' is referenced but not defined",
            'part': 'word/document.xml',
        }
        assert str(issues[0]).startswith("[WARNING]")
