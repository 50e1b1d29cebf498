"""
DOCX exporter - packs manuscript parts into a .docx file.

Uses XMLExporter for the WordML parts and adds the package plumbing:
relationships and [Content_Types].xml. The result always holds exactly
eight parts.
"""

from __future__ import annotations

import io
import logging
import os
import tempfile
import xml.etree.ElementTree as ET
import zipfile
from pathlib import Path
from typing import Dict, List, Tuple, Union

from ..exceptions import PackagingError
from ..models.package import LETTER, DocxPackageModel, Margins
from ..utils.xml_utils import CONTENT_TYPES_NS, PKG_REL_NS, to_xml_bytes
from .xml_exporter import XMLExporter

logger = logging.getLogger(__name__)

REL_TYPE_BASE = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
OFFICE_DOCUMENT_REL_TYPE = f"{REL_TYPE_BASE}/officeDocument"

CONTENT_TYPES_PART = "[Content_Types].xml"
PACKAGE_RELS_PART = "_rels/.rels"
DOCUMENT_PART = "word/document.xml"
STYLES_PART = "word/styles.xml"
SETTINGS_PART = "word/settings.xml"
FONT_TABLE_PART = "word/fontTable.xml"
FOOTNOTES_PART = "word/footnotes.xml"
DOCUMENT_RELS_PART = "word/_rels/document.xml.rels"

REQUIRED_PARTS = (
    CONTENT_TYPES_PART,
    PACKAGE_RELS_PART,
    DOCUMENT_PART,
    STYLES_PART,
    SETTINGS_PART,
    FONT_TABLE_PART,
    FOOTNOTES_PART,
    DOCUMENT_RELS_PART,
)

DEFAULT_CONTENT_TYPES = {
    "rels": "application/vnd.openxmlformats-package.relationships+xml",
    "xml": "application/xml",
}

_WORDML = "application/vnd.openxmlformats-officedocument.wordprocessingml"
PART_CONTENT_TYPES = {
    DOCUMENT_PART: f"{_WORDML}.document.main+xml",
    STYLES_PART: f"{_WORDML}.styles+xml",
    SETTINGS_PART: f"{_WORDML}.settings+xml",
    FONT_TABLE_PART: f"{_WORDML}.fontTable+xml",
    FOOTNOTES_PART: f"{_WORDML}.footnotes+xml",
}

# Fixed document relationships: (id, type, target relative to word/)
DOCUMENT_RELATIONSHIPS: List[Tuple[str, str, str]] = [
    ("rId1", f"{REL_TYPE_BASE}/styles", "styles.xml"),
    ("rId2", f"{REL_TYPE_BASE}/settings", "settings.xml"),
    ("rId3", f"{REL_TYPE_BASE}/fontTable", "fontTable.xml"),
    ("rId4", f"{REL_TYPE_BASE}/footnotes", "footnotes.xml"),
]


class PackageWriter:
    """
    Builds .docx packages from a DocxPackageModel.

    A writer keeps no state between packages.
    """

    def generate_parts(self, model: DocxPackageModel) -> Dict[str, bytes]:
        """Render every part of the package, keyed by part name."""
        xml_exporter = XMLExporter(model.default_font, model.default_font_size)
        fonts = model.resolved_fonts()

        parts = {
            CONTENT_TYPES_PART: self._generate_content_types_xml(),
            PACKAGE_RELS_PART: self._generate_relationships_xml(
                [("rId1", OFFICE_DOCUMENT_REL_TYPE, DOCUMENT_PART)]
            ),
            DOCUMENT_PART: xml_exporter.export_document_xml(
                model.paragraphs or [],
                model.page_size or LETTER,
                model.margins or Margins(),
            ),
            STYLES_PART: xml_exporter.export_styles_xml(model.styles or []),
            SETTINGS_PART: xml_exporter.export_settings_xml(),
            FONT_TABLE_PART: xml_exporter.export_font_table_xml(fonts),
            FOOTNOTES_PART: xml_exporter.export_footnotes_xml(model.footnotes or []),
            DOCUMENT_RELS_PART: self._generate_relationships_xml(DOCUMENT_RELATIONSHIPS),
        }
        return parts

    def generate(self, model: DocxPackageModel) -> bytes:
        """
        Build the package in memory.

        Raises:
            PackagingError: If a part cannot be rendered or archived
        """
        try:
            parts = self.generate_parts(model)
            buffer = io.BytesIO()
            with zipfile.ZipFile(buffer, 'w', zipfile.ZIP_DEFLATED) as zip_file:
                for part_name in REQUIRED_PARTS:
                    zip_file.writestr(part_name, parts[part_name])
        except PackagingError:
            raise
        except (ET.ParseError, zipfile.BadZipFile, ValueError, TypeError, KeyError) as e:
            raise PackagingError("Failed to build DOCX package", str(e)) from e

        data = buffer.getvalue()
        logger.debug(
            f"Generated DOCX package: {len(data)} bytes, {len(model.paragraphs)} paragraphs, "
            f"{len(model.footnotes)} footnotes"
        )
        return data

    def write(self, model: DocxPackageModel, output_path: Union[str, Path]) -> Path:
        """
        Build the package and write it to output_path atomically.

        The bytes go to a temporary file next to the destination, which then
        replaces it; a failed write leaves no partial file behind.

        Returns:
            The written path

        Raises:
            PackagingError: If building or writing fails
        """
        data = self.generate(model)
        return write_bytes_atomic(data, output_path)

    def _generate_content_types_xml(self) -> bytes:
        """Generate [Content_Types].xml."""
        # Default namespace, no prefix
        ET.register_namespace('', CONTENT_TYPES_NS)

        root = ET.Element(f'{{{CONTENT_TYPES_NS}}}Types')
        for extension, content_type in DEFAULT_CONTENT_TYPES.items():
            default_elem = ET.SubElement(root, f'{{{CONTENT_TYPES_NS}}}Default')
            default_elem.set('Extension', extension)
            default_elem.set('ContentType', content_type)

        for part_name, content_type in PART_CONTENT_TYPES.items():
            override_elem = ET.SubElement(root, f'{{{CONTENT_TYPES_NS}}}Override')
            override_elem.set('PartName', f'/{part_name}')
            override_elem.set('ContentType', content_type)

        return to_xml_bytes(root, indent=True)

    def _generate_relationships_xml(self, relationships: List[Tuple[str, str, str]]) -> bytes:
        """Generate a relationships part."""
        ET.register_namespace('', PKG_REL_NS)

        root = ET.Element(f'{{{PKG_REL_NS}}}Relationships')
        for rel_id, rel_type, target in relationships:
            rel_elem = ET.SubElement(root, f'{{{PKG_REL_NS}}}Relationship')
            rel_elem.set('Id', rel_id)
            rel_elem.set('Type', rel_type)
            rel_elem.set('Target', target)

        return to_xml_bytes(root, indent=True)


def write_bytes_atomic(data: bytes, output_path: Union[str, Path]) -> Path:
    """Write data to output_path through a temporary file and os.replace."""
    output_path = Path(output_path)
    tmp_name = None
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f'.{output_path.name}.', suffix='.tmp', dir=str(output_path.parent)
        )
        with os.fdopen(fd, 'wb') as tmp_file:
            tmp_file.write(data)
        os.replace(tmp_name, output_path)
        tmp_name = None
    except OSError as e:
        raise PackagingError(f"Failed to write DOCX file {output_path}", str(e)) from e
    finally:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)

    logger.info(f"Document exported to DOCX: {output_path}")
    return output_path
