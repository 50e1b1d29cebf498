"""
Package validator for generated .docx files.

Re-opens a package and checks the wiring Word relies on: required parts,
well-formed XML, content type overrides, relationship targets, footnote
references and style references.
"""

from __future__ import annotations

import io
import logging
import posixpath
import zipfile
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from lxml import etree as lxml_etree

from .export.docx_exporter import (
    CONTENT_TYPES_PART,
    DOCUMENT_PART,
    DOCUMENT_RELS_PART,
    FOOTNOTES_PART,
    PACKAGE_RELS_PART,
    REQUIRED_PARTS,
    STYLES_PART,
)
from .utils.xml_utils import CONTENT_TYPES_NS, PKG_REL_NS, WORD_NS

logger = logging.getLogger(__name__)

_W = f"{{{WORD_NS}}}"
_NS = {"w": WORD_NS, "ct": CONTENT_TYPES_NS, "rel": PKG_REL_NS}


class ValidationLevel(Enum):
    """Validation levels."""
    ERROR = "error"
    WARNING = "warning"


class ValidationIssue:
    """Represents a validation issue."""

    def __init__(self, level: ValidationLevel, message: str, part: Optional[str] = None):
        self.level = level
        self.message = message
        self.part = part

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'level': self.level.value,
            'message': self.message,
            'part': self.part,
        }

    def __str__(self) -> str:
        location = f" ({self.part})" if self.part else ""
        return f"[{self.level.value.upper()}] {self.message}{location}"


class PackageValidator:
    """
    Validates a .docx package given as bytes or a file path.

    Call :meth:`validate`, then read :attr:`issues` or :attr:`is_valid`.
    """

    def __init__(self, source: Union[bytes, str, Path]):
        self.source = source
        self.issues: List[ValidationIssue] = []
        self._parts: Dict[str, bytes] = {}
        self._trees: Dict[str, Any] = {}

    @property
    def is_valid(self) -> bool:
        return not any(issue.level is ValidationLevel.ERROR for issue in self.issues)

    def _error(self, message: str, part: Optional[str] = None) -> None:
        self.issues.append(ValidationIssue(ValidationLevel.ERROR, message, part))

    def _warning(self, message: str, part: Optional[str] = None) -> None:
        self.issues.append(ValidationIssue(ValidationLevel.WARNING, message, part))

    def validate(self) -> List[ValidationIssue]:
        """
        Validate the package and return issues.

        Returns:
            List of validation issues (empty for a clean package)
        """
        self.issues = []
        self._parts = {}
        self._trees = {}

        if not self._read_package():
            return self.issues

        self._validate_required_parts()
        self._validate_well_formed()
        self._validate_content_types()
        self._validate_relationships()
        self._validate_footnote_references()
        self._validate_style_references()

        logger.info(f"Validation completed: {len(self.issues)} issues found")
        return self.issues

    def _read_package(self) -> bool:
        data = self.source
        try:
            if isinstance(data, (str, Path)):
                data = Path(data).read_bytes()
            with zipfile.ZipFile(io.BytesIO(data)) as zip_file:
                for name in zip_file.namelist():
                    self._parts[name] = zip_file.read(name)
        except (OSError, zipfile.BadZipFile) as e:
            self._error(f"Cannot open package: {e}")
            return False
        return True

    def _validate_required_parts(self) -> None:
        for part_name in REQUIRED_PARTS:
            if part_name not in self._parts:
                self._error("Required part is missing", part_name)
        for part_name in self._parts:
            if part_name not in REQUIRED_PARTS:
                self._warning("Unexpected part", part_name)

    def _validate_well_formed(self) -> None:
        parser = lxml_etree.XMLParser(resolve_entities=False, no_network=True)
        for part_name, content in self._parts.items():
            if not (part_name.endswith('.xml') or part_name.endswith('.rels')):
                continue
            try:
                self._trees[part_name] = lxml_etree.fromstring(content, parser)
            except lxml_etree.XMLSyntaxError as e:
                self._error(f"Malformed XML: {e}", part_name)

    def _validate_content_types(self) -> None:
        tree = self._trees.get(CONTENT_TYPES_PART)
        if tree is None:
            return
        for override in tree.findall('ct:Override', _NS):
            part_name = (override.get('PartName') or '').lstrip('/')
            if part_name not in self._parts:
                self._error(f"Content type override for missing part /{part_name}", CONTENT_TYPES_PART)
        declared = {override.get('PartName', '').lstrip('/') for override in tree.findall('ct:Override', _NS)}
        for part_name in (DOCUMENT_PART, STYLES_PART, FOOTNOTES_PART):
            if part_name in self._parts and part_name not in declared:
                self._error(f"No content type override for /{part_name}", CONTENT_TYPES_PART)

    def _validate_relationships(self) -> None:
        for rels_part, base_dir in ((PACKAGE_RELS_PART, ''), (DOCUMENT_RELS_PART, 'word')):
            tree = self._trees.get(rels_part)
            if tree is None:
                continue
            seen_ids = set()
            for rel in tree.findall('rel:Relationship', _NS):
                rel_id = rel.get('Id')
                if rel_id in seen_ids:
                    self._error(f"Duplicate relationship id {rel_id}", rels_part)
                seen_ids.add(rel_id)
                if rel.get('TargetMode') == 'External':
                    continue
                target = posixpath.normpath(posixpath.join(base_dir, rel.get('Target') or ''))
                if target not in self._parts:
                    self._error(f"Relationship {rel_id} targets missing part {target}", rels_part)

    def _validate_footnote_references(self) -> None:
        document = self._trees.get(DOCUMENT_PART)
        if document is None:
            return
        footnotes = self._trees.get(FOOTNOTES_PART)
        defined = set()
        if footnotes is not None:
            defined = {note.get(f'{_W}id') for note in footnotes.iter(f'{_W}footnote')}
        for reference in document.iter(f'{_W}footnoteReference'):
            footnote_id = reference.get(f'{_W}id')
            if footnote_id not in defined:
                self._error(f"Footnote reference {footnote_id} has no footnote", DOCUMENT_PART)

    def _validate_style_references(self) -> None:
        styles = self._trees.get(STYLES_PART)
        if styles is None:
            return
        defined = {style.get(f'{_W}styleId') for style in styles.iter(f'{_W}style')}
        for part_name in (DOCUMENT_PART, FOOTNOTES_PART):
            tree = self._trees.get(part_name)
            if tree is None:
                continue
            missing = set()
            for tag in ('pStyle', 'rStyle'):
                for element in tree.iter(f'{_W}{tag}'):
                    style_id = element.get(f'{_W}val')
                    if style_id not in defined:
                        missing.add(style_id)
            for style_id in sorted(missing, key=str):
                # Word falls back to the default style for unknown ids
                self._warning(f"Style '{style_id}' is referenced but not defined", part_name)


def validate_package(source: Union[bytes, str, Path]) -> List[ValidationIssue]:
    """Validate a package and return its issues."""
    return PackageValidator(source).validate()
