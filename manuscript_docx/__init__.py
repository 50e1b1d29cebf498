"""
manuscript_docx - export structured manuscripts to Word (.docx).

Three stages turn a semantic style sheet and an editor document tree into a
minimal, valid WordprocessingML package:

- StyleConverter: style sheet -> Word paragraph styles (half-points, twips)
- DocumentSerializer: document tree -> paragraph and footnote records
- PackageWriter: records + styles + page setup -> .docx bytes

Quick start::

    from manuscript_docx import export_to_file

    export_to_file(document_json, "chapter.docx", style_config=styles)
"""

from .version import __version__, __version_info__

from .exceptions import ManuscriptDocxError, PackagingError, ConfigurationError

from .api import build_package_model, export_manuscript, export_to_file
from .config import ExportSettings, load_json, load_style_config
from .export import PackageWriter, XMLExporter
from .models import DocumentTree, DocxPackageModel, FootnoteStore, parse_document
from .serializer import DocumentSerializer, SerializationResult
from .styles import (
    DEFAULT_STYLES,
    ConversionResult,
    StyleConverter,
    VariableContext,
    convert_styles,
    parse_scale_percent,
)
from .validator import PackageValidator, ValidationIssue, ValidationLevel, validate_package

__all__ = [
    "__version__",
    "__version_info__",
    "ManuscriptDocxError",
    "PackagingError",
    "ConfigurationError",
    "build_package_model",
    "export_manuscript",
    "export_to_file",
    "ExportSettings",
    "load_json",
    "load_style_config",
    "PackageWriter",
    "XMLExporter",
    "DocumentTree",
    "DocxPackageModel",
    "FootnoteStore",
    "parse_document",
    "DocumentSerializer",
    "SerializationResult",
    "DEFAULT_STYLES",
    "ConversionResult",
    "StyleConverter",
    "VariableContext",
    "convert_styles",
    "parse_scale_percent",
    "PackageValidator",
    "ValidationIssue",
    "ValidationLevel",
    "validate_package",
]
