"""
High-level export API.

Runs the three stages (style conversion, document serialization, package
writing) for one manuscript::

    from manuscript_docx import export_manuscript

    data = export_manuscript(document_json, style_sheet, footnotes)

Every call builds a fresh converter, serializer and writer.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from .config import ExportSettings
from .export.docx_exporter import PackageWriter, write_bytes_atomic
from .models.package import DocxPackageModel
from .serializer import DocumentSerializer
from .styles.converter import DEFAULT_GLOBAL_FONT, ConversionResult, StyleConverter
from .styles.defaults import get_default_styles

logger = logging.getLogger(__name__)


def _settings(settings: Union[ExportSettings, Mapping[str, Any], None]) -> ExportSettings:
    if isinstance(settings, ExportSettings):
        return settings
    return ExportSettings.from_dict(settings)


def build_package_model(document: Any, style_config: Optional[Mapping[str, Any]] = None,
                        footnote_store: Any = None,
                        settings: Union[ExportSettings, Mapping[str, Any], None] = None,
                        global_font: str = DEFAULT_GLOBAL_FONT,
                        context: Any = None) -> DocxPackageModel:
    """
    Run style conversion and serialization, returning the package model.

    Args:
        document: DocumentTree or its JSON form
        style_config: Style sheet; the built-in sheet when None
        footnote_store: FootnoteStore or data accepted by FootnoteStore.from_data
        settings: ExportSettings or a mapping for ExportSettings.from_dict
        global_font: Font used when a style names none
        context: Object with ``get_variable(name)`` and ``base_font_size``
    """
    export_settings = _settings(settings)
    if style_config is None:
        logger.debug("No style sheet given, using the built-in styles")
        style_config = get_default_styles()

    converter = StyleConverter(global_font=global_font, context=context)
    conversion: ConversionResult = converter.convert_styles(style_config, export_settings.scale)

    serialization = DocumentSerializer().serialize(document, conversion.style_id_map, footnote_store)

    return DocxPackageModel(
        paragraphs=serialization.paragraphs,
        styles=conversion.styles,
        footnotes=serialization.footnotes,
        fonts=conversion.fonts,
        page_size=export_settings.page_geometry,
        margins=export_settings.margin_twips,
        default_font=conversion.document_defaults.font,
        default_font_size=conversion.document_defaults.size,
    )


def export_manuscript(document: Any, style_config: Optional[Mapping[str, Any]] = None,
                      footnote_store: Any = None,
                      settings: Union[ExportSettings, Mapping[str, Any], None] = None,
                      global_font: str = DEFAULT_GLOBAL_FONT,
                      context: Any = None) -> bytes:
    """
    Export a manuscript to .docx bytes.

    Raises:
        PackagingError: If the archive cannot be built
    """
    model = build_package_model(document, style_config, footnote_store, settings, global_font, context)
    data = PackageWriter().generate(model)
    logger.info(f"Exported manuscript: {len(model.paragraphs)} paragraphs, {len(model.footnotes)} footnotes")
    return data


def export_to_file(document: Any, output_path: Union[str, Path],
                   style_config: Optional[Mapping[str, Any]] = None,
                   footnote_store: Any = None,
                   settings: Union[ExportSettings, Mapping[str, Any], None] = None,
                   global_font: str = DEFAULT_GLOBAL_FONT,
                   context: Any = None) -> Path:
    """
    Export a manuscript and write it atomically to output_path.

    Returns:
        The written path

    Raises:
        PackagingError: If building or writing fails; no partial file is left
    """
    data = export_manuscript(document, style_config, footnote_store, settings, global_font, context)
    return write_bytes_atomic(data, output_path)
