"""
Export module for manuscript packages.

XMLExporter renders the WordprocessingML parts; PackageWriter wires them
into a .docx archive.
"""

from .xml_exporter import XMLExporter
from .docx_exporter import PackageWriter, REQUIRED_PARTS, write_bytes_atomic

__all__ = [
    "XMLExporter",
    "PackageWriter",
    "REQUIRED_PARTS",
    "write_bytes_atomic",
]
