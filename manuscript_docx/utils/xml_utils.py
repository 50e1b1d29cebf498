"""
XML helpers for WordprocessingML parts.

Namespace constants, qualified-name helpers and serialization used by the
exporters. Parts are built with ``xml.etree.ElementTree``.
"""

import re
import xml.etree.ElementTree as ET
from typing import Any, Optional

WORD_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
REL_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
PKG_REL_NS = "http://schemas.openxmlformats.org/package/2006/relationships"
CONTENT_TYPES_NS = "http://schemas.openxmlformats.org/package/2006/content-types"
XML_NS = "http://www.w3.org/XML/1998/namespace"

NAMESPACES = {
    'w': WORD_NS,
    'r': REL_NS,
}

# Characters outside the XML 1.0 Char production
_ILLEGAL_XML_CHARS = re.compile('[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]')


def clean_text(text: Any) -> str:
    """Drop characters XML 1.0 cannot carry; markup escaping is left to ElementTree."""
    if text is None:
        return ''
    return _ILLEGAL_XML_CHARS.sub('', str(text))


def register_namespaces() -> None:
    """Register the w/r prefixes so ET.tostring does not emit ns0:."""
    for prefix, uri in NAMESPACES.items():
        ET.register_namespace(prefix, uri)


def w(tag: str) -> str:
    """Qualified WordprocessingML tag or attribute name."""
    return f"{{{WORD_NS}}}{tag}"


def r(tag: str) -> str:
    """Qualified officeDocument relationships name."""
    return f"{{{REL_NS}}}{tag}"


def sub_element(parent: ET.Element, tag: str, val: Optional[Any] = None, **attrs: Any) -> ET.Element:
    """
    Append a ``w:`` element, optionally with ``w:val`` and other ``w:`` attributes.

    Attributes whose value is None are skipped.
    """
    element = ET.SubElement(parent, w(tag))
    if val is not None:
        element.set(w('val'), _attr(val))
    for key, value in attrs.items():
        if value is not None:
            element.set(w(key), _attr(value))
    return element


def _attr(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def to_xml_bytes(root: ET.Element, indent: bool = False) -> bytes:
    """Serialize an element tree with an XML declaration."""
    if indent:
        ET.indent(root, space='  ')
    return ET.tostring(root, encoding='UTF-8', xml_declaration=True)
