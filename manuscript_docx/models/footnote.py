"""
Footnote store.

Read-only lookup from the application's internal footnote ids to their
content. Content is either plain text or a nested document tree.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, Mapping, Optional, Union

from .document import DocumentTree, parse_document

logger = logging.getLogger(__name__)

FootnoteContent = Union[str, DocumentTree]


def _parse_content(value: Any) -> Optional[FootnoteContent]:
    if value is None:
        return None
    if isinstance(value, (str, DocumentTree)):
        return value
    if isinstance(value, Mapping):
        if "type" in value or "content" in value:
            return parse_document(value)
        logger.debug(f"Footnote content mapping without a tree shape: {sorted(value)}")
        return None
    if isinstance(value, list):
        return parse_document(value)
    return str(value)


class FootnoteStore:
    """Lookup of footnote content by internal id."""

    def __init__(self, entries: Optional[Mapping[str, Any]] = None):
        self._entries: Dict[str, Optional[FootnoteContent]] = {}
        for footnote_id, content in (entries or {}).items():
            self._entries[str(footnote_id)] = _parse_content(content)

    @classmethod
    def from_data(cls, data: Any) -> "FootnoteStore":
        """
        Build a store from loose data.

        Accepts a mapping of id -> content, or a list of ``{"id", "content"}``
        entries. Entries without an id are skipped.
        """
        if data is None:
            return cls()
        if isinstance(data, FootnoteStore):
            return data
        if isinstance(data, Mapping):
            return cls(data)
        if isinstance(data, list):
            entries = {}
            for entry in data:
                if not isinstance(entry, Mapping) or entry.get("id") in (None, ""):
                    logger.debug(f"Skipping footnote entry without id: {entry!r}")
                    continue
                entries[str(entry["id"])] = entry.get("content")
            return cls(entries)
        logger.debug(f"Unsupported footnote store data: {type(data).__name__}, using an empty store")
        return cls()

    def get(self, footnote_id: Optional[str]) -> Optional[FootnoteContent]:
        if footnote_id is None:
            return None
        return self._entries.get(str(footnote_id))

    def __contains__(self, footnote_id: object) -> bool:
        return str(footnote_id) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)
