"""
Document serializer.

Walks a document tree and emits the flat paragraph/run records the package
writer renders, together with the footnote table. Footnotes are numbered
1, 2, 3... in order of first reference; a footnote referenced twice keeps
its first number and is materialized once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .models.document import (
    DocumentTree,
    FootnoteNode,
    HardBreakNode,
    HeadingNode,
    ParagraphNode,
    TextNode,
    parse_document,
)
from .models.footnote import FootnoteStore
from .models.records import (
    BreakRun,
    FootnoteMarkerRun,
    FootnoteRecord,
    FootnoteReferenceRun,
    ParagraphRecord,
    RunRecord,
    TextRun,
)
from .models.style import FOOTNOTE_TEXT_STYLE_ID
from .utils.xml_utils import clean_text

logger = logging.getLogger(__name__)

BODY_STYLE_KEY = "body"
FOOTNOTE_STYLE_KEY = "footnote"
HEADING_CLASS_PREFIX = "heading-"


@dataclass
class SerializationResult:
    """Output of one serialization pass."""

    paragraphs: List[ParagraphRecord] = field(default_factory=list)
    footnotes: List[FootnoteRecord] = field(default_factory=list)
    footnote_ids: Dict[str, int] = field(default_factory=dict)


class _SerializationPass:
    """State of a single ``serialize`` call: footnote numbering and bodies."""

    def __init__(self, style_id_map: Mapping[str, str], footnote_store: FootnoteStore):
        self.style_id_map = style_id_map
        self.footnote_store = footnote_store
        self.footnote_style_id = style_id_map.get(FOOTNOTE_STYLE_KEY, FOOTNOTE_TEXT_STYLE_ID)
        self.footnote_ids: Dict[str, int] = {}
        self.footnotes: List[FootnoteRecord] = []

    def style_id(self, key: str) -> str:
        return self.style_id_map.get(key, key)

    def serialize_blocks(self, blocks: Sequence[Any], in_footnote: bool = False) -> List[ParagraphRecord]:
        paragraphs = []
        for block in blocks:
            if isinstance(block, ParagraphNode):
                key = block.style_class or BODY_STYLE_KEY
                paragraphs.append(ParagraphRecord(
                    style_id=self.style_id(key),
                    runs=self.serialize_inline(block.content, in_footnote),
                ))
            elif isinstance(block, HeadingNode):
                key = block.style_class or f"{HEADING_CLASS_PREFIX}{block.level}"
                heading_level = None
                if not block.style_class or block.style_class.startswith(HEADING_CLASS_PREFIX):
                    heading_level = block.level
                paragraphs.append(ParagraphRecord(
                    style_id=self.style_id(key),
                    runs=self.serialize_inline(block.content, in_footnote),
                    heading_level=heading_level,
                ))
            else:
                logger.debug(f"Skipping unsupported block node: {getattr(block, 'node_type', block)!r}")
        return paragraphs

    def serialize_inline(self, nodes: Sequence[Any], in_footnote: bool) -> List[RunRecord]:
        runs: List[RunRecord] = []
        for node in nodes:
            if isinstance(node, TextNode):
                text = clean_text(node.text)
                # Empty runs carry nothing Word renders
                if text:
                    runs.append(TextRun(text=text, marks=node.marks))
            elif isinstance(node, FootnoteNode):
                if in_footnote:
                    # Word does not allow footnote references inside footnotes
                    logger.warning(f"Dropping footnote reference '{node.footnote_id}' inside a footnote")
                    continue
                reference = self.footnote_reference(node.footnote_id)
                if reference is not None:
                    runs.append(reference)
            elif isinstance(node, HardBreakNode):
                runs.append(BreakRun())
            else:
                logger.debug(f"Skipping unsupported inline node: {getattr(node, 'node_type', node)!r}")
        return runs

    def footnote_reference(self, internal_id: Optional[str]) -> Optional[FootnoteReferenceRun]:
        if internal_id is None:
            logger.warning("Footnote reference without an id, skipping")
            return None

        if internal_id in self.footnote_ids:
            return FootnoteReferenceRun(self.footnote_ids[internal_id])

        footnote_id = len(self.footnote_ids) + 1
        self.footnote_ids[internal_id] = footnote_id
        self.footnotes.append(FootnoteRecord(
            footnote_id=footnote_id,
            paragraphs=self.footnote_body(internal_id),
        ))
        return FootnoteReferenceRun(footnote_id)

    def _empty_body(self) -> List[ParagraphRecord]:
        return [ParagraphRecord(style_id=self.footnote_style_id,
                                runs=[FootnoteMarkerRun(), TextRun(text=" ")])]

    def footnote_body(self, internal_id: str) -> List[ParagraphRecord]:
        content = self.footnote_store.get(internal_id)

        if content is None or content == "":
            logger.warning(f"Footnote '{internal_id}' has no content, exporting an empty note")
            return self._empty_body()

        if isinstance(content, str):
            body = self._empty_body()
            body[0].runs.append(TextRun(text=clean_text(content)))
            return body

        paragraphs = self.serialize_blocks(content.content, in_footnote=True)
        if not paragraphs:
            logger.warning(f"Footnote '{internal_id}' has an empty body, exporting an empty note")
            return self._empty_body()

        for paragraph in paragraphs:
            paragraph.style_id = self.footnote_style_id
            paragraph.heading_level = None
        paragraphs[0].runs[:0] = [FootnoteMarkerRun(), TextRun(text=" ")]
        return paragraphs


class DocumentSerializer:
    """
    Serializes a document tree into paragraph and footnote records.

    Only paragraphs and headings are exported; other block types are
    skipped. Every call numbers its footnotes from 1.
    """

    def serialize(self, document: Any, style_id_map: Optional[Mapping[str, str]] = None,
                  footnote_store: Any = None) -> SerializationResult:
        """
        Serialize a document.

        Args:
            document: DocumentTree or its JSON form
            style_id_map: Semantic style key -> Word style id
            footnote_store: FootnoteStore, or data accepted by FootnoteStore.from_data

        Returns:
            SerializationResult
        """
        tree: DocumentTree = parse_document(document)
        state = _SerializationPass(style_id_map or {}, FootnoteStore.from_data(footnote_store))

        paragraphs = state.serialize_blocks(tree.content)

        logger.debug(f"Serialized {len(paragraphs)} paragraphs and {len(state.footnotes)} footnotes")
        return SerializationResult(
            paragraphs=paragraphs,
            footnotes=state.footnotes,
            footnote_ids=dict(state.footnote_ids),
        )
