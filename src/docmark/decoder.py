"""Markdown decoder - rebuilds a document tree from stored Markdown.

The decoder is a line-oriented state machine.  Paragraph, quote and code
lines are buffered and flushed into block nodes when a line of a different
kind arrives; everything else maps one line to one block.  It only
understands the Markdown subset the encoder writes, and never raises.

Consecutive list lines are *not* merged: every ``- item`` / ``1. item`` line
becomes its own single-item list, which keeps the output stable for
content stored before list grouping existed.
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Optional

from docmark.inline import parse_inline
from docmark.nodes import DocumentNode, NodeKind

logger = logging.getLogger(__name__)

_FENCE = "```"
_RULES = frozenset({"---", "***"})
_HEADING_RE = re.compile(r"^(#{1,6})\s+(.+)$")
_BULLET_RE = re.compile(r"^[-*]\s+(.+)$")
_ORDERED_RE = re.compile(r"^\d+\.\s+(.+)$")
_IMAGE_RE = re.compile(r"^!\[([^\]]*)\]\(([^)]+)\)$")


class DecoderState(Enum):
    NORMAL = "normal"
    QUOTE = "quote"
    CODE_BLOCK = "code_block"


def empty_document() -> DocumentNode:
    """The minimal document an editor can place a cursor in."""
    return DocumentNode(
        kind=NodeKind.DOC,
        children=[DocumentNode(kind=NodeKind.PARAGRAPH)],
    )


class _BlockScanner:
    """Line state machine for one decode call; buffers are per instance."""

    def __init__(self) -> None:
        self.state = DecoderState.NORMAL
        self.blocks: list[DocumentNode] = []
        self.paragraph_lines: list[str] = []
        self.quote_lines: list[str] = []
        self.code_lines: list[str] = []
        self.code_language: Optional[str] = None

    def finish(self) -> list[DocumentNode]:
        """Flush open buffers (paragraph, code block, quote) and return the blocks."""
        self._flush_paragraph()
        if self.state is DecoderState.CODE_BLOCK:
            self._flush_code_block()
        self._flush_quote()
        return self.blocks

    def feed(self, line: str) -> None:
        stripped = line.strip()

        if self.state is DecoderState.CODE_BLOCK:
            if stripped.startswith(_FENCE):
                self._flush_code_block()
            else:
                self.code_lines.append(line)
            return

        if stripped.startswith(">"):
            self._flush_paragraph()
            self.quote_lines.append(stripped[1:].strip())
            self.state = DecoderState.QUOTE
            return

        if self.state is DecoderState.QUOTE:
            self._flush_quote()

        if stripped.startswith(_FENCE):
            self._flush_paragraph()
            self.code_language = stripped[len(_FENCE):].strip() or None
            self.state = DecoderState.CODE_BLOCK
            return

        if stripped in _RULES:
            self._emit(DocumentNode(kind=NodeKind.HORIZONTAL_RULE))
            return

        match = _HEADING_RE.match(stripped)
        if match:
            self._emit(DocumentNode(
                kind=NodeKind.HEADING,
                attrs={"level": len(match.group(1))},
                children=parse_inline(match.group(2)),
            ))
            return

        bullet = _BULLET_RE.match(stripped)
        ordered = None if bullet else _ORDERED_RE.match(stripped)
        if bullet or ordered:
            kind = NodeKind.BULLET_LIST if bullet else NodeKind.ORDERED_LIST
            self._emit(_single_item_list(kind, (bullet or ordered).group(1)))
            return

        match = _IMAGE_RE.match(stripped)
        if match:
            self._emit(DocumentNode(
                kind=NodeKind.IMAGE,
                attrs={"src": match.group(2), "alt": match.group(1)},
            ))
            return

        if not stripped:
            self._flush_paragraph()
            return

        self.paragraph_lines.append(stripped)

    # -- buffers ------------------------------------------------------------

    def _emit(self, node: DocumentNode) -> None:
        self._flush_paragraph()
        self.blocks.append(node)

    def _flush_paragraph(self) -> None:
        if self.paragraph_lines:
            self.blocks.append(DocumentNode(
                kind=NodeKind.PARAGRAPH,
                children=parse_inline(" ".join(self.paragraph_lines)),
            ))
            self.paragraph_lines = []

    def _flush_quote(self) -> None:
        if self.quote_lines:
            inner = DocumentNode(
                kind=NodeKind.PARAGRAPH,
                children=parse_inline("\n".join(self.quote_lines)),
            )
            self.blocks.append(DocumentNode(kind=NodeKind.BLOCKQUOTE, children=[inner]))
            self.quote_lines = []
        if self.state is DecoderState.QUOTE:
            self.state = DecoderState.NORMAL

    def _flush_code_block(self) -> None:
        code = "\n".join(self.code_lines)
        self.blocks.append(DocumentNode(
            kind=NodeKind.CODE_BLOCK,
            attrs={"language": self.code_language} if self.code_language else {},
            children=[DocumentNode(kind=NodeKind.TEXT, text=code)] if code else [],
        ))
        self.code_lines = []
        self.code_language = None
        self.state = DecoderState.NORMAL


def _single_item_list(kind: NodeKind, item_text: str) -> DocumentNode:
    item = DocumentNode(
        kind=NodeKind.LIST_ITEM,
        children=[DocumentNode(kind=NodeKind.PARAGRAPH, children=parse_inline(item_text))],
    )
    return DocumentNode(kind=kind, children=[item])


class MarkdownDecoder:
    """Parse Markdown text into a ``doc`` :class:`~docmark.nodes.DocumentNode`."""

    def decode(self, markdown: str) -> DocumentNode:
        """Return a ``doc`` node for *markdown*.

        Empty, whitespace-only or non-string input yields a document with a
        single empty paragraph.
        """
        if not isinstance(markdown, str) or not markdown.strip():
            return empty_document()

        scanner = _BlockScanner()
        for line in markdown.replace("\r\n", "\n").split("\n"):
            scanner.feed(line)
        blocks = scanner.finish()

        logger.debug("Decoded %d block(s)", len(blocks))
        if not blocks:
            return empty_document()
        return DocumentNode(kind=NodeKind.DOC, children=blocks)
