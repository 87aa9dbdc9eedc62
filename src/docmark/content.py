"""Plain-text helpers over document trees: excerpts, counts, reading time."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, replace
from typing import Optional, Union

from docmark.nodes import LEAF_BLOCK_KINDS, DocumentNode, NodeKind

DEFAULT_EXCERPT_LENGTH = 160
WORDS_PER_MINUTE = 200

_WS_RE = re.compile(r"\s+")


@dataclass
class ContentStats:
    word_count: int
    character_count: int
    reading_time: int
    paragraph_count: int
    heading_count: int


def _node_text(node: DocumentNode) -> str:
    if node.text:
        return node.text
    return " ".join(_node_text(child) for child in node.children)


def extract_text(node: DocumentNode) -> str:
    """Return all leaf text of *node*, joined by spaces."""
    return _node_text(node).strip()


def generate_excerpt(node: DocumentNode, max_length: int = DEFAULT_EXCERPT_LENGTH) -> str:
    """Text of *node* cut to *max_length* characters, with ``...`` when cut."""
    value = extract_text(node)
    if len(value) <= max_length:
        return value
    return value[:max_length].strip() + "..."


def count_words(node: DocumentNode) -> int:
    return len([word for word in _WS_RE.split(extract_text(node)) if word])


def count_characters(node: DocumentNode) -> int:
    return len(extract_text(node))


def reading_time(node: DocumentNode, words_per_minute: int = WORDS_PER_MINUTE) -> int:
    """Estimated reading time in whole minutes, never less than one."""
    return max(1, math.ceil(count_words(node) / words_per_minute))


def content_stats(node: DocumentNode) -> ContentStats:
    paragraphs = headings = 0
    stack = list(node.children)
    while stack:
        current = stack.pop()
        if current.kind == NodeKind.PARAGRAPH:
            paragraphs += 1
        elif current.kind == NodeKind.HEADING:
            headings += 1
        stack.extend(current.children)
    return ContentStats(
        word_count=count_words(node),
        character_count=count_characters(node),
        reading_time=reading_time(node),
        paragraph_count=paragraphs,
        heading_count=headings,
    )


def is_content_empty(content: Union[DocumentNode, str, None]) -> bool:
    """True when *content* has no visible text."""
    if isinstance(content, str):
        return not content.strip()
    if not isinstance(content, DocumentNode) or not content.children:
        return True
    return not extract_text(content)


def clean_content(node: DocumentNode) -> DocumentNode:
    """Copy of *node* without blank text leaves and containers left empty.

    Rules, images and hard breaks are kept even though they have no children.
    """
    children: list[DocumentNode] = []
    for child in node.children:
        cleaned = _clean_node(child)
        if cleaned is not None:
            children.append(cleaned)
    return replace(node, children=children)


def _clean_node(node: DocumentNode) -> Optional[DocumentNode]:
    if node.kind == NodeKind.TEXT:
        return node if node.text.strip() else None
    if node.kind in LEAF_BLOCK_KINDS:
        return node
    cleaned = clean_content(node)
    if not cleaned.children:
        return None
    return cleaned
