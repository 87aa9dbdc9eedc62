"""Markdown encoder - renders a document tree to Markdown text.

Each node kind has one ``_render_*`` method returning a string fragment;
containers render their children recursively.  The encoder never raises:
missing attributes fall back to defaults and unknown kinds render only
their children.
"""

from __future__ import annotations

import logging
from typing import Callable

from docmark.inline import render_leaf
from docmark.nodes import DocumentNode, NodeKind

logger = logging.getLogger(__name__)

BLOCK_SEPARATOR = "\n\n"
HORIZONTAL_RULE = "---"
CODE_FENCE = "```"
BULLET_MARKER = "- "
DATA_URI_PREFIX = "data:"


def is_hosted_image(src: object) -> bool:
    """True if *src* is an absolute http(s) URL that may be stored as text."""
    return (
        isinstance(src, str)
        and bool(src)
        and not src.startswith(DATA_URI_PREFIX)
        and src.startswith("http")
    )


def heading_level(node: DocumentNode) -> int:
    """Heading level from ``attrs``, defaulting to 1 and clamped to 1..6."""
    try:
        level = int(node.attrs.get("level") or 1)
    except (TypeError, ValueError):
        level = 1
    return max(1, min(6, level))


def _prefix_lines(content: str, first: str, rest: str) -> str:
    lines = content.split("\n")
    return "\n".join(
        (first if idx == 0 else rest) + line for idx, line in enumerate(lines)
    )


class MarkdownEncoder:
    """Render a :class:`~docmark.nodes.DocumentNode` tree to Markdown."""

    def __init__(self) -> None:
        self._renderers: dict[str, Callable[[DocumentNode], str]] = {
            NodeKind.DOC: self._render_doc,
            NodeKind.TEXT: render_leaf,
            NodeKind.PARAGRAPH: self._render_inline_children,
            NodeKind.HEADING: self._render_heading,
            NodeKind.BULLET_LIST: self._render_bullet_list,
            NodeKind.ORDERED_LIST: self._render_ordered_list,
            NodeKind.LIST_ITEM: self._render_list_item,
            NodeKind.BLOCKQUOTE: self._render_blockquote,
            NodeKind.CODE_BLOCK: self._render_code_block,
            NodeKind.HORIZONTAL_RULE: self._render_horizontal_rule,
            NodeKind.IMAGE: self._render_image,
            NodeKind.HARD_BREAK: self._render_hard_break,
            NodeKind.TABLE: self._render_inline_children,
        }

    # ======================================================================
    # Public API
    # ======================================================================

    def render(self, node: DocumentNode) -> str:
        """Return the Markdown fragment for *node* and its subtree."""
        handler = self._renderers.get(node.kind)
        if handler is None:
            logger.debug("Unknown node kind %r rendered as its children", node.kind)
            return self._render_inline_children(node)
        return handler(node)

    # ======================================================================
    # Containers
    # ======================================================================

    def _render_doc(self, node: DocumentNode) -> str:
        blocks = (self.render(child) for child in node.children)
        return BLOCK_SEPARATOR.join(block for block in blocks if block)

    def _render_inline_children(self, node: DocumentNode) -> str:
        return "".join(self.render(child) for child in node.children)

    def _render_heading(self, node: DocumentNode) -> str:
        return f"{'#' * heading_level(node)} {self._render_inline_children(node)}"

    def _render_blockquote(self, node: DocumentNode) -> str:
        inner = "\n".join(self.render(child) for child in node.children)
        return _prefix_lines(inner, "> ", "> ")

    # -- lists --------------------------------------------------------------

    def _render_list_item(self, node: DocumentNode) -> str:
        return "\n".join(self.render(child) for child in node.children)

    def _render_list(self, node: DocumentNode, ordered: bool) -> str:
        rendered: list[str] = []
        for position, item in enumerate(node.children, start=1):
            if item.kind != NodeKind.LIST_ITEM:
                rendered.append(self.render(item))
                continue
            marker = f"{position}. " if ordered else BULLET_MARKER
            rendered.append(
                _prefix_lines(self._render_list_item(item), marker, " " * len(marker))
            )
        return "\n".join(rendered)

    def _render_bullet_list(self, node: DocumentNode) -> str:
        return self._render_list(node, ordered=False)

    def _render_ordered_list(self, node: DocumentNode) -> str:
        return self._render_list(node, ordered=True)

    # ======================================================================
    # Leaf blocks
    # ======================================================================

    def _render_code_block(self, node: DocumentNode) -> str:
        language = node.attrs.get("language") or ""
        code = "".join(child.text for child in node.children)
        return f"{CODE_FENCE}{language}\n{code}\n{CODE_FENCE}"

    def _render_horizontal_rule(self, _node: DocumentNode) -> str:
        return HORIZONTAL_RULE

    def _render_image(self, node: DocumentNode) -> str:
        src = node.attrs.get("src")
        if not is_hosted_image(src):
            # Embedded or relative images have to be uploaded before saving.
            logger.debug("Dropping image without a hosted URL: %.40r", src)
            return ""
        alt = node.attrs.get("alt") or ""
        return f"![{alt}]({src})"

    def _render_hard_break(self, _node: DocumentNode) -> str:
        return "\n"
