"""Document <-> Markdown codec.

Ties the encoder and decoder together behind two entry points.  The editor
keeps a structured document in memory; on save it is compressed to Markdown
with :func:`encode`, and on load :func:`decode` rebuilds an equivalent tree.
"""

from __future__ import annotations

import logging
from typing import Any, Union

from docmark.decoder import MarkdownDecoder
from docmark.encoder import MarkdownEncoder
from docmark.nodes import DocumentNode, NodeKind

logger = logging.getLogger(__name__)

Encodable = Union[DocumentNode, dict, str, None]


class DocumentCodec:
    """Convert between document trees and Markdown text.

    Usage::

        codec = DocumentCodec()
        markdown = codec.encode(editor_json)
        tree = codec.decode(markdown)
    """

    def __init__(self) -> None:
        self.encoder = MarkdownEncoder()
        self.decoder = MarkdownDecoder()

    def encode(self, node: Any) -> str:
        """Render *node* to Markdown.

        Args:
            node: A :class:`DocumentNode`, its editor JSON dict, or a string
                that is already Markdown (returned unchanged).

        Returns:
            Markdown text, or ``""`` for anything that is not a document.
        """
        if isinstance(node, str):
            return node
        if isinstance(node, dict):
            if "type" not in node and isinstance(node.get("content"), list):
                # Editors hand over the root content without its type.
                node = {**node, "type": NodeKind.DOC.value}
            node = DocumentNode.from_dict(node)
        if not isinstance(node, DocumentNode):
            logger.debug("Nothing to encode for %s input", type(node).__name__)
            return ""
        return self.encoder.render(node)

    def decode(self, markdown: Any) -> DocumentNode:
        """Parse *markdown* into a ``doc`` node (never empty)."""
        return self.decoder.decode(markdown)


_default_codec = DocumentCodec()


def encode(node: Encodable) -> str:
    """Module-level shortcut for :meth:`DocumentCodec.encode`."""
    return _default_codec.encode(node)


def decode(markdown: str) -> DocumentNode:
    """Module-level shortcut for :meth:`DocumentCodec.decode`."""
    return _default_codec.decode(markdown)
