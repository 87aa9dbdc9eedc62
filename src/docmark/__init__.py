"""docmark - lossless-enough conversion between rich editor documents and Markdown."""

from __future__ import annotations

__version__ = "1.0.0"

from docmark.codec import DocumentCodec, decode, encode
from docmark.nodes import DocumentNode, Mark, MarkKind, NodeKind

__all__ = [
    "DocumentCodec",
    "DocumentNode",
    "Mark",
    "MarkKind",
    "NodeKind",
    "decode",
    "encode",
    "__version__",
]
