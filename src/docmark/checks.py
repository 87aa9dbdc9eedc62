"""Lossiness checks for content about to pass through the codec.

The codec itself never complains; these checks are run explicitly (for
example before publishing) to tell an author which constructs will be
simplified.  Markdown is parsed with a full CommonMark parser (mistune v3
in AST mode) so constructs the line decoder does not know about are still
recognised.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import mistune

from docmark.encoder import is_hosted_image
from docmark.nodes import DocumentNode, NodeKind


@dataclass(frozen=True)
class Finding:
    kind: str
    message: str


class MarkdownChecker:
    """Report Markdown constructs the decoder will simplify or drop."""

    def __init__(self) -> None:
        self._md = mistune.create_markdown(
            renderer=None,  # AST mode
            plugins=["table", "strikethrough", "footnotes", "task_lists"],
        )

    # -- public API ---------------------------------------------------------

    def check(self, markdown: str) -> list[Finding]:
        if not isinstance(markdown, str) or not markdown.strip():
            return []
        tokens: list[dict[str, Any]] = self._md(markdown)  # type: ignore[assignment]
        findings: list[Finding] = []
        self._walk(tokens, findings, list_depth=0)
        return findings

    # -- token walk ---------------------------------------------------------

    def _walk(self, tokens: Any, out: list[Finding], *, list_depth: int) -> None:
        if not isinstance(tokens, list):
            return
        for tok in tokens:
            if not isinstance(tok, dict):
                continue
            ttype = tok.get("type", "")
            handler = getattr(self, f"_check_{ttype}", None)
            if handler is not None:
                handler(tok, out, list_depth)
            depth = list_depth + 1 if ttype == "list" else list_depth
            self._walk(tok.get("children"), out, list_depth=depth)

    def _check_list(self, tok: dict, out: list[Finding], depth: int) -> None:
        if depth > 0:
            out.append(Finding("nested_list", "Nested lists are flattened to separate lines."))
        items = tok.get("children") or []
        if len(items) > 1:
            out.append(Finding(
                "list_split",
                f"A list of {len(items)} items is stored as {len(items)} single-item lists.",
            ))

    def _check_task_list_item(self, tok: dict, out: list[Finding], _depth: int) -> None:
        out.append(Finding("task_list", "Task list checkboxes are kept as plain text."))

    def _check_table(self, _tok: dict, out: list[Finding], _depth: int) -> None:
        out.append(Finding("table", "Tables are not recognised and become paragraph text."))

    def _check_block_html(self, _tok: dict, out: list[Finding], _depth: int) -> None:
        out.append(Finding("html", "Raw HTML blocks are kept as paragraph text."))

    def _check_inline_html(self, _tok: dict, out: list[Finding], _depth: int) -> None:
        out.append(Finding("html", "Inline HTML is kept as literal text."))

    def _check_heading(self, tok: dict, out: list[Finding], _depth: int) -> None:
        if tok.get("style") == "setext":
            out.append(Finding("setext_heading", "Underlined headings are read as paragraphs."))

    def _check_block_code(self, tok: dict, out: list[Finding], _depth: int) -> None:
        if tok.get("style") == "indent":
            out.append(Finding("indented_code", "Indented code blocks are read as paragraphs."))

    def _check_paragraph(self, tok: dict, out: list[Finding], _depth: int) -> None:
        children = [
            child for child in tok.get("children") or []
            if not (child.get("type") == "text" and not str(child.get("raw", "")).strip())
        ]
        if len(children) > 1 and any(child.get("type") == "image" for child in children):
            out.append(Finding("inline_image", "Images are only recognised on a line of their own."))

    def _check_footnote_ref(self, _tok: dict, out: list[Finding], _depth: int) -> None:
        out.append(Finding("footnote", "Footnotes are kept as literal text."))


def check_markdown(markdown: str) -> list[Finding]:
    """Return findings for *markdown* about to be decoded."""
    return MarkdownChecker().check(markdown)


def check_document(node: DocumentNode) -> list[Finding]:
    """Return findings for a document about to be encoded."""
    findings: list[Finding] = []
    stack = [node]
    while stack:
        current = stack.pop()
        if current.kind == NodeKind.IMAGE and not is_hosted_image(current.attrs.get("src")):
            src = str(current.attrs.get("src") or "")
            shown = src[:40] + ("..." if len(src) > 40 else "")
            findings.append(Finding("dropped_image", f"Image {shown!r} is not hosted and will be dropped."))
        elif current.kind == NodeKind.TABLE:
            findings.append(Finding("table", "Tables are stored as their plain cell text."))
        stack.extend(reversed(current.children))
    return findings
