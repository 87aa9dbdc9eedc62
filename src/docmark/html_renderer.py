"""HTML renderer - converts a document tree to themed HTML for blog pages.

Text and attribute values are escaped with mistune's helpers; links using
a harmful protocol (``javascript:`` and friends) are neutralised the same
way mistune's own HTML renderer does it.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from mistune import HTMLRenderer
from mistune.util import escape, escape_url

from docmark.encoder import heading_level
from docmark.inline import sort_marks
from docmark.nodes import DocumentNode, Mark, MarkKind, NodeKind
from docmark.themes import ElementStyle, ThemeManager

HARMFUL_LINK = "#harmful-link"

# Only used for its URL policy; never renders anything.
_url_policy = HTMLRenderer(escape=True)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def safe_url(url: str) -> str:
    """Escape *url* for an attribute; URLs mistune deems harmful become ``#harmful-link``."""
    url = url.strip()
    if _url_policy.safe_url(url) == HARMFUL_LINK:
        return HARMFUL_LINK
    return escape(escape_url(url))


def _attrs(style: Optional[ElementStyle], extra: Optional[dict[str, str]] = None) -> str:
    """Build an escaped attribute string, class first."""
    pairs: list[tuple[str, str]] = []
    if style is not None:
        if style.css_class:
            pairs.append(("class", style.css_class))
        pairs.extend(style.attrs.items())
    if extra:
        pairs.extend(extra.items())
    return "".join(f' {name}="{escape(value)}"' for name, value in pairs)


# ---------------------------------------------------------------------------
# HtmlRenderer
# ---------------------------------------------------------------------------

class HtmlRenderer:
    """Render a :class:`~docmark.nodes.DocumentNode` tree to HTML."""

    def __init__(self, theme: Optional[ThemeManager] = None) -> None:
        self.theme: ThemeManager = theme or ThemeManager()
        self._renderers: dict[str, Callable[[DocumentNode], str]] = {
            NodeKind.DOC: self._render_children,
            NodeKind.TEXT: self._render_text,
            NodeKind.PARAGRAPH: self._render_paragraph,
            NodeKind.HEADING: self._render_heading,
            NodeKind.BULLET_LIST: self._wrapper("ul", "bullet_list"),
            NodeKind.ORDERED_LIST: self._wrapper("ol", "ordered_list"),
            NodeKind.LIST_ITEM: self._wrapper("li", "list_item"),
            NodeKind.BLOCKQUOTE: self._wrapper("blockquote", "blockquote"),
            NodeKind.CODE_BLOCK: self._render_code_block,
            NodeKind.HORIZONTAL_RULE: self._render_horizontal_rule,
            NodeKind.IMAGE: self._render_image,
            NodeKind.HARD_BREAK: self._render_hard_break,
            NodeKind.TABLE: self._render_table,
            NodeKind.TABLE_ROW: self._wrapper("tr", "table_row"),
            NodeKind.TABLE_HEADER: self._wrapper("th", "table_header"),
            NodeKind.TABLE_CELL: self._wrapper("td", "table_cell"),
        }

    # ======================================================================
    # Public API
    # ======================================================================

    def render(self, content: Any) -> str:
        """Return HTML for *content*.

        Strings are assumed to be HTML already and returned unchanged; a
        document without children renders to ``""``.
        """
        if isinstance(content, str):
            return content
        if isinstance(content, dict):
            content = DocumentNode.from_dict(content)
        if not isinstance(content, DocumentNode):
            return ""
        if content.kind == NodeKind.DOC and not content.children:
            return ""
        return self.render_node(content)

    def render_node(self, node: DocumentNode) -> str:
        handler = self._renderers.get(node.kind)
        if handler is None:
            return self._render_children(node)
        return handler(node)

    # ======================================================================
    # Per-kind renderers
    # ======================================================================

    def _render_children(self, node: DocumentNode) -> str:
        return "".join(self.render_node(child) for child in node.children)

    def _wrapper(self, tag: str, style_name: str) -> Callable[[DocumentNode], str]:
        def render(node: DocumentNode) -> str:
            style = self.theme.get_style(style_name)
            return f"<{tag}{_attrs(style)}>{self._render_children(node)}</{tag}>"
        return render

    def _render_paragraph(self, node: DocumentNode) -> str:
        style = self.theme.get_style("paragraph")
        return f"<p{_attrs(style)}>{self._render_children(node) or '<br>'}</p>"

    def _render_heading(self, node: DocumentNode) -> str:
        level = heading_level(node)
        style = self.theme.get_heading_style(level)
        return f"<h{level}{_attrs(style)}>{self._render_children(node)}</h{level}>"

    def _render_code_block(self, node: DocumentNode) -> str:
        style = self.theme.get_style("code_block")
        language = node.attrs.get("language") or "plaintext"
        code = escape("".join(child.text for child in node.children))
        code_attrs = _attrs(None, {"class": f"language-{language}"})
        return f"<pre{_attrs(style)}><code{code_attrs}>{code}</code></pre>"

    def _render_horizontal_rule(self, _node: DocumentNode) -> str:
        return f"<hr{_attrs(self.theme.get_style('horizontal_rule'))} />"

    def _render_image(self, node: DocumentNode) -> str:
        src = node.attrs.get("src") or ""
        extra = {"alt": str(node.attrs.get("alt") or "")}
        if node.attrs.get("title"):
            extra["title"] = str(node.attrs["title"])
        style = self.theme.get_style("image")
        return f'<img src="{safe_url(str(src))}"{_attrs(style, extra)} />'

    def _render_hard_break(self, _node: DocumentNode) -> str:
        return "<br />"

    def _render_table(self, node: DocumentNode) -> str:
        style = self.theme.get_style("table")
        return f"<table{_attrs(style)}>{self._render_children(node)}</table>"

    # -- inline -------------------------------------------------------------

    def _render_text(self, node: DocumentNode) -> str:
        output = escape(node.text)
        if not output:
            return ""
        for mark in sort_marks(node.marks):
            output = self._wrap(mark, output)
        return output

    def _wrap(self, mark: Mark, inner: str) -> str:
        if mark.kind == MarkKind.CODE:
            return f"<code{_attrs(self.theme.get_style('inline_code'))}>{inner}</code>"
        if mark.kind == MarkKind.BOLD:
            return f"<strong>{inner}</strong>"
        if mark.kind == MarkKind.ITALIC:
            return f"<em>{inner}</em>"
        if mark.kind == MarkKind.STRIKE:
            return f"<s>{inner}</s>"
        href = mark.href or "#"
        extra: dict[str, str] = {}
        if self.theme.external_links and href.startswith(("http://", "https://")):
            extra = {"target": "_blank", "rel": "noopener noreferrer"}
        return f'<a href="{safe_url(href)}"{_attrs(self.theme.get_style("link"), extra)}>{inner}</a>'
