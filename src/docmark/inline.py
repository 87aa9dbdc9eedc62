"""Inline mark scanning and rendering.

:func:`parse_inline` turns the flat text of one block into ``text`` leaves
carrying marks; :func:`render_leaf` does the reverse for a single leaf.
Both sides share :data:`MARK_RENDER_ORDER`.  Delimiters do not nest: the
interior of a matched span is one literal leaf, except that ``***x***``
carries both bold and italic.
"""

from __future__ import annotations

from typing import Callable, Optional

from docmark.nodes import DocumentNode, Mark, MarkKind, NodeKind

# Innermost wrapper first: `code` -> **bold** -> *italic* -> ~~strike~~ -> [link](href)
MARK_RENDER_ORDER: tuple[MarkKind, ...] = (
    MarkKind.CODE,
    MarkKind.BOLD,
    MarkKind.ITALIC,
    MarkKind.STRIKE,
    MarkKind.LINK,
)

# Order in which the scanner tries delimiters at each cursor position.
DELIMITER_ORDER: tuple[MarkKind, ...] = (
    MarkKind.CODE,
    MarkKind.LINK,
    MarkKind.BOLD,
    MarkKind.ITALIC,
    MarkKind.STRIKE,
)

_MARK_RANK = {kind: rank for rank, kind in enumerate(MARK_RENDER_ORDER)}


def sort_marks(marks: list[Mark]) -> list[Mark]:
    """Return known marks in render order, one per kind; unknown kinds dropped."""
    by_kind: dict[MarkKind, Mark] = {}
    for mark in marks:
        if mark.kind in _MARK_RANK and mark.kind not in by_kind:
            by_kind[MarkKind(mark.kind)] = mark
    return sorted(by_kind.values(), key=lambda m: _MARK_RANK[m.kind])


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def _wrap(mark: Mark, value: str) -> str:
    if mark.kind == MarkKind.CODE:
        return f"`{value}`"
    if mark.kind == MarkKind.BOLD:
        return f"**{value}**"
    if mark.kind == MarkKind.ITALIC:
        return f"*{value}*"
    if mark.kind == MarkKind.STRIKE:
        return f"~~{value}~~"
    return f"[{value}]({mark.href or ''})"


def render_leaf(node: DocumentNode) -> str:
    """Render a ``text`` leaf with its marks applied in render order."""
    output = node.text
    if not output:
        return ""
    for mark in sort_marks(node.marks):
        output = _wrap(mark, output)
    return output


# ---------------------------------------------------------------------------
# Scanning
# ---------------------------------------------------------------------------

class _Scanner:
    """Single left-to-right pass over one run of inline text."""

    def __init__(self, source: str) -> None:
        self.src = source
        self.pos = 0
        self.leaves: list[DocumentNode] = []
        self._plain: list[str] = []
        self._matchers: dict[MarkKind, Callable[[], bool]] = {
            MarkKind.CODE: self._match_code,
            MarkKind.LINK: self._match_link,
            MarkKind.BOLD: self._match_bold,
            MarkKind.ITALIC: self._match_italic,
            MarkKind.STRIKE: self._match_strike,
        }

    def run(self) -> list[DocumentNode]:
        while self.pos < len(self.src):
            if not any(self._matchers[kind]() for kind in DELIMITER_ORDER):
                self._plain.append(self.src[self.pos])
                self.pos += 1
        self._flush_plain()
        return self.leaves

    # -- output -------------------------------------------------------------

    def _flush_plain(self) -> None:
        if self._plain:
            self.leaves.append(DocumentNode(kind=NodeKind.TEXT, text="".join(self._plain)))
            self._plain = []

    def _emit_literal(self, value: str, *marks: Mark) -> None:
        """Emit *value* as one leaf; delimiters inside it are not re-scanned."""
        self._flush_plain()
        self.leaves.append(DocumentNode(kind=NodeKind.TEXT, text=value, marks=sort_marks(list(marks))))

    def _closing(self, delimiter: str, start: int) -> Optional[int]:
        end = self.src.find(delimiter, start)
        if end == -1 or end == start:
            return None
        return end

    # -- delimiters ---------------------------------------------------------

    def _match_code(self) -> bool:
        src, i = self.src, self.pos
        if src[i] != "`" or i + 1 >= len(src) or src[i + 1] == "`":
            return False
        end = self._closing("`", i + 1)
        if end is None:
            return False
        self._emit_literal(src[i + 1:end], Mark(kind=MarkKind.CODE))
        self.pos = end + 1
        return True

    def _match_link(self) -> bool:
        src, i = self.src, self.pos
        if src[i] != "[":
            return False
        label_end = self._closing("]", i + 1)
        if label_end is None or not src.startswith("(", label_end + 1):
            return False
        url_end = src.find(")", label_end + 2)
        if url_end == -1:
            return False
        self._emit_literal(src[i + 1:label_end], Mark(kind=MarkKind.LINK, href=src[label_end + 2:url_end]))
        self.pos = url_end + 1
        return True

    def _match_bold(self) -> bool:
        src, i = self.src, self.pos
        if not src.startswith("**", i):
            return False
        if src.startswith("***", i):
            end = self._closing("***", i + 3)
            if end is not None:
                self._emit_literal(src[i + 3:end], Mark(kind=MarkKind.BOLD), Mark(kind=MarkKind.ITALIC))
                self.pos = end + 3
                return True
        end = self._closing("**", i + 2)
        if end is None:
            return False
        self._emit_literal(src[i + 2:end], Mark(kind=MarkKind.BOLD))
        self.pos = end + 2
        return True

    def _match_italic(self) -> bool:
        src, i = self.src, self.pos
        if src[i] != "*" or src.startswith("**", i):
            return False
        end = src.find("*", i + 1)
        # A closing star that opens a bold run is not ours.
        if end == -1 or src.startswith("**", end):
            return False
        self._emit_literal(src[i + 1:end], Mark(kind=MarkKind.ITALIC))
        self.pos = end + 1
        return True

    def _match_strike(self) -> bool:
        src, i = self.src, self.pos
        if not src.startswith("~~", i):
            return False
        end = self._closing("~~", i + 2)
        if end is None:
            return False
        self._emit_literal(src[i + 2:end], Mark(kind=MarkKind.STRIKE))
        self.pos = end + 2
        return True


def parse_inline(source: str) -> list[DocumentNode]:
    """Split *source* into ``text`` leaves with bold/italic/code/strike/link marks.

    Unmatched delimiters stay literal, and the interior of a matched span
    is never scanned again.
    Never raises.
    """
    if not source:
        return []
    return _Scanner(source).run()
