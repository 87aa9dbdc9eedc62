"""Document tree shared by the Markdown encoder, decoder and HTML renderer.

A :class:`DocumentNode` is one structural element of the rich-editor content
model.  The same tree shape is exchanged with the editor as plain JSON
(``{"type", "content", "text", "marks", "attrs"}``), see
:meth:`DocumentNode.to_dict` and :meth:`DocumentNode.from_dict`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


# ---------------------------------------------------------------------------
# Node and mark kinds
# ---------------------------------------------------------------------------

class NodeKind(str, Enum):
    DOC = "doc"
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    BULLET_LIST = "bulletList"
    ORDERED_LIST = "orderedList"
    LIST_ITEM = "listItem"
    BLOCKQUOTE = "blockquote"
    CODE_BLOCK = "codeBlock"
    HORIZONTAL_RULE = "horizontalRule"
    IMAGE = "image"
    HARD_BREAK = "hardBreak"
    TEXT = "text"
    TABLE = "table"
    TABLE_ROW = "tableRow"
    TABLE_HEADER = "tableHeader"
    TABLE_CELL = "tableCell"


class MarkKind(str, Enum):
    BOLD = "bold"
    ITALIC = "italic"
    CODE = "code"
    STRIKE = "strike"
    LINK = "link"


# Block kinds that never carry children.
LEAF_BLOCK_KINDS = frozenset({
    NodeKind.HORIZONTAL_RULE,
    NodeKind.IMAGE,
    NodeKind.HARD_BREAK,
})


@dataclass
class Mark:
    kind: str
    href: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": _kind_value(self.kind)}
        if self.href is not None:
            data["attrs"] = {"href": self.href}
        return data

    @classmethod
    def from_dict(cls, data: Any) -> Optional[Mark]:
        if not isinstance(data, dict) or not isinstance(data.get("type"), str):
            return None
        attrs = data.get("attrs")
        href = attrs.get("href") if isinstance(attrs, dict) else None
        return cls(kind=_coerce_kind(data["type"], MarkKind), href=href if isinstance(href, str) else None)


@dataclass
class DocumentNode:
    kind: str
    children: list[DocumentNode] = field(default_factory=list)
    # Text leaves only
    text: str = ""
    marks: list[Mark] = field(default_factory=list)
    # heading: level / codeBlock: language / image: src, alt
    attrs: dict[str, Any] = field(default_factory=dict)

    @property
    def is_text(self) -> bool:
        return self.kind == NodeKind.TEXT

    def has_mark(self, kind: str) -> bool:
        return any(mark.kind == kind for mark in self.marks)

    # -- editor JSON --------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Return the editor JSON form of this subtree."""
        data: dict[str, Any] = {"type": _kind_value(self.kind)}
        if self.attrs:
            data["attrs"] = dict(self.attrs)
        if self.is_text:
            data["text"] = self.text
            if self.marks:
                data["marks"] = [mark.to_dict() for mark in self.marks]
        elif self.children:
            data["content"] = [child.to_dict() for child in self.children]
        return data

    @classmethod
    def from_dict(cls, data: Any) -> Optional[DocumentNode]:
        """Build a tree from editor JSON.

        Anything that is not a dict yields ``None``; malformed children and
        marks are skipped.  Unknown ``type`` strings are kept as-is.
        """
        if not isinstance(data, dict):
            return None
        kind = data.get("type")
        kind = _coerce_kind(kind, NodeKind) if isinstance(kind, str) else ""

        children: list[DocumentNode] = []
        content = data.get("content")
        if isinstance(content, list):
            for item in content:
                child = cls.from_dict(item)
                if child is not None:
                    children.append(child)

        marks: list[Mark] = []
        raw_marks = data.get("marks")
        if isinstance(raw_marks, list):
            for raw in raw_marks:
                mark = Mark.from_dict(raw)
                if mark is not None:
                    marks.append(mark)

        attrs = data.get("attrs")
        text = data.get("text")
        return cls(
            kind=kind,
            children=children,
            text=text if isinstance(text, str) else "",
            marks=marks,
            attrs={k: v for k, v in attrs.items() if v is not None} if isinstance(attrs, dict) else {},
        )


def _coerce_kind(value: str, enum_cls: type[Enum]) -> str:
    try:
        return enum_cls(value)
    except ValueError:
        return value


def _kind_value(kind: str) -> str:
    return kind.value if isinstance(kind, Enum) else str(kind)


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------

def doc(*children: DocumentNode) -> DocumentNode:
    return DocumentNode(kind=NodeKind.DOC, children=list(children))


def text(value: str, *marks: Mark) -> DocumentNode:
    return DocumentNode(kind=NodeKind.TEXT, text=value, marks=list(marks))


def paragraph(*children: DocumentNode) -> DocumentNode:
    return DocumentNode(kind=NodeKind.PARAGRAPH, children=list(children))


def heading(level: int, *children: DocumentNode) -> DocumentNode:
    return DocumentNode(kind=NodeKind.HEADING, children=list(children), attrs={"level": level})


def list_item(*children: DocumentNode) -> DocumentNode:
    return DocumentNode(kind=NodeKind.LIST_ITEM, children=list(children))


def bullet_list(*items: DocumentNode) -> DocumentNode:
    return DocumentNode(kind=NodeKind.BULLET_LIST, children=list(items))


def ordered_list(*items: DocumentNode) -> DocumentNode:
    return DocumentNode(kind=NodeKind.ORDERED_LIST, children=list(items))


def blockquote(*children: DocumentNode) -> DocumentNode:
    return DocumentNode(kind=NodeKind.BLOCKQUOTE, children=list(children))


def code_block(code: str, language: Optional[str] = None) -> DocumentNode:
    attrs = {"language": language} if language else {}
    children = [text(code)] if code else []
    return DocumentNode(kind=NodeKind.CODE_BLOCK, children=children, attrs=attrs)


def horizontal_rule() -> DocumentNode:
    return DocumentNode(kind=NodeKind.HORIZONTAL_RULE)


def image(src: str, alt: str = "") -> DocumentNode:
    return DocumentNode(kind=NodeKind.IMAGE, attrs={"src": src, "alt": alt})


def hard_break() -> DocumentNode:
    return DocumentNode(kind=NodeKind.HARD_BREAK)


def table(*rows: DocumentNode) -> DocumentNode:
    return DocumentNode(kind=NodeKind.TABLE, children=list(rows))
