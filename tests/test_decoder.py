"""Tests for the line-oriented Markdown decoder."""

from __future__ import annotations

from pathlib import Path

import pytest

from docmark.decoder import MarkdownDecoder
from docmark.nodes import DocumentNode, MarkKind, NodeKind

FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def find_nodes(root: DocumentNode, kind: str) -> list[DocumentNode]:
    """Recursively collect all nodes of *kind* under *root*."""
    found: list[DocumentNode] = []
    if root.kind == kind:
        found.append(root)
    for child in root.children:
        found.extend(find_nodes(child, kind))
    return found


def collect_text(node: DocumentNode) -> str:
    return node.text + "".join(collect_text(child) for child in node.children)


def kinds(root: DocumentNode) -> list[str]:
    return [child.kind for child in root.children]


@pytest.fixture
def decoder() -> MarkdownDecoder:
    return MarkdownDecoder()


# ---------------------------------------------------------------------------
# Empty input
# ---------------------------------------------------------------------------

class TestEmptyInput:
    @pytest.mark.parametrize("source", ["", "   ", "\n\n", " \t\n "])
    def test_minimal_document(self, decoder: MarkdownDecoder, source: str) -> None:
        result = decoder.decode(source)
        assert result.kind == NodeKind.DOC
        assert kinds(result) == [NodeKind.PARAGRAPH]
        assert result.children[0].children == []

    def test_non_string(self, decoder: MarkdownDecoder) -> None:
        assert kinds(decoder.decode(None)) == [NodeKind.PARAGRAPH]  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Headings and paragraphs
# ---------------------------------------------------------------------------

class TestHeadings:
    @pytest.mark.parametrize("level", [1, 2, 3, 4, 5, 6])
    def test_heading_levels(self, decoder: MarkdownDecoder, level: int) -> None:
        result = decoder.decode(f"{'#' * level} Heading {level}")
        heading = result.children[0]
        assert heading.kind == NodeKind.HEADING
        assert heading.attrs == {"level": level}
        assert collect_text(heading) == f"Heading {level}"

    def test_seven_hashes_is_paragraph(self, decoder: MarkdownDecoder) -> None:
        assert kinds(decoder.decode("####### deep")) == [NodeKind.PARAGRAPH]

    def test_hash_without_space_is_paragraph(self, decoder: MarkdownDecoder) -> None:
        assert kinds(decoder.decode("#hashtag")) == [NodeKind.PARAGRAPH]

    def test_heading_inline_marks(self, decoder: MarkdownDecoder) -> None:
        heading = decoder.decode("## **Bold** heading").children[0]
        assert heading.children[0].has_mark(MarkKind.BOLD)


class TestParagraphs:
    def test_lines_joined_with_space(self, decoder: MarkdownDecoder) -> None:
        result = decoder.decode("first line\nsecond line")
        assert kinds(result) == [NodeKind.PARAGRAPH]
        assert collect_text(result) == "first line second line"

    def test_blank_line_separates(self, decoder: MarkdownDecoder) -> None:
        result = decoder.decode("one\n\ntwo\n   \nthree")
        assert kinds(result) == [NodeKind.PARAGRAPH] * 3

    def test_crlf_line_endings(self, decoder: MarkdownDecoder) -> None:
        assert kinds(decoder.decode("a\r\n\r\nb")) == [NodeKind.PARAGRAPH] * 2

    def test_block_line_flushes_paragraph(self, decoder: MarkdownDecoder) -> None:
        result = decoder.decode("text\n# Title\nmore")
        assert kinds(result) == [NodeKind.PARAGRAPH, NodeKind.HEADING, NodeKind.PARAGRAPH]


# ---------------------------------------------------------------------------
# Rules, lists, images
# ---------------------------------------------------------------------------

class TestRules:
    @pytest.mark.parametrize("line", ["---", "***", "  ---  "])
    def test_horizontal_rule(self, decoder: MarkdownDecoder, line: str) -> None:
        assert kinds(decoder.decode(line)) == [NodeKind.HORIZONTAL_RULE]

    def test_rule_after_paragraph(self, decoder: MarkdownDecoder) -> None:
        assert kinds(decoder.decode("text\n---")) == [NodeKind.PARAGRAPH, NodeKind.HORIZONTAL_RULE]


class TestLists:
    def test_consecutive_bullets_are_not_merged(self, decoder: MarkdownDecoder) -> None:
        result = decoder.decode("- a\n- b")
        assert kinds(result) == [NodeKind.BULLET_LIST, NodeKind.BULLET_LIST]
        for lst, expected in zip(result.children, ["a", "b"]):
            assert len(lst.children) == 1
            item = lst.children[0]
            assert item.kind == NodeKind.LIST_ITEM
            assert item.children[0].kind == NodeKind.PARAGRAPH
            assert collect_text(item) == expected

    def test_asterisk_bullet(self, decoder: MarkdownDecoder) -> None:
        assert kinds(decoder.decode("* item")) == [NodeKind.BULLET_LIST]

    def test_ordered_items(self, decoder: MarkdownDecoder) -> None:
        result = decoder.decode("1. first\n2. second\n10. tenth")
        assert kinds(result) == [NodeKind.ORDERED_LIST] * 3
        assert collect_text(result.children[2]) == "tenth"

    def test_item_inline_marks(self, decoder: MarkdownDecoder) -> None:
        result = decoder.decode("- use `make`")
        code = [leaf for leaf in find_nodes(result, NodeKind.TEXT) if leaf.has_mark(MarkKind.CODE)]
        assert [leaf.text for leaf in code] == ["make"]


class TestImages:
    def test_image_line(self, decoder: MarkdownDecoder) -> None:
        node = decoder.decode("![Alt text](https://cdn.example.com/a.png)").children[0]
        assert node.kind == NodeKind.IMAGE
        assert node.attrs == {"src": "https://cdn.example.com/a.png", "alt": "Alt text"}

    def test_empty_alt(self, decoder: MarkdownDecoder) -> None:
        node = decoder.decode("![](https://x.io/a.png)").children[0]
        assert node.attrs["alt"] == ""

    def test_image_inside_text_is_paragraph(self, decoder: MarkdownDecoder) -> None:
        assert kinds(decoder.decode("see ![a](https://x.io/a.png)")) == [NodeKind.PARAGRAPH]


# ---------------------------------------------------------------------------
# Buffered blocks
# ---------------------------------------------------------------------------

class TestBlockquotes:
    def test_lines_accumulate(self, decoder: MarkdownDecoder) -> None:
        result = decoder.decode("> one\n> two")
        assert kinds(result) == [NodeKind.BLOCKQUOTE]
        inner = result.children[0].children[0]
        assert inner.kind == NodeKind.PARAGRAPH
        assert collect_text(inner) == "one\ntwo"

    def test_non_quote_line_ends_quote(self, decoder: MarkdownDecoder) -> None:
        result = decoder.decode("> quoted\nafter")
        assert kinds(result) == [NodeKind.BLOCKQUOTE, NodeKind.PARAGRAPH]

    def test_quote_flushes_paragraph(self, decoder: MarkdownDecoder) -> None:
        result = decoder.decode("before\n> quoted")
        assert kinds(result) == [NodeKind.PARAGRAPH, NodeKind.BLOCKQUOTE]

    def test_blank_line_separates_quotes(self, decoder: MarkdownDecoder) -> None:
        assert kinds(decoder.decode("> a\n\n> b")) == [NodeKind.BLOCKQUOTE] * 2

    def test_quote_before_list(self, decoder: MarkdownDecoder) -> None:
        result = decoder.decode("> q\n- item")
        assert kinds(result) == [NodeKind.BLOCKQUOTE, NodeKind.BULLET_LIST]


class TestCodeBlocks:
    def test_content_is_literal(self, decoder: MarkdownDecoder) -> None:
        block = decoder.decode("```\n**not bold**\n```").children[0]
        assert block.kind == NodeKind.CODE_BLOCK
        assert len(block.children) == 1
        assert block.children[0].text == "**not bold**"
        assert block.children[0].marks == []

    def test_language_tag(self, decoder: MarkdownDecoder) -> None:
        block = decoder.decode("```python\nprint(1)\n```").children[0]
        assert block.attrs == {"language": "python"}

    def test_no_language(self, decoder: MarkdownDecoder) -> None:
        assert decoder.decode("```\nx\n```").children[0].attrs == {}

    def test_blank_lines_and_indentation_kept(self, decoder: MarkdownDecoder) -> None:
        block = decoder.decode("```\ndef f():\n\n    return 1\n```").children[0]
        assert block.children[0].text == "def f():\n\n    return 1"

    def test_markdown_syntax_inside_fence(self, decoder: MarkdownDecoder) -> None:
        result = decoder.decode("```\n# not a heading\n- not a list\n> not a quote\n```")
        assert kinds(result) == [NodeKind.CODE_BLOCK]

    def test_empty_code_block(self, decoder: MarkdownDecoder) -> None:
        block = decoder.decode("```\n```").children[0]
        assert block.kind == NodeKind.CODE_BLOCK
        assert block.children == []

    def test_unterminated_fence_flushed(self, decoder: MarkdownDecoder) -> None:
        block = decoder.decode("```js\nlet x = 1;").children[0]
        assert block.kind == NodeKind.CODE_BLOCK
        assert block.attrs == {"language": "js"}
        assert block.children[0].text == "let x = 1;"

    def test_fence_flushes_paragraph_and_quote(self, decoder: MarkdownDecoder) -> None:
        result = decoder.decode("para\n```\ncode\n```\n> q\n```\nmore\n```")
        assert kinds(result) == [
            NodeKind.PARAGRAPH,
            NodeKind.CODE_BLOCK,
            NodeKind.BLOCKQUOTE,
            NodeKind.CODE_BLOCK,
        ]


# ---------------------------------------------------------------------------
# Fixture
# ---------------------------------------------------------------------------

class TestSampleFixture:
    def test_sample_structure(self, decoder: MarkdownDecoder) -> None:
        source = (FIXTURES_DIR / "sample.md").read_text(encoding="utf-8")
        result = decoder.decode(source)
        assert kinds(result) == [
            NodeKind.HEADING,
            NodeKind.PARAGRAPH,
            NodeKind.HEADING,
            NodeKind.BULLET_LIST,
            NodeKind.BULLET_LIST,
            NodeKind.ORDERED_LIST,
            NodeKind.ORDERED_LIST,
            NodeKind.BLOCKQUOTE,
            NodeKind.CODE_BLOCK,
            NodeKind.IMAGE,
            NodeKind.HORIZONTAL_RULE,
            NodeKind.PARAGRAPH,
        ]
        links = [leaf for leaf in find_nodes(result, NodeKind.TEXT) if leaf.has_mark(MarkKind.LINK)]
        assert links[0].marks[0].href == "https://example.com/docs"
