"""Tests for plain-text helpers."""

from __future__ import annotations

from docmark.content import (
    ContentStats,
    clean_content,
    content_stats,
    count_characters,
    count_words,
    extract_text,
    generate_excerpt,
    is_content_empty,
    reading_time,
)
from docmark.nodes import (
    DocumentNode,
    Mark,
    MarkKind,
    bullet_list,
    doc,
    heading,
    horizontal_rule,
    image,
    list_item,
    paragraph,
    text,
)


def article(words: int) -> DocumentNode:
    return doc(paragraph(text(" ".join(["word"] * words))))


class TestText:
    def test_extract_text_joins_leaves(self) -> None:
        node = doc(heading(1, text("Title")), paragraph(text("Hello "), text("world", Mark(MarkKind.BOLD))))
        assert extract_text(node) == "Title Hello  world"

    def test_counts(self) -> None:
        node = doc(heading(1, text("Title")), paragraph(text("two words")))
        assert count_words(node) == 3
        assert count_characters(node) == len("Title two words")

    def test_empty_document(self) -> None:
        assert extract_text(doc()) == ""
        assert count_words(doc()) == 0


class TestExcerpt:
    def test_short_text_unchanged(self) -> None:
        assert generate_excerpt(doc(paragraph(text("short")))) == "short"

    def test_long_text_cut(self) -> None:
        node = doc(paragraph(text("a" * 10 + " " + "b" * 10)))
        assert generate_excerpt(node, max_length=11) == "a" * 10 + "..."

    def test_exact_length_not_cut(self) -> None:
        assert generate_excerpt(doc(paragraph(text("abc"))), max_length=3) == "abc"


class TestReadingTime:
    def test_minimum_one_minute(self) -> None:
        assert reading_time(doc()) == 1

    def test_rounds_up(self) -> None:
        assert reading_time(article(200)) == 1
        assert reading_time(article(201)) == 2

    def test_custom_speed(self) -> None:
        assert reading_time(article(300), words_per_minute=100) == 3

    def test_stats(self) -> None:
        node = doc(
            heading(1, text("Title")),
            paragraph(text("one two")),
            bullet_list(list_item(paragraph(text("three")))),
        )
        assert content_stats(node) == ContentStats(
            word_count=4,
            character_count=len("Title one two three"),
            reading_time=1,
            paragraph_count=2,
            heading_count=1,
        )


class TestEmptiness:
    def test_strings(self) -> None:
        assert is_content_empty("  \n")
        assert not is_content_empty("# hi")

    def test_documents(self) -> None:
        assert is_content_empty(None)
        assert is_content_empty(doc())
        assert is_content_empty(doc(paragraph()))
        assert is_content_empty(doc(paragraph(text("   "))))
        assert not is_content_empty(doc(paragraph(text("x"))))


class TestClean:
    def test_removes_blank_leaves_and_empty_containers(self) -> None:
        node = doc(
            paragraph(),
            paragraph(text("  ")),
            bullet_list(list_item(paragraph())),
            paragraph(text("keep")),
        )
        assert clean_content(node) == doc(paragraph(text("keep")))

    def test_keeps_leaf_blocks(self) -> None:
        node = doc(horizontal_rule(), image("https://a.b/c.png"))
        assert clean_content(node) == node

    def test_original_untouched(self) -> None:
        node = doc(paragraph(), paragraph(text("x")))
        clean_content(node)
        assert len(node.children) == 2
