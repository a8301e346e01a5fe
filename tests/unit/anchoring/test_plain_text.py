"""Tests for block spacing and plain-text projection."""

from __future__ import annotations

import pytest

from highlightanchor.anchoring.plain_text import (
    BLOCK_TAGS,
    add_spaces_between_blocks,
    strip_html_with_spaces,
    strip_tags,
)


class TestAddSpacesBetweenBlocks:
    """Tests for add_spaces_between_blocks()."""

    def test_heading_then_paragraph(self) -> None:
        html = "<h3>Title</h3><p>Body</p>"
        assert add_spaces_between_blocks(html) == "<h3>Title</h3> <p>Body</p>"

    def test_list_items(self) -> None:
        html = "<ul><li>One</li><li>Two</li></ul>"
        assert add_spaces_between_blocks(html) == "<ul><li>One</li> <li>Two</li></ul>"

    def test_existing_whitespace_left_alone(self) -> None:
        html = "<p>a</p>\n  <p>b</p>"
        assert add_spaces_between_blocks(html) == html

    def test_inline_to_inline_untouched(self) -> None:
        html = "<p><em>a</em><strong>b</strong></p>"
        assert add_spaces_between_blocks(html) == html

    @pytest.mark.parametrize(
        ("html", "expected"),
        [
            ("<span>a</span><div>b</div>", "<span>a</span> <div>b</div>"),
            ("<td>a</td><span>b</span>", "<td>a</td> <span>b</span>"),
        ],
    )
    def test_one_block_side_is_enough(self, html: str, expected: str) -> None:
        assert add_spaces_between_blocks(html) == expected

    def test_tag_names_case_insensitive(self) -> None:
        html = "<P>a</P><P>b</P>"
        assert add_spaces_between_blocks(html) == "<P>a</P> <P>b</P>"

    def test_opening_tag_attributes_preserved(self) -> None:
        html = '<p>a</p><p class="x">b</p>'
        assert add_spaces_between_blocks(html) == '<p>a</p> <p class="x">b</p>'

    def test_nested_closing_tags_not_spaced(self) -> None:
        """Only close-then-open pairs get a space, not close-then-close."""
        html = "<ul><li>a</li></ul>"
        assert add_spaces_between_blocks(html) == html

    def test_idempotent(self) -> None:
        once = add_spaces_between_blocks("<p>a</p><p>b</p><p>c</p>")
        assert once == "<p>a</p> <p>b</p> <p>c</p>"
        assert add_spaces_between_blocks(once) == once

    def test_block_tags_cover_common_structure(self) -> None:
        assert {"p", "li", "h1", "blockquote", "table", "br", "hr"} <= BLOCK_TAGS
        assert "span" not in BLOCK_TAGS
        assert "strong" not in BLOCK_TAGS


class TestStripTags:
    """Tests for strip_tags() and strip_html_with_spaces()."""

    def test_strips_nested_tags(self) -> None:
        assert strip_tags("<p>Hello <b>world</b></p>") == "Hello world"

    def test_entities_stay_opaque(self) -> None:
        assert strip_tags("<p>a &amp; b &lt; c</p>") == "a &amp; b &lt; c"

    def test_comments_removed(self) -> None:
        assert strip_tags("<p>Before <!-- note --> After</p>") == "Before  After"

    def test_gt_inside_attribute_ends_tag_early(self) -> None:
        """Tag scanning stops at the first '>', even inside an attribute."""
        assert strip_tags('<p title="a>b">text</p>') == 'b">text'

    def test_projection_adds_block_spaces(self) -> None:
        assert strip_html_with_spaces("<h3>Title</h3><p>Body</p>") == "Title Body"

    def test_projection_of_list(self) -> None:
        html = "<ul><li>One</li><li>Two</li></ul>"
        assert strip_html_with_spaces(html) == "One Two"

    def test_projection_keeps_inline_adjacency(self) -> None:
        assert strip_html_with_spaces("<p><b>bold</b><i>italic</i></p>") == "bolditalic"

    def test_empty(self) -> None:
        assert strip_html_with_spaces("") == ""
