"""Plain-text projection of HTML markup.

Offsets stored with a highlight are counted in the *plain-text* coordinate
space: block-spaced markup with every tag removed.  Markup is scanned as
text (``<`` up to the next ``>``); no DOM is built, so untouched markup
round-trips byte for byte.
"""

# Pattern: Functional Core (pure functions, no I/O)

from __future__ import annotations

import re

# Block-level elements.  A browser selection that crosses one of these
# boundaries contains a space even when the markup has none.
BLOCK_TAGS: frozenset[str] = frozenset(
    (
        "p",
        "div",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "ul",
        "ol",
        "li",
        "blockquote",
        "pre",
        "hr",
        "br",
        "table",
        "tr",
        "td",
        "th",
        "thead",
        "tbody",
        "tfoot",
        "article",
        "section",
        "header",
        "footer",
        "nav",
        "aside",
        "figure",
        "figcaption",
        "main",
        "address",
        "dd",
        "dl",
        "dt",
    )
)

# </close>(ws)<open
_ADJACENT_TAGS = re.compile(r"</(\w+)>(\s*)<(\w+)")

# Non-greedy tag: "<" through the next ">"; a ">" inside an attribute value
# ends the tag early.
TAG_PATTERN = re.compile(r"<[^>]*>")


def add_spaces_between_blocks(html: str) -> str:
    """Insert one space between a closing and an opening tag when either is a block.

    ``</h3><p>`` becomes ``</h3> <p>``.  Existing whitespace is left alone, and
    inline-to-inline boundaries such as ``</em><strong>`` are never touched.
    """

    def _space(match: re.Match[str]) -> str:
        close_tag, whitespace, open_tag = match.groups()
        if whitespace:
            return match.group(0)
        if close_tag.lower() in BLOCK_TAGS or open_tag.lower() in BLOCK_TAGS:
            return f"</{close_tag}> <{open_tag}"
        return match.group(0)

    return _ADJACENT_TAGS.sub(_space, html)


def strip_tags(html: str) -> str:
    """Remove every tag, comments included; entities stay opaque text."""
    return TAG_PATTERN.sub("", html)


def strip_html_with_spaces(html: str) -> str:
    """Return the plain-text view of *html* used for all offset arithmetic."""
    return strip_tags(add_spaces_between_blocks(html))
