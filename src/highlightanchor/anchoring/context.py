"""Plain-text context around a highlight, for previews in highlight lists."""

from __future__ import annotations

from typing import NamedTuple

from highlightanchor.anchoring.plain_text import strip_html_with_spaces

ELLIPSIS = "..."


class HighlightContext(NamedTuple):
    """Text shown before and after a highlight in a preview."""

    before: str
    after: str


_EMPTY = HighlightContext("", "")


def get_highlight_context(
    content: str | None,
    selected_text: str,
    context_length: int = 50,
) -> HighlightContext:
    """Extract up to *context_length* characters either side of *selected_text*.

    Uses the first occurrence.  When the snippet was cut out of a longer
    document it is trimmed back to a word boundary (dropping the partial
    word at the cut) and marked with ``...`` on that side.

    Returns:
        Empty ``before``/``after`` when *content* is empty or the text is
        not found.
    """
    if not content:
        return _EMPTY

    plain_content = strip_html_with_spaces(content)
    index = plain_content.find(selected_text)
    if index == -1:
        return _EMPTY

    before_start = max(0, index - context_length)
    before = plain_content[before_start:index].strip()
    if before_start > 0:
        space = before.find(" ")
        if space != -1:
            before = before[space + 1 :]
        before = ELLIPSIS + before

    after_start = index + len(selected_text)
    after_end = after_start + context_length
    after = plain_content[after_start:after_end].strip()
    if after_end < len(plain_content):
        space = after.rfind(" ")
        if space != -1:
            after = after[:space]
        after = after + ELLIPSIS

    return HighlightContext(before, after)
