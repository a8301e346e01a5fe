"""Locating highlight text in plain text and mapping it back into markup.

``find_text_at_position`` picks *which* occurrence of a phrase a highlight
refers to; ``map_plain_to_html_position`` converts the resulting plain-text
span into indices in the block-spaced markup it was projected from.
"""

# Pattern: Functional Core (pure functions, no I/O)

from __future__ import annotations

from typing import NamedTuple

from highlightanchor.anchoring.whitespace import create_flexible_pattern


class HtmlSpan(NamedTuple):
    """Half-open ``[start_html_index, end_html_index)`` range in markup."""

    start_html_index: int
    end_html_index: int

    @property
    def found(self) -> bool:
        return self.start_html_index != -1 and self.end_html_index != -1


NOT_FOUND = HtmlSpan(-1, -1)


def map_plain_to_html_position(
    html: str,
    plain_position: int,
    plain_length: int,
) -> HtmlSpan:
    """Map a plain-text span onto indices in *html*.

    Walks the markup, skipping each tag (``<`` through the next ``>``) and
    counting every other character.  The start index is the markup index of
    plain character *plain_position*; the end index is one past plain
    character ``plain_position + plain_length - 1``.

    *html* must be the same block-spaced markup whose plain-text projection
    produced *plain_position*, otherwise the offsets will not agree.

    Returns:
        The markup span, or ``NOT_FOUND`` when the walk runs out of markup
        first.  An unterminated ``<`` stops the walk.
    """
    target_end = plain_position + plain_length
    char_count = 0
    start_html_index = -1
    i = 0
    n = len(html)

    while i < n:
        if html[i] == "<":
            tag_end = html.find(">", i)
            if tag_end == -1:
                break  # Malformed HTML
            i = tag_end + 1
            continue

        if char_count == plain_position and start_html_index == -1:
            start_html_index = i

        char_count += 1

        if char_count == target_end:
            if start_html_index == -1:
                return NOT_FOUND
            return HtmlSpan(start_html_index, i + 1)

        i += 1

    return NOT_FOUND


def find_text_at_position(
    plain_content: str,
    text: str,
    target_position: int | None = None,
) -> int:
    """Find the occurrence of *text* that covers *target_position*.

    Without a target the first occurrence is returned.  With one, occurrences
    are scanned left to right and the first whose span contains the target
    wins.  If the scan passes the target without a hit, the first occurrence
    overall is returned instead: a stale offset degrades to first-match, it
    never turns a findable highlight into a miss.

    Returns:
        Index into *plain_content*, or -1 when *text* does not occur at all.
    """
    if target_position is None:
        return plain_content.find(text)

    search_pos = 0
    while search_pos < len(plain_content):
        found_pos = plain_content.find(text, search_pos)
        if found_pos == -1:
            break

        if found_pos <= target_position < found_pos + len(text):
            return found_pos

        if found_pos > target_position:
            break

        search_pos = found_pos + 1

    return plain_content.find(text)


def find_flexible_match(plain_content: str, text: str) -> tuple[int, int]:
    """Find *text* allowing whitespace runs of any length between its words.

    Returns:
        ``(index, matched_length)`` of the first match, or ``(-1, 0)``.
    """
    match = create_flexible_pattern(text).search(plain_content)
    if match is None:
        return -1, 0
    return match.start(), match.end() - match.start()
