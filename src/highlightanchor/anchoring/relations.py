"""Overlap and adjacency decisions between a highlight and a new selection.

The editing surface asks, for every existing highlight, whether a fresh
selection overlaps it or touches it (separated by whitespace at most).  If
so, the selection extends that highlight instead of creating a new one.

Two procedures exist:

- **Position-based**: both plain-text spans are known.  Unambiguous.
- **Text-based**: only the texts are known (older highlights, or span data
  that has drifted).  Searches the plain-text projection of the document,
  and for containment insists that *every* occurrence of the shorter text
  lies inside the longer one, so a phrase repeated elsewhere in the
  document is not mistaken for the selected one.

``find_overlap_or_adjacent`` combines them.
"""

# Pattern: Functional Core (pure functions, no I/O)

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Literal

from highlightanchor.anchoring.plain_text import strip_html_with_spaces
from highlightanchor.anchoring.whitespace import escape_regex

logger = logging.getLogger(__name__)

Adjacency = Literal["before", "after"]

# Edge overlaps shorter than this are too likely to be coincidental
# (a shared trailing letter) to count when verified against content.
_MIN_CONTENT_EDGE_OVERLAP = 2

_WHITESPACE_RUN = re.compile(r"\s+")


@dataclass(frozen=True)
class SelectionPosition:
    """Half-open ``[start, end)`` span in the plain-text coordinate space."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start > self.end:
            msg = f"SelectionPosition start ({self.start}) is after end ({self.end})"
            raise ValueError(msg)


# ---------------------------------------------------------------------------
# Position-based detection
# ---------------------------------------------------------------------------


def _is_blank(text: str) -> bool:
    return not text or text.isspace()


def positions_adjacent_or_overlapping(
    highlight_pos: SelectionPosition,
    selection_pos: SelectionPosition,
    plain_content: str,
) -> bool:
    """Check whether two spans share a character or touch across whitespace.

    A span fully inside the other (the split case) counts as overlapping.
    """
    disjoint = (
        selection_pos.end <= highlight_pos.start
        or selection_pos.start >= highlight_pos.end
    )
    if not disjoint:
        return True

    # Selection after the highlight
    if selection_pos.start >= highlight_pos.end:
        gap = plain_content[highlight_pos.end : selection_pos.start]
        if _is_blank(gap):
            return True

    # Selection before the highlight
    if selection_pos.end <= highlight_pos.start:
        gap = plain_content[selection_pos.end : highlight_pos.start]
        if _is_blank(gap):
            return True

    return False


# ---------------------------------------------------------------------------
# Text-based detection
# ---------------------------------------------------------------------------


def find_overlap(str1: str, str2: str) -> bool:
    """Check whether two strings overlap textually, ignoring any document.

    True when one contains the other, or when a suffix of one is a prefix
    of the other (any length).
    """
    if str2 in str1 or str1 in str2:
        return True

    for i in range(1, len(str1)):
        if str2.startswith(str1[i:]):
            return True

    for i in range(1, len(str2)):
        if str1.startswith(str2[i:]):
            return True

    return False


def find_adjacent(
    highlight_text: str,
    selected_text: str,
    content: str | None,
) -> Adjacency | None:
    """Check whether two texts sit next to each other in *content*.

    Returns:
        ``"before"`` if *highlight_text* is immediately followed (optionally
        across whitespace) by *selected_text*, ``"after"`` for the reverse,
        or ``None``.
    """
    if not content:
        return None

    plain_content = strip_html_with_spaces(content)
    highlight_pattern = escape_regex(highlight_text)
    selected_pattern = escape_regex(selected_text)

    if re.search(highlight_pattern + r"\s*" + selected_pattern, plain_content):
        return "before"
    if re.search(selected_pattern + r"\s*" + highlight_pattern, plain_content):
        return "after"
    return None


def _contained_at_same_location(longer: str, shorter: str, plain_content: str) -> bool:
    """Check that every occurrence of *shorter* lies within *longer*'s first occurrence.

    At least one occurrence must fall inside.  If *shorter* also appears
    elsewhere, there is no way to tell which occurrence the user meant, so
    the answer is False.
    """
    longer_pos = plain_content.find(longer)
    if longer_pos == -1:
        return False
    longer_end = longer_pos + len(longer)

    inside = False
    search_pos = 0
    while search_pos < len(plain_content):
        occurrence = plain_content.find(shorter, search_pos)
        if occurrence == -1:
            break
        if occurrence >= longer_pos and occurrence + len(shorter) <= longer_end:
            inside = True
        else:
            return False
        search_pos = occurrence + 1

    return inside


def _edge_overlap_in_content(first: str, second: str, plain_content: str) -> bool:
    """Check for a suffix of *first* that is a prefix of *second*, at one location.

    The overlap must be at least two characters, and the joined text
    (*first* followed by the rest of *second*) must occur in the document,
    either literally or across a whitespace run.
    """
    for i in range(1, len(first)):
        suffix = first[i:]
        if len(suffix) < _MIN_CONTENT_EDGE_OVERLAP:
            continue
        if not second.startswith(suffix):
            continue

        remaining = second[len(suffix) :]
        if not remaining:
            # second is wholly a suffix of first
            if first in plain_content:
                return True
            continue

        if first + remaining in plain_content:
            return True
        flexible = escape_regex(first) + r"\s*" + escape_regex(remaining.strip())
        if re.search(flexible, plain_content):
            return True

    return False


def find_overlap_in_content(
    highlight_text: str,
    selected_text: str,
    content: str | None,
) -> bool:
    """Check whether two texts overlap at the same place in *content*.

    Handles containment (needed to split a highlight), exact equality, and
    edge overlaps such as ``"...incr"`` / ``"increased"``.
    """
    if not content:
        return False

    plain_content = strip_html_with_spaces(content)

    if selected_text in highlight_text and highlight_text != selected_text:
        if _contained_at_same_location(highlight_text, selected_text, plain_content):
            return True

    if highlight_text in selected_text and selected_text != highlight_text:
        if _contained_at_same_location(selected_text, highlight_text, plain_content):
            return True

    if highlight_text == selected_text:
        return highlight_text in plain_content

    return _edge_overlap_in_content(
        highlight_text, selected_text, plain_content
    ) or _edge_overlap_in_content(selected_text, highlight_text, plain_content)


# ---------------------------------------------------------------------------
# Hybrid policy
# ---------------------------------------------------------------------------


def _gap_belongs_to_highlight(gap: str, highlight_text: str) -> bool:
    """Check whether a gap between two spans is really part of the highlight.

    A stored highlight span that ends before its own text does leaves some of
    that text in the "gap".  Any gap word found in the highlight text is
    treated as evidence of such stale span data.
    """
    normalized_highlight = _WHITESPACE_RUN.sub(" ", highlight_text)
    if gap in normalized_highlight:
        return True
    return any(word in normalized_highlight for word in gap.split())


def find_overlap_or_adjacent(
    highlight_text: str,
    selected_text: str,
    content: str,
    highlight_position: SelectionPosition | None = None,
    selection_position: SelectionPosition | None = None,
) -> bool:
    """Check whether a selection overlaps or touches an existing highlight.

    With both positions, the position test is trusted: a positive answer is
    final, and a negative one is final unless the text between the spans
    looks like part of the highlight itself (stale offsets), in which case
    text-based detection decides.  Without both positions, text-based
    detection decides directly.
    """
    if highlight_position is not None and selection_position is not None:
        plain_content = strip_html_with_spaces(content)
        if positions_adjacent_or_overlapping(
            highlight_position, selection_position, plain_content
        ):
            return True

        gap_start = min(highlight_position.end, selection_position.start)
        gap_end = max(highlight_position.end, selection_position.start)
        if gap_end > gap_start:
            gap = plain_content[gap_start:gap_end].strip()
            if gap and not _gap_belongs_to_highlight(gap, highlight_text):
                return False
            logger.debug(
                "Span data for %r looks stale; falling back to text matching",
                highlight_text,
            )

    if find_adjacent(highlight_text, selected_text, content) is not None:
        return True

    return find_overlap_in_content(highlight_text, selected_text, content)
