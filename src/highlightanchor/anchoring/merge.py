"""Combine overlapping or touching highlight texts into one."""

# Pattern: Functional Core (pure functions, no I/O)

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from highlightanchor.anchoring.plain_text import strip_html_with_spaces
from highlightanchor.anchoring.relations import find_adjacent
from highlightanchor.anchoring.whitespace import escape_regex

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)


def _join_with_gap(first: str, second: str, content: str) -> str | None:
    """Join two texts with the whitespace that actually separates them in *content*."""
    plain_content = strip_html_with_spaces(content)
    pattern = escape_regex(first) + r"(\s*)" + escape_regex(second)
    match = re.search(pattern, plain_content)
    if match is None:
        return None
    return first + match.group(1) + second


def merge_texts(existing: str, new_text: str, content: str) -> str:
    """Merge two overlapping or adjacent highlight texts.

    Rules, in order:

    1. If one contains the other, the longer wins.
    2. If a suffix of one is a prefix of the other, join them without
       repeating the shared part.
    3. If they are adjacent in *content*, join them with the original gap
       from the document (``"Done!"`` + ``"I've created"`` becomes
       ``"Done! I've created"``, keeping whatever whitespace was there).
    4. Otherwise return *new_text*.
    """
    if new_text in existing:
        return existing
    if existing in new_text:
        return new_text

    for i in range(1, len(existing)):
        suffix = existing[i:]
        if new_text.startswith(suffix):
            return existing + new_text[len(suffix) :]

    for i in range(1, len(new_text)):
        suffix = new_text[i:]
        if existing.startswith(suffix):
            return new_text + existing[len(suffix) :]

    adjacency = find_adjacent(existing, new_text, content)
    if adjacency == "before":
        merged = _join_with_gap(existing, new_text, content)
    elif adjacency == "after":
        merged = _join_with_gap(new_text, existing, content)
    else:
        merged = None

    if merged is not None:
        return merged

    logger.debug("No overlap or adjacency between %r and %r", existing, new_text)
    return new_text


def merge_all(selection: str, highlight_texts: Iterable[str], content: str) -> str:
    """Fold a selection together with every highlight it extends."""
    merged = selection
    for text in highlight_texts:
        merged = merge_texts(merged, text, content)
    return merged
