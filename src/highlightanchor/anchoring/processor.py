"""Apply a batch of highlights to an HTML document.

Highlights are anchored by text, with an optional plain-text offset hint
that picks among repeated occurrences.  The document is block-spaced once, from
the boundaries present in the input, and each highlight is resolved against
the *current* working document, because every insertion shifts the markup
indices of everything after it:

1. Skip empty text, and text already covered by a longer applied highlight.
2. Project the working document to plain text.
3. Locate the text: exact search near the hint, else whitespace-flexible.
4. Map the plain-text span back to block-spaced markup indices and verify
   that the sliced fragment really reads as the highlight text.
5. Wrap the fragment in marks and splice it into the working document.

Failures skip that one highlight; the batch always completes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from highlightanchor.anchoring.marks import MARK_CLASS, wrap_with_mark
from highlightanchor.anchoring.plain_text import add_spaces_between_blocks, strip_tags
from highlightanchor.anchoring.positions import (
    find_flexible_match,
    find_text_at_position,
    map_plain_to_html_position,
)
from highlightanchor.anchoring.whitespace import normalize_whitespace

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HighlightAnchor:
    """A highlight to render: its text and, optionally, where it was selected.

    Attributes:
        id: Unique within one batch; rendered as ``data-highlight-id``.
        selected_text: The literal text the user selected.
        plain_text_start: Plain-text offset where the selection started.
        plain_text_end: Plain-text offset where the selection ended.
    """

    id: int
    selected_text: str
    plain_text_start: int | None = None
    plain_text_end: int | None = None


class SkipReason(StrEnum):
    """Why a highlight was left out of the rendered document."""

    EMPTY = "empty"
    COVERED = "covered"
    NOT_FOUND = "not-found"
    MAPPING_FAILED = "mapping-failed"
    VERIFICATION_MISMATCH = "verification-mismatch"
    ERROR = "error"


@dataclass(frozen=True)
class SkippedHighlight:
    """A highlight that could not be applied, with the reason."""

    anchor: HighlightAnchor
    reason: SkipReason
    detail: str = ""


@dataclass
class ProcessResult:
    """Rendered HTML plus which highlights made it in."""

    html: str
    applied: list[int] = field(default_factory=list)
    skipped: list[SkippedHighlight] = field(default_factory=list)


class _Skip(Exception):
    """Internal signal: abandon the current highlight."""

    def __init__(self, reason: SkipReason, detail: str = "") -> None:
        super().__init__(detail or reason.value)
        self.reason = reason
        self.detail = detail


def _is_covered(normalized: str, applied_texts: list[str]) -> bool:
    return any(normalized in applied for applied in applied_texts)


def _apply_one(
    document: str,
    anchor: HighlightAnchor,
    normalized: str,
    mark_class: str,
) -> str:
    """Return spaced *document* with *anchor* wrapped, or raise ``_Skip``."""
    text = anchor.selected_text
    plain_content = strip_tags(document)

    plain_index = find_text_at_position(plain_content, text, anchor.plain_text_start)
    match_length = len(text)
    if plain_index == -1:
        plain_index, match_length = find_flexible_match(plain_content, text)
    if plain_index == -1:
        raise _Skip(SkipReason.NOT_FOUND)

    span = map_plain_to_html_position(document, plain_index, match_length)
    if not span.found:
        raise _Skip(SkipReason.MAPPING_FAILED, f"plain offset {plain_index}")

    start, end = span
    fragment = document[start:end]
    fragment_text = normalize_whitespace(strip_tags(fragment))
    if fragment_text != normalized:
        raise _Skip(SkipReason.VERIFICATION_MISMATCH, f"sliced {fragment_text!r}")

    wrapped = wrap_with_mark(fragment, anchor.id, mark_class)
    return document[:start] + wrapped + document[end:]


def process_highlights_with_report(
    content: str,
    highlights: Iterable[HighlightAnchor],
    *,
    mark_class: str = MARK_CLASS,
) -> ProcessResult:
    """Apply *highlights* to *content* and report what was skipped.

    Highlights are applied longest text first (ties keep input order), so a
    highlight whose text lies inside an already-applied one is dropped
    rather than nested.
    """
    anchors = list(highlights)
    result = ProcessResult(html=content)
    if not content or not anchors:
        return result

    ordered = sorted(anchors, key=lambda a: len(a.selected_text), reverse=True)
    applied_texts: list[str] = []
    # Spaced once: an inserted </mark> before <p> is not a block boundary
    document = add_spaces_between_blocks(content)

    for anchor in ordered:
        normalized = normalize_whitespace(anchor.selected_text)
        try:
            if not normalized:
                raise _Skip(SkipReason.EMPTY)
            if _is_covered(normalized, applied_texts):
                raise _Skip(SkipReason.COVERED)
            document = _apply_one(document, anchor, normalized, mark_class)
        except _Skip as skip:
            logger.debug(
                "Skipped highlight %s (%s) %s", anchor.id, skip.reason, skip.detail
            )
            result.skipped.append(SkippedHighlight(anchor, skip.reason, skip.detail))
            continue
        except Exception as exc:
            logger.warning(
                "Failed to process highlight %s %r: %s",
                anchor.id,
                anchor.selected_text,
                exc,
            )
            result.skipped.append(SkippedHighlight(anchor, SkipReason.ERROR, str(exc)))
            continue

        applied_texts.append(normalized)
        result.applied.append(anchor.id)

    if result.applied:
        result.html = document
    return result


def process_highlights(
    content: str,
    highlights: Iterable[HighlightAnchor],
    *,
    mark_class: str = MARK_CLASS,
) -> str:
    """Return *content* with every resolvable highlight wrapped in marks.

    Unresolvable highlights are silently left out.  With no highlights, or
    empty content, *content* is returned unchanged.
    """
    return process_highlights_with_report(
        content, highlights, mark_class=mark_class
    ).html
