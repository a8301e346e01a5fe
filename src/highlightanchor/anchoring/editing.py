"""Shrinking and splitting an existing highlight by a selection inside it.

The caller persists the results; these functions only compute the new
anchors, keeping plain-text offsets consistent when the original had them.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Literal

from highlightanchor.anchoring.processor import HighlightAnchor

ContainmentPosition = Literal["start", "middle", "end"]


def containment_position(
    highlight_text: str,
    selection: str,
) -> ContainmentPosition | None:
    """Where *selection* sits inside *highlight_text*, or None if it is not inside."""
    if selection not in highlight_text:
        return None
    if highlight_text.startswith(selection):
        return "start"
    if highlight_text.endswith(selection):
        return "end"
    return "middle"


def _shift(offset: int | None, delta: int) -> int | None:
    return None if offset is None else offset + delta


def shrink_highlight(anchor: HighlightAnchor, selection: str) -> HighlightAnchor | None:
    """Remove *selection* from the start or end of a highlight.

    Returns:
        The shortened anchor (same id), or None when only whitespace is left.

    Raises:
        ValueError: *selection* is not at the start or end of the highlight.
    """
    text = anchor.selected_text
    position = containment_position(text, selection)
    if position not in ("start", "end"):
        msg = f"{selection!r} is not at the start or end of highlight {anchor.id}"
        raise ValueError(msg)

    if position == "start":
        remaining = text[len(selection) :]
        shrunk = replace(
            anchor,
            selected_text=remaining,
            plain_text_start=_shift(anchor.plain_text_start, len(selection)),
        )
    else:
        remaining = text[: len(text) - len(selection)]
        shrunk = replace(
            anchor,
            selected_text=remaining,
            plain_text_end=_shift(anchor.plain_text_end, -len(selection)),
        )

    if not remaining.strip():
        return None
    return shrunk


def split_highlight(
    anchor: HighlightAnchor,
    selection: str,
    new_id: int,
) -> list[HighlightAnchor]:
    """Cut *selection* out of the middle of a highlight.

    The part before keeps the original id; the part after gets *new_id*.
    Parts that are only whitespace are dropped.

    Raises:
        ValueError: *selection* is not strictly inside the highlight.
    """
    text = anchor.selected_text
    if containment_position(text, selection) != "middle":
        msg = f"{selection!r} is not in the middle of highlight {anchor.id}"
        raise ValueError(msg)

    cut = text.find(selection)
    text_before = text[:cut]
    text_after = text[cut + len(selection) :]

    parts: list[HighlightAnchor] = []
    if text_before.strip():
        parts.append(
            HighlightAnchor(
                id=anchor.id,
                selected_text=text_before,
                plain_text_start=anchor.plain_text_start,
                plain_text_end=_shift(anchor.plain_text_start, len(text_before)),
            )
        )
    if text_after.strip():
        parts.append(
            HighlightAnchor(
                id=new_id,
                selected_text=text_after,
                plain_text_start=_shift(
                    anchor.plain_text_start, cut + len(selection)
                ),
                plain_text_end=anchor.plain_text_end,
            )
        )
    return parts
