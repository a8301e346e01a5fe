"""Wrap a markup fragment in highlight ``<mark>`` elements.

A fragment that crosses tag boundaries cannot be wrapped by one element
without breaking nesting, so each text run gets its own ``<mark>``.  All
marks of one highlight share ``data-highlight-id``; ``data-highlight-pos``
tells CSS where the highlight really starts and ends:

- ``only``: single segment (both first and last)
- ``first``: first segment of a multi-part highlight
- ``last``: last segment of a multi-part highlight
- no attribute: middle segment
"""

from __future__ import annotations

import re

MARK_CLASS = "highlight-mark"

_TAG_SPLIT = re.compile(r"(<[^>]*>)")


def _mark(text: str, highlight_id: int, pos: str | None, mark_class: str) -> str:
    pos_attr = f' data-highlight-pos="{pos}"' if pos else ""
    return (
        f'<mark class="{mark_class}" data-highlight-id="{highlight_id}"{pos_attr}>'
        f"{text}</mark>"
    )


def _is_text_run(part: str) -> bool:
    return not part.startswith("<") and bool(part.strip())


def wrap_with_mark(
    fragment: str,
    highlight_id: int,
    mark_class: str = MARK_CLASS,
) -> str:
    """Wrap every text run in *fragment* with a highlight mark.

    Tags and whitespace-only runs are passed through unchanged, so original
    attributes and nesting survive.
    """
    if "<" not in fragment:
        return _mark(fragment, highlight_id, "only", mark_class)

    parts = _TAG_SPLIT.split(fragment)
    text_indices = [i for i, part in enumerate(parts) if _is_text_run(part)]
    if not text_indices:
        return fragment

    first_idx = text_indices[0]
    last_idx = text_indices[-1]

    wrapped: list[str] = []
    for i, part in enumerate(parts):
        if not _is_text_run(part):
            wrapped.append(part)
            continue
        if first_idx == last_idx:
            pos: str | None = "only"
        elif i == first_idx:
            pos = "first"
        elif i == last_idx:
            pos = "last"
        else:
            pos = None
        wrapped.append(_mark(part, highlight_id, pos, mark_class))

    return "".join(wrapped)
