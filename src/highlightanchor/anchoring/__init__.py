"""Text anchoring and highlight merging for HTML documents."""

from highlightanchor.anchoring.context import HighlightContext, get_highlight_context
from highlightanchor.anchoring.editing import (
    ContainmentPosition,
    containment_position,
    shrink_highlight,
    split_highlight,
)
from highlightanchor.anchoring.marks import MARK_CLASS, wrap_with_mark
from highlightanchor.anchoring.merge import merge_all, merge_texts
from highlightanchor.anchoring.plain_text import (
    BLOCK_TAGS,
    add_spaces_between_blocks,
    strip_html_with_spaces,
    strip_tags,
)
from highlightanchor.anchoring.positions import (
    NOT_FOUND,
    HtmlSpan,
    find_flexible_match,
    find_text_at_position,
    map_plain_to_html_position,
)
from highlightanchor.anchoring.processor import (
    HighlightAnchor,
    ProcessResult,
    SkippedHighlight,
    SkipReason,
    process_highlights,
    process_highlights_with_report,
)
from highlightanchor.anchoring.relations import (
    SelectionPosition,
    find_adjacent,
    find_overlap,
    find_overlap_in_content,
    find_overlap_or_adjacent,
    positions_adjacent_or_overlapping,
)
from highlightanchor.anchoring.whitespace import (
    create_flexible_pattern,
    escape_regex,
    normalize_whitespace,
)

__all__ = [
    "BLOCK_TAGS",
    "MARK_CLASS",
    "NOT_FOUND",
    "ContainmentPosition",
    "HighlightAnchor",
    "HighlightContext",
    "HtmlSpan",
    "ProcessResult",
    "SelectionPosition",
    "SkipReason",
    "SkippedHighlight",
    "add_spaces_between_blocks",
    "containment_position",
    "create_flexible_pattern",
    "escape_regex",
    "find_adjacent",
    "find_flexible_match",
    "find_overlap",
    "find_overlap_in_content",
    "find_overlap_or_adjacent",
    "find_text_at_position",
    "get_highlight_context",
    "map_plain_to_html_position",
    "merge_all",
    "merge_texts",
    "normalize_whitespace",
    "positions_adjacent_or_overlapping",
    "process_highlights",
    "process_highlights_with_report",
    "shrink_highlight",
    "split_highlight",
    "strip_html_with_spaces",
    "strip_tags",
    "wrap_with_mark",
]
