"""Command-line entry point for highlight-anchor.

Renders stored highlights onto an HTML file, and exposes the merge and
overlap decisions the editing surface makes, for debugging anchors that
fail to re-locate.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from highlightanchor import __version__, setup_logging
from highlightanchor.anchoring import (
    HighlightAnchor,
    SelectionPosition,
    find_overlap_or_adjacent,
    get_highlight_context,
    merge_texts,
    process_highlights_with_report,
)
from highlightanchor.config import get_settings

if TYPE_CHECKING:
    from collections.abc import Sequence

    from highlightanchor.anchoring import ProcessResult
    from highlightanchor.config import Settings

console = Console()
err_console = Console(stderr=True)


class HighlightRecord(BaseModel):
    """One highlight as stored by the persistence layer (camelCase JSON)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    selected_text: str
    plain_text_start: int | None = Field(default=None, ge=0)
    plain_text_end: int | None = Field(default=None, ge=0)

    def to_anchor(self) -> HighlightAnchor:
        return HighlightAnchor(
            id=self.id,
            selected_text=self.selected_text,
            plain_text_start=self.plain_text_start,
            plain_text_end=self.plain_text_end,
        )


_RECORDS = TypeAdapter(list[HighlightRecord])


def load_highlights(raw: str | bytes) -> list[HighlightAnchor]:
    """Parse a JSON array of highlight records into anchors.

    Raises:
        ValidationError: The JSON is malformed or a record is invalid.
    """
    return [record.to_anchor() for record in _RECORDS.validate_json(raw)]


def _print_report(result: ProcessResult) -> None:
    table = Table(title="Skipped highlights")
    table.add_column("id", justify="right")
    table.add_column("reason")
    table.add_column("text")
    table.add_column("detail", style="dim")
    for skipped in result.skipped:
        table.add_row(
            str(skipped.anchor.id),
            skipped.reason.value,
            Text(skipped.anchor.selected_text),
            Text(skipped.detail),
        )
    err_console.print(
        f"[green]{len(result.applied)} applied[/], "
        f"[yellow]{len(result.skipped)} skipped[/]"
    )
    if result.skipped:
        err_console.print(table)


def _cmd_render(args: argparse.Namespace, settings: Settings) -> int:
    content = args.content.read_text(encoding="utf-8")
    anchors = load_highlights(args.highlights.read_bytes())
    result = process_highlights_with_report(
        content, anchors, mark_class=settings.highlight.mark_class
    )
    if args.output is not None:
        args.output.write_text(result.html, encoding="utf-8")
    else:
        sys.stdout.write(result.html)
    if args.report:
        _print_report(result)
    return 0


def _cmd_context(args: argparse.Namespace, settings: Settings) -> int:
    content = args.content.read_text(encoding="utf-8")
    length = args.length
    if length is None:
        length = settings.highlight.context_length
    before, after = get_highlight_context(content, args.text, length)
    if not before and not after:
        err_console.print("[yellow]Text not found (or no surrounding context)[/]")
    line = Text()
    line.append(before, style="dim")
    line.append(" ")
    line.append(args.text, style="bold")
    line.append(" ")
    line.append(after, style="dim")
    console.print(line, soft_wrap=True)
    return 0


def _cmd_merge(args: argparse.Namespace, settings: Settings) -> int:  # noqa: ARG001
    content = args.content.read_text(encoding="utf-8")
    merged = merge_texts(args.existing, args.new, content)
    console.print(merged, markup=False, highlight=False, soft_wrap=True)
    return 0


def _cmd_relate(args: argparse.Namespace, settings: Settings) -> int:  # noqa: ARG001
    content = args.content.read_text(encoding="utf-8")
    related = find_overlap_or_adjacent(
        args.highlight,
        args.selection,
        content,
        highlight_position=args.highlight_span,
        selection_position=args.selection_span,
    )
    if related:
        console.print("[green]overlapping or adjacent[/] - extend the highlight")
    else:
        console.print("[yellow]separate[/] - create a new highlight")
    return 0


def _span(value: str) -> SelectionPosition:
    """Parse ``START:END`` plain-text offsets."""
    start, sep, end = value.partition(":")
    try:
        if not sep:
            raise ValueError(value)
        return SelectionPosition(int(start), int(end))
    except ValueError as exc:
        msg = f"expected START:END with START <= END, got {value!r}"
        raise argparse.ArgumentTypeError(msg) from exc


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="highlight-anchor",
        description="Anchor text highlights onto HTML documents.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    render_p = sub.add_parser("render", help="Wrap highlights in <mark> elements")
    render_p.add_argument("content", type=Path, help="HTML file")
    render_p.add_argument(
        "highlights",
        type=Path,
        help="JSON array of {id, selectedText, plainTextStart?, plainTextEnd?}",
    )
    render_p.add_argument("-o", "--output", type=Path, help="Write HTML here")
    render_p.add_argument(
        "--report", action="store_true", help="Print skipped highlights to stderr"
    )
    render_p.set_defaults(handler=_cmd_render)

    context_p = sub.add_parser("context", help="Show text around a highlight")
    context_p.add_argument("content", type=Path, help="HTML file")
    context_p.add_argument("text", help="Highlighted text")
    context_p.add_argument(
        "--length", type=int, default=None, help="Characters of context per side"
    )
    context_p.set_defaults(handler=_cmd_context)

    merge_p = sub.add_parser("merge", help="Merge two highlight texts")
    merge_p.add_argument("content", type=Path, help="HTML file")
    merge_p.add_argument("existing", help="Existing highlight text")
    merge_p.add_argument("new", help="New selection text")
    merge_p.set_defaults(handler=_cmd_merge)

    relate_p = sub.add_parser(
        "relate", help="Check whether a selection overlaps or touches a highlight"
    )
    relate_p.add_argument("content", type=Path, help="HTML file")
    relate_p.add_argument("highlight", help="Existing highlight text")
    relate_p.add_argument("selection", help="New selection text")
    relate_p.add_argument(
        "--highlight-span",
        type=_span,
        metavar="START:END",
        help="Stored plain-text offsets of the highlight",
    )
    relate_p.add_argument(
        "--selection-span",
        type=_span,
        metavar="START:END",
        help="Plain-text offsets of the selection",
    )
    relate_p.set_defaults(handler=_cmd_relate)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the ``highlight-anchor`` console script."""
    args = _build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(settings)

    try:
        return args.handler(args, settings)
    except OSError as exc:
        err_console.print(f"[red]Cannot read input:[/] {escape(str(exc))}")
    except ValidationError as exc:
        err_console.print(f"[red]Invalid highlights JSON:[/]\n{escape(str(exc))}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
