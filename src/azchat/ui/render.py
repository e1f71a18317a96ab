"""Render helpers for azchat CLI."""

from __future__ import annotations

from typing import Mapping, Sequence

from rich import box
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from azchat.catalog import FieldSpec
from azchat.types.content_filtering import FilterError
from azchat.types.merged import MergedChoice
from azchat.ui.console import get_console

_PREVIEW_CHARS = 60


def render_info(text: str) -> None:
    console = get_console()
    console.print(text, style="info", markup=False)


def render_error(text: str, title: str = "error") -> None:
    """Print ``text`` in a titled panel on stderr."""
    console = get_console(stderr=True)
    console.print(
        Panel(
            Text(text, style="value"),
            title=Text(title, style="error"),
            title_align="left",
            border_style="error",
            box=box.ROUNDED,
            padding=(0, 1),
        )
    )


def render_summary_table(rows: Mapping[str, str] | Sequence[tuple[str, str]], title: str = "Summary") -> None:
    console = get_console()
    table = Table(
        show_header=False,
        box=None,
        pad_edge=False,
    )
    table.add_column(style="label", no_wrap=True, justify="right")
    table.add_column(style="value")

    items = rows.items() if hasattr(rows, "items") else rows
    for key, value in items:
        table.add_row(Text(str(key), style="label"), Text(str(value), style="value"))

    panel = Panel(
        table,
        title=Text(title, style="title"),
        title_align="left",
        border_style="border",
        box=box.ROUNDED,
        padding=(0, 2),
        expand=True,
    )
    console.print(panel)


def render_choices_table(choices: Sequence[MergedChoice]) -> None:
    console = get_console()
    table = Table(box=box.SIMPLE_HEAD, pad_edge=False, expand=True)
    table.add_column("#", justify="right", style="label")
    table.add_column("finish", style="value")
    table.add_column("content", style="value", overflow="ellipsis")
    table.add_column("filter", no_wrap=True)

    for choice in choices:
        finish = choice.finish_reason.value if choice.finish_reason is not None else "-"
        content = choice.message.content or ""
        if len(content) > _PREVIEW_CHARS:
            content = f"{content[:_PREVIEW_CHARS]}..."
        table.add_row(str(choice.index), finish, content, _filter_status(choice))
    console.print(table)


def render_catalog_table(title: str, specs: Sequence[FieldSpec]) -> None:
    console = get_console()
    table = Table(title=title, box=box.SIMPLE_HEAD, pad_edge=False, title_justify="left")
    table.add_column("field", style="value")
    table.add_column("kind", style="label")
    table.add_column("json", style="label")
    table.add_column("required", style="label")
    for spec in specs:
        table.add_row(spec.name, spec.kind.value, spec.json_kind, "yes" if spec.required else "")
    console.print(table)


def _filter_status(choice: MergedChoice) -> Text:
    outcome = choice.content_filter_results
    if outcome is None:
        return Text("-", style="info")
    if isinstance(outcome, FilterError):
        return Text(f"error {outcome.code}", style="warning")
    if outcome.filtered:
        return Text("filtered", style="filtered")
    return Text("clean", style="clean")
