"""CLI entrypoint for azchat."""

from __future__ import annotations

from datetime import datetime, timezone
import logging
from pathlib import Path
from typing import Optional

import typer

from azchat import catalog
from azchat.catalog import Position
from azchat.config import DecoderOptions
from azchat.decoder import decode
from azchat.encoder import dumps
from azchat.errors import DecodeError
from azchat.types.merged import MergedResponse
from azchat.ui.render import (
    render_catalog_table,
    render_choices_table,
    render_error,
    render_info,
    render_summary_table,
)

app = typer.Typer(add_completion=False, help="Decode Azure chat-completion responses.")


@app.callback()
def root(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log decoder debug output.")) -> None:
    """azchat response decoder CLI."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)


@app.command("decode")
def decode_command(
    path: Path = typer.Argument(..., help="Response document to decode."),
    strategy: Optional[str] = typer.Option(None, "--strategy", "-s", help="value or streaming."),
    unknown_fields: Optional[str] = typer.Option(None, "--unknown-fields", "-u", help="ignore or preserve."),
    encode: bool = typer.Option(False, "--encode", "-e", help="Print the re-encoded document instead of a summary."),
) -> None:
    """Decode a response file and report its base and extension fields."""
    try:
        options = _resolve_options(strategy, unknown_fields)
    except ValueError as exc:
        render_error(str(exc), title="invalid option")
        raise typer.Exit(code=2)

    try:
        payload = path.read_bytes()
    except OSError as exc:
        render_error(f"Cannot read {path}: {exc}", title="read failed")
        raise typer.Exit(code=1)

    try:
        record = decode(payload, options)
    except DecodeError as exc:
        render_error(str(exc), title="decode failed")
        raise typer.Exit(code=1)

    if encode:
        print(dumps(record, indent=2))
        return
    render_summary_table(_summary_rows(record, options), title=str(path))
    render_choices_table(record.choices)


@app.command("fields")
def fields_command() -> None:
    """List the response and choice fields the decoder recognizes."""
    for position in Position:
        specs = list(catalog.fields_for(position).values())
        render_catalog_table(f"{position.value} fields", specs)
    render_info("Fields outside these tables are ignored unless --unknown-fields preserve is set.")


def _resolve_options(strategy: str | None, unknown_fields: str | None) -> DecoderOptions:
    defaults = DecoderOptions.from_env()
    return DecoderOptions(
        strategy=strategy or defaults.strategy,
        unknown_fields=unknown_fields or defaults.unknown_fields,
    )


def _format_created(created: int) -> str:
    try:
        return datetime.fromtimestamp(created, tz=timezone.utc).isoformat()
    except (ValueError, OverflowError, OSError):
        # outside the platform's datetime range
        return str(created)


def _summary_rows(record: MergedResponse, options: DecoderOptions) -> list[tuple[str, str]]:
    created = _format_created(record.created)
    prompt_results = record.prompt_filter_results
    rows = [
        ("id", record.id),
        ("model", record.model),
        ("created", created),
        ("choices", str(len(record.choices))),
        ("extension", "present" if record.has_extension else "absent"),
        ("prompt filters", str(len(prompt_results)) if prompt_results is not None else "-"),
        ("strategy", options.strategy),
    ]
    if record.usage is not None:
        rows.append(("tokens", f"{record.usage.prompt_tokens} + {record.usage.completion_tokens}"))
    if record.extras:
        rows.append(("preserved", ", ".join(sorted(record.extras))))
    return rows


def main() -> None:
    app()


if __name__ == "__main__":
    main()
