# src/fetchcell/cli_formatters.py
"""CLI formatter factories for fetch-cell history records.

Each factory returns a dict mapping history record types to handlers,
suitable for subscribing to the session's EventBus.
"""

from __future__ import annotations

import json
from collections.abc import Callable

import typer

from fetchcell.contracts import (
    ConsoleInput,
    FetchCellInfoCreated,
    FetchCellInfoUpdated,
    ProgressEntry,
)
from fetchcell.core.events import EventBusProtocol


def _echo_entry(entry: ProgressEntry) -> None:
    if entry.failed:
        typer.secho(f"  ✗ {entry.text}", fg=typer.colors.RED)
    else:
        typer.echo(f"  ✓ {entry.text}")


def create_console_formatters() -> dict[type, Callable[..., None]]:
    """Create console formatters for human-readable CLI output.

    Updates re-send the whole progress view; only slots whose text changed
    since the previous view are printed.
    """
    seen: dict[str, list[str]] = {}

    def _format_input(record: ConsoleInput) -> None:
        typer.echo(f"[{record.language}] evaluating {len(record.content.splitlines())} line(s)")

    def _format_created(record: FetchCellInfoCreated) -> None:
        seen[record.history_id] = [entry.text for entry in record.value]
        for entry in record.value:
            if entry.failed:
                _echo_entry(entry)
            else:
                typer.echo(f"  … {entry.text}")

    def _format_updated(update: FetchCellInfoUpdated) -> None:
        previous = seen.get(update.history_id, [])
        for index, entry in enumerate(update.value):
            if index >= len(previous) or previous[index] != entry.text:
                _echo_entry(entry)
        seen[update.history_id] = [entry.text for entry in update.value]

    return {
        ConsoleInput: _format_input,
        FetchCellInfoCreated: _format_created,
        FetchCellInfoUpdated: _format_updated,
    }


def create_json_formatters() -> dict[type, Callable[..., None]]:
    """Create JSON formatters for structured CLI output."""

    def _format_input_json(record: ConsoleInput) -> None:
        typer.echo(json.dumps({"event": "console_input", **record.to_wire()}))

    def _format_created_json(record: FetchCellInfoCreated) -> None:
        typer.echo(json.dumps({"event": "fetch_cell_info", **record.to_wire()}))

    def _format_updated_json(update: FetchCellInfoUpdated) -> None:
        typer.echo(json.dumps({"event": "fetch_cell_update", **update.to_wire()}))

    return {
        ConsoleInput: _format_input_json,
        FetchCellInfoCreated: _format_created_json,
        FetchCellInfoUpdated: _format_updated_json,
    }


def subscribe_formatters(
    event_bus: EventBusProtocol,
    formatters: dict[type, Callable[..., None]],
) -> None:
    for event_type, handler in formatters.items():
        event_bus.subscribe(event_type, handler)
