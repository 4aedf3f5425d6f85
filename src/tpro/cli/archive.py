"""tpro archive commands — list, inspect, delete and clear archived work."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Annotated

import typer
from rich.table import Table

from tpro.archive.store import ArchiveStore, open_archive
from tpro.core.config import load_config
from tpro.core.models import ArchiveEntry
from tpro.utils.console import console

archive_app = typer.Typer(help="Browse and manage archived work.", no_args_is_help=True)


def _store() -> ArchiveStore:
    return open_archive(load_config())


def _format_time(timestamp_ms: int) -> str:
    return datetime.fromtimestamp(timestamp_ms / 1000).strftime("%Y-%m-%d %H:%M")


def _find(store: ArchiveStore, ref: str) -> ArchiveEntry | None:
    """Resolve either a file id (ST-001) or an internal id."""
    return store.get_by_file_id(ref) or store.get(ref)


@archive_app.command("list")
def list_entries(
    limit: Annotated[int, typer.Option("--limit", "-n", help="Show at most N entries.")] = 50,
) -> None:
    """List archived entries, most recent first."""
    entries = _store().list_all()
    table = Table(title=f"Archive ({len(entries)})")
    table.add_column("File ID", style="bold cyan", width=8)
    table.add_column("Type", width=12)
    table.add_column("Title")
    table.add_column("Ver", justify="right", width=4)
    table.add_column("Lang", width=10)
    table.add_column("Saved", width=16)

    for entry in entries[:limit]:
        table.add_row(
            entry.file_id,
            entry.type.value,
            entry.title,
            str(entry.version),
            entry.language,
            _format_time(entry.timestamp),
        )
    console.print(table)


@archive_app.command("show")
def show(
    ref: Annotated[str, typer.Argument(help="File ID (e.g. TL-004) or entry id.")],
) -> None:
    """Print one entry as JSON."""
    entry = _find(_store(), ref)
    if entry is None:
        console.print(f"[red]No archive entry:[/red] {ref}")
        raise typer.Exit(1)
    typer.echo(json.dumps(entry.to_dict(), ensure_ascii=False, indent=2))


@archive_app.command("delete")
def delete(
    ref: Annotated[str, typer.Argument(help="File ID (e.g. TL-004) or entry id.")],
) -> None:
    """Delete one entry."""
    store = _store()
    entry = _find(store, ref)
    if entry is None or not store.delete(entry.id):
        console.print(f"[red]No archive entry:[/red] {ref}")
        raise typer.Exit(1)
    console.print(f"[green]Deleted:[/green] {entry.file_id} {entry.title}")


@archive_app.command("clear")
def clear(
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip the confirmation prompt.")] = False,
) -> None:
    """Delete every entry and reset file id counters."""
    if not yes and not typer.confirm("Delete all archived entries?"):
        raise typer.Exit(1)
    _store().clear()
    console.print("[green]Archive cleared.[/green]")
