# ABOUTME: The `shelfscan ls` command for listing the book collection.
# ABOUTME: Displays a Rich table, optionally filtered by title and sorted.

import asyncio
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from shelfscan.cli import runtime
from shelfscan.cli.options import db_option
from shelfscan.config import ShelfscanConfig
from shelfscan.db.mapping import BookRecord, ReadingStatus
from shelfscan.db.query import SORT_ORDERS, display_books
from shelfscan.db.store import StoreError

_STATUS_STYLES = {
    ReadingStatus.UNREAD: "",
    ReadingStatus.READING: "yellow",
    ReadingStatus.FINISHED: "cyan",
}


async def _fetch(config: ShelfscanConfig, db_path: Path | None) -> list[BookRecord]:
    async with runtime.open_collection(config, db_path) as collection:
        return collection.books


@click.command("ls")
@db_option
@click.option(
    "--filter",
    "filter_text",
    default="",
    help="Only show books whose title contains this text.",
)
@click.option(
    "--sort",
    type=click.Choice(SORT_ORDERS),
    default="newest",
    help="Sort order (default: newest).",
)
def ls(db_path: Path | None, filter_text: str, sort: str) -> None:
    """List the books in the collection."""
    console = Console()
    config = runtime.load_config_or_exit(console)
    try:
        records = asyncio.run(_fetch(config, db_path))
    except StoreError as exc:
        console.print(f"[red]Store error: {exc}[/red]")
        raise SystemExit(1) from exc

    records = display_books(records, filter_text=filter_text, sort=sort)
    if not records:
        console.print("[yellow]No books in the collection.[/yellow]")
        return

    table = Table()
    table.add_column("ID", style="dim", width=4)
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Status")
    table.add_column("Category")
    table.add_column("ISBN", style="dim")

    for record in records:
        style = _STATUS_STYLES.get(record.status, "")
        status = escape(record.status.value)
        table.add_row(
            str(record.id),
            escape(record.title),
            escape(record.author) if record.author else "[dim]unknown[/dim]",
            f"[{style}]{status}[/{style}]" if style else status,
            escape(record.category) if record.category else "",
            record.isbn or "",
        )

    console.print(table)
    console.print(f"\n[dim]{len(records)} book(s)[/dim]")
