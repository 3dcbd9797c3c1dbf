# ABOUTME: The `shelfscan status`, `category`, and `rm` commands for editing stored books.
# ABOUTME: Each edit is confirmed by the store before the collection is re-fetched.

import asyncio
from collections.abc import Awaitable, Callable
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from shelfscan.cli import runtime
from shelfscan.cli.options import db_option
from shelfscan.db.collection import BookCollection
from shelfscan.db.mapping import BookRecord, ReadingStatus
from shelfscan.db.store import StoreError


def _edit(
    console: Console,
    db_path: Path | None,
    book_id: int,
    action: Callable[[BookCollection], Awaitable[None]],
) -> BookRecord:
    """Run one edit against the collection, exiting 1 on a missing book or store error.

    Returns the record as it was before the edit.
    """
    config = runtime.load_config_or_exit(console)

    async def run() -> BookRecord | None:
        async with runtime.open_collection(config, db_path) as collection:
            record = await collection.get(book_id)
            if record is not None:
                await action(collection)
            return record

    try:
        record = asyncio.run(run())
    except StoreError as exc:
        console.print(f"[red]Store error: {exc}[/red]")
        raise SystemExit(1) from exc

    if record is None:
        console.print(f"[red]Book {book_id} not found.[/red]")
        raise SystemExit(1)
    return record


@click.command("status")
@click.argument("book_id", type=int)
@click.argument("status", type=click.Choice([s.value for s in ReadingStatus]))
@db_option
def status(book_id: int, status: str, db_path: Path | None) -> None:
    """Set the reading status of a book."""
    console = Console()
    record = _edit(
        console, db_path, book_id,
        lambda collection: collection.set_status(book_id, ReadingStatus(status)),
    )
    console.print(f"[bold]{escape(record.title)}[/bold] is now [cyan]{status}[/cyan].")


@click.command("category")
@click.argument("book_id", type=int)
@click.argument("label", required=False)
@db_option
def category(book_id: int, label: str | None, db_path: Path | None) -> None:
    """Set a book's category, or clear it when LABEL is omitted."""
    console = Console()
    record = _edit(
        console, db_path, book_id,
        lambda collection: collection.set_category(book_id, label),
    )
    if label:
        console.print(f"Filed {record.title} under {label}.", markup=False)
    else:
        console.print(f"Cleared category of {record.title}.", markup=False)


@click.command("rm")
@click.argument("book_id", type=int)
@db_option
def rm(book_id: int, db_path: Path | None) -> None:
    """Delete a book from the collection."""
    console = Console()
    record = _edit(console, db_path, book_id, lambda collection: collection.delete(book_id))
    console.print(f"Deleted {record.title}.", markup=False)
