# ABOUTME: The `shelfscan add` command for adding one book by title or by ISBN.
# ABOUTME: Titles are stored as typed; ISBNs go through a single pass of the scan pipeline.

import asyncio
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from shelfscan.cli import runtime
from shelfscan.cli.options import category_option, db_option
from shelfscan.config import ShelfscanConfig
from shelfscan.db.mapping import BookRecord, ManualTitle
from shelfscan.db.store import StoreError
from shelfscan.metadata.http import ShelfscanHttpClient
from shelfscan.scanning import Outcome, Success, build_pipeline


async def _add_title(
    config: ShelfscanConfig, db_path: Path | None, title: str, category: str | None
) -> BookRecord:
    async with runtime.open_collection(config, db_path) as collection:
        return await collection.add(ManualTitle(title), category)


async def _add_isbn(
    console: Console,
    config: ShelfscanConfig,
    db_path: Path | None,
    isbn: str,
    category: str | None,
) -> Outcome:
    http_client = ShelfscanHttpClient()
    try:
        async with runtime.open_collection(config, db_path) as collection:
            pipeline = build_pipeline(
                runtime.create_resolver(http_client),
                collection,
                category=category,
                sink=lambda outcome, message: runtime.print_outcome(console, outcome, message),
            )
            return await pipeline.process(isbn)
    finally:
        await http_client.aclose()


@click.command("add")
@click.argument("title", required=False)
@click.option("--isbn", default=None, help="Look the book up by ISBN instead of a title.")
@category_option
@db_option
def add(
    title: str | None, isbn: str | None, category: str | None, db_path: Path | None
) -> None:
    """Add a book by TITLE, or by --isbn with metadata lookup."""
    console = Console()
    if bool(title) == bool(isbn):
        console.print("[red]Give either a TITLE or --isbn, not both.[/red]")
        raise SystemExit(2)

    config = runtime.load_config_or_exit(console)
    category = category or config.category

    if title:
        try:
            record = asyncio.run(_add_title(config, db_path, title, category))
        except StoreError as exc:
            console.print(f"[red]Store error: {exc}[/red]")
            raise SystemExit(1) from exc
        console.print(f"Added [bold]{escape(record.title)}[/bold] (id {record.id}).")
        return

    isbn = isbn.replace("-", "").strip()
    if not config.isbn_policy.matches(isbn):
        console.print(f"[red]Not an ISBN-13: {isbn}[/red]")
        raise SystemExit(1)

    try:
        outcome = asyncio.run(_add_isbn(console, config, db_path, isbn, category))
    except StoreError as exc:
        console.print(f"[red]Store error: {exc}[/red]")
        raise SystemExit(1) from exc
    if not isinstance(outcome, Success):
        raise SystemExit(1)
