# ABOUTME: Builds the runtime collaborators CLI commands need: config, store, and resolver.
# ABOUTME: Commands open the collection through here so the backend choice lives in one place.

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from rich.console import Console

from shelfscan.config import ConfigError, ShelfscanConfig, load_config
from shelfscan.db.collection import BookCollection
from shelfscan.db.connection import open_library
from shelfscan.db.postgrest import PostgrestRecordStore
from shelfscan.db.store import SqliteRecordStore
from shelfscan.metadata.google_books import GoogleBooksProvider
from shelfscan.metadata.http import HttpClient
from shelfscan.metadata.openbd import OpenBDProvider
from shelfscan.metadata.resolver import MetadataResolver
from shelfscan.scanning.outcomes import Duplicate, NotFound, Outcome, Success

_OUTCOME_STYLES = {Success: "green", Duplicate: "yellow", NotFound: "yellow"}


def load_config_or_exit(console: Console) -> ShelfscanConfig:
    """Load configuration, printing the problem and exiting 1 if it is invalid."""
    try:
        return load_config()
    except ConfigError as exc:
        console.print(f"[red]Configuration error: {exc}[/red]")
        raise SystemExit(1) from exc


def print_outcome(console: Console, outcome: Outcome, message: str) -> None:
    """Print a scan outcome: green for added, yellow for skipped, red for errors."""
    style = _OUTCOME_STYLES.get(type(outcome), "red")
    console.print(message, style=style, markup=False)


def create_resolver(http_client: HttpClient) -> MetadataResolver:
    """Create the default resolver: openBD first, Google Books on a miss."""
    return MetadataResolver(
        primary=OpenBDProvider(http_client),
        secondary=GoogleBooksProvider(http_client),
    )


@asynccontextmanager
async def open_collection(
    config: ShelfscanConfig, db_path: Path | None = None
) -> AsyncIterator[BookCollection]:
    """Open the configured store and yield a refreshed BookCollection.

    An explicit db_path always selects the local SQLite file, even when a
    PostgREST endpoint is configured.
    """
    if config.uses_postgrest and db_path is None:
        store = PostgrestRecordStore(config.postgrest_url, config.postgrest_key or "")
        try:
            collection = BookCollection(store)
            await collection.refresh()
            yield collection
        finally:
            await store.aclose()
        return

    conn = open_library(db_path or config.db_path)
    try:
        collection = BookCollection(SqliteRecordStore(conn))
        await collection.refresh()
        yield collection
    finally:
        conn.close()
