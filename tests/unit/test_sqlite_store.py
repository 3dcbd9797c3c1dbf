# ABOUTME: Unit tests for SqliteRecordStore and the library schema.
# ABOUTME: Validates select/insert/update/delete, ordering, and the unique ISBN index.

import asyncio
from pathlib import Path

import pytest

from shelfscan.db.connection import open_library, schema_version
from shelfscan.db.schema import SCHEMA_VERSION
from shelfscan.db.store import (
    DuplicateBookError,
    OrderBy,
    RecordStore,
    SqliteRecordStore,
    StoreError,
)


def _row(title: str, isbn: str | None = None, **extra: str) -> dict:
    return {"title": title, "isbn": isbn, **extra}


class TestOpenLibrary:
    def test_creates_schema(self, db_path: Path) -> None:
        conn = open_library(db_path)
        tables = {
            r[0] for r in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
        }
        assert {"books", "schema_version"} <= tables
        conn.close()

    def test_reopen_is_idempotent(self, db_path: Path) -> None:
        open_library(db_path).close()
        conn = open_library(db_path)
        versions = conn.execute("SELECT version FROM schema_version").fetchall()
        assert len(versions) == 1
        conn.close()

    def test_reports_schema_version(self, db_path: Path) -> None:
        conn = open_library(db_path)
        assert schema_version(conn) == SCHEMA_VERSION
        conn.close()

    def test_refuses_newer_schema(self, db_path: Path) -> None:
        conn = open_library(db_path)
        conn.execute("INSERT INTO schema_version (version) VALUES (?)", (SCHEMA_VERSION + 1,))
        conn.commit()
        conn.close()

        with pytest.raises(StoreError, match="schema version"):
            open_library(db_path)

    def test_creates_parent_directory(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "dir" / "library.db"
        open_library(path).close()
        assert path.exists()


class TestSqliteRecordStore:
    def test_satisfies_protocol(self, sqlite_store: SqliteRecordStore) -> None:
        assert isinstance(sqlite_store, RecordStore)

    def test_calls_stay_on_the_opening_thread(self, sqlite_store: SqliteRecordStore) -> None:
        """The connection keeps sqlite3's same-thread check; every call must run on the loop."""
        async def run() -> list[dict]:
            await sqlite_store.insert("books", _row("Dune"))
            return await sqlite_store.select("books")

        assert [r["title"] for r in asyncio.run(run())] == ["Dune"]

    def test_insert_returns_generated_fields(self, sqlite_store: SqliteRecordStore) -> None:
        row = asyncio.run(sqlite_store.insert("books", _row("Dune", "9780441013593")))
        assert row["id"] == 1
        assert row["title"] == "Dune"
        assert row["status"] == "Unread"
        assert row["created_at"]

    def test_select_with_filter(self, sqlite_store: SqliteRecordStore) -> None:
        async def run() -> list[dict]:
            await sqlite_store.insert("books", _row("Dune", "9780441013593"))
            await sqlite_store.insert("books", _row("Emma", "9780141439587"))
            return await sqlite_store.select("books", {"isbn": "9780141439587"})

        rows = asyncio.run(run())
        assert [r["title"] for r in rows] == ["Emma"]

    def test_select_none_filter_matches_null(self, sqlite_store: SqliteRecordStore) -> None:
        async def run() -> list[dict]:
            await sqlite_store.insert("books", _row("Manual"))
            await sqlite_store.insert("books", _row("Scanned", "9780441013593"))
            return await sqlite_store.select("books", {"isbn": None})

        assert [r["title"] for r in asyncio.run(run())] == ["Manual"]

    def test_order_descending_breaks_ties_by_id(self, sqlite_store: SqliteRecordStore) -> None:
        async def run() -> list[dict]:
            for title in ("A", "B", "C"):
                await sqlite_store.insert(
                    "books", _row(title, created_at="2026-01-01T00:00:00.000")
                )
            return await sqlite_store.select("books", order=OrderBy("created_at", descending=True))

        assert [r["title"] for r in asyncio.run(run())] == ["C", "B", "A"]

    def test_duplicate_isbn_rejected(self, sqlite_store: SqliteRecordStore) -> None:
        async def run() -> None:
            await sqlite_store.insert("books", _row("Dune", "9780441013593"))
            await sqlite_store.insert("books", _row("Dune again", "9780441013593"))

        with pytest.raises(DuplicateBookError, match="9780441013593"):
            asyncio.run(run())

    def test_manual_entries_may_share_null_isbn(self, sqlite_store: SqliteRecordStore) -> None:
        async def run() -> list[dict]:
            await sqlite_store.insert("books", _row("One"))
            await sqlite_store.insert("books", _row("Two"))
            return await sqlite_store.select("books")

        assert len(asyncio.run(run())) == 2

    def test_invalid_status_is_store_error(self, sqlite_store: SqliteRecordStore) -> None:
        with pytest.raises(StoreError) as exc_info:
            asyncio.run(sqlite_store.insert("books", _row("X", status="Lost")))
        assert not isinstance(exc_info.value, DuplicateBookError)

    def test_update_and_delete_counts(self, sqlite_store: SqliteRecordStore) -> None:
        async def run() -> tuple[int, int, int, list[dict]]:
            row = await sqlite_store.insert("books", _row("Dune"))
            updated = await sqlite_store.update("books", {"status": "Reading"}, {"id": row["id"]})
            missing = await sqlite_store.update("books", {"status": "Reading"}, {"id": 999})
            deleted = await sqlite_store.delete("books", {"id": row["id"]})
            return updated, missing, deleted, await sqlite_store.select("books")

        updated, missing, deleted, remaining = asyncio.run(run())
        assert (updated, missing, deleted) == (1, 0, 1)
        assert remaining == []

    def test_unfiltered_delete_refused(self, sqlite_store: SqliteRecordStore) -> None:
        with pytest.raises(StoreError, match="without a filter"):
            asyncio.run(sqlite_store.delete("books", {}))

    def test_bad_identifier_refused(self, sqlite_store: SqliteRecordStore) -> None:
        with pytest.raises(StoreError, match="Invalid identifier"):
            asyncio.run(sqlite_store.select("books; DROP TABLE books"))

    def test_unknown_table_is_store_error(self, sqlite_store: SqliteRecordStore) -> None:
        with pytest.raises(StoreError, match="no such table"):
            asyncio.run(sqlite_store.select("shelves"))
