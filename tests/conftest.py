# ABOUTME: Shared pytest fixtures for shelfscan tests.
# ABOUTME: Provides temp SQLite stores, in-memory stores, a manual clock, and sample drafts.

from collections.abc import Iterator
from pathlib import Path

import pytest

from shelfscan.db.collection import BookCollection
from shelfscan.db.connection import open_library
from shelfscan.db.store import SqliteRecordStore
from shelfscan.metadata.types import BookDraft
from tests.fixtures.fakes import InMemoryRecordStore, ManualClock


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Path for a throwaway library database."""
    return tmp_path / "library.db"


@pytest.fixture
def sqlite_store(db_path: Path) -> Iterator[SqliteRecordStore]:
    """SqliteRecordStore over a fresh temporary database."""
    conn = open_library(db_path)
    yield SqliteRecordStore(conn)
    conn.close()


@pytest.fixture
def memory_store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def collection(memory_store: InMemoryRecordStore) -> BookCollection:
    return BookCollection(memory_store)


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def sample_draft() -> BookDraft:
    """A fully-populated draft as a provider would produce it."""
    return BookDraft(
        title="The Google Story",
        author="David A. Vise, Mark Malseed",
        publisher="Random House Digital, Inc.",
        cover="https://books.google.com/books/content?id=zyTCAlFPjgYC&zoom=1",
        isbn="9780553804577",
    )
