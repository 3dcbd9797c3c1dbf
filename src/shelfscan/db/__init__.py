# ABOUTME: Public API for the shelfscan storage layer.
# ABOUTME: Exports the record store contract, its backends, and the typed book collection.

from shelfscan.db.collection import BookCollection
from shelfscan.db.connection import DEFAULT_DB_PATH, open_library
from shelfscan.db.mapping import (
    AddBookRequest,
    BookRecord,
    ManualTitle,
    ReadingStatus,
    ScannedDraft,
)
from shelfscan.db.postgrest import PostgrestRecordStore
from shelfscan.db.store import (
    DuplicateBookError,
    OrderBy,
    RecordStore,
    SqliteRecordStore,
    StoreError,
)

__all__ = [
    "DEFAULT_DB_PATH",
    "AddBookRequest",
    "BookCollection",
    "BookRecord",
    "DuplicateBookError",
    "ManualTitle",
    "OrderBy",
    "PostgrestRecordStore",
    "ReadingStatus",
    "RecordStore",
    "ScannedDraft",
    "SqliteRecordStore",
    "StoreError",
    "open_library",
]
