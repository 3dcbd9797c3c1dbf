# ABOUTME: The book collection: duplicate check, inserts, edits, and deletes over a RecordStore.
# ABOUTME: Every write is confirmed by the store and followed by a full re-fetch.

import logging

from shelfscan.db.mapping import (
    AddBookRequest,
    BookRecord,
    ReadingStatus,
    build_insert_payload,
    row_to_record,
)
from shelfscan.db.store import OrderBy, RecordStore, StoreError

logger = logging.getLogger(__name__)

BOOKS_TABLE = "books"


class BookCollection:
    """Typed access to the books table of a RecordStore.

    Holds the last fetched snapshot in ``books``. Writes never patch the
    snapshot locally; they wait for the store and then call refresh(), so the
    snapshot always carries server-assigned fields (id, created_at).

    Store failures propagate as StoreError and leave the snapshot untouched.
    """

    def __init__(self, store: RecordStore, table: str = BOOKS_TABLE) -> None:
        self._store = store
        self._table = table
        self._books: list[BookRecord] = []

    @property
    def books(self) -> list[BookRecord]:
        """Snapshot from the last refresh(), newest first."""
        return list(self._books)

    async def refresh(self) -> list[BookRecord]:
        """Re-fetch the whole collection from the store, newest first."""
        rows = await self._store.select(
            self._table, order=OrderBy("created_at", descending=True)
        )
        self._books = [row_to_record(row) for row in rows]
        return self.books

    async def get(self, book_id: int) -> BookRecord | None:
        """Retrieve a single book by its id."""
        rows = await self._store.select(self._table, {"id": book_id})
        return row_to_record(rows[0]) if rows else None

    async def has_isbn(self, isbn: str) -> bool:
        """Whether any stored book already carries this ISBN.

        Not atomic with a following add(); the store's unique index is the
        final word when two scans race.
        """
        rows = await self._store.select(self._table, {"isbn": isbn})
        return len(rows) > 0

    async def add(
        self, request: AddBookRequest, category: str | None = None
    ) -> BookRecord:
        """Insert a book as Unread, then refresh the snapshot.

        Args:
            request: A ManualTitle or a ScannedDraft.
            category: Category pre-selected by the user, if any.

        Returns:
            The stored record, with id and created_at assigned by the store.

        Raises:
            DuplicateBookError: If the store rejects the ISBN as a duplicate.
            StoreError: On any other failure of the insert itself. A failed
                refresh afterwards is logged and leaves the old snapshot.
        """
        payload = build_insert_payload(request, category)
        row = await self._store.insert(self._table, payload)
        record = row_to_record(row)
        logger.info("Stored book %d: %s", record.id, record.title)
        try:
            await self.refresh()
        except StoreError as exc:
            # Insert already committed.
            logger.warning("Stored book %d but refresh failed: %s", record.id, exc)
        return record

    async def set_status(self, book_id: int, status: ReadingStatus) -> None:
        """Change a book's reading status.

        Raises:
            ValueError: If the book_id does not exist.
        """
        await self._update(book_id, {"status": ReadingStatus(status).value})

    async def set_category(self, book_id: int, category: str | None) -> None:
        """Set or clear a book's category label.

        Raises:
            ValueError: If the book_id does not exist.
        """
        await self._update(book_id, {"category": category})

    async def delete(self, book_id: int) -> None:
        """Delete a book from the collection.

        Raises:
            ValueError: If the book_id does not exist.
        """
        count = await self._store.delete(self._table, {"id": book_id})
        if count == 0:
            raise ValueError(f"Book with id {book_id} not found")
        await self.refresh()

    async def _update(self, book_id: int, patch: dict[str, str | None]) -> None:
        count = await self._store.update(self._table, patch, {"id": book_id})
        if count == 0:
            raise ValueError(f"Book with id {book_id} not found")
        await self.refresh()
