# ABOUTME: Converts between add-book requests, store row dicts, and BookRecord.
# ABOUTME: Defines the ReadingStatus enum and the ManualTitle/ScannedDraft request variants.

import enum
from dataclasses import dataclass
from typing import Any, assert_never

from shelfscan.metadata.types import BookDraft


class ReadingStatus(enum.StrEnum):
    """Reading progress of a book. New records start as UNREAD."""

    UNREAD = "Unread"
    READING = "Reading"
    FINISHED = "Finished"


@dataclass(frozen=True)
class ManualTitle:
    """A book added by typing its title; no lookup, no ISBN."""

    title: str


@dataclass(frozen=True)
class ScannedDraft:
    """A book added from a resolved barcode scan."""

    draft: BookDraft


AddBookRequest = ManualTitle | ScannedDraft


@dataclass
class BookRecord:
    """A stored book: draft fields plus store-assigned id and created_at."""

    id: int
    title: str
    author: str | None
    publisher: str | None
    cover_url: str | None
    isbn: str | None
    status: ReadingStatus
    category: str | None
    created_at: str


def build_insert_payload(request: AddBookRequest, category: str | None = None) -> dict[str, Any]:
    """Build the row dict for an insert. Status always starts as Unread."""
    payload: dict[str, Any] = {"status": ReadingStatus.UNREAD.value, "category": category}
    match request:
        case ManualTitle(title=title):
            payload["title"] = title
        case ScannedDraft(draft=draft):
            payload.update(
                title=draft.title,
                author=draft.author,
                publisher=draft.publisher,
                cover_url=draft.cover,
                isbn=draft.isbn,
            )
        case _:
            assert_never(request)
    return payload


def row_to_record(row: Any) -> BookRecord:
    """Convert a store row (dict-like) to a BookRecord."""
    return BookRecord(
        id=row["id"],
        title=row["title"],
        author=row.get("author"),
        publisher=row.get("publisher"),
        cover_url=row.get("cover_url"),
        isbn=row.get("isbn"),
        status=ReadingStatus(row.get("status") or ReadingStatus.UNREAD),
        category=row.get("category"),
        created_at=str(row["created_at"]),
    )
