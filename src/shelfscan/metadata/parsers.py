# ABOUTME: Parsing functions for openBD and Google Books API JSON responses.
# ABOUTME: Converts provider-specific payloads into BookDraft instances.

from typing import Any

from shelfscan.metadata.types import (
    UNKNOWN_AUTHOR,
    UNKNOWN_PUBLISHER,
    UNKNOWN_TITLE,
    BookDraft,
    secure_cover_url,
)


def _text(value: Any) -> str | None:
    """Return a stripped string, or None for missing/blank/non-string values."""
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def parse_openbd_response(data: Any, isbn: str) -> BookDraft | None:
    """Parse an openBD /v1/get response into a BookDraft.

    openBD answers with a JSON array holding one entry per requested ISBN;
    unknown ISBNs come back as null. Only the "summary" block is used, and
    its field names map straight onto the draft.

    Raises:
        ValueError: If the payload is not an array.
    """
    if not isinstance(data, list):
        raise ValueError(f"openBD response is not a list: {type(data).__name__}")
    if not data or not isinstance(data[0], dict):
        return None

    summary = data[0].get("summary")
    if not isinstance(summary, dict) or not summary:
        return None

    return BookDraft(
        title=_text(summary.get("title")) or UNKNOWN_TITLE,
        author=_text(summary.get("author")) or UNKNOWN_AUTHOR,
        publisher=_text(summary.get("publisher")) or UNKNOWN_PUBLISHER,
        cover=secure_cover_url(_text(summary.get("cover"))),
        isbn=isbn,
    )


def parse_google_volumes(data: Any, isbn: str) -> BookDraft | None:
    """Parse a Google Books volumes search response into a BookDraft.

    Takes the first item's volumeInfo. Every field is optional upstream:
    missing title/authors/publisher fall back to the "unknown" sentinels and a
    missing imageLinks block (or thumbnail) yields an empty cover.

    Raises:
        ValueError: If the payload is not a JSON object or its items are not a list.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Google Books response is not an object: {type(data).__name__}")

    items = data.get("items") or []
    if not isinstance(items, list):
        raise ValueError(f"Google Books items is not a list: {type(items).__name__}")
    if not items:
        return None

    info = items[0].get("volumeInfo") or {}

    authors = [a for a in info.get("authors") or [] if _text(a)]
    image_links = info.get("imageLinks") or {}

    return BookDraft(
        title=_text(info.get("title")) or UNKNOWN_TITLE,
        author=", ".join(authors) if authors else UNKNOWN_AUTHOR,
        publisher=_text(info.get("publisher")) or UNKNOWN_PUBLISHER,
        cover=secure_cover_url(_text(image_links.get("thumbnail"))),
        isbn=isbn,
    )
