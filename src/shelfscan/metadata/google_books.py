# ABOUTME: Google Books metadata provider implementation (secondary lookup).
# ABOUTME: Searches the volumes endpoint with an isbn: query and normalizes the first hit.

import logging

from shelfscan.metadata.http import HttpClient, MetadataFetchError
from shelfscan.metadata.parsers import parse_google_volumes
from shelfscan.metadata.types import BookDraft

logger = logging.getLogger(__name__)

GOOGLE_BOOKS_URL = "https://www.googleapis.com/books/v1/volumes"


class GoogleBooksProvider:
    """Metadata provider backed by the Google Books volumes API."""

    def __init__(self, http_client: HttpClient, base_url: str = GOOGLE_BOOKS_URL) -> None:
        self._http = http_client
        self._url = base_url

    @property
    def name(self) -> str:
        return "google_books"

    async def lookup_isbn(self, isbn: str) -> BookDraft | None:
        data = await self._http.get(self._url, params={"q": f"isbn:{isbn}"})
        try:
            draft = parse_google_volumes(data, isbn)
        except (ValueError, AttributeError) as exc:
            raise MetadataFetchError(
                f"Unexpected Google Books payload for {isbn}: {exc}"
            ) from exc

        if draft is None:
            logger.debug("Google Books has no volume for %s", isbn)
        return draft
