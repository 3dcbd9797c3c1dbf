# ABOUTME: openBD metadata provider implementation (primary lookup).
# ABOUTME: Queries api.openbd.jp by ISBN and maps the summary block to a BookDraft.

import logging

from shelfscan.metadata.http import HttpClient, MetadataFetchError
from shelfscan.metadata.parsers import parse_openbd_response
from shelfscan.metadata.types import BookDraft

logger = logging.getLogger(__name__)

OPENBD_URL = "https://api.openbd.jp/v1/get"


class OpenBDProvider:
    """Metadata provider backed by the openBD API.

    openBD is a curated catalog of books published in Japan. When it has a
    summary for an ISBN, that summary is authoritative.
    """

    def __init__(self, http_client: HttpClient, base_url: str = OPENBD_URL) -> None:
        self._http = http_client
        self._url = base_url

    @property
    def name(self) -> str:
        return "openbd"

    async def lookup_isbn(self, isbn: str) -> BookDraft | None:
        """Look up a book by ISBN. Returns None when openBD has no summary."""
        data = await self._http.get(self._url, params={"isbn": isbn})
        try:
            draft = parse_openbd_response(data, isbn)
        except ValueError as exc:
            raise MetadataFetchError(f"Unexpected openBD payload for {isbn}: {exc}") from exc

        if draft is None:
            logger.debug("openBD has no summary for %s", isbn)
        return draft
