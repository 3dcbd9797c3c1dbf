# ABOUTME: MetadataProvider protocol defining the contract for ISBN lookup services.
# ABOUTME: openBD and Google Books implement this; the resolver only sees the protocol.

from typing import Protocol, runtime_checkable

from shelfscan.metadata.types import BookDraft


@runtime_checkable
class MetadataProvider(Protocol):
    """Protocol for bibliographic lookup services.

    lookup_isbn returns a normalized BookDraft, or None when the service has
    no record for the ISBN. Network and parse failures raise
    MetadataFetchError rather than returning None.
    """

    @property
    def name(self) -> str: ...

    async def lookup_isbn(self, isbn: str) -> BookDraft | None: ...
