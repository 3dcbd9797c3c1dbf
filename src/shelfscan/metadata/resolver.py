# ABOUTME: Two-tier metadata resolution: primary provider first, secondary on a miss.
# ABOUTME: Returns a BookDraft, None for "not found", or raises ProviderError.

import logging

from shelfscan.metadata.http import MetadataFetchError
from shelfscan.metadata.provider import MetadataProvider
from shelfscan.metadata.types import BookDraft

logger = logging.getLogger(__name__)


class ProviderError(Exception):
    """Raised when a provider lookup fails on the network or while parsing."""

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.message = message


class MetadataResolver:
    """Resolve an ISBN against an ordered pair of providers.

    The primary answer wins outright when present; the secondary is only asked
    on a primary miss. Failures are not retried.
    """

    def __init__(self, primary: MetadataProvider, secondary: MetadataProvider) -> None:
        self._primary = primary
        self._secondary = secondary

    async def resolve(self, isbn: str) -> BookDraft | None:
        """Look up an ISBN, returning a draft or None if neither provider knows it.

        Raises:
            ProviderError: If either provider fails before a match is found.
        """
        for provider in (self._primary, self._secondary):
            try:
                draft = await provider.lookup_isbn(isbn)
            except MetadataFetchError as exc:
                logger.warning("%s lookup failed for %s: %s", provider.name, isbn, exc)
                raise ProviderError(provider.name, str(exc)) from exc

            if draft is not None:
                logger.info("Resolved %s via %s: %s", isbn, provider.name, draft.title)
                return draft

        logger.info("No provider has a record for %s", isbn)
        return None
