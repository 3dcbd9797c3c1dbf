# ABOUTME: Metadata package for ISBN lookup against external bibliographic services.
# ABOUTME: Exports the BookDraft dataclass, provider protocol, and the two-tier resolver.

from shelfscan.metadata.google_books import GoogleBooksProvider
from shelfscan.metadata.http import MetadataFetchError, ShelfscanHttpClient
from shelfscan.metadata.openbd import OpenBDProvider
from shelfscan.metadata.provider import MetadataProvider
from shelfscan.metadata.resolver import MetadataResolver, ProviderError
from shelfscan.metadata.types import BookDraft

__all__ = [
    "BookDraft",
    "GoogleBooksProvider",
    "MetadataFetchError",
    "MetadataProvider",
    "MetadataResolver",
    "OpenBDProvider",
    "ProviderError",
    "ShelfscanHttpClient",
]
