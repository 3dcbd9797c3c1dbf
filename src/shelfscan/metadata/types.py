# ABOUTME: Core bibliographic data structures shared by providers and the store.
# ABOUTME: BookDraft is the provider-agnostic record handed from lookup to persistence.

from dataclasses import dataclass

UNKNOWN_TITLE = "title unknown"
UNKNOWN_AUTHOR = "author unknown"
UNKNOWN_PUBLISHER = "publisher unknown"


@dataclass(frozen=True)
class BookDraft:
    """Normalized, not-yet-persisted bibliographic record.

    Built by a metadata provider from whichever service answered, then consumed
    once by the duplicate check and the insert. Frozen: nothing downstream is
    allowed to patch a draft in place.
    """

    title: str
    author: str
    publisher: str
    cover: str
    isbn: str

    @property
    def has_cover(self) -> bool:
        """Whether a cover URL is present."""
        return bool(self.cover)


def secure_cover_url(url: str | None) -> str:
    """Rewrite an http:// cover URL to https://. Missing URLs become ""."""
    if not url:
        return ""
    if url.startswith("http://"):
        return "https://" + url[len("http://"):]
    return url
