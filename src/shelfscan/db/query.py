# ABOUTME: Display-side filtering and sorting of a fetched book list.
# ABOUTME: Title substring filter plus newest/oldest/status orderings.

from shelfscan.db.mapping import BookRecord, ReadingStatus

SORT_ORDERS = ("newest", "oldest", "status")

_STATUS_RANK = {
    ReadingStatus.UNREAD: 1,
    ReadingStatus.READING: 2,
    ReadingStatus.FINISHED: 3,
}


def display_books(
    records: list[BookRecord], filter_text: str = "", sort: str = "newest"
) -> list[BookRecord]:
    """Filter records by case-insensitive title substring and sort them.

    Sorting is stable, so "status" keeps the incoming order within a status.

    Raises:
        ValueError: If sort is not one of SORT_ORDERS.
    """
    if sort not in SORT_ORDERS:
        raise ValueError(f"Unknown sort order: {sort}")

    needle = filter_text.lower()
    filtered = [r for r in records if needle in r.title.lower()]

    if sort == "newest":
        filtered.sort(key=lambda r: (r.created_at, r.id), reverse=True)
    elif sort == "oldest":
        filtered.sort(key=lambda r: (r.created_at, r.id))
    else:
        filtered.sort(key=lambda r: _STATUS_RANK.get(r.status, 99))
    return filtered
