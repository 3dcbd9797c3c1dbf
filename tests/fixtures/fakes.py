# ABOUTME: Test doubles for the network, the record store, providers, and the timer.
# ABOUTME: All fakes are in-process and deterministic; nothing touches the network or the clock.

import heapq
import itertools
from collections.abc import Callable
from typing import Any

from shelfscan.db.store import DuplicateBookError, OrderBy, StoreError
from shelfscan.metadata.http import MetadataFetchError
from shelfscan.metadata.types import BookDraft


class FakeHttpClient:
    """Fake async HTTP client that returns canned responses based on URL patterns."""

    def __init__(self, responses: dict[str, Any] | None = None) -> None:
        self._responses = responses or {}
        self.request_log: list[tuple[str, dict[str, str] | None]] = []

    async def get(self, url: str, params: dict[str, str] | None = None) -> Any:
        self.request_log.append((url, params))
        for pattern, response in self._responses.items():
            if pattern in url:
                if isinstance(response, Exception):
                    raise response
                return response
        raise MetadataFetchError(f"HTTP 404 from {url}")

    def calls_to(self, pattern: str) -> int:
        return sum(1 for url, _ in self.request_log if pattern in url)


class FakeProvider:
    """Provider returning a fixed draft (or None, or raising), counting lookups."""

    def __init__(
        self,
        name: str,
        result: BookDraft | None = None,
        error: Exception | None = None,
    ) -> None:
        self._name = name
        self._result = result
        self._error = error
        self.calls: list[str] = []

    @property
    def name(self) -> str:
        return self._name

    async def lookup_isbn(self, isbn: str) -> BookDraft | None:
        self.calls.append(isbn)
        if self._error is not None:
            raise self._error
        return self._result


class InMemoryRecordStore:
    """RecordStore keeping rows in a list, recording every insert attempt.

    With unique_isbn=True it rejects repeated ISBNs like a store-level index.
    fail_with makes every operation raise the given StoreError;
    fail_refresh_with only fails ordered selects (a collection refresh).
    """

    def __init__(
        self,
        rows: list[dict[str, Any]] | None = None,
        *,
        unique_isbn: bool = False,
        fail_with: StoreError | None = None,
        fail_refresh_with: StoreError | None = None,
    ) -> None:
        self.rows: list[dict[str, Any]] = [dict(r) for r in rows or []]
        self.insert_calls: list[dict[str, Any]] = []
        self.select_calls = 0
        self._unique_isbn = unique_isbn
        self._fail_with = fail_with
        self._fail_refresh_with = fail_refresh_with
        self._ids = itertools.count(max((r["id"] for r in self.rows), default=0) + 1)

    def _check(self) -> None:
        if self._fail_with is not None:
            raise self._fail_with

    @staticmethod
    def _matches(row: dict[str, Any], filters: dict[str, Any] | None) -> bool:
        return all(row.get(k) == v for k, v in (filters or {}).items())

    async def select(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        order: OrderBy | None = None,
    ) -> list[dict[str, Any]]:
        self.select_calls += 1
        self._check()
        if order is not None and self._fail_refresh_with is not None:
            raise self._fail_refresh_with
        rows = [dict(r) for r in self.rows if self._matches(r, filters)]
        if order is not None:
            rows.sort(key=lambda r: (r[order.column], r["id"]), reverse=order.descending)
        return rows

    async def insert(self, table: str, record: dict[str, Any]) -> dict[str, Any]:
        self.insert_calls.append(dict(record))
        self._check()
        isbn = record.get("isbn")
        if self._unique_isbn and isbn and any(r.get("isbn") == isbn for r in self.rows):
            raise DuplicateBookError(f"Book with ISBN {isbn} already exists")
        row_id = next(self._ids)
        row = {"id": row_id, "created_at": f"2026-01-01T00:00:{row_id:02d}.000", **record}
        self.rows.append(row)
        return dict(row)

    async def update(
        self, table: str, patch: dict[str, Any], filters: dict[str, Any]
    ) -> int:
        self._check()
        matched = [r for r in self.rows if self._matches(r, filters)]
        for row in matched:
            row.update(patch)
        return len(matched)

    async def delete(self, table: str, filters: dict[str, Any]) -> int:
        self._check()
        before = len(self.rows)
        self.rows = [r for r in self.rows if not self._matches(r, filters)]
        return before - len(self.rows)


class ManualClock:
    """Scheduler whose time only moves when advance() is called."""

    def __init__(self) -> None:
        self.now = 0.0
        self._queue: list[tuple[float, int, Callable[[], None]]] = []
        self._seq = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        heapq.heappush(self._queue, (self.now + delay, next(self._seq), callback))

    @property
    def pending(self) -> int:
        return len(self._queue)

    def advance(self, seconds: float) -> None:
        """Move time forward, running every callback that falls due, in order."""
        target = self.now + seconds
        while self._queue and self._queue[0][0] <= target:
            due, _, callback = heapq.heappop(self._queue)
            self.now = due
            callback()
        self.now = target
