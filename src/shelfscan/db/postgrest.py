# ABOUTME: RecordStore implementation for a hosted table exposed through PostgREST.
# ABOUTME: Translates select/insert/update/delete into REST calls over httpx.

import logging
from typing import Any

import httpx

from shelfscan import __version__
from shelfscan.db.store import DuplicateBookError, OrderBy, StoreError

logger = logging.getLogger(__name__)

# Postgres unique_violation SQLSTATE
_UNIQUE_VIOLATION = "23505"


def _filter_params(filters: dict[str, Any] | None) -> dict[str, str]:
    """Encode equality filters in PostgREST's column=eq.value syntax."""
    params: dict[str, str] = {}
    for column, value in (filters or {}).items():
        params[column] = "is.null" if value is None else f"eq.{value}"
    return params


class PostgrestRecordStore:
    """RecordStore backed by a PostgREST endpoint (e.g. a hosted Supabase table).

    Every write asks for ``return=representation`` so inserted rows come back
    with their server-assigned id and created_at.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        client_kwargs: dict[str, Any] = {
            "base_url": base_url.rstrip("/") + "/rest/v1",
            "headers": {
                "User-Agent": f"shelfscan/{__version__}",
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Prefer": "return=representation",
            },
            "timeout": timeout,
        }
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.AsyncClient(**client_kwargs)

    async def select(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        order: OrderBy | None = None,
    ) -> list[dict[str, Any]]:
        params = {"select": "*", **_filter_params(filters)}
        if order is not None:
            params["order"] = f"{order.column}.{'desc' if order.descending else 'asc'}"
        return await self._request("GET", table, params=params)

    async def insert(self, table: str, record: dict[str, Any]) -> dict[str, Any]:
        rows = await self._request("POST", table, json=[record])
        if not rows:
            raise StoreError(f"Insert into {table} returned no row")
        return rows[0]

    async def update(
        self, table: str, patch: dict[str, Any], filters: dict[str, Any]
    ) -> int:
        if not patch:
            return 0
        if not filters:
            raise StoreError("Refusing to update without a filter")
        rows = await self._request("PATCH", table, params=_filter_params(filters), json=patch)
        return len(rows)

    async def delete(self, table: str, filters: dict[str, Any]) -> int:
        if not filters:
            raise StoreError("Refusing to delete without a filter")
        rows = await self._request("DELETE", table, params=_filter_params(filters))
        return len(rows)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        table: str,
        *,
        params: dict[str, str] | None = None,
        json: Any = None,
    ) -> list[dict[str, Any]]:
        """Send a request and return the JSON row list.

        Raises:
            DuplicateBookError: On a unique-constraint violation.
            StoreError: On transport errors or any other non-2xx response.
        """
        try:
            response = await self._client.request(method, f"/{table}", params=params, json=json)
        except httpx.HTTPError as exc:
            raise StoreError(f"{method} /{table} failed: {exc}") from exc

        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = {}
            if not isinstance(body, dict):
                body = {}
            message = body.get("message") or f"HTTP {response.status_code}"
            if body.get("code") == _UNIQUE_VIOLATION:
                raise DuplicateBookError(message)
            logger.warning("%s /%s -> %d: %s", method, table, response.status_code, message)
            raise StoreError(message)

        if not response.content:
            return []
        try:
            return response.json()
        except ValueError as exc:
            raise StoreError(f"Invalid JSON from /{table}: {exc}") from exc
