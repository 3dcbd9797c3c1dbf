# ABOUTME: Async HTTP client abstraction for the ISBN lookup providers.
# ABOUTME: Provides rate limiting, opt-in retry with backoff, and injectable transport for testing.

import asyncio
import logging
import time
from typing import Any, Protocol, runtime_checkable

import httpx

from shelfscan import __version__

logger = logging.getLogger(__name__)

_RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


class MetadataFetchError(Exception):
    """Raised when an HTTP request to a metadata provider fails."""


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP GET operations against JSON APIs."""

    async def get(self, url: str, params: dict[str, str] | None = None) -> Any: ...


class ShelfscanHttpClient:
    """Async HTTP client with rate limiting for metadata API calls.

    Wraps httpx.AsyncClient. Retries on transient failures (429, 5xx) are
    off by default; a failed lookup is reported to the user, not replayed.
    """

    def __init__(
        self,
        *,
        min_request_interval: float = 0.0,
        max_retries: int = 0,
        retry_delay: float = 1.0,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        client_kwargs: dict[str, Any] = {
            "headers": {"User-Agent": f"shelfscan/{__version__}"},
            "timeout": timeout,
        }
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.AsyncClient(**client_kwargs)
        self._min_interval = min_request_interval
        self._max_retries = max_retries
        self._retry_delay = retry_delay
        self._last_request_time: float = 0.0

    async def get(self, url: str, params: dict[str, str] | None = None) -> Any:
        """Send a GET request and return the decoded JSON body.

        Args:
            url: The URL to request.
            params: Optional query parameters.

        Returns:
            Parsed JSON response body (object or array).

        Raises:
            MetadataFetchError: On transport errors, non-200 responses,
                exhausted retries, or a body that is not valid JSON.
        """
        await self._rate_limit()

        attempts = 1 + self._max_retries
        last_status = 0
        for attempt in range(attempts):
            try:
                response = await self._client.get(url, params=params)
                last_status = response.status_code
            except httpx.HTTPError as exc:
                raise MetadataFetchError(f"Request failed: {url}: {exc}") from exc

            if response.status_code == 200:
                try:
                    return response.json()
                except ValueError as exc:
                    raise MetadataFetchError(f"Invalid JSON from {url}: {exc}") from exc

            if response.status_code not in _RETRYABLE_STATUS_CODES:
                raise MetadataFetchError(f"HTTP {response.status_code} from {url}")

            if attempt < attempts - 1:
                delay = self._retry_delay * (2**attempt)
                logger.warning(
                    "HTTP %d from %s, retrying in %.1fs (attempt %d/%d)",
                    response.status_code,
                    url,
                    delay,
                    attempt + 1,
                    self._max_retries,
                )
                await asyncio.sleep(delay)

        raise MetadataFetchError(f"HTTP {last_status} from {url} after {attempts} attempts")

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()

    async def _rate_limit(self) -> None:
        """Sleep if needed to maintain minimum interval between requests."""
        if self._min_interval <= 0:
            return
        now = time.monotonic()
        elapsed = now - self._last_request_time
        if elapsed < self._min_interval and self._last_request_time > 0:
            await asyncio.sleep(self._min_interval - elapsed)
        self._last_request_time = time.monotonic()
