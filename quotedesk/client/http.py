"""HTTP access layer for the IEX Cloud endpoints.

Wraps httpx calls with a hard per-request deadline and maps every failure
onto the `FetchError` hierarchy. No retries: a failed request is final.
"""

import asyncio
from typing import Any

import httpx
from loguru import logger

from quotedesk.core.config import Settings
from quotedesk.core.exceptions import NetworkError


def build_http_client(
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create the shared async client.

    Args:
        settings: Application settings (timeout is taken from here)
        transport: Optional transport override, e.g. `httpx.MockTransport` in tests

    Returns:
        Configured `httpx.AsyncClient`; the caller owns and closes it
    """
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.request_timeout),
        follow_redirects=True,
        transport=transport,
    )


def redact(url: httpx.URL | str) -> str:
    """Drop the API token from a URL before it is logged or attached to an error."""
    return str(httpx.URL(url).copy_remove_param("token"))


class ApiRequester:
    """Issues GET requests and enforces the response policy shared by all endpoints."""

    def __init__(self, client: httpx.AsyncClient, timeout: float) -> None:
        """Initialize with an open client.

        Args:
            client: Async HTTP client used for every request
            timeout: Seconds after which a request without a response is abandoned
        """
        self.client = client
        self.timeout = timeout

    async def get_bytes(self, url: str, params: dict[str, Any] | None = None) -> bytes:
        """
        Fetch a URL and return the raw body.

        Raises:
            NetworkError: Transport failure, timeout, non-200 status or empty body
        """
        safe_url = redact(httpx.URL(url, params=params))
        logger.debug(f"GET {safe_url}")

        try:
            response = await asyncio.wait_for(
                self.client.get(url, params=params),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            logger.error(f"Request timed out after {self.timeout}s: {safe_url}")
            raise NetworkError(f"Request timed out after {self.timeout}s", url=safe_url) from e
        except httpx.HTTPError as e:
            logger.error(f"Transport error for {safe_url}: {e}")
            raise NetworkError(f"Transport error: {e}", url=safe_url) from e

        if response.status_code != 200:
            logger.error(f"Unexpected status {response.status_code} for {safe_url}")
            raise NetworkError(
                f"Unexpected HTTP status {response.status_code}",
                url=safe_url,
                status_code=response.status_code,
            )

        if not response.content:
            logger.error(f"Empty response body for {safe_url}")
            raise NetworkError("Empty response body", url=safe_url, status_code=200)

        return response.content
