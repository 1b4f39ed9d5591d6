"""
Async HTTP Transport for VPNBlocker.

Issues single HTTP calls with independent connect and read timeouts using the
httpx async client. Nothing is retried here.
"""

import time
from typing import Any

import httpx

from vpnblocker.exceptions import TransportError
from vpnblocker.logging import log_http_request, log_http_response
from vpnblocker.transport import (
    DEFAULT_CONNECT_TIMEOUT_MS,
    DEFAULT_READ_TIMEOUT_MS,
    build_timeout,
)


class AsyncHTTPTransport:
    """
    Async HTTP transport for hosts that run an asyncio event loop.

    Handles:
    - Per-call connect/read timeouts
    - Debug logging of requests and responses
    - Mapping of network errors into ``TransportError``
    """

    def __init__(
        self,
        transport: httpx.AsyncBaseTransport | None = None,
        user_agent: str = "VPNBlocker",
    ) -> None:
        """
        Initialize async HTTP transport.

        Args:
            transport: Optional httpx async transport (e.g. ``httpx.MockTransport`` in tests)
            user_agent: Value of the User-Agent header
        """
        self._client = httpx.AsyncClient(
            transport=transport,
            headers={"User-Agent": user_agent},
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHTTPTransport":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def request(
        self,
        method: str,
        url: str,
        connect_timeout_ms: int = DEFAULT_CONNECT_TIMEOUT_MS,
        read_timeout_ms: int = DEFAULT_READ_TIMEOUT_MS,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """
        Make one HTTP call and read the full response body.

        Raises:
            TransportError: If no response could be obtained
        """
        log_http_request(
            method, url, headers=headers, content_length=len(content) if content else None
        )
        started = time.monotonic()

        try:
            response = await self._client.request(
                method,
                url,
                content=content,
                headers=headers,
                timeout=build_timeout(connect_timeout_ms, read_timeout_ms),
            )
        except httpx.TimeoutException as e:
            raise TransportError("TIMEOUT", f"{method} {url} timed out: {e}") from e
        except httpx.RequestError as e:
            raise TransportError("CONNECTION_ERROR", f"{method} {url} failed: {e}") from e
        except httpx.InvalidURL as e:
            raise TransportError("INVALID_URL", f"Invalid URL {url}: {e}") from e

        elapsed_ms = (time.monotonic() - started) * 1000
        log_http_response(response.status_code, url, body=response.text, elapsed_ms=elapsed_ms)
        return response
