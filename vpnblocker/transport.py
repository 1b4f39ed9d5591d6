"""
HTTP Transport for VPNBlocker.

Issues single HTTP calls with independent connect and read timeouts and maps
network failures to ``TransportError``. Nothing is retried here.
"""

import time
from typing import Any

import httpx

from vpnblocker.exceptions import TransportError
from vpnblocker.logging import log_http_request, log_http_response

DEFAULT_CONNECT_TIMEOUT_MS = 5000
DEFAULT_READ_TIMEOUT_MS = 5000


def build_timeout(connect_timeout_ms: int, read_timeout_ms: int) -> httpx.Timeout:
    """
    Build an httpx timeout from millisecond values.

    The read timeout also bounds writing the request body and waiting for a
    pooled connection.
    """
    return httpx.Timeout(
        read_timeout_ms / 1000.0,
        connect=connect_timeout_ms / 1000.0,
    )


class HTTPTransport:
    """
    HTTP transport shared by the reputation client and the heartbeat reporter.

    Handles:
    - Per-call connect/read timeouts
    - Debug logging of requests and responses
    - Mapping of network errors into ``TransportError``

    The underlying ``httpx.Client`` is safe to use from several worker
    threads at once.
    """

    def __init__(
        self,
        transport: httpx.BaseTransport | None = None,
        user_agent: str = "VPNBlocker",
    ) -> None:
        """
        Initialize HTTP transport.

        Args:
            transport: Optional httpx transport (e.g. ``httpx.MockTransport`` in tests)
            user_agent: Value of the User-Agent header
        """
        self._client = httpx.Client(
            transport=transport,
            headers={"User-Agent": user_agent},
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "HTTPTransport":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def request(
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

        Args:
            method: HTTP method
            url: Absolute request URL
            connect_timeout_ms: Connect timeout in milliseconds
            read_timeout_ms: Read timeout in milliseconds
            content: Raw request body
            headers: Extra request headers

        Returns:
            The response, whatever its status code

        Raises:
            TransportError: If no response could be obtained
        """
        log_http_request(
            method, url, headers=headers, content_length=len(content) if content else None
        )
        started = time.monotonic()

        try:
            response = self._client.request(
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
