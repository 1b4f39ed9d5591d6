"""Async reputation service client."""

from typing import TYPE_CHECKING

from vpnblocker.clients.reputation import build_query, to_result
from vpnblocker.config import MATCH_MODES, Settings
from vpnblocker.exceptions import ConfigurationError, QueryError, TransportError
from vpnblocker.types.reputation import ReputationQuery, ReputationResult

if TYPE_CHECKING:
    from vpnblocker.async_transport import AsyncHTTPTransport


class AsyncReputationClient:
    """Async client for the ``/check/{address}`` lookup."""

    def __init__(self, transport: "AsyncHTTPTransport", match_mode: str = "json") -> None:
        """
        Initialize the async reputation client.

        Args:
            transport: Async HTTP transport for making requests
            match_mode: "json" (structured parsing) or "substring" (legacy marker match)
        """
        if match_mode not in MATCH_MODES:
            raise ConfigurationError(f"Invalid match mode: {match_mode}")
        self.transport = transport
        self.match_mode = match_mode

    async def query(
        self, query: ReputationQuery, match_mode: str | None = None
    ) -> ReputationResult:
        """
        Look up one address.

        Raises:
            QueryError: On connection failure, timeout, error status or unparsable body
        """
        try:
            response = await self.transport.request(
                "GET",
                query.url,
                connect_timeout_ms=query.connect_timeout_ms,
                read_timeout_ms=query.read_timeout_ms,
            )
        except TransportError as e:
            raise QueryError(e.code, e.message, query.address) from e

        return to_result(query, response, match_mode or self.match_mode)

    async def check(self, address: str, settings: Settings) -> ReputationResult:
        """
        Look up ``address`` using the backend and timeouts from ``settings``.

        Raises:
            ConfigurationError: If no backend URL is configured
            QueryError: If the lookup fails
        """
        return await self.query(build_query(address, settings), settings.api.match_mode)
