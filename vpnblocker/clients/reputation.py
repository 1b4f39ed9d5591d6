"""Reputation service client."""

import json
from typing import TYPE_CHECKING

import httpx

from vpnblocker.config import MATCH_MODES, Settings
from vpnblocker.exceptions import ConfigurationError, QueryError, TransportError
from vpnblocker.types.reputation import ReputationQuery, ReputationResult

if TYPE_CHECKING:
    from vpnblocker.transport import HTTPTransport

VERDICT_FIELD = "isVPN"
VERDICT_MARKER = '"isVPN":true'


def build_query(address: str, settings: Settings) -> ReputationQuery:
    """
    Build a lookup for ``address`` from the API section of ``settings``.

    Raises:
        ConfigurationError: If no backend URL is configured
    """
    if not settings.api.configured:
        raise ConfigurationError("API base URL not configured")

    return ReputationQuery(
        base_url=settings.api.base_url.strip(),
        address=address,
        connect_timeout_ms=settings.api.connect_timeout_ms,
        read_timeout_ms=settings.api.read_timeout_ms,
    )


def parse_verdict(body: str, address: str, match_mode: str = "json") -> bool:
    """
    Read the flagged verdict out of a ``/check`` response body.

    In ``json`` mode the body must be a JSON object carrying a boolean
    ``isVPN`` field. In ``substring`` mode the verdict is positive whenever
    the literal ``"isVPN":true`` occurs anywhere in the body.

    Raises:
        QueryError: If the body cannot be interpreted in ``json`` mode
    """
    if match_mode == "substring":
        return VERDICT_MARKER in body

    try:
        data = json.loads(body)
    except (ValueError, RecursionError) as e:
        raise QueryError(
            "INVALID_RESPONSE", f"Response for {address} is not JSON", address
        ) from e

    if not isinstance(data, dict):
        raise QueryError(
            "INVALID_RESPONSE", f"Response for {address} is not a JSON object", address
        )

    verdict = data.get(VERDICT_FIELD)
    if not isinstance(verdict, bool):
        raise QueryError(
            "INVALID_RESPONSE",
            f"Response for {address} has no boolean '{VERDICT_FIELD}' field",
            address,
        )
    return verdict


def to_result(query: ReputationQuery, response: httpx.Response, match_mode: str) -> ReputationResult:
    """
    Turn a backend response into a ``ReputationResult``.

    Raises:
        QueryError: On a non-2xx status or an unparsable body
    """
    if not response.is_success:
        raise QueryError(
            f"HTTP_{response.status_code}",
            f"Reputation service answered {response.status_code} for {query.address}",
            query.address,
        )

    body = response.text
    return ReputationResult(
        address=query.address,
        is_flagged=parse_verdict(body, query.address, match_mode),
        raw_body=body,
        status_code=response.status_code,
    )


class ReputationClient:
    """Client for the ``/check/{address}`` lookup."""

    def __init__(self, transport: "HTTPTransport", match_mode: str = "json") -> None:
        """
        Initialize the reputation client.

        Args:
            transport: HTTP transport for making requests
            match_mode: "json" (structured parsing) or "substring" (legacy marker match).
                Overridden per call by ``check()`` with the configured mode.
        """
        if match_mode not in MATCH_MODES:
            raise ConfigurationError(f"Invalid match mode: {match_mode}")
        self.transport = transport
        self.match_mode = match_mode

    def query(self, query: ReputationQuery, match_mode: str | None = None) -> ReputationResult:
        """
        Look up one address.

        A single GET is issued; a failure is reported immediately.

        Args:
            query: Target address, backend URL and timeouts
            match_mode: Overrides the client's verdict parsing mode

        Returns:
            ReputationResult with the verdict and raw body

        Raises:
            QueryError: On connection failure, timeout, error status or unparsable body
        """
        try:
            response = self.transport.request(
                "GET",
                query.url,
                connect_timeout_ms=query.connect_timeout_ms,
                read_timeout_ms=query.read_timeout_ms,
            )
        except TransportError as e:
            raise QueryError(e.code, e.message, query.address) from e

        return to_result(query, response, match_mode or self.match_mode)

    def check(self, address: str, settings: Settings) -> ReputationResult:
        """
        Look up ``address`` using the backend and timeouts from ``settings``.

        Raises:
            ConfigurationError: If no backend URL is configured
            QueryError: If the lookup fails
        """
        return self.query(build_query(address, settings), settings.api.match_mode)
