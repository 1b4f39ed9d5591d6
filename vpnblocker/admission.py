"""
Admission controller.

Maps one connection attempt to exactly one ``AdmissionDecision``. Every
failure path allows the connection unless the operator opted into
``checks.kick-on-error``.

Example:
    ```python
    from vpnblocker.admission import AdmissionController
    from vpnblocker.clients import ReputationClient
    from vpnblocker.transport import HTTPTransport
    from vpnblocker.types import ConnectionAttempt

    controller = AdmissionController(ReputationClient(HTTPTransport()))
    decision = controller.decide(
        ConnectionAttempt(name="Steve", address="203.0.113.7"),
        store.current,
    )
    if not decision.allowed:
        host.kick(decision.message)
    ```
"""

import logging
from typing import TYPE_CHECKING, Protocol

from vpnblocker.config import Settings
from vpnblocker.exceptions import UnresolvedAddressError, VPNBlockerError
from vpnblocker.logging import get_logger, truncate_body
from vpnblocker.messages import DEFAULT_ERROR_MESSAGE, DEFAULT_KICK_MESSAGE, format_message
from vpnblocker.types.admission import AdmissionDecision, ConnectionAttempt
from vpnblocker.types.reputation import ReputationResult

if TYPE_CHECKING:
    from vpnblocker.async_clients.reputation import AsyncReputationClient
    from vpnblocker.clients.reputation import ReputationClient


class ReputationLookup(Protocol):
    """Anything that can look up an address with the configured backend."""

    def check(self, address: str, settings: Settings) -> ReputationResult: ...


class _AdmissionPolicy:
    """Decision rules shared by the sync and async controllers."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or get_logger("admission")

    def _precheck(
        self, attempt: ConnectionAttempt, settings: Settings
    ) -> tuple[AdmissionDecision | None, str]:
        """
        Run the checks that need no network call.

        Returns:
            (decision, address) where decision is set if the attempt is
            settled without a lookup
        """
        if not settings.checks.enabled:
            return AdmissionDecision.allow("checks-disabled"), ""

        try:
            address = attempt.require_address()
        except UnresolvedAddressError as e:
            self.logger.warning(e.message)
            return AdmissionDecision.allow("unresolved-address"), ""

        if not settings.api.configured:
            self.logger.warning(
                "api.base-url is not configured. (Change this in config.yml)"
            )
            return AdmissionDecision.allow("not-configured"), address

        return None, address

    def _on_result(
        self, attempt: ConnectionAttempt, settings: Settings, result: ReputationResult
    ) -> AdmissionDecision:
        if settings.logging.debug:
            self.logger.debug(
                "VPN check for %s -> %s", attempt.name, truncate_body(result.raw_body)
            )

        if not result.is_flagged:
            return AdmissionDecision.allow("clean")

        if not settings.kick.enabled:
            return AdmissionDecision.allow("flagged-kick-disabled")

        return AdmissionDecision.reject(
            "flagged", format_message(settings.kick.message, DEFAULT_KICK_MESSAGE)
        )

    def _on_error(
        self, address: str, settings: Settings, error: VPNBlockerError
    ) -> AdmissionDecision:
        self.logger.warning("VPN check failed for IP: %s (%s)", address, error)

        if settings.checks.kick_on_error and settings.kick.enabled:
            return AdmissionDecision.reject(
                "query-failed",
                format_message(settings.kick.error_message, DEFAULT_ERROR_MESSAGE),
            )

        return AdmissionDecision.allow("query-failed")


class AdmissionController(_AdmissionPolicy):
    """Decides connection attempts with a blocking reputation lookup."""

    def __init__(
        self,
        reputation: "ReputationClient | ReputationLookup",
        logger: logging.Logger | None = None,
    ) -> None:
        """
        Initialize the controller.

        Args:
            reputation: Client used for the lookup
            logger: Logger for warnings and debug lines (default: vpnblocker.admission)
        """
        super().__init__(logger)
        self.reputation = reputation

    def decide(self, attempt: ConnectionAttempt, settings: Settings) -> AdmissionDecision:
        """
        Decide whether ``attempt`` may proceed.

        Must be called off the host's main processing path; the lookup blocks
        for at most the configured connect and read timeouts.

        Args:
            attempt: The connection attempt
            settings: Configuration snapshot read once for this attempt

        Returns:
            Exactly one AdmissionDecision
        """
        decision, address = self._precheck(attempt, settings)
        if decision is not None:
            return decision

        try:
            result = self.reputation.check(address, settings)
        except VPNBlockerError as e:
            return self._on_error(address, settings, e)

        return self._on_result(attempt, settings, result)


class AsyncAdmissionController(_AdmissionPolicy):
    """Decides connection attempts on an asyncio event loop."""

    def __init__(
        self,
        reputation: "AsyncReputationClient",
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(logger)
        self.reputation = reputation

    async def decide(
        self, attempt: ConnectionAttempt, settings: Settings
    ) -> AdmissionDecision:
        """Async counterpart of ``AdmissionController.decide``."""
        decision, address = self._precheck(attempt, settings)
        if decision is not None:
            return decision

        try:
            result = await self.reputation.check(address, settings)
        except VPNBlockerError as e:
            return self._on_error(address, settings, e)

        return self._on_result(attempt, settings, result)
