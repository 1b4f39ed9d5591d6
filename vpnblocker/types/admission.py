"""Admission data models."""

from dataclasses import dataclass
from enum import Enum

from vpnblocker.exceptions import UnresolvedAddressError


class Outcome(str, Enum):
    """Result of an admission decision."""

    ALLOW = "allow"
    REJECT = "reject"


@dataclass(frozen=True)
class ConnectionAttempt:
    """One inbound connection request pushed in by the host runtime."""

    name: str
    address: str | None = None
    unique_id: str | None = None

    def require_address(self) -> str:
        """
        Return the resolved address.

        Raises:
            UnresolvedAddressError: If the host could not resolve one
        """
        if not self.address or not self.address.strip():
            raise UnresolvedAddressError(self.name)
        return self.address.strip()


@dataclass(frozen=True)
class AdmissionDecision:
    """The gatekeeper's verdict for one connection attempt."""

    outcome: Outcome
    reason: str
    message: str | None = None  # Only set when rejecting

    @property
    def allowed(self) -> bool:
        return self.outcome is Outcome.ALLOW

    @classmethod
    def allow(cls, reason: str) -> "AdmissionDecision":
        return cls(outcome=Outcome.ALLOW, reason=reason)

    @classmethod
    def reject(cls, reason: str, message: str) -> "AdmissionDecision":
        return cls(outcome=Outcome.REJECT, reason=reason, message=message)
