"""Reputation lookup data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ReputationQuery:
    """One outbound lookup."""

    base_url: str
    address: str
    connect_timeout_ms: int = 5000
    read_timeout_ms: int = 5000

    @property
    def url(self) -> str:
        return f"{self.base_url.rstrip('/')}/check/{self.address}"


@dataclass(frozen=True)
class ReputationResult:
    """Outcome of a lookup."""

    address: str
    is_flagged: bool
    raw_body: str  # Kept for diagnostics
    status_code: int = 200
