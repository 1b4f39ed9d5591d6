"""VPNBlocker backend clients."""

from vpnblocker.clients.reputation import ReputationClient

__all__ = [
    "ReputationClient",
]
