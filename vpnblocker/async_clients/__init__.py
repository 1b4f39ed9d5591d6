"""VPNBlocker async backend clients."""

from vpnblocker.async_clients.reputation import AsyncReputationClient

__all__ = [
    "AsyncReputationClient",
]
