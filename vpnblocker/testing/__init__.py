"""VPNBlocker testing utilities.

Provides stub clients, fake hosts and fixtures for testing code that embeds
VPNBlocker.
"""

from vpnblocker.testing.fixtures import TEST_BASE_URL, create_settings
from vpnblocker.testing.mock import (
    AsyncStubReputationClient,
    FakeBackend,
    FakeHost,
    MockCall,
    RecordingSender,
    StubReputationClient,
    create_reputation_result,
)

__all__ = [
    # Stubs
    "StubReputationClient",
    "AsyncStubReputationClient",
    "MockCall",
    "FakeHost",
    "RecordingSender",
    "FakeBackend",
    # Helper functions
    "create_reputation_result",
    "create_settings",
    "TEST_BASE_URL",
]
