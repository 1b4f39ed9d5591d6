"""
Pytest fixtures for VPNBlocker testing.

Provides common fixtures for testing admission logic, heartbeats and
operator commands without a live backend or game server.
"""

from collections.abc import Generator
from typing import Any

import httpx
import pytest

from vpnblocker.config import Settings
from vpnblocker.testing.mock import (
    AsyncStubReputationClient,
    FakeBackend,
    FakeHost,
    RecordingSender,
    StubReputationClient,
)
from vpnblocker.transport import HTTPTransport

TEST_BASE_URL = "http://reputation.test"


def create_settings(**sections: dict[str, Any]) -> Settings:
    """
    Build Settings from YAML-style sections, with a backend URL preset.

    Example:
        ```python
        settings = create_settings(checks={"kick-on-error": True})
        ```
    """
    data: dict[str, Any] = {"api": {"base-url": TEST_BASE_URL}}
    for name, values in sections.items():
        data.setdefault(name, {}).update(values)
    return Settings.from_mapping(data)


# ============================================================================
# Stub Fixtures
# ============================================================================


@pytest.fixture
def stub_reputation() -> Generator[StubReputationClient, None, None]:
    """
    Provide a StubReputationClient.

    Example:
        ```python
        def test_flagged(stub_reputation, configured_settings):
            stub_reputation.configure("203.0.113.7", flagged=True)
            controller = AdmissionController(stub_reputation)
        ```
    """
    stub = StubReputationClient()
    yield stub
    stub.reset()


@pytest.fixture
def async_stub_reputation() -> AsyncStubReputationClient:
    """Provide an AsyncStubReputationClient."""
    return AsyncStubReputationClient()


@pytest.fixture
def fake_host() -> FakeHost:
    """Provide a FakeHost with two online players."""
    return FakeHost(players={"Alex": "198.51.100.20", "Steve": "203.0.113.7"})


@pytest.fixture
def operator() -> RecordingSender:
    """Provide a sender holding every VPNBlocker permission."""
    return RecordingSender(permissions={"vpnblocker.reload", "vpnblocker.check"})


@pytest.fixture
def guest() -> RecordingSender:
    """Provide a sender without permissions."""
    return RecordingSender()


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture
def configured_settings() -> Settings:
    """Provide default settings pointing at the test backend."""
    return create_settings()


@pytest.fixture
def unconfigured_settings() -> Settings:
    """Provide default settings with no backend URL."""
    return Settings()


# ============================================================================
# HTTP Fixtures
# ============================================================================


@pytest.fixture
def fake_backend() -> FakeBackend:
    """Provide a FakeBackend that flags 203.0.113.7."""
    return FakeBackend(flagged={"203.0.113.7"})


@pytest.fixture
def backend_transport(fake_backend: FakeBackend) -> Generator[HTTPTransport, None, None]:
    """Provide an HTTPTransport wired to ``fake_backend``."""
    transport = HTTPTransport(transport=httpx.MockTransport(fake_backend.handle))
    yield transport
    transport.close()
