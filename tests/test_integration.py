"""
Integration tests for VPNBlocker.

These tests run against a live reputation backend and verify the lookup and
heartbeat paths end to end.
"""

import os

import pytest

from vpnblocker.admission import AdmissionController
from vpnblocker.clients.reputation import ReputationClient
from vpnblocker.config import Settings
from vpnblocker.heartbeat import HeartbeatReporter
from vpnblocker.testing import FakeHost
from vpnblocker.transport import HTTPTransport
from vpnblocker.types.admission import ConnectionAttempt


# Skip all integration tests if backend is not available
pytestmark = pytest.mark.skipif(
    os.environ.get("VPNBLOCKER_INTEGRATION_TESTS") != "1",
    reason="Integration tests require VPNBLOCKER_INTEGRATION_TESTS=1 and a running backend",
)


def get_settings() -> Settings:
    """Settings pointing at the backend under test."""
    base_url = os.environ.get("VPNBLOCKER_BASE_URL", "http://localhost:3000")
    return Settings.from_mapping({"api": {"base-url": base_url}})


@pytest.fixture
def transport():
    with HTTPTransport() as instance:
        yield instance


class TestReputationLookup:
    def test_loopback_is_not_flagged(self, transport: HTTPTransport) -> None:
        result = ReputationClient(transport).check("127.0.0.1", get_settings())

        assert result.status_code == 200
        assert result.is_flagged is False

    def test_admission_round_trip(self, transport: HTTPTransport) -> None:
        controller = AdmissionController(ReputationClient(transport))

        decision = controller.decide(
            ConnectionAttempt(name="integration", address="127.0.0.1"), get_settings()
        )

        assert decision.allowed
        assert decision.reason == "clean"


class TestHeartbeat:
    def test_ping_accepted(self, transport: HTTPTransport) -> None:
        reporter = HeartbeatReporter(transport, FakeHost(name="integration-test"))

        assert reporter.send(get_settings()) == 200
