"""
Tests for VPNBlocker testing utilities.

Verifies that the stubs and fixtures behave as documented.
"""

import asyncio

import pytest

from vpnblocker.exceptions import QueryError
from vpnblocker.testing import (
    AsyncStubReputationClient,
    FakeHost,
    RecordingSender,
    StubReputationClient,
    create_reputation_result,
    create_settings,
)


class TestStubReputationClient:
    def test_default_verdict(self, configured_settings) -> None:
        assert not StubReputationClient().check("1.2.3.4", configured_settings).is_flagged
        assert StubReputationClient(default_flagged=True).check("1.2.3.4", configured_settings).is_flagged

    def test_configured_verdict(self, stub_reputation: StubReputationClient, configured_settings) -> None:
        stub_reputation.configure("1.2.3.4", flagged=True)

        assert stub_reputation.check("1.2.3.4", configured_settings).is_flagged
        assert not stub_reputation.check("5.6.7.8", configured_settings).is_flagged

    def test_configured_error(self, stub_reputation: StubReputationClient, configured_settings) -> None:
        stub_reputation.configure_error(QueryError("TIMEOUT", "timed out"))

        with pytest.raises(QueryError) as exc_info:
            stub_reputation.check("1.2.3.4", configured_settings)

        assert exc_info.value.code == "TIMEOUT"

    def test_call_tracking_and_reset(self, stub_reputation: StubReputationClient, configured_settings) -> None:
        stub_reputation.check("1.2.3.4", configured_settings)
        stub_reputation.check("5.6.7.8", configured_settings)

        assert stub_reputation.call_count == 2
        assert stub_reputation.calls[1].args == ("5.6.7.8",)
        assert stub_reputation.calls[1].kwargs["settings"] is configured_settings

        stub_reputation.reset()
        assert stub_reputation.call_count == 0

    def test_async_stub(self, configured_settings) -> None:
        stub = AsyncStubReputationClient(default_flagged=True)

        result = asyncio.run(stub.check("1.2.3.4", configured_settings))

        assert result.is_flagged
        assert stub.call_count == 1


def test_fake_host(fake_host: FakeHost) -> None:
    assert fake_host.online_count() == 2
    assert fake_host.max_players() == 20
    assert fake_host.find_player_address("alex") == ("Alex", "198.51.100.20")
    assert fake_host.find_player_address("nobody") is None


def test_recording_sender() -> None:
    sender = RecordingSender(permissions={"a"})
    sender.send_message("§chello")

    assert sender.has_permission("a")
    assert not sender.has_permission("b")
    assert sender.plain_messages == ["hello"]


def test_create_reputation_result() -> None:
    result = create_reputation_result("198.51.100.4", flagged=True)

    assert result.is_flagged
    assert '"isVPN":true' in result.raw_body


def test_create_settings_merges_sections() -> None:
    config = create_settings(api={"read-timeout-ms": 10}, kick={"enabled": False})

    assert config.api.configured
    assert config.api.read_timeout_ms == 10
    assert not config.kick.enabled
