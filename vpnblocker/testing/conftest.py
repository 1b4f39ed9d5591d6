"""
Pytest plugin for VPNBlocker testing fixtures.

This module re-exports all fixtures from fixtures.py so they can be
automatically discovered by pytest when this package is installed.

To use these fixtures in your tests, add this to your conftest.py:

    pytest_plugins = ["vpnblocker.testing.conftest"]

Or import the fixtures directly:

    from vpnblocker.testing.fixtures import stub_reputation, fake_host
"""

# Re-export all fixtures for pytest auto-discovery
from vpnblocker.testing.fixtures import (
    async_stub_reputation,
    backend_transport,
    configured_settings,
    fake_backend,
    fake_host,
    guest,
    operator,
    stub_reputation,
    unconfigured_settings,
)

__all__ = [
    "stub_reputation",
    "async_stub_reputation",
    "fake_host",
    "operator",
    "guest",
    "configured_settings",
    "unconfigured_settings",
    "fake_backend",
    "backend_transport",
]
