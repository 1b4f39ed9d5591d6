#!/usr/bin/env python3
"""
Basic VPNBlocker usage example.

Runs the gatekeeper against an in-process backend so no network or game
server is needed.
Run with: python examples/basic_usage.py
"""

import httpx

from vpnblocker import (
    CommandHandler,
    ConfigStore,
    ConfigurationError,
    ConnectionAttempt,
    HTTPTransport,
    Settings,
    VPNBlocker,
    VPNBlockerError,
)
from vpnblocker.testing import FakeBackend, FakeHost, RecordingSender

print("=== VPNBlocker Basic Usage Example ===\n")

# 1. Exception hierarchy
print("1. Testing exception classes...")
try:
    raise ConfigurationError("API base URL not configured")
except VPNBlockerError as e:
    print(f"   Caught VPNBlockerError: {e}")
    print(f"   Code: {e.code}, Message: {e.message}")

print("\n   OK: Exception classes working\n")

# 2. Wire up a gatekeeper against a fake backend
print("2. Building gatekeeper...")
backend = FakeBackend(flagged={"203.0.113.7"})
transport = HTTPTransport(transport=httpx.MockTransport(backend.handle))
host = FakeHost(name="lobby-1", players={"Steve": "203.0.113.7", "Alex": "198.51.100.20"})
settings = Settings.from_mapping(
    {
        "api": {"base-url": "http://reputation.test"},
        "stats": {"enabled": True, "interval-seconds": 30},
    }
)

with VPNBlocker(host, store=ConfigStore(settings, use_env=False), transport=transport) as blocker:
    print(f"   Enabled: {blocker.enabled}")
    print("\n   OK: Gatekeeper running\n")

    # 3. Admission decisions
    print("3. Deciding connection attempts...")
    for name, address in host.players.items():
        decision = blocker.submit_attempt(ConnectionAttempt(name=name, address=address)).result()
        print(f"   {name} ({address}): {decision.outcome.value} [{decision.reason}]")
        if decision.message:
            print(f"     kick message: {decision.message!r}")

    decision = blocker.handle_attempt(ConnectionAttempt(name="Ghost"))
    print(f"   Ghost (no address): {decision.outcome.value} [{decision.reason}]")

    print("\n   OK: Admission working\n")

    # 4. Operator command
    print("4. Running /vpnblocker check Steve...")
    operator = RecordingSender(permissions={"vpnblocker.check"})
    CommandHandler(blocker).check(operator, "Steve").result()
    for line in operator.plain_messages:
        print(f"   > {line}")

    print("\n   OK: Commands working\n")

    # 5. Heartbeat
    print("5. Sending a stats ping...")
    status = blocker.heartbeat.send(blocker.settings)
    print(f"   Status: {status}")
    print(f"   Payload: {backend.pings[-1]}")

    print("\n   OK: Heartbeat working\n")

print("=== All examples completed successfully! ===")
