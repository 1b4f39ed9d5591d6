"""VPNBlocker type definitions.

This module exports all data model types used by the package.
"""

from vpnblocker.types.admission import AdmissionDecision, ConnectionAttempt, Outcome
from vpnblocker.types.heartbeat import HeartbeatSnapshot
from vpnblocker.types.reputation import ReputationQuery, ReputationResult

__all__ = [
    # Admission types
    "ConnectionAttempt",
    "AdmissionDecision",
    "Outcome",
    # Reputation types
    "ReputationQuery",
    "ReputationResult",
    # Heartbeat types
    "HeartbeatSnapshot",
]
