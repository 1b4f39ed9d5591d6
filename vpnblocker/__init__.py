"""VPNBlocker - connection-admission gatekeeper backed by a VPN reputation service."""

from vpnblocker.admission import AdmissionController, AsyncAdmissionController
from vpnblocker.async_clients import AsyncReputationClient
from vpnblocker.async_transport import AsyncHTTPTransport
from vpnblocker.clients import ReputationClient
from vpnblocker.commands import CommandHandler
from vpnblocker.config import ConfigStore, Settings
from vpnblocker.exceptions import (
    ConfigurationError,
    DeliveryError,
    QueryError,
    TransportError,
    UnresolvedAddressError,
    VPNBlockerError,
)
from vpnblocker.gatekeeper import VPNBlocker
from vpnblocker.heartbeat import HeartbeatReporter
from vpnblocker.logging import configure_logging, get_logger
from vpnblocker.transport import HTTPTransport
from vpnblocker.types import (
    AdmissionDecision,
    ConnectionAttempt,
    HeartbeatSnapshot,
    Outcome,
    ReputationQuery,
    ReputationResult,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Context object
    "VPNBlocker",
    # Core
    "AdmissionController",
    "AsyncAdmissionController",
    "ReputationClient",
    "AsyncReputationClient",
    "HeartbeatReporter",
    "CommandHandler",
    # Configuration
    "Settings",
    "ConfigStore",
    # Types
    "ConnectionAttempt",
    "AdmissionDecision",
    "Outcome",
    "ReputationQuery",
    "ReputationResult",
    "HeartbeatSnapshot",
    # Exceptions
    "VPNBlockerError",
    "ConfigurationError",
    "TransportError",
    "QueryError",
    "UnresolvedAddressError",
    "DeliveryError",
    # Transport
    "HTTPTransport",
    "AsyncHTTPTransport",
    # Logging
    "configure_logging",
    "get_logger",
]
