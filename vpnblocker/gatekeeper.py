"""
VPNBlocker context object.

Constructed once when the host starts and passed to whatever needs it. Owns
the HTTP transport, the reputation client, the admission controller, the
heartbeat reporter and the worker pool that keeps lookups off the host's
main processing path.
"""

import logging
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Any, TypeVar

from vpnblocker.admission import AdmissionController
from vpnblocker.clients.reputation import ReputationClient
from vpnblocker.config import ConfigStore, Settings, write_default
from vpnblocker.heartbeat import HeartbeatReporter
from vpnblocker.host import HostRuntime
from vpnblocker.logging import get_logger
from vpnblocker.transport import HTTPTransport
from vpnblocker.types.admission import AdmissionDecision, ConnectionAttempt

T = TypeVar("T")


class VPNBlocker:
    """
    Connection-admission gatekeeper.

    Example:
        ```python
        from vpnblocker import ConnectionAttempt, VPNBlocker

        blocker = VPNBlocker.from_config_file(host, "plugins/VPNBlocker/config.yml")
        blocker.enable()

        # From the host's pre-login hook
        future = blocker.submit_attempt(ConnectionAttempt(name="Steve", address=ip))
        decision = future.result()
        if not decision.allowed:
            event.disallow(decision.message)

        # On shutdown
        blocker.disable()
        ```
    """

    DEFAULT_MAX_WORKERS = 8

    def __init__(
        self,
        host: HostRuntime,
        store: ConfigStore | None = None,
        transport: HTTPTransport | None = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
        logger: logging.Logger | None = None,
    ) -> None:
        """
        Initialize the gatekeeper.

        Args:
            host: Host runtime supplying server name, version and player data
            store: Configuration holder (default: built-in defaults plus environment)
            transport: HTTP transport shared by lookups and heartbeats
            max_workers: Maximum number of lookups in flight at once
            logger: Package logger (default: vpnblocker)
        """
        self.host = host
        self.store = store or ConfigStore()
        self.logger = logger or get_logger()

        self._transport = transport or HTTPTransport()
        self.reputation = ReputationClient(
            self._transport, match_mode=self.store.current.api.match_mode
        )
        self.admission = AdmissionController(self.reputation)
        self.heartbeat = HeartbeatReporter(self._transport, host)

        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="vpnblocker-check"
        )
        self._enabled = False
        self._closed = False

    @classmethod
    def from_config_file(
        cls,
        host: HostRuntime,
        path: str | Path,
        **kwargs: Any,
    ) -> "VPNBlocker":
        """
        Create a gatekeeper backed by a YAML file.

        The default configuration is written first if the file is missing.

        Raises:
            ConfigurationError: If the file exists but cannot be loaded
        """
        write_default(path)
        return cls(host, store=ConfigStore(path=path), **kwargs)

    @property
    def transport(self) -> HTTPTransport:
        """Get the underlying HTTP transport."""
        return self._transport

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def settings(self) -> Settings:
        """The current configuration snapshot."""
        return self.store.current

    def enable(self) -> None:
        """
        Start the heartbeat timer.

        Raises:
            RuntimeError: If the gatekeeper was already disabled; its HTTP
                client and worker pool are gone, so build a new instance
        """
        if self._closed:
            raise RuntimeError("VPNBlocker cannot be re-enabled after disable()")
        if self._enabled:
            return
        self.heartbeat.start(self.store)
        self._enabled = True
        self.logger.info("VPNBlocker enabled")

    def disable(self) -> None:
        """
        Stop the heartbeat, let in-flight lookups finish and release the
        HTTP client.
        """
        self.heartbeat.stop()
        self._executor.shutdown(wait=True)
        self._transport.close()
        self._closed = True
        if self._enabled:
            self._enabled = False
            self.logger.info("VPNBlocker disabled")

    def reload(self) -> Settings:
        """
        Reload configuration. Later operations see the new snapshot.

        Raises:
            ConfigurationError: If loading fails; the old snapshot stays active
        """
        return self.store.reload()

    def handle_attempt(self, attempt: ConnectionAttempt) -> AdmissionDecision:
        """
        Decide one connection attempt on the calling thread.

        Hosts that already deliver attempts off their main loop call this
        directly. Always returns a decision.
        """
        settings = self.store.current
        try:
            return self.admission.decide(attempt, settings)
        except Exception:
            self.logger.exception("Admission check crashed for %s", attempt.name)
            return AdmissionDecision.allow("internal-error")

    def submit_attempt(self, attempt: ConnectionAttempt) -> "Future[AdmissionDecision]":
        """Decide one connection attempt on the worker pool."""
        return self._executor.submit(self.handle_attempt, attempt)

    def run_async(self, fn: Callable[..., T], *args: Any) -> "Future[T]":
        """Run ``fn`` on the worker pool (used by operator commands)."""
        return self._executor.submit(fn, *args)

    def __enter__(self) -> "VPNBlocker":
        """Context manager entry - enables the gatekeeper."""
        self.enable()
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit - disables the gatekeeper."""
        self.disable()
