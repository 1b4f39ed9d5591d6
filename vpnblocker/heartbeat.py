"""
Heartbeat reporter.

Periodically POSTs a usage snapshot to ``{base-url}/ping``. Delivery is best
effort: a failed heartbeat is dropped and, with ``logging.debug`` on, logged.
"""

import logging
import threading
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from vpnblocker.config import ConfigStore, Settings
from vpnblocker.exceptions import DeliveryError, TransportError
from vpnblocker.logging import get_logger
from vpnblocker.types.heartbeat import HeartbeatSnapshot

if TYPE_CHECKING:
    from vpnblocker.host import HostRuntime
    from vpnblocker.transport import HTTPTransport


class HeartbeatReporter:
    """
    Builds and delivers heartbeats, on demand or from a background thread.

    Example:
        ```python
        reporter = HeartbeatReporter(transport, host)
        reporter.start(store)   # first ping goes out immediately
        ...
        reporter.stop()
        ```
    """

    def __init__(
        self,
        transport: "HTTPTransport",
        host: "HostRuntime",
        logger: logging.Logger | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Initialize the reporter.

        Args:
            transport: HTTP transport used for the POST
            host: Host runtime supplying name, version and player counts
            logger: Logger for diagnostics (default: vpnblocker.heartbeat)
            clock: Returns the current time in seconds since the epoch
        """
        self.transport = transport
        self.host = host
        self.logger = logger or get_logger("heartbeat")
        self.clock = clock
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        thread = self._thread
        return thread is not None and thread.is_alive()

    def build_snapshot(self, settings: Settings) -> HeartbeatSnapshot:
        """Capture the current usage figures."""
        server_id = settings.stats.server_id.strip() or self.host.name
        return HeartbeatSnapshot(
            server_id=server_id,
            timestamp=max(0, int(self.clock() * 1000)),
            online_players=self.host.online_count(),
            max_players=self.host.max_players(),
            version=self.host.version,
        )

    def send(self, settings: Settings) -> int | None:
        """
        Deliver one heartbeat.

        Returns:
            The response status code, or None if reporting is disabled or
            no backend URL is configured

        Raises:
            DeliveryError: If the POST fails or the backend answers non-2xx
        """
        if not settings.stats.enabled or not settings.api.configured:
            return None

        snapshot = self.build_snapshot(settings)
        body = snapshot.to_json()
        url = f"{settings.api.base_url.strip().rstrip('/')}/ping"

        try:
            response = self.transport.request(
                "POST",
                url,
                connect_timeout_ms=settings.api.connect_timeout_ms,
                read_timeout_ms=settings.api.read_timeout_ms,
                content=body,
                headers={
                    "Content-Type": "application/json",
                    "Content-Length": str(len(body)),
                },
            )
        except TransportError as e:
            raise DeliveryError(e.code, e.message) from e

        if not response.is_success:
            raise DeliveryError(
                f"HTTP_{response.status_code}",
                f"Backend answered {response.status_code}",
                status_code=response.status_code,
            )

        if settings.logging.debug:
            self.logger.info(
                "Stats ping sent (%d) for %s", response.status_code, snapshot.server_id
            )
        return response.status_code

    def tick(self, settings: Settings) -> None:
        """Deliver one heartbeat, dropping any failure. Never raises."""
        try:
            self.send(settings)
        except DeliveryError as e:
            if settings.logging.debug:
                self.logger.warning("Stats ping failed: %s", e.message)
        except Exception as e:
            # Host callbacks are outside our control
            if settings.logging.debug:
                self.logger.warning("Stats ping failed: %s", e, exc_info=True)

    def start(self, store: ConfigStore) -> bool:
        """
        Start the background timer.

        The first heartbeat is sent immediately, then every
        ``stats.interval-seconds`` (re-read from the store each cycle).

        Returns:
            True if a timer thread was started
        """
        with self._lock:
            if self.running:
                return False
            if not store.current.stats.enabled:
                return False

            self._stop.clear()
            self._thread = threading.Thread(
                target=self._run,
                args=(store,),
                name="vpnblocker-heartbeat",
                daemon=True,
            )
            self._thread.start()
            return True

    def stop(self, timeout: float | None = None) -> None:
        """Stop the background timer and wait for it to exit."""
        with self._lock:
            thread = self._thread
            self._stop.set()
            self._thread = None

        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

    def _run(self, store: ConfigStore) -> None:
        while not self._stop.is_set():
            self.tick(store.current)
            if self._stop.wait(store.current.stats.effective_interval):
                break
