"""
VPNBlocker configuration.

A ``Settings`` object is an immutable snapshot of every tunable. The
``ConfigStore`` holds the current snapshot and swaps it atomically on reload,
so each operation reads one consistent snapshot.

Example:
    ```python
    from vpnblocker.config import ConfigStore

    store = ConfigStore(path="plugins/VPNBlocker/config.yml")
    settings = store.current
    print(settings.api.base_url, settings.checks.enabled)

    # After editing the file
    store.reload()
    ```
"""

import os
import threading
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from vpnblocker.exceptions import ConfigurationError

MATCH_MODES = ("json", "substring")

DEFAULT_INTERVAL_SECONDS = 60

DEFAULT_CONFIG_YAML = """\
# VPNBlocker configuration

api:
  # Root URL of the reputation backend. Leave empty to disable all checks.
  base-url: ""
  connect-timeout-ms: 5000
  read-timeout-ms: 5000
  # "json" reads the isVPN field; "substring" matches the raw "isVPN":true text
  match-mode: "json"

checks:
  on-prelogin: true
  # Reject players when the backend cannot be reached
  kick-on-error: false

kick:
  enabled: true
  message:
    - "&cVPNs and proxies are not allowed on this server."
    - "&7Please disable your VPN and try again."
  error-message:
    - "&cCould not verify your connection."
    - "&7Please try again later."

stats:
  enabled: true
  interval-seconds: 60
  # Defaults to the server name
  server-id: ""

logging:
  debug: false
"""


@dataclass(frozen=True)
class ApiConfig:
    """Backend location and HTTP timeouts."""

    base_url: str = ""
    connect_timeout_ms: int = 5000
    read_timeout_ms: int = 5000
    match_mode: str = "json"

    @property
    def configured(self) -> bool:
        """Whether a backend URL is set."""
        return bool(self.base_url.strip())


@dataclass(frozen=True)
class ChecksConfig:
    """Admission check switches."""

    on_prelogin: bool | None = None
    on_join: bool = True
    kick_on_error: bool = False

    @property
    def enabled(self) -> bool:
        """on-prelogin wins when set, otherwise on-join decides."""
        if self.on_prelogin is not None:
            return self.on_prelogin
        return self.on_join


@dataclass(frozen=True)
class KickConfig:
    """Rejection switch and messages."""

    enabled: bool = True
    message: tuple[str, ...] = ()
    error_message: tuple[str, ...] = ()


@dataclass(frozen=True)
class StatsConfig:
    """Heartbeat reporting."""

    enabled: bool = True
    interval_seconds: int = DEFAULT_INTERVAL_SECONDS
    server_id: str = ""

    @property
    def effective_interval(self) -> int:
        if self.interval_seconds <= 0:
            return DEFAULT_INTERVAL_SECONDS
        return self.interval_seconds


@dataclass(frozen=True)
class LoggingConfig:
    debug: bool = False


@dataclass(frozen=True)
class Settings:
    """Effective configuration snapshot."""

    api: ApiConfig = field(default_factory=ApiConfig)
    checks: ChecksConfig = field(default_factory=ChecksConfig)
    kick: KickConfig = field(default_factory=KickConfig)
    stats: StatsConfig = field(default_factory=StatsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_mapping(cls, data: dict[str, Any] | None) -> "Settings":
        """
        Build settings from a nested mapping as produced by ``yaml.safe_load``.

        Unknown keys are ignored. Missing keys take their defaults.

        Args:
            data: Mapping with ``api``, ``checks``, ``kick``, ``stats`` and
                ``logging`` sections (all optional)

        Returns:
            Settings instance

        Raises:
            ConfigurationError: If a section or value has the wrong type
        """
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError("Configuration root must be a mapping")

        api = _section(data, "api")
        checks = _section(data, "checks")
        kick = _section(data, "kick")
        stats = _section(data, "stats")
        log = _section(data, "logging")

        match_mode = _get_str(api, "api", "match-mode", "json").lower()
        if match_mode not in MATCH_MODES:
            raise ConfigurationError(
                f"Invalid api.match-mode: {match_mode}. Must be 'json' or 'substring'"
            )

        on_prelogin = None
        if "on-prelogin" in checks:
            on_prelogin = _get_bool(checks, "checks", "on-prelogin", True)

        return cls(
            api=ApiConfig(
                base_url=_get_str(api, "api", "base-url", ""),
                connect_timeout_ms=_get_timeout_ms(api, "connect-timeout-ms"),
                read_timeout_ms=_get_timeout_ms(api, "read-timeout-ms"),
                match_mode=match_mode,
            ),
            checks=ChecksConfig(
                on_prelogin=on_prelogin,
                on_join=_get_bool(checks, "checks", "on-join", True),
                kick_on_error=_get_bool(checks, "checks", "kick-on-error", False),
            ),
            kick=KickConfig(
                enabled=_get_bool(kick, "kick", "enabled", True),
                message=_get_lines(kick, "kick", "message"),
                error_message=_get_lines(kick, "kick", "error-message"),
            ),
            stats=StatsConfig(
                enabled=_get_bool(stats, "stats", "enabled", True),
                interval_seconds=_get_int(
                    stats, "stats", "interval-seconds", DEFAULT_INTERVAL_SECONDS
                ),
                server_id=_get_str(stats, "stats", "server-id", ""),
            ),
            logging=LoggingConfig(
                debug=_get_bool(log, "logging", "debug", False),
            ),
        )

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """
        Load settings from a YAML file.

        A missing file yields the defaults.

        Raises:
            ConfigurationError: If the file cannot be read or parsed
        """
        path = Path(path)
        if not path.exists():
            return cls()

        try:
            with path.open("r", encoding="utf-8") as fh:
                data = yaml.safe_load(fh)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Could not load {path}: {e}") from e

        return cls.from_mapping(data)

    @classmethod
    def from_env(cls, base: "Settings | None" = None) -> "Settings":
        """
        Apply environment overrides on top of ``base``.

        Environment variables:
            VPNBLOCKER_BASE_URL: Overrides api.base-url
            VPNBLOCKER_SERVER_ID: Overrides stats.server-id
            VPNBLOCKER_DEBUG: "1"/"true"/"yes" enables logging.debug
        """
        settings = base or cls()

        base_url = os.environ.get("VPNBLOCKER_BASE_URL")
        if base_url is not None:
            settings = replace(settings, api=replace(settings.api, base_url=base_url))

        server_id = os.environ.get("VPNBLOCKER_SERVER_ID")
        if server_id is not None:
            settings = replace(
                settings, stats=replace(settings.stats, server_id=server_id)
            )

        debug = os.environ.get("VPNBLOCKER_DEBUG")
        if debug is not None:
            settings = replace(
                settings,
                logging=LoggingConfig(debug=debug.strip().lower() in ("1", "true", "yes")),
            )

        return settings


class ConfigStore:
    """
    Thread-safe holder of the current ``Settings`` snapshot.

    Readers take ``current`` once per operation; ``reload()`` and
    ``replace()`` swap the whole snapshot so no reader sees a partial update.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        path: str | Path | None = None,
        use_env: bool = True,
    ) -> None:
        """
        Initialize the store.

        Args:
            settings: Initial snapshot used when no path is given
            path: YAML file to load now and on every reload
            use_env: Whether VPNBLOCKER_* environment overrides apply
        """
        self.path = Path(path) if path is not None else None
        self.use_env = use_env
        self._base = settings or Settings()
        self._lock = threading.Lock()
        self._current = self._load()

    @property
    def current(self) -> Settings:
        with self._lock:
            return self._current

    def reload(self) -> Settings:
        """
        Re-read the configuration source and swap in the new snapshot.

        On failure the previous snapshot stays active.

        Raises:
            ConfigurationError: If the file cannot be loaded
        """
        settings = self._load()
        with self._lock:
            self._current = settings
        return settings

    def replace(self, settings: Settings) -> None:
        """Swap in an explicit snapshot."""
        with self._lock:
            self._current = settings

    def _load(self) -> Settings:
        settings = Settings.from_yaml(self.path) if self.path is not None else self._base
        if self.use_env:
            settings = Settings.from_env(settings)
        return settings


def write_default(path: str | Path) -> bool:
    """
    Write the default configuration file if it does not exist yet.

    Returns:
        True if the file was created
    """
    path = Path(path)
    if path.exists():
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(DEFAULT_CONFIG_YAML, encoding="utf-8")
    return True


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    value = data.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigurationError(f"Section '{name}' must be a mapping")
    return value


def _get_str(section: dict[str, Any], prefix: str, key: str, default: str) -> str:
    value = section.get(key)
    if value is None:
        return default
    if not isinstance(value, (str, int, float)) or isinstance(value, bool):
        raise ConfigurationError(f"{prefix}.{key} must be a string")
    return str(value)


def _get_int(section: dict[str, Any], prefix: str, key: str, default: int) -> int:
    value = section.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{prefix}.{key} must be an integer")
    return value


def _get_timeout_ms(section: dict[str, Any], key: str) -> int:
    value = _get_int(section, "api", key, 5000)
    if value <= 0:
        raise ConfigurationError(f"api.{key} must be a positive number of milliseconds")
    return value


def _get_bool(section: dict[str, Any], prefix: str, key: str, default: bool) -> bool:
    value = section.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ConfigurationError(f"{prefix}.{key} must be true or false")
    return value


def _get_lines(section: dict[str, Any], prefix: str, key: str) -> tuple[str, ...]:
    value = section.get(key)
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(value.splitlines())
    if isinstance(value, list):
        return tuple(str(line) for line in value if line is not None)
    raise ConfigurationError(f"{prefix}.{key} must be a string or a list of strings")
