"""
VPNBlocker logging utilities.

Everything logs under the ``vpnblocker`` logger. Backend traffic goes to
``vpnblocker.http`` at DEBUG, so it can be switched on without making the
admission and heartbeat lines noisier. Response bodies are truncated before
they reach a log line.
"""

import logging

_root_logger = logging.getLogger("vpnblocker")
_http_logger = logging.getLogger("vpnblocker.http")

_BODY_PREVIEW_LENGTH = 200
_DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Handler installed by the last configure_logging() call
_installed_handler: logging.Handler | None = None


def configure_logging(
    level: int = logging.INFO,
    http_level: int | None = None,
    handler: logging.Handler | None = None,
    format_string: str | None = None,
) -> None:
    """
    Attach a handler to the package logger and set levels.

    Calling this again replaces the handler from the previous call instead of
    stacking a second one.

    Args:
        level: Level of the ``vpnblocker`` logger
        http_level: Level of ``vpnblocker.http`` (default: ``level``).
            Pass ``logging.DEBUG`` to see every backend call.
        handler: Where records go (default: stderr)
        format_string: Record format (default: time, logger, level, message)

    Example:
        ```python
        import logging
        from vpnblocker.logging import configure_logging

        configure_logging(http_level=logging.DEBUG)
        configure_logging(handler=logging.FileHandler("vpnblocker.log"))
        ```
    """
    global _installed_handler

    handler = handler or logging.StreamHandler()
    handler.setFormatter(logging.Formatter(format_string or _DEFAULT_FORMAT))

    if _installed_handler is not None:
        _root_logger.removeHandler(_installed_handler)
    _root_logger.addHandler(handler)
    _installed_handler = handler

    _root_logger.setLevel(level)
    _http_logger.setLevel(level if http_level is None else http_level)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``vpnblocker.<name>``, or the package logger when name is None."""
    if name is None:
        return _root_logger
    return _root_logger.getChild(name)


def truncate_body(body: str, limit: int = _BODY_PREVIEW_LENGTH) -> str:
    """
    Shorten a response body for logging.

    Bodies up to ``limit`` characters come back unchanged; longer ones keep
    their first ``limit`` characters followed by ``...[N more chars]``.
    """
    if len(body) <= limit:
        return body
    return f"{body[:limit]}...[{len(body) - limit} more chars]"


def log_http_request(
    method: str,
    url: str,
    headers: dict[str, str] | None = None,
    content_length: int | None = None,
) -> None:
    """Log an outgoing request on ``vpnblocker.http``."""
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    parts = [f"{method} {url}"]
    if headers:
        parts.append(f"headers={headers}")
    if content_length:
        parts.append(f"bytes={content_length}")
    _http_logger.debug(" | ".join(parts))


def log_http_response(
    status_code: int,
    url: str,
    body: str | None = None,
    elapsed_ms: float | None = None,
) -> None:
    """Log a response on ``vpnblocker.http`` with the body truncated."""
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    parts = [f"Response {status_code} from {url}"]
    if elapsed_ms is not None:
        parts.append(f"elapsed={elapsed_ms:.2f}ms")
    if body:
        parts.append(f"body={truncate_body(body)}")
    _http_logger.debug(" | ".join(parts))


__all__ = [
    "configure_logging",
    "get_logger",
    "truncate_body",
    "log_http_request",
    "log_http_response",
]
