"""
Tests for VPNBlocker logging utilities.

Feature: vpnblocker
"""

import io
import logging

from hypothesis import given, settings
from hypothesis import strategies as st

from vpnblocker.logging import (
    configure_logging,
    get_logger,
    log_http_request,
    log_http_response,
    truncate_body,
)


@given(body=st.text(max_size=1000), limit=st.integers(min_value=1, max_value=300))
@settings(max_examples=100)
def test_truncated_body_is_bounded(body: str, limit: int) -> None:
    """
    Property: Logged bodies are bounded

    A truncated body keeps at most ``limit`` characters of the original,
    plus a marker, and short bodies are unchanged.
    """
    result = truncate_body(body, limit)

    if len(body) <= limit:
        assert result == body
    else:
        assert result.startswith(body[:limit])
        assert result.endswith(f"...[{len(body) - limit} more chars]")


def test_get_logger_names() -> None:
    assert get_logger().name == "vpnblocker"
    assert get_logger("admission").name == "vpnblocker.admission"


def test_configure_logging_routes_http_debug() -> None:
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    configure_logging(level=logging.INFO, http_level=logging.DEBUG, handler=handler,
                      format_string="%(name)s %(message)s")
    try:
        log_http_request("GET", "http://reputation.test/check/1.2.3.4")
        log_http_response(200, "http://reputation.test/check/1.2.3.4",
                          body='{"isVPN":false}', elapsed_ms=12.5)
    finally:
        get_logger().removeHandler(handler)
        get_logger().setLevel(logging.NOTSET)
        get_logger("http").setLevel(logging.NOTSET)

    output = stream.getvalue()
    assert "vpnblocker.http GET http://reputation.test/check/1.2.3.4" in output
    assert "Response 200 from http://reputation.test/check/1.2.3.4 | elapsed=12.50ms" in output
    assert 'body={"isVPN":false}' in output


def test_http_logging_silent_above_debug() -> None:
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    configure_logging(level=logging.INFO, handler=handler)
    try:
        log_http_request("GET", "http://reputation.test/")
        log_http_response(500, "http://reputation.test/")
    finally:
        get_logger().removeHandler(handler)
        get_logger().setLevel(logging.NOTSET)
        get_logger("http").setLevel(logging.NOTSET)

    assert stream.getvalue() == ""


def test_configure_logging_replaces_previous_handler() -> None:
    first = logging.StreamHandler(io.StringIO())
    second = logging.StreamHandler(io.StringIO())
    try:
        configure_logging(handler=first)
        configure_logging(handler=second)

        handlers = get_logger().handlers
        assert second in handlers
        assert first not in handlers
    finally:
        get_logger().removeHandler(second)
        get_logger().setLevel(logging.NOTSET)
        get_logger("http").setLevel(logging.NOTSET)


def test_request_log_reports_body_size() -> None:
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    configure_logging(http_level=logging.DEBUG, handler=handler, format_string="%(message)s")
    try:
        log_http_request("POST", "http://reputation.test/ping",
                         headers={"Content-Type": "application/json"}, content_length=42)
    finally:
        get_logger().removeHandler(handler)
        get_logger().setLevel(logging.NOTSET)
        get_logger("http").setLevel(logging.NOTSET)

    assert stream.getvalue().strip() == (
        "POST http://reputation.test/ping | headers={'Content-Type': 'application/json'} | bytes=42"
    )
