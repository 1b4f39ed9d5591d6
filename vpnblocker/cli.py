"""Command-line access to the reputation check and the heartbeat."""

import logging
import sys
from argparse import ArgumentParser, Namespace

from vpnblocker.clients.reputation import ReputationClient
from vpnblocker.config import ConfigStore
from vpnblocker.exceptions import VPNBlockerError
from vpnblocker.heartbeat import HeartbeatReporter
from vpnblocker.host import StaticHost
from vpnblocker.logging import configure_logging
from vpnblocker.transport import HTTPTransport

EXIT_CLEAN = 0
EXIT_FLAGGED = 1
EXIT_FAILED = 2


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="vpnblocker",
        description="Query the VPN reputation backend outside the game server.",
    )
    parser.add_argument(
        "--config",
        default="config.yml",
        help="path to the VPNBlocker YAML configuration (default: config.yml)",
    )
    parser.add_argument(
        "--debug", action="store_true", help="log every backend call"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser("check", help="check whether an address is a VPN")
    check.add_argument("address")

    ping = subparsers.add_parser("ping", help="send one heartbeat")
    ping.add_argument("--server-id", default="", help="server name used when stats.server-id is unset")

    return parser


def run_check(args: Namespace, store: ConfigStore, transport: HTTPTransport) -> int:
    client = ReputationClient(transport)
    try:
        result = client.check(args.address, store.current)
    except VPNBlockerError as e:
        print(f"Check failed: {e.message}", file=sys.stderr)
        return EXIT_FAILED

    if result.is_flagged:
        print(f"{args.address}: VPN/PROXY DETECTED")
        return EXIT_FLAGGED
    print(f"{args.address}: Not a VPN")
    return EXIT_CLEAN


def run_ping(args: Namespace, store: ConfigStore, transport: HTTPTransport) -> int:
    reporter = HeartbeatReporter(transport, StaticHost(name=args.server_id or "console"))
    try:
        status = reporter.send(store.current)
    except VPNBlockerError as e:
        print(f"Stats ping failed: {e.message}", file=sys.stderr)
        return EXIT_FAILED

    if status is None:
        print("Stats reporting is disabled or api.base-url is not configured")
        return EXIT_FAILED
    print(f"Stats ping sent ({status})")
    return EXIT_CLEAN


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(
        level=logging.INFO,
        http_level=logging.DEBUG if args.debug else logging.WARNING,
    )

    try:
        store = ConfigStore(path=args.config)
    except VPNBlockerError as e:
        print(e.message, file=sys.stderr)
        return EXIT_FAILED

    with HTTPTransport() as transport:
        if args.command == "check":
            return run_check(args, store, transport)
        return run_ping(args, store, transport)
