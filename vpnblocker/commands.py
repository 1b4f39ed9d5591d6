"""Operator command surface: ``/vpnblocker reload`` and ``/vpnblocker check``."""

from concurrent.futures import Future
from typing import TYPE_CHECKING

from vpnblocker.exceptions import VPNBlockerError
from vpnblocker.host import CommandSender
from vpnblocker.messages import colorize

if TYPE_CHECKING:
    from vpnblocker.gatekeeper import VPNBlocker

COMMAND_NAME = "vpnblocker"
RELOAD_PERMISSION = "vpnblocker.reload"
CHECK_PERMISSION = "vpnblocker.check"

NO_PERMISSION = "&cYou don't have permission to use this command."

HELP_LINES = (
    "&e=== VPNBlocker Commands ===",
    "&6/vpnblocker reload&7 - Reload configuration",
    "&6/vpnblocker check <player|ip>&7 - Check if a player or IP is a VPN",
)


class CommandHandler:
    """Dispatches the ``vpnblocker`` command."""

    def __init__(self, blocker: "VPNBlocker") -> None:
        self.blocker = blocker

    def handle(self, sender: CommandSender, args: list[str]) -> bool:
        """
        Run one command invocation.

        Args:
            sender: Who issued the command
            args: Arguments after the command name

        Returns:
            True once the command was handled (usage errors included)
        """
        if not args:
            self.send_help(sender)
            return True

        subcommand = args[0].lower()
        if subcommand == "reload":
            self.reload(sender)
        elif subcommand == "check":
            if not sender.has_permission(CHECK_PERMISSION):
                _reply(sender, NO_PERMISSION)
            elif len(args) < 2:
                _reply(sender, "&cUsage: /vpnblocker check <player|ip>")
            else:
                self.check(sender, args[1])
        else:
            self.send_help(sender)
        return True

    def send_help(self, sender: CommandSender) -> None:
        for line in HELP_LINES:
            _reply(sender, line)

    def reload(self, sender: CommandSender) -> bool:
        """Reload configuration. Returns True on success."""
        if not sender.has_permission(RELOAD_PERMISSION):
            _reply(sender, NO_PERMISSION)
            return False

        try:
            self.blocker.reload()
        except VPNBlockerError as e:
            _reply(sender, f"&cFailed to reload configuration: {e.message}")
            return False

        _reply(sender, "&aVPNBlocker configuration reloaded successfully.")
        return True

    def check(self, sender: CommandSender, target: str) -> "Future[bool | None]":
        """
        Look up an online player or a literal address on the worker pool.

        Returns:
            Future resolving to the verdict, or None if the lookup failed
        """
        return self.blocker.run_async(self._run_check, sender, target)

    def _run_check(self, sender: CommandSender, target: str) -> bool | None:
        player = self.blocker.host.find_player_address(target)
        if player is not None:
            name, address = player
            _reply(sender, f"&7Checking player: &f{name}")
        else:
            address = target
            _reply(sender, f"&7Checking IP: &f{address}")

        try:
            result = self.blocker.reputation.check(address, self.blocker.settings)
        except VPNBlockerError as e:
            _reply(sender, f"&cCheck failed: {e.message}")
            return None

        if result.is_flagged:
            _reply(sender, "&cResult: &4VPN/PROXY DETECTED")
        else:
            _reply(sender, "&aResult: &2Not a VPN")
        return result.is_flagged


def _reply(sender: CommandSender, text: str) -> None:
    sender.send_message(colorize(text))
