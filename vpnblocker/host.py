"""
Host runtime boundary.

The game server embeds VPNBlocker and supplies these collaborators. The
package never reaches into the host beyond what is declared here.
"""

from dataclasses import dataclass
from typing import Protocol


class HostRuntime(Protocol):
    """The game server process that owns connections."""

    @property
    def name(self) -> str: ...

    @property
    def version(self) -> str: ...

    def online_count(self) -> int: ...

    def max_players(self) -> int: ...

    def find_player_address(self, name: str) -> tuple[str, str] | None:
        """Return (display name, address) of an online player, or None."""
        ...


class CommandSender(Protocol):
    """Whoever issued an operator command (console or player)."""

    def has_permission(self, node: str) -> bool: ...

    def send_message(self, text: str) -> None: ...


@dataclass
class StaticHost:
    """
    Host descriptor with fixed values.

    Used by the command-line tool, where no game server is running.
    """

    name: str = "console"
    version: str = "unknown"
    online: int = 0
    capacity: int = 0

    def online_count(self) -> int:
        return self.online

    def max_players(self) -> int:
        return self.capacity

    def find_player_address(self, name: str) -> tuple[str, str] | None:
        return None
