"""Heartbeat data models."""

import json
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class HeartbeatSnapshot:
    """A point-in-time usage report."""

    server_id: str
    timestamp: int  # Milliseconds since the epoch
    online_players: int
    max_players: int
    version: str

    def to_payload(self) -> dict[str, Any]:
        """Return the flat camelCase object the backend expects."""
        return {
            "serverId": self.server_id,
            "timestamp": self.timestamp,
            "onlinePlayers": self.online_players,
            "maxPlayers": self.max_players,
            "version": self.version,
        }

    def to_json(self) -> bytes:
        """Serialize the payload as compact UTF-8 JSON."""
        return json.dumps(
            self.to_payload(), separators=(",", ":"), ensure_ascii=False
        ).encode("utf-8")
