"""Console-side models mirroring the gateway payloads."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class ConnectionSettings:
    host: str = "localhost"
    port: int = 6379
    password: str = ""
    database: int = 0

    def to_payload(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class PingEntry:
    id: int
    timestamp: str
    message: str

    @staticmethod
    def from_payload(payload: dict[str, Any]) -> "PingEntry":
        return PingEntry(
            id=int(payload["id"]),
            timestamp=str(payload["timestamp"]),
            message=str(payload["message"]),
        )
