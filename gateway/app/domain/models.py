"""Domain models."""
from __future__ import annotations

import json
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from gateway.app.constants import (
    DEFAULT_REDIS_DATABASE,
    DEFAULT_REDIS_HOST,
    DEFAULT_REDIS_PORT,
    PING_MESSAGE,
)


@dataclass(frozen=True)
class ConnectionSettings:
    """Resolved settings for one store connection (defaults already applied)."""

    host: str = DEFAULT_REDIS_HOST
    port: int = DEFAULT_REDIS_PORT
    password: str | None = None
    database: int = DEFAULT_REDIS_DATABASE

    @staticmethod
    def resolve(
        host: str | None = None,
        port: int | None = None,
        password: str | None = None,
        database: int | None = None,
    ) -> "ConnectionSettings":
        """Empty or zero values fall back to localhost:6379, no password, db 0."""
        return ConnectionSettings(
            host=host or DEFAULT_REDIS_HOST,
            port=port or DEFAULT_REDIS_PORT,
            password=password or None,
            database=database or DEFAULT_REDIS_DATABASE,
        )


@dataclass(frozen=True)
class PingRecord:
    """One timer tick written to the store."""

    id: int
    timestamp: str
    message: str = PING_MESSAGE

    @staticmethod
    def now() -> "PingRecord":
        created_ms = time.time_ns() // 1_000_000
        seconds, millis = divmod(created_ms, 1000)
        created_at = datetime.fromtimestamp(seconds, tz=timezone.utc).replace(microsecond=millis * 1000)
        return PingRecord(
            id=created_ms,
            timestamp=created_at.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        )

    def to_json(self) -> str:
        return json.dumps({"timestamp": self.timestamp, "message": self.message, "id": self.id})

    @staticmethod
    def from_json(raw: str) -> "PingRecord":
        payload: dict[str, Any] = json.loads(raw)
        return PingRecord(
            id=int(payload["id"]),
            timestamp=str(payload["timestamp"]),
            message=str(payload.get("message", PING_MESSAGE)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "timestamp": self.timestamp, "message": self.message}
