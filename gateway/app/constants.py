"""Gateway-level constants shared across modules."""
from __future__ import annotations

PING_ENTRIES_KEY = "ping_entries"
PING_MESSAGE = "ping"

NOT_CONNECTED_MESSAGE = "Not connected to Redis"

DEFAULT_REDIS_HOST = "localhost"
DEFAULT_REDIS_PORT = 6379
DEFAULT_REDIS_DATABASE = 0


class StoreBackend:
    REDIS = "redis"
    INMEMORY = "inmemory"
