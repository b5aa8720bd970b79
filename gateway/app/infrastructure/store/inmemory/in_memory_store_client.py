"""In-memory store for local mode and demos.
Understands a small subset of Redis commands (strings and lists). Data lives in a
keyspace shared by every client the factory builds, so reconnecting keeps it.
"""
from __future__ import annotations

import fnmatch
from typing import Any

from gateway.app.core.errors import StoreCommandError
from gateway.app.domain.models import ConnectionSettings

# command -> (min args, max args or None for variadic)
_ARITY: dict[str, tuple[int, int | None]] = {
    "PING": (0, 1),
    "ECHO": (1, 1),
    "GET": (1, 1),
    "SET": (2, 2),
    "DEL": (1, None),
    "EXISTS": (1, None),
    "KEYS": (1, 1),
    "LPUSH": (2, None),
    "RPUSH": (2, None),
    "LRANGE": (3, 3),
    "LLEN": (1, 1),
    "DBSIZE": (0, 0),
    "FLUSHDB": (0, 0),
}

_WRONGTYPE = "WRONGTYPE Operation against a key holding the wrong kind of value"


class InMemoryKeyspace:
    """Numbered databases, each a plain dict of key -> str | list[str]."""

    def __init__(self) -> None:
        self._databases: dict[int, dict[str, Any]] = {}

    def database(self, index: int) -> dict[str, Any]:
        return self._databases.setdefault(index, {})


class InMemoryStoreClient:
    def __init__(self, connection: ConnectionSettings, keyspace: InMemoryKeyspace | None = None) -> None:
        self._connection = connection
        self._keyspace = keyspace or InMemoryKeyspace()
        self._data: dict[str, Any] | None = None

    @property
    def ready(self) -> bool:
        return self._data is not None

    def _db(self) -> dict[str, Any]:
        if self._data is None:
            raise StoreCommandError("Connection closed")
        return self._data

    async def connect(self) -> None:
        self._data = self._keyspace.database(self._connection.database)

    async def ping(self) -> Any:
        return await self.execute("PING")

    async def execute(self, command: str, *args: str) -> Any:
        name = command.upper()
        arity = _ARITY.get(name)
        if arity is None:
            raise StoreCommandError(f"ERR unknown command '{command}'")
        low, high = arity
        if len(args) < low or (high is not None and len(args) > high):
            raise StoreCommandError(f"ERR wrong number of arguments for '{command.lower()}' command")
        handler = getattr(self, f"_cmd_{name.lower()}")
        return handler(self._db(), *args)

    async def rpush(self, key: str, value: str) -> int:
        return await self.execute("RPUSH", key, value)

    async def lrange(self, key: str, start: int, stop: int) -> list[str]:
        return await self.execute("LRANGE", key, str(start), str(stop))

    async def delete(self, key: str) -> int:
        return await self.execute("DEL", key)

    async def close(self) -> None:
        self._data = None

    @staticmethod
    def _list_at(db: dict[str, Any], key: str, *, create: bool = False) -> list[str] | None:
        value = db.get(key)
        if value is None:
            if not create:
                return None
            value = db[key] = []
        if not isinstance(value, list):
            raise StoreCommandError(_WRONGTYPE)
        return value

    @staticmethod
    def _as_int(raw: str) -> int:
        try:
            return int(raw)
        except ValueError:
            raise StoreCommandError("ERR value is not an integer or out of range") from None

    def _cmd_ping(self, db: dict[str, Any], *args: str) -> str:
        return args[0] if args else "PONG"

    def _cmd_echo(self, db: dict[str, Any], message: str) -> str:
        return message

    def _cmd_get(self, db: dict[str, Any], key: str) -> str | None:
        value = db.get(key)
        if value is not None and not isinstance(value, str):
            raise StoreCommandError(_WRONGTYPE)
        return value

    def _cmd_set(self, db: dict[str, Any], key: str, value: str) -> str:
        db[key] = value
        return "OK"

    def _cmd_del(self, db: dict[str, Any], *keys: str) -> int:
        return sum(1 for key in keys if db.pop(key, None) is not None)

    def _cmd_exists(self, db: dict[str, Any], *keys: str) -> int:
        return sum(1 for key in keys if key in db)

    def _cmd_keys(self, db: dict[str, Any], pattern: str) -> list[str]:
        return [key for key in db if fnmatch.fnmatchcase(key, pattern)]

    def _cmd_lpush(self, db: dict[str, Any], key: str, *values: str) -> int:
        items = self._list_at(db, key, create=True)
        for value in values:
            items.insert(0, value)
        return len(items)

    def _cmd_rpush(self, db: dict[str, Any], key: str, *values: str) -> int:
        items = self._list_at(db, key, create=True)
        items.extend(values)
        return len(items)

    def _cmd_lrange(self, db: dict[str, Any], key: str, start: str, stop: str) -> list[str]:
        items = self._list_at(db, key) or []
        first, last = self._as_int(start), self._as_int(stop)
        size = len(items)
        if first < 0:
            first = max(size + first, 0)
        if last < 0:
            last = size + last
        last = min(last, size - 1)
        if first > last:
            return []
        return items[first:last + 1]

    def _cmd_llen(self, db: dict[str, Any], key: str) -> int:
        return len(self._list_at(db, key) or [])

    def _cmd_dbsize(self, db: dict[str, Any]) -> int:
        return len(db)

    def _cmd_flushdb(self, db: dict[str, Any]) -> str:
        db.clear()
        return "OK"
