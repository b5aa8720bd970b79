"""Port: connection to the external key-value store. Implementations live in infrastructure."""
from __future__ import annotations

from typing import Any, Protocol

from gateway.app.domain.models import ConnectionSettings


class StoreClient(Protocol):
    """One live store connection: open, probe, forward commands, close."""

    async def connect(self) -> None: ...

    async def ping(self) -> Any: ...

    async def execute(self, command: str, *args: str) -> Any: ...

    async def rpush(self, key: str, value: str) -> int: ...

    async def lrange(self, key: str, start: int, stop: int) -> list[str]: ...

    async def delete(self, key: str) -> int: ...

    async def close(self) -> None: ...


class StoreClientFactory(Protocol):
    """Builds an unopened StoreClient for the given connection settings."""

    def __call__(self, connection: ConnectionSettings) -> StoreClient: ...
