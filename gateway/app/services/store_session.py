"""
Store session: owns the one live store connection for the process.

Handle replacement happens under an asyncio.Lock so two concurrent connects
cannot both install a client. Commands borrow the current handle without the
lock; a command that started on a handle being replaced may finish against the
old one. `generation` increments on every successful connect so callers can
tell whether the handle changed under them.
"""
from __future__ import annotations

import asyncio
from typing import Any, Sequence

from loguru import logger

from gateway.app.core import SERVICE_NAME
from gateway.app.core.errors import NotConnectedError
from gateway.app.domain.models import ConnectionSettings
from gateway.app.ports.store_client import StoreClient, StoreClientFactory


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


class StoreSession:
    def __init__(self, client_factory: StoreClientFactory) -> None:
        self._client_factory = client_factory
        self._client: StoreClient | None = None
        self._connection: ConnectionSettings | None = None
        self._generation = 0
        self._lock = asyncio.Lock()

    @property
    def connected(self) -> bool:
        return self._client is not None

    def is_connected(self) -> bool:
        """True iff a handle exists. Does not verify liveness."""
        return self.connected

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def connection(self) -> ConnectionSettings | None:
        return self._connection

    def require_client(self) -> StoreClient:
        client = self._client
        if client is None:
            raise NotConnectedError()
        return client

    async def _discard_current(self) -> None:
        client, self._client, self._connection = self._client, None, None
        if client is None:
            return
        try:
            await client.close()
        except Exception as e:
            logger.warning("previous store connection close failed: {}", e)

    async def connect(self, connection: ConnectionSettings) -> None:
        async with self._lock:
            await self._discard_current()

            client = self._client_factory(connection)
            try:
                await client.connect()
            except Exception:
                try:
                    await client.close()
                except Exception as e:
                    logger.warning("half-open store connection close failed: {}", e)
                _log("store_connect_failed", host=connection.host, port=connection.port)
                raise

            self._client = client
            self._connection = connection
            self._generation += 1
            _log(
                "store_connected",
                host=connection.host,
                port=connection.port,
                database=connection.database,
                generation=self._generation,
            )

    async def ping(self) -> Any:
        return await self.require_client().ping()

    async def execute(self, command: str, args: Sequence[str] = ()) -> Any:
        client = self.require_client()
        _log("store_command", command=command, arg_count=len(args))
        return await client.execute(command, *args)

    async def close(self) -> None:
        async with self._lock:
            await self._discard_current()
        _log("store_session_closed")
