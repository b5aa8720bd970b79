from typing import Any

from loguru import logger
from redis.asyncio import Redis

from gateway.app.core import SERVICE_NAME
from gateway.app.domain.models import ConnectionSettings
from gateway.app.infrastructure.store.redis.constants import ConnectionState


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


class RedisStoreClient:
    """StoreClient implementation using redis-py's asyncio client."""

    def __init__(self, connection: ConnectionSettings) -> None:
        self._connection = connection
        self._state = ConnectionState.DISCONNECTED
        self._client: Redis | None = None

    @property
    def ready(self) -> bool:
        return self._state == ConnectionState.CONNECTED

    @property
    def client(self) -> Redis:
        if not self._client:
            raise RuntimeError("redis_not_connected")
        return self._client

    async def connect(self) -> None:
        self._state = ConnectionState.CONNECTING
        _log(
            "redis_connecting",
            host=self._connection.host,
            port=self._connection.port,
            database=self._connection.database,
        )
        self._client = Redis(
            host=self._connection.host,
            port=self._connection.port,
            password=self._connection.password,
            db=self._connection.database,
            decode_responses=True,
            encoding_errors="replace",
        )
        # Replies are passed through as the server sent them (PING -> "PONG", SET -> "OK").
        self._client.response_callbacks.clear()
        try:
            await self._client.ping()
        except Exception as e:
            self._state = ConnectionState.DISCONNECTED
            logger.warning("redis connect failed: {}", e)
            raise
        self._state = ConnectionState.CONNECTED
        _log("redis_connected")

    async def ping(self) -> Any:
        return await self.client.ping()

    async def execute(self, command: str, *args: str) -> Any:
        return await self.client.execute_command(command, *args)

    async def rpush(self, key: str, value: str) -> int:
        return await self.client.rpush(key, value)

    async def lrange(self, key: str, start: int, stop: int) -> list[str]:
        return await self.client.lrange(key, start, stop)

    async def delete(self, key: str) -> int:
        return await self.client.delete(key)

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None
        self._state = ConnectionState.DISCONNECTED
