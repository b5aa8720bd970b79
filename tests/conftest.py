from __future__ import annotations

from typing import Any

import pytest
from fastapi import FastAPI

from gateway.app.domain.models import ConnectionSettings
from gateway.app.routers.health import health_router
from gateway.app.routers.redis import redis_router
from gateway.app.routers.utils import register_error_handlers
from gateway.app.services.ping_timer import PingTimer
from gateway.app.services.store_session import StoreSession


class FakeStoreClient:
    """Implements StoreClient for tests. Lists live in a dict shared through the factory."""

    def __init__(
        self,
        connection: ConnectionSettings,
        lists: dict[str, list[str]],
        *,
        raise_on_connect: Exception | None = None,
        raise_on_close: Exception | None = None,
        raise_on_command: Exception | None = None,
        raise_on_push: Exception | None = None,
        ping_reply: Any = "PONG",
        command_reply: Any = "OK",
    ) -> None:
        self.connection = connection
        self.lists = lists
        self.connected = False
        self.closed = False
        self.commands: list[tuple[str, tuple[str, ...]]] = []
        self._raise_on_connect = raise_on_connect
        self._raise_on_close = raise_on_close
        self._raise_on_command = raise_on_command
        self._raise_on_push = raise_on_push
        self._ping_reply = ping_reply
        self._command_reply = command_reply

    async def connect(self) -> None:
        if self._raise_on_connect is not None:
            raise self._raise_on_connect
        self.connected = True

    async def ping(self) -> Any:
        return self._ping_reply

    async def execute(self, command: str, *args: str) -> Any:
        self.commands.append((command, args))
        if self._raise_on_command is not None:
            raise self._raise_on_command
        return self._command_reply

    async def rpush(self, key: str, value: str) -> int:
        if self._raise_on_push is not None:
            raise self._raise_on_push
        self.lists.setdefault(key, []).append(value)
        return len(self.lists[key])

    async def lrange(self, key: str, start: int, stop: int) -> list[str]:
        items = self.lists.get(key, [])
        return list(items[start:] if stop == -1 else items[start:stop + 1])

    async def delete(self, key: str) -> int:
        return 1 if self.lists.pop(key, None) is not None else 0

    async def close(self) -> None:
        self.closed = True
        if self._raise_on_close is not None:
            raise self._raise_on_close


class FakeStoreClientFactory:
    """StoreClientFactory for tests. `next_options` apply to the next client built."""

    def __init__(self) -> None:
        self.lists: dict[str, list[str]] = {}
        self.clients: list[FakeStoreClient] = []
        self.next_options: dict[str, Any] = {}

    def __call__(self, connection: ConnectionSettings) -> FakeStoreClient:
        options, self.next_options = self.next_options, {}
        client = FakeStoreClient(connection, self.lists, **options)
        self.clients.append(client)
        return client

    @property
    def last(self) -> FakeStoreClient:
        return self.clients[-1]


@pytest.fixture()
def store_factory() -> FakeStoreClientFactory:
    return FakeStoreClientFactory()


@pytest.fixture()
def session(store_factory: FakeStoreClientFactory) -> StoreSession:
    return StoreSession(store_factory)


@pytest.fixture()
def test_app(session: StoreSession) -> FastAPI:
    app = FastAPI()
    app.state.session = session
    app.state.ping_timer = PingTimer(session)
    register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(redis_router)
    return app
