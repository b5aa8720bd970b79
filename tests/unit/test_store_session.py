import asyncio

import pytest

from gateway.app.core.errors import NotConnectedError
from gateway.app.domain.models import ConnectionSettings
from gateway.app.services.store_session import StoreSession
from tests.conftest import FakeStoreClientFactory


@pytest.mark.asyncio
async def test_new_session_is_not_connected(session):
    assert session.is_connected() is False
    assert session.generation == 0
    with pytest.raises(NotConnectedError, match="Not connected to Redis"):
        session.require_client()


@pytest.mark.asyncio
async def test_ping_and_execute_require_connection(session):
    with pytest.raises(NotConnectedError):
        await session.ping()
    with pytest.raises(NotConnectedError):
        await session.execute("GET", ["k"])


@pytest.mark.asyncio
async def test_connect_then_ping_returns_reply(session, store_factory):
    await session.connect(ConnectionSettings())
    assert session.is_connected() is True
    assert await session.ping() == "PONG"
    assert session.generation == 1
    assert session.connection == ConnectionSettings()


@pytest.mark.asyncio
async def test_execute_forwards_arguments(session, store_factory):
    await session.connect(ConnectionSettings())
    result = await session.execute("SET", ["k", "v"])
    assert result == "OK"
    assert store_factory.last.commands == [("SET", ("k", "v"))]


@pytest.mark.asyncio
async def test_reconnect_closes_previous_handle_first(session, store_factory):
    await session.connect(ConnectionSettings())
    first = store_factory.last
    await session.connect(ConnectionSettings(port=6380))
    assert first.closed is True
    assert session.require_client() is store_factory.last
    assert session.generation == 2


@pytest.mark.asyncio
async def test_failed_connect_leaves_slot_empty_and_closes_half_open_client(session, store_factory):
    await session.connect(ConnectionSettings())
    store_factory.next_options = {"raise_on_connect": ConnectionError("boom")}
    with pytest.raises(ConnectionError, match="boom"):
        await session.connect(ConnectionSettings())
    assert session.connected is False
    assert session.connection is None
    assert store_factory.last.closed is True
    assert session.generation == 1


@pytest.mark.asyncio
async def test_close_failure_of_old_handle_is_swallowed(session, store_factory):
    store_factory.next_options = {"raise_on_close": RuntimeError("close failed")}
    await session.connect(ConnectionSettings())
    await session.connect(ConnectionSettings())
    assert session.connected is True


@pytest.mark.asyncio
async def test_close_clears_handle(session, store_factory):
    await session.connect(ConnectionSettings())
    await session.close()
    assert session.connected is False
    assert store_factory.last.closed is True


@pytest.mark.asyncio
async def test_concurrent_connects_leave_exactly_one_open_handle():
    factory = FakeStoreClientFactory()
    session = StoreSession(factory)
    await asyncio.gather(*(session.connect(ConnectionSettings(database=i)) for i in range(5)))
    open_clients = [c for c in factory.clients if not c.closed]
    assert len(open_clients) == 1
    assert session.require_client() is open_clients[0]
    assert session.generation == 5
