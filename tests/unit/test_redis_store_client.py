import pytest

from gateway.app.domain.models import ConnectionSettings
from gateway.app.infrastructure.store.redis import redis_store_client as mod
from gateway.app.infrastructure.store.redis.redis_store_client import RedisStoreClient


class _FakeRedis:
    instances: list["_FakeRedis"] = []

    def __init__(self, **kwargs) -> None:
        self.kwargs = kwargs
        self.response_callbacks = {"PING": lambda r: r == "PONG"}
        self.executed: list[tuple] = []
        self.closed = False
        self.ping_error: Exception | None = None
        _FakeRedis.instances.append(self)

    async def ping(self):
        if self.ping_error is not None:
            raise self.ping_error
        return "PONG"

    async def execute_command(self, *args):
        self.executed.append(args)
        return "OK"

    async def rpush(self, key, value):
        self.executed.append(("RPUSH", key, value))
        return 1

    async def lrange(self, key, start, stop):
        return ["x"]

    async def delete(self, key):
        return 0

    async def aclose(self):
        self.closed = True


@pytest.fixture(autouse=True)
def fake_redis(monkeypatch):
    _FakeRedis.instances = []
    monkeypatch.setattr(mod, "Redis", _FakeRedis)
    return _FakeRedis


@pytest.mark.asyncio
async def test_connect_builds_client_from_settings_and_pings():
    client = RedisStoreClient(ConnectionSettings(host="cache", port=6380, password="pw", database=4))
    await client.connect()

    redis = _FakeRedis.instances[0]
    assert redis.kwargs == {
        "host": "cache",
        "port": 6380,
        "password": "pw",
        "db": 4,
        "decode_responses": True,
        "encoding_errors": "replace",
    }
    assert redis.response_callbacks == {}
    assert client.ready is True
    assert await client.ping() == "PONG"


@pytest.mark.asyncio
async def test_connect_failure_propagates_and_marks_disconnected(monkeypatch):
    original_init = _FakeRedis.__init__

    def failing_init(self, **kwargs):
        original_init(self, **kwargs)
        self.ping_error = ConnectionError("Error 111 connecting to localhost:6379. Connection refused.")

    monkeypatch.setattr(_FakeRedis, "__init__", failing_init)
    client = RedisStoreClient(ConnectionSettings())
    with pytest.raises(ConnectionError, match="Connection refused"):
        await client.connect()
    assert client.ready is False

    await client.close()
    assert _FakeRedis.instances[0].closed is True


@pytest.mark.asyncio
async def test_execute_forwards_command_verbatim():
    client = RedisStoreClient(ConnectionSettings())
    await client.connect()
    assert await client.execute("set", "k", "v") == "OK"
    assert _FakeRedis.instances[0].executed == [("set", "k", "v")]


@pytest.mark.asyncio
async def test_close_releases_client():
    client = RedisStoreClient(ConnectionSettings())
    await client.connect()
    await client.close()
    assert _FakeRedis.instances[0].closed is True
    assert client.ready is False
    with pytest.raises(RuntimeError):
        await client.ping()


@pytest.mark.asyncio
async def test_client_options_decode_non_utf8_replies_with_replacement():
    from redis.asyncio import Redis as RealRedis

    client = RedisStoreClient(ConnectionSettings())
    await client.connect()

    real = RealRedis(**_FakeRedis.instances[0].kwargs)
    try:
        assert real.connection_pool.get_encoder().decode(b"caf\xe9") == "caf\ufffd"
    finally:
        await real.aclose()
