"""Store client factory: selects implementation from config. Only place that imports concrete clients."""
from __future__ import annotations

from functools import partial

from gateway.app.config.settings import Settings
from gateway.app.constants import StoreBackend
from gateway.app.ports.store_client import StoreClientFactory
from gateway.app.infrastructure.store.inmemory.in_memory_store_client import (
    InMemoryKeyspace,
    InMemoryStoreClient,
)
from gateway.app.infrastructure.store.redis.redis_store_client import RedisStoreClient


def create_store_client_factory(settings: Settings) -> StoreClientFactory:
    backend = settings.store_backend.strip().lower()

    if backend == StoreBackend.REDIS:
        return RedisStoreClient

    if backend == StoreBackend.INMEMORY:
        return partial(InMemoryStoreClient, keyspace=InMemoryKeyspace())

    raise ValueError(f"Unsupported store backend: {backend}")
