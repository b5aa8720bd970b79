"""
Ping record access over the store session.

Records are appended to the tail of the `ping_entries` list as JSON text and
read back newest first.
"""
from __future__ import annotations

from gateway.app.constants import PING_ENTRIES_KEY
from gateway.app.domain.models import PingRecord
from gateway.app.services.store_session import StoreSession


async def append_ping_record(session: StoreSession, record: PingRecord | None = None) -> PingRecord:
    record = record or PingRecord.now()
    await session.require_client().rpush(PING_ENTRIES_KEY, record.to_json())
    return record


async def list_ping_records(session: StoreSession) -> list[PingRecord]:
    entries = await session.require_client().lrange(PING_ENTRIES_KEY, 0, -1)
    return [PingRecord.from_json(entry) for entry in reversed(entries)]


async def clear_ping_records(session: StoreSession) -> None:
    await session.require_client().delete(PING_ENTRIES_KEY)
