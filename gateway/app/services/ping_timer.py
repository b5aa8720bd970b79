"""
Ping timer: one background task that appends a ping record every interval.

Lifecycle:
  start(n) -> any running timer is stopped, then a new task waits n seconds,
  ticks, and repeats until its stop event is set.
  stop() -> sets the stop event. No further ticks are scheduled; a tick that is
  already writing to the store is left to finish.

Tick failures (store down, connection swapped mid-write) are logged and the
loop keeps going. Nothing is reported back to the caller that started it.
"""
from __future__ import annotations

import asyncio
from typing import Any

from loguru import logger

from gateway.app.core import SERVICE_NAME
from gateway.app.services.ping_records import append_ping_record
from gateway.app.services.store_session import StoreSession


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


class PingTimer:
    def __init__(self, session: StoreSession) -> None:
        self._session = session
        self._task: asyncio.Task[None] | None = None
        self._stop_event: asyncio.Event | None = None
        self._interval_seconds: float | None = None
        self._retiring: set[asyncio.Task[None]] = set()

    @property
    def active(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def interval_seconds(self) -> float | None:
        return self._interval_seconds if self.active else None

    def start(self, interval_seconds: float) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._release_current()

        stop_event = asyncio.Event()
        self._stop_event = stop_event
        self._interval_seconds = interval_seconds
        self._task = asyncio.create_task(self._run(interval_seconds, stop_event))
        _log("ping_timer_started", interval_seconds=interval_seconds)

    def stop(self) -> bool:
        """Stop the running timer. Returns False when there was nothing to stop."""
        if not self.active:
            self._release_current()
            return False
        self._release_current()
        _log("ping_timer_stopped")
        return True

    def _release_current(self) -> None:
        if self._stop_event is not None:
            self._stop_event.set()
        task = self._task
        if task is not None and not task.done():
            self._retiring.add(task)
            task.add_done_callback(self._retiring.discard)
        self._task = None
        self._stop_event = None
        self._interval_seconds = None

    async def _run(self, interval_seconds: float, stop_event: asyncio.Event) -> None:
        while True:
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=interval_seconds)
                return
            except asyncio.TimeoutError:
                pass
            await self._tick()

    async def _tick(self) -> None:
        if not self._session.connected:
            return
        try:
            record = await append_ping_record(self._session)
            _log("ping_recorded", record_id=record.id)
        except Exception as e:
            logger.warning("ping tick failed: {}", e)

    async def close(self) -> None:
        """Stop the timer and wait for any in-flight tick to finish."""
        self._release_current()
        if self._retiring:
            await asyncio.gather(*self._retiring, return_exceptions=True)
