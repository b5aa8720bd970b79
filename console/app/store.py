"""
Console state store: client-side mirror of the gateway's state.

Each action sends one request to the gateway and copies the outcome into the
observable fields below. Nothing is retried or polled; callers refresh the
record list and connectivity themselves. Observers registered with
`subscribe` are called with (field_name, value) after every field change.
"""
from __future__ import annotations

import dataclasses
from typing import Any, Callable

from loguru import logger

from console.app.config.settings import ConsoleSettings
from console.app.core import SERVICE_NAME
from console.app.errors import ConsoleError
from console.app.infrastructure.http.factory import create_gateway_client
from console.app.models import ConnectionSettings, PingEntry
from console.app.ports.gateway_client import GatewayClient, GatewayClientError

FieldObserver = Callable[[str, Any], None]


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


class RedisConsoleStore:
    def __init__(
        self,
        client: GatewayClient | None = None,
        *,
        settings: ConsoleSettings | None = None,
    ) -> None:
        self._settings = settings or ConsoleSettings()
        self._client = client or create_gateway_client(self._settings)
        self._observers: list[FieldObserver] = []

        self._is_connected = False
        self._connection_settings = ConnectionSettings()
        self._ping_interval = self._settings.default_ping_interval_seconds
        self._is_ping_active = False
        self._ping_entries: list[PingEntry] = []
        self._is_loading = False
        self._error: str | None = None

    # -- observable fields -------------------------------------------------

    @property
    def is_connected(self) -> bool:
        return self._is_connected

    @property
    def connection_settings(self) -> ConnectionSettings:
        return self._connection_settings

    @property
    def ping_interval(self) -> float:
        return self._ping_interval

    @property
    def is_ping_active(self) -> bool:
        return self._is_ping_active

    @property
    def ping_entries(self) -> list[PingEntry]:
        return list(self._ping_entries)

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def error(self) -> str | None:
        return self._error

    def subscribe(self, observer: FieldObserver) -> Callable[[], None]:
        """Register an observer; returns a callable that removes it."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _set(self, name: str, value: Any) -> None:
        setattr(self, f"_{name}", value)
        for observer in list(self._observers):
            try:
                observer(name, value)
            except Exception as e:
                logger.warning("observer failed for {}: {}", name, e)

    def _fail(self, message: str | None, fallback: str) -> str:
        error = message or fallback
        self._set("error", error)
        _log("action_failed", error=error)
        return error

    # -- actions -----------------------------------------------------------

    async def connect_to_redis(self) -> bool:
        try:
            self._set("is_loading", True)
            self._set("error", None)
            data = await self._client.request(
                "POST", "/redis/connect", json=self._connection_settings.to_payload()
            )
            if data.get("success"):
                self._set("is_connected", True)
                return True
            self._fail(data.get("message"), "Connection failed")
            self._set("is_connected", False)
            return False
        except GatewayClientError as e:
            self._fail(str(e), "Connection failed")
            self._set("is_connected", False)
            return False
        finally:
            self._set("is_loading", False)

    async def test_connection(self) -> bool:
        try:
            data = await self._client.request("GET", "/redis/ping")
        except GatewayClientError as e:
            self._fail(str(e), "Ping failed")
            return False
        return bool(data.get("success"))

    async def execute_command(self, command: str, args: list[str] | None = None) -> Any:
        self._set("error", None)
        payload: dict[str, Any] = {"command": command, "args": list(args or [])}
        try:
            data = await self._client.request("POST", "/redis/command", json=payload)
        except GatewayClientError as e:
            raise ConsoleError(self._fail(str(e), "Command failed")) from e
        if data.get("success"):
            return data.get("result")
        raise ConsoleError(self._fail(data.get("message"), "Command failed"))

    async def start_ping_timer(self) -> bool:
        try:
            data = await self._client.request(
                "POST", "/redis/start-ping", json={"interval": self._ping_interval}
            )
        except GatewayClientError as e:
            self._fail(str(e), "Failed to start ping timer")
            return False
        if data.get("success"):
            self._set("is_ping_active", True)
            return True
        self._fail(data.get("message"), "Failed to start ping timer")
        return False

    async def stop_ping_timer(self) -> bool:
        try:
            data = await self._client.request("POST", "/redis/stop-ping")
        except GatewayClientError as e:
            self._fail(str(e), "Failed to stop ping timer")
            return False
        if data.get("success"):
            self._set("is_ping_active", False)
            return True
        self._fail(data.get("message"), "Failed to stop ping timer")
        return False

    async def fetch_ping_entries(self) -> None:
        try:
            data = await self._client.request("GET", "/redis/ping-entries")
        except GatewayClientError as e:
            self._fail(str(e), "Failed to fetch ping entries")
            return
        entries = data.get("entries")
        if data.get("success") and entries is not None:
            self._set("ping_entries", [PingEntry.from_payload(entry) for entry in entries])
            return
        self._fail(data.get("message"), "Failed to fetch ping entries")

    async def clear_ping_entries(self) -> bool:
        try:
            data = await self._client.request("DELETE", "/redis/ping-entries")
        except GatewayClientError as e:
            self._fail(str(e), "Failed to clear ping entries")
            return False
        if data.get("success"):
            self._set("ping_entries", [])
            return True
        self._fail(data.get("message"), "Failed to clear ping entries")
        return False

    def update_connection_settings(self, **changes: Any) -> None:
        self._set("connection_settings", dataclasses.replace(self._connection_settings, **changes))

    def update_ping_interval(self, interval: float) -> None:
        self._set("ping_interval", interval)

    def clear_error(self) -> None:
        self._set("error", None)

    async def close(self) -> None:
        await self._client.close()
