"""
Composition root: single place where concrete implementations are wired.

Builds settings, the store session and the ping timer. The session starts
without a connection; clients open one through POST /api/redis/connect.
The store backend (redis or inmemory) is selected from settings. No DI
container library, explicit wiring only.
"""

from gateway.app.config.settings import Settings
from gateway.app.infrastructure.store.factory import create_store_client_factory
from gateway.app.services.ping_timer import PingTimer
from gateway.app.services.store_session import StoreSession


class GatewayDependencies:
    """Holds wired dependencies and their lifecycle. Built only in composition root."""

    def __init__(
        self,
        *,
        settings: Settings,
        session: StoreSession,
        ping_timer: PingTimer,
    ) -> None:
        self._settings = settings
        self._session = session
        self._ping_timer = ping_timer

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def session(self) -> StoreSession:
        return self._session

    @property
    def ping_timer(self) -> PingTimer:
        return self._ping_timer

    async def close(self) -> None:
        await self._ping_timer.close()
        await self._session.close()


def create_gateway_dependencies(settings: Settings | None = None) -> GatewayDependencies:
    """
    Composition root: build all gateway dependencies in one place.
    Caller owns lifecycle (close).
    """
    _settings = settings or Settings()
    session = StoreSession(create_store_client_factory(_settings))
    ping_timer = PingTimer(session)

    return GatewayDependencies(
        settings=_settings,
        session=session,
        ping_timer=ping_timer,
    )
