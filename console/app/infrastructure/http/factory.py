"""Gateway client factory: builds GatewayClient from settings."""
from __future__ import annotations

import httpx

from console.app.config.settings import ConsoleSettings
from console.app.ports.gateway_client import GatewayClient
from console.app.infrastructure.http.httpx_gateway_client import HttpxGatewayClient


def create_gateway_client(settings: ConsoleSettings) -> GatewayClient:
    async_client = httpx.AsyncClient(
        base_url=settings.api_base.rstrip("/"),
        timeout=httpx.Timeout(settings.timeout_seconds),
    )
    return HttpxGatewayClient(async_client)
