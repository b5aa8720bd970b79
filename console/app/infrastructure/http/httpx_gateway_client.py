"""Concrete gateway client using httpx (injected where GatewayClient is needed)."""
from __future__ import annotations

from typing import Any

import httpx

from console.app.ports.gateway_client import GatewayClient, GatewayClientError


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"Request failed with status code {response.status_code}"


class HttpxGatewayClient(GatewayClient):
    """GatewayClient implementation using httpx.AsyncClient."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.TimeoutException as exc:
            raise GatewayClientError(f"timeout calling {method} {path}") from exc
        except httpx.HTTPError as exc:
            raise GatewayClientError(str(exc) or f"request failed for {method} {path}") from exc

        if response.is_error:
            raise GatewayClientError(_error_message(response), status_code=response.status_code)
        try:
            return response.json()
        except ValueError as exc:
            raise GatewayClientError(f"invalid JSON from {method} {path}") from exc

    async def close(self) -> None:
        await self._client.aclose()
