"""Gateway client port: contract for calling the Redis gateway's JSON API.

The console store depends on this port; infrastructure (httpx) implements it.
"""
from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


class GatewayClientError(Exception):
    """Transport failure or non-2xx response. The message is what the user sees."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@runtime_checkable
class GatewayClient(Protocol):
    """Port: JSON request/response against the gateway API base."""

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Return the decoded JSON body; raise GatewayClientError on failure."""
        ...

    async def close(self) -> None:
        """Release resources (e.g. connection pool)."""
        ...
