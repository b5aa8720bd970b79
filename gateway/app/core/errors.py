"""Gateway error types. Routers map these to HTTP status codes."""
from __future__ import annotations

from gateway.app.constants import NOT_CONNECTED_MESSAGE


class NotConnectedError(RuntimeError):
    """Raised when an operation needs a store connection and none is open."""

    def __init__(self, message: str = NOT_CONNECTED_MESSAGE) -> None:
        super().__init__(message)


class StoreCommandError(RuntimeError):
    """Store rejected a command (unknown command, wrong type, bad arguments)."""
