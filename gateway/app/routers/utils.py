from __future__ import annotations

from typing import Any, Awaitable, Callable

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from loguru import logger
from pydantic import BaseModel

from gateway.app.core import SERVICE_NAME
from gateway.app.core.errors import NotConnectedError
from gateway.app.schemas.redis import MessageResponse
from gateway.app.services.ping_timer import PingTimer
from gateway.app.services.store_session import StoreSession

READINESS_PING_TIMEOUT_DEFAULT = 5.0


def get_session(request: Request) -> StoreSession:
    return request.app.state.session


def get_ping_timer(request: Request) -> PingTimer:
    return request.app.state.ping_timer


def readiness_ping_timeout_seconds(request: Request) -> float:
    """Read readiness store ping timeout from app.state.settings or default."""
    settings = getattr(request.app.state, "settings", None)
    if settings is not None:
        return getattr(settings, "readiness_ping_timeout_seconds", READINESS_PING_TIMEOUT_DEFAULT)
    return READINESS_PING_TIMEOUT_DEFAULT


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).warning("")


def json_response(body: BaseModel, status_code: int = 200) -> Response:
    return Response(
        status_code=status_code,
        media_type="application/json",
        content=body.model_dump_json(by_alias=True),
    )


def failure_response(status_code: int, message: str) -> Response:
    return json_response(MessageResponse(success=False, message=message), status_code=status_code)


async def respond(event: str, operation: Callable[[], Awaitable[BaseModel]]) -> Response:
    """Run one gateway operation and wrap the outcome in the success/failure envelope.

    NotConnectedError -> 400, any other exception -> 500 carrying str(exc).
    """
    try:
        body = await operation()
    except NotConnectedError as e:
        _log(event, reason="not_connected")
        return failure_response(400, str(e))
    except Exception as e:
        logger.exception("{} failed: {}", event, e)
        return failure_response(500, str(e) or type(e).__name__)
    return json_response(body)


def validation_error_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    return f"{field}: {message}" if field else message


async def validation_failure_handler(request: Request, exc: RequestValidationError) -> Response:
    message = validation_error_message(exc)
    _log("request_validation_failed", path=request.url.path, reason=message)
    return failure_response(500, message)


def register_error_handlers(app: FastAPI) -> None:
    """Bad request bodies answer with the same success/message envelope as failed operations."""
    app.add_exception_handler(RequestValidationError, validation_failure_handler)


__all__ = [
    "get_session",
    "get_ping_timer",
    "readiness_ping_timeout_seconds",
    "json_response",
    "failure_response",
    "respond",
    "register_error_handlers",
]
