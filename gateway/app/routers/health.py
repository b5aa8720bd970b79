import asyncio
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Request, Response
from loguru import logger

from gateway.app.core import SERVICE_NAME
from gateway.app.routers.utils import json_response, readiness_ping_timeout_seconds
from gateway.app.schemas.health import HealthResponse

health_router = APIRouter(tags=["Health"])


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


@health_router.get(
    "/health",
    summary="Health check",
    description="Returns 200 while the process is running, with whether a Redis connection is currently held and the ping timer state. Does not contact Redis.",
    responses={200: {"description": "Service is alive."}},
)
async def health(request: Request) -> Response:
    session = getattr(request.app.state, "session", None)
    timer = getattr(request.app.state, "ping_timer", None)
    now = datetime.now(tz=timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return json_response(
        HealthResponse(
            timestamp=now,
            redis_connected=bool(session is not None and session.connected),
            ping_timer_active=bool(timer is not None and timer.active),
            ping_interval=timer.interval_seconds if timer is not None else None,
        )
    )


@health_router.get(
    "/health/ready",
    summary="Readiness probe",
    description="Returns 200 only when a Redis connection is held and answers PING in time.",
    responses={
        200: {"description": "Redis connection is ready."},
        503: {"description": "No connection, or Redis did not answer."},
    },
)
async def ready(request: Request) -> Response:
    session = getattr(request.app.state, "session", None)
    if session is None:
        _log("components_not_initialized")
        return Response(status_code=503, content="Not ready")
    if not session.connected:
        _log("store_not_connected")
        return Response(status_code=503, content="Redis not connected")

    timeout_s = readiness_ping_timeout_seconds(request)
    try:
        await asyncio.wait_for(session.ping(), timeout=timeout_s)
    except asyncio.TimeoutError:
        _log("store_ping_timeout")
        return Response(status_code=503, content="Redis not ready")
    except Exception as e:
        _log("store_not_ready", error=str(e))
        return Response(status_code=503, content="Redis not ready")
    return Response(status_code=200, content="OK")
