from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from gateway.app.routers.utils import get_ping_timer, get_session, json_response, respond
from gateway.app.schemas.redis import (
    CommandRequest,
    CommandResponse,
    ConnectRequest,
    MessageResponse,
    PingEntriesResponse,
    PingEntryPayload,
    StartPingRequest,
)
from gateway.app.services.ping_records import clear_ping_records, list_ping_records
from gateway.app.services.ping_timer import PingTimer
from gateway.app.services.store_session import StoreSession

redis_router = APIRouter(prefix="/api/redis", tags=["Redis"])

_NOT_CONNECTED = {400: {"description": "No Redis connection has been opened."}}
_STORE_FAILURE = {500: {"description": "Redis returned an error or the connection failed."}}


def _format_interval(interval: float) -> str:
    return str(int(interval)) if float(interval).is_integer() else str(interval)


@redis_router.post(
    "/connect",
    summary="Open the Redis connection",
    description="Closes the current connection (if any) and opens a new one. The body is optional. Missing fields default to localhost:6379, database 0, no password.",
    responses={200: {"description": "Connected."}, **_STORE_FAILURE},
)
async def connect(body: ConnectRequest | None = None, session: StoreSession = Depends(get_session)) -> Response:
    async def _connect() -> MessageResponse:
        await session.connect((body or ConnectRequest()).to_connection_settings())
        return MessageResponse(message="Connected to Redis successfully")

    return await respond("connect_failed", _connect)


@redis_router.get(
    "/ping",
    summary="Ping Redis",
    description="Sends PING over the open connection and returns the reply verbatim.",
    responses={200: {"description": "Reply from Redis."}, **_NOT_CONNECTED, **_STORE_FAILURE},
)
async def ping(session: StoreSession = Depends(get_session)) -> Response:
    async def _ping() -> MessageResponse:
        reply = await session.ping()
        return MessageResponse(message=str(reply))

    return await respond("ping_failed", _ping)


@redis_router.post(
    "/command",
    summary="Execute a Redis command",
    description="Forwards the command name and arguments unmodified and returns the raw reply. No command is filtered.",
    responses={200: {"description": "Raw command reply."}, **_NOT_CONNECTED, **_STORE_FAILURE},
)
async def command(body: CommandRequest, session: StoreSession = Depends(get_session)) -> Response:
    async def _execute() -> CommandResponse:
        result = await session.execute(body.command, body.args or [])
        return CommandResponse(result=result)

    return await respond("command_failed", _execute)


@redis_router.post(
    "/start-ping",
    summary="Start the ping timer",
    description="Replaces any running timer with one that appends a ping record to `ping_entries` every `interval` seconds.",
    responses={200: {"description": "Timer started."}, 500: {"description": "Interval missing or not positive."}},
)
async def start_ping(body: StartPingRequest, timer: PingTimer = Depends(get_ping_timer)) -> Response:
    async def _start() -> MessageResponse:
        timer.start(body.interval)
        return MessageResponse(message=f"Ping timer started with {_format_interval(body.interval)}s interval")

    return await respond("start_ping_failed", _start)


@redis_router.post(
    "/stop-ping",
    summary="Stop the ping timer",
    description="Stops the running timer. When none is running the response has success=false with status 200.",
    responses={200: {"description": "Timer stopped, or nothing to stop."}},
)
async def stop_ping(timer: PingTimer = Depends(get_ping_timer)) -> Response:
    if timer.stop():
        return json_response(MessageResponse(message="Ping timer stopped"))
    return json_response(MessageResponse(success=False, message="No ping timer running"))


@redis_router.get(
    "/ping-entries",
    summary="List ping records",
    description="Returns every record in `ping_entries`, newest first.",
    responses={200: {"description": "Ping records."}, **_NOT_CONNECTED, **_STORE_FAILURE},
)
async def get_ping_entries(session: StoreSession = Depends(get_session)) -> Response:
    async def _list() -> PingEntriesResponse:
        records = await list_ping_records(session)
        return PingEntriesResponse(entries=[PingEntryPayload.from_record(r) for r in records])

    return await respond("list_ping_entries_failed", _list)


@redis_router.delete(
    "/ping-entries",
    summary="Clear ping records",
    description="Deletes the `ping_entries` key. Succeeds when the key is already absent.",
    responses={200: {"description": "Records cleared."}, **_NOT_CONNECTED, **_STORE_FAILURE},
)
async def delete_ping_entries(session: StoreSession = Depends(get_session)) -> Response:
    async def _clear() -> MessageResponse:
        await clear_ping_records(session)
        return MessageResponse(message="Ping entries cleared")

    return await respond("clear_ping_entries_failed", _clear)
