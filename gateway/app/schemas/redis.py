from typing import Any

from pydantic import BaseModel, Field

from gateway.app.domain.models import ConnectionSettings, PingRecord


class ConnectRequest(BaseModel):
    host: str | None = None
    port: int | None = None
    password: str | None = None
    database: int | None = None

    def to_connection_settings(self) -> ConnectionSettings:
        return ConnectionSettings.resolve(
            host=self.host,
            port=self.port,
            password=self.password,
            database=self.database,
        )


class CommandRequest(BaseModel):
    command: str = Field(..., min_length=1)
    args: list[str] | None = None


class StartPingRequest(BaseModel):
    interval: float = Field(..., gt=0, description="Seconds between pings")


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class CommandResponse(BaseModel):
    success: bool = True
    result: Any = None


class PingEntryPayload(BaseModel):
    id: int
    timestamp: str
    message: str

    @staticmethod
    def from_record(record: PingRecord) -> "PingEntryPayload":
        return PingEntryPayload(**record.to_dict())


class PingEntriesResponse(BaseModel):
    success: bool = True
    entries: list[PingEntryPayload]
