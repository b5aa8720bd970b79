from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "healthy"
    timestamp: str
    redis_connected: bool = Field(..., serialization_alias="redisConnected")
    ping_timer_active: bool = Field(False, serialization_alias="pingTimerActive")
    ping_interval: float | None = Field(None, serialization_alias="pingInterval")
