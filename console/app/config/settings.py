from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConsoleSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    api_base: str = Field("http://localhost:3001/api", validation_alias="GATEWAY_API_BASE")
    timeout_seconds: float = Field(10.0, validation_alias="GATEWAY_TIMEOUT_SECONDS")

    # Form defaults shown before the user edits anything.
    default_ping_interval_seconds: float = Field(10.0, validation_alias="DEFAULT_PING_INTERVAL_SECONDS")
