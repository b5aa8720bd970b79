"""Settings for the gateway."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    host: str = Field("0.0.0.0", validation_alias="HOST")
    port: int = Field(3001, validation_alias="PORT")

    store_backend: str = Field("redis", validation_alias="STORE_BACKEND")

    cors_allow_origins: str = Field("*", validation_alias="CORS_ALLOW_ORIGINS")

    readiness_ping_timeout_seconds: float = Field(5.0, validation_alias="READINESS_PING_TIMEOUT_SECONDS")

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.cors_allow_origins.split(",") if origin.strip()]
