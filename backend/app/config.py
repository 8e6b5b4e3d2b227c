from __future__ import annotations

"""Runtime settings.

Values come from the process environment, or from a `.env` file in the
working directory when one exists. Every setting has a local-development
default so the service starts without any configuration.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )

    SERVER_HOST: str = Field(default="0.0.0.0", description="Interface the HTTP listener binds to")
    SERVER_PORT: int = Field(default=3000, ge=1, le=65535, description="Port the HTTP listener binds to")

    DATABASE_URL: str = Field(default="sqlite:///./users.db", description="SQLAlchemy database URL")
    DB_POOL_SIZE: int = Field(default=5, ge=1, le=100, description="Connections kept in the engine pool")

    # Only read by the "jwt" auth mode.
    JWT_SECRET: str = Field(default="your-secret-key", description="HS256 secret for bearer tokens")
    AUTH_MODE: Literal["none", "bearer", "jwt"] = Field(
        default="none",
        description="none: no gate; bearer: any non-empty token; jwt: signed HS256 token",
    )

    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Root log level"
    )

    @property
    def server_address(self) -> str:
        return f"{self.SERVER_HOST}:{self.SERVER_PORT}"


@lru_cache
def get_settings() -> Settings:
    """Settings are parsed once per process."""
    return Settings()
