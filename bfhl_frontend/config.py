from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    app_title: str = Field(default="BFHL Data Processor", alias="APP_TITLE")
    host: str = Field(default="127.0.0.1", alias="HOST")
    port: int = Field(default=8000, alias="PORT")
    session_cookie_name: str = Field(default="bfhl_session", alias="SESSION_COOKIE_NAME")
    # Idle sessions are dropped after the TTL; the oldest go first once the cap is hit
    session_max_count: int = Field(default=1000, alias="SESSION_MAX_COUNT")
    session_ttl_seconds: float = Field(default=3600, alias="SESSION_TTL_SECONDS")
    cors_allow_origins: List[str] = Field(default_factory=lambda: ["*"], alias="CORS_ALLOW_ORIGINS")

    # Outbound processing endpoint
    bfhl_endpoint_url: str = Field(
        default="https://bajaj-backend-farz.onrender.com/bfhl", alias="BFHL_ENDPOINT_URL"
    )
    # Unset → wait for the endpoint indefinitely
    bfhl_request_timeout: Optional[float] = Field(default=None, alias="BFHL_REQUEST_TIMEOUT")

    # Logging configuration used by bfhl_frontend.logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    console_log_level: str = Field(default="INFO", alias="CONSOLE_LOG_LEVEL")

    # Rate limiting for submission routes (per client IP)
    submit_rate_limit: int = Field(default=30, alias="SUBMIT_RATE_LIMIT")
    submit_rate_limit_window: int = Field(default=60, alias="SUBMIT_RATE_LIMIT_WINDOW")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]
