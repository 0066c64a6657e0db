"""Application configuration using Pydantic BaseSettings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ig_relay.constants import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_REPLY_TEXT,
    INSTAGRAM_GRAPH_API_VERSION,
    INSTAGRAM_GRAPH_HOST,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        # .env.local is read last so local overrides win
        env_file=[".env", ".env.local"],
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Instagram Configuration
    verify_token: str = Field(..., description="Webhook verification token")
    ig_id: str = Field(
        ..., description="Instagram professional account ID used in the send path"
    )
    access_token: str = Field(
        ..., description="Instagram user access token for the send-message call"
    )
    app_secret: str | None = Field(
        default=None,
        description="Meta app secret (optional, enables X-Hub-Signature-256 checks)",
    )
    instagram_graph_host: str = Field(
        default=INSTAGRAM_GRAPH_HOST, description="Instagram Graph API host"
    )
    instagram_api_version: str = Field(
        default=INSTAGRAM_GRAPH_API_VERSION, description="Instagram Graph API version"
    )
    instagram_api_timeout_seconds: float | None = Field(
        default=None,
        description="Timeout for send-message calls (seconds); httpx default when unset",
    )

    # Replies
    reply_text: str = Field(
        default=DEFAULT_REPLY_TEXT, description="Static reply sent to every message"
    )

    # Server
    host: str = Field(default=DEFAULT_HOST, description="Listen address")
    port: int = Field(default=DEFAULT_PORT, description="Listen port")

    # Environment
    env: Literal["local", "railway", "prod"] = Field(
        default="local", description="Current environment"
    )
    log_level: str = Field(default="INFO", description="Python logging level")

    # Sentry Configuration
    sentry_dsn: str | None = Field(
        default=None, description="Sentry DSN for error tracking (optional)"
    )
    sentry_traces_sample_rate: float = Field(
        default=1.0, description="Sentry traces sample rate (0.0 to 1.0)"
    )

    # Logfire Configuration
    logfire_token: str | None = Field(
        default=None, description="Pydantic Logfire token for cloud logging"
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
