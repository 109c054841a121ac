"""Client-side configuration."""
from datetime import date
from typing import Optional

import httpx
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Settings for the progress engine and its HTTP record store."""

    api_base_url: str = Field(default="http://localhost:8000")
    request_timeout: float = Field(default=10.0)
    plan_timezone: str = Field(default="UTC")
    plan_start_date: Optional[date] = Field(default=None)
    resync_after_mutation: bool = Field(default=True)

    model_config = SettingsConfigDict(
        env_prefix="READING_TRACKER_",
        env_file=None,
        case_sensitive=False,
        extra="ignore"
    )


def get_client_settings() -> ClientSettings:
    return ClientSettings()


def create_http_client(settings: Optional[ClientSettings] = None, **kwargs) -> httpx.AsyncClient:
    """Build the shared async HTTP client used by the auth provider and record store."""
    settings = settings or get_client_settings()
    return httpx.AsyncClient(
        base_url=settings.api_base_url,
        timeout=settings.request_timeout,
        **kwargs,
    )
