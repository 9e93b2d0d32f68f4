"""Application configuration."""

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    api_base_url: str
    api_token: str | None = None
    max_photos: int = Field(default=20, ge=1)
    request_timeout_seconds: float = 30.0
    compression_max_dimension: int = Field(default=2048, ge=1)
    compression_target_bytes: int = Field(default=2 * 1024 * 1024, ge=1)
    preview_dir: Path | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_listing_id(raw: str | None) -> str | None:
    """Normalize an optional listing id; blank values mean no listing yet."""
    if raw is None:
        return None
    cleaned = raw.strip()
    return cleaned or None
