"""Application configuration."""

import os

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

DEFAULT_CORS_ORIGINS = "http://localhost:3000,https://dreswap-ui.vercel.app"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    gemini_api_key: str = Field(
        validation_alias=AliasChoices(
            "GOOGLE_API_KEY", "GEMINI_API_KEY", "gemini_api_key"
        )
    )
    gemini_text_model: str = "gemini-2.5-flash"
    gemini_image_model: str = "gemini-2.5-flash-image-preview"
    style_count: int = Field(default=5, ge=1)
    max_upload_bytes: int = 10 * 1024 * 1024
    session_capacity: int | None = Field(default=1000, ge=1)
    ai_timeout_seconds: float = Field(default=120.0, gt=0)
    cors_allowed_origins: str = DEFAULT_CORS_ORIGINS
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 8081
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
        populate_by_name=True,
    )


def parse_allowed_origins(raw: str | None) -> list[str]:
    """Parse comma separated CORS origins from env."""
    if raw is None:
        return []
    cleaned = raw.strip()
    if cleaned == "*":
        return ["*"]
    origins: list[str] = []
    for chunk in cleaned.split(","):
        value = chunk.strip().rstrip("/")
        if value and value not in origins:
            origins.append(value)
    return origins
