"""
Runtime configuration helpers for the Today Viral service.

Loads DATABASE_URL, the hosted auth settings and other variables from the
.env file located in the project root.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve the project root
BASE_DIR = Path(__file__).resolve().parents[1]

# Absolute path to .env
ENV_PATH = BASE_DIR / ".env"

# Load .env defaults without overriding environment variables provided by the platform
load_dotenv(dotenv_path=ENV_PATH, override=False)


class Settings(BaseSettings):
    # Required field: the hosted PostgreSQL connection string
    database_url: str = Field(..., alias="DATABASE_URL")

    app_name: str = Field(default="Today Viral", alias="APP_NAME")
    api_version: str = Field(default="0.1.0", alias="API_VERSION")
    public_base_url: str = Field(default="http://localhost:8000", alias="PUBLIC_BASE_URL")
    cors_origins: str | None = Field(default=None, alias="CORS_ORIGINS")
    log_level: str = Field(default="info", alias="LOG_LEVEL")
    server_port: int = Field(default=8000, alias="TODAY_VIRAL_PORT")

    # Hosted auth subsystem
    auth_url: str = Field(default="http://localhost:9999", alias="AUTH_URL")
    auth_api_key: str | None = Field(default=None, alias="AUTH_API_KEY")
    auth_jwt_audience: str = Field(default="authenticated", alias="AUTH_JWT_AUDIENCE")
    auth_jwt_algorithm: str = Field(default="HS256", alias="AUTH_JWT_ALGORITHM")

    # Outbound HTTP (auth provider, oEmbed lookups)
    http_timeout: float = Field(default=10.0, alias="HTTP_TIMEOUT")
    youtube_oembed_url: str = Field(default="https://www.youtube.com/oembed", alias="YOUTUBE_OEMBED_URL")
    tiktok_oembed_url: str = Field(default="https://www.tiktok.com/oembed", alias="TIKTOK_OEMBED_URL")

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
