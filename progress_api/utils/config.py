"""
Configuration management using Pydantic Settings.
Loads environment variables from .env file.
"""

from functools import lru_cache
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars not defined in the model
    )

    # Notion Configuration (the integration token arrives per request)
    notion_base_url: str = Field(default="https://api.notion.com", description="Notion REST API base URL")
    notion_version: str = Field(default="2022-06-28", description="Value of the Notion-Version header")
    default_property_name: str = Field(default="상태", description="Status property counted when none is given")
    default_condition: str = Field(default="완료", description="Status name that counts as completed")

    # HTTP Client Configuration
    request_timeout: int = Field(default=10, description="Request timeout in seconds")

    # Visit Counter Configuration
    counter_backend: str = Field(default="redis", description="redis|memory")
    redis_url: str = Field(default="redis://localhost:6379/0", description="Redis connection URL")
    visit_timezone: str = Field(default="Asia/Seoul", description="Time zone used to bucket daily visits")

    # CORS
    cors_allow_methods: str = Field(default="GET, OPTIONS")
    cors_allow_headers: str = Field(default="Content-Type")

    # Logging
    log_level: str = Field(default="INFO")
    log_dir: Optional[str] = Field(default=None, description="Directory for JSON log files (console only when unset)")

    @field_validator("visit_timezone")
    @classmethod
    def check_timezone(cls, value: str) -> str:
        """Reject unknown IANA zone names at startup."""
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown time zone: {value!r}")
        return value


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to avoid reading .env file on every request.
    """
    return Settings()
