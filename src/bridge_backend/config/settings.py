"""
Module: settings.py
Description: Application configuration using pydantic-settings.

Configures the bridge backend from environment variables with
validation and defaults. Supports .env files for local development.
"""

import json
from typing import Annotated, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


def _split_list(value):
    """Accept a JSON list or a comma-separated string."""
    if value is None:
        return []
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return []
        if text.startswith('['):
            value = json.loads(text)
        else:
            value = text.split(',')
    return [str(item).strip() for item in value if str(item).strip()]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application settings
    app_name: str = Field(default="Bridge Backend", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    log_level: str = Field(default="INFO", description="Logging level")
    stage: str = Field(default="dev", description="Deployment stage")

    # Database settings
    database_url: Optional[str] = Field(
        default=None,
        description="PostgreSQL connection string (required by the reset utility)"
    )

    # API authorization settings
    api_key: Optional[str] = Field(
        default=None,
        description="Shared secret expected in the x-api-key header; unset disables the check"
    )
    api_allowed_origins: Annotated[List[str], NoDecode] = Field(
        default_factory=list,
        description="Base URLs whose Origin/Referer is trusted without an API key"
    )

    # CORS settings
    cors_allow_origins: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed by the CORS middleware"
    )

    @field_validator('api_key', 'database_url')
    @classmethod
    def blank_as_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat empty strings from the environment as unset."""
        if v is None or not v.strip():
            return None
        return v

    @field_validator('api_allowed_origins', 'cors_allow_origins', mode='before')
    @classmethod
    def parse_origin_list(cls, v):
        """Parse comma-separated or JSON list values."""
        return _split_list(v)

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid logging level."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of: {', '.join(valid_levels)}")
        return v.upper()


# Global settings instance
settings = Settings()
