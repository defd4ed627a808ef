"""
Configuration Settings

This module defines application configuration using Pydantic Settings.
All configuration is loaded from environment variables or .env file.

Design Decisions:
- Uses pydantic-settings for type-safe configuration
- Supports multiple environments (production, staging, dev)
- Mappings live in process memory only, so there is no storage configuration
"""

from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["Settings", "settings"]


class EnvSettingsOptions(Enum):
    """Environment options for deployment."""
    production = "production"
    staging = "staging"
    development = "dev"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Project Configuration
    ENV_SETTING: EnvSettingsOptions = Field(
        default=EnvSettingsOptions.development,
        description="Environment setting (production, staging, dev)"
    )

    # Server Configuration
    HOST: str = Field(
        default="0.0.0.0",
        description="Interface the HTTP server binds to"
    )
    PORT: int = Field(
        default=8080,
        description="Port the HTTP server listens on"
    )
    IDLE_TIMEOUT: int = Field(
        default=60,
        description="Seconds an idle keep-alive connection is held open"
    )
    CORS_ALLOW_ORIGINS: List[str] = Field(
        default=["*"],
        description="Origins allowed by the CORS middleware"
    )

    # Logging Configuration
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    LOG_JSON: bool = Field(
        default=False,
        description="Emit JSON-shaped log lines"
    )


settings = Settings()
