"""Configuration loading for the Konduto SDK.

This module provides centralized configuration management:
- Load settings from environment variables and .env files
- Validate configuration using pydantic
- Provide typed access to all settings
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class KondutoSettings(BaseSettings):
    """SDK configuration loaded from environment.

    Uses pydantic-settings for environment variable handling with
    .env file support via python-dotenv. Variables are prefixed with
    KONDUTO_, e.g. KONDUTO_API_KEY.
    """

    model_config = SettingsConfigDict(
        env_prefix="KONDUTO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API access
    api_key: str = Field(
        default="",
        description="Konduto API key (21 characters, T for test, P for production)",
    )
    api_version: Literal["v1"] = Field(
        default="v1",
        description="Konduto API version",
    )
    api_base_url: str = Field(
        default="https://api.konduto.com",
        description="Konduto API base URL",
    )
    timeout_seconds: float = Field(
        default=30.0,
        description="Timeout applied to every request in seconds",
    )

    # Logging configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Log level",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log format",
    )

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Ensure timeout is positive."""
        if v <= 0:
            raise ValueError("timeout_seconds must be positive")
        return v

    @field_validator("api_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Ensure the base URL is an http(s) URL without trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("api_base_url must start with http:// or https://")
        return v.rstrip("/")


def load_settings(env_file: str | None = None) -> KondutoSettings:
    """Load SDK settings from environment.

    Args:
        env_file: Optional path to .env file. If not provided,
                 uses the default .env in the current directory.

    Returns:
        Validated KondutoSettings instance.

    Raises:
        ValidationError: If settings validation fails.
    """
    if env_file:
        return KondutoSettings(_env_file=env_file)  # type: ignore[call-arg]
    return KondutoSettings()


__all__ = ["KondutoSettings", "load_settings"]
