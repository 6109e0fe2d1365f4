"""Configuration management for crudbus."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from crudbus.logging_utils import configure_logging


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="CRUDBUS_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # HTTP Configuration
    base_url: Optional[str] = Field(None, description="Base URL prepended to relative endpoint templates")
    timeout_seconds: float = Field(default=30.0, description="Timeout for remote calls in seconds")
    headers: dict[str, str] = Field(default_factory=dict, description="Extra headers sent with every request")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Log level")
    log_profile: Literal["default", "console"] = Field(default="default", description="Log output profile")


def get_settings(**overrides: Any) -> Settings:
    """Get application settings and configure logging from them.

    Args:
        overrides: Values taking precedence over environment and .env file

    Returns:
        Settings instance
    """
    settings = Settings(**{key: value for key, value in overrides.items() if value is not None})

    configure_logging(profile=settings.log_profile, level=settings.log_level)

    return settings
