"""Configuration management for wcpe-now.

This module handles all configuration settings using environment variables
with sensible defaults. Values can also be placed in a local .env file.
"""

import pytz
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="WCPE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Station Configuration
    base_url: str = Field(
        default="https://theclassicalstation.org",
        description="Base URL of the station website hosting playlist pages"
    )

    station_timezone: str = Field(
        default="US/Eastern",
        description="Timezone the station publishes its schedule in"
    )

    request_timeout: int = Field(
        default=30,
        ge=1,
        le=120,
        description="Request timeout in seconds for playlist downloads"
    )

    # Logging Configuration
    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string"
    )

    log_file: str = Field(
        default="",
        description="Optional path of a rotating log file"
    )

    # Application Configuration
    app_name: str = Field(
        default="wcpe-now",
        description="Application name for logging"
    )

    app_version: str = Field(
        default="0.1.0",
        description="Application version"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level is one of the standard levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v.upper()

    @field_validator("station_timezone")
    @classmethod
    def validate_station_timezone(cls, v):
        """Ensure the timezone name is known to pytz."""
        try:
            pytz.timezone(v)
        except pytz.UnknownTimeZoneError:
            raise ValueError(f"Unknown station timezone: {v}")
        return v

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v):
        """Strip trailing slashes so page paths can be appended."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must be an http(s) URL")
        return v.rstrip("/")


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    if not hasattr(get_settings, "_settings"):
        get_settings._settings = Settings()
    return get_settings._settings
