"""Typed settings loader for the Open-Meteo weather engine."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigError


class Settings(BaseSettings):
    """Application settings loaded from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_env: Literal["dev", "staging", "prod"] = Field(default="dev", alias="APP_ENV")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", alias="LOG_LEVEL"
    )

    open_meteo_base_url: str = Field(
        default="https://api.open-meteo.com/v1/forecast",
        alias="OPEN_METEO_BASE_URL",
    )
    open_meteo_api_key: str | None = Field(
        default=None, alias="OPEN_METEO_API_KEY", repr=False
    )
    weather_user_agent: str = Field(
        default="openmeteo-weather/0.1",
        alias="WEATHER_USER_AGENT",
    )

    weather_current_timeout_seconds: float = Field(
        default=10.0, alias="WEATHER_CURRENT_TIMEOUT_SECONDS"
    )
    weather_daily_timeout_seconds: float = Field(
        default=10.0, alias="WEATHER_DAILY_TIMEOUT_SECONDS"
    )
    weather_hourly_timeout_seconds: float = Field(
        default=10.0, alias="WEATHER_HOURLY_TIMEOUT_SECONDS"
    )

    weather_default_lat: float | None = Field(default=None, alias="WEATHER_DEFAULT_LAT")
    weather_default_lon: float | None = Field(default=None, alias="WEATHER_DEFAULT_LON")
    weather_max_print: int = Field(default=24, alias="WEATHER_MAX_PRINT")
    weather_full_precision: bool = Field(default=False, alias="WEATHER_FULL_PRECISION")

    @field_validator(
        "weather_default_lat",
        "weather_default_lon",
        "open_meteo_api_key",
        mode="before",
    )
    @classmethod
    def empty_string_to_none(cls, value: Any) -> Any:
        """Treat empty env-string values as unset."""
        if isinstance(value, str) and value.strip() == "":
            return None
        return value

    @model_validator(mode="after")
    def validate_ranges(self) -> Settings:
        """Validate timeouts, default coordinates and print limits."""
        if not self.open_meteo_base_url.startswith(("http://", "https://")):
            raise ValueError("OPEN_METEO_BASE_URL must be an http(s) URL.")
        if not self.weather_user_agent.strip():
            raise ValueError("WEATHER_USER_AGENT must not be empty.")
        if self.weather_current_timeout_seconds <= 0:
            raise ValueError("WEATHER_CURRENT_TIMEOUT_SECONDS must be > 0.")
        if self.weather_daily_timeout_seconds <= 0:
            raise ValueError("WEATHER_DAILY_TIMEOUT_SECONDS must be > 0.")
        if self.weather_hourly_timeout_seconds <= 0:
            raise ValueError("WEATHER_HOURLY_TIMEOUT_SECONDS must be > 0.")
        if self.weather_max_print <= 0:
            raise ValueError("WEATHER_MAX_PRINT must be > 0.")

        has_default_lat = self.weather_default_lat is not None
        has_default_lon = self.weather_default_lon is not None
        if has_default_lat != has_default_lon:
            raise ValueError("WEATHER_DEFAULT_LAT and WEATHER_DEFAULT_LON must be set together.")
        if has_default_lat and not (-90 <= self.weather_default_lat <= 90):
            raise ValueError("WEATHER_DEFAULT_LAT must be between -90 and 90.")
        if has_default_lon and not (-180 <= self.weather_default_lon <= 180):
            raise ValueError("WEATHER_DEFAULT_LON must be between -180 and 180.")
        return self

    def timeout_for(self, mode: str) -> float:
        """Return the request timeout configured for one forecast mode."""
        if mode == "daily":
            return self.weather_daily_timeout_seconds
        if mode == "hourly":
            return self.weather_hourly_timeout_seconds
        return self.weather_current_timeout_seconds

    def safe_summary(self) -> dict[str, Any]:
        """Return config summary safe for logging (no credentials)."""
        return {
            "app_env": self.app_env,
            "base_url": self.open_meteo_base_url,
            "api_key_configured": self.open_meteo_api_key is not None,
            "current_timeout_seconds": self.weather_current_timeout_seconds,
            "daily_timeout_seconds": self.weather_daily_timeout_seconds,
            "hourly_timeout_seconds": self.weather_hourly_timeout_seconds,
            "default_location_configured": self.weather_default_lat is not None,
            "full_precision": self.weather_full_precision,
        }


def load_settings() -> Settings:
    """Load and validate settings, raising ConfigError on failure."""
    try:
        return Settings()
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed reading environment/.env: {exc}") from exc
