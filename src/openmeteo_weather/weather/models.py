"""Typed models for coordinates, raw series and aligned forecast records."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from ..metrics import DerivedMetrics

ForecastMode = Literal["current", "daily", "hourly"]
FetchStatus = Literal["loading", "ready", "error"]


class Unavailable(Enum):
    """Tag for an optional series entry the provider did not report."""

    UNAVAILABLE = "unavailable"

    def __str__(self) -> str:
        return "N/A"


UNAVAILABLE = Unavailable.UNAVAILABLE


class FetchState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    REQUESTING = "requesting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class Coordinate(BaseModel):
    """Validated latitude/longitude pair."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class CurrentObservation(BaseModel):
    """Normalized `current_weather` block."""

    model_config = ConfigDict(frozen=True)

    temperature_c: float
    windspeed_kmh: float
    precipitation_mm: float = 0.0
    observed_at: str | None = None


class DailyForecastSeries(BaseModel):
    """Parallel daily arrays as delivered by the provider."""

    time: list[str]
    temp_min_c: list[float]
    temp_max_c: list[float]
    precipitation_sum_mm: list[float]


class HourlyForecastSeries(BaseModel):
    """Parallel hourly arrays as delivered by the provider."""

    time: list[str]
    temperature_c: list[float]
    windspeed_kmh: list[float]
    precipitation_mm: list[float]
    uv_index: list[float | None]
    weather_code: list[int | None] = Field(default_factory=list)


class DailyRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: str
    temp_min_c: float
    temp_max_c: float
    precipitation_sum_mm: float

    @property
    def temperature_range(self) -> str:
        return f"{self.temp_min_c:g}°C-{self.temp_max_c:g}°C"


class HourlyRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    time: str
    temperature_c: float
    windspeed_kmh: float
    precipitation_mm: float
    uv_index: float | Unavailable = UNAVAILABLE
    weather_code: int | Unavailable = UNAVAILABLE

    def parsed_time(self) -> datetime | None:
        """Return the local timestamp, or None when the provider string is unparseable."""
        try:
            return datetime.fromisoformat(self.time)
        except ValueError:
            return None


class ForecastOutcome(BaseModel):
    """Result of one policy attempt, ready for presentation."""

    mode: ForecastMode
    status: FetchStatus
    state: FetchState
    request_token: int
    coordinate: Coordinate | None = None
    current: CurrentObservation | None = None
    metrics: DerivedMetrics | None = None
    daily: list[DailyRecord] = Field(default_factory=list)
    hourly: list[HourlyRecord] = Field(default_factory=list)
    hourly_metrics: list[DerivedMetrics] = Field(default_factory=list)
    error_code: str | None = None
    message: str | None = None
    retryable: bool = False
    completed_at: datetime | None = None
