"""Open-Meteo fetch, validation, alignment and request-policy components."""

from .aligner import align, align_daily, align_hourly, iter_align
from .base import WeatherFetchResult, WeatherProvider
from .location import FixedLocationProvider, LocationProvider
from .models import (
    UNAVAILABLE,
    Coordinate,
    CurrentObservation,
    DailyForecastSeries,
    DailyRecord,
    FetchState,
    ForecastOutcome,
    HourlyForecastSeries,
    HourlyRecord,
    Unavailable,
)
from .openmeteo import OpenMeteoWeatherProvider
from .policy import ForecastRequestPolicy
from .validation import validate_coordinate

__all__ = [
    "UNAVAILABLE",
    "Coordinate",
    "CurrentObservation",
    "DailyForecastSeries",
    "DailyRecord",
    "FetchState",
    "FixedLocationProvider",
    "ForecastOutcome",
    "ForecastRequestPolicy",
    "HourlyForecastSeries",
    "HourlyRecord",
    "LocationProvider",
    "OpenMeteoWeatherProvider",
    "Unavailable",
    "WeatherFetchResult",
    "WeatherProvider",
    "align",
    "align_daily",
    "align_hourly",
    "iter_align",
    "validate_coordinate",
]
