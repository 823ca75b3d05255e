"""Derived weather metrics: real-feel index, precipitation category, recommendation."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from .units import celsius_to_fahrenheit, kmh_to_mph, mm_to_inches


class PrecipitationCategory(str, Enum):
    NONE = "None"
    RAINING = "Raining"
    SNOWING = "Snowing"


class Recommendation(str, Enum):
    COLD = "cold, wear a jacket"
    HOT = "hot, stay hydrated"
    WINDY = "windy, secure loose items"
    UMBRELLA = "bring an umbrella"
    ENJOY = "enjoy the weather"


class DerivedMetrics(BaseModel):
    """Display-unit metrics computed from one observation."""

    model_config = ConfigDict(frozen=True)

    temperature_f: float
    windspeed_mph: float
    apparent_temperature_f: float
    precipitation_in: float
    precipitation_category: PrecipitationCategory
    recommendation: Recommendation


def compute_apparent_temperature(temp_f: float, wind_mph: float) -> float:
    """Wind-chill style "real feel" from Fahrenheit temperature and MPH wind.

    Negative wind speeds are clamped to zero; a fractional power of a negative
    base has no real value.
    """
    wind_mph = max(wind_mph, 0.0)
    wind_term = wind_mph**0.16
    return 35.74 + 0.6215 * temp_f - 35.75 * wind_term + 0.4275 * temp_f * wind_term


def classify_precipitation(precipitation_mm: float) -> PrecipitationCategory:
    if precipitation_mm > 1:
        return PrecipitationCategory.SNOWING
    if precipitation_mm > 0:
        return PrecipitationCategory.RAINING
    return PrecipitationCategory.NONE


def recommend(temp_f: float, wind_mph: float, precipitation_mm: float) -> Recommendation:
    """Pick one suggestion; temperature extremes outrank wind, wind outranks precipitation."""
    if temp_f < 50:
        return Recommendation.COLD
    if temp_f > 85:
        return Recommendation.HOT
    if wind_mph > 15:
        return Recommendation.WINDY
    if precipitation_mm > 0:
        return Recommendation.UMBRELLA
    return Recommendation.ENJOY


def derive_metrics(
    temperature_c: float,
    windspeed_kmh: float,
    precipitation_mm: float,
    *,
    full_precision: bool = False,
) -> DerivedMetrics:
    """Convert one observation to display units and derive the remaining metrics.

    Unless ``full_precision`` is set, Fahrenheit and MPH are rounded to one
    decimal for display and for the real-feel index, so the index agrees with
    the values a reader sees on screen. The recommendation always uses the
    unrounded values.
    """
    exact_temp_f = celsius_to_fahrenheit(temperature_c)
    exact_wind_mph = kmh_to_mph(windspeed_kmh)
    temp_f, wind_mph = exact_temp_f, exact_wind_mph
    if not full_precision:
        temp_f = round(exact_temp_f, 1)
        wind_mph = round(exact_wind_mph, 1)
    return DerivedMetrics(
        temperature_f=temp_f,
        windspeed_mph=wind_mph,
        apparent_temperature_f=compute_apparent_temperature(temp_f, wind_mph),
        precipitation_in=mm_to_inches(precipitation_mm),
        precipitation_category=classify_precipitation(precipitation_mm),
        recommendation=recommend(exact_temp_f, exact_wind_mph, precipitation_mm),
    )
