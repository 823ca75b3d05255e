"""Coordinate validation and parallel-series alignment tests."""

from __future__ import annotations

import math
from decimal import Decimal
from fractions import Fraction
from typing import Any

import pytest

from openmeteo_weather.exceptions import CoordinateOutOfRange, InvalidCoordinate, MalformedSeries
from openmeteo_weather.weather.aligner import align, align_daily, align_hourly, iter_align
from openmeteo_weather.weather.models import (
    UNAVAILABLE,
    DailyForecastSeries,
    HourlyForecastSeries,
)
from openmeteo_weather.weather.validation import validate_coordinate


@pytest.mark.parametrize(
    ("lat", "lon"),
    [(0, 0), (-90, -180), (90, 180), (40.7128, -74.006), (-33.8688, 151.2093)],
)
def test_in_range_coordinates_returned_unchanged(lat: float, lon: float) -> None:
    coordinate = validate_coordinate(lat, lon)
    assert coordinate.latitude == lat
    assert coordinate.longitude == lon


@pytest.mark.parametrize(("lat", "lon"), [(91, 0), (-91, 0), (0, 181), (0, -181), (91, 181)])
def test_out_of_range_coordinates_rejected(lat: float, lon: float) -> None:
    with pytest.raises(CoordinateOutOfRange):
        validate_coordinate(lat, lon)


def test_latitude_checked_before_longitude() -> None:
    with pytest.raises(CoordinateOutOfRange, match="Latitude out of range"):
        validate_coordinate(91, 181)
    with pytest.raises(CoordinateOutOfRange, match="Longitude out of range"):
        validate_coordinate(10, 181)


@pytest.mark.parametrize(
    ("lat", "lon", "label"),
    [
        (math.nan, 0, "latitude"),
        (0, math.inf, "longitude"),
        ("40.7", 0, "latitude"),
        (None, 0, "latitude"),
        (True, 0, "latitude"),
        (0, [1], "longitude"),
    ],
)
def test_non_numeric_coordinates_rejected(lat: Any, lon: Any, label: str) -> None:
    with pytest.raises(InvalidCoordinate, match=f"Invalid {label}"):
        validate_coordinate(lat, lon)


def test_align_preserves_order_and_length() -> None:
    rows = align({"time": ["t0", "t1", "t2", "t3", "t4"], "value": [5, 4, 3, 2, 1]})
    assert [row["time"] for row in rows] == ["t0", "t1", "t2", "t3", "t4"]
    assert [row["value"] for row in rows] == [5, 4, 3, 2, 1]


def test_align_length_mismatch_raises() -> None:
    with pytest.raises(MalformedSeries, match="time=5, value=4"):
        align({"time": ["a", "b", "c", "d", "e"], "value": [1, 2, 3, 4]})


def test_iter_align_checks_lengths_eagerly() -> None:
    with pytest.raises(MalformedSeries):
        iter_align({"a": [1], "b": []})


def test_align_empty_series() -> None:
    assert align({"time": [], "value": []}) == []
    assert align({}) == []


def test_optional_none_becomes_unavailable_but_required_none_passes_through() -> None:
    rows = align({"uv": [None, 2.0], "other": [None, 1]}, optional={"uv"})
    assert rows[0]["uv"] is UNAVAILABLE
    assert rows[0]["other"] is None
    assert rows[1]["uv"] == 2.0


def test_daily_end_to_end_records() -> None:
    series = DailyForecastSeries(
        time=["2024-01-01", "2024-01-02"],
        temp_min_c=[0, 5],
        temp_max_c=[10, 15],
        precipitation_sum_mm=[0, 2],
    )
    records = align_daily(series)

    summary = [
        {
            "date": record.date,
            "range": record.temperature_range,
            "precip": record.precipitation_sum_mm,
        }
        for record in records
    ]
    assert summary == [
        {"date": "2024-01-01", "range": "0°C-10°C", "precip": 0},
        {"date": "2024-01-02", "range": "5°C-15°C", "precip": 2},
    ]


def test_daily_length_mismatch_raises() -> None:
    series = DailyForecastSeries(
        time=["2024-01-01", "2024-01-02"],
        temp_min_c=[0],
        temp_max_c=[10, 15],
        precipitation_sum_mm=[0, 2],
    )
    with pytest.raises(MalformedSeries):
        align_daily(series)


def test_hourly_records_tag_missing_uv_and_weather_code() -> None:
    series = HourlyForecastSeries(
        time=["2024-06-01T00:00", "2024-06-01T01:00"],
        temperature_c=[15.2, 14.8],
        windspeed_kmh=[8.0, 7.5],
        precipitation_mm=[0.0, 0.3],
        uv_index=[None, 0.0],
        weather_code=[3, None],
    )
    records = align_hourly(series)

    assert records[0].uv_index is UNAVAILABLE
    assert records[1].uv_index == 0.0
    assert records[0].weather_code == 3
    assert records[1].weather_code is UNAVAILABLE
    assert records[1].parsed_time() is not None
    assert records[1].parsed_time().hour == 1


def test_hourly_without_weather_codes() -> None:
    series = HourlyForecastSeries(
        time=["2024-06-01T00:00"],
        temperature_c=[15.2],
        windspeed_kmh=[8.0],
        precipitation_mm=[0.0],
        uv_index=[4.5],
    )
    (record,) = align_hourly(series)
    assert record.weather_code is UNAVAILABLE
    assert record.uv_index == 4.5


def test_other_real_number_types_accepted() -> None:
    coordinate = validate_coordinate(Decimal("45.5"), Fraction(-73, 2))
    assert coordinate.latitude == 45.5
    assert coordinate.longitude == -36.5


@pytest.mark.parametrize("value", [Decimal("NaN"), Decimal("sNaN"), Decimal("Infinity"), 1j])
def test_non_finite_or_complex_values_rejected(value: Any) -> None:
    with pytest.raises(InvalidCoordinate, match="Invalid latitude"):
        validate_coordinate(value, 0)
