"""Zip parallel time-series arrays into ordered per-timestamp records."""

from __future__ import annotations

from collections.abc import Collection, Iterator, Mapping, Sequence
from typing import Any

from ..exceptions import MalformedSeries
from .models import (
    UNAVAILABLE,
    DailyForecastSeries,
    DailyRecord,
    HourlyForecastSeries,
    HourlyRecord,
)


def _check_lengths(columns: Mapping[str, Sequence[Any]]) -> int:
    lengths = {name: len(values) for name, values in columns.items()}
    if len(set(lengths.values())) > 1:
        detail = ", ".join(f"{name}={length}" for name, length in lengths.items())
        raise MalformedSeries(f"Series arrays differ in length: {detail}")
    return next(iter(lengths.values()), 0)


def iter_align(
    columns: Mapping[str, Sequence[Any]],
    optional: Collection[str] = (),
) -> Iterator[dict[str, Any]]:
    """Yield one dict per index, in source order.

    Lengths are checked before the first row is produced. ``None`` entries of
    columns named in ``optional`` become ``UNAVAILABLE``.
    """
    size = _check_lengths(columns)

    def _rows() -> Iterator[dict[str, Any]]:
        for index in range(size):
            row: dict[str, Any] = {}
            for name, values in columns.items():
                value = values[index]
                if value is None and name in optional:
                    value = UNAVAILABLE
                row[name] = value
            yield row

    return _rows()


def align(
    columns: Mapping[str, Sequence[Any]],
    optional: Collection[str] = (),
) -> list[dict[str, Any]]:
    return list(iter_align(columns, optional))


def align_daily(series: DailyForecastSeries) -> list[DailyRecord]:
    rows = align(
        {
            "date": series.time,
            "temp_min_c": series.temp_min_c,
            "temp_max_c": series.temp_max_c,
            "precipitation_sum_mm": series.precipitation_sum_mm,
        }
    )
    return [DailyRecord(**row) for row in rows]


def align_hourly(series: HourlyForecastSeries) -> list[HourlyRecord]:
    columns: dict[str, Sequence[Any]] = {
        "time": series.time,
        "temperature_c": series.temperature_c,
        "windspeed_kmh": series.windspeed_kmh,
        "precipitation_mm": series.precipitation_mm,
        "uv_index": series.uv_index,
    }
    # Weather codes are an optional column; an absent array means every hour lacks one.
    if series.weather_code:
        columns["weather_code"] = series.weather_code
    rows = align(columns, optional={"uv_index", "weather_code"})
    return [HourlyRecord(**row) for row in rows]
