"""Turn forecast outcomes into display rows and rich tables."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from ..metrics import DerivedMetrics, PrecipitationCategory
from ..weather.models import (
    CurrentObservation,
    DailyRecord,
    ForecastOutcome,
    HourlyRecord,
    Unavailable,
)
from .models import CurrentRow, DailyRow, HourlyRow

_PRECIPITATION_LABELS = {
    PrecipitationCategory.SNOWING: "Snowing ❄️",
    PrecipitationCategory.RAINING: "Raining 🌧️",
    PrecipitationCategory.NONE: "No Precipitation ☀️",
}


def current_row(
    observation: CurrentObservation, metrics: DerivedMetrics, *, compact: bool = False
) -> CurrentRow:
    """Build the current-conditions row.

    The compact variant keeps wind in km/h and omits real feel and recommendation.
    """
    precipitation = _PRECIPITATION_LABELS[metrics.precipitation_category]
    if compact:
        return CurrentRow(
            temperature=f"{metrics.temperature_f:.1f}°F",
            wind=f"{observation.windspeed_kmh:g} km/h",
            precipitation=precipitation,
        )
    return CurrentRow(
        temperature=f"{metrics.temperature_f:.1f}°F",
        wind=f"{metrics.windspeed_mph:.1f} mph",
        precipitation=precipitation,
        real_feel=f"{metrics.apparent_temperature_f:.1f}°F",
        recommendation=metrics.recommendation.value,
    )


def daily_row(record: DailyRecord) -> DailyRow:
    return DailyRow(
        date=record.date,
        temperature_range=record.temperature_range,
        precipitation=f"{record.precipitation_sum_mm:g} mm",
    )


def hourly_row(record: HourlyRecord, metrics: DerivedMetrics) -> HourlyRow:
    parsed = record.parsed_time()
    uv_index = record.uv_index
    return HourlyRow(
        time=parsed.strftime("%H:%M") if parsed is not None else record.time,
        temperature=f"{metrics.temperature_f:.1f}°F",
        wind=f"{metrics.windspeed_mph:.1f} mph",
        real_feel=f"{metrics.apparent_temperature_f:.1f}°F",
        uv_index=str(uv_index) if isinstance(uv_index, Unavailable) else f"{uv_index:.0f}",
        precipitation=f"{metrics.precipitation_in:.2f} in",
    )


def render_outcome(
    console: Console,
    outcome: ForecastOutcome,
    *,
    max_print: int,
    compact: bool = False,
) -> None:
    """Print the status line and the table for one outcome."""
    location = (
        f"({outcome.coordinate.latitude:.4f}, {outcome.coordinate.longitude:.4f})"
        if outcome.coordinate is not None
        else "unknown"
    )
    console.print(f"status={outcome.status} mode={outcome.mode} location={location}")

    if outcome.status == "error":
        console.print(f"[red]{outcome.message}[/red]")
        return

    if (
        outcome.mode == "current"
        and outcome.current is not None
        and outcome.metrics is not None
    ):
        row = current_row(outcome.current, outcome.metrics, compact=compact)
        table = Table(title="Current Weather")
        table.add_column("Temperature")
        table.add_column("Wind")
        if not compact:
            table.add_column("Real Feel")
        table.add_column("Precipitation")
        if not compact:
            table.add_column("Recommendation", overflow="fold")
            table.add_row(
                row.temperature, row.wind, row.real_feel, row.precipitation, row.recommendation
            )
        else:
            table.add_row(row.temperature, row.wind, row.precipitation)
        console.print(table)
        return

    if outcome.mode == "daily":
        if not outcome.daily:
            console.print("No forecast days found.")
            return
        table = Table(title="5-Day Forecast")
        table.add_column("Date")
        table.add_column("Temperature")
        table.add_column("Precipitation")
        for record in outcome.daily[:max_print]:
            row = daily_row(record)
            table.add_row(row.date, row.temperature_range, row.precipitation)
        console.print(table)
        return

    if not outcome.hourly:
        console.print("No forecast hours found.")
        return
    table = Table(title="Hourly Forecast")
    for column in ("Time", "Temp", "Wind", "Real Feel", "UV Index", "Precip"):
        table.add_column(column)
    for record, metrics in list(zip(outcome.hourly, outcome.hourly_metrics))[:max_print]:
        row = hourly_row(record, metrics)
        table.add_row(
            row.time, row.temperature, row.wind, row.real_feel, row.uv_index, row.precipitation
        )
    console.print(table)
