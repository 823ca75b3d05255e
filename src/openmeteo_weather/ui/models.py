"""Display rows derived from forecast outcomes."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class CurrentRow:
    temperature: str
    wind: str
    precipitation: str
    real_feel: str | None = None
    recommendation: str | None = None


@dataclass(slots=True, frozen=True)
class DailyRow:
    date: str
    temperature_range: str
    precipitation: str


@dataclass(slots=True, frozen=True)
class HourlyRow:
    time: str
    temperature: str
    wind: str
    real_feel: str
    uv_index: str
    precipitation: str
