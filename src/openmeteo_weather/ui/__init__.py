"""Terminal presentation of forecast outcomes."""

from .models import CurrentRow, DailyRow, HourlyRow
from .rendering import current_row, daily_row, hourly_row, render_outcome

__all__ = [
    "CurrentRow",
    "DailyRow",
    "HourlyRow",
    "current_row",
    "daily_row",
    "hourly_row",
    "render_outcome",
]
