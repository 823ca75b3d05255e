"""Provider-agnostic weather interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

from pydantic import BaseModel

from .models import Coordinate, ForecastMode


class WeatherFetchResult(BaseModel):
    """Raw decoded payload plus the request that produced it."""

    mode: ForecastMode
    source_url: str
    params: dict[str, Any]
    payload: dict[str, Any]
    retrieved_at: datetime


class WeatherProvider(ABC):
    """Base contract for the HTTP collaborator used by the request policy."""

    @abstractmethod
    def fetch_forecast(self, coordinate: Coordinate, mode: ForecastMode) -> WeatherFetchResult:
        """Issue exactly one request and return the decoded JSON object."""

    @abstractmethod
    def close(self) -> None:
        """Release provider resources."""
