"""Location sources that hand a coordinate pair to the request policy."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..exceptions import PermissionDenied


class LocationProvider(ABC):
    """Stand-in for a device geolocation API."""

    @abstractmethod
    def current_position(self) -> tuple[float, float]:
        """Return ``(latitude, longitude)`` or raise PermissionDenied."""


class FixedLocationProvider(LocationProvider):
    """Reports a configured position; refuses when none was configured."""

    def __init__(self, latitude: float | None, longitude: float | None) -> None:
        self.latitude = latitude
        self.longitude = longitude

    def current_position(self) -> tuple[float, float]:
        if self.latitude is None or self.longitude is None:
            raise PermissionDenied(
                "No location configured: pass --lat/--lon or set WEATHER_DEFAULT_LAT/LON."
            )
        return self.latitude, self.longitude
