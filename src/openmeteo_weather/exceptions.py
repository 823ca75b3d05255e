"""Application exception classes."""

from __future__ import annotations


class ConfigError(Exception):
    """Raised when configuration is invalid or incomplete."""


class WeatherError(Exception):
    """Base class for every failure surfaced by the forecast request policy."""

    code = "weather_error"
    user_message = "Failed to load weather data."

    def describe(self) -> str:
        """Return the single user-facing message for this failure."""
        return self.user_message


class InvalidCoordinate(WeatherError):
    """Raised when latitude or longitude is not a finite number."""

    code = "invalid_coordinate"

    def describe(self) -> str:
        return str(self)


class CoordinateOutOfRange(WeatherError):
    """Raised when latitude or longitude falls outside its valid range."""

    code = "coordinate_out_of_range"

    def describe(self) -> str:
        return str(self)


class PermissionDenied(WeatherError):
    """Raised by location sources when access to the position is refused."""

    code = "permission_denied"
    user_message = "Permission to access location was denied."


class TransportError(WeatherError):
    """Raised for timeouts, network failures and non-2xx responses."""

    code = "transport_error"
    user_message = "Could not retrieve weather. Check your internet connection."

    def __init__(
        self,
        message: str,
        *,
        category: str = "network",
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.category = category
        self.status_code = status_code


class MalformedResponse(WeatherError):
    """Raised when a payload lacks the expected top-level field or shape."""

    code = "malformed_response"
    user_message = "Invalid data format from API"


class MalformedSeries(WeatherError):
    """Raised when parallel series arrays do not share one length."""

    code = "malformed_series"
    user_message = "Forecast data was inconsistent. Please try again."


class ForecastStateError(WeatherError):
    """Raised when a policy transition is requested from the wrong state."""

    code = "invalid_state"
    user_message = "No previous weather request to retry."
