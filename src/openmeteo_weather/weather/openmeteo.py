"""Open-Meteo (api.open-meteo.com) weather provider implementation."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

import httpx
from pydantic import ValidationError

from ..config import Settings
from ..exceptions import MalformedResponse, TransportError
from ..redaction import sanitize_for_logging, sanitize_text
from .base import WeatherFetchResult, WeatherProvider
from .models import (
    Coordinate,
    CurrentObservation,
    DailyForecastSeries,
    ForecastMode,
    HourlyForecastSeries,
)

DAILY_FIELDS = "temperature_2m_max,temperature_2m_min,precipitation_sum"
HOURLY_FIELDS = "temperature_2m,precipitation,weathercode,windspeed_10m,uv_index"

RESPONSE_FIELDS: dict[str, str] = {
    "current": "current_weather",
    "daily": "daily",
    "hourly": "hourly",
}


def build_params(
    coordinate: Coordinate, mode: ForecastMode, api_key: str | None = None
) -> dict[str, Any]:
    """Build the query parameters for one forecast mode."""
    params: dict[str, Any]
    if mode == "current":
        params = {
            "latitude": coordinate.latitude,
            "longitude": coordinate.longitude,
            "current_weather": "true",
            "precipitation": "true",
        }
    elif mode == "daily":
        params = {
            "latitude": f"{coordinate.latitude:.6f}",
            "longitude": f"{coordinate.longitude:.6f}",
            "daily": DAILY_FIELDS,
            "timezone": "auto",
            "forecast_days": 5,
        }
    elif mode == "hourly":
        params = {
            "latitude": coordinate.latitude,
            "longitude": coordinate.longitude,
            "hourly": HOURLY_FIELDS,
            "forecast_days": 1,
            "timezone": "auto",
        }
    else:
        raise ValueError(f"Unknown forecast mode {mode!r}.")
    if api_key:
        params["apikey"] = api_key
    return params


def extract_block(payload: dict[str, Any], mode: ForecastMode) -> dict[str, Any]:
    """Return the mode's top-level object or raise MalformedResponse."""
    field = RESPONSE_FIELDS[mode]
    block = payload.get(field)
    if not isinstance(block, dict):
        raise MalformedResponse(f"Open-Meteo payload missing '{field}' object.")
    return block


def parse_current(payload: dict[str, Any]) -> CurrentObservation:
    block = extract_block(payload, "current")
    precipitation = block.get("precipitation")
    try:
        return CurrentObservation(
            temperature_c=block["temperature"],
            windspeed_kmh=block["windspeed"],
            # current_weather often omits precipitation; absence reads as none.
            precipitation_mm=0.0 if precipitation is None else precipitation,
            observed_at=block.get("time"),
        )
    except KeyError as exc:
        raise MalformedResponse(
            f"Open-Meteo current_weather missing '{exc.args[0]}'."
        ) from exc
    except ValidationError as exc:
        raise MalformedResponse(f"Open-Meteo current_weather not parseable: {exc}") from exc


def _require_list(block: dict[str, Any], field: str, section: str) -> list[Any]:
    values = block.get(field)
    if not isinstance(values, list):
        raise MalformedResponse(f"Open-Meteo {section} payload missing '{field}' list.")
    return values


def parse_daily(payload: dict[str, Any]) -> DailyForecastSeries:
    block = extract_block(payload, "daily")
    try:
        return DailyForecastSeries(
            time=_require_list(block, "time", "daily"),
            temp_min_c=_require_list(block, "temperature_2m_min", "daily"),
            temp_max_c=_require_list(block, "temperature_2m_max", "daily"),
            precipitation_sum_mm=_require_list(block, "precipitation_sum", "daily"),
        )
    except ValidationError as exc:
        raise MalformedResponse(f"Open-Meteo daily arrays not parseable: {exc}") from exc


def parse_hourly(payload: dict[str, Any]) -> HourlyForecastSeries:
    block = extract_block(payload, "hourly")
    weather_code = block.get("weathercode")
    try:
        return HourlyForecastSeries(
            time=_require_list(block, "time", "hourly"),
            temperature_c=_require_list(block, "temperature_2m", "hourly"),
            windspeed_kmh=_require_list(block, "windspeed_10m", "hourly"),
            precipitation_mm=_require_list(block, "precipitation", "hourly"),
            uv_index=_require_list(block, "uv_index", "hourly"),
            weather_code=weather_code if isinstance(weather_code, list) else [],
        )
    except ValidationError as exc:
        raise MalformedResponse(f"Open-Meteo hourly arrays not parseable: {exc}") from exc


class OpenMeteoWeatherProvider(WeatherProvider):
    """Issues single, non-retrying forecast requests against Open-Meteo."""

    provider_name = "open-meteo"

    def __init__(
        self,
        settings: Settings,
        logger: logging.Logger,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.settings = settings
        self.logger = logger
        self._client = httpx.Client(
            headers={
                "Accept": "application/json",
                "User-Agent": settings.weather_user_agent,
            },
            transport=transport,
        )

    def __enter__(self) -> OpenMeteoWeatherProvider:
        return self

    def __exit__(self, exc_type: Any, exc: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def fetch_forecast(self, coordinate: Coordinate, mode: ForecastMode) -> WeatherFetchResult:
        params = build_params(coordinate, mode, api_key=self.settings.open_meteo_api_key)
        url = str(self.settings.open_meteo_base_url)
        timeout = self.settings.timeout_for(mode)
        self.logger.debug(
            "Open-Meteo %s request params=%s timeout=%.1fs",
            mode, sanitize_for_logging(params), timeout,
        )
        payload = self._request_json(url, params=params, timeout=timeout, context=mode)
        return WeatherFetchResult(
            mode=mode,
            source_url=url,
            params=sanitize_for_logging(params),
            payload=payload,
            retrieved_at=datetime.now(UTC),
        )

    def _request_json(
        self, url: str, *, params: dict[str, Any], timeout: float, context: str
    ) -> dict[str, Any]:
        try:
            response = self._client.get(url, params=params, timeout=timeout)
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise TransportError(
                f"Open-Meteo {context} request timed out after {timeout:g}s.",
                category="timeout",
            ) from exc
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise TransportError(
                f"Open-Meteo {context} request failed with status {status}: "
                f"{sanitize_text(exc.response.text[:300])}",
                category="http_status",
                status_code=status,
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportError(
                f"Open-Meteo {context} request failed: {sanitize_text(str(exc))}",
                category="network",
            ) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise MalformedResponse(
                f"Open-Meteo {context} returned non-JSON response."
            ) from exc

        if not isinstance(payload, dict):
            raise MalformedResponse(
                f"Open-Meteo {context} returned unexpected payload type "
                f"{type(payload).__name__}."
            )
        return payload
