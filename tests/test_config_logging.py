"""Settings validation, redaction and JSON log formatting tests."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pytest

from openmeteo_weather.config import load_settings
from openmeteo_weather.exceptions import ConfigError
from openmeteo_weather.log_setup import JsonConsoleFormatter, setup_logger
from openmeteo_weather.redaction import REDACTED, sanitize_for_logging, sanitize_text

_ENV_KEYS = (
    "OPEN_METEO_BASE_URL",
    "OPEN_METEO_API_KEY",
    "WEATHER_USER_AGENT",
    "WEATHER_CURRENT_TIMEOUT_SECONDS",
    "WEATHER_DAILY_TIMEOUT_SECONDS",
    "WEATHER_HOURLY_TIMEOUT_SECONDS",
    "WEATHER_DEFAULT_LAT",
    "WEATHER_DEFAULT_LON",
    "WEATHER_MAX_PRINT",
    "WEATHER_FULL_PRECISION",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: Any, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults_load() -> None:
    settings = load_settings()
    assert settings.open_meteo_base_url == "https://api.open-meteo.com/v1/forecast"
    assert settings.timeout_for("daily") == 10.0
    assert settings.timeout_for("current") == 10.0
    assert settings.timeout_for("hourly") == 10.0
    assert settings.weather_default_lat is None
    assert settings.weather_full_precision is False


def test_per_mode_timeouts_from_env(monkeypatch: Any) -> None:
    monkeypatch.setenv("WEATHER_HOURLY_TIMEOUT_SECONDS", "3.5")
    monkeypatch.setenv("WEATHER_CURRENT_TIMEOUT_SECONDS", "4")
    settings = load_settings()
    assert settings.timeout_for("hourly") == 3.5
    assert settings.timeout_for("current") == 4.0
    assert settings.timeout_for("daily") == 10.0


def test_empty_default_coordinates_are_unset(monkeypatch: Any) -> None:
    monkeypatch.setenv("WEATHER_DEFAULT_LAT", "")
    monkeypatch.setenv("WEATHER_DEFAULT_LON", " ")
    settings = load_settings()
    assert settings.weather_default_lat is None
    assert settings.weather_default_lon is None


@pytest.mark.parametrize(
    ("key", "value"),
    [
        ("WEATHER_DAILY_TIMEOUT_SECONDS", "0"),
        ("WEATHER_MAX_PRINT", "-1"),
        ("OPEN_METEO_BASE_URL", "ftp://example.com"),
        ("WEATHER_USER_AGENT", "  "),
    ],
)
def test_invalid_values_raise_config_error(monkeypatch: Any, key: str, value: str) -> None:
    monkeypatch.setenv(key, value)
    with pytest.raises(ConfigError):
        load_settings()


def test_default_coordinates_must_be_paired_and_in_range(monkeypatch: Any) -> None:
    monkeypatch.setenv("WEATHER_DEFAULT_LAT", "40.0")
    with pytest.raises(ConfigError, match="set together"):
        load_settings()

    monkeypatch.setenv("WEATHER_DEFAULT_LON", "200")
    with pytest.raises(ConfigError, match="WEATHER_DEFAULT_LON"):
        load_settings()


def test_safe_summary_omits_api_key(monkeypatch: Any) -> None:
    monkeypatch.setenv("OPEN_METEO_API_KEY", "very-secret")
    settings = load_settings()
    summary = settings.safe_summary()
    assert summary["api_key_configured"] is True
    assert "very-secret" not in json.dumps(summary)
    assert "very-secret" not in repr(settings)


def test_sanitize_text_redacts_query_api_key() -> None:
    text = "GET https://customer-api.open-meteo.com/v1/forecast?latitude=1&apikey=abc123&daily=x"
    sanitized = sanitize_text(text)
    assert "abc123" not in sanitized
    assert f"apikey={REDACTED}&daily=x" in sanitized


def test_sanitize_for_logging_redacts_nested_keys() -> None:
    payload = {"params": {"apikey": "abc", "latitude": 1.0}, "items": [{"token": "t"}]}
    sanitized = sanitize_for_logging(payload)
    assert sanitized == {
        "params": {"apikey": REDACTED, "latitude": 1.0},
        "items": [{"token": REDACTED}],
    }


def test_json_formatter_emits_sanitized_event() -> None:
    record = logging.LogRecord(
        name="openmeteo_weather",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="request failed for %s",
        args=("apikey=xyz",),
        exc_info=None,
    )
    event = json.loads(JsonConsoleFormatter().format(record))
    assert event["level"] == "WARNING"
    assert event["logger"] == "openmeteo_weather"
    assert event["message"] == f"request failed for apikey={REDACTED}"


def test_setup_logger_is_idempotent() -> None:
    first = setup_logger("openmeteo_weather.test_logger")
    second = setup_logger("openmeteo_weather.test_logger", level="DEBUG")
    assert first is second
    assert len(second.handlers) == 1
    assert second.level == logging.DEBUG


def test_json_formatter_includes_request_context() -> None:
    record = logging.LogRecord(
        name="openmeteo_weather",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Weather daily fetch finished",
        args=(),
        exc_info=None,
    )
    record.mode = "daily"
    record.request_token = 7
    record.state = "succeeded"

    event = json.loads(JsonConsoleFormatter().format(record))

    assert event["context"] == {"mode": "daily", "request_token": 7, "state": "succeeded"}
    assert "error_code" not in event["context"]
