"""CLI: fetch an Open-Meteo forecast, normalize it and print derived metrics."""

from __future__ import annotations

import argparse
import sys

from rich.console import Console
from rich.prompt import Confirm

from .config import Settings, load_settings
from .exceptions import ConfigError, ForecastStateError
from .log_setup import setup_logger
from .ui import render_outcome
from .weather.location import FixedLocationProvider
from .weather.models import ForecastOutcome
from .weather.openmeteo import OpenMeteoWeatherProvider
from .weather.policy import ForecastRequestPolicy


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse weather CLI arguments."""
    parser = argparse.ArgumentParser(
        description="Fetch current, 5-day or hourly weather from Open-Meteo."
    )
    parser.add_argument(
        "--mode",
        choices=["current", "daily", "hourly"],
        default="current",
        help="Which forecast shape to request.",
    )
    parser.add_argument("--lat", type=float, default=None, help="Latitude in degrees.")
    parser.add_argument("--lon", type=float, default=None, help="Longitude in degrees.")
    parser.add_argument(
        "--max-print",
        type=int,
        default=None,
        help="Number of forecast rows to print.",
    )
    parser.add_argument(
        "--full-precision",
        action="store_true",
        help="Compute real feel from unrounded Fahrenheit/MPH values.",
    )
    parser.add_argument(
        "--compact",
        action="store_true",
        help="Short current-weather view (temperature, km/h wind, precipitation).",
    )
    parser.add_argument(
        "--prompt-retry",
        action="store_true",
        help="Offer to retry interactively after a failed fetch.",
    )
    return parser.parse_args(argv)


def _location_for(args: argparse.Namespace, settings: Settings) -> FixedLocationProvider:
    if (args.lat is None) != (args.lon is None):
        raise ConfigError("Pass --lat and --lon together.")
    if args.lat is not None:
        return FixedLocationProvider(args.lat, args.lon)
    return FixedLocationProvider(settings.weather_default_lat, settings.weather_default_lon)


def _run_with_retry(
    console: Console,
    policy: ForecastRequestPolicy,
    outcome: ForecastOutcome,
    *,
    max_print: int,
    compact: bool,
    prompt_retry: bool,
) -> ForecastOutcome:
    render_outcome(console, outcome, max_print=max_print, compact=compact)
    while outcome.status == "error" and prompt_retry and outcome.retryable:
        if not Confirm.ask("Try again?", console=console, default=False):
            break
        outcome = policy.retry()
        render_outcome(console, outcome, max_print=max_print, compact=compact)
    return outcome


def main(argv: list[str] | None = None) -> int:
    """Run one weather fetch and print the result."""
    args = parse_args(argv)
    console = Console()

    try:
        settings = load_settings()
    except ConfigError as exc:
        setup_logger().error("Configuration failure: %s", exc)
        return 2

    logger = setup_logger(level=settings.log_level)
    logger.info("Weather CLI startup config=%s", settings.safe_summary())

    if args.max_print is not None and args.max_print <= 0:
        logger.error("--max-print must be > 0 when provided.")
        return 2
    try:
        location = _location_for(args, settings)
    except ConfigError as exc:
        logger.error("Configuration failure: %s", exc)
        return 2

    full_precision = args.full_precision or settings.weather_full_precision
    with OpenMeteoWeatherProvider(settings=settings, logger=logger) as provider:
        policy = ForecastRequestPolicy(
            provider,
            logger,
            location=location,
            full_precision=full_precision,
        )
        try:
            outcome = policy.locate_and_fetch(args.mode)
            outcome = _run_with_retry(
                console,
                policy,
                outcome,
                max_print=args.max_print or settings.weather_max_print,
                compact=args.compact,
                prompt_retry=args.prompt_retry,
            )
        except ForecastStateError as exc:
            logger.error("Weather CLI state failure: %s", exc)
            return 4

    return 0 if outcome.status == "ready" else 4


if __name__ == "__main__":
    sys.exit(main())
