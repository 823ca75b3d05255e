"""Request policy: validation, one bounded fetch, error classification, manual retry."""

from __future__ import annotations

import logging
import threading
from datetime import UTC, datetime
from typing import Any

from ..exceptions import ForecastStateError, WeatherError
from ..metrics import derive_metrics
from .aligner import align_daily, align_hourly
from .base import WeatherProvider
from .location import LocationProvider
from .models import Coordinate, FetchState, FetchStatus, ForecastMode, ForecastOutcome
from .openmeteo import parse_current, parse_daily, parse_hourly
from .validation import validate_coordinate

_STATUS_BY_STATE: dict[FetchState, FetchStatus] = {
    FetchState.IDLE: "loading",
    FetchState.VALIDATING: "loading",
    FetchState.REQUESTING: "loading",
    FetchState.SUCCEEDED: "ready",
    FetchState.FAILED: "error",
}


class ForecastRequestPolicy:
    """Drives one fetch attempt at a time through an explicit state machine.

    ``IDLE -> VALIDATING -> REQUESTING -> SUCCEEDED | FAILED``. Both terminal
    states are left only through :meth:`retry` (or a fresh :meth:`fetch`).
    Every attempt takes a new request token; an attempt that finishes after a
    newer one has started is discarded and never replaces ``outcome``.
    """

    def __init__(
        self,
        provider: WeatherProvider,
        logger: logging.Logger,
        *,
        location: LocationProvider | None = None,
        full_precision: bool = False,
    ) -> None:
        self.provider = provider
        self.logger = logger
        self.location = location
        self.full_precision = full_precision
        self._lock = threading.Lock()
        self._token = 0
        self._state = FetchState.IDLE
        self._outcome: ForecastOutcome | None = None
        self._last_request: tuple[str, Any, Any, ForecastMode] | None = None

    @property
    def state(self) -> FetchState:
        return self._state

    @property
    def status(self) -> FetchStatus:
        return _STATUS_BY_STATE[self._state]

    @property
    def outcome(self) -> ForecastOutcome | None:
        """Latest committed outcome; never replaced by a stale attempt."""
        return self._outcome

    @property
    def current_token(self) -> int:
        return self._token

    def fetch(self, lat: Any, lon: Any, mode: ForecastMode) -> ForecastOutcome:
        """Validate the coordinate and run one request for ``mode``."""
        self._last_request = ("coordinates", lat, lon, mode)
        token = self._begin()
        return self._run(token, lat, lon, mode)

    def locate_and_fetch(self, mode: ForecastMode) -> ForecastOutcome:
        """Ask the location source for a position, then fetch for it."""
        if self.location is None:
            raise ForecastStateError("No location source configured.")
        self._last_request = ("location", None, None, mode)
        token = self._begin()
        try:
            lat, lon = self.location.current_position()
        except WeatherError as exc:
            return self._fail(token, mode, None, exc)
        return self._run(token, lat, lon, mode)

    def retry(self) -> ForecastOutcome:
        """Re-run the last request from a terminal state."""
        if self._last_request is None or self._state not in (
            FetchState.SUCCEEDED,
            FetchState.FAILED,
        ):
            raise ForecastStateError(
                f"Retry requires a finished request; current state is {self._state.value}."
            )
        source, lat, lon, mode = self._last_request
        self.logger.info("Manual retry requested for %s forecast", mode)
        if source == "location":
            return self.locate_and_fetch(mode)
        return self.fetch(lat, lon, mode)

    def _begin(self) -> int:
        with self._lock:
            self._token += 1
            self._state = FetchState.VALIDATING
            return self._token

    def _is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._token

    def _transition(self, token: int, state: FetchState) -> bool:
        with self._lock:
            if token != self._token:
                return False
            self._state = state
            return True

    def _run(self, token: int, lat: Any, lon: Any, mode: ForecastMode) -> ForecastOutcome:
        coordinate: Coordinate | None = None
        try:
            coordinate = validate_coordinate(lat, lon)
            if not self._transition(token, FetchState.REQUESTING):
                return self._superseded(token, mode, coordinate)
            result = self.provider.fetch_forecast(coordinate, mode)
            outcome = self._build_success(token, mode, coordinate, result.payload)
        except WeatherError as exc:
            return self._fail(token, mode, coordinate, exc)
        return self._commit(token, outcome)

    def _build_success(
        self,
        token: int,
        mode: ForecastMode,
        coordinate: Coordinate,
        payload: dict[str, Any],
    ) -> ForecastOutcome:
        fields: dict[str, Any] = {}
        if mode == "current":
            current = parse_current(payload)
            fields["current"] = current
            fields["metrics"] = derive_metrics(
                current.temperature_c,
                current.windspeed_kmh,
                current.precipitation_mm,
                full_precision=self.full_precision,
            )
        elif mode == "daily":
            fields["daily"] = align_daily(parse_daily(payload))
        else:
            hourly = align_hourly(parse_hourly(payload))
            fields["hourly"] = hourly
            fields["hourly_metrics"] = [
                derive_metrics(
                    record.temperature_c,
                    record.windspeed_kmh,
                    record.precipitation_mm,
                    full_precision=self.full_precision,
                )
                for record in hourly
            ]
        return ForecastOutcome(
            mode=mode,
            status="ready",
            state=FetchState.SUCCEEDED,
            request_token=token,
            coordinate=coordinate,
            completed_at=datetime.now(UTC),
            **fields,
        )

    def _fail(
        self,
        token: int,
        mode: ForecastMode,
        coordinate: Coordinate | None,
        exc: WeatherError,
    ) -> ForecastOutcome:
        # Failures of superseded attempts are not user-visible.
        level = logging.WARNING if self._is_current(token) else logging.INFO
        self.logger.log(
            level,
            "Weather %s fetch failed: %s",
            mode,
            exc,
            extra={"mode": mode, "request_token": token, "error_code": exc.code},
        )
        outcome = ForecastOutcome(
            mode=mode,
            status="error",
            state=FetchState.FAILED,
            request_token=token,
            coordinate=coordinate,
            error_code=exc.code,
            message=exc.describe(),
            retryable=True,
            completed_at=datetime.now(UTC),
        )
        return self._commit(token, outcome)

    def _superseded(
        self, token: int, mode: ForecastMode, coordinate: Coordinate
    ) -> ForecastOutcome:
        """Skip the request of an attempt that a newer one replaced before it started."""
        outcome = ForecastOutcome(
            mode=mode,
            status="error",
            state=FetchState.FAILED,
            request_token=token,
            coordinate=coordinate,
            error_code="superseded",
            message="Superseded by a newer request.",
            completed_at=datetime.now(UTC),
        )
        return self._commit(token, outcome)

    def _commit(self, token: int, outcome: ForecastOutcome) -> ForecastOutcome:
        with self._lock:
            if token != self._token:
                stale = True
            else:
                stale = False
                self._state = outcome.state
                self._outcome = outcome
        if stale:
            self.logger.info(
                "Discarding stale %s result for token %d (current token %d)",
                outcome.mode, token, self._token,
            )
        else:
            self.logger.info(
                "Weather %s fetch finished",
                outcome.mode,
                extra={
                    "mode": outcome.mode,
                    "request_token": token,
                    "state": outcome.state.value,
                },
            )
        return outcome
