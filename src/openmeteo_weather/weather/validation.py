"""Coordinate validation performed before any request is built."""

from __future__ import annotations

import math
import numbers
from decimal import Decimal
from typing import Any

from ..exceptions import CoordinateOutOfRange, InvalidCoordinate
from .models import Coordinate


def _as_finite(value: Any, label: str) -> float:
    # Decimal is not a numbers.Real subclass.
    if isinstance(value, bool) or not isinstance(value, (numbers.Real, Decimal)):
        raise InvalidCoordinate(f"Invalid {label}")
    try:
        numeric = float(value)
    except (ValueError, OverflowError) as exc:
        raise InvalidCoordinate(f"Invalid {label}") from exc
    if not math.isfinite(numeric):
        raise InvalidCoordinate(f"Invalid {label}")
    return numeric


def validate_coordinate(lat: Any, lon: Any) -> Coordinate:
    """Return a Coordinate or raise InvalidCoordinate / CoordinateOutOfRange."""
    latitude = _as_finite(lat, "latitude")
    longitude = _as_finite(lon, "longitude")
    if not (-90 <= latitude <= 90):
        raise CoordinateOutOfRange("Latitude out of range")
    if not (-180 <= longitude <= 180):
        raise CoordinateOutOfRange("Longitude out of range")
    return Coordinate(latitude=latitude, longitude=longitude)
