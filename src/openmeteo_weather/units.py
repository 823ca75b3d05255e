"""Pure unit conversions between the API's metric units and display units."""

from __future__ import annotations

KMH_PER_MPH_FACTOR = 0.621371
MM_PER_INCH = 25.4


def celsius_to_fahrenheit(celsius: float) -> float:
    return celsius * 9 / 5 + 32


def fahrenheit_to_celsius(fahrenheit: float) -> float:
    return (fahrenheit - 32) * 5 / 9


def kmh_to_mph(kmh: float) -> float:
    return kmh * KMH_PER_MPH_FACTOR


def mph_to_kmh(mph: float) -> float:
    return mph / KMH_PER_MPH_FACTOR


def mm_to_inches(mm: float) -> float:
    return mm / MM_PER_INCH


def inches_to_mm(inches: float) -> float:
    return inches * MM_PER_INCH
