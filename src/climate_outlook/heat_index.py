# Project: climate-outlook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
heat_index.py — Apparent temperature from air temperature and relative humidity.

Uses the NOAA Rothfusz regression, which is defined in Fahrenheit and only
meaningful from 80°F (~26.7°C) upwards. Below that threshold the air
temperature itself is returned.
"""

from __future__ import annotations

import math

HEAT_INDEX_THRESHOLD_F: float = 80.0


def celsius_to_fahrenheit(c: float) -> float:
    return c * 9 / 5 + 32


def fahrenheit_to_celsius(f: float) -> float:
    return (f - 32) * 5 / 9


def rothfusz(tf: float, r: float) -> float:
    """Raw 9-term Rothfusz polynomial in °F, without humidity adjustments."""
    return (
        -42.379
        + 2.04901523 * tf
        + 10.14333127 * r
        - 0.22475541 * tf * r
        - 0.00683783 * tf * tf
        - 0.05481717 * r * r
        + 0.00122874 * tf * tf * r
        + 0.00085282 * tf * r * r
        - 0.00000199 * tf * tf * r * r
    )


def heat_index(temp_c: float | None, humidity_pct: float | None) -> float | None:
    """Compute the heat index in °C.

    Args:
        temp_c: Dry-bulb air temperature in °C.
        humidity_pct: Relative humidity in percent (0-100).

    Returns:
        Heat index in °C rounded to 2 decimals, temp_c unchanged below 80°F,
        or None if either input is missing.
    """
    if temp_c is None or humidity_pct is None:
        return None

    tf = celsius_to_fahrenheit(temp_c)
    if tf < HEAT_INDEX_THRESHOLD_F:
        return temp_c

    r = humidity_pct
    hi_f = rothfusz(tf, r)

    # Dry-air adjustment
    if r < 13 and 80 <= tf <= 112:
        hi_f -= ((13 - r) / 4) * math.sqrt((17 - abs(tf - 95)) / 17)

    # Humid, moderately warm adjustment
    if r > 85 and 80 <= tf <= 87:
        hi_f += ((r - 85) / 10) * ((87 - tf) / 5)

    return round(fahrenheit_to_celsius(hi_f), 2)
