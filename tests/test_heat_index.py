# Project: climate-outlook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""Tests for heat_index.py — Rothfusz heat index in Celsius."""

import math

import pytest

from climate_outlook.heat_index import (
    celsius_to_fahrenheit,
    fahrenheit_to_celsius,
    heat_index,
    rothfusz,
)


def test_below_80f_returns_temperature_unchanged():
    assert heat_index(26, 50) == 26


def test_cold_temperature_passes_through():
    assert heat_index(-5.5, 90) == -5.5


def test_hot_humid_reference_value():
    """35°C / 70% → 95°F; polynomial gives 122.613°F → 50.34°C."""
    result = heat_index(35, 70)
    assert result > 35
    assert result == pytest.approx(50.34, abs=0.01)


def test_result_rounded_to_two_decimals():
    result = heat_index(33.3, 55)
    assert result == round(result, 2)


def test_missing_temperature_returns_none():
    assert heat_index(None, 50) is None


def test_missing_humidity_returns_none():
    assert heat_index(30, None) is None


def test_low_humidity_correction_applied():
    """R < 13 between 80 and 112°F subtracts the dry-air adjustment."""
    t, r = 40.0, 10.0
    tf = celsius_to_fahrenheit(t)
    adj = ((13 - r) / 4) * math.sqrt((17 - abs(tf - 95)) / 17)
    expected = round(fahrenheit_to_celsius(rothfusz(tf, r) - adj), 2)
    assert heat_index(t, r) == pytest.approx(expected, abs=1e-9)


def test_high_humidity_correction_applied():
    """R > 85 between 80 and 87°F adds the humid adjustment."""
    t, r = 28.0, 90.0
    tf = celsius_to_fahrenheit(t)
    adj = ((r - 85) / 10) * ((87 - tf) / 5)
    expected = round(fahrenheit_to_celsius(rothfusz(tf, r) + adj), 2)
    assert heat_index(t, r) == pytest.approx(expected, abs=1e-9)


def test_no_correction_in_mid_humidity():
    t, r = 32.0, 50.0
    expected = round(fahrenheit_to_celsius(rothfusz(celsius_to_fahrenheit(t), r)), 2)
    assert heat_index(t, r) == expected


def test_just_above_80f_uses_polynomial():
    """27°C is 80.6°F, so the polynomial applies even at moderate humidity."""
    expected = round(fahrenheit_to_celsius(rothfusz(celsius_to_fahrenheit(27.0), 40)), 2)
    assert heat_index(27.0, 40) == expected


def test_temperature_conversions_round_trip():
    assert fahrenheit_to_celsius(celsius_to_fahrenheit(21.5)) == pytest.approx(21.5)
