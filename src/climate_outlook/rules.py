# Project: climate-outlook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
rules.py — Evaluate threshold alerts against a prediction map.

Each check_* function receives one predicted metric value and a metric
threshold, and returns a human-readable alert string if the condition is
triggered, or None otherwise. Missing predictions never trigger.

evaluate_rules() runs every check and formats values in the user's units.
"""

from typing import Optional

from climate_outlook.units import convert, unit_symbol

METRIC_UNITS = {"temperature": "°C", "rainfall": "mm", "wind": "m/s"}


def _fmt(variable: str, value: float, units: dict) -> str:
    shown = convert(variable, value, units)
    symbol = unit_symbol(variable, units)
    return f"{shown:.1f}{symbol}" if symbol in ("°C", "°F", "%") else f"{shown:.1f} {symbol}"


def check_very_hot(temperature: Optional[float], threshold: float, units: dict = METRIC_UNITS) -> Optional[str]:
    """Trigger if the predicted temperature is at or above `threshold` °C."""
    if temperature is None or temperature < threshold:
        return None
    return (
        f"Very hot: {_fmt('temperature', temperature, units)} expected "
        f"(threshold: {_fmt('temperature', threshold, units)})"
    )


def check_very_cold(temperature: Optional[float], threshold: float, units: dict = METRIC_UNITS) -> Optional[str]:
    """Trigger if the predicted temperature is at or below `threshold` °C."""
    if temperature is None or temperature > threshold:
        return None
    return (
        f"Very cold: {_fmt('temperature', temperature, units)} expected "
        f"(threshold: {_fmt('temperature', threshold, units)})"
    )


def check_very_wet(rainfall: Optional[float], threshold: float, units: dict = METRIC_UNITS) -> Optional[str]:
    """Trigger if predicted daily precipitation is at or above `threshold` mm."""
    if rainfall is None or rainfall < threshold:
        return None
    return (
        f"Very wet: {_fmt('rainfall', rainfall, units)} of precipitation expected "
        f"(threshold: {_fmt('rainfall', threshold, units)})"
    )


def check_very_windy(wind: Optional[float], threshold: float, units: dict = METRIC_UNITS) -> Optional[str]:
    """Trigger if predicted wind speed is at or above `threshold` m/s."""
    if wind is None or wind < threshold:
        return None
    return (
        f"Very windy: {_fmt('wind', wind, units)} expected "
        f"(threshold: {_fmt('wind', threshold, units)})"
    )


def check_very_uncomfortable(heat_index: Optional[float], threshold: float, units: dict = METRIC_UNITS) -> Optional[str]:
    """
    Trigger if the predicted heat index is at or above `threshold` °C.
    Heat index captures humid heat that air temperature alone understates.
    """
    if heat_index is None or heat_index < threshold:
        return None
    return (
        f"Very uncomfortable: heat index {_fmt('heat_index', heat_index, units)} expected "
        f"(threshold: {_fmt('heat_index', threshold, units)})"
    )


def evaluate_rules(predictions: dict, config: dict) -> list[str]:
    """
    Run all checks against the predictions using thresholds from config.
    Returns a list of alert strings (empty list = no alerts).
    """
    thresholds = config["thresholds"]
    units = config["units"]

    checks = [
        check_very_hot(predictions.get("temperature"), thresholds["very_hot"], units),
        check_very_cold(predictions.get("temperature"), thresholds["very_cold"], units),
        check_very_wet(predictions.get("rainfall"), thresholds["very_wet"], units),
        check_very_windy(predictions.get("wind"), thresholds["very_windy"], units),
        check_very_uncomfortable(predictions.get("heat_index"), thresholds["very_uncomfortable"], units),
    ]

    # Filter out None values (rules that didn't trigger)
    return [alert for alert in checks if alert is not None]
