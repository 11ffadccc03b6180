# Project: climate-outlook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
units.py — Convert metric values to display units and classify comfort.

Everything the pipeline produces is metric (°C, mm/day, m/s, %). Values
are converted only for display; comfort is always judged on the metric
value so the verdict does not depend on the user's unit choice.
"""

from __future__ import annotations

VARIABLE_TITLES = {
    "temperature": "Temperature",
    "rainfall":    "Precipitation",
    "humidity":    "Humidity",
    "wind":        "Wind Speed",
    "uv_index":    "UV Index",
    "heat_index":  "Heat Index",
}

TEMPERATURE_UNITS = ("°C", "°F")
RAINFALL_UNITS = ("mm", "inches")
WIND_UNITS = ("m/s", "km/h", "mph")

MM_PER_INCH = 25.4
KMH_PER_MS = 3.6
MPH_PER_MS = 2.237

COMFORTABLE = "Comfortable"
UNCOMFORTABLE = "Uncomfortable"
UNKNOWN = "Unknown"


def _convert_temperature(value: float, unit: str) -> float:
    if unit == "°C":
        return value
    if unit == "°F":
        return value * 9 / 5 + 32
    raise ValueError(f"Unknown temperature unit: {unit!r}")


def _convert_rainfall(value: float, unit: str) -> float:
    if unit == "mm":
        return value
    if unit == "inches":
        return value / MM_PER_INCH
    raise ValueError(f"Unknown rainfall unit: {unit!r}")


def _convert_wind(value: float, unit: str) -> float:
    if unit == "m/s":
        return value
    if unit == "km/h":
        return value * KMH_PER_MS
    if unit == "mph":
        return value * MPH_PER_MS
    raise ValueError(f"Unknown wind unit: {unit!r}")


def convert(variable: str, value: float | None, units: dict) -> float | None:
    """Convert a metric value of `variable` into the user's chosen unit.

    Args:
        variable: Variable id (temperature, heat_index, rainfall, wind,
            humidity, uv_index).
        value: Metric value or None.
        units: Mapping with temperature, rainfall and wind unit choices.

    Returns:
        The converted value, or None if value is None.

    Raises:
        ValueError: If the configured unit is not recognised.
    """
    if value is None:
        return None
    if variable in ("temperature", "heat_index"):
        return _convert_temperature(value, units["temperature"])
    if variable == "rainfall":
        return _convert_rainfall(value, units["rainfall"])
    if variable == "wind":
        return _convert_wind(value, units["wind"])
    return value


def unit_symbol(variable: str, units: dict) -> str:
    """Display symbol for a variable under the given unit choices."""
    if variable in ("temperature", "heat_index"):
        return units["temperature"]
    if variable == "rainfall":
        return units["rainfall"]
    if variable == "wind":
        return units["wind"]
    if variable == "humidity":
        return "%"
    return ""


def classify_comfort(variable: str, value: float | None) -> str:
    """Classify a metric value as Comfortable, Uncomfortable or Unknown."""
    if value is None:
        return UNKNOWN
    if variable == "temperature":
        ok = 18 <= value <= 28
    elif variable == "humidity":
        ok = 30 <= value <= 60
    elif variable == "wind":
        ok = value <= 10
    elif variable == "rainfall":
        ok = value == 0
    elif variable == "uv_index":
        ok = value <= 5
    elif variable == "heat_index":
        ok = value <= 32
    else:
        return UNKNOWN
    return COMFORTABLE if ok else UNCOMFORTABLE


def _round(value: float | None) -> float | None:
    return round(value, 2) if value is not None else None


def display_series(outlook: dict, config: dict) -> list[dict]:
    """Build one display card per enabled variable.

    Args:
        outlook: Result of query.run_outlook (needs labels, series,
            predictions).
        config: Loaded configuration (units, display, display_data).

    Returns:
        List of dicts with keys variable, title, unit, labels, values,
        prediction, status and graph_type, in VARIABLE_TITLES order.
    """
    units = config["units"]
    enabled = config["display_data"]
    graph_type = config["display"]["graph_type"]

    cards = []
    for variable, title in VARIABLE_TITLES.items():
        if not enabled.get(variable, False):
            continue
        metric_prediction = outlook["predictions"].get(variable)
        cards.append({
            "variable":   variable,
            "title":      title,
            "unit":       unit_symbol(variable, units),
            "labels":     list(outlook["labels"]),
            "values":     [_round(convert(variable, v, units)) for v in outlook["series"][variable]],
            "prediction": _round(convert(variable, metric_prediction, units)),
            "status":     classify_comfort(variable, metric_prediction),
            "graph_type": graph_type,
        })
    return cards
