# Project: climate-outlook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
power.py — Fetch single-day point samples from the NASA POWER daily API.

NASA POWER is free and requires no API key. One request covers one
calendar day at one point; the response maps each parameter code to a
{YYYYMMDD: value} dict, with -999 standing in for "no data".

API docs: https://power.larc.nasa.gov/docs/services/api/temporal/daily/
"""

from datetime import date
from pathlib import Path

import requests

from climate_outlook.utils import DEFAULT_LOG_PATH, with_retry

POWER_DAILY_POINT_URL = "https://power.larc.nasa.gov/api/temporal/daily/point"
REQUEST_TIMEOUT_SECONDS = 30
FILL_VALUE = -999.0

# POWER parameter code -> our field name
PARAMETERS = {
    "T2M_MAX":             "temp_max",
    "T2M_MIN":             "temp_min",
    "PRECTOTCORR":         "precipitation",
    "WS10M":               "wind",
    "RH2M":                "humidity",
    "ALLSKY_SFC_UV_INDEX": "uv_index",
}


class DataUnavailable(Exception):
    """The provider has no usable data for the requested day."""


class MalformedResponse(DataUnavailable):
    """The provider payload does not have the expected shape."""


def date_key(day: date) -> str:
    """Return the provider's YYYYMMDD key for a date."""
    return day.strftime("%Y%m%d")


def fetch_point_day(
    latitude: float,
    longitude: float,
    day: date,
    timeout: float = REQUEST_TIMEOUT_SECONDS,
    log_path: Path = DEFAULT_LOG_PATH,
) -> dict:
    """Fetch all climate parameters for one point on one day.

    Args:
        latitude: Latitude in decimal degrees.
        longitude: Longitude in decimal degrees.
        day: Calendar day to query.
        timeout: Per-request timeout in seconds.
        log_path: Log file for final retry failures.

    Returns:
        Dict with keys temp_max, temp_min, precipitation, wind, humidity,
        uv_index; each a float or None when the provider has no value.

    Raises:
        RuntimeError: If all retry attempts fail.
        MalformedResponse: If the payload lacks properties.parameter.
        DataUnavailable: If no parameter has a value for the day.
    """
    key = date_key(day)
    params = {
        "parameters": ",".join(PARAMETERS),
        "community": "RE",
        "longitude": longitude,
        "latitude": latitude,
        "start": key,
        "end": key,
        "format": "JSON",
    }

    def _call() -> dict:
        r = requests.get(
            POWER_DAILY_POINT_URL,
            params=params,
            headers={"Accept": "application/json"},
            timeout=timeout,
        )
        r.raise_for_status()
        return r.json()

    data = with_retry(_call, label=f"NASA POWER daily point API ({key})", log_path=log_path)
    return _parse_day(data, key)


def _clean(value) -> float | None:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if number == FILL_VALUE:
        return None
    return number


def _parse_day(data: dict, key: str) -> dict:
    """Extract one day's values from a POWER JSON response.

    Raises:
        MalformedResponse: If properties.parameter is absent or not a dict.
        DataUnavailable: If every parameter is missing for the key.
    """
    try:
        parameter = data["properties"]["parameter"]
    except (KeyError, TypeError):
        raise MalformedResponse(f"No parameter block in response for {key}")
    if not isinstance(parameter, dict):
        raise MalformedResponse(f"Parameter block for {key} is not a mapping")

    sample = {}
    for code, field in PARAMETERS.items():
        values = parameter.get(code) or {}
        sample[field] = _clean(values.get(key)) if isinstance(values, dict) else None

    if all(v is None for v in sample.values()):
        raise DataUnavailable(f"No values for {key}")
    return sample
