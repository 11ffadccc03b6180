# Project: climate-outlook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
history.py — Build aligned same-day-of-year series from NASA POWER samples.

For a reference date we sample the same month/day in each year of the
lookback window (oldest first) and return one list per variable. Every
list has exactly one slot per year: a year that could not be fetched
keeps its slot and holds None in every variable, so indices line up
across variables and with the year labels.
"""

from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from pathlib import Path

import requests

from climate_outlook.power import (
    REQUEST_TIMEOUT_SECONDS,
    DataUnavailable,
    date_key,
    fetch_point_day,
)
from climate_outlook.utils import DEFAULT_LOG_PATH, fmt_day, log_event

LOOKBACK_YEARS = 6
# One worker per year of the window, so the fetch takes as long as its slowest request.
MAX_WORKERS = LOOKBACK_YEARS + 1

BASE_VARIABLES = ("temperature", "rainfall", "wind", "humidity", "uv_index")


def window_years(current_year: int) -> list[int]:
    """Return the years [current_year - LOOKBACK_YEARS, current_year], oldest first."""
    return list(range(current_year - LOOKBACK_YEARS, current_year + 1))


def same_day_in_year(reference_date: date, year: int) -> date | None:
    """Return reference_date moved to `year`, or None if that day does not exist (29 Feb)."""
    try:
        return reference_date.replace(year=year)
    except ValueError:
        return None


def average_temperature(temp_max: float | None, temp_min: float | None) -> float | None:
    """Mean of max/min when both exist, else whichever exists, else None."""
    if temp_max is not None and temp_min is not None:
        return (temp_max + temp_min) / 2
    if temp_max is not None:
        return temp_max
    return temp_min


def clamp_precipitation(
    value: float | None,
    key: str,
    log_path: Path = DEFAULT_LOG_PATH,
) -> float | None:
    """Replace negative precipitation (model noise) with 0 and record the event."""
    if value is not None and value < 0:
        msg = f"Clamping negative precipitation {value} -> 0 for {key}"
        print(f"[history] {msg}")
        log_event("WARNING", msg, log_path=log_path)
        return 0.0
    return value


def _to_row(sample: dict, key: str, log_path: Path) -> dict:
    """Map a provider sample to one value per base variable."""
    return {
        "temperature": average_temperature(sample.get("temp_max"), sample.get("temp_min")),
        "rainfall":    clamp_precipitation(sample.get("precipitation"), key, log_path=log_path),
        "wind":        sample.get("wind"),
        "humidity":    sample.get("humidity"),
        "uv_index":    sample.get("uv_index"),
    }


def fetch_same_day_history(
    latitude: float,
    longitude: float,
    reference_date: date,
    current_year: int | None = None,
    fetch_day: Callable[..., dict] | None = None,
    max_workers: int = MAX_WORKERS,
    timeout: float = REQUEST_TIMEOUT_SECONDS,
    log_path: Path = DEFAULT_LOG_PATH,
) -> dict:
    """Fetch one sample per year for the reference month/day, in parallel.

    Args:
        latitude: Latitude in decimal degrees.
        longitude: Longitude in decimal degrees.
        reference_date: Only its month and day are used.
        current_year: Last year of the window. Defaults to this year.
        fetch_day: Provider call (latitude, longitude, day, timeout=...,
            log_path=...) -> sample dict. Defaults to power.fetch_point_day.
        max_workers: Maximum number of concurrent provider requests. The
            default fetches every year at once; a lower limit queues the
            remaining years behind the first wave.
        timeout: Per-request timeout forwarded to the provider call.
        log_path: Log file for warnings.

    Returns:
        Dict with keys labels (list of year strings), temperature, rainfall,
        wind, humidity, uv_index (lists of float | None, same length as
        labels) and failed_years (list of int).
    """
    if current_year is None:
        current_year = date.today().year
    if fetch_day is None:
        fetch_day = fetch_point_day

    years = window_years(current_year)
    rows: dict[int, dict | None] = {year: None for year in years}

    def _fetch(day: date) -> dict:
        sample = fetch_day(latitude, longitude, day, timeout=timeout, log_path=log_path)
        return _to_row(sample, date_key(day), log_path)

    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as pool:
        futures = {}
        for year in years:
            day = same_day_in_year(reference_date, year)
            if day is None:
                print(f"[history] {fmt_day(reference_date)} does not exist in {year}; leaving it empty")
                continue
            futures[year] = pool.submit(_fetch, day)

        for year, future in futures.items():
            try:
                rows[year] = future.result()
            except (RuntimeError, DataUnavailable, requests.RequestException, ValueError) as e:
                msg = f"No data for {year}: {e}"
                print(f"[history] {msg}")
                log_event("WARNING", msg, log_path=log_path)

    result: dict = {"labels": [str(year) for year in years]}
    for variable in BASE_VARIABLES:
        result[variable] = [
            rows[year][variable] if rows[year] is not None else None
            for year in years
        ]
    result["failed_years"] = [year for year in years if rows[year] is None]
    return result
