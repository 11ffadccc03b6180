# Project: climate-outlook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
query.py — Run an outlook for (location, date) and pair results with requests.

run_outlook() is the whole pipeline as a plain function: fetch the
same-day history, predict every variable, return one dict.

A QuerySession hands out numbered OutlookQuery objects. Only the most
recently issued, uncancelled query may store its result, so a slow fetch
for an old marker position can finish harmlessly after the user has
moved on.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from datetime import date
from pathlib import Path

from climate_outlook.history import MAX_WORKERS, fetch_same_day_history
from climate_outlook.power import REQUEST_TIMEOUT_SECONDS
from climate_outlook.prediction import predict_all
from climate_outlook.utils import DEFAULT_LOG_PATH


class InvalidQueryError(ValueError):
    """Raised before any fetch when the location or date is unusable."""


def validate_query(latitude, longitude, reference_date) -> None:
    """Check a (latitude, longitude, date) triple.

    Raises:
        InvalidQueryError: If a coordinate is missing, not a number or out of
            range, or the reference date is missing or not a date.
    """
    for name, value, limit in (("latitude", latitude, 90), ("longitude", longitude, 180)):
        if value is None or isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidQueryError(f"A numeric {name} is required, got {value!r}")
        if not -limit <= value <= limit:
            raise InvalidQueryError(f"{name} {value} is outside [-{limit}, {limit}]")
    if not isinstance(reference_date, date):
        raise InvalidQueryError(f"A reference date is required, got {reference_date!r}")


def run_outlook(
    latitude: float,
    longitude: float,
    reference_date: date,
    current_year: int | None = None,
    fetch_day: Callable[..., dict] | None = None,
    max_workers: int = MAX_WORKERS,
    timeout: float = REQUEST_TIMEOUT_SECONDS,
    log_path: Path = DEFAULT_LOG_PATH,
) -> dict:
    """Fetch history for one point/date and predict every variable.

    Returns:
        Dict with keys location, reference_date, labels, series (base
        variables plus heat_index), failed_years, predictions, raw,
        coefficients, dropped.

    Raises:
        InvalidQueryError: If the inputs fail validate_query.
    """
    validate_query(latitude, longitude, reference_date)

    history = fetch_same_day_history(
        latitude,
        longitude,
        reference_date,
        current_year=current_year,
        fetch_day=fetch_day,
        max_workers=max_workers,
        timeout=timeout,
        log_path=log_path,
    )
    result = predict_all(history)

    series = {
        name: history[name]
        for name in ("temperature", "rainfall", "wind", "humidity", "uv_index")
    }
    series["heat_index"] = result["heat_index"]

    return {
        "location": {"latitude": latitude, "longitude": longitude},
        "reference_date": reference_date,
        "labels": history["labels"],
        "series": series,
        "failed_years": history["failed_years"],
        "predictions": result["predictions"],
        "raw": result["raw"],
        "coefficients": result["coefficients"],
        "dropped": result["dropped"],
    }


class OutlookQuery:
    """One (location, date) request, identified by a session token."""

    def __init__(self, token: int, latitude: float, longitude: float, reference_date: date):
        self.token = token
        self.latitude = latitude
        self.longitude = longitude
        self.reference_date = reference_date
        self._cancelled = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        self._cancelled.set()

    def __repr__(self) -> str:
        return (
            f"OutlookQuery(token={self.token}, latitude={self.latitude}, "
            f"longitude={self.longitude}, reference_date={self.reference_date})"
        )


class QuerySession:
    """Issue queries and keep only the result of the most recent one."""

    def __init__(self):
        self._lock = threading.Lock()
        self._token = 0
        self._current: OutlookQuery | None = None
        self._latest: dict | None = None

    def issue(self, latitude: float, longitude: float, reference_date: date) -> OutlookQuery:
        """Validate inputs, cancel the previous query and return a new one.

        Raises:
            InvalidQueryError: If the inputs fail validate_query.
        """
        validate_query(latitude, longitude, reference_date)
        with self._lock:
            if self._current is not None:
                self._current.cancel()
            self._token += 1
            self._current = OutlookQuery(self._token, latitude, longitude, reference_date)
            return self._current

    def is_current(self, query: OutlookQuery) -> bool:
        with self._lock:
            return query is self._current and not query.cancelled

    def submit(self, query: OutlookQuery, result: dict) -> bool:
        """Store `result` if `query` is still current. Returns whether it was kept."""
        with self._lock:
            if query is not self._current or query.cancelled:
                print(f"[query] Discarding stale result for token {query.token}")
                return False
            self._latest = result
            return True

    def run(self, query: OutlookQuery, **kwargs) -> dict | None:
        """Run the outlook for `query` and submit it.

        Returns:
            The result if it was accepted, None if the query went stale.
        """
        if not self.is_current(query):
            print(f"[query] Skipping superseded query for token {query.token}")
            return None
        result = run_outlook(query.latitude, query.longitude, query.reference_date, **kwargs)
        return result if self.submit(query, result) else None

    @property
    def latest(self) -> dict | None:
        with self._lock:
            return self._latest
