# Project: climate-outlook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
geocode.py — Look up candidate places for a free-text query using Open-Meteo Geocoding API.

Free, no API key required.
API docs: https://open-meteo.com/en/docs/geocoding-api
"""

import requests
from climate_outlook.utils import with_retry

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
MIN_QUERY_LENGTH = 3


class LocationNotFoundError(LookupError):
    """Raised when the geocoder returns no candidates for a place name."""


def _display_name(result: dict, fallback: str) -> str:
    # "City, Region, Country", skipping parts the API omits
    parts = [result.get("name", fallback)]
    if result.get("admin1"):
        parts.append(result["admin1"])
    if result.get("country"):
        parts.append(result["country"])
    return ", ".join(parts)


def search_places(query: str, count: int = 5) -> list[dict]:
    """Return ranked place candidates for a free-text query.

    Args:
        query: Human-readable place name, e.g. 'Tokyo' or 'London, UK'.
        count: Maximum number of candidates to request.

    Returns:
        List of dicts with keys id, display_name, latitude, longitude, in the
        provider's ranking order. Empty for queries shorter than
        MIN_QUERY_LENGTH characters (no request is made).

    Raises:
        RuntimeError: If all API retry attempts fail.
    """
    text = query.strip()
    if len(text) < MIN_QUERY_LENGTH:
        return []

    params = {
        "name": text,
        "count": count,
        "language": "en",
        "format": "json",
    }

    def _call():
        r = requests.get(GEOCODING_URL, params=params, timeout=10)
        r.raise_for_status()
        return r.json()

    data = with_retry(_call, label=f"Geocoding API for '{text}'")

    return [
        {
            "id": result.get("id"),
            "display_name": _display_name(result, text),
            "latitude": result["latitude"],
            "longitude": result["longitude"],
        }
        for result in data.get("results") or []
    ]


def geocode(place: str) -> dict:
    """Return the top-ranked candidate for a place name.

    Raises:
        LocationNotFoundError: If no candidates are found.
        RuntimeError: If all API retry attempts fail.
    """
    candidates = search_places(place, count=1)
    if not candidates:
        raise LocationNotFoundError(f'Location "{place}" not found. Try a more specific name.')
    return candidates[0]
