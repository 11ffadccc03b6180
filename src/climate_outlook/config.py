# Project: climate-outlook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
config.py — Load and validate the TOML preferences file.

We use tomllib (Python 3.11+ stdlib) so no extra install is needed.
Sections or keys left out of the file fall back to DEFAULT_CONFIG, so a
config file only needs to list what the user actually changed.
"""

import copy
import tomllib
from pathlib import Path

from climate_outlook.units import RAINFALL_UNITS, TEMPERATURE_UNITS, WIND_UNITS


DEFAULT_CONFIG_PATH = Path("config.toml")

GRAPH_TYPES = ("line", "bar")

DEFAULT_CONFIG: dict = {
    "units": {
        "temperature": "°C",
        "rainfall": "mm",
        "wind": "m/s",
    },
    "display": {
        "graph_type": "line",
    },
    "display_data": {
        "temperature": True,
        "rainfall": True,
        "wind": True,
        "humidity": False,
        "heat_index": False,
        "uv_index": False,
    },
    "thresholds": {
        "very_hot": 35.0,
        "very_cold": 0.0,
        "very_wet": 50.0,
        "very_windy": 15.0,
        "very_uncomfortable": 40.0,
    },
    "provider": {
        "timeout_seconds": 30,
        "max_workers": 7,
    },
    "log": {
        "path": "logs/climate_outlook.log",
    },
}


def default_config() -> dict:
    """Return a fresh copy of the built-in defaults."""
    return copy.deepcopy(DEFAULT_CONFIG)


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> dict:
    """Load a TOML preferences file and merge it over the defaults.

    Args:
        path: Path to the TOML config file.

    Returns:
        Nested dict of configuration values with every section present.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ValueError: If a unit, graph type or numeric setting is invalid.
    """
    if not path.exists():
        raise FileNotFoundError(
            f"Config file not found: {path}\n"
            "Copy config.toml.example to config.toml and adjust your preferences."
        )

    with open(path, "rb") as f:
        loaded = tomllib.load(f)

    config = merge_defaults(loaded)
    _validate(config)
    return config


def merge_defaults(loaded: dict) -> dict:
    """Overlay each known section of `loaded` onto a copy of the defaults."""
    config = default_config()
    for section, values in loaded.items():
        if section in config and isinstance(values, dict):
            config[section].update(values)
        else:
            config[section] = values
    return config


def _validate(config: dict) -> None:
    """Validate unit choices, graph type and numeric settings.

    Expected config schema::

        [units]
        temperature = "°C" | "°F"
        rainfall    = "mm" | "inches"
        wind        = "m/s" | "km/h" | "mph"

        [display]
        graph_type = "line" | "bar"

        [display_data]
        temperature = <bool>   # one flag per variable
        ...

        [thresholds]           # metric units: °C, mm/day, m/s
        very_hot = <float>
        ...

        [provider]
        timeout_seconds = <number>   # per NASA POWER request
        max_workers     = <int>      # concurrent yearly requests (7 = all at once)

        [log]
        path = <str>

    Args:
        config: Merged config dict.

    Raises:
        ValueError: If any value is outside its allowed set or range.
    """
    units = config["units"]
    choices = {
        "temperature": TEMPERATURE_UNITS,
        "rainfall": RAINFALL_UNITS,
        "wind": WIND_UNITS,
    }
    for key, allowed in choices.items():
        if units.get(key) not in allowed:
            raise ValueError(
                f"Invalid config value [units].{key} = {units.get(key)!r}; "
                f"expected one of {', '.join(allowed)}"
            )

    graph_type = config["display"].get("graph_type")
    if graph_type not in GRAPH_TYPES:
        raise ValueError(
            f"Invalid config value [display].graph_type = {graph_type!r}; "
            f"expected one of {', '.join(GRAPH_TYPES)}"
        )

    for key, value in config["display_data"].items():
        if not isinstance(value, bool):
            raise ValueError(f"[display_data].{key} must be true or false")

    for key, value in config["thresholds"].items():
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            raise ValueError(f"[thresholds].{key} must be a number")

    provider = config["provider"]
    if provider["timeout_seconds"] <= 0:
        raise ValueError("[provider].timeout_seconds must be positive")
    if not isinstance(provider["max_workers"], int) or provider["max_workers"] < 1:
        raise ValueError("[provider].max_workers must be a positive integer")
