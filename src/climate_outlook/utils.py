# Project: climate-outlook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
utils.py — Shared utilities: retry logic, log-file helpers and formatting.
"""

import time
from collections.abc import Callable
from datetime import date, datetime
from pathlib import Path
from typing import Any


DEFAULT_LOG_PATH = Path("logs/climate_outlook.log")
MAX_ATTEMPTS = 3
RETRY_DELAY_SECONDS = 2


def fmt_day(d: date) -> str:
    """Format a date as a short label like '15 Jul'."""
    return d.strftime("%d %b")


def fmt_value(value: float | None, unit: str = "", digits: int = 2) -> str:
    """Format a possibly-missing number with an optional unit suffix.

    Args:
        value: Number to format, or None.
        unit: Unit symbol appended after a space (omitted when empty).
        digits: Decimal places.

    Returns:
        '—' for None, otherwise e.g. '12.35 °C'.
    """
    if value is None:
        return "—"
    text = f"{value:.{digits}f}"
    return f"{text} {unit}" if unit else text


def with_retry(
    fn: Callable[..., Any],
    *args: Any,
    label: str = "API call",
    log_path: Path = DEFAULT_LOG_PATH,
    attempts: int = MAX_ATTEMPTS,
    delay: float = RETRY_DELAY_SECONDS,
    **kwargs: Any,
) -> Any:
    """Call fn, retrying on any exception with a fixed pause between tries.

    Args:
        fn: Callable to invoke.
        *args: Positional arguments forwarded to fn.
        label: Name of the call for progress lines and the log file.
        log_path: Log file that records the final failure.
        attempts: Total number of calls before giving up (at least 1).
        delay: Seconds to sleep between attempts. Never slept after the last.
        **kwargs: Keyword arguments forwarded to fn.

    Returns:
        Whatever fn returns on its first successful call.

    Raises:
        RuntimeError: If every attempt raises; the last error is chained.
    """
    attempts = max(1, attempts)
    last_error: Exception | None = None
    for attempt in range(1, attempts + 1):
        try:
            return fn(*args, **kwargs)
        except Exception as e:
            last_error = e
            if attempt == attempts:
                break
            print(f"[provider] {label} failed (attempt {attempt}/{attempts}): {e}. Retrying in {delay}s...")
            time.sleep(delay)

    msg = f"All {attempts} attempts failed for {label}."
    print(f"[provider] {msg}")
    log_event("ERROR", f"{label} failed after {attempts} attempts: {last_error}", log_path=log_path)
    raise RuntimeError(msg) from last_error


def log_event(level: str, message: str, log_path: Path = DEFAULT_LOG_PATH) -> None:
    """Append one '<timestamp> [LEVEL] message' line to the log file.

    Write failures (read-only disk, bad path) are ignored.
    """
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with open(log_path, "a", encoding="utf-8") as f:
            f.write(f"{stamp} [{level}] {message}\n")
    except OSError:
        pass
