# Project: climate-outlook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
trend.py — Single-series statistics for the same-day-of-year history.

All calculations use the Python standard library only (no numpy/scipy).
Linear regression uses the closed-form OLS formula against the position
of each present value (0, 1, 2, ...), ignoring missing years.
"""

from __future__ import annotations


def _present(values: list[float | None]) -> list[float]:
    return [v for v in values if v is not None]


def _ols(ys: list[float]) -> tuple[float, float]:
    """Return (slope, intercept) of ys against positions 0..n-1."""
    n = len(ys)
    x_mean = (n - 1) / 2
    y_mean = sum(ys) / n
    num = sum((i - x_mean) * (y - y_mean) for i, y in enumerate(ys))
    den = sum((i - x_mean) ** 2 for i in range(n))
    slope = num / den if den != 0 else 0.0
    return slope, y_mean - slope * x_mean


def linear_trend(values: list[float | None]) -> dict:
    """Fit value = slope * position + intercept over the present values.

    Returns dict with keys:
        slope (float, change per sample), intercept (float),
        label (str: "rising" | "falling" | "stable")
    """
    ys = _present(values)
    if len(ys) < 2:
        intercept = ys[0] if ys else 0.0
        return {"slope": 0.0, "intercept": intercept, "label": "stable"}

    slope, intercept = _ols(ys)

    if slope > 0.005:
        label = "rising"
    elif slope < -0.005:
        label = "falling"
    else:
        label = "stable"
    return {"slope": round(slope, 4), "intercept": round(intercept, 4), "label": label}


def linear_trend_predict(values: list[float | None]) -> float | None:
    """Extrapolate the single-series trend one step past the last present value.

    Returns None when the series has no present values.
    """
    ys = _present(values)
    if not ys:
        return None
    slope, intercept = _ols(ys)
    return round(slope * len(ys) + intercept, 2)


def series_summary(labels: list[str], values: list[float | None]) -> dict:
    """Summarise one series: count, mean, extremes with their labels, trend.

    Returns dict with keys:
        count, missing, mean, min, min_label, max, max_label,
        trend (dict from linear_trend), next (float | None)
    """
    pairs = [(label, v) for label, v in zip(labels, values) if v is not None]
    if not pairs:
        return {
            "count": 0, "missing": len(values), "mean": None,
            "min": None, "min_label": None, "max": None, "max_label": None,
            "trend": linear_trend([]), "next": None,
        }

    lowest = min(pairs, key=lambda p: p[1])
    highest = max(pairs, key=lambda p: p[1])
    present = [v for _, v in pairs]
    return {
        "count":     len(present),
        "missing":   len(values) - len(present),
        "mean":      round(sum(present) / len(present), 2),
        "min":       lowest[1],
        "min_label": lowest[0],
        "max":       highest[1],
        "max_label": highest[0],
        "trend":     linear_trend(values),
        "next":      linear_trend_predict(values),
    }
