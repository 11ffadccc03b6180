# Project: climate-outlook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
prediction.py — Per-variable regression predictions from aligned series.

Each target variable is regressed on the other base variables using only
the years where the target and every predictor are present. The fitted
model is evaluated on each predictor's most recent value, then the result
is clamped to the variable's physical range.

Series are never modified; predict_all is a pure function of its input.
"""

from __future__ import annotations

from climate_outlook.heat_index import heat_index
from climate_outlook.linalg import LinearAlgebraError, SingularMatrix, invert, multiply, transpose
from climate_outlook.regression import MIN_ROWS, InsufficientSamples, fit, predict

TARGET_PREDICTORS: dict[str, tuple[str, ...]] = {
    "temperature": ("humidity", "rainfall", "wind", "uv_index"),
    "rainfall":    ("temperature", "humidity", "wind", "uv_index"),
    "wind":        ("temperature", "humidity", "rainfall", "uv_index"),
    "humidity":    ("temperature", "rainfall", "wind", "uv_index"),
    "uv_index":    ("temperature", "humidity", "rainfall", "wind"),
    "heat_index":  ("temperature", "humidity", "rainfall", "wind", "uv_index"),
}

NON_NEGATIVE = frozenset({"rainfall", "wind", "uv_index"})
HUMIDITY_RANGE = (0.0, 100.0)


def heat_index_series(
    temperature: list[float | None],
    humidity: list[float | None],
) -> list[float | None]:
    """Pointwise heat index; None wherever either input is None."""
    return [heat_index(t, h) for t, h in zip(temperature, humidity)]


def complete_cases(
    target: list[float | None],
    predictors: list[list[float | None]],
) -> tuple[list[list[float]], list[float]]:
    """Keep only the indices where the target and every predictor have a value.

    Returns:
        (X, y) with one row of predictor values per kept index.
    """
    x: list[list[float]] = []
    y: list[float] = []
    for i, t in enumerate(target):
        if t is None:
            continue
        row = [p[i] for p in predictors]
        if any(v is None for v in row):
            continue
        x.append(row)
        y.append(t)
    return x, y


def latest_or_mean(values: list[float | None]) -> float:
    """Most recent non-missing value, or 0.0 when every value is missing."""
    for v in reversed(values):
        if v is not None:
            return v
    return 0.0


def sanitize(variable: str, value: float | None) -> float | None:
    """Clamp a raw prediction into the variable's physical range.

    Adding 0.0 folds a rounded -0.0 into 0.0 so it never prints as "-0.00".
    """
    if value is None:
        return None
    if variable in NON_NEGATIVE:
        return max(value, 0.0) + 0.0
    if variable == "humidity":
        low, high = HUMIDITY_RANGE
        return min(max(value, low), high) + 0.0
    return value + 0.0


def independent_columns(x: list[list[float]]) -> list[int]:
    """Indices of predictor columns that keep Xb^T Xb invertible, in order.

    A column is skipped when it is (numerically) a linear combination of the
    intercept and the columns already kept.
    """
    kept: list[int] = []
    for j in range(len(x[0]) if x else 0):
        candidate = kept + [j]
        if len(x) < len(candidate) + 1:
            break
        xb = [[1.0, *(row[c] for c in candidate)] for row in x]
        xt = transpose(xb)
        try:
            invert(multiply(xt, xb))
        except SingularMatrix:
            continue
        kept.append(j)
    return kept


def fit_target(
    x: list[list[float]],
    y: list[float],
) -> tuple[list[float], list[int]]:
    """Fit y on x, falling back to an independent subset of columns if singular.

    Returns:
        (coefficients, dropped_columns). Coefficients always have
        len(x[0]) + 1 entries; dropped columns carry a 0.0 coefficient.

    Raises:
        InsufficientSamples: If fewer than MIN_ROWS rows.
        SingularMatrix: If no predictor column survives the fallback.
    """
    try:
        return fit(x, y), []
    except SingularMatrix:
        kept = independent_columns(x)
        if not kept:
            raise

    reduced = fit([[row[c] for c in kept] for row in x], y)
    coeffs = [reduced[0]] + [0.0] * len(x[0])
    for slot, c in enumerate(kept, start=1):
        coeffs[c + 1] = reduced[slot]
    dropped = [c for c in range(len(x[0])) if c not in kept]
    return coeffs, dropped


def predict_all(series: dict) -> dict:
    """Predict every target variable from the other variables' history.

    Args:
        series: Dict with equal-length lists for temperature, rainfall, wind,
            humidity and uv_index (float or None per year). Extra keys such as
            labels are ignored.

    Returns:
        Dict with keys:
            predictions  — {variable: float | None}, rounded and clamped
            raw          — {variable: float | None}, rounded, before clamping
            coefficients — {variable: list[float] | None}
            dropped      — {variable: [predictor names removed as collinear]}
            heat_index   — derived heat index series

    Raises:
        ValueError: If the base series differ in length.
    """
    base = {name: list(series[name]) for name in ("temperature", "rainfall", "wind", "humidity", "uv_index")}
    lengths = {len(values) for values in base.values()}
    if len(lengths) > 1:
        raise ValueError(
            "Series are misaligned: "
            + ", ".join(f"{k}={len(v)}" for k, v in base.items())
        )

    hi_series = heat_index_series(base["temperature"], base["humidity"])
    targets = {**base, "heat_index": hi_series}

    predictions: dict[str, float | None] = {}
    raw: dict[str, float | None] = {}
    coefficients: dict[str, list[float] | None] = {}
    dropped: dict[str, list[str]] = {}

    for variable, predictor_names in TARGET_PREDICTORS.items():
        predictor_series = [base[name] for name in predictor_names]
        x, y = complete_cases(targets[variable], predictor_series)

        value = None
        coeffs = None
        removed: list[str] = []
        if len(x) >= MIN_ROWS:
            try:
                coeffs, dropped_cols = fit_target(x, y)
                features = [latest_or_mean(s) for s in predictor_series]
                value = round(predict(coeffs, features), 2)
                removed = [predictor_names[c] for c in dropped_cols]
            except (LinearAlgebraError, InsufficientSamples) as e:
                print(f"[prediction] Could not fit {variable}: {e}")
                coeffs = None
                value = None

        raw[variable] = value
        predictions[variable] = sanitize(variable, value)
        coefficients[variable] = coeffs
        dropped[variable] = removed

    return {
        "predictions": predictions,
        "raw": raw,
        "coefficients": coefficients,
        "dropped": dropped,
        "heat_index": hi_series,
    }
