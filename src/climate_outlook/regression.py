# Project: climate-outlook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
regression.py — Multiple linear regression via the normal equations.

    beta = (Xb^T Xb)^-1 Xb^T y

where Xb is the feature matrix with a leading column of 1.0 (intercept).
Coefficients are returned intercept-first: [b0, b1, ..., bk].
"""

from __future__ import annotations

from climate_outlook.linalg import DimensionMismatch, invert, multiply, transpose

MIN_ROWS: int = 2


class InsufficientSamples(ValueError):
    """Raised when fewer than MIN_ROWS observation rows are available."""


class ShapeMismatch(DimensionMismatch):
    """Raised when feature rows, targets or coefficients disagree in length."""


def fit(x: list[list[float]], y: list[float]) -> list[float]:
    """Fit an ordinary least-squares model with an intercept term.

    Args:
        x: Feature rows (rows x k), without an intercept column. k >= 1.
        y: Target values, one per row.

    Returns:
        Coefficients [intercept, b1, ..., bk].

    Raises:
        ShapeMismatch: If x and y differ in length, rows are ragged, or k == 0.
        InsufficientSamples: If there are fewer than MIN_ROWS rows.
        SingularMatrix: If Xb^T Xb cannot be inverted.
    """
    if len(x) != len(y):
        raise ShapeMismatch(f"{len(x)} feature rows but {len(y)} targets")
    if len(x) < MIN_ROWS:
        raise InsufficientSamples(f"Need at least {MIN_ROWS} rows, got {len(x)}")

    k = len(x[0])
    if k == 0:
        raise ShapeMismatch("At least one predictor column is required")
    if any(len(row) != k for row in x):
        raise ShapeMismatch("Feature rows have differing lengths")

    xb = [[1.0, *row] for row in x]
    xt = transpose(xb)
    xtx_inv = invert(multiply(xt, xb))
    xty = multiply(xt, [[float(v)] for v in y])
    beta = multiply(xtx_inv, xty)
    return [b[0] for b in beta]


def predict(coeffs: list[float], features: list[float]) -> float:
    """Evaluate coeffs[0] + sum(coeffs[i+1] * features[i]).

    Raises:
        ShapeMismatch: If len(features) != len(coeffs) - 1.
    """
    if len(features) != len(coeffs) - 1:
        raise ShapeMismatch(
            f"{len(coeffs)} coefficients need {len(coeffs) - 1} features, "
            f"got {len(features)}"
        )
    return coeffs[0] + sum(c * f for c, f in zip(coeffs[1:], features))
