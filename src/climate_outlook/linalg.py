# Project: climate-outlook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
linalg.py — Small dense matrix helpers for the regression engine.

Matrices are plain lists of row lists. Inputs are never modified.
All calculations use the Python standard library only (no numpy).
"""

from __future__ import annotations

# A pivot smaller than this fraction of its row's largest entry is treated as zero.
PIVOT_TOLERANCE: float = 1e-9


class LinearAlgebraError(ValueError):
    """Base class for matrix contract violations."""


class DimensionMismatch(LinearAlgebraError):
    """Raised when matrix shapes are incompatible with the operation."""


class SingularMatrix(LinearAlgebraError):
    """Raised when Gauss-Jordan elimination meets a zero (or vanishing) pivot."""


def _shape(m: list[list[float]], name: str) -> tuple[int, int]:
    rows = len(m)
    cols = len(m[0]) if rows else 0
    for row in m:
        if len(row) != cols:
            raise DimensionMismatch(f"{name} has ragged rows")
    return rows, cols


def multiply(a: list[list[float]], b: list[list[float]]) -> list[list[float]]:
    """Return the matrix product a·b.

    Raises:
        DimensionMismatch: If a's column count differs from b's row count.
    """
    a_rows, a_cols = _shape(a, "left matrix")
    b_rows, b_cols = _shape(b, "right matrix")
    if a_cols != b_rows:
        raise DimensionMismatch(
            f"Cannot multiply {a_rows}x{a_cols} by {b_rows}x{b_cols}"
        )
    return [
        [sum(row[i] * b[i][j] for i in range(a_cols)) for j in range(b_cols)]
        for row in a
    ]


def transpose(m: list[list[float]]) -> list[list[float]]:
    """Swap rows and columns."""
    if not m:
        return []
    return [list(col) for col in zip(*m)]


def identity(n: int) -> list[list[float]]:
    return [[1.0 if i == j else 0.0 for j in range(n)] for i in range(n)]


def invert(m: list[list[float]]) -> list[list[float]]:
    """Invert a square matrix by Gauss-Jordan elimination.

    Each pivot is taken from the diagonal as-is; rows are never exchanged.
    A matrix whose leading diagonal hits zero during elimination is therefore
    rejected even when a row swap would have made it invertible.

    Args:
        m: Square matrix as a list of rows.

    Returns:
        The inverse as a new list of rows.

    Raises:
        DimensionMismatch: If m is not square.
        SingularMatrix: If a pivot is zero or vanishingly small relative to
            the magnitude of its original row.
    """
    rows, cols = _shape(m, "matrix")
    if rows != cols:
        raise DimensionMismatch(f"Cannot invert non-square {rows}x{cols} matrix")

    size = rows
    work = [[float(v) for v in row] for row in m]
    inv = identity(size)

    for i in range(size):
        scale = max(abs(v) for v in m[i]) or 1.0
        pivot = work[i][i]
        if pivot == 0 or abs(pivot) <= PIVOT_TOLERANCE * scale:
            raise SingularMatrix(f"Zero pivot at row {i} (value {pivot!r})")

        for j in range(size):
            work[i][j] /= pivot
            inv[i][j] /= pivot

        for k in range(size):
            if k == i:
                continue
            factor = work[k][i]
            if factor == 0:
                continue
            for j in range(size):
                work[k][j] -= factor * work[i][j]
                inv[k][j] -= factor * inv[i][j]

    return inv
