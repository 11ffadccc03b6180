# Project: climate-outlook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""Tests for regression.py — fit and predict."""

import pytest

from climate_outlook.linalg import DimensionMismatch, SingularMatrix
from climate_outlook.regression import InsufficientSamples, ShapeMismatch, fit, predict


# y = 2 + 3*x1 - x2, no noise
X_TRUE = [[1, 2], [2, 1], [3, 4], [4, 3], [5, 6]]
Y_TRUE = [2 + 3 * x1 - x2 for x1, x2 in X_TRUE]


# ---------------------------------------------------------------------------
# fit
# ---------------------------------------------------------------------------

class TestFit:

    def test_recovers_known_coefficients(self):
        coeffs = fit(X_TRUE, Y_TRUE)
        assert coeffs == pytest.approx([2.0, 3.0, -1.0], abs=1e-8)

    def test_coefficient_count_is_predictors_plus_one(self):
        assert len(fit(X_TRUE, Y_TRUE)) == 3

    def test_single_predictor_line(self):
        coeffs = fit([[0], [1], [2]], [1, 3, 5])
        assert coeffs == pytest.approx([1.0, 2.0], abs=1e-9)

    def test_least_squares_with_noise(self):
        """A step pattern is fitted by its least-squares line (slope 0.8, intercept 0.3)."""
        coeffs = fit([[0], [1], [2], [3]], [0.5, 0.5, 2.5, 2.5])
        assert coeffs[1] == pytest.approx(0.8, abs=1e-9)
        assert coeffs[0] == pytest.approx(0.3, abs=1e-9)

    def test_fewer_than_two_rows_raises(self):
        with pytest.raises(InsufficientSamples):
            fit([[1.0, 2.0]], [3.0])

    def test_length_mismatch_raises(self):
        with pytest.raises(ShapeMismatch):
            fit(X_TRUE, Y_TRUE[:-1])

    def test_zero_predictors_raises(self):
        with pytest.raises(ShapeMismatch):
            fit([[], []], [1.0, 2.0])

    def test_ragged_rows_raise(self):
        with pytest.raises(ShapeMismatch):
            fit([[1, 2], [3], [4, 5]], [1, 2, 3])

    def test_collinear_predictors_raise_singular(self):
        x = [[1, 2], [2, 4], [3, 6], [4, 8]]
        with pytest.raises(SingularMatrix):
            fit(x, [1, 2, 3, 4])

    def test_shape_mismatch_is_dimension_mismatch(self):
        assert issubclass(ShapeMismatch, DimensionMismatch)


# ---------------------------------------------------------------------------
# predict
# ---------------------------------------------------------------------------

class TestPredict:

    def test_intercept_plus_weighted_sum(self):
        assert predict([2.0, 3.0, -1.0], [4.0, 1.0]) == pytest.approx(13.0)

    def test_reproduces_training_targets(self):
        coeffs = fit(X_TRUE, Y_TRUE)
        for row, y in zip(X_TRUE, Y_TRUE):
            assert predict(coeffs, row) == pytest.approx(y, abs=1e-8)

    def test_wrong_feature_count_raises(self):
        with pytest.raises(ShapeMismatch):
            predict([1.0, 2.0, 3.0], [1.0])
