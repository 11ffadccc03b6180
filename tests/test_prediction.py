# Project: climate-outlook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
test_prediction.py — Tests for per-variable regression predictions.

Series are hand-built lists; no provider calls here.
"""

import copy
import math

import pytest

from climate_outlook.prediction import (
    TARGET_PREDICTORS,
    complete_cases,
    fit_target,
    heat_index_series,
    independent_columns,
    latest_or_mean,
    predict_all,
    sanitize,
)
from climate_outlook.linalg import SingularMatrix
from climate_outlook.regression import InsufficientSamples


# Seven years where humidity = temperature + 30 and uv_index = wind - 1,
# so every full fit is collinear and has to fall back to a column subset.
SCENARIO = {
    "labels":      ["2018", "2019", "2020", "2021", "2022", "2023", "2024"],
    "temperature": [10, 12, 11, 13, 12, 14, 13],
    "humidity":    [40, 42, 41, 43, 42, 44, 43],
    "wind":        [3, 4, 3, 5, 4, 6, 5],
    "rainfall":    [0, 1, 0, 2, 0, 1, 0],
    "uv_index":    [2, 3, 2, 4, 3, 5, 4],
}


def make_series(**overrides) -> dict:
    series = copy.deepcopy(SCENARIO)
    series.update(overrides)
    return series


# ---------------------------------------------------------------------------
# End-to-end scenario
# ---------------------------------------------------------------------------

class TestScenario:

    def test_every_target_has_a_prediction(self):
        result = predict_all(make_series())
        for variable in TARGET_PREDICTORS:
            assert result["predictions"][variable] is not None, variable

    def test_heat_index_equals_temperature_below_80f(self):
        result = predict_all(make_series())
        assert len(result["heat_index"]) == 7
        assert result["heat_index"] == SCENARIO["temperature"]

    def test_predictions_within_physical_bounds(self):
        p = predict_all(make_series())["predictions"]
        assert p["rainfall"] >= 0
        assert p["wind"] >= 0
        assert p["uv_index"] >= 0
        assert 0 <= p["humidity"] <= 100

    def test_exact_relationships_are_recovered(self):
        """Latest year has temperature 13, humidity 43, wind 5, uv 4."""
        p = predict_all(make_series())["predictions"]
        assert p["temperature"] == pytest.approx(13.0, abs=0.01)
        assert p["humidity"] == pytest.approx(43.0, abs=0.01)
        assert p["wind"] == pytest.approx(5.0, abs=0.01)
        assert p["uv_index"] == pytest.approx(4.0, abs=0.01)
        assert p["heat_index"] == pytest.approx(13.0, abs=0.01)

    def test_collinear_predictors_are_reported_as_dropped(self):
        dropped = predict_all(make_series())["dropped"]
        assert dropped["temperature"] == ["uv_index"]
        assert dropped["humidity"] == ["uv_index"]
        assert dropped["wind"] == ["humidity"]
        assert dropped["uv_index"] == ["humidity"]
        assert dropped["heat_index"] == ["humidity", "uv_index"]

    def test_dropped_predictors_have_zero_coefficient(self):
        coeffs = predict_all(make_series())["coefficients"]["temperature"]
        # intercept + humidity, rainfall, wind, uv_index
        assert len(coeffs) == 5
        assert coeffs[4] == 0.0

    def test_idempotent_and_input_untouched(self):
        series = make_series()
        snapshot = copy.deepcopy(series)
        first = predict_all(series)
        second = predict_all(series)
        assert first == second
        assert series == snapshot


# ---------------------------------------------------------------------------
# Sanitisation
# ---------------------------------------------------------------------------

def test_negative_rainfall_prediction_clamped_to_zero():
    """Rainfall falls 0.1 per degree; at 18 °C the line gives -0.2 mm."""
    series = {
        "temperature": [10, 11, 12, 13, 14, 15, 18],
        "rainfall":    [0.6, 0.5, 0.4, 0.3, 0.2, 0.1, None],
        "humidity":    [50] * 7,
        "wind":        [3] * 7,
        "uv_index":    [2] * 7,
    }
    result = predict_all(series)
    assert result["raw"]["rainfall"] == pytest.approx(-0.2, abs=1e-9)
    assert result["predictions"]["rainfall"] == 0.0


def test_humidity_prediction_clamped_to_100():
    """Humidity = 20 + 5 * temperature; at 18 °C that is 110 %."""
    series = {
        "temperature": [10, 11, 12, 13, 14, 15, 18],
        "rainfall":    [0] * 7,
        "humidity":    [70, 75, 80, 85, 90, 95, None],
        "wind":        [3] * 7,
        "uv_index":    [2] * 7,
    }
    result = predict_all(series)
    assert result["raw"]["humidity"] == pytest.approx(110.0, abs=1e-9)
    assert result["predictions"]["humidity"] == 100.0


class TestSanitize:

    @pytest.mark.parametrize("variable", ["rainfall", "wind", "uv_index"])
    def test_non_negative_variables(self, variable):
        assert sanitize(variable, -1.5) == 0.0
        assert sanitize(variable, 2.5) == 2.5

    def test_humidity_range(self):
        assert sanitize("humidity", -3.0) == 0.0
        assert sanitize("humidity", 104.0) == 100.0
        assert sanitize("humidity", 55.0) == 55.0

    def test_temperature_unbounded(self):
        assert sanitize("temperature", -40.0) == -40.0

    def test_none_passes_through(self):
        assert sanitize("wind", None) is None

    @pytest.mark.parametrize("variable", ["rainfall", "humidity", "temperature"])
    def test_rounded_negative_zero_becomes_positive_zero(self, variable):
        result = sanitize(variable, round(-0.001, 2))
        assert result == 0.0
        assert math.copysign(1.0, result) == 1.0
        assert f"{result:.2f}" == "0.00"


# ---------------------------------------------------------------------------
# Degraded inputs
# ---------------------------------------------------------------------------

def test_misaligned_series_raise():
    series = make_series(wind=[3, 4, 3])
    with pytest.raises(ValueError, match="misaligned"):
        predict_all(series)


def test_fewer_than_two_complete_rows_gives_none():
    series = {
        "temperature": [10, None, None, None, None, None, 12],
        "rainfall":    [0, 1, 0, 2, 0, 1, None],
        "humidity":    [40, 42, 41, 43, 42, 44, 43],
        "wind":        [3, 4, 3, 5, 4, 6, 5],
        "uv_index":    [2, 3, 2, 4, 3, 5, 4],
    }
    result = predict_all(series)
    # Only index 0 has both temperature and every other predictor present.
    assert result["predictions"]["temperature"] is None
    assert result["coefficients"]["temperature"] is None


def test_all_years_missing_gives_all_none():
    empty = [None] * 7
    series = {name: list(empty) for name in ("temperature", "rainfall", "humidity", "wind", "uv_index")}
    result = predict_all(series)
    assert all(v is None for v in result["predictions"].values())
    assert result["heat_index"] == empty


def test_constant_predictors_give_none(capsys):
    series = {
        "temperature": [10, 11, 12, 13, 14, 15, 16],
        "rainfall":    [0] * 7,
        "humidity":    [50] * 7,
        "wind":        [3] * 7,
        "uv_index":    [2] * 7,
    }
    result = predict_all(series)
    assert result["predictions"]["temperature"] is None
    assert "Could not fit temperature" in capsys.readouterr().out


def test_missing_years_are_skipped_not_zeroed():
    """A None in a predictor drops that year; it is not treated as 0."""
    series = make_series(wind=[3, 4, None, 5, 4, 6, 5])
    result = predict_all(series)
    assert result["predictions"]["temperature"] == pytest.approx(13.0, abs=0.01)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def test_complete_cases_filters_rows_with_any_gap():
    x, y = complete_cases([1, None, 3, 4], [[10, 20, None, 40], [5, 6, 7, 8]])
    assert x == [[10, 5], [40, 8]]
    assert y == [1, 4]


def test_latest_or_mean_prefers_latest_present():
    assert latest_or_mean([1.0, 2.0, None]) == 2.0
    assert latest_or_mean([None, None]) == 0.0
    assert latest_or_mean([3.0, None, None]) == 3.0
    assert latest_or_mean([]) == 0.0


def test_heat_index_series_keeps_gaps():
    assert heat_index_series([20.0, None, 22.0], [50.0, 60.0, None]) == [20.0, None, None]


def test_independent_columns_skips_duplicates():
    x = [[1, 2, 5], [2, 4, 3], [3, 6, 8], [4, 8, 1]]
    assert independent_columns(x) == [0, 2]


def test_fit_target_without_collinearity_drops_nothing():
    x = [[1, 2], [2, 1], [3, 4], [4, 3], [5, 6]]
    y = [2 + 3 * a - b for a, b in x]
    coeffs, dropped = fit_target(x, y)
    assert dropped == []
    assert coeffs == pytest.approx([2.0, 3.0, -1.0], abs=1e-8)


def test_fit_target_reraises_when_nothing_survives():
    with pytest.raises(SingularMatrix):
        fit_target([[1], [1], [1]], [1.0, 2.0, 3.0])


def test_fit_target_needs_two_rows():
    with pytest.raises(InsufficientSamples):
        fit_target([[1.0]], [1.0])
