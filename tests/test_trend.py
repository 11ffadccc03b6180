# Project: climate-outlook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""Tests for trend.py — pure stdlib statistics, no mocking needed."""

import pytest

from climate_outlook.trend import (
    linear_trend,
    linear_trend_predict,
    series_summary,
)


# ---------------------------------------------------------------------------
# linear_trend
# ---------------------------------------------------------------------------

def test_trend_rising():
    result = linear_trend([10.0, 11.0, 12.0, 13.0])
    assert result["label"] == "rising"
    assert result["slope"] == pytest.approx(1.0)
    assert result["intercept"] == pytest.approx(10.0)


def test_trend_falling():
    assert linear_trend([5.0, 4.0, 3.0])["label"] == "falling"


def test_trend_flat_is_stable():
    assert linear_trend([2.0, 2.0, 2.0])["label"] == "stable"


def test_trend_ignores_missing_years():
    """Missing values are skipped, so [1, None, 2, 3] fits like [1, 2, 3]."""
    result = linear_trend([1.0, None, 2.0, 3.0])
    assert result["slope"] == pytest.approx(1.0)


def test_trend_single_value():
    assert linear_trend([7.0]) == {"slope": 0.0, "intercept": 7.0, "label": "stable"}


def test_trend_empty():
    assert linear_trend([None, None])["intercept"] == 0.0


# ---------------------------------------------------------------------------
# linear_trend_predict
# ---------------------------------------------------------------------------

def test_predict_extends_line():
    assert linear_trend_predict([1.0, 2.0, 3.0]) == 4.0


def test_predict_single_value_repeats_it():
    assert linear_trend_predict([None, 5.5]) == 5.5


def test_predict_empty_is_none():
    assert linear_trend_predict([None, None]) is None


# ---------------------------------------------------------------------------
# series_summary
# ---------------------------------------------------------------------------

def test_summary_reports_extremes_with_labels():
    summary = series_summary(["2022", "2023", "2024"], [12.0, None, 18.0])
    assert summary["count"] == 2
    assert summary["missing"] == 1
    assert summary["mean"] == 15.0
    assert summary["min"] == 12.0
    assert summary["min_label"] == "2022"
    assert summary["max_label"] == "2024"
    assert summary["next"] == pytest.approx(24.0)


def test_summary_of_empty_series():
    summary = series_summary(["2023", "2024"], [None, None])
    assert summary["count"] == 0
    assert summary["missing"] == 2
    assert summary["mean"] is None
    assert summary["next"] is None


def test_summary_carries_trend_direction():
    summary = series_summary(["2023", "2024"], [10.0, 12.0])
    assert summary["trend"]["label"] == "rising"
