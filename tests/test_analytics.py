"""Tests for the gold/silver ratio analysis and series summaries."""

from datetime import date, timedelta

import pytest

from core.errors import InvalidArgument
from core.models.market import PricePoint
from pricing.ratio import analyze_ratio
from pricing.summary import summarize_series


def _point(day: int, price: float, high: float | None = None, low: float | None = None) -> PricePoint:
    return PricePoint(
        date=date(2024, 1, 1) + timedelta(days=day),
        price=price,
        open=price,
        high=high if high is not None else price,
        low=low if low is not None else price,
        close=price,
    )


class TestAnalyzeRatio:

    def test_default_prices_are_above_band(self):
        analysis = analyze_ratio(2650.0, 31.5)
        assert analysis.ratio == 84.13
        assert analysis.status == "Silver Undervalued"
        assert analysis.is_above_average is True
        assert analysis.deviation_percent == 40.2

    def test_gold_undervalued(self):
        analysis = analyze_ratio(2000.0, 50.0)
        assert analysis.ratio == 40.0
        assert analysis.status == "Gold Undervalued"
        assert analysis.is_above_average is False
        assert analysis.deviation_percent == pytest.approx(-33.3)

    def test_normal_range(self):
        analysis = analyze_ratio(2400.0, 40.0)
        assert analysis.ratio == 60.0
        assert analysis.status == "Normal Range"
        assert analysis.description == "The gold/silver ratio is within historical norms."
        assert analysis.is_above_average is False
        assert analysis.deviation_percent == 0.0

    def test_band_edges_are_normal(self):
        assert analyze_ratio(80.0, 1.0).status == "Normal Range"
        assert analyze_ratio(50.0, 1.0).status == "Normal Range"

    def test_custom_average(self):
        analysis = analyze_ratio(2400.0, 40.0, historical_average=75.0)
        assert analysis.historical_average == 75.0
        assert analysis.deviation_percent == -20.0

    @pytest.mark.parametrize("gold,silver", [(2650.0, 0.0), (2650.0, -1.0), (0.0, 31.5)])
    def test_rejects_non_positive_prices(self, gold, silver):
        with pytest.raises(InvalidArgument):
            analyze_ratio(gold, silver)


class TestSummarizeSeries:

    def test_summary_values(self):
        points = [
            _point(0, 100.0, high=101.0, low=99.0),
            _point(1, 110.0, high=112.5, low=108.0),
            _point(2, 105.0, high=106.0, low=98.25),
        ]
        summary = summarize_series(points)

        assert summary.start_price == 100.0
        assert summary.end_price == 105.0
        assert summary.change == 5.0
        assert summary.change_percent == 5.0
        assert summary.high == 112.5
        assert summary.low == 98.25
        assert summary.average == 105.0
        assert summary.points == 3

    def test_falling_series(self):
        summary = summarize_series([_point(0, 80.0), _point(1, 60.0)])
        assert summary.change == -20.0
        assert summary.change_percent == -25.0

    def test_single_point(self):
        summary = summarize_series([_point(0, 31.5)])
        assert summary.change == 0.0
        assert summary.high == summary.low == 31.5

    def test_empty_series(self):
        with pytest.raises(InvalidArgument):
            summarize_series([])
