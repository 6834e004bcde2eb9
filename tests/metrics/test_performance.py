"""Tests for period return and relative performance."""

import pytest

from regime_app.data.models import PricePoint, Series, Trend
from regime_app.metrics.performance import classify_trend, compare, period_return, relative_performance

from tests.fakes import make_series


class TestPeriodReturn:
    """Test suite for period_return."""

    def test_simple_return(self) -> None:
        assert period_return(make_series("A", [100, 95, 110])) == pytest.approx(10.0)

    def test_negative_return(self) -> None:
        assert period_return(make_series("B", [20, 18])) == pytest.approx(-10.0)

    def test_fewer_than_two_points_is_zero(self) -> None:
        assert period_return(Series.empty("A")) == 0.0
        assert period_return(make_series("A", [100])) == 0.0

    def test_zero_base_price_is_zero(self) -> None:
        assert period_return(make_series("A", [0, 10])) == 0.0

    def test_uses_timestamps_not_position(self) -> None:
        """Test that an unsorted series gives the same return as its sorted form."""
        ordered = make_series("A", [100, 120, 90, 110])
        shuffled = Series(symbol="A", points=tuple(reversed(ordered.points)))

        assert period_return(shuffled) == period_return(ordered)

    def test_scale_invariance(self) -> None:
        """Test that multiplying every close by k > 0 leaves the return unchanged."""
        base = make_series("A", [40, 44, 47])
        scaled = Series.from_points(
            "A", [PricePoint(p.timestamp, p.close * 7.5, p.volume) for p in base]
        )
        assert period_return(scaled) == pytest.approx(period_return(base))


class TestRelativePerformance:
    """Test suite for relative_performance and compare."""

    def test_series_against_itself_is_zero(self) -> None:
        series = make_series("A", [100, 103, 99])
        assert relative_performance(series, series) == 0.0

    def test_ten_versus_four_percent(self) -> None:
        """Test that +10% against +4% is +6 points and bullish."""
        result = compare(make_series("X", [100, 110]), make_series("SPY", [50, 52]))

        assert result.value == pytest.approx(6.0)
        assert result.trend is Trend.BULLISH
        assert result.subject_symbol == "X"
        assert result.reference_symbol == "SPY"

    def test_underperformance_is_bearish(self) -> None:
        result = compare(make_series("X", [100, 101]), make_series("SPY", [100, 105]))
        assert result.value == pytest.approx(-4.0)
        assert result.trend is Trend.BEARISH

    def test_insufficient_reference_counts_as_flat(self) -> None:
        result = compare(make_series("X", [100, 110]), make_series("SPY", [100]))
        assert result.value == pytest.approx(10.0)


class TestClassifyTrend:
    """Test suite for classify_trend."""

    @pytest.mark.parametrize("value,expected", [
        (0.01, Trend.BULLISH),
        (0.0, Trend.BEARISH),
        (-3.2, Trend.BEARISH),
    ])
    def test_threshold(self, value, expected) -> None:
        assert classify_trend(value) is expected
