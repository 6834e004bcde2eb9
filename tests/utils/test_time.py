"""Tests for lookback date helpers."""

from datetime import date
from unittest.mock import patch

import pytest

from regime_app.utils.time import (
    format_range_date,
    lookback_date_range,
    market_today,
    trading_days_to_calendar_days,
)


class TestTradingDaysToCalendarDays:
    """Test trading to calendar day conversion."""

    @pytest.mark.parametrize("trading_days,expected", [
        (1, 5),       # floor of days + 4
        (5, 9),
        (21, 30),
        (80, 112),
        (180, 252),
    ])
    def test_conversion(self, trading_days, expected):
        assert trading_days_to_calendar_days(trading_days) == expected

    def test_always_covers_requested_days(self):
        for days in range(1, 400):
            assert trading_days_to_calendar_days(days) >= days + 4


class TestLookbackDateRange:
    """Test date range computation."""

    def test_range_ends_today(self):
        start, end = lookback_date_range(30, today=date(2024, 6, 3))
        assert end == date(2024, 6, 3)
        assert start == date(2024, 5, 4)

    def test_defaults_to_market_today(self):
        with patch("regime_app.utils.time.market_today", return_value=date(2024, 1, 10)):
            start, end = lookback_date_range(9)
        assert (start, end) == (date(2024, 1, 1), date(2024, 1, 10))

    def test_market_today_is_a_date(self):
        assert isinstance(market_today(), date)

    def test_format_range_date(self):
        assert format_range_date(date(2024, 3, 7)) == "2024-03-07"
