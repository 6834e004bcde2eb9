"""
Date helpers for lookback windows.

Lookback windows are counted in trading days, while the provider is asked
for calendar date ranges. These helpers convert between the two.
"""

import math
from datetime import date, datetime, timedelta, timezone
from typing import Optional


def trading_days_to_calendar_days(trading_days: int) -> int:
    """
    Calendar days needed to cover a number of trading days.

    Roughly 5 trading days fall in every 7 calendar days; a 40% buffer
    plus a floor of four extra days absorbs weekends and holidays.

    Args:
        trading_days: Lookback in trading days

    Returns:
        Calendar days to request from the provider
    """
    calendar_days = math.ceil(trading_days * 1.4)
    return max(calendar_days, trading_days + 4)


def market_today() -> date:
    """Current UTC calendar date."""
    return datetime.now(timezone.utc).date()


def lookback_date_range(calendar_days: int, today: Optional[date] = None) -> tuple[date, date]:
    """
    Inclusive (start, end) date range ending today.

    Args:
        calendar_days: Span of the range in calendar days
        today: End date, defaults to market_today()

    Returns:
        Tuple of (start_date, end_date)
    """
    end = today if today is not None else market_today()
    return end - timedelta(days=calendar_days), end


def format_range_date(value: date) -> str:
    """Format a date the way the provider and cache keys expect (YYYY-MM-DD)."""
    return value.isoformat()
