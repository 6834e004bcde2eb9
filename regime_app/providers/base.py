"""Base class for upstream market data providers."""

from abc import ABC, abstractmethod
from datetime import date
from typing import Any

import structlog

from ..data.models import BulkFetchResult, Series


class MarketDataProvider(ABC):
    """Base class for historical price providers."""

    def __init__(self, name: str):
        self.name = name
        self.logger = structlog.get_logger(f"provider.{name}")
        self._request_count = 0
        self._error_count = 0

    @abstractmethod
    async def fetch_bulk(self, symbols: list[str], days: int) -> BulkFetchResult:
        """
        Fetch many symbols in one aggregated request.

        Args:
            symbols: Tickers to fetch
            days: Calendar days of history ending today

        Returns:
            Parsed bulk result; success=False when the provider declined
        """
        pass

    @abstractmethod
    async def fetch_symbol(self, symbol: str, start: date, end: date) -> Series:
        """
        Fetch one symbol's daily bars for an inclusive date range.

        Returns:
            Normalized series, empty when the provider has no data
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the provider is reachable. Never raises."""
        pass

    async def close(self) -> None:
        """Release provider resources."""
        return None

    def _record_request(self, failed: bool = False) -> None:
        self._request_count += 1
        if failed:
            self._error_count += 1

    def get_stats(self) -> dict[str, Any]:
        """Get request statistics."""
        return {
            "name": self.name,
            "request_count": self._request_count,
            "error_count": self._error_count,
            "success_rate": (
                (self._request_count - self._error_count) / self._request_count
                if self._request_count > 0 else 0.0
            )
        }
