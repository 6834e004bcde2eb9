"""
Upstream market data providers.

The fetcher talks to providers only through MarketDataProvider, so the
HTTP client can be swapped for a fake in tests.
"""
from .base import MarketDataProvider
from .http_provider import HttpMarketDataProvider

__all__ = ["MarketDataProvider", "HttpMarketDataProvider"]
