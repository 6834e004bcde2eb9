#!/usr/bin/env python3
"""
Basic Usage Example - Regime Relative-Performance Engine

This script runs the engine against an in-memory provider that serves
random-walk prices, so it needs no market data server. It shows how to:
- Plug a MarketDataProvider into the engine
- Receive progress and per-timeframe streaming callbacks
- Read ranked industries and their best/worst holdings

Run: python examples/basic_usage.py
"""

import asyncio
import random
from datetime import date, datetime, timedelta, timezone

from regime_app.data.catalog import default_catalog
from regime_app.data.models import BulkFetchResult, PricePoint, Series, TimeframeAnalysis
from regime_app.engine import RegimeAnalysisEngine
from regime_app.logging import configure_logging
from regime_app.providers.base import MarketDataProvider


class RandomWalkProvider(MarketDataProvider):
    """Deterministic random-walk daily closes per symbol."""

    def __init__(self, seed: int = 7):
        super().__init__("random-walk")
        self.seed = seed

    def _series(self, symbol: str, start: date, end: date) -> Series:
        rng = random.Random(f"{self.seed}:{symbol}")
        price = rng.uniform(20, 400)
        points = []
        day = start
        while day <= end:
            if day.weekday() < 5:
                price *= 1 + rng.gauss(0.0005, 0.02)
                ts = int(datetime(day.year, day.month, day.day, tzinfo=timezone.utc).timestamp() * 1000)
                points.append(PricePoint(timestamp=ts, close=round(price, 2), volume=rng.randint(10_000, 900_000)))
            day += timedelta(days=1)
        return Series.from_points(symbol, points)

    async def fetch_bulk(self, symbols, days):
        end = date.today()
        start = end - timedelta(days=days)
        data = {symbol: self._series(symbol, start, end) for symbol in symbols}
        self._record_request()
        return BulkFetchResult(success=True, data=data, requested=len(symbols), successful=len(data))

    async def fetch_symbol(self, symbol, start, end):
        self._record_request()
        return self._series(symbol, start, end)

    async def health_check(self):
        return True


def print_progress(message: str, percent: float) -> None:
    print(f"   [{percent:5.1f}%] {message}")


def print_timeframe(label: str, analysis: TimeframeAnalysis) -> None:
    print(f"\n📊 {label} ({analysis.lookback_days} trading days)")
    for entry in analysis.industries[:5]:
        top = ", ".join(h.holding_symbol for h in entry.top_performers[:3])
        worst = ", ".join(h.holding_symbol for h in entry.worst_performers[:3])
        print(f"  {entry.symbol:5s} {entry.relative_performance:+7.2f} vs {entry.performance.reference_symbol}"
              f"  ({entry.performance.trend.value})  top: {top}  worst: {worst}")
    print()


async def main():
    """Run the basic usage demonstration."""
    print("🚀 Regime Relative-Performance Engine - Basic Usage Demo")
    print("=" * 60)

    configure_logging(level="WARNING")

    print("1. Initializing the engine with the built-in industry catalog...")
    provider = RandomWalkProvider()
    engine = RegimeAnalysisEngine(provider, catalog=default_catalog())
    print(f"   {len(engine.catalog)} industries benchmarked against {engine.catalog.benchmark}")
    print()

    print("2. Running all timeframes...")
    run = await engine.run_analysis(progress_callback=print_progress, stream_callback=print_timeframe)

    print("3. Summary:")
    for label in run.labels:
        leaders = [entry.symbol for entry in run[label].industries[:3]]
        print(f"   {label:10s} leaders: {', '.join(leaders)}")
    print(f"   Provider stats: {provider.get_stats()}")

    print("\n4. Running again (served from cache)...")
    before = provider.get_stats()["request_count"]
    await engine.run_analysis()
    print(f"   Provider requests during second run: {provider.get_stats()['request_count'] - before}")


if __name__ == "__main__":
    asyncio.run(main())
