"""
Series fetcher: resolves a set of symbols to price series.

Serves cache hits without I/O, then tries one bulk request for the misses
and falls back to rate-smoothed per-symbol requests in concurrent batches.
Never raises; a symbol that cannot be fetched is absent (bulk path) or
maps to an empty series (fallback path).
"""

import asyncio
from datetime import date
from typing import Awaitable, Callable, Iterable, Optional

from ..config.defaults import FetchParams
from ..errors import DataQualityError, GracefulDegradationError, ProviderError
from ..logging.config import get_fetch_logger, log_fetch_summary
from ..providers.base import MarketDataProvider
from ..utils.time import format_range_date, lookback_date_range, market_today, trading_days_to_calendar_days
from .cache import SeriesCache
from .models import CacheKey, Series

logger = get_fetch_logger(__name__)


def _chunk(items: list, size: int) -> list[list]:
    return [items[i:i + size] for i in range(0, len(items), size)]


class SeriesFetcher:
    """Bulk-first, batched-fallback series fetcher over a shared TTL cache."""

    def __init__(
        self,
        provider: MarketDataProvider,
        cache: SeriesCache,
        params: Optional[FetchParams] = None,
        today: Callable[[], date] = market_today,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.provider = provider
        self.cache = cache
        self.params = params or FetchParams()
        self._today = today
        self._sleep = sleep

    async def fetch_all(self, symbols: Iterable[str], lookback_days: int) -> dict[str, Series]:
        """
        Resolve symbols to series for a lookback window.

        Args:
            symbols: Tickers to resolve (duplicates are ignored)
            lookback_days: Lookback window in trading days

        Returns:
            Map of symbol to normalized series
        """
        results: dict[str, Series] = {}
        requested = sorted(set(symbols))

        try:
            calendar_days = trading_days_to_calendar_days(lookback_days)
            start, end = lookback_date_range(calendar_days, self._today())
            range_start, range_end = format_range_date(start), format_range_date(end)

            uncached = []
            for symbol in requested:
                cached = self.cache.get(CacheKey(symbol, range_start, range_end))
                if cached is not None:
                    results[symbol] = cached
                else:
                    uncached.append(symbol)

            cache_hits = len(results)
            if not uncached:
                log_fetch_summary(logger, lookback_days, len(requested), cache_hits, "cache",
                                  self._resolved_count(results))
                return results

            strategy = "bulk"
            bulk_results = None
            if self.params.use_bulk:
                bulk_results = await self._fetch_bulk(uncached, calendar_days, range_start, range_end)

            if bulk_results is None:
                strategy = "batched"
                logger.info(
                    "Fetching uncached symbols in batches",
                    symbols=len(uncached),
                    batch_size=self.params.batch_size,
                    max_concurrent_batches=self.params.max_concurrent_batches
                )
                bulk_results = await self._fetch_batched(uncached, start, end, range_start, range_end)

            results.update(bulk_results)
            log_fetch_summary(logger, lookback_days, len(requested), cache_hits, strategy,
                              self._resolved_count(results))

        except Exception as e:
            logger.error(
                "Series fetch aborted, returning partial results",
                lookback_days=lookback_days,
                resolved=len(results),
                error=str(e)
            )

        return results

    async def _fetch_bulk(
        self, symbols: list[str], calendar_days: int, range_start: str, range_end: str
    ) -> Optional[dict[str, Series]]:
        """Strategy A. Returns None when the caller should fall back."""
        try:
            result = await asyncio.wait_for(
                self.provider.fetch_bulk(symbols, calendar_days),
                timeout=self.params.bulk_timeout_seconds
            )
            if not result.success:
                raise GracefulDegradationError(
                    "Bulk endpoint reported failure",
                    degraded_functionality="bulk_fetch",
                    fallback_strategy="batched_per_symbol"
                )

        except asyncio.TimeoutError:
            logger.warning(
                "Bulk endpoint timed out, falling back to individual requests",
                timeout_seconds=self.params.bulk_timeout_seconds,
                symbols=len(symbols)
            )
            return None

        except (ProviderError, DataQualityError, GracefulDegradationError) as e:
            logger.warning(
                "Bulk endpoint failed, falling back to individual requests",
                error=str(e),
                error_type=type(e).__name__,
                symbols=len(symbols)
            )
            return None

        except Exception as e:
            logger.error(
                "Unexpected bulk endpoint error, falling back to individual requests",
                error=str(e),
                error_type=type(e).__name__
            )
            return None

        requested = set(symbols)
        resolved = {}
        for symbol, series in result.data.items():
            if symbol not in requested:
                continue
            resolved[symbol] = series
            if not series.is_empty:
                self.cache.put(CacheKey(symbol, range_start, range_end), series)

        logger.info(
            "Bulk endpoint resolved symbols",
            requested=len(symbols),
            returned=len(resolved),
            provider_successful=result.successful
        )
        return resolved

    async def _fetch_batched(
        self, symbols: list[str], start: date, end: date, range_start: str, range_end: str
    ) -> dict[str, Series]:
        """Strategy B: concurrent batch groups with staggered request starts."""
        batches = _chunk(symbols, self.params.batch_size)
        groups = _chunk(batches, self.params.max_concurrent_batches)
        results: dict[str, Series] = {}

        for group_index, group in enumerate(groups):
            group_results = await asyncio.gather(*(
                self._fetch_batch(batch, start, end, range_start, range_end)
                for batch in group
            ))
            for batch_results in group_results:
                results.update(batch_results)

            logger.debug(
                "Batch group complete",
                group=group_index + 1,
                groups=len(groups),
                batches=len(group)
            )

            if group_index < len(groups) - 1 and self.params.group_delay_ms > 0:
                await self._sleep(self.params.group_delay_ms / 1000)

        return results

    async def _fetch_batch(
        self, batch: list[str], start: date, end: date, range_start: str, range_end: str
    ) -> dict[str, Series]:
        series_list = await asyncio.gather(*(
            self._fetch_one(symbol, index * self.params.stagger_delay_ms / 1000,
                            start, end, range_start, range_end)
            for index, symbol in enumerate(batch)
        ))
        return {series.symbol: series for series in series_list}

    async def _fetch_one(
        self, symbol: str, delay: float, start: date, end: date, range_start: str, range_end: str
    ) -> Series:
        if delay > 0:
            await self._sleep(delay)

        try:
            series = await asyncio.wait_for(
                self.provider.fetch_symbol(symbol, start, end),
                timeout=self.params.request_timeout_seconds
            )

        except asyncio.TimeoutError:
            logger.warning("Timeout fetching symbol", symbol=symbol,
                           timeout_seconds=self.params.request_timeout_seconds)
            return Series.empty(symbol)

        except (ProviderError, DataQualityError) as e:
            logger.warning("Error fetching symbol", symbol=symbol, error=str(e),
                           error_type=type(e).__name__)
            return Series.empty(symbol)

        except Exception as e:
            logger.error("Unexpected error fetching symbol", symbol=symbol, error=str(e),
                         error_type=type(e).__name__)
            return Series.empty(symbol)

        if series.symbol != symbol:
            series = Series(symbol=symbol, points=series.points)

        if not series.is_empty:
            self.cache.put(CacheKey(symbol, range_start, range_end), series)

        return series

    @staticmethod
    def _resolved_count(results: dict[str, Series]) -> int:
        return sum(1 for series in results.values() if not series.is_empty)
