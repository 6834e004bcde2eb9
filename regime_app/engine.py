"""
Main analysis engine coordinator.

Orchestrates the relative-performance pipeline for every configured
timeframe, coordinating series fetching, relative performance calculation,
holdings ranking and streaming of partial results.
"""

import asyncio
import inspect
import time
from datetime import date
from pathlib import Path
from typing import Any, AsyncIterator, Awaitable, Callable, Optional, Union

import structlog

from .config.defaults import DefaultConfig, get_default_config
from .config.loader import ConfigLoader
from .data.cache import SeriesCache
from .data.catalog import InstrumentCatalog, default_catalog
from .data.fetcher import SeriesFetcher
from .data.models import AnalysisRun, InstrumentPerformance, Series, TimeframeAnalysis
from .data.universe import build_universe
from .errors import InsufficientDataError, MissingDataError
from .logging.config import get_analysis_logger, log_timeframe_result
from .metrics.performance import compare
from .metrics.ranking import rank_holdings
from .metrics.structure import analyze_structure
from .providers.base import MarketDataProvider
from .providers.http_provider import HttpMarketDataProvider
from .utils.time import market_today

logger = structlog.get_logger(__name__)
analysis_logger = get_analysis_logger(__name__)

ProgressCallback = Callable[[str, float], Union[None, Awaitable[None]]]
StreamCallback = Callable[[str, TimeframeAnalysis], Union[None, Awaitable[None]]]


class RegimeAnalysisEngine:
    """
    Main coordinator for the relative-performance regime analysis.

    Manages the analysis pipeline per timeframe:
    Universe → Fetch (cache / bulk / batched) → Relative Performance → Ranking
    """

    def __init__(
        self,
        provider: MarketDataProvider,
        config: Optional[DefaultConfig] = None,
        catalog: Optional[InstrumentCatalog] = None,
        cache: Optional[SeriesCache] = None,
        clock: Optional[Callable[[], float]] = None,
        today: Optional[Callable[[], date]] = None,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ) -> None:
        """Initialize the analysis engine."""
        self.logger = logger
        self.analysis_logger = analysis_logger

        self.provider = provider
        self.config = config or get_default_config()
        self.catalog = catalog or default_catalog()

        # The cache outlives runs; pass one in to share it between engines
        self.cache = cache or SeriesCache(
            default_ttl_seconds=self.config.cache.ttl_seconds,
            max_entries=self.config.cache.max_entries,
            clock=clock or time.monotonic,
        )
        self.fetcher = SeriesFetcher(
            provider=provider,
            cache=self.cache,
            params=self.config.fetch,
            today=today or market_today,
            sleep=sleep or asyncio.sleep,
        )

        self.logger.info(
            "Regime analysis engine initialized",
            instruments=len(self.catalog),
            benchmark=self.catalog.benchmark,
            timeframes=[tf.label for tf in self.config.analysis.timeframes]
        )

    @classmethod
    def from_config_dir(
        cls,
        config_dir: Optional[Path] = None,
        overrides: Optional[dict[str, Any]] = None,
    ) -> "RegimeAnalysisEngine":
        """
        Build an engine with an HTTP provider from a config directory.

        Raises:
            ConfigurationError: If settings or catalog are invalid
        """
        loader = ConfigLoader.create(config_dir)
        config = loader.load_config(overrides)
        catalog = loader.load_catalog()
        return cls(provider=HttpMarketDataProvider(config.provider), config=config, catalog=catalog)

    async def close(self) -> None:
        """Release the provider's resources."""
        await self.provider.close()

    async def __aenter__(self) -> "RegimeAnalysisEngine":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def analyze_timeframe(self, lookback_days: int, label: str) -> TimeframeAnalysis:
        """
        Analyze one lookback window.

        Runs under the configured timeframe timeout. On expiry the in-flight
        fetches are cancelled and an empty analysis is returned; any other
        failure degrades the same way.

        Args:
            lookback_days: Lookback window in trading days
            label: Timeframe label

        Returns:
            TimeframeAnalysis, possibly empty
        """
        timeout = self.config.analysis.timeframe_timeout_seconds

        try:
            analysis = await asyncio.wait_for(
                self._perform_timeframe_analysis(lookback_days, label),
                timeout=timeout
            )

        except asyncio.TimeoutError:
            log_timeframe_result(
                self.analysis_logger, label, lookback_days, 0,
                degraded_reason="timeout",
                context={"timeout_seconds": timeout}
            )
            return TimeframeAnalysis.empty(label, lookback_days)

        except MissingDataError as e:
            log_timeframe_result(
                self.analysis_logger, label, lookback_days, 0,
                degraded_reason="missing_benchmark",
                context={"error": str(e)}
            )
            return TimeframeAnalysis.empty(label, lookback_days)

        except Exception as e:
            self.logger.error(
                "Unexpected error analyzing timeframe",
                timeframe=label,
                lookback_days=lookback_days,
                error=str(e),
                error_type=type(e).__name__
            )
            log_timeframe_result(
                self.analysis_logger, label, lookback_days, 0,
                degraded_reason="error"
            )
            return TimeframeAnalysis.empty(label, lookback_days)

        log_timeframe_result(self.analysis_logger, label, lookback_days, len(analysis.industries))
        return analysis

    async def _perform_timeframe_analysis(self, lookback_days: int, label: str) -> TimeframeAnalysis:
        benchmark = self.catalog.benchmark
        universe = build_universe(self.catalog, benchmark)

        self.logger.debug("Fetching universe", timeframe=label, symbols=len(universe))
        series_by_symbol = await self.fetcher.fetch_all(universe, lookback_days)

        benchmark_series = series_by_symbol.get(benchmark)
        if benchmark_series is None or benchmark_series.is_empty:
            raise MissingDataError(f"No data for benchmark {benchmark}", data_type="benchmark", symbol=benchmark)

        industries = []
        for instrument in self.catalog:
            try:
                series = series_by_symbol.get(instrument.symbol)
                self._check_instrument_series(instrument.symbol, series)

                ranking = rank_holdings(
                    instrument,
                    series,
                    series_by_symbol,
                    top_n=self.config.ranking.top_n,
                    excluded=self.config.ranking.excluded_symbols,
                )
                industries.append(InstrumentPerformance(
                    instrument=instrument,
                    performance=compare(series, benchmark_series),
                    top_performers=ranking.top_performers,
                    worst_performers=ranking.worst_performers,
                    structure=analyze_structure(series, benchmark_series, lookback_days),
                ))

            except InsufficientDataError as e:
                self.logger.debug(
                    "Skipping instrument with insufficient data",
                    timeframe=label,
                    symbol=instrument.symbol,
                    available=e.available_count
                )

            except Exception as e:
                self.logger.warning(
                    "Failed to analyze instrument, skipping",
                    timeframe=label,
                    symbol=instrument.symbol,
                    error=str(e),
                    error_type=type(e).__name__
                )

        industries.sort(key=lambda entry: entry.relative_performance, reverse=True)
        return TimeframeAnalysis(label=label, lookback_days=lookback_days, industries=industries)

    def _check_instrument_series(self, symbol: str, series: Optional[Series]) -> None:
        required = self.config.analysis.min_instrument_points
        available = len(series) if series is not None else 0
        if available < required:
            raise InsufficientDataError(
                f"Instrument {symbol} has {available} points, needs {required}",
                symbol=symbol,
                required_count=required,
                available_count=available
            )

    async def iter_timeframes(
        self, progress_callback: Optional[ProgressCallback] = None
    ) -> AsyncIterator[tuple[str, TimeframeAnalysis]]:
        """
        Analyze the configured timeframes in order, yielding each as it completes.

        Args:
            progress_callback: Receives ("Analyzing ...", percent) before each timeframe

        Yields:
            (label, analysis) pairs
        """
        timeframes = self.config.analysis.timeframes
        step = 80 / len(timeframes) if timeframes else 0

        for index, timeframe in enumerate(timeframes):
            await self._notify(
                progress_callback,
                f"Analyzing {timeframe.label} timeframe ({timeframe.lookback_days}d)...",
                20 + index * step
            )
            analysis = await self.analyze_timeframe(timeframe.lookback_days, timeframe.label)
            yield timeframe.label, analysis

    async def run_analysis(
        self,
        progress_callback: Optional[ProgressCallback] = None,
        stream_callback: Optional[StreamCallback] = None,
    ) -> AnalysisRun:
        """
        Run every configured timeframe sequentially.

        Args:
            progress_callback: Called with (message, percent); may be async
            stream_callback: Called with (label, analysis) as each timeframe completes; may be async

        Returns:
            AnalysisRun with an entry for every configured timeframe
        """
        run = AnalysisRun()
        timeframes = self.config.analysis.timeframes
        step = 80 / len(timeframes) if timeframes else 0

        self.logger.info("Starting streaming analysis", timeframes=len(timeframes))
        await self._notify(progress_callback, "Initializing streaming analysis...", 5)

        if self.config.analysis.health_check:
            healthy = await self._check_provider_health()
            message = "Data provider is healthy" if healthy else "Data provider health check failed, continuing"
        else:
            message = "Skipping data provider health check"
        await self._notify(progress_callback, message, 10)

        index = 0
        async for label, analysis in self.iter_timeframes(progress_callback):
            run.timeframes[label] = analysis
            await self._notify(stream_callback, label, analysis)
            await self._notify(progress_callback, f"{label} timeframe complete", 20 + index * step + step / 2)
            index += 1

        await self._notify(progress_callback, "All timeframes complete", 100)
        self.logger.info(
            "Analysis run complete",
            timeframes=len(run),
            empty=[label for label, analysis in run.timeframes.items() if analysis.is_empty]
        )
        return run

    async def _check_provider_health(self) -> bool:
        try:
            healthy = await self.provider.health_check()
        except Exception as e:
            self.logger.warning("Provider health check raised", error=str(e), error_type=type(e).__name__)
            return False

        if healthy:
            self.logger.info("Provider health check passed", provider=self.provider.name)
        else:
            self.logger.warning("Provider health check failed", provider=self.provider.name)
        return healthy

    async def _notify(self, callback: Optional[Callable[..., Any]], *args: Any) -> None:
        """Invoke a sync or async callback; its exceptions never abort the run."""
        if callback is None:
            return

        try:
            result = callback(*args)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            self.logger.error(
                "Callback raised, continuing",
                callback=getattr(callback, "__name__", repr(callback)),
                error=str(e),
                error_type=type(e).__name__
            )
