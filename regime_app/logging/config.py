"""
Centralized logging configuration for the regime analysis pipeline.

This module provides standardized logging configuration using structlog
for all components. Every module logs through structlog so that fetch,
cache and analysis events carry the same structured fields.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


# Library loggers that are chatty at INFO during batched fetching
NOISY_LOGGERS = ("aiohttp.access", "aiohttp.client", "asyncio")


def _build_processors(format_json: bool, include_timestamp: bool) -> list:
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso", utc=True))

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    return processors


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    quiet_libraries: bool = True
) -> None:
    """
    Configure structlog for the entire application.

    Output goes to stderr so the CLI can keep stdout for JSON results.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON lines; otherwise human-readable
        include_timestamp: Include a UTC ISO timestamp in log output
        quiet_libraries: Hold aiohttp and asyncio loggers at WARNING
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(level=log_level, stream=sys.stderr, format="%(message)s", force=True)

    if quiet_libraries:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    structlog.configure(
        processors=_build_processors(format_json, include_timestamp),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str, **initial_values: Any) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    The logger resolves lazily, so module-level loggers pick up the
    configuration applied later by configure_logging.

    Args:
        name: Logger name (typically __name__)
        initial_values: Context bound to every event

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name, **initial_values)


def get_fetch_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for the series fetching subsystem.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structlog logger carrying subsystem="fetcher"
    """
    return get_logger(name, subsystem="fetcher")


def get_analysis_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for the timeframe analysis subsystem.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structlog logger carrying subsystem="analysis"
    """
    return get_logger(name, subsystem="analysis")


def log_fetch_summary(
    logger: FilteringBoundLogger,
    lookback_days: int,
    requested: int,
    cache_hits: int,
    strategy: str,
    resolved: int,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log the outcome of one fetch_all call with standardized fields.

    Args:
        logger: Structlog logger instance
        lookback_days: Lookback window the fetch served
        requested: Number of unique symbols requested
        cache_hits: Number of symbols served from cache
        strategy: "cache", "bulk" or "batched"
        resolved: Number of symbols with a non-empty series
        context: Additional context data
    """
    bound_logger = logger.bind(
        lookback_days=lookback_days,
        requested=requested,
        cache_hits=cache_hits,
        strategy=strategy,
        resolved=resolved,
        unresolved=requested - resolved,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if resolved < requested:
        bound_logger.warning("Fetch completed with unresolved symbols")
    else:
        bound_logger.info("Fetch completed")


def log_timeframe_result(
    logger: FilteringBoundLogger,
    label: str,
    lookback_days: int,
    instrument_count: int,
    degraded_reason: Optional[str] = None,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log the result of one timeframe analysis.

    Args:
        logger: Structlog logger instance
        label: Timeframe label
        lookback_days: Lookback window in trading days
        instrument_count: Number of ranked instruments
        degraded_reason: Why the timeframe was replaced by an empty analysis
        context: Additional context data
    """
    bound_logger = logger.bind(
        timeframe=label,
        lookback_days=lookback_days,
        instrument_count=instrument_count,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if degraded_reason:
        bound_logger.warning("Timeframe degraded to empty analysis", reason=degraded_reason)
    else:
        bound_logger.info("Timeframe analysis complete")
