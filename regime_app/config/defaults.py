"""Default configuration parameters for the regime analysis pipeline."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class FetchParams:
    """Series fetching parameters."""
    # Strategy A
    use_bulk: bool = True                            # Try the bulk endpoint first
    bulk_timeout_seconds: float = 40.0               # One aggregated request, below the timeframe timeout

    # Strategy B
    batch_size: int = 50                             # Symbols per batch
    max_concurrent_batches: int = 10                 # Batches awaited together
    stagger_delay_ms: int = 50                       # index * delay within a batch
    group_delay_ms: int = 50                         # Pause between batch groups
    request_timeout_seconds: float = 10.0            # Per-symbol request

    # Named rate tier, see API_TIER_PRESETS
    tier: Optional[str] = None


@dataclass(frozen=True)
class CacheParams:
    """Series cache parameters."""
    ttl_seconds: float = 600.0
    max_entries: int = 50_000


@dataclass(frozen=True)
class TimeframeSpec:
    """One lookback window."""
    lookback_days: int
    label: str


DEFAULT_TIMEFRAMES = (
    TimeframeSpec(lookback_days=5, label="Life"),
    TimeframeSpec(lookback_days=21, label="Developing"),
    TimeframeSpec(lookback_days=80, label="Momentum"),
    TimeframeSpec(lookback_days=180, label="Legacy"),
)


@dataclass(frozen=True)
class AnalysisParams:
    """Timeframe orchestration parameters."""
    timeframes: tuple[TimeframeSpec, ...] = DEFAULT_TIMEFRAMES
    timeframe_timeout_seconds: float = 60.0
    min_instrument_points: int = 2                   # Instrument series needed to rank it
    health_check: bool = True                        # Check provider health before a run


# Tickers the ranker skips: delisted, renamed or chronically missing upstream
DEFAULT_EXCLUDED_SYMBOLS = frozenset({
    'LYNAS', 'PIL', 'UCORE', 'ARAFQ', 'GWMGF', 'FM', 'CMMC', 'X', 'KAP', 'MRO',
    'CLR', 'HES', 'SWN', 'COG', 'NOVA', 'BLUE', 'TWTR', 'RELIANCE', 'ONEOK', 'MMP',
    'CEOP', 'ENLC', 'SAVE', 'HA', 'MESA', 'GPS',
})


@dataclass(frozen=True)
class RankingParams:
    """Holdings ranking parameters."""
    top_n: int = 5
    excluded_symbols: frozenset = field(default=DEFAULT_EXCLUDED_SYMBOLS)


@dataclass(frozen=True)
class ProviderParams:
    """Upstream HTTP provider parameters."""
    base_url: str = "http://localhost:3000/api"
    bulk_path: str = "/bulk-historical-data"
    symbol_path: str = "/historical-data"
    health_path: str = "/health"
    health_timeout_seconds: float = 3.0
    max_connections: int = 100
    user_agent: str = "regime-app/0.1"


@dataclass(frozen=True)
class LoggingParams:
    """Logging output parameters."""
    level: str = "INFO"
    format_json: bool = False


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    fetch: FetchParams
    cache: CacheParams
    analysis: AnalysisParams
    ranking: RankingParams
    provider: ProviderParams
    logging: LoggingParams


# (batch_size, max_concurrent_batches, group_delay_ms) per subscription tier
API_TIER_PRESETS: dict[str, dict[str, int]] = {
    "free": {"batch_size": 2, "max_concurrent_batches": 1, "group_delay_ms": 12000},          # 5 req/min
    "basic": {"batch_size": 20, "max_concurrent_batches": 4, "group_delay_ms": 50},           # 100 req/min
    "pro": {"batch_size": 50, "max_concurrent_batches": 15, "group_delay_ms": 5},             # 1000 req/min
    "enterprise": {"batch_size": 100, "max_concurrent_batches": 25, "group_delay_ms": 2},     # 10000+ req/min
}


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        fetch=FetchParams(),
        cache=CacheParams(),
        analysis=AnalysisParams(),
        ranking=RankingParams(),
        provider=ProviderParams(),
        logging=LoggingParams(),
    )
