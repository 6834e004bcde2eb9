"""
Canonical data models for price series and relative-performance results.

This module defines immutable data structures for instruments, normalized
price series and the analysis results built from them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Iterator, Optional


@dataclass(frozen=True)
class Instrument:
    """Tracked instrument, optionally composite (an ETF with holdings)."""
    symbol: str
    name: str
    category: str
    holdings: tuple[str, ...] = ()

    @property
    def is_composite(self) -> bool:
        return bool(self.holdings)


@dataclass(frozen=True)
class PricePoint:
    """Single daily observation."""
    timestamp: int      # Epoch as delivered by the provider (ms for Polygon)
    close: float        # Closing price
    volume: int = 0     # Shares traded


@dataclass(frozen=True)
class Series:
    """Price series for one symbol, ascending by timestamp."""
    symbol: str
    points: tuple[PricePoint, ...] = ()

    @classmethod
    def from_points(cls, symbol: str, points: Iterable[PricePoint]) -> "Series":
        """
        Build a normalized series.

        Providers disagree on newest-first vs oldest-first ordering, so points
        are sorted by timestamp here. Duplicate timestamps keep the last point.
        """
        by_timestamp = {point.timestamp: point for point in points}
        ordered = tuple(by_timestamp[ts] for ts in sorted(by_timestamp))
        return cls(symbol=symbol, points=ordered)

    @classmethod
    def empty(cls, symbol: str) -> "Series":
        """Degraded value for a symbol that could not be fetched."""
        return cls(symbol=symbol)

    @property
    def is_empty(self) -> bool:
        return not self.points

    @property
    def oldest(self) -> Optional[PricePoint]:
        """Point with the smallest timestamp, None if empty."""
        if not self.points:
            return None
        return min(self.points, key=lambda point: point.timestamp)

    @property
    def newest(self) -> Optional[PricePoint]:
        """Point with the largest timestamp, None if empty."""
        if not self.points:
            return None
        return max(self.points, key=lambda point: point.timestamp)

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[PricePoint]:
        return iter(self.points)


@dataclass(frozen=True)
class CacheKey:
    """Cache key: symbol plus the ISO date range it was fetched for."""
    symbol: str
    range_start: str
    range_end: str


@dataclass(frozen=True)
class CacheEntry:
    """Cached series with its absolute expiry on the cache clock."""
    key: CacheKey
    value: Series
    expires_at: float


class Trend(Enum):
    """Direction of an instrument relative to its benchmark."""
    BULLISH = "bullish"
    BEARISH = "bearish"


class HoldingTag(Enum):
    """Direction of a holding relative to its parent instrument."""
    OUTPERFORMING = "outperforming"
    UNDERPERFORMING = "underperforming"


@dataclass(frozen=True)
class RelativePerformance:
    """Period return difference in percentage points."""
    subject_symbol: str
    reference_symbol: str
    value: float
    trend: Trend


@dataclass(frozen=True)
class HoldingRankEntry:
    """Holding performance relative to its parent instrument."""
    holding_symbol: str
    relative_performance: float
    tag: HoldingTag

    def to_dict(self) -> dict[str, Any]:
        return {
            "symbol": self.holding_symbol,
            "relativePerformance": self.relative_performance,
            "trend": self.tag.value,
        }


@dataclass(frozen=True)
class WindowScore:
    """Ratio analysis of one sub-window ending at the newest shared bar."""
    window_days: int
    score: float            # Relative performance over the window, percentage points
    valid: bool             # Enough bars and a confirmed structure
    has_structure: bool
    ratio_vs_ema: float     # Latest subject/reference ratio minus its EMA

    def to_dict(self) -> dict[str, Any]:
        return {"score": self.score, "valid": self.valid}


@dataclass(frozen=True)
class StructureAnalysis:
    """
    Subject/reference ratio structure across short, mid and full sub-windows.

    Diagnostic only; the ranked relative performance and trend come from
    the plain period returns.
    """
    short: WindowScore
    mid: WindowScore
    full: WindowScore
    has_structure: bool
    ratio_vs_ema: float
    temporal_consistency: float  # 0-100, higher = sub-windows agree

    @property
    def windows(self) -> tuple[WindowScore, WindowScore, WindowScore]:
        return self.short, self.mid, self.full

    def to_dict(self) -> dict[str, Any]:
        return {
            "hasStructure": self.has_structure,
            "ratioVsEMA": self.ratio_vs_ema,
            "temporalConsistency": self.temporal_consistency,
            "windowBreakdown": {
                "short": self.short.to_dict(),
                "mid": self.mid.to_dict(),
                "full": self.full.to_dict(),
            },
        }


@dataclass(frozen=True)
class InstrumentPerformance:
    """Ranked instrument entry within one timeframe."""
    instrument: Instrument
    performance: RelativePerformance
    top_performers: list[HoldingRankEntry] = field(default_factory=list)
    worst_performers: list[HoldingRankEntry] = field(default_factory=list)
    structure: Optional[StructureAnalysis] = None

    @property
    def symbol(self) -> str:
        return self.instrument.symbol

    @property
    def relative_performance(self) -> float:
        return self.performance.value

    def to_dict(self) -> dict[str, Any]:
        result = {
            "symbol": self.instrument.symbol,
            "name": self.instrument.name,
            "category": self.instrument.category,
            "benchmark": self.performance.reference_symbol,
            "relativePerformance": self.performance.value,
            "trend": self.performance.trend.value,
        }
        if self.structure is not None:
            result.update(self.structure.to_dict())
        result["topPerformers"] = [entry.to_dict() for entry in self.top_performers]
        result["worstPerformers"] = [entry.to_dict() for entry in self.worst_performers]
        return result


@dataclass(frozen=True)
class TimeframeAnalysis:
    """All ranked instruments for one lookback window."""
    label: str
    lookback_days: int
    industries: list[InstrumentPerformance] = field(default_factory=list)

    @classmethod
    def empty(cls, label: str, lookback_days: int) -> "TimeframeAnalysis":
        """No data for this window (timed out or degraded)."""
        return cls(label=label, lookback_days=lookback_days, industries=[])

    @property
    def is_empty(self) -> bool:
        return not self.industries

    def to_dict(self) -> dict[str, Any]:
        return {
            "timeframe": self.label,
            "days": self.lookback_days,
            "industries": [entry.to_dict() for entry in self.industries],
        }


@dataclass
class AnalysisRun:
    """Results of one run, keyed by timeframe label in configured order."""
    timeframes: dict[str, TimeframeAnalysis] = field(default_factory=dict)

    def __getitem__(self, label: str) -> TimeframeAnalysis:
        return self.timeframes[label]

    def __contains__(self, label: object) -> bool:
        return label in self.timeframes

    def __len__(self) -> int:
        return len(self.timeframes)

    @property
    def labels(self) -> list[str]:
        return list(self.timeframes)

    def to_dict(self) -> dict[str, Any]:
        return {label: analysis.to_dict() for label, analysis in self.timeframes.items()}


@dataclass(frozen=True)
class BulkFetchResult:
    """Parsed response of the provider's bulk endpoint."""
    success: bool
    data: dict[str, Series] = field(default_factory=dict)
    requested: int = 0
    successful: int = 0
