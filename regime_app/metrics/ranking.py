"""Holdings ranking relative to the parent instrument"""

import math
from dataclasses import dataclass, field
from typing import Iterable, Mapping

from ..data.models import HoldingRankEntry, HoldingTag, Instrument, Series
from .performance import relative_performance


@dataclass(frozen=True)
class HoldingRanking:
    """Best and worst holdings of one instrument."""
    top_performers: list[HoldingRankEntry] = field(default_factory=list)
    worst_performers: list[HoldingRankEntry] = field(default_factory=list)


def _split_sizes(count: int, top_n: int) -> tuple[int, int]:
    """Sizes of the top and worst lists; disjoint when count < 2 * top_n."""
    if top_n <= 0 or count == 0:
        return 0, 0
    if count >= 2 * top_n:
        return top_n, top_n
    top = min(top_n, math.ceil(count / 2))
    return top, min(top_n, count - top)


def rank_holdings(
    instrument: Instrument,
    instrument_series: Series,
    series_by_symbol: Mapping[str, Series],
    top_n: int = 5,
    excluded: Iterable[str] = frozenset(),
) -> HoldingRanking:
    """
    Rank an instrument's holdings by performance relative to the instrument

    Holdings that are excluded, missing, or resolved to an empty series are
    left out of the ranking rather than scored as zero.

    Args:
        instrument: Composite instrument whose holdings are ranked
        instrument_series: Series of the instrument itself
        series_by_symbol: Fetched series keyed by symbol
        top_n: Maximum entries per list
        excluded: Symbols never ranked

    Returns:
        HoldingRanking with top performers (best first) and worst performers
        (worst first)
    """
    skip = frozenset(excluded)
    entries = []

    for holding in instrument.holdings:
        if holding in skip:
            continue

        series = series_by_symbol.get(holding)
        if series is None or series.is_empty:
            continue

        value = relative_performance(series, instrument_series)
        entries.append(HoldingRankEntry(
            holding_symbol=holding,
            relative_performance=value,
            tag=HoldingTag.OUTPERFORMING if value > 0 else HoldingTag.UNDERPERFORMING,
        ))

    # sorted() is stable, ties keep holdings order
    entries = sorted(entries, key=lambda entry: entry.relative_performance, reverse=True)

    top_count, worst_count = _split_sizes(len(entries), top_n)
    worst = entries[len(entries) - worst_count:] if worst_count else []

    return HoldingRanking(
        top_performers=entries[:top_count],
        worst_performers=list(reversed(worst)),
    )
