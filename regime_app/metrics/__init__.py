"""Relative performance, ratio structure and holdings ranking"""

from .performance import classify_trend, compare, period_return, relative_performance
from .ranking import HoldingRanking, rank_holdings
from .structure import analyze_structure, analyze_window, ratio_ema, sub_windows

__all__ = [
    "period_return",
    "relative_performance",
    "classify_trend",
    "compare",
    "HoldingRanking",
    "rank_holdings",
    "analyze_structure",
    "analyze_window",
    "ratio_ema",
    "sub_windows",
]
