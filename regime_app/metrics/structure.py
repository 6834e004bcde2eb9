"""Subject/reference ratio structure across sub-windows of a lookback"""

import math

from ..data.models import Series, StructureAnalysis, WindowScore

EMA_PERIOD = 21
MIN_WINDOW_BARS = 4
STRONG_MOVE_PCT = 2.0
EXTREME_BAND = 0.05


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def sub_windows(lookback_days: int) -> tuple[int, int, int]:
    """
    Short, mid and full sub-window sizes for a lookback

    Up to 5 days: 1/3/full. Up to 21 days: 5/15/full.
    Longer lookbacks: 30% / 70% / full.
    """
    if lookback_days <= 5:
        return 1, 3, lookback_days
    if lookback_days <= 21:
        return 5, 15, lookback_days
    return _round_half_up(lookback_days * 0.30), _round_half_up(lookback_days * 0.70), lookback_days


def aligned_closes(subject: Series, reference: Series) -> list[tuple[float, float]]:
    """
    Pair closes on shared timestamps, ascending

    Bars present in only one series, or with a non-positive close, are skipped.
    """
    reference_closes = {point.timestamp: point.close for point in reference}
    pairs = []
    for point in sorted(subject, key=lambda p: p.timestamp):
        reference_close = reference_closes.get(point.timestamp)
        if reference_close is None or reference_close <= 0 or point.close <= 0:
            continue
        pairs.append((point.close, reference_close))
    return pairs


def ratio_ema(ratios: list[float], period: int = EMA_PERIOD) -> float:
    """
    Exponential moving average seeded with the oldest ratio

    The period shrinks to the number of ratios when fewer are available.
    """
    if not ratios:
        return 0.0

    period = min(period, len(ratios))
    k = 2 / (period + 1)
    ema = ratios[0]
    for ratio in ratios[1:]:
        ema = ratio * k + ema * (1 - k)
    return ema


def _pct_change(first: float, last: float) -> float:
    return (last - first) / first * 100


def analyze_window(pairs: list[tuple[float, float]], window_days: int) -> WindowScore:
    """
    Score the newest window_days of aligned closes

    The window shrinks to the bars available; fewer than 4 bars is invalid.
    A window has structure when the ratio closes beyond its start and within
    5% of its extreme in the direction of the move, or when the move exceeds
    2 percentage points. Only windows with structure count as valid.

    Args:
        pairs: (subject close, reference close) in ascending time order
        window_days: Requested window size in bars

    Returns:
        WindowScore for the window
    """
    actual = min(window_days, len(pairs))
    if actual < MIN_WINDOW_BARS:
        return WindowScore(window_days=window_days, score=0.0, valid=False,
                           has_structure=False, ratio_vs_ema=0.0)

    window = pairs[-actual:]
    (subject_start, reference_start), (subject_end, reference_end) = window[0], window[-1]
    score = _pct_change(subject_start, subject_end) - _pct_change(reference_start, reference_end)

    ratios = [subject / reference for subject, reference in window]
    start_ratio, current_ratio = ratios[0], ratios[-1]
    ratio_vs_ema = current_ratio - ratio_ema(ratios)

    strong_move = abs(score) > STRONG_MOVE_PCT
    if score > 0:
        near_high = current_ratio >= max(ratios) * (1 - EXTREME_BAND)
        has_structure = (current_ratio > start_ratio and near_high) or strong_move
    else:
        near_low = current_ratio <= min(ratios) * (1 + EXTREME_BAND)
        has_structure = (current_ratio < start_ratio and near_low) or strong_move

    return WindowScore(
        window_days=window_days,
        score=score,
        valid=has_structure,
        has_structure=has_structure,
        ratio_vs_ema=ratio_vs_ema,
    )


def temporal_consistency(windows: tuple[WindowScore, ...]) -> float:
    """100 minus the population stdev of valid window scores, floored at 0; 0 with under 2 valid"""
    scores = [window.score for window in windows if window.valid]
    if len(scores) < 2:
        return 0.0

    mean = sum(scores) / len(scores)
    variance = sum((score - mean) ** 2 for score in scores) / len(scores)
    return max(0.0, 100 - math.sqrt(variance))


def analyze_structure(subject: Series, reference: Series, lookback_days: int) -> StructureAnalysis:
    """
    Analyze the subject/reference ratio over short, mid and full sub-windows

    Structure is confirmed by the mid or full window; the short window alone
    is not enough. The EMA distance reported is the full window's.

    Args:
        subject: Instrument series
        reference: Benchmark series
        lookback_days: Timeframe lookback in trading days

    Returns:
        StructureAnalysis for the pair
    """
    pairs = aligned_closes(subject, reference)
    short_days, mid_days, full_days = sub_windows(lookback_days)

    short = analyze_window(pairs, short_days)
    mid = analyze_window(pairs, mid_days)
    full = analyze_window(pairs, full_days)

    return StructureAnalysis(
        short=short,
        mid=mid,
        full=full,
        has_structure=mid.has_structure or full.has_structure,
        ratio_vs_ema=full.ratio_vs_ema,
        temporal_consistency=temporal_consistency((short, mid, full)),
    )
