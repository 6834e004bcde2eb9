"""Period return and relative performance calculations"""

from ..data.models import RelativePerformance, Series, Trend


def period_return(series: Series) -> float:
    """
    Calculate percentage return over a series

    return = (newest.close - oldest.close) / oldest.close * 100

    Oldest and newest are located by timestamp, never by position.

    Args:
        series: Price series for one symbol

    Returns:
        Return in percent, or 0.0 with fewer than 2 points or a zero base price
    """
    if len(series) < 2:
        return 0.0

    oldest = series.oldest
    newest = series.newest

    if oldest.close == 0:
        return 0.0

    return (newest.close - oldest.close) / oldest.close * 100


def relative_performance(subject: Series, reference: Series) -> float:
    """Return of subject minus return of reference, in percentage points."""
    return period_return(subject) - period_return(reference)


def classify_trend(value: float) -> Trend:
    """Bullish iff strictly positive."""
    return Trend.BULLISH if value > 0 else Trend.BEARISH


def compare(subject: Series, reference: Series) -> RelativePerformance:
    """
    Compare a subject series against a reference series

    Args:
        subject: Series being evaluated
        reference: Benchmark or parent instrument series

    Returns:
        RelativePerformance with value and trend
    """
    value = relative_performance(subject, reference)
    return RelativePerformance(
        subject_symbol=subject.symbol,
        reference_symbol=reference.symbol,
        value=value,
        trend=classify_trend(value),
    )
