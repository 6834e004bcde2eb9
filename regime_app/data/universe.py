"""Universe construction: every symbol one timeframe needs fetched."""

from typing import Iterable

from .models import Instrument


def build_universe(instruments: Iterable[Instrument], benchmark: str) -> set[str]:
    """
    Collect the unique symbols needed for one timeframe.

    Args:
        instruments: Catalog instruments
        benchmark: Benchmark ticker

    Returns:
        Every instrument symbol, every holding symbol and the benchmark
    """
    universe = {benchmark}
    for instrument in instruments:
        universe.add(instrument.symbol)
        universe.update(instrument.holdings)
    return universe
