"""Pytest configuration and shared fixtures."""

from datetime import date

import pytest

from regime_app.config.defaults import FetchParams
from regime_app.data.cache import SeriesCache
from regime_app.data.catalog import InstrumentCatalog
from regime_app.data.models import Instrument

from tests.fakes import FakeClock, FakeProvider, RecordingSleep, make_series

FIXED_TODAY = date(2024, 6, 3)


@pytest.fixture
def fake_clock() -> FakeClock:
    """Clock starting at t=1000s."""
    return FakeClock()


@pytest.fixture
def cache(fake_clock: FakeClock) -> SeriesCache:
    """Series cache driven by the fake clock."""
    return SeriesCache(default_ttl_seconds=600.0, clock=fake_clock)


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def fixed_today():
    """Frozen 'today' for deterministic cache keys and date ranges."""
    return lambda: FIXED_TODAY


@pytest.fixture
def fast_fetch_params() -> FetchParams:
    """Fetch parameters with short timeouts for tests."""
    return FetchParams(
        bulk_timeout_seconds=0.5,
        batch_size=5,
        max_concurrent_batches=2,
        stagger_delay_ms=10,
        group_delay_ms=20,
        request_timeout_seconds=0.2,
    )


@pytest.fixture
def small_catalog() -> InstrumentCatalog:
    """One composite ETF with two holdings against SPY."""
    return InstrumentCatalog(
        instruments=(Instrument("X", "Example Industry", "Test", ("A", "B")),),
        benchmark="SPY",
    )


@pytest.fixture
def small_universe_series() -> dict:
    """X +10%, SPY +5%, A +20%, B -10%."""
    return {
        "X": make_series("X", [100, 110]),
        "SPY": make_series("SPY", [100, 105]),
        "A": make_series("A", [50, 60]),
        "B": make_series("B", [20, 18]),
    }


@pytest.fixture
def fake_provider(small_universe_series) -> FakeProvider:
    return FakeProvider(series=small_universe_series)
