"""Tests for the series TTL cache."""

from regime_app.data.cache import SeriesCache
from regime_app.data.models import CacheKey, Series

from tests.fakes import FakeClock, make_series


KEY = CacheKey("SPY", "2024-05-26", "2024-06-03")


class TestSeriesCache:
    """Test suite for SeriesCache."""

    def test_miss_returns_none(self, cache: SeriesCache) -> None:
        """Test that an unknown key is a miss."""
        assert cache.get(KEY) is None
        assert KEY not in cache

    def test_put_then_get(self, cache: SeriesCache) -> None:
        """Test that a stored series is returned unchanged."""
        series = make_series("SPY", [100, 101, 102])
        cache.put(KEY, series)

        assert cache.get(KEY) == series
        assert len(cache) == 1

    def test_entry_expiry_uses_clock(self, cache: SeriesCache, fake_clock: FakeClock) -> None:
        """Test that expires_at is clock time plus TTL."""
        entry = cache.put(KEY, make_series("SPY", [1, 2]))
        assert entry.expires_at == fake_clock.now + 600.0

        short = cache.put(CacheKey("QQQ", "a", "b"), make_series("QQQ", [1, 2]), ttl=5)
        assert short.expires_at == fake_clock.now + 5

    def test_valid_until_expiry_boundary(self, cache: SeriesCache, fake_clock: FakeClock) -> None:
        """Test that an entry is still served at exactly expires_at."""
        series = make_series("SPY", [100, 101])
        cache.put(KEY, series)

        fake_clock.advance(600.0)
        assert cache.get(KEY) == series

    def test_absent_after_expiry(self, cache: SeriesCache, fake_clock: FakeClock) -> None:
        """Test that an entry is never observed once now > expires_at."""
        cache.put(KEY, make_series("SPY", [100, 101]))

        fake_clock.advance(600.001)
        assert cache.get(KEY) is None
        assert cache.get_entry(KEY) is None
        assert len(cache) == 0

    def test_put_overwrites_and_refreshes_ttl(self, cache: SeriesCache, fake_clock: FakeClock) -> None:
        """Test that re-putting a key replaces the value and its expiry."""
        cache.put(KEY, make_series("SPY", [1, 2]))
        fake_clock.advance(500)

        newer = make_series("SPY", [3, 4])
        cache.put(KEY, newer)
        fake_clock.advance(500)

        assert cache.get(KEY) == newer

    def test_keys_include_date_range(self, cache: SeriesCache) -> None:
        """Test that the same symbol over another range is a separate entry."""
        cache.put(KEY, make_series("SPY", [1, 2]))
        assert cache.get(CacheKey("SPY", "2024-01-01", "2024-06-03")) is None

    def test_clear(self, cache: SeriesCache) -> None:
        cache.put(KEY, Series.empty("SPY"))
        cache.clear()
        assert len(cache) == 0

    def test_max_entries_bounds_size(self) -> None:
        """Test that the cache evicts beyond max_entries."""
        clock = FakeClock()
        cache = SeriesCache(default_ttl_seconds=60, max_entries=2, clock=clock)
        for symbol in ("A", "B", "C"):
            cache.put(CacheKey(symbol, "s", "e"), make_series(symbol, [1, 2]))

        assert len(cache) == 2
        assert cache.get(CacheKey("C", "s", "e")) is not None
