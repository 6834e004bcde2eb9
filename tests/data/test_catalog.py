"""Tests for the instrument catalog."""

import pytest

from regime_app.data.catalog import InstrumentCatalog, default_catalog
from regime_app.errors import ConfigurationError


class TestDefaultCatalog:
    """Test suite for the built-in industry table."""

    def test_default_catalog_shape(self) -> None:
        catalog = default_catalog()

        assert catalog.benchmark == "SPY"
        assert len(catalog) == 25
        assert all(instrument.is_composite for instrument in catalog)

    def test_instrument_symbols_are_unique(self) -> None:
        symbols = [instrument.symbol for instrument in default_catalog()]
        assert len(symbols) == len(set(symbols))

    def test_get(self) -> None:
        catalog = default_catalog()
        assert catalog.get("SMH").name == "Semiconductors & Quantum"
        assert catalog.get("NOPE") is None


class TestFromRecords:
    """Test suite for building catalogs from plain mappings."""

    def test_normalizes_symbols(self) -> None:
        catalog = InstrumentCatalog.from_records(
            [{"symbol": " xle ", "name": "Energy", "category": "Energy", "holdings": ["xom", "CVX"]}],
            benchmark="spy",
        )
        instrument = catalog.get("XLE")

        assert catalog.benchmark == "SPY"
        assert instrument.holdings == ("XOM", "CVX")

    def test_non_composite_instrument(self) -> None:
        catalog = InstrumentCatalog.from_records([{"symbol": "GLD"}])
        assert not catalog.get("GLD").is_composite

    def test_duplicate_symbol_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            InstrumentCatalog.from_records([{"symbol": "XLE"}, {"symbol": "xle"}])

    def test_missing_symbol_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            InstrumentCatalog.from_records([{"name": "Nameless"}])

    def test_empty_benchmark_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            InstrumentCatalog.from_records([{"symbol": "XLE"}], benchmark=" ")
