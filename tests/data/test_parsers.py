"""Tests for provider payload parsing."""

import math

import orjson
import pytest

from regime_app.data.parsers import (
    parse_bulk_payload,
    parse_json_payload,
    parse_price_point,
    parse_symbol_payload,
)
from regime_app.errors import MalformedDataError


class TestParsePricePoint:
    """Test suite for single bar parsing."""

    def test_short_keys(self) -> None:
        point = parse_price_point({"t": 1704067200000, "c": 101.5, "v": 12000.0, "o": 100})
        assert point.timestamp == 1704067200000
        assert point.close == 101.5
        assert point.volume == 12000

    def test_long_keys(self) -> None:
        point = parse_price_point({"timestamp": 1704067200000, "close": "99.25", "volume": 5})
        assert point.close == 99.25
        assert point.volume == 5

    def test_missing_volume_defaults_to_zero(self) -> None:
        assert parse_price_point({"t": 1, "c": 2}).volume == 0

    @pytest.mark.parametrize("raw", [
        {"c": 1.0},
        {"t": 1},
        {"t": 1, "c": "abc"},
        ["t", 1],
    ])
    def test_malformed_bars(self, raw) -> None:
        with pytest.raises(MalformedDataError):
            parse_price_point(raw)

    @pytest.mark.parametrize("raw", [
        {"t": 1, "c": "NaN"},
        {"t": 1, "c": "inf"},
        {"t": 1, "c": "-Infinity"},
        {"t": 1, "c": 10.0, "v": "1e400"},
        {"t": 1, "c": 10.0, "v": "nan"},
    ])
    def test_non_finite_values_are_malformed(self, raw) -> None:
        with pytest.raises(MalformedDataError):
            parse_price_point(raw)


class TestParseSymbolPayload:
    """Test suite for per-symbol responses."""

    def test_results_are_sorted_ascending(self) -> None:
        """Test that newest-first provider data is normalized to ascending order."""
        payload = {"results": [
            {"t": 3000, "c": 12.0},
            {"t": 1000, "c": 10.0},
            {"t": 2000, "c": 11.0},
        ]}
        series = parse_symbol_payload("XLE", payload)

        assert [p.timestamp for p in series] == [1000, 2000, 3000]
        assert series.oldest.close == 10.0
        assert series.newest.close == 12.0

    def test_duplicate_timestamps_keep_last(self) -> None:
        payload = [{"t": 1000, "c": 10.0}, {"t": 1000, "c": 10.5}]
        series = parse_symbol_payload("XLE", payload)

        assert len(series) == 1
        assert series.newest.close == 10.5

    def test_bad_bars_are_dropped(self) -> None:
        payload = {"results": [{"t": 1000, "c": 10.0}, {"t": 2000}, "junk"]}
        series = parse_symbol_payload("XLE", payload)
        assert len(series) == 1

    def test_non_finite_close_is_dropped(self) -> None:
        series = parse_symbol_payload("X", {"results": [{"t": 1, "c": "NaN"}, {"t": 2, "c": 10}]})

        assert [p.timestamp for p in series] == [2]
        assert all(math.isfinite(p.close) for p in series)

    def test_zero_results_count_is_empty(self) -> None:
        series = parse_symbol_payload("XLE", {"resultsCount": 0, "status": "OK"})
        assert series.is_empty
        assert series.symbol == "XLE"

    def test_missing_results_is_malformed(self) -> None:
        with pytest.raises(MalformedDataError):
            parse_symbol_payload("XLE", {"status": "ERROR"})

    def test_non_list_results_is_malformed(self) -> None:
        with pytest.raises(MalformedDataError):
            parse_symbol_payload("XLE", {"results": {"t": 1}})

    def test_unexpected_type_is_malformed(self) -> None:
        with pytest.raises(MalformedDataError):
            parse_symbol_payload("XLE", "not json object")


class TestParseBulkPayload:
    """Test suite for the bulk endpoint envelope."""

    def test_success(self) -> None:
        payload = {
            "success": True,
            "data": {
                "SPY": {"results": [{"t": 2, "c": 105}, {"t": 1, "c": 100}]},
                "XLE": {"results": [{"t": 1, "c": 80}]},
            },
            "stats": {"requested": 3, "successful": 2},
        }
        result = parse_bulk_payload(payload)

        assert result.success is True
        assert set(result.data) == {"SPY", "XLE"}
        assert result.data["SPY"].oldest.close == 100
        assert result.requested == 3
        assert result.successful == 2

    def test_failure_flag(self) -> None:
        result = parse_bulk_payload({"success": False, "error": "rate limited"})
        assert result.success is False
        assert result.data == {}

    def test_malformed_entry_is_skipped(self) -> None:
        payload = {"success": True, "data": {"SPY": {"results": [{"t": 1, "c": 1}]}, "BAD": {"oops": 1}}}
        result = parse_bulk_payload(payload)
        assert set(result.data) == {"SPY"}

    def test_overflowing_bar_does_not_discard_other_symbols(self) -> None:
        """Test that one unconvertible bar only costs that bar."""
        payload = {"success": True, "data": {
            "AAA": {"results": [{"t": 1, "c": 10}, {"t": 2, "c": 11}]},
            "BBB": {"results": [{"t": 1, "c": 20, "v": "1e400"}, {"t": 2, "c": 21, "v": 5}]},
        }}
        result = parse_bulk_payload(payload)

        assert set(result.data) == {"AAA", "BBB"}
        assert len(result.data["AAA"]) == 2
        assert [p.close for p in result.data["BBB"]] == [21.0]

    @pytest.mark.parametrize("payload", [
        [],
        {"data": {}},
        {"success": "yes", "data": {}},
        {"success": True},
        {"success": True, "data": []},
    ])
    def test_malformed_envelope(self, payload) -> None:
        with pytest.raises(MalformedDataError):
            parse_bulk_payload(payload)


class TestParseJsonPayload:
    """Test suite for raw body decoding."""

    def test_valid_json(self) -> None:
        assert parse_json_payload(orjson.dumps({"a": 1})) == {"a": 1}

    def test_invalid_json(self) -> None:
        with pytest.raises(MalformedDataError) as exc_info:
            parse_json_payload(b"<html>502 Bad Gateway</html>")
        assert "502" in exc_info.value.raw_data
