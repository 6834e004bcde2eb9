"""Unit tests for configuration management."""

from pathlib import Path

import pytest
import yaml

from regime_app.config.defaults import API_TIER_PRESETS, TimeframeSpec, get_default_config
from regime_app.config.loader import ConfigLoader
from regime_app.config.validation import ConfigValidator
from regime_app.errors import ConfigurationError


def _write_yaml(path: Path, data) -> None:
    path.write_text(yaml.safe_dump(data))


class TestDefaultConfig:
    """Test suite for default configuration."""

    def test_default_config_creation(self) -> None:
        """Test the documented defaults."""
        config = get_default_config()

        assert config.fetch.batch_size == 50
        assert config.fetch.max_concurrent_batches == 10
        assert config.fetch.stagger_delay_ms == 50
        assert config.fetch.group_delay_ms == 50
        assert config.fetch.request_timeout_seconds == 10.0
        assert config.fetch.bulk_timeout_seconds == 40.0
        assert config.cache.ttl_seconds == 600.0
        assert config.analysis.timeframe_timeout_seconds == 60.0
        assert config.ranking.top_n == 5

    def test_default_timeframes(self) -> None:
        config = get_default_config()
        assert [(tf.lookback_days, tf.label) for tf in config.analysis.timeframes] == [
            (5, "Life"), (21, "Developing"), (80, "Momentum"), (180, "Legacy"),
        ]


class TestConfigLoader:
    """Test suite for configuration loader."""

    def test_defaults_without_settings_file(self, tmp_path: Path) -> None:
        loader = ConfigLoader.create(tmp_path)
        assert loader.load_config() == get_default_config()

    def test_settings_file_overrides_defaults(self, tmp_path: Path) -> None:
        _write_yaml(tmp_path / "settings.yaml", {
            "fetch": {"batch_size": 20},
            "analysis": {"timeframes": [{"lookback_days": 10, "label": "Short"}]},
        })
        config = ConfigLoader.create(tmp_path).load_config()

        assert config.fetch.batch_size == 20
        # Other defaults should remain
        assert config.fetch.max_concurrent_batches == 10
        assert config.analysis.timeframes == (TimeframeSpec(lookback_days=10, label="Short"),)

    def test_tier_preset_applies(self, tmp_path: Path) -> None:
        config = ConfigLoader.create(tmp_path).load_config({"fetch": {"tier": "free"}})

        assert config.fetch.batch_size == API_TIER_PRESETS["free"]["batch_size"]
        assert config.fetch.max_concurrent_batches == 1
        assert config.fetch.group_delay_ms == 12000

    def test_precedence(self, tmp_path: Path) -> None:
        """Test defaults < tier preset < settings.yaml < overrides."""
        _write_yaml(tmp_path / "settings.yaml", {"fetch": {"tier": "pro", "max_concurrent_batches": 3}})
        loader = ConfigLoader.create(tmp_path)

        config = loader.load_config({"fetch": {"group_delay_ms": 7}})

        assert config.fetch.batch_size == 50            # pro preset
        assert config.fetch.max_concurrent_batches == 3  # settings.yaml beats preset
        assert config.fetch.group_delay_ms == 7          # override beats preset

    def test_excluded_symbols_round_trip_as_frozenset(self, tmp_path: Path) -> None:
        config = ConfigLoader.create(tmp_path).load_config({"ranking": {"excluded_symbols": ["ABC"]}})
        assert config.ranking.excluded_symbols == frozenset({"ABC"})

    def test_invalid_settings_raise(self, tmp_path: Path) -> None:
        _write_yaml(tmp_path / "settings.yaml", {"fetch": {"batch_size": 0}})

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigLoader.create(tmp_path).load_config()

        assert [err.field for err in exc_info.value.errors] == ["fetch.batch_size"]

    def test_unknown_key_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError):
            ConfigLoader.create(tmp_path).load_config({"fetch": {"bogus": 1}})

    def test_unparseable_yaml_raises(self, tmp_path: Path) -> None:
        (tmp_path / "settings.yaml").write_text("fetch: [unclosed")
        with pytest.raises(ConfigurationError):
            ConfigLoader.create(tmp_path).load_settings()

    def test_top_level_list_raises(self, tmp_path: Path) -> None:
        _write_yaml(tmp_path / "settings.yaml", [1, 2])
        with pytest.raises(ConfigurationError):
            ConfigLoader.create(tmp_path).load_settings()

    def test_catalog_defaults_when_absent(self, tmp_path: Path) -> None:
        catalog = ConfigLoader.create(tmp_path).load_catalog()
        assert catalog.benchmark == "SPY"
        assert len(catalog) == 25

    def test_catalog_from_yaml(self, tmp_path: Path) -> None:
        _write_yaml(tmp_path / "catalog.yaml", {
            "benchmark": "QQQ",
            "instruments": [{"symbol": "XLE", "name": "Energy", "category": "Energy", "holdings": ["XOM"]}],
        })
        catalog = ConfigLoader.create(tmp_path).load_catalog()

        assert catalog.benchmark == "QQQ"
        assert catalog.get("XLE").holdings == ("XOM",)

    def test_catalog_without_instruments_raises(self, tmp_path: Path) -> None:
        _write_yaml(tmp_path / "catalog.yaml", {"benchmark": "SPY"})
        with pytest.raises(ConfigurationError):
            ConfigLoader.create(tmp_path).load_catalog()


class TestConfigValidator:
    """Test suite for configuration validation."""

    def test_valid_defaults(self, tmp_path: Path) -> None:
        merged = ConfigLoader.create(tmp_path).merge_config()
        assert ConfigValidator.validate_config(merged) == []

    @pytest.mark.parametrize("section,params,field", [
        ("fetch", {"max_concurrent_batches": -1}, "fetch.max_concurrent_batches"),
        ("fetch", {"stagger_delay_ms": -5}, "fetch.stagger_delay_ms"),
        ("fetch", {"request_timeout_seconds": 0}, "fetch.request_timeout_seconds"),
        ("fetch", {"use_bulk": "yes"}, "fetch.use_bulk"),
        ("fetch", {"tier": "platinum"}, "fetch.tier"),
        ("fetch", {"batch_size": True}, "fetch.batch_size"),
        ("cache", {"ttl_seconds": 0}, "cache.ttl_seconds"),
        ("analysis", {"min_instrument_points": 1}, "analysis.min_instrument_points"),
        ("analysis", {"timeframes": []}, "analysis.timeframes"),
        ("ranking", {"top_n": -1}, "ranking.top_n"),
        ("provider", {"base_url": "ftp://example.com"}, "provider.base_url"),
        ("logging", {"level": "LOUD"}, "logging.level"),
    ])
    def test_invalid_values(self, section, params, field) -> None:
        errors = ConfigValidator.validate_config({section: params})
        assert [err.field for err in errors] == [field]

    def test_duplicate_timeframe_labels(self) -> None:
        errors = ConfigValidator.validate_analysis_params({"timeframes": [
            {"lookback_days": 5, "label": "Life"},
            {"lookback_days": 10, "label": "Life"},
        ]})
        assert [err.field for err in errors] == ["analysis.timeframes[1].label"]

    def test_multiple_errors_are_all_reported(self) -> None:
        errors = ConfigValidator.validate_fetch_params({"batch_size": 0, "group_delay_ms": -1})
        assert len(errors) == 2


class TestTimeoutConsistency:
    """Test suite for the bulk versus timeframe timeout check."""

    def test_default_bulk_timeout_leaves_room_for_fallback(self) -> None:
        config = get_default_config()
        assert config.fetch.bulk_timeout_seconds < config.analysis.timeframe_timeout_seconds

    def test_bulk_timeout_at_or_above_timeframe_timeout_rejected(self, tmp_path: Path) -> None:
        overrides = {"fetch": {"bulk_timeout_seconds": 120}, "analysis": {"timeframe_timeout_seconds": 60}}
        merged = ConfigLoader.create(tmp_path).merge_config(overrides)

        errors = ConfigValidator.validate_config(merged)

        assert [err.field for err in errors] == ["fetch.bulk_timeout_seconds"]

    def test_load_config_raises_on_inconsistent_timeouts(self, tmp_path: Path) -> None:
        _write_yaml(tmp_path / "settings.yaml", {"analysis": {"timeframe_timeout_seconds": 30}})
        with pytest.raises(ConfigurationError):
            ConfigLoader.create(tmp_path).load_config()

    def test_not_checked_when_bulk_disabled(self) -> None:
        errors = ConfigValidator.validate_timeouts({
            "fetch": {"use_bulk": False, "bulk_timeout_seconds": 120},
            "analysis": {"timeframe_timeout_seconds": 60},
        })
        assert errors == []
