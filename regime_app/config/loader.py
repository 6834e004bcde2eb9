"""Configuration loader with layered parameter precedence."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from ..data.catalog import InstrumentCatalog, default_catalog
from ..errors import ConfigurationError
from .defaults import (
    API_TIER_PRESETS,
    AnalysisParams,
    CacheParams,
    DefaultConfig,
    FetchParams,
    LoggingParams,
    ProviderParams,
    RankingParams,
    TimeframeSpec,
    get_default_config,
)
from .validation import ConfigValidator


SETTINGS_FILE = "settings.yaml"
CATALOG_FILE = "catalog.yaml"


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with layered precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_settings(self) -> dict[str, Any]:
        """Load settings.yaml overrides, empty when the file is absent."""
        return self._read_yaml(self.config_dir / SETTINGS_FILE)

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merge configuration with layered precedence.

        Priority order:
        1. Programmatic overrides (highest priority)
        2. settings.yaml in the config directory
        3. Rate tier preset named by fetch.tier
        4. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)
        settings = self.load_settings()

        tier = (overrides or {}).get("fetch", {}).get("tier") or settings.get("fetch", {}).get("tier")
        if tier in API_TIER_PRESETS:
            config = self._deep_merge(config, {"fetch": dict(API_TIER_PRESETS[tier])})

        config = self._deep_merge(config, settings)

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load_config(self, overrides: Optional[dict[str, Any]] = None) -> DefaultConfig:
        """Merge, validate and build the typed configuration."""
        merged = self.merge_config(overrides)
        errors = ConfigValidator.validate_config(merged)
        if errors:
            details = "; ".join(f"{err.field}: {err.message} (got: {err.value})" for err in errors)
            raise ConfigurationError(f"Invalid configuration: {details}", errors=errors)

        try:
            return self._build_config(merged)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    def load_catalog(self) -> InstrumentCatalog:
        """Load catalog.yaml, or the built-in industry table when absent."""
        raw = self._read_yaml(self.config_dir / CATALOG_FILE)
        if not raw:
            return default_catalog()

        instruments = raw.get("instruments")
        if not isinstance(instruments, list) or not instruments:
            raise ConfigurationError(f"{CATALOG_FILE} must define a non-empty 'instruments' list")

        benchmark = raw.get("benchmark", default_catalog().benchmark)
        return InstrumentCatalog.from_records(instruments, benchmark=benchmark)

    def _read_yaml(self, path: Path) -> dict[str, Any]:
        if not path.exists():
            return {}

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Could not parse {path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"{path} must contain a mapping at the top level")
        return data

    def _build_config(self, config: dict[str, Any]) -> DefaultConfig:
        analysis = dict(config["analysis"])
        analysis["timeframes"] = tuple(
            TimeframeSpec(lookback_days=spec["lookback_days"], label=spec["label"])
            for spec in analysis["timeframes"]
        )

        ranking = dict(config["ranking"])
        ranking["excluded_symbols"] = frozenset(ranking["excluded_symbols"])

        return DefaultConfig(
            fetch=FetchParams(**config["fetch"]),
            cache=CacheParams(**config["cache"]),
            analysis=AnalysisParams(**analysis),
            ranking=RankingParams(**ranking),
            provider=ProviderParams(**config["provider"]),
            logging=LoggingParams(**config["logging"]),
        )

    def _dataclass_to_dict(self, obj: Any) -> Any:
        """Convert nested dataclasses to plain YAML-shaped values."""
        if hasattr(obj, '__dataclass_fields__'):
            return {
                field_name: self._dataclass_to_dict(getattr(obj, field_name))
                for field_name in obj.__dataclass_fields__
            }
        if isinstance(obj, (list, tuple)):
            return [self._dataclass_to_dict(item) for item in obj]
        if isinstance(obj, frozenset):
            return sorted(obj)
        return obj

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
