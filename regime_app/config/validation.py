"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

from .defaults import API_TIER_PRESETS

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_fetch_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate series fetching parameters."""
        errors = []

        for name in ("batch_size", "max_concurrent_batches"):
            if name in params:
                value = params[name]
                if not _is_int(value) or value <= 0:
                    errors.append(ValidationError(
                        field=f"fetch.{name}",
                        message="Must be a positive integer",
                        value=value
                    ))

        for name in ("stagger_delay_ms", "group_delay_ms"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value < 0:
                    errors.append(ValidationError(
                        field=f"fetch.{name}",
                        message="Must be a non-negative number",
                        value=value
                    ))

        for name in ("bulk_timeout_seconds", "request_timeout_seconds"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value <= 0:
                    errors.append(ValidationError(
                        field=f"fetch.{name}",
                        message="Must be a positive number",
                        value=value
                    ))

        if "use_bulk" in params:
            value = params["use_bulk"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="fetch.use_bulk",
                    message="Must be a boolean",
                    value=value
                ))

        if params.get("tier") is not None:
            value = params["tier"]
            if value not in API_TIER_PRESETS:
                errors.append(ValidationError(
                    field="fetch.tier",
                    message=f"Must be one of {sorted(API_TIER_PRESETS)}",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_cache_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate cache parameters."""
        errors = []

        if "ttl_seconds" in params:
            value = params["ttl_seconds"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="cache.ttl_seconds",
                    message="Must be a positive number",
                    value=value
                ))

        if "max_entries" in params:
            value = params["max_entries"]
            if not _is_int(value) or value <= 0:
                errors.append(ValidationError(
                    field="cache.max_entries",
                    message="Must be a positive integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_analysis_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate timeframe orchestration parameters."""
        errors = []

        if "timeframe_timeout_seconds" in params:
            value = params["timeframe_timeout_seconds"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="analysis.timeframe_timeout_seconds",
                    message="Must be a positive number",
                    value=value
                ))

        if "min_instrument_points" in params:
            value = params["min_instrument_points"]
            if not _is_int(value) or value < 2:
                errors.append(ValidationError(
                    field="analysis.min_instrument_points",
                    message="Must be an integer of at least 2",
                    value=value
                ))

        if "timeframes" in params:
            timeframes = params["timeframes"]
            if not isinstance(timeframes, (list, tuple)) or not timeframes:
                errors.append(ValidationError(
                    field="analysis.timeframes",
                    message="Must be a non-empty list of {lookback_days, label}",
                    value=timeframes
                ))
            else:
                labels = set()
                for index, spec in enumerate(timeframes):
                    days = spec.get("lookback_days") if isinstance(spec, dict) else None
                    label = spec.get("label") if isinstance(spec, dict) else None
                    if not _is_int(days) or days <= 0:
                        errors.append(ValidationError(
                            field=f"analysis.timeframes[{index}].lookback_days",
                            message="Must be a positive integer",
                            value=days
                        ))
                    if not isinstance(label, str) or not label:
                        errors.append(ValidationError(
                            field=f"analysis.timeframes[{index}].label",
                            message="Must be a non-empty string",
                            value=label
                        ))
                    elif label in labels:
                        errors.append(ValidationError(
                            field=f"analysis.timeframes[{index}].label",
                            message="Labels must be unique",
                            value=label
                        ))
                    else:
                        labels.add(label)

        return errors

    @staticmethod
    def validate_ranking_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate holdings ranking parameters."""
        errors = []

        if "top_n" in params:
            value = params["top_n"]
            if not _is_int(value) or value < 0:
                errors.append(ValidationError(
                    field="ranking.top_n",
                    message="Must be a non-negative integer",
                    value=value
                ))

        if "excluded_symbols" in params:
            value = params["excluded_symbols"]
            if not isinstance(value, (list, tuple, set, frozenset)) or \
                    not all(isinstance(symbol, str) for symbol in value):
                errors.append(ValidationError(
                    field="ranking.excluded_symbols",
                    message="Must be a list of ticker strings",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_provider_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate upstream provider parameters."""
        errors = []

        if "base_url" in params:
            value = params["base_url"]
            if not isinstance(value, str) or not value.startswith(("http://", "https://")):
                errors.append(ValidationError(
                    field="provider.base_url",
                    message="Must be an http(s) URL",
                    value=value
                ))

        if "health_timeout_seconds" in params:
            value = params["health_timeout_seconds"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="provider.health_timeout_seconds",
                    message="Must be a positive number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging output parameters."""
        errors = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
                errors.append(ValidationError(
                    field="logging.level",
                    message=f"Must be one of {list(LOG_LEVELS)}",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_timeouts(config: dict[str, Any]) -> list[ValidationError]:
        """Check that a hung bulk request leaves the timeframe time to fall back."""
        fetch = config.get("fetch") or {}
        analysis = config.get("analysis") or {}
        bulk_timeout = fetch.get("bulk_timeout_seconds")
        timeframe_timeout = analysis.get("timeframe_timeout_seconds")

        if fetch.get("use_bulk") is False:
            return []
        if not _is_number(bulk_timeout) or not _is_number(timeframe_timeout):
            return []

        if bulk_timeout >= timeframe_timeout:
            return [ValidationError(
                field="fetch.bulk_timeout_seconds",
                message=f"Must be less than analysis.timeframe_timeout_seconds ({timeframe_timeout})",
                value=bulk_timeout
            )]
        return []

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "fetch" in config:
            errors.extend(ConfigValidator.validate_fetch_params(config["fetch"]))

        if "cache" in config:
            errors.extend(ConfigValidator.validate_cache_params(config["cache"]))

        if "analysis" in config:
            errors.extend(ConfigValidator.validate_analysis_params(config["analysis"]))

        if "ranking" in config:
            errors.extend(ConfigValidator.validate_ranking_params(config["ranking"]))

        if "provider" in config:
            errors.extend(ConfigValidator.validate_provider_params(config["provider"]))

        if "logging" in config:
            errors.extend(ConfigValidator.validate_logging_params(config["logging"]))

        errors.extend(ConfigValidator.validate_timeouts(config))

        return errors
