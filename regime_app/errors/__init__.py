"""
Error classification system for the regime analysis pipeline.

This module provides the structured exception hierarchy for the kinds of
failures met while fetching market data from an upstream provider and
turning it into relative-performance analytics.
"""

from .data_quality import (
    DataQualityError,
    MissingDataError,
    MalformedDataError,
    InsufficientDataError,
)
from .provider_failures import (
    ProviderError,
    ProviderTimeoutError,
    ProviderHTTPError,
)
from .recovery import (
    RecoverableError,
    UnrecoverableError,
    GracefulDegradationError,
    ConfigurationError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "MissingDataError",
    "MalformedDataError",
    "InsufficientDataError",
    # Provider Failures
    "ProviderError",
    "ProviderTimeoutError",
    "ProviderHTTPError",
    # Recovery Categories
    "RecoverableError",
    "UnrecoverableError",
    "GracefulDegradationError",
    "ConfigurationError",
]
