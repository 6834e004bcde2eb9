"""
Upstream provider failure classifications.

These exceptions represent failures talking to the market data provider.
They are recoverable: a failed bulk request falls back to per-symbol
requests, and a failed per-symbol request degrades to an empty series.
"""

from typing import Optional, Dict, Any

from .recovery import RecoverableError


class ProviderError(RecoverableError):
    """Base class for upstream provider failures."""

    def __init__(self, message: str, endpoint: Optional[str] = None,
                 symbol: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.endpoint = endpoint
        self.symbol = symbol
        self.context = context or {}


class ProviderTimeoutError(ProviderError):
    """Provider did not answer within the allotted time."""

    def __init__(self, message: str, timeout_seconds: Optional[float] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.timeout_seconds = timeout_seconds


class ProviderHTTPError(ProviderError):
    """Provider answered with a non-success HTTP status."""

    def __init__(self, message: str, status: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.status = status

    @property
    def is_server_error(self) -> bool:
        return self.status is not None and self.status >= 500
