"""
Data quality error classifications for provider responses.

These exceptions categorize problems with the shape or content of market
data returned by the upstream provider. All of them are recoverable: the
affected symbol degrades to an empty series and the run continues.
"""

from typing import Optional, Dict, Any


class DataQualityError(Exception):
    """Provider data that cannot be used as delivered."""

    def __init__(self, message: str, symbol: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.symbol = symbol
        self.context = context or {}
        self.recoverable = True


class MissingDataError(DataQualityError):
    """No series at all, e.g. for the benchmark."""

    def __init__(self, message: str, data_type: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.data_type = data_type


class MalformedDataError(DataQualityError):
    """Body or bar that does not decode to the expected shape."""

    def __init__(self, message: str, raw_data: Optional[str] = None,
                 expected_format: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.raw_data = raw_data
        self.expected_format = expected_format


class InsufficientDataError(DataQualityError):
    """Too few price points to compute a period return."""

    def __init__(self, message: str, required_count: Optional[int] = None,
                 available_count: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.required_count = required_count
        self.available_count = available_count
