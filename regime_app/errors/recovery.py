"""
Recovery categories for pipeline errors.

Every failure met during a run belongs to one of these categories, which
decide whether the pipeline absorbs it, degrades around it, or stops
before starting.
"""

from typing import Optional


class RecoverableError(Exception):
    """Failure absorbed where it happens; the affected symbol degrades to an empty series."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message)
        self.recoverable = True


class UnrecoverableError(Exception):
    """Failure that needs an operator, e.g. broken configuration."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message)
        self.recoverable = False


class GracefulDegradationError(Exception):
    """A faster path is unavailable and a slower fallback takes over."""

    def __init__(self, message: str, degraded_functionality: Optional[str] = None,
                 fallback_strategy: Optional[str] = None, **kwargs):
        super().__init__(message)
        self.degraded_functionality = degraded_functionality
        self.fallback_strategy = fallback_strategy
        self.allows_degradation = True


class ConfigurationError(UnrecoverableError):
    """Invalid settings or catalog; raised before any analysis starts."""

    def __init__(self, message: str, errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []
