"""
walkwage exception hierarchy.

All walkwage exceptions inherit from WalkwageError, making it easy for consumers
to catch library-level errors while still distinguishing specific failure modes.
"""


class WalkwageError(Exception):
    """Base exception class for all walkwage errors."""


class ConfigurationError(WalkwageError):
    """Raised for configuration errors (missing keys, invalid values)."""


class InvalidRangeError(WalkwageError):
    """Raised when a requested date range is empty or not representable."""


class InvalidRecordError(WalkwageError):
    """Raised for walk records with a negative duration or an unusable day."""


class StoreError(WalkwageError):
    """Raised for persistence errors (unsafe keys, corrupt files)."""


class OffDayLimitError(WalkwageError):
    """Raised when logging another OFF day would exceed the weekly allowance."""
