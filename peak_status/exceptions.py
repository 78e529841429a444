"""
Domain exceptions for the Peak Status API.
Provides clear, typed exceptions for business logic errors.
"""


class PeakStatusAPIException(Exception):
    """Base exception for all Peak Status API errors."""
    pass


class ProviderNotConfiguredError(PeakStatusAPIException):
    """Raised when a status is requested without any provider selected."""
    pass


class UnknownProviderError(PeakStatusAPIException):
    """Raised when a provider identifier is outside the supported set."""
    pass


class InvalidScheduleRuleError(PeakStatusAPIException):
    """Raised when a schedule rule record fails validation."""
    pass


class DatabaseError(PeakStatusAPIException):
    """Raised when database operations fail."""
    pass
