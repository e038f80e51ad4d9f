"""Custom exceptions for the sat-denominated rate service.

The interpolation and cache core never raises for expected conditions;
these exceptions belong to the boundary layers (request validation,
quote fetching) and live here to avoid circular imports.
"""


class RateServiceError(Exception):
    """Base exception for all rate service errors."""


class InvalidQueryError(RateServiceError):
    """Raised when request parameters (limit, offset, startDate, sortOrder) are invalid."""


class UnsupportedCurrencyError(RateServiceError):
    """Raised when a currency cannot be used for the requested operation."""


class QuoteUnavailableError(RateServiceError):
    """Raised when the quote provider has no usable price for a symbol."""
