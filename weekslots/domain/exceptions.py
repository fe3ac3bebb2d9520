"""
Domain-specific exception hierarchy for the availability resolver.
"""


class AvailabilityError(Exception):
    """Base class for all application-level errors."""


class InvalidDateError(AvailabilityError, ValueError):
    """Raised when a query date is not a valid calendar date."""


class EventSourceError(AvailabilityError):
    """Raised when events cannot be fetched from or parsed out of storage."""
