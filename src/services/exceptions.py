"""
Service-level exceptions.

These are raised inside the services while parsing and validating entries.
The entry store converts them into typed result values at its boundary, so
callers of the prediction path never see them.
"""

class EntryValidationError(ValueError):
    """Base exception for symptom entry validation errors."""
    pass

class InvalidDateError(EntryValidationError):
    """Raised when an entry date is missing, malformed or not a real calendar day."""
    pass

class OutOfRangeValueError(EntryValidationError):
    """Raised in strict mode when a symptom value falls outside its domain."""
    pass

class EntryFeedError(Exception):
    """Raised when the remote entry feed cannot be fetched or decoded."""
    pass
