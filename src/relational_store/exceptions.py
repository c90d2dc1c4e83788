"""
Exceptions raised while validating identifiers and building records.

All errors subclass ValueError so callers that already treat invalid input
as ValueError keep working.
"""
from typing import Any, Optional


class RecordValidationError(ValueError):
    """Base class for invalid input to key derivation or record factories."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        super().__init__(message)
        self.field = field
        self.value = value


class InvalidFormatError(RecordValidationError):
    """Raised when a value does not match its required grammar."""
    pass


class EmptyFieldError(RecordValidationError):
    """Raised when a required string is empty or whitespace-only."""
    pass


class MissingRequiredFieldError(RecordValidationError):
    """Raised when a conditionally required field is absent."""
    pass


class ReservedAttributeError(RecordValidationError):
    """Raised when an extension attribute collides with a reserved field name."""
    pass
