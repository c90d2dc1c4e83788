"""
Shared input checks for the record factories.

Each check raises on the first failure; factories call them in a fixed order
so the reported error is deterministic.
"""
import logging
from typing import Any, NoReturn, Optional

from relational_store.exceptions import (
    EmptyFieldError,
    InvalidFormatError,
    RecordValidationError,
)
from relational_store.utils.urn_validator import validate_urn

logger = logging.getLogger(__name__)


def is_blank(value: Any) -> bool:
    """True for None, non-strings, and empty or whitespace-only strings."""
    return not isinstance(value, str) or not value.strip()


def reject(error: RecordValidationError, operation: str) -> NoReturn:
    logger.warning(
        f"Validation error in {operation}: {error}",
        extra={'operation': operation, 'field': error.field}
    )
    raise error


def require_non_empty(value: Any, label: str, field: str, operation: str) -> str:
    """Return the trimmed value, or raise EmptyFieldError naming the field."""
    if is_blank(value):
        reject(EmptyFieldError(f"{label} cannot be empty", field=field, value=value), operation)
    return value.strip()


def require_urn(value: Any, label: str, field: str, operation: str) -> str:
    if not validate_urn(value):
        reject(
            InvalidFormatError(f'Invalid {label} format: "{value}"', field=field, value=value),
            operation
        )
    return value


def optional_urn(value: Optional[str], label: str, field: str, operation: str) -> Optional[str]:
    """Absent (None, empty or whitespace-only) returns None; otherwise the URN must validate."""
    if is_blank(value):
        return None
    return require_urn(value, label, field, operation)
