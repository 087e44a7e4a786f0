"""
Snapshot validation.

The store itself is lenient: it imports anything shaped like a snapshot and
normalizes what it cannot use to empty cells. This module reports what such an
import would drop or coerce, so callers (CLI `--strict`, the UI import panel)
can surface it before loading. Validation never mutates its input.
"""

from typing import Any, Dict, List, Mapping, Optional
import logging
import math

from .columns import column_index

logger = logging.getLogger(__name__)


class ValidationError:
    """Represents a validation error with context."""

    def __init__(self, field: str, message: str, severity: str = "error", context: Optional[Dict] = None):
        """Initialize a validation error.

        Args:
            field: The snapshot location that failed validation (row key or row key + letter)
            message: Error message
            severity: Error severity (error, warning, info)
            context: Additional context information
        """
        self.field = field
        self.message = message
        self.severity = severity
        self.context = context or {}

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"

    def __repr__(self) -> str:
        return f"ValidationError({self.field!r}, {self.message!r}, severity={self.severity!r})"

    def to_dict(self) -> Dict:
        """Convert to dictionary representation."""
        return {
            'field': self.field,
            'message': self.message,
            'severity': self.severity,
            'context': self.context
        }


class ValidationResult:
    """Represents the result of a validation operation.

    Only `error` severity makes a result invalid; warnings and info entries
    describe coercions the store would apply on import.
    """

    def __init__(self, is_valid: bool = True, errors: Optional[List[ValidationError]] = None):
        self.is_valid = is_valid
        self.errors = errors or []

    def add_error(self, error: ValidationError) -> None:
        """Add an entry to the result."""
        self.errors.append(error)
        if error.severity == "error":
            self.is_valid = False

    def get_errors_by_severity(self, severity: str) -> List[ValidationError]:
        """Get errors filtered by severity."""
        return [error for error in self.errors if error.severity == severity]

    def messages(self, severity: Optional[str] = None) -> List[str]:
        errors = self.errors if severity is None else self.get_errors_by_severity(severity)
        return [str(error) for error in errors]

    def to_dict(self) -> Dict:
        """Convert to dictionary representation."""
        return {
            'is_valid': self.is_valid,
            'errors': [error.to_dict() for error in self.errors],
            'error_count': len(self.get_errors_by_severity('error')),
            'warning_count': len(self.get_errors_by_severity('warning')),
            'info_count': len(self.get_errors_by_severity('info'))
        }


def _check_value(key: str, letter: str, value: Any) -> Optional[ValidationError]:
    field = f"{key}.{letter}"
    if value is None:
        return None
    if isinstance(value, bool):
        return ValidationError(field, "boolean value will be imported as empty", "warning", {"value": value})
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return ValidationError(field, "number is too large and will be imported as empty", "warning")
        if not math.isfinite(number):
            return ValidationError(field, "non-finite number will be imported as empty", "warning", {"value": value})
        return None
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return ValidationError(field, f"non-numeric text {value!r} will be imported as empty", "warning")
        if not math.isfinite(number):
            return ValidationError(field, "non-finite number will be imported as empty", "warning", {"value": value})
        return ValidationError(field, "numeric text will be converted to a number", "info", {"value": value})
    return ValidationError(
        field, f"{type(value).__name__} value will be imported as empty", "warning"
    )


def validate_snapshot(data: Any, column_count: int) -> ValidationResult:
    """Validate a snapshot against a sheet with `column_count` columns."""
    result = ValidationResult()
    if not isinstance(data, Mapping):
        result.add_error(ValidationError(
            "snapshot", f"expected an object of rows, got {type(data).__name__}",
        ))
        return result
    if not data:
        result.add_error(ValidationError("snapshot", "no rows; a single empty row will be used", "info"))
        return result

    for key, row in data.items():
        key = str(key)
        if not isinstance(row, Mapping):
            result.add_error(ValidationError(
                key, f"row must be an object of column letters, got {type(row).__name__}",
            ))
            continue
        for letter, value in row.items():
            letter = str(letter)
            try:
                index = column_index(letter)
            except ValueError:
                index = None
            if index is None or letter != letter.strip().upper():
                result.add_error(ValidationError(
                    f"{key}.{letter}", "not an uppercase column letter", context={"column": letter},
                ))
                continue
            if index >= column_count:
                result.add_error(ValidationError(
                    f"{key}.{letter}",
                    f"column is beyond the configured {column_count} column(s) and will be ignored",
                    "warning",
                    {"column_index": index},
                ))
                continue
            issue = _check_value(key, letter, value)
            if issue is not None:
                result.add_error(issue)

    logger.debug("Snapshot validation: %s", result.to_dict())
    return result


__all__ = ["ValidationError", "ValidationResult", "validate_snapshot"]
