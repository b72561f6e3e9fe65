"""
Custom Exceptions Module.

This module defines the custom exceptions used throughout the form
scanner. Absence of a field is never an error and validation failures are
returned as data, so the hierarchy is deliberately small.

Exception Hierarchy:
    FormScannerError (base)
    ├── ConfigurationError
    ├── ExtractionError
    └── InvariantViolationError
        └── DuplicateFieldError
"""


class FormScannerError(Exception):
    """
    Base exception for all form scanner errors.

    Attributes:
        message: Human-readable error message.
        details: Optional dictionary with additional error details.
    """

    def __init__(self, message: str, details: dict = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(FormScannerError):
    """Raised when a configuration table is missing or malformed."""

    def __init__(self, key: str, reason: str = None):
        message = f"Invalid configuration: {key}"
        details = {"key": key, "reason": reason}
        super().__init__(message, details)


class ExtractionError(FormScannerError):
    """
    Raised by an extraction strategy that cannot process its input.

    The extraction coordinator catches this (and any other fault raised by
    a strategy) and moves on to the next strategy in the fallback chain.

    Example:
        >>> raise ExtractionError("advanced_aadhaar", "no digit runs after normalisation")
    """

    def __init__(self, strategy: str, reason: str = None):
        message = f"Extraction strategy failed: {strategy}"
        details = {"strategy": strategy, "reason": reason}
        super().__init__(message, details)


class InvariantViolationError(FormScannerError):
    """Base exception for internal invariant violations. These are fatal."""
    pass


class DuplicateFieldError(InvariantViolationError):
    """Raised when two fields with the same name end up in one field set."""

    def __init__(self, field_name: str):
        message = f"Duplicate field in field set: {field_name}"
        details = {"field_name": field_name}
        super().__init__(message, details)


__all__ = [
    'FormScannerError',
    'ConfigurationError',
    'ExtractionError',
    'InvariantViolationError',
    'DuplicateFieldError',
]
