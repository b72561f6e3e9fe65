"""
Validation Module for the Form Scanner.

This module provides:
    - Per-field syntactic validation returning ValidationResult
    - Canonical formatting of field values
    - Form readiness checks over required fields
"""

from .validators import (
    ValidationResult,
    DateValidator,
    FieldValidator,
    validate_field,
    is_leap_year,
)
from .formatters import format_field_value, get_field_requirements
from .form_check import FormCheck, check_form

__all__ = [
    'ValidationResult',
    'DateValidator',
    'FieldValidator',
    'validate_field',
    'is_leap_year',
    'format_field_value',
    'get_field_requirements',
    'FormCheck',
    'check_form',
]
