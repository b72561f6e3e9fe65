"""
Field Validators Module.

This module provides syntactic validation for every form field:
    - Aadhaar and PAN identity numbers
    - Mobile number, PIN code and email address
    - Person names
    - Date of birth, with calendar checks

Validation never raises. Each check returns a ValidationResult whose
error message is suitable for showing next to the form field.
"""

import re
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from config import get_config
from form_scanner.models.extracted_field import (
    AADHAAR_NUMBER,
    BIRTH_DATE,
    EMAIL_ADDRESS,
    FATHER_NAME,
    FULL_NAME,
    MOBILE_NUMBER,
    PAN_NUMBER,
    PIN_CODE,
)
from form_scanner.utils.logger import get_logger

logger = get_logger(__name__)

PAN_PATTERN = re.compile(r'^[A-Z]{5}\d{4}[A-Z]$')
EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')
NAME_PATTERN = re.compile(r"^[a-zA-Z .'-]+$")
SEPARATORS = re.compile(r'[\s-]')


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of validating one field value.

    Attributes:
        is_valid: Whether the value passed.
        error_message: Why it failed; None when valid.
    """
    is_valid: bool
    error_message: Optional[str] = None

    @classmethod
    def ok(cls) -> 'ValidationResult':
        return cls(True)

    @classmethod
    def fail(cls, message: str) -> 'ValidationResult':
        return cls(False, message)

    def to_dict(self) -> Dict[str, object]:
        return {'isValid': self.is_valid, 'errorMessage': self.error_message}


def is_leap_year(year: int) -> bool:
    """Gregorian leap year rule."""
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def _parse_int(part: str) -> Optional[int]:
    part = part.strip()
    if not re.fullmatch(r'[+-]?\d+', part):
        return None
    return int(part)


class DateValidator:
    """
    Validates a date of birth written as DD/MM/YYYY or DD-MM-YYYY.

    Checks for:
        - Three numeric parts
        - Day, month and year ranges
        - Days per month, including February in leap years

    Example:
        >>> validator = DateValidator()
        >>> validator.validate("29/02/2021")
        ValidationResult(is_valid=False, error_message='Not a leap year')
    """

    THIRTY_DAY_MONTHS = (4, 6, 9, 11)

    def __init__(self) -> None:
        self.min_year = get_config("validation.year_range.min", 1900)
        self.max_year = get_config("validation.year_range.max", 2024)

    def validate(self, value: str) -> ValidationResult:
        cleaned = value.strip()
        if not cleaned:
            return ValidationResult.fail("Date of birth is required")

        parts = re.split(r'[/-]', cleaned)
        if len(parts) != 3:
            return ValidationResult.fail("Invalid date format (use DD/MM/YYYY)")

        day, month, year = (_parse_int(p) for p in parts)
        if day is None or month is None or year is None:
            return ValidationResult.fail("Date must contain valid numbers")
        if not 1 <= day <= 31:
            return ValidationResult.fail("Day must be between 1 and 31")
        if not 1 <= month <= 12:
            return ValidationResult.fail("Month must be between 1 and 12")
        if not self.min_year <= year <= self.max_year:
            return ValidationResult.fail(
                f"Year must be between {self.min_year} and {self.max_year}"
            )
        if month in self.THIRTY_DAY_MONTHS and day > 30:
            return ValidationResult.fail("Invalid day for this month")
        if month == 2 and day > 29:
            return ValidationResult.fail("Invalid day for February")
        if month == 2 and day == 29 and not is_leap_year(year):
            return ValidationResult.fail("Not a leap year")
        return ValidationResult.ok()


class FieldValidator:
    """
    Per-field validation for scanned form data.

    The validator holds only configuration read at construction time, so
    one instance can be shared freely between threads.

    Example:
        >>> validator = FieldValidator()
        >>> validator.validate_field("panNumber", "abcde1234f").is_valid
        True
        >>> validator.validate_field("mobileNumber", "5234567890").error_message
        'Mobile must start with 6-9'
    """

    def __init__(self) -> None:
        self.name_min = get_config("validation.name_length.min", 2)
        self.name_max = get_config("validation.name_length.max", 100)
        self.date_validator = DateValidator()

        self._validators: Dict[str, Callable[[str], ValidationResult]] = {
            AADHAAR_NUMBER: self.validate_aadhaar,
            PAN_NUMBER: self.validate_pan,
            MOBILE_NUMBER: self.validate_mobile,
            PIN_CODE: self.validate_pin_code,
            BIRTH_DATE: self.validate_date_of_birth,
            EMAIL_ADDRESS: self.validate_email,
            FULL_NAME: self.validate_name,
            FATHER_NAME: self.validate_name,
        }

    def validate_aadhaar(self, value: str) -> ValidationResult:
        cleaned = SEPARATORS.sub('', value)
        if not cleaned:
            return ValidationResult.fail("Aadhaar number is required")
        if len(cleaned) != 12:
            return ValidationResult.fail("Aadhaar must be 12 digits")
        if not cleaned.isdigit():
            return ValidationResult.fail("Aadhaar must contain only numbers")
        return ValidationResult.ok()

    def validate_pan(self, value: str) -> ValidationResult:
        cleaned = value.strip().upper()
        if not cleaned:
            return ValidationResult.fail("PAN number is required")
        if len(cleaned) != 10:
            return ValidationResult.fail("PAN must be 10 characters")
        if not PAN_PATTERN.match(cleaned):
            return ValidationResult.fail("Invalid PAN format (e.g., ABCDE1234F)")
        return ValidationResult.ok()

    def validate_mobile(self, value: str) -> ValidationResult:
        cleaned = SEPARATORS.sub('', value)
        if not cleaned:
            return ValidationResult.fail("Mobile number is required")
        if len(cleaned) != 10:
            return ValidationResult.fail("Mobile must be 10 digits")
        if not cleaned.isdigit():
            return ValidationResult.fail("Mobile must contain only numbers")
        if cleaned[0] not in "6789":
            return ValidationResult.fail("Mobile must start with 6-9")
        return ValidationResult.ok()

    def validate_pin_code(self, value: str) -> ValidationResult:
        cleaned = value.strip()
        if not cleaned:
            return ValidationResult.fail("PIN code is required")
        if len(cleaned) != 6:
            return ValidationResult.fail("PIN must be 6 digits")
        if not cleaned.isdigit():
            return ValidationResult.fail("PIN must contain only numbers")
        return ValidationResult.ok()

    def validate_date_of_birth(self, value: str) -> ValidationResult:
        return self.date_validator.validate(value)

    def validate_email(self, value: str) -> ValidationResult:
        cleaned = value.strip().lower()
        if not cleaned:
            return ValidationResult.fail("Email address is required")
        if not EMAIL_PATTERN.match(cleaned):
            return ValidationResult.fail("Invalid email format")
        return ValidationResult.ok()

    def validate_name(self, value: str) -> ValidationResult:
        cleaned = value.strip()
        if not cleaned:
            return ValidationResult.fail("Name is required")
        if len(cleaned) < self.name_min:
            return ValidationResult.fail("Name too short")
        if len(cleaned) > self.name_max:
            return ValidationResult.fail("Name too long")
        if not NAME_PATTERN.match(cleaned):
            return ValidationResult.fail("Name contains invalid characters")
        return ValidationResult.ok()

    def validate_field(self, field_name: str, value: str) -> ValidationResult:
        """
        Validate a value by field name.

        Unknown field names only need a non-blank value.

        Args:
            field_name: Name of the field.
            value: Raw value as typed or extracted.

        Returns:
            ValidationResult for the value.
        """
        value = value or ""
        validator = self._validators.get(field_name)
        if validator:
            result = validator(value)
        elif value.strip():
            result = ValidationResult.ok()
        else:
            result = ValidationResult.fail("This field is required")

        if not result.is_valid:
            logger.debug(f"Validation failed for {field_name}: {result.error_message}")
        return result


_default_validator: Optional[FieldValidator] = None


def _validator() -> FieldValidator:
    global _default_validator
    if _default_validator is None:
        _default_validator = FieldValidator()
    return _default_validator


def validate_field(field_name: str, value: str) -> ValidationResult:
    """Validate using the shared FieldValidator instance."""
    return _validator().validate_field(field_name, value)
