"""
Canonical Formatters Module.

Normalizes field values on write so that the same datum read from two
scans compares equal:
    - Aadhaar -> digits grouped in fours, space separated
    - PAN -> upper-case
    - Mobile -> digits only
    - Email -> lower-case
    - Names -> title case
"""

import re
from typing import Callable, Dict

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
from form_scanner.utils.helpers import title_case


def format_aadhaar(value: str) -> str:
    """
    Example:
        >>> format_aadhaar("123456789012")
        "1234 5678 9012"
    """
    cleaned = re.sub(r'[\s-]', '', value)
    return ' '.join(cleaned[i:i + 4] for i in range(0, len(cleaned), 4))


def format_pan(value: str) -> str:
    return value.upper().strip()


def format_mobile(value: str) -> str:
    return re.sub(r'[\s-]', '', value)


def format_email(value: str) -> str:
    return value.lower().strip()


def format_name(value: str) -> str:
    return title_case(value)


FORMATTERS: Dict[str, Callable[[str], str]] = {
    AADHAAR_NUMBER: format_aadhaar,
    PAN_NUMBER: format_pan,
    MOBILE_NUMBER: format_mobile,
    EMAIL_ADDRESS: format_email,
    FULL_NAME: format_name,
    FATHER_NAME: format_name,
}


def format_field_value(field_name: str, value: str) -> str:
    """
    Return the canonical form of a value for its field.

    Fields without a dedicated formatter are trimmed.

    Example:
        >>> format_field_value("firstName", "john DOE")
        "John Doe"
    """
    formatter = FORMATTERS.get(field_name)
    if formatter is None:
        return value.strip()
    return formatter(value)


FIELD_REQUIREMENTS: Dict[str, str] = {
    AADHAAR_NUMBER: "12 digits (spaces/hyphens optional)",
    PAN_NUMBER: "10 characters (e.g., ABCDE1234F)",
    MOBILE_NUMBER: "10 digits starting with 6-9",
    PIN_CODE: "6 digits",
    BIRTH_DATE: "DD/MM/YYYY format",
    EMAIL_ADDRESS: "Valid email format",
    FULL_NAME: "At least 2 characters",
    FATHER_NAME: "At least 2 characters",
}


def get_field_requirements(field_name: str) -> str:
    """Input hint shown beside a form field; empty for free-text fields."""
    return FIELD_REQUIREMENTS.get(field_name, "")
