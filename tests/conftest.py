"""Shared test fixtures for form scanner tests."""

import sys
from pathlib import Path

import pytest

# Add project root to path so tests run without installation
sys.path.insert(0, str(Path(__file__).parent.parent))

from form_scanner.extraction import ExtractionCoordinator


@pytest.fixture
def aadhaar_text() -> str:
    """Front of an Aadhaar card with an upper-case name and no name label."""
    return "GOVERNMENT OF INDIA\nRAHUL KUMAR\nDOB: 15/08/1990\nMale\n1234 5678 9012"


@pytest.fixture
def bilingual_aadhaar_text() -> str:
    """Aadhaar card with Hindi/English labels and a VID line."""
    return (
        "भारत सरकार\n"
        "Government of India\n"
        "नाम / Name\n"
        "Priya Sharma\n"
        "जन्म तिथि / DOB: 01/01/1985\n"
        "महिला / Female\n"
        "2345 6789 0123\n"
        "VID: 9123 4567 8901 2345\n"
    )


@pytest.fixture
def photocopy_aadhaar_text() -> str:
    """Aadhaar card read from a photocopy: digits misread as letters."""
    return "GOVERNMENT OF INDIA\nRAHUL KUMAR\nDOB: 15/08/1990\nMale\n1O23 4S67 89I2"


@pytest.fixture
def pan_text() -> str:
    """Old-layout PAN card with a labeled father's name."""
    return (
        "INCOME TAX DEPARTMENT\n"
        "RAHUL KUMAR SHARMA\n"
        "ABCPE1234F\n"
        "Father's Name: SURESH KUMAR SHARMA"
    )


@pytest.fixture
def new_pan_text() -> str:
    """New-layout PAN card with bilingual labels above each value."""
    return (
        "आयकर विभाग INCOME TAX DEPARTMENT\n"
        "भारत सरकार GOVT. OF INDIA\n"
        "स्थायी लेखा संख्या कार्ड\n"
        "Permanent Account Number Card\n"
        "ABCPE1234F\n"
        "नाम / Name\n"
        "RAHUL KUMAR SHARMA\n"
        "पिता का नाम / Father's Name\n"
        "SURESH KUMAR SHARMA\n"
        "जन्म की तारीख / Date of Birth\n"
        "15/08/1990\n"
    )


@pytest.fixture
def generic_text() -> str:
    """Text with no document keywords."""
    return "Contact 9876543210\nMail test@example.com"


@pytest.fixture
def coordinator() -> ExtractionCoordinator:
    return ExtractionCoordinator()
