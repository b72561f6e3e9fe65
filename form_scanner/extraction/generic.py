"""
Generic Field Extractor.

Used when the classifier cannot tell what document it is looking at.
Only bare format patterns are applied, so every reading lands in the
lowest confidence tier.
"""

import re
from typing import Iterable, List, Optional, Sequence

from config import get_config
from form_scanner.models.extracted_field import (
    AADHAAR_NUMBER,
    BIRTH_DATE,
    EMAIL_ADDRESS,
    MOBILE_NUMBER,
    PAN_NUMBER,
    PIN_CODE,
    ExtractedField,
    make_field,
)
from form_scanner.utils.logger import get_logger, mask_id
from .base import (
    DATE_PATTERN,
    DEFAULT_CATEGORY_CODES,
    PAN_TOKEN_PATTERN,
    DocumentExtractor,
    grouped_aadhaar_numbers,
    is_valid_pan,
)

logger = get_logger(__name__)

MOBILE_PATTERN = re.compile(r'(?<!\d)([6-9]\d{9})(?!\d)')
EMAIL_PATTERN = re.compile(r'\b([A-Za-z0-9._%+\-]+@[A-Za-z0-9.\-]+\.[A-Za-z]{2,})\b')
PIN_PATTERN = re.compile(r'(?<!\d)(\d{6})(?!\d)')

# Six-digit runs starting like a year are usually part of a date or a
# longer number; real PIN codes in that range are lost.
PIN_EXCLUDED_PREFIXES = ("19", "20")


class GenericExtractor(DocumentExtractor):
    """
    Pattern-only extractor for unclassified documents.

    Fields: adharId, panNumber, mobileNumber, emailAddress, zip, birthdate.
    """

    name = "generic"
    document_key = "generic"
    DEFAULT_CONFIDENCE = {
        AADHAAR_NUMBER: 75,
        PAN_NUMBER: 75,
        MOBILE_NUMBER: 75,
        EMAIL_ADDRESS: 75,
        PIN_CODE: 70,
        BIRTH_DATE: 70,
    }

    def __init__(self, category_codes: Optional[Iterable[str]] = None, **kwargs) -> None:
        kwargs.setdefault('blacklist', ())
        super().__init__(**kwargs)
        if category_codes is None:
            category_codes = get_config("extraction.pan_category_codes", DEFAULT_CATEGORY_CODES)
        self.category_codes = tuple(code.upper() for code in category_codes)

    def extract(self, text: str, lines: Sequence[str]) -> List[ExtractedField]:
        fields = []

        numbers = grouped_aadhaar_numbers(text)
        if numbers:
            digits = numbers[0]
            logger.debug(f"Generic Aadhaar number: {mask_id(digits)}")
            fields.append(self._field(AADHAAR_NUMBER, f"{digits[0:4]} {digits[4:8]} {digits[8:12]}"))

        for match in PAN_TOKEN_PATTERN.finditer(text):
            pan = match.group(1).upper()
            if is_valid_pan(pan, self.category_codes):
                fields.append(self._field(PAN_NUMBER, pan))
                break

        match = MOBILE_PATTERN.search(text)
        if match:
            fields.append(self._field(MOBILE_NUMBER, match.group(1)))

        match = EMAIL_PATTERN.search(text)
        if match:
            fields.append(self._field(EMAIL_ADDRESS, match.group(1)))

        for match in PIN_PATTERN.finditer(text):
            if not match.group(1).startswith(PIN_EXCLUDED_PREFIXES):
                fields.append(self._field(PIN_CODE, match.group(1)))
                break

        value = self.first_date(DATE_PATTERN, text)
        if value:
            fields.append(self._field(BIRTH_DATE, value))

        logger.debug(f"Generic extractor found {len(fields)} fields")
        return fields

    def _field(self, field_name: str, value: str) -> ExtractedField:
        return make_field(field_name, value, self.confidence[field_name])
