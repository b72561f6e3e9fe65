"""
PAN Card Extractors.

PAN cards print the holder's name and father's name in capitals, one per
line, above the date of birth and the PAN itself. Two strategies:

    PANExtractor          regexes over the whole text plus an upper-case
                          line scan for the holder name
    ImprovedPANExtractor  line-aware labels (value on the label line or the
                          next one), bilingual labels, positional name only
                          above the father's-name block

Names are reported title-cased. Father's name is only ever taken from an
explicit label.
"""

import re
from itertools import takewhile
from typing import Iterable, List, Optional, Sequence

from config import get_config
from form_scanner.models.extracted_field import (
    BIRTH_DATE,
    FATHER_NAME,
    FULL_NAME,
    PAN_NUMBER,
    ExtractedField,
    make_field,
)
from form_scanner.utils.exceptions import ExtractionError
from form_scanner.utils.helpers import title_case
from form_scanner.utils.logger import get_logger
from .base import (
    DATE_PATTERN,
    DEFAULT_CATEGORY_CODES,
    PAN_TOKEN_PATTERN,
    DocumentExtractor,
    english_only,
    has_relation_label,
    is_valid_pan,
    labeled_values,
    line_prefix,
)

logger = get_logger(__name__)

NAME_RUN = r"([A-Za-z]+(?:[ \t]+[A-Za-z]+){1,3})"
NAME_WORD = re.compile(r"[A-Za-z][A-Za-z.'\-]*")


class PANExtractor(DocumentExtractor):
    """
    Basic PAN card extractor.

    Example:
        >>> extractor = PANExtractor()
        >>> text = "INCOME TAX DEPARTMENT\\nRAHUL KUMAR\\nABCPE1234F"
        >>> [(f.field_name, f.value) for f in extractor.extract(text, split_lines(text))]
        [('panNumber', 'ABCPE1234F'), ('firstName', 'Rahul Kumar')]
    """

    name = "basic_pan"
    document_key = "pan"
    variant = "basic"
    DEFAULT_CONFIDENCE = {
        'id_number': 95,
        'name_label': 85,
        'name_positional': 80,
        'father_label': 85,
        'dob_label': 85,
        'dob_pattern': 75,
    }

    NAME_LABEL = re.compile(r'\bname[ \t]*:[ \t]*' + NAME_RUN, re.IGNORECASE)
    FATHER_LABEL = re.compile(
        r"father(?:'?s)?(?:[ \t]+name)?[ \t]*[:\-]?[ \t]*" + NAME_RUN,
        re.IGNORECASE
    )
    DOB_LABEL = re.compile(
        r'(?:\bdob\b|date\s+of\s+birth)[\s:.\-/]*(\d{2}[/-]\d{2}[/-]\d{4})',
        re.IGNORECASE
    )

    def __init__(self, category_codes: Optional[Iterable[str]] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        if category_codes is None:
            category_codes = get_config("extraction.pan_category_codes", DEFAULT_CATEGORY_CODES)
        self.category_codes = tuple(code.upper() for code in category_codes)

    def extract(self, text: str, lines: Sequence[str]) -> List[ExtractedField]:
        logger.debug(f"{self.name}: {len(lines)} lines")
        candidates = [
            self.extract_pan_number(text, lines),
            self.extract_name(text, lines),
            self.extract_father_name(text, lines),
            self.extract_date_of_birth(text, lines),
        ]
        return [f for f in candidates if f is not None]

    def is_valid_name(self, name: str) -> bool:
        words = name.split()
        if not 2 <= len(words) <= 4:
            return False
        if any(len(w) < 2 or len(w) > 20 for w in words):
            return False
        if any(ch.isdigit() for ch in name):
            return False
        return not self.is_blacklisted(name)

    def extract_pan_number(self, text: str, lines: Sequence[str]) -> Optional[ExtractedField]:
        for match in PAN_TOKEN_PATTERN.finditer(text):
            pan = match.group(1).upper()
            if is_valid_pan(pan, self.category_codes):
                logger.debug(f"PAN found: {pan}")
                return make_field(PAN_NUMBER, pan, self.confidence['id_number'])
            logger.debug(f"Rejected PAN-shaped token with category '{pan[3]}': {pan}")
        return None

    def extract_name(self, text: str, lines: Sequence[str]) -> Optional[ExtractedField]:
        for match in self.NAME_LABEL.finditer(text):
            if has_relation_label(line_prefix(text, match.start())):
                continue
            name = match.group(1).strip()
            if self.is_valid_name(name):
                return make_field(FULL_NAME, title_case(name), self.confidence['name_label'])

        for line in lines[:self.line_limit]:
            if self.is_blacklisted(line) or PAN_TOKEN_PATTERN.search(line):
                continue
            if not 5 <= len(line) <= 40:
                continue
            if line != line.upper() or not re.fullmatch(r'[A-Za-z ]+', line):
                continue
            if self.is_valid_name(line):
                logger.debug(f"Name candidate from line: {line}")
                return make_field(FULL_NAME, title_case(line), self.confidence['name_positional'])
        return None

    def extract_father_name(self, text: str, lines: Sequence[str]) -> Optional[ExtractedField]:
        for match in self.FATHER_LABEL.finditer(text):
            name = match.group(1).strip()
            if self.is_valid_name(name):
                return make_field(FATHER_NAME, title_case(name), self.confidence['father_label'])
        return None

    def extract_date_of_birth(self, text: str, lines: Sequence[str]) -> Optional[ExtractedField]:
        value = self.first_date(self.DOB_LABEL, text)
        if value:
            return make_field(BIRTH_DATE, value, self.confidence['dob_label'])
        value = self.first_date(DATE_PATTERN, text)
        if value:
            return make_field(BIRTH_DATE, value, self.confidence['dob_pattern'])
        return None


class ImprovedPANExtractor(PANExtractor):
    """
    Line-aware PAN extractor.

    Handles the newer card layout where labels such as "नाम / Name" and
    "पिता का नाम / Father's Name" sit on their own line with the value
    printed underneath.
    """

    name = "improved_pan"
    variant = "improved"
    DEFAULT_CONFIDENCE = {
        'id_number_line': 95,
        'id_number': 92,
        'name_label': 90,
        'name_positional': 82,
        'father_label': 88,
        'dob_label': 90,
        'dob_pattern': 75,
    }

    NAME_LABEL_LINE = re.compile(
        r'(?:^|(?<=[\s/|]))(?:(?:नाम\s*[/|]\s*)?name\b|नाम)',
        re.IGNORECASE
    )
    FATHER_LABEL_LINE = re.compile(
        r"(?:पिता\s*का\s*नाम\s*[/|]?\s*)?father(?:'?s)?(?:\s+name)?|पिता\s*का\s*नाम",
        re.IGNORECASE
    )
    STANDALONE_PAN = re.compile(r'^([A-Za-z]{5}\d{4}[A-Za-z])$')
    DOB_LABEL = re.compile(
        r'(?:\bd[o0]b\b|\bd\.\s?o\.\s?b\.?|date\s+of\s+birth|जन्म\s*(?:की\s*)?(?:तिथि|तारीख))'
        r'[\s:.\-/]*(\d{2}[/-]\d{2}[/-]\d{4})',
        re.IGNORECASE
    )

    def extract(self, text: str, lines: Sequence[str]) -> List[ExtractedField]:
        if not lines:
            raise ExtractionError(self.name, "no text lines to read")
        return super().extract(text, lines)

    def _leading_name(self, value: str) -> Optional[str]:
        words = list(takewhile(NAME_WORD.fullmatch, value.split()))
        for count in range(min(len(words), 4), 1, -1):
            candidate = ' '.join(words[:count])
            if self.is_valid_name(candidate):
                return candidate
        return None

    def _father_label_index(self, lines: Sequence[str]) -> int:
        for i, line in enumerate(lines):
            if self.FATHER_LABEL_LINE.search(line):
                return i
        return len(lines)

    def extract_pan_number(self, text: str, lines: Sequence[str]) -> Optional[ExtractedField]:
        for line in lines:
            match = self.STANDALONE_PAN.match(line)
            if match and is_valid_pan(match.group(1), self.category_codes):
                return make_field(PAN_NUMBER, match.group(1).upper(), self.confidence['id_number_line'])

        field = super().extract_pan_number(text, lines)
        if field is None:
            return None
        return make_field(PAN_NUMBER, field.value, self.confidence['id_number'])

    def extract_name(self, text: str, lines: Sequence[str]) -> Optional[ExtractedField]:
        for _, value in labeled_values(lines, self.NAME_LABEL_LINE, skip_relations=True):
            name = self._leading_name(value)
            if name:
                logger.debug(f"Name found via label: {name}")
                return make_field(FULL_NAME, title_case(name), self.confidence['name_label'])

        # Holder name is printed above the father's name
        limit = min(self.line_limit, self._father_label_index(lines))
        for line in lines[:limit]:
            if self.is_blacklisted(line) or has_relation_label(line):
                continue
            if PAN_TOKEN_PATTERN.search(line) or any(ch.isdigit() for ch in line):
                continue
            candidate = english_only(line)
            if not 5 <= len(candidate) <= 40:
                continue
            if not re.fullmatch(r"[A-Z][A-Z.' ]*", candidate):
                continue
            if self.is_valid_name(candidate):
                logger.debug(f"Name candidate from line: {candidate}")
                return make_field(FULL_NAME, title_case(candidate), self.confidence['name_positional'])
        return None

    def extract_father_name(self, text: str, lines: Sequence[str]) -> Optional[ExtractedField]:
        for _, value in labeled_values(lines, self.FATHER_LABEL_LINE):
            name = self._leading_name(value)
            if name:
                return make_field(FATHER_NAME, title_case(name), self.confidence['father_label'])
        return None
