"""
Aadhaar Card Extractors.

Three strategies of increasing tolerance, tried by the coordinator in the
order advanced -> improved -> basic:

    AadhaarExtractor          label regexes over the whole text, then a
                              positional scan for a Title Case name
    ImprovedAadhaarExtractor  line-aware labels (value on the label line or
                              the line below), upper-case names, VID aware
    AdvancedAadhaarExtractor  repairs photocopy OCR noise in digit runs
                              before running the improved strategy

Fields produced: adharId, firstName, birthdate, gender.
"""

import re
from itertools import takewhile
from typing import List, Optional, Sequence

from form_scanner.models.extracted_field import (
    AADHAAR_NUMBER,
    BIRTH_DATE,
    FULL_NAME,
    GENDER,
    ExtractedField,
    make_field,
)
from form_scanner.utils.exceptions import ExtractionError
from form_scanner.utils.helpers import split_lines
from form_scanner.utils.logger import get_logger, mask_id
from .base import (
    DATE_PATTERN,
    DocumentExtractor,
    english_only,
    grouped_aadhaar_numbers,
    has_relation_label,
    labeled_values,
    line_prefix,
)

logger = get_logger(__name__)

NAME_WORD = re.compile(r"[A-Za-z][A-Za-z.'\-]*")


def format_aadhaar_digits(digits: str) -> str:
    return f"{digits[0:4]} {digits[4:8]} {digits[8:12]}"


def extract_gender(text: str, confidence: int) -> Optional[ExtractedField]:
    """
    "female" anywhere beats "male"; neither token means no field.

    Substring order matters: every "female" also contains "male".
    """
    lower_text = text.lower()
    if "female" in lower_text:
        return make_field(GENDER, "Female", confidence)
    if "male" in lower_text:
        return make_field(GENDER, "Male", confidence)
    return None


class AadhaarExtractor(DocumentExtractor):
    """
    Basic Aadhaar extractor.

    Example:
        >>> extractor = AadhaarExtractor()
        >>> text = "Name: Rahul Kumar\\nDOB: 15/08/1990\\nMale\\n1234 5678 9012"
        >>> [f.field_name for f in extractor.extract(text, split_lines(text))]
        ['adharId', 'firstName', 'birthdate', 'gender']
    """

    name = "basic_aadhaar"
    document_key = "aadhaar"
    variant = "basic"
    DEFAULT_CONFIDENCE = {
        'id_number': 95,
        'name_label': 90,
        'name_positional': 80,
        'dob_label': 85,
        'dob_pattern': 75,
        'gender': 90,
    }

    NAME_LABEL = re.compile(
        r'(?:\bname|नाम)\s*:?\s*([A-Za-z]+(?:[ \t]+[A-Za-z]+){1,3})',
        re.IGNORECASE
    )
    POSITIONAL_NAME = re.compile(r'[A-Z][a-z]+(?:[ \t]+[A-Z][a-z]+){1,3}')
    DOB_LABEL = re.compile(
        r'(?:dob|birth|जन्म)[\s:.\-]*(\d{2}[/-]\d{2}[/-]\d{4})',
        re.IGNORECASE
    )
    YOB_LABEL = re.compile(r'year\s+of\s+birth[\s:.\-]*(\d{4})(?!\d)', re.IGNORECASE)

    def extract(self, text: str, lines: Sequence[str]) -> List[ExtractedField]:
        logger.debug(f"{self.name}: {len(lines)} lines")
        candidates = [
            self.extract_aadhaar_number(text, lines),
            self.extract_name(text, lines),
            self.extract_date_of_birth(text, lines),
            extract_gender(text, self.confidence['gender']),
        ]
        return [f for f in candidates if f is not None]

    def extract_aadhaar_number(self, text: str, lines: Sequence[str]) -> Optional[ExtractedField]:
        numbers = grouped_aadhaar_numbers(text)
        if not numbers:
            return None
        logger.debug(f"Aadhaar number found: {mask_id(numbers[0])}")
        return make_field(
            AADHAAR_NUMBER, format_aadhaar_digits(numbers[0]), self.confidence['id_number']
        )

    def is_valid_name(self, name: str, allow_upper: bool = False) -> bool:
        """
        A plausible person name: two or more words of 2-20 letters,
        no digits, no boilerplate. All-caps text longer than ten characters
        is taken for a heading unless allow_upper is set.
        """
        words = name.split()
        if len(words) < 2:
            return False
        if self.is_blacklisted(name):
            return False
        if any(len(w) < 2 or len(w) > 20 for w in words):
            return False
        if any(ch.isdigit() for ch in name):
            return False
        if not allow_upper and name == name.upper() and len(name) > 10:
            return False
        return True

    def extract_name(self, text: str, lines: Sequence[str]) -> Optional[ExtractedField]:
        for match in self.NAME_LABEL.finditer(text):
            if has_relation_label(line_prefix(text, match.start())):
                continue
            name = match.group(1).strip()
            if self.is_valid_name(name):
                logger.debug(f"Name found via label: {name}")
                return make_field(FULL_NAME, name, self.confidence['name_label'])

        for line in lines[:self.line_limit]:
            if self.is_blacklisted(line) or re.search(r'\d{3,}', line):
                continue
            match = self.POSITIONAL_NAME.search(line)
            if match and self.is_valid_name(match.group()):
                logger.debug(f"Name candidate from line: {match.group()}")
                return make_field(FULL_NAME, match.group(), self.confidence['name_positional'])

        logger.debug("No valid name found")
        return None

    def extract_date_of_birth(self, text: str, lines: Sequence[str]) -> Optional[ExtractedField]:
        for pattern in (self.DOB_LABEL, self.YOB_LABEL):
            value = self.first_date(pattern, text)
            if value:
                return make_field(BIRTH_DATE, value, self.confidence['dob_label'])

        value = self.first_date(DATE_PATTERN, text)
        if value:
            return make_field(BIRTH_DATE, value, self.confidence['dob_pattern'])
        return None


class ImprovedAadhaarExtractor(AadhaarExtractor):
    """
    Line-aware Aadhaar extractor.

    Differences from the basic strategy:
        - a bare "Name" / "नाम" label may carry its value on the next line
        - printed upper-case names are accepted positionally
        - a number standing alone on its line is preferred, and numbers
          belonging to a 16-digit VID are skipped
        - issue/download dates are not mistaken for a birth date
    """

    name = "improved_aadhaar"
    variant = "improved"
    DEFAULT_CONFIDENCE = {
        'id_number_line': 95,
        'id_number': 90,
        'name_label': 92,
        'name_positional': 82,
        'dob_label': 90,
        'dob_pattern': 75,
        'gender': 92,
    }

    NAME_LABEL_LINE = re.compile(
        r'(?:^|(?<=[\s/|]))(?:(?:नाम\s*[/|]\s*)?name\b|नाम)',
        re.IGNORECASE
    )
    STANDALONE_NUMBER = re.compile(r'^(\d{4})[ \t-]?(\d{4})[ \t-]?(\d{4})$')
    ISOLATED_NUMBER = re.compile(
        r'(?<!\d)(?<!\d[ \t-])(\d{4})[ \t-]?(\d{4})[ \t-]?(\d{4})(?![ \t-]?\d)'
    )
    VID_NUMBER = re.compile(
        r'\bVID\b\s*[:\-]?\s*\d{4}[ \t-]?\d{4}[ \t-]?\d{4}[ \t-]?\d{4}',
        re.IGNORECASE
    )
    DOB_LABEL = re.compile(
        r'(?:\bd[o0]b\b|\bd\.\s?o\.\s?b\.?|date\s+of\s+birth|\bbirth|जन्म\s*तिथि|जन्म)'
        r'[\s:.\-/]*(\d{2}[/-]\d{2}[/-]\d{4})',
        re.IGNORECASE
    )
    YOB_LABEL = re.compile(
        r'(?:year\s+of\s+birth|\byob\b|जन्म\s*वर्ष)[\s:.\-/]*(\d{4})(?!\d)',
        re.IGNORECASE
    )
    OTHER_DATE_LABEL = re.compile(r'(?:download|issue|print)\w*\s*[:\-.]?\s*date', re.IGNORECASE)

    def extract_aadhaar_number(self, text: str, lines: Sequence[str]) -> Optional[ExtractedField]:
        # Blank out labelled VIDs so a number sharing their line is still read
        candidate_lines = [self.VID_NUMBER.sub(' ', ln) for ln in lines]

        for pattern, key in ((self.STANDALONE_NUMBER, 'id_number_line'),
                             (self.ISOLATED_NUMBER, 'id_number')):
            for line in candidate_lines:
                for match in pattern.finditer(line):
                    digits = ''.join(match.groups())
                    if digits.strip('0'):
                        logger.debug(f"Aadhaar number found ({key}): {mask_id(digits)}")
                        return make_field(
                            AADHAAR_NUMBER, format_aadhaar_digits(digits), self.confidence[key]
                        )
        return None

    def _leading_name(self, value: str) -> Optional[str]:
        """Longest valid name (4 words down to 2) at the start of value."""
        words = list(takewhile(NAME_WORD.fullmatch, value.split()))
        for count in range(min(len(words), 4), 1, -1):
            candidate = ' '.join(words[:count])
            if self.is_valid_name(candidate, allow_upper=True):
                return candidate
        return None

    def extract_name(self, text: str, lines: Sequence[str]) -> Optional[ExtractedField]:
        for _, value in labeled_values(lines, self.NAME_LABEL_LINE, skip_relations=True):
            name = self._leading_name(value)
            if name:
                logger.debug(f"Name found via label: {name}")
                return make_field(FULL_NAME, name, self.confidence['name_label'])

        for line in lines[:self.line_limit]:
            if self.is_blacklisted(line) or has_relation_label(line):
                continue
            if ':' in line or any(ch.isdigit() for ch in line):
                continue
            candidate = english_only(line)
            if not re.fullmatch(r"[A-Za-z][A-Za-z.' \-]*", candidate):
                continue
            if len(candidate.split()) > 4:
                continue
            if self.is_valid_name(candidate, allow_upper=True):
                logger.debug(f"Name candidate from line: {candidate}")
                return make_field(FULL_NAME, candidate, self.confidence['name_positional'])

        logger.debug("No valid name found")
        return None

    def extract_date_of_birth(self, text: str, lines: Sequence[str]) -> Optional[ExtractedField]:
        for pattern in (self.DOB_LABEL, self.YOB_LABEL):
            value = self.first_date(pattern, text)
            if value:
                return make_field(BIRTH_DATE, value, self.confidence['dob_label'])

        for i, line in enumerate(lines):
            previous = lines[i - 1] if i > 0 else ""
            if self.OTHER_DATE_LABEL.search(line) or self.OTHER_DATE_LABEL.search(previous):
                continue
            value = self.first_date(DATE_PATTERN, line)
            if value:
                return make_field(BIRTH_DATE, value, self.confidence['dob_pattern'])
        return None


DEVANAGARI_DIGITS = str.maketrans("०१२३४५६७८९", "0123456789")
OCR_DIGIT_CONFUSIONS = str.maketrans({
    'O': '0', 'o': '0', 'D': '0', 'Q': '0',
    'I': '1', 'l': '1', '|': '1',
    'S': '5', 'B': '8', 'Z': '2',
})


TOKEN_SEPARATORS = re.compile(r'([:/.,\-])')


def repair_digit_token(token: str) -> str:
    """
    Replace letters misread for digits in a token that is mostly digits.

    The token is split on punctuation first. Pieces without any digit
    (labels such as "DOB" glued to their value) are never translated, and
    the remaining pieces are repaired only when digits dominate them.

    Example:
        >>> repair_digit_token("S67B")
        "5678"
        >>> repair_digit_token("DOB:15/O8/1990")
        "DOB:15/08/1990"
    """
    pieces = TOKEN_SEPARATORS.split(token)
    numeric = [i for i, piece in enumerate(pieces) if any(ch.isdigit() for ch in piece)]
    alnum = [ch for i in numeric for ch in pieces[i] if ch.isalnum() or ch == '|']
    digits = sum(ch.isdigit() for ch in alnum)
    if len(alnum) < 4 or digits * 2 < len(alnum):
        return token
    if any(not ch.isdigit() and ch not in "OoDQIl|SBZ" for ch in alnum):
        return token
    for i in numeric:
        pieces[i] = pieces[i].translate(OCR_DIGIT_CONFUSIONS)
    return ''.join(pieces)


def normalize_photocopy_text(text: str) -> str:
    """Convert Devanagari digits and repair digit runs line by line."""
    text = text.translate(DEVANAGARI_DIGITS)
    repaired = []
    for line in text.splitlines():
        parts = re.split(r'(\s+)', line)
        repaired.append(''.join(repair_digit_token(p) if p.strip() else p for p in parts))
    return '\n'.join(repaired)


class AdvancedAadhaarExtractor(ImprovedAadhaarExtractor):
    """
    Aadhaar extractor tuned for photocopies and low-contrast scans.

    Photocopied cards come back from OCR with digits read as look-alike
    letters ("1O23 4S67 89I2") and with Devanagari numerals. The text is
    repaired first and then read with the improved strategy.
    """

    name = "advanced_aadhaar"

    def extract(self, text: str, lines: Sequence[str]) -> List[ExtractedField]:
        normalized = normalize_photocopy_text(text)
        normalized_lines = split_lines(normalized)
        if not normalized_lines:
            raise ExtractionError(self.name, "no text left after normalisation")
        if normalized != text:
            logger.debug(f"{self.name}: repaired OCR digit confusions")
        return super().extract(normalized, normalized_lines)
