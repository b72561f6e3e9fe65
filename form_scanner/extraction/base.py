"""
Extractor Base Module.

Shared pieces for the document-specific extractors:
    - DocumentExtractor abstract base with config-backed blacklist,
      confidence table, positional line limit and accepted year window
    - Common regular expressions (dates, grouped Aadhaar digits, PAN tokens)
    - Line and label helpers

Extractors are stateless after construction: every extract() call works
only on its arguments.
"""

import re
from abc import ABC, abstractmethod
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from config import get_config
from form_scanner.models.extracted_field import ExtractedField
from form_scanner.utils.helpers import contains_any

DATE_PATTERN = re.compile(r'(?<!\d)(\d{2}[/-]\d{2}[/-]\d{4})(?!\d)')
AADHAAR_GROUPED_PATTERN = re.compile(r'(?<!\d)(\d{4})[ \t-]?(\d{4})[ \t-]?(\d{4})(?!\d)')
PAN_TOKEN_PATTERN = re.compile(r'(?<![A-Za-z0-9])([A-Za-z]{5}\d{4}[A-Za-z])(?![A-Za-z0-9])')
YEAR_PATTERN = re.compile(r'\d{4}')
DEVANAGARI = re.compile(r'[ऀ-ॿ]+')

RELATION_WORDS = ("father", "mother", "husband", "guardian", "पिता", "पति")
RELATION_PREFIXES = re.compile(r'^\s*(?:S|D|W|C)\s*/\s*O\b', re.IGNORECASE)

DEFAULT_CATEGORY_CODES = ("P", "C", "H", "F", "A", "T", "B", "L", "J", "G")


class DocumentExtractor(ABC):
    """
    Base class for a field extraction strategy.

    Subclasses set ``name`` (used in logs and fallback reports),
    ``document_key`` (the blacklist/confidence section in settings.yaml),
    ``variant`` (the confidence sub-table) and ``DEFAULT_CONFIDENCE``.

    Attributes:
        blacklist: Lower-case boilerplate phrases never accepted as names.
        confidence: Strategy name to confidence score.
        line_limit: How many leading lines the positional strategy scans.
        year_range: Inclusive (min, max) year accepted in dates.
    """

    name = "base"
    document_key = ""
    variant = ""
    DEFAULT_CONFIDENCE: Dict[str, int] = {}

    def __init__(
        self,
        blacklist: Optional[Iterable[str]] = None,
        confidence: Optional[Dict[str, int]] = None,
        line_limit: Optional[int] = None,
        year_range: Optional[Tuple[int, int]] = None
    ) -> None:
        if blacklist is None:
            blacklist = get_config(f"extraction.blacklists.{self.document_key}", []) or []
        self.blacklist = tuple(phrase.lower() for phrase in blacklist)

        table = dict(self.DEFAULT_CONFIDENCE)
        if confidence is None:
            key = f"extraction.confidence.{self.document_key}"
            if self.variant:
                key = f"{key}.{self.variant}"
            confidence = get_config(key, {}) or {}
        table.update(confidence)
        self.confidence = table

        self.line_limit = line_limit or get_config("extraction.positional_line_limit", 10)

        if year_range is None:
            year_range = (
                get_config("extraction.year_range.min", 1920),
                get_config("extraction.year_range.max", 2024),
            )
        self.year_range = year_range

    @abstractmethod
    def extract(self, text: str, lines: Sequence[str]) -> List[ExtractedField]:
        """
        Extract fields from one OCR pass.

        Args:
            text: Raw OCR text.
            lines: The same text split into trimmed, non-empty lines.

        Returns:
            Fields in discovery order. May be empty.
        """

    def is_blacklisted(self, candidate: str) -> bool:
        return contains_any(candidate, self.blacklist)

    def year_in_range(self, value: str) -> bool:
        """Check the first four-digit run of a date against the year window."""
        match = YEAR_PATTERN.search(value)
        if not match:
            return False
        low, high = self.year_range
        return low <= int(match.group()) <= high

    def first_date(self, pattern: re.Pattern, text: str) -> Optional[str]:
        """Return group 1 of the first match of pattern whose year is accepted."""
        for match in pattern.finditer(text):
            value = match.group(1)
            if self.year_in_range(value):
                return value
        return None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


def grouped_aadhaar_numbers(text: str) -> List[str]:
    """
    Find 12-digit numbers written as three groups of four.

    All-zero readings are dropped.

    Example:
        >>> grouped_aadhaar_numbers("UID 1234-5678-9012")
        ['123456789012']
    """
    found = []
    for match in AADHAAR_GROUPED_PATTERN.finditer(text):
        digits = ''.join(match.groups())
        if digits.strip('0'):
            found.append(digits)
    return found


def is_valid_pan(pan: str, category_codes: Sequence[str] = DEFAULT_CATEGORY_CODES) -> bool:
    """
    Structural PAN check: ten characters with a known holder category.

    The fourth character encodes the holder type (P individual,
    C company, H HUF, F firm, ...). Words that happen to have the
    letters/digits/letter shape almost never carry a valid code there.
    """
    if len(pan) != 10:
        return False
    return pan[3].upper() in category_codes


def has_relation_label(text: str) -> bool:
    """True for text naming a relative (father, husband, S/O ...)."""
    return contains_any(text, RELATION_WORDS) or bool(RELATION_PREFIXES.match(text))


def line_prefix(text: str, position: int) -> str:
    """Text between the start of the line containing position and position."""
    start = text.rfind('\n', 0, position) + 1
    return text[start:position]


def english_only(line: str) -> str:
    """Drop Devanagari runs from a mixed-script line and tidy whitespace."""
    return re.sub(r'\s+', ' ', DEVANAGARI.sub(' ', line)).strip()


def label_value(line: str, label: re.Pattern) -> Optional[str]:
    """
    Split a "Label: value" line.

    Returns:
        The value after the label ('' when the line holds only the label),
        or None when the label does not occur in the line.

    Example:
        >>> label_value("Name : RAHUL KUMAR", NAME_LABEL)
        'RAHUL KUMAR'
    """
    match = label.search(line)
    if not match:
        return None
    return line[match.end():].strip(" \t:-/|.")


def labeled_values(
    lines: Sequence[str],
    label: re.Pattern,
    skip_relations: bool = False
) -> Iterator[Tuple[int, str]]:
    """
    Yield values written after a label, on the same line or the line below.

    Args:
        lines: Document lines.
        label: Compiled label pattern.
        skip_relations: Ignore label lines that mention a relative, so that
                        "Father's Name" does not satisfy a "Name" label.

    Yields:
        (index of the line holding the value, value) in document order.
    """
    for i, line in enumerate(lines):
        if skip_relations and has_relation_label(line):
            continue
        value = label_value(line, label)
        if value is None:
            continue
        value = english_only(value)
        if value:
            yield i, value
        elif i + 1 < len(lines):
            yield i + 1, english_only(lines[i + 1])
