"""
Document Classifier Module.

Scores OCR text against two competing rule sets, Aadhaar and PAN, and
returns the better-supported document type or UNKNOWN.

Scoring:
    1. Lower-case the text once.
    2. Every keyword found as a substring adds its weight to its type.
    3. A grouped 12-digit numeral adds a bonus to Aadhaar; a
       five-letter/four-digit/one-letter token adds a bonus to PAN.
    4. A type wins only if it reaches its own threshold and strictly beats
       the other score. Anything else is UNKNOWN.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, Optional

from config import get_config
from form_scanner.models.document_type import DocumentType
from form_scanner.utils.exceptions import ConfigurationError
from form_scanner.utils.logger import get_logger

logger = get_logger(__name__)

AADHAAR_NUMBER_PATTERN = re.compile(r'\d{4}[\s-]?\d{4}[\s-]?\d{4}')
PAN_NUMBER_PATTERN = re.compile(r'[A-Z]{5}\d{4}[A-Z]', re.IGNORECASE)


@dataclass
class ClassifierRules:
    """
    Keyword weights, pattern bonuses and thresholds for classification.

    Attributes:
        aadhaar_keywords: Phrase to weight for Aadhaar evidence.
        pan_keywords: Phrase to weight for PAN evidence.
        aadhaar_pattern_bonus: Added when a 12-digit grouped number appears.
        pan_pattern_bonus: Added when a PAN-shaped token appears.
        aadhaar_threshold: Minimum Aadhaar score to classify as Aadhaar.
        pan_threshold: Minimum PAN score to classify as PAN.
    """
    aadhaar_keywords: Dict[str, int] = field(default_factory=dict)
    pan_keywords: Dict[str, int] = field(default_factory=dict)
    aadhaar_pattern_bonus: int = 5
    pan_pattern_bonus: int = 5
    aadhaar_threshold: int = 5
    pan_threshold: int = 10

    @classmethod
    def from_config(cls) -> 'ClassifierRules':
        """
        Load rules from the ``classifier`` block of settings.yaml.

        Raises:
            ConfigurationError: If a keyword weight is not an integer.
        """
        rules = cls(
            aadhaar_keywords=dict(get_config("classifier.keywords.aadhaar", {}) or {}),
            pan_keywords=dict(get_config("classifier.keywords.pan", {}) or {}),
            aadhaar_pattern_bonus=get_config("classifier.bonuses.aadhaar_number_pattern", 5),
            pan_pattern_bonus=get_config("classifier.bonuses.pan_number_pattern", 5),
            aadhaar_threshold=get_config("classifier.thresholds.aadhaar", 5),
            pan_threshold=get_config("classifier.thresholds.pan", 10),
        )
        for table in ("aadhaar_keywords", "pan_keywords"):
            for phrase, weight in getattr(rules, table).items():
                if not isinstance(weight, int):
                    raise ConfigurationError(f"classifier.{table}.{phrase}", "weight must be an integer")
        return rules


@dataclass(frozen=True)
class ClassificationScores:
    """Raw evidence totals for one text."""
    aadhaar: int
    pan: int


class DocumentClassifier:
    """
    Rule-based document type classifier.

    The classifier keeps its rules read-only after construction, so one
    instance can serve concurrent callers.

    Example:
        >>> classifier = DocumentClassifier()
        >>> classifier.classify("INCOME TAX DEPARTMENT\\nABCPE1234F")
        <DocumentType.PAN: 'pan'>
    """

    def __init__(self, rules: Optional[ClassifierRules] = None) -> None:
        self.rules = rules or ClassifierRules.from_config()
        # Lower-cased once; keyword lookup is a plain substring test
        self._aadhaar_keywords = {k.lower(): w for k, w in self.rules.aadhaar_keywords.items()}
        self._pan_keywords = {k.lower(): w for k, w in self.rules.pan_keywords.items()}

    def score(self, text: str) -> ClassificationScores:
        """
        Compute Aadhaar and PAN evidence scores for text.

        Args:
            text: Raw OCR text.

        Returns:
            ClassificationScores with both totals.
        """
        text = text or ""
        lower_text = text.lower()

        aadhaar_score = sum(w for k, w in self._aadhaar_keywords.items() if k in lower_text)
        pan_score = sum(w for k, w in self._pan_keywords.items() if k in lower_text)

        if AADHAAR_NUMBER_PATTERN.search(text):
            aadhaar_score += self.rules.aadhaar_pattern_bonus
        if PAN_NUMBER_PATTERN.search(text):
            pan_score += self.rules.pan_pattern_bonus

        return ClassificationScores(aadhaar=aadhaar_score, pan=pan_score)

    def classify(self, text: str) -> DocumentType:
        """
        Classify OCR text as Aadhaar, PAN or UNKNOWN.

        Never raises; text with no evidence is UNKNOWN.

        Args:
            text: Raw OCR text.

        Returns:
            The winning DocumentType.
        """
        scores = self.score(text)
        logger.debug(f"Aadhaar score: {scores.aadhaar}, PAN score: {scores.pan}")

        if scores.aadhaar >= self.rules.aadhaar_threshold and scores.aadhaar > scores.pan:
            return DocumentType.AADHAAR
        if scores.pan >= self.rules.pan_threshold and scores.pan > scores.aadhaar:
            return DocumentType.PAN
        return DocumentType.UNKNOWN
