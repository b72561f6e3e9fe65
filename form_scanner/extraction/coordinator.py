"""
Extraction Coordinator Module.

Routes one OCR pass to the extractors for its document type:

    1. Split the text into trimmed, non-empty lines
    2. Classify the text (Aadhaar / PAN / UNKNOWN)
    3. Try each strategy of that type's fallback chain in order; the first
       strategy that completes without raising wins, even with no fields
    4. Canonicalise values, tag schema sections, drop repeated names

A failing strategy is recorded as an ExtractionAttempt with its error and
logged, never propagated. When the whole chain fails the result is empty.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from form_scanner.classification import DocumentClassifier
from form_scanner.models.document_type import DocumentType
from form_scanner.models.extracted_field import ExtractedField
from form_scanner.models.form_schema import FormSchema
from form_scanner.utils.helpers import split_lines
from form_scanner.utils.logger import get_logger
from form_scanner.validation.formatters import format_field_value
from .aadhaar import AadhaarExtractor, AdvancedAadhaarExtractor, ImprovedAadhaarExtractor
from .base import DocumentExtractor
from .generic import GenericExtractor
from .pan import ImprovedPANExtractor, PANExtractor

logger = get_logger(__name__)


def default_chains() -> Dict[DocumentType, List[DocumentExtractor]]:
    """Fallback chains, most tolerant strategy first."""
    return {
        DocumentType.AADHAAR: [
            AdvancedAadhaarExtractor(),
            ImprovedAadhaarExtractor(),
            AadhaarExtractor(),
        ],
        DocumentType.PAN: [
            ImprovedPANExtractor(),
            PANExtractor(),
        ],
        DocumentType.UNKNOWN: [
            GenericExtractor(),
        ],
    }


@dataclass
class ExtractionAttempt:
    """
    Outcome of running one strategy.

    Attributes:
        strategy: Strategy name.
        fields: Fields produced (empty when the strategy failed).
        error: Error text when the strategy raised, else None.
    """
    strategy: str
    fields: List[ExtractedField] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass
class ExtractionOutcome:
    """
    Result of one coordinated extraction pass.

    Attributes:
        document_type: Classification of the text.
        fields: Final fields in discovery order.
        strategy: Name of the winning strategy, None when every one failed.
        attempts: Every strategy tried, in order.
    """
    document_type: DocumentType
    fields: List[ExtractedField] = field(default_factory=list)
    strategy: Optional[str] = None
    attempts: List[ExtractionAttempt] = field(default_factory=list)

    @property
    def fallback_used(self) -> bool:
        return len(self.attempts) > 1

    def to_dict(self) -> Dict[str, object]:
        return {
            'document_type': self.document_type.value,
            'strategy': self.strategy,
            'fields': [f.to_dict() for f in self.fields],
            'failed_strategies': [
                {'strategy': a.strategy, 'error': a.error}
                for a in self.attempts if not a.succeeded
            ],
        }


def run_strategy(extractor: DocumentExtractor, text: str, lines: Sequence[str]) -> ExtractionAttempt:
    """
    Run one strategy and turn any fault into a failed attempt.

    Args:
        extractor: Strategy to run.
        text: Raw OCR text.
        lines: Trimmed non-empty lines of text.

    Returns:
        ExtractionAttempt carrying either fields or the error.
    """
    try:
        fields = list(extractor.extract(text, lines))
    except Exception as e:
        logger.warning(f"Strategy {extractor.name} failed, falling back: {e}")
        return ExtractionAttempt(strategy=extractor.name, error=str(e))
    return ExtractionAttempt(strategy=extractor.name, fields=fields)


class ExtractionCoordinator:
    """
    Classifies OCR text and runs the matching fallback chain.

    Holds only read-only collaborators, so a single coordinator may be
    shared between scanning sessions.

    Example:
        >>> coordinator = ExtractionCoordinator()
        >>> outcome = coordinator.extract("Mobile 9876543210")
        >>> outcome.document_type, [f.value for f in outcome.fields]
        (<DocumentType.UNKNOWN: 'unknown'>, ['9876543210'])
    """

    def __init__(
        self,
        classifier: Optional[DocumentClassifier] = None,
        chains: Optional[Dict[DocumentType, List[DocumentExtractor]]] = None,
        schema: Optional[FormSchema] = None
    ) -> None:
        self.classifier = classifier or DocumentClassifier()
        self.chains = default_chains()
        if chains:
            self.chains.update(chains)
        self.schema = schema or FormSchema.from_config()

        logger.debug(
            "Extraction chains: " + "; ".join(
                f"{doc_type}: {[e.name for e in chain]}" for doc_type, chain in self.chains.items()
            )
        )

    def extract(self, text: str) -> ExtractionOutcome:
        """
        Run a full extraction pass over one OCR text.

        Args:
            text: Raw OCR text of one document image.

        Returns:
            ExtractionOutcome with classification, fields and attempts.
        """
        text = text or ""
        lines = split_lines(text)
        document_type = self.classifier.classify(text)
        outcome = ExtractionOutcome(document_type=document_type)

        for extractor in self.chains.get(document_type, []):
            attempt = run_strategy(extractor, text, lines)
            outcome.attempts.append(attempt)
            if attempt.succeeded:
                outcome.strategy = attempt.strategy
                outcome.fields = self._finalize(attempt.fields)
                break
        else:
            logger.warning(f"All {document_type} strategies failed; no fields extracted")

        logger.info(
            f"Classified as {document_type}; {len(outcome.fields)} fields "
            f"via {outcome.strategy or 'none'}"
        )
        return outcome

    def extract_fields(self, text: str) -> List[ExtractedField]:
        """Run a pass and return only the fields."""
        return self.extract(text).fields

    def _finalize(self, fields: Sequence[ExtractedField]) -> List[ExtractedField]:
        finalized: List[ExtractedField] = []
        seen = set()
        for f in fields:
            if f.field_name in seen:
                logger.debug(f"Dropping repeated {f.field_name} reading: {f.value!r}")
                continue
            seen.add(f.field_name)
            value = format_field_value(f.field_name, f.value)
            finalized.append(f.with_value(value).with_section(self.schema.section_of(f.field_name)))
        return finalized
