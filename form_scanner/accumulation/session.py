"""
Scan Session Module.

A ScanSession owns the fields gathered while one person's documents are
scanned, possibly over many OCR passes (continuous capture of the same
card, then a second card). Passes may finish on different threads, so
every update of the field set happens under one lock.
"""

import threading
from typing import Dict, Iterable, List, Optional

from form_scanner.extraction.coordinator import ExtractionCoordinator, ExtractionOutcome
from form_scanner.models.extracted_field import ExtractedField, FieldSet
from form_scanner.utils.logger import get_logger
from .accumulator import MergeResult, merge_fields

logger = get_logger(__name__)

SCAN_SEPARATOR = "\n\n--- Next Scan ---\n\n"


class ScanSession:
    """
    Accumulates fields across extraction passes.

    Attributes:
        coordinator: Extraction coordinator used by process_text().

    Example:
        >>> session = ScanSession()
        >>> result = session.process_text(aadhaar_ocr_text)
        >>> session.status_message(result)
        'Found 4 fields (+4 new)'
        >>> session.to_form_data()["adharId"]
        '1234 5678 9012'
    """

    def __init__(self, coordinator: Optional[ExtractionCoordinator] = None) -> None:
        self.coordinator = coordinator or ExtractionCoordinator()
        self._lock = threading.Lock()
        self._fields = FieldSet()
        self._scans: List[str] = []
        self._last_outcome: Optional[ExtractionOutcome] = None

    @property
    def fields(self) -> FieldSet:
        with self._lock:
            return self._fields

    @property
    def scan_count(self) -> int:
        with self._lock:
            return len(self._scans)

    @property
    def accumulated_text(self) -> str:
        """Every OCR text processed so far, separated by a scan marker."""
        with self._lock:
            return SCAN_SEPARATOR.join(self._scans)

    @property
    def last_outcome(self) -> Optional[ExtractionOutcome]:
        return self._last_outcome

    def process_text(self, text: str) -> MergeResult:
        """
        Extract fields from one OCR pass and merge them into the session.

        Extraction runs outside the lock; only the merge is serialised.

        Args:
            text: Raw OCR text.

        Returns:
            MergeResult of this pass.
        """
        outcome = self.coordinator.extract(text)
        with self._lock:
            if text and text.strip():
                self._scans.append(text)
            self._last_outcome = outcome
            return self._merge_locked(outcome.fields)

    def merge(self, fields: Iterable[ExtractedField]) -> MergeResult:
        """Merge already-extracted fields, e.g. values typed in by the user."""
        with self._lock:
            return self._merge_locked(fields)

    def _merge_locked(self, fields: Iterable[ExtractedField]) -> MergeResult:
        result = merge_fields(self._fields, fields)
        self._fields = result.fields
        if result.changed:
            logger.info(self._status(result))
        return result

    def status_message(self, result: MergeResult) -> str:
        """
        Progress text for a merge, e.g. "Found 5 fields (+2 new) (1 improved)".

        The added and improved parts appear only when non-zero.
        """
        return self._status(result)

    @staticmethod
    def _status(result: MergeResult) -> str:
        message = f"Found {len(result.fields)} fields"
        if result.added > 0:
            message += f" (+{result.added} new)"
        if result.improved > 0:
            message += f" ({result.improved} improved)"
        return message

    def reset(self) -> None:
        """Forget all fields and scans."""
        with self._lock:
            self._fields = FieldSet()
            self._scans = []
            self._last_outcome = None
        logger.debug("Scan session reset")

    def to_form_data(self) -> Dict[str, str]:
        """Return {fieldName: value} for the form and for persistence."""
        with self._lock:
            return self._fields.values()

    def __repr__(self) -> str:
        return f"ScanSession(scans={self.scan_count}, fields={len(self.fields)})"
