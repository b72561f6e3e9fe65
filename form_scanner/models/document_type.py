"""Document types recognised by the classifier."""

from enum import Enum


class DocumentType(Enum):
    """
    Classification result for one OCR pass.

    UNKNOWN is an expected outcome, not a failure: it routes the text to
    the generic extractor.
    """
    AADHAAR = "aadhaar"
    PAN = "pan"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.name
