"""
Extraction Module for the Form Scanner.

This module provides:
    - Aadhaar extractors (basic, improved, photocopy-tolerant advanced)
    - PAN extractors (basic, improved)
    - A pattern-only generic extractor for unclassified text
    - The coordinator that classifies text and runs the fallback chain
"""

from .base import DocumentExtractor
from .aadhaar import AadhaarExtractor, ImprovedAadhaarExtractor, AdvancedAadhaarExtractor
from .pan import PANExtractor, ImprovedPANExtractor
from .generic import GenericExtractor
from .coordinator import (
    ExtractionCoordinator,
    ExtractionAttempt,
    ExtractionOutcome,
    run_strategy,
)

__all__ = [
    'DocumentExtractor',
    'AadhaarExtractor',
    'ImprovedAadhaarExtractor',
    'AdvancedAadhaarExtractor',
    'PANExtractor',
    'ImprovedPANExtractor',
    'GenericExtractor',
    'ExtractionCoordinator',
    'ExtractionAttempt',
    'ExtractionOutcome',
    'run_strategy',
]
