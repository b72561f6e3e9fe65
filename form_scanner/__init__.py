"""
Identity Document Form Scanner - Source Package.

Turns raw OCR text of Indian identity documents (Aadhaar, PAN) into
labeled, confidence-scored form fields.

Modules:
    - models: Extracted fields, document types and the form schema
    - classification: Keyword/pattern document classifier
    - extraction: Per-document extractors and the fallback coordinator
    - accumulation: Merging fields across scans
    - validation: Field validators, formatters and form readiness

Architecture:
    OCR text → Classifier → Extractor chain → Formatter → Accumulator
                                                            ↓
                                                    Validation / Form
"""

__version__ = "1.0.0"

__all__ = [
    'models',
    'classification',
    'extraction',
    'accumulation',
    'validation',
    'utils'
]
