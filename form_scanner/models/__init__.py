"""
Data Model Module for the Form Scanner.

Defines the records that flow through the pipeline:
    - ExtractedField / FieldSet: labeled, confidence-scored values
    - DocumentType: classification result
    - FormSchema: sections and requirements of the target form
"""

from .document_type import DocumentType
from .extracted_field import (
    ExtractedField,
    FieldSet,
    make_field,
    FIELD_LABELS,
    AADHAAR_NUMBER,
    PAN_NUMBER,
    FULL_NAME,
    FATHER_NAME,
    BIRTH_DATE,
    GENDER,
    MOBILE_NUMBER,
    EMAIL_ADDRESS,
    PIN_CODE,
)
from .form_schema import FormSchema, SectionSchema, FieldSchema

__all__ = [
    'DocumentType',
    'ExtractedField',
    'FieldSet',
    'make_field',
    'FIELD_LABELS',
    'AADHAAR_NUMBER',
    'PAN_NUMBER',
    'FULL_NAME',
    'FATHER_NAME',
    'BIRTH_DATE',
    'GENDER',
    'MOBILE_NUMBER',
    'EMAIL_ADDRESS',
    'PIN_CODE',
    'FormSchema',
    'SectionSchema',
    'FieldSchema',
]
