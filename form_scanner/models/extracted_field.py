"""
Extracted Field Data Classes.

This module defines the data structures produced by the extraction
pipeline: a single labeled, confidence-scored field and the ordered
field set that extractors emit and the accumulator merges.
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, Iterator, List, Optional
import json

from form_scanner.utils.exceptions import DuplicateFieldError

# Field-name vocabulary shared with persistence and UI layers
AADHAAR_NUMBER = "adharId"
PAN_NUMBER = "panNumber"
FULL_NAME = "firstName"
FATHER_NAME = "fatherName"
BIRTH_DATE = "birthdate"
GENDER = "gender"
MOBILE_NUMBER = "mobileNumber"
EMAIL_ADDRESS = "emailAddress"
PIN_CODE = "zip"

FIELD_LABELS: Dict[str, str] = {
    AADHAAR_NUMBER: "Aadhaar Number",
    PAN_NUMBER: "PAN Number",
    FULL_NAME: "Full Name",
    FATHER_NAME: "Father's Name",
    BIRTH_DATE: "Date of Birth",
    GENDER: "Gender",
    MOBILE_NUMBER: "Mobile Number",
    EMAIL_ADDRESS: "Email Address",
    PIN_CODE: "PIN Code",
}


@dataclass(frozen=True)
class ExtractedField:
    """
    A single piece of data read from a document.

    Attributes:
        field_name: Stable machine key (e.g. "adharId").
        field_label: Human-readable display label.
        value: Canonicalized value.
        confidence: 0-100, set by the extraction strategy that produced it.
        section: Optional display grouping hint.

    Example:
        >>> ExtractedField("gender", "Gender", "Male", 90)
        ExtractedField(gender='Male', confidence=90)
    """
    field_name: str
    field_label: str
    value: str
    confidence: int
    section: str = ""

    def __post_init__(self):
        if not 0 <= self.confidence <= 100:
            raise ValueError(
                f"Confidence for {self.field_name} out of range: {self.confidence}"
            )

    def with_value(self, value: str) -> 'ExtractedField':
        return replace(self, value=value)

    def with_section(self, section: str) -> 'ExtractedField':
        return replace(self, section=section)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to the dictionary shape consumed by UI and persistence.

        Returns:
            Dictionary keyed with the external (camelCase) names.
        """
        return {
            'fieldName': self.field_name,
            'fieldLabel': self.field_label,
            'value': self.value,
            'confidence': self.confidence,
            'section': self.section,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ExtractedField':
        """
        Create an ExtractedField from its dictionary form.

        Args:
            data: Dictionary as produced by to_dict().

        Returns:
            ExtractedField instance.
        """
        name = data['fieldName']
        return cls(
            field_name=name,
            field_label=data.get('fieldLabel') or FIELD_LABELS.get(name, name),
            value=data.get('value', ''),
            confidence=int(data.get('confidence', 0)),
            section=data.get('section', ''),
        )

    def __repr__(self) -> str:
        return f"ExtractedField({self.field_name}={self.value!r}, confidence={self.confidence})"


def make_field(field_name: str, value: str, confidence: int) -> ExtractedField:
    """Build a field using the standard label for its name."""
    return ExtractedField(
        field_name=field_name,
        field_label=FIELD_LABELS.get(field_name, field_name),
        value=value,
        confidence=confidence,
    )


class FieldSet:
    """
    Ordered mapping from field name to ExtractedField.

    Iteration follows discovery order so the UI can list fields the way
    they were found. At most one field per name is ever held; constructing
    a set from a sequence with a repeated name raises DuplicateFieldError.

    Example:
        >>> fs = FieldSet([make_field("gender", "Male", 90)])
        >>> fs.get("gender").value
        'Male'
    """

    def __init__(self, fields: Optional[Iterable[ExtractedField]] = None) -> None:
        self._fields: Dict[str, ExtractedField] = {}
        for f in fields or ():
            if f.field_name in self._fields:
                raise DuplicateFieldError(f.field_name)
            self._fields[f.field_name] = f

    def get(self, field_name: str) -> Optional[ExtractedField]:
        return self._fields.get(field_name)

    def fields(self) -> List[ExtractedField]:
        return list(self._fields.values())

    def names(self) -> List[str]:
        return list(self._fields.keys())

    def values(self) -> Dict[str, str]:
        """Return {field_name: value}, the blob handed to persistence."""
        return {name: f.value for name, f in self._fields.items()}

    def confidences(self) -> Dict[str, int]:
        return {name: f.confidence for name, f in self._fields.items()}

    def to_list(self) -> List[Dict[str, Any]]:
        return [f.to_dict() for f in self._fields.values()]

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_list(), indent=indent, ensure_ascii=False)

    def __contains__(self, field_name: object) -> bool:
        return field_name in self._fields

    def __iter__(self) -> Iterator[ExtractedField]:
        return iter(list(self._fields.values()))

    def __len__(self) -> int:
        return len(self._fields)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldSet):
            return NotImplemented
        return self.fields() == other.fields()

    def __repr__(self) -> str:
        return f"FieldSet({', '.join(self.names())})"
