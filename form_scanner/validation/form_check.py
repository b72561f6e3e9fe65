"""
Form Readiness Check.

Decides whether a filled-in form can be submitted: every required field
must be present and every present required field must validate.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence

from config import get_config
from form_scanner.utils.logger import get_logger
from .validators import FieldValidator, ValidationResult

logger = get_logger(__name__)

DEFAULT_REQUIRED_FIELDS = ["adharId", "mobileNumber", "firstName"]


@dataclass
class FormCheck:
    """
    Result of a readiness check.

    Attributes:
        missing: Required fields that are blank.
        invalid: Required fields whose value failed validation.
        field_results: Validation result per checked field that had a value.
    """
    missing: List[str] = field(default_factory=list)
    invalid: List[str] = field(default_factory=list)
    field_results: Dict[str, ValidationResult] = field(default_factory=dict)

    @property
    def is_ready(self) -> bool:
        return not self.missing and not self.invalid

    def message(self) -> str:
        """User-facing summary, missing fields reported before invalid ones."""
        if self.missing:
            return f"Please fill required fields: {', '.join(self.missing)}"
        if self.invalid:
            return f"Please correct invalid fields: {', '.join(self.invalid)}"
        return "Form is ready to submit"


def check_form(
    values: Mapping[str, str],
    required_fields: Optional[Sequence[str]] = None,
    validator: Optional[FieldValidator] = None
) -> FormCheck:
    """
    Check required fields of a form.

    Args:
        values: Field name to current value.
        required_fields: Names to check. Defaults to form.required_fields.
        validator: Validator to use; a new one by default.

    Returns:
        FormCheck listing missing and invalid fields.

    Example:
        >>> check_form({"adharId": "1234 5678 9012"}).missing
        ['mobileNumber', 'firstName']
    """
    if required_fields is None:
        required_fields = get_config("form.required_fields", DEFAULT_REQUIRED_FIELDS)
    validator = validator or FieldValidator()

    check = FormCheck()
    for name in required_fields:
        value = (values.get(name) or "").strip()
        if not value:
            check.missing.append(name)
            continue
        result = validator.validate_field(name, value)
        check.field_results[name] = result
        if not result.is_valid:
            check.invalid.append(name)

    logger.debug(
        f"Form check: {len(check.missing)} missing, {len(check.invalid)} invalid"
    )
    return check
