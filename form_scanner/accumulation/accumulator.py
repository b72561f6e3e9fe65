"""
Field Accumulator Module.

Merges the fields of a new extraction pass into the fields gathered so far.

Rules:
    - A name not seen before is appended (arrival order)
    - A known name is replaced in place only when the incoming confidence
      is strictly greater
    - Everything else is kept unchanged

The merge is pure: neither input is modified. Merging a pass twice
changes nothing, and the confidence held for a name never goes down.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Union

from form_scanner.models.extracted_field import ExtractedField, FieldSet
from form_scanner.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class MergeResult:
    """
    Merged fields plus progress counts.

    Attributes:
        fields: The merged field set.
        added: Names that were not present before.
        improved: Names replaced by a higher-confidence reading.
    """
    fields: FieldSet
    added: int = 0
    improved: int = 0

    @property
    def changed(self) -> bool:
        return bool(self.added or self.improved)


def merge_fields(
    current: Union[FieldSet, Iterable[ExtractedField]],
    incoming: Iterable[ExtractedField]
) -> MergeResult:
    """
    Merge incoming fields into current.

    Args:
        current: Fields accumulated so far.
        incoming: Fields from the latest pass.

    Returns:
        MergeResult with the new field set and added/improved counts.

    Raises:
        DuplicateFieldError: If current holds two fields with one name.

    Example:
        >>> old = FieldSet([make_field("firstName", "Rahul Kumar", 80)])
        >>> result = merge_fields(old, [make_field("firstName", "Rahul Kumar", 92)])
        >>> result.improved, result.fields.get("firstName").confidence
        (1, 92)
    """
    if not isinstance(current, FieldSet):
        current = FieldSet(current)

    merged: Dict[str, ExtractedField] = {f.field_name: f for f in current}
    added = improved = 0

    for f in incoming:
        existing = merged.get(f.field_name)
        if existing is None:
            merged[f.field_name] = f
            added += 1
            logger.debug(f"Added {f.field_name} ({f.confidence})")
        elif f.confidence > existing.confidence:
            merged[f.field_name] = f
            # A name first added by this same pass stays counted as added
            if f.field_name in current:
                improved += 1
            logger.debug(f"Improved {f.field_name}: {existing.confidence} -> {f.confidence}")

    return MergeResult(fields=FieldSet(merged.values()), added=added, improved=improved)
