"""
Form Schema Module.

Describes the target form the scanner fills in: display sections, the
fields each section holds and which fields are required for submission.
The schema is read from the ``form`` block of settings.yaml.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from config import get_config
from form_scanner.utils.exceptions import ConfigurationError


@dataclass
class FieldSchema:
    """Display and input constraints for one form field."""
    field_label: str
    type: str = "text"
    pattern: Optional[str] = None
    required: bool = False
    max_length: Optional[int] = None
    min_length: Optional[int] = None


@dataclass
class SectionSchema:
    """A titled group of form fields."""
    title: str
    properties: Dict[str, FieldSchema] = field(default_factory=dict)


@dataclass
class FormSchema:
    """
    The complete form layout.

    Attributes:
        properties: Section key to SectionSchema, in display order.
        required_fields: Field names that must be filled before submission.

    Example:
        >>> schema = FormSchema.from_config()
        >>> schema.section_of("adharId")
        'identity'
    """
    properties: Dict[str, SectionSchema] = field(default_factory=dict)
    required_fields: List[str] = field(default_factory=list)

    def section_of(self, field_name: str) -> str:
        """Return the key of the section holding field_name, or ""."""
        for key, section in self.properties.items():
            if field_name in section.properties:
                return key
        return ""

    def field_schema(self, field_name: str) -> Optional[FieldSchema]:
        for section in self.properties.values():
            if field_name in section.properties:
                return section.properties[field_name]
        return None

    def field_names(self) -> List[str]:
        """All field names in display order."""
        names: List[str] = []
        for section in self.properties.values():
            names.extend(section.properties.keys())
        return names

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FormSchema':
        """
        Build a schema from the ``form`` configuration block.

        Raises:
            ConfigurationError: If a section or field entry is malformed.
        """
        sections: Dict[str, SectionSchema] = {}
        for key, raw_section in (data.get('sections') or {}).items():
            if not isinstance(raw_section, dict) or 'title' not in raw_section:
                raise ConfigurationError(f"form.sections.{key}", "section needs a title")
            props = {}
            for name, raw_field in (raw_section.get('fields') or {}).items():
                try:
                    props[name] = FieldSchema(**raw_field)
                except TypeError as e:
                    raise ConfigurationError(f"form.sections.{key}.fields.{name}", str(e))
            sections[key] = SectionSchema(title=raw_section['title'], properties=props)

        required = list(data.get('required_fields') or [])
        for name in list(required):
            if not any(name in s.properties for s in sections.values()):
                raise ConfigurationError("form.required_fields", f"unknown field: {name}")

        return cls(properties=sections, required_fields=required)

    @classmethod
    def from_config(cls) -> 'FormSchema':
        return cls.from_dict(get_config("form", {}) or {})
