"""Tests for data models and configuration-backed schema."""

import json
from pathlib import Path

import pytest

from config import ConfigurationManager, get_config
from form_scanner.models import DocumentType, ExtractedField, FieldSet, FormSchema, make_field
from form_scanner.utils.exceptions import ConfigurationError, DuplicateFieldError
from form_scanner.utils.logger import mask_id


class TestExtractedField:
    def test_make_field_uses_standard_label(self):
        f = make_field("adharId", "1234 5678 9012", 95)
        assert f.field_label == "Aadhaar Number"
        assert f.section == ""

    @pytest.mark.parametrize("confidence", [-1, 101])
    def test_confidence_range(self, confidence):
        with pytest.raises(ValueError):
            make_field("gender", "Male", confidence)

    def test_dict_uses_external_names(self):
        data = make_field("gender", "Male", 90).with_section("personal").to_dict()
        assert data == {
            "fieldName": "gender",
            "fieldLabel": "Gender",
            "value": "Male",
            "confidence": 90,
            "section": "personal",
        }
        assert ExtractedField.from_dict(data).section == "personal"

    def test_immutable(self):
        f = make_field("gender", "Male", 90)
        with pytest.raises(AttributeError):
            f.value = "Female"


class TestFieldSet:
    def test_duplicate_names_rejected(self):
        with pytest.raises(DuplicateFieldError):
            FieldSet([make_field("gender", "Male", 90), make_field("gender", "Female", 80)])

    def test_discovery_order_and_values(self):
        fs = FieldSet([make_field("zip", "560001", 70), make_field("gender", "Male", 90)])
        assert fs.names() == ["zip", "gender"]
        assert fs.values() == {"zip": "560001", "gender": "Male"}
        assert "zip" in fs
        assert len(fs) == 2

    def test_json(self):
        fs = FieldSet([make_field("firstName", "Rahul Kumar", 82)])
        assert json.loads(fs.to_json())[0]["value"] == "Rahul Kumar"


class TestDocumentType:
    def test_str(self):
        assert str(DocumentType.AADHAAR) == "AADHAAR"
        assert DocumentType("pan") == DocumentType.PAN


class TestFormSchema:
    def test_from_config(self):
        schema = FormSchema.from_config()
        assert schema.section_of("adharId") == "identity"
        assert schema.section_of("zip") == "contact"
        assert schema.section_of("nickname") == ""
        assert schema.required_fields == ["adharId", "mobileNumber", "firstName"]
        assert schema.field_schema("firstName").max_length == 100

    def test_unknown_required_field(self):
        with pytest.raises(ConfigurationError):
            FormSchema.from_dict({
                "required_fields": ["nickname"],
                "sections": {"personal": {"title": "Personal", "fields": {}}},
            })

    def test_section_without_title(self):
        with pytest.raises(ConfigurationError):
            FormSchema.from_dict({"sections": {"personal": {"fields": {}}}})


class TestConfiguration:
    def test_singleton(self):
        assert ConfigurationManager() is ConfigurationManager()

    def test_dot_path_lookup(self):
        assert get_config("extraction.positional_line_limit") == 10
        assert get_config("extraction.missing.key", "fallback") == "fallback"

    def test_log_file_path_is_absolute(self):
        assert Path(get_config("logging.file.path")).is_absolute()


class TestMaskId:
    def test_mask(self):
        assert mask_id("1234 5678 9012") == "1234********"
