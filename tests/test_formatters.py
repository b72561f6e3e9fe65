"""Tests for canonical value formatting."""

import pytest

from form_scanner.validation import format_field_value, get_field_requirements


class TestFormatFieldValue:
    @pytest.mark.parametrize("field_name, raw, expected", [
        ("adharId", "123456789012", "1234 5678 9012"),
        ("adharId", "1234-5678-9012", "1234 5678 9012"),
        ("panNumber", " abcpe1234f ", "ABCPE1234F"),
        ("mobileNumber", "98765 43210", "9876543210"),
        ("emailAddress", "Test@Example.COM", "test@example.com"),
        ("firstName", "RAHUL  KUMAR", "Rahul Kumar"),
        ("fatherName", "suresh kumar sharma", "Suresh Kumar Sharma"),
        ("gender", " Male ", "Male"),
        ("birthdate", "15/08/1990", "15/08/1990"),
    ])
    def test_canonical_form(self, field_name, raw, expected):
        assert format_field_value(field_name, raw) == expected

    def test_apostrophe_not_split(self):
        assert format_field_value("firstName", "D'SOUZA ANIL") == "D'souza Anil"


class TestFieldRequirements:
    def test_known_fields(self):
        assert get_field_requirements("zip") == "6 digits"
        assert get_field_requirements("mobileNumber") == "10 digits starting with 6-9"

    def test_free_text_field(self):
        assert get_field_requirements("gender") == ""
