"""Tests for the PAN card extractors."""

import pytest

from form_scanner.extraction import ImprovedPANExtractor, PANExtractor
from form_scanner.extraction.base import is_valid_pan
from form_scanner.utils.exceptions import ExtractionError
from form_scanner.utils.helpers import split_lines


def run(extractor, text):
    return {f.field_name: f for f in extractor.extract(text, split_lines(text))}


class TestPanCategory:
    @pytest.mark.parametrize("pan", ["ABCPE1234F", "AAACB1234C", "ABCHX9999Z"])
    def test_known_categories(self, pan):
        assert is_valid_pan(pan)

    @pytest.mark.parametrize("pan", ["ABCDE1234F", "ABCXE1234F", "ABCPE123F"])
    def test_rejected(self, pan):
        assert not is_valid_pan(pan)


class TestBasicPANExtractor:
    def test_old_layout(self, pan_text):
        fields = run(PANExtractor(), pan_text)

        assert fields["panNumber"].value == "ABCPE1234F"
        assert fields["panNumber"].confidence == 95
        assert fields["firstName"].value == "Rahul Kumar Sharma"
        assert fields["firstName"].confidence == 80
        assert fields["fatherName"].value == "Suresh Kumar Sharma"
        assert fields["fatherName"].confidence == 85

    def test_invalid_category_rejected(self):
        text = "INCOME TAX DEPARTMENT\nRAHUL KUMAR SHARMA\nABCDE1234F"
        fields = run(PANExtractor(), text)
        assert "panNumber" not in fields
        assert fields["firstName"].value == "Rahul Kumar Sharma"

    def test_lower_case_pan_upper_cased(self):
        fields = run(PANExtractor(), "pan abcpe1234f")
        assert fields["panNumber"].value == "ABCPE1234F"

    def test_father_name_never_positional(self):
        text = "INCOME TAX DEPARTMENT\nRAHUL KUMAR SHARMA\nSURESH KUMAR SHARMA\nABCPE1234F"
        fields = run(PANExtractor(), text)
        assert fields["firstName"].value == "Rahul Kumar Sharma"
        assert "fatherName" not in fields

    def test_labeled_name(self):
        fields = run(PANExtractor(), "Name: RAHUL SHARMA\nFather's Name: SURESH SHARMA")
        assert fields["firstName"].value == "Rahul Sharma"
        assert fields["firstName"].confidence == 85

    def test_date_of_birth_label_on_previous_line(self):
        fields = run(PANExtractor(), "Date of Birth\n15/08/1990")
        assert fields["birthdate"].value == "15/08/1990"
        assert fields["birthdate"].confidence == 85

    def test_name_word_limit(self):
        text = "RAHUL KUMAR SINGH SHARMA VERMA"
        fields = run(PANExtractor(), text)
        assert "firstName" not in fields


class TestImprovedPANExtractor:
    def test_old_layout(self, pan_text):
        fields = run(ImprovedPANExtractor(), pan_text)

        assert fields["panNumber"].confidence == 95
        assert fields["firstName"].value == "Rahul Kumar Sharma"
        assert fields["firstName"].confidence == 82
        assert fields["fatherName"].value == "Suresh Kumar Sharma"
        assert fields["fatherName"].confidence == 88

    def test_new_layout(self, new_pan_text):
        fields = run(ImprovedPANExtractor(), new_pan_text)

        assert fields["panNumber"].value == "ABCPE1234F"
        assert fields["firstName"].value == "Rahul Kumar Sharma"
        assert fields["firstName"].confidence == 90
        assert fields["fatherName"].value == "Suresh Kumar Sharma"
        assert fields["birthdate"].value == "15/08/1990"
        assert fields["birthdate"].confidence == 90

    def test_inline_pan_has_lower_confidence(self):
        fields = run(ImprovedPANExtractor(), "PAN: ABCPE1234F")
        assert fields["panNumber"].value == "ABCPE1234F"
        assert fields["panNumber"].confidence == 92

    def test_positional_name_only_above_father_label(self):
        text = "INCOME TAX DEPARTMENT\nFather's Name\nSURESH KUMAR SHARMA\nABCPE1234F"
        fields = run(ImprovedPANExtractor(), text)
        assert "firstName" not in fields
        assert fields["fatherName"].value == "Suresh Kumar Sharma"

    def test_no_lines_raises(self):
        with pytest.raises(ExtractionError):
            ImprovedPANExtractor().extract("", [])
