"""Tests for the Aadhaar card extractors."""

import pytest

from form_scanner.extraction import (
    AadhaarExtractor,
    AdvancedAadhaarExtractor,
    ImprovedAadhaarExtractor,
)
from form_scanner.extraction.aadhaar import normalize_photocopy_text, repair_digit_token
from form_scanner.utils.exceptions import ExtractionError
from form_scanner.utils.helpers import split_lines


def run(extractor, text):
    return {f.field_name: f for f in extractor.extract(text, split_lines(text))}


class TestBasicAadhaarExtractor:
    def test_title_case_card(self):
        text = "Government of India\nRahul Kumar\nDOB: 15/08/1990\nMale\n1234 5678 9012"
        fields = run(AadhaarExtractor(), text)

        assert fields["adharId"].value == "1234 5678 9012"
        assert fields["adharId"].confidence == 95
        assert fields["firstName"].value == "Rahul Kumar"
        assert fields["firstName"].confidence == 80
        assert fields["birthdate"].value == "15/08/1990"
        assert fields["birthdate"].confidence == 85
        assert fields["gender"].value == "Male"

    def test_discovery_order(self):
        text = "Name: Priya Sharma\nDOB: 01/01/1985\nFemale\n2345 6789 0123"
        fields = AadhaarExtractor().extract(text, split_lines(text))
        assert [f.field_name for f in fields] == ["adharId", "firstName", "birthdate", "gender"]

    def test_labeled_name(self):
        text = "Name: Priya Sharma\nDOB: 01/01/1985"
        fields = run(AadhaarExtractor(), text)
        assert fields["firstName"].value == "Priya Sharma"
        assert fields["firstName"].confidence == 90

    def test_father_label_is_not_the_name(self):
        text = "Father Name: Ramesh Sharma\nName: Priya Sharma"
        fields = run(AadhaarExtractor(), text)
        assert fields["firstName"].value == "Priya Sharma"

    def test_upper_case_heading_is_not_a_name(self, aadhaar_text):
        fields = run(AadhaarExtractor(), aadhaar_text)
        assert "firstName" not in fields

    def test_hyphenated_number(self):
        fields = run(AadhaarExtractor(), "UID 1234-5678-9012")
        assert fields["adharId"].value == "1234 5678 9012"

    def test_all_zero_number_rejected(self):
        fields = run(AadhaarExtractor(), "0000 0000 0000")
        assert "adharId" not in fields

    def test_year_of_birth(self):
        fields = run(AadhaarExtractor(), "Rahul Kumar\nYear of Birth: 1985\nMale")
        assert fields["birthdate"].value == "1985"
        assert fields["birthdate"].confidence == 85

    def test_bare_date_has_lowest_confidence(self):
        fields = run(AadhaarExtractor(), "Rahul Kumar\n15/08/1990")
        assert fields["birthdate"].confidence == 75

    def test_date_outside_year_window_dropped(self):
        fields = run(AadhaarExtractor(), "DOB: 15/08/1910\nMale")
        assert "birthdate" not in fields

    def test_female_wins_over_male(self):
        fields = run(AadhaarExtractor(), "Male\nFemale")
        assert fields["gender"].value == "Female"

    def test_no_gender_token(self):
        fields = run(AadhaarExtractor(), "Rahul Kumar")
        assert "gender" not in fields

    def test_blacklist_from_constructor(self):
        extractor = AadhaarExtractor(blacklist=["kumar"])
        fields = run(extractor, "Rahul Kumar\nAnita Rao")
        assert fields["firstName"].value == "Anita Rao"


class TestImprovedAadhaarExtractor:
    def test_upper_case_positional_name(self, aadhaar_text):
        fields = run(ImprovedAadhaarExtractor(), aadhaar_text)

        assert fields["firstName"].value == "RAHUL KUMAR"
        assert fields["firstName"].confidence == 82
        assert fields["adharId"].confidence == 95
        assert fields["birthdate"].confidence == 90
        assert fields["gender"].confidence == 92

    def test_bilingual_label_with_value_on_next_line(self, bilingual_aadhaar_text):
        fields = run(ImprovedAadhaarExtractor(), bilingual_aadhaar_text)

        assert fields["firstName"].value == "Priya Sharma"
        assert fields["firstName"].confidence == 92
        assert fields["birthdate"].value == "01/01/1985"
        assert fields["gender"].value == "Female"

    def test_vid_is_skipped(self, bilingual_aadhaar_text):
        fields = run(ImprovedAadhaarExtractor(), bilingual_aadhaar_text)
        assert fields["adharId"].value == "2345 6789 0123"

    def test_number_sharing_a_line_with_vid(self):
        fields = run(ImprovedAadhaarExtractor(), "Male\n1234 5678 9012 VID: 9123 4567 8901 2345")
        assert fields["adharId"].value == "1234 5678 9012"
        assert fields["adharId"].confidence == 90

    def test_unlabeled_sixteen_digit_vid_is_not_an_aadhaar(self):
        fields = run(ImprovedAadhaarExtractor(), "9123 4567 8901 2345")
        assert "adharId" not in fields

    def test_inline_number_has_lower_confidence(self):
        fields = run(ImprovedAadhaarExtractor(), "Aadhaar No: 1234 5678 9012")
        assert fields["adharId"].value == "1234 5678 9012"
        assert fields["adharId"].confidence == 90

    def test_issue_date_is_not_birth_date(self):
        fields = run(ImprovedAadhaarExtractor(), "Rahul Kumar\nIssue Date: 01/02/2015\nMale")
        assert "birthdate" not in fields

    def test_yob_label(self):
        fields = run(ImprovedAadhaarExtractor(), "Rahul Kumar\nYOB: 1985")
        assert fields["birthdate"].value == "1985"

    def test_son_of_line_skipped(self):
        text = "S/O Ramesh Sharma\nPRIYA SHARMA\nMale"
        fields = run(ImprovedAadhaarExtractor(), text)
        assert fields["firstName"].value == "PRIYA SHARMA"


class TestPhotocopyRepair:
    def test_digit_confusions_in_digit_run(self):
        assert repair_digit_token("1O23") == "1023"
        assert repair_digit_token("S67B") == "5678"
        assert repair_digit_token("89I2") == "8912"

    def test_words_left_alone(self):
        assert repair_digit_token("DOB:") == "DOB:"
        assert repair_digit_token("Male") == "Male"
        assert repair_digit_token("ABCPE1234F") == "ABCPE1234F"

    def test_label_glued_to_value_is_kept(self):
        assert repair_digit_token("DOB:15/08/1990") == "DOB:15/08/1990"
        assert repair_digit_token("DOB:l5/O8/1990") == "DOB:15/08/1990"

    def test_devanagari_digits(self):
        assert normalize_photocopy_text("१२३४ ५६७८ ९०१२") == "1234 5678 9012"


class TestAdvancedAadhaarExtractor:
    def test_photocopy_number(self, photocopy_aadhaar_text):
        fields = run(AdvancedAadhaarExtractor(), photocopy_aadhaar_text)
        assert fields["adharId"].value == "1023 4567 8912"
        assert fields["firstName"].value == "RAHUL KUMAR"

    def test_clean_card_reads_like_improved(self, aadhaar_text):
        advanced = AdvancedAadhaarExtractor().extract(aadhaar_text, split_lines(aadhaar_text))
        improved = ImprovedAadhaarExtractor().extract(aadhaar_text, split_lines(aadhaar_text))
        assert advanced == improved

    def test_empty_text_raises(self):
        with pytest.raises(ExtractionError):
            AdvancedAadhaarExtractor().extract("  \n ", [])
