"""Tests for the keyword/pattern document classifier."""

import pytest

from form_scanner.classification import ClassifierRules, DocumentClassifier
from form_scanner.classification import classifier as classifier_module
from form_scanner.models import DocumentType
from form_scanner.utils.exceptions import ConfigurationError


@pytest.fixture
def classifier() -> DocumentClassifier:
    return DocumentClassifier()


class TestClassify:
    def test_aadhaar_card(self, classifier, aadhaar_text):
        assert classifier.classify(aadhaar_text) == DocumentType.AADHAAR

    def test_bilingual_aadhaar_card(self, classifier, bilingual_aadhaar_text):
        assert classifier.classify(bilingual_aadhaar_text) == DocumentType.AADHAAR

    def test_pan_card(self, classifier, pan_text):
        assert classifier.classify(pan_text) == DocumentType.PAN

    def test_new_layout_pan_card(self, classifier, new_pan_text):
        assert classifier.classify(new_pan_text) == DocumentType.PAN

    def test_no_keywords_is_unknown(self, classifier, generic_text):
        assert classifier.classify(generic_text) == DocumentType.UNKNOWN

    def test_empty_text_is_unknown(self, classifier):
        assert classifier.classify("") == DocumentType.UNKNOWN
        assert classifier.classify(None) == DocumentType.UNKNOWN

    def test_grouped_number_alone_is_aadhaar(self, classifier):
        # Pattern bonus alone reaches the Aadhaar threshold
        assert classifier.classify("1234 5678 9012") == DocumentType.AADHAAR

    def test_pan_shape_alone_is_not_enough(self, classifier):
        # PAN needs a higher score than the pattern bonus gives
        assert classifier.classify("ABCPE1234F") == DocumentType.UNKNOWN

    def test_tie_is_unknown(self):
        rules = ClassifierRules(
            aadhaar_keywords={"alpha": 10},
            pan_keywords={"beta": 10},
            aadhaar_threshold=5,
            pan_threshold=5,
        )
        assert DocumentClassifier(rules).classify("alpha beta") == DocumentType.UNKNOWN

    def test_keywords_match_case_insensitively(self):
        rules = ClassifierRules(aadhaar_keywords={"UIDAI": 8}, pan_keywords={})
        assert DocumentClassifier(rules).classify("issued by uidai") == DocumentType.AADHAAR


class TestScore:
    def test_keyword_weights_are_summed(self, classifier):
        scores = classifier.score("UIDAI")
        # "uidai" and "uid" both occur as substrings
        assert scores.aadhaar == 11
        assert scores.pan == 0

    def test_pattern_bonuses(self, classifier):
        assert classifier.score("1234-5678-9012").aadhaar == 5
        assert classifier.score("abcpe1234f").pan == 5


class TestRulesFromConfig:
    def test_loads_thresholds(self):
        rules = ClassifierRules.from_config()
        assert rules.aadhaar_threshold == 5
        assert rules.pan_threshold == 10
        assert rules.aadhaar_keywords["uidai"] == 8
        assert rules.pan_keywords["permanent account number"] == 10

    def test_non_integer_weight_rejected(self, monkeypatch):
        def fake_get_config(key, default=None):
            if key == "classifier.keywords.aadhaar":
                return {"aadhaar": "ten"}
            return default

        monkeypatch.setattr(classifier_module, "get_config", fake_get_config)
        with pytest.raises(ConfigurationError):
            ClassifierRules.from_config()
