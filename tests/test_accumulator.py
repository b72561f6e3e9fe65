"""Tests for merging fields across extraction passes."""

import pytest

from form_scanner.accumulation import merge_fields
from form_scanner.models import FieldSet, make_field
from form_scanner.utils.exceptions import DuplicateFieldError


@pytest.fixture
def first_pass():
    return FieldSet([
        make_field("adharId", "1234 5678 9012", 95),
        make_field("firstName", "Rahul Kumar", 80),
    ])


class TestMergeFields:
    def test_merge_into_empty(self, first_pass):
        result = merge_fields(FieldSet(), first_pass)
        assert result.fields == first_pass
        assert result.added == 2
        assert result.improved == 0

    def test_idempotent(self, first_pass):
        once = merge_fields(FieldSet(), first_pass).fields
        twice = merge_fields(once, first_pass)

        assert twice.fields == once
        assert twice.added == 0
        assert twice.improved == 0
        assert not twice.changed

    def test_higher_confidence_replaces(self, first_pass):
        result = merge_fields(first_pass, [make_field("firstName", "Rahul Kumar Sharma", 92)])

        assert result.improved == 1
        assert result.fields.get("firstName").value == "Rahul Kumar Sharma"
        assert result.fields.get("firstName").confidence == 92

    def test_lower_confidence_ignored(self, first_pass):
        result = merge_fields(first_pass, [make_field("adharId", "1234 5678 9013", 75)])

        assert result.fields.get("adharId").value == "1234 5678 9012"
        assert not result.changed

    def test_equal_confidence_keeps_existing(self, first_pass):
        result = merge_fields(first_pass, [make_field("firstName", "Rahul K", 80)])
        assert result.fields.get("firstName").value == "Rahul Kumar"

    def test_monotonic(self, first_pass):
        incoming = [
            make_field("adharId", "1234 5678 9012", 75),
            make_field("firstName", "Rahul Kumar", 90),
        ]
        result = merge_fields(first_pass, incoming)
        for name in ("adharId", "firstName"):
            old = first_pass.get(name).confidence
            new = next(f.confidence for f in incoming if f.field_name == name)
            assert result.fields.get(name).confidence == max(old, new)

    def test_order_and_counts(self, first_pass):
        result = merge_fields(first_pass, [
            make_field("firstName", "Rahul Kumar", 92),
            make_field("gender", "Male", 90),
        ])

        assert result.fields.names() == ["adharId", "firstName", "gender"]
        assert result.added == 1
        assert result.improved == 1

    def test_inputs_not_modified(self, first_pass):
        merge_fields(first_pass, [make_field("firstName", "Rahul Kumar", 99)])
        assert first_pass.get("firstName").confidence == 80

    def test_accepts_plain_lists(self):
        result = merge_fields([make_field("gender", "Male", 90)], [make_field("zip", "560001", 70)])
        assert result.fields.names() == ["gender", "zip"]

    def test_duplicate_in_current_is_fatal(self):
        current = [make_field("gender", "Male", 90), make_field("gender", "Female", 90)]
        with pytest.raises(DuplicateFieldError):
            merge_fields(current, [])

    def test_repeat_within_one_pass_counts_as_added(self):
        result = merge_fields([], [
            make_field("zip", "560001", 70),
            make_field("zip", "560001", 75),
        ])

        assert result.added == 1
        assert result.improved == 0
        assert result.fields.get("zip").confidence == 75
