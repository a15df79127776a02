"""Tests for the per-test correlation store and record merging."""

import logging

import pytest

from services.correlations.exceptions import FieldNotSetError
from services.correlations.store import (
    CapturedRecord,
    CorrelationStore,
    TokenRecord,
    merge_record,
)


@pytest.fixture
def store():
    return CorrelationStore()


# ============================================================
# merge_record
# ============================================================

class TestMergeRecord:

    def test_creates_record_from_nothing(self):
        record = merge_record(None, {"applicantId": "A1"})

        assert record == CapturedRecord(applicant_id="A1")

    def test_later_values_replace_earlier_ones(self):
        first = merge_record(None, {"applicantId": "A1", "preQualificationId": "PQ"})

        second = merge_record(first, {"applicantId": "A2"})

        assert second.applicant_id == "A2"
        assert second.pre_qualification_id == "PQ"
        # previous snapshot untouched
        assert first.applicant_id == "A1"

    def test_empty_values_never_unset_a_field(self):
        first = merge_record(None, {"applicantId": "A1"})

        second = merge_record(first, {"applicantId": "", "coApplicantId": None})

        assert second == first

    def test_unknown_field_is_rejected(self):
        with pytest.raises(ValueError):
            merge_record(None, {"userId": "1"})

    def test_token_records(self):
        record = merge_record(None, {"token": "t1"}, TokenRecord)

        assert record == TokenRecord(token="t1")
        with pytest.raises(ValueError):
            merge_record(record, {"applicantId": "A"}, TokenRecord)

    def test_as_dict_lists_only_set_fields(self):
        record = CapturedRecord(applicant_id="A", authorization_header="Bearer x")

        assert record.as_dict() == {"applicantId": "A", "authorizationHeader": "Bearer x"}


# ============================================================
# Captured records
# ============================================================

class TestCapturedRecords:

    @pytest.mark.parametrize("field", [
        "preQualificationId", "applicantId", "coApplicantId", "authorizationHeader",
    ])
    def test_write_then_read(self, store, field):
        store.write("t1", field, "value-1")

        assert store.read("t1", field) == "value-1"

    def test_last_write_wins(self, store):
        store.write("t1", "applicantId", "A1")
        store.write("t1", "applicantId", "A2")

        assert store.read("t1", "applicantId") == "A2"

    def test_read_of_unknown_test_fails(self, store):
        with pytest.raises(FieldNotSetError) as exc:
            store.read("never-written", "applicantId")

        assert "applicantId is not set for test never-written" in str(exc.value)

    def test_read_of_unset_field_fails(self, store):
        store.write("t1", "applicantId", "A1")

        with pytest.raises(FieldNotSetError):
            store.read("t1", "coApplicantId")

    def test_empty_write_is_dropped_and_logged(self, store, caplog):
        with caplog.at_level(logging.ERROR):
            store.write("t1", "applicantId", "")

        assert not store.exists("t1")
        assert "applicantId not captured." in caplog.text

    def test_empty_write_keeps_existing_value(self, store):
        store.write("t1", "applicantId", "A1")
        store.write("t1", "applicantId", None)

        assert store.read("t1", "applicantId") == "A1"

    def test_unknown_field_write_raises(self, store):
        with pytest.raises(ValueError):
            store.write("t1", "userId", "1")

    def test_exists_regardless_of_fields(self, store):
        assert not store.exists("t1")

        store.write("t1", "authorizationHeader", "Bearer x")

        assert store.exists("t1")

    def test_tests_are_isolated(self, store):
        store.write("t1", "applicantId", "A1")
        store.write("t2", "applicantId", "B1")

        assert store.read("t1", "applicantId") == "A1"
        assert store.read("t2", "applicantId") == "B1"

    def test_clear_removes_record_but_keeps_token(self, store):
        store.write("t1", "applicantId", "A1")
        store.write_token("t1", "token", "tok")

        store.clear("t1")

        assert not store.exists("t1")
        with pytest.raises(FieldNotSetError):
            store.read("t1", "applicantId")
        assert store.read_token("t1") == "tok"

    def test_clear_of_unknown_test_is_noop(self, store):
        store.clear("missing")

        assert store.snapshot("missing") is None

    def test_snapshot_is_immutable(self, store):
        store.write("t1", "applicantId", "A1")
        before = store.snapshot("t1")

        store.write("t1", "applicantId", "A2")

        assert before.applicant_id == "A1"
        assert store.snapshot("t1").applicant_id == "A2"


# ============================================================
# Token records
# ============================================================

class TestTokenRecords:

    def test_write_then_read(self, store):
        store.write_token("t1", "token", "abc")

        assert store.read_token("t1", "token") == "abc"
        assert store.token_exists("t1")

    def test_read_without_token_fails(self, store):
        store.write("t1", "applicantId", "A1")

        with pytest.raises(FieldNotSetError):
            store.read_token("t1")

    def test_token_namespace_is_independent(self, store):
        store.write_token("t1", "token", "abc")

        assert not store.exists("t1")
        with pytest.raises(FieldNotSetError):
            store.read("t1", "authorizationHeader")

    def test_clear_token(self, store):
        store.write("t1", "applicantId", "A1")
        store.write_token("t1", "token", "abc")

        store.clear_token("t1")

        assert not store.token_exists("t1")
        assert store.read("t1", "applicantId") == "A1"
