"""Tests for field extraction from response bodies and request headers."""

import pytest

from services.correlations.extractors import (
    extract_applicant_id,
    extract_authorization_header,
    extract_co_applicant_id,
    extract_fields,
    extract_pre_qualification_id,
)


class TestApplicantIds:

    def test_two_applicants_give_main_and_co_applicant(self):
        body = {"applicants": [{"applicantId": "A"}, {"applicantId": "B"}]}

        fields = extract_fields(body)

        assert fields["applicantId"] == "A"
        assert fields["coApplicantId"] == "B"

    def test_single_applicant_has_no_co_applicant(self):
        body = {"applicants": [{"applicantId": "A"}]}

        fields = extract_fields(body)

        assert fields == {"applicantId": "A"}
        assert extract_co_applicant_id(body) is None

    @pytest.mark.parametrize("body", [
        {},
        {"applicants": []},
        {"applicants": None},
        {"applicants": "A"},
        {"applicants": [None, {"applicantId": "B"}]},
        [{"applicantId": "A"}],
        "not an object",
        None,
    ])
    def test_missing_or_malformed_applicants_are_absent(self, body):
        assert extract_applicant_id(body) is None

    def test_co_applicant_read_even_when_main_has_no_id(self):
        body = {"applicants": [{"name": "main"}, {"applicantId": "B"}]}

        assert extract_fields(body) == {"coApplicantId": "B"}

    def test_numeric_ids_are_stringified(self):
        body = {"preQualificationId": 12345, "applicants": [{"applicantId": 7}]}

        assert extract_fields(body) == {"preQualificationId": "12345", "applicantId": "7"}


class TestPreQualificationId:

    def test_present(self):
        assert extract_pre_qualification_id({"preQualificationId": "PQ-1"}) == "PQ-1"

    @pytest.mark.parametrize("value", [None, "", {"nested": 1}, ["x"]])
    def test_empty_or_non_scalar_is_absent(self, value):
        assert extract_pre_qualification_id({"preQualificationId": value}) is None


class TestAuthorizationHeader:

    def test_taken_from_request_headers(self):
        fields = extract_fields({}, {"authorization": "Bearer abc"})

        assert fields == {"authorizationHeader": "Bearer abc"}

    def test_lookup_is_case_insensitive(self):
        assert extract_authorization_header({"Authorization": "Bearer xyz"}) == "Bearer xyz"

    def test_missing_header_is_absent(self):
        assert extract_authorization_header({"accept": "application/json"}) is None
        assert extract_authorization_header(None) is None


def test_full_body_extracts_every_field():
    body = {
        "preQualificationId": "PQ-9",
        "applicants": [{"applicantId": "A1"}, {"applicantId": "A2"}, {"applicantId": "A3"}],
    }

    fields = extract_fields(body, {"authorization": "Bearer t"})

    assert fields == {
        "preQualificationId": "PQ-9",
        "applicantId": "A1",
        "coApplicantId": "A2",
        "authorizationHeader": "Bearer t",
    }
