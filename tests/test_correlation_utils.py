"""Tests for response qualification and domain exclusion."""

import pytest

from services.correlations.utils import (
    get_header,
    is_capturable_response,
    is_excluded_url,
    is_json_content_type,
)

EXCLUDED = ["newrelic.com", "google-analytics.com"]


@pytest.mark.parametrize("url", [
    "https://newrelic.com/collect",
    "https://bam.nr-data.newrelic.com/1/abc",
    "https://www.google-analytics.com/g/collect?v=2",
    "https://NEWRELIC.COM:443/collect",
])
def test_excluded_hosts_and_subdomains(url):
    assert is_excluded_url(url, EXCLUDED)


@pytest.mark.parametrize("url", [
    "https://notnewrelic.com/api/applicants",
    "https://newrelic.com.example.org/api",
    "https://api.example.com/newrelic.com",
    "",
    "not a url",
])
def test_other_hosts_are_not_excluded(url):
    assert not is_excluded_url(url, EXCLUDED)


def test_no_exclusions():
    assert not is_excluded_url("https://newrelic.com/collect", [])
    assert not is_excluded_url("https://newrelic.com/collect", None)


@pytest.mark.parametrize("content_type", [
    "application/json",
    "application/json; charset=utf-8",
    "Application/JSON",
    "application/problem+json",
    "application/vnd.api+json",
])
def test_json_content_types(content_type):
    assert is_json_content_type({"Content-Type": content_type})


@pytest.mark.parametrize("headers", [
    {"content-type": "text/html"},
    {"content-type": ""},
    {},
    None,
])
def test_non_json_content_types(headers):
    assert not is_json_content_type(headers)


def test_capturable_needs_status_200_and_json():
    headers = {"content-type": "application/json"}

    assert is_capturable_response(200, headers)
    assert not is_capturable_response(201, headers)
    assert not is_capturable_response(200, {"content-type": "text/plain"})


def test_get_header_is_case_insensitive():
    assert get_header({"X-Request-Id": "1"}, "x-request-id") == "1"
    assert get_header({"x-other": "1"}, "x-request-id") is None
