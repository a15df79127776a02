"""
Shared utilities for response capture.

Contains response qualification checks and domain exclusion.
"""

from typing import Any, Iterable, Mapping, Optional
from urllib.parse import urlparse

from .constants import CAPTURE_STATUS, CONTENT_TYPE_HEADER


# === Domain Exclusion ===

def is_excluded_url(url: str, exclude_domains: Optional[Iterable[str]]) -> bool:
    """Check if URL should be excluded based on domain exclusion list."""
    if not url or not exclude_domains:
        return False

    hostname = urlparse(url).netloc.lower()
    if not hostname:
        return False

    hostname = hostname.split(":", 1)[0]
    for domain in exclude_domains:
        domain_lower = domain.lower()
        # Exact domain or subdomain; "notnewrelic.com" is not "newrelic.com"
        if hostname == domain_lower or hostname.endswith("." + domain_lower):
            return True
    return False


# === Response Qualification ===

def get_header(headers: Optional[Mapping[str, Any]], name: str) -> Optional[str]:
    """Case-insensitive header lookup."""
    for raw_key, value in (headers or {}).items():
        if raw_key is not None and str(raw_key).lower() == name:
            return None if value is None else str(value)
    return None


def is_json_content_type(headers: Optional[Mapping[str, Any]]) -> bool:
    """
    True when the content-type mentions "json" anywhere.

    Wider than an exact application/json match on purpose: charset suffixes,
    application/problem+json and vendor types like application/vnd.api+json
    all qualify.
    """
    content_type = get_header(headers, CONTENT_TYPE_HEADER) or ""
    return "json" in content_type.lower()


def is_capturable_response(status: Any, headers: Optional[Mapping[str, Any]]) -> bool:
    """Only HTTP 200 responses with a JSON content-type are inspected."""
    return status == CAPTURE_STATUS and is_json_content_type(headers)
