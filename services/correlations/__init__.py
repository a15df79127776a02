"""
Correlation capture package for the Playwright harness.

Captures backend-assigned identifiers and credentials from a test's network
traffic and keeps them per test id for later steps of the same test.
"""

from .exceptions import CorrelationError, FieldNotCapturedError, FieldNotSetError, ParseError
from .extractors import extract_fields
from .store import CapturedRecord, CorrelationStore, TokenRecord, merge_record

__all__ = [
    "CapturedRecord",
    "CorrelationError",
    "CorrelationStore",
    "FieldNotCapturedError",
    "FieldNotSetError",
    "ParseError",
    "TokenRecord",
    "extract_fields",
    "merge_record",
]
