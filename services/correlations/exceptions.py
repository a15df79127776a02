"""
Exceptions raised by the correlation capture and store.

Capture-side failures (ParseError, FieldNotCapturedError) are logged where
they happen and never reach the test. Read-side failures (FieldNotSetError)
propagate so the consuming step fails.
"""


class CorrelationError(Exception):
    """Base class for correlation capture/store errors."""


class ParseError(CorrelationError):
    """A qualifying response body could not be parsed as JSON."""

    def __init__(self, url: str, reason: object):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to parse JSON body from {url}: {reason}")


class FieldNotCapturedError(CorrelationError):
    """A store write was attempted with an empty value."""

    def __init__(self, field: str, test_id: str):
        self.field = field
        self.test_id = test_id
        super().__init__(f"{field} not captured.")


class FieldNotSetError(CorrelationError):
    """A read found no record for the test, or the field was never set."""

    def __init__(self, field: str, test_id: str):
        self.field = field
        self.test_id = test_id
        super().__init__(f"{field} is not set for test {test_id}")
