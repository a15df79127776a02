"""
Per-test correlation store.

Bridges asynchronous capture (written by ResponseObserver as responses
arrive) and later synchronous consumption (read by subsequent test steps).

Two independent namespaces are kept, both keyed by test id:
- captured records: preQualificationId, applicantId, coApplicantId, authorizationHeader
- token records:    token

Records are immutable snapshots. Every write builds a new snapshot with
merge_record() and swaps it in, so the value seen by a reader is always the
one written by whichever capture finished last (last-resolved-wins).

One store is created per test run and injected where it is needed; it is not
shared across processes.
"""

import logging
from dataclasses import dataclass, replace
from typing import ClassVar, Dict, Mapping, Optional, Type, TypeVar, Union

from .constants import (
    FIELD_APPLICANT_ID,
    FIELD_AUTHORIZATION_HEADER,
    FIELD_CO_APPLICANT_ID,
    FIELD_PRE_QUALIFICATION_ID,
    FIELD_TOKEN,
)
from .exceptions import FieldNotCapturedError, FieldNotSetError

logger = logging.getLogger(__name__)


class _FieldAccess:
    # Field name as written/read by callers -> attribute name
    FIELDS: ClassVar[Dict[str, str]] = {}

    @classmethod
    def attribute_for(cls, field: str) -> str:
        try:
            return cls.FIELDS[field]
        except KeyError:
            raise ValueError(
                f"Unknown {cls.__name__} field '{field}'. Expected one of: {', '.join(cls.FIELDS)}"
            ) from None

    def get(self, field: str) -> Optional[str]:
        return getattr(self, self.attribute_for(field))

    def as_dict(self) -> Dict[str, str]:
        """Only the fields that have been set, keyed by field name."""
        return {field: getattr(self, attr) for field, attr in self.FIELDS.items() if getattr(self, attr)}


@dataclass(frozen=True)
class CapturedRecord(_FieldAccess):
    """Identifiers and credentials captured from network traffic for one test."""

    pre_qualification_id: Optional[str] = None
    applicant_id: Optional[str] = None
    co_applicant_id: Optional[str] = None
    authorization_header: Optional[str] = None

    FIELDS: ClassVar[Dict[str, str]] = {
        FIELD_PRE_QUALIFICATION_ID: "pre_qualification_id",
        FIELD_APPLICANT_ID: "applicant_id",
        FIELD_CO_APPLICANT_ID: "co_applicant_id",
        FIELD_AUTHORIZATION_HEADER: "authorization_header",
    }


@dataclass(frozen=True)
class TokenRecord(_FieldAccess):
    """Credential captured or issued for one test."""

    token: Optional[str] = None

    FIELDS: ClassVar[Dict[str, str]] = {FIELD_TOKEN: "token"}


Record = Union[CapturedRecord, TokenRecord]
R = TypeVar("R", CapturedRecord, TokenRecord)


def merge_record(
    previous: Optional[R],
    fields: Mapping[str, Optional[str]],
    record_type: Type[R] = CapturedRecord,
) -> R:
    """
    Combine a previous snapshot with newly captured fields.

    Supplied non-empty values replace the previous ones; empty values are
    ignored so a field never goes back to unset. The previous snapshot is
    left untouched.

    Raises:
        ValueError: a field name is not part of the record type.
    """
    base = previous if previous is not None else record_type()
    changes = {}
    for field, value in fields.items():
        attr = type(base).attribute_for(field)
        if value:
            changes[attr] = value
    if not changes:
        return base
    return replace(base, **changes)


class CorrelationStore:
    """Keyed lookup of captured records and token records by test id."""

    def __init__(self):
        self._records: Dict[str, CapturedRecord] = {}
        self._tokens: Dict[str, TokenRecord] = {}

    # -----------------------------------------------
    # Captured records
    # -----------------------------------------------

    def write(self, test_id: str, field: str, value: Optional[str]) -> None:
        """Set one captured field for a test. Empty values are logged and dropped."""
        self._write(self._records, CapturedRecord, test_id, field, value)

    def read(self, test_id: str, field: str) -> str:
        """
        Raises:
            FieldNotSetError: no record for test_id, or the field is unset.
        """
        return self._read(self._records, CapturedRecord, test_id, field)

    def exists(self, test_id: str) -> bool:
        """True when a captured record exists for the test, whatever its fields."""
        return test_id in self._records

    def clear(self, test_id: str) -> None:
        """Remove the captured record for a test. Its token record is kept."""
        if self._records.pop(test_id, None) is not None:
            logger.info(f"Captured data cleared for test {test_id}")

    def snapshot(self, test_id: str) -> Optional[CapturedRecord]:
        return self._records.get(test_id)

    # -----------------------------------------------
    # Token records
    # -----------------------------------------------

    def write_token(self, test_id: str, field: str, value: Optional[str]) -> None:
        self._write(self._tokens, TokenRecord, test_id, field, value)

    def read_token(self, test_id: str, field: str = FIELD_TOKEN) -> str:
        return self._read(self._tokens, TokenRecord, test_id, field)

    def token_exists(self, test_id: str) -> bool:
        return test_id in self._tokens

    def clear_token(self, test_id: str) -> None:
        if self._tokens.pop(test_id, None) is not None:
            logger.info(f"Token cleared for test {test_id}")

    def token_snapshot(self, test_id: str) -> Optional[TokenRecord]:
        return self._tokens.get(test_id)

    # -----------------------------------------------
    # Helpers
    # -----------------------------------------------

    @staticmethod
    def _require_value(test_id: str, field: str, value: Optional[str]) -> str:
        if not value:
            raise FieldNotCapturedError(field, test_id)
        return value

    def _write(self, namespace: Dict[str, Record], record_type, test_id, field, value) -> None:
        record_type.attribute_for(field)
        try:
            value = self._require_value(test_id, field, value)
        except FieldNotCapturedError as e:
            logger.error(f"Error in storing {field} for test {test_id}: {e}")
            return

        namespace[test_id] = merge_record(namespace.get(test_id), {field: value}, record_type)
        logger.debug(f"{field} stored for test {test_id}")

    @staticmethod
    def _read(namespace: Dict[str, Record], record_type, test_id, field) -> str:
        record_type.attribute_for(field)
        record = namespace.get(test_id)
        value = record.get(field) if record is not None else None
        if not value:
            raise FieldNotSetError(field, test_id)
        return value
