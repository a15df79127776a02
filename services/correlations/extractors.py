"""
Field extraction from observed network exchanges.

Maps a parsed JSON response body and the headers of the request that
produced it to the named fields kept in the correlation store:
- preQualificationId   <- body.preQualificationId
- applicantId          <- body.applicants[0].applicantId
- coApplicantId        <- body.applicants[1].applicantId
- authorizationHeader  <- Authorization header of the originating request

All functions are pure. A field that cannot be found is simply left out of
the result; nothing here raises for missing or oddly shaped data.
"""

from typing import Any, Dict, List, Mapping, Optional

from .constants import (
    APPLICANT_ID_KEY,
    APPLICANTS_KEY,
    AUTHORIZATION_HEADER,
    FIELD_APPLICANT_ID,
    FIELD_AUTHORIZATION_HEADER,
    FIELD_CO_APPLICANT_ID,
    FIELD_PRE_QUALIFICATION_ID,
    PRE_QUALIFICATION_ID_KEY,
)
from .utils import get_header


def _as_value(value: Any) -> Optional[str]:
    """Normalize a captured scalar to a non-empty string, or None."""
    if value is None or isinstance(value, (dict, list, bool)):
        return None
    value_str = str(value)
    return value_str if value_str else None


def _applicants(body: Any) -> List[Any]:
    if not isinstance(body, dict):
        return []
    applicants = body.get(APPLICANTS_KEY)
    return applicants if isinstance(applicants, list) else []


def _applicant_id_at(applicants: List[Any], index: int) -> Optional[str]:
    if index >= len(applicants):
        return None
    applicant = applicants[index]
    if not isinstance(applicant, dict):
        return None
    return _as_value(applicant.get(APPLICANT_ID_KEY))


def extract_pre_qualification_id(body: Any) -> Optional[str]:
    """body.preQualificationId, if present."""
    if not isinstance(body, dict):
        return None
    return _as_value(body.get(PRE_QUALIFICATION_ID_KEY))


def extract_applicant_id(body: Any) -> Optional[str]:
    """Main applicant id: first element of body.applicants."""
    return _applicant_id_at(_applicants(body), 0)


def extract_co_applicant_id(body: Any) -> Optional[str]:
    """Co-applicant id: second element of body.applicants, only when there is one."""
    applicants = _applicants(body)
    if len(applicants) < 2:
        return None
    return _applicant_id_at(applicants, 1)


def extract_authorization_header(request_headers: Optional[Mapping[str, Any]]) -> Optional[str]:
    """Authorization header of the originating request (case-insensitive)."""
    return _as_value(get_header(request_headers, AUTHORIZATION_HEADER))


def extract_fields(body: Any, request_headers: Optional[Mapping[str, Any]] = None) -> Dict[str, str]:
    """
    Extract every capturable field from one exchange.

    Args:
        body: Parsed JSON response body (any JSON type).
        request_headers: Headers of the request that produced the response.
            Response headers must not be passed here.

    Returns:
        Mapping of field name -> value for the fields that were found.
    """
    candidates = {
        FIELD_PRE_QUALIFICATION_ID: extract_pre_qualification_id(body),
        FIELD_APPLICANT_ID: extract_applicant_id(body),
        FIELD_CO_APPLICANT_ID: extract_co_applicant_id(body),
        FIELD_AUTHORIZATION_HEADER: extract_authorization_header(request_headers),
    }
    return {field: value for field, value in candidates.items() if value}
