"""
Constants for response capture.

Shared across the extractor, the observer and the store.
"""

from typing import Tuple

# === Captured field names (as written to / read from the store) ===

FIELD_PRE_QUALIFICATION_ID = "preQualificationId"
FIELD_APPLICANT_ID = "applicantId"
FIELD_CO_APPLICANT_ID = "coApplicantId"
FIELD_AUTHORIZATION_HEADER = "authorizationHeader"
FIELD_TOKEN = "token"

CAPTURED_FIELDS: Tuple[str, ...] = (
    FIELD_PRE_QUALIFICATION_ID,
    FIELD_APPLICANT_ID,
    FIELD_CO_APPLICANT_ID,
    FIELD_AUTHORIZATION_HEADER,
)

# Fields whose values are credentials and must never be logged
SENSITIVE_FIELDS = {FIELD_AUTHORIZATION_HEADER, FIELD_TOKEN}

# === Response body keys ===

PRE_QUALIFICATION_ID_KEY = "preQualificationId"
APPLICANTS_KEY = "applicants"
APPLICANT_ID_KEY = "applicantId"

# === Headers ===

AUTHORIZATION_HEADER = "authorization"
CONTENT_TYPE_HEADER = "content-type"

# Only responses with this exact status are inspected
CAPTURE_STATUS = 200
