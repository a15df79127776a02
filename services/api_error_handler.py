# services/api_error_handler.py
import logging

import httpx

logger = logging.getLogger(__name__)

# Statuses that API tests provoke on purpose; receiving them is logged, not raised
EXPECTED_ERROR_STATUSES = {
    400: "Bad Request",
    401: "Unauthorized",
    402: "Payment Required",
    422: "Unprocessable Entity",
    500: "Internal Server Error",
}


class ApiError(Exception):
    """Raised for HTTP failures the test did not expect."""

    def __init__(self, message: str, status_code: int = None):
        self.status_code = status_code
        super().__init__(message)


class ApiErrorHandler:
    """Classifies errors raised while calling the API under test."""

    def handle_status_codes(self, error: BaseException) -> int:
        """
        Log and classify an error from an API call.

        Returns:
            The HTTP status when it was a success or an expected error status.

        Raises:
            ApiError: unexpected status codes and non-HTTP errors.
        """
        if isinstance(error, httpx.HTTPStatusError):
            return self._handle_known_status_codes(error)
        if isinstance(error, httpx.HTTPError):
            logger.error(f"Request failed before a response was received: {error}")
            raise ApiError(f"Request failed: {error}") from error
        logger.error(f"Handling a generic error: {error!r}")
        raise ApiError(f"Generic Error: {error}") from error

    def _handle_known_status_codes(self, error: httpx.HTTPStatusError) -> int:
        response = error.response
        status_code = response.status_code
        message = response.reason_phrase or "Unknown Status"

        if 200 <= status_code < 300:
            logger.info(f"Received {status_code} {message}")
        elif status_code in EXPECTED_ERROR_STATUSES:
            logger.info(f"Correctly received {status_code} {EXPECTED_ERROR_STATUSES[status_code]}.")
            if status_code == 422:
                self._log_error_details(status_code, message, error)
        else:
            self._log_error_details(status_code, message, error)
            raise ApiError(f"Received {status_code} {message}: {error}", status_code) from error
        return status_code

    @staticmethod
    def _log_error_details(status_code: int, message: str, error: httpx.HTTPStatusError) -> None:
        logger.error(
            f"Received {status_code} {message} | "
            f"errorMessage={error} | errorData={error.response.text} | "
            f"errorHeaders={dict(error.response.headers)}"
        )
