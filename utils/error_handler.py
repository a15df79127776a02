"""
error_handler.py

Consistent logging for errors caught in page objects, routes and services
before they are re-raised to the test.
"""
import logging
from typing import Optional

logger = logging.getLogger(__name__)


def handle_error(error: object, context: str, custom_message: Optional[str] = None) -> str:
    """
    Log an error with the place it was caught.

    Args:
        error: The caught error (usually an exception, but anything is accepted).
        context: Where it happened, e.g. the function name.
        custom_message: Extra text logged before the error message.

    Returns:
        The logged message, so callers can reuse it when re-raising.
    """
    prefix = f"{custom_message}: " if custom_message else ""

    if isinstance(error, BaseException):
        message = f"[{context}] {prefix}Error occurred: {error}"
    elif isinstance(error, str):
        message = f"[{context}] {prefix}String error occurred: {error}"
    elif isinstance(error, bool):
        message = f"[{context}] {prefix}Boolean error occurred: {error}"
    elif isinstance(error, (int, float)):
        message = f"[{context}] {prefix}Number error occurred: {error}"
    elif error is not None:
        message = f"[{context}] {prefix}Object error occurred: {error!r}"
    else:
        message = f"[{context}] {prefix}Unknown error occurred."

    logger.error(message)
    return message
