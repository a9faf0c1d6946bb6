"""
Error response utilities for the appointment webhook.

Every error body shares one flat shape:
{
    "error": "Failed to process appointment",
    "message": "Failed to fetch customer data: 404 Not Found",
    "timestamp": "2026-01-20T17:00:00+00:00"
}

Some variants swap "message" or "timestamp" for descriptive fields
(e.g. "required" on missing-field errors).

Usage:
    from appointment_sync.utils.errors import error_response, ErrorCategory

    return error_response(ErrorCategory.PROCESSING_FAILED, 500, message=str(e), timestamp=True)
"""
import logging
from datetime import datetime, timezone
from enum import Enum

from flask import jsonify

logger = logging.getLogger(__name__)


class ErrorCategory(str, Enum):
    """Fixed error labels returned in the "error" field."""

    METHOD_NOT_ALLOWED = "Method not allowed"
    MISSING_FIELDS = "Missing required fields"
    INVALID_FIELD = "Invalid field"
    PROCESSING_FAILED = "Failed to process appointment"
    NOT_FOUND = "Not found"
    INTERNAL_ERROR = "Internal server error"


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601."""
    return datetime.now(timezone.utc).isoformat()


def error_response(
    category: ErrorCategory,
    status_code: int = 500,
    message: str = None,
    timestamp: bool = False,
    log_error: bool = False,
    **fields
) -> tuple:
    """
    Create an error response.

    Args:
        category: Fixed error label
        status_code: HTTP status code
        message: Detail text, omitted from the body when None
        timestamp: Include a server-generated timestamp
        log_error: Log the error before responding
        **fields: Extra descriptive fields added to the body

    Returns:
        Tuple of (response, status_code) for Flask
    """
    label = category.value if isinstance(category, ErrorCategory) else category

    if log_error and status_code >= 500:
        logger.error(f"API Error [{label}]: {message}")
    elif log_error and status_code >= 400:
        logger.warning(f"API Error [{label}]: {message}")

    body = {'error': label}
    if message is not None:
        body['message'] = message
    body.update(fields)
    if timestamp:
        body['timestamp'] = utc_timestamp()

    return jsonify(body), status_code


def method_not_allowed() -> tuple:
    """405 Method Not Allowed error."""
    return error_response(
        ErrorCategory.METHOD_NOT_ALLOWED,
        405,
        message='Only POST requests are supported'
    )


def missing_fields(required: list) -> tuple:
    """400 error naming every required field."""
    return error_response(ErrorCategory.MISSING_FIELDS, 400, required=list(required))


def invalid_field(message: str, fields: list) -> tuple:
    """400 error for a field present with an unusable value."""
    return error_response(ErrorCategory.INVALID_FIELD, 400, message=message, fields=list(fields))


def processing_failed(message: str) -> tuple:
    """500 error for any failure while reconciling tags."""
    return error_response(ErrorCategory.PROCESSING_FAILED, 500, message=message, timestamp=True)


def not_found(message: str) -> tuple:
    """404 Not Found error."""
    return error_response(ErrorCategory.NOT_FOUND, 404, message=message)


def internal_error(message: str = "An unexpected error occurred") -> tuple:
    """500 Internal Server Error."""
    return error_response(ErrorCategory.INTERNAL_ERROR, 500, message=message, log_error=True)
