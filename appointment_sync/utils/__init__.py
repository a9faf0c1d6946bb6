"""
Utility modules for appointment tag sync.
"""
from .logging_config import setup_logging, get_logger
from .errors import (
    ErrorCategory,
    error_response,
    method_not_allowed,
    missing_fields,
    invalid_field,
    processing_failed,
    not_found,
    internal_error,
    utc_timestamp
)
from .exceptions import (
    AppointmentSyncError,
    ValidationError,
    MissingFieldsError,
    ConfigurationError,
    ShopifyError
)
