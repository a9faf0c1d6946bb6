"""
Custom exceptions for appointment tag sync.

Every failure raised while reconciling a customer's tags derives from
AppointmentSyncError, so the webhook can map them all to one response.
"""


class AppointmentSyncError(Exception):
    """Base exception for all appointment sync errors."""

    def __init__(self, message: str, code: str = "APPOINTMENT_SYNC_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppointmentSyncError):
    """Invalid inbound notification."""

    def __init__(self, message: str, fields: list = None, code: str = "VALIDATION_ERROR"):
        self.fields = fields or []
        super().__init__(message, code)


class MissingFieldsError(ValidationError):
    """Required fields absent or empty."""

    def __init__(self, fields: list):
        super().__init__("Missing required fields", fields, "MISSING_FIELDS")


class ConfigurationError(AppointmentSyncError):
    """Application configuration error."""

    def __init__(self, message: str):
        super().__init__(message, "CONFIGURATION_ERROR")


class ShopifyError(AppointmentSyncError):
    """Error communicating with Shopify API."""

    def __init__(
        self,
        message: str,
        status_code: int = None,
        response_text: str = None,
        original_error: Exception = None
    ):
        self.status_code = status_code
        self.response_text = response_text
        self.original_error = original_error
        super().__init__(message, "SHOPIFY_ERROR")
