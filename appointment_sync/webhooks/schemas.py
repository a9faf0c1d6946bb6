"""
Inbound payload shapes for the appointment webhook.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from ..utils.exceptions import MissingFieldsError, ValidationError

REQUIRED_FIELDS = ('customer_id', 'customer_email')


@dataclass(frozen=True)
class AppointmentDetails:
    """Booking metadata from the scheduler. Logged and echoed, never used for tags."""
    event_type: Optional[str] = None
    assigned_to: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, data: Any) -> 'AppointmentDetails':
        if not isinstance(data, dict):
            return cls()
        extra = {k: v for k, v in data.items() if k not in ('event_type', 'assigned_to')}
        return cls(
            event_type=data.get('event_type'),
            assigned_to=data.get('assigned_to'),
            extra=extra
        )


def _normalize_tags(value: Any) -> Optional[str]:
    """
    Accept the tag string as sent, or a list of tag strings from looser callers.

    Falsy non-strings (null, false, 0) mean "not supplied" so Shopify is asked.

    Raises:
        ValidationError: any other type, or a list holding non-strings
    """
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        if not all(isinstance(tag, str) for tag in value):
            raise ValidationError(
                'customer_tags_before must be a string or a list of strings',
                fields=['customer_tags_before'],
                code='INVALID_CUSTOMER_TAGS_BEFORE'
            )
        return ','.join(value)
    if not value:
        return None
    raise ValidationError(
        'customer_tags_before must be a string or a list of strings',
        fields=['customer_tags_before'],
        code='INVALID_CUSTOMER_TAGS_BEFORE'
    )


@dataclass(frozen=True)
class AppointmentNotification:
    """A validated booking notification."""
    customer_id: Union[str, int]
    customer_email: str
    appointment_details: AppointmentDetails = field(default_factory=AppointmentDetails)
    customer_tags_before: Optional[str] = None
    timestamp: Optional[str] = None

    @classmethod
    def from_payload(cls, data: Any) -> 'AppointmentNotification':
        """
        Build a notification from a decoded JSON body.

        Raises:
            MissingFieldsError: customer_id or customer_email absent or empty
            ValidationError: customer_tags_before has an unusable type
        """
        if not isinstance(data, dict):
            data = {}

        if any(not data.get(name) for name in REQUIRED_FIELDS):
            raise MissingFieldsError(list(REQUIRED_FIELDS))

        return cls(
            customer_id=data['customer_id'],
            customer_email=data['customer_email'],
            appointment_details=AppointmentDetails.from_payload(data.get('appointment_details')),
            customer_tags_before=_normalize_tags(data.get('customer_tags_before')),
            timestamp=data.get('timestamp')
        )
