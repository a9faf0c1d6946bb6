"""
Webhook handlers for appointment tag sync.
"""
from .appointment import appointment_webhook_bp
from .schemas import AppointmentNotification, AppointmentDetails

__all__ = [
    'appointment_webhook_bp',
    'AppointmentNotification',
    'AppointmentDetails',
]
