"""
Appointment booking webhook.

Called by the scheduling system (and the storefront booking widget) when a
customer books. Swaps the customer's "appointment-eligible" tag for
"appointment-booked" in Shopify.
"""
from flask import Blueprint, request, jsonify, current_app

from ..config import ShopifySettings
from ..services.tag_reconciler import TagReconciler, ELIGIBLE_TAG, BOOKED_TAG
from ..utils.errors import (
    method_not_allowed,
    missing_fields,
    invalid_field,
    processing_failed,
    utc_timestamp
)
from ..utils.exceptions import AppointmentSyncError, MissingFieldsError, ValidationError
from .schemas import AppointmentNotification, REQUIRED_FIELDS


appointment_webhook_bp = Blueprint('appointment_webhook', __name__)

ALLOWED_METHODS = 'POST, OPTIONS'
ALLOWED_HEADERS = 'Content-Type, X-Source'


def set_cors_headers(response):
    """Fixed CORS policy; also used by the app-level 405 handler."""
    response.headers['Access-Control-Allow-Origin'] = current_app.config['ALLOWED_ORIGIN']
    response.headers['Access-Control-Allow-Methods'] = ALLOWED_METHODS
    response.headers['Access-Control-Allow-Headers'] = ALLOWED_HEADERS
    return response


@appointment_webhook_bp.after_request
def apply_cors_headers(response):
    """Fixed CORS policy on every response, errors included."""
    return set_cors_headers(response)


def get_reconciler() -> TagReconciler:
    """Build a reconciler from the current app config."""
    config = current_app.config
    return TagReconciler(
        ShopifySettings.from_config(config),
        eligible_tag=config.get('ELIGIBLE_TAG', ELIGIBLE_TAG),
        booked_tag=config.get('BOOKED_TAG', BOOKED_TAG)
    )


@appointment_webhook_bp.route(
    '/appointment-webhook',
    methods=['GET', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS']
)
def handle_appointment_booked():
    """
    Handle an appointment booking notification.

    Expected body:
        {
            "customer_id": 7890123456789,
            "customer_email": "customer@example.com",
            "appointment_details": {"event_type": "...", "assigned_to": "..."},
            "customer_tags_before": "vip,appointment-eligible",
            "timestamp": "2026-01-20T12:00:00Z"
        }
    """
    # Preflight
    if request.method == 'OPTIONS':
        return '', 200

    if request.method != 'POST':
        return method_not_allowed()

    try:
        notification = AppointmentNotification.from_payload(request.get_json(silent=True))
    except MissingFieldsError:
        return missing_fields(REQUIRED_FIELDS)
    except ValidationError as e:
        return invalid_field(e.message, e.fields)

    details = notification.appointment_details
    current_app.logger.info(
        f'Processing appointment for customer: {notification.customer_email} '
        f'(ID: {notification.customer_id})'
    )
    current_app.logger.info(f'Appointment: {details.event_type} with {details.assigned_to}')

    try:
        result = get_reconciler().reconcile(
            notification.customer_id,
            notification.customer_tags_before
        )
    except AppointmentSyncError as e:
        current_app.logger.error(f'Error processing appointment: {e.message}', exc_info=True)
        return processing_failed(e.message)
    except Exception as e:
        current_app.logger.error(f'Unexpected error processing appointment: {e}', exc_info=True)
        return processing_failed(str(e))

    current_app.logger.info(f'Successfully processed appointment for {notification.customer_email}')

    return jsonify({
        'success': True,
        'message': f'Successfully processed appointment for {notification.customer_email}',
        'customer_id': notification.customer_id,
        'appointment_type': details.event_type,
        'processed_at': utc_timestamp(),
        'tags_updated': result.tags_updated,
        'previous_tags': result.previous_tags,
        'new_tags': result.new_tags
    })
