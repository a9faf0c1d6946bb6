"""
Tests for the appointment webhook with mocked Shopify calls.

Tests cover:
- Method handling (preflight, non-POST)
- CORS headers on every response
- Required field validation
- Success and failure envelopes
"""
import json
import pytest
from unittest.mock import patch, MagicMock

from appointment_sync.utils.exceptions import ShopifyError


WEBHOOK_URL = '/api/appointment-webhook'

SAMPLE_BOOKING = {
    "customer_id": 7890123456789,
    "customer_email": "customer@example.com",
    "appointment_details": {
        "event_type": "Initial Consultation",
        "assigned_to": "Dr. Smith",
        "start_time": "2026-01-22T15:00:00Z"
    },
    "customer_tags_before": "vip, appointment-eligible ,  newsletter",
    "timestamp": "2026-01-20T12:00:00Z"
}

EXPECTED_CORS_HEADERS = {
    'Access-Control-Allow-Origin': 'https://husbandvitamins.com',
    'Access-Control-Allow-Methods': 'POST, OPTIONS',
    'Access-Control-Allow-Headers': 'Content-Type, X-Source',
}


def assert_cors_headers(response):
    for name, value in EXPECTED_CORS_HEADERS.items():
        assert response.headers.get(name) == value


@pytest.fixture
def patched_shopify(mock_shopify):
    """Route every ShopifyClient the reconciler builds to mock_shopify."""
    with patch('appointment_sync.services.tag_reconciler.ShopifyClient') as mock_class:
        mock_class.from_settings.return_value = mock_shopify
        yield mock_shopify


class TestMethodHandling:
    """Tests for method routing."""

    def test_preflight_returns_empty_200(self, client):
        response = client.options(WEBHOOK_URL)
        assert response.status_code == 200
        assert response.data == b''
        assert_cors_headers(response)

    @pytest.mark.parametrize('method', ['get', 'put', 'patch', 'delete'])
    def test_non_post_returns_405(self, client, patched_shopify, method):
        response = getattr(client, method)(WEBHOOK_URL)

        assert response.status_code == 405
        data = response.get_json()
        assert data['error'] == 'Method not allowed'
        assert data['message'] == 'Only POST requests are supported'
        assert_cors_headers(response)
        patched_shopify.get_customer.assert_not_called()
        patched_shopify.update_customer_tags.assert_not_called()

    @pytest.mark.parametrize('method', ['TRACE', 'PROPFIND'])
    def test_unrouted_method_returns_json_405_with_cors(self, client, patched_shopify, method):
        response = client.open(WEBHOOK_URL, method=method)

        assert response.status_code == 405
        assert response.content_type == 'application/json'
        data = response.get_json()
        assert data['error'] == 'Method not allowed'
        assert data['message'] == 'Only POST requests are supported'
        assert_cors_headers(response)
        patched_shopify.update_customer_tags.assert_not_called()


class TestValidation:
    """Tests for required field validation."""

    @pytest.mark.parametrize('missing', ['customer_id', 'customer_email'])
    def test_missing_field_returns_400(self, client, patched_shopify, missing):
        payload = {k: v for k, v in SAMPLE_BOOKING.items() if k != missing}

        response = client.post(WEBHOOK_URL, json=payload)

        assert response.status_code == 400
        data = response.get_json()
        assert data['error'] == 'Missing required fields'
        assert data['required'] == ['customer_id', 'customer_email']
        assert_cors_headers(response)
        patched_shopify.get_customer.assert_not_called()
        patched_shopify.update_customer_tags.assert_not_called()

    def test_empty_email_counts_as_missing(self, client, patched_shopify):
        response = client.post(WEBHOOK_URL, json={**SAMPLE_BOOKING, 'customer_email': ''})
        assert response.status_code == 400

    @pytest.mark.parametrize('falsy', [False, 0])
    def test_falsy_tags_fetch_from_shopify(self, client, patched_shopify, falsy):
        response = client.post(WEBHOOK_URL, json={**SAMPLE_BOOKING, 'customer_tags_before': falsy})

        assert response.status_code == 200
        patched_shopify.get_customer.assert_called_once_with(7890123456789)
        patched_shopify.update_customer_tags.assert_called_once_with(
            7890123456789, 'vip,appointment-booked'
        )

    @pytest.mark.parametrize('bad_tags', [True, 7, {'tags': 'vip'}])
    def test_unusable_tags_return_400_without_calls(self, client, patched_shopify, bad_tags):
        response = client.post(WEBHOOK_URL, json={**SAMPLE_BOOKING, 'customer_tags_before': bad_tags})

        assert response.status_code == 400
        data = response.get_json()
        assert data['error'] == 'Invalid field'
        assert data['fields'] == ['customer_tags_before']
        assert_cors_headers(response)
        patched_shopify.get_customer.assert_not_called()
        patched_shopify.update_customer_tags.assert_not_called()

    def test_non_json_body_returns_400(self, client, patched_shopify):
        response = client.post(WEBHOOK_URL, data='not json', content_type='text/plain')
        assert response.status_code == 400
        patched_shopify.update_customer_tags.assert_not_called()


class TestSuccessfulBooking:
    """Tests for the success path."""

    def test_known_tags_are_reconciled_without_fetch(self, client, patched_shopify):
        response = client.post(WEBHOOK_URL, json=SAMPLE_BOOKING)

        assert response.status_code == 200
        data = response.get_json()
        assert data['success'] is True
        assert data['message'] == 'Successfully processed appointment for customer@example.com'
        assert data['customer_id'] == 7890123456789
        assert data['appointment_type'] == 'Initial Consultation'
        assert data['tags_updated'] is True
        assert data['previous_tags'] == 'vip, appointment-eligible ,  newsletter'
        assert data['new_tags'] == 'vip,newsletter,appointment-booked'
        assert data['processed_at']
        assert_cors_headers(response)

        patched_shopify.get_customer.assert_not_called()
        patched_shopify.update_customer_tags.assert_called_once_with(
            7890123456789, 'vip,newsletter,appointment-booked'
        )

    def test_missing_tags_are_fetched(self, client, patched_shopify):
        payload = {k: v for k, v in SAMPLE_BOOKING.items() if k != 'customer_tags_before'}

        response = client.post(WEBHOOK_URL, json=payload)

        assert response.status_code == 200
        data = response.get_json()
        assert data['previous_tags'] == 'vip, appointment-eligible'
        assert data['new_tags'] == 'vip,appointment-booked'
        patched_shopify.get_customer.assert_called_once_with(7890123456789)

    def test_appointment_details_optional(self, client, patched_shopify):
        payload = {
            'customer_id': '7890123456789',
            'customer_email': 'customer@example.com',
            'customer_tags_before': ''
        }

        response = client.post(WEBHOOK_URL, data=json.dumps(payload), content_type='application/json')

        assert response.status_code == 200
        data = response.get_json()
        assert data['appointment_type'] is None
        assert data['new_tags'] == 'vip,appointment-booked'
        patched_shopify.get_customer.assert_called_once_with('7890123456789')


class TestFailures:
    """Tests for the generic 500 envelope."""

    def test_fetch_failure_returns_500_without_write(self, client, patched_shopify):
        patched_shopify.get_customer.side_effect = ShopifyError(
            'Failed to fetch customer data: 404 Not Found', status_code=404
        )
        payload = {**SAMPLE_BOOKING, 'customer_tags_before': None}

        response = client.post(WEBHOOK_URL, json=payload)

        assert response.status_code == 500
        data = response.get_json()
        assert data['error'] == 'Failed to process appointment'
        assert data['message'] == 'Failed to fetch customer data: 404 Not Found'
        assert data['timestamp']
        assert 'new_tags' not in data
        assert_cors_headers(response)
        patched_shopify.update_customer_tags.assert_not_called()

    def test_update_failure_returns_500(self, client, patched_shopify):
        patched_shopify.update_customer_tags.side_effect = ShopifyError(
            'Failed to update customer tags: 422 Unprocessable Entity - {"errors":"bad"}',
            status_code=422
        )

        response = client.post(WEBHOOK_URL, json=SAMPLE_BOOKING)

        assert response.status_code == 500
        data = response.get_json()
        assert data['error'] == 'Failed to process appointment'
        assert data['message'].startswith('Failed to update customer tags: 422')
        assert 'success' not in data

    def test_missing_configuration_returns_500(self, app, client, patched_shopify):
        app.config['SHOPIFY_ACCESS_TOKEN'] = None

        response = client.post(WEBHOOK_URL, json=SAMPLE_BOOKING)

        assert response.status_code == 500
        data = response.get_json()
        assert 'Missing Shopify configuration' in data['message']
        patched_shopify.get_customer.assert_not_called()
        patched_shopify.update_customer_tags.assert_not_called()

    def test_unexpected_error_uses_same_envelope(self, client, patched_shopify):
        patched_shopify.update_customer_tags.side_effect = RuntimeError('boom')

        response = client.post(WEBHOOK_URL, json=SAMPLE_BOOKING)

        assert response.status_code == 500
        data = response.get_json()
        assert data['error'] == 'Failed to process appointment'
        assert data['message'] == 'boom'


class TestHealth:
    """Tests for the health endpoint."""

    def test_health_check(self, client):
        response = client.get('/health')
        assert response.status_code == 200
        assert response.get_json()['status'] == 'healthy'
