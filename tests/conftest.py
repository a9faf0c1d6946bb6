"""
Shared pytest fixtures.
"""
import pytest
from unittest.mock import MagicMock

from appointment_sync import create_app
from appointment_sync.config import ShopifySettings


@pytest.fixture
def app():
    """Create test application."""
    app = create_app('testing')
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture
def cli_runner(app):
    """Flask CLI runner."""
    return app.test_cli_runner()


@pytest.fixture
def shopify_settings():
    """Complete Shopify settings for a fake store."""
    return ShopifySettings(
        access_token='shpat_test_token',
        shop_domain='test-shop.myshopify.com',
        api_version='2024-01',
        timeout=5.0
    )


@pytest.fixture
def mock_shopify():
    """A ShopifyClient stand-in that echoes written tags back."""
    mock_client = MagicMock()
    mock_client.get_customer.return_value = {
        'id': 7890123456789,
        'email': 'customer@example.com',
        'tags': 'vip, appointment-eligible'
    }
    mock_client.update_customer_tags.side_effect = lambda customer_id, tags: {
        'id': customer_id,
        'email': 'customer@example.com',
        'tags': tags
    }
    return mock_client
