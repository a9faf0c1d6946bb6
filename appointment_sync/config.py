"""
Configuration management for the appointment tag sync service.
"""
import os
from dataclasses import dataclass
from typing import Any, Mapping

from dotenv import load_dotenv

load_dotenv()


class BaseConfig:
    """Base configuration."""
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')

    # Single Shopify store per deployment
    SHOPIFY_ACCESS_TOKEN = os.getenv('SHOPIFY_ACCESS_TOKEN')
    SHOP_DOMAIN = os.getenv('SHOP_DOMAIN')
    SHOPIFY_API_VERSION = os.getenv('SHOPIFY_API_VERSION', '2024-01')
    SHOPIFY_TIMEOUT = float(os.getenv('SHOPIFY_TIMEOUT', '30.0'))

    # Storefront allowed to call the webhook from the browser
    ALLOWED_ORIGIN = os.getenv('ALLOWED_ORIGIN', 'https://husbandvitamins.com')

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    # Tag markers
    ELIGIBLE_TAG = 'appointment-eligible'
    BOOKED_TAG = 'appointment-booked'


class DevelopmentConfig(BaseConfig):
    """Development configuration."""
    DEBUG = True
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'DEBUG')


class ProductionConfig(BaseConfig):
    """Production configuration."""
    DEBUG = False


class TestingConfig(BaseConfig):
    """Testing configuration."""
    TESTING = True
    # Never talk to a real store from the test suite
    SHOPIFY_ACCESS_TOKEN = 'test-token'
    SHOP_DOMAIN = 'test-shop.myshopify.com'
    ALLOWED_ORIGIN = 'https://husbandvitamins.com'


config_map = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig
}


def get_config(config_name: str = 'development'):
    """Get configuration class by name."""
    return config_map.get(config_name, DevelopmentConfig)


@dataclass(frozen=True)
class ShopifySettings:
    """
    Connection settings for the Shopify Admin API.

    Built from the Flask config on every request, so a missing token or
    domain surfaces as a per-request configuration error rather than a
    startup failure.
    """
    access_token: str = None
    shop_domain: str = None
    api_version: str = '2024-01'
    timeout: float = 30.0

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> 'ShopifySettings':
        return cls(
            access_token=config.get('SHOPIFY_ACCESS_TOKEN'),
            shop_domain=config.get('SHOP_DOMAIN'),
            api_version=config.get('SHOPIFY_API_VERSION', '2024-01'),
            timeout=float(config.get('SHOPIFY_TIMEOUT', 30.0)),
        )

    @property
    def is_complete(self) -> bool:
        return bool(self.access_token and self.shop_domain)
