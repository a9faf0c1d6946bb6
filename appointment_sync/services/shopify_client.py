"""
Shopify Admin API client.
Handles the customer reads and tag writes used by appointment sync.
"""
import logging
from typing import Optional, Dict, Any, Union

import httpx

from ..utils.exceptions import ShopifyError

logger = logging.getLogger(__name__)

CustomerId = Union[str, int]


class ShopifyClient:
    """
    Client for the Shopify Admin REST API.

    Supports:
    - Fetching a customer record by ID
    - Replacing a customer's tag string
    """

    def __init__(
        self,
        shop_domain: str,
        access_token: str,
        api_version: str = '2024-01',
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None
    ):
        """
        Initialize Shopify client.

        Args:
            shop_domain: Store domain, with or without scheme
            access_token: Admin API access token
            api_version: REST API version segment
            timeout: Seconds before an outbound call is abandoned
            transport: Optional httpx transport (used by tests)
        """
        self.shop_domain = shop_domain.replace('https://', '').replace('http://', '').rstrip('/')
        self.access_token = access_token
        self.api_version = api_version
        self.timeout = timeout
        self.transport = transport
        self.base_url = f'https://{self.shop_domain}/admin/api/{api_version}'

    @classmethod
    def from_settings(cls, settings, transport: Optional[httpx.BaseTransport] = None) -> 'ShopifyClient':
        """Build a client from ShopifySettings."""
        return cls(
            settings.shop_domain,
            settings.access_token,
            api_version=settings.api_version,
            timeout=settings.timeout,
            transport=transport
        )

    def customer_url(self, customer_id: CustomerId) -> str:
        return f'{self.base_url}/customers/{customer_id}.json'

    def _headers(self) -> Dict[str, str]:
        return {
            'X-Shopify-Access-Token': self.access_token,
            'Content-Type': 'application/json'
        }

    def _request(self, method: str, url: str, action: str, payload: Optional[Dict] = None) -> httpx.Response:
        """Send one request; transport failures become ShopifyError."""
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                return client.request(method, url, headers=self._headers(), json=payload)
        except httpx.HTTPError as e:
            raise ShopifyError(f'Failed to {action}: {e}', original_error=e) from e

    @staticmethod
    def _parse_customer(response: httpx.Response, action: str) -> Dict[str, Any]:
        try:
            data = response.json()
        except ValueError as e:
            raise ShopifyError(
                f'Failed to {action}: invalid JSON in Shopify response',
                status_code=response.status_code,
                response_text=response.text,
                original_error=e
            ) from e

        customer = data.get('customer') if isinstance(data, dict) else None
        if not isinstance(customer, dict):
            raise ShopifyError(
                f'Failed to {action}: response missing customer',
                status_code=response.status_code,
                response_text=response.text
            )
        return customer

    def get_customer(self, customer_id: CustomerId) -> Dict[str, Any]:
        """
        Fetch a customer record.

        Args:
            customer_id: Shopify customer ID (numeric)

        Returns:
            The "customer" object from the response

        Raises:
            ShopifyError: On a non-2xx status or transport failure
        """
        action = 'fetch customer data'
        response = self._request('GET', self.customer_url(customer_id), action)

        if not response.is_success:
            raise ShopifyError(
                f'Failed to {action}: {response.status_code} {response.reason_phrase}',
                status_code=response.status_code,
                response_text=response.text
            )

        return self._parse_customer(response, action)

    def update_customer_tags(self, customer_id: CustomerId, tags: str) -> Dict[str, Any]:
        """
        Replace a customer's full tag string.

        Args:
            customer_id: Shopify customer ID (numeric)
            tags: Comma-delimited tags; overwrites the existing value

        Returns:
            The updated "customer" object from the response

        Raises:
            ShopifyError: On a non-2xx status or transport failure
        """
        action = 'update customer tags'
        payload = {
            'customer': {
                'id': customer_id,
                'tags': tags
            }
        }
        response = self._request('PUT', self.customer_url(customer_id), action, payload)

        if not response.is_success:
            # Body carries Shopify's validation errors
            raise ShopifyError(
                f'Failed to {action}: {response.status_code} {response.reason_phrase} - {response.text}',
                status_code=response.status_code,
                response_text=response.text
            )

        return self._parse_customer(response, action)
