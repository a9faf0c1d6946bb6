"""
Tag Reconciler for appointment bookings.

ARCHITECTURE: Shopify is the SINGLE SOURCE OF TRUTH for customer tags.

When a customer books an appointment this service:
- Resolves the current tags (trusting the caller's copy when one was sent,
  otherwise fetching the customer from Shopify)
- Drops the "appointment-eligible" marker and appends "appointment-booked"
- Writes the full tag string back to Shopify

Read and write are strictly sequential. Any failure aborts the whole
operation with an AppointmentSyncError; nothing is retried here and no
later call is made once one has failed.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from ..config import ShopifySettings
from ..utils.exceptions import ConfigurationError
from .shopify_client import ShopifyClient

logger = logging.getLogger(__name__)

ELIGIBLE_TAG = 'appointment-eligible'
BOOKED_TAG = 'appointment-booked'

TAG_DELIMITER = ','


class TagSet:
    """
    Ordered collection of customer tags.

    Parsed once from Shopify's comma-delimited string and serialised back
    only when talking to Shopify. Insertion order is preserved; duplicates
    already present are kept as-is.
    """

    def __init__(self, tokens: Iterable[str] = ()):
        self._tokens: List[str] = list(tokens)

    @classmethod
    def parse(cls, raw: Optional[str]) -> 'TagSet':
        """Split on commas, trim each token and drop empty ones."""
        tokens = (token.strip() for token in (raw or '').split(TAG_DELIMITER))
        return cls(token for token in tokens if token)

    def without(self, tag: str) -> 'TagSet':
        """Copy with every occurrence of tag removed."""
        return TagSet(token for token in self._tokens if token != tag)

    def with_tag(self, tag: str) -> 'TagSet':
        """Copy with tag appended, unless it is already present."""
        if tag in self:
            return TagSet(self._tokens)
        return TagSet(self._tokens + [tag])

    def serialize(self) -> str:
        return TAG_DELIMITER.join(self._tokens)

    def __contains__(self, tag: object) -> bool:
        return tag in self._tokens

    def __iter__(self) -> Iterator[str]:
        return iter(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TagSet):
            return NotImplemented
        return self._tokens == other._tokens

    def __repr__(self) -> str:
        return f'TagSet({self._tokens!r})'

    def __str__(self) -> str:
        return self.serialize()


def mark_booked(tags: TagSet, eligible_tag: str = ELIGIBLE_TAG, booked_tag: str = BOOKED_TAG) -> TagSet:
    """Swap the eligible marker for the booked marker."""
    return tags.without(eligible_tag).with_tag(booked_tag)


def compute_booked_tags(
    current_tags: Optional[str],
    eligible_tag: str = ELIGIBLE_TAG,
    booked_tag: str = BOOKED_TAG
) -> str:
    """
    Compute the tag string for a customer who has just booked.

    Pure and idempotent: feeding the output back in returns it unchanged.

    Example:
        >>> compute_booked_tags('vip, appointment-eligible ,  newsletter')
        'vip,newsletter,appointment-booked'
    """
    return mark_booked(TagSet.parse(current_tags), eligible_tag, booked_tag).serialize()


@dataclass
class ReconciliationResult:
    """Outcome of one reconciliation."""
    previous_tags: str
    new_tags: str
    tags_updated: bool = True
    customer: Dict[str, Any] = field(default_factory=dict)


def has_known_tags(known_tags: Optional[str]) -> bool:
    """True when the caller actually supplied a tag string (empty does not count)."""
    return known_tags is not None and known_tags != ''


class TagReconciler:
    """
    Applies the booked-appointment tag transition to one Shopify customer.

    Usage:
        reconciler = TagReconciler(ShopifySettings.from_config(app.config))
        result = reconciler.reconcile(customer_id, known_tags)
    """

    def __init__(
        self,
        settings: ShopifySettings,
        client_factory: Callable[[ShopifySettings], ShopifyClient] = None,
        eligible_tag: str = ELIGIBLE_TAG,
        booked_tag: str = BOOKED_TAG
    ):
        self.settings = settings
        self.client_factory = client_factory or ShopifyClient.from_settings
        self.eligible_tag = eligible_tag
        self.booked_tag = booked_tag

    def _get_client(self) -> ShopifyClient:
        """Check configuration, then build the client. No remote call happens here."""
        if not self.settings.is_complete:
            raise ConfigurationError(
                'Missing Shopify configuration. Please set SHOPIFY_ACCESS_TOKEN '
                'and SHOP_DOMAIN environment variables.'
            )
        return self.client_factory(self.settings)

    def resolve_current_tags(
        self,
        client: ShopifyClient,
        customer_id: Union[str, int],
        known_tags: Optional[str] = None
    ) -> str:
        """
        Return the tag string to reconcile from.

        The caller's copy wins when supplied; otherwise Shopify is asked.
        """
        if has_known_tags(known_tags):
            return known_tags

        logger.info(f'Fetching current tags for customer {customer_id} from Shopify')
        customer = client.get_customer(customer_id)
        return customer.get('tags') or ''

    def preview(self, customer_id: Union[str, int], known_tags: Optional[str] = None) -> Tuple[str, str]:
        """
        Resolve and compute without writing anything back.

        Returns:
            Tuple of (previous_tags, new_tags)
        """
        client = self._get_client()
        current_tags = self.resolve_current_tags(client, customer_id, known_tags)
        return current_tags, compute_booked_tags(current_tags, self.eligible_tag, self.booked_tag)

    def reconcile(self, customer_id: Union[str, int], known_tags: Optional[str] = None) -> ReconciliationResult:
        """
        Mark a customer as booked in Shopify.

        Args:
            customer_id: Shopify customer ID
            known_tags: Tag string the caller already holds, if any

        Returns:
            ReconciliationResult with before/after tags and Shopify's record

        Raises:
            ConfigurationError: Token or shop domain not configured
            ShopifyError: Fetch or update failed
        """
        client = self._get_client()

        logger.info(f'Updating tags for customer {customer_id} (known tags: {known_tags!r})')

        current_tags = self.resolve_current_tags(client, customer_id, known_tags)
        new_tags = compute_booked_tags(current_tags, self.eligible_tag, self.booked_tag)

        logger.info(f'Updating tags from "{current_tags}" to "{new_tags}"')

        customer = client.update_customer_tags(customer_id, new_tags)

        logger.info(f'Tags updated successfully for customer {customer_id}')

        # Reported as updated even when the tags were already correct
        return ReconciliationResult(
            previous_tags=current_tags,
            new_tags=new_tags,
            tags_updated=True,
            customer=customer
        )
