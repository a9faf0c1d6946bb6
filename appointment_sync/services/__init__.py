"""
Services for appointment tag sync.
"""
from .shopify_client import ShopifyClient
from .tag_reconciler import (
    TagSet,
    TagReconciler,
    ReconciliationResult,
    compute_booked_tags,
    ELIGIBLE_TAG,
    BOOKED_TAG
)
