"""
CLI Commands for appointment tag sync.

Usage:
    flask appointments preview "vip, appointment-eligible"   # Show reconciled tags, no Shopify calls
    flask appointments reconcile 7890123456789               # Fetch tags from Shopify and mark booked
    flask appointments reconcile 7890123456789 --dry-run     # Fetch and compute, skip the write
"""
from .appointments import init_app as init_appointment_commands


def init_app(app):
    """Register all CLI commands with the Flask app."""
    init_appointment_commands(app)
