"""
CLI Commands for manual appointment tag fixes.

Useful when the scheduler's webhook delivery failed and an operator needs
to apply the booked transition by hand:

flask appointments reconcile 7890123456789 --tags "vip,appointment-eligible"
"""

import click
from flask import current_app
from flask.cli import with_appcontext

from ..config import ShopifySettings
from ..services.tag_reconciler import TagReconciler, compute_booked_tags, ELIGIBLE_TAG, BOOKED_TAG
from ..utils.exceptions import AppointmentSyncError


@click.group('appointments')
def appointments_cli():
    """Appointment tag commands."""
    pass


@appointments_cli.command('preview')
@click.argument('tags')
@with_appcontext
def preview_tags(tags):
    """Print the tags a booking would produce from TAGS. No remote calls."""
    config = current_app.config
    new_tags = compute_booked_tags(
        tags,
        config.get('ELIGIBLE_TAG', ELIGIBLE_TAG),
        config.get('BOOKED_TAG', BOOKED_TAG)
    )
    click.echo(f"Before: {tags}")
    click.echo(f"After:  {new_tags}")


@appointments_cli.command('reconcile')
@click.argument('customer_id')
@click.option('--tags', default=None, help='Current tags, skips the Shopify fetch')
@click.option('--dry-run', is_flag=True, help='Compute without writing to Shopify')
@with_appcontext
def reconcile_customer(customer_id, tags, dry_run):
    """
    Mark CUSTOMER_ID as booked in Shopify.

    Runs the same reconciliation the webhook does.
    """
    config = current_app.config
    reconciler = TagReconciler(
        ShopifySettings.from_config(config),
        eligible_tag=config.get('ELIGIBLE_TAG', ELIGIBLE_TAG),
        booked_tag=config.get('BOOKED_TAG', BOOKED_TAG)
    )

    try:
        if dry_run:
            previous_tags, new_tags = reconciler.preview(customer_id, tags)
        else:
            result = reconciler.reconcile(customer_id, tags)
            previous_tags, new_tags = result.previous_tags, result.new_tags
    except AppointmentSyncError as e:
        raise click.ClickException(e.message)

    click.echo(f"{'[DRY RUN] ' if dry_run else ''}Customer {customer_id}")
    click.echo(f"  Before: {previous_tags}")
    click.echo(f"  After:  {new_tags}")


def init_app(app):
    """Register appointment commands."""
    app.cli.add_command(appointments_cli)
