"""
Theurgy Donate - Donate AMOUNT to the configured campaign.

The campaign pulls the tokens with transferFrom, so an approval of at
least AMOUNT must already be in place (see ``donorflow approve``).
"""

from __future__ import annotations

import click

from ..errors import DonorflowError
from .common import connect, echo_receipt, fail, settings_from_context, status


@click.command()
@click.pass_context
def donate(ctx: click.Context) -> None:
    """Donate AMOUNT to CAMPAIGN_ADDRESS."""
    try:
        settings = settings_from_context(ctx)
        interaction = connect(settings)
        status(f"Donating {settings.amount} to {settings.campaign_address}")
        echo_receipt(interaction.donate(settings.campaign_address, settings.amount))
    except DonorflowError as exc:
        fail(exc)
