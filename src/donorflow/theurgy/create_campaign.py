"""
Theurgy Create Campaign - Deploy a campaign through the factory.

The schedule is fixed: start in 10 seconds, end after 365 days, pay out
50% at day 30 and 50% at day 60.  The beneficiary is the signer.
"""

from __future__ import annotations

from typing import Optional

import click

from ..campaign import DEFAULT_TARGET_AMOUNT
from ..errors import DonorflowError
from ..metadata import Metadata
from .common import (
    connect,
    echo_receipt,
    fail,
    report_accepted_tokens,
    settings_from_context,
    status,
)


@click.command("create-campaign")
@click.option(
    "--target-amount",
    default=DEFAULT_TARGET_AMOUNT,
    type=int,
    show_default=True,
    help="Funding target in the asset's smallest unit",
)
@click.option("--asset", default=None, help="Asset address (default: DEPOSIT_TOKEN_ADDRESS)")
@click.option("--title", default=None, help="Campaign title stored as JSON metadata")
@click.pass_context
def create_campaign(
    ctx: click.Context,
    target_amount: int,
    asset: Optional[str],
    title: Optional[str],
) -> None:
    """Create a campaign with the fixed two-milestone schedule."""
    from ..sigil.eth import parse_address

    metadata = Metadata(title=title).to_bytes() if title is not None else b""

    try:
        settings = settings_from_context(ctx)
        asset_address = parse_address(asset) if asset else None
        interaction = connect(settings)
        status(f"Creating campaign via factory {settings.factory_address}")
        created = interaction.create_campaign(
            settings.factory_address,
            asset=asset_address,
            target_amount=target_amount,
            metadata=metadata,
        )
    except DonorflowError as exc:
        fail(exc)

    report_accepted_tokens(created)
    echo_receipt(created.receipt)
