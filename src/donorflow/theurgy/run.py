"""
Theurgy Run - The full donation sequence.

Flow:
1. Approve the campaign to spend AMOUNT deposit tokens (mint first if enabled)
2. Create a campaign through the factory (only with --create-campaign)
3. Donate AMOUNT to the campaign

Each step waits for its transaction to be mined.  The first failure
aborts the run, so a failed approval never reaches the donation.
"""

from __future__ import annotations

from typing import Callable, Optional

import click

from ..config import Settings
from ..errors import DonorflowError
from ..interaction import ContractInteraction
from .common import (
    connect,
    echo_receipt,
    fail,
    report_accepted_tokens,
    settings_from_context,
    status,
)


def drive(
    interaction: ContractInteraction,
    settings: Settings,
    create_campaign: bool = False,
    echo: Callable[[dict], None] = echo_receipt,
) -> None:
    status(f"Approving {settings.campaign_address} for {settings.amount}")
    for receipt in interaction.approve(settings.campaign_address, settings.amount):
        echo(receipt)

    if create_campaign:
        status(f"Creating campaign via factory {settings.factory_address}")
        created = interaction.create_campaign(settings.factory_address)
        report_accepted_tokens(created)
        echo(created.receipt)

    status(f"Donating {settings.amount} to {settings.campaign_address}")
    echo(interaction.donate(settings.campaign_address, settings.amount))


@click.command()
@click.option(
    "--create-campaign/--no-create-campaign",
    default=False,
    help="Also create a campaign through the factory before donating",
)
@click.option(
    "--mint/--no-mint",
    default=None,
    help="Mint AMOUNT to the signer before approving (default: MINT_BEFORE_APPROVE)",
)
@click.pass_context
def run(ctx: click.Context, create_campaign: bool, mint: Optional[bool]) -> None:
    """
    Approve, optionally create a campaign, then donate.

    Reads RPC_URL, PRIVATE_KEY, FACTORY_ADDRESS, DEPOSIT_TOKEN_ADDRESS,
    CAMPAIGN_ADDRESS and AMOUNT from the environment or .env file.
    """
    try:
        settings = settings_from_context(ctx)
        interaction = connect(settings, mint=mint)
        status(f"  Signer: {interaction.client.address}")
        drive(interaction, settings, create_campaign=create_campaign)
    except DonorflowError as exc:
        fail(exc)

    status("Done.", fg="green")
