"""
Theurgy Approve - Allow the campaign to pull deposit tokens.
"""

from __future__ import annotations

from typing import Optional

import click

from ..errors import DonorflowError
from .common import connect, echo_receipt, fail, settings_from_context, status


@click.command()
@click.option(
    "--mint/--no-mint",
    default=None,
    help="Mint AMOUNT to the signer before approving (default: MINT_BEFORE_APPROVE)",
)
@click.option("--spender", default=None, help="Spender address (default: CAMPAIGN_ADDRESS)")
@click.pass_context
def approve(ctx: click.Context, mint: Optional[bool], spender: Optional[str]) -> None:
    """Approve a spender for AMOUNT deposit tokens."""
    from ..sigil.eth import parse_address

    try:
        settings = settings_from_context(ctx)
        target = parse_address(spender) if spender else settings.campaign_address
        interaction = connect(settings, mint=mint)
        status(f"Approving {target} for {settings.amount}")
        for receipt in interaction.approve(target, settings.amount):
            echo_receipt(receipt)
    except DonorflowError as exc:
        fail(exc)
