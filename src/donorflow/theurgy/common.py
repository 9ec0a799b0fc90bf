"""Shared plumbing for the command modules."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import NoReturn, Optional

import click

from ..config import Settings, load_settings
from ..errors import DonorflowError
from ..interaction import CampaignCreation, ContractInteraction
from ..pneuma.client import ChainClient


def status(message: str, **style) -> None:
    """Progress output; kept on stderr so stdout carries only results."""
    click.secho(message, err=True, **style)


def echo_receipt(receipt: dict) -> None:
    click.echo(f"Transaction Receipt: {json.dumps(receipt, sort_keys=True)}")


def report_accepted_tokens(created: CampaignCreation) -> None:
    status(f"Campaign factory accepted tokens are {created.accepted_tokens}")
    if created.params.asset.lower() not in {t.lower() for t in created.accepted_tokens}:
        status(f"  Warning: asset {created.params.asset} is not an accepted token", fg="yellow")


def fail(exc: DonorflowError) -> NoReturn:
    click.secho(f"ERROR: {exc}", fg="red", err=True)
    sys.exit(exc.exit_code)


def settings_from_context(ctx: click.Context) -> Settings:
    env_file: Optional[Path] = (ctx.obj or {}).get("env_file")
    return load_settings(env_file)


def connect(settings: Settings, mint: Optional[bool] = None) -> ContractInteraction:
    """Build the signer-bound client and the contract interaction on top."""
    client = ChainClient.connect(
        settings.rpc_url,
        settings.private_key,
        receipt_timeout=settings.receipt_timeout,
    )
    return ContractInteraction(
        client=client,
        deposit_token=settings.deposit_token_address,
        mint_before_approve=settings.mint_before_approve if mint is None else mint,
    )
