"""
Donorflow CLI

Command-line interface for driving a deposit token, campaign factory and
campaign deployment from a single signing key.

Commands:
  run              - Approve, optionally create a campaign, donate
  approve          - (Mint and) approve the campaign as token spender
  create-campaign  - Create a campaign through the factory
  donate           - Donate to the configured campaign
  metadata         - Decode hex-encoded campaign metadata
  whoami           - Show the signer address
  info             - Show resolved configuration
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import click

from .config import load_settings
from .errors import DonorflowError, MetadataError
from .metadata import decode as decode_metadata
from .theurgy.common import fail


# ============ Constants ============

VERSION = "0.3.0"


# ============ Banner ============


def _print_banner() -> None:
    click.echo(
        click.style("  ◆ ", fg="cyan")
        + click.style("D O N O R F L O W", fg="bright_white", bold=True)
        + click.style(f"  v{VERSION}", dim=True)
    )
    click.echo()


# ============ Main CLI Group ============


@click.group(invoke_without_command=True)
@click.version_option(version=VERSION, prog_name="donorflow")
@click.option(
    "--env-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Load configuration from this .env file (default: ./.env)",
)
@click.pass_context
def cli(ctx: click.Context, env_file: Optional[Path]) -> None:
    """Donorflow — approve, create and donate to fundraising campaigns."""
    ctx.ensure_object(dict)
    ctx.obj["env_file"] = env_file
    if ctx.invoked_subcommand is None:
        _print_banner()
        click.echo(ctx.get_help())


# ============ Top-level Commands ============

from .theurgy.run import run
from .theurgy.approve import approve
from .theurgy.create_campaign import create_campaign
from .theurgy.donate import donate

cli.add_command(run)
cli.add_command(approve)
cli.add_command(create_campaign)
cli.add_command(donate)


# ============ Metadata ============


@cli.command()
@click.argument("hex_string")
def metadata(hex_string: str) -> None:
    """Decode 0x-prefixed hex campaign metadata and print its title."""
    try:
        record = decode_metadata(hex_string)
    except MetadataError as exc:
        fail(exc)
    click.echo(record.describe(), nl=False)


# ============ Identity ============


@cli.command()
@click.pass_context
def whoami(ctx: click.Context) -> None:
    """Show the signer address derived from PRIVATE_KEY."""
    from .sigil.eth import get_address

    try:
        settings = load_settings(ctx.obj.get("env_file"))
        click.echo(f"Address: {get_address(settings.private_key)}")
    except DonorflowError as exc:
        fail(exc)


# ============ Info ============


@cli.command()
@click.pass_context
def info(ctx: click.Context) -> None:
    """Show resolved configuration (the private key is masked)."""
    _print_banner()

    try:
        settings = load_settings(ctx.obj.get("env_file"))
    except DonorflowError as exc:
        fail(exc)

    click.secho("  Configuration ──────────────────────────", fg="cyan")
    click.echo()
    for key, value in settings.redacted().items():
        click.echo(
            click.style(f"  {key:<22}", dim=True)
            + click.style(str(value), fg="bright_white")
        )
    click.echo()


# ============ Entry Points ============


def main() -> None:
    """Donorflow CLI entry point."""
    # Ensure UTF-8 output on Windows (for Unicode box-drawing / symbols)
    if sys.platform == "win32":
        try:
            sys.stdout.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
            sys.stderr.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
        except (AttributeError, OSError):
            pass  # Fallback: old Python or non-tty
    cli()


if __name__ == "__main__":
    main()
