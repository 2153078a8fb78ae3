"""
Lobster CLI

Command-line interface for signing Proof of Lobster extrinsics.

Identity = sr25519 key derived from a BIP-39 mnemonic (LOBSTER_MNEMONIC).
The call-building service supplies call data and chain metadata; this
tool signs locally and prints the extrinsic for submission.

Commands:
  sign     - Sign call data into a submittable extrinsic
  inspect  - Decode a signed extrinsic
  confirm  - Decode the events of a submitted extrinsic
  whoami   - Show current signer address
  info     - Show system information
"""

from __future__ import annotations

import logging
import sys

import click

from .sigil.crypto import SigningError
from .sigil.keys import LOBSTER_ENV, get_address, get_ss58_format


# ============ Constants ============

VERSION = "0.3.0"


# ============ Banner ============


def _print_banner(compact: bool = False) -> None:
    """Print the Lobster CLI banner.

    Args:
        compact: If True, print a single-line banner (for subcommands).
    """
    if compact:
        click.echo(
            click.style("  ◆ ", fg="red")
            + click.style("L O B S T E R", fg="bright_white", bold=True)
            + click.style(f"  v{VERSION}", dim=True)
        )
        click.echo()
        return

    border = click.style("  ◆ ═══════════════════════════════════════ ◆", fg="red")
    click.echo()
    click.echo(border)
    click.echo()
    click.echo(
        click.style("        L O B S T E R", fg="bright_white", bold=True)
        + click.style(f"          v{VERSION}", dim=True)
    )
    click.secho("        ───── Proof of Lobster ─────", fg="red")
    click.echo()
    click.echo(border)
    click.echo()


# ============ Main CLI Group ============


@click.group(invoke_without_command=True)
@click.version_option(version=VERSION, prog_name="lobster")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Lobster — Proof of Lobster extrinsic signer."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )
    if ctx.invoked_subcommand is None:
        _print_banner()
        click.echo(ctx.get_help())


# ============ Top-level Commands ============

from .theurgy.sign import sign
from .theurgy.inspect import inspect
from .theurgy.confirm import confirm

cli.add_command(sign)
cli.add_command(inspect)
cli.add_command(confirm)


# ============ Identity ============


@cli.command()
def whoami() -> None:
    """Show current signer identity."""
    try:
        address = get_address()
        click.echo(f"Address: {address}")
    except (ValueError, SigningError) as exc:
        click.echo(f"No signer configured: {exc}")
        click.echo(f"Set LOBSTER_MNEMONIC in the environment or in {LOBSTER_ENV}.")
        sys.exit(1)


# ============ Info ============


@cli.command()
def info() -> None:
    """Show system information."""
    _print_banner()

    # ── Status ──
    click.secho("  Status ─────────────────────────────────", fg="red")
    click.echo()

    try:
        address = get_address()
        click.echo(
            click.style("  Address:     ", dim=True)
            + click.style(address, fg="bright_white")
        )
    except (ValueError, SigningError):
        click.echo(
            click.style("  Address:     ", dim=True)
            + click.style("not configured", fg="yellow")
            + click.style("  (set LOBSTER_MNEMONIC)", dim=True)
        )

    try:
        ss58_text = click.style(str(get_ss58_format()), fg="bright_white")
    except ValueError as exc:
        ss58_text = click.style(str(exc), fg="yellow")
    click.echo(click.style("  SS58 format: ", dim=True) + ss58_text)
    click.echo(
        click.style("  Config:      ", dim=True)
        + click.style(str(LOBSTER_ENV), fg="bright_white")
    )

    click.echo()

    # ── Commands ──
    click.secho("  Commands ───────────────────────────────", fg="red")
    click.echo()

    commands = [
        ("sign    ", "Sign call data into an extrinsic"),
        ("inspect ", "Decode a signed extrinsic"),
        ("confirm ", "Decode events after submission"),
        ("whoami  ", "Show current signer address"),
    ]
    for cmd, desc in commands:
        click.echo(
            click.style("  ", dim=True)
            + click.style(cmd, fg="bright_white", bold=True)
            + click.style("  ◇  ", fg="red")
            + click.style(desc, dim=True)
        )

    click.echo()


# ============ Entry Points ============


def main() -> None:
    """Lobster CLI entry point."""
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
