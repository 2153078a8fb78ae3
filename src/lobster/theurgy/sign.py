"""
Theurgy Sign - Build a signed extrinsic.

Takes the call-building service response (as a JSON file or as explicit
options), signs it with the configured mnemonic and prints the extrinsic
hex ready for the chain-submission service.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import click

from ..pneuma.extensions import ChainMetadata
from ..pneuma.extrinsic import build_signed_extrinsic
from ..schema.models import BuildExtrinsicResponse
from ..schema.schemas import SchemaValidationError
from ..sigil.crypto import SigningError
from ..sigil.keys import get_keypair, get_ss58_format, load_mnemonic
from ..utils import DecodeError, decode_hex


@click.command()
@click.option(
    "--response",
    "response_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON file with the call-building service response",
)
@click.option("--call-data", default=None, help="Hex-encoded call data")
@click.option("--genesis-hash", default=None, help="Hex-encoded 32-byte genesis hash")
@click.option("--nonce", default=None, type=int, help="Account nonce")
@click.option("--spec-version", default=None, type=int, help="Runtime spec version")
@click.option("--tx-version", default=None, type=int, help="Runtime transaction version")
@click.option("--quiet", "-q", is_flag=True, help="Print only the extrinsic hex")
def sign(
    response_path: Optional[Path],
    call_data: Optional[str],
    genesis_hash: Optional[str],
    nonce: Optional[int],
    spec_version: Optional[int],
    tx_version: Optional[int],
    quiet: bool,
) -> None:
    """
    Sign call data and print the extrinsic hex.

    Key material stays local; only the finished extrinsic is printed.
    """
    explicit = (call_data, genesis_hash, nonce, spec_version, tx_version)

    try:
        ss58_format = get_ss58_format()
    except ValueError as exc:
        click.secho(f"ERROR: {exc}", fg="red")
        sys.exit(1)

    try:
        if response_path is not None:
            response = BuildExtrinsicResponse.from_path(response_path)
            payload = response.call_data()
            metadata = response.metadata()
        elif all(value is not None for value in explicit):
            payload = decode_hex(call_data, label="call data")
            metadata = ChainMetadata.from_hex(
                genesis_hash=genesis_hash,
                spec_version=spec_version,
                transaction_version=tx_version,
                nonce=nonce,
            )
        else:
            click.secho(
                "ERROR: Provide --response or all of --call-data, --genesis-hash, "
                "--nonce, --spec-version, --tx-version",
                fg="red",
            )
            sys.exit(1)
    except SchemaValidationError as exc:
        click.secho(f"ERROR: {exc}", fg="red")
        for error in exc.errors:
            click.echo(f"  - {error}")
        sys.exit(1)
    except (DecodeError, ValueError) as exc:
        click.secho(f"ERROR: {exc}", fg="red")
        sys.exit(1)

    try:
        keypair = get_keypair(load_mnemonic())
    except (ValueError, SigningError) as exc:
        click.secho(f"Wallet error: {exc}", fg="red")
        sys.exit(1)

    try:
        extrinsic_hex = build_signed_extrinsic(payload, metadata, keypair)
    except SigningError as exc:
        click.secho(f"Signing failed: {exc}", fg="red")
        sys.exit(1)

    if quiet:
        click.echo(extrinsic_hex)
        return

    click.echo("=== Lobster Sign ===")
    click.echo("")
    click.echo(f"  Signer: {keypair.ss58_address(ss58_format)}")
    click.echo(f"  Nonce: {metadata.nonce}")
    click.echo(f"  Call data: {len(payload)} bytes")
    click.echo("")
    click.echo(extrinsic_hex)
