"""
Theurgy Inspect - Decode a signed extrinsic.
"""

from __future__ import annotations

import json
import sys

import click

from ..pneuma.extrinsic import parse_extrinsic
from ..sigil.keys import get_ss58_format
from ..sigil.ss58 import ss58_encode
from ..utils import DecodeError


@click.command()
@click.argument("extrinsic_hex")
@click.option("--json", "as_json", is_flag=True, help="Print fields as JSON")
def inspect(extrinsic_hex: str, as_json: bool) -> None:
    """Decode a signed extrinsic built by `lobster sign`."""
    try:
        ss58_format = get_ss58_format()
    except ValueError as exc:
        click.secho(f"ERROR: {exc}", fg="red")
        sys.exit(1)

    try:
        parsed = parse_extrinsic(extrinsic_hex)
    except DecodeError as exc:
        click.secho(f"ERROR: {exc}", fg="red")
        sys.exit(1)

    fields = parsed.to_dict()
    fields["signer"] = ss58_encode(parsed.public_key, ss58_format)

    if as_json:
        click.echo(json.dumps(fields, indent=2))
        return

    click.echo(f"  Length:    {fields['length']} bytes")
    click.echo(f"  Version:   0x{parsed.version:02x} (signed={parsed.is_signed})")
    click.echo(f"  Signer:    {fields['signer']}")
    click.echo(f"  Nonce:     {fields['nonce']}")
    click.echo(f"  Tip:       {fields['tip']}")
    click.echo("  Era:       immortal")
    click.echo(f"  Call data: {fields['call_data']}")
