"""
Theurgy Confirm - Decode the events of a submitted extrinsic.

Reads the chain-submission service response and extracts either the new
agent address (AgentRegistered) or the run id (AgentCallQueued). A missing
event means the effect of the extrinsic could not be confirmed.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from ..pneuma.events import (
    MissingEventError,
    parse_agent_call_queued_event,
    parse_agent_registered_event,
    require_event,
)
from ..schema.models import SubmitResponse
from ..schema.schemas import SchemaValidationError
from ..sigil.keys import get_ss58_format

AGENT_REGISTERED = "agent-registered"
AGENT_CALL_QUEUED = "agent-call-queued"


@click.command()
@click.option(
    "--response",
    "response_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON file with the chain-submission service response",
)
@click.option(
    "--expect",
    required=True,
    type=click.Choice([AGENT_REGISTERED, AGENT_CALL_QUEUED]),
    help="Which event to look for",
)
def confirm(response_path: Path, expect: str) -> None:
    """Extract the agent address or run id from submitted events."""
    try:
        ss58_format = get_ss58_format()
    except ValueError as exc:
        click.secho(f"ERROR: {exc}", fg="red")
        sys.exit(1)

    try:
        response = SubmitResponse.from_path(response_path)
    except SchemaValidationError as exc:
        click.secho(f"ERROR: {exc}", fg="red")
        for error in exc.errors:
            click.echo(f"  - {error}")
        sys.exit(1)

    try:
        if expect == AGENT_REGISTERED:
            address = require_event(
                parse_agent_registered_event(response.events, ss58_format),
                "AgentRegistered",
            )
            click.secho("SUCCESS: Agent registered!", fg="green")
            click.echo(f"  Address: {address}")
        else:
            run_id = require_event(
                parse_agent_call_queued_event(response.events),
                "AgentCallQueued",
            )
            click.secho("SUCCESS: Agent call queued!", fg="green")
            click.echo(f"  Run ID: {run_id}")
    except MissingEventError as exc:
        click.secho(f"FAILED: {exc}", fg="red")
        click.echo(f"  Block: #{response.block_number} ({response.block_hash})")
        sys.exit(exc.exit_code)
