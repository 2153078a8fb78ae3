"""
Chain event decoding.

The chain-submission service returns the events emitted by the block that
included our extrinsic. Each event is ``{pallet, variant, data}`` where
``data["bytes"]`` is the hex-encoded SCALE payload of the event fields.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, TypeVar

from ..sigil.ss58 import ACCOUNT_ID_LENGTH, DEFAULT_SS58_FORMAT, ss58_encode
from ..utils import DecodeError, decode_hex

logger = logging.getLogger(__name__)

AGENTS_PALLET = "Agents"
AGENT_REGISTERED = "AgentRegistered"
AGENT_CALL_QUEUED = "AgentCallQueued"

RUN_ID_LENGTH = 8

T = TypeVar("T")


class MissingEventError(RuntimeError):
    exit_code: int = 3


@dataclass(frozen=True)
class ChainEvent:
    pallet: str
    variant: str
    data: Any = field(default_factory=dict)

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "ChainEvent":
        return cls(
            pallet=payload["pallet"],
            variant=payload["variant"],
            data=payload.get("data", {}),
        )

    def matches(self, pallet: str, variant: str) -> bool:
        return self.pallet == pallet and self.variant == variant

    def raw_bytes(self) -> Optional[bytes]:
        """Return the decoded ``data["bytes"]`` blob, or None if absent.

        Raises:
            DecodeError: If the blob is present but not valid hex
        """
        if not isinstance(self.data, dict):
            return None
        blob = self.data.get("bytes")
        if not isinstance(blob, str):
            return None
        return decode_hex(blob, label=f"{self.pallet}.{self.variant} event data")


def _first_blob(events: Iterable[ChainEvent], variant: str, min_length: int) -> Optional[bytes]:
    """Return the blob of the first matching event that is long enough.

    Matching events without a blob, or with a short one, are skipped. A
    malformed blob stops the scan.
    """
    for event in events:
        if not event.matches(AGENTS_PALLET, variant):
            continue
        try:
            blob = event.raw_bytes()
        except DecodeError as exc:
            logger.debug("Ignoring %s.%s: %s", AGENTS_PALLET, variant, exc)
            return None
        if blob is None or len(blob) < min_length:
            continue
        return blob
    return None


def parse_agent_registered_event(
    events: Iterable[ChainEvent],
    ss58_format: int = DEFAULT_SS58_FORMAT,
) -> Optional[str]:
    """
    Find the address of a newly registered agent.

    Returns:
        SS58 address from the first AgentRegistered event, or None
    """
    blob = _first_blob(events, AGENT_REGISTERED, ACCOUNT_ID_LENGTH)
    if blob is None:
        return None
    return ss58_encode(blob[:ACCOUNT_ID_LENGTH], ss58_format)


def parse_agent_call_queued_event(events: Iterable[ChainEvent]) -> Optional[int]:
    """
    Find the run id assigned to a queued agent call.

    Returns:
        Run id (u64, little-endian in the event) or None
    """
    blob = _first_blob(events, AGENT_CALL_QUEUED, RUN_ID_LENGTH)
    if blob is None:
        return None
    return int.from_bytes(blob[:RUN_ID_LENGTH], "little")


def require_event(value: Optional[T], description: str) -> T:
    """Turn an absent decode result into a MissingEventError."""
    if value is None:
        raise MissingEventError(f"{description} event not found; the operation's effect is unconfirmed.")
    return value
