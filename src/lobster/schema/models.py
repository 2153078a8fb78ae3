from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..pneuma.events import ChainEvent
from ..pneuma.extensions import ChainMetadata
from ..utils import decode_hex
from .schemas import (
    BUILD_EXTRINSIC_RESPONSE_SCHEMA,
    SUBMIT_RESPONSE_SCHEMA,
    SchemaRegistry,
    SchemaValidationError,
    load_json,
)


@dataclass(frozen=True)
class BuildExtrinsicResponse:
    """Call data and chain metadata returned by the call-building service."""
    call_data_hex: str
    nonce: int
    genesis_hash: str
    spec_version: int
    transaction_version: int

    @classmethod
    def from_dict(cls, payload: dict[str, Any], registry: SchemaRegistry | None = None) -> "BuildExtrinsicResponse":
        registry = registry or SchemaRegistry.default()
        registry.validate_instance(payload, BUILD_EXTRINSIC_RESPONSE_SCHEMA)
        return cls(
            call_data_hex=payload["call_data_hex"],
            nonce=payload["nonce"],
            genesis_hash=payload["genesis_hash"],
            spec_version=payload["spec_version"],
            transaction_version=payload["transaction_version"],
        )

    @classmethod
    def from_path(cls, path: Path, registry: SchemaRegistry | None = None) -> "BuildExtrinsicResponse":
        return cls.from_dict(load_json(path), registry=registry)

    def call_data(self) -> bytes:
        return decode_hex(self.call_data_hex, label="call data")

    def metadata(self) -> ChainMetadata:
        return ChainMetadata.from_hex(
            genesis_hash=self.genesis_hash,
            spec_version=self.spec_version,
            transaction_version=self.transaction_version,
            nonce=self.nonce,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "call_data_hex": self.call_data_hex,
            "nonce": self.nonce,
            "genesis_hash": self.genesis_hash,
            "spec_version": self.spec_version,
            "transaction_version": self.transaction_version,
        }


@dataclass(frozen=True)
class SubmitResponse:
    """Inclusion result returned by the chain-submission service."""
    block_hash: str
    block_number: int
    events: tuple[ChainEvent, ...]

    @classmethod
    def from_dict(cls, payload: dict[str, Any], registry: SchemaRegistry | None = None) -> "SubmitResponse":
        registry = registry or SchemaRegistry.default()
        registry.validate_instance(payload, SUBMIT_RESPONSE_SCHEMA)
        return cls(
            block_hash=payload["block_hash"],
            block_number=payload["block_number"],
            events=tuple(ChainEvent.from_dict(event) for event in payload["events"]),
        )

    @classmethod
    def from_path(cls, path: Path, registry: SchemaRegistry | None = None) -> "SubmitResponse":
        return cls.from_dict(load_json(path), registry=registry)


__all__ = [
    "BuildExtrinsicResponse",
    "SubmitResponse",
    "SchemaValidationError",
]
