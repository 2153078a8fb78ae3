"""
Transaction extensions - the signed-data contributors of an extrinsic.

The runtime is configured with a fixed, ordered list of ten extensions.
Each contributes "explicit" bytes (carried inside the extrinsic) and
"implicit" bytes (only mixed into the signing payload). Order matters:
the node rebuilds the same payload and any deviation breaks signature
verification.

Only the immortal era and a zero tip are supported.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, NamedTuple

from ..utils import DecodeError, decode_hex
from .scale import U32_MAX, U64_MAX, compact_encode, encode_u32

logger = logging.getLogger(__name__)

GENESIS_HASH_LENGTH = 32

IMMORTAL_ERA = b"\x00"
DEFAULT_TIP = 0
METADATA_HASH_DISABLED = b"\x00"
# Option<Hash>::None, the only valid implicit value while the mode is disabled.
METADATA_HASH_NONE = b"\x00"


@dataclass(frozen=True)
class ChainMetadata:
    """
    Snapshot of chain state required to sign exactly one extrinsic.

    Attributes:
        genesis_hash: 32-byte genesis block hash
        spec_version: Runtime spec version (u32)
        transaction_version: Runtime transaction version (u32)
        nonce: Account nonce (u64)
    """
    genesis_hash: bytes
    spec_version: int
    transaction_version: int
    nonce: int

    def __post_init__(self) -> None:
        if not isinstance(self.genesis_hash, (bytes, bytearray)):
            raise DecodeError(
                f"Invalid genesis hash: expected bytes, got {type(self.genesis_hash).__name__}"
            )
        if len(self.genesis_hash) != GENESIS_HASH_LENGTH:
            raise DecodeError(
                f"Invalid genesis hash: expected {GENESIS_HASH_LENGTH} bytes, "
                f"got {len(self.genesis_hash)}"
            )
        for name, value, limit in (
            ("spec_version", self.spec_version, U32_MAX),
            ("transaction_version", self.transaction_version, U32_MAX),
            ("nonce", self.nonce, U64_MAX),
        ):
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"{name} must be an integer, got {value!r}")
            if not 0 <= value <= limit:
                raise ValueError(f"{name} out of range: {value}")

    @classmethod
    def from_hex(
        cls,
        genesis_hash: str,
        spec_version: int,
        transaction_version: int,
        nonce: int,
    ) -> "ChainMetadata":
        return cls(
            genesis_hash=decode_hex(genesis_hash, GENESIS_HASH_LENGTH, "genesis hash"),
            spec_version=spec_version,
            transaction_version=transaction_version,
            nonce=nonce,
        )


def _empty(metadata: ChainMetadata) -> bytes:
    return b""


class Extension(NamedTuple):
    name: str
    explicit: Callable[[ChainMetadata], bytes]
    implicit: Callable[[ChainMetadata], bytes]


# Runtime TxExtension order. Do not reorder.
TX_EXTENSIONS: tuple[Extension, ...] = (
    Extension("CheckNonZeroSender", _empty, _empty),
    Extension("CheckSpecVersion", _empty, lambda m: encode_u32(m.spec_version)),
    Extension("CheckTxVersion", _empty, lambda m: encode_u32(m.transaction_version)),
    Extension("CheckGenesis", _empty, lambda m: m.genesis_hash),
    # Immortal era checks against the genesis block, so the checkpoint hash
    # is the genesis hash. A mortal era would need the birth block hash here.
    Extension("CheckMortality", lambda m: IMMORTAL_ERA, lambda m: m.genesis_hash),
    Extension("CheckNonce", lambda m: compact_encode(m.nonce), _empty),
    Extension("CheckWeight", _empty, _empty),
    Extension("ChargeTransactionPayment", lambda m: compact_encode(DEFAULT_TIP), _empty),
    Extension("CheckMetadataHash", lambda m: METADATA_HASH_DISABLED, lambda m: METADATA_HASH_NONE),
    Extension("WeightReclaim", _empty, _empty),
)


class ExtensionPayload(NamedTuple):
    explicit: bytes
    implicit: bytes


def build_extension_payload(metadata: ChainMetadata) -> ExtensionPayload:
    """Concatenate the explicit and implicit contributions of every extension."""
    explicit = b"".join(ext.explicit(metadata) for ext in TX_EXTENSIONS)
    implicit = b"".join(ext.implicit(metadata) for ext in TX_EXTENSIONS)
    logger.debug(
        "Extension payload built: nonce=%d explicit=%d bytes implicit=%d bytes",
        metadata.nonce,
        len(explicit),
        len(implicit),
    )
    return ExtensionPayload(explicit=explicit, implicit=implicit)


def signing_payload(call_data: bytes, metadata: ChainMetadata) -> bytes:
    """Build the bytes that get signed: call ++ explicit ++ implicit."""
    extensions = build_extension_payload(metadata)
    return bytes(call_data) + extensions.explicit + extensions.implicit
