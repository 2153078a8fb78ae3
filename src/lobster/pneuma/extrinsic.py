"""
Extrinsic Builder - Assemble and sign extrinsics locally.

The call-building service supplies the encoded call and chain metadata;
the signature is produced here with the user's key so that key material
never leaves the client.

Wire layout (v4 signed extrinsic):

    [compact body length]
    [0x84]                    signed flag | version 4
    [0x00][public key: 32]    MultiAddress::Id
    [0x01][signature: 64]     MultiSignature::Sr25519
    [explicit extension bytes]
    [call data]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from ..sigil.crypto import PUBLIC_KEY_LENGTH, SIGNATURE_LENGTH, Keypair, sign_payload
from ..utils import DecodeError, decode_hex, encode_hex, short_hex
from .extensions import (
    IMMORTAL_ERA,
    METADATA_HASH_DISABLED,
    ChainMetadata,
    build_extension_payload,
)
from .scale import compact_decode, compact_encode

logger = logging.getLogger(__name__)

SIGNED_FLAG = 0x80
EXTRINSIC_VERSION = 4
SIGNED_EXTRINSIC_VERSION = SIGNED_FLAG | EXTRINSIC_VERSION  # 0x84

ADDRESS_ID = 0x00  # MultiAddress::Id
SIGNATURE_SR25519 = 0x01  # MultiSignature::Sr25519


def build_signed_extrinsic(call_data: bytes, metadata: ChainMetadata, keypair: Keypair) -> str:
    """
    Build and sign an extrinsic for submission.

    Args:
        call_data: SCALE-encoded call from the call-building service
        metadata: Chain metadata snapshot (nonce, genesis, versions)
        keypair: Signing capability

    Returns:
        Lowercase 0x-prefixed hex of the length-prefixed extrinsic

    Raises:
        SigningError: If the keypair is invalid or signing fails
    """
    call_data = bytes(call_data)
    extensions = build_extension_payload(metadata)
    payload = call_data + extensions.explicit + extensions.implicit

    signature = sign_payload(payload, keypair)
    public_key = bytes(keypair.public_key)

    body = b"".join(
        (
            bytes([SIGNED_EXTRINSIC_VERSION]),
            bytes([ADDRESS_ID]),
            public_key,
            bytes([SIGNATURE_SR25519]),
            signature,
            extensions.explicit,
            call_data,
        )
    )
    extrinsic = compact_encode(len(body)) + body

    logger.debug(
        "Built extrinsic: signer=%s nonce=%d call=%d bytes total=%d bytes",
        short_hex(public_key),
        metadata.nonce,
        len(call_data),
        len(extrinsic),
    )
    return encode_hex(extrinsic)


def build_extrinsic_from_response(response: Mapping[str, Any], keypair: Keypair) -> str:
    """
    Build a signed extrinsic from a call-building service response.

    The response carries ``call_data_hex``, ``nonce``, ``genesis_hash``,
    ``spec_version`` and ``transaction_version``. It is schema-validated
    and its hex fields are decoded before anything is signed.

    Raises:
        SchemaValidationError: If a field is missing or has the wrong type
        DecodeError: If call data or genesis hash is malformed
        SigningError: If signing fails
    """
    # schema.models imports this package
    from ..schema.models import BuildExtrinsicResponse

    parsed = BuildExtrinsicResponse.from_dict(dict(response))
    return build_signed_extrinsic(parsed.call_data(), parsed.metadata(), keypair)


@dataclass(frozen=True)
class ParsedExtrinsic:
    """Fields recovered from a signed extrinsic built by this module."""
    length: int
    body: bytes
    version: int
    public_key: bytes
    signature: bytes
    era: bytes
    nonce: int
    tip: int
    metadata_hash_mode: int
    call_data: bytes

    @property
    def is_signed(self) -> bool:
        return bool(self.version & SIGNED_FLAG)

    def to_dict(self) -> dict[str, Any]:
        return {
            "length": self.length,
            "version": self.version,
            "public_key": encode_hex(self.public_key),
            "signature": encode_hex(self.signature),
            "era": encode_hex(self.era),
            "nonce": self.nonce,
            "tip": self.tip,
            "metadata_hash_mode": self.metadata_hash_mode,
            "call_data": encode_hex(self.call_data),
        }


def _take(body: bytes, offset: int, size: int, label: str) -> tuple[bytes, int]:
    chunk = body[offset : offset + size]
    if len(chunk) != size:
        raise DecodeError(f"Extrinsic truncated while reading {label}")
    return chunk, offset + size


def parse_extrinsic(extrinsic_hex: str) -> ParsedExtrinsic:
    """
    Parse a signed extrinsic with the fixed extension layout.

    Raises:
        DecodeError: On a length mismatch, unknown tags, or truncation
    """
    raw = decode_hex(extrinsic_hex, label="extrinsic")
    length, consumed = compact_decode(raw)
    body = raw[consumed:]
    if len(body) != length:
        raise DecodeError(f"Extrinsic length prefix says {length} bytes, body has {len(body)}")

    offset = 0
    version_byte, offset = _take(body, offset, 1, "version")
    version = version_byte[0]
    if version != SIGNED_EXTRINSIC_VERSION:
        raise DecodeError(f"Unsupported extrinsic version byte: 0x{version:02x}")

    address_kind, offset = _take(body, offset, 1, "address kind")
    if address_kind[0] != ADDRESS_ID:
        raise DecodeError(f"Unsupported address kind: 0x{address_kind[0]:02x}")
    public_key, offset = _take(body, offset, PUBLIC_KEY_LENGTH, "public key")

    signature_kind, offset = _take(body, offset, 1, "signature kind")
    if signature_kind[0] != SIGNATURE_SR25519:
        raise DecodeError(f"Unsupported signature kind: 0x{signature_kind[0]:02x}")
    signature, offset = _take(body, offset, SIGNATURE_LENGTH, "signature")

    era, offset = _take(body, offset, 1, "era")
    if era != IMMORTAL_ERA:
        raise DecodeError("Only immortal eras are supported")

    nonce, consumed = compact_decode(body, offset)
    offset += consumed
    tip, consumed = compact_decode(body, offset)
    offset += consumed

    mode, offset = _take(body, offset, 1, "metadata hash mode")
    if mode != METADATA_HASH_DISABLED:
        raise DecodeError(f"Unsupported metadata hash mode: 0x{mode[0]:02x}")

    return ParsedExtrinsic(
        length=length,
        body=body,
        version=version,
        public_key=public_key,
        signature=signature,
        era=era,
        nonce=nonce,
        tip=tip,
        metadata_hash_mode=mode[0],
        call_data=body[offset:],
    )
