"""
Lobster signing primitives.

Provides:
- The keypair capability the extrinsic builder consumes
- The hash-before-sign rule for large signing payloads
- sr25519 signature verification
"""

from __future__ import annotations

import logging
from typing import Protocol

from ..utils import blake2_256, short_hex

logger = logging.getLogger(__name__)

# Payloads longer than this are replaced by their blake2-256 digest before
# signing. Fixed by the runtime.
SIGNING_HASH_THRESHOLD = 256

PUBLIC_KEY_LENGTH = 32
SIGNATURE_LENGTH = 64


class CryptoError(ValueError):
    pass


class SigningError(CryptoError):
    pass


class Keypair(Protocol):
    @property
    def public_key(self) -> bytes:
        ...

    def sign(self, data: bytes) -> bytes:
        ...


def signing_message(payload: bytes) -> bytes:
    """Return the bytes actually handed to the signer for ``payload``."""
    if len(payload) > SIGNING_HASH_THRESHOLD:
        return blake2_256(payload)
    return bytes(payload)


def validate_public_key(public_key: bytes) -> bytes:
    if not isinstance(public_key, (bytes, bytearray)) or len(public_key) != PUBLIC_KEY_LENGTH:
        raise SigningError(f"Public key must be {PUBLIC_KEY_LENGTH} bytes.")
    return bytes(public_key)


def sign_payload(payload: bytes, keypair: Keypair) -> bytes:
    """Sign a signing payload, hashing it first when it exceeds the threshold.

    Args:
        payload: The full signing payload (call ++ extensions)
        keypair: Signing capability

    Returns:
        64-byte signature

    Raises:
        SigningError: If the key material is invalid or signing fails.
    """
    try:
        public_key = keypair.public_key
    except Exception as exc:
        raise SigningError("Keypair has no usable public key.") from exc
    validate_public_key(public_key)

    message = signing_message(payload)
    logger.debug(
        "Signing %d-byte payload (%s) with %s",
        len(payload),
        "hashed" if len(payload) > SIGNING_HASH_THRESHOLD else "raw",
        short_hex(public_key),
    )

    try:
        signature = keypair.sign(message)
    except SigningError:
        raise
    except Exception as exc:
        raise SigningError(f"Signing failed: {exc}") from exc

    if not isinstance(signature, (bytes, bytearray)) or len(signature) != SIGNATURE_LENGTH:
        raise SigningError(f"Signer returned an invalid signature (expected {SIGNATURE_LENGTH} bytes).")
    return bytes(signature)


def verify_payload_signature(payload: bytes, signature: bytes, public_key: bytes) -> bool:
    """Verify an sr25519 signature over a signing payload."""
    import sr25519

    validate_public_key(public_key)
    if len(signature) != SIGNATURE_LENGTH:
        return False
    return bool(sr25519.verify(bytes(signature), signing_message(payload), bytes(public_key)))
