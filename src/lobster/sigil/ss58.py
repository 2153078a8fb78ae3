"""
SS58 address codec.

An SS58 address is base58(prefix ++ public_key ++ checksum) where the
checksum is the first two bytes of blake2b-512("SS58PRE" ++ prefix ++ key).
Network prefixes 0-63 take one byte, 64-16383 take two.
"""

from __future__ import annotations

import base58

from ..utils import DecodeError, blake2_512

SS58_CHECKSUM_PREFIX = b"SS58PRE"
SS58_CHECKSUM_LENGTH = 2
ACCOUNT_ID_LENGTH = 32

# Generic Substrate network prefix.
DEFAULT_SS58_FORMAT = 42
MAX_SS58_FORMAT = 16383
# Reserved for Ethereum-style addresses.
_RESERVED_FORMATS = {46, 47}


def _checksum(payload: bytes) -> bytes:
    return blake2_512(SS58_CHECKSUM_PREFIX + payload)[:SS58_CHECKSUM_LENGTH]


def _encode_prefix(ss58_format: int) -> bytes:
    if ss58_format < 64:
        return bytes([ss58_format])
    first = ((ss58_format & 0b1111_1100) >> 2) | 0b0100_0000
    second = (ss58_format >> 8) | ((ss58_format & 0b0000_0011) << 6)
    return bytes([first, second])


def validate_ss58_format(ss58_format: int) -> int:
    if (
        not isinstance(ss58_format, int)
        or isinstance(ss58_format, bool)
        or not 0 <= ss58_format <= MAX_SS58_FORMAT
        or ss58_format in _RESERVED_FORMATS
    ):
        raise ValueError(f"Invalid SS58 format: {ss58_format!r}")
    return ss58_format


def ss58_encode(public_key: bytes, ss58_format: int = DEFAULT_SS58_FORMAT) -> str:
    """Encode a 32-byte account id as SS58 text."""
    if len(public_key) != ACCOUNT_ID_LENGTH:
        raise ValueError(f"Account id must be {ACCOUNT_ID_LENGTH} bytes, got {len(public_key)}")
    validate_ss58_format(ss58_format)

    payload = _encode_prefix(ss58_format) + bytes(public_key)
    return base58.b58encode(payload + _checksum(payload)).decode("ascii")


def ss58_decode(address: str) -> tuple[int, bytes]:
    """
    Decode SS58 text.

    Returns:
        Tuple of (ss58_format, account_id)

    Raises:
        DecodeError: On invalid base58, bad length, or checksum mismatch
    """
    try:
        raw = base58.b58decode(address)
    except ValueError as exc:
        raise DecodeError(f"Invalid SS58 address: {exc}") from exc

    if not raw:
        raise DecodeError("Invalid SS58 address: empty")
    if raw[0] & 0b1000_0000:
        raise DecodeError(f"Invalid SS58 address: reserved prefix byte 0x{raw[0]:02x}")

    if raw[0] & 0b0100_0000:
        if len(raw) < 2:
            raise DecodeError("Invalid SS58 address: truncated prefix")
        lower = ((raw[0] << 2) | (raw[1] >> 6)) & 0xFF
        upper = raw[1] & 0b0011_1111
        ss58_format = lower | (upper << 8)
        prefix_length = 2
    else:
        ss58_format = raw[0]
        prefix_length = 1

    expected = prefix_length + ACCOUNT_ID_LENGTH + SS58_CHECKSUM_LENGTH
    if len(raw) != expected:
        raise DecodeError(f"Invalid SS58 address length: expected {expected} bytes, got {len(raw)}")

    payload = raw[:-SS58_CHECKSUM_LENGTH]
    if _checksum(payload) != raw[-SS58_CHECKSUM_LENGTH:]:
        raise DecodeError("Invalid SS58 address: checksum mismatch")

    return ss58_format, payload[prefix_length:]
