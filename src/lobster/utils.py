from __future__ import annotations

import hashlib


class DecodeError(ValueError):
    pass


def blake2_256(data: bytes) -> bytes:
    return hashlib.blake2b(data, digest_size=32).digest()


def blake2_512(data: bytes) -> bytes:
    return hashlib.blake2b(data, digest_size=64).digest()


def strip_0x(value: str) -> str:
    value = value.strip()
    if value[:2] in ("0x", "0X"):
        return value[2:]
    return value


def decode_hex(value: str, expected_length: int | None = None, label: str = "hex value") -> bytes:
    """Decode an optionally 0x-prefixed hex string.

    Raises:
        DecodeError: On invalid characters, odd length, or a byte length
            other than ``expected_length`` when one is given.
    """
    if not isinstance(value, str):
        raise DecodeError(f"Invalid {label}: expected a hex string, got {type(value).__name__}")
    try:
        raw = bytes.fromhex(strip_0x(value))
    except ValueError as exc:
        raise DecodeError(f"Invalid {label}: {exc}") from exc
    if expected_length is not None and len(raw) != expected_length:
        raise DecodeError(
            f"Invalid {label}: expected {expected_length} bytes, got {len(raw)}"
        )
    return raw


def encode_hex(data: bytes) -> str:
    return "0x" + data.hex()


def short_hex(data: bytes, keep: int = 6) -> str:
    hexed = data.hex()
    if len(hexed) <= keep * 2:
        return "0x" + hexed
    return f"0x{hexed[:keep]}...{hexed[-keep:]}"
