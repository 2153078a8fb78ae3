"""
SCALE compact integer codec.

Compact integers are self-describing: the two low bits of the first byte
select one of four modes.

    0b00  single byte        value < 2**6
    0b01  two bytes LE       value < 2**14
    0b10  four bytes LE      value < 2**30
    0b11  big-integer mode   length byte ((n - 4) << 2 | 0b11), then n LE bytes
"""

from __future__ import annotations

from ..utils import DecodeError

SINGLE_BYTE_LIMIT = 1 << 6
TWO_BYTE_LIMIT = 1 << 14
FOUR_BYTE_LIMIT = 1 << 30

# Six bits of length in the prefix byte, offset by 4.
MAX_BIG_INT_BYTES = 4 + 0b111111
MAX_COMPACT_VALUE = (1 << (8 * MAX_BIG_INT_BYTES)) - 1

U32_MAX = (1 << 32) - 1
U64_MAX = (1 << 64) - 1
U128_MAX = (1 << 128) - 1


def compact_encode(value: int) -> bytes:
    """Encode an unsigned integer in SCALE compact form."""
    if value < 0:
        raise ValueError(f"Compact encoding requires an unsigned integer, got {value}")
    if value > MAX_COMPACT_VALUE:
        raise ValueError("Integer too large for compact encoding")

    if value < SINGLE_BYTE_LIMIT:
        return bytes([value << 2])
    if value < TWO_BYTE_LIMIT:
        return ((value << 2) | 0b01).to_bytes(2, "little")
    if value < FOUR_BYTE_LIMIT:
        return ((value << 2) | 0b10).to_bytes(4, "little")

    byte_length = max(4, (value.bit_length() + 7) // 8)
    prefix = ((byte_length - 4) << 2) | 0b11
    return bytes([prefix]) + value.to_bytes(byte_length, "little")


def compact_decode(data: bytes, offset: int = 0) -> tuple[int, int]:
    """
    Decode a compact integer starting at ``offset``.

    Returns:
        Tuple of (value, number of bytes consumed)

    Raises:
        DecodeError: If the input is truncated
    """
    if offset >= len(data):
        raise DecodeError("Compact integer truncated: no prefix byte")

    first = data[offset]
    mode = first & 0b11

    if mode == 0b00:
        return first >> 2, 1

    if mode == 0b01:
        width = 2
    elif mode == 0b10:
        width = 4
    else:
        byte_length = (first >> 2) + 4
        chunk = data[offset + 1 : offset + 1 + byte_length]
        if len(chunk) != byte_length:
            raise DecodeError(
                f"Compact integer truncated: expected {byte_length} bytes, got {len(chunk)}"
            )
        return int.from_bytes(chunk, "little"), 1 + byte_length

    chunk = data[offset : offset + width]
    if len(chunk) != width:
        raise DecodeError(f"Compact integer truncated: expected {width} bytes, got {len(chunk)}")
    return int.from_bytes(chunk, "little") >> 2, width


def encode_u32(value: int) -> bytes:
    if not 0 <= value <= U32_MAX:
        raise ValueError(f"Value out of range for u32: {value}")
    return value.to_bytes(4, "little")


def encode_u64(value: int) -> bytes:
    if not 0 <= value <= U64_MAX:
        raise ValueError(f"Value out of range for u64: {value}")
    return value.to_bytes(8, "little")
