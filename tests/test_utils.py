"""Unit tests for utils.py functions."""

from __future__ import annotations

import hashlib

import pytest

from lobster.utils import DecodeError, blake2_256, decode_hex, encode_hex, short_hex, strip_0x


class TestDecodeHex:
    """Tests for decode_hex function."""

    def test_with_prefix(self) -> None:
        assert decode_hex("0x000102") == b"\x00\x01\x02"

    def test_without_prefix(self) -> None:
        assert decode_hex("ff") == b"\xff"

    def test_uppercase_prefix_and_digits(self) -> None:
        assert decode_hex("0XABCD") == b"\xab\xcd"

    def test_empty(self) -> None:
        assert decode_hex("0x") == b""

    def test_invalid_characters(self) -> None:
        with pytest.raises(DecodeError):
            decode_hex("0xzz")

    def test_odd_length(self) -> None:
        with pytest.raises(DecodeError):
            decode_hex("0x123")

    def test_expected_length_mismatch(self) -> None:
        with pytest.raises(DecodeError, match="expected 32 bytes"):
            decode_hex("00" * 31, expected_length=32, label="genesis hash")

    def test_non_string(self) -> None:
        with pytest.raises(DecodeError):
            decode_hex(b"00")  # type: ignore[arg-type]

    def test_decode_error_is_value_error(self) -> None:
        assert issubclass(DecodeError, ValueError)


class TestHexHelpers:
    """Tests for encode_hex, strip_0x and short_hex."""

    def test_encode_hex_is_lowercase_and_prefixed(self) -> None:
        assert encode_hex(b"\xAB\xCD") == "0xabcd"

    def test_strip_0x(self) -> None:
        assert strip_0x("0xdead") == "dead"
        assert strip_0x("dead") == "dead"

    def test_short_hex_truncates(self) -> None:
        assert short_hex(bytes(range(32))) == "0x000102...1d1e1f"

    def test_short_hex_keeps_short_values(self) -> None:
        assert short_hex(b"\x01\x02") == "0x0102"


class TestBlake2:
    """Tests for blake2_256."""

    def test_digest_size(self) -> None:
        assert len(blake2_256(b"")) == 32

    def test_matches_hashlib(self) -> None:
        expected = hashlib.blake2b(b"lobster", digest_size=32).digest()
        assert blake2_256(b"lobster") == expected
