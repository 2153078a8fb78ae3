"""Tests for the SS58 address codec."""

from __future__ import annotations

import base58
import pytest

from lobster.sigil.ss58 import ss58_decode, ss58_encode, validate_ss58_format
from lobster.utils import DecodeError, blake2_512

ALICE_PUBLIC_KEY = bytes.fromhex("d43593c715fdd31c61141abd04a99fd6822c8558854ccde39a5684e7a56da27d")
ALICE_ADDRESS = "5GrwvaEF5zXb26Fz9rcQpDWS57CtERHpNehXCPcNoHGKutQY"


class TestSs58Encode:
    """Encoding of 32-byte account ids."""

    def test_well_known_dev_account(self) -> None:
        assert ss58_encode(ALICE_PUBLIC_KEY) == ALICE_ADDRESS

    def test_zero_account(self) -> None:
        address = ss58_encode(bytes(32))
        assert address.startswith("5")
        assert ss58_decode(address) == (42, bytes(32))

    def test_different_format_changes_text(self) -> None:
        assert ss58_encode(ALICE_PUBLIC_KEY, 0) != ALICE_ADDRESS

    def test_wrong_key_length(self) -> None:
        with pytest.raises(ValueError):
            ss58_encode(bytes(31))

    def test_reserved_format(self) -> None:
        with pytest.raises(ValueError):
            ss58_encode(bytes(32), 46)


class TestSs58Decode:
    """Decoding and checksum validation."""

    def test_well_known_dev_account(self) -> None:
        assert ss58_decode(ALICE_ADDRESS) == (42, ALICE_PUBLIC_KEY)

    @pytest.mark.parametrize("ss58_format", [0, 2, 63, 64, 255, 1000, 16383])
    def test_prefix_forms(self, ss58_format: int) -> None:
        address = ss58_encode(ALICE_PUBLIC_KEY, ss58_format)
        assert ss58_decode(address) == (ss58_format, ALICE_PUBLIC_KEY)

    def test_checksum_mismatch(self) -> None:
        tampered = ALICE_ADDRESS[:-1] + ("Z" if ALICE_ADDRESS[-1] != "Z" else "Y")
        with pytest.raises(DecodeError):
            ss58_decode(tampered)

    def test_invalid_base58(self) -> None:
        with pytest.raises(DecodeError):
            ss58_decode("0OIl")

    def test_wrong_length(self) -> None:
        with pytest.raises(DecodeError):
            ss58_decode("5Grwva")

    def test_reserved_prefix_bit(self) -> None:
        payload = b"\x80" + bytes(32)
        checksum = blake2_512(b"SS58PRE" + payload)[:2]
        address = base58.b58encode(payload + checksum).decode("ascii")
        with pytest.raises(DecodeError, match="reserved prefix"):
            ss58_decode(address)


class TestValidateSs58Format:
    """Network prefix range checks."""

    @pytest.mark.parametrize("ss58_format", [0, 42, 16383])
    def test_valid(self, ss58_format: int) -> None:
        assert validate_ss58_format(ss58_format) == ss58_format

    @pytest.mark.parametrize("ss58_format", [-1, 46, 47, 16384, True])
    def test_invalid(self, ss58_format: int) -> None:
        with pytest.raises(ValueError):
            validate_ss58_format(ss58_format)
