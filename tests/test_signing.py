"""Tests for the signer adapter and sr25519 key material."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from lobster.pneuma.extensions import ChainMetadata, signing_payload
from lobster.sigil.crypto import (
    SIGNING_HASH_THRESHOLD,
    SigningError,
    sign_payload,
    signing_message,
    verify_payload_signature,
)
from lobster.sigil.keys import (
    Sr25519Keypair,
    get_keypair,
    get_ss58_format,
    load_mnemonic,
)
from lobster.utils import blake2_256

from conftest import ABANDON_MNEMONIC, RecordingKeypair

METADATA = ChainMetadata(genesis_hash=bytes(32), spec_version=1, transaction_version=1, nonce=0)
# Explicit (4 bytes) + implicit (73 bytes) for nonce 0.
EXTENSION_OVERHEAD = 77


class TestHashBeforeSign:
    """Payloads above 256 bytes are signed as their blake2-256 digest."""

    def test_threshold_constant(self) -> None:
        assert SIGNING_HASH_THRESHOLD == 256

    def test_payload_at_threshold_signed_raw(self, recording_keypair: RecordingKeypair) -> None:
        call = b"\x05" * (SIGNING_HASH_THRESHOLD - EXTENSION_OVERHEAD)
        payload = signing_payload(call, METADATA)
        assert len(payload) == 256

        sign_payload(payload, recording_keypair)
        assert recording_keypair.signed == [payload]

    def test_payload_over_threshold_signed_hashed(self, recording_keypair: RecordingKeypair) -> None:
        call = b"\x05" * (SIGNING_HASH_THRESHOLD - EXTENSION_OVERHEAD + 1)
        payload = signing_payload(call, METADATA)
        assert len(payload) == 257

        sign_payload(payload, recording_keypair)
        assert recording_keypair.signed == [blake2_256(payload)]

    def test_signing_message_small(self) -> None:
        assert signing_message(b"abc") == b"abc"

    def test_signing_message_large(self) -> None:
        data = b"\x00" * 1000
        assert signing_message(data) == blake2_256(data)


class TestSignPayloadErrors:
    """Invalid key material fails fast with SigningError."""

    def test_short_public_key(self) -> None:
        keypair = RecordingKeypair(public_key=b"\x01" * 31)
        with pytest.raises(SigningError):
            sign_payload(b"payload", keypair)
        assert keypair.signed == []

    def test_bad_signature_length(self) -> None:
        keypair = RecordingKeypair(signature=b"\x01" * 63)
        with pytest.raises(SigningError):
            sign_payload(b"payload", keypair)

    def test_signer_exception_wrapped(self) -> None:
        class BrokenKeypair:
            public_key = bytes(32)

            def sign(self, data: bytes) -> bytes:
                raise RuntimeError("hardware key unplugged")

        with pytest.raises(SigningError, match="hardware key unplugged"):
            sign_payload(b"payload", BrokenKeypair())

    def test_signing_error_is_value_error(self) -> None:
        assert issubclass(SigningError, ValueError)


class TestSr25519Keypair:
    """Real sr25519 keys derived from a mnemonic."""

    def test_from_mnemonic(self) -> None:
        keypair = Sr25519Keypair.from_mnemonic(ABANDON_MNEMONIC)
        assert len(keypair.public_key) == 32
        assert len(keypair.secret_key) == 64

    def test_derivation_is_deterministic(self) -> None:
        first = Sr25519Keypair.from_mnemonic(ABANDON_MNEMONIC)
        second = Sr25519Keypair.from_mnemonic("  " + ABANDON_MNEMONIC.replace(" ", "   ") + "\n")
        assert first.public_key == second.public_key

    def test_password_changes_key(self) -> None:
        plain = Sr25519Keypair.from_mnemonic(ABANDON_MNEMONIC)
        salted = Sr25519Keypair.from_mnemonic(ABANDON_MNEMONIC, password="pincer")
        assert plain.public_key != salted.public_key

    def test_invalid_mnemonic(self) -> None:
        with pytest.raises(SigningError):
            Sr25519Keypair.from_mnemonic("lobster " * 12)

    def test_secret_not_in_repr(self) -> None:
        keypair = Sr25519Keypair.from_mnemonic(ABANDON_MNEMONIC)
        assert keypair.secret_key.hex() not in repr(keypair)

    def test_sign_and_verify(self) -> None:
        keypair = Sr25519Keypair.from_mnemonic(ABANDON_MNEMONIC)
        signature = keypair.sign(b"message")
        assert len(signature) == 64
        assert keypair.verify(b"message", signature)
        assert not keypair.verify(b"other", signature)

    @pytest.mark.parametrize("size", [256, 257])
    def test_verify_payload_signature_both_branches(self, size: int) -> None:
        keypair = Sr25519Keypair.from_mnemonic(ABANDON_MNEMONIC)
        payload = b"\x42" * size
        signature = sign_payload(payload, keypair)
        assert verify_payload_signature(payload, signature, keypair.public_key)
        assert not verify_payload_signature(payload + b"\x00", signature, keypair.public_key)

    def test_ss58_address(self) -> None:
        address = Sr25519Keypair.from_mnemonic(ABANDON_MNEMONIC).ss58_address()
        assert address.startswith("5")


class TestConfiguration:
    """Mnemonic and SS58 format loading from .env / environment."""

    def test_load_from_env_file(self, tmp_path: Path) -> None:
        env_path = tmp_path / ".env"
        env_path.write_text(f"LOBSTER_MNEMONIC={ABANDON_MNEMONIC}\n", encoding="utf-8")
        with patch.dict(os.environ, {}, clear=True):
            assert load_mnemonic(env_path) == ABANDON_MNEMONIC

    def test_load_from_environment(self, tmp_path: Path) -> None:
        with patch.dict(os.environ, {"LOBSTER_MNEMONIC": ABANDON_MNEMONIC}, clear=True):
            assert load_mnemonic(tmp_path / "missing.env") == ABANDON_MNEMONIC

    def test_missing_mnemonic(self, tmp_path: Path) -> None:
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="LOBSTER_MNEMONIC"):
                load_mnemonic(tmp_path / "missing.env")

    def test_get_keypair_explicit_mnemonic(self) -> None:
        keypair = get_keypair(ABANDON_MNEMONIC)
        assert keypair.public_key == Sr25519Keypair.from_mnemonic(ABANDON_MNEMONIC).public_key

    def test_ss58_format_default(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            assert get_ss58_format() == 42

    def test_ss58_format_override(self) -> None:
        with patch.dict(os.environ, {"LOBSTER_SS58_FORMAT": "0"}, clear=True):
            assert get_ss58_format() == 0

    def test_ss58_format_invalid(self) -> None:
        with patch.dict(os.environ, {"LOBSTER_SS58_FORMAT": "polkadot"}, clear=True):
            with pytest.raises(ValueError):
                get_ss58_format()

    def test_ss58_format_reserved(self) -> None:
        with patch.dict(os.environ, {"LOBSTER_SS58_FORMAT": "46"}, clear=True):
            with pytest.raises(ValueError, match="LOBSTER_SS58_FORMAT"):
                get_ss58_format()
