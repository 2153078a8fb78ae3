from __future__ import annotations

import pytest

ABANDON_MNEMONIC = (
    "abandon abandon abandon abandon abandon abandon "
    "abandon abandon abandon abandon abandon about"
)


class RecordingKeypair:
    """Keypair stand-in that records every message it is asked to sign."""

    def __init__(self, public_key: bytes = bytes(range(32)), signature: bytes = b"\x11" * 64) -> None:
        self.public_key = public_key
        self._signature = signature
        self.signed: list[bytes] = []

    def sign(self, data: bytes) -> bytes:
        self.signed.append(bytes(data))
        return self._signature


@pytest.fixture()
def recording_keypair() -> RecordingKeypair:
    return RecordingKeypair()
