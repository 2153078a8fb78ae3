"""
sr25519 key material for Lobster.

Keys are derived from a BIP-39 mnemonic the same way Substrate tooling does
(mini-secret derivation, no derivation path). The mnemonic is read from
~/.lobster/.env as LOBSTER_MNEMONIC or from the process environment.

This module never generates or stores key material.

Dependencies: py-bip39-bindings + py-sr25519-bindings (no full substrate-interface needed)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import sr25519
from bip39 import bip39_to_mini_secret
from dotenv import load_dotenv

from .crypto import SigningError
from .ss58 import DEFAULT_SS58_FORMAT, ss58_encode, validate_ss58_format


# Default config directory
LOBSTER_DIR = Path.home() / ".lobster"
LOBSTER_ENV = LOBSTER_DIR / ".env"

MNEMONIC_ENV_VAR = "LOBSTER_MNEMONIC"
SS58_FORMAT_ENV_VAR = "LOBSTER_SS58_FORMAT"


@dataclass(frozen=True)
class Sr25519Keypair:
    """
    An sr25519 keypair.

    Attributes:
        public_key: 32-byte public key
        secret_key: 64-byte expanded secret key (excluded from repr)
    """
    public_key: bytes
    secret_key: bytes = field(repr=False)

    @classmethod
    def from_seed(cls, seed: bytes) -> "Sr25519Keypair":
        if len(seed) != 32:
            raise SigningError(f"Seed must be 32 bytes, got {len(seed)}")
        public_key, secret_key = sr25519.pair_from_seed(bytes(seed))
        return cls(public_key=bytes(public_key), secret_key=bytes(secret_key))

    @classmethod
    def from_mnemonic(cls, mnemonic: str, password: str = "") -> "Sr25519Keypair":
        """
        Derive a keypair from a BIP-39 mnemonic phrase.

        Raises:
            SigningError: If the mnemonic is invalid
        """
        try:
            mini_secret = bip39_to_mini_secret(" ".join(mnemonic.split()), password)
        except ValueError as exc:
            raise SigningError(f"Invalid mnemonic: {exc}") from exc
        return cls.from_seed(bytes(mini_secret))

    def sign(self, data: bytes) -> bytes:
        return bytes(sr25519.sign((self.public_key, self.secret_key), bytes(data)))

    def verify(self, data: bytes, signature: bytes) -> bool:
        return bool(sr25519.verify(bytes(signature), bytes(data), self.public_key))

    def ss58_address(self, ss58_format: int = DEFAULT_SS58_FORMAT) -> str:
        return ss58_encode(self.public_key, ss58_format)


def load_mnemonic(env_path: Optional[Path] = None) -> str:
    """
    Load the signing mnemonic from .env file or environment.

    Args:
        env_path: Path to .env file (default: ~/.lobster/.env)

    Returns:
        Whitespace-normalised mnemonic phrase

    Raises:
        ValueError: If LOBSTER_MNEMONIC is not configured
    """
    env_path = env_path or LOBSTER_ENV

    if env_path.exists():
        load_dotenv(env_path, override=True)

    mnemonic = os.environ.get(MNEMONIC_ENV_VAR, "").strip()
    if not mnemonic:
        raise ValueError(
            f"{MNEMONIC_ENV_VAR} not found. Set it in the environment or in {env_path}"
        )

    return " ".join(mnemonic.split())


def get_keypair(mnemonic: Optional[str] = None) -> Sr25519Keypair:
    """
    Get the signing keypair.

    Args:
        mnemonic: BIP-39 phrase. If None, loads from .env.
    """
    if mnemonic is None:
        mnemonic = load_mnemonic()
    return Sr25519Keypair.from_mnemonic(mnemonic)


def get_ss58_format() -> int:
    """Get the SS58 network prefix from environment or default."""
    raw = os.environ.get(SS58_FORMAT_ENV_VAR, str(DEFAULT_SS58_FORMAT))
    try:
        ss58_format = int(raw)
    except ValueError as exc:
        raise ValueError(f"{SS58_FORMAT_ENV_VAR} must be an integer, got {raw!r}") from exc
    try:
        return validate_ss58_format(ss58_format)
    except ValueError as exc:
        raise ValueError(f"{SS58_FORMAT_ENV_VAR}: {exc}") from exc


def get_address(mnemonic: Optional[str] = None, ss58_format: Optional[int] = None) -> str:
    """Get the SS58 address of the configured keypair."""
    if ss58_format is None:
        ss58_format = get_ss58_format()
    return get_keypair(mnemonic).ss58_address(ss58_format)
