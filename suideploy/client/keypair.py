"""
Ed25519 signing identity for Sui transactions.

Key material is accepted as a Bech32 `suiprivkey1...` string or as base64
raw bytes. Addresses and signatures follow the Sui scheme:

- address:   0x + blake2b-256(flag || public_key)
- signature: base64(flag || ed25519(blake2b-256(intent || tx_bytes)) || public_key)
"""

from __future__ import annotations

import base64
import binascii
import hashlib

import bech32
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from suideploy.exceptions import ConfigurationError

ED25519_FLAG = 0x00
SUI_PRIVATE_KEY_PREFIX = "suiprivkey"
# TransactionData intent: scope, version, app id
TRANSACTION_INTENT = bytes([0, 0, 0])


def blake2b_256(data: bytes) -> bytes:
    return hashlib.blake2b(data, digest_size=32).digest()


def decode_sui_private_key(value: str) -> bytes:
    """
    Decode a `suiprivkey1...` Bech32 string into a 32-byte Ed25519 seed.

    Raises:
        ConfigurationError: If the string is malformed or not Ed25519
    """
    hrp, data = bech32.bech32_decode(value)
    if hrp != SUI_PRIVATE_KEY_PREFIX or data is None:
        raise ConfigurationError("Invalid suiprivkey string", context="Bech32 decoding failed")

    decoded = bech32.convertbits(data, 5, 8, False)
    if decoded is None or len(decoded) != 33:
        raise ConfigurationError("Invalid suiprivkey payload length")

    if decoded[0] != ED25519_FLAG:
        raise ConfigurationError(
            "Unsupported key scheme in suiprivkey",
            context=f"Flag {decoded[0]:#04x}, only Ed25519 (0x00) is supported",
        )
    return bytes(decoded[1:])


def decode_base64_private_key(value: str) -> bytes:
    """
    Decode base64 key material into a 32-byte Ed25519 seed.

    Accepts a bare seed (32 bytes), a flag-prefixed keystore entry
    (33 bytes) or a seed followed by its public key (64 bytes).
    """
    try:
        raw = base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ConfigurationError("Private key is not valid base64", context=str(e)) from e

    if len(raw) == 32:
        return raw
    if len(raw) == 33 and raw[0] == ED25519_FLAG:
        return raw[1:]
    if len(raw) == 64:
        return raw[:32]

    raise ConfigurationError(
        "Unsupported private key length",
        context=f"Got {len(raw)} bytes, expected 32, 33 or 64",
    )


class Ed25519Keypair:
    """Ed25519 keypair producing Sui addresses and transaction signatures."""

    def __init__(self, private_key: Ed25519PrivateKey):
        self._private_key = private_key
        self._public_key = private_key.public_key().public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )

    @classmethod
    def generate(cls) -> "Ed25519Keypair":
        return cls(Ed25519PrivateKey.generate())

    @classmethod
    def from_seed(cls, seed: bytes) -> "Ed25519Keypair":
        if len(seed) != 32:
            raise ConfigurationError(f"Ed25519 seed must be 32 bytes, got {len(seed)}")
        return cls(Ed25519PrivateKey.from_private_bytes(seed))

    @classmethod
    def from_secret_key(cls, value: str) -> "Ed25519Keypair":
        """Build from `suiprivkey1...` or base64 key material."""
        value = value.strip()
        if value.startswith(SUI_PRIVATE_KEY_PREFIX):
            return cls.from_seed(decode_sui_private_key(value))
        return cls.from_seed(decode_base64_private_key(value))

    @property
    def public_key(self) -> bytes:
        return self._public_key

    def to_sui_address(self) -> str:
        return "0x" + blake2b_256(bytes([ED25519_FLAG]) + self._public_key).hex()

    def sign_transaction(self, tx_bytes: bytes) -> str:
        """Serialized signature for sui_executeTransactionBlock."""
        digest = blake2b_256(TRANSACTION_INTENT + tx_bytes)
        signature = self._private_key.sign(digest)
        return base64.b64encode(bytes([ED25519_FLAG]) + signature + self._public_key).decode()

    def __repr__(self) -> str:
        return f"Ed25519Keypair(address={self.to_sui_address()})"
