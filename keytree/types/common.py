"""Common type definitions for keytree."""

from typing import NewType, Union

__all__ = [
    "HexStr",
    "PrivateKeyBytes",
    "PublicKeyBytes",
    "ChainCode",
    "Fingerprint",
    "Seed",
    "Bytes",
]

# Basic types
HexStr = NewType("HexStr", str)
"""Hexadecimal string representation."""

# Crypto types
PrivateKeyBytes = NewType("PrivateKeyBytes", bytes)
"""32-byte private key."""

PublicKeyBytes = NewType("PublicKeyBytes", bytes)
"""33 or 65 byte public key."""

ChainCode = NewType("ChainCode", bytes)
"""32-byte BIP32 chain code."""

Fingerprint = NewType("Fingerprint", bytes)
"""4-byte key fingerprint (HASH160 prefix)."""

Seed = NewType("Seed", bytes)
"""BIP32 seed, 16 to 64 bytes."""

# Type aliases
Bytes = Union[bytes, bytearray, HexStr, str]
"""Raw bytes or their hex encoding."""
