"""Type definitions for keytree."""

from ..types.common import (
    HexStr,
    PrivateKeyBytes,
    PublicKeyBytes,
    ChainCode,
    Fingerprint,
    Seed,
    Bytes,
)

__all__ = [
    "HexStr",
    "PrivateKeyBytes",
    "PublicKeyBytes",
    "ChainCode",
    "Fingerprint",
    "Seed",
    "Bytes",
]
