"""
keytree

Hierarchical deterministic (BIP32) keys, BIP39 mnemonics and SLIP-132
extended key serialization for secp256k1.
"""

from .client import KeyTree
from .constants import Network, Purpose, HARDENED
from .exceptions import (
    KeyTreeError,
    ValidationError,
    SerializationError,
    CryptoError,
    InvalidPath,
    InvalidWord,
    InvalidChecksum,
    InvalidKeyData,
    ChecksumMismatch,
    InvalidLength,
    NetworkMismatch,
    InvalidMaster,
    InvalidDerivation,
    InvalidChildKey,
    InvalidSeed,
    EntropySourceFailure,
)
from .networks import NetworkParams, NetworkRegistry, DEFAULT_REGISTRY
from .crypto import (
    HDKey,
    HDPrivateKey,
    HDPublicKey,
    DerivationPath,
    Mnemonic,
)

__version__ = "1.0.0"

__all__ = [
    # Main client
    "KeyTree",

    # Network
    "Network",
    "Purpose",
    "HARDENED",
    "NetworkParams",
    "NetworkRegistry",
    "DEFAULT_REGISTRY",

    # Keys
    "HDKey",
    "HDPrivateKey",
    "HDPublicKey",
    "DerivationPath",
    "Mnemonic",

    # Exceptions
    "KeyTreeError",
    "ValidationError",
    "SerializationError",
    "CryptoError",
    "InvalidPath",
    "InvalidWord",
    "InvalidChecksum",
    "InvalidKeyData",
    "ChecksumMismatch",
    "InvalidLength",
    "NetworkMismatch",
    "InvalidMaster",
    "InvalidDerivation",
    "InvalidChildKey",
    "InvalidSeed",
    "EntropySourceFailure",
]


def from_base58(
    xkey: str,
    network: Network = Network.MAINNET,
) -> HDKey:
    """
    Decode an extended key string.

    Args:
        xkey: Extended key (xprv/xpub/yprv/.../tpub...)
        network: Expected network

    Returns:
        HDPrivateKey or HDPublicKey

    Example:
        >>> key = keytree.from_base58("xpub661MyMwAqRbc...")
        >>> key = keytree.from_base58("tprv8ZgxMBicQKsP...", Network.TESTNET)
    """
    return HDKey.from_base58(xkey, network)
