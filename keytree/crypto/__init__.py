"""Cryptographic building blocks for keytree."""

from ..crypto.keys import PrivateKey, PublicKey
from ..crypto.hd import HDKey, HDPrivateKey, HDPublicKey
from ..crypto.path import DerivationPath, PathStep, parse_path
from ..crypto.derivation import master_from_seed, derive_child, derive_path, to_public
from ..crypto.xkey import encode, decode, is_base58
from ..crypto.bip39 import (
    Mnemonic,
    generate_mnemonic,
    entropy_to_mnemonic,
    mnemonic_to_entropy,
    mnemonic_to_seed,
    validate_mnemonic,
)

__all__ = [
    # Keys
    "PrivateKey",
    "PublicKey",

    # HD
    "HDKey",
    "HDPrivateKey",
    "HDPublicKey",
    "DerivationPath",
    "PathStep",
    "parse_path",
    "master_from_seed",
    "derive_child",
    "derive_path",
    "to_public",

    # Serialization
    "encode",
    "decode",
    "is_base58",

    # Mnemonic
    "Mnemonic",
    "generate_mnemonic",
    "entropy_to_mnemonic",
    "mnemonic_to_entropy",
    "mnemonic_to_seed",
    "validate_mnemonic",
]
