"""Constants for keytree."""

from enum import Enum

__all__ = [
    "Network",
    "Purpose",
    "CURVE_ORDER",
    "HARDENED",
    "MAX_INDEX",
    "MAX_DEPTH",
    "SEED_KEY",
    "MIN_SEED_SIZE",
    "MAX_SEED_SIZE",
    "PAYLOAD_SIZE",
    "CHECKSUM_SIZE",
    "ENTROPY_BITS",
    "MNEMONIC_WORD_COUNTS",
    "PBKDF2_ROUNDS",
    "DEFAULT_LANGUAGE",
]


class Network(str, Enum):
    """Networks with registered extended key prefixes."""

    MAINNET = "main"
    TESTNET = "testnet"
    REGTEST = "regtest"
    SIMNET = "simnet"


class Purpose(str, Enum):
    """Serialization purpose (SLIP-132 prefix family)."""

    LEGACY = "x"          # BIP44, xprv/xpub
    SEGWIT_COMPAT = "y"   # BIP49, yprv/ypub
    NATIVE_SEGWIT = "z"   # BIP84, zprv/zpub

    @property
    def bip(self) -> int:
        """BIP number used as the purpose level of account paths."""
        return _PURPOSE_BIPS[self]


_PURPOSE_BIPS = {
    Purpose.LEGACY: 44,
    Purpose.SEGWIT_COMPAT: 49,
    Purpose.NATIVE_SEGWIT: 84,
}

# secp256k1
CURVE_ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141

# BIP32
HARDENED = 0x80000000
MAX_INDEX = 0xFFFFFFFF
MAX_DEPTH = 0xFF
SEED_KEY = b"Bitcoin seed"
MIN_SEED_SIZE = 16
MAX_SEED_SIZE = 64
PAYLOAD_SIZE = 78
CHECKSUM_SIZE = 4

# BIP39
ENTROPY_BITS = (128, 160, 192, 224, 256)
MNEMONIC_WORD_COUNTS = (12, 15, 18, 21, 24)
PBKDF2_ROUNDS = 2048
DEFAULT_LANGUAGE = "english"
