"""keytree exceptions hierarchy."""

from typing import Any, Optional

__all__ = [
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


class KeyTreeError(Exception):
    """Base exception for all keytree errors."""

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        data: Optional[Any] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.data = data

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class ValidationError(KeyTreeError):
    """Raised when validation of untrusted input fails."""
    pass


class InvalidPath(ValidationError):
    """Raised when a derivation path string is malformed."""
    pass


class InvalidWord(ValidationError):
    """Raised when a mnemonic word is not in the wordlist."""

    def __init__(self, word: str, message: Optional[str] = None) -> None:
        if message is None:
            message = f"Invalid mnemonic word: {word!r}"
        super().__init__(message, data=word)
        self.word = word


class InvalidChecksum(ValidationError):
    """Raised when mnemonic checksum bits do not match the entropy."""
    pass


class InvalidKeyData(ValidationError):
    """Raised when a private scalar or public point is invalid."""
    pass


class SerializationError(KeyTreeError):
    """Raised when serialization/deserialization fails."""
    pass


class ChecksumMismatch(SerializationError):
    """Raised when a Base58Check checksum does not verify."""
    pass


class InvalidLength(SerializationError):
    """Raised when encoded data or a phrase has the wrong size."""
    pass


class NetworkMismatch(SerializationError):
    """Raised when a version prefix does not belong to the requested network."""
    pass


class InvalidMaster(SerializationError):
    """Raised when a depth 0 key carries a parent fingerprint or index."""
    pass


class CryptoError(KeyTreeError):
    """Raised when cryptographic operation fails."""
    pass


class InvalidDerivation(CryptoError):
    """Raised when a derivation step is not possible for a node."""
    pass


class InvalidChildKey(CryptoError):
    """
    Raised when a child index yields an unusable key.

    The caller decides whether to continue with the next index.
    """

    def __init__(self, index: int, message: Optional[str] = None) -> None:
        if message is None:
            message = f"Invalid child key at index {index}"
        super().__init__(message, data=index)
        self.index = index


class InvalidSeed(CryptoError):
    """Raised when a seed cannot produce a master key."""
    pass


class EntropySourceFailure(CryptoError):
    """Raised when the platform random source is unavailable."""
    pass
