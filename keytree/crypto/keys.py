"""Key management for keytree."""

import secrets
from typing import Iterable, Union

from coincurve import PrivateKey as SecpPrivateKey, PublicKey as SecpPublicKey

from ..constants import CURVE_ORDER
from ..exceptions import CryptoError, EntropySourceFailure, InvalidKeyData
from ..types.common import Fingerprint, PrivateKeyBytes, PublicKeyBytes
from ..utils.encoding import hash160
from ..utils.validation import validate_private_key, validate_public_key

__all__ = ["PrivateKey", "PublicKey", "random_bytes"]


def random_bytes(size: int) -> bytes:
    """
    Read bytes from the platform CSPRNG.

    Raises:
        EntropySourceFailure: If the random source is unavailable
    """
    try:
        return secrets.token_bytes(size)
    except (OSError, NotImplementedError) as e:
        raise EntropySourceFailure(f"Random source unavailable: {e}") from e


class PrivateKey:
    """
    secp256k1 private key wrapper.

    Handles scalar validation, tweak addition and public key derivation.
    """

    def __init__(self, key: Union[bytes, str, "PrivateKey"]) -> None:
        """
        Initialize private key.

        Args:
            key: Private key as 32 bytes, hex string, or another PrivateKey

        Raises:
            InvalidKeyData: If key is not a scalar in [1, n-1]
        """
        if isinstance(key, PrivateKey):
            self._secret = key._secret
            self._key = key._key
            return

        # Validate and normalize key
        self._secret = PrivateKeyBytes(validate_private_key(key))

        # Initialize crypto library
        self._key = SecpPrivateKey(self._secret)

    @classmethod
    def create(cls) -> "PrivateKey":
        """
        Create new random private key.

        Returns:
            New PrivateKey instance
        """
        while True:
            key_bytes = random_bytes(32)
            try:
                return cls(key_bytes)
            except InvalidKeyData:
                # Extremely rare, try again
                continue

    @property
    def secret(self) -> PrivateKeyBytes:
        """Get private key as bytes."""
        return self._secret

    def to_int(self) -> int:
        """Get private key as integer scalar."""
        return int.from_bytes(self._secret, "big")

    def hex(self) -> str:
        """Get private key as hex string."""
        return self._secret.hex()

    def public_key(self, compressed: bool = True) -> "PublicKey":
        """
        Get corresponding public key.

        Args:
            compressed: Return compressed format

        Returns:
            PublicKey instance
        """
        serialized = self._key.public_key.format(compressed=compressed)
        return PublicKey(serialized)

    def add(self, tweak: bytes) -> "PrivateKey":
        """
        Add a 32-byte scalar to this key modulo the curve order.

        Args:
            tweak: Big-endian scalar, must be below the curve order

        Returns:
            New PrivateKey

        Raises:
            CryptoError: If the tweak is out of range or the sum is zero
        """
        tweak_int = int.from_bytes(tweak, "big")
        if tweak_int >= CURVE_ORDER:
            raise CryptoError("Tweak exceeds curve order")

        result_int = (self.to_int() + tweak_int) % CURVE_ORDER
        if result_int == 0:
            raise CryptoError("Tweaked private key is zero")

        return PrivateKey(result_int.to_bytes(32, "big"))

    def __eq__(self, other: object) -> bool:
        """Check equality."""
        if not isinstance(other, PrivateKey):
            return False
        return self._secret == other._secret

    def __hash__(self) -> int:
        return hash(self._secret)

    def __repr__(self) -> str:
        """String representation."""
        # Show first and last 4 chars of hex for security
        hex_str = self.hex()
        masked = f"{hex_str[:4]}...{hex_str[-4:]}"
        return f"PrivateKey({masked})"


class PublicKey:
    """
    secp256k1 public key wrapper.

    Handles point validation, compression, point addition and fingerprints.
    """

    def __init__(self, key: Union[bytes, str, "PublicKey"]) -> None:
        """
        Initialize public key.

        Args:
            key: Public key as bytes, hex string, or another PublicKey

        Raises:
            InvalidKeyData: If key is not a point on the curve
        """
        if isinstance(key, PublicKey):
            self._key = key._key
            return

        # Validate and normalize key
        key_bytes = validate_public_key(key)

        # Initialize crypto library
        self._key = SecpPublicKey(key_bytes)

    @classmethod
    def from_secret(cls, secret: bytes) -> "PublicKey":
        """Compute the public point for a private scalar."""
        return PrivateKey(secret).public_key()

    @classmethod
    def combine(cls, keys: Iterable["PublicKey"]) -> "PublicKey":
        """
        Add several public points together.

        Raises:
            CryptoError: If the sum is the point at infinity
        """
        try:
            combined = SecpPublicKey.combine_keys([key._key for key in keys])
        except ValueError as e:
            raise CryptoError(f"Point addition failed: {e}") from e
        return cls(combined.format(compressed=True))

    @property
    def point(self) -> PublicKeyBytes:
        """Get compressed public key bytes."""
        return PublicKeyBytes(self._key.format(compressed=True))

    def format(self, compressed: bool = True) -> bytes:
        """Serialize the point."""
        return self._key.format(compressed=compressed)

    def hex(self) -> str:
        """Get public key as hex string."""
        return self.point.hex()

    def hash160(self) -> bytes:
        """Get HASH160 of compressed public key."""
        return hash160(self.point)

    def fingerprint(self) -> Fingerprint:
        """Get first 4 bytes of HASH160."""
        return Fingerprint(self.hash160()[:4])

    def add(self, tweak: bytes) -> "PublicKey":
        """
        Compute tweak*G + self.

        Args:
            tweak: 32-byte big-endian scalar, must be below the curve order

        Returns:
            New PublicKey

        Raises:
            CryptoError: If the tweak is out of range or the result is infinity
        """
        if int.from_bytes(tweak, "big") >= CURVE_ORDER:
            raise CryptoError("Tweak exceeds curve order")

        try:
            tweaked = self._key.add(tweak)
        except ValueError as e:
            raise CryptoError(f"Point tweak failed: {e}") from e

        return PublicKey(tweaked.format(compressed=True))

    def __eq__(self, other: object) -> bool:
        """Check equality."""
        if not isinstance(other, PublicKey):
            return False
        return self.point == other.point

    def __hash__(self) -> int:
        return hash(self.point)

    def __repr__(self) -> str:
        """String representation."""
        return f"PublicKey({self.hex()})"
