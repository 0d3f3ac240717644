"""Validation utilities for keytree."""

import re

from coincurve import PublicKey as SecpPublicKey

from ..constants import (
    CURVE_ORDER,
    ENTROPY_BITS,
    MAX_DEPTH,
    MAX_INDEX,
)
from ..exceptions import InvalidKeyData, InvalidLength, ValidationError
from ..types.common import Bytes

__all__ = [
    "is_valid_private_key",
    "validate_private_key",
    "is_valid_public_key",
    "validate_public_key",
    "validate_chain_code",
    "validate_fingerprint",
    "validate_depth",
    "validate_child_index",
    "validate_entropy",
]

# Regex patterns
HEX_PATTERN = re.compile(r"^[0-9a-fA-F]*$")


def _to_bytes(value: Bytes, name: str) -> bytes:
    if isinstance(value, str):
        if value.startswith("0x"):
            value = value[2:]
        if not HEX_PATTERN.match(value):
            raise ValidationError(f"{name} must be hexadecimal")
        try:
            return bytes.fromhex(value)
        except ValueError as e:
            raise ValidationError(f"Invalid hex {name.lower()}: {e}") from e
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    raise ValidationError(f"{name} must be bytes or hex string, got {type(value).__name__}")


def is_valid_private_key(key: Bytes) -> bool:
    """
    Check if private key format is valid.

    Args:
        key: Private key as hex string or bytes

    Returns:
        True if valid, False otherwise
    """
    try:
        validate_private_key(key)
    except ValidationError:
        return False
    return True


def validate_private_key(key: Bytes) -> bytes:
    """
    Validate private key and return as bytes.

    Args:
        key: Private key as hex string or bytes

    Returns:
        Private key as 32 bytes

    Raises:
        InvalidKeyData: If private key is out of range or the wrong size
    """
    key = _to_bytes(key, "Private key")

    if len(key) != 32:
        raise InvalidKeyData(f"Private key must be 32 bytes, got {len(key)}")

    # Check range
    key_int = int.from_bytes(key, "big")

    if key_int == 0:
        raise InvalidKeyData("Private key cannot be zero")
    if key_int >= CURVE_ORDER:
        raise InvalidKeyData("Private key exceeds curve order")

    return key


def is_valid_public_key(key: Bytes, compressed_only: bool = False) -> bool:
    """
    Check if public key is a valid curve point.

    Args:
        key: Public key as hex string or bytes
        compressed_only: Reject 65-byte uncompressed keys

    Returns:
        True if valid, False otherwise
    """
    try:
        validate_public_key(key, compressed_only=compressed_only)
    except ValidationError:
        return False
    return True


def validate_public_key(key: Bytes, compressed_only: bool = False) -> bytes:
    """
    Validate public key and return as bytes.

    Args:
        key: Public key as hex string or bytes
        compressed_only: Reject 65-byte uncompressed keys

    Returns:
        Public key bytes (33 or 65 bytes)

    Raises:
        InvalidKeyData: If the encoding is wrong or the point is not on the curve
    """
    key = _to_bytes(key, "Public key")

    if len(key) == 33:
        if key[0] not in (0x02, 0x03):
            raise InvalidKeyData("Compressed public key must start with 0x02 or 0x03")
    elif len(key) == 65 and not compressed_only:
        if key[0] != 0x04:
            raise InvalidKeyData("Uncompressed public key must start with 0x04")
    elif compressed_only:
        raise InvalidKeyData(f"Public key must be 33 bytes, got {len(key)}")
    else:
        raise InvalidKeyData(f"Public key must be 33 or 65 bytes, got {len(key)}")

    try:
        SecpPublicKey(key)
    except ValueError as e:
        raise InvalidKeyData(f"Public key is not a valid curve point: {e}") from e

    return key


def validate_chain_code(chain_code: Bytes) -> bytes:
    """Validate a 32-byte chain code."""
    chain_code = _to_bytes(chain_code, "Chain code")
    if len(chain_code) != 32:
        raise ValidationError(f"Chain code must be 32 bytes, got {len(chain_code)}")
    return chain_code


def validate_fingerprint(fingerprint: Bytes) -> bytes:
    """Validate a 4-byte fingerprint."""
    fingerprint = _to_bytes(fingerprint, "Fingerprint")
    if len(fingerprint) != 4:
        raise ValidationError(f"Fingerprint must be 4 bytes, got {len(fingerprint)}")
    return fingerprint


def validate_depth(depth: int) -> int:
    """Validate a tree depth (0-255)."""
    if not isinstance(depth, int) or isinstance(depth, bool):
        raise ValidationError(f"Depth must be an integer, got {type(depth).__name__}")
    if not 0 <= depth <= MAX_DEPTH:
        raise ValidationError(f"Depth must be between 0 and {MAX_DEPTH}, got {depth}")
    return depth


def validate_child_index(index: int) -> int:
    """Validate a raw 32-bit child index."""
    if not isinstance(index, int) or isinstance(index, bool):
        raise ValidationError(f"Child index must be an integer, got {type(index).__name__}")
    if not 0 <= index <= MAX_INDEX:
        raise ValidationError(f"Child index out of range: {index}")
    return index


def validate_entropy(entropy: Bytes) -> bytes:
    """
    Validate BIP39 entropy.

    Args:
        entropy: Entropy as hex string or bytes

    Returns:
        Entropy bytes

    Raises:
        InvalidLength: If entropy is not 128-256 bits in steps of 32
    """
    entropy = _to_bytes(entropy, "Entropy")
    if len(entropy) * 8 not in ENTROPY_BITS:
        raise InvalidLength(
            f"Entropy must be one of {ENTROPY_BITS} bits, got {len(entropy) * 8}"
        )
    return entropy
