"""Encoding and hashing utilities for keytree."""

import hashlib
import hmac
from typing import Union

from ripemd.ripemd160 import ripemd160

from ..constants import CHECKSUM_SIZE
from ..exceptions import ChecksumMismatch, InvalidLength, ValidationError
from ..types.common import HexStr

__all__ = [
    "hex_to_bytes",
    "bytes_to_hex",
    "int_to_bytes",
    "bytes_to_int",
    "sha256",
    "double_sha256",
    "hash160",
    "hash256",
    "hmac_sha512",
    "encode_base58",
    "decode_base58",
    "encode_base58_check",
    "decode_base58_check",
]

# Constants
BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
BASE58_INDEX = {char: index for index, char in enumerate(BASE58_ALPHABET)}


def hex_to_bytes(hex_str: Union[HexStr, str]) -> bytes:
    """
    Convert hex string to bytes.

    Args:
        hex_str: Hex string with or without 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValidationError: If hex string is invalid
    """
    try:
        # Remove 0x prefix if present
        if isinstance(hex_str, str) and hex_str.startswith("0x"):
            hex_str = hex_str[2:]
        return bytes.fromhex(hex_str)
    except ValueError as e:
        raise ValidationError(f"Invalid hex string: {hex_str}") from e


def bytes_to_hex(data: bytes, prefix: bool = False) -> HexStr:
    """
    Convert bytes to hex string.

    Args:
        data: Bytes to encode
        prefix: Add 0x prefix

    Returns:
        Hex string
    """
    hex_str = data.hex()
    if prefix:
        hex_str = f"0x{hex_str}"
    return HexStr(hex_str)


def int_to_bytes(
    value: int,
    length: int,
    byteorder: str = "big",
    signed: bool = False
) -> bytes:
    """
    Convert integer to bytes with specified length.

    Args:
        value: Integer value
        length: Number of bytes
        byteorder: 'big' or 'little' endian
        signed: Whether integer is signed

    Returns:
        Encoded bytes
    """
    return value.to_bytes(length, byteorder=byteorder, signed=signed)


def bytes_to_int(
    data: bytes,
    byteorder: str = "big",
    signed: bool = False
) -> int:
    """
    Convert bytes to integer.

    Args:
        data: Bytes to decode
        byteorder: 'big' or 'little' endian
        signed: Whether integer is signed

    Returns:
        Decoded integer
    """
    return int.from_bytes(data, byteorder=byteorder, signed=signed)


def sha256(data: bytes) -> bytes:
    """Perform single SHA256 hash."""
    return hashlib.sha256(data).digest()


def double_sha256(data: bytes) -> bytes:
    """Perform double SHA256 hash."""
    return hashlib.sha256(hashlib.sha256(data).digest()).digest()


def hash160(data: bytes) -> bytes:
    """Perform RIPEMD160(SHA256(data))."""
    return ripemd160(sha256(data))


def hash256(data: bytes) -> bytes:
    """Alias for double SHA256."""
    return double_sha256(data)


def hmac_sha512(key: bytes, data: bytes) -> bytes:
    """Compute HMAC-SHA512 of data under key."""
    return hmac.new(key, data, hashlib.sha512).digest()


def encode_base58(data: bytes) -> str:
    """
    Encode bytes as Base58 string.

    Args:
        data: Bytes to encode

    Returns:
        Base58 encoded string
    """
    # Convert to integer
    n = bytes_to_int(data, byteorder="big")

    # Encode
    encoded = []
    while n:
        n, remainder = divmod(n, 58)
        encoded.append(BASE58_ALPHABET[remainder])

    # Add leading zeros
    leading_zeros = len(data) - len(data.lstrip(b"\x00"))
    return "1" * leading_zeros + "".join(reversed(encoded))


def decode_base58(string: str) -> bytes:
    """
    Decode Base58 string to bytes.

    Args:
        string: Base58 string

    Returns:
        Decoded bytes

    Raises:
        ValidationError: If string contains invalid characters
    """
    # Decode to integer
    n = 0
    for char in string:
        try:
            n = n * 58 + BASE58_INDEX[char]
        except KeyError:
            raise ValidationError(f"Invalid Base58 character: {char!r}") from None

    # Convert to bytes
    body = int_to_bytes(n, (n.bit_length() + 7) // 8)

    # Add leading zeros
    leading_zeros = len(string) - len(string.lstrip("1"))
    return b"\x00" * leading_zeros + body


def encode_base58_check(data: bytes) -> str:
    """
    Encode bytes as Base58Check (with checksum).

    Args:
        data: Bytes to encode

    Returns:
        Base58Check encoded string
    """
    checksum = double_sha256(data)[:CHECKSUM_SIZE]
    return encode_base58(data + checksum)


def decode_base58_check(string: str) -> bytes:
    """
    Decode Base58Check string.

    Args:
        string: Base58Check string

    Returns:
        Decoded data (without checksum)

    Raises:
        ValidationError: If string contains invalid characters
        InvalidLength: If string is too short to carry a checksum
        ChecksumMismatch: If checksum is invalid
    """
    data = decode_base58(string)
    if len(data) < CHECKSUM_SIZE:
        raise InvalidLength("Invalid Base58Check string: too short")

    payload, checksum = data[:-CHECKSUM_SIZE], data[-CHECKSUM_SIZE:]
    expected_checksum = double_sha256(payload)[:CHECKSUM_SIZE]

    if not hmac.compare_digest(checksum, expected_checksum):
        raise ChecksumMismatch("Invalid Base58Check checksum")

    return payload
