"""Extended key serialization (BIP32 / SLIP-132)."""

import struct
from typing import Optional, Tuple, Union

from ..constants import PAYLOAD_SIZE, Network, Purpose
from ..exceptions import (
    InvalidDerivation,
    InvalidKeyData,
    InvalidLength,
    KeyTreeError,
    NetworkMismatch,
)
from ..networks import DEFAULT_REGISTRY, NetworkParams, NetworkRegistry, to_network
from ..utils.encoding import decode_base58_check, encode_base58_check
from .hd import HDKey, HDPrivateKey, HDPublicKey, check_master

__all__ = ["serialize", "parse", "encode", "decode", "is_base58"]

# version, depth, parent fingerprint, child index, chain code, key data
PAYLOAD_FORMAT = struct.Struct(">IB4sI32s33s")


def _key_kind(private: bool) -> str:
    return "xprivkey" if private else "xpubkey"


def serialize(node: HDKey, version: int) -> bytes:
    """
    Serialize a node to the 78-byte payload.

    Private nodes carry ``0x00 || scalar``, public nodes the compressed point.
    """
    if node.is_private():
        key_data = b"\x00" + node.private_key
    else:
        key_data = node.public_key

    return PAYLOAD_FORMAT.pack(
        version,
        node.depth,
        node.parent_fingerprint,
        node.child_index,
        node.chain_code,
        key_data,
    )


def _resolve_version(
    version: int,
    network: Optional[Union[Network, str]],
    registry: NetworkRegistry
) -> Tuple[NetworkParams, bool]:
    found = registry.lookup(version)
    if found is None:
        raise NetworkMismatch(f"Unknown version prefix: {version:#010x}", data=version)

    params, private = found
    if network is not None and params.network != to_network(network):
        raise NetworkMismatch(f"Network mismatch for {_key_kind(private)}.", data=version)

    return params, private


def parse(
    payload: bytes,
    network: Optional[Union[Network, str]] = None,
    registry: Optional[NetworkRegistry] = None
) -> Tuple[HDKey, NetworkParams]:
    """
    Parse a 78-byte payload.

    Args:
        payload: Raw extended key without checksum
        network: Expected network, any registered network if None
        registry: Version prefix table (default: built-in networks)

    Returns:
        Tuple of (node, params of the matched version prefix)

    Raises:
        InvalidLength: If payload is not 78 bytes
        NetworkMismatch: If the version prefix is unknown or for another network
        InvalidMaster: If a depth 0 key has parent data
        InvalidKeyData: If key data is malformed or off the curve
    """
    registry = registry or DEFAULT_REGISTRY

    if len(payload) != PAYLOAD_SIZE:
        raise InvalidLength(f"Extended key must be {PAYLOAD_SIZE} bytes, got {len(payload)}")

    version, depth, parent_fingerprint, child_index, chain_code, key_data = (
        PAYLOAD_FORMAT.unpack(payload)
    )

    params, private = _resolve_version(version, network, registry)
    check_master(depth, parent_fingerprint, child_index)

    if private:
        if key_data[0] != 0x00:
            raise InvalidKeyData("Private extended key must have 0x00 key prefix")
        node = HDPrivateKey(
            chain_code=chain_code,
            depth=depth,
            parent_fingerprint=parent_fingerprint,
            child_index=child_index,
            private_key=key_data[1:],
        )
    else:
        if key_data[0] not in (0x02, 0x03):
            raise InvalidKeyData("Public extended key must hold a compressed point")
        node = HDPublicKey(
            chain_code=chain_code,
            depth=depth,
            parent_fingerprint=parent_fingerprint,
            child_index=child_index,
            public_key=key_data,
        )

    return node, params


def encode(
    node: HDKey,
    network: Union[Network, str] = Network.MAINNET,
    purpose: Union[Purpose, str] = Purpose.LEGACY,
    private: Optional[bool] = None,
    registry: Optional[NetworkRegistry] = None
) -> str:
    """
    Encode a node as a Base58Check extended key.

    Args:
        node: Node to encode
        network: Target network
        purpose: Prefix family (x/y/z)
        private: Export kind; None keeps the node's kind, False exports a
            private node's public form
        registry: Version prefix table

    Returns:
        Extended key string

    Raises:
        NetworkMismatch: If (network, purpose) is not registered
        InvalidDerivation: If a private export of a public node is requested
    """
    registry = registry or DEFAULT_REGISTRY

    if private is None:
        private = node.is_private()
    if private and not node.is_private():
        raise InvalidDerivation("Cannot export private key from public node")
    if not private:
        node = node.to_public()

    version = registry.version(network, purpose, private)
    return encode_base58_check(serialize(node, version))


def decode(
    xkey: str,
    network: Optional[Union[Network, str]] = None,
    registry: Optional[NetworkRegistry] = None
) -> Tuple[HDKey, Purpose]:
    """
    Decode a Base58Check extended key.

    Args:
        xkey: Extended key string
        network: Expected network, any registered network if None
        registry: Version prefix table

    Returns:
        Tuple of (node, purpose)

    Raises:
        ValidationError: If the string is not Base58
        ChecksumMismatch: If the checksum does not verify
        InvalidLength: If the payload is not 78 bytes
        NetworkMismatch: If the version prefix is unknown or for another network
        InvalidMaster: If a depth 0 key has parent data
        InvalidKeyData: If key data is malformed or off the curve
    """
    payload = decode_base58_check(xkey)
    node, params = parse(payload, network, registry)
    return node, params.purpose


def is_base58(
    xkey: str,
    network: Optional[Union[Network, str]] = None,
    registry: Optional[NetworkRegistry] = None
) -> bool:
    """Check whether a string decodes as an extended key."""
    if not isinstance(xkey, str):
        return False
    try:
        decode(xkey, network, registry)
    except KeyTreeError:
        return False
    return True
