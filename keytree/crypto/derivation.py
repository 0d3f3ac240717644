"""BIP32 child key derivation."""

from typing import Union

from ..constants import (
    CURVE_ORDER,
    HARDENED,
    MAX_DEPTH,
    MAX_INDEX,
    MAX_SEED_SIZE,
    MIN_SEED_SIZE,
    SEED_KEY,
)
from ..exceptions import CryptoError, InvalidChildKey, InvalidDerivation, InvalidSeed
from ..types.common import Seed
from ..utils.encoding import hmac_sha512
from .hd import ZERO_FINGERPRINT, HDKey, HDPrivateKey, HDPublicKey
from .keys import PrivateKey, PublicKey
from .path import DerivationPath, parse_path

__all__ = ["master_from_seed", "derive_child", "derive_path", "to_public"]


def master_from_seed(seed: Seed) -> HDPrivateKey:
    """
    Create the master node from a seed.

    Args:
        seed: 16 to 64 bytes, usually the output of a mnemonic

    Returns:
        Depth 0 HDPrivateKey

    Raises:
        InvalidSeed: If the seed size is wrong or the derived scalar is invalid
    """
    if not MIN_SEED_SIZE <= len(seed) <= MAX_SEED_SIZE:
        raise InvalidSeed(
            f"Seed must be between {MIN_SEED_SIZE} and {MAX_SEED_SIZE} bytes, got {len(seed)}"
        )

    h = hmac_sha512(SEED_KEY, bytes(seed))
    key_bytes, chain_code = h[:32], h[32:]

    key_int = int.from_bytes(key_bytes, "big")
    if key_int == 0 or key_int >= CURVE_ORDER:
        raise InvalidSeed("Seed produces an invalid master key")

    return HDPrivateKey(
        chain_code=chain_code,
        depth=0,
        parent_fingerprint=ZERO_FINGERPRINT,
        child_index=0,
        private_key=key_bytes,
    )


def derive_child(node: HDKey, index: int, hardened: bool = False) -> HDKey:
    """
    Derive a child node (CKDpriv / CKDpub).

    Args:
        node: Parent node
        index: Child index; the top bit marks hardened derivation
        hardened: Set the hardened bit on ``index``

    Returns:
        Child node of the same kind as the parent

    Raises:
        InvalidDerivation: Bad index, depth overflow, or hardened step on a public node
        InvalidChildKey: IL >= n, zero scalar or point at infinity for this index
    """
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index <= MAX_INDEX:
        raise InvalidDerivation(f"Child index out of range: {index!r}")
    if hardened:
        index |= HARDENED
    hardened = bool(index & HARDENED)

    if node.depth >= MAX_DEPTH:
        raise InvalidDerivation(f"Cannot derive beyond depth {MAX_DEPTH}")

    parent_public = node.public_key
    ser_index = index.to_bytes(4, "big")

    if hardened:
        if not node.is_private():
            raise InvalidDerivation("Cannot derive hardened child from public key")
        data = b"\x00" + node.private_key + ser_index
    else:
        data = parent_public + ser_index

    h = hmac_sha512(node.chain_code, data)
    tweak, child_chain_code = h[:32], h[32:]

    if int.from_bytes(tweak, "big") >= CURVE_ORDER:
        raise InvalidChildKey(index)

    metadata = dict(
        chain_code=child_chain_code,
        depth=node.depth + 1,
        parent_fingerprint=PublicKey(parent_public).fingerprint(),
        child_index=index,
    )

    if node.is_private():
        try:
            child_key = PrivateKey(node.private_key).add(tweak)
        except CryptoError as e:
            raise InvalidChildKey(index) from e
        return HDPrivateKey(private_key=child_key.secret, **metadata)

    try:
        child_point = PublicKey(parent_public).add(tweak)
    except CryptoError as e:
        raise InvalidChildKey(index) from e
    return HDPublicKey(public_key=child_point.point, **metadata)


def derive_path(node: HDKey, path: Union[str, DerivationPath]) -> HDKey:
    """
    Derive a descendant along a path.

    Args:
        node: Starting node
        path: Path string (``m/0'/1``) or DerivationPath

    Returns:
        Descendant node; ``node`` itself for a root-only path

    Raises:
        InvalidPath: If the path string is malformed
        InvalidDerivation: On the first step that cannot be taken
    """
    for step in parse_path(path):
        node = derive_child(node, step.raw)
    return node


def to_public(node: HDKey) -> HDPublicKey:
    """Strip the private scalar from a node."""
    if not node.is_private():
        return node
    return HDPublicKey(
        chain_code=node.chain_code,
        depth=node.depth,
        parent_fingerprint=node.parent_fingerprint,
        child_index=node.child_index,
        public_key=node.public_key,
    )
