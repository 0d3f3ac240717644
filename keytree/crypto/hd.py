"""Hierarchical Deterministic keys (BIP32)."""

from dataclasses import dataclass, field
from functools import cached_property
from typing import TYPE_CHECKING, Optional, Union

from ..constants import HARDENED, Network, Purpose
from ..exceptions import InvalidDerivation, InvalidKeyData, InvalidMaster
from ..types.common import ChainCode, Fingerprint, PrivateKeyBytes, PublicKeyBytes
from ..utils.validation import (
    validate_chain_code,
    validate_child_index,
    validate_depth,
    validate_fingerprint,
    validate_private_key,
    validate_public_key,
)
from .keys import PrivateKey, PublicKey, random_bytes

if TYPE_CHECKING:
    from ..networks import NetworkRegistry
    from .bip39 import Mnemonic
    from .path import DerivationPath

__all__ = ["HDKey", "HDPrivateKey", "HDPublicKey", "ZERO_FINGERPRINT"]

ZERO_FINGERPRINT = Fingerprint(b"\x00\x00\x00\x00")


@dataclass(frozen=True)
class HDKey:
    """
    Node of a BIP32 key tree.

    Holds the chain code and tree position. Concrete nodes are either
    HDPrivateKey (scalar, public point derivable) or HDPublicKey (point only).
    Nodes are immutable; derivation returns new nodes.
    """

    chain_code: ChainCode
    depth: int
    parent_fingerprint: Fingerprint
    child_index: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "chain_code", ChainCode(validate_chain_code(self.chain_code)))
        object.__setattr__(self, "parent_fingerprint", Fingerprint(validate_fingerprint(self.parent_fingerprint)))
        validate_depth(self.depth)
        validate_child_index(self.child_index)

    def is_private(self) -> bool:
        """Whether this node carries a private scalar."""
        return False

    @property
    def identifier(self) -> bytes:
        """HASH160 of the compressed public key."""
        return PublicKey(self.public_key).hash160()

    @property
    def fingerprint(self) -> Fingerprint:
        """First 4 bytes of the identifier."""
        return Fingerprint(self.identifier[:4])

    def is_master(self) -> bool:
        return (
            self.depth == 0
            and self.parent_fingerprint == ZERO_FINGERPRINT
            and self.child_index == 0
        )

    def is_hardened(self) -> bool:
        """Whether this node was produced by hardened derivation."""
        return bool(self.child_index & HARDENED)

    def is_account(self, account: Optional[int] = None) -> bool:
        """
        Check whether this node sits at the account level of a BIP44-style tree.

        Args:
            account: Expected account number (unhardened), any if None
        """
        if account is not None and self.child_index != (account | HARDENED):
            return False
        return self.depth == 3 and self.is_hardened()

    def derive(self, index: int, hardened: bool = False) -> "HDKey":
        """
        Derive a child node.

        Args:
            index: Child index; an index with the top bit set is hardened
            hardened: Force hardened derivation

        Raises:
            InvalidDerivation: Hardened step on a public node, bad index or depth
            InvalidChildKey: The index produced an unusable key
        """
        from .derivation import derive_child
        return derive_child(self, index, hardened)

    def derive_path(self, path: Union[str, "DerivationPath"]) -> "HDKey":
        """Derive along a path such as ``m/44'/0'/0'/0/0``."""
        from .derivation import derive_path
        return derive_path(self, path)

    def to_public(self) -> "HDPublicKey":
        """Return the public-only form of this node."""
        from .derivation import to_public
        return to_public(self)

    def to_raw(
        self,
        network: Union[Network, str] = Network.MAINNET,
        purpose: Union[Purpose, str] = Purpose.LEGACY,
        registry: Optional["NetworkRegistry"] = None
    ) -> bytes:
        """Serialize to the 78-byte extended key payload."""
        from .xkey import serialize
        from ..networks import DEFAULT_REGISTRY
        registry = registry or DEFAULT_REGISTRY
        return serialize(self, registry.version(network, purpose, self.is_private()))

    def to_base58(
        self,
        network: Union[Network, str] = Network.MAINNET,
        purpose: Union[Purpose, str] = Purpose.LEGACY,
        registry: Optional["NetworkRegistry"] = None
    ) -> str:
        """
        Encode as a Base58Check extended key string.

        Args:
            network: Target network
            purpose: Prefix family (x/y/z)
            registry: Version prefix table

        Returns:
            Extended key string such as ``xprv...`` or ``zpub...``
        """
        from .xkey import encode
        return encode(self, network, purpose, registry=registry)

    @classmethod
    def from_base58(
        cls,
        xkey: str,
        network: Optional[Union[Network, str]] = None,
        registry: Optional["NetworkRegistry"] = None
    ) -> "HDKey":
        """
        Decode an extended key string.

        Args:
            xkey: Base58Check extended key
            network: Expected network, any registered network if None
            registry: Version prefix table

        Returns:
            HDPrivateKey or HDPublicKey

        Raises:
            InvalidKeyData: If called on a concrete class and the key kind differs
        """
        from .xkey import decode
        node, _ = decode(xkey, network, registry=registry)
        return cls._check_kind(node)

    @classmethod
    def from_raw(
        cls,
        payload: bytes,
        network: Optional[Union[Network, str]] = None,
        registry: Optional["NetworkRegistry"] = None
    ) -> "HDKey":
        """Decode a 78-byte extended key payload."""
        from .xkey import parse
        node, _ = parse(payload, network, registry=registry)
        return cls._check_kind(node)

    @classmethod
    def _check_kind(cls, node: "HDKey") -> "HDKey":
        if not isinstance(node, cls):
            kind = "private" if node.is_private() else "public"
            raise InvalidKeyData(f"Expected {cls.__name__}, got a {kind} extended key")
        return node


@dataclass(frozen=True)
class HDPrivateKey(HDKey):
    """BIP32 node holding a private scalar."""

    private_key: PrivateKeyBytes = field(repr=False)

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "private_key", PrivateKeyBytes(validate_private_key(self.private_key)))

    def is_private(self) -> bool:
        return True

    @cached_property
    def public_key(self) -> PublicKeyBytes:
        """Compressed public point, derived from the scalar."""
        return PrivateKey(self.private_key).public_key().point

    @classmethod
    def from_seed(cls, seed: bytes) -> "HDPrivateKey":
        """
        Create master node from seed.

        Raises:
            InvalidSeed: If the seed has the wrong size or yields an invalid key
        """
        from .derivation import master_from_seed
        return master_from_seed(seed)

    @classmethod
    def from_mnemonic(
        cls,
        mnemonic: Union["Mnemonic", str],
        passphrase: str = ""
    ) -> "HDPrivateKey":
        """Create master node from a mnemonic phrase."""
        from .bip39 import Mnemonic

        if not isinstance(mnemonic, Mnemonic):
            mnemonic = Mnemonic.from_phrase(mnemonic)
        return cls.from_seed(mnemonic.to_seed(passphrase))

    @classmethod
    def from_key(cls, key: Union[bytes, int], chain_code: bytes) -> "HDPrivateKey":
        """
        Create a depth 0 node from a raw scalar and chain code.

        Args:
            key: Scalar as 32 bytes or integer
            chain_code: 32-byte chain code
        """
        if isinstance(key, int):
            if not 0 < key < 2 ** 256:
                raise InvalidKeyData("Private key out of range")
            key = key.to_bytes(32, "big")
        return cls(
            chain_code=chain_code,
            depth=0,
            parent_fingerprint=ZERO_FINGERPRINT,
            child_index=0,
            private_key=key,
        )

    @classmethod
    def generate(cls) -> "HDPrivateKey":
        """Create a master node from a random scalar and chain code."""
        key = PrivateKey.create()
        return cls.from_key(key.secret, random_bytes(32))

    def derive_account(
        self,
        purpose: Union[Purpose, str, int],
        coin_type: int,
        account: int
    ) -> "HDPrivateKey":
        """
        Derive ``m/purpose'/coin_type'/account'`` from a master node.

        Args:
            purpose: Purpose (its BIP number is used) or a raw purpose number
            coin_type: SLIP-44 coin type
            account: Account number

        Raises:
            InvalidDerivation: If this is not a master node
            NetworkMismatch: If purpose is not a known prefix family
        """
        from ..networks import to_purpose

        if not self.is_master():
            raise InvalidDerivation("Cannot derive account from non-master key")

        if not isinstance(purpose, int):
            purpose = to_purpose(purpose).bip

        node = self
        for index in (purpose, coin_type, account):
            node = node.derive(index, hardened=True)
        return node

    def __repr__(self) -> str:
        return (
            f"HDPrivateKey(depth={self.depth}, "
            f"fingerprint={self.fingerprint.hex()}, "
            f"child_index={self.child_index:#x})"
        )


@dataclass(frozen=True)
class HDPublicKey(HDKey):
    """BIP32 node holding only a public point."""

    public_key: PublicKeyBytes

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(
            self, "public_key", PublicKeyBytes(validate_public_key(self.public_key, compressed_only=True))
        )

    def __repr__(self) -> str:
        return (
            f"HDPublicKey(depth={self.depth}, "
            f"public_key={self.public_key.hex()}, "
            f"child_index={self.child_index:#x})"
        )


def check_master(depth: int, parent_fingerprint: bytes, child_index: int) -> None:
    """
    Reject depth 0 metadata with a parent fingerprint or index.

    Raises:
        InvalidMaster: If a master node has non-zero parent data
    """
    if depth == 0 and (parent_fingerprint != ZERO_FINGERPRINT or child_index != 0):
        raise InvalidMaster("Master key has non-zero parent fingerprint or child index")
