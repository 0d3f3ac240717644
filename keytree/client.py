"""Main keytree client."""

import logging
from typing import Optional, Sequence, Tuple, Union

from .constants import DEFAULT_LANGUAGE, Network, Purpose
from .crypto.bip39 import Mnemonic
from .crypto.derivation import derive_path
from .crypto.hd import HDKey, HDPrivateKey
from .crypto.path import DerivationPath
from .crypto.xkey import decode, encode, is_base58
from .networks import DEFAULT_REGISTRY, NetworkParams, NetworkRegistry, to_network, to_purpose

__all__ = ["KeyTree"]

logger = logging.getLogger(__name__)


class KeyTree:
    """
    Entry point bound to a network and serialization purpose.

    Wraps mnemonic handling, master key creation, derivation and extended
    key (de)serialization so callers do not repeat the network, purpose and
    prefix table on every call.
    """

    def __init__(
        self,
        network: Union[Network, str] = Network.MAINNET,
        purpose: Union[Purpose, str] = Purpose.LEGACY,
        registry: Optional[NetworkRegistry] = None,
        language: str = DEFAULT_LANGUAGE,
    ) -> None:
        """
        Initialize client.

        Args:
            network: Default network for encoding and decoding
            purpose: Default prefix family (x/y/z)
            registry: Version prefix table (default: built-in networks)
            language: Mnemonic wordlist language

        Raises:
            NetworkMismatch: If the network or purpose is unknown, or the
                purpose is not registered for the network
        """
        self._network = to_network(network)
        self._purpose = to_purpose(purpose)
        self._registry = registry or DEFAULT_REGISTRY
        self._language = language

        # Validate the pair up front
        self._params = self._registry.get(self._network, self._purpose)

        logger.info(
            f"Initialized KeyTree for {self._network.value} "
            f"with {self._purpose.value}-prefixed keys"
        )

    @property
    def network(self) -> Network:
        return self._network

    @property
    def purpose(self) -> Purpose:
        return self._purpose

    @property
    def registry(self) -> NetworkRegistry:
        return self._registry

    @property
    def params(self) -> NetworkParams:
        """Version prefixes for the configured network and purpose."""
        return self._params

    # Mnemonics
    def generate_mnemonic(self, bits: int = 256) -> Mnemonic:
        """Generate a new random mnemonic."""
        logger.debug(f"Generating {bits}-bit mnemonic")
        return Mnemonic.generate(bits, self._language)

    def mnemonic(self, phrase: Union[str, Sequence[str]]) -> Mnemonic:
        """Parse and validate a phrase."""
        return Mnemonic.from_phrase(phrase, self._language)

    # Master keys
    def from_mnemonic(
        self,
        mnemonic: Union[Mnemonic, str, Sequence[str]],
        passphrase: str = ""
    ) -> HDPrivateKey:
        """Create master key from a mnemonic."""
        if not isinstance(mnemonic, Mnemonic):
            mnemonic = self.mnemonic(mnemonic)
        logger.debug(f"Creating master key from {mnemonic.bits}-bit mnemonic")
        return HDPrivateKey.from_mnemonic(mnemonic, passphrase)

    def from_seed(self, seed: bytes) -> HDPrivateKey:
        """Create master key from seed bytes."""
        logger.debug(f"Creating master key from {len(seed)}-byte seed")
        return HDPrivateKey.from_seed(seed)

    def generate(self) -> HDPrivateKey:
        """Create a random master key."""
        return HDPrivateKey.generate()

    # Derivation
    def derive(self, key: HDKey, path: Union[str, DerivationPath]) -> HDKey:
        """Derive a descendant along a path."""
        logger.debug(f"Deriving {path} from depth {key.depth}")
        return derive_path(key, path)

    def derive_account(
        self,
        master: HDPrivateKey,
        account: int = 0,
        coin_type: Optional[int] = None
    ) -> HDPrivateKey:
        """
        Derive the account node for the configured purpose.

        Args:
            master: Master key
            account: Account number
            coin_type: Coin type (default: the network's coin type)
        """
        if coin_type is None:
            coin_type = self._params.coin_type
        logger.debug(
            f"Deriving account {account} for purpose {self._purpose.bip}, coin type {coin_type}"
        )
        return master.derive_account(self._purpose, coin_type, account)

    # Serialization
    def to_base58(
        self,
        key: HDKey,
        purpose: Optional[Union[Purpose, str]] = None,
        private: Optional[bool] = None
    ) -> str:
        """Encode with the configured network and purpose."""
        return encode(
            key,
            self._network,
            purpose or self._purpose,
            private=private,
            registry=self._registry,
        )

    def from_base58(self, xkey: str) -> Tuple[HDKey, Purpose]:
        """
        Decode an extended key for the configured network.

        Returns:
            Tuple of (key, purpose the key was serialized for)
        """
        key, purpose = decode(xkey, self._network, registry=self._registry)
        logger.debug(
            f"Decoded {'private' if key.is_private() else 'public'} key "
            f"at depth {key.depth} ({purpose.value}-prefixed)"
        )
        return key, purpose

    def is_base58(self, xkey: str) -> bool:
        """Check whether a string is an extended key for the configured network."""
        return is_base58(xkey, self._network, registry=self._registry)

    def __repr__(self) -> str:
        return f"KeyTree(network={self._network.value!r}, purpose={self._purpose.value!r})"
