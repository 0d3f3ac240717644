"""Extended key version prefixes per network and purpose."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Optional, Tuple, Union

from .constants import Network, Purpose
from .exceptions import NetworkMismatch

__all__ = [
    "to_network",
    "to_purpose",
    "NetworkParams",
    "NetworkRegistry",
    "DEFAULT_NETWORKS",
    "DEFAULT_REGISTRY",
]


def to_network(network: Union[Network, str]) -> Network:
    """
    Coerce a network name to a Network.

    Raises:
        NetworkMismatch: If the name is not a known network
    """
    try:
        return Network(network)
    except ValueError as e:
        raise NetworkMismatch(f"Unknown network: {network!r}", data=network) from e


def to_purpose(purpose: Union[Purpose, str]) -> Purpose:
    """
    Coerce a prefix family (x/y/z) to a Purpose.

    Raises:
        NetworkMismatch: If the value is not a known purpose
    """
    try:
        return Purpose(purpose)
    except ValueError as e:
        raise NetworkMismatch(f"Unknown purpose: {purpose!r}", data=purpose) from e


@dataclass(frozen=True)
class NetworkParams:
    """Version prefixes for one (network, purpose) pair."""

    network: Network
    purpose: Purpose
    xprivkey: int
    xpubkey: int
    xprivkey58: str
    xpubkey58: str
    coin_type: int

    def version(self, private: bool) -> int:
        """Version prefix for a private or public key."""
        return self.xprivkey if private else self.xpubkey

    def prefix58(self, private: bool) -> str:
        """Leading Base58 characters produced by the version prefix."""
        return self.xprivkey58 if private else self.xpubkey58


class NetworkRegistry:
    """
    Read-only table of extended key version prefixes.

    Built once from a sequence of NetworkParams and passed to the codec.
    Every version prefix maps to exactly one (network, purpose, kind).
    """

    def __init__(self, params: Iterable[NetworkParams]) -> None:
        by_pair: Dict[Tuple[Network, Purpose], NetworkParams] = {}
        by_version: Dict[int, Tuple[NetworkParams, bool]] = {}

        for entry in params:
            pair = (entry.network, entry.purpose)
            if pair in by_pair:
                raise ValueError(f"Duplicate network entry: {entry.network.value}/{entry.purpose.value}")
            by_pair[pair] = entry

            for private in (True, False):
                version = entry.version(private)
                if version in by_version:
                    raise ValueError(f"Duplicate version prefix: {version:#010x}")
                by_version[version] = (entry, private)

        self._by_pair = MappingProxyType(by_pair)
        self._by_version = MappingProxyType(by_version)

    def get(
        self,
        network: Union[Network, str],
        purpose: Union[Purpose, str] = Purpose.LEGACY
    ) -> NetworkParams:
        """
        Get params for a network and purpose.

        Raises:
            NetworkMismatch: If the network or purpose is unknown, or no
                prefixes are registered for the pair
        """
        network, purpose = to_network(network), to_purpose(purpose)
        try:
            return self._by_pair[(network, purpose)]
        except KeyError:
            raise NetworkMismatch(
                f"No {purpose.value}-prefixed keys registered for {network.value}"
            ) from None

    def version(
        self,
        network: Union[Network, str],
        purpose: Union[Purpose, str],
        private: bool
    ) -> int:
        """Version prefix for (network, purpose, kind)."""
        return self.get(network, purpose).version(private)

    def lookup(self, version: int) -> Optional[Tuple[NetworkParams, bool]]:
        """Find (params, is_private) for a version prefix."""
        return self._by_version.get(version)

    def purposes(self, network: Union[Network, str]) -> Tuple[Purpose, ...]:
        """Purposes registered for a network."""
        network = to_network(network)
        return tuple(purpose for (net, purpose) in self._by_pair if net == network)

    @property
    def networks(self) -> Tuple[Network, ...]:
        return tuple(dict.fromkeys(net for (net, _) in self._by_pair))

    def __contains__(self, item: object) -> bool:
        return item in self._by_pair

    def __iter__(self) -> Iterator[NetworkParams]:
        return iter(self._by_pair.values())

    def __len__(self) -> int:
        return len(self._by_pair)


DEFAULT_NETWORKS = (
    NetworkParams(Network.MAINNET, Purpose.LEGACY, 0x0488ADE4, 0x0488B21E, "xprv", "xpub", 0),
    NetworkParams(Network.MAINNET, Purpose.SEGWIT_COMPAT, 0x049D7878, 0x049D7CB2, "yprv", "ypub", 0),
    NetworkParams(Network.MAINNET, Purpose.NATIVE_SEGWIT, 0x04B2430C, 0x04B24746, "zprv", "zpub", 0),
    NetworkParams(Network.TESTNET, Purpose.LEGACY, 0x04358394, 0x043587CF, "tprv", "tpub", 1),
    NetworkParams(Network.TESTNET, Purpose.SEGWIT_COMPAT, 0x044A4E28, 0x044A5262, "uprv", "upub", 1),
    NetworkParams(Network.TESTNET, Purpose.NATIVE_SEGWIT, 0x045F18BC, 0x045F1CF6, "vprv", "vpub", 1),
    NetworkParams(Network.REGTEST, Purpose.LEGACY, 0xEAB404C7, 0xEAB4FA05, "rprv", "rpub", 1),
    NetworkParams(Network.SIMNET, Purpose.LEGACY, 0x0420B900, 0x0420BD3A, "sprv", "spub", 115),
)

DEFAULT_REGISTRY = NetworkRegistry(DEFAULT_NETWORKS)
