import pytest

from keytree.constants import Network, Purpose
from keytree.exceptions import NetworkMismatch
from keytree.networks import (
    DEFAULT_NETWORKS,
    DEFAULT_REGISTRY,
    NetworkParams,
    NetworkRegistry,
    to_network,
    to_purpose,
)


def test_mainnet_prefixes():
    params = DEFAULT_REGISTRY.get(Network.MAINNET)
    assert params.purpose is Purpose.LEGACY
    assert params.xprivkey == 0x0488ADE4
    assert params.xpubkey == 0x0488B21E
    assert params.coin_type == 0

    zpub = DEFAULT_REGISTRY.get("main", "z")
    assert zpub.xpubkey58 == "zpub"
    assert zpub.version(private=True) == 0x04B2430C
    assert zpub.prefix58(private=False) == "zpub"


def test_testnet_prefixes():
    assert DEFAULT_REGISTRY.version("testnet", "x", private=True) == 0x04358394
    assert DEFAULT_REGISTRY.version("testnet", "y", private=False) == 0x044A5262
    assert DEFAULT_REGISTRY.get(Network.TESTNET, Purpose.NATIVE_SEGWIT).xprivkey58 == "vprv"
    assert DEFAULT_REGISTRY.get(Network.TESTNET).coin_type == 1


def test_lookup_by_version():
    params, private = DEFAULT_REGISTRY.lookup(0x049D7CB2)
    assert params.network is Network.MAINNET
    assert params.purpose is Purpose.SEGWIT_COMPAT
    assert private is False

    params, private = DEFAULT_REGISTRY.lookup(0x04358394)
    assert params.network is Network.TESTNET
    assert private is True

    assert DEFAULT_REGISTRY.lookup(0) is None


def test_versions_are_unique():
    versions = [p.xprivkey for p in DEFAULT_NETWORKS] + [p.xpubkey for p in DEFAULT_NETWORKS]
    assert len(versions) == len(set(versions))


def test_unregistered_pair():
    with pytest.raises(NetworkMismatch):
        DEFAULT_REGISTRY.get(Network.SIMNET, Purpose.NATIVE_SEGWIT)
    with pytest.raises(NetworkMismatch):
        DEFAULT_REGISTRY.get("bogus")
    with pytest.raises(NetworkMismatch):
        DEFAULT_REGISTRY.get(Network.MAINNET, "q")
    with pytest.raises(NetworkMismatch):
        DEFAULT_REGISTRY.purposes("bogus")


def test_purposes_and_networks():
    assert DEFAULT_REGISTRY.purposes("main") == (
        Purpose.LEGACY,
        Purpose.SEGWIT_COMPAT,
        Purpose.NATIVE_SEGWIT,
    )
    assert DEFAULT_REGISTRY.purposes(Network.REGTEST) == (Purpose.LEGACY,)
    assert DEFAULT_REGISTRY.networks == (
        Network.MAINNET,
        Network.TESTNET,
        Network.REGTEST,
        Network.SIMNET,
    )
    assert (Network.MAINNET, Purpose.LEGACY) in DEFAULT_REGISTRY
    assert len(DEFAULT_REGISTRY) == len(DEFAULT_NETWORKS)
    assert list(DEFAULT_REGISTRY) == list(DEFAULT_NETWORKS)


def test_duplicate_entries_rejected():
    mainnet = DEFAULT_NETWORKS[0]
    with pytest.raises(ValueError):
        NetworkRegistry([mainnet, mainnet])

    clash = NetworkParams(Network.REGTEST, Purpose.SEGWIT_COMPAT, mainnet.xprivkey, 0x01020304, "aprv", "apub", 1)
    with pytest.raises(ValueError):
        NetworkRegistry([mainnet, clash])


def test_custom_registry():
    custom = NetworkParams(Network.REGTEST, Purpose.LEGACY, 0x04358394, 0x043587CF, "tprv", "tpub", 1)
    registry = NetworkRegistry([custom])
    params, private = registry.lookup(0x04358394)
    assert params.network is Network.REGTEST
    assert private
    with pytest.raises(NetworkMismatch):
        registry.get(Network.MAINNET)


def test_registry_is_read_only():
    with pytest.raises(TypeError):
        DEFAULT_REGISTRY._by_pair[(Network.MAINNET, Purpose.LEGACY)] = None
    with pytest.raises(AttributeError):
        DEFAULT_NETWORKS[0].xprivkey = 0


def test_coerce_names():
    assert to_network("testnet") is Network.TESTNET
    assert to_purpose("z") is Purpose.NATIVE_SEGWIT
    with pytest.raises(NetworkMismatch) as excinfo:
        to_network("bogus")
    assert isinstance(excinfo.value.__cause__, ValueError)
    with pytest.raises(NetworkMismatch):
        to_purpose("q")
