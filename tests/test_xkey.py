import struct

import pytest

from keytree.constants import Network, Purpose
from keytree.crypto import xkey
from keytree.crypto.hd import HDKey, HDPrivateKey, HDPublicKey
from keytree.exceptions import (
    ChecksumMismatch,
    InvalidDerivation,
    InvalidKeyData,
    InvalidLength,
    InvalidMaster,
    NetworkMismatch,
    ValidationError,
)
from keytree.networks import DEFAULT_NETWORKS
from keytree.utils.encoding import BASE58_ALPHABET, decode_base58, encode_base58_check

SEED = bytes.fromhex("000102030405060708090a0b0c0d0e0f")
XPRV = "xprv9s21ZrQH143K3QTDL4LXw2F7HEK3wJUD2nW2nRk4stbPy6cq3jPPqjiChkVvvNKmPGJxWUtg6LnF5kejMRNNU3TGtRBeJgk33yuGBxrMPHi"
XPUB = "xpub661MyMwAqRbcFtXgS5sYJABqqG9YLmC4Q1Rdap9gSE8NqtwybGhePY2gZ29ESFjqJoCu1Rupje8YtGqsefD265TMg7usUDFdp6W1EGMcet8"
TPRV = (
    "tprv8gRrNu65W2Msef2BdBSUgFdRTGzC8EwVXnV7UGS3faeXtuMVtG"
    "fEdidVeGbThs4ELEoayCAzZQ4uUji9DUiAs7erdVskqju7hrBcDvDsdbY"
)

# Account keys for the all-"abandon" mnemonic
YPUB = "ypub6Ww3ibxVfGzLrAH1PNcjyAWenMTbbAosGNB6VvmSEgytSER9azLDWCxoJwW7Ke7icmizBMXrzBx9979FfaHxHcrArf3zbeJJJUZPf663zsP"
ZPUB = "zpub6rFR7y4Q2AijBEqTUquhVz398htDFrtymD9xYYfG1m4wAcvPhXNfE3EfH1r1ADqtfSdVCToUG868RvUUkgDKf31mGDtKsAYz2oz2AGutZYs"
ZPRV = "zprvAWgYBBk7JR8Gjrh4UJQ2uJdG1r3WNRRfURiABBE3RvMXYSrRJL62XuezvGdPvG6GFBZduosCc1YP5wixPox7zhZLfiUm8aunE96BBa4Kei5"


@pytest.fixture(scope="module")
def master():
    return HDPrivateKey.from_seed(SEED)


def raw_payload(version, depth=0, fingerprint=b"\x00" * 4, index=0, chain=b"\x01" * 32, key=None):
    if key is None:
        key = b"\x00" + (1).to_bytes(32, "big")
    return xkey.PAYLOAD_FORMAT.pack(version, depth, fingerprint, index, chain, key)


@pytest.mark.parametrize(
    "params", DEFAULT_NETWORKS, ids=lambda p: f"{p.network.value}-{p.purpose.value}"
)
def test_roundtrip_every_network(master, params):
    child = master.derive_path("m/0'/1")
    for node in (child, child.to_public()):
        encoded = node.to_base58(params.network, params.purpose)
        assert encoded.startswith(params.prefix58(node.is_private()))
        assert len(decode_base58(encoded)) == 82

        decoded, purpose = xkey.decode(encoded, params.network)
        assert decoded == node
        assert type(decoded) is type(node)
        assert purpose == params.purpose
        assert decoded.to_base58(params.network, params.purpose) == encoded


def test_serialize_layout(master):
    payload = master.to_raw()
    assert len(payload) == 78
    version, depth, fingerprint, index, chain, key = struct.unpack(">IB4sI32s33s", payload)
    assert version == 0x0488ADE4
    assert depth == 0
    assert fingerprint == b"\x00" * 4
    assert index == 0
    assert chain == master.chain_code
    assert key == b"\x00" + master.private_key

    pub_payload = master.to_public().to_raw(Network.TESTNET)
    assert pub_payload[:4] == bytes.fromhex("043587cf")
    assert pub_payload[45:] == master.public_key


def test_decode_any_network(master):
    node, purpose = xkey.decode(XPRV)
    assert node == master
    assert purpose is Purpose.LEGACY
    assert HDKey.from_base58(XPUB) == master.to_public()


@pytest.mark.parametrize("encoded,purpose", [
    (YPUB, Purpose.SEGWIT_COMPAT),
    (ZPUB, Purpose.NATIVE_SEGWIT),
    (ZPRV, Purpose.NATIVE_SEGWIT),
])
def test_decode_slip132(encoded, purpose):
    node, found = xkey.decode(encoded, Network.MAINNET)
    assert found is purpose
    assert node.to_base58(Network.MAINNET, purpose) == encoded


def test_network_mismatch():
    with pytest.raises(NetworkMismatch) as excinfo:
        HDKey.from_base58(TPRV, Network.MAINNET)
    assert str(excinfo.value) == "Network mismatch for xprivkey."

    node = HDKey.from_base58(TPRV, Network.TESTNET)
    assert node.is_private()
    assert node.to_base58(Network.TESTNET) == TPRV

    with pytest.raises(NetworkMismatch) as excinfo:
        HDKey.from_base58(XPUB, "testnet")
    assert str(excinfo.value) == "Network mismatch for xpubkey."


def test_tampered_string(master):
    encoded = master.to_base58()
    middle = len(encoded) // 2
    replacement = "2" if encoded[middle] != "2" else "3"
    tampered = encoded[:middle] + replacement + encoded[middle + 1:]
    with pytest.raises(ChecksumMismatch):
        xkey.decode(tampered)


def test_invalid_characters():
    with pytest.raises(ValidationError):
        xkey.decode(XPRV[:-1] + "0")


def test_wrong_length():
    with pytest.raises(InvalidLength):
        xkey.decode(encode_base58_check(b"\x04\x88\xad\xe4" + b"\x00" * 40))
    with pytest.raises(InvalidLength):
        xkey.parse(b"\x00" * 77)


def test_unknown_version():
    with pytest.raises(NetworkMismatch) as excinfo:
        xkey.parse(raw_payload(0xDEADBEEF))
    assert "0xdeadbeef" in str(excinfo.value)


def test_master_with_parent_data():
    with pytest.raises(InvalidMaster):
        xkey.parse(raw_payload(0x0488ADE4, fingerprint=b"\x01\x02\x03\x04"))
    with pytest.raises(InvalidMaster):
        xkey.parse(raw_payload(0x0488ADE4, index=1))
    # Non-master depth may carry parent data
    node, _ = xkey.parse(raw_payload(0x0488ADE4, depth=1, fingerprint=b"\x01\x02\x03\x04", index=1))
    assert node.depth == 1


def test_bad_key_data():
    # Private version with a non-zero key prefix
    with pytest.raises(InvalidKeyData):
        xkey.parse(raw_payload(0x0488ADE4, key=b"\x01" + b"\x00" * 31 + b"\x01"))
    # Scalar out of range
    with pytest.raises(InvalidKeyData):
        xkey.parse(raw_payload(0x0488ADE4, key=b"\x00" + b"\xff" * 32))
    # Public version with private key data
    with pytest.raises(InvalidKeyData):
        xkey.parse(raw_payload(0x0488B21E))
    # Point not on the curve
    with pytest.raises(InvalidKeyData):
        xkey.parse(raw_payload(0x0488B21E, key=b"\x02" + b"\xff" * 32))


def test_kind_check_on_concrete_class():
    assert isinstance(HDPrivateKey.from_base58(XPRV), HDPrivateKey)
    assert isinstance(HDPublicKey.from_base58(XPUB), HDPublicKey)
    with pytest.raises(InvalidKeyData):
        HDPrivateKey.from_base58(XPUB)
    with pytest.raises(InvalidKeyData):
        HDPublicKey.from_raw(HDKey.from_base58(XPRV).to_raw())


def test_export_kind(master):
    assert xkey.encode(master, private=False) == XPUB
    assert xkey.encode(master.to_public(), private=False) == XPUB
    with pytest.raises(InvalidDerivation):
        xkey.encode(master.to_public(), private=True)


def test_unregistered_pair(master):
    with pytest.raises(NetworkMismatch):
        master.to_base58(Network.REGTEST, Purpose.NATIVE_SEGWIT)


def test_is_base58():
    assert xkey.is_base58(XPRV)
    assert xkey.is_base58(ZPUB, Network.MAINNET)
    assert not xkey.is_base58(TPRV, Network.MAINNET)
    assert not xkey.is_base58(XPRV[:-1] + "0")
    assert not xkey.is_base58("")
    assert not xkey.is_base58(None)
    assert "0" not in BASE58_ALPHABET


def test_raw_roundtrip(master):
    child = master.derive_path("m/0'/1")
    for node in (master, child, child.to_public()):
        assert HDKey.from_raw(node.to_raw()) == node
    assert HDKey.from_raw(child.to_raw(Network.TESTNET), Network.TESTNET) == child
    node, params = xkey.parse(child.to_raw())
    assert node == child
    assert params.network is Network.MAINNET


def test_unknown_network_or_purpose(master):
    with pytest.raises(NetworkMismatch):
        master.to_base58(purpose="q")
    with pytest.raises(NetworkMismatch):
        xkey.decode(XPRV, "bogus")
    assert not xkey.is_base58(XPRV, network="bogus")
    with pytest.raises(NetworkMismatch):
        master.derive_account("q", 0, 0)
