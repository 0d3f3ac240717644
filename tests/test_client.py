import logging

import pytest

import keytree
from keytree import KeyTree, Network, Purpose
from keytree.crypto.hd import HDPrivateKey, HDPublicKey
from keytree.exceptions import InvalidChecksum, InvalidDerivation, NetworkMismatch

ABANDON = "abandon abandon abandon abandon abandon abandon abandon abandon abandon abandon abandon about"
ZPRV_ACCOUNT = (
    "zprvAdG4iTXWBoARxkkzNpNh8r6Qag3irQB8PzEMkAFeTRXxHpbF9z4QgEvBRmfvqWvGp42t42nvgGpNgYSJA9iefm1yYNZKEm7z6qUWCroSQnE"
)
ZPUB_ACCOUNT = (
    "zpub6rFR7y4Q2AijBEqTUquhVz398htDFrtymD9xYYfG1m4wAcvPhXNfE3EfH1r1ADqtfSdVCToUG868RvUUkgDKf31mGDtKsAYz2oz2AGutZYs"
)
TPRV = (
    "tprv8gRrNu65W2Msef2BdBSUgFdRTGzC8EwVXnV7UGS3faeXtuMVtG"
    "fEdidVeGbThs4ELEoayCAzZQ4uUji9DUiAs7erdVskqju7hrBcDvDsdbY"
)


def test_defaults():
    tree = KeyTree()
    assert tree.network is Network.MAINNET
    assert tree.purpose is Purpose.LEGACY
    assert tree.registry is keytree.DEFAULT_REGISTRY
    assert tree.params.xprivkey58 == "xprv"
    assert repr(tree) == "KeyTree(network='main', purpose='x')"


def test_init_logs(caplog):
    with caplog.at_level(logging.INFO, logger="keytree.client"):
        KeyTree("testnet", "y")
    assert "testnet" in caplog.text
    assert "y-prefixed" in caplog.text


def test_unregistered_pair():
    with pytest.raises(NetworkMismatch):
        KeyTree(Network.REGTEST, Purpose.NATIVE_SEGWIT)
    with pytest.raises(NetworkMismatch):
        KeyTree("bogus")
    with pytest.raises(NetworkMismatch):
        KeyTree(purpose="q")


def test_native_segwit_account():
    tree = KeyTree(purpose=Purpose.NATIVE_SEGWIT)
    master = tree.from_mnemonic(ABANDON)
    account = tree.derive_account(master)
    assert tree.to_base58(account) == ZPRV_ACCOUNT
    assert tree.to_base58(account, private=False) == ZPUB_ACCOUNT
    assert tree.to_base58(account.to_public()) == ZPUB_ACCOUNT
    assert tree.to_base58(account, purpose="x").startswith("xprv")


def test_testnet_coin_type():
    tree = KeyTree(Network.TESTNET)
    master = tree.from_seed(bytes(range(16)))
    assert tree.derive_account(master) == master.derive_path("m/44'/1'/0'")
    assert tree.derive_account(master, account=2, coin_type=0) == master.derive_path("m/44'/0'/2'")


def test_from_base58_checks_network():
    key, purpose = KeyTree(Network.TESTNET).from_base58(TPRV)
    assert isinstance(key, HDPrivateKey)
    assert purpose is Purpose.LEGACY

    mainnet = KeyTree()
    with pytest.raises(NetworkMismatch):
        mainnet.from_base58(TPRV)
    assert not mainnet.is_base58(TPRV)
    assert mainnet.is_base58(ZPUB_ACCOUNT)


def test_from_base58_reports_purpose():
    key, purpose = KeyTree().from_base58(ZPUB_ACCOUNT)
    assert isinstance(key, HDPublicKey)
    assert purpose is Purpose.NATIVE_SEGWIT


def test_derive(caplog):
    tree = KeyTree()
    master = tree.from_mnemonic(tree.mnemonic(ABANDON))
    with caplog.at_level(logging.DEBUG, logger="keytree.client"):
        child = tree.derive(master, "m/84'/0'/0'")
    assert child == master.derive_account(Purpose.NATIVE_SEGWIT, 0, 0)
    # Key material never reaches the log
    assert master.private_key.hex() not in caplog.text
    assert child.private_key.hex() not in caplog.text

    with pytest.raises(InvalidDerivation):
        tree.derive(master.to_public(), "m/0'")


def test_mnemonic_roundtrip():
    tree = KeyTree()
    mnemonic = tree.generate_mnemonic(128)
    assert len(mnemonic.words) == 12
    assert tree.mnemonic(mnemonic.phrase) == mnemonic
    with pytest.raises(InvalidChecksum):
        tree.mnemonic(" ".join(["abandon"] * 12))


def test_generate():
    master = KeyTree().generate()
    assert master.is_master()


def test_module_level_decode():
    key = keytree.from_base58(TPRV, Network.TESTNET)
    assert key.is_private()
    with pytest.raises(NetworkMismatch):
        keytree.from_base58(TPRV)
