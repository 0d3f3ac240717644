"""
Keytree Usage Examples

This file demonstrates key features of the keytree library.
"""

import logging

from keytree import KeyTree, Network, Purpose, from_base58
from keytree.crypto import HDPrivateKey, Mnemonic, parse_path
from keytree.exceptions import KeyTreeError, NetworkMismatch

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

DEMO_PHRASE = "abandon abandon abandon abandon abandon abandon abandon abandon abandon abandon abandon about"


def mnemonic_example():
    """Example 1: Mnemonic generation and seeds."""
    print("\n=== Mnemonic Example ===")

    tree = KeyTree()

    # Generate a 12 word phrase
    mnemonic = tree.generate_mnemonic(bits=128)
    print(f"Words: {len(mnemonic.words)}")
    print(f"Entropy: {mnemonic.bits} bits")

    # Parse an existing phrase
    known = Mnemonic.from_phrase(DEMO_PHRASE)
    seed = known.to_seed(passphrase="TREZOR")
    print(f"Seed: {seed.hex()[:16]}...")

    # Wipe the entropy when done
    mnemonic.destroy()


def derivation_example():
    """Example 2: Master key and path derivation."""
    print("\n=== Derivation Example ===")

    master = HDPrivateKey.from_seed(bytes.fromhex("000102030405060708090a0b0c0d0e0f"))
    print(f"Master: {master.to_base58()}")
    print(f"Fingerprint: {master.fingerprint.hex()}")

    path = parse_path("m/0'/1/2'")
    child = master.derive_path(path)
    print(f"{path}: {child.to_base58()}")
    print(f"Depth: {child.depth}, hardened: {child.is_hardened()}")

    # Watch-only derivation from the public node
    xpub = master.derive_path("m/0'").to_public()
    receive = xpub.derive(1).derive(0)
    print(f"Public child: {receive.to_base58()}")


def account_example():
    """Example 3: SLIP-132 account keys."""
    print("\n=== Account Example ===")

    for purpose in Purpose:
        tree = KeyTree(purpose=purpose)
        master = tree.from_mnemonic(DEMO_PHRASE)
        account = tree.derive_account(master, account=0)
        print(f"BIP{purpose.bip}: {tree.to_base58(account, private=False)}")


def network_example():
    """Example 4: Networks and decoding."""
    print("\n=== Network Example ===")

    testnet = KeyTree(Network.TESTNET)
    master = testnet.generate()
    tprv = testnet.to_base58(master)
    print(f"Testnet key: {tprv[:4]}...")

    # Decoding checks the network
    try:
        from_base58(tprv, Network.MAINNET)
    except NetworkMismatch as e:
        print(f"Rejected: {e}")

    key, purpose = testnet.from_base58(tprv)
    print(f"Decoded {purpose.value}-prefixed key, private={key.is_private()}")


def main():
    """Run all examples."""
    examples = [
        mnemonic_example,
        derivation_example,
        account_example,
        network_example,
    ]

    for example in examples:
        try:
            example()
        except KeyTreeError as e:
            print(f"Error in {example.__name__}: {e}")


if __name__ == "__main__":
    # Run examples
    main()
