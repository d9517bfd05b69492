"""
Tests for the HDWallet class
"""
import logging

import pytest

from hdkeychain.core import XKEYS, HardenedRequiresPrivate, PrivateKeyUnavailable, SecretWipedError
from hdkeychain.wallet import (ExtendedPrivateKey, ExtendedPublicKey, HDWallet, Mnemonic, Network, derive_path, encode,
                               lookup_version, neuter)
from tests.utility import ABANDON_PHRASE, ABANDON_SEED, BIP32_VECTOR1_SEED

ABANDON_XPRV = "xprv9s21ZrQH143K3GJpoapnV8SFfukcVBSfeCficPSGfubmSFDxo1kuHnLisriDvSnRRuL2Qrg5ggqHKNVpxR86QEC8w35uxmGoggxtQTPvfUu"
ABANDON_XPUB = "xpub661MyMwAqRbcFkPHucMnrGNzDwb6teAX1RbKQmqtEF8kK3Z7LZ59qafCjB9eCRLiTVG3uxBxgKvRgbubRhqSKXnGGb1aoaqLrpMBDrVxga8"
BIP44_ACCOUNT_XPUB = \
    "xpub6BosfCnifzxcFwrSzQiqu2DBVTshkCXacvNsWGYJVVhhawA7d4R5WSWGFNbi8Aw6ZRc1brxMyWMzG3DSSSSoekkudhUd9yLb6qx39T9nMdj"
FIRST_ADDRESS = "1LqBGSKuX5yYUonjxT5qGfpUsXKYYWeabA"
ZPUB_84 = "zpub6rFR7y4Q2AijBEqTUquhVz398htDFrtymD9xYYfG1m4wAcvPhXNfE3EfH1r1ADqtfSdVCToUG868RvUUkgDKf31mGDtKsAYz2oz2AGutZYs"


@pytest.fixture()
def wallet():
    return HDWallet.from_mnemonic(ABANDON_PHRASE)


def test_from_mnemonic(wallet):
    assert wallet.master_xprv() == ABANDON_XPRV
    assert wallet.master_xpub() == ABANDON_XPUB
    assert not wallet.is_watch_only
    assert wallet.network == Network.MAINNET


def test_from_seed_matches_mnemonic(wallet):
    assert HDWallet.from_seed(bytes.fromhex(ABANDON_SEED)).master_xprv() == wallet.master_xprv()


def test_generate():
    mnemonic, wallet = HDWallet.generate(strength=256)
    assert isinstance(mnemonic, Mnemonic)
    assert len(mnemonic) == 24
    assert HDWallet.from_mnemonic(mnemonic).master_xpub() == wallet.master_xpub()


def test_passphrase_changes_wallet(wallet):
    other = HDWallet.from_mnemonic(ABANDON_PHRASE, passphrase="TREZOR")
    assert other.fingerprint != wallet.fingerprint


def test_addresses(wallet):
    assert wallet.address() == FIRST_ADDRESS
    assert encode(neuter(wallet.account_key())) == BIP44_ACCOUNT_XPUB
    key = wallet.address_key(account=0, chain=0, index=0)
    assert key.address() == FIRST_ADDRESS


def test_account_key_export_tag(wallet):
    account = wallet.account_key(purpose=84)
    assert lookup_version(account.version).prefix == "zprv"
    assert encode(neuter(account)) == ZPUB_84

    untagged = wallet.account_key(purpose=84, export_version=False)
    assert lookup_version(untagged.version).prefix == "xprv"


def test_testnet_coin_type():
    wallet = HDWallet.from_mnemonic(ABANDON_PHRASE, network=Network.TESTNET)
    assert wallet.master_xprv().startswith("tprv")
    assert wallet.address_key().parent_fingerprint == \
        derive_path(wallet.master_key, "m/44'/1'/0'/0").fingerprint()
    assert wallet.address()[0] in "mn"


def test_public_key_cache(wallet):
    first = wallet.public_key("m/44'/0'/0'/0/0")
    second = wallet.public_key("m/44h/0h/0h/0/0")
    assert isinstance(first, ExtendedPublicKey)
    assert first is second, "Equivalent paths should hit the cache"


def test_watch_only_wallet():
    watch_only = HDWallet.from_extended_key(BIP44_ACCOUNT_XPUB)
    assert watch_only.is_watch_only
    with pytest.raises(PrivateKeyUnavailable):
        watch_only.master_xprv()
    with pytest.raises(HardenedRequiresPrivate):
        watch_only.derive("m/0'")

    # The account xpub derives the same receive addresses as the full wallet
    assert watch_only.public_key("m/0/0").address() == FIRST_ADDRESS


def test_derive_range(wallet):
    chain_key = wallet.derive("m/44'/0'/0'/0")
    sequential = wallet.derive_range(chain_key, start=0, count=6)
    threaded = wallet.derive_range(chain_key, start=0, count=6, workers=4)

    assert [key.child_number for key in sequential] == list(range(6))
    assert sequential == threaded, "Threaded derivation must keep index order"
    assert sequential[0].address() == FIRST_ADDRESS
    assert all(isinstance(key, ExtendedPublicKey) for key in threaded)


def test_wipe():
    with HDWallet.from_seed(bytes.fromhex(BIP32_VECTOR1_SEED)) as wallet:
        master = wallet.master_key
        assert isinstance(master, ExtendedPrivateKey)
    assert master.private_key.wiped
    with pytest.raises(SecretWipedError):
        wallet.master_xprv()
    with pytest.raises(SecretWipedError):
        wallet.derive([XKEYS.HARDENED_OFFSET])


def test_repr_and_logging_hide_secrets(wallet, caplog):
    with caplog.at_level(logging.DEBUG, logger="hdkeychain"):
        wallet.derive("m/44'/0'/0'/0/0")
    secret_hex = wallet.master_key.private_key.hex()
    assert secret_hex not in repr(wallet)
    assert all(secret_hex not in record.getMessage() for record in caplog.records)
    assert "abandon" not in caplog.text


def test_root_public_key_keeps_master(wallet):
    assert encode(wallet.public_key("m")) == ABANDON_XPUB
    assert wallet.master_xprv() == ABANDON_XPRV, "Neutering the root must not wipe the master key"
    assert wallet.address() == FIRST_ADDRESS
