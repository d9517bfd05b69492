"""
Tests for extended key serialization
"""
import pytest

from hdkeychain.core import (XKEYS, ChecksumMismatch, MalformedExtendedKey, SecretBytes, UnknownVersionTag,
                             WalletError, WrongNetwork)
from hdkeychain.cryptography import hash256
from hdkeychain.data import decode_base58, encode_base58, encode_base58check
from hdkeychain.wallet import (ExtendedPrivateKey, ExtendedPublicKey, Network, VERSION_TAGS, decode, derive_path,
                               deserialize, encode, lookup_version, neuter, serialize)
from tests.utility import random_chain_code, random_private_bytes

ZPRV_84 = "zprvAdG4iTXWBoARxkkzNpNh8r6Qag3irQB8PzEMkAFeTRXxHpbF9z4QgEvBRmfvqWvGp42t42nvgGpNgYSJA9iefm1yYNZKEm7z6qUWCroSQnE"
ZPUB_84 = "zpub6rFR7y4Q2AijBEqTUquhVz398htDFrtymD9xYYfG1m4wAcvPhXNfE3EfH1r1ADqtfSdVCToUG868RvUUkgDKf31mGDtKsAYz2oz2AGutZYs"
VECTOR1_XPRV = "xprv9s21ZrQH143K3QTDL4LXw2F7HEK3wJUD2nW2nRk4stbPy6cq3jPPqjiChkVvvNKmPGJxWUtg6LnF5kejMRNNU3TGtRBeJgk33yuGBxrMPHi"
VECTOR1_XPUB = "xpub661MyMwAqRbcFtXgS5sYJABqqG9YLmC4Q1Rdap9gSE8NqtwybGhePY2gZ29ESFjqJoCu1Rupje8YtGqsefD265TMg7usUDFdp6W1EGMcet8"


def test_payload_layout(vector1_master):
    payload = serialize(vector1_master)
    assert len(payload) == XKEYS.PAYLOAD_LENGTH
    assert payload[:4] == XKEYS.MAINNET_PRIVATE
    assert payload[4] == 0
    assert payload[5:9] == b'\x00' * 4
    assert payload[9:13] == b'\x00' * 4
    assert payload[13:45] == vector1_master.chain_code
    assert payload[45] == 0, "Private keys are prefixed with 0x00"

    public_payload = serialize(neuter(vector1_master))
    assert public_payload[45:] == vector1_master.public_key


def test_variant_selected_by_version():
    assert isinstance(decode(VECTOR1_XPRV), ExtendedPrivateKey)
    assert isinstance(decode(VECTOR1_XPUB), ExtendedPublicKey)
    assert encode(decode(VECTOR1_XPUB)) == VECTOR1_XPUB
    assert deserialize(serialize(decode(VECTOR1_XPUB))) == decode(VECTOR1_XPUB)


def test_slip132_retagging(abandon_master):
    account = derive_path(abandon_master, "m/84'/0'/0'")
    assert encode(account, XKEYS.BIP84_XPRV) == ZPRV_84
    assert encode(neuter(account), XKEYS.BIP84_XPUB) == ZPUB_84
    assert encode(neuter(account), XKEYS.BIP84_XPRV) == ZPUB_84, "Public keys keep a public tag"

    zprv = decode(ZPRV_84)
    assert lookup_version(zprv.version).prefix == "zprv"
    assert lookup_version(neuter(zprv).version).prefix == "zpub"
    assert encode(neuter(zprv)) == ZPUB_84


def test_version_registry():
    prefixes = {tag.prefix for tag in VERSION_TAGS.values()}
    assert prefixes == {"xprv", "xpub", "tprv", "tpub", "yprv", "ypub", "uprv", "upub", "zprv", "zpub", "vprv",
                        "vpub"}


def test_invalid_character():
    with pytest.raises(MalformedExtendedKey) as exc_info:
        decode(VECTOR1_XPUB[:10] + "0" + VECTOR1_XPUB[11:])
    assert exc_info.value.field == "encoding"


def test_wrong_length():
    with pytest.raises(MalformedExtendedKey) as exc_info:
        decode(VECTOR1_XPUB[:-2])
    assert exc_info.value.field == "length"


def test_checksum_failure():
    raw = bytearray(serialize(decode(VECTOR1_XPUB)) + b'\x00\x00\x00\x00')
    with pytest.raises(ChecksumMismatch):
        decode(encode_base58(bytes(raw)))


def test_unknown_version():
    payload = b'\x01\x02\x03\x04' + serialize(decode(VECTOR1_XPUB))[4:]
    with pytest.raises(UnknownVersionTag):
        decode(encode_base58check(payload))


def test_private_prefix_byte():
    payload = bytearray(serialize(decode(VECTOR1_XPRV)))
    payload[45] = 0x01
    with pytest.raises(MalformedExtendedKey) as exc_info:
        decode(encode_base58check(bytes(payload)))
    assert exc_info.value.field == "key_data"


@pytest.mark.parametrize("scalar", [0, int("ff" * 32, 16)])
def test_private_scalar_range(scalar):
    payload = serialize(decode(VECTOR1_XPRV))[:46] + scalar.to_bytes(32, "big")
    with pytest.raises(MalformedExtendedKey):
        decode(encode_base58check(payload))


def test_public_key_not_on_curve():
    payload = serialize(decode(VECTOR1_XPUB))[:45] + b'\x02' + bytes(32)
    with pytest.raises(MalformedExtendedKey):
        decode(encode_base58check(payload))

    payload = serialize(decode(VECTOR1_XPUB))[:45] + b'\x04' + bytes(32)
    with pytest.raises(MalformedExtendedKey):
        decode(encode_base58check(payload))


def test_master_consistency():
    """
    Depth 0 with a non-zero parent fingerprint or child number is rejected
    """
    payload = bytearray(serialize(decode(VECTOR1_XPUB)))
    payload[5:9] = b'\x01\x02\x03\x04'
    with pytest.raises(MalformedExtendedKey):
        decode(encode_base58check(bytes(payload)))

    payload = bytearray(serialize(decode(VECTOR1_XPUB)))
    payload[12] = 1
    with pytest.raises(MalformedExtendedKey):
        decode(encode_base58check(bytes(payload)))


def test_network_check(abandon_testnet_master):
    tprv = encode(abandon_testnet_master)
    assert decode(tprv, Network.TESTNET).network == Network.TESTNET
    with pytest.raises(WrongNetwork):
        decode(tprv, Network.MAINNET)
    with pytest.raises(WrongNetwork):
        decode(VECTOR1_XPUB, network=Network.TESTNET)


def test_errors_share_a_base():
    for bad in ("", "xpub", VECTOR1_XPUB[:-1] + "1"):
        with pytest.raises(WalletError):
            decode(bad)


def test_checksum_matches_hash256(vector1_master):
    raw = decode_base58(encode(vector1_master))
    assert raw[-4:] == hash256(raw[:-4])[:4]


def test_random_key_roundtrip():
    xprv = ExtendedPrivateKey(SecretBytes(random_private_bytes()), random_chain_code(), depth=7,
                              parent_fingerprint=b'\xde\xad\xbe\xef', child_number=XKEYS.HARDENED_OFFSET + 3,
                              version=XKEYS.BIP49_TPRV)
    assert decode(encode(xprv)) == xprv
    assert decode(encode(neuter(xprv))) == neuter(xprv)
    assert encode(neuter(xprv)).startswith("upub")
