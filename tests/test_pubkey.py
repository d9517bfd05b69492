"""
Tests for the PubKey class
"""
import pytest

from hdkeychain.core import PubKeyError
from hdkeychain.cryptography import Point, SECP256K1
from hdkeychain.data import PubKey
from tests.utility import random_private_int


def test_pubkey_formats():
    """
    A random key survives compressed and uncompressed serialization
    """
    pubkey = PubKey(random_private_int())
    assert PubKey.from_compressed(pubkey.compressed()) == pubkey, "Failed to recover from compressed"
    assert PubKey.from_uncompressed(pubkey.uncompressed()) == pubkey, "Failed to recover from uncompressed"
    assert PubKey.from_bytes(pubkey.compressed()) == pubkey
    assert PubKey.from_bytes(pubkey.uncompressed()) == pubkey
    assert len(pubkey.compressed()) == 33
    assert pubkey.compressed()[0] == (0x03 if pubkey.y & 1 else 0x02)


def test_private_key_range():
    with pytest.raises(PubKeyError):
        PubKey(0)
    with pytest.raises(PubKeyError):
        PubKey(SECP256K1.order)
    assert PubKey((1).to_bytes(32, "big")).to_point() == SECP256K1.generator


def test_invalid_points():
    with pytest.raises(PubKeyError):
        PubKey.from_point(Point())
    with pytest.raises(PubKeyError):
        PubKey.from_point(Point(1, 1))
    with pytest.raises(PubKeyError):
        PubKey.from_compressed(b'\x04' + b'\x01' * 32)
    with pytest.raises(PubKeyError):
        PubKey.from_bytes(b'\x02' * 20)


def test_x_not_on_curve():
    """
    A compressed key whose x has no matching y is rejected
    """
    x = next(x for x in range(1, 100) if not SECP256K1.is_x_on_curve(x))
    with pytest.raises(PubKeyError):
        PubKey.from_compressed(b'\x02' + x.to_bytes(32, "big"))


def test_tweak_add():
    k, t = random_private_int(), random_private_int()
    tweaked = PubKey(k).tweak_add(t)
    expected = (k + t) % SECP256K1.order
    assert tweaked == PubKey(expected)
