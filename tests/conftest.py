"""
Fixtures used in the tests
"""
import pytest

from hdkeychain.cryptography import SECP256K1
from hdkeychain.wallet import Network, master_from_seed
from tests.utility import ABANDON_SEED, BIP32_VECTOR1_SEED


@pytest.fixture()
def curve():
    return SECP256K1


@pytest.fixture()
def vector1_master():
    return master_from_seed(bytes.fromhex(BIP32_VECTOR1_SEED))


@pytest.fixture()
def abandon_master():
    return master_from_seed(bytes.fromhex(ABANDON_SEED))


@pytest.fixture()
def abandon_testnet_master():
    return master_from_seed(bytes.fromhex(ABANDON_SEED), network=Network.TESTNET)
