"""
hdkeychain - hierarchical deterministic key derivation for Bitcoin wallets

Mnemonic (BIP39) -> seed -> master key -> BIP32/BIP44 key tree -> base58check export
"""
# hdkeychain/__init__.py
from hdkeychain.core.exceptions import *
from hdkeychain.wallet import *

__version__ = "0.1.0"
