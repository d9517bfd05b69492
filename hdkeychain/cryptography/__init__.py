"""
Elliptic curve cryptography and hash functions
"""
# cryptography/__init__.py

from hdkeychain.cryptography.ecc import *
from hdkeychain.cryptography.hash_functions import *
