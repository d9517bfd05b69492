"""
All methods for encoding and representing key data in hdkeychain
"""

# data/__init__.py
from hdkeychain.data.codec import *
from hdkeychain.data.ecc_keys import *
from hdkeychain.data.wordlist import *
