"""
Contains the core elements that are used within hdkeychain

Core:
    -Provides the reference formats and constants for key derivation
    -Provides custom exceptions for the wallet components
    -Provides the zeroizing container for secret material
"""
# core/__init__.py
from hdkeychain.core.byte_stream import *
from hdkeychain.core.exceptions import *
from hdkeychain.core.formats import *
from hdkeychain.core.secret import *
