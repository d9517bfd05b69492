"""
The custom exceptions used throughout hdkeychain

Every wallet exception derives from WalletError. Messages never carry secret material: no scalars, seeds, entropy or
mnemonic words.
"""
__all__ = ["StreamError", "ReadError", "WalletError", "MnemonicError", "InvalidEntropyLength", "InvalidMnemonicLength",
           "InvalidWord", "UnsupportedLanguage", "ChecksumMismatch", "ExtendedKeyError", "InvalidMasterKey",
           "InvalidSeedLength", "InvalidChildKey", "InvalidChildIndex", "DepthExceeded", "HardenedFromPublic",
           "HardenedRequiresPrivate", "MalformedExtendedKey", "UnknownVersionTag", "WrongNetwork",
           "PrivateKeyUnavailable", "InvalidDerivationPath", "SecretWipedError", "PubKeyError"]


class StreamError(Exception):
    """
    Catchall for stream errors
    """
    pass


class ReadError(StreamError):
    """
    For when trying to read data of length n from the stream and receiving data of length < n
    """
    pass


class WalletError(Exception):
    """
    Parent class for Wallet errors
    """
    pass


# --- MNEMONIC --- #

class MnemonicError(WalletError):
    """
    Parent class for errors raised while encoding or decoding a mnemonic
    """
    pass


class InvalidEntropyLength(MnemonicError):
    """
    Entropy must be 128, 160, 192, 224 or 256 bits
    """

    def __init__(self, bytelen: int):
        self.bytelen = bytelen
        super().__init__(f"Entropy of {bytelen} bytes not BIP39 compliant. Must be one of 16, 20, 24, 28 or 32 bytes")


class InvalidMnemonicLength(MnemonicError):
    """
    Mnemonic must have 12, 15, 18, 21 or 24 words
    """

    def __init__(self, word_count: int):
        self.word_count = word_count
        super().__init__(f"Mnemonic of {word_count} words not BIP39 compliant. Must be one of 12, 15, 18, 21 or 24")


class InvalidWord(MnemonicError):
    """
    A mnemonic word is not in the wordlist. Only the position is reported.
    """

    def __init__(self, position: int, language: str = "english"):
        self.position = position
        self.language = language
        super().__init__(f"Word at position {position} is not in the {language} wordlist")


class UnsupportedLanguage(MnemonicError):
    """
    No wordlist available for the requested language
    """
    pass


class ChecksumMismatch(WalletError):
    """
    A checksum failed to verify. The field names which encoding it belonged to (mnemonic, base58check).
    """

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Checksum mismatch in {field}")


# --- EXTENDED KEYS --- #

class ExtendedKeyError(WalletError):
    """Custom exception for extended key operations"""
    pass


class InvalidMasterKey(ExtendedKeyError):
    """
    Master scalar derived from the seed is zero or not below the curve order. Use a different seed.
    """
    pass


class InvalidSeedLength(ExtendedKeyError):
    """
    BIP32 seeds must be between 128 and 512 bits
    """
    pass


class InvalidChildKey(ExtendedKeyError):
    """
    Child derivation produced an invalid key for this index. Retry with index + 1.
    """

    def __init__(self, index: int):
        self.index = index
        super().__init__(f"Derivation at index {index} produced an invalid key; proceed with the next index")


class InvalidChildIndex(ExtendedKeyError):
    """
    Child index outside the 32-bit range
    """
    pass


class DepthExceeded(ExtendedKeyError):
    """
    Extended keys cannot be derived below depth 255
    """
    pass


class HardenedFromPublic(ExtendedKeyError):
    """
    Cannot derive a hardened child from a public extended key
    """
    pass


class HardenedRequiresPrivate(ExtendedKeyError):
    """
    A path walk reached a hardened step holding only a public key
    """

    def __init__(self, index: int):
        self.index = index
        super().__init__(f"Hardened step {index} in path requires a private extended key")


class MalformedExtendedKey(ExtendedKeyError):
    """
    Serialized extended key has the wrong length or an invalid field. The field attribute names the culprit.
    """

    def __init__(self, field: str, reason: str):
        self.field = field
        super().__init__(f"Malformed extended key ({field}): {reason}")


class UnknownVersionTag(ExtendedKeyError):
    """
    Version bytes not in the registry
    """

    def __init__(self, version: bytes):
        self.version = version
        super().__init__(f"Unknown extended key version tag: {version.hex()}")


class WrongNetwork(ExtendedKeyError):
    """
    Extended key belongs to a different network than the one expected
    """
    pass


class PrivateKeyUnavailable(ExtendedKeyError):
    """
    Requested private material from a watch-only (public) key
    """
    pass


# --- PATHS --- #

class InvalidDerivationPath(WalletError):
    """
    Derivation path text or account grammar is malformed
    """
    pass


# --- SECRETS / KEYS --- #

class SecretWipedError(WalletError):
    """
    Secret material was accessed after it was wiped
    """
    pass


class PubKeyError(WalletError):
    """
    Used for Pubkey errors
    """
    pass
