"""
The Bitcoin standard formats used in key derivation
"""
from typing import Final

__all__ = ["ECC", "WALLET", "XKEYS", "ADDRESS"]


class ECC:
    COORD_BYTES: Final[int] = 32
    COMPRESSED_BYTES: Final[int] = 33
    UNCOMPRESSED_BYTES: Final[int] = 65


class WALLET:
    """
    We provide a Mnemonic dictionary which is BIP39 compliant. This forces the Mnemonic to be of a certain size
    depending on the entropy byte length chosen
    """
    MNEMONIC: Final[dict] = {
        16: {"bit_length": 128, "word_count": 12, "checksum_bits": 4},
        20: {"bit_length": 160, "word_count": 15, "checksum_bits": 5},
        24: {"bit_length": 192, "word_count": 18, "checksum_bits": 6},
        28: {"bit_length": 224, "word_count": 21, "checksum_bits": 7},
        32: {"bit_length": 256, "word_count": 24, "checksum_bits": 8},
    }
    DEFAULT_ENTROPY_BYTES: Final[int] = 16
    DEFAULT_LANGUAGE: Final[str] = "english"
    WORDLIST_SIZE: Final[int] = 2048
    WORD_BITS: Final[int] = 11
    WORD_KEY: Final[str] = "word_count"
    CHECKSUM_KEY: Final[str] = "checksum_bits"
    SEED_ITERATIONS: Final[int] = 2048
    SEED_SALT_PREFIX: Final[str] = "mnemonic"
    DKLEN: Final[int] = 64


class XKEYS:
    """
    Constants related to the extended public and private keys
    """
    SEED_KEY: Final[bytes] = b'Bitcoin seed'
    MIN_SEED_BYTES: Final[int] = 16
    MAX_SEED_BYTES: Final[int] = 64
    CHAIN_LENGTH: Final[int] = 32
    KEY_LENGTH: Final[int] = 33
    FINGERPRINT_LENGTH: Final[int] = 4
    MAX_DEPTH: Final[int] = 255
    PAYLOAD_LENGTH: Final[int] = 78
    CHECKSUM_LENGTH: Final[int] = 4
    SERIALIZED_LENGTH: Final[int] = 82

    # Version bytes for different key types (BIP32 + SLIP-132)
    MAINNET_PRIVATE: Final[bytes] = bytes.fromhex("0488ade4")  # xprv
    MAINNET_PUBLIC: Final[bytes] = bytes.fromhex("0488b21e")  # xpub
    TESTNET_PRIVATE: Final[bytes] = bytes.fromhex("04358394")  # tprv
    TESTNET_PUBLIC: Final[bytes] = bytes.fromhex("043587cf")  # tpub
    BIP49_XPRV: Final[bytes] = bytes.fromhex("049d7878")  # yprv
    BIP49_XPUB: Final[bytes] = bytes.fromhex("049d7cb2")  # ypub
    BIP49_TPRV: Final[bytes] = bytes.fromhex("044a4e28")  # uprv
    BIP49_TPUB: Final[bytes] = bytes.fromhex("044a5262")  # upub
    BIP84_XPRV: Final[bytes] = bytes.fromhex("04b2430c")  # zprv
    BIP84_XPUB: Final[bytes] = bytes.fromhex("04b24746")  # zpub
    BIP84_TPRV: Final[bytes] = bytes.fromhex("045f18bc")  # vprv
    BIP84_TPUB: Final[bytes] = bytes.fromhex("045f1cf6")  # vpub

    # Hardened derivation threshold
    HARDENED_OFFSET: Final[int] = 0x80000000
    MAX_INDEX: Final[int] = 0xffffffff


class ADDRESS:
    """
    Version bytes for base58check encoded addresses and private keys
    """
    P2PKH_MAINNET: Final[bytes] = b'\x00'
    P2PKH_TESTNET: Final[bytes] = b'\x6f'
    WIF_MAINNET: Final[bytes] = b'\x80'
    WIF_TESTNET: Final[bytes] = b'\xef'
    WIF_COMPRESSED: Final[bytes] = b'\x01'
