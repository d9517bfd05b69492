"""
Shortcuts for the hash functions used in key derivation. Each function returns the bytes digest
"""
import hashlib
import hmac
import unicodedata

from ripemd.ripemd160 import ripemd160 as _ripemd160

from hdkeychain.core.formats import WALLET

__all__ = ["hash160", "hash256", "hmac_sha512", "normalize_text", "pbkdf2", "ripemd160", "sha256", "sha512"]


# --- SHA --- #
def sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def sha512(data: bytes) -> bytes:
    return hashlib.sha512(data).digest()


# --- RIPEMD --- #

def ripemd160(data: bytes) -> bytes:
    # hashlib only offers ripemd160 when the linked OpenSSL still ships it
    return _ripemd160(data)


# --- BTC HASH FUNCTIONS --- #

def hash256(data: bytes) -> bytes:
    """SHA256(SHA256(data))"""
    return sha256(sha256(data))


def hash160(data: bytes) -> bytes:
    """RIPEMD160(SHA256(data))"""
    return ripemd160(sha256(data))


# --- WALLET HASHES --- #
def hmac_sha512(key: bytes, message: bytes) -> bytes:
    return hmac.new(key=key, msg=message, digestmod=hashlib.sha512).digest()


def normalize_text(text: str) -> str:
    """
    BIP39 normalizes both mnemonic and passphrase with Unicode NFKD
    """
    return unicodedata.normalize("NFKD", text)


def pbkdf2(mnemonic: str, passphrase: str = "", iterations: int = WALLET.SEED_ITERATIONS,
           dklen: int = WALLET.DKLEN) -> bytes:
    """
    Derives a seed from a mnemonic phrase using PBKDF2-HMAC-SHA512.

    mnemonic: The mnemonic phrase as a single string.
    passphrase: An optional passphrase string (default: empty string).
    iterations: Number of iterations for PBKDF2 (default: 2048).
    dklen: Length of the derived key in bytes (default: 64 bytes).
    return: The derived key bytes.
    """
    password_bytes = normalize_text(mnemonic).encode("utf-8")
    salt = (WALLET.SEED_SALT_PREFIX + normalize_text(passphrase)).encode("utf-8")
    return hashlib.pbkdf2_hmac("sha512", password_bytes, salt, iterations, dklen)
