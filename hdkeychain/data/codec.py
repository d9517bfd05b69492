"""
Methods for encoding and decoding

Base58 with leading-zero preservation, Base58Check, WIF private keys and P2PKH addresses.
"""
from hdkeychain.core import ADDRESS, ChecksumMismatch, XKEYS
from hdkeychain.cryptography import hash160, hash256

__all__ = ["BASE58_ALPHABET", "encode_base58", "decode_base58", "encode_base58check", "decode_base58check",
           "encode_wif", "p2pkh_address"]

# --- BASE58 ENCODING --- #
BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_BASE58_INDEX = {char: i for i, char in enumerate(BASE58_ALPHABET)}


def encode_base58(data: bytes) -> str:
    """
    We return the base58 encoding of the given bytes data
    """
    n = int.from_bytes(data, byteorder="big")
    encoded_chars = []
    while n > 0:
        n, remainder = divmod(n, 58)
        encoded_chars.append(BASE58_ALPHABET[remainder])

    # Each leading zero byte is a leading '1'
    leading_zeros = len(data) - len(data.lstrip(b'\x00'))
    return "1" * leading_zeros + "".join(reversed(encoded_chars))


def decode_base58(data: str) -> bytes:
    """
    Given a base58 encoded string, return the underlying bytes.

    Raises ValueError naming the position of the first character outside the alphabet.
    """
    total = 0
    for position, char in enumerate(data):
        try:
            total = total * 58 + _BASE58_INDEX[char]
        except KeyError:
            raise ValueError(f"Invalid base58 character at position {position}") from None

    decoded_bytes = total.to_bytes((total.bit_length() + 7) // 8, "big")

    # Each leading '1' represents a leading zero byte
    leading_ones = len(data) - len(data.lstrip("1"))
    return b'\x00' * leading_ones + decoded_bytes


def encode_base58check(data: bytes) -> str:
    """
    Given bytes data, we return the base58 encoding along with checksum
    """
    checksum = hash256(data)[:XKEYS.CHECKSUM_LENGTH]
    return encode_base58(data + checksum)


def decode_base58check(data: str) -> bytes:
    """
    Given a string of base58Check chars, we decode it and return the payload without checksum.
    Raise ChecksumMismatch if checksum fails
    """
    decoded = decode_base58(data)
    if len(decoded) < XKEYS.CHECKSUM_LENGTH:
        raise ValueError("Base58Check data shorter than its checksum")
    payload, checksum = decoded[:-XKEYS.CHECKSUM_LENGTH], decoded[-XKEYS.CHECKSUM_LENGTH:]
    if hash256(payload)[:XKEYS.CHECKSUM_LENGTH] != checksum:
        raise ChecksumMismatch("base58check")
    return payload


# --- KEY FORMATS --- #

def encode_wif(private_key: bytes, testnet: bool = False) -> str:
    """
    Wallet Import Format for a 32-byte private key with the compressed pubkey flag
    """
    version = ADDRESS.WIF_TESTNET if testnet else ADDRESS.WIF_MAINNET
    return encode_base58check(version + private_key + ADDRESS.WIF_COMPRESSED)


def p2pkh_address(compressed_pubkey: bytes, testnet: bool = False) -> str:
    """
    Base58Check P2PKH address: version || HASH160(pubkey)
    """
    version = ADDRESS.P2PKH_TESTNET if testnet else ADDRESS.P2PKH_MAINNET
    return encode_base58check(version + hash160(compressed_pubkey))
