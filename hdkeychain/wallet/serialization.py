"""
Serialization of extended keys

    version(4) || depth(1) || parent_fingerprint(4) || child_number(4) || chain_code(32) || key(33)

The 78-byte payload is base58check encoded. Private keys store 0x00 || scalar, public keys the compressed point. The
version tag alone decides whether decode returns an ExtendedPrivateKey or an ExtendedPublicKey.
"""
from hdkeychain.core import (SERIALIZED, XKEYS, ChecksumMismatch, MalformedExtendedKey, ReadError, SecretBytes,
                             WrongNetwork, get_stream, read_big_int, read_stream)
from hdkeychain.core.logging import get_logger
from hdkeychain.cryptography import hash256
from hdkeychain.data import decode_base58, encode_base58check
from hdkeychain.wallet.versions import Network, lookup_version, private_version, public_version
from hdkeychain.wallet.xkeys import ExtendedKey, ExtendedPrivateKey, ExtendedPublicKey

__all__ = ["serialize", "deserialize", "encode", "decode"]

logger = get_logger(__name__)

ZERO_FINGERPRINT = b'\x00' * XKEYS.FINGERPRINT_LENGTH


def serialize(key: ExtendedKey, version: bytes | None = None) -> bytes:
    """
    The 78-byte payload. version re-tags the key (e.g. as zprv) and must match its visibility.
    """
    match key:
        case ExtendedPrivateKey():
            version = private_version(version) if version else key.version
            key_data = b'\x00' + key.private_key.reveal()
        case ExtendedPublicKey():
            version = public_version(version) if version else key.version
            key_data = key.key_data
        case _:
            raise TypeError(f"Expected an extended key, received {type(key)}")

    return (
            version
            + key.depth.to_bytes(1, "big")
            + key.parent_fingerprint
            + key.child_number.to_bytes(4, "big")
            + key.chain_code
            + key_data
    )


def encode(key: ExtendedKey, version: bytes | None = None) -> str:
    """
    Base58check string of the serialized key
    """
    return encode_base58check(serialize(key, version))


def deserialize(byte_stream: SERIALIZED) -> ExtendedKey:
    """
    Parse a 78-byte payload (no checksum)
    """
    stream = get_stream(byte_stream)
    try:
        version = read_stream(stream, 4, "version")
        depth = read_big_int(stream, 1, "depth")
        parent_fingerprint = read_stream(stream, XKEYS.FINGERPRINT_LENGTH, "parent_fingerprint")
        child_number = read_big_int(stream, 4, "child_number")
        chain_code = read_stream(stream, XKEYS.CHAIN_LENGTH, "chain_code")
        key_data = read_stream(stream, XKEYS.KEY_LENGTH, "key_data")
    except ReadError:
        raise MalformedExtendedKey("length", f"payload must be {XKEYS.PAYLOAD_LENGTH} bytes") from None
    if stream.read(1):
        raise MalformedExtendedKey("length", f"payload must be {XKEYS.PAYLOAD_LENGTH} bytes")

    tag = lookup_version(version)  # Raises UnknownVersionTag

    if depth == 0 and (parent_fingerprint != ZERO_FINGERPRINT or child_number != 0):
        raise MalformedExtendedKey("depth", "master key must have zero parent fingerprint and child number")

    if tag.is_private:
        if key_data[0] != 0:
            raise MalformedExtendedKey("key_data", "private key must be prefixed with 0x00")
        with SecretBytes(key_data[1:]) as scalar:
            return ExtendedPrivateKey(
                private_key=scalar,
                chain_code=chain_code,
                depth=depth,
                parent_fingerprint=parent_fingerprint,
                child_number=child_number,
                version=version
            )

    if key_data[0] not in (2, 3):
        raise MalformedExtendedKey("key_data", "public key must be compressed")
    return ExtendedPublicKey(
        key_data=key_data,
        chain_code=chain_code,
        depth=depth,
        parent_fingerprint=parent_fingerprint,
        child_number=child_number,
        version=version
    )


def decode(text: str, network: Network | None = None) -> ExtendedKey:
    """
    Decode an xprv/xpub (or any registered tag) string. When network is given, keys from any other network raise
    WrongNetwork.
    """
    try:
        raw = decode_base58(text.strip())
    except ValueError as e:
        raise MalformedExtendedKey("encoding", str(e)) from None

    if len(raw) != XKEYS.SERIALIZED_LENGTH:
        raise MalformedExtendedKey("length", f"decoded key must be {XKEYS.SERIALIZED_LENGTH} bytes")

    payload, checksum = raw[:XKEYS.PAYLOAD_LENGTH], raw[XKEYS.PAYLOAD_LENGTH:]
    if hash256(payload)[:XKEYS.CHECKSUM_LENGTH] != checksum:
        raise ChecksumMismatch("base58check")

    key = deserialize(payload)
    if network is not None and key.network != network:
        if isinstance(key, ExtendedPrivateKey):
            key.wipe()
        raise WrongNetwork(f"Expected a {network.value} key, received a {key.network.value} key")

    logger.debug(f"Decoded {lookup_version(key.version).prefix} key at depth {key.depth}")
    return key
