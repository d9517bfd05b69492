"""
Extended Keys (xprv/xpub) - BIP32 hierarchical deterministic key derivation

An extended key is either an ExtendedPrivateKey or an ExtendedPublicKey. The two are separate immutable types that
share their layout but not a base class:

    ExtendedKey = ExtendedPrivateKey | ExtendedPublicKey

A private key derives hardened and normal children and can always be neutered to its public twin. A public key only
derives normal public children; it has no hardened derivation and no private material to give out.

Child derivation, for parent chain code c and index i:

    hardened (i >= 2^31):  I = HMAC-SHA512(c, 0x00 || k_par || ser32(i))
    normal:                I = HMAC-SHA512(c, serP(K_par) || ser32(i))

    k_i = (I_L + k_par) mod n        K_i = I_L*G + K_par        chain code = I_R
"""
import json
from dataclasses import dataclass, field

from hdkeychain.core import (XKEYS, DepthExceeded, HardenedFromPublic, InvalidChildIndex, InvalidChildKey,
                             InvalidMasterKey, InvalidSeedLength, MalformedExtendedKey, PubKeyError, SecretBytes)
from hdkeychain.core.logging import get_logger
from hdkeychain.cryptography import SECP256K1, hash160, hmac_sha512
from hdkeychain.data import PubKey, encode_wif, p2pkh_address
from hdkeychain.wallet.versions import Network, default_version, lookup_version, public_version

__all__ = ["ExtendedKey", "ExtendedPrivateKey", "ExtendedPublicKey", "master_from_seed", "derive_child_private",
           "derive_child_public", "neuter", "fingerprint", "identifier", "next_valid_child", "is_hardened_index"]

logger = get_logger(__name__)

HARDENED_OFFSET = XKEYS.HARDENED_OFFSET
MAX_INDEX = XKEYS.MAX_INDEX
MAX_DEPTH = XKEYS.MAX_DEPTH
ZERO_FINGERPRINT = b'\x00' * XKEYS.FINGERPRINT_LENGTH


def is_hardened_index(index: int) -> bool:
    return index >= HARDENED_OFFSET


def _validate_common(version: bytes, depth: int, parent_fingerprint: bytes, child_number: int, chain_code: bytes,
                     private: bool):
    tag = lookup_version(version)  # Raises UnknownVersionTag
    if tag.is_private != private:
        visibility = "private" if private else "public"
        raise MalformedExtendedKey("version", f"{tag.prefix} tag used for a {visibility} key")
    if not (0 <= depth <= MAX_DEPTH):
        raise MalformedExtendedKey("depth", "must be in 0..255")
    if len(parent_fingerprint) != XKEYS.FINGERPRINT_LENGTH:
        raise MalformedExtendedKey("parent_fingerprint", "must be 4 bytes")
    if not (0 <= child_number <= MAX_INDEX):
        raise MalformedExtendedKey("child_number", "must fit in 32 bits")
    if len(chain_code) != XKEYS.CHAIN_LENGTH:
        raise MalformedExtendedKey("chain_code", "must be 32 bytes")


def _display_dict(key: "ExtendedKey") -> dict:
    return {
        "version": lookup_version(key.version).prefix,
        "depth": key.depth,
        "parent_fingerprint": key.parent_fingerprint.hex(),
        "child_number": key.child_number,
        "hardened": key.is_hardened,
        "chain_code": key.chain_code.hex(),
        "pubkey": key.public_key.hex(),
        "fingerprint": fingerprint(key).hex(),
    }


@dataclass(frozen=True, eq=False, repr=False)
class ExtendedPrivateKey:
    """
    Extended private key. The 32-byte scalar lives in SecretBytes and is wiped by wipe() or on leaving a with block.
    """
    private_key: SecretBytes
    chain_code: bytes
    depth: int = 0
    parent_fingerprint: bytes = ZERO_FINGERPRINT
    child_number: int = 0
    version: bytes = XKEYS.MAINNET_PRIVATE
    _public_key: bytes = field(init=False, default=b'')

    def __post_init__(self):
        _validate_common(self.version, self.depth, self.parent_fingerprint, self.child_number, self.chain_code,
                         private=True)

        # Own a separate buffer so the caller's copy and ours are wiped independently
        secret = SecretBytes(bytes(self.private_key))
        if len(secret) != 32:
            secret.wipe()
            raise MalformedExtendedKey("key_data", "private key must be 32 bytes")
        if not (0 < secret.to_int() < SECP256K1.order):
            secret.wipe()
            raise MalformedExtendedKey("key_data", "private key out of range for secp256k1")

        object.__setattr__(self, "private_key", secret)
        object.__setattr__(self, "chain_code", bytes(self.chain_code))
        object.__setattr__(self, "parent_fingerprint", bytes(self.parent_fingerprint))
        object.__setattr__(self, "version", bytes(self.version))
        object.__setattr__(self, "_public_key", PubKey(secret.to_int()).compressed())

    # --- OVERRIDES --- #

    def __eq__(self, other) -> bool:
        if not isinstance(other, ExtendedPrivateKey):
            return NotImplemented
        return (self.version == other.version
                and self.depth == other.depth
                and self.parent_fingerprint == other.parent_fingerprint
                and self.child_number == other.child_number
                and self.chain_code == other.chain_code
                and self.private_key == other.private_key)

    __hash__ = None

    def __repr__(self):
        return (f"ExtendedPrivateKey(depth={self.depth}, child_number={self.child_number}, "
                f"fingerprint={fingerprint(self).hex()})")

    def __enter__(self) -> "ExtendedPrivateKey":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.wipe()

    # --- PROPERTIES --- #

    @property
    def public_key(self) -> bytes:
        """Compressed SEC1 public key"""
        return self._public_key

    @property
    def is_private(self) -> bool:
        return True

    @property
    def is_hardened(self) -> bool:
        return is_hardened_index(self.child_number)

    @property
    def network(self) -> Network:
        return lookup_version(self.version).network

    # --- METHODS --- #

    def derive_child(self, index: int) -> "ExtendedPrivateKey":
        return derive_child_private(self, index)

    def neuter(self) -> "ExtendedPublicKey":
        return neuter(self)

    def fingerprint(self) -> bytes:
        return fingerprint(self)

    def identifier(self) -> bytes:
        return identifier(self)

    def wif(self) -> str:
        """
        Wallet Import Format of the private key, for the signing layer
        """
        return encode_wif(self.private_key.reveal(), testnet=self.network.is_testnet)

    def address(self) -> str:
        return p2pkh_address(self.public_key, testnet=self.network.is_testnet)

    def wipe(self) -> None:
        self.private_key.wipe()

    # --- DISPLAY --- #
    def to_dict(self) -> dict:
        """Public fields only; the scalar is never displayed"""
        return _display_dict(self)

    def to_json(self):
        return json.dumps(self.to_dict(), indent=2)


@dataclass(frozen=True, eq=True, repr=False)
class ExtendedPublicKey:
    """
    Extended public key. key_data is the 33-byte compressed public key.
    """
    key_data: bytes
    chain_code: bytes
    depth: int = 0
    parent_fingerprint: bytes = ZERO_FINGERPRINT
    child_number: int = 0
    version: bytes = XKEYS.MAINNET_PUBLIC

    def __post_init__(self):
        _validate_common(self.version, self.depth, self.parent_fingerprint, self.child_number, self.chain_code,
                         private=False)
        try:
            PubKey.from_compressed(bytes(self.key_data))
        except PubKeyError as e:
            raise MalformedExtendedKey("key_data", str(e)) from None

        object.__setattr__(self, "key_data", bytes(self.key_data))
        object.__setattr__(self, "chain_code", bytes(self.chain_code))
        object.__setattr__(self, "parent_fingerprint", bytes(self.parent_fingerprint))
        object.__setattr__(self, "version", bytes(self.version))

    def __repr__(self):
        return (f"ExtendedPublicKey(depth={self.depth}, child_number={self.child_number}, "
                f"fingerprint={fingerprint(self).hex()})")

    # --- PROPERTIES --- #

    @property
    def public_key(self) -> bytes:
        return self.key_data

    @property
    def is_private(self) -> bool:
        return False

    @property
    def is_hardened(self) -> bool:
        return is_hardened_index(self.child_number)

    @property
    def network(self) -> Network:
        return lookup_version(self.version).network

    # --- METHODS --- #

    def derive_child(self, index: int) -> "ExtendedPublicKey":
        return derive_child_public(self, index)

    def fingerprint(self) -> bytes:
        return fingerprint(self)

    def identifier(self) -> bytes:
        return identifier(self)

    def to_pubkey(self) -> PubKey:
        return PubKey.from_compressed(self.key_data)

    def address(self) -> str:
        return p2pkh_address(self.key_data, testnet=self.network.is_testnet)

    # --- DISPLAY --- #
    def to_dict(self) -> dict:
        return _display_dict(self)

    def to_json(self):
        return json.dumps(self.to_dict(), indent=2)


ExtendedKey = ExtendedPrivateKey | ExtendedPublicKey


# --- IDENTIFIERS --- #

def identifier(key: ExtendedKey) -> bytes:
    """
    HASH160 of the compressed public key
    """
    return hash160(key.public_key)


def fingerprint(key: ExtendedKey) -> bytes:
    """
    First 4 bytes of the identifier. For display and parent linking only.
    """
    return identifier(key)[:XKEYS.FINGERPRINT_LENGTH]


# --- DERIVATION --- #

def master_from_seed(seed: bytes | SecretBytes, network: Network = Network.MAINNET,
                     version: bytes | None = None) -> ExtendedPrivateKey:
    """
    Master extended private key: I = HMAC-SHA512(key="Bitcoin seed", data=seed)
    """
    seed_bytes = seed.reveal() if isinstance(seed, SecretBytes) else bytes(seed)
    if not (XKEYS.MIN_SEED_BYTES <= len(seed_bytes) <= XKEYS.MAX_SEED_BYTES):
        raise InvalidSeedLength(f"Seed must be between 16 and 64 bytes, got {len(seed_bytes)}")

    with SecretBytes(hmac_sha512(key=XKEYS.SEED_KEY, message=seed_bytes)) as digest:
        master_int = int.from_bytes(digest.reveal()[:32], "big")
        if master_int == 0 or master_int >= SECP256K1.order:
            raise InvalidMasterKey("Seed produced an invalid master key; use a different seed")

        master = ExtendedPrivateKey(
            private_key=SecretBytes(digest.reveal()[:32]),
            chain_code=digest.reveal()[32:],
            version=version or default_version(network, private=True)
        )

    logger.debug(f"Derived master key with fingerprint {fingerprint(master).hex()}")
    return master


def _check_derivation(parent: ExtendedKey, index: int):
    if not (0 <= index <= MAX_INDEX):
        raise InvalidChildIndex(f"Child index {index} outside 0..2^32-1")
    if parent.depth >= MAX_DEPTH:
        raise DepthExceeded(f"Cannot derive below depth {MAX_DEPTH}")


def derive_child_private(parent: ExtendedPrivateKey, index: int) -> ExtendedPrivateKey:
    """
    Private parent -> private child. Raises InvalidChildKey for the (negligible) invalid case; retry with index + 1.
    """
    _check_derivation(parent, index)
    index_bytes = index.to_bytes(4, "big")

    # Hashed data holds the parent scalar for hardened children; keep it in a buffer we can zero
    if is_hardened_index(index):
        data = bytearray(b'\x00' + parent.private_key.reveal() + index_bytes)
    else:
        data = bytearray(parent.public_key + index_bytes)

    try:
        digest = SecretBytes(hmac_sha512(key=parent.chain_code, message=data))
    finally:
        for i in range(len(data)):
            data[i] = 0

    with digest:
        tweak_int = int.from_bytes(digest.reveal()[:32], "big")
        if tweak_int >= SECP256K1.order:
            raise InvalidChildKey(index)

        child_int = (tweak_int + parent.private_key.to_int()) % SECP256K1.order
        if child_int == 0:
            raise InvalidChildKey(index)

        child = ExtendedPrivateKey(
            private_key=SecretBytes(child_int.to_bytes(32, "big")),
            chain_code=digest.reveal()[32:],
            depth=parent.depth + 1,
            parent_fingerprint=fingerprint(parent),
            child_number=index,
            version=parent.version
        )

    logger.debug(f"Derived private child {index} at depth {child.depth}")
    return child


def derive_child_public(parent: ExtendedPublicKey, index: int) -> ExtendedPublicKey:
    """
    Public parent -> public child. Only normal indices; hardened raise HardenedFromPublic.
    """
    if not isinstance(parent, ExtendedPublicKey):
        raise TypeError("derive_child_public requires an ExtendedPublicKey; neuter private keys first")
    _check_derivation(parent, index)
    if is_hardened_index(index):
        raise HardenedFromPublic(f"Cannot derive hardened child {index} from a public key")

    digest = hmac_sha512(key=parent.chain_code, message=parent.key_data + index.to_bytes(4, "big"))
    tweak_int = int.from_bytes(digest[:32], "big")
    if tweak_int >= SECP256K1.order:
        raise InvalidChildKey(index)

    parent_point = PubKey.from_compressed(parent.key_data).to_point()
    child_point = SECP256K1.add_points(SECP256K1.multiply_generator(tweak_int), parent_point)
    if not child_point:
        raise InvalidChildKey(index)

    child = ExtendedPublicKey(
        key_data=PubKey.from_point(child_point).compressed(),
        chain_code=digest[32:],
        depth=parent.depth + 1,
        parent_fingerprint=fingerprint(parent),
        child_number=index,
        version=parent.version
    )
    logger.debug(f"Derived public child {index} at depth {child.depth}")
    return child


def neuter(key: ExtendedKey) -> ExtendedPublicKey:
    """
    Strip the private scalar. Public keys are returned unchanged.
    """
    match key:
        case ExtendedPublicKey():
            return key
        case ExtendedPrivateKey():
            return ExtendedPublicKey(
                key_data=key.public_key,
                chain_code=key.chain_code,
                depth=key.depth,
                parent_fingerprint=key.parent_fingerprint,
                child_number=key.child_number,
                version=public_version(key.version)
            )
    raise TypeError(f"Expected an extended key, received {type(key)}")


def next_valid_child(parent: ExtendedKey, index: int) -> tuple[int, ExtendedKey]:
    """
    Derive at index, moving on to index + 1 for each InvalidChildKey as BIP32 prescribes.
    Returns (index used, child). Each skip is logged; the search never leaves the hardened/normal range of index.
    """
    limit = MAX_INDEX if is_hardened_index(index) else HARDENED_OFFSET - 1
    derive = derive_child_private if isinstance(parent, ExtendedPrivateKey) else derive_child_public
    while True:
        try:
            return index, derive(parent, index)
        except InvalidChildKey:
            logger.warning(f"Child index {index} at depth {parent.depth + 1} is invalid; trying {index + 1}")
            if index >= limit:
                raise
            index += 1
