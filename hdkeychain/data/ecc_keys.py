"""
PubKey - SEC1 serialization of secp256k1 public keys
"""
import json

from hdkeychain.core import ECC, PubKeyError
from hdkeychain.cryptography import SECP256K1, Point, hash160

__all__ = ["PubKey"]


class PubKey:
    """
    Used for serializing a public key in hdkeychain
    """
    __slots__ = ("x", "y")

    def __init__(self, private_key: int | bytes):
        private_key = int.from_bytes(private_key, "big") if isinstance(private_key, bytes) else private_key
        if not (0 < private_key < SECP256K1.order):
            raise PubKeyError("Private key out of range for secp256k1")
        self.x, self.y = SECP256K1.multiply_generator(private_key)

    # --- OVERRIDES --- #
    def __eq__(self, other) -> bool:
        if not isinstance(other, PubKey):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    def __repr__(self) -> str:
        return f"PubKey({self.compressed().hex()})"

    # --- CLASS METHODS --- #
    @classmethod
    def from_point(cls, point: Point):
        # Validate point
        if not point:
            raise PubKeyError("Point at infinity is not a valid public key")
        if not SECP256K1.is_point_on_curve(point):
            raise PubKeyError("Given point not on SECP256K1 curve")

        obj = object.__new__(cls)  # bypass __init__
        obj.x, obj.y = point
        return obj

    @classmethod
    def from_compressed(cls, compressed_pubkey: bytes):
        if len(compressed_pubkey) != ECC.COMPRESSED_BYTES:
            raise PubKeyError("Compressed pubkey must be 33 bytes")
        prefix = compressed_pubkey[0]
        if prefix not in (0x02, 0x03):
            raise PubKeyError("Invalid prefix for compressed pubkey")
        x = int.from_bytes(compressed_pubkey[1:], "big")
        if not (0 < x < SECP256K1.p):
            raise PubKeyError("x out of range")
        if not SECP256K1.is_x_on_curve(x):
            raise PubKeyError("Given x coordinate not on curve")

        y = SECP256K1.find_y_from_x(x, odd=prefix == 0x03)
        return cls.from_point(Point(x, y))

    @classmethod
    def from_uncompressed(cls, full_pubkey: bytes):
        if len(full_pubkey) != ECC.UNCOMPRESSED_BYTES:
            raise PubKeyError("Uncompressed pubkey not of correct length.")
        if full_pubkey[0] != 0x04:
            raise PubKeyError("Uncompressed pubkey has incorrect prefix")

        x = int.from_bytes(full_pubkey[1:33], "big")
        y = int.from_bytes(full_pubkey[33:], "big")
        return cls.from_point(Point(x, y))

    @classmethod
    def from_bytes(cls, pubkey_bytes: bytes):
        """
        Proceed based on length of pubkey
        """
        if len(pubkey_bytes) == ECC.UNCOMPRESSED_BYTES:
            return cls.from_uncompressed(pubkey_bytes)
        elif len(pubkey_bytes) == ECC.COMPRESSED_BYTES:
            return cls.from_compressed(pubkey_bytes)
        raise PubKeyError("Unrecognized pubkey type")

    # --- FORMATTING --- #

    def compressed(self) -> bytes:
        y_byte = b'\x02' if self.y % 2 == 0 else b'\x03'
        return y_byte + self.x.to_bytes(ECC.COORD_BYTES, "big")

    def uncompressed(self) -> bytes:
        return b'\x04' + self.x.to_bytes(ECC.COORD_BYTES, "big") + self.y.to_bytes(ECC.COORD_BYTES, "big")

    def to_point(self) -> Point:
        return Point(self.x, self.y)

    def pubkey_hash(self) -> bytes:
        return hash160(self.compressed())

    def tweak_add(self, tweak: int) -> "PubKey":
        """
        Returns tweak*G + self. Raises PubKeyError if the sum is the point at infinity.
        """
        tweak_point = SECP256K1.multiply_generator(tweak)
        return PubKey.from_point(SECP256K1.add_points(self.to_point(), tweak_point))

    # --- DISPLAY --- #
    def to_dict(self):
        return {
            "x": hex(self.x),
            "y": hex(self.y),
            "compressed": self.compressed().hex(),
            "uncompressed": self.uncompressed().hex(),
            "pubkey_hash": self.pubkey_hash().hex()
        }

    def to_json(self):
        return json.dumps(self.to_dict(), indent=2)
