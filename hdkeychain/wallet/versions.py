"""
Extended key version tags

The 4-byte version is the only carrier of network and visibility: xprv/xpub (BIP32 mainnet), tprv/tpub (BIP32
testnet) and the SLIP-132 tags used for BIP49 (yprv/ypub, uprv/upub) and BIP84 (zprv/zpub, vprv/vpub) accounts.
"""
from dataclasses import dataclass
from enum import Enum

from hdkeychain.core import XKEYS, UnknownVersionTag

__all__ = ["Network", "VersionTag", "VERSION_TAGS", "lookup_version", "default_version", "public_version",
           "private_version"]


class Network(Enum):
    MAINNET = "mainnet"
    TESTNET = "testnet"

    @property
    def is_testnet(self) -> bool:
        return self is Network.TESTNET


@dataclass(frozen=True)
class VersionTag:
    version: bytes
    prefix: str
    network: Network
    is_private: bool
    purpose: int


_TAGS = (
    VersionTag(XKEYS.MAINNET_PRIVATE, "xprv", Network.MAINNET, True, 44),
    VersionTag(XKEYS.MAINNET_PUBLIC, "xpub", Network.MAINNET, False, 44),
    VersionTag(XKEYS.TESTNET_PRIVATE, "tprv", Network.TESTNET, True, 44),
    VersionTag(XKEYS.TESTNET_PUBLIC, "tpub", Network.TESTNET, False, 44),
    VersionTag(XKEYS.BIP49_XPRV, "yprv", Network.MAINNET, True, 49),
    VersionTag(XKEYS.BIP49_XPUB, "ypub", Network.MAINNET, False, 49),
    VersionTag(XKEYS.BIP49_TPRV, "uprv", Network.TESTNET, True, 49),
    VersionTag(XKEYS.BIP49_TPUB, "upub", Network.TESTNET, False, 49),
    VersionTag(XKEYS.BIP84_XPRV, "zprv", Network.MAINNET, True, 84),
    VersionTag(XKEYS.BIP84_XPUB, "zpub", Network.MAINNET, False, 84),
    VersionTag(XKEYS.BIP84_TPRV, "vprv", Network.TESTNET, True, 84),
    VersionTag(XKEYS.BIP84_TPUB, "vpub", Network.TESTNET, False, 84),
)

VERSION_TAGS: dict[bytes, VersionTag] = {tag.version: tag for tag in _TAGS}
_BY_KIND = {(tag.network, tag.is_private, tag.purpose): tag.version for tag in _TAGS}


def lookup_version(version: bytes) -> VersionTag:
    try:
        return VERSION_TAGS[bytes(version)]
    except KeyError:
        raise UnknownVersionTag(bytes(version)) from None


def default_version(network: Network = Network.MAINNET, private: bool = True, purpose: int = 44) -> bytes:
    """
    Version bytes for the given network, visibility and purpose. Unknown purposes fall back to plain BIP32 tags.
    """
    return _BY_KIND.get((network, private, purpose), _BY_KIND[(network, private, 44)])


def public_version(version: bytes) -> bytes:
    """
    The public twin of a private version tag; public tags map to themselves
    """
    tag = lookup_version(version)
    return _BY_KIND[(tag.network, False, tag.purpose)]


def private_version(version: bytes) -> bytes:
    tag = lookup_version(version)
    return _BY_KIND[(tag.network, True, tag.purpose)]
