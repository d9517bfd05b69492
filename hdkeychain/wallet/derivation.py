"""
Derivation paths - parse, build and walk BIP32 paths

    m / purpose' / coin_type' / account' / chain / address_index

The apostrophe marks a hardened step (index + 2^31); "h" and "H" are accepted as well. Paths of any shape are
supported by DerivationPath; AccountPath holds the fixed BIP44 grammar.
"""
import re
from dataclasses import dataclass
from enum import IntEnum

from hdkeychain.core import XKEYS, HardenedRequiresPrivate, InvalidDerivationPath
from hdkeychain.core.logging import get_logger
from hdkeychain.wallet.xkeys import ExtendedKey, ExtendedPrivateKey, ExtendedPublicKey, derive_child_private, \
    derive_child_public

__all__ = ["ChildIndex", "DerivationPath", "Purpose", "CoinType", "Chain", "AccountPath", "derive_path"]

logger = get_logger(__name__)

HARDENED_OFFSET = XKEYS.HARDENED_OFFSET
_STEP_PATTERN = re.compile(r"^([0-9]+)(['hH]?)$")


@dataclass(frozen=True, slots=True)
class ChildIndex:
    index: int
    hardened: bool = False

    def __post_init__(self):
        if not (0 <= self.index < HARDENED_OFFSET):
            raise InvalidDerivationPath(f"Path component {self.index} outside 0..2^31-1")

    def __str__(self):
        return f"{self.index}'" if self.hardened else str(self.index)

    @property
    def value(self) -> int:
        """The raw uint32 child number"""
        return self.index + HARDENED_OFFSET if self.hardened else self.index

    @classmethod
    def from_value(cls, value: int) -> "ChildIndex":
        if not (0 <= value <= XKEYS.MAX_INDEX):
            raise InvalidDerivationPath(f"Child number {value} does not fit in 32 bits")
        if value >= HARDENED_OFFSET:
            return cls(value - HARDENED_OFFSET, True)
        return cls(value, False)

    @classmethod
    def parse(cls, text: str) -> "ChildIndex":
        match = _STEP_PATTERN.match(text.strip())
        if not match:
            raise InvalidDerivationPath(f"Malformed path component {text!r}")
        return cls(int(match.group(1)), bool(match.group(2)))


@dataclass(frozen=True, slots=True)
class DerivationPath:
    steps: tuple[ChildIndex, ...] = ()

    def __str__(self):
        return "/".join(["m", *(str(step) for step in self.steps)])

    def __len__(self):
        return len(self.steps)

    def __iter__(self):
        return iter(self.steps)

    def __truediv__(self, step: "ChildIndex | int | str") -> "DerivationPath":
        match step:
            case ChildIndex():
                new_step = step
            case int():
                new_step = ChildIndex.from_value(step)
            case str():
                new_step = ChildIndex.parse(step)
            case _:
                return NotImplemented
        return DerivationPath(self.steps + (new_step,))

    @classmethod
    def parse(cls, text: str) -> "DerivationPath":
        """
        Parse "m/44'/0'/0'/0/0". The leading "m" is optional and "m" alone is the empty path.
        """
        if not isinstance(text, str):
            raise InvalidDerivationPath(f"Expected a path string, received {type(text).__name__}")
        parts = text.strip().split("/")
        if parts[0] in ("m", "M"):
            parts = parts[1:]
        if parts == [""]:
            raise InvalidDerivationPath("Empty derivation path")
        return cls(tuple(ChildIndex.parse(part) for part in parts))

    @classmethod
    def from_steps(cls, steps) -> "DerivationPath":
        """
        Build from (index, hardened) pairs, ChildIndex values or raw uint32 child numbers
        """
        built = []
        for step in steps:
            match step:
                case ChildIndex():
                    built.append(step)
                case (int() as index, bool() as hardened):
                    built.append(ChildIndex(index, hardened))
                case int():
                    built.append(ChildIndex.from_value(step))
                case _:
                    raise InvalidDerivationPath(f"Unrecognized path step {step!r}")
        return cls(tuple(built))

    @classmethod
    def coerce(cls, path: "DerivationPath | str | list | tuple") -> "DerivationPath":
        if isinstance(path, DerivationPath):
            return path
        if isinstance(path, str):
            return cls.parse(path)
        return cls.from_steps(path)

    @property
    def depth(self) -> int:
        return len(self.steps)

    @property
    def parent(self) -> "DerivationPath":
        if not self.steps:
            raise InvalidDerivationPath("The root path has no parent")
        return DerivationPath(self.steps[:-1])

    @property
    def is_hardened_free(self) -> bool:
        """True if the whole path can be walked from a public key"""
        return not any(step.hardened for step in self.steps)

    def values(self) -> list[int]:
        return [step.value for step in self.steps]


class Purpose(IntEnum):
    BIP44 = 44
    BIP49 = 49
    BIP84 = 84

    def path(self, coin_type: int = 0, account: int = 0, chain: int = 0, address_index: int = 0) -> str:
        return f"m/{self.value}'/{coin_type}'/{account}'/{chain}/{address_index}"


class CoinType(IntEnum):
    BITCOIN = 0
    TESTNET = 1


class Chain(IntEnum):
    EXTERNAL = 0
    INTERNAL = 1


@dataclass(frozen=True, slots=True)
class AccountPath:
    """
    The five-level BIP44 path. Only the first three levels are hardened.
    """
    purpose: int = Purpose.BIP44
    coin_type: int = CoinType.BITCOIN
    account: int = 0
    chain: int = Chain.EXTERNAL
    address_index: int = 0

    def __post_init__(self):
        if self.purpose not in set(Purpose):
            raise InvalidDerivationPath(f"Unsupported purpose {self.purpose}")
        if self.chain not in (Chain.EXTERNAL, Chain.INTERNAL):
            raise InvalidDerivationPath(f"Chain must be 0 (external) or 1 (internal), got {self.chain}")
        for name in ("coin_type", "account", "address_index"):
            value = getattr(self, name)
            if not (0 <= value < HARDENED_OFFSET):
                raise InvalidDerivationPath(f"{name} {value} outside 0..2^31-1")

    def __str__(self):
        return str(self.address_path)

    @property
    def account_path(self) -> DerivationPath:
        return DerivationPath.from_steps([(int(self.purpose), True), (int(self.coin_type), True),
                                          (self.account, True)])

    @property
    def chain_path(self) -> DerivationPath:
        return self.account_path / int(self.chain)

    @property
    def address_path(self) -> DerivationPath:
        return self.chain_path / self.address_index

    @classmethod
    def from_path(cls, path: DerivationPath | str) -> "AccountPath":
        path = DerivationPath.coerce(path)
        if path.depth != 5:
            raise InvalidDerivationPath(f"Account paths have 5 levels, got {path.depth}")
        purpose, coin_type, account, chain, index = path.steps
        if not (purpose.hardened and coin_type.hardened and account.hardened):
            raise InvalidDerivationPath("Purpose, coin type and account must be hardened")
        if chain.hardened or index.hardened:
            raise InvalidDerivationPath("Chain and address index must not be hardened")
        return cls(purpose.index, coin_type.index, account.index, chain.index, index.index)


def derive_path(root: ExtendedKey, path: DerivationPath | str | list | tuple) -> ExtendedKey:
    """
    Walk path from root one step at a time. Private roots give private keys and public roots give public keys.
    """
    path = DerivationPath.coerce(path)
    key = root
    for step in path:
        match key:
            case ExtendedPrivateKey():
                key = derive_child_private(key, step.value)
            case ExtendedPublicKey():
                if step.hardened:
                    raise HardenedRequiresPrivate(step.value)
                key = derive_child_public(key, step.value)
            case _:
                raise TypeError(f"Expected an extended key, received {type(key)}")

    logger.debug(f"Derived key at depth {key.depth} from {path.depth} step path")
    return key
