"""
The HDWallet class
"""
import os
from concurrent.futures import ThreadPoolExecutor, as_completed

from hdkeychain.core import WALLET, PrivateKeyUnavailable, SecretBytes
from hdkeychain.core.logging import get_logger
from hdkeychain.wallet.derivation import AccountPath, CoinType, DerivationPath, Purpose, derive_path
from hdkeychain.wallet.mnemonic import Mnemonic, generate_mnemonic
from hdkeychain.wallet.seed import derive_seed
from hdkeychain.wallet.serialization import decode, encode
from hdkeychain.wallet.versions import Network, default_version
from hdkeychain.wallet.xkeys import (ExtendedKey, ExtendedPrivateKey, ExtendedPublicKey, derive_child_public,
                                     fingerprint, master_from_seed, neuter)

__all__ = ["HDWallet"]

logger = get_logger(__name__)


class HDWallet:
    """
    Hierarchical Deterministic Wallet over a single master key.

    A wallet built from a seed or an xprv holds private material; one built from an xpub is watch-only and derives
    only normal (non-hardened) public children.
    """

    def __init__(self, master_key: ExtendedKey, seed: SecretBytes | None = None):
        """
        Initialize HD wallet with master key

        Args:
            master_key: Master extended key (private for full functionality)
            seed: The seed the master key came from, kept so wipe() can destroy it
        """
        self.master_key = master_key
        self._seed = seed
        self._pubkey_cache: dict[str, ExtendedPublicKey] = {}

    def __repr__(self):
        kind = "watch-only" if self.is_watch_only else "private"
        return f"HDWallet({kind}, fingerprint={self.fingerprint.hex()}, network={self.network.value})"

    def __enter__(self) -> "HDWallet":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.wipe()

    # --- CONSTRUCTORS --- #

    @classmethod
    def generate(cls, strength: int = WALLET.DEFAULT_ENTROPY_BYTES * 8, passphrase: str = "",
                 network: Network = Network.MAINNET) -> tuple[Mnemonic, "HDWallet"]:
        """
        Create a new random wallet. Returns (mnemonic, wallet); the mnemonic is the only backup.
        """
        mnemonic = generate_mnemonic(strength)
        return mnemonic, cls.from_mnemonic(mnemonic, passphrase, network)

    @classmethod
    def from_mnemonic(cls, mnemonic: Mnemonic | str, passphrase: str = "",
                      network: Network = Network.MAINNET) -> "HDWallet":
        """
        Create HD wallet from a BIP39 mnemonic. The checksum is verified.

        Args:
            mnemonic: Mnemonic or space separated phrase
            passphrase: Optional BIP39 passphrase; every passphrase yields a distinct wallet
            network: Selects xprv/xpub or tprv/tpub version bytes
        """
        if isinstance(mnemonic, str):
            mnemonic = Mnemonic.from_phrase(mnemonic)
        seed = derive_seed(mnemonic, passphrase, validate=True)
        return cls(master_from_seed(seed, network), seed=seed)

    @classmethod
    def from_seed(cls, seed: bytes | SecretBytes, network: Network = Network.MAINNET) -> "HDWallet":
        seed = seed if isinstance(seed, SecretBytes) else SecretBytes(seed)
        return cls(master_from_seed(seed, network), seed=seed)

    @classmethod
    def from_extended_key(cls, extended_key: str, network: Network | None = None) -> "HDWallet":
        """
        Create HD wallet from an encoded extended key. An xpub gives a watch-only wallet, e.g. for an account key
        exported by a hardware signer.
        """
        return cls(decode(extended_key, network))

    # --- PROPERTIES --- #

    @property
    def is_watch_only(self) -> bool:
        return isinstance(self.master_key, ExtendedPublicKey)

    @property
    def network(self) -> Network:
        return self.master_key.network

    @property
    def fingerprint(self) -> bytes:
        return fingerprint(self.master_key)

    @property
    def _coin_type(self) -> int:
        return CoinType.TESTNET if self.network.is_testnet else CoinType.BITCOIN

    # --- MASTER KEYS --- #

    def master_xpub(self) -> str:
        """Get master public key as string"""
        return encode(neuter(self.master_key))

    def master_xprv(self) -> str:
        """Get master private key as string. Raises PrivateKeyUnavailable for watch-only wallets."""
        if self.is_watch_only:
            raise PrivateKeyUnavailable("Watch-only wallet holds no private key")
        return encode(self.master_key)

    # --- DERIVATION --- #

    def derive(self, path: DerivationPath | str | list | tuple) -> ExtendedKey:
        """
        Derive the key at path relative to the master key
        """
        return derive_path(self.master_key, path)

    def public_key(self, path: DerivationPath | str | list | tuple) -> ExtendedPublicKey:
        """
        Public key at path. Results are cached by path; private keys are never cached.
        """
        key = str(DerivationPath.coerce(path))
        cached = self._pubkey_cache.get(key)
        if cached is None:
            derived = self.derive(path)
            cached = neuter(derived)
            if isinstance(derived, ExtendedPrivateKey) and derived is not self.master_key:
                derived.wipe()
            self._pubkey_cache[key] = cached
        return cached

    def account_key(self, account: int = 0, purpose: int = Purpose.BIP44, coin_type: int | None = None,
                    export_version: bool = True) -> ExtendedKey:
        """
        Derive account key using the BIP44 path m/purpose'/coin_type'/account'

        Args:
            account: Account index
            purpose: Purpose (44 for BIP44, 49 for BIP49, 84 for BIP84)
            coin_type: Coin type; defaults to 0 on mainnet and 1 on testnet
            export_version: Tag the key with the purpose's version bytes (ypub/zpub) for export
        """
        coin_type = self._coin_type if coin_type is None else coin_type
        path = AccountPath(purpose, coin_type, account).account_path
        key = self.derive(path)
        if not export_version:
            return key

        version = default_version(self.network, private=key.is_private, purpose=int(purpose))
        tagged = decode(encode(key, version))
        if isinstance(key, ExtendedPrivateKey):
            key.wipe()
        return tagged

    def address_key(self, account: int = 0, chain: int = 0, index: int = 0, purpose: int = Purpose.BIP44,
                    coin_type: int | None = None) -> ExtendedKey:
        """
        Derive address key using the full path m/purpose'/coin_type'/account'/chain/address_index
        """
        coin_type = self._coin_type if coin_type is None else coin_type
        return self.derive(AccountPath(purpose, coin_type, account, chain, index).address_path)

    def address(self, account: int = 0, chain: int = 0, index: int = 0, coin_type: int | None = None) -> str:
        """
        P2PKH address of the BIP44 address key
        """
        coin_type = self._coin_type if coin_type is None else coin_type
        path = AccountPath(Purpose.BIP44, coin_type, account, chain, index).address_path
        return self.public_key(path).address()

    def derive_range(self, chain_key: ExtendedKey, start: int = 0, count: int = 20,
                     workers: int | None = None) -> list[ExtendedPublicKey]:
        """
        Public children start..start+count-1 of chain_key, in index order

        Args:
            chain_key: Parent key, usually an account's external or internal chain key
            start: First child index (normal, below 2^31)
            count: Number of children
            workers: Thread count; None or 1 derives sequentially
        """
        parent = neuter(chain_key)
        indices = list(range(start, start + count))
        if not workers or workers <= 1 or count <= 1:
            return [derive_child_public(parent, i) for i in indices]

        num_workers = min(workers, os.cpu_count() or 1, count)
        results: dict[int, ExtendedPublicKey] = {}
        with ThreadPoolExecutor(max_workers=num_workers) as executor:
            futures = {executor.submit(derive_child_public, parent, i): i for i in indices}
            for future in as_completed(futures):
                results[futures[future]] = future.result()

        logger.debug(f"Derived {count} public children with {num_workers} workers")
        return [results[i] for i in indices]

    # --- CLEANUP --- #

    def wipe(self) -> None:
        """
        Zero the seed and master private key. The wallet is unusable for private derivation afterwards.
        """
        if self._seed is not None:
            self._seed.wipe()
        if isinstance(self.master_key, ExtendedPrivateKey):
            self.master_key.wipe()
        logger.debug("Wiped wallet secrets")
