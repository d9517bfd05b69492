"""
Seed derivation - stretch a mnemonic and passphrase into the 512-bit BIP39 seed

PBKDF2-HMAC-SHA512, 2048 iterations, password = NFKD(mnemonic), salt = "mnemonic" + NFKD(passphrase). Identical inputs
always give the identical seed. Every passphrase, the empty one included, is valid and yields its own wallet.
"""
from hdkeychain.core import WALLET, SecretBytes
from hdkeychain.core.logging import get_logger
from hdkeychain.cryptography import pbkdf2
from hdkeychain.wallet.mnemonic import Mnemonic, mnemonic_to_entropy

__all__ = ["derive_seed"]

logger = get_logger(__name__)


def derive_seed(mnemonic: Mnemonic | str | list[str], passphrase: str = "", validate: bool = False,
                iterations: int = WALLET.SEED_ITERATIONS) -> SecretBytes:
    """
    Returns the 64-byte seed wrapped in SecretBytes. Use it in a with block to wipe it afterwards.

    BIP39 derives a seed from any phrase; set validate=True to reject phrases failing the wordlist or checksum.
    """
    if isinstance(mnemonic, Mnemonic):
        phrase = mnemonic.phrase
    elif isinstance(mnemonic, str):
        phrase = mnemonic
    else:
        phrase = " ".join(mnemonic)

    if validate:
        # Raises InvalidWord / InvalidMnemonicLength / ChecksumMismatch
        mnemonic_to_entropy(mnemonic)

    seed = SecretBytes(pbkdf2(phrase, passphrase, iterations=iterations, dklen=WALLET.DKLEN))
    logger.debug("Derived seed from mnemonic")
    return seed
