"""
The Mnemonic class and the BIP39 entropy <-> word codec

Entropy of ENT bits is hashed with SHA256 and the first ENT/32 bits of the hash are appended as checksum. The
ENT + CS bits are split into 11-bit groups, each an index into the 2048-word list. Decoding reverses this and always
re-verifies the checksum.
"""
import secrets

from hdkeychain.core import (WALLET, ChecksumMismatch, InvalidEntropyLength, InvalidMnemonicLength, InvalidWord,
                             MnemonicError, SecretBytes)
from hdkeychain.core.logging import get_logger
from hdkeychain.cryptography import normalize_text, sha256
from hdkeychain.data import Wordlist, load_wordlist

__all__ = ["Mnemonic", "entropy_to_mnemonic", "mnemonic_to_entropy", "generate_mnemonic", "expand_word",
           "suggest_words"]

logger = get_logger(__name__)

# --- CONSTANTS --- #
ALLOWED_ENTROPY_BYTELEN = tuple(WALLET.MNEMONIC.keys())
WORD_COUNT_TO_BYTELEN = {v[WALLET.WORD_KEY]: k for k, v in WALLET.MNEMONIC.items()}
CHECKSUM_KEY = WALLET.CHECKSUM_KEY
WORD_BITS = WALLET.WORD_BITS


class Mnemonic:
    """
    An immutable BIP39 word sequence. The words are secret: repr and str never show them; use .phrase.

    A Mnemonic built from a custom Wordlist keeps it, so phrase, to_entropy and to_seed use that list instead of a
    bundled one.
    """
    __slots__ = ("words", "language", "wordlist")

    def __init__(self, words: list[str] | tuple[str, ...], language: str = WALLET.DEFAULT_LANGUAGE,
                 wordlist: Wordlist | None = None):
        object.__setattr__(self, "words", tuple(words))
        object.__setattr__(self, "language", wordlist.language if wordlist else language)
        object.__setattr__(self, "wordlist", wordlist)

    def __setattr__(self, key, value):
        raise AttributeError("Mnemonic is immutable")

    def __eq__(self, other) -> bool:
        if not isinstance(other, Mnemonic):
            return NotImplemented
        return self.words == other.words and self.language == other.language

    def __hash__(self):
        return hash((self.words, self.language))

    def __len__(self):
        return len(self.words)

    def __repr__(self):
        return f"Mnemonic(<{len(self.words)} words>, language={self.language!r})"

    __str__ = __repr__

    # --- CLASS METHODS --- #

    @classmethod
    def from_phrase(cls, phrase: str, language: str = WALLET.DEFAULT_LANGUAGE,
                    wordlist: Wordlist | None = None) -> "Mnemonic":
        """
        Split a phrase on whitespace after NFKD normalization. Does not validate; see is_valid / to_entropy.
        """
        return cls(normalize_text(phrase).split(), language, wordlist)

    @classmethod
    def from_entropy(cls, entropy: bytes, language: str = WALLET.DEFAULT_LANGUAGE,
                     wordlist: Wordlist | None = None) -> "Mnemonic":
        return entropy_to_mnemonic(entropy, language, wordlist)

    @classmethod
    def generate(cls, strength: int = WALLET.DEFAULT_ENTROPY_BYTES * 8,
                 language: str = WALLET.DEFAULT_LANGUAGE, wordlist: Wordlist | None = None) -> "Mnemonic":
        return generate_mnemonic(strength, language, wordlist)

    # --- PROPERTIES --- #

    @property
    def phrase(self) -> str:
        return (self.wordlist or load_wordlist(self.language)).delimiter.join(self.words)

    # --- METHODS --- #

    def to_entropy(self) -> bytes:
        return mnemonic_to_entropy(self)

    def is_valid(self) -> bool:
        """
        True if every word is in the wordlist, the length is allowed and the checksum verifies
        """
        try:
            mnemonic_to_entropy(self)
        except (MnemonicError, ChecksumMismatch):
            return False
        return True

    def to_seed(self, passphrase: str = "") -> SecretBytes:
        """
        Returns the seed for this mnemonic after validating the checksum
        """
        from hdkeychain.wallet.seed import derive_seed
        return derive_seed(self, passphrase, validate=True)


def _checksum_from_entropy(entropy: bytes) -> int:
    """
    Return the integer associated with the checksum for the given entropy
    """
    checksum_bitlen = WALLET.MNEMONIC[len(entropy)][CHECKSUM_KEY]
    entropy_hash_int = int.from_bytes(sha256(entropy), "big")

    # SHA256 generates 256 bit hash; keep the first checksum_bitlen bits
    return entropy_hash_int >> (256 - checksum_bitlen)


def entropy_to_mnemonic(entropy: bytes, language: str = WALLET.DEFAULT_LANGUAGE,
                        wordlist: Wordlist | None = None) -> Mnemonic:
    """
    Encode entropy of 16, 20, 24, 28 or 32 bytes as a checksummed word sequence. A given wordlist (e.g. from
    load_wordlist(name, wordlist_file)) replaces the bundled list for language.
    """
    entropy = bytes(entropy)
    if len(entropy) not in ALLOWED_ENTROPY_BYTELEN:
        raise InvalidEntropyLength(len(entropy))

    wordlist = wordlist or load_wordlist(language)
    config = WALLET.MNEMONIC[len(entropy)]
    checksum_bitlen = config[CHECKSUM_KEY]

    # Shift entropy_int by checksum_bitlen then OR the checksum_int to append it (as an integer)
    ent_check = (int.from_bytes(entropy, "big") << checksum_bitlen) | _checksum_from_entropy(entropy)

    words = []
    for _ in range(config[WALLET.WORD_KEY]):
        # Extract 11-bit groups from right to left
        words.append(wordlist[ent_check & ((1 << WORD_BITS) - 1)])
        ent_check >>= WORD_BITS
    words.reverse()

    return Mnemonic(words, wordlist=wordlist)


def mnemonic_to_entropy(mnemonic: Mnemonic | str | list[str], language: str | None = None,
                        wordlist: Wordlist | None = None) -> bytes:
    """
    Decode a mnemonic back to its entropy, verifying every word and the checksum
    """
    if isinstance(mnemonic, Mnemonic):
        words, language = mnemonic.words, language or mnemonic.language
        wordlist = wordlist or mnemonic.wordlist
    elif isinstance(mnemonic, str):
        words = normalize_text(mnemonic).split()
    else:
        words = [normalize_text(word) for word in mnemonic]
    if wordlist is not None:
        language = wordlist.language
    language = language or WALLET.DEFAULT_LANGUAGE

    entropy_bytelen = WORD_COUNT_TO_BYTELEN.get(len(words))
    if entropy_bytelen is None:
        raise InvalidMnemonicLength(len(words))

    wordlist = wordlist or load_wordlist(language)
    checksum_bitlen = WALLET.MNEMONIC[entropy_bytelen][CHECKSUM_KEY]

    # Convert phrase to combined integer
    ent_check = 0
    for position, word in enumerate(words):
        try:
            word_index = wordlist.index(word)
        except KeyError:
            raise InvalidWord(position, language) from None
        ent_check = (ent_check << WORD_BITS) | word_index

    # Extract checksum and entropy
    checksum = ent_check & ((1 << checksum_bitlen) - 1)
    entropy = (ent_check >> checksum_bitlen).to_bytes(entropy_bytelen, "big")

    if _checksum_from_entropy(entropy) != checksum:
        raise ChecksumMismatch("mnemonic")

    return entropy


def generate_mnemonic(strength: int = WALLET.DEFAULT_ENTROPY_BYTES * 8, language: str = WALLET.DEFAULT_LANGUAGE,
                      wordlist: Wordlist | None = None) -> Mnemonic:
    """
    Generates a mnemonic from strength bits of CSPRNG entropy
    """
    if strength % 8 != 0 or strength // 8 not in ALLOWED_ENTROPY_BYTELEN:
        raise InvalidEntropyLength(strength // 8)

    with SecretBytes(secrets.token_bytes(strength // 8)) as entropy:
        mnemonic = entropy_to_mnemonic(entropy.reveal(), language, wordlist)

    logger.debug(f"Generated {len(mnemonic)} word mnemonic")
    return mnemonic


def suggest_words(prefix: str, language: str = WALLET.DEFAULT_LANGUAGE, wordlist: Wordlist | None = None) -> list[str]:
    """
    All wordlist words beginning with prefix
    """
    return (wordlist or load_wordlist(language)).with_prefix(normalize_text(prefix.strip().lower()))


def expand_word(prefix: str, language: str = WALLET.DEFAULT_LANGUAGE, position: int = 0,
                wordlist: Wordlist | None = None) -> str:
    """
    Resolve a prefix to its unique wordlist word. Exact matches win (e.g. "act" over "action").
    """
    wordlist = wordlist or load_wordlist(language)
    prefix = normalize_text(prefix.strip().lower())
    if prefix in wordlist:
        return prefix

    candidates = wordlist.with_prefix(prefix)
    if len(candidates) != 1:
        raise InvalidWord(position, wordlist.language)
    return candidates[0]
