"""
Loads a given BIP39 wordlist

The canonical lists ship with the `mnemonic` distribution; a custom list can be read from any file holding one word
per line.
"""
from functools import lru_cache
from pathlib import Path

from mnemonic import Mnemonic as _BundledWordlists

from hdkeychain.core import WALLET, UnsupportedLanguage

__all__ = ["Wordlist", "load_wordlist", "available_languages"]


class Wordlist:
    """
    An immutable 2048-word list with O(1) word -> index lookup
    """
    __slots__ = ("language", "words", "_index")

    def __init__(self, words: list[str] | tuple[str, ...], language: str = WALLET.DEFAULT_LANGUAGE):
        words = tuple(words)
        if len(words) != WALLET.WORDLIST_SIZE:
            raise UnsupportedLanguage(f"Wordlist must contain {WALLET.WORDLIST_SIZE} words, found {len(words)}")
        if len(set(words)) != len(words):
            raise UnsupportedLanguage("Wordlist contains duplicate words")

        self.language = language
        self.words = words
        self._index = {word: i for i, word in enumerate(words)}

    def __len__(self):
        return len(self.words)

    def __getitem__(self, index: int) -> str:
        return self.words[index]

    def __contains__(self, word: str) -> bool:
        return word in self._index

    def __repr__(self):
        return f"Wordlist({self.language})"

    @property
    def delimiter(self) -> str:
        # Japanese phrases are joined with an ideographic space
        return "\u3000" if self.language == "japanese" else " "

    def index(self, word: str) -> int:
        """
        Raises KeyError if the word is absent
        """
        return self._index[word]

    def with_prefix(self, prefix: str) -> list[str]:
        return [word for word in self.words if word.startswith(prefix)]


def available_languages() -> list[str]:
    return sorted(_BundledWordlists.list_languages())


@lru_cache(maxsize=None)
def load_wordlist(language: str = WALLET.DEFAULT_LANGUAGE, wordlist_file: Path | None = None) -> Wordlist:
    """Return the BIP39 wordlist for the language, or read it from wordlist_file when given."""
    if wordlist_file is not None:
        with Path(wordlist_file).open(encoding="utf-8") as f:
            return Wordlist([line.strip() for line in f if line.strip()], language)

    if language not in _BundledWordlists.list_languages():
        raise UnsupportedLanguage(f"No bundled BIP39 wordlist for language {language!r}")
    return Wordlist(_BundledWordlists(language).wordlist, language)
