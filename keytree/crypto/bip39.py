"""BIP39 mnemonic implementation for keytree."""

import hashlib
import unicodedata
from functools import lru_cache
from types import MappingProxyType
from typing import List, Mapping, Optional, Sequence, Tuple, Union

from mnemonic import Mnemonic as _WordlistSource

from ..constants import (
    DEFAULT_LANGUAGE,
    ENTROPY_BITS,
    MNEMONIC_WORD_COUNTS,
    PBKDF2_ROUNDS,
)
from ..exceptions import (
    InvalidChecksum,
    InvalidLength,
    InvalidWord,
    KeyTreeError,
    ValidationError,
)
from ..types.common import Seed
from ..utils.validation import validate_entropy
from .keys import random_bytes

__all__ = [
    "Mnemonic",
    "get_wordlist",
    "generate_mnemonic",
    "entropy_to_mnemonic",
    "mnemonic_to_entropy",
    "validate_mnemonic",
    "mnemonic_to_seed",
]

IDEOGRAPHIC_SPACE = "\u3000"


def _normalize(text: str) -> str:
    return unicodedata.normalize("NFKD", text)


@lru_cache(maxsize=None)
def _load_wordlist(language: str) -> Tuple[Tuple[str, ...], Mapping[str, int]]:
    if language not in _WordlistSource.list_languages():
        raise ValidationError(f"Unsupported mnemonic language: {language!r}")
    words = tuple(_WordlistSource(language).wordlist)
    if len(words) != 2048:
        raise ValidationError(f"Wordlist for {language!r} has {len(words)} words")
    index = MappingProxyType({_normalize(word): i for i, word in enumerate(words)})
    return words, index


def get_wordlist(language: str = DEFAULT_LANGUAGE) -> Tuple[str, ...]:
    """Get the 2048-word list for a language."""
    return _load_wordlist(language)[0]


def _checksum_bits(entropy: bytes) -> str:
    checksum_length = len(entropy) * 8 // 32
    checksum = hashlib.sha256(entropy).digest()
    return bin(checksum[0])[2:].zfill(8)[:checksum_length]


def _split_words(words: Union[str, Sequence[str]]) -> List[str]:
    if isinstance(words, str):
        return _normalize(words).split()
    return [_normalize(word) for word in words]


class Mnemonic:
    """
    BIP39 mnemonic.

    Wraps the entropy behind a phrase. The entropy is kept in a bytearray so
    that ``destroy`` can zero it once the seed has been derived.
    """

    def __init__(self, entropy: bytes, language: str = DEFAULT_LANGUAGE) -> None:
        """
        Initialize mnemonic from entropy.

        Args:
            entropy: 16, 20, 24, 28 or 32 bytes
            language: Wordlist language

        Raises:
            InvalidLength: If entropy size is invalid
        """
        self._entropy = bytearray(validate_entropy(entropy))
        self.language = language
        # Fail early on unknown languages
        get_wordlist(language)

    @classmethod
    def generate(cls, bits: int = 256, language: str = DEFAULT_LANGUAGE) -> "Mnemonic":
        """
        Generate a mnemonic from fresh random entropy.

        Args:
            bits: Entropy size, one of 128, 160, 192, 224, 256

        Raises:
            InvalidLength: If bits is not a valid entropy size
            EntropySourceFailure: If the random source is unavailable
        """
        if bits not in ENTROPY_BITS:
            raise InvalidLength(f"Entropy bits must be one of {ENTROPY_BITS}, got {bits}")
        return cls(random_bytes(bits // 8), language)

    @classmethod
    def from_entropy(cls, entropy: bytes, language: str = DEFAULT_LANGUAGE) -> "Mnemonic":
        return cls(entropy, language)

    @classmethod
    def from_phrase(
        cls,
        words: Union[str, Sequence[str]],
        language: str = DEFAULT_LANGUAGE
    ) -> "Mnemonic":
        """
        Recover the mnemonic behind a phrase.

        Args:
            words: Phrase string or sequence of words
            language: Wordlist language

        Raises:
            InvalidLength: If word count is not 12, 15, 18, 21 or 24
            InvalidWord: If a word is not in the wordlist
            InvalidChecksum: If the checksum bits do not match
        """
        words = _split_words(words)
        if len(words) not in MNEMONIC_WORD_COUNTS:
            raise InvalidLength(
                f"Mnemonic must have {MNEMONIC_WORD_COUNTS} words, got {len(words)}"
            )

        _, index = _load_wordlist(language)

        bits = []
        for word in words:
            try:
                bits.append(format(index[word], "011b"))
            except KeyError:
                raise InvalidWord(word) from None
        all_bits = "".join(bits)

        checksum_length = len(all_bits) // 33
        entropy_length = len(all_bits) - checksum_length
        entropy = int(all_bits[:entropy_length], 2).to_bytes(entropy_length // 8, "big")

        if _checksum_bits(entropy) != all_bits[entropy_length:]:
            raise InvalidChecksum("Mnemonic checksum mismatch")

        return cls(entropy, language)

    @property
    def entropy(self) -> bytes:
        return bytes(self._entropy)

    @property
    def bits(self) -> int:
        """Entropy size in bits."""
        return len(self._entropy) * 8

    @property
    def words(self) -> List[str]:
        """
        Phrase as a list of words.

        Raises:
            ValidationError: If the mnemonic has been destroyed
        """
        if not self._entropy:
            raise ValidationError("Mnemonic has been destroyed")

        wordlist = get_wordlist(self.language)
        entropy = bytes(self._entropy)

        # Add checksum
        entropy_bits = "".join(format(byte, "08b") for byte in entropy)
        all_bits = entropy_bits + _checksum_bits(entropy)

        # Split into 11-bit chunks and convert to words
        return [
            wordlist[int(all_bits[i:i + 11], 2)]
            for i in range(0, len(all_bits), 11)
        ]

    @property
    def phrase(self) -> str:
        """Phrase joined the way its language expects."""
        separator = IDEOGRAPHIC_SPACE if self.language == "japanese" else " "
        return separator.join(self.words)

    def to_seed(self, passphrase: str = "") -> Seed:
        """
        Stretch the phrase into a 64-byte seed.

        Args:
            passphrase: Optional BIP39 passphrase

        Returns:
            64-byte seed

        Raises:
            ValidationError: If the mnemonic has been destroyed
        """
        return mnemonic_to_seed(self.phrase, passphrase)

    def destroy(self) -> None:
        """Zero the entropy buffer. Words and seed are unavailable afterwards."""
        for i in range(len(self._entropy)):
            self._entropy[i] = 0
        self._entropy = bytearray()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mnemonic):
            return False
        return self._entropy == other._entropy and self.language == other.language

    def __hash__(self) -> int:
        return hash((bytes(self._entropy), self.language))

    def __str__(self) -> str:
        return self.phrase

    def __repr__(self) -> str:
        return f"Mnemonic(bits={self.bits}, language={self.language!r})"


def generate_mnemonic(strength: int = 256, language: str = DEFAULT_LANGUAGE) -> str:
    """Generate BIP39 mnemonic phrase."""
    return Mnemonic.generate(strength, language).phrase


def entropy_to_mnemonic(entropy: bytes, language: str = DEFAULT_LANGUAGE) -> str:
    """Encode entropy as a mnemonic phrase."""
    return Mnemonic(entropy, language).phrase


def mnemonic_to_entropy(
    mnemonic: Union[str, Sequence[str]],
    language: str = DEFAULT_LANGUAGE
) -> bytes:
    """Decode a mnemonic phrase back to its entropy."""
    return Mnemonic.from_phrase(mnemonic, language).entropy


def validate_mnemonic(
    mnemonic: Union[str, Sequence[str]],
    language: str = DEFAULT_LANGUAGE
) -> bool:
    """Check a phrase's words, length and checksum."""
    try:
        Mnemonic.from_phrase(mnemonic, language)
    except KeyTreeError:
        return False
    return True


def mnemonic_to_seed(
    mnemonic: Union[str, Sequence[str]],
    passphrase: Optional[str] = ""
) -> Seed:
    """Convert mnemonic to seed using PBKDF2."""
    mnemonic = " ".join(_split_words(mnemonic))
    mnemonic_bytes = mnemonic.encode("utf-8")
    passphrase_bytes = ("mnemonic" + _normalize(passphrase or "")).encode("utf-8")

    return Seed(hashlib.pbkdf2_hmac(
        "sha512",
        mnemonic_bytes,
        passphrase_bytes,
        PBKDF2_ROUNDS,
        dklen=64
    ))
