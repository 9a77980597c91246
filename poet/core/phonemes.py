"""Phoneme sequences and the suffix keys used for rhyme matching.

Pronunciations use the ARPABET symbols of the CMU pronouncing dictionary.
Vowel sounds carry a stress digit (``AH0``, ``IY1``, ``AE2``) and each of
them is counted as one syllable.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Sequence, Tuple

PHONEME_PATTERN = re.compile(r"[A-Z]+([0-9]+)?")


class PhonemeError(ValueError):
    """Raised when a phoneme token does not match the ARPABET grammar."""

    def __init__(self, token: str) -> None:
        super().__init__(f"Invalid phoneme {token!r}")
        self.token = token


def is_vowel(phoneme: str) -> bool:
    """Return whether ``phoneme`` carries a stress digit."""

    return phoneme[-1:].isdigit()


def validate_phoneme(token: str) -> str:
    if PHONEME_PATTERN.fullmatch(token) is None:
        raise PhonemeError(token)
    return token


def similarity_score(a: Sequence[str], b: Sequence[str]) -> int:
    """Count the phonemes shared contiguously from the end of ``a`` and ``b``."""

    score = 0
    for left, right in zip(reversed(a), reversed(b)):
        if left != right:
            break
        score += 1
    return score


@dataclass(frozen=True)
class PhonemeSequence:
    """An immutable pronunciation, e.g. ``("F", "L", "AW1", "ER0", "Z")``."""

    phonemes: Tuple[str, ...] = ()
    syllable_count: int = field(init=False, compare=False)

    def __post_init__(self) -> None:
        phonemes = tuple(validate_phoneme(str(token)) for token in self.phonemes)
        object.__setattr__(self, "phonemes", phonemes)
        object.__setattr__(
            self, "syllable_count", sum(1 for token in phonemes if is_vowel(token))
        )

    @classmethod
    def from_tokens(cls, tokens: Iterable[str]) -> "PhonemeSequence":
        return cls(tuple(tokens))

    @classmethod
    def from_string(cls, text: str) -> "PhonemeSequence":
        """Parse a space separated pronunciation such as ``"F L AW1 ER0 Z "``."""

        return cls(tuple(text.split()))

    def __len__(self) -> int:
        return len(self.phonemes)

    def __iter__(self):
        return iter(self.phonemes)

    def __getitem__(self, index):
        return self.phonemes[index]

    def __str__(self) -> str:
        return " ".join(self.phonemes)

    def suffix_key(self, syllables: int = 1) -> str:
        """Return the reversed phonemes up to and including the Nth vowel from the end.

        Every phoneme is followed by a space so that the key can be used as a
        prefix of :meth:`similarity_key` without ``Z`` matching ``ZH``. When
        the sequence has fewer vowels than requested the whole reversed
        sequence is returned.
        """

        parts = []
        vowels = 0
        for phoneme in reversed(self.phonemes):
            parts.append(phoneme + " ")
            if is_vowel(phoneme):
                vowels += 1
                if vowels >= syllables:
                    break
        return "".join(parts)

    def last_syllable_key(self) -> str:
        return self.suffix_key(1)

    def similarity_key(self, disambiguator: str) -> str:
        """Reverse the phonemes so that shared endings sort next to each other."""

        reversed_part = "".join(phoneme + " " for phoneme in reversed(self.phonemes))
        return reversed_part + disambiguator

    def rhymes_with(self, other: "PhonemeSequence") -> bool:
        key = self.last_syllable_key()
        return bool(key) and key == other.last_syllable_key()


__all__ = [
    "PHONEME_PATTERN",
    "PhonemeError",
    "PhonemeSequence",
    "is_vowel",
    "similarity_score",
    "validate_phoneme",
]
