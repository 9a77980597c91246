"""Lexicon entries parsed from ``cmudict.dict`` formatted lines.

A line holds a term, an optional variant number and the phonemes of one
pronunciation, optionally followed by a comment::

    aluminium AH0 L UW1 M IH0 N AH0 M
    aluminium(2) AE2 L Y UW1 M IH0 N AH0 M
    achill AE1 K IH0 L # place, irish
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Tuple

from .phonemes import PhonemeError, PhonemeSequence

_TERM_PATTERN = re.compile(r"([^\s()#]+)(?:\(([0-9]+)\))?")


class LexiconParseError(ValueError):
    """A lexicon line that does not follow the ``WORD[(N)] PH ...`` grammar."""

    def __init__(self, message: str, line: str, line_number: Optional[int] = None) -> None:
        self.reason = message
        self.line = line
        self.line_number = line_number
        location = f"line {line_number}: " if line_number is not None else ""
        super().__init__(f"{location}{message}: {line!r}")

    def at_line(self, line_number: int) -> "LexiconParseError":
        return LexiconParseError(self.reason, self.line, line_number)


def parse_dict_key(key: str) -> Tuple[str, int]:
    """Split a dictionary key such as ``"amounted(2)"`` into ``("amounted", 2)``."""

    match = _TERM_PATTERN.fullmatch(key.strip())
    if match is None:
        raise LexiconParseError("Unparseable term", key)
    variant = int(match.group(2)) if match.group(2) else 1
    if variant < 1:
        raise LexiconParseError("Variant must be a positive integer", key)
    return match.group(1), variant


@dataclass(frozen=True)
class Entry:
    """One pronunciation of one word, i.e. one line of the lexicon."""

    word: str
    phonemes: PhonemeSequence
    variant: int = 1

    @classmethod
    def parse(cls, line: str) -> "Entry":
        text = line.split("#", 1)[0]
        tokens = text.split()
        if not tokens:
            raise LexiconParseError("Missing term", line)

        try:
            word, variant = parse_dict_key(tokens[0])
        except LexiconParseError as exc:
            raise LexiconParseError(exc.reason, line) from None

        try:
            phonemes = PhonemeSequence.from_tokens(tokens[1:])
        except PhonemeError as exc:
            raise LexiconParseError(str(exc), line) from None

        return cls(word=word, phonemes=phonemes, variant=variant)

    @classmethod
    def from_parts(cls, word: str, pronunciation: str, variant: int = 1) -> "Entry":
        """Build an entry from a word and a space separated pronunciation."""

        return cls(
            word=word,
            phonemes=PhonemeSequence.from_string(pronunciation),
            variant=variant,
        )

    @property
    def dict_key(self) -> str:
        if self.variant == 1:
            return self.word
        return f"{self.word}({self.variant})"

    @property
    def syllables(self) -> int:
        return self.phonemes.syllable_count

    def similarity_key(self) -> str:
        # The word text keeps homophones apart.
        return self.phonemes.similarity_key(self.word)

    def last_syllable_key(self) -> str:
        return self.phonemes.last_syllable_key()

    def rhymes_with(self, other: "Entry") -> bool:
        return self.phonemes.rhymes_with(other.phonemes)

    def __str__(self) -> str:
        return f"{self.dict_key} {self.phonemes}".rstrip()


__all__ = ["Entry", "LexiconParseError", "parse_dict_key"]
