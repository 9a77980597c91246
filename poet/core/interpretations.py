"""Enumerate the pronunciation choices ("interpretations") of a stanza.

Words with several dictionary pronunciations make a stanza ambiguous. An
interpretation pins one pronunciation per token, and the set of all of them
is the Cartesian product of every token's variants. That product explodes
quickly (a sonnet can have hundreds of millions), so by default tokens whose
variants cannot change the outcome of a classification are held at their
first variant:

* tokens with zero or one pronunciation never vary;
* a token other than the last of its line whose pronunciations all have the
  same syllable count never varies, as only syllable totals matter there;
* the last token of a line always varies, since it decides rhymes.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .entry import Entry
from .stanza import Line, Stanza, Token


def token_range(token: Token, *, is_last: bool, prune: bool = True) -> int:
    """Return how many variants of ``token`` the enumeration visits."""

    count = token.variant_count
    if count <= 1:
        return 1
    if prune and not is_last:
        if len({entry.syllables for entry in token.entries}) == 1:
            return 1
    return count


def line_ranges(line: Line, prune: bool = True) -> List[int]:
    last = len(line.tokens) - 1
    return [
        token_range(token, is_last=position == last, prune=prune)
        for position, token in enumerate(line.tokens)
    ]


def count_interpretations(stanza: Stanza, prune: bool = True) -> int:
    """Return the number of views an InterpretationsIterator would produce."""

    return math.prod(
        math.prod(line_ranges(line, prune)) for line in stanza.lines
    )


@dataclass(frozen=True)
class LineView:
    """One line with a pronunciation selected for each of its tokens."""

    line: Line
    indices: Tuple[int, ...]

    @classmethod
    def default(cls, line: Line) -> "LineView":
        return cls(line, (0,) * len(line.tokens))

    @property
    def index(self) -> int:
        return self.line.index

    @property
    def tokens(self) -> Tuple[Token, ...]:
        return self.line.tokens

    def entry(self, position: int) -> Optional[Entry]:
        token = self.line.tokens[position]
        if not token.entries:
            return None
        return token.entries[self.indices[position]]

    def entries(self) -> List[Optional[Entry]]:
        return [self.entry(position) for position in range(len(self.line.tokens))]

    def last_entry(self) -> Optional[Entry]:
        if not self.line.tokens:
            return None
        return self.entry(len(self.line.tokens) - 1)

    @property
    def known_syllables(self) -> int:
        return sum(entry.syllables for entry in self.entries() if entry is not None)

    @property
    def unknown_count(self) -> int:
        return sum(1 for token in self.line.tokens if not token.is_known)

    def describe(self) -> str:
        """Render the line as dictionary keys, e.g. ``"the wind(2) blows"``."""

        words = []
        for position, token in enumerate(self.line.tokens):
            entry = self.entry(position)
            words.append(entry.dict_key if entry is not None else f"{token.text}(?)")
        return " ".join(words)


@dataclass(frozen=True)
class StanzaView:
    """A stanza with one pronunciation selected for every token."""

    stanza: Stanza
    lines: Tuple[LineView, ...]

    @classmethod
    def default(cls, stanza: Stanza) -> "StanzaView":
        return cls(stanza, tuple(LineView.default(line) for line in stanza.lines))

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[LineView]:
        return iter(self.lines)

    def __getitem__(self, index: int) -> LineView:
        return self.lines[index]

    @property
    def variant_indices(self) -> Tuple[Tuple[int, ...], ...]:
        return tuple(line.indices for line in self.lines)


class InterpretationsIterator:
    """Odometer over every interpretation of a stanza.

    The whole stanza is one counter whose digits are the advanceable tokens,
    read left to right and top to bottom. Advancing increments the rightmost
    digit (the last token of the last line) and carries into earlier tokens,
    then into earlier lines, so views that differ only in the first lines
    come last. The all-zero view is always produced first. Each produced
    view is an independent snapshot.
    """

    def __init__(self, stanza: Stanza, prune: bool = True) -> None:
        self.stanza = stanza
        self.prune = prune
        self._ranges: List[List[int]] = [line_ranges(line, prune) for line in stanza.lines]
        self._indices: List[List[int]] = [[0] * len(line.tokens) for line in stanza.lines]
        self._started = False
        self._exhausted = False

    @property
    def size(self) -> int:
        return math.prod(math.prod(ranges) for ranges in self._ranges)

    @property
    def unpruned_size(self) -> int:
        return count_interpretations(self.stanza, prune=False)

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    def current(self) -> StanzaView:
        return StanzaView(
            self.stanza,
            tuple(
                LineView(line, tuple(indices))
                for line, indices in zip(self.stanza.lines, self._indices)
            ),
        )

    def _advance_line(self, line_index: int) -> bool:
        """Advance one line; return whether it rolled over back to all zeros."""

        indices = self._indices[line_index]
        ranges = self._ranges[line_index]
        for position in range(len(indices) - 1, -1, -1):
            if ranges[position] <= 1:
                continue
            indices[position] += 1
            if indices[position] < ranges[position]:
                return False
            indices[position] = 0
        return True

    def advance(self) -> bool:
        """Move to the next interpretation; return ``True`` once exhausted."""

        if self._exhausted:
            return True
        for line_index in range(len(self._indices) - 1, -1, -1):
            if not self._advance_line(line_index):
                return False
        self._exhausted = True
        return True

    def __iter__(self) -> "InterpretationsIterator":
        return self

    def __next__(self) -> StanzaView:
        if not self._started:
            self._started = True
            return self.current()
        if self.advance():
            raise StopIteration
        return self.current()


def interpretations(stanza: Stanza, prune: bool = True) -> InterpretationsIterator:
    """Return a fresh iterator over the interpretations of ``stanza``."""

    return InterpretationsIterator(stanza, prune=prune)


__all__ = [
    "InterpretationsIterator",
    "LineView",
    "StanzaView",
    "count_interpretations",
    "interpretations",
    "line_ranges",
    "token_range",
]
