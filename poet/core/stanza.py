"""Split text into stanzas of dictionary-annotated tokens."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence, Tuple

from .entry import Entry
from .normalize import normalize_for_lookup


class Lexicon(Protocol):
    """Anything that answers word lookups, e.g. a Dictionary or a Shelf."""

    def lookup(self, word: str) -> Optional[Tuple[Entry, ...]]:
        ...


@dataclass(frozen=True)
class Token:
    """A normalized word with every pronunciation the dictionary knows."""

    text: str
    entries: Optional[Tuple[Entry, ...]] = None

    @property
    def is_known(self) -> bool:
        return bool(self.entries)

    @property
    def variant_count(self) -> int:
        return len(self.entries) if self.entries else 0


@dataclass(frozen=True)
class Line:
    raw_text: str
    line_number: int
    index: int
    tokens: Tuple[Token, ...]

    @property
    def unknown_words(self) -> List[str]:
        return [token.text for token in self.tokens if not token.is_known]


@dataclass(frozen=True)
class Stanza:
    lines: Tuple[Line, ...]
    title: Optional[str] = None

    def __len__(self) -> int:
        return len(self.lines)

    @property
    def first_line_number(self) -> int:
        return self.lines[0].line_number if self.lines else 0


def tokenize(text: str, dictionary: Lexicon) -> Tuple[Token, ...]:
    tokens = []
    for piece in text.split():
        normalized = normalize_for_lookup(piece)
        if not normalized:
            continue
        tokens.append(Token(normalized, dictionary.lookup(normalized)))
    return tuple(tokens)


def _make_stanza(
    block: Sequence[Tuple[int, str]],
    title: Optional[str],
    dictionary: Lexicon,
) -> Stanza:
    lines = tuple(
        Line(
            raw_text=text,
            line_number=number,
            index=index,
            tokens=tokenize(text, dictionary),
        )
        for index, (number, text) in enumerate(block)
    )
    return Stanza(lines=lines, title=title)


def build_stanzas(text: str, dictionary: Lexicon) -> List[Stanza]:
    """Split ``text`` into stanzas separated by blank lines.

    Lines starting with ``#`` are comments and ignored entirely. Blocks of a
    single line never become stanzas; the last one seen before a stanza is
    used as its title.
    """

    stanzas: List[Stanza] = []
    block: List[Tuple[int, str]] = []
    title: Optional[str] = None

    def flush() -> None:
        nonlocal title
        if len(block) >= 2:
            stanzas.append(_make_stanza(block, title, dictionary))
            title = None
        elif len(block) == 1:
            title = block[0][1].strip()
        block.clear()

    for number, raw_line in enumerate(text.splitlines(), start=1):
        stripped = raw_line.strip()
        if stripped.startswith("#"):
            continue
        if not stripped:
            flush()
            continue
        block.append((number, raw_line))
    flush()

    return stanzas


__all__ = ["Lexicon", "Line", "Stanza", "Token", "build_stanzas", "tokenize"]
