"""A phonetic dictionary with exact lookups and rhyme searches.

Entries are kept twice: by word for lookups, and in a list sorted by the
reversed pronunciation so that words sharing an ending sit next to each
other. A rhyme search is then a binary search for the reversed last
syllable followed by a scan of the adjacent rows.
"""

from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from .entry import Entry
from .normalize import normalize_for_lookup
from .phonemes import similarity_score


@dataclass(frozen=True)
class SimilarWord:
    """A word sharing the last syllable with a query. Larger scores are more similar."""

    word: str
    syllable_count: int
    score: int

    def sort_key(self) -> Tuple[int, str]:
        # Descending by score, then ascending by word.
        return (-self.score, self.word)


def sort_similar(words: Iterable[SimilarWord]) -> List[SimilarWord]:
    return sorted(words, key=SimilarWord.sort_key)


class Dictionary:
    """A collection of entries indexed by word and by reversed pronunciation."""

    def __init__(self, entries: Iterable[Entry] = ()) -> None:
        # Word key -> entries ordered by variant.
        self._entries: Dict[str, List[Entry]] = {}
        # (similarity key, word key, insertion sequence), one per entry.
        # MUST REMAIN SORTED whenever a public method returns.
        self._rows: List[Tuple[str, str, int]] = []
        self._row_entries: Dict[int, Entry] = {}
        self._keys: List[str] = []
        self.insert_all(entries)

    # Insertion -------------------------------------------------------------
    def _insert_internal(self, entry: Entry) -> None:
        key = normalize_for_lookup(entry.word)
        variants = self._entries.setdefault(key, [])
        position = len(variants)
        while position and variants[position - 1].variant > entry.variant:
            position -= 1
        variants.insert(position, entry)

        sequence = len(self._row_entries)
        self._row_entries[sequence] = entry
        self._rows.append((entry.similarity_key(), key, sequence))

    def _sort_index(self) -> None:
        self._rows.sort()
        self._keys = [row[0] for row in self._rows]

    def insert(self, entry: Entry) -> None:
        """Insert a single entry."""

        self._insert_internal(entry)
        self._sort_index()

    def insert_all(self, entries: Iterable[Entry]) -> int:
        """Insert a batch of entries, sorting the rhyme index once at the end."""

        count = 0
        for entry in entries:
            self._insert_internal(entry)
            count += 1
        if count:
            self._sort_index()
        return count

    def insert_raw(self, line: str) -> Entry:
        """Insert a single ``cmudict.dict`` formatted line."""

        entry = Entry.parse(line)
        self.insert(entry)
        return entry

    def insert_all_raw(self, lines: Iterable[str]) -> int:
        return self.insert_all(Entry.parse(line) for line in lines)

    # Lookups ---------------------------------------------------------------
    def lookup(self, word: str) -> Optional[Tuple[Entry, ...]]:
        """Return every pronunciation of ``word`` by ascending variant, or ``None``."""

        variants = self._entries.get(word)
        if not variants:
            return None
        return tuple(variants)

    def lookup_variant(self, word: str, variant: int) -> Optional[Entry]:
        for entry in self._entries.get(word, ()):
            if entry.variant == variant:
                return entry
        return None

    def words(self) -> Iterator[str]:
        return iter(self._entries)

    def __contains__(self, word: object) -> bool:
        return word in self._entries

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Entry]:
        for variants in self._entries.values():
            yield from variants

    # Rhymes ----------------------------------------------------------------
    def similar_to(self, word: str, query_entries: Sequence[Entry]) -> Iterator[SimilarWord]:
        """Yield rows sharing the last syllable with any of ``query_entries``.

        Results are unsorted and include one item per matching pair of
        pronunciations. Rows for ``word`` itself are skipped.
        """

        for query in query_entries:
            prefix = query.last_syllable_key()
            if not prefix:
                continue
            index = bisect_left(self._keys, prefix)
            while index < len(self._rows):
                similarity_key, candidate_word, sequence = self._rows[index]
                index += 1
                if not similarity_key.startswith(prefix):
                    break
                if candidate_word == word:
                    continue
                candidate = self._row_entries[sequence]
                yield SimilarWord(
                    word=candidate_word,
                    syllable_count=candidate.syllables,
                    score=similarity_score(query.phonemes, candidate.phonemes),
                )

    def similar(self, word: str) -> List[SimilarWord]:
        """Return words that share the last syllable with ``word``, best first."""

        entries = self.lookup(word)
        if not entries:
            return []
        return sort_similar(self.similar_to(word, entries))


class Shelf:
    """An ordered stack of dictionaries queried as one.

    Earlier layers win lookups, so a user dictionary placed before the CMU
    dictionary overrides its pronunciations. Rhyme searches scan every layer
    but only keep a word's rows from the layer its lookups resolve to.
    """

    def __init__(self, layers: Iterable[Tuple[str, Dictionary]] = ()) -> None:
        self._layers: List[Tuple[str, Dictionary]] = []
        for name, dictionary in layers:
            self.add(name, dictionary)

    def add(self, name: str, dictionary: Dictionary) -> Dictionary:
        if any(existing == name for existing, _ in self._layers):
            raise ValueError(f"Shelf already has a {name!r} dictionary")
        self._layers.append((name, dictionary))
        return dictionary

    def get(self, name: str) -> Optional[Dictionary]:
        for existing, dictionary in self._layers:
            if existing == name:
                return dictionary
        return None

    @property
    def names(self) -> List[str]:
        return [name for name, _ in self._layers]

    def lookup(self, word: str) -> Optional[Tuple[Entry, ...]]:
        for _, dictionary in self._layers:
            entries = dictionary.lookup(word)
            if entries:
                return entries
        return None

    def lookup_variant(self, word: str, variant: int) -> Optional[Entry]:
        for _, dictionary in self._layers:
            entry = dictionary.lookup_variant(word, variant)
            if entry is not None:
                return entry
        return None

    def similar(self, word: str) -> List[SimilarWord]:
        entries = self.lookup(word)
        if not entries:
            return []
        results: List[SimilarWord] = []
        for _, dictionary in self._layers:
            for candidate in dictionary.similar_to(word, entries):
                # Words overridden by an earlier layer rhyme with that layer's pronunciations.
                if self._owner(candidate.word) is dictionary:
                    results.append(candidate)
        return sort_similar(results)

    def _owner(self, word: str) -> Optional[Dictionary]:
        for _, dictionary in self._layers:
            if dictionary.lookup(word):
                return dictionary
        return None

    def __contains__(self, word: object) -> bool:
        return any(word in dictionary for _, dictionary in self._layers)

    def __len__(self) -> int:
        return sum(len(dictionary) for _, dictionary in self._layers)


__all__ = ["Dictionary", "Shelf", "SimilarWord", "sort_similar"]
