"""Load ``cmudict.dict`` formatted lexicons into a :class:`Dictionary`."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional

import pronouncing

from poet.utils.observability import create_counter, get_logger

from .dictionary import Dictionary
from .entry import Entry, LexiconParseError

DEFAULT_CMUDICT_FILENAME = "cmudict.dict"

_logger = get_logger(__name__).bind(component="lexicon_loader")

_ENTRIES_LOADED = create_counter(
    "poet_lexicon_entries_loaded",
    "Lexicon entries inserted into a dictionary.",
    ["source"],
)
_LINES_REJECTED = create_counter(
    "poet_lexicon_lines_rejected",
    "Lexicon lines skipped because they could not be parsed.",
    ["source"],
)


def _default_path() -> Optional[Path]:
    module_path = Path(__file__).resolve()
    candidates = [
        module_path.with_name(DEFAULT_CMUDICT_FILENAME),
        module_path.parents[1] / DEFAULT_CMUDICT_FILENAME,
        module_path.parents[2] / DEFAULT_CMUDICT_FILENAME,
    ]
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return None


def bundled_lines() -> Iterator[str]:
    """Yield the CMU dictionary shipped with :mod:`pronouncing` as lexicon lines.

    ``pronouncing`` drops the ``(N)`` suffixes, so variants are renumbered in
    order of appearance.
    """

    pronouncing.init_cmu()
    seen: Dict[str, int] = {}
    for word, phones in pronouncing.pronunciations:
        variant = seen.get(word, 0) + 1
        seen[word] = variant
        key = word if variant == 1 else f"{word}({variant})"
        yield f"{key} {phones}"


class CMUDictLoader:
    """Reads a lexicon file, or the bundled CMU data when no file is available.

    In strict mode the first malformed line raises a
    :class:`LexiconParseError` carrying its line number and nothing is
    inserted. In lenient mode malformed lines are logged and skipped.
    """

    def __init__(self, dict_path: Optional[Path | str] = None, *, strict: bool = True) -> None:
        self.dict_path: Optional[Path] = Path(dict_path) if dict_path is not None else _default_path()
        self.strict = strict
        self._dictionary: Optional[Dictionary] = None

    @property
    def source(self) -> str:
        return str(self.dict_path) if self.dict_path is not None else "bundled"

    def _parse_lines(self, lines: Iterable[str], source: str) -> List[Entry]:
        entries: List[Entry] = []
        rejected = 0
        for number, raw_line in enumerate(lines, start=1):
            line = raw_line.strip()
            if not line or line.startswith(";;;"):
                continue
            try:
                entries.append(Entry.parse(line))
            except LexiconParseError as exc:
                if self.strict:
                    raise exc.at_line(number) from None
                rejected += 1
                _logger.warning(
                    "Skipping malformed lexicon line",
                    context={"source": source, "line_number": number, "error": exc.reason},
                )
        if rejected:
            _LINES_REJECTED.labels(source=source).inc(rejected)
        return entries

    def iter_entries(self) -> Iterator[Entry]:
        """Yield the parsed entries of the configured source."""

        if self.dict_path is None:
            yield from self._parse_lines(bundled_lines(), "bundled")
            return
        with self.dict_path.open("r", encoding="utf-8") as handle:
            yield from self._parse_lines(handle, str(self.dict_path))

    def load(self, dictionary: Optional[Dictionary] = None) -> Dictionary:
        """Insert every entry of the source into ``dictionary`` (a new one by default)."""

        target = dictionary if dictionary is not None else Dictionary()
        if self.dict_path is not None and not self.dict_path.is_file():
            if self.strict:
                raise FileNotFoundError(f"Lexicon file not found: {self.dict_path}")
            _logger.info(
                "Lexicon file missing, continuing without it",
                context={"source": self.source},
            )
            return target

        entries = list(self.iter_entries())
        count = target.insert_all(entries)
        _ENTRIES_LOADED.labels(source=self.source).inc(count)
        _logger.info(
            "Lexicon loaded",
            context={"source": self.source, "entries": count, "total": len(target)},
        )
        return target

    def load_bundled(self, dictionary: Optional[Dictionary] = None) -> Dictionary:
        target = dictionary if dictionary is not None else Dictionary()
        entries = self._parse_lines(bundled_lines(), "bundled")
        count = target.insert_all(entries)
        _ENTRIES_LOADED.labels(source="bundled").inc(count)
        _logger.info("Lexicon loaded", context={"source": "bundled", "entries": count})
        return target

    @property
    def dictionary(self) -> Dictionary:
        """The loaded dictionary, read on first access."""

        if self._dictionary is None:
            self._dictionary = self.load()
        return self._dictionary


__all__ = ["CMUDictLoader", "DEFAULT_CMUDICT_FILENAME", "bundled_lines"]
