"""A client for the Datamuse ``/words`` API.

Datamuse powers RhymeZone. Its "query echo" option returns metadata about
the queried word itself, including a best-guess pronunciation when the word
is not in its dictionaries, which makes it a usable fallback for words the
local lexicon does not know. See https://www.datamuse.com/api/.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

import requests

from poet.config import DEFAULT_DATAMUSE_URL
from poet.core.entry import Entry
from poet.core.phonemes import PhonemeError
from poet.utils.observability import get_logger

MAX_RESULTS = 1000

_logger = get_logger(__name__).bind(component="datamuse")


class DatamuseError(RuntimeError):
    """The Datamuse API could not be reached or returned an unusable payload."""


class UrlBuilder:
    """Builds ``/words`` request URLs.

    Set at least one of :meth:`sounds_like` or :meth:`spelled_like`, then
    call :meth:`build`::

        UrlBuilder().spelled_like("flower").query_echo().build()
    """

    def __init__(self, base_url: str = DEFAULT_DATAMUSE_URL) -> None:
        self.base_url = base_url
        self._sounds_like: Optional[str] = None
        self._spelled_like: Optional[str] = None
        self._query_echo = False
        self._max: Optional[int] = None
        self._want_syllables = False
        # Pronunciations are what the fallback lookup is for.
        self._want_pronunciation = True

    def sounds_like(self, term: str) -> "UrlBuilder":
        """``sl=``: results pronounced similarly to ``term``."""

        self._sounds_like = term
        return self

    def spelled_like(self, term: str) -> "UrlBuilder":
        """``sp=``: results spelled like ``term``, which may use ``*`` and ``?`` wildcards."""

        self._spelled_like = term
        return self

    def query_echo(self) -> "UrlBuilder":
        """``qe=``: prepend a result describing the query term itself.

        Exactly one of ``sl`` or ``sp`` must be set. Also sets ``max`` to 1,
        which a later :meth:`max` call overrides.
        """

        self._query_echo = True
        self._max = 1
        return self

    def max(self, count: int) -> "UrlBuilder":
        if not 0 < count <= MAX_RESULTS:
            raise ValueError(f"max must be between 1 and {MAX_RESULTS}, got {count}")
        self._max = count
        return self

    def want_syllables(self) -> "UrlBuilder":
        """``md=s``: include a syllable count estimate."""

        self._want_syllables = True
        return self

    def params(self) -> List[tuple]:
        params: List[tuple] = []
        if self._sounds_like is not None:
            params.append(("sl", self._sounds_like))
        if self._spelled_like is not None:
            params.append(("sp", self._spelled_like))

        if self._query_echo:
            if (self._sounds_like is None) == (self._spelled_like is None):
                raise ValueError("query echo needs exactly one of sounds_like or spelled_like")
            params.append(("qe", "sp" if self._spelled_like is not None else "sl"))

        if self._max is not None:
            params.append(("max", str(self._max)))

        flags = ""
        if self._want_syllables:
            flags += "s"
        if self._want_pronunciation:
            flags += "r"
        if flags:
            params.append(("md", flags))
        return params

    def build(self) -> str:
        prepared = requests.Request("GET", self.base_url, params=self.params()).prepare()
        return str(prepared.url)


@dataclass
class WordsApiItem:
    """One element of a ``/words`` response, e.g.::

        {"word": "bustards", "score": 129367, "numSyllables": 2,
         "tags": ["pron:B AH1 S T ER0 D Z "]}
    """

    word: str
    score: int = 0
    num_syllables: Optional[int] = None
    tags: List[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, payload: Mapping[str, Any]) -> "WordsApiItem":
        try:
            word = str(payload["word"])
        except (KeyError, TypeError) as exc:
            raise DatamuseError(f"Result without a word: {payload!r}") from exc
        try:
            score = int(payload.get("score") or 0)
            num_syllables = payload.get("numSyllables")
            if num_syllables is not None:
                num_syllables = int(num_syllables)
            tags = [str(tag) for tag in payload.get("tags") or []]
        except (TypeError, ValueError) as exc:
            raise DatamuseError(f"Malformed result for {word!r}: {payload!r}") from exc
        return cls(word=word, score=score, num_syllables=num_syllables, tags=tags)

    def pronunciation(self) -> Optional[str]:
        for tag in self.tags:
            if tag.startswith("pron:"):
                return tag[len("pron:"):]
        return None

    def to_entry(self) -> Entry:
        """Convert to an Entry using the first ``pron:`` tag (no phonemes if missing)."""

        return Entry.from_parts(self.word, self.pronunciation() or "")


class DatamuseClient:
    """Synchronous Datamuse client backed by a :class:`requests.Session`."""

    def __init__(
        self,
        base_url: str = DEFAULT_DATAMUSE_URL,
        *,
        timeout: float = 5.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def url_builder(self) -> UrlBuilder:
        return UrlBuilder(self.base_url)

    def words(self, url: str) -> List[WordsApiItem]:
        """Issue a ``/words`` request and decode its items."""

        _logger.debug("Fetching", context={"url": url})
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as exc:
            raise DatamuseError(f"Request to {url} failed: {exc}") from exc
        except ValueError as exc:
            raise DatamuseError(f"Invalid JSON from {url}: {exc}") from exc

        if not isinstance(payload, list):
            raise DatamuseError(f"Unexpected payload from {url}: {payload!r}")
        return [WordsApiItem.from_json(item) for item in payload]

    def get_phonemes(self, term: str) -> Optional[Entry]:
        """Return Datamuse's pronunciation of ``term``, or ``None`` if it has none.

        Known words get a dictionary pronunciation; others get a best guess.
        """

        url = self.url_builder().spelled_like(term).query_echo().build()
        items = self.words(url)
        if not items:
            return None

        context: Dict[str, Any] = {"term": term, "url": url}
        if len(items) != 1:
            _logger.debug("Unexpected extra results", context={**context, "count": len(items)})
        item = items[0]
        if item.word != term:
            _logger.debug("Echoed a different word", context={**context, "word": item.word})
        if item.pronunciation() is None:
            return None

        try:
            return item.to_entry()
        except PhonemeError as exc:
            raise DatamuseError(f"Unusable pronunciation for {term!r}: {exc}") from exc


__all__ = ["DatamuseClient", "DatamuseError", "UrlBuilder", "WordsApiItem"]
