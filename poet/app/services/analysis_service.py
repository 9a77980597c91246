"""Word lookups and stanza analysis on top of a dictionary shelf."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Optional, Tuple

from poet.clients.datamuse import DatamuseClient, DatamuseError
from poet.config import Settings
from poet.core import (
    BestInterpretation,
    CMUDictLoader,
    Dictionary,
    Entry,
    Shelf,
    SimilarWord,
    Stanza,
    build_stanzas,
    classify,
    count_interpretations,
    normalize_for_lookup,
)
from poet.utils.observability import (
    add_span_attributes,
    create_counter,
    create_histogram,
    get_logger,
    record_exception,
    start_span,
)

USER_LAYER = "user"
CMUDICT_LAYER = "cmudict"
REMOTE_LAYER = "remote"


@dataclass
class LookupResult:
    term: str
    normalized: str
    entries: Tuple[Entry, ...] = ()
    similar: List[SimilarWord] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return bool(self.entries)


@dataclass
class StanzaReport:
    stanza: Stanza
    forms: Dict[str, BestInterpretation]
    interpretations: int
    unpruned_interpretations: int

    @property
    def unknown_words(self) -> List[str]:
        words: List[str] = []
        for line in self.stanza.lines:
            for word in line.unknown_words:
                if word not in words:
                    words.append(word)
        return words

    @property
    def matched_forms(self) -> List[str]:
        return [name for name, best in self.forms.items() if best.result.ok]


def build_shelf(settings: Optional[Settings] = None) -> Shelf:
    """Assemble the user, CMU and remote-cache dictionaries described by ``settings``.

    The user dictionary is optional and loaded leniently; the CMU dictionary
    comes from ``settings.cmudict_path`` or the bundled data and must parse.
    """

    settings = settings or Settings.from_env()
    shelf = Shelf()

    user = Dictionary()
    if settings.userdict_path is not None:
        CMUDictLoader(settings.userdict_path, strict=False).load(user)
    shelf.add(USER_LAYER, user)

    shelf.add(CMUDICT_LAYER, CMUDictLoader(settings.cmudict_path, strict=True).load())
    shelf.add(REMOTE_LAYER, Dictionary())
    return shelf


class AnalysisService:
    """Answer lookups and classify the stanzas of submitted text."""

    def __init__(
        self,
        shelf: Shelf,
        *,
        client: Optional[DatamuseClient] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.shelf = shelf
        self.settings = settings or Settings()
        self.client = client
        if self.shelf.get(REMOTE_LAYER) is None:
            self.shelf.add(REMOTE_LAYER, Dictionary())

        self._logger = get_logger(__name__).bind(component="analysis_service")
        self._metric_requests = create_counter(
            "poet_analysis_requests_total",
            "Analysis requests received.",
        )
        self._metric_failures = create_counter(
            "poet_analysis_request_failures_total",
            "Analysis requests that raised an exception.",
        )
        self._metric_duration = create_histogram(
            "poet_analysis_request_seconds",
            "Latency of analysis requests.",
        )
        self._metric_remote = create_counter(
            "poet_remote_lookups_total",
            "Remote pronunciation lookups by outcome.",
            label_names=("outcome",),
        )

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "AnalysisService":
        settings = settings or Settings.from_env()
        client = None
        if settings.remote_lookups:
            client = DatamuseClient(settings.datamuse_url, timeout=settings.datamuse_timeout)
        return cls(build_shelf(settings), client=client, settings=settings)

    # Remote fallback -------------------------------------------------------
    def fetch_remote(self, words: Iterable[str]) -> int:
        """Look up unknown ``words`` remotely and cache what comes back.

        Failures are logged and the word stays unknown. Returns the number of
        entries added.
        """

        if self.client is None:
            return 0
        remote = self.shelf.get(REMOTE_LAYER)
        added = 0
        for word in words:
            if word in self.shelf:
                continue
            try:
                entry = self.client.get_phonemes(word)
            except DatamuseError as exc:
                self._metric_remote.labels(outcome="error").inc()
                self._logger.warning(
                    "Remote pronunciation lookup failed",
                    context={"word": word, "error": str(exc)},
                )
                continue
            if entry is None or not entry.phonemes:
                self._metric_remote.labels(outcome="missing").inc()
                continue
            remote.insert(replace(entry, word=word, variant=1))
            self._metric_remote.labels(outcome="found").inc()
            added += 1
        return added

    # Public API ------------------------------------------------------------
    def lookup(self, term: str) -> LookupResult:
        normalized = normalize_for_lookup(term.strip())
        if normalized and normalized not in self.shelf:
            self.fetch_remote([normalized])
        entries = self.shelf.lookup(normalized) if normalized else None
        if not entries:
            return LookupResult(term=term, normalized=normalized)
        return LookupResult(
            term=term,
            normalized=normalized,
            entries=entries,
            similar=self.shelf.similar(normalized),
        )

    def analyze(self, text: str) -> List[StanzaReport]:
        """Split ``text`` into stanzas and find the best fit for every verse form."""

        self._metric_requests.inc()
        with start_span("poet.analyze", {"text.length": len(text)}) as span:
            try:
                with self._metric_duration.time():
                    reports = self._analyze(text)
            except Exception as exc:
                self._metric_failures.inc()
                record_exception(span, exc)
                self._logger.error("Analysis failed", context={"error": str(exc)})
                raise
            add_span_attributes(span, {"stanzas": len(reports)})
        return reports

    def _analyze(self, text: str) -> List[StanzaReport]:
        stanzas = build_stanzas(text, self.shelf)
        if self.client is not None:
            unknown = {word for stanza in stanzas for line in stanza.lines for word in line.unknown_words}
            if unknown and self.fetch_remote(sorted(unknown)):
                stanzas = build_stanzas(text, self.shelf)

        limit = self.settings.max_interpretations
        reports = []
        for stanza in stanzas:
            reports.append(
                StanzaReport(
                    stanza=stanza,
                    forms=classify(stanza, limit=limit),
                    interpretations=count_interpretations(stanza),
                    unpruned_interpretations=count_interpretations(stanza, prune=False),
                )
            )

        self._logger.info(
            "Analysis complete",
            context={
                "stanzas": len(reports),
                "matched": sum(1 for report in reports if report.matched_forms),
            },
        )
        return reports


__all__ = [
    "AnalysisService",
    "LookupResult",
    "StanzaReport",
    "build_shelf",
]
