"""Phonetic dictionary and stanza analysis for poet."""

from .cmudict_loader import CMUDictLoader, bundled_lines
from .dictionary import Dictionary, Shelf, SimilarWord
from .entry import Entry, LexiconParseError, parse_dict_key
from .forms import (
    FORMS,
    BestInterpretation,
    ClassifyError,
    FormResult,
    LineError,
    StanzaError,
    best_interpretation,
    classify,
    is_haiku,
    is_shakespearean_sonnet,
)
from .interpretations import (
    InterpretationsIterator,
    LineView,
    StanzaView,
    count_interpretations,
    interpretations,
)
from .normalize import normalize_for_lookup
from .phonemes import PhonemeError, PhonemeSequence, similarity_score
from .stanza import Line, Stanza, Token, build_stanzas

__all__ = [
    "BestInterpretation",
    "CMUDictLoader",
    "ClassifyError",
    "Dictionary",
    "Entry",
    "FORMS",
    "FormResult",
    "InterpretationsIterator",
    "LexiconParseError",
    "Line",
    "LineError",
    "LineView",
    "PhonemeError",
    "PhonemeSequence",
    "Shelf",
    "SimilarWord",
    "Stanza",
    "StanzaError",
    "StanzaView",
    "Token",
    "best_interpretation",
    "build_stanzas",
    "bundled_lines",
    "classify",
    "count_interpretations",
    "interpretations",
    "is_haiku",
    "is_shakespearean_sonnet",
    "normalize_for_lookup",
    "parse_dict_key",
    "similarity_score",
]
