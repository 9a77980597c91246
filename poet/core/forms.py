"""Validate stanza interpretations against verse forms.

Classifiers look at one :class:`StanzaView` at a time and report every
problem they find as a :class:`ClassifyError`. Callers enumerate the
interpretations of a stanza and keep the one with the fewest errors, see
:func:`best_interpretation`.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from .interpretations import StanzaView, interpretations
from .stanza import Stanza

HAIKU_SYLLABLES: Tuple[int, ...] = (5, 7, 5)
SONNET_SYLLABLES: Tuple[int, ...] = (10,) * 14
SHAKESPEAREAN_RHYME_PAIRS: Tuple[Tuple[int, int], ...] = (
    (0, 2),
    (1, 3),
    (4, 6),
    (5, 7),
    (8, 10),
    (9, 11),
    (12, 13),
)


@total_ordering
class ClassifyError:
    """Base class for classification errors.

    Stanza-wide errors sort before line errors; line errors sort by line.
    """

    message: str

    def sort_key(self) -> Tuple[int, int, str]:
        raise NotImplementedError

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ClassifyError):
            return NotImplemented
        return self.sort_key() < other.sort_key()


@dataclass(frozen=True)
class StanzaError(ClassifyError):
    message: str

    def sort_key(self) -> Tuple[int, int, str]:
        return (0, 0, self.message)

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class LineError(ClassifyError):
    line_index: int
    message: str

    def sort_key(self) -> Tuple[int, int, str]:
        return (1, self.line_index, self.message)

    def __str__(self) -> str:
        return f"line {self.line_index + 1}: {self.message}"


@dataclass(frozen=True)
class FormResult:
    """Outcome of one classifier on one view; truthy when there are no errors."""

    errors: Tuple[ClassifyError, ...] = ()

    @classmethod
    def from_errors(cls, errors: Iterable[ClassifyError]) -> "FormResult":
        return cls(tuple(sorted(errors)))

    @property
    def ok(self) -> bool:
        return not self.errors

    def __bool__(self) -> bool:
        return self.ok

    def line_errors(self, line_index: int) -> List[ClassifyError]:
        return [
            error
            for error in self.errors
            if isinstance(error, LineError) and error.line_index == line_index
        ]


FormCheck = Callable[[StanzaView], FormResult]


def check_line_count(view: StanzaView, expected: int) -> Optional[StanzaError]:
    if len(view) == expected:
        return None
    return StanzaError(f"Expected {expected} lines but found {len(view)}.")


def check_syllables(view: StanzaView, expected: Sequence[int]) -> List[LineError]:
    """Compare each line's syllable count with ``expected``.

    Unknown words are assumed to fill whatever is missing, so a line with
    unknown words only fails once its known words reach the target.
    """

    errors: List[LineError] = []
    for line_view, target in zip(view.lines, expected):
        known = line_view.known_syllables
        unknown = line_view.unknown_count
        if unknown == 0:
            if known != target:
                errors.append(
                    LineError(
                        line_view.index,
                        f"Expected {target} syllables but found {known}.",
                    )
                )
        elif known >= target:
            errors.append(
                LineError(
                    line_view.index,
                    f"Expected {target} syllables but found {known} "
                    f"plus {unknown} unknown word(s).",
                )
            )
    return errors


def check_rhymes(view: StanzaView, pairs: Iterable[Tuple[int, int]]) -> List[LineError]:
    """Check that the last words of each pair of lines rhyme.

    A pair with an unknown last word is accepted.
    """

    errors: List[LineError] = []
    for first, second in pairs:
        first_entry = view[first].last_entry()
        second_entry = view[second].last_entry()
        if first_entry is None or second_entry is None:
            continue
        if not first_entry.rhymes_with(second_entry):
            errors.append(
                LineError(
                    view[second].index,
                    f"Does not rhyme with line {first + 1} "
                    f"({second_entry.dict_key} / {first_entry.dict_key}).",
                )
            )
    return errors


def is_haiku(view: StanzaView) -> FormResult:
    """Three lines of five, seven and five syllables."""

    count_error = check_line_count(view, len(HAIKU_SYLLABLES))
    if count_error is not None:
        return FormResult.from_errors([count_error])
    return FormResult.from_errors(check_syllables(view, HAIKU_SYLLABLES))


def is_shakespearean_sonnet(view: StanzaView) -> FormResult:
    """Fourteen ten-syllable lines rhyming ABAB CDCD EFEF GG."""

    count_error = check_line_count(view, len(SONNET_SYLLABLES))
    if count_error is not None:
        return FormResult.from_errors([count_error])
    errors: List[ClassifyError] = []
    errors.extend(check_syllables(view, SONNET_SYLLABLES))
    errors.extend(check_rhymes(view, SHAKESPEAREAN_RHYME_PAIRS))
    return FormResult.from_errors(errors)


FORMS: Dict[str, FormCheck] = {
    "haiku": is_haiku,
    "shakespearean sonnet": is_shakespearean_sonnet,
}


@dataclass(frozen=True)
class BestInterpretation:
    view: StanzaView
    result: FormResult
    examined: int
    size: int

    @property
    def truncated(self) -> bool:
        return not self.result.ok and self.examined < self.size


def best_interpretation(
    stanza: Stanza,
    check: FormCheck,
    *,
    prune: bool = True,
    limit: Optional[int] = None,
) -> BestInterpretation:
    """Return the interpretation of ``stanza`` with the fewest errors.

    The first interpretation wins ties and the search stops at the first
    one without errors. ``limit`` caps how many interpretations are checked;
    at least one always is.
    """

    iterator = interpretations(stanza, prune=prune)
    cap = None if limit is None else max(1, int(limit))

    # The all-zero view always exists, even for a stanza without lines.
    best_view = next(iterator)
    best_result = check(best_view)
    examined = 1

    if not best_result.ok:
        for view in iterator:
            if cap is not None and examined >= cap:
                break
            examined += 1
            result = check(view)
            if len(result.errors) < len(best_result.errors):
                best_view, best_result = view, result
            if result.ok:
                break

    return BestInterpretation(
        view=best_view,
        result=best_result,
        examined=examined,
        size=iterator.size,
    )


def classify(
    stanza: Stanza,
    forms: Optional[Dict[str, FormCheck]] = None,
    *,
    prune: bool = True,
    limit: Optional[int] = None,
) -> Dict[str, BestInterpretation]:
    """Run every classifier in ``forms`` (default :data:`FORMS`) on ``stanza``."""

    selected = FORMS if forms is None else forms
    return {
        name: best_interpretation(stanza, check, prune=prune, limit=limit)
        for name, check in selected.items()
    }


__all__ = [
    "BestInterpretation",
    "ClassifyError",
    "FORMS",
    "FormCheck",
    "FormResult",
    "HAIKU_SYLLABLES",
    "LineError",
    "SHAKESPEAREAN_RHYME_PAIRS",
    "SONNET_SYLLABLES",
    "StanzaError",
    "best_interpretation",
    "check_line_count",
    "check_rhymes",
    "check_syllables",
    "classify",
    "is_haiku",
    "is_shakespearean_sonnet",
]
