"""Turn words as they appear in poems into dictionary lookup keys."""

from __future__ import annotations

_STRIPPED_CHARACTERS = str.maketrans("", "", "!,?:;\"“”")


def _has_inner_periods(term: str) -> bool:
    found_period = False
    for char in term:
        if char == ".":
            found_period = True
        elif found_period and char.isalnum():
            return True
    return False


def normalize_for_lookup(term: str) -> str:
    """Normalize ``term`` for an exact-match dictionary lookup.

    Dictionary terms are lower-case and only keep essential punctuation, as
    in ``let's`` or ``a.m.``. The term is lower-cased, punctuation the
    dictionary never uses is removed, curly apostrophes become ASCII ones,
    and trailing periods and hyphens are dropped. Periods are kept when one
    of them is followed by a letter or digit, so ``"A.M."`` stays ``"a.m."``
    while ``"found..."`` becomes ``"found"``.

    >>> normalize_for_lookup("Hello!")
    'hello'
    >>> normalize_for_lookup("pen--")
    'pen'
    """

    result = term.lower().translate(_STRIPPED_CHARACTERS).replace("’", "'")
    if _has_inner_periods(result):
        return result.rstrip("-")
    return result.rstrip(".-")


__all__ = ["normalize_for_lookup"]
