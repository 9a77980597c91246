from __future__ import annotations

from poet.core import (
    FormResult,
    LineError,
    Stanza,
    StanzaError,
    best_interpretation,
    build_stanzas,
    classify,
    interpretations,
    is_haiku,
    is_shakespearean_sonnet,
)

from conftest import HAIKU, SONNET_ENDINGS, sonnet_text


def _stanza(text, dictionary):
    stanzas = build_stanzas(text, dictionary)
    assert len(stanzas) == 1
    return stanzas[0]


def test_classic_haiku_is_a_haiku(poem_dictionary):
    stanza = _stanza(HAIKU, poem_dictionary)
    best = best_interpretation(stanza, is_haiku)

    assert best.result.ok
    assert best.examined == 1
    assert best.size == 2
    assert [line.known_syllables for line in best.view] == [5, 7, 5]


def test_haiku_needs_the_right_variant(poem_dictionary):
    text = "The fire in the pond\nA frog jumps into the pond\nSplash! Silence again.\n"
    stanza = _stanza(text, poem_dictionary)

    first = next(interpretations(stanza))
    assert is_haiku(first).errors == (LineError(0, "Expected 5 syllables but found 6."),)

    best = best_interpretation(stanza, is_haiku)
    assert best.result.ok
    assert best.size == 4
    assert best.examined == 3
    assert best.view[0].indices == (0, 1, 0, 0, 0)
    assert best.view[0].describe() == "the fire(2) in the pond"


def test_limit_caps_the_search(poem_dictionary):
    text = "The fire in the pond\nA frog jumps into the pond\nSplash! Silence again.\n"
    stanza = _stanza(text, poem_dictionary)

    best = best_interpretation(stanza, is_haiku, limit=2)
    assert not best.result.ok
    assert best.examined == 2
    assert best.truncated

    assert best_interpretation(stanza, is_haiku, limit=0).examined == 1


def test_unknown_words_fill_missing_syllables(poem_dictionary):
    lenient = _stanza("An old zzyzx pond\nA frog jumps into the pond\nSplash! Silence again.\n", poem_dictionary)
    assert is_haiku(next(interpretations(lenient))).ok

    overfull = _stanza(
        "An old silent pond zzyzx\nA frog jumps into the pond\nSplash! Silence again.\n",
        poem_dictionary,
    )
    result = is_haiku(next(interpretations(overfull)))
    assert result.errors == (
        LineError(0, "Expected 5 syllables but found 5 plus 1 unknown word(s)."),
    )


def test_wrong_line_count_short_circuits(poem_dictionary):
    stanza = _stanza(sonnet_text(), poem_dictionary)
    result = is_haiku(next(interpretations(stanza)))

    assert result.errors == (StanzaError("Expected 3 lines but found 14."),)

    short = _stanza(HAIKU, poem_dictionary)
    result = is_shakespearean_sonnet(next(interpretations(short)))
    assert result.errors == (StanzaError("Expected 14 lines but found 3."),)


def test_sonnet_is_a_shakespearean_sonnet(poem_dictionary):
    stanza = _stanza(sonnet_text(), poem_dictionary)
    best = best_interpretation(stanza, is_shakespearean_sonnet)

    assert best.result.ok
    assert best.size == 1
    assert all(line.known_syllables == 10 for line in best.view)


def test_broken_rhyme_reports_the_second_line(poem_dictionary):
    endings = list(SONNET_ENDINGS)
    endings[2] = "car"
    stanza = _stanza(sonnet_text(endings), poem_dictionary)

    result = is_shakespearean_sonnet(next(interpretations(stanza)))

    assert result.errors == (LineError(2, "Does not rhyme with line 1 (car / day)."),)
    assert str(result.errors[0]) == "line 3: Does not rhyme with line 1 (car / day)."
    assert result.line_errors(2) == list(result.errors)
    assert result.line_errors(0) == []


def test_rhyme_with_unknown_word_is_accepted(poem_dictionary):
    endings = list(SONNET_ENDINGS)
    endings[13] = "zzyzx"
    stanza = _stanza(sonnet_text(endings), poem_dictionary)

    assert is_shakespearean_sonnet(next(interpretations(stanza))).ok


def test_best_interpretation_picks_rhyming_variant(poem_dictionary):
    endings = list(SONNET_ENDINGS)
    endings[12] = "read"
    stanza = _stanza(sonnet_text(endings), poem_dictionary)

    first = is_shakespearean_sonnet(next(interpretations(stanza)))
    assert first.errors == (LineError(13, "Does not rhyme with line 13 (red / read)."),)

    best = best_interpretation(stanza, is_shakespearean_sonnet)
    assert best.result.ok
    assert best.examined == 2
    assert best.view[12].last_entry().dict_key == "read(2)"


def test_errors_sort_stanza_first_then_by_line():
    result = FormResult.from_errors(
        [
            LineError(3, "b"),
            StanzaError("z"),
            LineError(1, "b"),
            LineError(1, "a"),
            StanzaError("y"),
        ]
    )

    assert result.errors == (
        StanzaError("y"),
        StanzaError("z"),
        LineError(1, "a"),
        LineError(1, "b"),
        LineError(3, "b"),
    )
    assert not result
    assert FormResult.from_errors([])


def test_classify_runs_every_form(poem_dictionary):
    results = classify(_stanza(HAIKU, poem_dictionary))

    assert set(results) == {"haiku", "shakespearean sonnet"}
    assert results["haiku"].result.ok
    assert not results["shakespearean sonnet"].result.ok


def test_best_interpretation_of_empty_stanza():
    best = best_interpretation(Stanza(lines=()), is_haiku)

    assert best.examined == 1
    assert best.size == 1
    assert best.result.errors == (StanzaError("Expected 3 lines but found 0."),)
    assert not best.truncated
