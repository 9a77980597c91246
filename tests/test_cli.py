from __future__ import annotations

import pytest

from poet import __version__
from poet.app.cli import build_parser, main, settings_from_args
from poet.config import Settings

from conftest import HAIKU


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in (
        "POET_CMUDICT_PATH",
        "POET_USERDICT_PATH",
        "POET_LOG_LEVEL",
        "POET_MAX_INTERPRETATIONS",
        "POET_REMOTE_LOOKUPS",
        "POET_DATAMUSE_URL",
        "POET_DATAMUSE_TIMEOUT",
        "POET_SHARE",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def base_args(tmp_path, lexicon_file):
    return ["-d", str(lexicon_file), "-u", str(tmp_path / "missing-user.dict")]


def test_query_prints_pronunciations_and_rhymes(base_args, capsys):
    exit_code = main(base_args + ["-q", "Bayous"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "### bayous" in out
    assert "- fondues (score 2, 2 syllables)" in out


def test_query_for_unknown_word_fails(base_args, capsys):
    assert main(base_args + ["-q", "zzyzx"]) == 1
    assert "Not found: zzyzx" in capsys.readouterr().out


def test_input_file_is_analyzed(base_args, tmp_path, capsys):
    poem = tmp_path / "poem.txt"
    poem.write_text("Frog Pond\n\n" + HAIKU, encoding="utf-8")

    assert main(base_args + ["-i", str(poem)]) == 0

    out = capsys.readouterr().out
    assert "## Stanza 1 (lines 3-5): Frog Pond" in out
    assert "**Haiku**: yes" in out


def test_missing_input_file_fails(base_args, tmp_path, capsys):
    assert main(base_args + ["-i", str(tmp_path / "nope.txt")]) == 1
    assert "error:" in capsys.readouterr().err


def test_broken_dictionary_fails(tmp_path, capsys):
    broken = tmp_path / "broken.dict"
    broken.write_text("pond P AA1 N D\npond(0) P\n", encoding="utf-8")

    assert main(["-d", str(broken), "-u", str(tmp_path / "none.dict"), "-q", "pond"]) == 1
    assert "line 2" in capsys.readouterr().err


def test_modes_are_mutually_exclusive(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["-q", "pond", "-s"])
    assert excinfo.value.code == 2

    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 2


def test_version_flag(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])

    assert excinfo.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_arguments_override_environment_settings(tmp_path):
    args = build_parser().parse_args(
        ["-d", "words.dict", "--remote", "--max-interpretations", "7", "--log-level", "debug", "-q", "x"]
    )
    base = Settings.from_env({"POET_MAX_INTERPRETATIONS": "99", "POET_USERDICT_PATH": "mine.dict"})

    settings = settings_from_args(args, base)

    assert str(settings.cmudict_path) == "words.dict"
    assert str(settings.userdict_path) == "mine.dict"
    assert settings.remote_lookups is True
    assert settings.max_interpretations == 7
    assert settings.log_level == "debug"


def test_remote_flag_defaults_to_environment():
    args = build_parser().parse_args(["-q", "x"])
    base = Settings.from_env({"POET_REMOTE_LOOKUPS": "yes"})

    assert settings_from_args(args, base).remote_lookups is True
