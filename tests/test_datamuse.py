from __future__ import annotations

import pytest
import requests

from poet.clients import DatamuseClient, DatamuseError, UrlBuilder, WordsApiItem


class FakeResponse:
    def __init__(self, payload=None, status_code: int = 200, invalid_json: bool = False) -> None:
        self._payload = payload
        self.status_code = status_code
        self._invalid_json = invalid_json

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self._invalid_json:
            raise ValueError("Expecting value")
        return self._payload


class FakeSession:
    def __init__(self, response=None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.calls: list[tuple[str, float]] = []

    def get(self, url: str, timeout: float):
        self.calls.append((url, timeout))
        if self.error is not None:
            raise self.error
        return self.response


def test_url_builder_escapes_query_words():
    assert (
        UrlBuilder().spelled_like("plz&escape me").build()
        == "https://api.datamuse.com/words?sp=plz%26escape+me&md=r"
    )
    assert (
        UrlBuilder().sounds_like("escape/me&too?").build()
        == "https://api.datamuse.com/words?sl=escape%2Fme%26too%3F&md=r"
    )


def test_url_builder_options():
    url = UrlBuilder().sounds_like("a").spelled_like("b").max(42).want_syllables().build()

    assert url == "https://api.datamuse.com/words?sl=a&sp=b&max=42&md=sr"


def test_url_builder_query_echo():
    assert (
        UrlBuilder().sounds_like("flower").query_echo().build()
        == "https://api.datamuse.com/words?sl=flower&qe=sl&max=1&md=r"
    )
    assert (
        UrlBuilder().spelled_like("flower").query_echo().max(42).build()
        == "https://api.datamuse.com/words?sp=flower&qe=sp&max=42&md=r"
    )


def test_url_builder_rejects_invalid_options():
    with pytest.raises(ValueError):
        UrlBuilder().max(0)
    with pytest.raises(ValueError):
        UrlBuilder().max(1001)
    with pytest.raises(ValueError):
        UrlBuilder().query_echo().build()
    with pytest.raises(ValueError):
        UrlBuilder().sounds_like("a").spelled_like("b").query_echo().build()


def test_words_api_item_to_entry():
    item = WordsApiItem.from_json(
        {"word": "flowers", "score": 10, "numSyllables": 2, "tags": ["query", "pron:F L AW1 ER0 Z "]}
    )
    entry = item.to_entry()

    assert item.num_syllables == 2
    assert entry.word == "flowers"
    assert entry.variant == 1
    assert entry.phonemes.phonemes == ("F", "L", "AW1", "ER0", "Z")
    assert entry.syllables == 2


def test_get_phonemes_returns_echoed_pronunciation():
    session = FakeSession(FakeResponse([{"word": "zzyzx", "score": 1, "tags": ["pron:Z IH1 Z IH0 K S "]}]))
    client = DatamuseClient(timeout=2.5, session=session)

    entry = client.get_phonemes("zzyzx")

    assert entry is not None
    assert entry.syllables == 2
    assert session.calls == [("https://api.datamuse.com/words?sp=zzyzx&qe=sp&max=1&md=r", 2.5)]


def test_get_phonemes_without_pronunciation_returns_none():
    client = DatamuseClient(session=FakeSession(FakeResponse([{"word": "zzyzx", "tags": ["query"]}])))
    assert client.get_phonemes("zzyzx") is None

    client = DatamuseClient(session=FakeSession(FakeResponse([])))
    assert client.get_phonemes("zzyzx") is None


@pytest.mark.parametrize(
    "session",
    [
        FakeSession(error=requests.ConnectionError("offline")),
        FakeSession(FakeResponse(status_code=503)),
        FakeSession(FakeResponse(invalid_json=True)),
        FakeSession(FakeResponse({"word": "not a list"})),
        FakeSession(FakeResponse([{"score": 3}])),
        FakeSession(FakeResponse([{"word": "zzyzx", "tags": ["pron:z ih1"]}])),
        FakeSession(FakeResponse([{"word": "zzyzx", "score": [1], "tags": ["pron:Z IH1 Z "]}])),
        FakeSession(FakeResponse([{"word": "zzyzx", "score": "high", "tags": ["pron:Z IH1 Z "]}])),
        FakeSession(FakeResponse([{"word": "zzyzx", "numSyllables": "two", "tags": ["pron:Z IH1 Z "]}])),
        FakeSession(FakeResponse([{"word": "zzyzx", "numSyllables": {}, "tags": ["pron:Z IH1 Z "]}])),
    ],
)
def test_client_failures_raise_datamuse_error(session):
    client = DatamuseClient(session=session)

    with pytest.raises(DatamuseError):
        client.get_phonemes("zzyzx")
