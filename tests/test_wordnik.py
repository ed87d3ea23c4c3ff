# tests/test_wordnik.py
"""Tests for the Wordnik client (no network: httpx.MockTransport)."""

import httpx
import pytest

from powerdict.core.credentials import CredentialStore
from powerdict.core.wordnik import MissingCredentialError, ProviderError, WordnikClient


DEFINITIONS = [
    {"partOfSpeech": "adjective", "text": "tending to form a group with others of the same kind"},
    {"partOfSpeech": "adjective", "text": "seeking and enjoying the company of others"},
    {"partOfSpeech": "adjective", "sourceDictionary": "wordnet"},
]

SYNONYMS = [
    {"relationshipType": "synonym", "words": ["sociable", "outgoing"]},
    {"relationshipType": "synonym", "words": ["social"]},
]


@pytest.fixture
def credentials(tmp_path):
    store = CredentialStore.open(tmp_path)
    store.set("wordnik", "secret-key")
    return store


def make_client(credentials, handler):
    return WordnikClient(credentials, client=httpx.Client(transport=httpx.MockTransport(handler)))


def test_fetch_definitions(credentials):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=DEFINITIONS)

    client = make_client(credentials, handler)

    assert client.fetch_definitions("Gregarious") == [
        "tending to form a group with others of the same kind",
        "seeking and enjoying the company of others",
    ]
    request = seen[0]
    assert request.url.path == "/v4/word.json/gregarious/definitions"
    assert request.url.params["api_key"] == "secret-key"
    assert request.url.params["sourceDictionaries"] == "wordnet"
    assert request.url.params["limit"] == "100"


def test_fetch_synonyms_joins_words(credentials):
    def handler(request):
        assert request.url.path.endswith("/relatedWords")
        assert request.url.params["relationshipTypes"] == "synonym"
        return httpx.Response(200, json=SYNONYMS)

    client = make_client(credentials, handler)

    assert client.fetch_synonyms("gregarious") == "sociable, outgoing, social"


def test_not_found_is_absent(credentials):
    client = make_client(credentials, lambda request: httpx.Response(404, json={"message": "Not found"}))

    assert client.fetch_definitions("qwxz") is None
    assert client.fetch_synonyms("qwxz") is None


@pytest.mark.parametrize(
    "status, message",
    [
        (400, "Bad request"),
        (401, "Invalid credentials"),
        (429, "Too many requests"),
        (500, "Unexpected response 500"),
    ],
)
def test_error_statuses(credentials, status, message):
    client = make_client(credentials, lambda request: httpx.Response(status))

    with pytest.raises(ProviderError, match=message):
        client.fetch_definitions("bank")


def test_unreadable_body(credentials):
    client = make_client(credentials, lambda request: httpx.Response(200, content=b"<html>"))

    with pytest.raises(ProviderError):
        client.fetch_definitions("bank")


def test_connection_error(credentials):
    def handler(request):
        raise httpx.ConnectError("no route to host", request=request)

    client = make_client(credentials, handler)

    with pytest.raises(ProviderError, match="connected to the internet"):
        client.fetch_definitions("bank")


def test_missing_key_skips_request(tmp_path):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json=[])

    client = make_client(CredentialStore.open(tmp_path), handler)

    with pytest.raises(MissingCredentialError):
        client.fetch_definitions("bank")
    assert calls == []


def test_word_is_url_encoded(credentials):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=[])

    make_client(credentials, handler).fetch_definitions("ad hoc/x")

    assert seen[0].url.raw_path.startswith(b"/v4/word.json/ad%20hoc%2Fx/definitions")
