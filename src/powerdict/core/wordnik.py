# src/powerdict/core/wordnik.py
"""
HTTP client for the Wordnik v4 word API.

Returns None when Wordnik has nothing for a word and raises ProviderError for
everything else that went wrong, with a message fit for the terminal.
"""

import logging
from urllib.parse import quote

import httpx

from powerdict.core.config import (
    DEFINITION_LIMIT,
    DEFINITION_SOURCE,
    SYNONYM_LIMIT,
    WORDNIK_BASE_URL,
    WORDNIK_TIMEOUT,
)
from powerdict.core.models import ProviderLabel


logger = logging.getLogger(__name__)


class ProviderError(Exception):
    pass


class MissingCredentialError(ProviderError):
    pass


STATUS_MESSAGES = {
    400: "Bad request. Please try again later",
    401: "Invalid credentials. Please check if the Wordnik API key is valid",
    429: "Too many requests. Please try again later",
}


class WordnikClient:
    def __init__(self, credentials, client: httpx.Client | None = None, base_url: str = WORDNIK_BASE_URL):
        self.credentials = credentials
        self.client = client if client is not None else httpx.Client(timeout=WORDNIK_TIMEOUT)
        self.base_url = base_url.rstrip("/")

    def close(self) -> None:
        self.client.close()

    def fetch_definitions(self, word: str) -> list[str] | None:
        params = {
            "limit": DEFINITION_LIMIT,
            "includeRelated": "false",
            "sourceDictionaries": DEFINITION_SOURCE,
            "useCanonical": "true",
            "includeTags": "false",
        }
        data = self._get(word, "definitions", params)
        if data is None:
            return None
        return [item["text"] for item in data if isinstance(item, dict) and item.get("text")]

    def fetch_synonyms(self, word: str) -> str | None:
        params = {
            "useCanonical": "true",
            "relationshipTypes": "synonym",
            "limitPerRelationshipType": SYNONYM_LIMIT,
        }
        data = self._get(word, "relatedWords", params)
        if data is None:
            return None
        words = []
        for group in data:
            if isinstance(group, dict):
                words.extend(group.get("words") or [])
        return ", ".join(words)

    def _api_key(self) -> str:
        key = self.credentials.get(ProviderLabel.WORDNIK)
        if not key:
            raise MissingCredentialError("Could not find API key associated with Wordnik")
        return key

    def _get(self, word: str, resource: str, params: dict) -> list | None:
        params = {**params, "api_key": self._api_key()}
        url = f"{self.base_url}/{quote(word.lower(), safe='')}/{resource}"

        try:
            r = self.client.get(url, params=params, headers={"Accept": "application/json"})
        except httpx.TransportError as e:
            logger.debug("request to %s failed: %r", resource, e)
            raise ProviderError("Please make sure you are connected to the internet") from e

        if r.status_code == 404:
            logger.debug("no %s for %r", resource, word)
            return None
        if r.status_code != 200:
            message = STATUS_MESSAGES.get(r.status_code, f"Unexpected response {r.status_code} from Wordnik")
            raise ProviderError(message)

        try:
            data = r.json()
        except ValueError as e:
            raise ProviderError("Wordnik returned an unreadable response") from e
        if not isinstance(data, list):
            raise ProviderError("Wordnik returned an unexpected response")
        return data
