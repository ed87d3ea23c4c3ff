# src/powerdict/core/credentials.py
"""
API key storage.

Maps a provider label to its secret. The whole record is rewritten on every
change. When a write fails the in-memory copy can no longer be trusted, so it
is reloaded from disk on the next access.
"""

import logging
from pathlib import Path

from powerdict.core.config import KEYS_FILE
from powerdict.core.errors import NotFoundError, StoreError
from powerdict.core.models import CredentialRecord, ProviderLabel
from powerdict.core.persistent import PersistentRecord
from powerdict.core.records import RecordStore


logger = logging.getLogger(__name__)

KEYS_NAME = Path(KEYS_FILE).stem


class CredentialStore(PersistentRecord[CredentialRecord]):
    def __init__(self, root: Path, name: str = KEYS_NAME):
        super().__init__(RecordStore(root, CredentialRecord), name)
        self._stale = False

    @classmethod
    def open(cls, root: Path, name: str = KEYS_NAME) -> "CredentialStore":
        store = cls(root, name)
        store.load()
        return store

    def get(self, label: ProviderLabel | str) -> str | None:
        self._refresh()
        return self.record.entries.get(ProviderLabel(label))

    def labels(self) -> list[ProviderLabel]:
        self._refresh()
        return list(self.record.entries)

    def set(self, label: ProviderLabel | str, secret: str) -> None:
        label = ProviderLabel(label)
        secret = secret.strip()
        if not secret:
            raise ValueError("Unable to add an empty API key")

        self._refresh()
        self.record.entries[label] = secret
        self._save_or_mark_stale()
        logger.info("stored key for %s", label.value)

    def remove(self, label: ProviderLabel | str) -> None:
        label = ProviderLabel(label)
        self._refresh()
        if label not in self.record.entries:
            raise NotFoundError(f"No {label.value} API key is stored", self.path)

        del self.record.entries[label]
        self._save_or_mark_stale()
        logger.info("removed key for %s", label.value)

    def _refresh(self) -> None:
        self._require_loaded()
        if self._stale:
            logger.debug("reloading %s after a failed save", self.path)
            self.record = self.store.load(self.name)
            self._stale = False

    def _save_or_mark_stale(self) -> None:
        try:
            self._persist()
        except StoreError:
            self._stale = True
            raise
