# src/powerdict/core/index.py
"""
Search history: the word -> entry id index.

The index owns the word -> id relation and the entry store owns the entry
files. Every operation touching both writes the entry side first, so an
interruption can leave an orphan entry file but never an index entry that
points at nothing.
"""

import logging
import random
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from powerdict.core.config import HISTORY_DIR, INDEX_FILE
from powerdict.core.entries import EntryStore
from powerdict.core.errors import CorruptedError, NotFoundError, StoreError
from powerdict.core.ids import IdGenerator
from powerdict.core.models import CacheEntry, IndexRecord
from powerdict.core.persistent import PersistentRecord, StoreState
from powerdict.core.records import RecordStore
from powerdict.core.wordnik import ProviderError


logger = logging.getLogger(__name__)

INDEX_NAME = Path(INDEX_FILE).stem


class DefinitionProvider(Protocol):
    """Anything that can look a word up remotely."""

    def fetch_definitions(self, word: str) -> list[str] | None:
        ...

    def fetch_synonyms(self, word: str) -> str | None:
        ...


@dataclass
class SearchResult:
    entry: CacheEntry
    cached: bool
    saved: bool = True


@dataclass
class RemovalSummary:
    """Outcome of VocabIndex.remove_all.

    Removal is best effort, not all-or-nothing: `ok` is true when there was
    nothing to remove, or when at least one entry was removed and the index
    was saved afterwards. Words listed in `failed` stay in the index and can
    be retried later.
    """

    removed: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    persisted: bool = True

    @property
    def ok(self) -> bool:
        if not self.persisted:
            return False
        return bool(self.removed) or not self.failed

    @property
    def complete(self) -> bool:
        return self.persisted and not self.failed


class VocabIndex(PersistentRecord[IndexRecord]):
    def __init__(
        self,
        root: Path,
        entries: EntryStore | None = None,
        ids: IdGenerator | None = None,
        name: str = INDEX_NAME,
    ):
        super().__init__(RecordStore(root, IndexRecord), name)
        self.entries = entries if entries is not None else EntryStore(Path(root) / HISTORY_DIR)
        self.ids = ids if ids is not None else IdGenerator()
        self._dirty = False

    @classmethod
    def open(cls, root: Path, rng: random.Random | None = None) -> "VocabIndex":
        index = cls(root, ids=IdGenerator(rng))
        index.load()
        return index

    def __len__(self) -> int:
        return len(self.record.entries)

    def __contains__(self, word: str) -> bool:
        return word in self.record.entries

    def words(self) -> Iterator[str]:
        self._require_loaded()
        return iter(list(self.record.entries))

    def entry_id(self, word: str) -> str | None:
        return self.record.entries.get(word)

    def lookup(self, word: str) -> CacheEntry | None:
        """Return the cached entry for `word`, or None on a miss.

        A missing or unreadable entry file is a miss too: losing one cached
        word is not worth failing the lookup over.
        """
        self._require_loaded()
        entry_id = self.record.entries.get(word)
        if entry_id is None:
            return None

        try:
            return self.entries.load(entry_id)
        except NotFoundError:
            logger.warning("entry %s for %r is missing", entry_id, word)
        except CorruptedError as e:
            logger.warning("entry %s for %r is corrupted: %s", entry_id, word, e)
        except StoreError as e:
            logger.warning("entry %s for %r could not be read: %s", entry_id, word, e)
        return None

    def insert(self, entry: CacheEntry) -> str:
        """Cache `entry` under a fresh id and return the id."""
        self._require_loaded()
        entry_id = self.ids.generate(set(self.record.entries.values()))

        # entry first: a failure here leaves the index untouched
        self.entries.save(entry, entry_id)

        previous = self.record.entries.get(entry.word)
        self.record.entries[entry.word] = entry_id
        try:
            self._persist()
        except StoreError:
            if previous is None:
                del self.record.entries[entry.word]
            else:
                self.record.entries[entry.word] = previous
            raise
        self._dirty = False

        if previous is not None:
            self._discard_entry(previous)
        logger.debug("cached %r as %s", entry.word, entry_id)
        return entry_id

    def remove(self, word: str) -> None:
        self._require_loaded()
        entry_id = self.record.entries.get(word)
        if entry_id is None:
            raise NotFoundError(f"'{word}' is not in history", self.path)

        try:
            self.entries.delete(entry_id)
        except NotFoundError:
            logger.info("entry %s for %r was already gone", entry_id, word)

        del self.record.entries[word]
        self._flush()

    def remove_all(self) -> RemovalSummary:
        self._require_loaded()
        summary = RemovalSummary()

        for word, entry_id in list(self.record.entries.items()):
            try:
                self.entries.delete(entry_id)
            except StoreError as e:
                logger.warning("could not remove %r: %s", word, e)
                summary.failed.append(word)
                continue
            del self.record.entries[word]
            summary.removed.append(word)

        try:
            self._flush()
        except StoreError:
            summary.persisted = False
        return summary

    def search(self, word: str, provider: DefinitionProvider) -> SearchResult | None:
        """Look `word` up in the cache, falling back to `provider` on a miss.

        Returns None when the provider knows no definitions for the word.
        """
        entry = self.lookup(word)
        if entry is not None:
            return SearchResult(entry, cached=True)
        return self.fetch(word, provider)

    def fetch(self, word: str, provider: DefinitionProvider) -> SearchResult | None:
        """Ask `provider` for `word` and cache what it returns.

        Synonyms are only requested once definitions were found, and a failed
        synonyms request still caches the definitions.
        """
        self._require_loaded()
        definitions = provider.fetch_definitions(word)
        if definitions is None:
            return None
        try:
            synonyms = provider.fetch_synonyms(word)
        except ProviderError as e:
            logger.warning("no synonyms for %r: %s", word, e)
            synonyms = None

        entry = CacheEntry(word=word, definitions=definitions, synonyms=synonyms or "")
        try:
            self.insert(entry)
        except StoreError as e:
            logger.error("could not cache %r: %s", word, e)
            return SearchResult(entry, cached=False, saved=False)
        return SearchResult(entry, cached=False)

    def prune_orphans(self) -> list[str]:
        """Delete entry files that no word in the index refers to."""
        self._require_loaded()
        referenced = set(self.record.entries.values())
        pruned = []
        for entry_id in list(self.entries.ids()):
            if entry_id in referenced:
                continue
            try:
                self.entries.delete(entry_id)
            except StoreError as e:
                logger.warning("could not prune %s: %s", entry_id, e)
                continue
            pruned.append(entry_id)
        return pruned

    def close(self) -> None:
        if self.state is StoreState.LOADED and self._dirty:
            self._flush()

    def _flush(self) -> None:
        # a failed save is retried by the next mutation or by close()
        self._dirty = True
        self._persist()
        self._dirty = False

    def _discard_entry(self, entry_id: str) -> None:
        try:
            self.entries.delete(entry_id)
        except NotFoundError:
            pass
        except StoreError as e:
            logger.warning("could not remove replaced entry %s: %s", entry_id, e)
