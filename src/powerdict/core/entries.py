# src/powerdict/core/entries.py
"""
Cache entry storage: one file per entry under the history directory.
"""

from collections.abc import Iterator
from pathlib import Path

from powerdict.core.models import CacheEntry
from powerdict.core.records import RecordStore


class EntryStore:
    def __init__(self, history_dir: Path):
        self.records: RecordStore[CacheEntry] = RecordStore(history_dir, CacheEntry)

    @property
    def history_dir(self) -> Path:
        return self.records.base_dir

    def save(self, entry: CacheEntry, entry_id: str) -> None:
        self.records.save(entry, entry_id)

    def load(self, entry_id: str) -> CacheEntry:
        return self.records.load(entry_id)

    def delete(self, entry_id: str) -> None:
        self.records.delete(entry_id)

    def exists(self, entry_id: str) -> bool:
        return self.records.exists(entry_id)

    def ids(self) -> Iterator[str]:
        return self.records.names()
