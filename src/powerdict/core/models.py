# src/powerdict/core/models.py
"""
Records persisted by powerdict.

Every file on disk is a JSON envelope:

    {"format": "powerdict", "version": 1, "kind": "cache_entry", "data": {...}}

`kind` names the record type, so loading an index file as a cache entry is
caught while decoding instead of surfacing later as a bad attribute.
"""

from enum import Enum
from typing import ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


FORMAT_NAME = "powerdict"
FORMAT_VERSION = 1


def is_record_name(name: str) -> bool:
    """True when `name` can be used as a file name inside a store directory."""
    return bool(name) and name not in (".", "..") and "/" not in name and "\\" not in name


class ProviderLabel(str, Enum):
    WORDNIK = "wordnik"


class Record(BaseModel):
    model_config = ConfigDict(extra="forbid")

    kind: ClassVar[str] = "record"


class CacheEntry(Record):
    """One cached lookup: the word, its definitions and comma-joined synonyms."""

    model_config = ConfigDict(extra="forbid", frozen=True)
    kind: ClassVar[str] = "cache_entry"

    word: str
    definitions: list[str] = Field(default_factory=list)
    synonyms: str = ""


class IndexRecord(Record):
    kind: ClassVar[str] = "index"

    entries: dict[str, str] = Field(default_factory=dict)

    @field_validator("entries")
    @classmethod
    def check_entry_ids(cls, entries: dict[str, str]) -> dict[str, str]:
        # every word owns its own entry file
        seen = set()
        for word, entry_id in entries.items():
            if not is_record_name(entry_id):
                raise ValueError(f"invalid entry id {entry_id!r} for {word!r}")
            if entry_id in seen:
                raise ValueError(f"entry id {entry_id!r} is shared by more than one word")
            seen.add(entry_id)
        return entries


class CredentialRecord(Record):
    kind: ClassVar[str] = "credentials"

    entries: dict[ProviderLabel, str] = Field(default_factory=dict)


class Envelope(BaseModel):
    model_config = ConfigDict(extra="forbid")

    format: Literal["powerdict"]
    version: int
    kind: str
    data: dict
