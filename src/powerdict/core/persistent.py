# src/powerdict/core/persistent.py
"""
Load-or-create lifecycle shared by the index and the credential store.

Both keep one whole record in memory and rewrite its file after every
mutation. Loading follows the same rules for both:

    file readable          -> LOADED
    file missing           -> empty record written immediately -> LOADED
    file unreadable        -> UNREADABLE, PermissionDeniedError raised
    file present but bad   -> CORRUPTED, CorruptedError raised; reset() repairs
"""

import logging
from enum import Enum
from typing import Generic, TypeVar

from powerdict.core.errors import (
    CorruptedError,
    NotFoundError,
    PermissionDeniedError,
    StoreError,
    StoreStateError,
)
from powerdict.core.models import Record
from powerdict.core.records import RecordStore


logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Record)


class StoreState(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOADED = "loaded"
    CORRUPTED = "corrupted"
    UNREADABLE = "unreadable"


class PersistentRecord(Generic[R]):
    def __init__(self, store: RecordStore[R], name: str):
        self.store = store
        self.name = name
        self.state = StoreState.UNINITIALIZED
        self.record: R = self.empty()

    def empty(self) -> R:
        return self.store.model()

    @property
    def path(self):
        return self.store.path_for(self.name)

    def load(self) -> None:
        try:
            self.record = self.store.load(self.name)
        except NotFoundError:
            logger.info("%s not found, creating it", self.path)
            self.record = self.empty()
            self._persist()
        except CorruptedError:
            self.state = StoreState.CORRUPTED
            self.record = self.empty()
            raise
        except PermissionDeniedError:
            self.state = StoreState.UNREADABLE
            self.record = self.empty()
            raise
        self.state = StoreState.LOADED

    def reset(self) -> None:
        """Overwrite the file with an empty record."""
        logger.warning("resetting %s", self.path)
        self.record = self.empty()
        self._persist()
        self.state = StoreState.LOADED

    def _require_loaded(self) -> None:
        if self.state is not StoreState.LOADED:
            raise StoreStateError(
                f"\"{self.path}\" is not loaded (state: {self.state.value})", self.path
            )

    def _persist(self) -> None:
        try:
            self.store.save(self.record, self.name)
        except StoreError:
            logger.error("unable to save %s", self.path)
            raise
