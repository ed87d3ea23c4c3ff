# src/powerdict/core/errors.py
"""
Store errors.

Every failure of the on-disk stores is raised as a StoreError subclass so
callers can tell "absent" from "unreadable" from "garbage on disk".
"""

from pathlib import Path


class StoreError(Exception):
    """Base class for record, entry, index and credential store failures."""

    def __init__(self, message: str, path: Path | None = None):
        super().__init__(message)
        self.path = path


class NotFoundError(StoreError):
    """The file or the mapping key does not exist."""


class PermissionDeniedError(StoreError):
    """The file exists but the process may not read or write it."""


class CorruptedError(StoreError):
    """Bytes are present but do not decode to the expected record."""


class IoFailureError(StoreError):
    """Any other OS-level failure (disk full, I/O error, ...)."""


class StoreStateError(StoreError):
    """The service was used before a successful load."""


class IdSpaceExhaustedError(StoreError):
    """Every possible entry id is already taken."""


def from_os_error(exc: OSError, path: Path, action: str) -> StoreError:
    if isinstance(exc, FileNotFoundError):
        return NotFoundError(f"Cannot find \"{path}\"", path)
    if isinstance(exc, PermissionError):
        return PermissionDeniedError(
            f"Unable to {action} \"{path}\". Please make sure powerdict has appropriate permissions",
            path,
        )
    return IoFailureError(f"Unable to {action} \"{path}\": {exc.strerror or exc}", path)
