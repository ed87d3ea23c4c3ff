# src/powerdict/core/records.py
"""
Generic file-backed record storage.

A RecordStore saves, loads and deletes typed records, one file per name,
under a fixed base directory. Writes go to a temporary file in the same
directory which is then renamed over the target, so readers see either the
previous complete file or the new complete file.
"""

import json
import logging
import os
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Generic, Iterator, TypeVar

from pydantic import ValidationError

from powerdict.core.errors import CorruptedError, NotFoundError, from_os_error
from powerdict.core.models import FORMAT_NAME, FORMAT_VERSION, Envelope, Record, is_record_name


logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Record)


def encode(record: Record) -> bytes:
    envelope = {
        "format": FORMAT_NAME,
        "version": FORMAT_VERSION,
        "kind": record.kind,
        "data": record.model_dump(mode="json"),
    }
    return (json.dumps(envelope, indent=2, ensure_ascii=False) + "\n").encode("utf-8")


def decode(raw: bytes, model: type[R], path: Path | None = None) -> R:
    """Decode envelope bytes into `model`, raising CorruptedError on any mismatch."""
    try:
        payload = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise CorruptedError(f"\"{path}\" is not valid JSON: {e}", path) from e

    try:
        envelope = Envelope.model_validate(payload)
    except ValidationError as e:
        raise CorruptedError(f"\"{path}\" is not a powerdict file", path) from e

    if envelope.version > FORMAT_VERSION:
        raise CorruptedError(
            f"\"{path}\" uses format version {envelope.version}, newer than {FORMAT_VERSION}",
            path,
        )
    if envelope.kind != model.kind:
        raise CorruptedError(
            f"\"{path}\" holds a {envelope.kind!r} record, expected {model.kind!r}",
            path,
        )

    try:
        return model.model_validate(envelope.data)
    except ValidationError as e:
        raise CorruptedError(f"\"{path}\" has an invalid {model.kind} record", path) from e


class RecordStore(Generic[R]):
    def __init__(self, base_dir: Path, model: type[R], suffix: str = ".json"):
        self.base_dir = Path(base_dir)
        self.model = model
        self.suffix = suffix

    def path_for(self, name: str) -> Path:
        if not is_record_name(name):
            raise ValueError(f"Invalid record name: {name!r}")
        return self.base_dir / f"{name}{self.suffix}"

    def exists(self, name: str) -> bool:
        return self.path_for(name).is_file()

    def names(self) -> Iterator[str]:
        """Yield the names of all records currently stored."""
        if not self.base_dir.is_dir():
            return
        for path in self.base_dir.glob(f"*{self.suffix}"):
            if path.is_file():
                yield path.name[: -len(self.suffix)] if self.suffix else path.name

    def save(self, record: R, name: str) -> None:
        path = self.path_for(name)
        data = encode(record)
        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
            self._write_bytes(path, data)
        except OSError as e:
            raise from_os_error(e, path, "save to") from e
        logger.debug("saved %s record to %s", record.kind, path)

    def load(self, name: str) -> R:
        path = self.path_for(name)
        try:
            raw = self._read_bytes(path)
        except IsADirectoryError as e:
            raise CorruptedError(f"\"{path}\" is a directory", path) from e
        except OSError as e:
            raise from_os_error(e, path, "read from") from e
        return decode(raw, self.model, path)

    def delete(self, name: str) -> None:
        path = self.path_for(name)
        try:
            path.unlink()
        except FileNotFoundError as e:
            raise NotFoundError(f"Cannot find \"{path}\"", path) from e
        except OSError as e:
            raise from_os_error(e, path, "delete") from e
        logger.debug("deleted %s", path)

    def _read_bytes(self, path: Path) -> bytes:
        return path.read_bytes()

    def _write_bytes(self, path: Path, data: bytes) -> None:
        tmp_name = None
        try:
            with NamedTemporaryFile(
                mode="wb", delete=False, dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp"
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(data)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
