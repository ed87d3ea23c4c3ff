# tests/test_records.py
"""Tests for the generic record store and its file format."""

import json
import os

import pytest

from powerdict.core import records
from powerdict.core.errors import CorruptedError, IoFailureError, NotFoundError, PermissionDeniedError
from powerdict.core.models import CacheEntry, IndexRecord
from powerdict.core.records import RecordStore


@pytest.fixture
def store(tmp_path):
    return RecordStore(tmp_path / "history", CacheEntry)


def test_save_then_load_round_trip(store):
    entry = CacheEntry(word="gregarious", definitions=["fond of company"], synonyms="sociable, outgoing")
    store.save(entry, "ABCDEF")

    assert store.load("ABCDEF") == entry


def test_empty_fields_round_trip(store):
    entry = CacheEntry(word="zyzzyva")
    store.save(entry, "QWERTY")

    loaded = store.load("QWERTY")
    assert loaded.definitions == []
    assert loaded.synonyms == ""


def test_save_creates_base_dir(store, tmp_path):
    assert not (tmp_path / "history").exists()
    store.save(CacheEntry(word="a"), "AAAAAA")
    assert (tmp_path / "history" / "AAAAAA.json").is_file()


def test_file_is_a_versioned_envelope(store, tmp_path):
    store.save(CacheEntry(word="bank", definitions=["river edge"]), "BANKID")

    data = json.loads((tmp_path / "history" / "BANKID.json").read_text(encoding="utf-8"))
    assert data["format"] == "powerdict"
    assert data["version"] == 1
    assert data["kind"] == "cache_entry"
    assert data["data"] == {"word": "bank", "definitions": ["river edge"], "synonyms": ""}


def test_load_missing(store):
    with pytest.raises(NotFoundError):
        store.load("NOPENO")


def test_load_garbage(store, tmp_path):
    (tmp_path / "history").mkdir()
    (tmp_path / "history" / "JUNKJU.json").write_bytes(b"\xac\xed\x00\x05sr\x00")

    with pytest.raises(CorruptedError):
        store.load("JUNKJU")


def test_load_plain_json_is_not_an_envelope(store, tmp_path):
    (tmp_path / "history").mkdir()
    (tmp_path / "history" / "PLAINJ.json").write_text('{"word": "bank"}')

    with pytest.raises(CorruptedError):
        store.load("PLAINJ")


def test_load_wrong_kind(tmp_path):
    RecordStore(tmp_path, IndexRecord).save(IndexRecord(entries={"bank": "ABCDEF"}), "thing")

    with pytest.raises(CorruptedError, match="expected 'cache_entry'"):
        RecordStore(tmp_path, CacheEntry).load("thing")


def test_load_newer_version(store, tmp_path):
    (tmp_path / "history").mkdir()
    payload = {"format": "powerdict", "version": 99, "kind": "cache_entry", "data": {"word": "x"}}
    (tmp_path / "history" / "FUTURE.json").write_text(json.dumps(payload))

    with pytest.raises(CorruptedError):
        store.load("FUTURE")


def test_load_invalid_payload(store, tmp_path):
    (tmp_path / "history").mkdir()
    payload = {"format": "powerdict", "version": 1, "kind": "cache_entry", "data": {"word": "x", "definitions": 3}}
    (tmp_path / "history" / "BADDEF.json").write_text(json.dumps(payload))

    with pytest.raises(CorruptedError):
        store.load("BADDEF")


def test_load_permission_denied(store, monkeypatch):
    store.save(CacheEntry(word="a"), "LOCKED")

    def denied(path):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(store, "_read_bytes", denied)

    with pytest.raises(PermissionDeniedError):
        store.load("LOCKED")


def test_save_disk_full(store, monkeypatch):
    def full(path, data):
        raise OSError(28, "No space left on device")

    monkeypatch.setattr(store, "_write_bytes", full)

    with pytest.raises(IoFailureError):
        store.save(CacheEntry(word="a"), "NOROOM")


def test_failed_replace_keeps_previous_file(store, tmp_path, monkeypatch):
    old = CacheEntry(word="old")
    store.save(old, "KEEPME")

    def broken_replace(src, dst):
        raise OSError(5, "Input/output error")

    monkeypatch.setattr(records.os, "replace", broken_replace)
    with pytest.raises(IoFailureError):
        store.save(CacheEntry(word="new"), "KEEPME")
    monkeypatch.undo()

    assert store.load("KEEPME") == old
    assert sorted(os.listdir(tmp_path / "history")) == ["KEEPME.json"]


def test_delete(store):
    store.save(CacheEntry(word="a"), "DELETE")
    store.delete("DELETE")

    assert not store.exists("DELETE")


def test_delete_missing(store):
    with pytest.raises(NotFoundError):
        store.delete("NOPENO")


def test_names(store):
    store.save(CacheEntry(word="a"), "AAAAAA")
    store.save(CacheEntry(word="b"), "BBBBBB")

    assert sorted(store.names()) == ["AAAAAA", "BBBBBB"]


def test_names_without_dir(store):
    assert list(store.names()) == []


@pytest.mark.parametrize("name", ["", "..", "a/b", "../index"])
def test_invalid_names(store, name):
    with pytest.raises(ValueError):
        store.save(CacheEntry(word="a"), name)
