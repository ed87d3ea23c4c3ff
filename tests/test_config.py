# tests/test_config.py
"""Tests for data directory resolution."""

from powerdict.core.config import HOME_ENV, get_config_paths


def test_explicit_root_wins(tmp_path, monkeypatch):
    monkeypatch.setenv(HOME_ENV, "/somewhere/else")

    paths = get_config_paths(tmp_path)

    assert paths["index"] == tmp_path / "index.json"
    assert paths["keys"] == tmp_path / "keys.json"
    assert paths["history"] == tmp_path / "history"


def test_env_root(tmp_path, monkeypatch):
    monkeypatch.setenv(HOME_ENV, str(tmp_path))

    assert get_config_paths()["root"] == tmp_path


def test_defaults_to_cwd(tmp_path, monkeypatch):
    monkeypatch.delenv(HOME_ENV, raising=False)
    monkeypatch.chdir(tmp_path)

    assert get_config_paths()["root"] == tmp_path
