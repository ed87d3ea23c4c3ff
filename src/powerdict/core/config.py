# src/powerdict/core/config.py
"""
Where powerdict keeps its files, and provider settings.
"""

import os
from pathlib import Path


HOME_ENV = "POWERDICT_HOME"

INDEX_FILE = "index.json"
KEYS_FILE = "keys.json"
HISTORY_DIR = "history"

WORDNIK_BASE_URL = "https://api.wordnik.com/v4/word.json"
WORDNIK_TIMEOUT = 30.0
DEFINITION_LIMIT = 100
DEFINITION_SOURCE = "wordnet"
SYNONYM_LIMIT = 100


def get_data_root(root: str | Path | None = None) -> Path:
    """Resolve the data directory: explicit root, then $POWERDICT_HOME, then cwd."""
    if root:
        return Path(root).expanduser()
    env = os.environ.get(HOME_ENV)
    if env:
        return Path(env).expanduser()
    return Path.cwd()


def get_config_paths(root: str | Path | None = None) -> dict[str, Path]:
    """Return canonical on-disk locations of the index, keys and history."""
    data_root = get_data_root(root)
    return {
        "root": data_root,
        "index": data_root / INDEX_FILE,
        "keys": data_root / KEYS_FILE,
        "history": data_root / HISTORY_DIR,
    }
