"""
Builds the services commands work with.
"""

from powerdict.cli.output import ask, done, fail, info
from powerdict.core.config import get_config_paths
from powerdict.core.credentials import CredentialStore
from powerdict.core.errors import CorruptedError
from powerdict.core.index import VocabIndex
from powerdict.core.persistent import PersistentRecord
from powerdict.core.wordnik import WordnikClient


def get_index(root=None) -> VocabIndex:
    paths = get_config_paths(root)
    index = VocabIndex(paths["root"])
    _load_or_repair(index)
    return index


def get_credentials(root=None) -> CredentialStore:
    paths = get_config_paths(root)
    store = CredentialStore(paths["root"])
    _load_or_repair(store)
    return store


def get_provider(credentials: CredentialStore) -> WordnikClient:
    return WordnikClient(credentials)


def _load_or_repair(service: PersistentRecord) -> None:
    """Load `service`, offering to reset its file if it is corrupted.

    PermissionDeniedError and a declined reset propagate to the caller.
    """
    try:
        service.load()
    except CorruptedError as e:
        fail(str(e))
        choice = ask("Would you like to reset the file (N/y)? ").strip()
        if not choice.lower().startswith("y"):
            raise
        info(f"Repairing {service.path}")
        service.reset()
        done("Repair successful")
