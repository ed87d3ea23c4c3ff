"""
API key commands.
"""

import sys

from powerdict.cli import deps
from powerdict.cli.output import ask, done, fail, info
from powerdict.core.credentials import CredentialStore
from powerdict.core.errors import NotFoundError, StoreError
from powerdict.core.models import ProviderLabel


def add_subparser(subparsers):
    parser = subparsers.add_parser("key", help="Manage the Wordnik API key")
    key_sub = parser.add_subparsers(dest="key_command", required=True)

    # set
    set_p = key_sub.add_parser("set", help="Add or overwrite the Wordnik API key")
    set_p.add_argument("key", nargs="?", help="API key (prompted for when omitted)")
    set_p.set_defaults(func=key_set)

    # remove
    remove_p = key_sub.add_parser("remove", help="Remove the Wordnik API key")
    remove_p.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")
    remove_p.set_defaults(func=key_remove)

    # show
    show_p = key_sub.add_parser("show", help="Reveal the Wordnik API key")
    show_p.set_defaults(func=key_show)


def set_key(store: CredentialStore, key: str | None = None) -> bool:
    if key is None:
        key = ask("Enter the API key for Wordnik: ")
    try:
        store.set(ProviderLabel.WORDNIK, key)
    except ValueError:
        fail("Unable to add an empty API key. Please try again later.")
        return False
    except StoreError as e:
        fail(f"Unable to add key. {e}")
        return False
    done("Key added successfully")
    return True


def remove_key(store: CredentialStore, confirmed: bool = False) -> bool:
    if not confirmed:
        choice = ask("Do you really want to remove the saved key (y/N)? ").strip()
        if not choice.lower().startswith("y"):
            done("Key not removed")
            return True
    try:
        store.remove(ProviderLabel.WORDNIK)
    except NotFoundError:
        fail("No Wordnik API key is stored")
        return False
    except StoreError as e:
        fail(f"Unable to remove key. {e}")
        return False
    done("Key removed successfully")
    return True


def show_key(store: CredentialStore) -> None:
    key = store.get(ProviderLabel.WORDNIK)
    if key is None:
        info("No Wordnik API key is stored")
    else:
        info(f"Wordnik API Key = \"{key}\"")


def _open(args) -> CredentialStore:
    try:
        return deps.get_credentials(args.data_dir)
    except StoreError as e:
        fail(f"Cannot read or create keys file. {e}")
        sys.exit(1)


def key_set(args):
    if not set_key(_open(args), args.key):
        sys.exit(1)


def key_remove(args):
    if not remove_key(_open(args), confirmed=args.yes):
        sys.exit(1)


def key_show(args):
    try:
        show_key(_open(args))
    except StoreError as e:
        fail(str(e))
        sys.exit(1)
