"""
History commands.
"""

import sys

from powerdict.cli import deps
from powerdict.cli.output import ask, done, fail, info, print_history
from powerdict.core.errors import NotFoundError, StoreError
from powerdict.core.index import VocabIndex


def add_subparser(subparsers):
    parser = subparsers.add_parser("history", help="Search history management")
    history_sub = parser.add_subparsers(dest="history_command", required=True)

    # list
    list_p = history_sub.add_parser("list", help="Print all cached words")
    list_p.set_defaults(func=history_list)

    # remove
    remove_p = history_sub.add_parser("remove", help="Remove a word from history")
    remove_p.add_argument("word", help="Word to remove")
    remove_p.set_defaults(func=history_remove)

    # clear
    clear_p = history_sub.add_parser("clear", help="Clear all history and cached results")
    clear_p.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")
    clear_p.set_defaults(func=history_clear)

    # prune
    prune_p = history_sub.add_parser("prune", help="Delete cached files no word refers to")
    prune_p.set_defaults(func=history_prune)


def remove_word(index: VocabIndex, word: str) -> bool:
    word = word.strip()
    if not word:
        fail("Unable to remove empty strings. Please try again later.")
        return False
    try:
        index.remove(word)
    except NotFoundError:
        fail(f"'{word}' is not in history")
        return False
    except StoreError as e:
        fail(f"Couldn't remove '{word}' from history. {e}")
        return False
    done(f"'{word}' removed from history")
    return True


def clear_history(index: VocabIndex, confirmed: bool = False) -> bool:
    if not confirmed:
        choice = ask("Do you really want to clear history and the cached results (y/N)? ").strip()
        if not choice.lower().startswith("y"):
            done("History not cleared")
            return True

    summary = index.remove_all()
    if summary.complete:
        done("History cleared")
    elif summary.ok:
        fail(f"Some items could not be removed from history: {', '.join(summary.failed)}")
    elif not summary.persisted:
        fail("Unable to save history. Please try again later")
    else:
        fail("Could not remove any items from history")
    return summary.complete


def history_list(args):
    try:
        index = deps.get_index(args.data_dir)
    except StoreError as e:
        fail(str(e))
        sys.exit(1)
    print_history(list(index.words()))


def history_remove(args):
    try:
        index = deps.get_index(args.data_dir)
    except StoreError as e:
        fail(str(e))
        sys.exit(1)
    try:
        removed = remove_word(index, args.word)
    finally:
        _close(index)
    if not removed:
        sys.exit(1)


def history_clear(args):
    try:
        index = deps.get_index(args.data_dir)
    except StoreError as e:
        fail(str(e))
        sys.exit(1)
    try:
        cleared = clear_history(index, confirmed=args.yes)
    finally:
        _close(index)
    if not cleared:
        sys.exit(1)


def _close(index: VocabIndex) -> None:
    # retries an index save that failed after an entry was deleted
    try:
        index.close()
    except StoreError as e:
        fail(f"Unable to save history. {e}")


def history_prune(args):
    try:
        index = deps.get_index(args.data_dir)
        pruned = index.prune_orphans()
    except StoreError as e:
        fail(str(e))
        sys.exit(1)
    if pruned:
        done(f"Removed {len(pruned)} orphaned cache file(s)")
    else:
        info("No orphaned cache files")
