"""
Search command.
"""

import sys

from powerdict.cli import deps
from powerdict.cli.output import console, fail, info, print_entry
from powerdict.core.errors import StoreError
from powerdict.core.index import SearchResult, VocabIndex
from powerdict.core.wordnik import ProviderError


def add_subparser(subparsers):
    parser = subparsers.add_parser("search", help="Look a word up (cached results first)")
    parser.add_argument("word", help="Word to search")
    parser.set_defaults(func=run_search)


def search_word(index: VocabIndex, word: str, root=None) -> bool:
    """Search `word` and print the result. Returns False on failure."""
    word = word.strip()
    if not word:
        fail("Unable to search empty strings. Please try again later.")
        return False

    entry = index.lookup(word)
    if entry is not None:
        result = SearchResult(entry, cached=True)
    else:
        # only a miss needs the key file and the network
        provider = deps.get_provider(deps.get_credentials(root))
        try:
            result = index.fetch(word, provider)
        finally:
            provider.close()

    if result is None:
        info("No definitions found")
        return False

    info("showing cached results" if result.cached else "showing online results")
    print_entry(result.entry)
    if not result.saved:
        console.print()
        fail(f"Could not save '{word}' to history")
    return True


def run_search(args):
    try:
        index = deps.get_index(args.data_dir)
        try:
            found = search_word(index, args.word, args.data_dir)
        finally:
            index.close()
    except (StoreError, ProviderError) as e:
        fail(str(e))
        sys.exit(1)
    if not found:
        sys.exit(1)
