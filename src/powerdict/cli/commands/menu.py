"""
Interactive menu.

Reads integer choices until the user picks 0. Anything that is not one of
the listed numbers is reported and the menu is shown again. Closing the
input stream ends the program with status 0.
"""

import sys
from dataclasses import dataclass

from powerdict.cli import deps
from powerdict.cli.commands.history import clear_history, remove_word
from powerdict.cli.commands.key import remove_key, set_key, show_key
from powerdict.cli.commands.search import search_word
from powerdict.cli.output import ask, console, fail, print_history
from powerdict.core.errors import StoreError
from powerdict.core.index import VocabIndex
from powerdict.core.wordnik import ProviderError


MAIN_MENU = (
    "Welcome to Power Dict",
    [
        (1, "Search a word"),
        (2, "Print history"),
        (3, "Remove a word from history"),
        (4, "Clear all history"),
        (5, "Configure API key"),
        (0, "Exit"),
    ],
)

KEY_MENU = (
    "Manage Keys",
    [
        (1, "Add/overwrite the Wordnik API key"),
        (2, "Remove the Wordnik API key"),
        (3, "Reveal the Wordnik API key"),
        (0, "Return to the previous menu"),
    ],
)


@dataclass(frozen=True)
class Choice:
    value: int


@dataclass(frozen=True)
class InvalidChoice:
    text: str


def parse_choice(text: str, valid) -> Choice | InvalidChoice:
    try:
        value = int(text.strip())
    except ValueError:
        return InvalidChoice(text)
    if value not in valid:
        return InvalidChoice(text)
    return Choice(value)


def add_subparser(subparsers):
    parser = subparsers.add_parser("menu", help="Interactive menu (default)")
    parser.set_defaults(func=run_menu)


def run_menu(args):
    root = getattr(args, "data_dir", None)
    try:
        try:
            index = deps.get_index(root)
        except StoreError as e:
            fail(str(e))
            sys.exit(1)
        try:
            main_menu(index, root)
        finally:
            index.close()
    except EOFError:
        console.print()
        fail("Input stream has been closed. Bye.")
        sys.exit(0)


def main_menu(index: VocabIndex, root=None) -> None:
    while True:
        choice = _prompt_menu(MAIN_MENU)
        if choice is None:
            continue
        if choice == 0:
            return

        if choice == 1:
            word = ask("Enter the word: ")
            try:
                search_word(index, word, root)
            except (StoreError, ProviderError) as e:
                fail(str(e))
        elif choice == 2:
            print_history(list(index.words()))
        elif choice == 3:
            remove_word(index, ask("Enter the word to remove from history: "))
        elif choice == 4:
            clear_history(index)
        elif choice == 5:
            try:
                credentials = deps.get_credentials(root)
            except StoreError as e:
                fail(f"Cannot read or create keys file. {e}")
            else:
                key_menu(credentials)
                continue
        _pause()


def key_menu(credentials) -> None:
    while True:
        choice = _prompt_menu(KEY_MENU)
        if choice is None:
            continue
        if choice == 0:
            return

        if choice == 1:
            set_key(credentials)
        elif choice == 2:
            remove_key(credentials)
        elif choice == 3:
            try:
                show_key(credentials)
            except StoreError as e:
                fail(str(e))
        _pause()


def _prompt_menu(menu) -> int | None:
    title, options = menu
    console.clear()
    console.print()
    console.print(title)
    console.print("-" * len(title))
    for number, label in options:
        console.print(f"\\[{number}] {label}")
    console.print()

    parsed = parse_choice(ask("Please enter your choice: "), {n for n, _ in options})
    if isinstance(parsed, InvalidChoice):
        fail("Please enter a valid choice")
        _pause()
        return None
    return parsed.value


def _pause() -> None:
    console.input("\nPress enter to return to the menu ")
