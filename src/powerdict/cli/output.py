"""
Terminal output helpers.
"""

from rich.console import Console
from rich.markup import escape

from powerdict.core.models import CacheEntry

console = Console(highlight=False)

TAGS = {
    "INFO": "blue",
    "DONE": "green",
    "FAIL": "red",
    "QUES": "yellow",
}


def tag(name: str) -> str:
    return f"[{TAGS[name]}]\\[{name}][/{TAGS[name]}]"


def info(message: str) -> None:
    console.print(f"{tag('INFO')} {escape(message)}")


def done(message: str) -> None:
    console.print(f"{tag('DONE')} {escape(message)}")


def fail(message: str) -> None:
    console.print(f"{tag('FAIL')} {escape(message)}")


def ask(prompt: str) -> str:
    """Prompt for a line of input. Raises EOFError when input is closed."""
    return console.input(f"{tag('QUES')} {escape(prompt)}")


def print_entry(entry: CacheEntry) -> None:
    console.print()
    console.print("[magenta]Word -[/magenta]")
    console.print(escape(entry.word))

    if entry.definitions:
        console.print()
        console.print("[magenta]Definitions -[/magenta]")
        for i, definition in enumerate(entry.definitions, 1):
            console.print(f"{i}. {escape(definition)}")

    if entry.synonyms:
        console.print()
        console.print("[magenta]Synonyms -[/magenta]")
        console.print(escape(entry.synonyms))


def print_history(words: list[str]) -> None:
    if not words:
        console.print("[magenta]No history available[/magenta]")
        return
    console.print("[magenta]History -[/magenta]")
    for word in words:
        console.print(f"- {escape(word)}")
