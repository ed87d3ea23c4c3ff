"""
powerdict CLI.
"""

import argparse
import logging
import sys

from powerdict.cli.commands import history, key, menu, search
from powerdict.cli.output import fail


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="powerdict", description="Dictionary lookups with a local cache")
    parser.add_argument(
        "--data-dir",
        help="Directory holding the index, keys and history (default: $POWERDICT_HOME or cwd)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    search.add_subparser(subparsers)
    history.add_subparser(subparsers)
    key.add_subparser(subparsers)
    menu.add_subparser(subparsers)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    func = getattr(args, "func", menu.run_menu)
    try:
        func(args)
    except EOFError:
        print()
        fail("Input stream has been closed. Bye.")
        sys.exit(0)


if __name__ == "__main__":
    main()
