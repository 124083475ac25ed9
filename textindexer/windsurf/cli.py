"""Command line entry point for the JSON-backed line indexer."""

from __future__ import annotations

import os
import sys

from textindexer.windsurf.indexer import Indexer, IndexingError

_HELP_FLAGS = frozenset({"-h", "-help", "--h", "--help"})


class _FlagExit(Exception):
    def __init__(self, code: int) -> None:
        super().__init__(code)
        self.code = code


def _print_usage() -> None:
    print("Usage:")
    print("  indexer index <directory_path>  - Index files in the specified directory")
    print("  indexer search <keyword>        - Search for keyword in indexed files")


def _positional(name: str, args: list[str]) -> list[str]:
    """Return positional arguments; this command defines no flags."""
    if not args:
        return []
    first = args[0]
    if first == "--":
        return args[1:]
    if first.startswith("-") and first != "-":
        if first in _HELP_FLAGS:
            print(f"Usage of {name}:", file=sys.stderr)
            raise _FlagExit(0)
        print(f"flag provided but not defined: {first.split('=', 1)[0]}", file=sys.stderr)
        print(f"Usage of {name}:", file=sys.stderr)
        raise _FlagExit(2)
    return args


def _handle_index(args: list[str]) -> int:
    positional = _positional("index", args)
    if not positional:
        print("Error: directory path required")
        print("Usage: indexer index <directory_path>")
        return 1

    dir_path = os.path.abspath(positional[0])
    indexer = Indexer()
    try:
        count = indexer.index_directory(dir_path)
    except IndexingError as exc:
        print(f"Error during indexing: {exc}")
        return 1

    try:
        indexer.save_index()
    except OSError as exc:
        print(f"Error saving index: {exc}")
        return 1

    print(f"Indexed {count} files successfully.")
    return 0


def _handle_search(args: list[str]) -> int:
    positional = _positional("search", args)
    if not positional:
        print("Error: search keyword required")
        print("Usage: indexer search <keyword>")
        return 1

    keyword = positional[0]
    indexer = Indexer()
    try:
        indexer.load_index()
    except (OSError, ValueError) as exc:
        print(f"Error loading index: {exc}")
        print("Have you indexed any directories yet?")
        return 1

    results = indexer.search(keyword)
    if not results:
        print("No results found for:", keyword)
        return 0

    print("Found in:")
    for result in results:
        print(f" - {result.file_path}:{result.line_number}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the index or search command and return the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        _print_usage()
        return 1

    command, rest = args[0], args[1:]
    try:
        if command == "index":
            return _handle_index(rest)
        if command == "search":
            return _handle_search(rest)
    except _FlagExit as exc:
        return exc.code

    _print_usage()
    return 1


if __name__ == "__main__":
    raise SystemExit(main())