"""Command line entry point for the cached line indexer."""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

from textindexer.cursor.cache import Cache
from textindexer.cursor.indexer import Index
from textindexer.cursor.search import search

USAGE = """Usage:
  indexer index <directory_path>  - Index files in the specified directory
  indexer search <keyword>        - Search for keyword in indexed files"""

_HELP_FLAGS = frozenset({"-h", "-help", "--h", "--help"})


def _usage_error(message: str | None = None, status: int = 1) -> int:
    """Report an optional error and the usage text, returning the exit status."""
    if message:
        print(message, file=sys.stderr)
    print(USAGE, file=sys.stderr)
    return status


def _load_cache(index: Index, cache: Cache) -> None:
    print("Loading cache...")
    try:
        data = cache.load()
    except (OSError, ValueError) as exc:
        print(f"Warning: could not load cache: {exc}")
        return
    valid = {path: entry for path, entry in data.items() if os.path.exists(path)}
    index.update(valid)
    print(f"Loaded {len(valid)} valid files from cache")


def _handle_index(dir_path: str, index: Index, cache: Cache) -> int:
    print(f"Indexing directory: {dir_path}")
    abs_path = os.path.abspath(dir_path)
    index.index_directory(abs_path)

    print("Saving to cache...")
    try:
        cache.save(index)
    except OSError as exc:
        print(f"Warning: failed to save cache: {exc}", file=sys.stderr)
    else:
        print("Cache saved successfully")
    return 0


def _relative(path: str) -> str:
    try:
        return os.path.relpath(path, ".")
    except ValueError:
        return path


def _handle_search(keyword: str, index: Index) -> int:
    print(f"Searching for keyword: {keyword}")
    results = search(index, keyword)
    if not results:
        print("No matches found.")
        return 0

    results.sort(key=lambda result: (result.file_path, result.line_number))

    print(f"\nFound matches in {len(results)} files:")
    current_file = None
    for result in results:
        if result.file_path != current_file:
            current_file = result.file_path
            print(f"\n{_relative(current_file)}:")
        print(f"  {result.line_number:4d}: {result.line}")
    print()
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the index or search command and return the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)

    try:
        home = Path.home()
    except RuntimeError as exc:
        print(f"Error getting home directory: {exc}", file=sys.stderr)
        return 1

    index = Index(os.cpu_count() or 1)
    cache = Cache(home / ".cache" / "indexer")
    _load_cache(index, cache)

    if args and args[0] == "--":
        args = args[1:]
    elif args and args[0] in _HELP_FLAGS:
        return _usage_error(status=0)
    elif args and args[0].startswith("-") and args[0] != "-":
        return _usage_error(f"flag provided but not defined: {args[0]}", status=2)

    if not args:
        return _usage_error()

    command = args[0]
    if command == "index":
        if len(args) != 2:
            return _usage_error("Error: index command requires a directory path")
        return _handle_index(args[1], index, cache)
    if command == "search":
        if len(args) != 2:
            return _usage_error("Error: search command requires a keyword")
        return _handle_search(args[1], index)

    quoted = json.dumps(command, ensure_ascii=False)
    return _usage_error(f"Error: unknown command {quoted}")


if __name__ == "__main__":
    raise SystemExit(main())