"""Case-insensitive keyword search over an index."""

from __future__ import annotations

from dataclasses import dataclass

from textindexer.cursor.indexer import Index


@dataclass
class SearchResult:
    """A line containing the keyword, with how often it occurs there."""

    file_path: str
    line_number: int
    line: str
    match_count: int


def search(index: Index, keyword: str) -> list[SearchResult]:
    """Return every indexed line that contains keyword, ignoring case."""
    files = index.get_files()
    print(f"Searching through {len(files)} indexed files")

    needle = keyword.lower()
    results: list[SearchResult] = []
    files_seen: set[str] = set()
    total_matches = 0

    for path, entry in files.items():
        for number, line in entry.line_index.items():
            count = line.lower().count(needle)
            if count > 0:
                results.append(SearchResult(path, number, line, count))
                total_matches += count
                files_seen.add(path)

    print(f"Found {total_matches} matches in {len(files_seen)} files")
    return results