"""Line indexer persisted as a single JSON file."""

from __future__ import annotations

import json
import os
import stat
import threading
from collections.abc import Iterator, Mapping
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from textindexer.windsurf.file_utils import is_text_file, should_index_file

INDEX_FILE_NAME = ".indexer_data.json"
WORKER_COUNT = 4
MAX_TOKEN_SIZE = 64 * 1024


@dataclass(frozen=True, order=True)
class SearchResult:
    """A line of an indexed file that contains the keyword."""

    file_path: str
    line_number: int


@dataclass
class FileIndex:
    """The numbered lines of one file and its modification time."""

    path: str
    line_map: dict[int, str] = field(default_factory=dict)
    modified: int = 0


class IndexingError(Exception):
    """Raised when some files or directories could not be indexed."""

    def __init__(self, errors: list[str], indexed: int) -> None:
        self.errors = list(errors)
        self.indexed = indexed
        super().__init__(f"encountered {len(self.errors)} errors during indexing")


class _TokenTooLong(ValueError):
    pass


def _file_index_to_json(entry: FileIndex) -> dict[str, Any]:
    return {
        "path": entry.path,
        "lineMap": {str(number): text for number, text in entry.line_map.items()},
        "modified": entry.modified,
    }


def _file_index_from_json(data: Any) -> FileIndex:
    if not isinstance(data, Mapping):
        raise ValueError("file index must be an object")
    path = data.get("path") or ""
    if not isinstance(path, str):
        raise ValueError("path must be a string")
    raw_lines = data.get("lineMap") or {}
    if not isinstance(raw_lines, Mapping):
        raise ValueError("lineMap must be an object")
    line_map: dict[int, str] = {}
    for key, text in raw_lines.items():
        try:
            number = int(key)
        except ValueError as exc:
            raise ValueError(f"invalid line number {key!r}") from exc
        if not isinstance(text, str):
            raise ValueError(f"line {number} must be a string")
        line_map[number] = text
    modified = data.get("modified") or 0
    if not isinstance(modified, int) or isinstance(modified, bool):
        raise ValueError("modified must be an integer")
    return FileIndex(path=path, line_map=line_map, modified=modified)


def _walk(root: str) -> Iterator[str]:
    """Yield non-directory paths below root in lexical order; OSError stops the walk."""
    yield from _visit(root, os.lstat(root))


def _visit(path: str, info: os.stat_result) -> Iterator[str]:
    if not stat.S_ISDIR(info.st_mode):
        yield path
        return
    for name in sorted(os.listdir(path)):
        child = os.path.join(path, name)
        yield from _visit(child, os.lstat(child))


def _index_file(path: str) -> FileIndex:
    with open(path, "rb") as handle:
        modified = int(os.fstat(handle.fileno()).st_mtime)
        data = handle.read()
    chunks = data.split(b"\n")
    if chunks[-1] == b"":
        chunks.pop()
    line_map: dict[int, str] = {}
    for number, chunk in enumerate(chunks, start=1):
        if len(chunk) >= MAX_TOKEN_SIZE:
            raise _TokenTooLong("token too long")
        if chunk.endswith(b"\r"):
            chunk = chunk[:-1]
        line_map[number] = chunk.decode("utf-8", errors="replace")
    return FileIndex(path=path, line_map=line_map, modified=modified)


def _default_index_path() -> str:
    try:
        home = str(Path.home())
    except RuntimeError:
        home = "."
    return os.path.join(home, INDEX_FILE_NAME)


class Indexer:
    """Indexes text files, searches their lines and persists the index."""

    def __init__(self, index_file_path: str | os.PathLike[str] | None = None) -> None:
        if index_file_path is None:
            index_file_path = _default_index_path()
        self.index_file_path = os.fspath(index_file_path)
        self.files: dict[str, FileIndex] = {}
        self._lock = threading.RLock()

    def index_directory(self, root_dir: str) -> int:
        """Index text files below root_dir and return the number of files indexed in total."""
        errors: list[str] = []
        pending: list[tuple[str, Future]] = []
        with ThreadPoolExecutor(max_workers=WORKER_COUNT) as pool:
            try:
                for path in _walk(root_dir):
                    if should_index_file(path) and is_text_file(path):
                        pending.append((path, pool.submit(_index_file, path)))
            except OSError as exc:
                walk_error: OSError | None = exc
            else:
                walk_error = None

        for path, future in pending:
            try:
                entry = future.result()
            except (OSError, ValueError) as exc:
                errors.append(f"error indexing {path}: {exc}")
                continue
            with self._lock:
                self.files[entry.path] = entry
        if walk_error is not None:
            errors.append(str(walk_error))

        with self._lock:
            count = len(self.files)
        if errors:
            raise IndexingError(errors, count)
        return count

    def search(self, keyword: str) -> list[SearchResult]:
        """Return lines containing keyword, ignoring case, ordered by file and line."""
        needle = keyword.lower()
        with self._lock:
            results = [
                SearchResult(entry.path, number)
                for entry in self.files.values()
                for number, text in entry.line_map.items()
                if needle in text.lower()
            ]
        return sorted(results)

    def save_index(self) -> None:
        """Write the index to its JSON file."""
        with self._lock:
            payload = {
                "files": {path: _file_index_to_json(entry) for path, entry in self.files.items()}
            }
            with open(self.index_file_path, "w", encoding="utf-8") as handle:
                json.dump(payload, handle, sort_keys=True, ensure_ascii=False)
                handle.write("\n")

    def load_index(self) -> None:
        """Merge the entries stored in the JSON file into the index."""
        with self._lock:
            with open(self.index_file_path, encoding="utf-8") as handle:
                raw = json.load(handle)
            if raw is None:
                return
            if not isinstance(raw, dict):
                raise ValueError("index file does not hold a JSON object")
            files = raw.get("files")
            if files is None:
                self.files = {}
                return
            if not isinstance(files, dict):
                raise ValueError("files must be an object")
            for path, data in files.items():
                self.files[path] = _file_index_from_json(data)