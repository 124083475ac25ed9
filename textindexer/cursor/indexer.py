"""Concurrent line indexer for directory trees."""

from __future__ import annotations

import os
import stat
import threading
from collections.abc import Iterator, Mapping
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any

MAX_LINE_LENGTH = 16 * 1024 * 1024
MAX_FILE_SIZE = 100 * 1024 * 1024
SAMPLE_FILE_COUNT = 5
SAMPLE_LINE_COUNT = 3

BINARY_EXTENSIONS = frozenset(
    {
        ".exe", ".dll", ".so", ".dylib",
        ".bin", ".obj", ".o", ".a",
        ".lib", ".pyc", ".class", ".jar",
        ".war", ".ear", ".zip", ".tar",
        ".gz", ".7z", ".rar", ".pdf",
        ".jpg", ".jpeg", ".png", ".gif",
        ".bmp", ".ico", ".mp3", ".mp4",
        ".avi", ".mov", ".wmv", ".flv",
    }
)


class _FileIndexingError(Exception):
    """Raised when a single file cannot be indexed."""


@dataclass
class FileEntry:
    """An indexed file: its absolute path, numbered lines and mtime."""

    path: str
    line_index: dict[int, str] = field(default_factory=dict)
    modified: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping of this entry."""
        return {
            "path": self.path,
            "line_index": {str(number): text for number, text in self.line_index.items()},
            "modified": self.modified,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FileEntry:
        """Build an entry from a mapping produced by :meth:`to_dict`."""
        if not isinstance(data, Mapping):
            raise ValueError(f"file entry must be an object, not {type(data).__name__}")
        raw_lines = data.get("line_index") or {}
        if not isinstance(raw_lines, Mapping):
            raise ValueError("line_index must be an object")
        line_index: dict[int, str] = {}
        for key, text in raw_lines.items():
            try:
                number = int(key)
            except (TypeError, ValueError) as exc:
                raise ValueError(f"invalid line number {key!r}") from exc
            if not isinstance(text, str):
                raise ValueError(f"line {number} must be a string")
            line_index[number] = text
        path = data.get("path") or ""
        if not isinstance(path, str):
            raise ValueError("path must be a string")
        try:
            modified = int(data.get("modified") or 0)
        except (TypeError, ValueError) as exc:
            raise ValueError("modified must be an integer") from exc
        return cls(path=path, line_index=line_index, modified=modified)


def _extension(path: str) -> str:
    base = os.path.basename(path)
    dot = base.rfind(".")
    return base[dot:] if dot >= 0 else ""


def is_binary_file(path: str) -> bool:
    """Return True if the file's extension marks it as a likely binary."""
    return _extension(path).lower() in BINARY_EXTENSIONS


def _read_lines(handle) -> dict[int, str]:
    data = handle.read()
    if not data:
        return {}
    chunks = data.split(b"\n")
    if chunks[-1] == b"":
        chunks.pop()
    lines: dict[int, str] = {}
    for number, chunk in enumerate(chunks, start=1):
        if len(chunk) >= MAX_LINE_LENGTH:
            raise _FileIndexingError("error scanning file: token too long")
        lines[number] = chunk.decode("utf-8", errors="replace")
    return lines


def _warn_access(path: str, exc: OSError) -> None:
    print(f"Warning: error accessing {path}: {exc}")


def _walk(root: str) -> Iterator[tuple[str, os.stat_result]]:
    """Yield every non-directory below root in lexical order, with its lstat."""
    try:
        info = os.lstat(root)
    except OSError as exc:
        _warn_access(root, exc)
        return
    yield from _visit(root, info)


def _visit(path: str, info: os.stat_result) -> Iterator[tuple[str, os.stat_result]]:
    if not stat.S_ISDIR(info.st_mode):
        yield path, info
        return
    try:
        names = sorted(os.listdir(path))
    except OSError as exc:
        _warn_access(path, exc)
        return
    for name in names:
        child = os.path.join(path, name)
        try:
            child_info = os.lstat(child)
        except OSError as exc:
            _warn_access(child, exc)
            continue
        yield from _visit(child, child_info)


class Index:
    """Thread-safe map of absolute file paths to their indexed lines."""

    def __init__(self, workers: int) -> None:
        self.workers = workers if workers > 0 else 1
        self._lock = threading.Lock()
        self._files: dict[str, FileEntry] = {}
        self._indexed = 0
        self._skipped = 0

    def index_directory(self, root: str) -> None:
        """Replace the index with the text files found below root."""
        print(f"Starting indexing of directory: {root}")
        with self._lock:
            self._indexed = 0
            self._skipped = 0
            self._files = {}

        pending: list[tuple[str, Future]] = []
        with ThreadPoolExecutor(max_workers=self.workers) as pool:
            for path, info in _walk(root):
                if not self._accept(path, info):
                    continue
                pending.append((path, pool.submit(self._index_file, path)))

        for path, future in pending:
            exc = future.exception()
            if exc is not None:
                print(f"Error during indexing: error indexing {path}: {exc}")

        indexed, skipped = self.stats()
        with self._lock:
            files = dict(self._files)

        print("\nIndexing complete:")
        print(f"- Files processed: {indexed + skipped}")
        print(f"- Files indexed: {indexed}")
        print(f"- Files skipped: {skipped}")
        print(f"- Total files in index: {len(files)}")
        self._print_samples(root, files)

    def _accept(self, path: str, info: os.stat_result) -> bool:
        if is_binary_file(path) or os.path.basename(path).startswith("."):
            print(f"Skipping file: {path} (binary or hidden)")
            self._count_skipped()
            return False
        if info.st_size > MAX_FILE_SIZE:
            size_mb = info.st_size / (1024 * 1024)
            print(f"Skipping file: {path} (too large: {size_mb:.2f} MB)")
            self._count_skipped()
            return False
        return True

    def _count_skipped(self) -> None:
        with self._lock:
            self._skipped += 1

    def _index_file(self, path: str) -> None:
        abs_path = os.path.abspath(path)
        try:
            handle = open(path, "rb")
        except OSError as exc:
            raise _FileIndexingError(f"failed to open file: {exc}") from exc
        with handle:
            try:
                modified = int(os.fstat(handle.fileno()).st_mtime)
            except OSError as exc:
                raise _FileIndexingError(f"failed to stat file: {exc}") from exc
            try:
                lines = _read_lines(handle)
            except OSError as exc:
                raise _FileIndexingError(f"error scanning file: {exc}") from exc
        entry = FileEntry(path=abs_path, line_index=lines, modified=modified)
        with self._lock:
            self._files[abs_path] = entry
            self._indexed += 1

    @staticmethod
    def _print_samples(root: str, files: dict[str, FileEntry]) -> None:
        print("\nFirst few indexed files:")
        for path in sorted(files)[:SAMPLE_FILE_COUNT]:
            entry = files[path]
            line_count = len(entry.line_index)
            try:
                rel_path = os.path.relpath(path, root)
            except ValueError:
                rel_path = path
            print(f"- {rel_path} ({line_count} lines)")
            if line_count > 0:
                print("  Sample lines:")
                shown = 0
                for number in range(1, line_count + 1):
                    if shown >= SAMPLE_LINE_COUNT:
                        break
                    if number in entry.line_index:
                        print(f"    {number}: {entry.line_index[number]}")
                        shown += 1

    def get_files(self) -> dict[str, FileEntry]:
        """Return a shallow copy of the indexed files."""
        with self._lock:
            files = dict(self._files)
        print(f"GetFiles called - returning {len(files)} files")
        return files

    def update(self, entries: Mapping[str, FileEntry]) -> None:
        """Add or replace entries, keyed by path."""
        with self._lock:
            self._files.update(entries)

    def stats(self) -> tuple[int, int]:
        """Return (indexed, skipped) counts from the last indexing run."""
        with self._lock:
            return self._indexed, self._skipped