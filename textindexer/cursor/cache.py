"""JSON file cache for indexed file entries."""

from __future__ import annotations

import json
import os

from textindexer.cursor.indexer import FileEntry, Index

CACHE_FILE_NAME = ".indexer_cache.json"


class Cache:
    """Stores an index's entries in a JSON file inside a cache directory."""

    def __init__(self, cache_dir: str | os.PathLike[str]) -> None:
        self.file_path = os.path.join(os.fspath(cache_dir), CACHE_FILE_NAME)

    def save(self, index: Index) -> None:
        """Write the index's entries to the cache file."""
        files = index.get_files()
        os.makedirs(os.path.dirname(self.file_path), mode=0o755, exist_ok=True)
        payload = {path: entry.to_dict() for path, entry in files.items()}
        text = json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False)
        with open(self.file_path, "w", encoding="utf-8") as handle:
            handle.write(text)

    def load(self) -> dict[str, FileEntry]:
        """Read cached entries; a missing cache file yields an empty mapping."""
        try:
            with open(self.file_path, encoding="utf-8") as handle:
                text = handle.read()
        except FileNotFoundError:
            return {}
        raw = json.loads(text)
        if raw is None:
            return {}
        if not isinstance(raw, dict):
            raise ValueError("cache file does not hold a JSON object")
        return {path: FileEntry.from_dict(entry) for path, entry in raw.items()}