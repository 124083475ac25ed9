"""Rules deciding which files are worth indexing."""

from __future__ import annotations

import os

MAX_FILE_SIZE = 10 * 1024 * 1024


def _suffixes(*groups: str) -> frozenset[str]:
    """Build a set of dotted, lower-case suffixes from space-separated names."""
    return frozenset(f".{name}" for group in groups for name in group.split())


DEFAULT_EXCLUDED_DIRS = tuple(".git .svn node_modules vendor bin obj".split())

DEFAULT_EXCLUDED_EXTENSIONS = _suffixes(
    "exe dll so dylib o a out obj",           # compiled objects and programs
    "jpg jpeg png gif bmp ico svg",           # images
    "mp3 mp4 avi mkv mov flv wmv",            # audio and video
    "zip tar gz rar 7z jar war",              # archives
    "class pyc pyo",                          # bytecode
)

TEXT_EXTENSIONS = _suffixes(
    "txt md log csv tsv",                     # plain text and data
    "json xml html htm css js",               # web and markup
    "go py java c cpp h hpp cs php rb pl",    # source code
    "sh bat ps1",                             # scripts
    "yaml yml toml ini cfg conf",             # configuration
)


def _extension(path: str) -> str:
    _, ext = os.path.splitext("x" + os.path.basename(path))
    return ext.lower()


def should_index_file(path: str) -> bool:
    """Return True for a readable, small, non-excluded regular file."""
    try:
        info = os.stat(path)
    except OSError:
        return False
    if os.path.isdir(path):
        return False
    if info.st_size > MAX_FILE_SIZE:
        return False

    dir_path = os.path.dirname(path) or "."
    if any(excluded in dir_path for excluded in DEFAULT_EXCLUDED_DIRS):
        return False

    return _extension(path) not in DEFAULT_EXCLUDED_EXTENSIONS


def is_text_file(path: str) -> bool:
    """Return True if the file's extension is a known text format."""
    return _extension(path) in TEXT_EXTENSIONS