import os

import pytest

from textindexer.cursor.indexer import FileEntry, Index, is_binary_file


@pytest.fixture
def tree(tmp_path):
    (tmp_path / "a.txt").write_text("alpha\nbeta\n")
    (tmp_path / "b.py").write_text("gamma")
    (tmp_path / ".hidden").write_text("secret stuff\n")
    (tmp_path / "image.png").write_bytes(b"\x89PNG\r\n")
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "c.md").write_bytes(b"delta\r\nepsilon")
    return tmp_path


def _abs(path):
    return os.path.abspath(str(path))


def test_indexes_text_files_only(tree):
    idx = Index(2)
    idx.index_directory(str(tree))
    files = idx.get_files()
    expected = {_abs(tree / "a.txt"), _abs(tree / "b.py"), _abs(tree / "sub" / "c.md")}
    assert set(files) == expected


def test_line_contents(tree):
    idx = Index(3)
    idx.index_directory(str(tree))
    files = idx.get_files()
    assert files[_abs(tree / "a.txt")].line_index == {1: "alpha", 2: "beta"}
    assert files[_abs(tree / "b.py")].line_index == {1: "gamma"}
    assert files[_abs(tree / "sub" / "c.md")].line_index == {1: "delta\r", 2: "epsilon"}


def test_stats_match_index(tree):
    idx = Index(2)
    idx.index_directory(str(tree))
    indexed, skipped = idx.stats()
    assert indexed == len(idx.get_files())
    assert skipped == len([".hidden", "image.png"])


def test_entry_path_and_modified(tree):
    idx = Index(1)
    idx.index_directory(str(tree))
    key = _abs(tree / "a.txt")
    entry = idx.get_files()[key]
    assert entry.path == key
    assert os.path.isabs(entry.path)
    assert entry.modified == int(os.stat(key).st_mtime)


def test_reindex_replaces_previous_contents(tmp_path):
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.mkdir()
    second.mkdir()
    (first / "one.txt").write_text("one\n")
    (second / "two.txt").write_text("two\n")
    idx = Index(2)
    idx.index_directory(str(first))
    idx.index_directory(str(second))
    assert set(idx.get_files()) == {_abs(second / "two.txt")}


def test_missing_root_warns_and_is_empty(tmp_path, capsys):
    idx = Index(2)
    idx.index_directory(str(tmp_path / "missing"))
    assert idx.get_files() == {}
    assert "Warning: error accessing" in capsys.readouterr().out


def test_empty_file_has_no_lines(tmp_path):
    (tmp_path / "empty.txt").write_text("")
    idx = Index(1)
    idx.index_directory(str(tmp_path))
    assert idx.get_files()[_abs(tmp_path / "empty.txt")].line_index == {}


@pytest.mark.parametrize("workers", [0, -3])
def test_nonpositive_workers_clamped(workers):
    assert Index(workers).workers == 1


@pytest.mark.parametrize(
    "path, expected",
    [
        ("x.EXE", True),
        ("lib.so", True),
        ("docs/manual.pdf", True),
        ("main.go", False),
        ("README", False),
        ("notes.txt", False),
    ],
)
def test_is_binary_file(path, expected):
    assert is_binary_file(path) is expected


def test_file_entry_round_trip():
    entry = FileEntry(path="/tmp/x.txt", line_index={1: "a", 10: "b"}, modified=1700000000)
    data = entry.to_dict()
    assert set(data["line_index"]) == {"1", "10"}
    assert FileEntry.from_dict(data) == entry


def test_file_entry_rejects_bad_line_number():
    with pytest.raises(ValueError):
        FileEntry.from_dict({"path": "/x", "line_index": {"one": "a"}, "modified": 0})


def test_update_and_get_files_copy():
    idx = Index(1)
    entry = FileEntry(path="/data/f.txt", line_index={1: "hello"}, modified=5)
    idx.update({entry.path: entry})
    files = idx.get_files()
    assert files == {entry.path: entry}
    files.clear()
    assert idx.get_files() == {entry.path: entry}