import json
import os

import pytest

from textindexer.windsurf.indexer import IndexingError, Indexer, SearchResult


@pytest.fixture
def tree(tmp_path):
    root = tmp_path / "tree"
    root.mkdir()
    (root / "main.go").write_text("package main\n\n// Keyword here\nfunc main() {}\n")
    (root / "notes.md").write_text("nothing\nsome KEYWORD text\n")
    (root / "image.png").write_bytes(b"keyword")
    (root / "Makefile").write_text("keyword\n")
    vendored = root / "vendor"
    vendored.mkdir()
    (vendored / "lib.go").write_text("keyword\n")
    return root


def test_index_counts_only_text_files(tree, tmp_path):
    indexer = Indexer(tmp_path / "index.json")
    assert indexer.index_directory(str(tree)) == 2
    assert sorted(indexer.files) == [str(tree / "main.go"), str(tree / "notes.md")]


def test_search_ignores_case(tree, tmp_path):
    indexer = Indexer(tmp_path / "index.json")
    indexer.index_directory(str(tree))
    assert indexer.search("keyword") == [
        SearchResult(str(tree / "main.go"), 3),
        SearchResult(str(tree / "notes.md"), 2),
    ]
    assert indexer.search("absent") == []


def test_lines_are_numbered_and_crlf_stripped(tmp_path):
    root = tmp_path / "crlf"
    root.mkdir()
    (root / "a.txt").write_bytes(b"first\r\nsecond\r\nthird")
    indexer = Indexer(tmp_path / "index.json")
    indexer.index_directory(str(root))
    entry = indexer.files[str(root / "a.txt")]
    assert entry.line_map == {1: "first", 2: "second", 3: "third"}


def test_save_and_load_round_trip(tree, tmp_path):
    index_path = tmp_path / "index.json"
    original = Indexer(index_path)
    original.index_directory(str(tree))
    original.save_index()

    raw = json.loads(index_path.read_text(encoding="utf-8"))
    assert set(raw) == {"files"}
    first = raw["files"][str(tree / "main.go")]
    assert set(first) == {"path", "lineMap", "modified"}

    restored = Indexer(index_path)
    restored.load_index()
    assert restored.files == original.files
    assert restored.search("keyword") == original.search("keyword")


def test_load_missing_index_raises(tmp_path):
    indexer = Indexer(tmp_path / "missing.json")
    with pytest.raises(FileNotFoundError):
        indexer.load_index()


def test_load_invalid_json_raises(tmp_path):
    index_path = tmp_path / "index.json"
    index_path.write_text("{broken")
    with pytest.raises(ValueError):
        Indexer(index_path).load_index()


def test_missing_root_raises(tmp_path):
    indexer = Indexer(tmp_path / "index.json")
    with pytest.raises(IndexingError) as info:
        indexer.index_directory(str(tmp_path / "absent"))
    assert len(info.value.errors) == 1
    assert info.value.indexed == 0


def test_overlong_line_is_reported_but_others_indexed(tmp_path):
    root = tmp_path / "long"
    root.mkdir()
    (root / "big.txt").write_bytes(b"x" * 70000 + b"\n")
    (root / "ok.txt").write_text("fine\n")
    indexer = Indexer(tmp_path / "index.json")
    with pytest.raises(IndexingError) as info:
        indexer.index_directory(str(root))
    assert str(info.value) == "encountered 1 errors during indexing"
    assert info.value.indexed == 1
    assert list(indexer.files) == [str(root / "ok.txt")]


def test_repeated_indexing_merges(tmp_path):
    first = tmp_path / "one"
    second = tmp_path / "two"
    first.mkdir()
    second.mkdir()
    (first / "a.txt").write_text("alpha\n")
    (second / "b.txt").write_text("beta\n")
    indexer = Indexer(tmp_path / "index.json")
    assert indexer.index_directory(str(first)) == 1
    assert indexer.index_directory(str(second)) == 2
    assert os.path.join(str(first), "a.txt") in indexer.files