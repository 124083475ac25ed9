# textindexer

Index the text files under a directory, line by line, and search the index
for a keyword. Matching is a case-insensitive substring test and reports the
file and line number of every matching line.

## Installation

    pip install .

## Commands

Two command-line tools are installed. Both exit with status 0 on success and
1 on a usage or indexing error.

### `textindexer`

    textindexer index <directory_path>
    textindexer search <keyword>

On every run the cache file `~/.cache/indexer/.indexer_cache.json` is read
first; cached entries whose files no longer exist are dropped.

`index` walks the directory with one worker thread per CPU. It skips hidden
files (names starting with `.`), files with common binary extensions
(`.exe`, `.so`, `.zip`, `.png`, `.pdf`, `.pyc`, ...) and files over 100 MB.
It prints progress, a summary of files processed, indexed and skipped, and a
few sample lines from up to five indexed files. The index is then replaced by
the result of this walk and written to the cache file.

`search` looks through the cached entries and prints the matching lines,
grouped by file (shown relative to the current directory) and sorted by path
and line number:

    path/to/file.txt:
         3: a line containing the keyword

### `textindexer-simple`

    textindexer-simple index <directory_path>
    textindexer-simple search <keyword>

Only files with a recognised text extension (`.txt`, `.md`, `.py`, `.go`,
`.json`, `.yaml`, `.csv`, ...) are indexed. Files over 10 MB are skipped, as
is any file whose directory path contains `.git`, `.svn`, `node_modules`,
`vendor`, `bin` or `obj`. Indexing uses four worker threads; if any file
cannot be read, or has a line of 64 KiB or more, the command reports the
number of errors and saves nothing. Otherwise the index is written to
`~/.indexer_data.json`, replacing what was there.

`search` loads that file and prints each hit, ordered by path and line, as:

     - /abs/path/to/file.txt:12

## Library use

    from textindexer.cursor.indexer import Index
    from textindexer.cursor.search import search

    index = Index(workers=4)
    index.index_directory("/path/to/project")
    for result in search(index, "keyword"):
        print(result.file_path, result.line_number, result.line, result.match_count)

`textindexer.cursor.cache.Cache(cache_dir)` saves an `Index` to, and loads
`FileEntry` objects from, a JSON file in `cache_dir`; `Index.update()` adds
loaded entries to an index.

    from textindexer.windsurf.indexer import Indexer, IndexingError

    indexer = Indexer("index.json")
    try:
        count = indexer.index_directory("/path/to/project")
    except IndexingError as exc:
        print(exc, exc.errors)
    indexer.save_index()
    print(indexer.search("keyword"))

`textindexer.windsurf.file_utils` provides `should_index_file()` and
`is_text_file()`, the filters the simple indexer applies.

## What it does not do

There is no incremental re-indexing: each `index` run replaces the stored
index with the files found in the one directory given. Keywords are plain
substrings; there are no regular expressions, word boundaries or ranking.

## Running the tests

    pip install .[test]
    pytest