[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "textindexer"
version = "0.1.0"
description = "Index the lines of text files in a directory tree and search them for keywords"
requires-python = ">=3.10"
dependencies = []
keywords = ["index", "search", "grep", "text", "files"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Indexing",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
textindexer = "textindexer.cursor.cli:main"
textindexer-simple = "textindexer.windsurf.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["textindexer"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
