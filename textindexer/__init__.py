"""Line-level indexing and case-insensitive keyword search over directories of text files."""

__version__ = "0.1.0"