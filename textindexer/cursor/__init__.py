"""Concurrent indexer with a JSON cache, keyword search and a grouped-output command."""