"""Extension-filtered indexer persisted to a single JSON index file, with its command."""