# ABOUTME: shelfscan - scan ISBN barcodes into a personal book collection.
# ABOUTME: Lookup via openBD and Google Books, storage in SQLite or a PostgREST table.

__version__ = "0.1.0"
