# ABOUTME: SQL DDL statements for the shelfscan local book store.
# ABOUTME: Defines the books table, its indexes, and the schema version marker.

SCHEMA_VERSION = 1

SCHEMA_V1 = """
-- Book collection table
CREATE TABLE books (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    title       TEXT NOT NULL,
    author      TEXT,
    publisher   TEXT,
    cover_url   TEXT,
    isbn        TEXT,
    status      TEXT NOT NULL DEFAULT 'Unread'
                CHECK (status IN ('Unread', 'Reading', 'Finished')),
    category    TEXT,
    created_at  TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%f', 'now'))
);

-- Scanned books carry an ISBN; manual entries do not
CREATE UNIQUE INDEX idx_books_isbn ON books(isbn) WHERE isbn IS NOT NULL;
CREATE INDEX idx_books_created_at ON books(created_at);

CREATE TABLE schema_version (
    version    INTEGER NOT NULL,
    applied_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

INSERT INTO schema_version (version) VALUES (1);
"""
