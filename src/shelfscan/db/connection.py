# ABOUTME: Opens the local SQLite book store, creating the file and schema on first use.
# ABOUTME: Refuses databases written by a newer shelfscan schema.

import sqlite3
from pathlib import Path

from shelfscan.db.schema import SCHEMA_V1, SCHEMA_VERSION
from shelfscan.db.store import StoreError

DEFAULT_DB_PATH = Path.home() / ".shelfscan" / "library.db"


def schema_version(conn: sqlite3.Connection) -> int:
    """Return the applied schema version, or 0 for an empty database."""
    has_table = conn.execute(
        "SELECT 1 FROM sqlite_master WHERE type='table' AND name='schema_version'"
    ).fetchone()
    if has_table is None:
        return 0
    row = conn.execute("SELECT MAX(version) FROM schema_version").fetchone()
    return row[0] or 0


def open_library(path: Path | None = None) -> sqlite3.Connection:
    """Open (or create) the library database at path.

    Rows come back as sqlite3.Row and the journal runs in WAL mode, so `ls`
    can read while a scan session writes.

    Raises:
        StoreError: If the file holds a schema newer than SCHEMA_VERSION.
    """
    db_path = path or DEFAULT_DB_PATH
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")

    version = schema_version(conn)
    if version == 0:
        conn.executescript(SCHEMA_V1)
    elif version > SCHEMA_VERSION:
        conn.close()
        raise StoreError(
            f"{db_path} uses schema version {version}; "
            f"this shelfscan supports up to {SCHEMA_VERSION}"
        )
    return conn
