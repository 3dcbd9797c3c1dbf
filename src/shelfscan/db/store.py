# ABOUTME: Generic record store contract and its SQLite implementation.
# ABOUTME: select/insert/update/delete by table name with equality filters.

import re
import sqlite3
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

# Table and column names are interpolated into SQL, so they must be plain identifiers.
_IDENT_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class StoreError(Exception):
    """Raised when the record store rejects or fails an operation."""


class DuplicateBookError(StoreError):
    """Raised when an insert violates the store's unique ISBN constraint."""


@dataclass(frozen=True)
class OrderBy:
    """Sort specification for select()."""

    column: str
    descending: bool = False


@runtime_checkable
class RecordStore(Protocol):
    """Minimal relational contract the collection depends on.

    Filters are equality matches ANDed together. Records are plain dicts.
    update() and delete() return the number of affected records.
    """

    async def select(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        order: OrderBy | None = None,
    ) -> list[dict[str, Any]]: ...

    async def insert(self, table: str, record: dict[str, Any]) -> dict[str, Any]: ...

    async def update(
        self, table: str, patch: dict[str, Any], filters: dict[str, Any]
    ) -> int: ...

    async def delete(self, table: str, filters: dict[str, Any]) -> int: ...


def _ident(name: str) -> str:
    if not _IDENT_RE.match(name):
        raise StoreError(f"Invalid identifier: {name!r}")
    return name


def _where(filters: dict[str, Any] | None) -> tuple[str, list[Any]]:
    """Build a WHERE clause from equality filters. None matches IS NULL."""
    if not filters:
        return "", []
    clauses = []
    values: list[Any] = []
    for column, value in filters.items():
        if value is None:
            clauses.append(f"{_ident(column)} IS NULL")
        else:
            clauses.append(f"{_ident(column)} = ?")
            values.append(value)
    return " WHERE " + " AND ".join(clauses), values


class SqliteRecordStore:
    """RecordStore backed by a local sqlite3 connection (see open_library).

    The async methods run their sqlite3 calls directly on the event loop
    thread: a local file answers in microseconds, and the connection stays
    bound to the thread that opened it.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    async def select(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        order: OrderBy | None = None,
    ) -> list[dict[str, Any]]:
        where, values = _where(filters)
        sql = f"SELECT * FROM {_ident(table)}{where}"
        if order is not None:
            direction = "DESC" if order.descending else "ASC"
            # id breaks ties between rows created in the same millisecond
            sql += f" ORDER BY {_ident(order.column)} {direction}, id {direction}"
        try:
            cursor = self._conn.execute(sql, values)
        except sqlite3.Error as exc:
            raise StoreError(str(exc)) from exc
        return [dict(row) for row in cursor.fetchall()]

    async def insert(self, table: str, record: dict[str, Any]) -> dict[str, Any]:
        """Insert a record and return it as stored, including generated columns.

        Raises:
            DuplicateBookError: If the record's isbn is already present.
            StoreError: On any other database error.
        """
        columns = ", ".join(_ident(k) for k in record)
        placeholders = ", ".join("?" for _ in record)
        try:
            cursor = self._conn.execute(
                f"INSERT INTO {_ident(table)} ({columns}) VALUES ({placeholders})",
                list(record.values()),
            )
            self._conn.commit()
        except sqlite3.IntegrityError as exc:
            if f"UNIQUE constraint failed: {table}.isbn" in str(exc):
                raise DuplicateBookError(
                    f"Book with ISBN {record.get('isbn')} already exists"
                ) from exc
            raise StoreError(str(exc)) from exc
        except sqlite3.Error as exc:
            raise StoreError(str(exc)) from exc

        rows = await self.select(table, {"id": cursor.lastrowid})
        return rows[0]

    async def update(
        self, table: str, patch: dict[str, Any], filters: dict[str, Any]
    ) -> int:
        if not patch:
            return 0
        if not filters:
            raise StoreError("Refusing to update without a filter")
        set_clause = ", ".join(f"{_ident(k)} = ?" for k in patch)
        where, values = _where(filters)
        try:
            cursor = self._conn.execute(
                f"UPDATE {_ident(table)} SET {set_clause}{where}",
                [*patch.values(), *values],
            )
            self._conn.commit()
        except sqlite3.Error as exc:
            raise StoreError(str(exc)) from exc
        return cursor.rowcount

    async def delete(self, table: str, filters: dict[str, Any]) -> int:
        if not filters:
            raise StoreError("Refusing to delete without a filter")
        where, values = _where(filters)
        try:
            cursor = self._conn.execute(f"DELETE FROM {_ident(table)}{where}", values)
            self._conn.commit()
        except sqlite3.Error as exc:
            raise StoreError(str(exc)) from exc
        return cursor.rowcount
