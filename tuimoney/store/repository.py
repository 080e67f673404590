"""SQLite implementation of the entry repository."""

import sqlite3
from pathlib import Path
from typing import Any

import structlog

from tuimoney.dates import format_date
from tuimoney.domain.errors import ConnectionFailed, ConstraintViolation, StorageError
from tuimoney.domain.models import Entry, EntryFilter, ValidEntry
from tuimoney.domain.repository import EntryRepository
from tuimoney.store.mapper import entry_to_params, row_to_entry
from tuimoney.store.schema import apply_migrations, connect

logger = structlog.get_logger(__name__)

_SELECT_ENTRIES = "SELECT id, kind, amount_cents, category, note, occurred_on FROM entries"


def _storage_error(action: str, error: sqlite3.Error) -> StorageError:
    if isinstance(error, sqlite3.IntegrityError):
        return ConstraintViolation(f"Could not {action}: {error}")
    return ConnectionFailed(f"Could not {action}: {error}")


def build_list_query(entry_filter: EntryFilter) -> tuple[str, list[Any]]:
    """Build the SELECT for a filter.

    Returns:
        Tuple of (sql, params). Every filter value is bound, never interpolated.
    """
    conditions = []
    params: list[Any] = []

    if entry_filter.start is not None:
        conditions.append("occurred_on >= ?")
        params.append(format_date(entry_filter.start))
    if entry_filter.end is not None:
        conditions.append("occurred_on <= ?")
        params.append(format_date(entry_filter.end))
    if entry_filter.category is not None:
        conditions.append("category = ?")
        params.append(entry_filter.category)

    query = _SELECT_ENTRIES
    if conditions:
        query += " WHERE " + " AND ".join(conditions)
    query += " ORDER BY occurred_on DESC, id DESC"
    return query, params


class SqliteRepository(EntryRepository):
    """Entry repository backed by one SQLite connection.

    The repository owns the connection until ``close`` is called.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    @classmethod
    def open(cls, db_path: Path | str) -> "SqliteRepository":
        """Open the database and apply pending migrations.

        Args:
            db_path: Path to the database file, or ":memory:".

        Raises:
            ConnectionFailed: If the database cannot be opened.
            MigrationFailed: If a migration fails. The connection is closed.
        """
        conn = connect(db_path)
        try:
            apply_migrations(conn)
        except StorageError:
            conn.close()
            raise
        return cls(conn)

    def add(self, entry: ValidEntry) -> Entry:
        try:
            cursor = self._conn.execute(
                "INSERT INTO entries (kind, amount_cents, category, note, occurred_on) VALUES (?, ?, ?, ?, ?)",
                entry_to_params(entry),
            )
        except sqlite3.Error as e:
            logger.error("entry_add_failed", error=str(e))
            raise _storage_error("add entry", e) from e
        except OverflowError as e:
            # Raised by the sqlite3 binding for ints beyond 64 bits.
            logger.error("entry_add_failed", error=str(e))
            raise ConstraintViolation(f"Could not add entry: {e}") from e

        stored = Entry.from_valid(cursor.lastrowid, entry)
        logger.info("entry_added", id=stored.id, kind=stored.kind.value, category=stored.category)
        return stored

    def list(self, entry_filter: EntryFilter | None = None) -> list[Entry]:
        query, params = build_list_query(entry_filter or EntryFilter())
        try:
            rows = self._conn.execute(query, params).fetchall()
        except sqlite3.Error as e:
            logger.error("entry_list_failed", error=str(e))
            raise _storage_error("list entries", e) from e
        return [row_to_entry(row) for row in rows]

    def close(self) -> None:
        self._conn.close()
        logger.info("database_closed")
