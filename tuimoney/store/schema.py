"""Database location, connection setup and the migration runner."""

import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

import structlog

from tuimoney.domain.errors import ConnectionFailed, MigrationFailed
from tuimoney.domain.models import MigrationRecord
from tuimoney.store.migrations import MIGRATIONS, Migration

logger = structlog.get_logger(__name__)

DEFAULT_DB_NAME = "tui-money.db"


def get_db_path() -> Path:
    """Get the default database path (in the working directory)."""
    return Path.cwd() / DEFAULT_DB_NAME


def database_exists(db_path: Path | None = None) -> bool:
    """Check if the database file exists.

    Args:
        db_path: Path to check. If None, uses default location.

    Returns:
        True if database exists, False otherwise.
    """
    if db_path is None:
        db_path = get_db_path()
    return db_path.exists()


def connect(db_path: Path | str | None = None) -> sqlite3.Connection:
    """Open a connection in autocommit mode with row factory.

    Transactions are opened explicitly with BEGIN where they are needed.

    Args:
        db_path: Path to the database file, or ":memory:". If None, uses default location.

    Raises:
        ConnectionFailed: If the file cannot be opened.
    """
    if db_path is None:
        db_path = get_db_path()
    try:
        conn = sqlite3.connect(db_path, isolation_level=None)
    except sqlite3.Error as e:
        raise ConnectionFailed(f"Could not open database {db_path}: {e}") from e
    conn.row_factory = sqlite3.Row
    logger.info("database_opened", path=str(db_path))
    return conn


def split_statements(script: str) -> list[str]:
    """Split a SQL script into complete statements."""
    statements = []
    buffer = ""
    for line in script.splitlines(keepends=True):
        buffer += line
        if sqlite3.complete_statement(buffer):
            if buffer.strip():
                statements.append(buffer.strip())
            buffer = ""
    if buffer.strip():
        statements.append(buffer.strip())
    return statements


def ensure_migrations_table(conn: sqlite3.Connection) -> None:
    """Create the schema_migrations log if it is missing.

    Raises:
        ConnectionFailed: If the database cannot be written (e.g. not a database file).
    """
    try:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS schema_migrations (
                version TEXT PRIMARY KEY,
                applied_at TEXT NOT NULL
            )
            """
        )
    except sqlite3.Error as e:
        raise ConnectionFailed(f"Could not prepare schema_migrations: {e}") from e


def applied_migrations(conn: sqlite3.Connection) -> list[MigrationRecord]:
    """Read the migration log.

    Returns:
        Recorded migrations in version order.

    Raises:
        ConnectionFailed: If the log cannot be read.
    """
    ensure_migrations_table(conn)
    try:
        rows = conn.execute("SELECT version, applied_at FROM schema_migrations ORDER BY version").fetchall()
    except sqlite3.Error as e:
        raise ConnectionFailed(f"Could not read schema_migrations: {e}") from e
    return [MigrationRecord(version=row["version"], applied_at=row["applied_at"]) for row in rows]


def _apply_one(conn: sqlite3.Connection, migration: Migration) -> None:
    applied_at = datetime.now(timezone.utc).isoformat(timespec="seconds")
    try:
        conn.execute("BEGIN")
        for statement in split_statements(migration.sql):
            conn.execute(statement)
        conn.execute(
            "INSERT INTO schema_migrations (version, applied_at) VALUES (?, ?)",
            (migration.version, applied_at),
        )
        conn.execute("COMMIT")
    except sqlite3.Error as e:
        if conn.in_transaction:
            conn.execute("ROLLBACK")
        logger.error("migration_failed", version=migration.version, error=str(e))
        raise MigrationFailed(migration.version, e) from e


def apply_migrations(conn: sqlite3.Connection, migrations: Iterable[Migration] = MIGRATIONS) -> list[str]:
    """Apply every embedded migration that is not yet recorded.

    Each migration runs in its own transaction: its statements, then its
    schema_migrations row. A failure rolls that migration back and stops.

    Args:
        conn: Connection opened with ``connect``.
        migrations: Migrations to consider. Defaults to the embedded set.

    Returns:
        Versions applied by this call, in order. Empty when up to date.

    Raises:
        ConnectionFailed: If the migration log cannot be created or read.
        MigrationFailed: If a migration fails; earlier ones stay applied.
    """
    migrations = list(migrations)
    recorded = {record.version for record in applied_migrations(conn)}
    known = {migration.version for migration in migrations}

    for version in sorted(recorded - known):
        logger.warning("unknown_migration_recorded", version=version)

    newly_applied = []
    for migration in sorted(migrations, key=lambda m: m.version):
        if migration.version in recorded:
            continue
        _apply_one(conn, migration)
        logger.info("migration_applied", version=migration.version)
        newly_applied.append(migration.version)

    return newly_applied


def init_database(db_path: Path | None = None) -> list[str]:
    """Create the database if needed and bring its schema up to date.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Versions applied by this call.

    Raises:
        ConnectionFailed: If the database cannot be opened.
        MigrationFailed: If a migration fails.
    """
    if db_path is None:
        db_path = get_db_path()

    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = connect(db_path)
    try:
        return apply_migrations(conn)
    finally:
        conn.close()
