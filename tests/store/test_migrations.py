"""Tests for the migration runner in tuimoney.store.schema."""

import sqlite3
from datetime import date
from pathlib import Path

import pytest

from tuimoney.domain import ConnectionFailed, EntryKind, MigrationFailed
from tuimoney.domain.models import NewEntry
from tuimoney.domain.validation import validate
from tuimoney.store import SqliteRepository, applied_migrations, apply_migrations, connect, init_database
from tuimoney.store.migrations import MIGRATIONS, Migration
from tuimoney.store.schema import split_statements


def table_names(conn: sqlite3.Connection) -> set[str]:
    rows = conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'").fetchall()
    return {row["name"] for row in rows}


def schema_sql(conn: sqlite3.Connection) -> list[str]:
    rows = conn.execute("SELECT sql FROM sqlite_master WHERE sql IS NOT NULL ORDER BY name").fetchall()
    return [row["sql"] for row in rows]


class TestApplyMigrations:
    """Tests for apply_migrations."""

    def test_fresh_database_gets_every_migration(self) -> None:
        """Should create entries and schema_migrations and record every version."""
        conn = connect(":memory:")

        applied = apply_migrations(conn)

        assert applied == [migration.version for migration in MIGRATIONS]
        assert {"entries", "schema_migrations"} <= table_names(conn)
        assert [record.version for record in applied_migrations(conn)] == applied
        conn.close()

    def test_second_run_is_a_no_op(self) -> None:
        """Running twice should leave the schema and the log unchanged."""
        conn = connect(":memory:")
        apply_migrations(conn)
        schema_before = schema_sql(conn)
        log_before = applied_migrations(conn)

        assert apply_migrations(conn) == []
        assert schema_sql(conn) == schema_before
        assert applied_migrations(conn) == log_before
        conn.close()

    def test_only_pending_versions_run(self) -> None:
        """Should apply only the versions not yet recorded, in version order."""
        conn = connect(":memory:")
        apply_migrations(conn, MIGRATIONS[:1])

        assert apply_migrations(conn) == [MIGRATIONS[1].version]
        conn.close()

    def test_failed_migration_rolls_back(self) -> None:
        """A failing migration should leave no partial schema and no log row."""
        conn = connect(":memory:")
        broken = [
            MIGRATIONS[0],
            Migration("002_broken", "CREATE TABLE half_done (id INTEGER);\nINSERT INTO no_such_table VALUES (1);\n"),
        ]

        with pytest.raises(MigrationFailed) as excinfo:
            apply_migrations(conn, broken)

        assert excinfo.value.version == "002_broken"
        assert isinstance(excinfo.value.cause, sqlite3.Error)
        assert "half_done" not in table_names(conn)
        assert "entries" in table_names(conn)
        assert [record.version for record in applied_migrations(conn)] == ["001_init"]
        conn.close()

    def test_accepts_a_generator(self) -> None:
        conn = connect(":memory:")
        assert apply_migrations(conn, (m for m in MIGRATIONS)) == [m.version for m in MIGRATIONS]
        conn.close()

    def test_unknown_recorded_version_is_ignored(self) -> None:
        """A version recorded by a newer build should not stop startup."""
        conn = connect(":memory:")
        apply_migrations(conn)
        conn.execute("INSERT INTO schema_migrations (version, applied_at) VALUES ('999_future', 'x')")

        assert apply_migrations(conn) == []
        conn.close()

    def test_not_a_database_fails_to_connect(self, tmp_path: Path) -> None:
        """A file that is not SQLite should raise ConnectionFailed."""
        bogus = tmp_path / "notes.db"
        bogus.write_text("this is not a database" * 100)
        conn = connect(bogus)

        with pytest.raises(ConnectionFailed):
            apply_migrations(conn)
        conn.close()


class TestSplitStatements:
    def test_splits_on_complete_statements(self) -> None:
        script = "CREATE TABLE a (x TEXT);\nCREATE TABLE b (y TEXT DEFAULT ';');\n"
        assert split_statements(script) == ["CREATE TABLE a (x TEXT);", "CREATE TABLE b (y TEXT DEFAULT ';');"]


class TestInitDatabase:
    """End-to-end tests against a database file."""

    def test_creates_file_and_parent_directory(self, tmp_path: Path) -> None:
        db_path = tmp_path / "nested" / "tui-money.db"

        applied = init_database(db_path)

        assert db_path.exists()
        assert applied == [migration.version for migration in MIGRATIONS]
        assert init_database(db_path) == []

    def test_first_entry_gets_id_one(self, db_path: Path) -> None:
        """Fresh file, migrations, add, list: the entry comes back with id 1."""
        entry = validate(NewEntry(EntryKind.EXPENSE, 500, "Food", None, "2024-01-01"))

        with SqliteRepository.open(db_path) as repo:
            stored = repo.add(entry)
            listed = repo.list()

        assert stored.id == 1
        assert len(listed) == 1
        assert listed[0].id == 1
        assert listed[0].occurred_on == date(2024, 1, 1)

    def test_reopen_keeps_entries(self, db_path: Path) -> None:
        entry = validate(NewEntry(EntryKind.INCOME, 100000, "Salary", "January", "2024-01-31"))

        with SqliteRepository.open(db_path) as repo:
            repo.add(entry)
        with SqliteRepository.open(db_path) as repo:
            listed = repo.list()

        assert [e.category for e in listed] == ["Salary"]
