"""Tests for the typer entry point."""

from datetime import date
from pathlib import Path

import pytest
from typer.testing import CliRunner

from conftest import make_entry
from tuimoney.cli import app
from tuimoney.config import DEFAULT_CONFIG, load_config
from tuimoney.domain import EntryKind
from tuimoney.store import SqliteRepository, applied_migrations, apply_migrations, connect, database_exists
from tuimoney.store.migrations import MIGRATIONS, Migration

runner = CliRunner()


@pytest.fixture
def paths(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> tuple[Path, Path]:
    """Database and config paths inside a scratch working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path / "money.db", tmp_path / "config" / "config.toml"


def opts(paths: tuple[Path, Path]) -> list[str]:
    db_path, config_path = paths
    return ["--db", str(db_path), "--config", str(config_path)]


def seed(db_path: Path) -> None:
    with SqliteRepository.open(db_path) as repo:
        repo.add(make_entry(category="Food", occurred_on=date(2024, 1, 5)))
        repo.add(make_entry(kind=EntryKind.INCOME, amount_cents=250000, category="Salary", occurred_on=date(2024, 2, 1)))


class TestInit:
    """Tests for `tui-money init`."""

    def test_creates_database_and_config(self, paths: tuple[Path, Path]) -> None:
        result = runner.invoke(app, ["init", *opts(paths)])

        assert result.exit_code == 0, result.output
        assert database_exists(paths[0])
        assert paths[1].exists()
        assert "Initialization complete" in result.output

    def test_refuses_to_overwrite(self, paths: tuple[Path, Path]) -> None:
        runner.invoke(app, ["init", *opts(paths)])

        result = runner.invoke(app, ["init", *opts(paths)])

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_force_overwrites_config(self, paths: tuple[Path, Path]) -> None:
        runner.invoke(app, ["init", *opts(paths)])
        seed(paths[0])

        result = runner.invoke(app, ["init", "--force", *opts(paths)])

        assert result.exit_code == 0, result.output
        with SqliteRepository.open(paths[0]) as repo:
            assert len(repo.list()) == 2

    def test_migrate_needs_database(self, paths: tuple[Path, Path]) -> None:
        result = runner.invoke(app, ["init", "--migrate", *opts(paths)])

        assert result.exit_code == 1
        assert "No database found" in result.output

    def test_migrate_prints_log(self, paths: tuple[Path, Path]) -> None:
        runner.invoke(app, ["init", *opts(paths)])

        result = runner.invoke(app, ["init", "--migrate", *opts(paths)])

        assert result.exit_code == 0, result.output
        assert "up to date" in result.output
        assert "001_init" in result.output

    def test_bad_config_exits(self, paths: tuple[Path, Path]) -> None:
        paths[1].parent.mkdir(parents=True)
        paths[1].write_text("[display]\ncurrency_symbol = 5\n")

        result = runner.invoke(app, ["init", *opts(paths)])

        assert result.exit_code == 1
        assert "Config error" in result.output

    def test_force_replaces_malformed_config(self, paths: tuple[Path, Path]) -> None:
        """--force does not read the config it is about to overwrite."""
        paths[1].parent.mkdir(parents=True)
        paths[1].write_text("[display\ncurrency_symbol = ")

        result = runner.invoke(app, ["init", "--force", *opts(paths)])

        assert result.exit_code == 0, result.output
        assert load_config(paths[1]) == DEFAULT_CONFIG


class TestList:
    """Tests for `tui-money list`."""

    def test_lists_entries(self, paths: tuple[Path, Path]) -> None:
        seed(paths[0])

        result = runner.invoke(app, ["list", *opts(paths)])

        assert result.exit_code == 0, result.output
        assert "Food" in result.output
        assert "-$5.00" in result.output
        assert "+$2,500.00" in result.output
        assert "Net: +$2,495.00" in result.output

    def test_category_filter(self, paths: tuple[Path, Path]) -> None:
        seed(paths[0])

        result = runner.invoke(app, ["list", "--category", "Salary", *opts(paths)])

        assert result.exit_code == 0, result.output
        assert "Salary" in result.output
        assert "Food" not in result.output

    def test_month_filter(self, paths: tuple[Path, Path]) -> None:
        seed(paths[0])

        result = runner.invoke(app, ["list", "--month", "2024-01", *opts(paths)])

        assert result.exit_code == 0, result.output
        assert "Food" in result.output
        assert "Salary" not in result.output

    def test_options_before_subcommand(self, paths: tuple[Path, Path]) -> None:
        seed(paths[0])

        result = runner.invoke(app, [*opts(paths), "list"])

        assert result.exit_code == 0, result.output
        assert "Food" in result.output

    def test_no_matches(self, paths: tuple[Path, Path]) -> None:
        seed(paths[0])

        result = runner.invoke(app, ["list", "--since", "2030-01-01", *opts(paths)])

        assert result.exit_code == 0
        assert "No entries found" in result.output

    def test_bad_date_exits(self, paths: tuple[Path, Path]) -> None:
        seed(paths[0])

        result = runner.invoke(app, ["list", "--since", "2024-13-01", *opts(paths)])

        assert result.exit_code == 1
        assert "Invalid date" in result.output

    def test_month_with_range_exits(self, paths: tuple[Path, Path]) -> None:
        result = runner.invoke(app, ["list", "--month", "2024-01", "--until", "2024-01-31", *opts(paths)])

        assert result.exit_code == 1

    def test_missing_database(self, paths: tuple[Path, Path]) -> None:
        result = runner.invoke(app, ["list", *opts(paths)])

        assert result.exit_code == 1
        assert "Database not found" in result.output


class TestShell:
    def test_unusable_database_exits_before_the_shell(self, paths: tuple[Path, Path]) -> None:
        """A file that is not a database is reported and nothing starts."""
        paths[0].write_text("not a database" * 200)

        result = runner.invoke(app, opts(paths))

        assert result.exit_code == 1
        assert "schema_migrations" in result.output

    def test_failed_migration_exits_and_rolls_back(self, paths: tuple[Path, Path], monkeypatch: pytest.MonkeyPatch) -> None:
        """A migration that fails is named, nothing starts, and the log does not record it."""
        broken = [
            MIGRATIONS[0],
            Migration("002_broken", "CREATE TABLE half_done (id INTEGER);\nINSERT INTO no_such_table VALUES (1);\n"),
        ]
        monkeypatch.setattr(
            "tuimoney.store.repository.apply_migrations",
            lambda conn: apply_migrations(conn, broken),
        )

        result = runner.invoke(app, opts(paths))

        assert result.exit_code == 1
        assert "002_broken" in result.output
        assert "failed" in result.output
        conn = connect(paths[0])
        try:
            assert [record.version for record in applied_migrations(conn)] == ["001_init"]
            assert conn.execute("SELECT name FROM sqlite_master WHERE name = 'half_done'").fetchall() == []
        finally:
            conn.close()

    def test_config_directory_exits(self, paths: tuple[Path, Path]) -> None:
        """A config path that is a directory is a config error, not a traceback."""
        paths[1].mkdir(parents=True)

        result = runner.invoke(app, ["list", *opts(paths)])

        assert result.exit_code == 1
        assert "Config error" in result.output
