"""Shared fixtures: repositories, a failing repository and a fake curses window."""

from datetime import date
from pathlib import Path
from typing import Iterator

import pytest
import structlog

from tuimoney.domain import ConnectionFailed, Entry, EntryFilter, EntryKind, EntryRepository, ValidEntry
from tuimoney.store import SqliteRepository


def make_entry(
    kind: EntryKind = EntryKind.EXPENSE,
    amount_cents: int = 500,
    category: str = "Food",
    note: str | None = None,
    occurred_on: date = date(2024, 1, 1),
) -> ValidEntry:
    return ValidEntry(kind=kind, amount_cents=amount_cents, category=category, note=note, occurred_on=occurred_on)


class FailingRepository(EntryRepository):
    """In-memory repository whose calls can be told to fail."""

    def __init__(self) -> None:
        self.entries: list[Entry] = []
        self.fail_add = False
        self.fail_list = False
        self.list_calls = 0
        self.closed = False

    def add(self, entry: ValidEntry) -> Entry:
        if self.fail_add:
            raise ConnectionFailed("disk I/O error")
        stored = Entry.from_valid(len(self.entries) + 1, entry)
        self.entries.append(stored)
        return stored

    def list(self, entry_filter: EntryFilter | None = None) -> "list[Entry]":
        self.list_calls += 1
        if self.fail_list:
            raise ConnectionFailed("database is locked")
        return sorted(self.entries, key=lambda e: (e.occurred_on, e.id), reverse=True)

    def close(self) -> None:
        self.closed = True


class FakeWindow:
    """Records what a screen draws, in place of a curses window."""

    def __init__(self, height: int = 24, width: int = 80) -> None:
        self.height = height
        self.width = width
        self.erase()

    def erase(self) -> None:
        self.grid = [[" "] * self.width for _ in range(self.height)]
        self.calls: list[tuple[int, int, str, int]] = []

    def getmaxyx(self) -> tuple[int, int]:
        return self.height, self.width

    def addnstr(self, y: int, x: int, text: str, n: int, attr: int = 0) -> None:
        self.calls.append((y, x, text[:n], attr))
        for offset, char in enumerate(text[:n]):
            if x + offset < self.width:
                self.grid[y][x + offset] = char

    def line(self, y: int) -> str:
        return "".join(self.grid[y]).rstrip()

    def text(self) -> str:
        return "\n".join(self.line(y) for y in range(self.height))


@pytest.fixture
def repo() -> Iterator[SqliteRepository]:
    """Migrated in-memory repository."""
    repository = SqliteRepository.open(":memory:")
    yield repository
    repository.close()


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "tui-money.db"


@pytest.fixture
def failing_repo() -> FailingRepository:
    return FailingRepository()


@pytest.fixture
def window() -> FakeWindow:
    return FakeWindow()


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()
