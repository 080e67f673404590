"""Embedded schema migrations.

Each migration is applied once, in ascending version order, and recorded in
schema_migrations. Never edit a released migration; append a new one.
"""

from typing import NamedTuple


class Migration(NamedTuple):
    version: str
    sql: str


MIGRATIONS: tuple[Migration, ...] = (
    Migration(
        "001_init",
        """
        CREATE TABLE IF NOT EXISTS entries (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            kind TEXT NOT NULL,
            amount_cents INTEGER NOT NULL,
            category TEXT NOT NULL,
            note TEXT,
            occurred_on TEXT NOT NULL
        );
        """,
    ),
    Migration(
        "002_entry_indexes",
        """
        CREATE INDEX IF NOT EXISTS idx_entries_occurred_on ON entries(occurred_on, id);
        CREATE INDEX IF NOT EXISTS idx_entries_category_occurred_on ON entries(category, occurred_on);
        """,
    ),
)
