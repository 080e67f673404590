"""Domain type definitions for tui-money.

These types carry the entries through the app:
- Money: Amount in cents (minor units), always positive
- Month: Month in YYYY-MM format
- CategoryName: Free-text category label
- EntryKind: Whether an entry is money going out or coming in
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import NewType

# Money amounts are stored as cents to avoid floating point errors.
# The sign lives in EntryKind, never in the amount.
Money = NewType("Money", int)

# Largest amount SQLite can store in an INTEGER column.
MAX_AMOUNT_CENTS = 2**63 - 1

# Month is always in YYYY-MM format (e.g., "2024-01")
Month = NewType("Month", str)

CategoryName = NewType("CategoryName", str)


class EntryKind(str, Enum):
    """Direction of an entry; the value is its stored form."""

    EXPENSE = "expense"
    INCOME = "income"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    def toggled(self) -> "EntryKind":
        return EntryKind.INCOME if self is EntryKind.EXPENSE else EntryKind.EXPENSE


@dataclass(frozen=True)
class NewEntry:
    """Unsaved candidate entry, straight from user input.

    ``occurred_on`` may still be raw text; ``validate`` decides whether it is a date.
    """

    kind: EntryKind
    amount_cents: int
    category: str
    note: str | None
    occurred_on: date | str


@dataclass(frozen=True)
class ValidEntry:
    """Candidate entry that passed validation and can be persisted."""

    kind: EntryKind
    amount_cents: Money
    category: CategoryName
    note: str | None
    occurred_on: date


@dataclass(frozen=True)
class Entry:
    """Immutable persisted entry."""

    id: int
    kind: EntryKind
    amount_cents: Money
    category: CategoryName
    note: str | None
    occurred_on: date

    @classmethod
    def from_valid(cls, entry_id: int, entry: ValidEntry) -> "Entry":
        return cls(
            id=entry_id,
            kind=entry.kind,
            amount_cents=entry.amount_cents,
            category=entry.category,
            note=entry.note,
            occurred_on=entry.occurred_on,
        )


@dataclass(frozen=True)
class EntryFilter:
    """Optional constraints for listing entries.

    ``start`` and ``end`` are inclusive. A ``None`` field places no constraint
    on that dimension, so ``EntryFilter()`` matches everything.
    """

    start: date | None = None
    end: date | None = None
    category: str | None = None

    @property
    def is_empty(self) -> bool:
        return self.start is None and self.end is None and self.category is None

    @classmethod
    def for_month(cls, month: Month, category: str | None = None) -> "EntryFilter":
        """Filter covering every day of a YYYY-MM month."""
        from tuimoney.dates import month_range

        first_day, last_day = month_range(month)
        return cls(start=first_day, end=last_day, category=category)


@dataclass(frozen=True)
class MigrationRecord:
    """Row of the append-only schema_migrations log."""

    version: str
    applied_at: str
