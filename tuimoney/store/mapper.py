"""Translation between entries and database rows."""

import sqlite3
from datetime import date
from typing import Any

from tuimoney.dates import format_date, parse_date
from tuimoney.domain.errors import ConstraintViolation, InvalidDate
from tuimoney.domain.models import CategoryName, Entry, EntryKind, Money, ValidEntry

_KINDS = {kind.value: kind for kind in EntryKind}


def kind_to_str(kind: EntryKind) -> str:
    return kind.value


def kind_from_str(value: Any) -> EntryKind:
    """Decode a stored kind.

    Raises:
        ConstraintViolation: If the value is not "expense" or "income".
    """
    try:
        return _KINDS[value]
    except (KeyError, TypeError) as e:
        raise ConstraintViolation(f"unknown entry kind: {value!r}") from e


def entry_to_params(entry: ValidEntry) -> tuple[str, int, str, str | None, str]:
    """Values for the (kind, amount_cents, category, note, occurred_on) columns."""
    return (
        kind_to_str(entry.kind),
        entry.amount_cents,
        entry.category,
        entry.note,
        format_date(entry.occurred_on),
    )


def _stored_date(value: Any) -> date:
    if not isinstance(value, str):
        raise ConstraintViolation(f"invalid stored date: {value!r}")
    try:
        return parse_date(value)
    except InvalidDate as e:
        raise ConstraintViolation(f"invalid stored date: {value!r}") from e


def row_to_entry(row: sqlite3.Row) -> Entry:
    """Build an Entry from an entries row.

    Raises:
        ConstraintViolation: If any column holds data an Entry cannot carry.
    """
    entry_id = row["id"]
    amount_cents = row["amount_cents"]
    category = row["category"]
    note = row["note"]

    if isinstance(amount_cents, bool) or not isinstance(amount_cents, int) or amount_cents <= 0:
        raise ConstraintViolation(f"entry {entry_id} has invalid amount: {amount_cents!r}")
    if not isinstance(category, str) or not category.strip():
        raise ConstraintViolation(f"entry {entry_id} has empty category")
    if note is not None and not isinstance(note, str):
        raise ConstraintViolation(f"entry {entry_id} has invalid note: {note!r}")

    return Entry(
        id=entry_id,
        kind=kind_from_str(row["kind"]),
        amount_cents=Money(amount_cents),
        category=CategoryName(category),
        note=note,
        occurred_on=_stored_date(row["occurred_on"]),
    )
