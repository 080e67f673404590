"""Pure validation of candidate entries.

This module contains the functional core for accepting user input:
- No I/O operations (no database, no console, no files)
- No side effects
- Raises a ValidationError subclass describing the first problem found
"""

from datetime import date, datetime

from tuimoney.dates import parse_date
from tuimoney.domain.errors import EmptyCategory, InvalidAmount
from tuimoney.domain.models import MAX_AMOUNT_CENTS, CategoryName, Money, NewEntry, ValidEntry


def validate_amount(amount_cents: int) -> Money:
    """Check that an amount in cents is strictly positive and storable.

    Raises:
        InvalidAmount: If the amount is not a positive integer that fits in 64 bits.
    """
    if isinstance(amount_cents, bool) or not isinstance(amount_cents, int):
        raise InvalidAmount(f"Amount must be a whole number of cents, got {amount_cents!r}")
    if amount_cents <= 0:
        raise InvalidAmount("Amount must be positive")
    if amount_cents > MAX_AMOUNT_CENTS:
        raise InvalidAmount("Amount is too large")
    return Money(amount_cents)


def validate_category(category: str) -> CategoryName:
    """Check that a category has visible text and strip its padding.

    Raises:
        EmptyCategory: If the category is blank or whitespace-only.
    """
    if category is None or not category.strip():
        raise EmptyCategory("Category cannot be empty")
    return CategoryName(category.strip())


def normalize_note(note: str | None) -> str | None:
    """Blank notes are stored as no note."""
    if note is None or not note.strip():
        return None
    return note


def validate(candidate: NewEntry) -> ValidEntry:
    """Validate a candidate entry.

    Checks run in order: amount, category, date. The first failure wins.

    Args:
        candidate: Entry as built from user input.

    Returns:
        The validated entry, ready for ``EntryRepository.add``.

    Raises:
        InvalidAmount: If ``amount_cents <= 0`` or too large to store.
        EmptyCategory: If the category is blank.
        InvalidDate: If ``occurred_on`` is not a YYYY-MM-DD calendar date.
    """
    amount = validate_amount(candidate.amount_cents)
    category = validate_category(candidate.category)

    if isinstance(candidate.occurred_on, datetime):
        occurred_on = candidate.occurred_on.date()
    elif isinstance(candidate.occurred_on, date):
        occurred_on = candidate.occurred_on
    else:
        occurred_on = parse_date(str(candidate.occurred_on))

    return ValidEntry(
        kind=candidate.kind,
        amount_cents=amount,
        category=category,
        note=normalize_note(candidate.note),
        occurred_on=occurred_on,
    )
