"""Pure functions for turning typed amounts into cents and back.

All monetary amounts are in cents (Money type) and always positive;
EntryKind decides whether the money goes out or comes in.
"""

from decimal import Decimal, DecimalException, InvalidOperation

from tuimoney.domain.errors import InvalidAmount
from tuimoney.domain.models import MAX_AMOUNT_CENTS, EntryKind, Money


def parse_amount(text: str) -> Money:
    """Parse a user-typed amount into cents.

    Accepts plain numbers with up to two decimal places, optionally with a
    leading currency symbol and thousands separators ("12", "12.5",
    "$1,234.56").

    Args:
        text: Amount as typed.

    Returns:
        Amount in cents.

    Raises:
        InvalidAmount: If the text is not a number, has more than two decimal
            places, is not strictly positive, or is too large to store.
    """
    cleaned = text.strip().lstrip("$£€").replace(",", "").replace(" ", "")
    if not cleaned:
        raise InvalidAmount("Amount is required")

    try:
        value = Decimal(cleaned)
    except InvalidOperation as e:
        raise InvalidAmount(f"Invalid amount '{text.strip()}'") from e

    if not value.is_finite():
        raise InvalidAmount(f"Invalid amount '{text.strip()}'")

    try:
        cents = value * 100
        whole = cents == cents.to_integral_value()
    except DecimalException as e:
        raise InvalidAmount("Amount is too large") from e
    if not whole:
        raise InvalidAmount("Amount can have at most two decimal places")
    if cents <= 0:
        raise InvalidAmount("Amount must be positive")
    if cents > MAX_AMOUNT_CENTS:
        raise InvalidAmount("Amount is too large")

    return Money(int(cents))


def format_amount(kind: EntryKind, amount_cents: int, symbol: str = "$") -> str:
    """Format cents for display, signed by entry kind.

    Returns:
        e.g. "-$1,234.56" for an expense, "+$5.00" for income.
    """
    sign = "-" if kind is EntryKind.EXPENSE else "+"
    return f"{sign}{symbol}{amount_cents / 100:,.2f}"
