"""Date utilities for tui-money.

Pure functions for parsing entry dates and calculating month ranges.
"""

import re
from datetime import date, datetime, timedelta

from tuimoney.domain.errors import InvalidDate
from tuimoney.domain.models import Month

DATE_FORMAT = "%Y-%m-%d"

_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")


def parse_date(value: str) -> date:
    """Parse an ISO-8601 calendar date.

    Args:
        value: Date text in YYYY-MM-DD format. Surrounding whitespace is ignored.

    Returns:
        The parsed date.

    Raises:
        InvalidDate: If the text is not a real calendar date in YYYY-MM-DD format.
    """
    text = value.strip()
    if not _ISO_DATE.fullmatch(text):
        raise InvalidDate(f"Invalid date '{text}': expected YYYY-MM-DD")
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError as e:
        raise InvalidDate(f"Invalid date '{text}': {e}") from e


def parse_optional_date(value: str | None) -> date | None:
    """Parse a date that may be left blank."""
    if value is None or not value.strip():
        return None
    return parse_date(value)


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def current_month(today: date | None = None) -> Month:
    """Month containing ``today`` (defaults to the current date)."""
    return Month((today or date.today()).strftime("%Y-%m"))


def month_range(month: Month) -> tuple[date, date]:
    """Calculate the inclusive date range of a month.

    Args:
        month: Month in YYYY-MM format.

    Returns:
        Tuple of (first_day, last_day).

    Raises:
        InvalidDate: If the month is not in YYYY-MM format.
    """
    try:
        dt = datetime.strptime(month, "%Y-%m")
    except ValueError as e:
        raise InvalidDate(f"Invalid month '{month}': expected YYYY-MM") from e
    first_day = dt.date()
    next_month = (dt.replace(day=28) + timedelta(days=4)).replace(day=1)
    last_day = next_month.date() - timedelta(days=1)
    return first_day, last_day
