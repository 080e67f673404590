"""Tests for tuimoney.dates pure functions."""

from datetime import date

import pytest

from tuimoney.dates import current_month, format_date, month_range, parse_date, parse_optional_date
from tuimoney.domain import InvalidDate, Month


class TestParseDate:
    """Tests for parse_date."""

    def test_parses_iso_date(self) -> None:
        """Should parse YYYY-MM-DD."""
        assert parse_date("2024-01-31") == date(2024, 1, 31)

    def test_ignores_surrounding_whitespace(self) -> None:
        """Should strip padding before parsing."""
        assert parse_date("  2024-02-29 ") == date(2024, 2, 29)

    @pytest.mark.parametrize("value", ["", "2024-13-01", "2023-02-29", "2024-1-5", "01/02/2024", "yesterday"])
    def test_rejects_invalid_dates(self, value: str) -> None:
        """Should raise InvalidDate for anything that is not a real YYYY-MM-DD date."""
        with pytest.raises(InvalidDate):
            parse_date(value)

    def test_invalid_date_is_a_value_error(self) -> None:
        """Callers catching ValueError should also catch InvalidDate."""
        with pytest.raises(ValueError, match="expected YYYY-MM-DD"):
            parse_date("tomorrow")


class TestParseOptionalDate:
    """Tests for parse_optional_date."""

    def test_blank_is_none(self) -> None:
        assert parse_optional_date(None) is None
        assert parse_optional_date("   ") is None

    def test_parses_value(self) -> None:
        assert parse_optional_date("2024-03-01") == date(2024, 3, 1)


class TestFormatDate:
    def test_zero_pads(self) -> None:
        assert format_date(date(2024, 3, 5)) == "2024-03-05"


class TestCurrentMonth:
    """Tests for current_month."""

    def test_uses_given_day(self) -> None:
        """Should return the YYYY-MM of the given day."""
        assert current_month(date(2025, 12, 31)) == "2025-12"


class TestMonthRange:
    """Tests for month_range."""

    def test_january_range(self) -> None:
        """Should calculate range for January."""
        first_day, last_day = month_range(Month("2025-01"))

        assert first_day == date(2025, 1, 1)
        assert last_day == date(2025, 1, 31)

    def test_december_range_crosses_year(self) -> None:
        """Should handle December (crosses year boundary)."""
        first_day, last_day = month_range(Month("2025-12"))

        assert first_day == date(2025, 12, 1)
        assert last_day == date(2025, 12, 31)

    def test_february_non_leap_year(self) -> None:
        """Should handle February in non-leap year."""
        _, last_day = month_range(Month("2025-02"))

        assert last_day == date(2025, 2, 28)

    def test_february_leap_year(self) -> None:
        """Should handle February in leap year."""
        _, last_day = month_range(Month("2024-02"))

        assert last_day == date(2024, 2, 29)

    def test_thirty_day_month(self) -> None:
        """Should handle 30-day months."""
        _, last_day = month_range(Month("2025-04"))

        assert last_day == date(2025, 4, 30)

    def test_invalid_month_format(self) -> None:
        """Should raise InvalidDate for invalid month format."""
        with pytest.raises(InvalidDate):
            month_range(Month("2025-13"))

        with pytest.raises(InvalidDate):
            month_range(Month("invalid"))
