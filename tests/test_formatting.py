"""Tests for fintrack.formatting."""

from fintrack.domain.models import Money, TransactionType
from fintrack.formatting import calculate_bar_length, format_date, format_money, format_signed


class TestFormatMoney:
    """Tests for format_money."""

    def test_positive(self) -> None:
        """Should use two decimals and thousands separators."""
        assert format_money(1234.5) == "$1,234.50"

    def test_negative(self) -> None:
        """Should put the sign before the currency symbol."""
        assert format_money(-3) == "-$3.00"

    def test_currency(self) -> None:
        """Should use the given symbol."""
        assert format_money(10, "£") == "£10.00"


class TestFormatSigned:
    """Tests for format_signed."""

    def test_income(self) -> None:
        """Should prefix income with +."""
        assert format_signed(Money(50), TransactionType.INCOME) == "+$50.00"

    def test_expense(self) -> None:
        """Should prefix expenses with -."""
        assert format_signed(Money(12.5), TransactionType.EXPENSE) == "-$12.50"


class TestFormatDate:
    """Tests for format_date."""

    def test_date(self) -> None:
        """Should render as abbreviated month, day and year."""
        assert format_date("2025-01-05") == "Jan 5, 2025"

    def test_datetime(self) -> None:
        """Should ignore the time part."""
        assert format_date("2025-12-31T23:59:00") == "Dec 31, 2025"


class TestCalculateBarLength:
    """Tests for calculate_bar_length."""

    def test_max_amount_fills_bar(self) -> None:
        """Should use the full width for the largest amount."""
        assert calculate_bar_length(100, 100, 30) == 30

    def test_proportional(self) -> None:
        """Should scale other amounts."""
        assert calculate_bar_length(50, 100, 30) == 15

    def test_zero_max(self) -> None:
        """Should return 0 when there is nothing to scale against."""
        assert calculate_bar_length(0, 0, 30) == 0
