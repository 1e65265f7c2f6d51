"""Tests for fintrack.domain.models entities and validation."""

import pytest

from fintrack.domain.models import (
    Budget,
    Category,
    Description,
    Money,
    Month,
    Owner,
    Transaction,
    TransactionType,
    validate_month,
)
from fintrack.errors import InvalidInputError


def make_transaction(**overrides: object) -> Transaction:
    fields: dict[str, object] = {
        "amount": Money(25.0),
        "description": Description("Groceries"),
        "date": "2025-06-10",
        "category": Category.FOOD,
        "type": TransactionType.EXPENSE,
        "owner": Owner("alice"),
    }
    fields.update(overrides)
    return Transaction(**fields)  # type: ignore[arg-type]


class TestCategory:
    """Tests for Category parsing."""

    def test_parse_is_case_insensitive(self) -> None:
        """Should match category names regardless of case."""
        assert Category.parse("food") is Category.FOOD
        assert Category.parse("  HEALTHCARE ") is Category.HEALTHCARE

    def test_parse_unknown_category(self) -> None:
        """Should reject names outside the fixed set."""
        with pytest.raises(InvalidInputError, match="Unknown category"):
            Category.parse("Groceries")

    def test_names_in_declaration_order(self) -> None:
        """Should list all nine categories in order."""
        assert Category.names() == [
            "Food",
            "Transport",
            "Bills",
            "Entertainment",
            "Shopping",
            "Healthcare",
            "Education",
            "Travel",
            "Other",
        ]

    def test_str_is_display_name(self) -> None:
        """Should render as the plain category name."""
        assert str(Category.TRAVEL) == "Travel"
        assert f"{Category.TRAVEL}" == "Travel"


class TestTransactionType:
    """Tests for TransactionType parsing."""

    def test_parse(self) -> None:
        """Should parse income and expense in any case."""
        assert TransactionType.parse("Income") is TransactionType.INCOME
        assert TransactionType.parse("EXPENSE") is TransactionType.EXPENSE

    def test_parse_unknown(self) -> None:
        """Should reject anything else."""
        with pytest.raises(InvalidInputError):
            TransactionType.parse("transfer")


class TestTransaction:
    """Tests for Transaction validation."""

    def test_valid_transaction(self) -> None:
        """Should build a transaction and expose its month."""
        txn = make_transaction()
        assert txn.amount == 25.0
        assert txn.month == "2025-06"
        assert txn.is_expense
        assert not txn.is_income

    def test_integer_amount_becomes_float(self) -> None:
        """Should store integer amounts as floats."""
        txn = make_transaction(amount=40)
        assert txn.amount == 40.0
        assert isinstance(txn.amount, float)

    @pytest.mark.parametrize("amount", [0, -5.0, float("nan"), float("inf"), "12", None, True])
    def test_rejects_bad_amount(self, amount: object) -> None:
        """Should reject zero, negative, non-finite and non-numeric amounts."""
        with pytest.raises(InvalidInputError):
            make_transaction(amount=amount)

    @pytest.mark.parametrize("description", ["", "   ", None])
    def test_rejects_blank_description(self, description: object) -> None:
        """Should require a description."""
        with pytest.raises(InvalidInputError, match="Description"):
            make_transaction(description=description)

    @pytest.mark.parametrize("value", ["2025-13-01", "yesterday", "", None])
    def test_rejects_bad_date(self, value: object) -> None:
        """Should require an ISO date."""
        with pytest.raises(InvalidInputError):
            make_transaction(date=value)

    @pytest.mark.parametrize("value", ["20250610", "2025-W24-2", "2025-161"])
    def test_rejects_non_calendar_iso_forms(self, value: str) -> None:
        """Should reject compact, week and ordinal ISO dates that have no YYYY-MM prefix."""
        with pytest.raises(InvalidInputError, match="YYYY-MM-DD"):
            make_transaction(date=value)

    def test_accepts_datetime_string(self) -> None:
        """Should accept an ISO datetime and use its date part for the month."""
        txn = make_transaction(date="2025-06-10T08:30:00.000Z")
        assert txn.month == "2025-06"

    def test_rejects_plain_string_category(self) -> None:
        """Should require a Category member rather than a free string."""
        with pytest.raises(InvalidInputError):
            make_transaction(category="Food")

    def test_rejects_plain_string_type(self) -> None:
        """Should require a TransactionType member."""
        with pytest.raises(InvalidInputError):
            make_transaction(type="expense")

    def test_rejects_blank_owner(self) -> None:
        """Should require an owner name."""
        with pytest.raises(InvalidInputError, match="User name"):
            make_transaction(owner="  ")

    def test_is_immutable(self) -> None:
        """Should not allow attribute assignment."""
        txn = make_transaction()
        with pytest.raises(AttributeError):
            txn.amount = Money(1.0)  # type: ignore[misc]


class TestBudget:
    """Tests for Budget validation."""

    def test_valid_budget(self) -> None:
        """Should build a budget."""
        budget = Budget(category=Category.BILLS, amount=Money(300), month=Month("2025-06"), owner=Owner("alice"))
        assert budget.amount == 300.0
        assert budget.id is None

    def test_rejects_zero_amount(self) -> None:
        """Should require a positive amount."""
        with pytest.raises(InvalidInputError):
            Budget(category=Category.BILLS, amount=Money(0), month=Month("2025-06"), owner=Owner("alice"))

    @pytest.mark.parametrize("month", ["2025-6", "2025-13", "June", "2025-06-01"])
    def test_rejects_bad_month(self, month: str) -> None:
        """Should require a YYYY-MM month."""
        with pytest.raises(InvalidInputError, match="YYYY-MM"):
            Budget(category=Category.BILLS, amount=Money(10), month=Month(month), owner=Owner("alice"))


class TestValidateMonth:
    """Tests for validate_month."""

    def test_valid(self) -> None:
        """Should return the month unchanged."""
        assert validate_month("2024-02") == "2024-02"

    def test_invalid(self) -> None:
        """Should raise InvalidInputError, which is also a ValueError."""
        with pytest.raises(ValueError):
            validate_month("02-2024")
