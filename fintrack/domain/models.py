"""Domain types and entities for fintrack.

These NewTypes provide semantic clarity and help with type checking:
- Money: Amount in currency units (plain float, no minor-unit rounding)
- Month: Month in YYYY-MM format
- Owner: Name string that scopes all stored data
- Description: Transaction description text

Transaction and Budget validate themselves on construction and raise
InvalidInputError, so a malformed record never reaches the aggregation code.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import NewType

from fintrack.errors import InvalidInputError

Money = NewType("Money", float)

# Month is always in YYYY-MM format (e.g., "2025-01")
Month = NewType("Month", str)

Owner = NewType("Owner", str)

Description = NewType("Description", str)


class Category(str, Enum):
    """Fixed set of spending categories."""

    FOOD = "Food"
    TRANSPORT = "Transport"
    BILLS = "Bills"
    ENTERTAINMENT = "Entertainment"
    SHOPPING = "Shopping"
    HEALTHCARE = "Healthcare"
    EDUCATION = "Education"
    TRAVEL = "Travel"
    OTHER = "Other"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def names(cls) -> list[str]:
        """Category display names in declaration order."""
        return [member.value for member in cls]

    @classmethod
    def parse(cls, value: str) -> "Category":
        """Parse a category name, ignoring case.

        Args:
            value: Category name such as "food" or "Food".

        Returns:
            Matching Category.

        Raises:
            InvalidInputError: If the name is not a known category.
        """
        for member in cls:
            if member.value.lower() == value.strip().lower():
                return member
        raise InvalidInputError(f"Unknown category '{value}'. Choose one of: {', '.join(cls.names())}")


class TransactionType(str, Enum):
    """Direction of a transaction."""

    INCOME = "income"
    EXPENSE = "expense"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str) -> "TransactionType":
        """Parse a transaction type, ignoring case.

        Raises:
            InvalidInputError: If the value is neither income nor expense.
        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise InvalidInputError(f"Unknown transaction type '{value}'. Use 'income' or 'expense'") from None


def validate_amount(amount: object) -> Money:
    """Check that an amount is a finite positive number.

    Raises:
        InvalidInputError: If the amount is missing, not numeric, or not positive.
    """
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise InvalidInputError(f"Amount must be a number, got {amount!r}")
    if not math.isfinite(amount) or amount <= 0:
        raise InvalidInputError(f"Amount must be greater than 0, got {amount!r}")
    return Money(float(amount))


def validate_month(month: object) -> Month:
    """Check that a value is a YYYY-MM month key.

    Raises:
        InvalidInputError: If the value is not a valid month.
    """
    if not isinstance(month, str) or len(month) != 7:
        raise InvalidInputError(f"Month must be in YYYY-MM format, got {month!r}")
    try:
        datetime.strptime(month, "%Y-%m")
    except ValueError:
        raise InvalidInputError(f"Month must be in YYYY-MM format, got {month!r}") from None
    return Month(month)


def validate_owner(owner: object) -> Owner:
    """Check that an owner name is a non-empty string.

    Raises:
        InvalidInputError: If the name is blank or not a string.
    """
    if not isinstance(owner, str) or not owner.strip():
        raise InvalidInputError("User name is required")
    return Owner(owner)


def _validate_date(value: object) -> str:
    if not isinstance(value, str):
        raise InvalidInputError(f"Date must be an ISO date string, got {value!r}")
    # Month keys are sliced from the first seven characters
    if len(value) < 10 or value[4] != "-" or value[7] != "-":
        raise InvalidInputError(f"Date must be an ISO date (YYYY-MM-DD), got {value!r}")
    try:
        date.fromisoformat(value[:10])
    except ValueError:
        raise InvalidInputError(f"Date must be an ISO date (YYYY-MM-DD), got {value!r}") from None
    return value


@dataclass(frozen=True)
class Transaction:
    """Immutable income or expense record."""

    amount: Money
    description: Description
    date: str
    category: Category
    type: TransactionType
    owner: Owner
    id: int | None = None
    created_at: str | None = None
    updated_at: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", validate_amount(self.amount))
        if not isinstance(self.description, str) or not self.description.strip():
            raise InvalidInputError("Description is required")
        _validate_date(self.date)
        if not isinstance(self.category, Category):
            raise InvalidInputError(f"Category must be a Category, got {self.category!r}")
        if not isinstance(self.type, TransactionType):
            raise InvalidInputError(f"Type must be a TransactionType, got {self.type!r}")
        validate_owner(self.owner)

    @property
    def month(self) -> Month:
        """Month the transaction falls in (YYYY-MM)."""
        return Month(self.date[:7])

    @property
    def is_expense(self) -> bool:
        return self.type is TransactionType.EXPENSE

    @property
    def is_income(self) -> bool:
        return self.type is TransactionType.INCOME


@dataclass(frozen=True)
class Budget:
    """Immutable monthly spending limit for one category."""

    category: Category
    amount: Money
    month: Month
    owner: Owner
    id: int | None = None
    created_at: str | None = None
    updated_at: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.category, Category):
            raise InvalidInputError(f"Category must be a Category, got {self.category!r}")
        object.__setattr__(self, "amount", validate_amount(self.amount))
        validate_month(self.month)
        validate_owner(self.owner)
