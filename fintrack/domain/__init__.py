"""Domain models and types for fintrack.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from fintrack.domain.models import Budget, Category, Description, Money, Month, Owner, Transaction, TransactionType

__all__ = [
    "Budget",
    "Category",
    "Description",
    "Money",
    "Month",
    "Owner",
    "Transaction",
    "TransactionType",
]
