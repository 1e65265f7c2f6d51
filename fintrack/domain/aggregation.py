"""Pure functions for monthly aggregation of transactions and budgets.

This module contains the functional core for reporting:
- No I/O operations (no database, no console, no clock)
- No side effects, inputs are never mutated
- Pure data transformations
- Easy to test

Every operation is evaluated relative to an explicit reference date `today`;
the "current month" is the calendar month containing it.
"""

import dataclasses
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date

from fintrack.dates import month_labels, month_of, trailing_months
from fintrack.domain.models import Budget, Category, Money, Month, Transaction
from fintrack.errors import InvalidInputError

RECENT_LIMIT = 5
TREND_MONTHS = 7


@dataclass(frozen=True)
class CategoryAmount:
    """Total amount for a single category."""

    category: Category
    amount: Money


@dataclass(frozen=True)
class MonthlySummary:
    """Current-month totals for the dashboard.

    budget_remaining is None when no budget is set for the month.
    """

    month: Month
    total_income: Money
    total_expenses: Money
    net_income: Money
    total_budget: Money
    budget_remaining: Money | None
    top_category: CategoryAmount | None
    recent_transactions: list[Transaction]


@dataclass(frozen=True)
class CategoryShare:
    """Category expense with its share of the month's total."""

    category: Category
    amount: Money
    percentage: float


@dataclass(frozen=True)
class MonthlyExpense:
    """Expense total for one month of the trend series."""

    month: Month
    label: str
    full_label: str
    amount: Money
    is_current: bool


@dataclass(frozen=True)
class BudgetComparison:
    """Budget against actual spending for one category."""

    category: Category
    budget: Money
    actual: Money
    remaining: Money
    overspent: Money


def require_transactions(transactions: Iterable[object]) -> list[Transaction]:
    """Check that every item is a Transaction.

    Raises:
        InvalidInputError: If any item is not a Transaction.
    """
    items = list(transactions)
    for item in items:
        if not isinstance(item, Transaction):
            raise InvalidInputError(f"Expected Transaction, got {type(item).__name__}")
    return items


def require_budgets(budgets: Iterable[object]) -> list[Budget]:
    """Check that every item is a Budget.

    Raises:
        InvalidInputError: If any item is not a Budget.
    """
    items = list(budgets)
    for item in items:
        if not isinstance(item, Budget):
            raise InvalidInputError(f"Expected Budget, got {type(item).__name__}")
    return items


def expenses_by_category(transactions: Sequence[Transaction], month: Month) -> dict[Category, Money]:
    """Sum a month's expenses per category.

    Args:
        transactions: Transactions to aggregate.
        month: Month in YYYY-MM format.

    Returns:
        Dictionary of category totals, in first-encountered order.
    """
    totals: dict[Category, Money] = {}
    for txn in require_transactions(transactions):
        if txn.is_expense and txn.month == month:
            totals[txn.category] = Money(totals.get(txn.category, 0.0) + txn.amount)
    return totals


def month_totals(transactions: Sequence[Transaction], month: Month) -> tuple[Money, Money]:
    """Total income and expenses for a month.

    Returns:
        Tuple of (total_income, total_expenses).
    """
    income = 0.0
    expenses = 0.0
    for txn in require_transactions(transactions):
        if txn.month != month:
            continue
        if txn.is_income:
            income += txn.amount
        else:
            expenses += txn.amount
    return Money(income), Money(expenses)


def top_category(totals: dict[Category, Money]) -> CategoryAmount | None:
    """Category with the highest total; the first one wins a tie."""
    if not totals:
        return None
    category = max(totals, key=lambda cat: totals[cat])
    return CategoryAmount(category=category, amount=totals[category])


def most_recent(transactions: Sequence[Transaction], limit: int = RECENT_LIMIT) -> list[Transaction]:
    """Most recent transactions by date, newest first.

    Transactions on the same date keep their input order.
    """
    ordered = sorted(require_transactions(transactions), key=lambda txn: txn.date[:10], reverse=True)
    return [dataclasses.replace(txn) for txn in ordered[:limit]]


def compute_monthly_summary(
    transactions: Sequence[Transaction],
    budgets: Sequence[Budget],
    today: date,
    recent_limit: int = RECENT_LIMIT,
) -> MonthlySummary:
    """Compute the current month's income, spending and budget totals.

    Args:
        transactions: All of the owner's transactions.
        budgets: All of the owner's budgets.
        today: Reference date; selects the current month.
        recent_limit: How many recent transactions to include.

    Returns:
        MonthlySummary for the month containing `today`.
    """
    month = month_of(today)
    total_income, total_expenses = month_totals(transactions, month)
    total_budget = Money(sum((b.amount for b in require_budgets(budgets) if b.month == month), 0.0))
    budget_remaining = Money(total_budget - total_expenses) if total_budget > 0 else None

    return MonthlySummary(
        month=month,
        total_income=total_income,
        total_expenses=total_expenses,
        net_income=Money(total_income - total_expenses),
        total_budget=total_budget,
        budget_remaining=budget_remaining,
        top_category=top_category(expenses_by_category(transactions, month)),
        recent_transactions=most_recent(transactions, recent_limit),
    )


def calculate_percentage(amount: Money, total: Money) -> float:
    """Share of total as a percentage rounded to one decimal (0 if total is 0)."""
    if total <= 0:
        return 0.0
    return round(amount / total * 100, 1)


def compute_category_breakdown(transactions: Sequence[Transaction], today: date) -> list[CategoryShare]:
    """Rank the current month's expense categories.

    Args:
        transactions: All of the owner's transactions.
        today: Reference date; selects the current month.

    Returns:
        List of CategoryShare sorted by amount, largest first.
    """
    totals = expenses_by_category(transactions, month_of(today))
    total = Money(sum(totals.values(), 0.0))
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return [
        CategoryShare(category=cat, amount=amt, percentage=calculate_percentage(amt, total)) for cat, amt in ranked
    ]


def compute_monthly_trend(
    transactions: Sequence[Transaction],
    today: date,
    months: int = TREND_MONTHS,
) -> list[MonthlyExpense]:
    """Expense totals for the trailing months ending at the current month.

    Always returns exactly `months` entries, oldest first, with months that
    have no expenses reported as 0.
    """
    current = month_of(today)
    window = trailing_months(current, months)
    totals: dict[Month, float] = {month: 0.0 for month in window}

    for txn in require_transactions(transactions):
        if txn.is_expense and txn.month in totals:
            totals[txn.month] += txn.amount

    series: list[MonthlyExpense] = []
    for month in window:
        label, full_label = month_labels(month)
        series.append(
            MonthlyExpense(
                month=month,
                label=label,
                full_label=full_label,
                amount=Money(totals[month]),
                is_current=month == current,
            )
        )
    return series


def compare_category(category: Category, budget: Money, actual: Money) -> BudgetComparison:
    """Build the budget-vs-actual row for one category."""
    return BudgetComparison(
        category=category,
        budget=budget,
        actual=actual,
        remaining=Money(max(0.0, budget - actual)),
        overspent=Money(max(0.0, actual - budget)),
    )


def current_budgets(budgets: Sequence[Budget], month: Month) -> dict[Category, Money]:
    """Budget amounts for a month keyed by category (first budget wins)."""
    amounts: dict[Category, Money] = {}
    for budget in require_budgets(budgets):
        if budget.month == month and budget.category not in amounts:
            amounts[budget.category] = budget.amount
    return amounts


def compute_budget_comparison(
    transactions: Sequence[Transaction],
    budgets: Sequence[Budget],
    today: date,
) -> list[BudgetComparison]:
    """Compare the current month's budgets with actual spending.

    Categories with spending come first (in the order first seen), followed by
    budgeted categories with no spending. Rows where both budget and actual
    are 0 are dropped.
    """
    month = month_of(today)
    actual = expenses_by_category(transactions, month)
    planned = current_budgets(budgets, month)

    categories = list(actual)
    categories.extend(cat for cat in planned if cat not in actual)

    rows = [compare_category(cat, planned.get(cat, Money(0.0)), actual.get(cat, Money(0.0))) for cat in categories]
    return [row for row in rows if row.budget > 0 or row.actual > 0]
