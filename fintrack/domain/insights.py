"""Pure functions that turn spending data into qualitative insights.

Budget statuses, month-over-month category trends, the savings signal and
recommendation tips are all derived here from an explicit reference date.
Nothing in this module raises on well-formed input: empty input gives empty
or neutral output.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from enum import Enum

from fintrack.dates import month_of, previous_month
from fintrack.domain.aggregation import (
    CategoryAmount,
    current_budgets,
    expenses_by_category,
    top_category,
)
from fintrack.domain.models import Budget, Category, Money, Month, Transaction
from fintrack.formatting import DEFAULT_CURRENCY, format_money

WARNING_THRESHOLD = 80.0
OVER_THRESHOLD = 100.0
TREND_THRESHOLD = 10.0


class BudgetState(str, Enum):
    """How a category's spending stands against its budget."""

    OVER = "over"
    WARNING = "warning"
    GOOD = "good"

    def __str__(self) -> str:
        return self.value


class TrendDirection(str, Enum):
    """Direction of month-over-month spending change."""

    UP = "up"
    DOWN = "down"
    STABLE = "stable"

    def __str__(self) -> str:
        return self.value


# Display order: problems first
STATUS_ORDER = {BudgetState.OVER: 0, BudgetState.WARNING: 1, BudgetState.GOOD: 2}


@dataclass(frozen=True)
class BudgetInsight:
    """Budget status for one category.

    percentage is the raw share of budget used; progress is the same value
    capped at 100 for progress bars.
    """

    category: Category
    budget: Money
    spent: Money
    status: BudgetState
    message: str
    percentage: float
    progress: float


@dataclass(frozen=True)
class TrendInsight:
    """Month-over-month spending change for one category."""

    category: Category
    current: Money
    previous: Money
    change: float
    trend: TrendDirection
    message: str


@dataclass(frozen=True)
class Recommendation:
    """A titled group of tips."""

    title: str
    tips: list[str]


@dataclass(frozen=True)
class InsightReport:
    """Everything the insights view shows for a month."""

    month: Month
    budget_insights: list[BudgetInsight]
    trend_insights: list[TrendInsight]
    total_savings: Money
    savings_message: str | None
    top_category: CategoryAmount | None
    recommendations: list[Recommendation]


def classify_budget(
    category: Category,
    budget: Money,
    spent: Money,
    currency: str = DEFAULT_CURRENCY,
) -> BudgetInsight:
    """Classify spending against a budget as over, warning or good.

    Args:
        category: Category the budget is for.
        budget: Monthly budget amount (positive).
        spent: Amount spent so far this month.
        currency: Currency symbol for messages.

    Returns:
        BudgetInsight with status and message.
    """
    percentage = spent / budget * 100

    if percentage > OVER_THRESHOLD:
        status = BudgetState.OVER
        message = f"You're overspending on {category} by {format_money(spent - budget, currency)}"
    elif percentage > WARNING_THRESHOLD:
        status = BudgetState.WARNING
        message = f"You're close to your {category} budget limit ({percentage:.0f}% used)"
    elif percentage > 0:
        status = BudgetState.GOOD
        message = f"You have {format_money(budget - spent, currency)} left in your {category} budget"
    else:
        status = BudgetState.GOOD
        message = f"You're doing well with {category}!"

    return BudgetInsight(
        category=category,
        budget=budget,
        spent=spent,
        status=status,
        message=message,
        percentage=percentage,
        progress=min(percentage, 100.0),
    )


def classify_budgets(
    transactions: Sequence[Transaction],
    budgets: Sequence[Budget],
    today: date,
    currency: str = DEFAULT_CURRENCY,
) -> list[BudgetInsight]:
    """Budget status for every category budgeted in the current month.

    Returns:
        Insights ordered over, then warning, then good (stable within a group).
    """
    month = month_of(today)
    spending = expenses_by_category(transactions, month)
    insights = [
        classify_budget(cat, amount, spending.get(cat, Money(0.0)), currency)
        for cat, amount in current_budgets(budgets, month).items()
    ]
    return sorted(insights, key=lambda insight: STATUS_ORDER[insight.status])


def classify_trend(category: Category, current: Money, previous: Money) -> TrendInsight | None:
    """Classify the change in a category's spending since last month.

    Returns:
        TrendInsight, or None when there was no spending last month.
    """
    if previous <= 0:
        return None

    change = (current - previous) / previous * 100

    if abs(change) > TREND_THRESHOLD:
        if change > 0:
            trend = TrendDirection.UP
            message = f"Your {category} spending increased by {change:.0f}% this month"
        else:
            trend = TrendDirection.DOWN
            message = f"Your {category} spending decreased by {abs(change):.0f}% this month"
    else:
        trend = TrendDirection.STABLE
        message = f"Your {category} spending is stable"

    return TrendInsight(
        category=category,
        current=current,
        previous=previous,
        change=change,
        trend=trend,
        message=message,
    )


def classify_trends(transactions: Sequence[Transaction], today: date) -> list[TrendInsight]:
    """Trend for each category spent on this month or last month.

    Stable trends are included; categories with no spending last month are not.
    """
    month = month_of(today)
    current = expenses_by_category(transactions, month)
    previous = expenses_by_category(transactions, previous_month(month))

    categories = list(current)
    categories.extend(cat for cat in previous if cat not in current)

    trends: list[TrendInsight] = []
    for category in categories:
        insight = classify_trend(category, current.get(category, Money(0.0)), previous.get(category, Money(0.0)))
        if insight is not None:
            trends.append(insight)
    return trends


def calculate_savings(transactions: Sequence[Transaction], today: date) -> Money:
    """Last month's total expenses minus this month's (positive = spent less)."""
    month = month_of(today)
    current_total = sum(expenses_by_category(transactions, month).values(), 0.0)
    previous_total = sum(expenses_by_category(transactions, previous_month(month)).values(), 0.0)
    return Money(previous_total - current_total)


def savings_message(total_savings: Money, currency: str = DEFAULT_CURRENCY) -> str | None:
    """Message for the savings signal, or None when nothing changed."""
    if total_savings > 0:
        return f"Great job! You saved {format_money(total_savings, currency)} compared to last month."
    if total_savings < 0:
        return f"You spent {format_money(abs(total_savings), currency)} more than last month."
    return None


def build_recommendations(
    budget_insights: Sequence[BudgetInsight],
    trend_insights: Sequence[TrendInsight],
) -> list[Recommendation]:
    """Pick tip groups based on the current insights."""
    recommendations: list[Recommendation] = []

    if any(insight.status is BudgetState.OVER for insight in budget_insights):
        recommendations.append(
            Recommendation(
                title="Overspending Alert",
                tips=[
                    "Review your recent transactions in overspent categories",
                    "Consider reducing discretionary spending for the rest of the month",
                ],
            )
        )

    if any(insight.trend is TrendDirection.UP for insight in trend_insights):
        recommendations.append(
            Recommendation(
                title="Rising Expenses",
                tips=[
                    "Investigate what's driving increased spending in trending categories",
                    "Set up alerts for categories with rising spending trends",
                ],
            )
        )

    recommendations.append(
        Recommendation(
            title="General Tips",
            tips=[
                "Review your spending weekly to stay on track with your goals",
                "Consider the 50/30/20 rule: 50% needs, 30% wants, 20% savings",
            ],
        )
    )
    return recommendations


def build_insight_report(
    transactions: Sequence[Transaction],
    budgets: Sequence[Budget],
    today: date,
    currency: str = DEFAULT_CURRENCY,
) -> InsightReport:
    """Build the full insight report for the month containing `today`.

    Args:
        transactions: All of the owner's transactions.
        budgets: All of the owner's budgets.
        today: Reference date.
        currency: Currency symbol for messages.

    Returns:
        InsightReport with budget statuses, non-stable trends, savings and tips.
    """
    budget_insights = classify_budgets(transactions, budgets, today, currency)
    trend_insights = [t for t in classify_trends(transactions, today) if t.trend is not TrendDirection.STABLE]
    total_savings = calculate_savings(transactions, today)

    return InsightReport(
        month=month_of(today),
        budget_insights=budget_insights,
        trend_insights=trend_insights,
        total_savings=total_savings,
        savings_message=savings_message(total_savings, currency),
        top_category=top_category(expenses_by_category(transactions, month_of(today))),
        recommendations=build_recommendations(budget_insights, trend_insights),
    )
