"""Report commands: summary, breakdown, trend, compare and insights."""

import dataclasses
import sqlite3
from datetime import date
from typing import Any

from rich.table import Table

from fintrack.commands.common import console, fail, get_currency, require_session, resolve_today
from fintrack.dates import month_range
from fintrack.domain.aggregation import (
    compute_budget_comparison,
    compute_category_breakdown,
    compute_monthly_summary,
    compute_monthly_trend,
)
from fintrack.domain.insights import BudgetState, TrendDirection, build_insight_report
from fintrack.domain.models import Budget, Transaction
from fintrack.errors import InvalidInputError
from fintrack.formatting import calculate_bar_length, format_date, format_money, format_signed
from fintrack.log import get_logger
from fintrack.session import Session
from fintrack.store.queries import list_budgets, list_transactions

logger = get_logger("commands.report")

BAR_WIDTH = 30

STATUS_COLORS = {
    BudgetState.OVER: "red",
    BudgetState.WARNING: "yellow",
    BudgetState.GOOD: "green",
}


def load_snapshot(session: Session) -> tuple[list[Transaction], list[Budget]]:
    """Load all of the owner's transactions and budgets."""
    transactions = list_transactions(session)
    budgets = list_budgets(session)
    logger.info("Loaded %d transactions and %d budgets for %s", len(transactions), len(budgets), session.owner)
    return transactions, budgets


def _without_owner(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _without_owner(item) for key, item in value.items() if key != "owner"}
    if isinstance(value, list):
        return [_without_owner(item) for item in value]
    return value


def print_json(data: Any) -> None:
    """Print dataclass output as JSON, leaving out the owner name."""
    if isinstance(data, list):
        payload = [dataclasses.asdict(item) for item in data]
    else:
        payload = dataclasses.asdict(data)
    console.print_json(data=_without_owner(payload))


def _prepare(as_of: str | None) -> tuple[date, list[Transaction], list[Budget]]:
    session = require_session()
    try:
        today = resolve_today(as_of)
        transactions, budgets = load_snapshot(session)
    except InvalidInputError as e:
        fail(str(e))
    except sqlite3.Error as e:
        fail(f"Database error: {e}")
    return today, transactions, budgets


def summary_command(as_of: str | None = None, as_json: bool = False) -> None:
    """Show this month's income, expenses, budget and recent activity."""
    today, transactions, budgets = _prepare(as_of)
    summary = compute_monthly_summary(transactions, budgets, today)

    if as_json:
        print_json(summary)
        return

    currency = get_currency()
    _, _, period = month_range(summary.month)
    console.print(f"[bold cyan]{period}[/bold cyan]\n")

    console.print(f"  [bold]Total income:[/bold]   [green]{format_money(summary.total_income, currency)}[/green]")
    console.print(f"  [bold]Total expenses:[/bold] [red]{format_money(summary.total_expenses, currency)}[/red]")

    net_color = "green" if summary.net_income >= 0 else "red"
    flow = "Positive cash flow" if summary.net_income >= 0 else "Negative cash flow"
    console.print(
        f"  [bold]Net income:[/bold]     [{net_color}]{format_money(summary.net_income, currency)}[/{net_color}]"
        f" [dim]({flow})[/dim]"
    )

    if summary.budget_remaining is None:
        console.print("  [bold]Budget left:[/bold]    [dim]No Budget[/dim]")
    else:
        status = "Under budget" if summary.budget_remaining >= 0 else "Over budget"
        color = "green" if summary.budget_remaining >= 0 else "red"
        console.print(
            f"  [bold]Budget left:[/bold]    [{color}]{format_money(summary.budget_remaining, currency)}[/{color}]"
            f" [dim]of {format_money(summary.total_budget, currency)} ({status})[/dim]"
        )

    if summary.top_category:
        console.print(
            f"\n  [bold]Top spending category:[/bold] {summary.top_category.category}"
            f" ({format_money(summary.top_category.amount, currency)})"
        )

    console.print("\n[bold]Recent activity:[/bold]\n")
    if not summary.recent_transactions:
        console.print("  [dim]No transactions yet[/dim]")
        return

    for txn in summary.recent_transactions:
        color = "green" if txn.is_income else "red"
        amount_display = format_signed(txn.amount, txn.type, currency)
        console.print(
            f"  {format_date(txn.date):>13}  {txn.description:30} {txn.category.value:14}"
            f" [{color}]{amount_display:>12}[/{color}]"
        )


def breakdown_command(as_of: str | None = None, as_json: bool = False) -> None:
    """Show this month's expenses by category."""
    today, transactions, _ = _prepare(as_of)
    breakdown = compute_category_breakdown(transactions, today)

    if as_json:
        print_json(breakdown)
        return

    if not breakdown:
        console.print("[dim]No expenses this month[/dim]")
        return

    currency = get_currency()
    max_amount = max(share.amount for share in breakdown)
    console.print("[bold red]Expenses by category:[/bold red]\n")
    for share in breakdown:
        bar = "█" * calculate_bar_length(share.amount, max_amount, BAR_WIDTH)
        amount_display = format_money(share.amount, currency)
        console.print(f"  {share.category.value:14} {amount_display:>12} {share.percentage:5.1f}%  {bar}")

    total = sum(share.amount for share in breakdown)
    console.print(f"\n  [bold]Total expenses:[/bold] {format_money(total, currency)}")


def trend_command(as_of: str | None = None, as_json: bool = False) -> None:
    """Show monthly expenses for the last seven months."""
    today, transactions, _ = _prepare(as_of)
    series = compute_monthly_trend(transactions, today)

    if as_json:
        print_json(series)
        return

    currency = get_currency()
    max_amount = max(entry.amount for entry in series)
    console.print("[bold cyan]Monthly expenses[/bold cyan]\n")
    for entry in series:
        bar = "█" * calculate_bar_length(entry.amount, max_amount, BAR_WIDTH)
        amount_display = format_money(entry.amount, currency)
        line = f"  {entry.label:7} {amount_display:>12}  {bar}"
        if entry.is_current:
            console.print(f"[bold]{line}[/bold] [dim](current)[/dim]")
        else:
            console.print(line)


def compare_command(as_of: str | None = None, as_json: bool = False) -> None:
    """Compare this month's budgets with actual spending."""
    today, transactions, budgets = _prepare(as_of)
    rows = compute_budget_comparison(transactions, budgets, today)

    if as_json:
        print_json(rows)
        return

    if not rows:
        console.print("[dim]No budgets or expenses this month[/dim]")
        return

    currency = get_currency()
    table = Table(title="Budget vs actual", show_header=True, header_style="bold")
    table.add_column("Category", style="white")
    table.add_column("Budget", justify="right")
    table.add_column("Actual", justify="right")
    table.add_column("Remaining", justify="right")
    table.add_column("Overspent", justify="right")

    for row in rows:
        overspent = f"[red]{format_money(row.overspent, currency)}[/red]" if row.overspent > 0 else "[dim]-[/dim]"
        table.add_row(
            row.category.value,
            format_money(row.budget, currency),
            format_money(row.actual, currency),
            format_money(row.remaining, currency),
            overspent,
        )

    console.print(table)


def insights_command(as_of: str | None = None, as_json: bool = False) -> None:
    """Show budget performance, spending trends and tips."""
    today, transactions, budgets = _prepare(as_of)
    currency = get_currency()
    report = build_insight_report(transactions, budgets, today, currency)

    if as_json:
        print_json(report)
        return

    _, _, period = month_range(report.month)
    console.print(f"[bold cyan]Spending insights for {period}[/bold cyan]\n")

    if report.savings_message:
        color = "green" if report.total_savings > 0 else "red"
        console.print(f"[{color}]{report.savings_message}[/{color}]")

    if report.top_category:
        console.print(
            f"[bold]Top spending category:[/bold] {report.top_category.category}"
            f" ({format_money(report.top_category.amount, currency)} this month)"
        )

    if report.budget_insights:
        console.print("\n[bold]Budget performance:[/bold]\n")
        for insight in report.budget_insights:
            color = STATUS_COLORS[insight.status]
            bar = "█" * calculate_bar_length(insight.progress, 100, 20)
            console.print(
                f"  [{color}]{insight.status.value:7}[/{color}] {insight.category.value:14}"
                f" {format_money(insight.spent, currency)} / {format_money(insight.budget, currency)}"
                f"  [{color}]{bar}[/{color}]"
            )
            console.print(f"          [dim]{insight.message}[/dim]")

    if report.trend_insights:
        console.print("\n[bold]Spending trends:[/bold]\n")
        for trend in report.trend_insights:
            arrow = "[red]↑[/red]" if trend.trend is TrendDirection.UP else "[green]↓[/green]"
            console.print(f"  {arrow} {trend.category.value:14} {trend.change:+.0f}%  [dim]{trend.message}[/dim]")

    console.print("\n[bold]Recommendations:[/bold]")
    for recommendation in report.recommendations:
        console.print(f"\n  [bold]{recommendation.title}[/bold]")
        for tip in recommendation.tips:
            console.print(f"    • {tip}")
