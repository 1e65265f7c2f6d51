"""Budget commands for setting, editing and listing monthly category budgets."""

import dataclasses
import sqlite3
from datetime import datetime

from rich.table import Table

from fintrack.commands.common import console, fail, get_currency, require_session
from fintrack.dates import month_range
from fintrack.domain.aggregation import compute_budget_comparison
from fintrack.domain.models import Budget, Category, Money, Month, validate_month
from fintrack.errors import DuplicateBudgetError, InvalidInputError, NotFoundError
from fintrack.formatting import format_money
from fintrack.log import get_logger
from fintrack.session import Session
from fintrack.store.queries import (
    delete_budget,
    get_budget,
    list_budgets,
    list_transactions,
    update_budget,
    upsert_budget,
)

logger = get_logger("commands.budget")


def resolve_month(month: str | None) -> Month:
    """Month from --month, or the current month."""
    if month is None:
        return Month(datetime.now().strftime("%Y-%m"))
    return validate_month(month)


def show_budgets(session: Session, target_month: Month, month_display: str) -> None:
    """Show the month's budgets with spending so far.

    Args:
        session: Current session.
        target_month: Month in YYYY-MM format.
        month_display: Month display string (e.g., "November 2025").
    """
    budgets = list_budgets(session, target_month)

    console.print(f"[bold cyan]{month_display} Budgets[/bold cyan]\n")

    if not budgets:
        console.print(f"[yellow]No budgets set for {month_display}[/yellow]")
        console.print("[dim]Use 'fintrack budget --category <name> --amount <amount>' to set one[/dim]")
        return

    month_start = datetime.strptime(target_month, "%Y-%m").date()
    rows = compute_budget_comparison(list_transactions(session), budgets, month_start)
    comparison = {row.category: row for row in rows}
    currency = get_currency()

    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Category", style="white")
    table.add_column("Budget", justify="right")
    table.add_column("Spent", justify="right")
    table.add_column("Remaining", justify="right")

    for budget in budgets:
        row = comparison[budget.category]
        if row.overspent > 0:
            remaining_display = f"[red]-{format_money(row.overspent, currency)}[/red]"
        else:
            remaining_display = f"[green]{format_money(row.remaining, currency)}[/green]"

        table.add_row(
            str(budget.id),
            budget.category.value,
            format_money(budget.amount, currency),
            format_money(row.actual, currency),
            remaining_display,
        )

    console.print(table)

    total = sum(b.amount for b in budgets)
    console.print(f"\n[bold]Total budget:[/bold] {format_money(total, currency)}")


def budget_command(
    category: str | None = None,
    amount: float | None = None,
    month: str | None = None,
) -> None:
    """Set a category budget for a month, or show the month's budgets."""
    session = require_session()

    try:
        target_month = resolve_month(month)
        _, _, month_display = month_range(target_month)

        if category is None and amount is None:
            show_budgets(session, target_month, month_display)
            return

        if category is None or amount is None:
            fail("--category and --amount must be specified together")

        budget = Budget(
            category=Category.parse(category),
            amount=Money(amount),
            month=target_month,
            owner=session.owner,
        )
        created, budget_id = upsert_budget(session, budget)

    except InvalidInputError as e:
        fail(str(e))
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    verb = "Set" if created else "Updated"
    console.print(
        f"[green]✓ {verb} {budget.category} budget for {month_display}: "
        f"{format_money(budget.amount, get_currency())}[/green]"
    )
    logger.info("%s budget %s", verb, budget_id)


def budget_edit_command(
    budget_id: int,
    category: str | None = None,
    amount: float | None = None,
    month: str | None = None,
) -> None:
    """Edit an existing budget; unspecified fields are kept."""
    session = require_session()

    try:
        existing = get_budget(session, budget_id)
        if existing is None:
            raise NotFoundError(f"Budget {budget_id} not found or access denied")

        changes: dict[str, object] = {}
        if category is not None:
            changes["category"] = Category.parse(category)
        if amount is not None:
            changes["amount"] = Money(amount)
        if month is not None:
            changes["month"] = validate_month(month)

        if not changes:
            console.print("[yellow]Nothing to change[/yellow]")
            return

        update_budget(session, budget_id, dataclasses.replace(existing, **changes))
    except (InvalidInputError, NotFoundError, DuplicateBudgetError) as e:
        fail(str(e))
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    console.print(f"[green]✓[/green] Budget {budget_id} updated")
    logger.info("Updated budget %s (%s)", budget_id, ", ".join(sorted(changes)))


def budget_delete_command(budget_id: int) -> None:
    """Delete a budget."""
    session = require_session()

    try:
        delete_budget(session, budget_id)
    except NotFoundError as e:
        fail(str(e))
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    console.print(f"[green]✓[/green] Budget {budget_id} deleted")
    logger.info("Deleted budget %s", budget_id)
