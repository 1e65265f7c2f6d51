"""CLI entry point for fintrack."""

import typer

from fintrack.commands.admin import backup_command, init_command
from fintrack.commands.budget import budget_command, budget_delete_command, budget_edit_command
from fintrack.commands.report import (
    breakdown_command,
    compare_command,
    insights_command,
    summary_command,
    trend_command,
)
from fintrack.commands.transactions import add_command, delete_command, edit_command, list_command
from fintrack.commands.user import login_command, logout_command, whoami_command
from fintrack.config import get_setting
from fintrack.log import configure_logging

app = typer.Typer(
    name="fintrack",
    help="Personal finance tracker - transactions, monthly budgets and spending insights",
    add_completion=False,
)

CATEGORY_HELP = "Category: Food, Transport, Bills, Entertainment, Shopping, Healthcare, Education, Travel, Other"
AS_OF_HELP = "Reference date (YYYY-MM-DD); defaults to today"
JSON_HELP = "Print the report as JSON"


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging on stderr"),
) -> None:
    """Personal finance tracker - transactions, monthly budgets and spending insights."""
    configure_logging("DEBUG" if verbose else str(get_setting("log_level", "WARNING")))


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing database"),
) -> None:
    """Initialize fintrack database and configuration."""
    init_command(force)


@app.command(name="backup")
def backup(
    output_dir: str = typer.Option(None, "--output", "-o", help="Backup directory"),
) -> None:
    """Backup your database and configuration files."""
    backup_command(output_dir)


@app.command()
def login(name: str) -> None:
    """Set who you are; all data is kept under this name."""
    login_command(name)


@app.command()
def logout() -> None:
    """Forget the current user name."""
    logout_command()


@app.command()
def whoami() -> None:
    """Show the current user name."""
    whoami_command()


@app.command()
def add(
    amount: float,
    description: str,
    category: str = typer.Option("Other", "--category", "-c", help=CATEGORY_HELP),
    txn_type: str = typer.Option("expense", "--type", "-t", help="'income' or 'expense'"),
    date: str = typer.Option(None, "--date", "-d", help="Transaction date (default: today)"),
) -> None:
    """Add an income or expense transaction."""
    add_command(amount, description, category, txn_type, date)


@app.command()
def edit(
    txn_id: int,
    amount: float = typer.Option(None, "--amount", help="New amount"),
    description: str = typer.Option(None, "--description", help="New description"),
    category: str = typer.Option(None, "--category", "-c", help=CATEGORY_HELP),
    txn_type: str = typer.Option(None, "--type", "-t", help="'income' or 'expense'"),
    date: str = typer.Option(None, "--date", "-d", help="New date"),
) -> None:
    """Edit a transaction."""
    edit_command(txn_id, amount, description, category, txn_type, date)


@app.command()
def delete(txn_id: int) -> None:
    """Delete a transaction."""
    delete_command(txn_id)


@app.command(name="list")
def list_transactions(
    search: str = typer.Option(None, "--search", "-s", help="Filter by description or category"),
    limit: int = typer.Option(50, help="Maximum transactions to show"),
    all: bool = typer.Option(False, "--all", "-a", help="Show all your transactions"),
) -> None:
    """List your transactions, newest first."""
    list_command(search, limit, all)


@app.command()
def budget(
    category: str = typer.Option(None, "--category", "-c", help=CATEGORY_HELP),
    amount: float = typer.Option(None, "--amount", help="Monthly limit"),
    month: str = typer.Option(None, "--month", help="Month to budget for (YYYY-MM)"),
) -> None:
    """Set a monthly category budget, or show the month's budgets."""
    budget_command(category, amount, month)


@app.command(name="budget-edit")
def budget_edit(
    budget_id: int,
    category: str = typer.Option(None, "--category", "-c", help=CATEGORY_HELP),
    amount: float = typer.Option(None, "--amount", help="New monthly limit"),
    month: str = typer.Option(None, "--month", help="New month (YYYY-MM)"),
) -> None:
    """Edit a budget."""
    budget_edit_command(budget_id, category, amount, month)


@app.command(name="budget-delete")
def budget_delete(budget_id: int) -> None:
    """Delete a budget."""
    budget_delete_command(budget_id)


@app.command()
def summary(
    as_of: str = typer.Option(None, "--as-of", help=AS_OF_HELP),
    as_json: bool = typer.Option(False, "--json", help=JSON_HELP),
) -> None:
    """Show this month's income, expenses and budget."""
    summary_command(as_of, as_json)


@app.command()
def breakdown(
    as_of: str = typer.Option(None, "--as-of", help=AS_OF_HELP),
    as_json: bool = typer.Option(False, "--json", help=JSON_HELP),
) -> None:
    """Show this month's spending by category."""
    breakdown_command(as_of, as_json)


@app.command()
def trend(
    as_of: str = typer.Option(None, "--as-of", help=AS_OF_HELP),
    as_json: bool = typer.Option(False, "--json", help=JSON_HELP),
) -> None:
    """Show monthly spending for the last seven months."""
    trend_command(as_of, as_json)


@app.command()
def compare(
    as_of: str = typer.Option(None, "--as-of", help=AS_OF_HELP),
    as_json: bool = typer.Option(False, "--json", help=JSON_HELP),
) -> None:
    """Compare this month's budgets with actual spending."""
    compare_command(as_of, as_json)


@app.command()
def insights(
    as_of: str = typer.Option(None, "--as-of", help=AS_OF_HELP),
    as_json: bool = typer.Option(False, "--json", help=JSON_HELP),
) -> None:
    """Show budget status, spending trends and tips."""
    insights_command(as_of, as_json)


if __name__ == "__main__":
    app()
