"""Transaction management commands (add, edit, delete, list)."""

import dataclasses
import sqlite3
from datetime import datetime

from rich.table import Table

from fintrack.commands.common import console, fail, get_currency, normalize_date, require_session
from fintrack.domain.models import Category, Description, Money, Transaction, TransactionType
from fintrack.errors import InvalidInputError, NotFoundError
from fintrack.formatting import format_date, format_signed
from fintrack.log import get_logger
from fintrack.store.queries import (
    delete_transaction,
    get_transaction,
    insert_transaction,
    list_transactions,
    update_transaction,
)

logger = get_logger("commands.transactions")


def filter_transactions(transactions: list[Transaction], search: str | None) -> list[Transaction]:
    """Keep transactions whose description or category contains the search text (any case)."""
    if not search:
        return transactions
    needle = search.lower()
    return [
        txn for txn in transactions if needle in txn.description.lower() or needle in txn.category.value.lower()
    ]


def add_command(
    amount: float,
    description: str,
    category: str,
    txn_type: str,
    date: str | None = None,
) -> None:
    """Add a transaction.

    Args:
        amount: Positive amount in currency units.
        description: Transaction description.
        category: Category name (case-insensitive).
        txn_type: 'income' or 'expense'.
        date: Transaction date; defaults to today.
    """
    session = require_session()

    try:
        txn = Transaction(
            amount=Money(amount),
            description=Description(description.strip()),
            date=normalize_date(date) if date else datetime.now().strftime("%Y-%m-%d"),
            category=Category.parse(category),
            type=TransactionType.parse(txn_type),
            owner=session.owner,
        )
        txn_id = insert_transaction(session, txn)
    except InvalidInputError as e:
        fail(str(e))
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    currency = get_currency()
    console.print(f"[green]✓[/green] Transaction added (ID: {txn_id}):")
    console.print(f"  Date: {format_date(txn.date)}")
    console.print(f"  Description: {txn.description}")
    console.print(f"  Amount: {format_signed(txn.amount, txn.type, currency)}")
    console.print(f"  Category: {txn.category}")
    logger.info("Added transaction %s", txn_id)


def edit_command(
    txn_id: int,
    amount: float | None = None,
    description: str | None = None,
    category: str | None = None,
    txn_type: str | None = None,
    date: str | None = None,
) -> None:
    """Edit fields of an existing transaction; unspecified fields are kept."""
    session = require_session()

    try:
        existing = get_transaction(session, txn_id)
        if existing is None:
            raise NotFoundError(f"Transaction {txn_id} not found or access denied")

        changes: dict[str, object] = {}
        if amount is not None:
            changes["amount"] = Money(amount)
        if description is not None:
            changes["description"] = Description(description.strip())
        if category is not None:
            changes["category"] = Category.parse(category)
        if txn_type is not None:
            changes["type"] = TransactionType.parse(txn_type)
        if date is not None:
            changes["date"] = normalize_date(date)

        if not changes:
            console.print("[yellow]Nothing to change[/yellow]")
            return

        updated = dataclasses.replace(existing, **changes)
        update_transaction(session, txn_id, updated)
    except (InvalidInputError, NotFoundError) as e:
        fail(str(e))
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    console.print(f"[green]✓[/green] Transaction {txn_id} updated")
    logger.info("Updated transaction %s (%s)", txn_id, ", ".join(sorted(changes)))


def delete_command(txn_id: int) -> None:
    """Delete a transaction."""
    session = require_session()

    try:
        delete_transaction(session, txn_id)
    except NotFoundError as e:
        fail(str(e))
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    console.print(f"[green]✓[/green] Transaction {txn_id} deleted")
    logger.info("Deleted transaction %s", txn_id)


def list_command(
    search: str | None = None,
    limit: int = 50,
    all: bool = False,
) -> None:
    """List transactions, newest first."""
    session = require_session()

    try:
        transactions = filter_transactions(list_transactions(session), search)
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    if not transactions:
        if search:
            console.print(f"[yellow]No transactions match '{search}'[/yellow]")
        else:
            console.print("[yellow]No transactions yet. Add one with 'fintrack add'.[/yellow]")
        return

    total_count = len(transactions)
    if not all:
        transactions = transactions[:limit]

    currency = get_currency()
    table = Table(title=f"Transactions (showing {len(transactions)} of {total_count})")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Date", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Category", style="magenta")
    table.add_column("Amount", justify="right")

    for txn in transactions:
        color = "green" if txn.is_income else "red"
        amount_display = f"[{color}]{format_signed(txn.amount, txn.type, currency)}[/{color}]"
        table.add_row(str(txn.id), format_date(txn.date), txn.description, txn.category.value, amount_display)

    console.print(table)
    logger.info("Listed %d of %d transactions", len(transactions), total_count)
