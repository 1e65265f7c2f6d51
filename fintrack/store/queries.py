"""Database query functions.

Every function takes the caller's Session and only ever reads or writes rows
whose owner matches the session owner.
"""

import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

from fintrack.domain.models import Budget, Category, Money, Month, Owner, Transaction, TransactionType
from fintrack.errors import DuplicateBudgetError, InvalidInputError, NotFoundError
from fintrack.log import get_logger

if TYPE_CHECKING:
    from fintrack.session import Session

logger = get_logger("store")

TRANSACTION_COLUMNS = "id, owner, date, description, amount, category, type, created_at, updated_at"
BUDGET_COLUMNS = "id, owner, category, month, amount, created_at, updated_at"


def _connect(db_path: Path) -> sqlite3.Connection:
    """Create a database connection with row factory.

    Args:
        db_path: Path to the database file.

    Returns:
        Database connection with row_factory configured.
    """
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def _now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds")


def _check_owner(session: "Session", owner: Owner) -> None:
    if owner != session.owner:
        raise InvalidInputError(f"Record belongs to '{owner}', not to the current user '{session.owner}'")


def _row_to_transaction(row: sqlite3.Row) -> Transaction:
    return Transaction(
        id=row["id"],
        owner=Owner(row["owner"]),
        date=row["date"],
        description=row["description"],
        amount=Money(row["amount"]),
        category=Category(row["category"]),
        type=TransactionType(row["type"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _row_to_budget(row: sqlite3.Row) -> Budget:
    return Budget(
        id=row["id"],
        owner=Owner(row["owner"]),
        category=Category(row["category"]),
        month=Month(row["month"]),
        amount=Money(row["amount"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def list_transactions(session: "Session") -> list[Transaction]:
    """Get all of the owner's transactions.

    Args:
        session: Current session.

    Returns:
        Transactions ordered by date descending (newest entry first on ties).

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(session.db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(
            f"SELECT {TRANSACTION_COLUMNS} FROM transactions WHERE owner = ? ORDER BY date DESC, id DESC",
            (session.owner,),
        )
        return [_row_to_transaction(row) for row in cursor.fetchall()]


def get_transaction(session: "Session", txn_id: int) -> Transaction | None:
    """Get one of the owner's transactions by ID.

    Returns:
        The transaction, or None if it doesn't exist for this owner.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(session.db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(
            f"SELECT {TRANSACTION_COLUMNS} FROM transactions WHERE id = ? AND owner = ?",
            (txn_id, session.owner),
        )
        row = cursor.fetchone()
        return _row_to_transaction(row) if row else None


def insert_transaction(session: "Session", txn: Transaction) -> int:
    """Insert a new transaction.

    Args:
        session: Current session.
        txn: Transaction to store (its id and timestamps are ignored).

    Returns:
        ID of the new transaction.

    Raises:
        InvalidInputError: If the transaction belongs to another owner.
        sqlite3.Error: If database operation fails.
    """
    _check_owner(session, txn.owner)
    now = _now()

    with _connect(session.db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                """
                INSERT INTO transactions (owner, date, description, amount, category, type, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (session.owner, txn.date, txn.description, txn.amount, txn.category.value, txn.type.value, now, now),
            )
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise

        txn_id = cursor.lastrowid
        assert txn_id is not None
        logger.debug("Inserted transaction %s for %s", txn_id, session.owner)
        return txn_id


def update_transaction(session: "Session", txn_id: int, txn: Transaction) -> None:
    """Replace the fields of one of the owner's transactions.

    Raises:
        InvalidInputError: If the transaction belongs to another owner.
        NotFoundError: If no transaction with this ID exists for the owner.
        sqlite3.Error: If database operation fails.
    """
    _check_owner(session, txn.owner)

    with _connect(session.db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                """
                UPDATE transactions
                SET date = ?, description = ?, amount = ?, category = ?, type = ?, updated_at = ?
                WHERE id = ? AND owner = ?
                """,
                (
                    txn.date,
                    txn.description,
                    txn.amount,
                    txn.category.value,
                    txn.type.value,
                    _now(),
                    txn_id,
                    session.owner,
                ),
            )
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise

        if cursor.rowcount == 0:
            raise NotFoundError(f"Transaction {txn_id} not found or access denied")
        logger.debug("Updated transaction %s for %s", txn_id, session.owner)


def delete_transaction(session: "Session", txn_id: int) -> None:
    """Delete one of the owner's transactions.

    Raises:
        NotFoundError: If no transaction with this ID exists for the owner.
        sqlite3.Error: If database operation fails.
    """
    with _connect(session.db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("DELETE FROM transactions WHERE id = ? AND owner = ?", (txn_id, session.owner))
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise

        if cursor.rowcount == 0:
            raise NotFoundError(f"Transaction {txn_id} not found or access denied")
        logger.debug("Deleted transaction %s for %s", txn_id, session.owner)


def list_budgets(session: "Session", month: Month | None = None) -> list[Budget]:
    """Get the owner's budgets.

    Args:
        session: Current session.
        month: Optional month (YYYY-MM) to filter by.

    Returns:
        Budgets ordered by category, then month.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(session.db_path) as conn:
        cursor = conn.cursor()
        query = f"SELECT {BUDGET_COLUMNS} FROM budgets WHERE owner = ?"
        params: list[str] = [session.owner]

        if month:
            query += " AND month = ?"
            params.append(month)

        query += " ORDER BY category, month"

        cursor.execute(query, params)
        return [_row_to_budget(row) for row in cursor.fetchall()]


def get_budget(session: "Session", budget_id: int) -> Budget | None:
    """Get one of the owner's budgets by ID.

    Returns:
        The budget, or None if it doesn't exist for this owner.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(session.db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(
            f"SELECT {BUDGET_COLUMNS} FROM budgets WHERE id = ? AND owner = ?",
            (budget_id, session.owner),
        )
        row = cursor.fetchone()
        return _row_to_budget(row) if row else None


def upsert_budget(session: "Session", budget: Budget) -> tuple[bool, int]:
    """Create a budget, or replace the amount of the existing one.

    (owner, category, month) is the natural key, so setting a budget twice for
    the same category and month updates it instead of adding a duplicate.

    Returns:
        Tuple of (created, budget_id):
        - created: True if a new budget was inserted, False if one was updated
        - budget_id: ID of the stored budget

    Raises:
        InvalidInputError: If the budget belongs to another owner.
        sqlite3.Error: If database operation fails.
    """
    _check_owner(session, budget.owner)
    now = _now()

    with _connect(session.db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                "SELECT id FROM budgets WHERE owner = ? AND category = ? AND month = ?",
                (session.owner, budget.category.value, budget.month),
            )
            existing = cursor.fetchone()

            cursor.execute(
                """
                INSERT INTO budgets (owner, category, month, amount, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT (owner, category, month)
                DO UPDATE SET amount = excluded.amount, updated_at = excluded.updated_at
                """,
                (session.owner, budget.category.value, budget.month, budget.amount, now, now),
            )
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise

        if existing:
            logger.debug("Updated budget %s (%s %s) for %s", existing[0], budget.category, budget.month, session.owner)
            return (False, existing[0])

        budget_id = cursor.lastrowid
        assert budget_id is not None
        logger.debug("Created budget %s (%s %s) for %s", budget_id, budget.category, budget.month, session.owner)
        return (True, budget_id)


def update_budget(session: "Session", budget_id: int, budget: Budget) -> None:
    """Replace the category, month and amount of one of the owner's budgets.

    Raises:
        InvalidInputError: If the budget belongs to another owner.
        NotFoundError: If no budget with this ID exists for the owner.
        DuplicateBudgetError: If another budget already uses the category and month.
        sqlite3.Error: If database operation fails.
    """
    _check_owner(session, budget.owner)

    with _connect(session.db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                """
                UPDATE budgets SET category = ?, month = ?, amount = ?, updated_at = ?
                WHERE id = ? AND owner = ?
                """,
                (budget.category.value, budget.month, budget.amount, _now(), budget_id, session.owner),
            )
            conn.commit()
        except sqlite3.IntegrityError as e:
            conn.rollback()
            if "UNIQUE" in str(e):
                raise DuplicateBudgetError(
                    f"A {budget.category} budget for {budget.month} already exists"
                ) from e
            raise
        except sqlite3.Error:
            conn.rollback()
            raise

        if cursor.rowcount == 0:
            raise NotFoundError(f"Budget {budget_id} not found or access denied")
        logger.debug("Updated budget %s for %s", budget_id, session.owner)


def delete_budget(session: "Session", budget_id: int) -> None:
    """Delete one of the owner's budgets.

    Raises:
        NotFoundError: If no budget with this ID exists for the owner.
        sqlite3.Error: If database operation fails.
    """
    with _connect(session.db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("DELETE FROM budgets WHERE id = ? AND owner = ?", (budget_id, session.owner))
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise

        if cursor.rowcount == 0:
            raise NotFoundError(f"Budget {budget_id} not found or access denied")
        logger.debug("Deleted budget %s for %s", budget_id, session.owner)
