"""Database schema initialization."""

import os
import sqlite3
from pathlib import Path

from fintrack.domain.models import Category, TransactionType


def get_xdg_data_home() -> Path:
    """Get XDG data directory, with fallback to ~/.local/share."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data)
    return Path.home() / ".local" / "share"


def get_db_path() -> Path:
    """Get the default database path (XDG compliant)."""
    return get_xdg_data_home() / "fintrack" / "fintrack.db"


def database_exists(db_path: Path | None = None) -> bool:
    """Check if the database file exists.

    Args:
        db_path: Path to check. If None, uses default location.

    Returns:
        True if database exists, False otherwise.
    """
    if db_path is None:
        db_path = get_db_path()
    return db_path.exists()


def _sql_choices(values: list[str]) -> str:
    return ", ".join(f"'{value}'" for value in values)


def init_database(db_path: Path | None = None) -> None:
    """Initialize the database with the required schema.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.Error: If database initialization fails.
    """
    if db_path is None:
        db_path = get_db_path()

    db_path.parent.mkdir(parents=True, exist_ok=True)

    categories = _sql_choices(Category.names())
    types = _sql_choices([t.value for t in TransactionType])

    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()

    try:
        cursor.execute(
            f"""
            CREATE TABLE IF NOT EXISTS transactions (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                owner TEXT NOT NULL,
                date TEXT NOT NULL,
                description TEXT NOT NULL,
                amount REAL NOT NULL CHECK (amount > 0),
                category TEXT NOT NULL CHECK (category IN ({categories})),
                type TEXT NOT NULL CHECK (type IN ({types})),
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        """
        )

        cursor.execute(
            f"""
            CREATE TABLE IF NOT EXISTS budgets (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                owner TEXT NOT NULL,
                category TEXT NOT NULL CHECK (category IN ({categories})),
                month TEXT NOT NULL,
                amount REAL NOT NULL CHECK (amount > 0),
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL,
                UNIQUE (owner, category, month)
            )
        """
        )

        # Every query is scoped by owner
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_txn_owner_date ON transactions(owner, date)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_txn_owner_category ON transactions(owner, category)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_txn_owner_type ON transactions(owner, type)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_budget_owner_month ON budgets(owner, month)")

        conn.commit()

    except sqlite3.Error:
        conn.rollback()
        raise
    finally:
        conn.close()
