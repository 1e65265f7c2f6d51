"""Database store layer - provides persistence for the application.

This module re-exports all public database functions for easy importing.
"""

from fintrack.store.queries import (
    delete_budget,
    delete_transaction,
    get_budget,
    get_transaction,
    insert_transaction,
    list_budgets,
    list_transactions,
    update_budget,
    update_transaction,
    upsert_budget,
)
from fintrack.store.schema import database_exists, get_db_path, init_database

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Queries
    "delete_budget",
    "delete_transaction",
    "get_budget",
    "get_transaction",
    "insert_transaction",
    "list_budgets",
    "list_transactions",
    "update_budget",
    "update_transaction",
    "upsert_budget",
]
