"""Helpers shared by the CLI commands."""

import sys
from datetime import date, datetime
from typing import NoReturn

import pandas as pd
from rich.console import Console

from fintrack.config import get_setting
from fintrack.errors import InvalidInputError, SessionError
from fintrack.session import Session, load_session
from fintrack.store.schema import database_exists

console = Console()


def fail(message: str) -> NoReturn:
    """Print an error and exit with status 1."""
    console.print(f"[red]{message}[/red]", style="bold")
    sys.exit(1)


def require_session() -> Session:
    """Load the current session or exit with a hint."""
    try:
        session = load_session()
    except SessionError as e:
        fail(str(e))

    if not database_exists(session.db_path):
        fail("Database not found. Run 'fintrack init' first.")
    return session


def get_currency() -> str:
    return str(get_setting("currency", "$"))


def normalize_date(value: str) -> str:
    """Parse a user-entered date into YYYY-MM-DD.

    Accepts YYYY-MM-DD, DD/MM/YYYY, DD-MM-YYYY and other common formats.

    Raises:
        InvalidInputError: If the value cannot be parsed as a date.
    """
    try:
        return pd.to_datetime(value, dayfirst=not value[:4].isdigit()).strftime("%Y-%m-%d")
    except (ValueError, OverflowError) as e:
        raise InvalidInputError(f"Invalid date '{value}': {e}") from e


def resolve_today(as_of: str | None) -> date:
    """Reference date for reports: --as-of if given, otherwise today."""
    if as_of is None:
        return datetime.now().date()
    return date.fromisoformat(normalize_date(as_of))
