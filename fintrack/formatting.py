"""Display formatting for amounts and dates."""

from datetime import date

from fintrack.domain.models import Money, TransactionType

DEFAULT_CURRENCY = "$"


def format_money(amount: float, currency: str = DEFAULT_CURRENCY) -> str:
    """Format an amount with currency symbol and thousands separators.

    Negative amounts put the sign before the symbol ("-$3.00").
    """
    if amount < 0:
        return f"-{currency}{abs(amount):,.2f}"
    return f"{currency}{amount:,.2f}"


def format_signed(amount: Money, txn_type: TransactionType, currency: str = DEFAULT_CURRENCY) -> str:
    """Format a transaction amount with +/- according to its type."""
    sign = "+" if txn_type is TransactionType.INCOME else "-"
    return f"{sign}{format_money(amount, currency)}"


def format_date(value: str) -> str:
    """Format an ISO date string as e.g. "Jan 5, 2025"."""
    day = date.fromisoformat(value[:10])
    return f"{day.strftime('%b')} {day.day}, {day.year}"


def calculate_bar_length(amount: float, max_amount: float, bar_width: int) -> int:
    """Calculate histogram bar length.

    Args:
        amount: Amount to display.
        max_amount: Maximum amount in dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_amount <= 0:
        return 0
    return int((abs(amount) / max_amount) * bar_width)
