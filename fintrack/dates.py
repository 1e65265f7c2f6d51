"""Date utilities for fintrack.

Pure functions for month keys, month arithmetic and labels. Nothing here
reads the clock; callers pass the reference date in.
"""

from datetime import date, datetime, timedelta

from fintrack.domain.models import Month


def month_range(month: Month) -> tuple[str, str, str]:
    """Calculate date range and label for a month.

    Args:
        month: Month in YYYY-MM format.

    Returns:
        Tuple of (since_date, until_date, label) where:
        - since_date: First day of month (YYYY-MM-DD)
        - until_date: First day of next month (YYYY-MM-DD)
        - label: Human-readable month (e.g., "January 2025")
    """
    dt = datetime.strptime(month, "%Y-%m")
    since = dt.strftime("%Y-%m-01")
    next_month = (dt.replace(day=28) + timedelta(days=4)).replace(day=1)
    until = next_month.strftime("%Y-%m-%d")
    label = dt.strftime("%B %Y")
    return since, until, label


def month_of(day: date) -> Month:
    """Month key (YYYY-MM) containing a date."""
    return Month(day.strftime("%Y-%m"))


def shift_month(month: Month, delta: int) -> Month:
    """Move a month key forwards or backwards by whole months.

    Args:
        month: Month in YYYY-MM format.
        delta: Number of months to move (negative goes back).

    Returns:
        Shifted month in YYYY-MM format.
    """
    dt = datetime.strptime(month, "%Y-%m")
    index = dt.year * 12 + (dt.month - 1) + delta
    year, month_zero = divmod(index, 12)
    return Month(f"{year:04d}-{month_zero + 1:02d}")


def previous_month(month: Month) -> Month:
    return shift_month(month, -1)


def trailing_months(month: Month, count: int) -> list[Month]:
    """List `count` consecutive months ending at `month`, oldest first."""
    return [shift_month(month, -offset) for offset in range(count - 1, -1, -1)]


def month_labels(month: Month) -> tuple[str, str]:
    """Short and long display labels for a month.

    Returns:
        Tuple of (short, long), e.g. ("Jan 25", "January 2025").
    """
    dt = datetime.strptime(month, "%Y-%m")
    return dt.strftime("%b %y"), dt.strftime("%B %Y")
