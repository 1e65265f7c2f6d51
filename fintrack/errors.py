"""Exception classes for fintrack."""


class FintrackError(Exception):
    """Base exception for fintrack."""


class InvalidInputError(FintrackError, ValueError):
    """Malformed transaction, budget, or input value."""


class NotFoundError(FintrackError):
    """Record does not exist for the current owner."""


class DuplicateBudgetError(FintrackError):
    """A budget already exists for the same owner, category and month."""


class SessionError(FintrackError):
    """No current user is set."""
