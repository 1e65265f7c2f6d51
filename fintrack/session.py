"""Current-user session.

The user name is the only identity fintrack has. It is stored in the config
file when the user logs in and removed when they log out. Everything that
reads or writes data takes a Session explicitly.
"""

from dataclasses import dataclass
from pathlib import Path

from fintrack.config import get_setting, set_setting, unset_setting
from fintrack.domain.models import Owner, validate_owner
from fintrack.errors import InvalidInputError, SessionError
from fintrack.store.schema import get_db_path

USER_NAME_KEY = "user_name"


@dataclass(frozen=True)
class Session:
    """Who is using fintrack and which database they use."""

    owner: Owner
    db_path: Path


def get_user_name(config_path: Path | None = None) -> Owner | None:
    """Get the stored user name, or None if nobody is logged in."""
    name = get_setting(USER_NAME_KEY, config_path=config_path)
    if not isinstance(name, str) or not name.strip():
        return None
    return Owner(name)


def set_user_name(name: str, config_path: Path | None = None) -> Owner:
    """Store a user name (surrounding whitespace removed).

    Raises:
        InvalidInputError: If the name is blank.
    """
    trimmed = name.strip()
    if not trimmed:
        raise InvalidInputError("User name cannot be empty")
    set_setting(USER_NAME_KEY, trimmed, config_path)
    return Owner(trimmed)


def clear_user_name(config_path: Path | None = None) -> None:
    unset_setting(USER_NAME_KEY, config_path)


def load_session(db_path: Path | None = None, config_path: Path | None = None) -> Session:
    """Build a session for the stored user.

    Args:
        db_path: Database path. If None, uses default location.
        config_path: Path to config file. If None, uses default location.

    Returns:
        Session for the current user.

    Raises:
        SessionError: If no user name is stored.
    """
    owner = get_user_name(config_path)
    if owner is None:
        raise SessionError("No user set. Run 'fintrack login <name>' first.")
    return Session(owner=validate_owner(owner), db_path=db_path or get_db_path())
