"""Login, logout and whoami commands."""

from fintrack.commands.common import console, fail
from fintrack.errors import InvalidInputError
from fintrack.log import get_logger
from fintrack.session import clear_user_name, get_user_name, set_user_name

logger = get_logger("commands.user")


def login_command(name: str) -> None:
    """Set the current user name."""
    try:
        owner = set_user_name(name)
    except InvalidInputError as e:
        fail(str(e))
    except OSError as e:
        fail(f"Could not save config: {e}")

    console.print(f"[green]✓[/green] Welcome, [bold]{owner}[/bold]!")
    logger.info("Logged in as %s", owner)


def logout_command() -> None:
    """Forget the current user name."""
    owner = get_user_name()
    if owner is None:
        console.print("[yellow]Nobody is logged in[/yellow]")
        return

    clear_user_name()
    console.print(f"[green]✓[/green] Logged out {owner}")
    logger.info("Logged out %s", owner)


def whoami_command() -> None:
    """Show the current user name."""
    owner = get_user_name()
    if owner is None:
        console.print("[yellow]Nobody is logged in. Run 'fintrack login <name>'.[/yellow]")
        return
    console.print(owner)
