"""Admin commands for init and backup."""

import shutil
import sqlite3
import sys
from datetime import datetime
from pathlib import Path

from fintrack.commands.common import console, fail
from fintrack.config import create_default_config, get_config_path
from fintrack.log import get_logger
from fintrack.store.schema import get_db_path, get_xdg_data_home, init_database

logger = get_logger("commands.admin")


def backup_command(
    output_dir: str | None = None,
) -> None:
    """Backup database and configuration files."""
    db_path = get_db_path()
    config_path = get_config_path()

    if not db_path.exists():
        fail("Database not found. Run 'fintrack init' first.")

    if output_dir:
        backup_dir = Path(output_dir).expanduser()
    else:
        backup_dir = get_xdg_data_home() / "fintrack" / "backups"

    backup_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    db_backup = backup_dir / f"fintrack_{timestamp}.db"
    config_backup = backup_dir / f"config_{timestamp}.toml"

    try:
        shutil.copy2(db_path, db_backup)
        console.print(f"[green]✓[/green] Database backed up to: {db_backup}")

        if config_path.exists():
            shutil.copy2(config_path, config_backup)
            console.print(f"[green]✓[/green] Config backed up to: {config_backup}")

        console.print("\n[green]Backup complete![/green]", style="bold")
        console.print(f"[dim]Backup directory: {backup_dir}[/dim]")
        logger.info("Backup written to %s", backup_dir)

    except OSError as e:
        fail(f"Backup failed: {e}")


def init_command(force: bool = False) -> None:
    """Initialize fintrack database and configuration."""
    db_path = get_db_path()
    config_path = get_config_path()

    db_exists = db_path.exists()
    config_exists = config_path.exists()

    try:
        if not force and db_exists:
            console.print("[red]Initialization failed:[/red]", style="bold")
            console.print(f"  Database already exists: {db_path}")
            console.print("\n[yellow]Use 'fintrack init --force' to start over[/yellow]")
            sys.exit(1)

        if force and db_exists:
            db_path.unlink()

        console.print(f"[cyan]Initializing database at {db_path}...[/cyan]")
        init_database(db_path)
        console.print("[green]✓[/green] Database initialized")

        if not config_exists:
            console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
            create_default_config(config_path)
            console.print("[green]✓[/green] Config file created (permissions: 600)")

        console.print("\n[green]Initialization complete![/green]", style="bold")
        console.print("[dim]Next: run 'fintrack login <name>'[/dim]")
        logger.info("Initialized database at %s", db_path)

    except sqlite3.Error as e:
        fail(f"Database error: {e}")
    except OSError as e:
        fail(f"Filesystem error: {e}")
