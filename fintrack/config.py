"""Configuration file management for fintrack."""

import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

DEFAULT_CONFIG: dict[str, Any] = {
    "currency": "$",
    "log_level": "WARNING",
}


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "fintrack" / "config.toml"


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    save_config(dict(DEFAULT_CONFIG), config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def get_setting(key: str, default: Any = None, config_path: Path | None = None) -> Any:
    """Read a single setting, falling back to built-in defaults.

    Args:
        key: Setting name.
        default: Value returned when neither the file nor the defaults have it.
        config_path: Path to config file. If None, uses default location.

    Returns:
        Setting value.
    """
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        config = {}

    if key in config:
        return config[key]
    return DEFAULT_CONFIG.get(key, default)


def set_setting(key: str, value: Any, config_path: Path | None = None) -> None:
    """Set a single setting, creating the config file if needed."""
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        config = dict(DEFAULT_CONFIG)

    config[key] = value
    save_config(config, config_path)


def unset_setting(key: str, config_path: Path | None = None) -> None:
    """Remove a setting if present."""
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        return

    if key in config:
        del config[key]
        save_config(config, config_path)
