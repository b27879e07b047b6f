"""Configuration file management for moneytrail."""

import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

DEFAULT_SETTINGS: dict[str, Any] = {
    "currency_symbol": "₹",
    "budget_warning_percent": 80,
    "recent_transactions": 5,
    "default_list_limit": 100,
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
    return get_xdg_config_home() / "moneytrail" / "config.toml"


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file with secure permissions.

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


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    save_config(dict(DEFAULT_SETTINGS), config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def load_settings(config_path: Path | None = None) -> dict[str, Any]:
    """Load settings, falling back to defaults for anything not configured.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        DEFAULT_SETTINGS overlaid with the config file, if there is one.
    """
    settings = dict(DEFAULT_SETTINGS)
    try:
        settings.update(load_config(config_path))
    except FileNotFoundError:
        pass
    return settings
