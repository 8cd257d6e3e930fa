"""Core constants and paths for clipkeep.

Single source of truth for global paths. All modules should import from here
instead of hardcoding paths like `Path.home() / ".clipkeep"`.
"""

from pathlib import Path

CLIPKEEP_DIR_NAME = ".clipkeep"
HISTORY_DB_NAME = "clipboard_history.db"


def get_clipkeep_dir() -> Path:
    """Get ~/.clipkeep (global config and data directory)."""
    return Path.home() / CLIPKEEP_DIR_NAME


def get_default_config_path() -> Path:
    """Get default config file path."""
    return get_clipkeep_dir() / "config.json"


def get_default_db_path() -> Path:
    """Get default history database path."""
    return get_clipkeep_dir() / HISTORY_DB_NAME


def get_default_log_dir() -> Path:
    """Get default log directory."""
    return get_clipkeep_dir() / "logs"
