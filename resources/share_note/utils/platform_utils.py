"""
Platform-specific utilities for Share Note.

Resolves the per-user directories where the settings file and the
application log live on Windows, macOS and Linux.
"""

import os
import sys
from pathlib import Path


APP_DIR_NAME = "share-note"


def is_windows() -> bool:
    """Check if the current operating system is Windows."""
    return os.name == 'nt'


def _base_dir(kind: str) -> Path:
    """Return the platform base directory for 'config' or 'logs'."""
    if is_windows():
        if kind == "config":
            return Path(os.getenv('APPDATA', '')) / APP_DIR_NAME
        return Path(os.getenv('LOCALAPPDATA', '')) / APP_DIR_NAME / 'Logs'

    if sys.platform == 'darwin':
        if kind == "config":
            return Path.home() / 'Library' / 'Application Support' / APP_DIR_NAME
        return Path.home() / 'Library' / 'Logs' / APP_DIR_NAME

    # Linux: honour XDG when set
    if kind == "config":
        root = os.getenv('XDG_CONFIG_HOME') or str(Path.home() / '.config')
        return Path(root) / APP_DIR_NAME
    root = os.getenv('XDG_STATE_HOME') or str(Path.home() / '.local' / 'state')
    return Path(root) / APP_DIR_NAME / 'logs'


def get_platform_config_dir(create: bool = True) -> Path:
    """
    Get the directory holding the persisted settings record.

    Args:
        create: Create the directory if it does not exist yet.

    Returns:
        Path to the configuration directory.
    """
    config_dir = _base_dir("config")
    if create:
        config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_platform_log_dir(create: bool = True) -> Path:
    """Get the directory for the application log file."""
    log_dir = _base_dir("logs")
    if create:
        log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir
