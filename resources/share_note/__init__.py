"""
Share Note - settings

Settings model, persistence and CustomTkinter settings form for the Share
Note publishing extension.
"""

from .config.settings import _get_version_from_file

__version__ = _get_version_from_file()
__author__ = "Share Note Team"
__description__ = "Share Note settings with a CustomTkinter form"

# Package-level imports for convenience
from .config.settings import AppConfig
from .models.share_settings import ShareSettings, ThemeMode, DEFAULT_SETTINGS
from .services.settings_store import SettingsStore
from .services.plugin import SharePlugin
from .utils.logger import get_logger

__all__ = [
    "AppConfig",
    "ShareSettings",
    "ThemeMode",
    "DEFAULT_SETTINGS",
    "SettingsStore",
    "SharePlugin",
    "get_logger"
]
