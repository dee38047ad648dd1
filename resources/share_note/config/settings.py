"""
Runtime configuration for Share Note.

This module holds the application-level configuration (log level, debug
mode, location of the settings file, authorization endpoint). It is separate
from the user's share settings, which live in ``models.share_settings`` and
are edited through the settings panel.
"""

import os
import logging
from pathlib import Path
from typing import Optional, Union
from dataclasses import dataclass, field
from enum import Enum


def _get_version_from_file() -> str:
    """Read version from the VERSION file shipped with the package."""
    try:
        version_file = Path(__file__).parent.parent / "VERSION"
        if version_file.exists():
            return version_file.read_text().strip()
    except OSError:
        pass
    return "1.0.0"


_TRUTHY = ("true", "1", "yes", "on")


class LogLevel(Enum):
    """Available log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


@dataclass
class AppConfig:
    """Main application configuration container."""

    app_name: str = "Share Note"
    version: str = field(default_factory=_get_version_from_file)

    debug_mode: bool = False
    log_level: LogLevel = LogLevel.INFO
    colored_output: bool = True

    # Overrides the platform default location of data.json
    settings_file: Optional[str] = None

    # External authorization flow
    challenge_url: str = "https://challenge.obsidianshare.com"

    def __post_init__(self):
        """Post-initialization processing."""
        self._load_environment_variables()
        self._validate_config()

    def _load_environment_variables(self) -> None:
        """Load configuration from environment variables."""
        if env_debug := os.getenv("SHARE_NOTE_DEBUG"):
            self.debug_mode = env_debug.lower() in _TRUTHY
            if self.debug_mode:
                self.log_level = LogLevel.DEBUG

        if env_log_level := os.getenv("SHARE_NOTE_LOG_LEVEL"):
            try:
                self.log_level = LogLevel(env_log_level.upper())
            except ValueError:
                logging.warning(f"Invalid log level in environment: {env_log_level}")

        if env_settings_file := os.getenv("SHARE_NOTE_SETTINGS_FILE"):
            self.settings_file = env_settings_file

        if env_no_color := os.getenv("SHARE_NOTE_NO_COLOR"):
            self.colored_output = not (env_no_color.lower() in _TRUTHY)

    def _validate_config(self) -> None:
        """Validate configuration values."""
        if not self.challenge_url:
            raise ValueError("Challenge URL cannot be empty")

        if not isinstance(self.log_level, LogLevel):
            raise ValueError(f"Invalid log level: {self.log_level!r}")

    def get_config_dir(self) -> Path:
        """Get the application configuration directory."""
        from ..utils.platform_utils import get_platform_config_dir
        return get_platform_config_dir()

    def get_settings_file_path(self) -> Path:
        """Get the path of the persisted share settings record."""
        if self.settings_file:
            return Path(self.settings_file).expanduser()
        return self.get_config_dir() / 'data.json'

    def get_log_file_path(self) -> Path:
        """Get the path of the application log file."""
        from ..utils.platform_utils import get_platform_log_dir
        return get_platform_log_dir() / 'share-note.log'

    def enable_debug(self) -> None:
        """Switch to debug mode and debug-level logging."""
        self.debug_mode = True
        self.log_level = LogLevel.DEBUG


# Global configuration instance
_global_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get the global configuration instance.

    Returns:
        Global AppConfig instance

    Raises:
        RuntimeError: If configuration hasn't been initialized
    """
    if _global_config is None:
        raise RuntimeError("Configuration not initialized. Call init_config() first.")
    return _global_config


def init_config(settings_file: Optional[Union[str, Path]] = None) -> AppConfig:
    """
    Initialize the global configuration.

    Args:
        settings_file: Optional path overriding where share settings are stored

    Returns:
        Initialized AppConfig instance
    """
    global _global_config

    _global_config = AppConfig()

    if settings_file:
        _global_config.settings_file = str(settings_file)

    return _global_config

