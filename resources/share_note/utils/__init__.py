"""
Utility modules for Share Note.

This module provides logging setup and platform path helpers used
throughout the application.
"""

from .logger import get_logger, setup_logging
from .platform_utils import get_platform_config_dir

__all__ = ["get_logger", "setup_logging", "get_platform_config_dir"]
