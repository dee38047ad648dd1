"""
Configuration module for Share Note.

This module handles runtime application settings: log level, debug mode and
the location of the persisted share settings file.
"""

from .settings import AppConfig, get_config, init_config

__all__ = ["AppConfig", "get_config", "init_config"]
