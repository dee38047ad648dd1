"""
Data models for Share Note.

This module contains the share settings record, its defaults and
normalization rules.
"""

from .share_settings import ShareSettings, ThemeMode, DEFAULT_SETTINGS

__all__ = ["ShareSettings", "ThemeMode", "DEFAULT_SETTINGS"]
