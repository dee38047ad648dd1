"""
Services package for Share Note.

This package provides settings persistence and the plugin lifecycle that
owns the share settings.
"""

from .settings_store import SettingsStore, SettingsStoreError
from .plugin import SharePlugin

__all__ = ["SettingsStore", "SettingsStoreError", "SharePlugin"]
