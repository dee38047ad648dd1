"""
Plugin lifecycle service for Share Note.

``SharePlugin`` owns the single ShareSettings instance for the lifetime of
the plugin. It loads the record at activation, saves it after every edit,
starts the external authorization flow and is the point where an API key
delivered out of band is written back into the settings and the form.
"""

import hashlib
import logging
import secrets
import threading
import time
import webbrowser
from typing import Callable, Optional, TYPE_CHECKING
from urllib.parse import urlencode

from share_note.models.share_settings import ShareSettings, load_or_default
from .settings_store import SettingsStore, SettingsStoreError

if TYPE_CHECKING:
    from share_note.gui.components.settings_panel import SettingsPanel


DEFAULT_CHALLENGE_URL = "https://challenge.obsidianshare.com"


def generate_uid() -> str:
    """Issue a new opaque user ID."""
    seed = f"{time.time()}{secrets.token_hex(16)}"
    return hashlib.sha256(seed.encode("utf-8")).hexdigest()


class SharePlugin:
    """Owner of the share settings and their persistence."""

    def __init__(self, store: SettingsStore,
                 challenge_url: str = DEFAULT_CHALLENGE_URL,
                 open_url: Callable[[str], bool] = webbrowser.open):
        """
        Initialize the plugin.

        Args:
            store: Load and persistence collaborator
            challenge_url: Endpoint of the external authorization flow
            open_url: Opens a URL in the user's browser
        """
        self.store = store
        self.challenge_url = challenge_url
        self._open_url = open_url
        self._logger = logging.getLogger(__name__)

        self.settings: Optional[ShareSettings] = None
        self.settings_panel: Optional['SettingsPanel'] = None

    @property
    def is_active(self) -> bool:
        return self.settings is not None

    def activate(self) -> ShareSettings:
        """
        Load settings and issue a user ID on first run.

        Re-activating reuses the existing instance so held references stay
        valid.
        """
        loaded = load_or_default(self.store.load())

        if self.settings is None:
            self.settings = loaded
        else:
            self.settings.apply(loaded)

        if not self.settings.uid:
            self.settings.assign_uid(generate_uid())
            self._logger.info("Issued new user ID")
            try:
                self.store.save(self.settings)
            except SettingsStoreError as e:
                self._logger.error(str(e))

        self._logger.info("Share settings loaded")
        return self.settings

    def deactivate(self) -> None:
        """Drop the in-memory settings. Stored data is left untouched."""
        if self.settings_panel:
            self.settings_panel.close()
            self.settings_panel = None
        self.settings = None
        self._logger.info("Share settings unloaded")

    def attach_panel(self, panel: 'SettingsPanel') -> None:
        """Register the settings form that receives pushed API keys."""
        self.settings_panel = panel

    def save_settings(self, on_saved: Optional[Callable[[], None]] = None) -> threading.Thread:
        """
        Persist the whole settings record in the background.

        Args:
            on_saved: Called once the record has been written

        Returns:
            The save thread
        """
        return self.store.save_async(self._require_settings(), on_saved)

    def get_challenge_url(self) -> str:
        """URL of the authorization page, correlated by the user ID."""
        settings = self._require_settings()
        return f"{self.challenge_url}?{urlencode({'id': settings.uid})}"

    def connect(self) -> str:
        """
        Start the external authorization flow in the browser.

        The key is delivered later through receive_api_key().

        Returns:
            The URL that was opened
        """
        url = self.get_challenge_url()
        self._logger.info("Opening authorization page to request an API key")
        if not self._open_url(url):
            self._logger.warning(f"Could not open a browser. Visit {url} to connect.")
        return url

    def receive_api_key(self, api_key: str) -> Optional[threading.Thread]:
        """
        Accept an API key delivered by the authorization flow.

        The key is stored, persisted and pushed into the open settings form
        without rebuilding it.

        Returns:
            The save thread, or None if the key was empty
        """
        settings = self._require_settings()
        api_key = (api_key or "").strip()
        if not api_key:
            self._logger.warning("Ignoring empty API key")
            return None

        settings.update("api_key", api_key)
        if self.settings_panel:
            self.settings_panel.update_api_key(api_key)
        self._logger.info("API key received")
        return self.save_settings()

    def _require_settings(self) -> ShareSettings:
        if self.settings is None:
            raise RuntimeError("Plugin not active. Call activate() first.")
        return self.settings
