"""
Settings panel for Share Note.

This module provides the settings form controller. It builds the form from
the plugin's single ShareSettings instance through a FormRenderer, wires one
change handler per control, persists every edit and rebuilds the form after
toggles once their new value has been saved.

The controller is toolkit neutral; ``settings_view.SettingsView`` draws it
with CustomTkinter.
"""

import logging
import threading
from enum import Enum
from typing import Any, Callable, List, Optional, Tuple

from share_note.models.share_settings import ShareSettings, ThemeMode
from share_note.services.plugin import SharePlugin


class PanelState(Enum):
    """Lifecycle of one settings form."""
    CLOSED = "closed"
    OPEN = "open"


class ControlHandle:
    """Handle on a rendered control, used to read or push its value."""

    def get_value(self) -> Any:
        raise NotImplementedError

    def set_value(self, value: Any) -> None:
        """Show a new value without firing the control's change handler."""
        raise NotImplementedError


class FormRenderer:
    """
    Drawing surface for the settings form.

    Implementations add controls in call order and invoke ``on_change`` with
    the control's new value on the UI thread whenever the user edits it.
    """

    def clear(self) -> None:
        """Remove every control added so far."""
        raise NotImplementedError

    def add_heading(self, text: str) -> None:
        raise NotImplementedError

    def add_text(self, name: str, desc: str = "", value: str = "",
                 placeholder: str = "",
                 on_change: Optional[Callable[[str], Any]] = None,
                 disabled: bool = False,
                 button: Optional[Tuple[str, Callable[[], Any]]] = None) -> ControlHandle:
        """
        Add a single-line text input.

        Args:
            name: Row label
            desc: Help text shown under the label
            value: Initial value
            placeholder: Hint shown while empty
            on_change: Called with the new text on every edit
            disabled: Render read-only
            button: Optional (label, command) action shown beside the input
        """
        raise NotImplementedError

    def add_dropdown(self, name: str, desc: str, options: List[str], value: str,
                     on_change: Callable[[str], Any]) -> ControlHandle:
        raise NotImplementedError

    def add_toggle(self, name: str, desc: str, value: bool,
                   on_change: Callable[[bool], Any]) -> ControlHandle:
        raise NotImplementedError

    def call_soon(self, callback: Callable[[], None]) -> None:
        """Run callback on the UI thread after the current event."""
        raise NotImplementedError


# Toggles rebuild the whole form once their value is saved
REDISPLAY_FIELDS = ("remove_yaml", "clipboard", "show_footer")


class SettingsPanel:
    """
    Settings form bound to the plugin's share settings.

    The panel holds the settings only by reference through the plugin and
    edits them exclusively through ShareSettings.update().
    """

    def __init__(self, plugin: SharePlugin, renderer: FormRenderer):
        """
        Initialize settings panel.

        Args:
            plugin: Owner of the settings and their persistence
            renderer: Surface the form is drawn on
        """
        self.plugin = plugin
        self.renderer = renderer
        self.state = PanelState.CLOSED
        self.api_key_control: Optional[ControlHandle] = None
        self._logger = logging.getLogger(__name__)

        plugin.attach_panel(self)

    @property
    def settings(self) -> ShareSettings:
        if self.plugin.settings is None:
            raise RuntimeError("Plugin not active. Call activate() first.")
        return self.plugin.settings

    @property
    def is_open(self) -> bool:
        return self.state == PanelState.OPEN

    def display(self) -> None:
        """(Re)build the entire form from the current settings."""
        settings = self.settings
        renderer = self.renderer

        renderer.clear()
        self.api_key_control = None

        renderer.add_heading("Plugin setup")

        self.api_key_control = renderer.add_text(
            "API key",
            desc="Click the button to request a new API key",
            value=settings.api_key,
            placeholder="API key",
            on_change=self._text_handler("api_key"),
            button=("Connect plugin", self._connect),
        )

        renderer.add_text(
            "Frontmatter property prefix",
            desc=("The frontmatter property for storing the shared link and updated time. "
                  "A value of `share` will create frontmatter fields of `share_link` "
                  "and `share_updated`."),
            value=settings.yaml_field,
            placeholder="share",
            on_change=self._text_handler("yaml_field"),
        )

        renderer.add_heading("Upload options")

        renderer.add_dropdown(
            "Light/Dark mode",
            "Choose the mode with which your files will be shared",
            ThemeMode.labels(),
            settings.theme_mode.label,
            self._on_theme_mode_change,
        )

        renderer.add_text(
            "Note reading width",
            desc=("The max width for the content of your shared note, accepts any CSS unit. "
                  "The width is also limited by the reading width in your theme, so if you "
                  "set it to 100% it will be limited at that point by your theme."),
            value=settings.note_width,
            placeholder="700px",
            on_change=self._text_handler("note_width"),
        )

        renderer.add_toggle(
            "Remove published frontmatter/YAML",
            "Remove frontmatter/YAML/properties from the shared note",
            settings.remove_yaml,
            self._toggle_handler("remove_yaml"),
        )

        renderer.add_toggle(
            "Copy the link to clipboard after sharing",
            "",
            settings.clipboard,
            self._toggle_handler("clipboard"),
        )

        renderer.add_toggle(
            "Show the footer",
            "",
            settings.show_footer,
            self._toggle_handler("show_footer"),
        )

        renderer.add_heading("Debug info")

        # No change handler: the user ID is shown for support requests only
        renderer.add_text(
            "User ID",
            desc="If you need it for debugging purposes, this is your user ID",
            value=settings.uid,
            disabled=True,
        )

        self.state = PanelState.OPEN

    def close(self) -> None:
        """Tear the form down."""
        self.renderer.clear()
        self.api_key_control = None
        self.state = PanelState.CLOSED

    def update_api_key(self, api_key: str) -> None:
        """Push a received API key into the visible input without a rebuild."""
        if not self.is_open:
            return
        self.renderer.call_soon(lambda: self._show_api_key(api_key))

    def _show_api_key(self, api_key: str) -> None:
        if self.is_open and self.api_key_control is not None:
            self.api_key_control.set_value(api_key)

    def _text_handler(self, field_name: str) -> Callable[[str], threading.Thread]:
        def on_change(value: str) -> threading.Thread:
            return self._apply_edit(field_name, value)
        return on_change

    def _toggle_handler(self, field_name: str) -> Callable[[bool], threading.Thread]:
        def on_change(value: bool) -> threading.Thread:
            return self._apply_edit(field_name, value)
        return on_change

    def _on_theme_mode_change(self, label: str) -> Optional[threading.Thread]:
        mode = ThemeMode.from_label(label)
        if mode is None:
            self._logger.debug(f"Ignoring unknown theme mode '{label}'")
            return None
        return self._apply_edit("theme_mode", mode)

    def _apply_edit(self, field_name: str, value: Any) -> threading.Thread:
        """Store one edit and persist the whole record."""
        self.settings.update(field_name, value)

        on_saved = self._schedule_display if field_name in REDISPLAY_FIELDS else None
        return self.plugin.save_settings(on_saved)

    def _schedule_display(self) -> None:
        # Runs on the save thread
        if self.is_open:
            self.renderer.call_soon(self._redisplay)

    def _redisplay(self) -> None:
        if self.is_open:
            self.display()

    def _connect(self) -> None:
        self.plugin.connect()
