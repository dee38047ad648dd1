"""
Smoke tests for the CustomTkinter settings view.

Skipped when customtkinter is missing or no display is available.
"""

import tkinter as tk

import pytest

ctk = pytest.importorskip("customtkinter")

from share_note.gui.components.settings_panel import SettingsPanel  # noqa: E402
from share_note.gui.components.settings_view import SettingsView  # noqa: E402


def _create_root():
    try:
        window = ctk.CTk()
    except tk.TclError as e:
        pytest.skip(f"No display available: {e}")
    window.withdraw()
    return window


class CapturingView(SettingsView):
    """SettingsView that keeps the text handles by row name."""

    def __init__(self, parent, **kwargs):
        super().__init__(parent, **kwargs)
        self.text_handles = {}

    def add_text(self, name, *args, **kwargs):
        handle = super().add_text(name, *args, **kwargs)
        self.text_handles[name] = handle
        return handle


@pytest.fixture
def root():
    window = _create_root()
    yield window
    window.destroy()


@pytest.fixture
def view(root):
    return CapturingView(root)


def test_view_builds_rows_and_pushes_api_key(root, view, plugin):
    panel = SettingsPanel(plugin, view)

    panel.display()
    assert panel.is_open
    # three headings plus one frame per setting
    assert len(view.winfo_children()) >= 11

    panel.api_key_control.set_value("from-browser")
    assert panel.api_key_control.get_value() == "from-browser"
    assert plugin.settings.api_key == ""

    panel.display()
    root.update()
    assert panel.api_key_control.get_value() == ""


def test_empty_text_inputs_show_placeholder(view, plugin):
    plugin.settings.yaml_field = ""
    SettingsPanel(plugin, view).display()

    prefix = view.text_handles["Frontmatter property prefix"]
    assert prefix.entry._placeholder_text_active
    assert prefix.get_value() == ""

    api_key = view.text_handles["API key"]
    assert api_key.entry._placeholder_text_active

    width = view.text_handles["Note reading width"]
    assert not width.entry._placeholder_text_active
    assert width.get_value() == "700px"


def test_pushed_value_replaces_placeholder_and_clearing_restores_it(view, plugin):
    panel = SettingsPanel(plugin, view)
    panel.display()
    api_key = view.text_handles["API key"]

    api_key.set_value("pushed")
    assert not api_key.entry._placeholder_text_active
    assert api_key.get_value() == "pushed"

    api_key.set_value("")
    assert api_key.entry._placeholder_text_active
    assert plugin.settings.api_key == ""


def test_typed_text_is_saved(view, plugin, store):
    SettingsPanel(plugin, view).display()
    width = view.text_handles["Note reading width"]

    width.entry.delete(0, "end")
    width.entry.insert(0, "64ch")
    width.check_for_edit()
    store.wait_for_pending(timeout=5)

    assert plugin.settings.note_width == "64ch"
    assert store.load()["noteWidth"] == "64ch"

    # No change since the last edit
    width.check_for_edit()
    store.wait_for_pending(timeout=5)
    assert plugin.settings.note_width == "64ch"


def test_user_id_entry_is_read_only(view, plugin):
    SettingsPanel(plugin, view).display()
    user_id = view.text_handles["User ID"]

    assert user_id.get_value() == plugin.settings.uid
    assert user_id.on_change is None
    assert user_id.entry.cget("state") == "disabled"


def test_call_soon_after_window_destroyed_is_dropped():
    window = _create_root()
    view = SettingsView(window)
    window.destroy()

    view.call_soon(lambda: None)
