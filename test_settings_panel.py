"""
Tests for the settings form controller, driven through a recording renderer.
"""

import pytest

from share_note.gui.components.settings_panel import PanelState, SettingsPanel
from share_note.models.share_settings import FIELD_KEYS, ThemeMode


TEXT_FIELDS = [
    ("API key", "api_key", "apiKey"),
    ("Frontmatter property prefix", "yaml_field", "yamlField"),
    ("Note reading width", "note_width", "noteWidth"),
]

TOGGLES = [
    ("Remove published frontmatter/YAML", "remove_yaml", "removeYaml"),
    ("Copy the link to clipboard after sharing", "clipboard", "clipboard"),
    ("Show the footer", "show_footer", "showFooter"),
]


@pytest.fixture
def panel(plugin, renderer):
    settings_panel = SettingsPanel(plugin, renderer)
    settings_panel.display()
    return settings_panel


def test_panel_starts_closed(plugin, renderer):
    settings_panel = SettingsPanel(plugin, renderer)
    assert settings_panel.state == PanelState.CLOSED
    assert renderer.controls == []


def test_display_renders_every_setting_in_order(panel, renderer, plugin):
    assert panel.state == PanelState.OPEN
    assert renderer.headings == ["Plugin setup", "Upload options", "Debug info"]
    assert [control.name for control in renderer.controls] == [
        "API key",
        "Frontmatter property prefix",
        "Light/Dark mode",
        "Note reading width",
        "Remove published frontmatter/YAML",
        "Copy the link to clipboard after sharing",
        "Show the footer",
        "User ID",
    ]
    assert renderer.control("Light/Dark mode").options == ["Same as theme", "Dark", "Light"]
    assert renderer.control("Light/Dark mode").value == "Same as theme"
    assert renderer.control("User ID").value == plugin.settings.uid
    assert renderer.control("API key").button[0] == "Connect plugin"


def test_display_twice_shows_identical_values(panel, renderer):
    first = renderer.values()
    panel.display()
    assert renderer.values() == first
    assert renderer.clear_count == 2
    assert len(renderer.controls) == 8


@pytest.mark.parametrize("name,field_name,key", TEXT_FIELDS)
def test_text_edit_persists_without_rerender(panel, renderer, plugin, store, name, field_name, key):
    renderer.control(name).edit("edited-value").join(5)

    assert getattr(plugin.settings, field_name) == "edited-value"
    assert store.load()[key] == "edited-value"
    assert renderer.run_pending() == 0
    assert renderer.clear_count == 1


@pytest.mark.parametrize("name,field_name,default", [
    ("Frontmatter property prefix", "yaml_field", "share"),
    ("Note reading width", "note_width", "700px"),
])
def test_cleared_text_field_falls_back_to_default(panel, renderer, plugin, store, name, field_name, default):
    renderer.control(name).edit("temporary").join(5)
    renderer.control(name).edit("").join(5)

    assert getattr(plugin.settings, field_name) == default
    assert store.load()[FIELD_KEYS[field_name]] == default


def test_cleared_api_key_is_stored_empty(panel, renderer, plugin, store):
    renderer.control("API key").edit("abc").join(5)
    renderer.control("API key").edit("").join(5)
    assert plugin.settings.api_key == ""
    assert store.load()["apiKey"] == ""


@pytest.mark.parametrize("mode", list(ThemeMode))
def test_theme_label_round_trips_through_rerender(panel, renderer, plugin, store, mode):
    renderer.control("Light/Dark mode").edit(mode.label).join(5)

    assert plugin.settings.theme_mode is mode
    assert store.load()["themeMode"] == mode.code
    assert renderer.run_pending() == 0

    panel.display()
    assert renderer.control("Light/Dark mode").value == mode.label


def test_unknown_theme_label_is_dropped(panel, renderer, plugin):
    plugin.settings.update("theme_mode", ThemeMode.DARK)
    assert renderer.control("Light/Dark mode").edit("Sepia") is None
    assert plugin.settings.theme_mode is ThemeMode.DARK


@pytest.mark.parametrize("name,field_name,key", TOGGLES)
def test_toggle_persists_then_rerenders_once(panel, renderer, plugin, store, name, field_name, key):
    renderer.control(name).edit(False).join(5)

    assert getattr(plugin.settings, field_name) is False
    assert store.load()[key] is False

    assert renderer.run_pending() == 1
    assert renderer.clear_count == 2
    assert renderer.control(name).value is False


def test_toggle_does_not_rerender_when_save_fails(plugin, renderer, tmp_path):
    panel = SettingsPanel(plugin, renderer)
    panel.display()

    blocker = tmp_path / "blocker"
    blocker.write_text("x")
    plugin.store.file_path = blocker / "data.json"

    renderer.control("Show the footer").edit(False).join(5)

    assert plugin.settings.show_footer is False
    assert renderer.run_pending() == 0
    assert renderer.clear_count == 1


def test_rerender_after_close_is_ignored(panel, renderer):
    thread = renderer.control("Show the footer").edit(False)
    panel.close()
    thread.join(5)
    renderer.run_pending()

    assert panel.state == PanelState.CLOSED
    assert renderer.controls == []


def test_uid_control_is_read_only(panel, renderer, plugin):
    uid = plugin.settings.uid
    control = renderer.control("User ID")

    assert control.disabled is True
    assert control.on_change is None
    with pytest.raises(AssertionError):
        control.edit("other")

    for name, _, _ in TEXT_FIELDS:
        renderer.control(name).edit("x").join(5)
    for name, _, _ in TOGGLES:
        renderer.control(name).edit(False).join(5)
        renderer.run_pending()
    renderer.control("Light/Dark mode").edit("Light").join(5)

    assert plugin.settings.uid == uid
    assert renderer.control("User ID").value == uid


def test_connect_button_starts_authorization_without_editing(panel, renderer, plugin, opened_urls):
    before = plugin.settings.to_dict()
    label, command = renderer.control("API key").button

    command()

    assert opened_urls == [plugin.get_challenge_url()]
    assert plugin.settings.to_dict() == before


def test_edits_share_the_plugin_instance(panel, renderer, plugin):
    held = plugin.settings
    renderer.control("Note reading width").edit("64ch").join(5)
    renderer.control("Show the footer").edit(False).join(5)
    renderer.run_pending()

    assert plugin.settings is held
    assert held.note_width == "64ch"
    assert held.show_footer is False


def test_update_api_key_ignored_when_closed(plugin, renderer):
    panel = SettingsPanel(plugin, renderer)
    panel.update_api_key("key")
    assert renderer.pending == []
