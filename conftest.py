"""
Shared pytest fixtures for Share Note tests.

Provides an isolated settings store, an activated plugin whose browser
opener is recorded instead of launched, and a recording FormRenderer so the
settings panel can be exercised without a display.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import pytest

# Add the resources directory to Python path
sys.path.insert(0, str(Path(__file__).parent / "resources"))

from share_note.gui.components.settings_panel import ControlHandle, FormRenderer
from share_note.services.plugin import SharePlugin
from share_note.services.settings_store import SettingsStore
from share_note.utils.logger import ROOT_LOGGER_NAME


class RecordedControl(ControlHandle):
    """One control added to the RecordingRenderer."""

    def __init__(self, kind: str, name: str, value: Any,
                 on_change: Optional[Callable] = None, disabled: bool = False,
                 options: Optional[List[str]] = None, button=None):
        self.kind = kind
        self.name = name
        self.value = value
        self.on_change = on_change
        self.disabled = disabled
        self.options = options or []
        self.button = button
        self.pushed: List[Any] = []

    def get_value(self) -> Any:
        return self.value

    def set_value(self, value: Any) -> None:
        self.value = value
        self.pushed.append(value)

    def edit(self, value: Any):
        """Simulate a user edit and return what the handler returned."""
        if self.disabled or self.on_change is None:
            raise AssertionError(f"{self.name} is not editable")
        self.value = value
        return self.on_change(value)


class RecordingRenderer(FormRenderer):
    """FormRenderer double that records controls and queues call_soon work."""

    def __init__(self):
        self.headings: List[str] = []
        self.controls: List[RecordedControl] = []
        self.pending: List[Callable[[], None]] = []
        self.clear_count = 0

    def clear(self) -> None:
        self.headings = []
        self.controls = []
        self.clear_count += 1

    def add_heading(self, text: str) -> None:
        self.headings.append(text)

    def add_text(self, name, desc="", value="", placeholder="", on_change=None,
                 disabled=False, button=None):
        control = RecordedControl("text", name, value, on_change, disabled, button=button)
        self.controls.append(control)
        return control

    def add_dropdown(self, name, desc, options, value, on_change):
        control = RecordedControl("dropdown", name, value, on_change, options=list(options))
        self.controls.append(control)
        return control

    def add_toggle(self, name, desc, value, on_change):
        control = RecordedControl("toggle", name, value, on_change)
        self.controls.append(control)
        return control

    def call_soon(self, callback: Callable[[], None]) -> None:
        self.pending.append(callback)

    def run_pending(self) -> int:
        """Run queued UI callbacks; returns how many ran."""
        ran = 0
        while self.pending:
            self.pending.pop(0)()
            ran += 1
        return ran

    def control(self, name: str) -> RecordedControl:
        for control in self.controls:
            if control.name == name:
                return control
        raise KeyError(name)

    def values(self) -> Dict[str, Any]:
        return {control.name: control.value for control in self.controls}


@pytest.fixture
def settings_file(tmp_path: Path) -> Path:
    return tmp_path / "share-note" / "data.json"


@pytest.fixture
def store(settings_file: Path) -> SettingsStore:
    return SettingsStore(settings_file)


@pytest.fixture
def opened_urls() -> List[str]:
    return []


@pytest.fixture
def plugin(store: SettingsStore, opened_urls: List[str]) -> SharePlugin:
    """An activated plugin backed by a temporary data file."""
    def open_url(url: str) -> bool:
        opened_urls.append(url)
        return True

    share_plugin = SharePlugin(store, open_url=open_url)
    share_plugin.activate()
    yield share_plugin
    store.wait_for_pending(timeout=5)


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture(autouse=True)
def reset_app_logging():
    """Detach handlers installed by setup_logging so they do not outlive the test."""
    yield
    app_logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()
    app_logger.propagate = True
