"""
GUI components package for Share Note.

Components:
    - settings_panel: form controller binding controls to share settings
    - settings_view: CustomTkinter FormRenderer (import it directly; it needs Tk)
"""

from .settings_panel import SettingsPanel, FormRenderer, ControlHandle, PanelState

__all__ = [
    'SettingsPanel',
    'FormRenderer',
    'ControlHandle',
    'PanelState'
]
