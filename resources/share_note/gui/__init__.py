"""
GUI package for Share Note.

This package provides the CustomTkinter interface for editing share
settings.

Components:
    - main_window: Application window hosting the settings form
    - settings_panel: Toolkit-neutral settings form controller
    - settings_view: CustomTkinter drawing surface for the settings form

The window is imported from ``share_note.gui.main_window`` on demand so the
form controller stays importable where Tk is unavailable.
"""
