"""
CustomTkinter settings view for Share Note.

This module draws the settings form produced by SettingsPanel: one row per
setting with a bold name, optional help text and the control on the right.
"""

import logging
import tkinter as tk
from typing import Any, Callable, List, Optional, Tuple
import customtkinter as ctk

from .settings_panel import ControlHandle, FormRenderer


class _TextHandle(ControlHandle):
    """
    Entry without a textvariable, so CTkEntry can show its placeholder.

    Edits are detected by comparing the entry text with the last value seen;
    programmatic updates move that value along and never reach on_change.
    """

    def __init__(self, entry: ctk.CTkEntry, value: str,
                 on_change: Optional[Callable[[str], Any]] = None):
        self.entry = entry
        self.last_value = value or ""
        self.on_change = on_change

    def get_value(self) -> str:
        # CTkEntry.get() returns "" while the placeholder is shown
        return self.entry.get()

    def set_value(self, value: Any) -> None:
        self.entry.delete(0, "end")
        if value:
            self.entry.insert(0, value)
        self.last_value = value or ""

    def check_for_edit(self, event=None) -> None:
        """Forward the entry text to on_change if the user changed it."""
        current = self.entry.get()
        if current == self.last_value:
            return
        self.last_value = current
        if self.on_change:
            self.on_change(current)


class _OptionHandle(ControlHandle):
    """Option menu; its command only fires on user selection."""

    def __init__(self, menu: ctk.CTkOptionMenu):
        self.menu = menu

    def get_value(self) -> str:
        return self.menu.get()

    def set_value(self, value: Any) -> None:
        self.menu.set(value)


class _SwitchHandle(ControlHandle):
    """Switch bound to a BooleanVar; select()/deselect() do not fire command."""

    def __init__(self, switch: ctk.CTkSwitch, variable: tk.BooleanVar):
        self.switch = switch
        self.variable = variable

    def get_value(self) -> bool:
        return bool(self.variable.get())

    def set_value(self, value: Any) -> None:
        if value:
            self.switch.select()
        else:
            self.switch.deselect()


class SettingsView(ctk.CTkScrollableFrame, FormRenderer):
    """
    Settings form surface.

    Rows are stacked with grid in the order SettingsPanel adds them;
    ``clear`` destroys every row so the panel can rebuild from scratch.
    """

    def __init__(self, parent, **kwargs):
        """
        Initialize settings view.

        Args:
            parent: Parent widget
            **kwargs: Additional CTkScrollableFrame arguments
        """
        super().__init__(parent, **kwargs)
        self.grid_columnconfigure(0, weight=1)
        self._row = 0

    def clear(self) -> None:
        for child in self.winfo_children():
            child.destroy()
        self._row = 0

    def add_heading(self, text: str) -> None:
        heading = ctk.CTkLabel(
            self,
            text=text,
            font=ctk.CTkFont(size=16, weight="bold")
        )
        heading.grid(row=self._next_row(), column=0, padx=10, pady=(15, 5), sticky="w")

    def add_text(self, name: str, desc: str = "", value: str = "",
                 placeholder: str = "",
                 on_change: Optional[Callable[[str], Any]] = None,
                 disabled: bool = False,
                 button: Optional[Tuple[str, Callable[[], Any]]] = None) -> ControlHandle:
        row_frame, controls_frame = self._setting_row(name, desc)

        entry = ctk.CTkEntry(
            controls_frame,
            placeholder_text=placeholder or None,
            width=220
        )
        if value:
            entry.insert(0, value)
        # A disabled entry rejects insert(), so lock it after filling
        if disabled:
            entry.configure(state="disabled")

        handle = _TextHandle(entry, value, None if disabled else on_change)

        column = 0
        if button:
            label, command = button
            ctk.CTkButton(
                controls_frame,
                text=label,
                command=command,
                width=120
            ).grid(row=0, column=column, padx=(0, 5), pady=5)
            column += 1
        entry.grid(row=0, column=column, pady=5, sticky="e")

        if handle.on_change:
            entry.bind("<KeyRelease>", handle.check_for_edit)
            entry.bind("<<Paste>>", lambda e: entry.after_idle(handle.check_for_edit))
            entry.bind("<FocusOut>", handle.check_for_edit)

        return handle

    def add_dropdown(self, name: str, desc: str, options: List[str], value: str,
                     on_change: Callable[[str], Any]) -> ControlHandle:
        row_frame, controls_frame = self._setting_row(name, desc)

        menu = ctk.CTkOptionMenu(
            controls_frame,
            values=options,
            command=on_change,
            width=160
        )
        menu.set(value)
        menu.grid(row=0, column=0, pady=5, sticky="e")
        return _OptionHandle(menu)

    def add_toggle(self, name: str, desc: str, value: bool,
                   on_change: Callable[[bool], Any]) -> ControlHandle:
        row_frame, controls_frame = self._setting_row(name, desc)

        variable = tk.BooleanVar(value=value)
        switch = ctk.CTkSwitch(
            controls_frame,
            text="",
            variable=variable,
            onvalue=True,
            offvalue=False,
            command=lambda: on_change(bool(variable.get()))
        )
        switch.grid(row=0, column=0, pady=5, sticky="e")
        return _SwitchHandle(switch, variable)

    def call_soon(self, callback: Callable[[], None]) -> None:
        # Save threads may call in while the window is being torn down
        try:
            self.after(0, callback)
        except (tk.TclError, RuntimeError) as e:
            logging.getLogger(__name__).debug(f"Settings view is gone, dropping callback: {e}")

    def _next_row(self) -> int:
        row = self._row
        self._row += 1
        return row

    def _setting_row(self, name: str, desc: str) -> Tuple[ctk.CTkFrame, ctk.CTkFrame]:
        """Create a row with name and description on the left, controls on the right."""
        row_frame = ctk.CTkFrame(self, fg_color="transparent")
        row_frame.grid(row=self._next_row(), column=0, padx=10, pady=2, sticky="ew")
        row_frame.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            row_frame,
            text=name,
            font=ctk.CTkFont(size=13, weight="bold"),
            anchor="w"
        ).grid(row=0, column=0, sticky="w")

        if desc:
            ctk.CTkLabel(
                row_frame,
                text=desc,
                text_color="gray",
                font=ctk.CTkFont(size=11),
                wraplength=380,
                justify="left",
                anchor="w"
            ).grid(row=1, column=0, sticky="w")

        controls_frame = ctk.CTkFrame(row_frame, fg_color="transparent")
        controls_frame.grid(row=0, column=1, rowspan=2, padx=(10, 0), sticky="e")
        return row_frame, controls_frame
