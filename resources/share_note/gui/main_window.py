"""
Main application window for Share Note.

This module provides the window that hosts the settings form, with a status
bar showing the latest log message and a light/dark toggle for the window
itself.
"""

import logging
from typing import Optional
import customtkinter as ctk

from share_note.config.settings import get_config, init_config, AppConfig
from share_note.services.plugin import SharePlugin
from share_note.utils.logger import get_logger, setup_logging, GUILogHandler
from .components.settings_panel import SettingsPanel
from .components.settings_view import SettingsView


class MainWindow:
    """
    Main application window for Share Note.

    Opens the settings form when created and closes it, deactivating the
    plugin, when the window is closed.
    """

    def __init__(self, plugin: SharePlugin, config: Optional[AppConfig] = None):
        """
        Initialize the main application window.

        Args:
            plugin: Activated plugin owning the share settings
            config: Runtime configuration, the global one if omitted
        """
        self.plugin = plugin
        self._initialize_core_services(config)

        self.root = ctk.CTk()
        self.root.title(f"{self.config.app_name} settings")
        self.root.geometry("720x640")
        self.root.minsize(560, 480)

        self.settings_view: Optional[SettingsView] = None
        self.settings_panel: Optional[SettingsPanel] = None
        self._gui_handler: Optional[GUILogHandler] = None

        self._setup_theme()
        self._setup_layout()
        self._setup_status_bar()
        self._create_main_content()
        self._setup_event_handlers()
        self._setup_logging_integration()

        self.logger.info("Main window initialized")

    def _initialize_core_services(self, config: Optional[AppConfig]) -> None:
        if config is not None:
            self.config = config
        else:
            try:
                self.config = get_config()
            except RuntimeError:
                self.config = init_config()

        try:
            self.logger = get_logger()
        except RuntimeError:
            self.logger = setup_logging(
                colored=self.config.colored_output,
                log_file=self.config.get_log_file_path(),
                level=self.config.log_level
            )

    def _setup_theme(self) -> None:
        """Setup CustomTkinter theme and appearance."""
        appearance_mode = "dark"
        ctk.set_appearance_mode(appearance_mode)
        ctk.set_default_color_theme("blue")
        self.current_theme = appearance_mode

    def _setup_layout(self) -> None:
        self.root.grid_columnconfigure(0, weight=1)
        self.root.grid_rowconfigure(0, weight=1)

        self.main_frame = ctk.CTkFrame(self.root)
        self.main_frame.grid(row=0, column=0, sticky="nsew", padx=10, pady=(10, 5))
        self.main_frame.grid_columnconfigure(0, weight=1)
        self.main_frame.grid_rowconfigure(0, weight=1)

        self.status_bar_frame = ctk.CTkFrame(self.root, height=30)
        self.status_bar_frame.grid(row=1, column=0, sticky="ew", padx=10, pady=(5, 10))
        self.status_bar_frame.grid_columnconfigure(1, weight=1)
        self.status_bar_frame.grid_propagate(False)

    def _setup_status_bar(self) -> None:
        ctk.CTkLabel(
            self.status_bar_frame,
            text=f"{self.config.app_name} v{self.config.version}",
            font=ctk.CTkFont(size=12)
        ).grid(row=0, column=0, padx=10, pady=5, sticky="w")

        self.status_label = ctk.CTkLabel(
            self.status_bar_frame,
            text="Ready",
            font=ctk.CTkFont(size=12)
        )
        self.status_label.grid(row=0, column=1, padx=10, pady=5)

        self.theme_button = ctk.CTkButton(
            self.status_bar_frame,
            text="🌙" if self.current_theme == "light" else "☀️",
            width=30,
            height=25,
            command=self._toggle_theme
        )
        self.theme_button.grid(row=0, column=2, padx=5, pady=2)

    def _create_main_content(self) -> None:
        """Create the settings form."""
        self.settings_view = SettingsView(self.main_frame, label_text="Share Note settings")
        self.settings_view.grid(row=0, column=0, sticky="nsew", padx=10, pady=10)

        self.settings_panel = SettingsPanel(self.plugin, self.settings_view)
        self.settings_panel.display()

    def _setup_event_handlers(self) -> None:
        self.root.protocol("WM_DELETE_WINDOW", self._on_window_close)
        self.root.bind("<Control-q>", lambda e: self._on_window_close())

    def _setup_logging_integration(self) -> None:
        """Mirror log messages in the status bar."""
        self._gui_handler = self.logger.add_gui_handler(self._on_log_message)

    def _on_log_message(self, message: str, level: int) -> None:
        # May be called from a save thread
        if level >= logging.INFO:
            self.root.after(0, self._update_status, message)

    def _update_status(self, message: str) -> None:
        self.status_label.configure(text=message)

    def _toggle_theme(self) -> None:
        """Toggle between light and dark window themes."""
        new_theme = "light" if self.current_theme == "dark" else "dark"
        ctk.set_appearance_mode(new_theme)
        self.current_theme = new_theme
        self.theme_button.configure(text="🌙" if new_theme == "light" else "☀️")
        self.logger.debug(f"Window theme switched to {new_theme} mode")

    def _on_window_close(self) -> None:
        if self._gui_handler:
            self.logger.remove_gui_handler(self._gui_handler)
            self._gui_handler = None

        self.plugin.deactivate()
        self.logger.info("Settings window closed")
        self.root.quit()
        self.root.destroy()

    def run(self) -> None:
        """Start the GUI main loop."""
        self.root.mainloop()
