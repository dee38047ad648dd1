"""
Share Note settings - Main Application Entry Point

Opens the settings window by default. Headless options print the current
settings, start the API key authorization flow, or deliver a received key.
"""

import sys
import json
import argparse
import traceback
from typing import Optional

from share_note.config.settings import init_config, AppConfig
from share_note.services.settings_store import SettingsStore
from share_note.services.plugin import SharePlugin
from share_note.utils.logger import setup_logging, ShareNoteLogger


class ShareNoteApp:
    """Main application class for the Share Note settings tool."""

    def __init__(self):
        self.config: Optional[AppConfig] = None
        self.store: Optional[SettingsStore] = None
        self.plugin: Optional[SharePlugin] = None
        self.logger: Optional[ShareNoteLogger] = None

    def initialize(self, settings_file: Optional[str] = None,
                   debug: bool = False, no_color: bool = False) -> None:
        """Initialize configuration, logging and the plugin."""
        self.config = init_config(settings_file)
        if debug:
            self.config.enable_debug()
        if no_color:
            self.config.colored_output = False

        self.logger = setup_logging(
            colored=self.config.colored_output,
            log_file=self.config.get_log_file_path(),
            level=self.config.log_level
        )
        self.logger.info(f"Starting {self.config.app_name} v{self.config.version}")

        self.store = SettingsStore(self.config.get_settings_file_path())
        self.plugin = SharePlugin(self.store, challenge_url=self.config.challenge_url)
        self.plugin.activate()

    def show_settings(self) -> bool:
        """Print the current settings as JSON with the API key masked."""
        record = self.plugin.settings.to_dict()
        if record.get("apiKey"):
            record["apiKey"] = "*" * 8
        print(json.dumps(record, indent=2))
        return True

    def connect(self) -> bool:
        """Open the authorization page in the browser."""
        url = self.plugin.connect()
        print(url)
        return True

    def deliver_api_key(self, api_key: str) -> bool:
        """Store an API key received from the authorization flow."""
        if self.plugin.receive_api_key(api_key) is None:
            self.logger.error("No API key given")
            return False
        self.logger.highlight("API key stored, the plugin is connected")
        return True

    def run_gui_mode(self) -> bool:
        """Run the settings window."""
        try:
            from share_note.gui.main_window import MainWindow

            self.logger.info("Starting GUI mode")
            window = MainWindow(self.plugin, self.config)
            window.run()
            return True

        except ImportError as e:
            self.logger.error(f"GUI dependencies not available: {e}")
            self.logger.info("Please install GUI dependencies: pip install customtkinter")
            return False

    def cleanup(self) -> None:
        """Wait for in-flight saves and release the settings."""
        if self.store and not self.store.wait_for_pending(timeout=5):
            if self.logger:
                self.logger.warning("Some settings changes may not have been saved")

        if self.plugin and self.plugin.is_active:
            self.plugin.deactivate()

        if self.logger:
            self.logger.info("Application shutdown completed")


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the command line argument parser."""
    parser = argparse.ArgumentParser(
        description="Share Note settings - view and edit sharing options",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                           # Open the settings window
  %(prog)s --show                    # Print current settings
  %(prog)s --connect                 # Request an API key in the browser
  %(prog)s --api-key KEY             # Store a key received from the browser
        """)

    action_group = parser.add_argument_group('Actions')
    action = action_group.add_mutually_exclusive_group()
    action.add_argument(
        '--show',
        action='store_true',
        help='Print the current settings as JSON (API key masked)'
    )
    action.add_argument(
        '--connect',
        action='store_true',
        help='Open the authorization page to request an API key'
    )
    action.add_argument(
        '--api-key',
        metavar='KEY',
        help='Store an API key delivered by the authorization page'
    )

    config_group = parser.add_argument_group('Configuration')
    config_group.add_argument(
        '--config-file',
        metavar='PATH',
        help='Path of the settings data file'
    )
    config_group.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )
    config_group.add_argument(
        '--no-color',
        action='store_true',
        help='Disable colored output'
    )

    return parser


def main(argv=None) -> int:
    """Main application entry point."""
    app = ShareNoteApp()
    exit_code = 0

    try:
        parser = create_argument_parser()
        args = parser.parse_args(argv)

        app.initialize(args.config_file, debug=args.debug, no_color=args.no_color)

        if args.show:
            success = app.show_settings()
        elif args.connect:
            success = app.connect()
        elif args.api_key is not None:
            success = app.deliver_api_key(args.api_key)
        else:
            success = app.run_gui_mode()
        exit_code = 0 if success else 1

    except KeyboardInterrupt:
        if app.logger:
            app.logger.info("Interrupted by user")
        else:
            print("\nInterrupted by user")
        exit_code = 130

    except Exception as e:
        if app.logger:
            app.logger.error(f"Unexpected error: {e}")
            app.logger.debug(traceback.format_exc())
        else:
            print(f"Unexpected error: {e}")
        exit_code = 1

    finally:
        app.cleanup()

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
