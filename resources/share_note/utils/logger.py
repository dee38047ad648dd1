"""
Logging utilities for Share Note.

This module configures the ``share_note`` logger hierarchy: a colored console
handler, an optional log file, and GUI handlers that forward records to a
widget callback. Library modules log through ``logging.getLogger(__name__)``
and inherit this configuration.
"""

import logging
import sys
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Union

ROOT_LOGGER_NAME = "share_note"


class LogLevel(Enum):
    """Log levels understood by the application, including HIGHLIGHT."""
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    HIGHLIGHT = 25
    WARNING = logging.WARNING
    ERROR = logging.ERROR


logging.addLevelName(LogLevel.HIGHLIGHT.value, "HIGHLIGHT")


class ColorCodes:
    """ANSI color codes for console output."""
    RED = "\033[0;31m"
    GREEN = "\033[0;32m"
    YELLOW = "\033[1;33m"
    BLUE = "\033[0;34m"
    PURPLE = "\033[0;35m"
    GRAY = "\033[0;90m"
    NC = "\033[0m"


LEVEL_COLORS = {
    logging.DEBUG: ColorCodes.GRAY,
    logging.INFO: ColorCodes.BLUE,
    LogLevel.HIGHLIGHT.value: ColorCodes.PURPLE,
    logging.WARNING: ColorCodes.YELLOW,
    logging.ERROR: ColorCodes.RED,
    logging.CRITICAL: ColorCodes.RED,
}


class ColoredFormatter(logging.Formatter):
    """Formatter that wraps the level name in an ANSI color."""

    def __init__(self, fmt: str, colored: bool = True):
        super().__init__(fmt, datefmt="%H:%M:%S")
        self.colored = colored

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if not self.colored:
            return message
        color = LEVEL_COLORS.get(record.levelno, "")
        return f"{color}{message}{ColorCodes.NC}" if color else message


class GUILogHandler(logging.Handler):
    """Forward formatted log records to a GUI callback(message, levelno)."""

    def __init__(self, callback: Callable[[str, int], None]):
        super().__init__()
        self.callback = callback
        self.setFormatter(logging.Formatter("%(message)s"))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.callback(self.format(record), record.levelno)
        except Exception:
            self.handleError(record)


class ShareNoteLogger:
    """
    Thin wrapper around the ``share_note`` logger.

    Adds the HIGHLIGHT level and GUI handler management on top of the
    standard logging API.
    """

    def __init__(self, logger: logging.Logger):
        self._logger = logger
        self._gui_handlers: List[GUILogHandler] = []

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def debug(self, message: str, *args, **kwargs) -> None:
        self._logger.debug(message, *args, **kwargs)

    def info(self, message: str, *args, **kwargs) -> None:
        self._logger.info(message, *args, **kwargs)

    def highlight(self, message: str, *args, **kwargs) -> None:
        self._logger.log(LogLevel.HIGHLIGHT.value, message, *args, **kwargs)

    def warning(self, message: str, *args, **kwargs) -> None:
        self._logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args, **kwargs) -> None:
        self._logger.error(message, *args, **kwargs)

    def add_gui_handler(self, callback: Callable[[str, int], None]) -> GUILogHandler:
        """
        Attach a handler that forwards every record to a GUI callback.

        Args:
            callback: Called with (message, levelno) for each record

        Returns:
            The handler, so it can be removed later
        """
        handler = GUILogHandler(callback)
        self._logger.addHandler(handler)
        self._gui_handlers.append(handler)
        return handler

    def remove_gui_handler(self, handler: GUILogHandler) -> None:
        """Detach a previously added GUI handler."""
        self._logger.removeHandler(handler)
        if handler in self._gui_handlers:
            self._gui_handlers.remove(handler)


def _resolve_level(level: Union[Enum, int, str, None]) -> int:
    """Map a LogLevel, config enum, level name or number to a logging level."""
    if level is None:
        return logging.INFO
    if isinstance(level, Enum):
        level = level.value
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


# Global logger instance
_global_logger: Optional[ShareNoteLogger] = None


def setup_logging(colored: bool = True,
                  log_file: Optional[Union[str, Path]] = None,
                  level: Union[Enum, int, str, None] = LogLevel.INFO) -> ShareNoteLogger:
    """
    Configure application logging.

    Calling this again replaces the console and file handlers, so it is safe
    to re-run after the configuration changes.

    Args:
        colored: Use ANSI colors on the console
        log_file: Optional path of a log file to append to
        level: Minimum level to emit

    Returns:
        The configured ShareNoteLogger
    """
    global _global_logger

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(_resolve_level(level))
    logger.propagate = False

    for handler in list(logger.handlers):
        if not isinstance(handler, GUILogHandler):
            logger.removeHandler(handler)
            handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(ColoredFormatter("[%(asctime)s] %(levelname)s %(message)s", colored))
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path, encoding="utf-8")
            file_handler.setFormatter(logging.Formatter(
                "%(asctime)s %(levelname)s [%(name)s] %(message)s"
            ))
            logger.addHandler(file_handler)
        except OSError as e:
            logger.warning(f"Could not open log file {log_path}: {e}")

    if _global_logger is None:
        _global_logger = ShareNoteLogger(logger)
    return _global_logger


def get_logger() -> ShareNoteLogger:
    """
    Get the global application logger.

    Raises:
        RuntimeError: If setup_logging() has not been called
    """
    if _global_logger is None:
        raise RuntimeError("Logging not initialized. Call setup_logging() first.")
    return _global_logger
