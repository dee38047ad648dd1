"""
Settings persistence service for Share Note.

This module reads and writes the share settings record as JSON. The whole
record is written on every save; background saves run on daemon threads so
the settings form never waits for the disk.
"""

import json
import logging
import threading
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Set, Union

from share_note.models.share_settings import ShareSettings


class SettingsStoreError(Exception):
    """Raised when the settings record cannot be written."""
    pass


class SettingsStore:
    """
    JSON file store for the share settings record.

    ``load`` is forgiving: a missing or damaged file yields an empty record so
    the caller falls back to defaults. ``save`` raises SettingsStoreError.
    """

    def __init__(self, file_path: Union[str, Path]):
        """
        Initialize settings store.

        Args:
            file_path: Location of the JSON data file
        """
        self.file_path = Path(file_path)
        self._write_lock = threading.Lock()
        self._pending: Set[threading.Thread] = set()
        self._pending_lock = threading.Lock()
        self._sequence = 0
        self._written_sequence = 0
        self._logger = logging.getLogger(__name__)

    def load(self) -> Dict[str, Any]:
        """
        Load the persisted partial record.

        Returns:
            Dictionary of persisted values, empty if nothing usable was found
        """
        if not self.file_path.exists():
            self._logger.info(f"No saved settings at {self.file_path}, using defaults")
            return {}

        try:
            with open(self.file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            self._logger.warning(f"Failed to load settings from {self.file_path}: {e}. Using defaults.")
            return {}

        if not isinstance(data, dict):
            self._logger.warning(f"Settings file {self.file_path} does not hold an object. Using defaults.")
            return {}

        self._logger.debug(f"Settings loaded from {self.file_path}")
        return data

    def save(self, settings: ShareSettings) -> None:
        """
        Write the whole settings record.

        Args:
            settings: Record to persist

        Raises:
            SettingsStoreError: If the file cannot be written
        """
        self._write(settings.to_dict(), self._next_sequence())

    def save_async(self, settings: ShareSettings,
                   on_saved: Optional[Callable[[], None]] = None) -> threading.Thread:
        """
        Persist the record on a background thread.

        The record is snapshotted before this returns, so later edits do not
        leak into a save that is already in flight.

        Args:
            settings: Record to persist
            on_saved: Called on the save thread once the write succeeded

        Returns:
            The started thread
        """
        record = settings.to_dict()
        sequence = self._next_sequence()

        def save_in_background():
            try:
                self._write(record, sequence)
            except SettingsStoreError as e:
                self._logger.error(str(e))
                return
            finally:
                with self._pending_lock:
                    self._pending.discard(threading.current_thread())
            if on_saved:
                on_saved()

        thread = threading.Thread(target=save_in_background, daemon=True)
        with self._pending_lock:
            self._pending.add(thread)
        thread.start()
        return thread

    def wait_for_pending(self, timeout: Optional[float] = None) -> bool:
        """
        Block until background saves started so far have finished.

        Args:
            timeout: Seconds to wait for each save, None to wait indefinitely

        Returns:
            True if no save is still running
        """
        with self._pending_lock:
            pending = list(self._pending)
        for thread in pending:
            thread.join(timeout)
        return not any(thread.is_alive() for thread in pending)

    def _next_sequence(self) -> int:
        with self._pending_lock:
            self._sequence += 1
            return self._sequence

    def _write(self, record: Dict[str, Any], sequence: int) -> None:
        with self._write_lock:
            # A newer snapshot already reached the disk
            if sequence < self._written_sequence:
                self._logger.debug("Skipping outdated settings snapshot")
                return
            try:
                self.file_path.parent.mkdir(parents=True, exist_ok=True)
                with open(self.file_path, 'w', encoding='utf-8') as f:
                    json.dump(record, f, indent=2, ensure_ascii=False)
            except (OSError, TypeError, ValueError) as e:
                raise SettingsStoreError(f"Failed to save settings to {self.file_path}: {e}")
            self._written_sequence = sequence

        self._logger.debug(f"Settings saved to {self.file_path}")
