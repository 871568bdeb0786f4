# undo_tracking/settings_manager.py
import os
import json
import logging

from undo_tracking.config import DEFAULT_LEVELS_OF_UNDO, DEFAULT_SETTINGS, DEFAULT_SETTINGS_FILE

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class SettingsManager:
    """
    Undo preferences stored as JSON.

    Only preferences live here (history capacity, log level); the history
    itself is never written to disk. Invalid values found in the file are
    replaced by their defaults and logged, invalid values passed by callers
    raise ValueError.

    Usage:
        settings = SettingsManager("data/undo_settings.json")
        settings.levels_of_undo = 50
        manager = UndoManager.from_settings(settings)
    """

    def __init__(self, settings_file=DEFAULT_SETTINGS_FILE):
        self.settings_file = settings_file
        self._levels_of_undo = DEFAULT_LEVELS_OF_UNDO
        self._log_level = DEFAULT_SETTINGS["log_level"]
        self.load()

    @property
    def levels_of_undo(self) -> int:
        """Maximum number of undo entries kept (0 means unlimited)."""
        return self._levels_of_undo

    @levels_of_undo.setter
    def levels_of_undo(self, value: int) -> None:
        self._levels_of_undo = self._validate_levels(value)
        self.save()

    @property
    def log_level(self) -> str:
        return self._log_level

    @log_level.setter
    def log_level(self, value: str) -> None:
        self._log_level = self._validate_log_level(value)
        self.save()

    @staticmethod
    def _validate_levels(value) -> int:
        # bool is an int subclass but never a capacity
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"levels_of_undo must be an int, got {value!r}")
        if value < 0:
            raise ValueError(f"levels_of_undo cannot be negative, got {value}")
        return value

    @staticmethod
    def _validate_log_level(value) -> str:
        if not isinstance(value, str) or value.upper() not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}, got {value!r}")
        return value.upper()

    def load(self) -> None:
        """Read preferences from disk, writing a default file when none exists."""
        if not os.path.exists(self.settings_file):
            self.reset_to_defaults(save=True)
            return

        try:
            with open(self.settings_file, "r", encoding="utf-8") as file:
                data = json.load(file)
        except json.JSONDecodeError:
            logger.error(f"Error decoding {self.settings_file}. Using default settings.")
            self.reset_to_defaults(save=True)
            return
        except OSError as e:
            logger.error(f"Error reading settings file {self.settings_file}: {e}")
            self.reset_to_defaults()
            return

        if not isinstance(data, dict):
            logger.warning(f"Unexpected data format in {self.settings_file}, using defaults.")
            self.reset_to_defaults()
            return

        undo = data.get("undo")
        levels = undo.get("levels_of_undo", DEFAULT_LEVELS_OF_UNDO) if isinstance(undo, dict) else DEFAULT_LEVELS_OF_UNDO
        try:
            self._levels_of_undo = self._validate_levels(levels)
        except ValueError as e:
            logger.warning(f"{e}; using {DEFAULT_LEVELS_OF_UNDO}")
            self._levels_of_undo = DEFAULT_LEVELS_OF_UNDO

        try:
            self._log_level = self._validate_log_level(data.get("log_level", DEFAULT_SETTINGS["log_level"]))
        except ValueError as e:
            logger.warning(f"{e}; using {DEFAULT_SETTINGS['log_level']}")
            self._log_level = DEFAULT_SETTINGS["log_level"]

    def to_dict(self) -> dict:
        return {
            "undo": {"levels_of_undo": self._levels_of_undo},
            "log_level": self._log_level,
        }

    def save(self) -> bool:
        """Write preferences to disk. Returns False (and logs) on I/O failure."""
        directory = os.path.dirname(self.settings_file)
        try:
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.settings_file, "w", encoding="utf-8") as file:
                json.dump(self.to_dict(), file, indent=4)
            return True
        except OSError as e:
            logger.error(f"Error saving undo settings to {self.settings_file}: {e}")
            return False

    def reset_to_defaults(self, save=False) -> None:
        self._levels_of_undo = DEFAULT_LEVELS_OF_UNDO
        self._log_level = DEFAULT_SETTINGS["log_level"]
        if save:
            self.save()
