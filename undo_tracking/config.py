import logging

APP_NAME = "Undo Tracking"
VERSION = "1.0.0"

# Context used for QCoreApplication.translate lookups
TRANSLATION_CONTEXT = "UndoTracking"

UNDO_MENU_TITLE = "Undo %1"
REDO_MENU_TITLE = "Redo %1"
UNDO_MENU_TITLE_BARE = "Undo"
REDO_MENU_TITLE_BARE = "Redo"

DEFAULT_LEVELS_OF_UNDO = 0  # 0 means unlimited

DEFAULT_SETTINGS_FILE = "data/undo_settings.json"

DEFAULT_SETTINGS = {
    "undo": {
        "levels_of_undo": DEFAULT_LEVELS_OF_UNDO,
    },
    "log_level": "INFO",
}

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level=logging.INFO, filename=None):
    """Configure root logging for applications embedding undo_tracking."""
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(filename=filename, level=level, format=LOG_FORMAT)
