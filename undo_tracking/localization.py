"""
Localization helpers for undo action names.

Action names are resolved through Qt's translation system so that an
application which installs a QTranslator gets localized Undo/Redo menu titles
without changing any call site. Without an installed translator the source
text is returned unchanged.
"""

import os
import logging
from typing import Optional, Union

from PyQt6.QtCore import QCoreApplication, QTranslator

from undo_tracking.config import TRANSLATION_CONTEXT

logger = logging.getLogger(__name__)


class LocalizedName:
    """
    A localizable action name token.

    Usage:
        component.named(LocalizedName("Move Note", context="Editor"))
    """

    def __init__(self, key: str, context: str = TRANSLATION_CONTEXT, disambiguation: Optional[str] = None):
        if not isinstance(key, str):
            raise TypeError(f"key must be str, got {type(key)}")
        self.key = key
        self.context = context
        self.disambiguation = disambiguation

    def __eq__(self, other):
        if not isinstance(other, LocalizedName):
            return NotImplemented
        return (self.key, self.context, self.disambiguation) == (
            other.key, other.context, other.disambiguation
        )

    def __hash__(self):
        return hash((self.key, self.context, self.disambiguation))

    def __repr__(self):
        return f"LocalizedName({self.key!r}, context={self.context!r})"


def translate(source_text: str, context: str = TRANSLATION_CONTEXT, disambiguation: Optional[str] = None) -> str:
    """Translate source_text in the current locale, falling back to source_text."""
    translated = QCoreApplication.translate(context, source_text, disambiguation)
    return translated or source_text


def localized(name: Union[str, LocalizedName]) -> str:
    """Resolve an action name (plain string or LocalizedName) to a display string."""
    if isinstance(name, LocalizedName):
        return translate(name.key, name.context, name.disambiguation)
    return translate(str(name))


def install_translator(app: QCoreApplication, locale_name: str, directory: str,
                       prefix: str = "undo_tracking_") -> Optional[QTranslator]:
    """
    Load <prefix><locale_name>.qm from directory and install it on app.

    Returns:
        QTranslator: The installed translator (keep a reference to it), or None
        if the catalogue could not be loaded.
    """
    translator = QTranslator(app)
    file_name = f"{prefix}{locale_name}"
    if not translator.load(file_name, directory):
        logger.warning(f"No translation catalogue {file_name}.qm in {os.path.abspath(directory)}")
        return None

    app.installTranslator(translator)
    logger.debug(f"Installed translator {file_name}")
    return translator
