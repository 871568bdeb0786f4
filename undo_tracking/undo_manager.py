# undo_tracking/undo_manager.py
import logging
from typing import Any, Callable, List, Optional

from PyQt6.QtCore import QObject, pyqtSignal
from PyQt6.QtGui import QAction, QKeySequence

from undo_tracking.config import (
    DEFAULT_LEVELS_OF_UNDO,
    REDO_MENU_TITLE,
    REDO_MENU_TITLE_BARE,
    UNDO_MENU_TITLE,
    UNDO_MENU_TITLE_BARE,
)
from undo_tracking.localization import translate

logger = logging.getLogger(__name__)


class HistoryStack:
    """
    Base class for history stacks usable by perform_with_tracking.

    A history stack records inverse handlers against a target and fires them,
    most recent first, on undo() and redo(). Subclasses implement every method.
    """

    def register_undo(self, target: Any, handler: Callable[[Any], None]) -> None:
        raise NotImplementedError

    def set_action_name(self, name: str) -> None:
        raise NotImplementedError

    def undo(self) -> bool:
        raise NotImplementedError

    def redo(self) -> bool:
        raise NotImplementedError

    def can_undo(self) -> bool:
        raise NotImplementedError

    def can_redo(self) -> bool:
        raise NotImplementedError


class UndoEntry:
    """A registered inverse: handler(target) is called when the entry fires."""

    def __init__(self, target: Any, handler: Callable[[Any], None], action_name: str = ""):
        self.target = target
        self.handler = handler
        self.action_name = action_name

    def invoke(self):
        self.handler(self.target)


class UndoManager(QObject, HistoryStack):
    """
    Undo/redo stack driven by inverse registration.

    Where an inverse lands depends on what the manager is doing when it is
    registered:
        idle      -> undo stack, and the redo stack is cleared
        undoing   -> redo stack
        redoing   -> undo stack (the redo stack is kept)

    Usage:
        manager = UndoManager()
        manager.set_action_name("Rename")
        manager.register_undo(model, lambda m: m.rename_back())
        manager.undo()
    """

    can_undo_changed = pyqtSignal(bool)
    can_redo_changed = pyqtSignal(bool)
    undo_text_changed = pyqtSignal(str)  # carries the undo menu item title
    redo_text_changed = pyqtSignal(str)  # carries the redo menu item title

    _IDLE = "idle"
    _UNDOING = "undoing"
    _REDOING = "redoing"

    def __init__(self, levels_of_undo: int = DEFAULT_LEVELS_OF_UNDO, parent: Optional[QObject] = None):
        """
        Initialize the undo manager.

        Args:
            levels_of_undo: Maximum number of undo entries kept (0 means unlimited)
            parent: Optional Qt parent object

        Raises:
            ValueError: If levels_of_undo is negative
        """
        super().__init__(parent)
        if levels_of_undo < 0:
            raise ValueError(f"levels_of_undo cannot be negative, got {levels_of_undo}")

        self._levels_of_undo = levels_of_undo
        self._undo_stack: List[UndoEntry] = []
        self._redo_stack: List[UndoEntry] = []
        self._state = self._IDLE
        self._pending_action_name = ""
        self._last_state = self._snapshot()

    @classmethod
    def from_settings(cls, settings_manager, parent: Optional[QObject] = None) -> "UndoManager":
        """Create a manager configured from a SettingsManager."""
        return cls(levels_of_undo=settings_manager.levels_of_undo, parent=parent)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register_undo(self, target: Any, handler: Callable[[Any], None]) -> None:
        """
        Record handler to be called with target when this slot is undone or redone.

        The entry takes the name given by the last set_action_name() call.
        """
        if handler is None:
            raise ValueError("Handler cannot be None")

        entry = UndoEntry(target, handler, self._pending_action_name)
        self._pending_action_name = ""

        if self._state == self._UNDOING:
            self._redo_stack.append(entry)
        elif self._state == self._REDOING:
            self._undo_stack.append(entry)
        else:
            self._undo_stack.append(entry)
            # A new action invalidates the old redo chain
            self._redo_stack.clear()

        if self._levels_of_undo and len(self._undo_stack) > self._levels_of_undo:
            dropped = len(self._undo_stack) - self._levels_of_undo
            del self._undo_stack[:dropped]
            logger.debug(f"Dropped {dropped} oldest undo entries (limit {self._levels_of_undo})")

        logger.debug(f"Registered '{entry.action_name}' while {self._state}")
        self._notify()

    def set_action_name(self, name: str) -> None:
        """Set the name of the next registered action, used for the Undo/Redo menu titles."""
        self._pending_action_name = name or ""

    # ------------------------------------------------------------------
    # Undo / redo
    # ------------------------------------------------------------------

    def undo(self) -> bool:
        """
        Fire the most recent undo entry.

        Returns:
            bool: True if an entry was undone, False if the undo stack is empty

        Raises:
            RuntimeError: If called while an undo or redo is in progress
        """
        return self._fire(self._undo_stack, self._UNDOING)

    def redo(self) -> bool:
        """
        Fire the most recent redo entry.

        Returns:
            bool: True if an entry was redone, False if the redo stack is empty

        Raises:
            RuntimeError: If called while an undo or redo is in progress
        """
        return self._fire(self._redo_stack, self._REDOING)

    def _fire(self, stack: List[UndoEntry], state: str) -> bool:
        if self._state != self._IDLE:
            raise RuntimeError(f"Cannot start {state} while {self._state}")
        if not stack:
            return False

        entry = stack.pop()
        self._state = state
        self._pending_action_name = ""
        logger.debug(f"{state.capitalize()} '{entry.action_name}'")
        try:
            entry.invoke()
        except Exception as e:
            logger.error(f"{state.capitalize()} of '{entry.action_name}' failed, the entry is dropped: {e}")
            raise
        finally:
            self._state = self._IDLE
            self._pending_action_name = ""
            self._notify()
        return True

    def can_undo(self) -> bool:
        return len(self._undo_stack) > 0

    def can_redo(self) -> bool:
        return len(self._redo_stack) > 0

    def is_undoing(self) -> bool:
        return self._state == self._UNDOING

    def is_redoing(self) -> bool:
        return self._state == self._REDOING

    @property
    def levels_of_undo(self) -> int:
        return self._levels_of_undo

    def set_levels_of_undo(self, levels: int) -> None:
        """Change the capacity, dropping the oldest undo entries if needed."""
        if levels < 0:
            raise ValueError(f"levels_of_undo cannot be negative, got {levels}")
        self._levels_of_undo = levels
        if levels and len(self._undo_stack) > levels:
            del self._undo_stack[:len(self._undo_stack) - levels]
        self._notify()

    def undo_count(self) -> int:
        return len(self._undo_stack)

    def redo_count(self) -> int:
        return len(self._redo_stack)

    def remove_all_actions(self, target: Any = None) -> None:
        """
        Clear the undo and redo stacks.

        Args:
            target: If given, only entries registered against this object
                (compared by identity) are removed.
        """
        if target is None:
            self._undo_stack.clear()
            self._redo_stack.clear()
        else:
            self._undo_stack[:] = [e for e in self._undo_stack if e.target is not target]
            self._redo_stack[:] = [e for e in self._redo_stack if e.target is not target]
        self._notify()

    # ------------------------------------------------------------------
    # Menu titles
    # ------------------------------------------------------------------

    def undo_action_name(self) -> str:
        return self._undo_stack[-1].action_name if self._undo_stack else ""

    def redo_action_name(self) -> str:
        return self._redo_stack[-1].action_name if self._redo_stack else ""

    def undo_menu_item_title(self) -> str:
        """Title for the Undo menu item, e.g. 'Undo Increment'."""
        return self._menu_title(UNDO_MENU_TITLE, UNDO_MENU_TITLE_BARE, self.undo_action_name())

    def redo_menu_item_title(self) -> str:
        """Title for the Redo menu item, e.g. 'Redo Increment'."""
        return self._menu_title(REDO_MENU_TITLE, REDO_MENU_TITLE_BARE, self.redo_action_name())

    def _menu_title(self, template: str, bare: str, action_name: str) -> str:
        if not action_name:
            return translate(bare)
        return translate(template).replace("%1", action_name)

    # ------------------------------------------------------------------
    # Qt integration
    # ------------------------------------------------------------------

    def create_undo_action(self, parent: QObject) -> QAction:
        """Create a QAction that triggers undo() and follows the stack's state."""
        action = QAction(self.undo_menu_item_title(), parent)
        action.setShortcut(QKeySequence(QKeySequence.StandardKey.Undo))
        action.setEnabled(self.can_undo())
        action.triggered.connect(lambda checked=False: self.undo())
        self.can_undo_changed.connect(action.setEnabled)
        self.undo_text_changed.connect(action.setText)
        return action

    def create_redo_action(self, parent: QObject) -> QAction:
        """Create a QAction that triggers redo() and follows the stack's state."""
        action = QAction(self.redo_menu_item_title(), parent)
        action.setShortcut(QKeySequence(QKeySequence.StandardKey.Redo))
        action.setEnabled(self.can_redo())
        action.triggered.connect(lambda checked=False: self.redo())
        self.can_redo_changed.connect(action.setEnabled)
        self.redo_text_changed.connect(action.setText)
        return action

    def _snapshot(self):
        return (
            self.can_undo(),
            self.can_redo(),
            self.undo_menu_item_title(),
            self.redo_menu_item_title(),
        )

    def _notify(self):
        # Compare against the last emitted state so nested registrations emit once
        before = self._last_state
        self._last_state = self._snapshot()
        can_undo, can_redo, undo_text, redo_text = self._last_state
        if can_undo != before[0]:
            self.can_undo_changed.emit(can_undo)
        if can_redo != before[1]:
            self.can_redo_changed.emit(can_redo)
        if undo_text != before[2]:
            self.undo_text_changed.emit(undo_text)
        if redo_text != before[3]:
            self.redo_text_changed.emit(redo_text)
