# undo_tracking/transitions.py
import logging
from typing import Callable

from PyQt6.QtWidgets import QWidget

logger = logging.getLogger(__name__)


def run_immediately(block: Callable[[], None]) -> None:
    """Default transition: run the block synchronously with no visual scope."""
    block()


def widget_transition(widget: QWidget) -> Callable[[Callable[[], None]], None]:
    """
    Build a transition that batches the block's visual changes on widget.

    Repaints are suspended while the block runs, then the previous state is
    restored and a single repaint is scheduled.

    Args:
        widget: The widget displaying the mutated model

    Raises:
        ValueError: If widget is None
    """
    if widget is None:
        raise ValueError("Widget cannot be None")

    def transition(block: Callable[[], None]) -> None:
        was_enabled = widget.updatesEnabled()
        widget.setUpdatesEnabled(False)
        try:
            block()
        finally:
            widget.setUpdatesEnabled(was_enabled)
            if was_enabled:
                widget.update()
        logger.debug(f"Transition finished on {type(widget).__name__}")

    return transition
