"""
Runs undo components against a history stack.

perform_with_tracking executes a component's action and hands it a
register_undo callable. The inverse registered there is itself run through
perform_with_tracking when the stack fires it, so undoing registers the redo
and redoing registers the next undo.

Usage:
    perform_with_tracking(undo_manager, lambda: document.replace("selection", [note]).named("Select"))
"""

import logging
from typing import Callable, Optional

from undo_tracking.component import UndoComponent
from undo_tracking.localization import localized
from undo_tracking.transitions import run_immediately
from undo_tracking.undo_manager import HistoryStack

logger = logging.getLogger(__name__)


class InverseAlreadyRegisteredError(RuntimeError):
    """Raised when an action calls register_undo more than once."""


def perform_with_tracking(
    undo_manager: Optional[HistoryStack],
    builder: Callable[[], UndoComponent],
    transition: Callable[[Callable[[], None]], None] = run_immediately,
) -> None:
    """
    Perform the component returned by builder and record its inverse on undo_manager.

    Args:
        undo_manager: The history stack, or None to run the action untracked
        builder: Called once to build the component to perform
        transition: Runs a block inside a visual transition; used for animated components
    """
    component = builder()

    if component.action_name is not None and undo_manager is not None:
        undo_manager.set_action_name(localized(component.action_name))

    if component.animate:
        def with_animation(block):
            transition(block)
    else:
        def with_animation(block):
            block()

    registered = False

    def register_undo(inverse_builder: Callable[[], UndoComponent]) -> None:
        nonlocal registered
        if registered:
            raise InverseAlreadyRegisteredError(
                f"register_undo called more than once for '{component.action_name}'"
            )
        registered = True

        if undo_manager is None:
            return

        def handler(target):
            # The inverse inherits the name and animate flag of this component
            perform_with_tracking(
                undo_manager,
                lambda: component.replacing_action(inverse_builder().action),
                transition,
            )

        undo_manager.register_undo(component.target, handler)

    try:
        component.action(component.target, with_animation, register_undo)
    finally:
        if not registered:
            if component.action_name is not None and undo_manager is not None:
                # The name must not label a later, unrelated entry
                undo_manager.set_action_name("")
            logger.debug(f"Action '{component.action_name}' registered no inverse; it cannot be undone")
