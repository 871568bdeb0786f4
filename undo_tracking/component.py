"""
Undo components.

An UndoComponent bundles a mutation target with an action that performs a
forward mutation and registers its own inverse. Components are immutable:
naming or animating one returns a new component and leaves the original
untouched.

Usage:
    def increment(model):
        def action(target, with_animation, register_undo):
            def block():
                target.index += 1
            with_animation(block)
            register_undo(lambda: decrement(target))
        return UndoComponent(model, action)

    perform_with_tracking(undo_manager, lambda: increment(model).named("Increment"))
"""

from dataclasses import dataclass, replace
from typing import Any, Callable, Generic, Optional, TypeVar, Union

from undo_tracking.localization import LocalizedName

T = TypeVar("T")

# (target, with_animation, register_undo) -> None
Action = Callable[
    [Any, Callable[[Callable[[], None]], None], Callable[[Callable[[], "UndoComponent"]], None]],
    None,
]


@dataclass(frozen=True)
class UndoComponent(Generic[T]):
    """
    An undoable unit of work.

    Attributes:
        target: The object being mutated. Held by reference, never copied.
        action: Called by the runner as action(target, with_animation, register_undo).
            It must perform the mutation and call register_undo exactly once with a
            zero-argument callable returning the inverse UndoComponent.
        action_name: Optional name shown in the Undo/Redo menu items.
        animate: Whether the action's with_animation blocks run inside a transition.
    """

    target: T
    action: Action
    action_name: Optional[Union[str, LocalizedName]] = None
    animate: bool = False

    def named(self, action_name: Union[str, LocalizedName]) -> "UndoComponent[T]":
        """Name the component; the name is used for the Undo and Redo commands."""
        return replace(self, action_name=action_name)

    def animated(self) -> "UndoComponent[T]":
        """Mark the action's with_animation blocks as animated."""
        return replace(self, animate=True)

    def replacing_action(self, action: Action) -> "UndoComponent[T]":
        # Keeps target, name and animate flag
        return replace(self, action=action)
