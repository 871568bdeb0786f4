"""
Undoable convenience mutations for model objects.

Subclass UndoTracking to get list and attribute mutations that build
UndoComponents. Paths name an attribute on the model; dotted paths reach into
nested objects ("document.notes"). Lists are mutated in place.

Usage:
    class Model(UndoTracking):
        def __init__(self):
            self.notes = []

    model = Model()
    perform_with_tracking(undo_manager, lambda: model.append("note", to="notes").named("Add Note"))
"""

import logging
from typing import Any, Callable, Iterable, List, Tuple

from undo_tracking.component import UndoComponent

logger = logging.getLogger(__name__)


def _resolve(target: Any, path: str) -> Tuple[Any, str]:
    """Return (owner, attribute name) for a dotted attribute path."""
    if not isinstance(path, str) or not path:
        raise ValueError(f"Invalid attribute path: {path!r}")
    *parents, name = path.split(".")
    owner = target
    for parent in parents:
        owner = getattr(owner, parent)
    return owner, name


def _get(target: Any, path: str) -> Any:
    owner, name = _resolve(target, path)
    return getattr(owner, name)


def _set(target: Any, path: str, value: Any) -> None:
    owner, name = _resolve(target, path)
    setattr(owner, name, value)


class UndoTracking:
    """
    Mixin providing undoable mutations.

    Every method returns an UndoComponent; nothing changes until the component
    is passed to perform_with_tracking. Out-of-range indices raise IndexError
    when the component is performed.
    """

    def append(self, element: Any, to: str) -> UndoComponent:
        """Add element at the end of the list at `to`."""
        def action(target, with_animation, register_undo):
            items = _get(target, to)
            index = len(items)
            with_animation(lambda: items.append(element))
            register_undo(lambda: target.remove_at(index, from_=to))

        return UndoComponent(self, action)

    def append_contents(self, elements: Iterable[Any], to: str) -> UndoComponent:
        """Add the elements of a sequence at the end of the list at `to`."""
        new_elements = list(elements)

        def action(target, with_animation, register_undo):
            items = _get(target, to)
            with_animation(lambda: items.extend(new_elements))
            register_undo(lambda: target.remove_last(len(new_elements), from_=to))

        return UndoComponent(self, action)

    def insert(self, element: Any, at: int, to: str) -> UndoComponent:
        """
        Insert element before the element currently at index `at`.

        Passing the list's length appends.
        """
        def action(target, with_animation, register_undo):
            items = _get(target, to)
            if not 0 <= at <= len(items):
                raise IndexError(f"Insert index {at} out of range for '{to}' of length {len(items)}")
            with_animation(lambda: items.insert(at, element))
            register_undo(lambda: target.remove_at(at, from_=to))

        return UndoComponent(self, action)

    def remove_all(self, from_: str, where: Callable[[Any], bool]) -> UndoComponent:
        """Remove every element matching `where`, preserving the order of the rest."""
        def action(target, with_animation, register_undo):
            items = _get(target, from_)
            removed = [(i, e) for i, e in enumerate(items) if where(e)]

            def block():
                items[:] = [e for e in items if not where(e)]

            with_animation(block)
            register_undo(lambda: target._reinsert(removed, from_, where))

        return UndoComponent(self, action)

    def _reinsert(self, inserts: List[Tuple[int, Any]], to: str, where: Callable[[Any], bool]) -> UndoComponent:
        # Indices are ascending, so each insert lands at its original position
        def action(target, with_animation, register_undo):
            items = _get(target, to)

            def block():
                for index, element in inserts:
                    items.insert(index, element)

            with_animation(block)
            register_undo(lambda: target.remove_all(from_=to, where=where))

        return UndoComponent(self, action)

    def remove_at(self, index: int, from_: str) -> UndoComponent:
        """Remove the element at `index`."""
        def action(target, with_animation, register_undo):
            items = _get(target, from_)
            if not 0 <= index < len(items):
                raise IndexError(f"Remove index {index} out of range for '{from_}' of length {len(items)}")
            removed = items[index]
            with_animation(lambda: items.pop(index))
            register_undo(lambda: target.insert(removed, at=index, to=from_))

        return UndoComponent(self, action)

    def remove(self, element: Any, from_: str) -> UndoComponent:
        """
        Remove an element by matching its `id` attribute.

        Every element whose id equals element.id is removed.
        """
        element_id = element.id
        return self.remove_all(from_=from_, where=lambda e: e.id == element_id)

    def remove_last(self, k: int, from_: str) -> UndoComponent:
        """Remove the last k elements. Removing more elements than exist raises IndexError."""
        def action(target, with_animation, register_undo):
            items = _get(target, from_)
            if not 0 <= k <= len(items):
                raise IndexError(f"Cannot remove {k} elements from '{from_}' of length {len(items)}")
            removed = items[len(items) - k:]

            def block():
                del items[len(items) - k:]

            with_animation(block)
            register_undo(lambda: target.append_contents(removed, to=from_))

        return UndoComponent(self, action)

    def replace(self, path: str, new_value: Any) -> UndoComponent:
        """Replace the value at `path` with new_value."""
        def action(target, with_animation, register_undo):
            old_value = _get(target, path)
            with_animation(lambda: _set(target, path, new_value))
            register_undo(lambda: target.replace(path, old_value))

        return UndoComponent(self, action)
