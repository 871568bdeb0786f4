#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Tests for the UndoTracking convenience mutations.
"""

import sys
import os

import pytest

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from undo_tracking.mutators import UndoTracking
from undo_tracking.runner import perform_with_tracking
from undo_tracking.undo_manager import UndoManager


class Note:

    def __init__(self, id, text):
        self.id = id
        self.text = text

    def __repr__(self):
        return f"Note({self.id}, {self.text!r})"


class Document:

    def __init__(self):
        self.tags = []


class Model(UndoTracking):

    def __init__(self, container=None):
        self.container = list(container or [])
        self.title = "Untitled"
        self.document = Document()


def track(manager, builder):
    perform_with_tracking(manager, builder)


def test_append_then_undo_restores_contents():
    manager = UndoManager()
    model = Model([1, 2])

    track(manager, lambda: model.append(3, to="container"))
    assert model.container == [1, 2, 3]

    manager.undo()
    assert model.container == [1, 2]

    manager.redo()
    assert model.container == [1, 2, 3]


def test_append_mutates_list_in_place():
    manager = UndoManager()
    model = Model()
    container = model.container

    track(manager, lambda: model.append("x", to="container"))
    assert container is model.container
    assert container == ["x"]


def test_append_contents_undo_removes_all_appended():
    manager = UndoManager()
    model = Model([0])

    track(manager, lambda: model.append_contents(iter([1, 2, 3]), to="container"))
    assert model.container == [0, 1, 2, 3]

    manager.undo()
    assert model.container == [0]

    manager.redo()
    assert model.container == [0, 1, 2, 3]


def test_append_empty_contents_is_undoable_noop():
    manager = UndoManager()
    model = Model([1])

    track(manager, lambda: model.append_contents([], to="container"))
    manager.undo()
    assert model.container == [1]


def test_insert_and_undo():
    manager = UndoManager()
    model = Model(["a", "c"])

    track(manager, lambda: model.insert("b", at=1, to="container"))
    assert model.container == ["a", "b", "c"]

    manager.undo()
    assert model.container == ["a", "c"]

    track(manager, lambda: model.insert("d", at=2, to="container"))
    assert model.container == ["a", "c", "d"]


def test_insert_out_of_range_raises():
    manager = UndoManager()
    model = Model([1])

    with pytest.raises(IndexError):
        track(manager, lambda: model.insert(2, at=5, to="container"))
    assert model.container == [1]
    assert not manager.can_undo()


def test_remove_all_undo_restores_original_positions():
    manager = UndoManager()
    model = Model([1, 2, 3, 4, 5, 6])

    track(manager, lambda: model.remove_all(from_="container", where=lambda e: e % 2 == 0).named("Remove Even"))
    assert model.container == [1, 3, 5]

    manager.undo()
    assert model.container == [1, 2, 3, 4, 5, 6]
    assert manager.redo_menu_item_title() == "Redo Remove Even"

    manager.redo()
    assert model.container == [1, 3, 5]

    manager.undo()
    assert model.container == [1, 2, 3, 4, 5, 6]


def test_remove_at_and_undo():
    manager = UndoManager()
    model = Model(["a", "b", "c"])

    track(manager, lambda: model.remove_at(1, from_="container"))
    assert model.container == ["a", "c"]

    manager.undo()
    assert model.container == ["a", "b", "c"]


def test_remove_at_out_of_range_raises():
    model = Model(["a"])

    with pytest.raises(IndexError):
        track(UndoManager(), lambda: model.remove_at(3, from_="container"))
    with pytest.raises(IndexError):
        track(UndoManager(), lambda: model.remove_at(-1, from_="container"))


def test_remove_by_id():
    manager = UndoManager()
    first, second, duplicate = Note(1, "first"), Note(2, "second"), Note(1, "copy")
    model = Model([first, second, duplicate])

    track(manager, lambda: model.remove(Note(1, "anything"), from_="container"))
    assert model.container == [second]

    manager.undo()
    assert model.container == [first, second, duplicate]


def test_remove_last():
    manager = UndoManager()
    model = Model([1, 2, 3, 4])

    track(manager, lambda: model.remove_last(2, from_="container"))
    assert model.container == [1, 2]

    manager.undo()
    assert model.container == [1, 2, 3, 4]

    with pytest.raises(IndexError):
        track(manager, lambda: model.remove_last(5, from_="container"))


def test_replace_and_undo():
    manager = UndoManager()
    model = Model()

    track(manager, lambda: model.replace("title", "Draft").named("Rename"))
    assert model.title == "Draft"
    track(manager, lambda: model.replace("title", "Final").named("Rename"))

    manager.undo()
    assert model.title == "Draft"
    manager.undo()
    assert model.title == "Untitled"
    manager.redo()
    manager.redo()
    assert model.title == "Final"


def test_dotted_path_reaches_nested_objects():
    manager = UndoManager()
    model = Model()

    track(manager, lambda: model.append("urgent", to="document.tags"))
    assert model.document.tags == ["urgent"]

    manager.undo()
    assert model.document.tags == []


def test_components_do_nothing_until_performed():
    model = Model([1])
    model.append(2, to="container")
    model.remove_last(1, from_="container")
    assert model.container == [1]


def main():
    tests = [value for name, value in sorted(globals().items()) if name.startswith("test_")]
    for test in tests:
        test()
        print(f"   [OK] {test.__name__}")
    print(f"\nAll {len(tests)} tests passed")


if __name__ == "__main__":
    main()
