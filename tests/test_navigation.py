"""Tests for tasklane/navigation.py."""

from conftest import make_store
from tasklane.models import Task
from tasklane.navigation import (
    Viewport,
    ensure_selection,
    select_index,
    select_next,
    select_previous,
    selected_index,
    selected_task,
)


def test_select_next_and_previous(store):
    select_next(store.tasks)
    assert selected_index(store.tasks) == 1
    select_previous(store.tasks)
    assert selected_index(store.tasks) == 0
    assert sum(t.is_selected for t in store.tasks) == 1


def test_selection_stops_at_edges():
    store = make_store("a", "b", selected=1)
    select_next(store.tasks)
    assert selected_index(store.tasks) == 1
    select_previous(store.tasks)
    select_previous(store.tasks)
    assert selected_index(store.tasks) == 0


def test_empty_list_has_no_selection():
    tasks: list[Task] = []
    select_next(tasks)
    select_previous(tasks)
    ensure_selection(tasks)
    assert selected_index(tasks) is None
    assert selected_task(tasks) is None


def test_ensure_selection_picks_first_only_when_unselected():
    tasks = [Task(title="a"), Task(title="b")]
    ensure_selection(tasks)
    assert selected_index(tasks) == 0
    select_index(tasks, 1)
    ensure_selection(tasks)
    assert [t.is_selected for t in tasks] == [False, True]


def test_viewport_follows_selection_down_and_up():
    store = make_store(*"abcdefgh")
    view = Viewport(height=3)
    for _ in range(4):
        select_next(store.tasks, view)
    assert selected_index(store.tasks) == 4
    assert view.first_visible == 2
    assert list(view.visible(len(store.tasks))) == [2, 3, 4]

    for _ in range(3):
        select_previous(store.tasks, view)
    assert view.first_visible == 1


def test_viewport_without_height_shows_everything():
    view = Viewport()
    view.scroll_to(10)
    assert view.first_visible == 0
    assert list(view.visible(4)) == [0, 1, 2, 3]


def test_visible_clamps_after_list_shrinks():
    view = Viewport(first_visible=6, height=3)
    assert list(view.visible(5)) == [2, 3, 4]
    assert list(view.visible(2)) == [0, 1]


def test_scrollbar():
    view = Viewport(height=5)
    assert view.scrollbar(5) is None
    assert view.scrollbar(10) == (0, 2)
    view.first_visible = 5
    assert view.scrollbar(10) == (3, 2)
