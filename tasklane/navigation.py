"""Selection and scrolling over a task list (active tasks or one archive batch)."""

from __future__ import annotations

from dataclasses import dataclass

from tasklane.models import Task


@dataclass
class Viewport:
    """Visible window ``[first_visible, first_visible + height)`` over a list.

    ``height`` is measured by the renderer each frame; until then it is 0
    and no scrolling adjustment happens.
    """

    first_visible: int = 0
    height: int = 0

    def scroll_to(self, index: int) -> None:
        """Shift the window by the minimal amount that brings *index* into view."""
        if self.height <= 0 or index < 0:
            return
        if index < self.first_visible:
            self.first_visible = index
        elif index >= self.first_visible + self.height:
            self.first_visible = index - self.height + 1
        self.first_visible = max(0, self.first_visible)

    def visible(self, count: int) -> range:
        """Indices to draw for a list of *count* items."""
        if self.height <= 0 or count <= self.height:
            return range(count)
        first = min(self.first_visible, count - self.height)
        return range(max(0, first), max(0, first) + self.height)

    def scrollbar(self, count: int) -> tuple[int, int] | None:
        """(start_row, size) of the scroll thumb, or None when everything fits."""
        if self.height <= 0 or count <= self.height:
            return None
        first = min(self.first_visible, count - self.height)
        size = max(1, (self.height * self.height) // count)
        start = int(first / (count - self.height) * (self.height - size))
        return start, size


def selected_index(tasks: list[Task]) -> int | None:
    for i, task in enumerate(tasks):
        if task.is_selected:
            return i
    return None


def selected_task(tasks: list[Task]) -> Task | None:
    i = selected_index(tasks)
    return tasks[i] if i is not None else None


def select_index(tasks: list[Task], index: int) -> None:
    """Move the selection flag to *index*, clearing every other flag."""
    for i, task in enumerate(tasks):
        task.is_selected = i == index


def ensure_selection(tasks: list[Task]) -> None:
    """Select the first task if the list is non-empty and nothing is selected."""
    if tasks and selected_index(tasks) is None:
        tasks[0].is_selected = True


def select_next(tasks: list[Task], viewport: Viewport | None = None) -> None:
    i = selected_index(tasks)
    if i is None or i >= len(tasks) - 1:
        return
    select_index(tasks, i + 1)
    if viewport is not None:
        viewport.scroll_to(i + 1)


def select_previous(tasks: list[Task], viewport: Viewport | None = None) -> None:
    i = selected_index(tasks)
    if i is None or i == 0:
        return
    select_index(tasks, i - 1)
    if viewport is not None:
        viewport.scroll_to(i - 1)
