"""Active task list operations, elapsed-time tracking and persistence."""

from __future__ import annotations

import logging
import time
from datetime import timedelta
from pathlib import Path

from tasklane.fileio import ensure_json_file, read_json, write_json_atomic
from tasklane.models import Task, TaskStore, utc_now
from tasklane.navigation import selected_index, selected_task
from tasklane.workspace import tasks_path as _tasks_path

logger = logging.getLogger(__name__)


# ── Mutators ──────────────────────────────────────────────────


def add_task(store: TaskStore) -> Task:
    """Append a blank task and make it the only selected one."""
    for t in store.tasks:
        t.is_selected = False
    task = Task(is_selected=True, created_on=utc_now())
    store.tasks.append(task)
    logger.debug("Added task #%d", len(store.tasks) - 1)
    return task


def delete_selected(store: TaskStore) -> Task | None:
    """Remove the selected task; the neighbour at the same index (or the new last) takes the selection."""
    i = selected_index(store.tasks)
    if i is None:
        return None
    removed = store.tasks.pop(i)
    if store.tasks:
        store.tasks[min(i, len(store.tasks) - 1)].is_selected = True
    logger.debug("Deleted task #%d %r", i, removed.title)
    return removed


def move_selected_up(store: TaskStore) -> None:
    i = selected_index(store.tasks)
    if i is None or i == 0:
        return
    store.tasks[i - 1], store.tasks[i] = store.tasks[i], store.tasks[i - 1]


def move_selected_down(store: TaskStore) -> None:
    i = selected_index(store.tasks)
    if i is None or i >= len(store.tasks) - 1:
        return
    store.tasks[i], store.tasks[i + 1] = store.tasks[i + 1], store.tasks[i]


# ── Active task & elapsed time ────────────────────────────────


def active_task(store: TaskStore) -> Task | None:
    for t in store.tasks:
        if t.is_active:
            return t
    return None


def accrue_elapsed(store: TaskStore, now: float | None = None) -> None:
    """Add the time since the last tick to the active task and reset the tick reference."""
    if now is None:
        now = time.monotonic()
    delta = max(0.0, now - store.last_tick)
    task = active_task(store)
    if task is not None:
        task.elapsed_time += timedelta(seconds=delta)
    store.last_tick = now


def _deactivate(store: TaskStore, task: Task, now: float | None) -> None:
    accrue_elapsed(store, now)
    task.is_active = False
    logger.debug("Deactivated %r at %s", task.title, task.time_str())


def toggle_done(store: TaskStore, now: float | None = None) -> None:
    task = selected_task(store.tasks)
    if task is None:
        return
    task.is_done = not task.is_done
    if task.is_done and task.is_active:
        _deactivate(store, task, now)


def toggle_active(store: TaskStore, now: float | None = None) -> None:
    """Stop the running task, then start the selected one unless it was the running one or is done."""
    selected = selected_task(store.tasks)
    current = active_task(store)
    if current is not None:
        _deactivate(store, current, now)
        if current is selected:
            return
    if selected is None or selected.is_done:
        return
    accrue_elapsed(store, now)
    selected.is_active = True
    logger.debug("Activated %r", selected.title)


# ── Persistence ───────────────────────────────────────────────


def normalize_loaded(tasks: list[Task]) -> list[Task]:
    """Select the first task only; keep at most one active, never a done one."""
    seen_active = False
    for t in tasks:
        t.is_selected = False
        if t.is_active and (t.is_done or seen_active):
            logger.warning("Clearing stray active flag on %r", t.title)
            t.is_active = False
        seen_active = seen_active or t.is_active
    if tasks:
        tasks[0].is_selected = True
    return tasks


def load_tasks(root: Path | None = None) -> list[Task]:
    """Load tasks.json, creating it as an empty list when absent."""
    path = _tasks_path(root)
    if ensure_json_file(path, []):
        logger.info("Created %s", path)
    data = read_json(path, default=[])
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON array of tasks")
    return normalize_loaded([Task.from_dict(d) for d in data])


def save_tasks(store: TaskStore, root: Path | None = None) -> None:
    path = _tasks_path(root)
    write_json_atomic(path, [t.to_dict() for t in store.tasks])
    logger.info("Saved %d tasks to %s", len(store.tasks), path)
