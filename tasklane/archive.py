"""Archive lifecycle: done tasks move into dated batches and back."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from tasklane.fileio import ensure_json_file, read_json, write_json_atomic
from tasklane.models import ArchiveItem, TaskStore, utc_now
from tasklane.navigation import ensure_selection, selected_index
from tasklane.tasks import load_tasks
from tasklane.workspace import archive_path as _archive_path

logger = logging.getLogger(__name__)


def current_batch(store: TaskStore) -> ArchiveItem | None:
    """The batch shown in the archive view, or None when there are no batches."""
    if not store.archive:
        return None
    store.curr_archive = min(max(store.curr_archive, 0), len(store.archive) - 1)
    return store.archive[store.curr_archive]


def newer_batch(store: TaskStore) -> None:
    if store.curr_archive < len(store.archive) - 1:
        store.curr_archive += 1


def older_batch(store: TaskStore) -> None:
    if store.curr_archive > 0:
        store.curr_archive -= 1


def archive_done_tasks(store: TaskStore, now: datetime | None = None) -> ArchiveItem | None:
    """Move every done task, in order, into a new batch stamped *now*.

    Returns the new batch, or None when nothing was done.
    """
    done = [t for t in store.tasks if t.is_done]
    if not done:
        return None
    lost_selection = any(t.is_selected for t in done)
    store.tasks = [t for t in store.tasks if not t.is_done]
    for t in done:
        t.is_selected = False
        t.is_active = False
    if lost_selection:
        ensure_selection(store.tasks)

    batch = ArchiveItem(date=now or utc_now(), tasks=done)
    batch.tasks[0].is_selected = True
    store.archive.append(batch)
    store.curr_archive = len(store.archive) - 1
    logger.info("Archived %d tasks", len(done))
    return batch


def dearchive_selected(store: TaskStore) -> None:
    """Return the selected task of the current batch to the end of the active list."""
    batch = current_batch(store)
    if batch is None:
        return
    i = selected_index(batch.tasks)
    if i is None:
        return
    task = batch.tasks.pop(i)
    task.is_done = False
    task.is_active = False
    task.is_selected = False
    store.tasks.append(task)
    logger.debug("Dearchived %r", task.title)

    if batch.tasks:
        batch.tasks[min(i, len(batch.tasks) - 1)].is_selected = True
        return
    store.archive.pop(store.curr_archive)
    if not store.archive:
        store.curr_archive = 0
    elif store.curr_archive >= len(store.archive):
        store.curr_archive = len(store.archive) - 1


# ── Persistence ───────────────────────────────────────────────


def load_archive(root: Path | None = None) -> list[ArchiveItem]:
    """Load archive.json verbatim, creating it as an empty list when absent."""
    path = _archive_path(root)
    if ensure_json_file(path, []):
        logger.info("Created %s", path)
    data = read_json(path, default=[])
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON array of archive batches")
    return [ArchiveItem.from_dict(d) for d in data]


def save_archive(store: TaskStore, root: Path | None = None) -> None:
    path = _archive_path(root)
    write_json_atomic(path, [a.to_dict() for a in store.archive])
    logger.info("Saved %d archive batches to %s", len(store.archive), path)


def load_store(root: Path | None = None) -> TaskStore:
    """Load tasks and archive into a fresh store; the newest batch is current."""
    archive = load_archive(root)
    return TaskStore(
        tasks=load_tasks(root),
        archive=archive,
        curr_archive=len(archive) - 1 if archive else 0,
    )
