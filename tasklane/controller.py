"""View state machine: routes logical commands to the store, editor and settings.

The controller is the single owner of all mutable application state.
Every command runs to completion before the next one is handled; the
renderer only reads from it, apart from writing back the measured
``wrap_width`` and ``viewport.height``.
"""

from __future__ import annotations

import logging
import time
from enum import Enum
from pathlib import Path

from tasklane import archive as archive_ops
from tasklane import tasks as task_ops
from tasklane.editor import TextEditor
from tasklane.models import Task, TaskStore
from tasklane.navigation import (
    Viewport,
    ensure_selection,
    selected_index,
    selected_task,
    select_next,
    select_previous,
)
from tasklane.settings import (
    SettingField,
    Settings,
    next_setting_field,
    prev_setting_field,
    save_settings,
    step_setting,
)

logger = logging.getLogger(__name__)


class AppState(Enum):
    DISPLAY = "display"
    EDIT_TASK = "edit_task"
    ARCHIVED = "archived"
    SETTINGS = "settings"


class Popup(Enum):
    NEW_TASK = "new_task"
    EDIT_TASK = "edit_task"
    CONFIRM_ARCHIVE = "confirm_archive"


class EditField(Enum):
    TITLE = "title"
    DESCRIPTION = "description"


class Command(Enum):
    # Navigation
    SELECT_NEXT = "select_next"
    SELECT_PREVIOUS = "select_previous"
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    CYCLE_TAB = "cycle_tab"
    CYCLE_TAB_REVERSE = "cycle_tab_reverse"
    # Task list
    TOGGLE_DONE = "toggle_done"
    TOGGLE_ACTIVE = "toggle_active"
    ADD_TASK = "add_task"
    DELETE_TASK = "delete_task"
    EDIT_TASK = "edit_task"
    REQUEST_ARCHIVE = "request_archive"
    CONFIRM_ARCHIVE = "confirm_archive"
    SAVE = "save"
    QUIT = "quit"
    # Editing
    CANCEL = "cancel"
    SWITCH_FIELD = "switch_field"
    BACKSPACE = "backspace"
    NEWLINE = "newline"
    CARET_LEFT = "caret_left"
    CARET_RIGHT = "caret_right"
    CARET_UP = "caret_up"
    CARET_DOWN = "caret_down"
    # Archive
    OLDER_BATCH = "older_batch"
    NEWER_BATCH = "newer_batch"
    DEARCHIVE = "dearchive"
    # Settings
    NEXT_SETTING = "next_setting"
    PREVIOUS_SETTING = "previous_setting"
    INCREMENT = "increment"
    DECREMENT = "decrement"


TAB_INDEX = {
    AppState.DISPLAY: 0,
    AppState.EDIT_TASK: 0,
    AppState.ARCHIVED: 1,
    AppState.SETTINGS: 2,
}


class Controller:
    def __init__(
        self,
        store: TaskStore,
        settings: Settings,
        root: Path | None = None,
        blink_interval: float = 0.4,
    ) -> None:
        self.store = store
        self.settings = settings
        self.root = root

        self.state = AppState.DISPLAY
        self.edit_field = EditField.DESCRIPTION
        self.edit_setting = SettingField.SPLIT
        self.popup: Popup | None = None
        self.running = True

        self.editor = TextEditor(blink_interval=blink_interval)
        self.viewport = Viewport()
        self.wrap_width = 0

        self._handlers = {
            AppState.DISPLAY: self._handle_display,
            AppState.EDIT_TASK: self._handle_edit,
            AppState.ARCHIVED: self._handle_archived,
            AppState.SETTINGS: self._handle_settings,
        }

    # ── Queries for the renderer ──────────────────────────────

    def tab_index(self) -> int:
        return TAB_INDEX[self.state]

    def visible_tasks(self) -> list[Task]:
        """The list the selection commands act on in the current view."""
        if self.state is AppState.ARCHIVED:
            batch = archive_ops.current_batch(self.store)
            return batch.tasks if batch is not None else []
        return self.store.tasks

    def selected(self) -> Task | None:
        return selected_task(self.visible_tasks())

    def edit_wrap_width(self) -> int:
        """Wrap width for the field being edited; the title is a single unwrapped line."""
        return 0 if self.edit_field is EditField.TITLE else self.wrap_width

    # ── Event entry points ────────────────────────────────────

    def handle(self, command: Command, now: float | None = None) -> None:
        """Apply one logical command in the current state.

        Persistence failures (``OSError``) propagate to the caller with
        in-memory state intact.
        """
        logger.debug("%s <- %s", self.state.value, command.value)
        self._handlers[self.state](command, now)

    def type_char(self, ch: str, now: float | None = None) -> None:
        if self.state is AppState.EDIT_TASK:
            self.editor.insert(ch, now)

    def tick(self, now: float | None = None) -> None:
        """Accrue elapsed time for the active task and advance the caret blink."""
        if now is None:
            now = time.monotonic()
        task_ops.accrue_elapsed(self.store, now)
        if self.state is AppState.EDIT_TASK:
            self.editor.tick(now)

    # ── Persistence ───────────────────────────────────────────

    def save(self) -> None:
        task_ops.save_tasks(self.store, self.root)
        archive_ops.save_archive(self.store, self.root)

    def save_settings(self) -> None:
        save_settings(self.settings, self.root)

    def quit(self) -> None:
        """Persist everything, then stop. On a save failure the app keeps running."""
        if self.state is AppState.EDIT_TASK:
            self._commit_field()
        self.save()
        self.save_settings()
        self.running = False
        logger.info("Quit")

    # ── State transitions ─────────────────────────────────────

    def enter_display(self) -> None:
        if self.state is AppState.EDIT_TASK:
            self._commit_field()
        self.popup = None
        self.state = AppState.DISPLAY
        ensure_selection(self.store.tasks)
        i = selected_index(self.store.tasks)
        if i is not None:
            self.viewport.scroll_to(i)

    def enter_edit(self, field: EditField, popup: Popup, now: float | None = None) -> None:
        task = selected_task(self.store.tasks)
        if task is None:
            return
        self.editor.enter(task.title if field is EditField.TITLE else task.description, now)
        self.edit_field = field
        self.popup = popup
        self.state = AppState.EDIT_TASK

    def _enter_archived(self) -> None:
        self.popup = None
        self.state = AppState.ARCHIVED
        self.viewport.first_visible = 0

    def _enter_settings(self) -> None:
        self.popup = None
        self.state = AppState.SETTINGS

    def _commit_field(self) -> None:
        task = selected_task(self.store.tasks)
        if task is None:
            return
        if self.edit_field is EditField.TITLE:
            task.title = self.editor.commit(single_line=True)
        else:
            task.description = self.editor.commit()

    def _switch_field(self, now: float | None) -> None:
        self._commit_field()
        task = selected_task(self.store.tasks)
        if task is None:
            return
        if self.edit_field is EditField.TITLE:
            self.edit_field = EditField.DESCRIPTION
            self.editor.enter(task.description, now)
        else:
            self.edit_field = EditField.TITLE
            self.editor.enter(task.title, now)

    # ── Per-state handlers ────────────────────────────────────

    def _handle_display(self, command: Command, now: float | None) -> None:
        store = self.store
        if command is Command.QUIT:
            if self.popup is Popup.CONFIRM_ARCHIVE:
                self.popup = None
            else:
                self.quit()
        elif command is Command.CANCEL:
            self.popup = None
        elif command is Command.SELECT_NEXT:
            select_next(store.tasks, self.viewport)
        elif command is Command.SELECT_PREVIOUS:
            select_previous(store.tasks, self.viewport)
        elif command is Command.MOVE_UP:
            task_ops.move_selected_up(store)
            self._follow_selection()
        elif command is Command.MOVE_DOWN:
            task_ops.move_selected_down(store)
            self._follow_selection()
        elif command is Command.TOGGLE_DONE:
            task_ops.toggle_done(store, now)
        elif command is Command.TOGGLE_ACTIVE:
            task_ops.toggle_active(store, now)
        elif command is Command.ADD_TASK:
            task_ops.add_task(store)
            self._follow_selection()
            self.enter_edit(EditField.TITLE, Popup.NEW_TASK, now)
        elif command is Command.DELETE_TASK:
            task_ops.delete_selected(store)
            self._follow_selection()
        elif command is Command.EDIT_TASK:
            self.enter_edit(EditField.DESCRIPTION, Popup.EDIT_TASK, now)
        elif command is Command.REQUEST_ARCHIVE:
            self.popup = Popup.CONFIRM_ARCHIVE
        elif command is Command.CONFIRM_ARCHIVE:
            if self.popup is Popup.CONFIRM_ARCHIVE:
                archive_ops.archive_done_tasks(store)
                self.popup = None
                self._follow_selection()
        elif command is Command.SAVE:
            self.save()
        elif command is Command.CYCLE_TAB:
            self._enter_archived()
        elif command is Command.CYCLE_TAB_REVERSE:
            self._enter_settings()

    def _handle_edit(self, command: Command, now: float | None) -> None:
        editor = self.editor
        if command is Command.CANCEL:
            self.enter_display()
        elif command is Command.SWITCH_FIELD:
            self._switch_field(now)
        elif command is Command.BACKSPACE:
            editor.backspace(now)
        elif command is Command.NEWLINE:
            editor.insert("\n", now)
        elif command is Command.CARET_LEFT:
            editor.move_left(now)
        elif command is Command.CARET_RIGHT:
            editor.move_right(now)
        elif command is Command.CARET_UP:
            editor.move_up(self.edit_wrap_width(), now)
        elif command is Command.CARET_DOWN:
            editor.move_down(self.edit_wrap_width(), now)

    def _handle_archived(self, command: Command, now: float | None) -> None:
        store = self.store
        batch = archive_ops.current_batch(store)
        if command is Command.QUIT:
            self.quit()
        elif command is Command.SELECT_NEXT and batch is not None:
            select_next(batch.tasks, self.viewport)
        elif command is Command.SELECT_PREVIOUS and batch is not None:
            select_previous(batch.tasks, self.viewport)
        elif command is Command.NEWER_BATCH:
            archive_ops.newer_batch(store)
            self.viewport.first_visible = 0
        elif command is Command.OLDER_BATCH:
            archive_ops.older_batch(store)
            self.viewport.first_visible = 0
        elif command is Command.DEARCHIVE:
            archive_ops.dearchive_selected(store)
            self._follow_selection()
        elif command is Command.SAVE:
            self.save()
        elif command is Command.CYCLE_TAB:
            self._enter_settings()
        elif command is Command.CYCLE_TAB_REVERSE:
            self.enter_display()

    def _handle_settings(self, command: Command, now: float | None) -> None:
        if command is Command.QUIT:
            self.quit()
        elif command is Command.NEXT_SETTING:
            self.edit_setting = next_setting_field(self.edit_setting)
        elif command is Command.PREVIOUS_SETTING:
            self.edit_setting = prev_setting_field(self.edit_setting)
        elif command is Command.INCREMENT:
            step_setting(self.settings, self.edit_setting, forward=True)
        elif command is Command.DECREMENT:
            step_setting(self.settings, self.edit_setting, forward=False)
        elif command is Command.SAVE:
            self.save_settings()
        elif command in (Command.CYCLE_TAB, Command.CYCLE_TAB_REVERSE):
            self.enter_display()

    def _follow_selection(self) -> None:
        i = selected_index(self.visible_tasks())
        if i is not None:
            self.viewport.scroll_to(i)
