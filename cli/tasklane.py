#!/usr/bin/env python3
"""Tasklane TUI — interactive terminal task tracker powered by Textual."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from rich.style import Style
from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.widgets import Static

from tasklane.archive import current_batch, load_store
from tasklane.config import AppConfig, load_config
from tasklane.controller import AppState, Controller, EditField, Popup
from tasklane.keymap import INSTRUCTIONS, resolve_key
from tasklane.models import Task
from tasklane.navigation import selected_task
from tasklane.settings import SETTING_FIELDS, SETTING_LABELS, Colour, Settings, StylePair, load_settings
from tasklane.workspace import log_path, workspace_root

logger = logging.getLogger("tasklane")

USAGE = """
Too many arguments supplied! Either:
  - Run the program with no args: tasks are stored in the current directory
    (or in $TASKLANE_ROOT when set)
  - Provide the storage directory as the only argument
"""

TAB_TITLES = ["Active tasks", "Archived tasks", "Settings"]

HEX = {
    Colour.WHITE: "#ffffff",
    Colour.CYAN: "#00cdcd",
    Colour.RED: "#cd0000",
    Colour.GREEN: "#00cd00",
    Colour.BLUE: "#0000ee",
    Colour.YELLOW: "#cdcd00",
    Colour.GRAY: "#bfbfbf",
    Colour.DARK_GRAY: "#7f7f7f",
    Colour.BLACK: "#000000",
}


def _style(pair: StylePair, **extra) -> Style:
    return Style(color=HEX[pair.fg], bgcolor=HEX[pair.bg], **extra)


def _task_style(task: Task, settings: Settings) -> Style:
    if task.is_active:
        return _style(settings.active_highlight if task.is_selected else settings.active_normal)
    return _style(settings.highlight if task.is_selected else settings.default)


# ── Stylesheet ─────────────────────────────────────────────────

CSS = """
Screen {
    layers: base overlay;
}

#tabs {
    dock: top;
    height: 2;
    padding: 0 2;
}

#main-layout {
    height: 1fr;
}

#task-pane {
    width: 1fr;
    height: 1fr;
    border: round;
    padding: 0 1;
}

#detail-pane {
    width: 1fr;
    height: 1fr;
    border: round;
    padding: 0 1;
}

#instructions {
    dock: bottom;
    height: 3;
    border-top: double;
    content-align: center middle;
    text-align: center;
}

#popup {
    layer: overlay;
    display: none;
    width: 60%;
    height: auto;
    min-height: 5;
    margin: 4 8;
    border: double;
    padding: 0 1;
}
"""


# ── Main app ───────────────────────────────────────────────────


class TasklaneApp(App):
    """Tasklane — interactive terminal task tracker."""

    TITLE = "Tasklane"
    CSS = CSS
    AUTO_FOCUS = None
    ENABLE_COMMAND_PALETTE = False

    # Tab belongs to the state machine, not to focus traversal.
    BINDINGS = [
        Binding("tab", "press('tab')", "Next tab", show=False, priority=True),
        Binding("shift+tab", "press('shift+tab')", "Previous tab", show=False, priority=True),
    ]

    def __init__(self, controller: Controller, config: AppConfig | None = None) -> None:
        super().__init__()
        self.controller = controller
        self.app_config = config or AppConfig()
        self._applied_settings: dict | None = None

    def compose(self) -> ComposeResult:
        yield Static(id="tabs")
        yield Container(
            Static(id="task-pane"),
            Static(id="detail-pane"),
            id="main-layout",
        )
        yield Static(id="instructions")
        yield Static(id="popup")

    def on_mount(self) -> None:
        self.set_interval(self.app_config.tick_interval, self._advance_clock)
        self._refresh_view()

    def on_resize(self, event: events.Resize) -> None:
        self.call_after_refresh(self._refresh_view)

    # ── Input ──────────────────────────────────────────────────

    def on_key(self, event: events.Key) -> None:
        event.stop()
        self._route_key(event.key, event.character)

    def action_press(self, key: str) -> None:
        self._route_key(key, None)

    def _route_key(self, key: str, character: str | None) -> None:
        ctl = self.controller
        command = resolve_key(ctl.state, ctl.popup, key)
        try:
            if command is not None:
                ctl.handle(command)
            elif ctl.state is AppState.EDIT_TASK and character and character.isprintable():
                ctl.type_char(character)
        except OSError as e:
            logger.error("Save failed: %s", e)
            self.notify(f"Could not save: {e}", title="Save failed", severity="error")
        if not ctl.running:
            self.exit()
            return
        self._refresh_view()

    def _advance_clock(self) -> None:
        self.controller.tick()
        self._refresh_view()

    # ── Rendering ──────────────────────────────────────────────

    def _measure(self) -> None:
        """Feed the pane geometry back into the controller before anything is drawn."""
        ctl = self.controller
        ctl.wrap_width = max(1, self.query_one("#detail-pane", Static).content_size.width)
        height = self.query_one("#task-pane", Static).content_size.height
        if ctl.state is AppState.ARCHIVED:
            height -= 2
        ctl.viewport.height = max(1, height)

    def _apply_settings(self) -> None:
        settings = self.controller.settings
        snapshot = settings.to_dict()
        if snapshot == self._applied_settings:
            return
        self._applied_settings = snapshot
        bg = HEX[settings.normal_bg_colour]
        border = HEX[settings.border_colour]
        self.screen.styles.background = bg
        self.query_one("#main-layout").styles.layout = "horizontal" if settings.is_horizontal else "vertical"
        for pane_id in ("#task-pane", "#detail-pane", "#popup"):
            pane = self.query_one(pane_id)
            pane.styles.border = ("double" if pane_id == "#popup" else "round", border)
            pane.styles.background = bg
        self.query_one("#instructions").styles.border_top = ("double", border)

    def _refresh_view(self) -> None:
        ctl = self.controller
        self._apply_settings()
        self._measure()
        self.query_one("#tabs", Static).update(self._render_tabs())
        self.query_one("#instructions", Static).update(
            Text(INSTRUCTIONS[ctl.state], style=_style(ctl.settings.border))
        )
        task_pane = self.query_one("#task-pane", Static)
        detail_pane = self.query_one("#detail-pane", Static)
        if ctl.state is AppState.SETTINGS:
            task_pane.border_title = "Settings"
            detail_pane.border_title = "Example"
            task_pane.update(self._render_settings())
            detail_pane.update(self._render_preview())
        elif ctl.state is AppState.ARCHIVED:
            task_pane.border_title = "Archive"
            detail_pane.border_title = "Description"
            task_pane.update(self._render_archive())
            detail_pane.update(self._render_description(ctl.selected(), editing=False))
        else:
            task_pane.border_title = "Tasks"
            detail_pane.border_title = "Description"
            task_pane.update(self._render_task_list(ctl.store.tasks))
            editing = ctl.state is AppState.EDIT_TASK and ctl.edit_field is EditField.DESCRIPTION
            detail_pane.update(self._render_description(ctl.selected(), editing=editing))
        self._render_popup()

    def _render_tabs(self) -> Text:
        settings = self.controller.settings
        text = Text(no_wrap=True)
        for i, title in enumerate(TAB_TITLES):
            if i:
                text.append(" || ", style=_style(settings.default))
            if i == self.controller.tab_index():
                text.append(title, style=_style(settings.title, bold=True, underline=True))
            else:
                text.append(title[0], style=_style(settings.title))
                text.append(title[1:], style=_style(settings.default))
        return text

    def _render_task_list(self, tasks: list[Task]) -> Text:
        settings = self.controller.settings
        viewport = self.controller.viewport
        text = Text(no_wrap=True, overflow="ellipsis")
        if not tasks:
            text.append("(no tasks, press 'a' to add one)", style=_style(settings.default))
            return text
        bar = viewport.scrollbar(len(tasks))
        for row, i in enumerate(viewport.visible(len(tasks))):
            task = tasks[i]
            mark = "[X]" if task.is_done else "[ ]"
            title = task.title or "<untitled>"
            if bar is not None:
                start, size = bar
                text.append("█ " if start <= row < start + size else "│ ", style=_style(settings.border))
            text.append(f"{mark} {title}", style=_task_style(task, settings))
            text.append(f"  {task.time_str()}\n", style=_style(settings.default))
        return text

    def _render_archive(self) -> Text:
        ctl = self.controller
        settings = ctl.settings
        batch = current_batch(ctl.store)
        if batch is None:
            return Text("(archive is empty)", style=_style(settings.default))
        text = Text(no_wrap=True, overflow="ellipsis")
        position = f"{ctl.store.curr_archive + 1}/{len(ctl.store.archive)}"
        text.append(f"Archived {batch.date_str()}  ({position})\n\n", style=_style(settings.title, bold=True))
        text.append_text(self._render_task_list(batch.tasks))
        return text

    def _render_description(self, task: Task | None, editing: bool) -> Text:
        ctl = self.controller
        style = _style(ctl.settings.default)
        if task is None:
            return Text("", style=style)
        if editing:
            rows = ctl.editor.render(ctl.wrap_width)
            return Text("\n".join(rows), style=style, no_wrap=True)
        return Text(task.description, style=style)

    def _render_settings(self) -> Text:
        ctl = self.controller
        settings = ctl.settings
        text = Text(no_wrap=True)
        text.append("Layout\n\n", style=_style(settings.default, underline=True))
        for setting in SETTING_FIELDS:
            if setting is SETTING_FIELDS[1]:
                text.append("\nTask colours\n\n", style=_style(settings.default, underline=True))
            pair = settings.highlight if setting is ctl.edit_setting else settings.default
            label = SETTING_LABELS[setting]
            text.append(f"  {label:<28}", style=_style(pair))
            text.append(f"{settings.value_label(setting):>10}\n", style=_style(pair))
        return text

    def _render_preview(self) -> Text:
        text = Text(no_wrap=True, overflow="ellipsis")
        for line, pair in self.controller.settings.preview_rows():
            text.append(line + "\n", style=_style(pair))
        return text

    def _render_popup(self) -> None:
        ctl = self.controller
        popup = self.query_one("#popup", Static)
        if ctl.popup is None:
            popup.display = False
            return
        settings = ctl.settings
        style = _style(settings.default)
        text = Text(no_wrap=True, overflow="ellipsis")
        if ctl.popup is Popup.CONFIRM_ARCHIVE:
            popup.border_title = "Archive tasks"
            text.append("Archive every task marked as done?\n\n", style=style)
            text.append("enter - Archive    q/esc - Cancel", style=_style(settings.title))
        else:
            popup.border_title = "New task" if ctl.popup is Popup.NEW_TASK else "Edit task"
            task = selected_task(ctl.store.tasks)
            if ctl.edit_field is EditField.TITLE:
                title = "".join(ctl.editor.render(0))
            else:
                title = task.title if task is not None else ""
            field = "title" if ctl.edit_field is EditField.TITLE else "description"
            text.append("Title: ", style=_style(settings.title))
            text.append(title + "\n\n", style=style)
            text.append(f"Editing {field}  (tab - switch field, esc - done)", style=_style(settings.border))
        popup.update(text)
        popup.display = True


# ── Entry point ────────────────────────────────────────────────


def _setup_logging(root: Path) -> None:
    handler = logging.FileHandler(log_path(root), encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)


def main(argv: list[str] | None = None) -> None:
    args = sys.argv[1:] if argv is None else argv
    if len(args) > 1:
        print(USAGE)
        sys.exit(1)

    root = workspace_root(args[0] if args else None)
    if not root.is_dir():
        print(f"Storage directory not found: {root}")
        sys.exit(1)

    try:
        _setup_logging(root)
    except OSError as e:
        print(f"Cannot open log file in {root}: {e}")
        sys.exit(1)
    config = load_config(root)
    logger.setLevel(config.log_level)

    try:
        store = load_store(root)
        settings = load_settings(root)
    except (OSError, ValueError) as e:
        logger.exception("Startup failed")
        print(f"Cannot load tasks from {root}: {e}")
        sys.exit(1)

    controller = Controller(store, settings, root=root, blink_interval=config.blink_interval)
    logger.info("Started with %d tasks, %d archive batches", len(store.tasks), len(store.archive))
    TasklaneApp(controller, config).run()


if __name__ == "__main__":
    main()
