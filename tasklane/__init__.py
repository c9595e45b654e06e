"""Tasklane core library — task store, archive, editor and view state machine.

Public API re-exports for convenient imports:
    from tasklane import Controller, Command, load_store, load_settings, ...
"""

# Workspace & paths
from tasklane.workspace import (
    workspace_root,
    tasks_path,
    archive_path,
    settings_path,
    config_path,
    log_path,
)

# File I/O
from tasklane.fileio import (
    read_text,
    read_json,
    read_yaml,
    write_json_atomic,
    ensure_json_file,
)

# Configuration
from tasklane.config import AppConfig, load_config

# Models
from tasklane.models import (
    Task,
    ArchiveItem,
    TaskStore,
)

# Selection
from tasklane.navigation import (
    Viewport,
    selected_index,
    selected_task,
    ensure_selection,
    select_next,
    select_previous,
)

# Tasks
from tasklane.tasks import (
    add_task,
    delete_selected,
    move_selected_up,
    move_selected_down,
    toggle_done,
    toggle_active,
    accrue_elapsed,
    load_tasks,
    save_tasks,
)

# Archive
from tasklane.archive import (
    archive_done_tasks,
    dearchive_selected,
    current_batch,
    newer_batch,
    older_batch,
    load_archive,
    save_archive,
    load_store,
)

# Editing
from tasklane.editor import TextEditor, wrap_rows

# Settings
from tasklane.settings import (
    Colour,
    SettingField,
    Settings,
    StylePair,
    step_setting,
    load_settings,
    save_settings,
)

# State machine & input
from tasklane.controller import AppState, Command, Controller, EditField, Popup
from tasklane.keymap import INSTRUCTIONS, resolve_key
