"""Physical key names (Textual's ``Key.key`` values) to logical commands."""

from __future__ import annotations

from tasklane.controller import AppState, Command, Popup

DISPLAY_KEYS: dict[str, Command] = {
    "q": Command.QUIT,
    "escape": Command.QUIT,
    "c": Command.REQUEST_ARCHIVE,
    "s": Command.SAVE,
    "j": Command.SELECT_NEXT,
    "down": Command.SELECT_NEXT,
    "k": Command.SELECT_PREVIOUS,
    "up": Command.SELECT_PREVIOUS,
    "u": Command.MOVE_DOWN,
    "i": Command.MOVE_UP,
    "enter": Command.TOGGLE_ACTIVE,
    "space": Command.TOGGLE_DONE,
    "a": Command.ADD_TASK,
    "d": Command.DELETE_TASK,
    "e": Command.EDIT_TASK,
    "tab": Command.CYCLE_TAB,
    "shift+tab": Command.CYCLE_TAB_REVERSE,
}

EDIT_KEYS: dict[str, Command] = {
    "escape": Command.CANCEL,
    "backspace": Command.BACKSPACE,
    "enter": Command.NEWLINE,
    "left": Command.CARET_LEFT,
    "right": Command.CARET_RIGHT,
    "up": Command.CARET_UP,
    "down": Command.CARET_DOWN,
    "tab": Command.SWITCH_FIELD,
}

ARCHIVED_KEYS: dict[str, Command] = {
    "q": Command.QUIT,
    "escape": Command.QUIT,
    "h": Command.NEWER_BATCH,
    "left": Command.NEWER_BATCH,
    "l": Command.OLDER_BATCH,
    "right": Command.OLDER_BATCH,
    "j": Command.SELECT_NEXT,
    "down": Command.SELECT_NEXT,
    "k": Command.SELECT_PREVIOUS,
    "up": Command.SELECT_PREVIOUS,
    "space": Command.DEARCHIVE,
    "s": Command.SAVE,
    "tab": Command.CYCLE_TAB,
    "shift+tab": Command.CYCLE_TAB_REVERSE,
}

SETTINGS_KEYS: dict[str, Command] = {
    "q": Command.QUIT,
    "escape": Command.QUIT,
    "up": Command.PREVIOUS_SETTING,
    "down": Command.NEXT_SETTING,
    "right": Command.INCREMENT,
    "left": Command.DECREMENT,
    "s": Command.SAVE,
    "tab": Command.CYCLE_TAB,
    "shift+tab": Command.CYCLE_TAB_REVERSE,
}

KEYMAPS = {
    AppState.DISPLAY: DISPLAY_KEYS,
    AppState.EDIT_TASK: EDIT_KEYS,
    AppState.ARCHIVED: ARCHIVED_KEYS,
    AppState.SETTINGS: SETTINGS_KEYS,
}

INSTRUCTIONS = {
    AppState.DISPLAY: (
        "space - Done/undo | a - Add | e - Edit | d - Delete | i/u - Move up/down\n"
        "j/k - Next/previous | enter - Activate | c - Archive done | s - Save | "
        "tab - Archive | shift+tab - Settings | q - Quit"
    ),
    AppState.EDIT_TASK: (
        "tab - Switch title/description | arrows - Move caret | "
        "enter - New line | backspace - Delete | esc - Done"
    ),
    AppState.ARCHIVED: (
        "j/k - Next/previous | h - Newer batch | l - Older batch | space - Dearchive\n"
        "tab - Settings | shift+tab - Tasks | q - Quit"
    ),
    AppState.SETTINGS: (
        "up/down - Select | left/right - Modify | s - Save settings | tab - Tasks | q - Quit"
    ),
}


def resolve_key(state: AppState, popup: Popup | None, key: str) -> Command | None:
    """The command bound to *key* in *state*, or None (typed text while editing)."""
    command = KEYMAPS[state].get(key)
    if command is Command.TOGGLE_ACTIVE and popup is Popup.CONFIRM_ARCHIVE:
        return Command.CONFIRM_ARCHIVE
    return command
