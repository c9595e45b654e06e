"""Tests for tasklane/keymap.py."""

import pytest

from tasklane.controller import AppState, Command, Popup
from tasklane.keymap import INSTRUCTIONS, KEYMAPS, resolve_key


@pytest.mark.parametrize(
    "state,key,command",
    [
        (AppState.DISPLAY, "j", Command.SELECT_NEXT),
        (AppState.DISPLAY, "down", Command.SELECT_NEXT),
        (AppState.DISPLAY, "i", Command.MOVE_UP),
        (AppState.DISPLAY, "u", Command.MOVE_DOWN),
        (AppState.DISPLAY, "space", Command.TOGGLE_DONE),
        (AppState.DISPLAY, "enter", Command.TOGGLE_ACTIVE),
        (AppState.DISPLAY, "c", Command.REQUEST_ARCHIVE),
        (AppState.DISPLAY, "shift+tab", Command.CYCLE_TAB_REVERSE),
        (AppState.EDIT_TASK, "tab", Command.SWITCH_FIELD),
        (AppState.EDIT_TASK, "enter", Command.NEWLINE),
        (AppState.EDIT_TASK, "escape", Command.CANCEL),
        (AppState.ARCHIVED, "h", Command.NEWER_BATCH),
        (AppState.ARCHIVED, "right", Command.OLDER_BATCH),
        (AppState.ARCHIVED, "space", Command.DEARCHIVE),
        (AppState.SETTINGS, "right", Command.INCREMENT),
        (AppState.SETTINGS, "up", Command.PREVIOUS_SETTING),
    ],
)
def test_resolve_key(state, key, command):
    assert resolve_key(state, None, key) is command


def test_letters_are_text_while_editing():
    for key in ("q", "a", "j", "s", "space"):
        assert resolve_key(AppState.EDIT_TASK, Popup.NEW_TASK, key) is None


def test_enter_confirms_archive_popup():
    assert resolve_key(AppState.DISPLAY, Popup.CONFIRM_ARCHIVE, "enter") is Command.CONFIRM_ARCHIVE
    assert resolve_key(AppState.DISPLAY, None, "enter") is Command.TOGGLE_ACTIVE


def test_unbound_key():
    assert resolve_key(AppState.SETTINGS, None, "x") is None


def test_every_view_can_quit_or_leave():
    for state, keys in KEYMAPS.items():
        assert keys["escape"] in (Command.QUIT, Command.CANCEL)
        assert state in INSTRUCTIONS
