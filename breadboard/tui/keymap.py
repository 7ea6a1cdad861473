"""
Key bindings - translate curses key input into editor Actions.

Keys arrive from `window.get_wch()`, which returns a str for characters
(including control characters) and an int for special keys. The meaning of a
key depends on the current Mode and, in Navigate mode, on whether the place
jump search is open.

Navigate:
    Up/Down             move through places and affordances
    Tab / Shift+Tab     next / previous place
    Enter               follow the selected affordance's connection
    Backspace / Esc     back along the trail
    e                   rename selection
    c                   toggle collapsed view
    Ctrl+N / Ctrl+A     new place / new affordance
    Ctrl+C / Ctrl+R     connect / remove connection
    Ctrl+F              toggle the "connected" filter
    Ctrl+S / Ctrl+W     save / save as
    Ctrl+O              open file
    Ctrl+D / Delete     delete selection
    Ctrl+Q              quit
    any other character starts the place jump search
"""

import curses
from typing import Dict, Union

from breadboard.actions import NO_ACTION, Action, ActionKind, Mode, TextDelta

Key = Union[str, int]

ENTER_KEYS = ("\n", "\r", curses.KEY_ENTER)
ESCAPE = "\x1b"
BACKSPACE_KEYS = ("\x7f", "\x08", curses.KEY_BACKSPACE)


def ctrl(letter: str) -> str:
    """Control character produced by Ctrl+<letter> in raw mode."""
    return chr(ord(letter.lower()) & 0x1F)


NAVIGATE_BINDINGS: Dict[Key, ActionKind] = {
    curses.KEY_UP: ActionKind.NAVIGATE_UP,
    curses.KEY_DOWN: ActionKind.NAVIGATE_DOWN,
    "\t": ActionKind.NAVIGATE_RIGHT,
    curses.KEY_BTAB: ActionKind.NAVIGATE_LEFT,
    "e": ActionKind.ENTER_EDIT,
    "c": ActionKind.TOGGLE_COLLAPSED,
    ctrl("n"): ActionKind.NEW_PLACE,
    ctrl("a"): ActionKind.NEW_AFFORDANCE,
    ctrl("c"): ActionKind.ENTER_CONNECT,
    ctrl("r"): ActionKind.REMOVE_CONNECTION,
    ctrl("f"): ActionKind.TOGGLE_FILTER,
    ctrl("s"): ActionKind.SAVE,
    ctrl("w"): ActionKind.SAVE_AS,
    ctrl("o"): ActionKind.OPEN,
    ctrl("d"): ActionKind.DELETE,
    curses.KEY_DC: ActionKind.DELETE,
    ctrl("q"): ActionKind.QUIT,
}

# Cursor keys produce edit deltas wherever a text field is focused
CURSOR_BINDINGS: Dict[Key, TextDelta] = {
    curses.KEY_LEFT: TextDelta.CURSOR_LEFT,
    curses.KEY_RIGHT: TextDelta.CURSOR_RIGHT,
    curses.KEY_HOME: TextDelta.HOME,
    curses.KEY_END: TextDelta.END,
}


def is_text(key: Key) -> bool:
    """A single printable character."""
    return isinstance(key, str) and len(key) == 1 and key.isprintable()


def _common(key: Key) -> Action:
    """Enter, Esc and cursor keys, shared by every text-entry mode."""
    if key in ENTER_KEYS:
        return Action.of(ActionKind.SELECT)
    if key == ESCAPE:
        return Action.of(ActionKind.BACK)
    if key in CURSOR_BINDINGS:
        return Action.edit(CURSOR_BINDINGS[key])
    return NO_ACTION


def _text_entry(key: Key, list_navigation: bool) -> Action:
    if list_navigation and key == curses.KEY_UP:
        return Action.of(ActionKind.NAVIGATE_UP)
    if list_navigation and key == curses.KEY_DOWN:
        return Action.of(ActionKind.NAVIGATE_DOWN)
    if key in BACKSPACE_KEYS:
        return Action.edit(TextDelta.BACKSPACE)
    if key == curses.KEY_DC:
        return Action.edit(TextDelta.DELETE)
    if is_text(key):
        return Action.insert(key)
    return _common(key)


def _navigate(key: Key) -> Action:
    if key in NAVIGATE_BINDINGS:
        return Action.of(NAVIGATE_BINDINGS[key])
    if key in ENTER_KEYS:
        return Action.of(ActionKind.SELECT)
    if key in BACKSPACE_KEYS or key == ESCAPE:
        return Action.of(ActionKind.BACK)
    if is_text(key):
        return Action.insert(key)
    return NO_ACTION


def _confirm_delete(key: Key) -> Action:
    if key in ("y", "Y") or key in ENTER_KEYS:
        return Action.of(ActionKind.SELECT)
    if key in ("n", "N", ESCAPE):
        return Action.of(ActionKind.BACK)
    return NO_ACTION


def map_key(key: Key, mode: Mode, searching: bool = False) -> Action:
    """
    Map one key press to an Action.

    Args:
        key: Value returned by get_wch()
        mode: Current editor mode
        searching: True while the place jump search is open in Navigate mode

    Returns:
        The Action to dispatch, NO_ACTION for unbound keys
    """
    if mode == Mode.NAVIGATE:
        if searching:
            return _text_entry(key, list_navigation=True)
        return _navigate(key)
    if mode in (Mode.CONNECT, Mode.OPEN_FILE):
        return _text_entry(key, list_navigation=True)
    if mode in (Mode.EDIT, Mode.SAVE_FILE):
        return _text_entry(key, list_navigation=False)
    if mode == Mode.CONFIRM_DELETE:
        return _confirm_delete(key)
    return NO_ACTION
