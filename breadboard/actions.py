"""
Abstract editor actions and modes.

Key handling (breadboard.tui.keymap) produces Action values; the
ActionDispatcher interprets them according to the current Mode.
"""

from dataclasses import dataclass
from enum import Enum


class Mode(Enum):
    NAVIGATE = "navigate"
    EDIT = "edit"
    CONNECT = "connect"
    OPEN_FILE = "open_file"
    SAVE_FILE = "save_file"
    CONFIRM_DELETE = "confirm_delete"


class ActionKind(Enum):
    NONE = "none"
    QUIT = "quit"
    NAVIGATE_UP = "navigate_up"
    NAVIGATE_DOWN = "navigate_down"
    NAVIGATE_RIGHT = "navigate_right"
    NAVIGATE_LEFT = "navigate_left"
    SELECT = "select"
    BACK = "back"
    NEW_PLACE = "new_place"
    NEW_AFFORDANCE = "new_affordance"
    NEW_CONNECTION = "new_connection"
    REMOVE_CONNECTION = "remove_connection"
    TOGGLE_COLLAPSED = "toggle_collapsed"
    TOGGLE_FILTER = "toggle_filter"
    SAVE = "save"
    SAVE_AS = "save_as"
    OPEN = "open"
    ENTER_EDIT = "enter_edit"
    ENTER_CONNECT = "enter_connect"
    DELETE = "delete"
    EDIT = "edit"


class TextDelta(Enum):
    INSERT = "insert"
    BACKSPACE = "backspace"
    DELETE = "delete"
    CURSOR_LEFT = "left"
    CURSOR_RIGHT = "right"
    HOME = "home"
    END = "end"


CURSOR_DELTAS = frozenset([TextDelta.CURSOR_LEFT, TextDelta.CURSOR_RIGHT, TextDelta.HOME, TextDelta.END])


@dataclass(frozen=True)
class Action:
    kind: ActionKind
    delta: TextDelta = TextDelta.INSERT
    text: str = ""

    @classmethod
    def of(cls, kind: ActionKind) -> "Action":
        return cls(kind)

    @classmethod
    def insert(cls, text: str) -> "Action":
        return cls(ActionKind.EDIT, TextDelta.INSERT, text)

    @classmethod
    def edit(cls, delta: TextDelta) -> "Action":
        return cls(ActionKind.EDIT, delta)


NO_ACTION = Action(ActionKind.NONE)
