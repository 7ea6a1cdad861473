"""
Action Dispatcher - the editor's mode state machine.

Every key press arrives here as an abstract Action. The dispatcher interprets
it according to the current Mode (and the place-jump sub-mode inside
Navigate) and applies it to the AppState:

    NAVIGATE --enter_edit-->    EDIT            (needs a selection)
    NAVIGATE --enter_connect--> CONNECT         (needs a selected affordance)
    NAVIGATE --open-->          OPEN_FILE
    NAVIGATE --save_as-->       SAVE_FILE
    NAVIGATE --delete place-->  CONFIRM_DELETE  (when confirm_delete is on)
    any of the above --select/back--> NAVIGATE  (commit / cancel)

Actions that make no sense in the current context are ignored. An action is
fully applied before the next one is read.

File problems never escape: they are logged, shown on the status line, and
the board in memory is left as it was.
"""

import logging
from typing import Any, Callable, Dict, Optional

from breadboard.actions import CURSOR_DELTAS, Action, ActionKind, Mode, TextDelta
from breadboard.config import DEFAULT_CONFIG
from breadboard.file_manager import BreadboardFileError, BreadboardFileManager
from breadboard.models import Breadboard
from breadboard.navigation import (
    AffordanceSelection,
    PlaceSelection,
    delete_selection,
    navigate_back,
    navigate_down,
    navigate_left,
    navigate_right,
    navigate_to_place,
    navigate_up,
    select_first_place,
    selected_affordance,
    selected_place,
    selected_place_id,
)
from breadboard.picker import Picker
from breadboard.state import CONNECTED_FILTER, AppState

logger = logging.getLogger(__name__)


def apply_text_delta(buffer: str, action: Action) -> str:
    """
    Apply an edit action to a cursor-less text buffer.

    DELETE removes the last character exactly like BACKSPACE, and cursor
    movement (left/right/home/end) leaves the buffer unchanged.
    """
    if action.delta in (TextDelta.BACKSPACE, TextDelta.DELETE):
        return buffer[:-1]
    if action.delta in CURSOR_DELTAS:
        return buffer
    return buffer + action.text


def _edit_picker_query(picker: Picker, action: Action) -> None:
    new_query = apply_text_delta(picker.query, action)
    if new_query != picker.query:
        picker.set_query(new_query)


class ActionDispatcher:
    """Applies Actions to an AppState."""

    def __init__(self, state: AppState, file_manager: BreadboardFileManager,
                 config: Optional[Dict[str, Any]] = None):
        self.state = state
        self.file_manager = file_manager
        self.config = dict(DEFAULT_CONFIG)
        if config:
            self.config.update(config)

        self._handlers: Dict[Mode, Callable[[Action], None]] = {
            Mode.NAVIGATE: self._navigate_mode,
            Mode.EDIT: self._edit_mode,
            Mode.CONNECT: self._connect_mode,
            Mode.OPEN_FILE: self._open_file_mode,
            Mode.SAVE_FILE: self._save_file_mode,
            Mode.CONFIRM_DELETE: self._confirm_delete_mode,
        }

    @property
    def board(self) -> Breadboard:
        return self.state.board

    def dispatch(self, action: Action) -> None:
        if action.kind == ActionKind.NONE:
            return
        self._handlers[self.state.mode](action)

    def _set_status(self, message: str) -> None:
        self.state.status_message = message

    def _fail(self, message: str, error: Exception) -> None:
        logger.error(f"{message}: {error}")
        self._set_status(f"{message}: {error}")

    # --- NAVIGATE ---

    def _navigate_mode(self, action: Action) -> None:
        if self.state.is_searching_places:
            self._place_jump(action)
            return

        kind = action.kind
        nav = self.state.nav
        if kind == ActionKind.QUIT:
            self.state.should_quit = True
        elif kind == ActionKind.NAVIGATE_UP:
            navigate_up(self.board, nav)
        elif kind == ActionKind.NAVIGATE_DOWN:
            navigate_down(self.board, nav)
        elif kind == ActionKind.NAVIGATE_RIGHT:
            navigate_right(self.board, nav)
        elif kind == ActionKind.NAVIGATE_LEFT:
            navigate_left(self.board, nav)
        elif kind == ActionKind.SELECT:
            self._follow_connection()
        elif kind == ActionKind.BACK:
            navigate_back(self.board, nav)
        elif kind == ActionKind.NEW_PLACE:
            self._new_place()
        elif kind == ActionKind.NEW_AFFORDANCE:
            self._new_affordance()
        elif kind == ActionKind.NEW_CONNECTION:
            self._new_connection()
        elif kind == ActionKind.REMOVE_CONNECTION:
            self._remove_connection()
        elif kind == ActionKind.TOGGLE_COLLAPSED:
            self.state.collapsed = not self.state.collapsed
        elif kind == ActionKind.TOGGLE_FILTER:
            self.state.filter = None if self.state.filter == CONNECTED_FILTER else CONNECTED_FILTER
        elif kind == ActionKind.SAVE:
            self._save(self.state.current_file or self.config["default_filename"])
        elif kind == ActionKind.SAVE_AS:
            self._enter_save_as()
        elif kind == ActionKind.OPEN:
            self._enter_open()
        elif kind == ActionKind.ENTER_EDIT:
            self._enter_edit()
        elif kind == ActionKind.ENTER_CONNECT:
            self._enter_connect()
        elif kind == ActionKind.DELETE:
            self._delete()
        elif kind == ActionKind.EDIT:
            self._start_place_jump(action)

    def _follow_connection(self) -> None:
        affordance = selected_affordance(self.board, self.state.nav)
        if affordance is None or affordance.connects_to is None:
            return
        if self.board.find_place(affordance.connects_to) is None:
            self._set_status(f"'{affordance.name}' points to an unresolved place")
            return
        navigate_to_place(self.board, self.state.nav, affordance.connects_to)

    def _new_place(self) -> None:
        place = self.board.create_place(f"Place {len(self.board.places) + 1}")
        self.state.nav.selection = PlaceSelection(place.id)
        logger.debug(f"Created place {place.id}")

    def _new_affordance(self) -> None:
        place = selected_place(self.board, self.state.nav)
        if place is None:
            return
        affordance = self.board.create_affordance(f"Action {len(place.affordances) + 1}")
        place.add_affordance(affordance)
        logger.debug(f"Created affordance {affordance.id} in place {place.id}")

    def _new_connection(self) -> None:
        affordance = selected_affordance(self.board, self.state.nav)
        if affordance is None:
            return
        owner_id = self.state.nav.selection.place_id
        destination = next((p for p in self.board.places if p.id != owner_id), None)
        if destination is not None:
            affordance.connects_to = destination.id

    def _remove_connection(self) -> None:
        affordance = selected_affordance(self.board, self.state.nav)
        if affordance is not None:
            affordance.connects_to = None

    def _delete(self) -> None:
        selection = self.state.nav.selection
        if selection is None:
            return
        if isinstance(selection, PlaceSelection) and self.config["confirm_delete"]:
            if self.board.find_place(selection.place_id) is not None:
                self.state.mode = Mode.CONFIRM_DELETE
            return
        delete_selection(self.board, self.state.nav)

    # --- Place jump (sub-mode of NAVIGATE) ---

    def _start_place_jump(self, action: Action) -> None:
        if action.delta != TextDelta.INSERT or not action.text or not action.text.isprintable():
            return
        picker = self.state.place_picker
        picker.start()
        picker.set_query(action.text)

    def _place_jump(self, action: Action) -> None:
        picker = self.state.place_picker
        kind = action.kind
        if kind == ActionKind.NAVIGATE_UP:
            picker.move_up()
        elif kind == ActionKind.NAVIGATE_DOWN:
            picker.move_down()
        elif kind == ActionKind.EDIT:
            _edit_picker_query(picker, action)
        elif kind == ActionKind.BACK:
            picker.cancel()
        elif kind == ActionKind.SELECT:
            candidate = picker.commit()
            picker.cancel()
            if candidate is None or self.board.find_place(candidate.key) is None:
                return
            if candidate.key == selected_place_id(self.state.nav):
                # Already there: no trail entry
                self.state.nav.selection = PlaceSelection(candidate.key)
            else:
                navigate_to_place(self.board, self.state.nav, candidate.key)

    # --- EDIT ---

    def _enter_edit(self) -> None:
        selection = self.state.nav.selection
        if isinstance(selection, AffordanceSelection):
            entity = selected_affordance(self.board, self.state.nav)
        else:
            entity = selected_place(self.board, self.state.nav)
        if entity is None:
            return
        self.state.edit_buffer = entity.name
        self.state.mode = Mode.EDIT

    def _edit_mode(self, action: Action) -> None:
        kind = action.kind
        if kind == ActionKind.EDIT:
            self.state.edit_buffer = apply_text_delta(self.state.edit_buffer, action)
        elif kind == ActionKind.SELECT:
            selection = self.state.nav.selection
            if isinstance(selection, AffordanceSelection):
                entity = selected_affordance(self.board, self.state.nav)
            else:
                entity = selected_place(self.board, self.state.nav)
            if entity is not None:
                entity.name = self.state.edit_buffer
            self._leave_edit()
        elif kind == ActionKind.BACK:
            self._leave_edit()

    def _leave_edit(self) -> None:
        self.state.mode = Mode.NAVIGATE
        self.state.edit_buffer = ""

    # --- CONNECT ---

    def _enter_connect(self) -> None:
        if selected_affordance(self.board, self.state.nav) is None:
            return
        self.state.mode = Mode.CONNECT
        self.state.connection_picker.start()

    def _connect_mode(self, action: Action) -> None:
        picker = self.state.connection_picker
        kind = action.kind
        if kind == ActionKind.NAVIGATE_UP:
            picker.move_up()
        elif kind == ActionKind.NAVIGATE_DOWN:
            picker.move_down()
        elif kind == ActionKind.EDIT:
            _edit_picker_query(picker, action)
        elif kind == ActionKind.SELECT:
            candidate = picker.commit()
            affordance = selected_affordance(self.board, self.state.nav)
            if candidate is not None and affordance is not None:
                if candidate.is_sentinel:
                    affordance.connects_to = None
                else:
                    affordance.connects_to = candidate.key
            self._leave_picker_mode(picker)
        elif kind == ActionKind.BACK:
            self._leave_picker_mode(picker)

    def _leave_picker_mode(self, picker: Picker) -> None:
        self.state.mode = Mode.NAVIGATE
        picker.cancel()

    # --- OPEN_FILE ---

    def _enter_open(self) -> None:
        try:
            self.state.file_picker.start()
        except BreadboardFileError as e:
            self.state.file_picker.cancel()
            self._fail("Cannot list files", e)
            return
        self.state.mode = Mode.OPEN_FILE

    def _open_file_mode(self, action: Action) -> None:
        picker = self.state.file_picker
        kind = action.kind
        if kind == ActionKind.NAVIGATE_UP:
            picker.move_up()
        elif kind == ActionKind.NAVIGATE_DOWN:
            picker.move_down()
        elif kind == ActionKind.EDIT:
            try:
                _edit_picker_query(picker, action)
            except BreadboardFileError as e:
                self._fail("Cannot list files", e)
                self._leave_picker_mode(picker)
        elif kind == ActionKind.SELECT:
            candidate = picker.commit()
            self._leave_picker_mode(picker)
            if candidate is not None:
                self.open_file(candidate.key)
        elif kind == ActionKind.BACK:
            self._leave_picker_mode(picker)

    def open_file(self, filename: str) -> bool:
        """Replace the board with a document from disk. On failure the current board is kept."""
        try:
            board = self.file_manager.load_from_file(filename)
        except BreadboardFileError as e:
            self._fail(f"Failed to load {filename}", e)
            return False

        self.state.board = board
        self.state.nav.trail.clear()
        select_first_place(board, self.state.nav)
        self.state.current_file = filename
        self._set_status(f"Opened {filename}")
        return True

    # --- SAVE / SAVE_FILE ---

    def _save(self, filename: str) -> bool:
        try:
            self.file_manager.save_to_file(self.board, filename)
        except BreadboardFileError as e:
            self._fail("Failed to save", e)
            return False
        self.state.current_file = filename
        self._set_status(f"Saved to {filename}")
        return True

    def _enter_save_as(self) -> None:
        self.state.edit_buffer = self.state.current_file or self.config["default_filename"]
        self.state.mode = Mode.SAVE_FILE

    def _save_file_mode(self, action: Action) -> None:
        kind = action.kind
        if kind == ActionKind.EDIT:
            self.state.edit_buffer = apply_text_delta(self.state.edit_buffer, action)
        elif kind == ActionKind.SELECT:
            filename = self.state.edit_buffer.strip()
            if not filename:
                self._set_status("Enter a file name")
                return
            self._save(self.file_manager.with_extension(filename))
            self._leave_edit()
        elif kind == ActionKind.BACK:
            self._leave_edit()

    # --- CONFIRM_DELETE ---

    def _confirm_delete_mode(self, action: Action) -> None:
        if action.kind == ActionKind.SELECT:
            place = selected_place(self.board, self.state.nav)
            delete_selection(self.board, self.state.nav)
            if place is not None:
                self._set_status(f"Deleted place '{place.name}'")
            self.state.mode = Mode.NAVIGATE
        elif action.kind == ActionKind.BACK:
            self.state.mode = Mode.NAVIGATE
