"""
Read-only view model for rendering a breadboard.

This module uses NetworkX to index the connection structure, but the output
is plain data (ViewRow lists and strings) that any renderer can draw. Nothing
here mutates the board or the application state.

Two layouts are produced:
- expanded: every place followed by its affordances, with incoming/outgoing links
- collapsed: one line per place with affordance count and link summary,
  optionally restricted to the places connected to the selection

Connections that point at a place which no longer exists are shown with
UNRESOLVED_MARKER instead of a destination name.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Set, Tuple

import networkx as nx

from breadboard.actions import Mode
from breadboard.models import Affordance, Breadboard, EntityId
from breadboard.navigation import AffordanceSelection, PlaceSelection, selected_place_id
from breadboard.picker import Picker
from breadboard.state import CONNECTED_FILTER, AppState

UNRESOLVED_MARKER = "[Unknown]"

ROW_PLACE = "place"
ROW_AFFORDANCE = "affordance"
ROW_SPACER = "spacer"
ROW_CANDIDATE = "candidate"
ROW_SENTINEL = "sentinel"
ROW_EMPTY = "empty"


@dataclass(frozen=True)
class ViewRow:
    text: str
    kind: str
    selected: bool = False
    place_id: Optional[EntityId] = None
    affordance_id: Optional[EntityId] = None


class BreadboardGraph:
    """
    NetworkX index over a board's connections.

    Nodes are place ids (with a 'name' attribute); each resolved connection is
    one edge keyed by the affordance id, so two affordances linking the same
    pair of places stay distinct. Dangling connections are kept aside in
    `unresolved` as (place_id, affordance_id, missing_place_id).
    """

    def __init__(self, board: Breadboard):
        self.board = board
        self.G = nx.MultiDiGraph()
        self.unresolved: List[Tuple[EntityId, EntityId, EntityId]] = []

        for place in board.places:
            self.G.add_node(place.id, name=place.name)

        for place in board.places:
            for affordance in place.affordances:
                dest = affordance.connects_to
                if dest is None:
                    continue
                if dest in self.G.nodes:
                    self.G.add_edge(place.id, dest, key=affordance.id, name=affordance.name)
                else:
                    self.unresolved.append((place.id, affordance.id, dest))

    def _name(self, place_id: EntityId) -> str:
        return self.G.nodes[place_id].get("name", "")

    def incoming_source_names(self, place_id: EntityId) -> List[str]:
        """Source place name per incoming connection, in place-then-affordance order."""
        if place_id not in self.G:
            return []
        return [source.name for source, _ in self.board.get_incoming_connections(place_id)]

    def outgoing_destination_names(self, place_id: EntityId) -> List[str]:
        """Destination name per resolved outgoing connection, in affordance order."""
        place = self.board.find_place(place_id)
        if place is None:
            return []
        # out_edges groups by destination; walk the affordances to keep their order
        return [
            self._name(a.connects_to)
            for a in place.affordances
            if self.G.has_edge(place_id, a.connects_to, key=a.id)
        ]

    def connected_place_ids(self, place_id: EntityId) -> Set[EntityId]:
        """The place itself plus every place it links to or is linked from."""
        if place_id not in self.G:
            return set()
        return {place_id} | set(self.G.successors(place_id)) | set(self.G.predecessors(place_id))


def affordance_text(board: Breadboard, affordance: Affordance) -> str:
    if affordance.connects_to is None:
        return affordance.name
    dest = board.find_place(affordance.connects_to)
    dest_name = dest.name if dest is not None else UNRESOLVED_MARKER
    return f"{affordance.name} → {dest_name}"


def _place_title(name: str, group: Optional[str]) -> str:
    return f"{name} [{group}]" if group else name


def build_expanded_rows(state: AppState) -> List[ViewRow]:
    board = state.board
    graph = BreadboardGraph(board)
    selection = state.nav.selection
    rows: List[ViewRow] = []

    for index, place in enumerate(board.places):
        header = f"┌─ {_place_title(place.name, place.group)}"
        incoming = graph.incoming_source_names(place.id)
        if incoming:
            header += f" (← {', '.join(incoming)})"
        rows.append(ViewRow(
            text=header,
            kind=ROW_PLACE,
            selected=selection == PlaceSelection(place.id),
            place_id=place.id,
        ))

        for affordance in place.affordances:
            rows.append(ViewRow(
                text=f"├─ {affordance_text(board, affordance)}",
                kind=ROW_AFFORDANCE,
                selected=selection == AffordanceSelection(place.id, affordance.id),
                place_id=place.id,
                affordance_id=affordance.id,
            ))

        if index < len(board.places) - 1:
            rows.append(ViewRow(text="", kind=ROW_SPACER))

    return rows


def visible_place_ids(state: AppState, graph: Optional[BreadboardGraph] = None) -> List[EntityId]:
    """Places shown in the collapsed view, in board order."""
    board = state.board
    all_ids = [p.id for p in board.places]
    if state.filter != CONNECTED_FILTER:
        return all_ids

    focus = selected_place_id(state.nav)
    if focus is None or board.find_place(focus) is None:
        return all_ids

    graph = graph or BreadboardGraph(board)
    connected = graph.connected_place_ids(focus)
    return [pid for pid in all_ids if pid in connected]


def build_collapsed_rows(state: AppState) -> List[ViewRow]:
    board = state.board
    graph = BreadboardGraph(board)
    selection = state.nav.selection
    rows: List[ViewRow] = []

    for place_id in visible_place_ids(state, graph):
        place = board.find_place(place_id)
        info = f"{_place_title(place.name, place.group)} ({len(place.affordances)})"
        incoming = graph.incoming_source_names(place_id)
        if incoming:
            info += f" ← {', '.join(incoming)}"
        outgoing = graph.outgoing_destination_names(place_id)
        if outgoing:
            info += f" → {', '.join(outgoing)}"
        rows.append(ViewRow(
            text=info,
            kind=ROW_PLACE,
            selected=selection == PlaceSelection(place_id),
            place_id=place_id,
        ))
    return rows


def build_picker_rows(picker: Picker, empty_text: str) -> List[ViewRow]:
    if not picker.results:
        return [ViewRow(text=empty_text, kind=ROW_EMPTY)]
    return [
        ViewRow(
            text=candidate.label,
            kind=ROW_SENTINEL if candidate.is_sentinel else ROW_CANDIDATE,
            selected=index == picker.selected_index,
        )
        for index, candidate in enumerate(picker.results)
    ]


def selected_row_index(rows: List[ViewRow]) -> Optional[int]:
    for index, row in enumerate(rows):
        if row.selected:
            return index
    return None


# --- Panels ---

EMPTY_HELP = [
    "No places yet. Press Ctrl+N to create a place.",
    "",
    "Controls:",
    "  Ctrl+N - New place",
    "  Ctrl+O - Open file",
    "  Ctrl+Q - Quit",
]

PICKER_TITLES: Dict[Mode, Tuple[str, str]] = {
    Mode.CONNECT: ("Select place to connect to", "No places found"),
    Mode.OPEN_FILE: ("Select file to open", "No breadboard files found in current directory"),
}


def main_panel(state: AppState) -> Tuple[str, List[ViewRow]]:
    """Title and rows for the main area, depending on mode and sub-mode."""
    if state.mode in PICKER_TITLES:
        title, empty_text = PICKER_TITLES[state.mode]
        return title, build_picker_rows(state.active_picker, empty_text)

    if state.is_searching_places:
        return (f"Jump to place: {state.place_picker.query}",
                build_picker_rows(state.place_picker, "No places found"))

    if not state.board.places:
        return "Breadboard", [ViewRow(text=line, kind=ROW_EMPTY) for line in EMPTY_HELP]

    if state.collapsed:
        title = "Breadboard (Filtered)" if state.filter else "Breadboard (Collapsed)"
        return title, build_collapsed_rows(state)

    return "Breadboard", build_expanded_rows(state)


def status_text(state: AppState) -> str:
    if state.is_searching_places:
        return (f"Jump to: {state.place_picker.query}"
                " (type to filter, ↑/↓ to select, Enter to jump, Esc to cancel)")
    if state.mode == Mode.EDIT:
        return f"Editing: {state.edit_buffer} (Enter to save, Esc to cancel)"
    if state.mode == Mode.CONNECT:
        return (f"Connect to: {state.connection_picker.query}"
                " (↑/↓ to select, Enter to connect, Esc to cancel)")
    if state.mode == Mode.OPEN_FILE:
        return (f"Open file: {state.file_picker.query}"
                " (↑/↓ to select, Enter to open, Esc to cancel)")
    if state.mode == Mode.SAVE_FILE:
        return f"Save as: {state.edit_buffer} (Enter to save, Esc to cancel)"
    if state.mode == Mode.CONFIRM_DELETE:
        place_id = selected_place_id(state.nav)
        place = state.board.find_place(place_id)
        name = place.name if place is not None else "?"
        return f"Delete place '{name}'? (y/Enter to delete, n/Esc to cancel)"

    file_part = f"File: {state.current_file} " if state.current_file else ""
    return f"Board: {state.board.name} Places: {len(state.board.places)} {file_part}(type to search)"


MODE_LABELS = {
    Mode.NAVIGATE: "NAVIGATE",
    Mode.EDIT: "EDIT",
    Mode.CONNECT: "CONNECT",
    Mode.OPEN_FILE: "OPEN FILE",
    Mode.SAVE_FILE: "SAVE FILE",
    Mode.CONFIRM_DELETE: "CONFIRM DELETE",
}


def mode_text(state: AppState) -> str:
    layout = "Collapsed" if state.collapsed else "Expanded"
    text = f"Mode: {MODE_LABELS[state.mode]} | {layout}"
    if state.filter:
        text += f" | Filter: {state.filter}"
    return text
