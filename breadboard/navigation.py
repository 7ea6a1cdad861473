"""
Selection and back-navigation trail.

The selection is either a place, an affordance inside a place, or absent.
The trail is a stack of place ids visited through connections; back pops it.

All functions take the board and the NavigationState explicitly and mutate
only the NavigationState (except delete_selection, which also edits the board).

Vertical movement walks the outline top to bottom:

    Place A          up from A.1 -> A        down from A   -> A.1
      A.1            up from A.2 -> A.1      down from A.2 -> B
      A.2            up from B   -> A        down from B   -> B.1 (or C if B is empty)
    Place B

Horizontal movement (Tab / Shift-Tab) jumps between places. Nothing wraps.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union

from breadboard.models import Affordance, Breadboard, EntityId, Place


@dataclass(frozen=True)
class PlaceSelection:
    place_id: EntityId


@dataclass(frozen=True)
class AffordanceSelection:
    place_id: EntityId
    affordance_id: EntityId


Selection = Union[PlaceSelection, AffordanceSelection]


@dataclass
class NavigationState:
    selection: Optional[Selection] = None
    trail: List[EntityId] = field(default_factory=list)


# --- Resolution helpers ---

def selected_place_id(nav: NavigationState) -> Optional[EntityId]:
    """Id of the selected place, or of the place owning the selected affordance."""
    if nav.selection is None:
        return None
    return nav.selection.place_id


def selected_place(board: Breadboard, nav: NavigationState) -> Optional[Place]:
    return board.find_place(selected_place_id(nav))


def selected_affordance(board: Breadboard, nav: NavigationState) -> Optional[Affordance]:
    if not isinstance(nav.selection, AffordanceSelection):
        return None
    return board.find_affordance(nav.selection.place_id, nav.selection.affordance_id)


def selection_is_valid(board: Breadboard, nav: NavigationState) -> bool:
    """True when the selection is absent or points at entities that exist."""
    if nav.selection is None:
        return True
    if isinstance(nav.selection, AffordanceSelection):
        return selected_affordance(board, nav) is not None
    return selected_place(board, nav) is not None


def select_first_place(board: Breadboard, nav: NavigationState) -> None:
    nav.selection = PlaceSelection(board.places[0].id) if board.places else None


# --- Trail ---

def navigate_to_place(board: Breadboard, nav: NavigationState, target: EntityId) -> None:
    """Push the current place (if any) onto the trail and select the target place."""
    current = selected_place(board, nav)
    if current is not None:
        nav.trail.append(current.id)
    nav.selection = PlaceSelection(target)


def navigate_back(board: Breadboard, nav: NavigationState) -> bool:
    """
    Pop the trail and select the popped place.

    Entries for places that have since been removed are discarded. Returns
    False, leaving the selection unchanged, when nothing usable was on the trail.
    """
    while nav.trail:
        previous_id = nav.trail.pop()
        if board.find_place(previous_id) is not None:
            nav.selection = PlaceSelection(previous_id)
            return True
    return False


# --- Movement ---

def _place_at(board: Breadboard, index: int) -> Optional[Place]:
    if 0 <= index < len(board.places):
        return board.places[index]
    return None


def navigate_up(board: Breadboard, nav: NavigationState) -> None:
    selection = nav.selection
    if selection is None:
        select_first_place(board, nav)
        return

    if isinstance(selection, AffordanceSelection):
        place = board.find_place(selection.place_id)
        if place is None:
            return
        index = place.affordance_index(selection.affordance_id)
        if index is None:
            return
        if index > 0:
            nav.selection = AffordanceSelection(place.id, place.affordances[index - 1].id)
        else:
            nav.selection = PlaceSelection(place.id)
        return

    index = board.place_index(selection.place_id)
    if index is None:
        return
    previous = _place_at(board, index - 1)
    if previous is not None:
        nav.selection = PlaceSelection(previous.id)


def navigate_down(board: Breadboard, nav: NavigationState) -> None:
    selection = nav.selection
    if selection is None:
        select_first_place(board, nav)
        return

    place_index = board.place_index(selection.place_id)
    if place_index is None:
        return
    place = board.places[place_index]

    if isinstance(selection, AffordanceSelection):
        index = place.affordance_index(selection.affordance_id)
        if index is None:
            return
        if index < len(place.affordances) - 1:
            nav.selection = AffordanceSelection(place.id, place.affordances[index + 1].id)
            return
    elif place.affordances:
        nav.selection = AffordanceSelection(place.id, place.affordances[0].id)
        return

    following = _place_at(board, place_index + 1)
    if following is not None:
        nav.selection = PlaceSelection(following.id)


def _step_place(board: Breadboard, nav: NavigationState, step: int) -> None:
    if nav.selection is None:
        select_first_place(board, nav)
        return
    index = board.place_index(nav.selection.place_id)
    if index is None:
        return
    target = _place_at(board, index + step)
    if target is not None:
        nav.selection = PlaceSelection(target.id)


def navigate_right(board: Breadboard, nav: NavigationState) -> None:
    _step_place(board, nav, 1)


def navigate_left(board: Breadboard, nav: NavigationState) -> None:
    _step_place(board, nav, -1)


# --- Deletion ---

def delete_selection(board: Breadboard, nav: NavigationState) -> bool:
    """
    Delete the selected entity.

    - Place: removed from the board, selection cleared.
    - Affordance: removed from its place, the owning place is selected.

    The trail and connections pointing at the deleted place are left alone.
    Returns False when nothing was selected.
    """
    selection = nav.selection
    if selection is None:
        return False
    if isinstance(selection, AffordanceSelection):
        board.remove_affordance(selection.place_id, selection.affordance_id)
        nav.selection = PlaceSelection(selection.place_id)
    else:
        board.remove_place(selection.place_id)
        nav.selection = None
    return True
