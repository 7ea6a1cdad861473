"""
Tests for selection movement and the back-navigation trail.
"""

import pytest

from breadboard.models import Breadboard
from breadboard.navigation import (
    AffordanceSelection,
    NavigationState,
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
    selection_is_valid,
)


@pytest.fixture
def board():
    """
    A(1): a1 -> B, a2
    B(2): (no affordances)
    C(3): c1
    """
    b = Breadboard.new("Nav")
    a = b.create_place("A")
    b.create_place("B")
    c = b.create_place("C")
    a.add_affordance(b.create_affordance("a1", connects_to=2))
    a.add_affordance(b.create_affordance("a2"))
    c.add_affordance(b.create_affordance("c1"))
    return b


@pytest.fixture
def nav():
    return NavigationState()


class TestTrail:
    def test_navigate_to_place_pushes_owning_place(self, board, nav):
        nav.selection = AffordanceSelection(1, 1)
        navigate_to_place(board, nav, 2)
        assert nav.selection == PlaceSelection(2)
        assert nav.trail == [1]

    def test_back_undoes_navigate(self, board, nav):
        nav.selection = AffordanceSelection(1, 1)
        navigate_to_place(board, nav, 2)
        assert navigate_back(board, nav) is True
        assert nav.selection == PlaceSelection(1)
        assert nav.trail == []

    def test_navigate_without_selection_does_not_push(self, board, nav):
        navigate_to_place(board, nav, 3)
        assert nav.selection == PlaceSelection(3)
        assert nav.trail == []

    def test_back_on_empty_trail_is_noop(self, board, nav):
        nav.selection = PlaceSelection(3)
        assert navigate_back(board, nav) is False
        assert nav.selection == PlaceSelection(3)

    def test_back_skips_removed_places(self, board, nav):
        nav.trail = [1, 2]
        nav.selection = PlaceSelection(3)
        board.remove_place(2)
        assert navigate_back(board, nav) is True
        assert nav.selection == PlaceSelection(1)
        assert nav.trail == []


class TestVerticalMovement:
    def test_up_and_down_from_nothing_select_first_place(self, board, nav):
        navigate_down(board, nav)
        assert nav.selection == PlaceSelection(1)
        nav.selection = None
        navigate_up(board, nav)
        assert nav.selection == PlaceSelection(1)

    def test_down_walks_the_outline(self, board, nav):
        select_first_place(board, nav)
        visited = [nav.selection]
        for _ in range(6):
            navigate_down(board, nav)
            visited.append(nav.selection)
        assert visited == [
            PlaceSelection(1),
            AffordanceSelection(1, 1),
            AffordanceSelection(1, 2),
            PlaceSelection(2),
            PlaceSelection(3),
            AffordanceSelection(3, 3),
            AffordanceSelection(3, 3),
        ]

    def test_up_from_first_affordance_selects_owner(self, board, nav):
        nav.selection = AffordanceSelection(1, 2)
        navigate_up(board, nav)
        assert nav.selection == AffordanceSelection(1, 1)
        navigate_up(board, nav)
        assert nav.selection == PlaceSelection(1)

    def test_up_between_places_and_clamps_at_top(self, board, nav):
        nav.selection = PlaceSelection(3)
        navigate_up(board, nav)
        assert nav.selection == PlaceSelection(2)
        navigate_up(board, nav)
        navigate_up(board, nav)
        assert nav.selection == PlaceSelection(1)

    def test_empty_board_keeps_no_selection(self, nav):
        empty = Breadboard.new("Empty")
        navigate_down(empty, nav)
        navigate_up(empty, nav)
        navigate_right(empty, nav)
        assert nav.selection is None


class TestHorizontalMovement:
    def test_right_and_left_do_not_wrap(self, board, nav):
        nav.selection = PlaceSelection(1)
        navigate_left(board, nav)
        assert nav.selection == PlaceSelection(1)
        navigate_right(board, nav)
        navigate_right(board, nav)
        navigate_right(board, nav)
        assert nav.selection == PlaceSelection(3)

    def test_right_from_affordance_moves_to_next_place(self, board, nav):
        nav.selection = AffordanceSelection(1, 2)
        navigate_right(board, nav)
        assert nav.selection == PlaceSelection(2)


class TestDeleteSelection:
    def test_delete_place_clears_selection_and_keeps_trail(self, board, nav):
        nav.trail = [1]
        nav.selection = PlaceSelection(2)
        assert delete_selection(board, nav) is True
        assert nav.selection is None
        assert nav.trail == [1]
        assert board.find_place(2) is None
        assert board.find_affordance(1, 1).connects_to == 2

    def test_delete_affordance_selects_owner(self, board, nav):
        nav.selection = AffordanceSelection(1, 2)
        delete_selection(board, nav)
        assert nav.selection == PlaceSelection(1)
        assert [a.name for a in board.find_place(1).affordances] == ["a1"]

    def test_delete_nothing(self, board, nav):
        assert delete_selection(board, nav) is False
        assert len(board.places) == 3


def test_selection_helpers(board, nav):
    nav.selection = AffordanceSelection(1, 1)
    assert selected_place(board, nav).name == "A"
    assert selected_affordance(board, nav).name == "a1"
    assert selection_is_valid(board, nav)

    nav.selection = AffordanceSelection(1, 99)
    assert selected_affordance(board, nav) is None
    assert not selection_is_valid(board, nav)

    nav.selection = PlaceSelection(2)
    assert selected_affordance(board, nav) is None
