"""
Tests for the generic search-and-select picker.
"""

import pytest

from breadboard.models import Breadboard
from breadboard.picker import (
    REMOVE_CONNECTION,
    Picker,
    PickerCandidate,
    connection_picker,
    file_picker,
    place_picker,
)


@pytest.fixture
def board():
    b = Breadboard.new("Picker")
    for name in ("Alpha", "Beta", "Gamma"):
        b.create_place(name)
    return b


def labels(picker):
    return [c.label for c in picker.results]


class TestConnectionPicker:
    def test_start_lists_sentinel_then_places(self, board):
        picker = connection_picker(lambda: board)
        picker.start()
        assert picker.results[0] is REMOVE_CONNECTION
        assert labels(picker) == ["Remove connection", "Alpha", "Beta", "Gamma"]
        assert picker.selected_index == 0
        assert picker.active

    def test_sentinel_survives_filtering(self, board):
        picker = connection_picker(lambda: board)
        picker.start()
        picker.append("b")
        assert labels(picker) == ["Remove connection", "Beta"]
        assert picker.selected_index == 0

    def test_no_match_still_has_sentinel(self, board):
        picker = connection_picker(lambda: board)
        picker.start()
        picker.set_query("zzz")
        assert picker.results == [REMOVE_CONNECTION]

    def test_domain_follows_board_changes(self, board):
        picker = connection_picker(lambda: board)
        board.create_place("Delta")
        picker.start()
        assert labels(picker)[-1] == "Delta"


class TestQueryAndSelection:
    def test_match_is_case_insensitive_substring(self, board):
        picker = place_picker(lambda: board)
        picker.start()
        picker.set_query("AM")
        assert labels(picker) == ["Gamma"]

    def test_query_change_resets_selection(self, board):
        picker = place_picker(lambda: board)
        picker.start()
        picker.move_down()
        picker.move_down()
        assert picker.selected_index == 2
        picker.append("a")
        assert picker.selected_index == 0

    def test_moves_clamp(self, board):
        picker = place_picker(lambda: board)
        picker.start()
        picker.move_up()
        assert picker.selected_index == 0
        for _ in range(10):
            picker.move_down()
        assert picker.selected_index == 2

    def test_empty_results(self, board):
        picker = place_picker(lambda: board)
        picker.start()
        picker.set_query("nothing")
        assert picker.results == []
        assert picker.selected_index is None
        picker.move_down()
        assert picker.selected_index is None
        assert picker.commit() is None

    def test_backspace(self, board):
        picker = place_picker(lambda: board)
        picker.start()
        picker.set_query("gx")
        assert picker.results == []
        picker.backspace()
        assert picker.query == "g"
        assert labels(picker) == ["Gamma"]

    def test_commit_returns_candidate(self, board):
        picker = place_picker(lambda: board)
        picker.start()
        picker.move_down()
        assert picker.commit() == PickerCandidate(key=2, label="Beta")

    def test_cancel_discards_state(self, board):
        picker = place_picker(lambda: board)
        picker.start()
        picker.append("a")
        picker.cancel()
        assert picker.query == ""
        assert picker.results == []
        assert picker.selected_index is None
        assert not picker.active
        assert len(board.places) == 3


def test_file_picker_uses_listing():
    """File candidates use the file name as both key and label."""
    picker = file_picker(lambda: ["a.yaml", "flow.yaml"])
    picker.start()
    assert [c.key for c in picker.results] == ["a.yaml", "flow.yaml"]
    picker.set_query("FLOW")
    assert picker.commit().key == "flow.yaml"


def test_custom_sentinel():
    sentinel = PickerCandidate(key="none", label="(none)", is_sentinel=True)
    picker = Picker(lambda: [PickerCandidate(key=1, label="one")], sentinel=sentinel)
    picker.start()
    picker.set_query("one")
    assert picker.results == [sentinel, PickerCandidate(key=1, label="one")]
