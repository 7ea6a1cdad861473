"""
Tests for breadboard document storage.
"""

import pytest
import yaml

from breadboard.file_manager import (
    BreadboardFileError,
    BreadboardFileManager,
    BreadboardFormatError,
    breadboard_from_dict,
    breadboard_to_dict,
)
from breadboard.models import Breadboard


@pytest.fixture
def manager(tmp_path):
    return BreadboardFileManager(tmp_path)


@pytest.fixture
def board():
    b = Breadboard.new("Checkout")
    cart = b.create_place("Cart", group="web")
    pay = b.create_place("Pay")
    cart.add_affordance(b.create_affordance("Checkout", connects_to=pay.id))
    cart.add_affordance(b.create_affordance("Keep shopping"))
    pay.add_affordance(b.create_affordance("Back", connects_to=99))
    return b


class TestRoundTrip:
    def test_save_then_load(self, manager, board, tmp_path):
        path = manager.save_to_file(board, "checkout.yaml")
        assert path == tmp_path / "checkout.yaml"

        loaded = manager.load_from_file("checkout.yaml")
        assert loaded.name == board.name
        assert loaded.created == board.created
        assert loaded.places == board.places

    def test_dangling_connection_survives(self, manager, board):
        manager.save_to_file(board, "checkout.yaml")
        loaded = manager.load_from_file("checkout.yaml")
        assert loaded.find_affordance(2, 3).connects_to == 99

    def test_counters_recomputed_on_load(self, manager, board, tmp_path):
        data = breadboard_to_dict(board)
        data["next_place_id"] = 500
        del data["next_affordance_id"]
        (tmp_path / "edited.yaml").write_text(yaml.safe_dump(data), encoding="utf-8")

        loaded = manager.load_from_file("edited.yaml")
        assert loaded.next_place_id == 3
        assert loaded.next_affordance_id == 4


class TestDocumentFormat:
    def test_optional_fields_are_omitted(self, board):
        data = breadboard_to_dict(board)
        cart, pay = data["places"]
        assert cart["group"] == "web"
        assert "group" not in pay
        assert "connects_to" not in cart["affordances"][1]
        assert list(data) == ["name", "created", "next_place_id", "next_affordance_id", "places"]

    def test_minimal_document(self):
        loaded = breadboard_from_dict({"name": "Bare", "places": [{"id": 4, "name": "Only"}]})
        assert loaded.places[0].affordances == []
        assert loaded.next_place_id == 5
        assert loaded.next_affordance_id == 1

    def test_scalar_names_become_text(self):
        loaded = breadboard_from_dict({"name": 404, "places": [{"id": 1, "name": True}]})
        assert loaded.name == "404"
        assert loaded.places[0].name == "True"

    def test_unquoted_timestamp(self, tmp_path, manager):
        (tmp_path / "t.yaml").write_text("name: T\ncreated: 2025-01-15 10:00:00\nplaces: []\n", encoding="utf-8")
        loaded = manager.load_from_file("t.yaml")
        assert loaded.created.startswith("2025-01-15T10:00:00")

    @pytest.mark.parametrize("data", [
        [],
        {"places": []},
        {"name": "X", "places": {"id": 1}},
        {"name": "X", "places": [{"name": "no id"}]},
        {"name": "X", "places": [{"id": "1", "name": "text id"}]},
        {"name": "X", "places": [{"id": True, "name": "bool id"}]},
        {"name": "X", "places": [{"id": 1, "name": "A"}, {"id": 1, "name": "B"}]},
        {"name": "X", "places": [{"id": 1, "name": "A", "affordances": [
            {"id": 1, "name": "a"}, {"id": 1, "name": "b"}]}]},
        {"name": "X", "places": [{"id": 1, "name": "A", "affordances": [
            {"id": 1, "name": "a", "connects_to": "two"}]}]},
    ])
    def test_malformed_documents(self, data):
        with pytest.raises(BreadboardFormatError):
            breadboard_from_dict(data)


class TestErrors:
    def test_missing_file(self, manager):
        with pytest.raises(BreadboardFileError):
            manager.load_from_file("nope.yaml")

    def test_invalid_yaml(self, manager, tmp_path):
        (tmp_path / "bad.yaml").write_text("name: [oops\n", encoding="utf-8")
        with pytest.raises(BreadboardFormatError):
            manager.load_from_file("bad.yaml")

    def test_non_utf8_document(self, manager, tmp_path):
        (tmp_path / "bad.yaml").write_bytes(b"name: \xff\xfe broken\nplaces: []\n")
        with pytest.raises(BreadboardFormatError, match="decode"):
            manager.load_from_file("bad.yaml")

    def test_format_error_names_file(self, manager, tmp_path):
        (tmp_path / "list.yaml").write_text("- 1\n- 2\n", encoding="utf-8")
        with pytest.raises(BreadboardFormatError, match="list.yaml"):
            manager.load_from_file("list.yaml")

    def test_unwritable_target(self, tmp_path, board):
        manager = BreadboardFileManager(tmp_path / "missing")
        with pytest.raises(BreadboardFileError):
            manager.save_to_file(board, "x.yaml")

    def test_listing_missing_directory(self, tmp_path):
        with pytest.raises(BreadboardFileError):
            BreadboardFileManager(tmp_path / "missing").list_breadboard_files()


class TestListing:
    def test_sorted_and_filtered(self, manager, tmp_path, board):
        for name in ("b.yaml", "a.yaml", "notes.txt"):
            (tmp_path / name).write_text("", encoding="utf-8")
        (tmp_path / "dir.yaml").mkdir()
        assert manager.list_breadboard_files() == ["a.yaml", "b.yaml"]

    def test_empty_directory(self, manager):
        assert manager.list_breadboard_files() == []

    def test_custom_extension(self, tmp_path):
        manager = BreadboardFileManager(tmp_path, extension="bb")
        assert manager.extension == ".bb"
        assert manager.with_extension("flow") == "flow.bb"
        assert manager.with_extension("flow.bb") == "flow.bb"

    def test_file_exists(self, manager, board):
        assert not manager.file_exists("checkout.yaml")
        manager.save_to_file(board, "checkout.yaml")
        assert manager.file_exists("checkout.yaml")
