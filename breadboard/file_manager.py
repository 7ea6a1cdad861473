"""
Breadboard document storage.

A breadboard is saved as one YAML document:

    name: Autopay
    created: '2025-01-15T10:00:00+00:00'
    next_place_id: 3
    next_affordance_id: 2
    places:
    - id: 1
      name: Invoice
      group: web            # optional
      affordances:
      - id: 1
        name: Turn on Autopay
        connects_to: 2      # optional, may reference a removed place

The id counters are written for reference only: loading always recomputes
them from the ids present in the document.
"""

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from breadboard.models import Affordance, Breadboard, Place
from breadboard.paths import get_working_dir

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = ".yaml"


class BreadboardFileError(Exception):
    """A breadboard document could not be read, written or listed."""


class BreadboardFormatError(BreadboardFileError):
    """A breadboard document was read but does not describe a valid board."""


# --- Conversion ---

def breadboard_to_dict(board: Breadboard) -> Dict[str, Any]:
    places = []
    for place in board.places:
        place_out: Dict[str, Any] = {"id": place.id, "name": place.name}
        if place.group is not None:
            place_out["group"] = place.group
        affordances = []
        for affordance in place.affordances:
            affordance_out: Dict[str, Any] = {"id": affordance.id, "name": affordance.name}
            if affordance.connects_to is not None:
                affordance_out["connects_to"] = affordance.connects_to
            affordances.append(affordance_out)
        place_out["affordances"] = affordances
        places.append(place_out)

    return {
        "name": board.name,
        "created": board.created,
        "next_place_id": board.next_place_id,
        "next_affordance_id": board.next_affordance_id,
        "places": places,
    }


def _require(record: Dict[str, Any], key: str, kind: type, where: str) -> Any:
    if key not in record:
        raise BreadboardFormatError(f"{where}: missing '{key}'")
    value = record[key]
    # bool is an int subclass; an id of `true` is still malformed
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise BreadboardFormatError(f"{where}: '{key}' must be {kind.__name__}, got {type(value).__name__}")
    return value


def _require_text(record: Dict[str, Any], key: str, where: str) -> str:
    """Names are text, but hand-written YAML may turn `404` or `yes` into scalars."""
    if key not in record or record[key] is None:
        raise BreadboardFormatError(f"{where}: missing '{key}'")
    value = record[key]
    if isinstance(value, (dict, list)):
        raise BreadboardFormatError(f"{where}: '{key}' must be text")
    return str(value)


def _optional_int(record: Dict[str, Any], key: str, where: str) -> Optional[int]:
    if record.get(key) is None:
        return None
    return _require(record, key, int, where)


def _affordance_from_dict(record: Any, where: str) -> Affordance:
    if not isinstance(record, dict):
        raise BreadboardFormatError(f"{where}: expected a mapping")
    return Affordance(
        id=_require(record, "id", int, where),
        name=_require_text(record, "name", where),
        connects_to=_optional_int(record, "connects_to", where),
    )


def _place_from_dict(record: Any, where: str) -> Place:
    if not isinstance(record, dict):
        raise BreadboardFormatError(f"{where}: expected a mapping")
    place_id = _require(record, "id", int, where)
    group = record.get("group")
    raw_affordances = record.get("affordances") or []
    if not isinstance(raw_affordances, list):
        raise BreadboardFormatError(f"{where}: 'affordances' must be a list")

    place = Place(id=place_id, name=_require_text(record, "name", where),
                  group=str(group) if group is not None else None)
    seen = set()
    for index, raw in enumerate(raw_affordances):
        affordance = _affordance_from_dict(raw, f"{where}, affordance {index}")
        if affordance.id in seen:
            raise BreadboardFormatError(f"{where}: duplicate affordance id {affordance.id}")
        seen.add(affordance.id)
        place.add_affordance(affordance)
    return place


def breadboard_from_dict(data: Any) -> Breadboard:
    """
    Build a Breadboard from a parsed document.

    Raises BreadboardFormatError when the structure is wrong or ids collide.
    Id counters are resynchronized from the loaded ids.
    """
    if not isinstance(data, dict):
        raise BreadboardFormatError("document must be a mapping")

    name = _require_text(data, "name", "breadboard")
    created = data.get("created")
    # Unquoted timestamps come back from YAML as datetime objects
    if isinstance(created, (datetime, date)):
        created = created.isoformat()
    raw_places = data.get("places") or []
    if not isinstance(raw_places, list):
        raise BreadboardFormatError("breadboard: 'places' must be a list")

    board = Breadboard(name=name)
    if created is not None:
        board.created = str(created)

    seen = set()
    for index, raw in enumerate(raw_places):
        place = _place_from_dict(raw, f"place {index}")
        if place.id in seen:
            raise BreadboardFormatError(f"duplicate place id {place.id}")
        seen.add(place.id)
        board.add_place(place)

    board.sync_id_counters()
    return board


# --- File access ---

class BreadboardFileManager:
    """
    Reads, writes and lists breadboard documents in one directory.

    Relative paths given to save/load are resolved against that directory
    (the working directory by default).
    """

    def __init__(self, directory: Optional[Union[str, Path]] = None, extension: str = DEFAULT_EXTENSION):
        self.directory = Path(directory) if directory is not None else get_working_dir()
        self.extension = extension if extension.startswith(".") else "." + extension

    def _resolve(self, path: Union[str, Path]) -> Path:
        path = Path(path)
        return path if path.is_absolute() else self.directory / path

    def with_extension(self, filename: str) -> str:
        """Append the document extension unless the name already ends with it."""
        return filename if filename.endswith(self.extension) else filename + self.extension

    def file_exists(self, path: Union[str, Path]) -> bool:
        return self._resolve(path).is_file()

    def save_to_file(self, board: Breadboard, path: Union[str, Path]) -> Path:
        target = self._resolve(path)
        text = yaml.safe_dump(breadboard_to_dict(board), sort_keys=False, allow_unicode=True)
        try:
            with open(target, "w", encoding="utf-8") as f:
                f.write(text)
        except OSError as e:
            raise BreadboardFileError(f"Failed to write {target}: {e}") from e
        logger.info(f"Saved breadboard '{board.name}' to {target}")
        return target

    def load_from_file(self, path: Union[str, Path]) -> Breadboard:
        source = self._resolve(path)
        try:
            with open(source, "r", encoding="utf-8") as f:
                content = f.read()
        except OSError as e:
            raise BreadboardFileError(f"Failed to read {source}: {e}") from e
        except UnicodeDecodeError as e:
            raise BreadboardFormatError(f"Failed to decode {source}: {e}") from e

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise BreadboardFormatError(f"Failed to parse {source}: {e}") from e

        try:
            board = breadboard_from_dict(data)
        except BreadboardFormatError as e:
            raise BreadboardFormatError(f"Invalid breadboard in {source}: {e}") from e

        logger.info(f"Loaded breadboard '{board.name}' from {source} ({len(board.places)} places)")
        return board

    def list_breadboard_files(self) -> List[str]:
        """Sorted names of the documents in the directory. An empty list is not an error."""
        try:
            names = [
                entry.name
                for entry in self.directory.iterdir()
                if entry.is_file() and entry.suffix == self.extension
            ]
        except OSError as e:
            raise BreadboardFileError(f"Failed to list {self.directory}: {e}") from e
        return sorted(names)
