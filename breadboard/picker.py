"""
Generic search-and-select picker.

One mechanism serves every "type to filter, arrows to choose, Enter to pick"
flow in the editor:
- connection target (places, plus a "Remove connection" entry)
- place to jump to
- file to open

The candidate domain is a zero-argument callable so results always reflect
the current board / directory. Matching is a case-insensitive substring test
on the candidate label. Every query change moves the selection back to the
first result.
"""

from dataclasses import dataclass
from typing import Callable, Hashable, List, Optional, Sequence

from breadboard.models import Breadboard


@dataclass(frozen=True)
class PickerCandidate:
    key: Hashable
    label: str
    is_sentinel: bool = False


REMOVE_CONNECTION = PickerCandidate(key=None, label="Remove connection", is_sentinel=True)

CandidateDomain = Callable[[], Sequence[PickerCandidate]]


class Picker:
    """
    Query/results/selected-index state over a candidate domain.

    The optional sentinel is never filtered and always sits at index 0.
    """

    def __init__(self, domain: CandidateDomain, sentinel: Optional[PickerCandidate] = None):
        self._domain = domain
        self.sentinel = sentinel
        self.query: str = ""
        self.results: List[PickerCandidate] = []
        self.selected_index: Optional[int] = None
        self.active: bool = False

    def start(self) -> None:
        """Clear the query and list the whole domain."""
        self.query = ""
        self.active = True
        self.on_query_changed()

    def cancel(self) -> None:
        """Discard all picker state. The domain itself is never touched."""
        self.query = ""
        self.results = []
        self.selected_index = None
        self.active = False

    # --- Query editing ---

    def on_query_changed(self) -> None:
        needle = self.query.lower()
        matches = [c for c in self._domain() if needle in c.label.lower()]
        self.results = ([self.sentinel] if self.sentinel is not None else []) + matches
        self.selected_index = 0 if self.results else None

    def set_query(self, query: str) -> None:
        self.query = query
        self.on_query_changed()

    def append(self, text: str) -> None:
        self.set_query(self.query + text)

    def backspace(self) -> None:
        if self.query:
            self.set_query(self.query[:-1])

    # --- Selection ---

    def move_up(self) -> None:
        if self.selected_index is not None and self.selected_index > 0:
            self.selected_index -= 1

    def move_down(self) -> None:
        if self.selected_index is not None and self.selected_index < len(self.results) - 1:
            self.selected_index += 1

    def selected(self) -> Optional[PickerCandidate]:
        if self.selected_index is None or not (0 <= self.selected_index < len(self.results)):
            return None
        return self.results[self.selected_index]

    def commit(self) -> Optional[PickerCandidate]:
        """Candidate under the cursor, or None. Callers check is_sentinel."""
        return self.selected()


# --- Factories ---

def _place_candidates(board_getter: Callable[[], Breadboard]) -> CandidateDomain:
    def domain() -> List[PickerCandidate]:
        return [PickerCandidate(key=p.id, label=p.name) for p in board_getter().places]
    return domain


def connection_picker(board_getter: Callable[[], Breadboard]) -> Picker:
    """Places in board order, preceded by the remove-connection sentinel."""
    return Picker(_place_candidates(board_getter), sentinel=REMOVE_CONNECTION)


def place_picker(board_getter: Callable[[], Breadboard]) -> Picker:
    return Picker(_place_candidates(board_getter))


def file_picker(list_files: Callable[[], Sequence[str]]) -> Picker:
    def domain() -> List[PickerCandidate]:
        return [PickerCandidate(key=name, label=name) for name in list_files()]
    return Picker(domain)
