"""
Application state shared by the dispatcher and the renderer.

One AppState value owns everything the editor knows: the board, what is
selected, the current mode, the edit buffer and the three pickers. The
dispatcher is the only writer; the renderer only reads it.
"""

from dataclasses import InitVar, dataclass, field
from typing import Callable, List, Optional, Sequence

from breadboard.actions import Mode
from breadboard.models import Breadboard
from breadboard.navigation import NavigationState
from breadboard.picker import Picker, connection_picker, file_picker, place_picker

CONNECTED_FILTER = "connected"


def _no_files() -> List[str]:
    return []


@dataclass
class AppState:
    board: Breadboard
    list_files: InitVar[Callable[[], Sequence[str]]] = _no_files
    mode: Mode = Mode.NAVIGATE
    nav: NavigationState = field(default_factory=NavigationState)
    collapsed: bool = False
    filter: Optional[str] = None
    edit_buffer: str = ""
    current_file: Optional[str] = None
    status_message: str = ""
    should_quit: bool = False
    connection_picker: Picker = field(init=False)
    place_picker: Picker = field(init=False)
    file_picker: Picker = field(init=False)

    def __post_init__(self, list_files: Callable[[], Sequence[str]]) -> None:
        # Pickers read self.board lazily so they follow a board replaced by Open.
        self.connection_picker = connection_picker(lambda: self.board)
        self.place_picker = place_picker(lambda: self.board)
        self.file_picker = file_picker(list_files)

    @property
    def is_searching_places(self) -> bool:
        """The place-jump picker runs inside Navigate mode, alongside the mode value."""
        return self.place_picker.active

    @property
    def active_picker(self) -> Optional[Picker]:
        if self.mode == Mode.CONNECT:
            return self.connection_picker
        if self.mode == Mode.OPEN_FILE:
            return self.file_picker
        if self.mode == Mode.NAVIGATE and self.is_searching_places:
            return self.place_picker
        return None
