"""
Graph model for a breadboard.

A Breadboard is a small directed graph describing a UX flow:
- Place: a node (screen, dialog, step) holding an ordered list of affordances
- Affordance: an action available at a place, optionally connecting to another place

Ids are sequential integers handed out by the Breadboard. Place ids are unique
within a board; affordance ids are unique within their place (they are always
addressed together with the owning place id).

A connection (Affordance.connects_to) is NOT required to point at an existing
place. Removing a place leaves such connections dangling; views show them as
unresolved.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional, Tuple

EntityId = int


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class Affordance:
    id: EntityId
    name: str
    connects_to: Optional[EntityId] = None

    def with_connection(self, destination_place_id: EntityId) -> "Affordance":
        self.connects_to = destination_place_id
        return self


@dataclass
class Place:
    id: EntityId
    name: str
    group: Optional[str] = None
    affordances: List[Affordance] = field(default_factory=list)

    def with_group(self, group: str) -> "Place":
        self.group = group
        return self

    def add_affordance(self, affordance: Affordance) -> None:
        self.affordances.append(affordance)

    def find_affordance(self, affordance_id: EntityId) -> Optional[Affordance]:
        for affordance in self.affordances:
            if affordance.id == affordance_id:
                return affordance
        return None

    def affordance_index(self, affordance_id: EntityId) -> Optional[int]:
        for index, affordance in enumerate(self.affordances):
            if affordance.id == affordance_id:
                return index
        return None

    def remove_affordance(self, affordance_id: EntityId) -> bool:
        """Remove an affordance by id. Returns False (and does nothing) if unknown."""
        index = self.affordance_index(affordance_id)
        if index is None:
            return False
        del self.affordances[index]
        return True


@dataclass
class Breadboard:
    """
    The whole graph document.

    next_place_id / next_affordance_id are owned by the board: every entity
    must get its id from generate_place_id() / generate_affordance_id(),
    which hand out the current value and then increment.
    """
    name: str
    created: str = field(default_factory=_now_iso)
    places: List[Place] = field(default_factory=list)
    next_place_id: EntityId = 1
    next_affordance_id: EntityId = 1

    @classmethod
    def new(cls, name: str) -> "Breadboard":
        return cls(name=name, created=_now_iso())

    # --- Id generation ---

    def generate_place_id(self) -> EntityId:
        place_id = self.next_place_id
        self.next_place_id += 1
        return place_id

    def generate_affordance_id(self) -> EntityId:
        affordance_id = self.next_affordance_id
        self.next_affordance_id += 1
        return affordance_id

    def sync_id_counters(self) -> None:
        """
        Recompute both counters as max(existing id) + 1 (1 for an empty board).

        Called once after loading from storage so new entities never collide
        with loaded ones, whatever counter values were persisted.
        """
        max_place_id = max((p.id for p in self.places), default=0)
        max_affordance_id = max(
            (a.id for p in self.places for a in p.affordances),
            default=0,
        )
        self.next_place_id = max_place_id + 1
        self.next_affordance_id = max_affordance_id + 1

    # --- Construction ---

    def create_place(self, name: str, group: Optional[str] = None) -> Place:
        """Create a place with a fresh id and append it to the board."""
        place = Place(id=self.generate_place_id(), name=name, group=group)
        self.add_place(place)
        return place

    def create_affordance(self, name: str, connects_to: Optional[EntityId] = None) -> Affordance:
        """Create an affordance with a fresh id. The caller attaches it to a place."""
        return Affordance(id=self.generate_affordance_id(), name=name, connects_to=connects_to)

    def add_place(self, place: Place) -> None:
        self.places.append(place)

    def add_affordance_to(self, place_id: EntityId, affordance: Affordance) -> bool:
        """Append an affordance to a place. Unknown place ids are a silent no-op (returns False)."""
        place = self.find_place(place_id)
        if place is None:
            return False
        place.add_affordance(affordance)
        return True

    # --- Lookup ---

    def find_place(self, place_id: Optional[EntityId]) -> Optional[Place]:
        for place in self.places:
            if place.id == place_id:
                return place
        return None

    def place_index(self, place_id: EntityId) -> Optional[int]:
        for index, place in enumerate(self.places):
            if place.id == place_id:
                return index
        return None

    def find_affordance(self, place_id: EntityId, affordance_id: EntityId) -> Optional[Affordance]:
        place = self.find_place(place_id)
        if place is None:
            return None
        return place.find_affordance(affordance_id)

    def resolve_connection(self, affordance: Affordance) -> Optional[Place]:
        """Destination place of an affordance, or None if unconnected or dangling."""
        if affordance.connects_to is None:
            return None
        return self.find_place(affordance.connects_to)

    def get_incoming_connections(self, place_id: EntityId) -> List[Tuple[Place, Affordance]]:
        """
        All (source place, affordance) pairs whose affordance connects to place_id,
        in place-then-affordance order.
        """
        return [
            (place, affordance)
            for place in self.places
            for affordance in place.affordances
            if affordance.connects_to is not None and affordance.connects_to == place_id
        ]

    # --- Removal ---

    def remove_place(self, place_id: EntityId) -> bool:
        """
        Remove a place by id. Unknown ids are a silent no-op (returns False).

        Affordances elsewhere that connect to the removed place keep their
        connects_to value.
        """
        index = self.place_index(place_id)
        if index is None:
            return False
        del self.places[index]
        return True

    def remove_affordance(self, place_id: EntityId, affordance_id: EntityId) -> bool:
        place = self.find_place(place_id)
        if place is None:
            return False
        return place.remove_affordance(affordance_id)
