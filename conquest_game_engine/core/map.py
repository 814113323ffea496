"""
Map module for the Conquest game engine.
Defines territories, their symmetric adjacencies, and the standard ring map.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from conquest_game_engine.core.errors import ConfigurationError

MIN_RING_SIZE = 3


@dataclass
class Territory:
    """A single territory on the map."""
    id: int
    name: str
    owner: Optional[int] = None  # Player id, None while unowned
    troops: int = 0
    neighbors: List[int] = field(default_factory=list)

    def is_owned(self) -> bool:
        return self.owner is not None

    def snapshot(self) -> 'TerritorySnapshot':
        """Read-only copy for display code."""
        return TerritorySnapshot(
            id=self.id,
            name=self.name,
            owner=self.owner,
            troops=self.troops,
            neighbors=tuple(self.neighbors)
        )

    def __repr__(self) -> str:
        return f"Territory({self.id}, {self.name}, owner={self.owner}, troops={self.troops})"


@dataclass(frozen=True)
class TerritorySnapshot:
    """Immutable view of a territory handed to the display layer."""
    id: int
    name: str
    owner: Optional[int]
    troops: int
    neighbors: Tuple[int, ...]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "owner": self.owner,
            "troops": self.troops,
            "neighbors": list(self.neighbors)
        }


class TerritoryGraph:
    """
    The game board: territories keyed by dense id plus an adjacency relation.

    Mutators do not touch player bookkeeping. Any caller that changes a
    territory's owner through set_owner must also update the affected
    players' territory counts.
    """

    def __init__(self):
        self.territories: Dict[int, Territory] = {}

    def add_territory(self, territory: Territory) -> None:
        """Add a territory to the map."""
        self.territories[territory.id] = territory

    def add_adjacency(self, a: int, b: int) -> None:
        """Connect two territories in both directions."""
        if a == b:
            raise ConfigurationError(f"Territory {a} cannot neighbor itself")
        for territory_id in (a, b):
            if territory_id not in self.territories:
                raise ConfigurationError(f"Unknown territory in adjacency: {territory_id}")

        if b not in self.territories[a].neighbors:
            self.territories[a].neighbors.append(b)
        if a not in self.territories[b].neighbors:
            self.territories[b].neighbors.append(a)

    def has_territory(self, territory_id: int) -> bool:
        return territory_id in self.territories

    def is_adjacent(self, a: int, b: int) -> bool:
        """Check if b is a neighbor of a."""
        territory = self.territories.get(a)
        if territory is None:
            return False
        return b in territory.neighbors

    def get_adjacent_territories(self, territory_id: int) -> List[int]:
        """Get the ids of all territories adjacent to the given one."""
        territory = self.territories.get(territory_id)
        if territory is None:
            return []
        return list(territory.neighbors)

    def get_territory(self, territory_id: int) -> Optional[Territory]:
        """Get a territory by id."""
        return self.territories.get(territory_id)

    def get_all_territories(self) -> List[Territory]:
        """Get all territories ordered by id."""
        return [self.territories[tid] for tid in sorted(self.territories)]

    def get_territories_owned_by(self, player_id: int) -> List[Territory]:
        """Get all territories currently owned by a player."""
        return [t for t in self.get_all_territories() if t.owner == player_id]

    def ownership_count(self, player_id: int) -> int:
        """Count territories owned by a player."""
        return sum(1 for t in self.territories.values() if t.owner == player_id)

    def set_owner(self, territory_id: int, player_id: Optional[int]) -> Optional[int]:
        """Set a territory's owner. Returns the previous owner."""
        territory = self._require(territory_id)
        previous = territory.owner
        territory.owner = player_id
        return previous

    def set_troops(self, territory_id: int, troops: int) -> None:
        if troops < 0:
            raise ValueError(f"Troop count cannot be negative: {troops}")
        self._require(territory_id).troops = troops

    def add_troops(self, territory_id: int, amount: int) -> int:
        """Add troops to a territory. Returns the new troop count."""
        if amount < 0:
            raise ValueError(f"Cannot add a negative number of troops: {amount}")
        territory = self._require(territory_id)
        territory.troops += amount
        return territory.troops

    def remove_troops(self, territory_id: int, amount: int) -> int:
        """Remove troops from a territory, never going below zero. Returns the new count."""
        if amount < 0:
            raise ValueError(f"Cannot remove a negative number of troops: {amount}")
        territory = self._require(territory_id)
        territory.troops = max(0, territory.troops - amount)
        return territory.troops

    def _require(self, territory_id: int) -> Territory:
        territory = self.territories.get(territory_id)
        if territory is None:
            raise KeyError(f"No territory with id {territory_id}")
        return territory

    def __len__(self) -> int:
        return len(self.territories)


def create_ring_map(count: int) -> TerritoryGraph:
    """
    Create the standard ring map.
    Territory i neighbors (i - 1) and (i + 1), wrapping around at the ends.
    """
    if not isinstance(count, int) or count < MIN_RING_SIZE:
        raise ConfigurationError(
            f"A ring map needs at least {MIN_RING_SIZE} territories, got {count}"
        )

    graph = TerritoryGraph()
    for i in range(count):
        graph.add_territory(Territory(id=i, name=f"Territory {i}"))
    for i in range(count):
        graph.add_adjacency(i, (i + 1) % count)

    # Predecessor first, then successor
    for territory in graph.get_all_territories():
        territory.neighbors.sort(key=lambda n: (n - territory.id) % count, reverse=True)

    return graph
