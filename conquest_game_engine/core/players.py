"""
Player registry for the Conquest game engine.
Tracks players and the cached number of territories each one controls.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from conquest_game_engine.core.errors import ConfigurationError


@dataclass
class Player:
    """A player. territory_count mirrors ownership on the map."""
    id: int
    name: str
    territory_count: int = 0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "territory_count": self.territory_count
        }


def default_player_name(player_id: int) -> str:
    return f"Player {player_id}"


class PlayerRegistry:
    """Players keyed by dense id (0..N-1)."""

    def __init__(self):
        self.players: Dict[int, Player] = {}

    @staticmethod
    def create(count: int, names: Optional[Sequence[str]] = None) -> 'PlayerRegistry':
        """
        Create `count` players with sequential ids and no territories.

        Args:
            count: Number of players, at least 1
            names: Optional display names; missing or blank entries get a default

        Returns:
            A populated PlayerRegistry
        """
        if not isinstance(count, int) or count < 1:
            raise ConfigurationError(f"At least one player is required, got {count}")
        names = list(names or [])
        if len(names) > count:
            raise ConfigurationError(
                f"Got {len(names)} player names for {count} players"
            )

        registry = PlayerRegistry()
        for i in range(count):
            name = names[i].strip() if i < len(names) and names[i] else ""
            registry.players[i] = Player(id=i, name=name or default_player_name(i))
        return registry

    def get_player(self, player_id: int) -> Optional[Player]:
        return self.players.get(player_id)

    def get_all_players(self) -> List[Player]:
        return [self.players[pid] for pid in sorted(self.players)]

    def has_player(self, player_id: int) -> bool:
        return player_id in self.players

    def rename(self, player_id: int, name: str) -> None:
        name = (name or "").strip()
        self._require(player_id).name = name or default_player_name(player_id)

    def increment_territory_count(self, player_id: int) -> int:
        player = self._require(player_id)
        player.territory_count += 1
        return player.territory_count

    def decrement_territory_count(self, player_id: int) -> int:
        player = self._require(player_id)
        if player.territory_count == 0:
            raise ValueError(f"{player.name} has no territories to lose")
        player.territory_count -= 1
        return player.territory_count

    def total_territory_count(self) -> int:
        """Sum of all players' territory counts."""
        return sum(p.territory_count for p in self.players.values())

    def _require(self, player_id: int) -> Player:
        player = self.players.get(player_id)
        if player is None:
            raise KeyError(f"No player with id {player_id}")
        return player

    def __len__(self) -> int:
        return len(self.players)
