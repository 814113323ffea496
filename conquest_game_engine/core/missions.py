"""
Mission system for the Conquest game engine.
A mission is plain data (kind + target). The check for each kind lives in a
dispatch table, so new kinds only need a new enum member and a check function.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict

from conquest_game_engine.core.map import TerritoryGraph
from conquest_game_engine.core.players import PlayerRegistry

if TYPE_CHECKING:
    from conquest_game_engine.core.game_state import GameState

logger = logging.getLogger(__name__)


class MissionType(Enum):
    """Kinds of win condition."""
    CONQUER_N_TERRITORIES = "conquer_n_territories"


@dataclass(frozen=True)
class Mission:
    """A player's win condition."""
    kind: MissionType
    target: int

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "target": self.target}


def _check_conquer_territories(state: 'GameState', player_id: int, mission: Mission) -> bool:
    """Player controls at least `target` territories on the map."""
    return state.graph.ownership_count(player_id) >= mission.target


MissionCheck = Callable[['GameState', int, Mission], bool]

MISSION_CHECKS: Dict[MissionType, MissionCheck] = {
    MissionType.CONQUER_N_TERRITORIES: _check_conquer_territories,
}


class MissionEngine:
    """Assigns and evaluates missions."""

    @staticmethod
    def compute_target(total_territories: int, player_count: int) -> int:
        """One more than an even share of the map."""
        return total_territories // player_count + 1

    @staticmethod
    def assign(players: PlayerRegistry, graph: TerritoryGraph) -> Dict[int, Mission]:
        """
        Give every player a conquer-N-territories mission.

        Args:
            players: Registry of players in the game
            graph: The game map

        Returns:
            Dictionary mapping player id to Mission
        """
        target = MissionEngine.compute_target(len(graph), len(players))
        missions = {}

        for player in players.get_all_players():
            missions[player.id] = Mission(MissionType.CONQUER_N_TERRITORIES, target)
            logger.info(f"{player.name} must control at least {target} territories")

        return missions

    @staticmethod
    def evaluate(mission: Mission, state: 'GameState', player_id: int) -> bool:
        """Check whether the player has completed their mission."""
        check = MISSION_CHECKS.get(mission.kind)
        if check is None:
            raise ValueError(f"No check registered for mission kind {mission.kind}")
        return check(state, player_id, mission)

    @staticmethod
    def describe(mission: Mission) -> str:
        """Human-readable description of a mission."""
        if mission.kind == MissionType.CONQUER_N_TERRITORIES:
            return f"Control at least {mission.target} territories"
        return f"{mission.kind.value} ({mission.target})"
