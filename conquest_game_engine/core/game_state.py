"""
Game state module for the Conquest game engine.
Aggregates the map, players and missions, and exposes the per-turn operations.
"""

import logging
from typing import Dict, List, Optional, Sequence

from conquest_game_engine.core.dice import RandomSource
from conquest_game_engine.core.errors import ConfigurationError
from conquest_game_engine.core.map import TerritoryGraph, TerritorySnapshot, create_ring_map
from conquest_game_engine.core.missions import Mission, MissionEngine
from conquest_game_engine.core.players import Player, PlayerRegistry
from conquest_game_engine.core.resolver import AttackResult, CombatResolver

logger = logging.getLogger(__name__)

INITIAL_TROOPS = 3


class GameState:
    """Represents the complete state of a game."""

    def __init__(
        self,
        graph: TerritoryGraph,
        players: PlayerRegistry,
        random_source: Optional[RandomSource] = None
    ):
        self.graph = graph
        self.players = players
        self.random_source = random_source or RandomSource()
        self.missions: Dict[int, Mission] = {}
        self.resolver = CombatResolver(self.graph, self.players, self.random_source)

    @staticmethod
    def setup(
        territory_count: int,
        player_count: int,
        player_names: Optional[Sequence[str]] = None,
        random_source: Optional[RandomSource] = None
    ) -> 'GameState':
        """
        Create a ready-to-play game.

        Builds the ring map, creates players, hands out territories round-robin
        with INITIAL_TROOPS each, then assigns missions.

        Args:
            territory_count: Number of territories (at least 3)
            player_count: Number of players (at least 1)
            player_names: Optional display names
            random_source: Dice to use; a fresh entropy-seeded source if None

        Returns:
            The new GameState

        Raises:
            ConfigurationError: If either count is out of range
        """
        if not isinstance(player_count, int) or player_count < 1:
            raise ConfigurationError(f"At least one player is required, got {player_count}")

        graph = create_ring_map(territory_count)
        players = PlayerRegistry.create(player_count, player_names)
        state = GameState(graph, players, random_source)

        state._distribute_territories()
        state.missions = MissionEngine.assign(players, graph)

        logger.info(
            f"Game set up: {territory_count} territories, {player_count} players"
        )
        return state

    def _distribute_territories(self) -> None:
        """Territory i goes to player i % player_count."""
        player_count = len(self.players)
        logger.info("Distributing territories")

        for territory in self.graph.get_all_territories():
            owner = territory.id % player_count
            self.graph.set_owner(territory.id, owner)
            self.graph.set_troops(territory.id, INITIAL_TROOPS)
            self.players.increment_territory_count(owner)

    def attack(self, attacker_id: int, origin_id: int, target_id: int, troops: int) -> AttackResult:
        """Resolve one attack. See CombatResolver.attack."""
        return self.resolver.attack(attacker_id, origin_id, target_id, troops)

    def mission_for(self, player_id: int) -> Mission:
        mission = self.missions.get(player_id)
        if mission is None:
            raise ValueError(f"No mission assigned to player {player_id}")
        return mission

    def check_victory(self, player_id: int) -> bool:
        """Check if a player has completed their mission."""
        if not self.players.has_player(player_id):
            raise ValueError(f"Unknown player: {player_id}")
        return MissionEngine.evaluate(self.mission_for(player_id), self, player_id)

    def find_winner(self) -> Optional[int]:
        """Lowest player id whose mission is complete, or None."""
        for player in self.players.get_all_players():
            if self.check_victory(player.id):
                return player.id
        return None

    def get_player(self, player_id: int) -> Optional[Player]:
        return self.players.get_player(player_id)

    def list_territories(self) -> List[TerritorySnapshot]:
        """Snapshots of every territory, ordered by id."""
        return [t.snapshot() for t in self.graph.get_all_territories()]

    def player_territories(self, player_id: int) -> List[TerritorySnapshot]:
        """Snapshots of the territories a player controls."""
        return [t.snapshot() for t in self.graph.get_territories_owned_by(player_id)]

    def is_consistent(self) -> bool:
        """Cached territory counts match ownership on the map."""
        for player in self.players.get_all_players():
            if player.territory_count != self.graph.ownership_count(player.id):
                return False
        return True

    def to_dict(self) -> dict:
        """Summary of the current state for display."""
        return {
            "territories": [t.to_dict() for t in self.list_territories()],
            "players": [p.to_dict() for p in self.players.get_all_players()],
            "missions": {
                player_id: mission.to_dict()
                for player_id, mission in self.missions.items()
            }
        }
