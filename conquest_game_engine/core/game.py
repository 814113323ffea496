"""
Game manager for the Conquest game engine.
Orchestrates turn order, victory checks and game summaries.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from conquest_game_engine.core.errors import AttackError, GameOverError
from conquest_game_engine.core.game_state import GameState
from conquest_game_engine.core.missions import MissionEngine
from conquest_game_engine.core.resolver import AttackResult

logger = logging.getLogger(__name__)


@dataclass
class AttackRecord:
    """An attack made during the game, kept for history and reports."""
    turn_number: int
    player_id: int
    result: AttackResult

    def to_dict(self) -> dict:
        data = self.result.to_dict()
        data["turn_number"] = self.turn_number
        data["player_id"] = self.player_id
        return data


class Game:
    """Main game controller."""

    def __init__(self, state: GameState, max_turns: Optional[int] = None):
        """
        Initialize a game around an existing state.

        Args:
            state: A GameState produced by GameState.setup
            max_turns: Optional number of full rounds before the game is a draw
        """
        self.state = state
        self.max_turns = max_turns
        self.current_player_id = 0
        self.turn_number = 1
        self.winner: Optional[int] = None
        self.is_over = False
        self.attack_history: List[AttackRecord] = []

    def current_player_name(self) -> str:
        return self.state.get_player(self.current_player_id).name

    def submit_attack(self, origin_id: int, target_id: int, troops: int) -> AttackResult:
        """
        Attack as the current player.

        Returns:
            The AttackResult of the resolved attack

        Raises:
            GameOverError: If the game has already finished
            AttackError: If the attack is rejected (state is unchanged)
        """
        if self.is_over:
            raise GameOverError("The game is over")

        try:
            result = self.state.attack(self.current_player_id, origin_id, target_id, troops)
        except AttackError as e:
            logger.warning(f"Attack rejected for {self.current_player_name()}: {e}")
            raise

        self.attack_history.append(
            AttackRecord(self.turn_number, self.current_player_id, result)
        )
        return result

    def end_turn(self) -> Optional[int]:
        """
        Finish the current player's turn.

        Checks the current player's mission first; if it is complete they win.
        Otherwise play passes to the next player.

        Returns:
            The winning player id, or None if the game continues
        """
        if self.is_over:
            raise GameOverError("The game is over")

        if self.state.check_victory(self.current_player_id):
            self.winner = self.current_player_id
            self.is_over = True
            logger.info(f"VICTORY: {self.current_player_name()} completed their mission")
            return self.winner

        player_count = len(self.state.players)
        self.current_player_id = (self.current_player_id + 1) % player_count
        if self.current_player_id == 0:
            self.turn_number += 1
            if self.max_turns is not None and self.turn_number > self.max_turns:
                self.is_over = True
                logger.info(f"Turn limit of {self.max_turns} reached, game is a draw")
                return None

        logger.info(f"Turn {self.turn_number}: {self.current_player_name()} to play")
        return None

    def skip_turn(self) -> Optional[int]:
        """End the turn without attacking."""
        logger.info(f"{self.current_player_name()} skipped their turn")
        return self.end_turn()

    def quit(self) -> None:
        """Stop the game without a winner."""
        logger.info("Game ended by user")
        self.is_over = True

    def get_game_summary(self) -> Dict[str, Any]:
        """Get a summary of the current game."""
        summary = {
            "turn_number": self.turn_number,
            "current_player": self.current_player_id,
            "is_over": self.is_over,
            "winner": self.winner,
            "attacks": len(self.attack_history),
            "players": {}
        }

        for player in self.state.players.get_all_players():
            mission = self.state.mission_for(player.id)
            summary["players"][player.id] = {
                "name": player.name,
                "territories": player.territory_count,
                "troops": sum(t.troops for t in self.state.player_territories(player.id)),
                "mission_target": mission.target,
                "mission_complete": self.state.check_victory(player.id)
            }

        return summary

    def _owner_label(self, owner: Optional[int]) -> str:
        if owner is None:
            return "Neutral"
        return self.state.get_player(owner).name

    def get_board_state_string(self) -> str:
        """Get a simple string representation of the board."""
        player = self.state.get_player(self.current_player_id)
        mission = self.state.mission_for(player.id)

        lines = []
        lines.append(f"\nTurn {self.turn_number} - {player.name} (id {player.id})")
        lines.append(f"Mission: {MissionEngine.describe(mission)}")
        lines.append("=" * 50)

        lines.append(f"\nTerritories controlled by {player.name}:")
        for territory in self.state.player_territories(player.id):
            lines.append(f"  ID {territory.id} - {territory.name} | Troops: {territory.troops}")

        lines.append("\nAll territories:")
        for territory in self.state.list_territories():
            neighbors = ", ".join(str(n) for n in territory.neighbors)
            lines.append(
                f"  ID {territory.id} - {territory.name} | Owner: {self._owner_label(territory.owner)}"
                f" | Troops: {territory.troops} | Neighbors: {neighbors}"
            )

        return "\n".join(lines)
