#!/usr/bin/env python3
"""
Simulate Conquest games from YAML files.
Plays scripted attacks turn by turn and writes a summary report.
"""

import argparse
import logging
import os
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional

import yaml

from conquest_game_engine.core.dice import RandomSource, ScriptedRandomSource
from conquest_game_engine.core.errors import AttackError, ConfigurationError
from conquest_game_engine.core.game import Game
from conquest_game_engine.core.game_state import GameState
from conquest_game_engine.io.yaml_attacks import YAMLAttackLoader
from conquest_game_engine.io.yaml_config import GameConfig, read_yaml_file

logger = logging.getLogger(__name__)

DEFAULT_ATTACK_FILE = 'attacks.yaml'


class GameSimulator:
    """Simulates a game from a folder holding game_info.yaml and an attack script."""

    def __init__(self, game_folder: str):
        self.game_folder = game_folder
        self.game_info: Dict[str, Any] = {}
        self.config: Optional[GameConfig] = None
        self.game: Optional[Game] = None
        self.warnings: List[str] = []

    def load_game_info(self) -> None:
        """Load game_info.yaml from the game folder."""
        info_path = os.path.join(self.game_folder, 'game_info.yaml')
        if not os.path.exists(info_path):
            raise ConfigurationError(f"game_info.yaml not found in {self.game_folder}")

        game_info = read_yaml_file(info_path) or {}
        self.config = GameConfig.from_dict(game_info)
        self.config.validate()
        self.game_info = game_info
        logger.info(f"Loaded game: {self.game_info.get('name', 'Unnamed Game')}")

    def initialize_game(self) -> None:
        """Set up the starting state from the loaded config."""
        dice = self.game_info.get('dice')
        if dice is not None:
            if not isinstance(dice, list):
                raise ConfigurationError("'dice' must be a list of rolls")
            random_source = ScriptedRandomSource(dice)
        else:
            random_source = RandomSource(self.config.seed)

        state = GameState.setup(
            self.config.territory_count,
            self.config.player_count,
            self.config.player_names,
            random_source=random_source
        )
        self.game = Game(state, max_turns=self.config.max_turns)

    def run(self) -> Dict[str, Any]:
        """Play every scripted turn until the script ends or the game is decided."""
        if self.game is None:
            self.load_game_info()
            self.initialize_game()

        attack_file = self.game_info.get('attacks', DEFAULT_ATTACK_FILE)
        loader = YAMLAttackLoader(self.game.state)
        script = loader.load_from_file(os.path.join(self.game_folder, attack_file))
        turns = loader.parse_turns(script)
        self.warnings.extend(loader.warnings)

        for turn in turns:
            if self.game.is_over:
                break
            self._play_turn(turn)

        return self.get_summary()

    def _play_turn(self, turn) -> None:
        game = self.game
        if turn.player is not None and turn.player != game.current_player_id:
            self.warnings.append(
                f"Turn {game.turn_number}: script expected player {turn.player}, "
                f"but it is {game.current_player_name()}'s turn; attacks ignored"
            )
            game.end_turn()
            return

        for order in turn.attacks:
            try:
                result = game.submit_attack(order.origin, order.target, order.troops)
                logger.info(
                    f"{game.current_player_name()}: {order} -> {result.outcome.value} "
                    f"({result.attack_score} vs {result.defense_score})"
                )
            except AttackError as e:
                self.warnings.append(f"Turn {game.turn_number}: {order} rejected: {e}")

        if not turn.attacks:
            game.skip_turn()
        else:
            game.end_turn()

    def get_summary(self) -> Dict[str, Any]:
        """Summary report of the simulated game."""
        game = self.game
        winner = game.winner
        return {
            "name": self.game_info.get('name', 'Unnamed Game'),
            "winner": game.state.get_player(winner).name if winner is not None else None,
            "finished": game.is_over,
            "turn_number": game.turn_number,
            "attacks": [record.to_dict() for record in game.attack_history],
            "warnings": list(self.warnings),
            "final_state": game.state.to_dict()
        }

    def save_summary(self, filename: str = 'summary.yaml') -> str:
        """Write the summary report into the game folder. Returns the path."""
        path = os.path.join(self.game_folder, filename)
        summary = self.get_summary()
        summary["generated_at"] = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with open(path, 'w') as f:
            yaml.safe_dump(summary, f, default_flow_style=False, sort_keys=False)
        logger.info(f"Summary saved to {path}")
        return path


def main() -> int:
    parser = argparse.ArgumentParser(description='Simulate a Conquest game from YAML files')
    parser.add_argument('game_folder', help='Folder containing game_info.yaml and the attack script')
    parser.add_argument('--no-summary', action='store_true', help='Do not write summary.yaml')
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    simulator = GameSimulator(args.game_folder)
    try:
        summary = simulator.run()
    except ConfigurationError as e:
        logger.error(f"Simulation failed: {e}")
        return 1

    if not args.no_summary:
        simulator.save_summary()

    print(f"Winner: {summary['winner'] or 'none'}")
    for warning in summary['warnings']:
        print(f"  warning: {warning}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
