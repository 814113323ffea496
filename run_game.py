"""
Script to play a Conquest game at the console.
"""

import argparse
import logging
import sys
from typing import Callable, List, Optional

from dotenv import load_dotenv

from conquest_game_engine.core.dice import RandomSource
from conquest_game_engine.core.errors import AttackError, ConfigurationError
from conquest_game_engine.core.game import Game
from conquest_game_engine.core.game_state import GameState
from conquest_game_engine.core.missions import MissionEngine
from conquest_game_engine.io.yaml_config import GameConfig, load_game_config

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

MENU_ATTACK = 1
MENU_SKIP = 0
MENU_QUIT = 9


def configure_logging(verbose: bool, log_file: Optional[str]) -> None:
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )


def read_int(prompt: str, input_fn: Callable[[str], str] = input) -> int:
    """Prompt until the user enters an integer."""
    while True:
        raw = input_fn(prompt)
        try:
            return int(raw.strip())
        except ValueError:
            print("Please enter a whole number.")


def ask_player_names(config: GameConfig, input_fn: Callable[[str], str] = input) -> List[str]:
    """Ask for any player names the config did not provide."""
    names = list(config.player_names)
    if len(names) < config.player_count:
        print("=== Player Registration ===")
    for i in range(len(names), config.player_count):
        names.append(input_fn(f"Name of player {i}: ").strip())
    return names


def print_attack_result(game: Game, result) -> None:
    origin = game.state.graph.get_territory(result.origin_id)
    target = game.state.graph.get_territory(result.target_id)
    print("\n--- Attack ---")
    print(f"Origin: {origin.name} | Target: {target.name} | Troops: {result.troops}")
    print(f"Dice -> Attack: {result.attack_score} | Defense: {result.defense_score}")
    if result.conquered:
        print("Territory conquered!")
    else:
        print("Attack failed. Troops lost.")


def play(game: Game, input_fn: Callable[[str], str] = input) -> Optional[int]:
    """Run the menu loop until someone wins or the game is stopped."""
    print("\n=== GAME START ===")

    while not game.is_over:
        print("\n" + "-" * 40)
        print(game.get_board_state_string())
        print("\nMenu:")
        print(f" {MENU_ATTACK} - Attack")
        print(f" {MENU_SKIP} - Skip turn")
        print(f" {MENU_QUIT} - Quit game")

        choice = read_int("Choice: ", input_fn)

        if choice == MENU_QUIT:
            print("Game ended by user.")
            game.quit()
            break
        elif choice == MENU_ATTACK:
            origin_id = read_int("Origin territory ID: ", input_fn)
            target_id = read_int("Target territory ID: ", input_fn)
            troops = read_int("Troops to attack with: ", input_fn)
            try:
                result = game.submit_attack(origin_id, target_id, troops)
            except AttackError as e:
                # Same player chooses again
                print(f"Attack rejected: {e}")
                continue
            print_attack_result(game, result)
            winner = game.end_turn()
        else:
            print("Turn skipped.")
            winner = game.skip_turn()

        if winner is not None:
            print("\n" + "=" * 40)
            print(f"{game.state.get_player(winner).name} COMPLETED THEIR MISSION and won!")
            print("=" * 40)
        elif game.is_over:
            print("\nTurn limit reached. The game is a draw.")

    return game.winner


def main():
    """Play a Conquest game."""

    parser = argparse.ArgumentParser(description='Play a Conquest game at the console')
    parser.add_argument('--config', help='YAML game configuration file')
    parser.add_argument('--territories', type=int, help='Number of territories (at least 3)')
    parser.add_argument('--players', type=int, help='Number of players')
    parser.add_argument('--seed', type=int, help='Dice seed for a reproducible game')
    parser.add_argument('--max-turns', type=int, help='Rounds before the game is a draw')
    parser.add_argument('--verbose', action='store_true', help='Show engine log messages')
    parser.add_argument('--log-file', help='Also write log messages to this file')
    args = parser.parse_args()

    configure_logging(args.verbose, args.log_file)

    try:
        config = load_game_config(args.config)
        if args.territories is not None:
            config.territory_count = args.territories
        if args.players is not None:
            config.player_count = args.players
        if args.seed is not None:
            config.seed = args.seed
        if args.max_turns is not None:
            config.max_turns = args.max_turns
        config.validate()

        names = ask_player_names(config)
        state = GameState.setup(
            config.territory_count,
            config.player_count,
            names,
            random_source=RandomSource(config.seed)
        )
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    print("\n=== Missions ===")
    for player in state.players.get_all_players():
        mission = state.mission_for(player.id)
        print(f"{player.name}: {MissionEngine.describe(mission)}")

    game = Game(state, max_turns=config.max_turns)
    try:
        play(game)
    except (KeyboardInterrupt, EOFError):
        print("\nGame interrupted by user")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
