"""
Tests for the turn controller: turn order, victory and draws.
"""

import pytest

from conquest_game_engine.core.dice import ScriptedRandomSource
from conquest_game_engine.core.errors import GameOverError, NotAdjacentError
from conquest_game_engine.core.game import Game
from conquest_game_engine.core.game_state import GameState


def make_game(rolls=(), max_turns=None):
    state = GameState.setup(6, 2, ["Alice", "Bob"], random_source=ScriptedRandomSource(rolls))
    return Game(state, max_turns=max_turns)


def test_turns_rotate_between_players():
    game = make_game()
    assert game.current_player_id == 0
    assert game.current_player_name() == "Alice"

    assert game.skip_turn() is None
    assert game.current_player_id == 1
    assert game.turn_number == 1

    assert game.end_turn() is None
    assert game.current_player_id == 0
    assert game.turn_number == 2
    assert not game.is_over


def test_winning_attack_ends_the_game():
    game = make_game([5, 5, 1, 2, 2])

    result = game.submit_attack(0, 1, 2)
    assert result.conquered

    assert game.end_turn() == 0
    assert game.winner == 0
    assert game.is_over
    assert len(game.attack_history) == 1
    assert game.attack_history[0].player_id == 0
    assert game.attack_history[0].to_dict()["turn_number"] == 1

    with pytest.raises(GameOverError):
        game.submit_attack(2, 3, 1)
    with pytest.raises(GameOverError):
        game.end_turn()


def test_rejected_attack_is_not_recorded():
    game = make_game()
    with pytest.raises(NotAdjacentError):
        game.submit_attack(0, 3, 1)
    assert game.attack_history == []
    assert game.current_player_id == 0


def test_turn_limit_ends_in_a_draw():
    game = make_game(max_turns=1)
    game.skip_turn()
    assert not game.is_over
    game.skip_turn()

    assert game.is_over
    assert game.winner is None


def test_quit_stops_the_game():
    game = make_game()
    game.quit()
    assert game.is_over
    assert game.winner is None
    with pytest.raises(GameOverError):
        game.skip_turn()


def test_game_summary():
    game = make_game([5, 5, 1, 2, 2])
    game.submit_attack(0, 1, 2)
    summary = game.get_game_summary()

    assert summary["attacks"] == 1
    assert summary["players"][0]["territories"] == 4
    assert summary["players"][0]["troops"] == 1 + 2 + 3 + 3
    assert summary["players"][0]["mission_complete"]
    assert summary["players"][1]["territories"] == 2
    assert summary["players"][1]["mission_target"] == 4


def test_game_summary_keeps_players_with_the_same_name():
    game = Game(GameState.setup(6, 2, ["Ana", "Ana"]))
    players = game.get_game_summary()["players"]

    assert len(players) == 2
    assert players[0]["name"] == players[1]["name"] == "Ana"
    assert players[0]["territories"] == players[1]["territories"] == 3


def test_board_state_string_lists_territories():
    game = make_game()
    text = game.get_board_state_string()

    assert "Alice" in text
    assert "Control at least 4 territories" in text
    assert "ID 0 - Territory 0 | Troops: 3" in text
    assert "ID 1 - Territory 1 | Owner: Bob | Troops: 3 | Neighbors: 0, 2" in text
