"""
Tests for game setup, victory checks and the read-only query surface.
"""

import pytest

from conquest_game_engine.core.dice import RandomSource, ScriptedRandomSource
from conquest_game_engine.core.errors import ConfigurationError
from conquest_game_engine.core.game_state import GameState, INITIAL_TROOPS
from conquest_game_engine.core.missions import MissionType


def test_setup_distributes_round_robin():
    """setup(6, 2): player 0 gets 0, 2, 4 and player 1 gets 1, 3, 5, three troops each."""
    state = GameState.setup(6, 2)

    assert [t.id for t in state.player_territories(0)] == [0, 2, 4]
    assert [t.id for t in state.player_territories(1)] == [1, 3, 5]
    assert all(t.troops == INITIAL_TROOPS == 3 for t in state.list_territories())
    assert state.get_player(0).territory_count == 3
    assert state.get_player(1).territory_count == 3
    assert state.is_consistent()


def test_setup_assigns_missions():
    state = GameState.setup(6, 2)
    for player_id in (0, 1):
        mission = state.mission_for(player_id)
        assert mission.kind == MissionType.CONQUER_N_TERRITORIES
        assert mission.target == 4


def test_no_one_has_won_right_after_setup():
    state = GameState.setup(6, 2)
    assert not state.check_victory(0)
    assert not state.check_victory(1)
    assert state.find_winner() is None


def test_uneven_split_can_satisfy_a_mission_at_setup():
    """With 5 territories and 2 players the target is 3, which player 0 already holds."""
    state = GameState.setup(5, 2)
    assert state.mission_for(0).target == 3
    assert state.check_victory(0)
    assert not state.check_victory(1)
    assert state.find_winner() == 0


def test_victory_after_conquest():
    state = GameState.setup(6, 2, random_source=ScriptedRandomSource([5, 5, 1, 2, 2]))
    assert not state.check_victory(0)

    state.attack(0, 0, 1, 2)

    assert state.check_victory(0)
    assert not state.check_victory(1)


def test_player_names_and_defaults():
    state = GameState.setup(6, 3, ["Alice"])
    names = [p.name for p in state.players.get_all_players()]
    assert names == ["Alice", "Player 1", "Player 2"]


def test_more_players_than_territories_is_tolerated():
    state = GameState.setup(3, 5)
    counts = [p.territory_count for p in state.players.get_all_players()]
    assert counts == [1, 1, 1, 0, 0]
    assert state.mission_for(4).target == 1
    assert not state.check_victory(4)
    assert state.check_victory(0)


def test_setup_rejects_bad_counts():
    with pytest.raises(ConfigurationError):
        GameState.setup(6, 0)
    with pytest.raises(ConfigurationError):
        GameState.setup(2, 2)
    with pytest.raises(ConfigurationError):
        GameState.setup(0, 1)


def test_check_victory_for_unknown_player():
    state = GameState.setup(6, 2)
    with pytest.raises(ValueError):
        state.check_victory(5)


def test_snapshots_do_not_expose_live_state():
    state = GameState.setup(6, 2)
    snapshots = state.list_territories()

    with pytest.raises(Exception):
        snapshots[0].owner = 1
    assert state.graph.get_territory(0).owner == 0


def test_default_random_source_is_created():
    state = GameState.setup(4, 2)
    assert isinstance(state.random_source, RandomSource)
    assert state.resolver.random_source is state.random_source


def test_to_dict_summary():
    state = GameState.setup(4, 2, ["Alice", "Bob"])
    data = state.to_dict()

    assert len(data["territories"]) == 4
    assert data["territories"][1] == {
        "id": 1, "name": "Territory 1", "owner": 1, "troops": 3, "neighbors": [0, 2]
    }
    assert data["players"][0]["name"] == "Alice"
    assert data["missions"][1] == {"kind": "conquer_n_territories", "target": 3}
