"""
Tests for YAML attack scripts and the game simulator.
"""

import os
import tempfile

import pytest
import yaml

from conquest_game_engine.core.errors import ConfigurationError
from conquest_game_engine.core.game_state import GameState
from conquest_game_engine.io.yaml_attacks import AttackOrder, YAMLAttackLoader
from conquest_game_engine.simulate_yaml import GameSimulator


def make_loader():
    return YAMLAttackLoader(GameState.setup(6, 2, ["Alice", "Bob"]))


def test_parse_turns_with_names_and_ids():
    loader = make_loader()
    turns = loader.parse_turns({
        'turns': [
            {'player': 'alice', 'attacks': [{'origin': 0, 'target': 1, 'troops': 2}]},
            {'player': 1, 'skip': True},
            None,
        ]
    })

    assert len(turns) == 3
    assert turns[0].player == 0
    assert turns[0].attacks == [AttackOrder(0, 1, 2)]
    assert turns[1].player == 1
    assert turns[1].attacks == []
    assert turns[2].player is None
    assert loader.warnings == []


def test_bad_entries_become_warnings():
    loader = make_loader()
    turns = loader.parse_turns({
        'turns': [
            {'player': 'Carol', 'attacks': []},
            {'attacks': [
                {'origin': 0, 'target': 1},
                {'origin': 'zero', 'target': 1, 'troops': 1},
                'attack!',
                {'origin': 2, 'target': 3, 'troops': '1'},
            ]},
            'not a turn',
        ]
    })

    assert len(turns) == 1
    assert turns[0].attacks == [AttackOrder(2, 3, 1)]
    assert len(loader.warnings) == 5
    assert "unknown player 'Carol'" in loader.warnings[0]


def test_structural_problems_raise():
    loader = make_loader()
    with pytest.raises(ConfigurationError):
        loader.parse_turns(['turns'])
    with pytest.raises(ConfigurationError):
        loader.parse_turns({'turns': 'all of them'})


def write_game(folder, game_info, script):
    with open(os.path.join(folder, 'game_info.yaml'), 'w') as f:
        yaml.safe_dump(game_info, f)
    with open(os.path.join(folder, 'attacks.yaml'), 'w') as f:
        yaml.safe_dump(script, f)


def test_simulator_plays_until_victory():
    with tempfile.TemporaryDirectory() as temp_dir:
        write_game(temp_dir, {
            'name': 'Quick win',
            'territories': 6,
            'players': 2,
            'player_names': ['Alice', 'Bob'],
            'dice': [5, 5, 1, 2, 2],
        }, {
            'turns': [
                {'player': 'Alice', 'attacks': [{'origin': 0, 'target': 1, 'troops': 2}]},
                {'player': 'Bob', 'attacks': [{'origin': 3, 'target': 2, 'troops': 1}]},
            ]
        })

        simulator = GameSimulator(temp_dir)
        summary = simulator.run()

        assert summary['name'] == 'Quick win'
        assert summary['winner'] == 'Alice'
        assert summary['finished']
        assert len(summary['attacks']) == 1
        assert summary['attacks'][0]['outcome'] == 'conquest'
        assert summary['warnings'] == []

        path = simulator.save_summary()
        with open(path, 'r') as f:
            saved = yaml.safe_load(f)
        assert saved['winner'] == 'Alice'
        assert 'generated_at' in saved


def test_simulator_records_rejected_attacks():
    with tempfile.TemporaryDirectory() as temp_dir:
        write_game(temp_dir, {
            'territories': 6,
            'players': 2,
            'dice': [1, 6, 6, 6],
        }, {
            'turns': [
                {'attacks': [
                    {'origin': 0, 'target': 3, 'troops': 1},
                    {'origin': 0, 'target': 1, 'troops': 1},
                ]},
                {'player': 0, 'attacks': []},
                {'skip': True},
            ]
        })

        summary = GameSimulator(temp_dir).run()

    assert summary['winner'] is None
    assert not summary['finished']
    assert len(summary['attacks']) == 1
    assert summary['attacks'][0]['outcome'] == 'failure'
    assert len(summary['warnings']) == 2
    assert 'rejected' in summary['warnings'][0]
    assert 'expected player 0' in summary['warnings'][1]
    assert summary['turn_number'] == 2


def test_simulator_requires_game_info():
    with tempfile.TemporaryDirectory() as temp_dir:
        with pytest.raises(ConfigurationError):
            GameSimulator(temp_dir).run()


def test_simulator_reports_running_out_of_scripted_dice():
    with tempfile.TemporaryDirectory() as temp_dir:
        write_game(temp_dir, {
            'territories': 6,
            'players': 2,
            'dice': [5],
        }, {
            'turns': [
                {'attacks': [{'origin': 0, 'target': 1, 'troops': 2}]},
            ]
        })

        with pytest.raises(ConfigurationError):
            GameSimulator(temp_dir).run()


def test_simulator_rejects_bad_dice():
    for dice in (['a'], [0], 'six'):
        with tempfile.TemporaryDirectory() as temp_dir:
            write_game(temp_dir, {'territories': 6, 'players': 2, 'dice': dice}, {'turns': []})
            with pytest.raises(ConfigurationError):
                GameSimulator(temp_dir).run()


def test_simulator_rejects_malformed_game_info():
    with tempfile.TemporaryDirectory() as temp_dir:
        with open(os.path.join(temp_dir, 'game_info.yaml'), 'w') as f:
            f.write("territories: [6\n")

        with pytest.raises(ConfigurationError):
            GameSimulator(temp_dir).run()


def test_simulator_requires_attack_script():
    with tempfile.TemporaryDirectory() as temp_dir:
        with open(os.path.join(temp_dir, 'game_info.yaml'), 'w') as f:
            yaml.safe_dump({'territories': 6, 'players': 2}, f)

        with pytest.raises(ConfigurationError):
            GameSimulator(temp_dir).run()


def test_loader_missing_file_raises():
    loader = make_loader()
    with pytest.raises(ConfigurationError):
        loader.load_from_file('/nonexistent/attacks.yaml')
