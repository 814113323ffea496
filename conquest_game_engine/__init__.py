"""
Conquest Game Engine
A turn-based territorial conquest game on a ring of territories, with dice combat and missions.
"""

from conquest_game_engine.core.dice import RandomSource, ScriptedRandomSource
from conquest_game_engine.core.errors import (
    GameError, ConfigurationError, GameOverError, AttackError,
    InvalidTerritoryError, NotOwnerError, InsufficientTroopsError,
    SelfAttackError, NotAdjacentError
)
from conquest_game_engine.core.map import Territory, TerritorySnapshot, TerritoryGraph, create_ring_map
from conquest_game_engine.core.players import Player, PlayerRegistry
from conquest_game_engine.core.missions import Mission, MissionType, MissionEngine
from conquest_game_engine.core.resolver import AttackOutcome, AttackResult, CombatResolver
from conquest_game_engine.core.game_state import GameState, INITIAL_TROOPS
from conquest_game_engine.core.game import Game, AttackRecord
from conquest_game_engine.io.yaml_config import GameConfig, load_game_config
from conquest_game_engine.io.yaml_attacks import YAMLAttackLoader, AttackOrder, ScriptedTurn

__version__ = "1.0.0"
__all__ = [
    'RandomSource', 'ScriptedRandomSource',
    'GameError', 'ConfigurationError', 'GameOverError', 'AttackError',
    'InvalidTerritoryError', 'NotOwnerError', 'InsufficientTroopsError',
    'SelfAttackError', 'NotAdjacentError',
    'Territory', 'TerritorySnapshot', 'TerritoryGraph', 'create_ring_map',
    'Player', 'PlayerRegistry',
    'Mission', 'MissionType', 'MissionEngine',
    'AttackOutcome', 'AttackResult', 'CombatResolver',
    'GameState', 'INITIAL_TROOPS',
    'Game', 'AttackRecord',
    'GameConfig', 'load_game_config',
    'YAMLAttackLoader', 'AttackOrder', 'ScriptedTurn'
]
