"""
YAML attack script loader for the Conquest game engine.
Reads scripted turns of attacks, resolving player names and reporting bad entries.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from conquest_game_engine.core.errors import ConfigurationError
from conquest_game_engine.core.game_state import GameState
from conquest_game_engine.io.yaml_config import read_yaml_file

logger = logging.getLogger(__name__)


class AttackScriptError(ConfigurationError):
    """Raised when a single scripted attack cannot be parsed."""
    pass


@dataclass
class AttackOrder:
    """A single scripted attack."""
    origin: int
    target: int
    troops: int

    def __repr__(self) -> str:
        return f"{self.origin} -> {self.target} ({self.troops})"


@dataclass
class ScriptedTurn:
    """The attacks one player makes in one turn. player=None means whoever is up."""
    player: Optional[int] = None
    attacks: List[AttackOrder] = field(default_factory=list)


class YAMLAttackLoader:
    """Loads and validates attack scripts from YAML files."""

    def __init__(self, game_state: GameState):
        self.game_state = game_state
        self.warnings: List[str] = []

    def load_from_file(self, filepath: str) -> Dict:
        """Load a YAML attack script."""
        return read_yaml_file(filepath) or {}

    def parse_turns(self, yaml_data: Dict) -> List[ScriptedTurn]:
        """
        Parse scripted turns from YAML data.

        Expected shape:
            turns:
              - player: Alice        # optional, id or name
                attacks:
                  - {origin: 0, target: 1, troops: 2}
              - skip: true

        Invalid attacks are skipped and described in self.warnings.
        """
        if not isinstance(yaml_data, dict):
            raise ConfigurationError("Attack script must be a mapping")

        turns_data = yaml_data.get('turns') or []
        if not isinstance(turns_data, list):
            raise ConfigurationError("'turns' must be a list")

        turns = []
        for index, turn_data in enumerate(turns_data):
            turn = self._parse_turn(index, turn_data)
            if turn is not None:
                turns.append(turn)

        logger.info(f"Parsed {len(turns)} scripted turns with {len(self.warnings)} warnings")
        return turns

    def _parse_turn(self, index: int, turn_data: Any) -> Optional[ScriptedTurn]:
        if turn_data is None:
            return ScriptedTurn()
        if not isinstance(turn_data, dict):
            self.warnings.append(f"Turn {index}: expected a mapping, got {turn_data!r}")
            return None

        player = None
        if turn_data.get('player') is not None:
            player = self._resolve_player(turn_data['player'])
            if player is None:
                self.warnings.append(f"Turn {index}: unknown player {turn_data['player']!r}")
                return None

        turn = ScriptedTurn(player=player)
        if turn_data.get('skip'):
            return turn

        for attack_data in turn_data.get('attacks') or []:
            try:
                order = self._parse_single_attack(attack_data)
                turn.attacks.append(order)
            except AttackScriptError as e:
                self.warnings.append(f"Turn {index}: {e}")

        return turn

    def _parse_single_attack(self, attack_data: Any) -> AttackOrder:
        """Parse one attack entry such as {origin: 0, target: 1, troops: 2}."""
        if not isinstance(attack_data, dict):
            raise AttackScriptError(f"Attack must be a mapping, got {attack_data!r}")

        values = {}
        for key in ('origin', 'target', 'troops'):
            if key not in attack_data:
                raise AttackScriptError(f"Missing '{key}' in attack {attack_data}")
            raw = attack_data[key]
            if isinstance(raw, bool):
                raise AttackScriptError(f"'{key}' must be an integer in attack {attack_data}")
            try:
                values[key] = int(raw)
            except (TypeError, ValueError):
                raise AttackScriptError(f"'{key}' must be an integer in attack {attack_data}")

        return AttackOrder(values['origin'], values['target'], values['troops'])

    def _resolve_player(self, value: Any) -> Optional[int]:
        """Find a player by id or (case-insensitive) name."""
        players = self.game_state.players
        if isinstance(value, int) and not isinstance(value, bool):
            return value if players.has_player(value) else None

        name = str(value).strip().lower()
        for player in players.get_all_players():
            if player.name.lower() == name:
                return player.id
        if name.isdigit() and players.has_player(int(name)):
            return int(name)
        return None
