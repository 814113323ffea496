"""
YAML game configuration for the Conquest game engine.
Settings come from an optional YAML file, then environment variables override them.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import yaml

from conquest_game_engine.core.errors import ConfigurationError
from conquest_game_engine.core.map import MIN_RING_SIZE

DEFAULT_TERRITORIES = 6
DEFAULT_PLAYERS = 2

ENV_OVERRIDES = {
    "territory_count": "CONQUEST_TERRITORIES",
    "player_count": "CONQUEST_PLAYERS",
    "seed": "CONQUEST_SEED",
    "max_turns": "CONQUEST_MAX_TURNS",
}


def _to_int(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")


@dataclass
class GameConfig:
    """Parameters for setting up a game."""
    territory_count: int = DEFAULT_TERRITORIES
    player_count: int = DEFAULT_PLAYERS
    player_names: List[str] = field(default_factory=list)
    seed: Optional[int] = None
    max_turns: Optional[int] = None

    def validate(self) -> None:
        """Raise ConfigurationError if any setting is out of range."""
        if self.territory_count < MIN_RING_SIZE:
            raise ConfigurationError(
                f"territory_count must be at least {MIN_RING_SIZE}, got {self.territory_count}"
            )
        if self.player_count < 1:
            raise ConfigurationError(f"player_count must be at least 1, got {self.player_count}")
        if len(self.player_names) > self.player_count:
            raise ConfigurationError(
                f"{len(self.player_names)} player names given for {self.player_count} players"
            )
        if self.max_turns is not None and self.max_turns < 1:
            raise ConfigurationError(f"max_turns must be at least 1, got {self.max_turns}")

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'GameConfig':
        """Build a config from a parsed YAML mapping."""
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError("Game configuration must be a mapping")

        config = GameConfig()
        if data.get("territories") is not None:
            config.territory_count = _to_int(data["territories"], "territories")
        if data.get("players") is not None:
            config.player_count = _to_int(data["players"], "players")

        names = data.get("player_names") or []
        if not isinstance(names, list):
            raise ConfigurationError("player_names must be a list")
        config.player_names = [str(name) for name in names]

        if data.get("seed") is not None:
            config.seed = _to_int(data["seed"], "seed")
        if data.get("max_turns") is not None:
            config.max_turns = _to_int(data["max_turns"], "max_turns")

        return config

    def apply_env_overrides(self) -> None:
        """Override settings from CONQUEST_* environment variables."""
        for attr, env_name in ENV_OVERRIDES.items():
            value = os.getenv(env_name)
            if value is not None and value.strip():
                setattr(self, attr, _to_int(value, env_name))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "territories": self.territory_count,
            "players": self.player_count,
            "player_names": list(self.player_names),
            "seed": self.seed,
            "max_turns": self.max_turns
        }


def read_yaml_file(filepath: str) -> Any:
    """Parse a YAML file, turning a missing file or bad syntax into ConfigurationError."""
    if not os.path.exists(filepath):
        raise ConfigurationError(f"File not found: {filepath}")
    try:
        with open(filepath, 'r') as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Could not parse {filepath}: {e}")


def load_game_config(filepath: Optional[str] = None, use_env: bool = True) -> GameConfig:
    """
    Load and validate a game configuration.

    Args:
        filepath: Optional YAML file; defaults are used when None
        use_env: Whether CONQUEST_* environment variables override the file

    Returns:
        A validated GameConfig
    """
    data = {}
    if filepath is not None:
        data = read_yaml_file(filepath)

    config = GameConfig.from_dict(data)
    if use_env:
        config.apply_env_overrides()
    config.validate()
    return config
