"""
Dice for combat resolution.
RandomSource owns its own generator so games can be replayed from a seed.
"""

import random
from typing import Iterable, List, Optional

from conquest_game_engine.core.errors import ConfigurationError, DiceExhaustedError

DICE_SIDES = 6


class RandomSource:
    """Uniform d6 rolls from a private, optionally seeded generator."""
    
    def __init__(self, seed: Optional[int] = None):
        # seed=None pulls from OS entropy once, at construction
        self.seed = seed
        self._rng = random.Random(seed)
    
    def roll(self) -> int:
        """Roll a single die."""
        return self._rng.randint(1, DICE_SIDES)
    
    def roll_many(self, count: int) -> List[int]:
        """Roll `count` dice. Zero dice yields an empty list."""
        if count < 0:
            raise ValueError(f"Cannot roll a negative number of dice: {count}")
        return [self.roll() for _ in range(count)]


class ScriptedRandomSource(RandomSource):
    """
    Replays a fixed sequence of rolls.
    Used by tests and scripted simulations that need exact dice outcomes.
    """
    
    def __init__(self, rolls: Iterable[int]):
        super().__init__(seed=0)
        self._rolls = list(rolls)
        for value in self._rolls:
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"Scripted roll must be an integer: {value!r}")
            if not 1 <= value <= DICE_SIDES:
                raise ConfigurationError(f"Scripted roll out of range: {value}")
        self._index = 0

    def roll(self) -> int:
        if self._index >= len(self._rolls):
            raise DiceExhaustedError(
                f"Scripted dice exhausted after {len(self._rolls)} rolls"
            )
        value = self._rolls[self._index]
        self._index += 1
        return value
    
    def remaining(self) -> int:
        """Number of scripted rolls not yet consumed."""
        return len(self._rolls) - self._index
