"""
Error types for the Conquest game engine.
Setup problems are fatal; attack rejections are recoverable and leave state untouched.
"""


class GameError(Exception):
    """Base class for all game engine errors."""
    pass


class ConfigurationError(GameError):
    """Raised when setup parameters or configuration files are invalid."""
    pass


class GameOverError(GameError):
    """Raised when an action is submitted after the game has finished."""
    pass


class AttackError(GameError):
    """Base class for rejected attacks. No state is mutated when raised."""
    pass


class InvalidTerritoryError(AttackError):
    """Origin or target is not a territory on the map."""
    pass


class NotOwnerError(AttackError):
    """The attacking player does not control the origin territory."""
    pass


class InsufficientTroopsError(AttackError):
    """Committed troops must be positive and leave at least one troop behind."""
    pass


class SelfAttackError(AttackError):
    """Origin and target are the same territory."""
    pass


class NotAdjacentError(AttackError):
    """Target territory is not a neighbor of the origin."""
    pass


class DiceExhaustedError(ConfigurationError):
    """A scripted dice sequence ran out before the game needed its last roll."""
    pass
