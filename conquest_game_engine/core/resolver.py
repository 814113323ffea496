"""
Combat resolution for the Conquest game engine.
Validates an attack, rolls dice for both sides, and applies the outcome.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from conquest_game_engine.core.dice import RandomSource
from conquest_game_engine.core.errors import (
    InvalidTerritoryError, NotOwnerError, InsufficientTroopsError,
    SelfAttackError, NotAdjacentError
)
from conquest_game_engine.core.map import TerritoryGraph
from conquest_game_engine.core.players import PlayerRegistry

logger = logging.getLogger(__name__)


class AttackOutcome(Enum):
    """Result of a single attack."""
    CONQUEST = "conquest"
    FAILURE = "failure"


@dataclass
class AttackResult:
    """Everything the display layer needs to report an attack."""
    outcome: AttackOutcome
    attack_score: int
    defense_score: int
    attacker_id: int
    origin_id: int
    target_id: int
    troops: int
    previous_owner: Optional[int] = None
    attacker_rolls: List[int] = field(default_factory=list)
    defender_rolls: List[int] = field(default_factory=list)

    @property
    def conquered(self) -> bool:
        return self.outcome == AttackOutcome.CONQUEST

    def to_dict(self) -> dict:
        return {
            "outcome": self.outcome.value,
            "attack_score": self.attack_score,
            "defense_score": self.defense_score,
            "attacker_id": self.attacker_id,
            "origin_id": self.origin_id,
            "target_id": self.target_id,
            "troops": self.troops,
            "previous_owner": self.previous_owner,
            "attacker_rolls": list(self.attacker_rolls),
            "defender_rolls": list(self.defender_rolls)
        }


class CombatResolver:
    """
    Resolves attacks against a territory graph.

    This is the only writer of ownership after setup. Every ownership change
    is mirrored into the player registry so cached territory counts stay
    equal to what the map says.
    """

    def __init__(
        self,
        graph: TerritoryGraph,
        players: PlayerRegistry,
        random_source: RandomSource
    ):
        self.graph = graph
        self.players = players
        self.random_source = random_source

    def attack(self, attacker_id: int, origin_id: int, target_id: int, troops: int) -> AttackResult:
        """
        Attack target_id from origin_id with `troops` committed troops.

        Args:
            attacker_id: Player making the attack
            origin_id: Territory the troops leave from (must be owned by the attacker)
            target_id: Adjacent territory being attacked
            troops: Committed troops; at least one troop must stay behind

        Returns:
            AttackResult with the outcome and both dice sums

        Raises:
            AttackError subclass if the attack is illegal. Nothing is mutated in that case.
        """
        # Step 1: Validate everything before touching state
        self._validate(attacker_id, origin_id, target_id, troops)

        origin = self.graph.get_territory(origin_id)
        target = self.graph.get_territory(target_id)

        logger.info(
            f"Attack: player {attacker_id} from {origin.name} ({origin.troops} troops) "
            f"-> {target.name} ({target.troops} troops) with {troops}"
        )

        # Step 2: Roll. An empty territory rolls no dice and scores 0.
        attacker_rolls = self.random_source.roll_many(troops)
        defender_rolls = self.random_source.roll_many(target.troops)
        attack_score = sum(attacker_rolls)
        defense_score = sum(defender_rolls)

        logger.info(f"Dice -> attack: {attack_score} | defense: {defense_score}")

        result = AttackResult(
            outcome=AttackOutcome.FAILURE,
            attack_score=attack_score,
            defense_score=defense_score,
            attacker_id=attacker_id,
            origin_id=origin_id,
            target_id=target_id,
            troops=troops,
            previous_owner=target.owner,
            attacker_rolls=attacker_rolls,
            defender_rolls=defender_rolls
        )

        # Step 3: Apply. Ties go to the defender.
        if attack_score > defense_score:
            self._apply_conquest(attacker_id, origin_id, target_id, troops)
            result.outcome = AttackOutcome.CONQUEST
            logger.info(f"{target.name} conquered by player {attacker_id}")
        else:
            self.graph.remove_troops(origin_id, troops)
            logger.info(f"Attack on {target.name} failed, {troops} troops lost")

        return result

    def _validate(self, attacker_id: int, origin_id: int, target_id: int, troops: int) -> None:
        if not self.graph.has_territory(origin_id) or not self.graph.has_territory(target_id):
            raise InvalidTerritoryError(
                f"Invalid territory id (origin={origin_id}, target={target_id})"
            )

        origin = self.graph.get_territory(origin_id)
        if origin.owner != attacker_id:
            raise NotOwnerError(
                f"Player {attacker_id} does not control {origin.name}"
            )

        if troops <= 0 or troops >= origin.troops:
            raise InsufficientTroopsError(
                f"Cannot attack with {troops} troops from {origin.name} "
                f"({origin.troops} present, at least 1 must stay)"
            )

        if origin_id == target_id:
            raise SelfAttackError(f"{origin.name} cannot attack itself")

        if not self.graph.is_adjacent(origin_id, target_id):
            target = self.graph.get_territory(target_id)
            raise NotAdjacentError(
                f"{target.name} is not adjacent to {origin.name}"
            )

    def _apply_conquest(self, attacker_id: int, origin_id: int, target_id: int, troops: int) -> None:
        previous_owner = self.graph.set_owner(target_id, attacker_id)

        # Counts only move on a real change of hands
        if previous_owner != attacker_id:
            if previous_owner is not None:
                self.players.decrement_territory_count(previous_owner)
            self.players.increment_territory_count(attacker_id)

        # Surviving attackers occupy the conquered territory
        self.graph.remove_troops(origin_id, troops)
        self.graph.set_troops(target_id, troops)
