"""
Threshold-crossing collision resolution.

Runs once per frame after the stream has moved. Any unconsumed entity at
or past the capture threshold is resolved against the selected lane,
consumed, and booked into the ledger straight away.
"""

from dataclasses import dataclass
from enum import Enum
import logging

from lanerush.game.entities import Entity, EntityKind, EntityStream
from lanerush.game.ledger import ResourceLedger

logger = logging.getLogger(__name__)


class OutcomeType(Enum):
    CAPTURE = "capture"
    PENALTY_HIT = "penalty_hit"
    MISS = "miss"


@dataclass(frozen=True)
class Outcome:
    """What happened to one entity at the capture threshold."""

    entity_id: int
    lane: int
    kind: EntityKind
    label: str
    type: OutcomeType
    penalized: bool = False


@dataclass(frozen=True)
class CollisionRules:
    """Ledger amounts for each branch."""

    hit_penalty: float = 8.0
    pickup_bonus: float = 6.0
    token_bonus: float = 0.0
    token_miss_penalty: float = 1.0


class CollisionResolver:
    def __init__(self, capture_threshold: float, rules: CollisionRules | None = None) -> None:
        self.capture_threshold = capture_threshold
        self.rules = rules or CollisionRules()

    def resolve(
        self,
        stream: EntityStream,
        selected_lane: int,
        ledger: ResourceLedger,
    ) -> list[Outcome]:
        """Resolve every entity that reached the threshold this frame."""
        outcomes = []
        for entity in stream:
            if entity.consumed or entity.progress < self.capture_threshold:
                continue
            entity.consume()
            outcome = self._apply(entity, selected_lane, ledger)
            outcomes.append(outcome)
            logger.debug(
                f"{outcome.type.value} {entity.kind.value} #{entity.id} "
                f"lane={entity.lane} selected={selected_lane}"
            )
            # Loss is final; later arrivals this frame must not refill it
            if outcome.penalized and ledger.is_exhausted:
                break
        return outcomes

    def _apply(self, entity: Entity, selected_lane: int, ledger: ResourceLedger) -> Outcome:
        rules = self.rules

        if entity.lane == selected_lane:
            if entity.kind == EntityKind.OBSTACLE:
                ledger.apply_penalty(rules.hit_penalty)
                ledger.record_hit()
                ledger.reset_streak()
                return self._outcome(entity, OutcomeType.PENALTY_HIT, penalized=True)

            bonus = rules.pickup_bonus if entity.kind == EntityKind.PICKUP else rules.token_bonus
            if bonus:
                ledger.apply_bonus(bonus)
            ledger.increment_score()
            ledger.increment_streak()
            return self._outcome(entity, OutcomeType.CAPTURE)

        # Wrong lane: dodged obstacles and lost pickups cost nothing
        if entity.kind == EntityKind.TOKEN:
            ledger.apply_penalty(rules.token_miss_penalty)
            ledger.record_miss()
            ledger.reset_streak()
            return self._outcome(entity, OutcomeType.MISS, penalized=True)
        return self._outcome(entity, OutcomeType.MISS)

    @staticmethod
    def _outcome(entity: Entity, kind: OutcomeType, penalized: bool = False) -> Outcome:
        return Outcome(
            entity_id=entity.id,
            lane=entity.lane,
            kind=entity.kind,
            label=entity.label,
            type=kind,
            penalized=penalized,
        )
