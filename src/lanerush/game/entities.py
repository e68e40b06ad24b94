"""Moving entities and the per-session stream that advances them."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator
import logging

logger = logging.getLogger(__name__)


class EntityKind(Enum):
    OBSTACLE = "obstacle"
    PICKUP = "pickup"
    TOKEN = "token"


@dataclass
class Entity:
    """A lane-bound object travelling toward the capture threshold."""

    id: int
    lane: int
    kind: EntityKind
    label: str
    progress: float
    speed: float
    consumed: bool = False

    def consume(self) -> bool:
        """Mark consumed; returns False if it already was."""
        if self.consumed:
            return False
        self.consumed = True
        return True


class EntityStream:
    """
    Ordered collection of live entities.

    ``step`` integrates progress, ``sweep`` drops consumed entities and
    anything that slipped past the despawn threshold unconsumed.
    """

    def __init__(self, despawn_threshold: float) -> None:
        self.despawn_threshold = despawn_threshold
        self._entities: list[Entity] = []
        self._despawned = 0

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._entities)

    @property
    def despawned(self) -> int:
        """Unconsumed entities discarded since the last clear."""
        return self._despawned

    def add(self, entity: Entity) -> None:
        self._entities.append(entity)

    def step(self, dt: float) -> None:
        for entity in self._entities:
            entity.progress += dt * entity.speed

    def sweep(self) -> int:
        """Remove consumed and despawned entities; returns how many went."""
        before = len(self._entities)
        kept = []
        for entity in self._entities:
            if entity.consumed:
                continue
            if entity.progress >= self.despawn_threshold:
                self._despawned += 1
                logger.debug(f"Entity {entity.id} despawned in lane {entity.lane}")
                continue
            kept.append(entity)
        self._entities = kept
        return before - len(kept)

    def clear(self) -> None:
        self._entities = []
        self._despawned = 0
