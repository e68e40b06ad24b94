"""Read-only per-frame views handed to renderers and HUDs."""

from dataclasses import dataclass

from lanerush.core.state import SessionState
from lanerush.game.collision import Outcome
from lanerush.game.entities import Entity, EntityKind
from lanerush.game.ledger import ResourceKind, ResourceLedger


@dataclass(frozen=True)
class ResourceView:
    kind: ResourceKind
    value: float
    cap: float
    score: int
    streak: int
    hits: int
    misses: int

    @classmethod
    def of(cls, ledger: ResourceLedger) -> "ResourceView":
        return cls(
            kind=ledger.kind,
            value=ledger.value,
            cap=ledger.cap,
            score=ledger.score,
            streak=ledger.streak,
            hits=ledger.hits,
            misses=ledger.misses,
        )


@dataclass(frozen=True)
class EntityView:
    """Entity as seen by a renderer; identity is deliberately left out."""

    lane: int
    kind: EntityKind
    label: str
    progress: float

    @classmethod
    def of(cls, entity: Entity) -> "EntityView":
        return cls(entity.lane, entity.kind, entity.label, entity.progress)


@dataclass(frozen=True)
class Snapshot:
    state: SessionState
    mode: str
    resource: ResourceView
    run_progress: float
    run_progress_pct: float
    entities: tuple[EntityView, ...]
    selection: int
    outcomes: tuple[Outcome, ...] = ()
    capture_threshold: float = 1.0
    spawn_floor: float = 0.0
    reduced_motion: bool = False
    elapsed: float = 0.0
    frame: int = 0

    def travel_fraction(self, entity: EntityView) -> float:
        """Normalized 0 (spawn) -> 1 (capture) position for drawing."""
        span = self.capture_threshold - self.spawn_floor
        if span <= 0:
            return 1.0
        return (entity.progress - self.spawn_floor) / span
