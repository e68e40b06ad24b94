"""Resource and score bookkeeping for a run."""

from dataclasses import dataclass
from enum import Enum
import logging

logger = logging.getLogger(__name__)


class ResourceKind(Enum):
    BUDGET = "budget"  # seconds, continuous
    LIVES = "lives"    # discrete, never refilled


@dataclass
class ResourceLedger:
    """
    Scalar resource plus score counters.

    Every operation saturates: the resource stays in ``[0, cap]`` and
    nothing raises. Exhaustion is reported, not enforced; the session
    decides what to do about it.
    """

    kind: ResourceKind
    start: float
    cap: float
    value: float = 0.0
    score: int = 0
    streak: int = 0
    best_streak: int = 0
    hits: int = 0
    misses: int = 0

    def __post_init__(self) -> None:
        self.reset()

    @classmethod
    def budget(cls, start: float, cap: float = 99.0) -> "ResourceLedger":
        return cls(kind=ResourceKind.BUDGET, start=float(start), cap=float(cap))

    @classmethod
    def lives(cls, count: int) -> "ResourceLedger":
        return cls(kind=ResourceKind.LIVES, start=int(count), cap=int(count))

    def reset(self) -> None:
        self.value = self._clamp(self.start)
        self.score = 0
        self.streak = 0
        self.best_streak = 0
        self.hits = 0
        self.misses = 0

    @property
    def is_exhausted(self) -> bool:
        return self.value <= 0

    def apply_bonus(self, amount: float) -> float:
        """Refill the budget; lives are never refilled."""
        if self.kind == ResourceKind.LIVES:
            return self.value
        self.value = self._clamp(self.value + max(0.0, amount))
        return self.value

    def apply_penalty(self, amount: float = 1.0) -> float:
        """Take ``amount`` seconds off the budget, or one life."""
        if self.kind == ResourceKind.LIVES:
            self.value = self._clamp(self.value - 1)
        else:
            self.value = self._clamp(self.value - max(0.0, amount))
        logger.debug(f"Penalty applied, {self.kind.value} now {self.value}")
        return self.value

    def drain(self, amount: float) -> float:
        """Continuous budget decay; does not count as a penalty."""
        if self.kind == ResourceKind.BUDGET:
            self.value = self._clamp(self.value - max(0.0, amount))
        return self.value

    def increment_score(self, points: int = 1) -> int:
        self.score += max(0, points)
        return self.score

    def increment_streak(self) -> int:
        self.streak += 1
        self.best_streak = max(self.best_streak, self.streak)
        return self.streak

    def reset_streak(self) -> None:
        self.streak = 0

    def record_hit(self) -> None:
        self.hits += 1

    def record_miss(self) -> None:
        self.misses += 1

    def _clamp(self, value: float) -> float:
        clamped = max(0, min(self.cap, value))
        if self.kind == ResourceKind.LIVES:
            return int(clamped)
        return float(clamped)
