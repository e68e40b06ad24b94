"""
Timed entity generator with a linear difficulty curve.

Each spawner owns one countdown. When it runs out the spawner rolls a
lane, a label and a speed, then rearms itself with an interval that
shrinks as the difficulty input (distance or score) grows.
"""

from dataclasses import dataclass
from typing import Callable, Optional
import itertools
import logging
import random

from lanerush.game.entities import Entity, EntityKind
from lanerush.game.lanes import LANE_COUNT

logger = logging.getLogger(__name__)


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


@dataclass(frozen=True)
class SpawnProfile:
    """Static description of one spawn stream."""

    kind: EntityKind
    labels: tuple[str, ...]
    spawn_at: float
    interval: tuple[float, float]
    initial_interval: float
    min_interval: float
    max_interval: float
    difficulty_slope: float = 0.0
    full_difficulty_at: float = 1.0
    speed_band_start: tuple[float, float] = (1.0, 1.0)
    speed_band_end: tuple[float, float] = (1.0, 1.0)
    reroll_bias: float = 0.65

    def difficulty_factor(self, difficulty_input: float) -> float:
        return 1.0 + self.difficulty_slope * max(0.0, difficulty_input)

    def difficulty_fraction(self, difficulty_input: float) -> float:
        return clamp(difficulty_input / self.full_difficulty_at, 0.0, 1.0)


class Spawner:
    """Countdown-driven generator for one entity category."""

    def __init__(
        self,
        profile: SpawnProfile,
        rng: random.Random,
        next_id: Optional[Callable[[], int]] = None,
    ) -> None:
        self.profile = profile
        self._rng = rng
        self._next_id = next_id or itertools.count(1).__next__
        self._countdown = profile.initial_interval
        self._last_lane: int | None = None
        self._spawned = 0

    @property
    def countdown(self) -> float:
        return self._countdown

    @property
    def last_lane(self) -> int | None:
        return self._last_lane

    @property
    def spawned(self) -> int:
        return self._spawned

    def reset(self) -> None:
        self._countdown = self.profile.initial_interval
        self._last_lane = None
        self._spawned = 0

    def advance(self, dt: float, difficulty_input: float) -> Entity | None:
        """
        Run the countdown for ``dt`` seconds.

        Args:
            dt: Simulated seconds this frame
            difficulty_input: Run progress or score feeding the curve

        Returns:
            A fresh entity when the countdown elapsed, otherwise None
        """
        self._countdown -= dt
        if self._countdown > 0:
            return None

        entity = Entity(
            id=self._next_id(),
            lane=self._pick_lane(),
            kind=self.profile.kind,
            label=self._rng.choice(self.profile.labels),
            progress=self.profile.spawn_at,
            speed=self._pick_speed(difficulty_input),
        )
        self._countdown = self.next_interval(difficulty_input)
        self._last_lane = entity.lane
        self._spawned += 1

        logger.debug(
            f"Spawned {entity.kind.value}/{entity.label} #{entity.id} "
            f"lane={entity.lane} speed={entity.speed:.2f} next={self._countdown:.2f}s"
        )
        return entity

    def next_interval(self, difficulty_input: float) -> float:
        p = self.profile
        raw = self._rng.uniform(*p.interval) / p.difficulty_factor(difficulty_input)
        return clamp(raw, p.min_interval, p.max_interval)

    def _pick_lane(self) -> int:
        lane = self._rng.randrange(LANE_COUNT)
        if lane == self._last_lane and self._rng.random() < self.profile.reroll_bias:
            others = [i for i in range(LANE_COUNT) if i != lane]
            lane = self._rng.choice(others)
        return lane

    def _pick_speed(self, difficulty_input: float) -> float:
        t = self.profile.difficulty_fraction(difficulty_input)
        lo = lerp(self.profile.speed_band_start[0], self.profile.speed_band_end[0], t)
        hi = lerp(self.profile.speed_band_start[1], self.profile.speed_band_end[1], t)
        return self._rng.uniform(lo, hi)
