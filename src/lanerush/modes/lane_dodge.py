"""Lane Dodge - dodge distractions in a tunnel before the time budget runs out."""

import math
from typing import List

from lanerush.config.settings import Settings
from lanerush.game.collision import CollisionRules
from lanerush.game.entities import EntityKind
from lanerush.game.ledger import ResourceLedger
from lanerush.game.spawner import SpawnProfile, clamp, lerp
from lanerush.modes.base import BaseMode, ModeResult


class LaneDodgeMode(BaseMode):
    name = "dodge"
    display_name = "LANE DODGE"
    description = "Reach the deadline before your time budget runs dry"
    icon = "clock"
    style = "arcade"

    def __init__(self, settings: Settings | None = None):
        super().__init__(settings)
        self.tuning = self.settings.dodge
        self._speed = self.tuning.base_speed
        self._profiles = self._build_profiles()

    def _build_profiles(self) -> List[SpawnProfile]:
        t = self.tuning
        obstacles = SpawnProfile(
            kind=EntityKind.OBSTACLE,
            labels=tuple(t.obstacle_labels),
            spawn_at=t.obstacle_spawn_at,
            interval=t.obstacle_interval,
            initial_interval=t.initial_interval,
            min_interval=t.min_interval,
            max_interval=t.max_interval,
            difficulty_slope=1.0 / t.goal_distance,
            full_difficulty_at=t.goal_distance,
            speed_band_start=t.speed_band_start,
            speed_band_end=t.speed_band_end,
            reroll_bias=t.lane_reroll_bias,
        )
        # Clock refills keep a steady rate while obstacles intensify
        pickups = SpawnProfile(
            kind=EntityKind.PICKUP,
            labels=(t.pickup_label,),
            spawn_at=t.pickup_spawn_at,
            interval=t.pickup_interval,
            initial_interval=t.initial_interval,
            min_interval=t.min_interval,
            max_interval=t.max_interval,
            difficulty_slope=0.0,
            full_difficulty_at=t.goal_distance,
            speed_band_start=t.speed_band_start,
            speed_band_end=t.speed_band_end,
            reroll_bias=t.lane_reroll_bias,
        )
        return [obstacles, pickups]

    @property
    def capture_threshold(self) -> float:
        return self.tuning.capture_threshold

    @property
    def despawn_threshold(self) -> float:
        return self.tuning.despawn_threshold

    @property
    def world_speed(self) -> float:
        return self._speed

    @property
    def run_progress_pct(self) -> float:
        return clamp(self._run_progress / self.tuning.goal_distance, 0.0, 1.0)

    def on_reset(self) -> None:
        self._speed = self.tuning.base_speed

    def create_ledger(self) -> ResourceLedger:
        return ResourceLedger.budget(self.tuning.start_budget, self.tuning.budget_cap)

    def spawn_profiles(self) -> List[SpawnProfile]:
        return self._profiles

    def collision_rules(self) -> CollisionRules:
        return CollisionRules(
            hit_penalty=self.tuning.hit_penalty,
            pickup_bonus=self.tuning.pickup_bonus,
        )

    def advance_run(self, dt: float, ledger: ResourceLedger) -> None:
        t = self.tuning
        speed_target = t.base_speed + self.run_progress_pct * t.speed_gain
        self._speed = lerp(self._speed, speed_target, t.speed_smoothing)

        ledger.drain(dt * t.drain_per_sec)
        self._run_progress += dt * self._speed

    def goal_reached(self) -> bool:
        return self._run_progress >= self.tuning.goal_distance

    def build_result(self, ledger: ResourceLedger, success: bool) -> ModeResult:
        seconds_left = math.ceil(ledger.value)
        data = {
            "budget": ledger.value,
            "hits": ledger.hits,
            "score": ledger.score,
            "distance": self._run_progress,
        }
        if success:
            return ModeResult(
                mode_name=self.name,
                success=True,
                data=data,
                title="Deadline reached",
                display_text=f"You made it to the deadline with {seconds_left}s left.",
            )
        return ModeResult(
            mode_name=self.name,
            success=False,
            data=data,
            title="Out of time",
            display_text=(
                f"The budget ran dry at {int(self.run_progress_pct * 100)}% "
                f"after {ledger.hits} hits."
            ),
        )
