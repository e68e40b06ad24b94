"""Lane Catch - catch every falling token, three misses and you are out."""

from typing import List

from lanerush.config.settings import Settings
from lanerush.game.collision import CollisionRules
from lanerush.game.entities import EntityKind
from lanerush.game.ledger import ResourceLedger
from lanerush.game.spawner import SpawnProfile
from lanerush.modes.base import BaseMode, ModeResult


class LaneCatchMode(BaseMode):
    name = "catch"
    display_name = "LANE CATCH"
    description = "Be in the right lane for every token"
    icon = "coin"
    style = "arcade"

    def __init__(self, settings: Settings | None = None):
        super().__init__(settings)
        self.tuning = self.settings.catch
        t = self.tuning
        self._profiles = [
            SpawnProfile(
                kind=EntityKind.TOKEN,
                labels=tuple(t.token_labels),
                spawn_at=t.spawn_at,
                interval=t.token_interval,
                initial_interval=t.initial_interval,
                min_interval=t.min_interval,
                max_interval=t.max_interval,
                difficulty_slope=t.difficulty_slope,
                full_difficulty_at=float(t.max_difficulty_score),
                speed_band_start=t.speed_band_start,
                speed_band_end=t.speed_band_end,
                reroll_bias=t.lane_reroll_bias,
            )
        ]

    @property
    def capture_threshold(self) -> float:
        return self.tuning.capture_threshold

    @property
    def despawn_threshold(self) -> float:
        return self.tuning.despawn_threshold

    def create_ledger(self) -> ResourceLedger:
        return ResourceLedger.lives(self.tuning.lives)

    def spawn_profiles(self) -> List[SpawnProfile]:
        return self._profiles

    def collision_rules(self) -> CollisionRules:
        return CollisionRules(token_bonus=0.0, token_miss_penalty=1.0)

    def difficulty_input(self, profile: SpawnProfile, ledger: ResourceLedger) -> float:
        return float(ledger.score)

    def advance_run(self, dt: float, ledger: ResourceLedger) -> None:
        # Elapsed running time; lives only move on collisions
        self._run_progress += dt

    def build_result(self, ledger: ResourceLedger, success: bool) -> ModeResult:
        return ModeResult(
            mode_name=self.name,
            success=success,
            data={
                "score": ledger.score,
                "best_streak": ledger.best_streak,
                "misses": ledger.misses,
                "elapsed": self._run_progress,
            },
            title="Game over",
            display_text=f"Caught {ledger.score} tokens, best streak {ledger.best_streak}.",
        )
