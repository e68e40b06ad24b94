"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Nested variant tuning can be overridden with the ``__`` delimiter, e.g.
``LANERUSH_DODGE__HIT_PENALTY=10``.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DodgeSettings(BaseSettings):
    """Lane dodge tuning: draining time budget and a distance goal."""

    # Time budget (seconds)
    start_budget: float = Field(default=30.0, gt=0.0)
    budget_cap: float = Field(default=99.0, gt=0.0)
    drain_per_sec: float = Field(default=1.0, ge=0.0)
    pickup_bonus: float = Field(default=6.0, ge=0.0)
    hit_penalty: float = Field(default=8.0, ge=0.0)

    # Run progress
    goal_distance: float = Field(default=900.0, gt=0.0)
    base_speed: float = Field(default=22.0, gt=0.0)  # units/sec
    speed_gain: float = Field(default=18.0, ge=0.0)  # added at the goal
    speed_smoothing: float = Field(default=0.04, gt=0.0, le=1.0)

    # Travel axis (world z toward the camera)
    obstacle_spawn_at: float = -92.0
    pickup_spawn_at: float = -85.0
    capture_threshold: float = 1.1
    despawn_threshold: float = 6.5

    # Spawn timing (seconds)
    obstacle_interval: tuple[float, float] = (0.55, 1.05)
    pickup_interval: tuple[float, float] = (0.65, 1.35)
    initial_interval: float = Field(default=0.7, gt=0.0)
    min_interval: float = Field(default=0.2, gt=0.0)
    max_interval: float = Field(default=1.35, gt=0.0)

    # Entity speed band: (low, high) early and at full difficulty
    speed_band_start: tuple[float, float] = (22.0, 24.0)
    speed_band_end: tuple[float, float] = (38.0, 40.0)

    obstacle_labels: tuple[str, ...] = ("social", "email", "meeting")
    pickup_label: str = "clock"
    lane_reroll_bias: float = Field(default=0.65, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _check_bounds(self) -> "DodgeSettings":
        if self.despawn_threshold < self.capture_threshold:
            raise ValueError("despawn_threshold must not precede capture_threshold")
        if self.min_interval > self.max_interval:
            raise ValueError("min_interval must not exceed max_interval")
        if not self.obstacle_labels:
            raise ValueError("obstacle_labels must not be empty")
        return self


class CatchSettings(BaseSettings):
    """Lane catch tuning: limited lives, difficulty escalating with score."""

    lives: int = Field(default=3, ge=1)

    # Travel axis (normalized 0 -> 1)
    spawn_at: float = 0.0
    capture_threshold: float = 1.0
    despawn_threshold: float = 1.2

    # Spawn timing (seconds)
    token_interval: tuple[float, float] = (0.9, 1.6)
    initial_interval: float = Field(default=0.6, gt=0.0)
    min_interval: float = Field(default=0.35, gt=0.0)
    max_interval: float = Field(default=1.6, gt=0.0)
    difficulty_slope: float = Field(default=0.05, ge=0.0)  # per point of score

    # Token speed band (travel fraction per second)
    speed_band_start: tuple[float, float] = (0.45, 0.65)
    speed_band_end: tuple[float, float] = (0.95, 1.05)
    max_difficulty_score: int = Field(default=40, ge=1)

    token_labels: tuple[str, ...] = ("coin", "gem", "star", "heart")
    lane_reroll_bias: float = Field(default=0.65, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _check_bounds(self) -> "CatchSettings":
        if self.despawn_threshold < self.capture_threshold:
            raise ValueError("despawn_threshold must not precede capture_threshold")
        if self.min_interval > self.max_interval:
            raise ValueError("min_interval must not exceed max_interval")
        if not self.token_labels:
            raise ValueError("token_labels must not be empty")
        return self


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="LANERUSH_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Game
    mode: Literal["dodge", "catch"] = "dodge"
    seed: int | None = None
    max_dt: float = Field(default=0.05, gt=0.0)
    default_lane: int = Field(default=3, ge=0, le=3)
    reduced_motion: bool = False
    debug: bool = False

    # Simulator window
    window_width: int = 720
    window_height: int = 720
    render_size: int = 128
    fps: int = 60
    fullscreen: bool = False

    # Variant tuning
    dodge: DodgeSettings = Field(default_factory=DodgeSettings)
    catch: CatchSettings = Field(default_factory=CatchSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
