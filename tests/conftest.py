from __future__ import annotations

import random

import pytest

from lanerush.config.settings import CatchSettings, DodgeSettings, Settings
from lanerush.game.entities import Entity, EntityKind
from lanerush.game.session import GameSession


class Driver:
    """Feeds a session evenly spaced timestamps."""

    def __init__(self, session: GameSession, step_ms: float = 16.0) -> None:
        self.session = session
        self.step_ms = step_ms
        self.now_ms = 0.0
        self._primed = False

    def tick(self, step_ms: float | None = None):
        if self._primed:
            self.now_ms += self.step_ms if step_ms is None else step_ms
        self._primed = True
        return self.session.tick(self.now_ms)

    def run(self, frames: int):
        snap = None
        for _ in range(frames):
            snap = self.tick()
        return snap


def quiet_settings(**overrides) -> Settings:
    """Settings whose spawners stay silent and whose budget never drains."""
    dodge = DodgeSettings(drain_per_sec=0.0, initial_interval=1000.0, **overrides.pop("dodge", {}))
    catch = CatchSettings(initial_interval=1000.0, **overrides.pop("catch", {}))
    return Settings(dodge=dodge, catch=catch, **overrides)


def make_entity(
    lane: int,
    kind: EntityKind,
    progress: float,
    speed: float,
    entity_id: int = 900,
    label: str = "x",
) -> Entity:
    return Entity(id=entity_id, lane=lane, kind=kind, label=label, progress=progress, speed=speed)


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def dodge_session() -> GameSession:
    return GameSession("dodge", settings=quiet_settings(), rng=random.Random(7))


@pytest.fixture
def catch_session() -> GameSession:
    return GameSession("catch", settings=quiet_settings(), rng=random.Random(7))
