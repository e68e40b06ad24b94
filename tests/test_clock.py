from __future__ import annotations

import random

import pytest

from lanerush.core.clock import MAX_DT, FrameClock


def test_first_tick_sets_baseline() -> None:
    clock = FrameClock()
    assert not clock.has_baseline
    assert clock.tick(123456.0) == 0.0
    assert clock.has_baseline


def test_regular_frame_delta_in_seconds() -> None:
    clock = FrameClock()
    clock.tick(1000.0)
    assert clock.tick(1016.0) == pytest.approx(0.016)


def test_long_gap_is_clamped() -> None:
    clock = FrameClock()
    clock.tick(0.0)
    assert clock.tick(30_000.0) == MAX_DT


def test_backwards_timestamp_yields_zero() -> None:
    clock = FrameClock()
    clock.tick(500.0)
    assert clock.tick(400.0) == 0.0
    # Baseline follows the new timestamp
    assert clock.tick(410.0) == pytest.approx(0.010)


def test_random_sequences_stay_in_range() -> None:
    rng = random.Random(3)
    clock = FrameClock()
    ts = 0.0
    for _ in range(2000):
        ts += rng.uniform(-50.0, 400.0)
        dt = clock.tick(ts)
        assert 0.0 <= dt <= 0.05


def test_reset_forgets_baseline() -> None:
    clock = FrameClock()
    clock.tick(0.0)
    clock.reset()
    assert clock.tick(10_000.0) == 0.0
