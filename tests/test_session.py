from __future__ import annotations

import dataclasses
import random

import pytest

from lanerush.config.settings import Settings
from lanerush.core.events import EventType
from lanerush.core.state import SessionState
from lanerush.game.collision import OutcomeType
from lanerush.game.entities import EntityKind
from lanerush.game.session import GameSession

from conftest import Driver, make_entity, quiet_settings


def _started(session: GameSession) -> Driver:
    driver = Driver(session)
    session.start()
    snap = driver.tick()
    assert snap.state == SessionState.RUNNING
    return driver


def _hit_once(session: GameSession, driver: Driver, entity_id: int):
    session.stream.add(make_entity(session.selection.target, EntityKind.OBSTACLE, 1.0, 22.0, entity_id))
    return driver.tick()


def test_new_session_is_idle_and_static(dodge_session: GameSession) -> None:
    driver = Driver(dodge_session)
    snap = driver.run(30)
    assert snap.state == SessionState.IDLE
    assert snap.run_progress == 0.0
    assert snap.entities == ()
    assert snap.selection == 3


def test_obstacle_hit_takes_eight_seconds(dodge_session: GameSession) -> None:
    driver = _started(dodge_session)
    snap = _hit_once(dodge_session, driver, 1)

    assert snap.resource.value == 22.0
    assert snap.resource.hits == 1
    assert [o.type for o in snap.outcomes] == [OutcomeType.PENALTY_HIT]
    assert snap.entities == ()


def test_penalties_past_zero_lose_with_zero_budget(dodge_session: GameSession) -> None:
    driver = _started(dodge_session)
    states = []
    for i in range(4):
        states.append(_hit_once(dodge_session, driver, i + 1).state)

    assert states == [SessionState.RUNNING] * 3 + [SessionState.LOST]
    snap = driver.tick()
    assert snap.state == SessionState.LOST
    assert snap.resource.value == 0.0
    assert dodge_session.result is not None
    assert not dodge_session.result.success


def test_three_missed_tokens_lose(catch_session: GameSession) -> None:
    driver = _started(catch_session)
    states = []
    for i in range(3):
        catch_session.stream.add(make_entity(0, EntityKind.TOKEN, 0.995, 1.0, i + 1))
        states.append(driver.tick().state)

    assert states == [SessionState.RUNNING, SessionState.RUNNING, SessionState.LOST]
    snap = driver.tick()
    assert snap.resource.value == 0
    assert snap.resource.score == 0


def test_caught_token_scores(catch_session: GameSession) -> None:
    driver = _started(catch_session)
    catch_session.stream.add(make_entity(3, EntityKind.TOKEN, 0.995, 1.0))
    snap = driver.tick()
    assert snap.resource.score == 1
    assert snap.resource.streak == 1
    assert snap.resource.value == 3


def test_reaching_goal_wins_and_keeps_budget(dodge_session: GameSession) -> None:
    driver = Driver(dodge_session, step_ms=50.0)
    dodge_session.start()
    snap = driver.tick()
    for _ in range(5000):
        snap = driver.tick()
        if snap.state != SessionState.RUNNING:
            break

    assert snap.state == SessionState.WON
    assert snap.run_progress >= 900
    assert snap.run_progress_pct == 1.0
    assert snap.resource.value == 30.0
    assert dodge_session.result.success
    assert "30s" in dodge_session.result.display_text


def test_budget_drains_until_loss() -> None:
    settings = Settings()
    session = GameSession("dodge", settings=settings, rng=random.Random(1))
    driver = _started(session)
    snap = driver.run(100)  # 1.6 simulated seconds
    assert snap.resource.value < 30.0
    for _ in range(5000):
        snap = driver.tick(50.0)
        assert 0.0 <= snap.resource.value <= 99.0
        if snap.state != SessionState.RUNNING:
            break
    assert snap.state in (SessionState.LOST, SessionState.WON)


def test_world_speed_ramps_toward_goal_speed() -> None:
    session = GameSession("dodge", settings=quiet_settings(), rng=random.Random(1))
    driver = _started(session)
    driver.run(200)
    early = session.mode.world_speed
    driver.run(300)
    assert 22.0 <= early < session.mode.world_speed <= 40.0


def test_intents_apply_on_next_tick(dodge_session: GameSession) -> None:
    driver = _started(dodge_session)
    dodge_session.select_lane(0)
    assert dodge_session.selection.target == 3
    snap = driver.tick()
    assert snap.selection == 0

    dodge_session.navigate("right")
    dodge_session.navigate("down")
    assert driver.tick().selection == 3

    dodge_session.select_point(10, 90, 100, 100)
    assert driver.tick().selection == 1

    dodge_session.select_lane(17)
    assert driver.tick().selection == 3


def test_unknown_direction_is_ignored(dodge_session: GameSession) -> None:
    driver = _started(dodge_session)
    dodge_session.navigate("sideways")
    dodge_session.navigate("up")
    snap = driver.tick()
    assert snap.state == SessionState.RUNNING
    assert snap.selection == 2
    assert dodge_session.event_bus.pending == 0


def test_lane_intents_ignored_while_idle(dodge_session: GameSession) -> None:
    driver = Driver(dodge_session)
    dodge_session.select_lane(0)
    dodge_session.navigate("up")
    assert driver.tick().selection == 3


def test_lane_chosen_while_paused_survives_resume(dodge_session: GameSession) -> None:
    driver = _started(dodge_session)
    dodge_session.toggle_pause()
    dodge_session.select_lane(0)
    snap = driver.tick()
    assert snap.state == SessionState.PAUSED
    assert snap.selection == 0

    dodge_session.navigate("down")
    assert driver.tick().selection == 1

    dodge_session.toggle_pause()
    driver.tick()
    snap = _hit_once(dodge_session, driver, 1)
    assert snap.state == SessionState.RUNNING
    assert snap.selection == 1
    assert [(o.lane, o.type) for o in snap.outcomes] == [(1, OutcomeType.PENALTY_HIT)]


def test_new_run_resets_selection(dodge_session: GameSession) -> None:
    driver = _started(dodge_session)
    dodge_session.toggle_pause()
    dodge_session.select_lane(0)
    dodge_session.toggle_pause()
    driver.tick()
    for i in range(4):
        snap = _hit_once(dodge_session, driver, i + 1)
    assert snap.state == SessionState.LOST
    assert snap.selection == 0

    dodge_session.start()
    assert driver.tick().selection == 3


def test_pause_freezes_everything_exactly() -> None:
    session = GameSession("dodge", settings=Settings(), rng=random.Random(5))
    driver = _started(session)
    before = driver.run(120)
    assert before.entities

    session.toggle_pause()
    paused = driver.tick()
    assert paused.state == SessionState.PAUSED
    for step in (16.0, 5000.0, 16.0, 250.0):
        frozen = driver.tick(step)
        assert frozen.run_progress == before.run_progress
        assert frozen.run_progress_pct == before.run_progress_pct
        assert frozen.entities == before.entities
        assert frozen.resource == before.resource
        assert frozen.elapsed == before.elapsed

    session.toggle_pause()
    resumed = driver.tick(16.0)
    assert resumed.state == SessionState.RUNNING
    assert resumed.elapsed == pytest.approx(before.elapsed + 0.016)


def test_force_pause_only_from_running(dodge_session: GameSession) -> None:
    driver = Driver(dodge_session)
    dodge_session.force_pause()
    assert driver.tick().state == SessionState.IDLE

    dodge_session.start()
    driver.tick()
    dodge_session.force_pause()
    assert driver.tick().state == SessionState.PAUSED

    # Start acts as resume without resetting the run
    dodge_session.start()
    assert driver.tick().state == SessionState.RUNNING


def test_start_after_loss_resets_run(dodge_session: GameSession) -> None:
    driver = _started(dodge_session)
    dodge_session.select_lane(1)
    driver.tick()
    for i in range(4):
        _hit_once(dodge_session, driver, i + 1)
    assert dodge_session.state == SessionState.LOST

    dodge_session.start()
    snap = driver.tick()
    assert snap.state == SessionState.RUNNING
    assert snap.resource.value == 30.0
    assert snap.resource.hits == 0
    assert snap.entities == ()
    assert snap.selection == 3
    assert snap.run_progress < 1.0
    assert dodge_session.result is None
    assert all(s.countdown > 999 for s in dodge_session.spawners)


def test_start_while_running_is_noop(dodge_session: GameSession) -> None:
    driver = _started(dodge_session)
    _hit_once(dodge_session, driver, 1)
    dodge_session.start()
    snap = driver.tick()
    assert snap.resource.hits == 1


def test_same_seed_same_spawns() -> None:
    def play(seed: int) -> list[tuple]:
        session = GameSession("dodge", settings=Settings(), rng=random.Random(seed))
        spawns = []
        session.event_bus.subscribe(
            EventType.ENTITY_SPAWNED,
            lambda e: spawns.append((e.data["lane"], e.data["kind"], e.data["label"])),
        )
        driver = _started(session)
        snaps = [driver.tick() for _ in range(400)]
        progress = [tuple(v.progress for v in s.entities) for s in snaps]
        return spawns, progress

    first = play(42)
    assert first == play(42)
    assert len(first[0]) > 5


def test_outcome_events_published(dodge_session: GameSession) -> None:
    seen = []
    dodge_session.event_bus.subscribe(EventType.PENALTY_HIT, lambda e: seen.append(e.data["outcome"]))
    lost = []
    dodge_session.event_bus.subscribe(EventType.RUN_LOST, lambda e: lost.append(e.data["result"]))

    driver = _started(dodge_session)
    for i in range(4):
        _hit_once(dodge_session, driver, i + 1)

    assert [o.entity_id for o in seen] == [1, 2, 3, 4]
    assert len(lost) == 1


def test_catch_lives_stay_in_range() -> None:
    session = GameSession("catch", settings=Settings(), rng=random.Random(8))
    driver = _started(session)
    rng = random.Random(1)
    snap = None
    for _ in range(4000):
        if rng.random() < 0.05:
            session.select_lane(rng.randrange(4))
        snap = driver.tick()
        assert 0 <= snap.resource.value <= 3
        if snap.state == SessionState.LOST:
            break
    assert snap.state == SessionState.LOST
    assert snap.run_progress_pct == 0.0


def test_snapshot_is_read_only(dodge_session: GameSession) -> None:
    driver = _started(dodge_session)
    dodge_session.stream.add(make_entity(0, EntityKind.OBSTACLE, -50.0, 22.0))
    snap = driver.tick()

    with pytest.raises(dataclasses.FrozenInstanceError):
        snap.selection = 0
    with pytest.raises(dataclasses.FrozenInstanceError):
        snap.entities[0].progress = 1.0
    assert isinstance(snap.entities, tuple)


def test_reduced_motion_flag_round_trips(dodge_session: GameSession) -> None:
    driver = Driver(dodge_session)
    dodge_session.set_reduced_motion(True)
    assert driver.tick().reduced_motion
    dodge_session.set_reduced_motion(False)
    assert not driver.tick().reduced_motion


def test_unknown_mode_name() -> None:
    from lanerush.modes import UnknownModeError

    with pytest.raises(UnknownModeError):
        GameSession("bowling", settings=Settings())
    with pytest.raises(KeyError):
        GameSession("bowling", settings=Settings())
