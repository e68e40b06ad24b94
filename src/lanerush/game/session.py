"""
Game session orchestrator.

One session owns one of everything: clock, lane selection, ledger,
spawners, entity stream, resolver and state machine. Input collaborators
only queue intents; ``tick`` drains them and runs the frame in a fixed
order:

    clock -> intents -> run progress -> spawners -> stream -> resolver
          -> ledger checks -> state machine -> snapshot
"""

import itertools
import logging
import random
from typing import Optional

from lanerush.config.settings import Settings, get_settings
from lanerush.core.clock import FrameClock
from lanerush.core.events import (
    Event,
    EventBus,
    EventType,
    navigate_event,
    point_event,
    select_lane_event,
)
from lanerush.core.state import SessionState, StateContext, StateMachine, Trigger
from lanerush.game.collision import CollisionResolver, Outcome, OutcomeType
from lanerush.game.entities import Entity, EntityStream
from lanerush.game.lanes import Direction, LaneSelection
from lanerush.game.snapshot import EntityView, ResourceView, Snapshot
from lanerush.game.spawner import Spawner
from lanerush.modes import BaseMode, ModeResult, create_mode

logger = logging.getLogger(__name__)

_OUTCOME_EVENTS = {
    OutcomeType.CAPTURE: EventType.CAPTURE,
    OutcomeType.PENALTY_HIT: EventType.PENALTY_HIT,
    OutcomeType.MISS: EventType.MISS,
}


class GameSession:
    """
    A single playable run of one variant.

    Args:
        mode: Variant instance or registered name ("dodge", "catch")
        settings: Settings to build the variant from (cached defaults if None)
        rng: Random source for every spawn decision
        event_bus: Bus for intents and notifications (private bus if None)
    """

    def __init__(
        self,
        mode: BaseMode | str = "dodge",
        settings: Optional[Settings] = None,
        rng: Optional[random.Random] = None,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.mode = create_mode(mode, self.settings) if isinstance(mode, str) else mode
        self.rng = rng or random.Random(self.settings.seed)
        self.event_bus = event_bus or EventBus()

        self.clock = FrameClock(self.settings.max_dt)
        self.state_machine = StateMachine()
        self.selection = LaneSelection(self.settings.default_lane)
        self.ledger = self.mode.create_ledger()
        self.stream = EntityStream(self.mode.despawn_threshold)
        self.resolver = CollisionResolver(
            self.mode.capture_threshold,
            self.mode.collision_rules(),
        )
        self._ids = itertools.count(1)
        self.spawners = [
            Spawner(profile, self.rng, self._next_id)
            for profile in self.mode.spawn_profiles()
        ]

        self.reduced_motion = self.settings.reduced_motion
        self.result: ModeResult | None = None
        self._elapsed = 0.0
        self._frame = 0
        self._outcomes: list[Outcome] = []

        self._subscribe_intents()
        self.state_machine.add_listener(self._on_state_changed)

        logger.info(f"Session created: {self.mode.display_name}")

    # ------------------------------------------------------------------
    # Intents (queued, applied at the top of the next tick)
    # ------------------------------------------------------------------

    def select_lane(self, lane: int) -> None:
        self.event_bus.queue_event(select_lane_event(lane))

    def navigate(self, direction: Direction | str) -> None:
        if isinstance(direction, Direction):
            direction = direction.value
        self.event_bus.queue_event(navigate_event(direction))

    def select_point(self, x: float, y: float, width: float, height: float) -> None:
        self.event_bus.queue_event(point_event(x, y, width, height))

    def start(self) -> None:
        self.event_bus.queue_event(Event(EventType.START, source="input"))

    def toggle_pause(self) -> None:
        self.event_bus.queue_event(Event(EventType.TOGGLE_PAUSE, source="input"))

    def force_pause(self) -> None:
        self.event_bus.queue_event(Event(EventType.FORCE_PAUSE, source="visibility"))

    def set_reduced_motion(self, enabled: bool) -> None:
        self.event_bus.queue_event(
            Event(EventType.REDUCED_MOTION, data={"enabled": bool(enabled)}, source="preferences")
        )

    # ------------------------------------------------------------------
    # Frame loop
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self.state_machine.state

    @property
    def run_progress(self) -> float:
        return self.mode.run_progress

    @property
    def elapsed(self) -> float:
        """Simulated seconds spent in RUNNING this run."""
        return self._elapsed

    def tick(self, timestamp_ms: float) -> Snapshot:
        """
        Advance the session to ``timestamp_ms``.

        The only entry point the external scheduler calls. Always
        returns a snapshot, whatever the state.
        """
        dt = self.clock.tick(timestamp_ms)
        self._frame += 1
        self._outcomes = []

        self.event_bus.process_queue()

        if self.state_machine.is_running:
            self._step(dt)

        return self.snapshot()

    def _step(self, dt: float) -> None:
        self._elapsed += dt
        self.mode.advance_run(dt, self.ledger)

        if self._check_terminal():
            return

        for spawner in self.spawners:
            difficulty = self.mode.difficulty_input(spawner.profile, self.ledger)
            entity = spawner.advance(dt, difficulty)
            if entity is not None:
                self.stream.add(entity)
                self._emit_spawn(entity)

        self.stream.step(dt)
        self._outcomes = self.resolver.resolve(self.stream, self.selection.target, self.ledger)
        self.stream.sweep()

        for outcome in self._outcomes:
            self.event_bus.emit(Event(
                _OUTCOME_EVENTS[outcome.type],
                data={"outcome": outcome},
                source="resolver",
            ))

        self._check_terminal()

    def _check_terminal(self) -> bool:
        # Goal first: a run that reaches the deadline on its last second still wins
        if self.mode.goal_reached():
            self._finish(success=True)
            return True
        if self.ledger.is_exhausted:
            self._finish(success=False)
            return True
        return False

    def _finish(self, success: bool) -> None:
        self.result = self.mode.build_result(self.ledger, success)
        trigger = Trigger.GOAL_REACHED if success else Trigger.RESOURCE_EXHAUSTED
        self.state_machine.fire(trigger, **self.result.data)
        self.event_bus.emit(Event(
            EventType.RUN_WON if success else EventType.RUN_LOST,
            data={"result": self.result},
            source="session",
        ))
        logger.info(f"Run finished: {self.result.title} - {self.result.display_text}")

    def _reset_run(self) -> None:
        self.ledger.reset()
        self.stream.clear()
        self._ids = itertools.count(1)
        for spawner in self.spawners:
            spawner.reset()
        self.mode.reset()
        self.selection.reset()
        self.result = None
        self._elapsed = 0.0

    def _next_id(self) -> int:
        return next(self._ids)

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    def snapshot(self) -> Snapshot:
        return Snapshot(
            state=self.state,
            mode=self.mode.name,
            resource=ResourceView.of(self.ledger),
            run_progress=self.mode.run_progress,
            run_progress_pct=self.mode.run_progress_pct,
            entities=tuple(EntityView.of(e) for e in self.stream),
            selection=self.selection.target,
            outcomes=tuple(self._outcomes),
            capture_threshold=self.mode.capture_threshold,
            spawn_floor=self.mode.spawn_floor,
            reduced_motion=self.reduced_motion,
            elapsed=self._elapsed,
            frame=self._frame,
        )

    # ------------------------------------------------------------------
    # Intent handlers
    # ------------------------------------------------------------------

    def _subscribe_intents(self) -> None:
        bus = self.event_bus
        bus.subscribe(EventType.SELECT_LANE, self._on_select_lane)
        bus.subscribe(EventType.NAVIGATE, self._on_navigate)
        bus.subscribe(EventType.SELECT_POINT, self._on_select_point)
        bus.subscribe(EventType.START, self._on_start)
        bus.subscribe(EventType.TOGGLE_PAUSE, self._on_toggle_pause)
        bus.subscribe(EventType.FORCE_PAUSE, self._on_force_pause)
        bus.subscribe(EventType.REDUCED_MOTION, self._on_reduced_motion)

    def _steering_allowed(self) -> bool:
        # Selection survives pause and is what collisions use on resume
        if self.state in (SessionState.RUNNING, SessionState.PAUSED):
            return True
        logger.debug(f"Lane intent ignored in state {self.state.name}")
        return False

    def _on_select_lane(self, event: Event) -> None:
        if self._steering_allowed():
            self.selection.select(event.data.get("lane", self.selection.target))

    def _on_navigate(self, event: Event) -> None:
        if not self._steering_allowed():
            return
        try:
            direction = Direction(event.data.get("direction"))
        except ValueError:
            logger.debug(f"Unknown direction ignored: {event.data.get('direction')!r}")
            return
        self.selection.navigate(direction)

    def _on_select_point(self, event: Event) -> None:
        if self._steering_allowed():
            d = event.data
            self.selection.select_point(d["x"], d["y"], d["width"], d["height"])

    def _on_start(self, event: Event) -> None:
        state = self.state
        if state == SessionState.RUNNING:
            logger.debug("Start ignored, run already in progress")
            return
        if state != SessionState.PAUSED:
            self._reset_run()
        self.state_machine.fire(Trigger.START)

    def _on_toggle_pause(self, event: Event) -> None:
        self.state_machine.toggle_pause()

    def _on_force_pause(self, event: Event) -> None:
        self.state_machine.fire(Trigger.TAB_HIDDEN)

    def _on_reduced_motion(self, event: Event) -> None:
        self.reduced_motion = bool(event.data.get("enabled", False))

    def _on_state_changed(
        self,
        old_state: SessionState,
        new_state: SessionState,
        context: StateContext,
    ) -> None:
        self.event_bus.emit(Event(
            EventType.STATE_CHANGED,
            data={"from": old_state, "to": new_state},
            source="state_machine",
        ))

    def _emit_spawn(self, entity: Entity) -> None:
        self.event_bus.emit(Event(
            EventType.ENTITY_SPAWNED,
            data={"lane": entity.lane, "kind": entity.kind, "label": entity.label},
            source="spawner",
        ))
