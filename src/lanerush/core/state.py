"""
State machine for a LANE RUSH session.

States:
    IDLE: Session created, nothing simulated yet
    RUNNING: Simulation steps every frame
    PAUSED: Everything frozen until resumed
    WON: Run goal reached (terminal until the next start)
    LOST: Resource exhausted (terminal until the next start)
"""

from enum import Enum, auto
from dataclasses import dataclass, field
from typing import Callable, Any
import logging

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """Session states."""
    IDLE = auto()
    RUNNING = auto()
    PAUSED = auto()
    WON = auto()
    LOST = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (SessionState.WON, SessionState.LOST)


class Trigger(Enum):
    """Events that can move the session between states."""
    START = auto()
    PAUSE = auto()
    RESUME = auto()
    TAB_HIDDEN = auto()
    GOAL_REACHED = auto()
    RESOURCE_EXHAUSTED = auto()


@dataclass
class StateContext:
    """Context data carried alongside the current state."""
    last_trigger: Trigger | None = None
    runs_started: int = 0
    result_data: dict[str, Any] = field(default_factory=dict)


Listener = Callable[[SessionState, SessionState, StateContext], None]


class StateMachine:
    """
    Manages session state and transitions.

    Transitions are a total function of (state, trigger): a pair missing
    from the table is a no-op that leaves the state untouched.
    """

    TRANSITIONS: dict[tuple[SessionState, Trigger], SessionState] = {
        # Starting a run (terminal states restart via implicit reset)
        (SessionState.IDLE, Trigger.START): SessionState.RUNNING,
        (SessionState.WON, Trigger.START): SessionState.RUNNING,
        (SessionState.LOST, Trigger.START): SessionState.RUNNING,
        (SessionState.PAUSED, Trigger.START): SessionState.RUNNING,  # Start-or-resume

        # Pausing
        (SessionState.RUNNING, Trigger.PAUSE): SessionState.PAUSED,
        (SessionState.RUNNING, Trigger.TAB_HIDDEN): SessionState.PAUSED,
        (SessionState.PAUSED, Trigger.RESUME): SessionState.RUNNING,

        # Run outcomes
        (SessionState.RUNNING, Trigger.GOAL_REACHED): SessionState.WON,
        (SessionState.RUNNING, Trigger.RESOURCE_EXHAUSTED): SessionState.LOST,
    }

    def __init__(self, initial_state: SessionState = SessionState.IDLE) -> None:
        self._state = initial_state
        self._context = StateContext()
        self._listeners: list[Listener] = []
        logger.debug(f"StateMachine initialized with state: {initial_state.name}")

    @property
    def state(self) -> SessionState:
        """Get current state."""
        return self._state

    @property
    def context(self) -> StateContext:
        """Get current context."""
        return self._context

    @property
    def is_running(self) -> bool:
        return self._state == SessionState.RUNNING

    def target_for(self, trigger: Trigger) -> SessionState | None:
        """State the trigger would lead to, or None if it does not apply."""
        return self.TRANSITIONS.get((self._state, trigger))

    def can_fire(self, trigger: Trigger) -> bool:
        return self.target_for(trigger) is not None

    def fire(self, trigger: Trigger, **result_data: Any) -> bool:
        """
        Apply a trigger.

        Args:
            trigger: Trigger to apply
            **result_data: Extra data merged into the context

        Returns:
            True if the state changed
        """
        to_state = self.target_for(trigger)
        if to_state is None:
            logger.debug(f"Ignored trigger {trigger.name} in state {self._state.name}")
            return False

        old_state = self._state
        self._state = to_state
        self._context.last_trigger = trigger
        if trigger == Trigger.START and old_state != SessionState.PAUSED:
            self._context.runs_started += 1
            self._context.result_data = {}
        self._context.result_data.update(result_data)

        logger.info(f"State transition: {old_state.name} -> {to_state.name} ({trigger.name})")

        for listener in self._listeners:
            try:
                listener(old_state, to_state, self._context)
            except Exception as e:
                logger.error(f"Error in state listener: {e}")

        return True

    def toggle_pause(self) -> bool:
        """Pause when running, resume when paused, otherwise do nothing."""
        if self._state == SessionState.RUNNING:
            return self.fire(Trigger.PAUSE)
        if self._state == SessionState.PAUSED:
            return self.fire(Trigger.RESUME)
        logger.debug(f"Pause toggle ignored in state {self._state.name}")
        return False

    def add_listener(self, callback: Listener) -> None:
        """Add a state change listener."""
        self._listeners.append(callback)

    def remove_listener(self, callback: Listener) -> None:
        """Remove a state change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)

    def reset(self) -> None:
        """Return to IDLE, dropping any run context."""
        old_state = self._state
        self._state = SessionState.IDLE
        self._context = StateContext()

        for listener in self._listeners:
            try:
                listener(old_state, SessionState.IDLE, self._context)
            except Exception as e:
                logger.error(f"Error in state listener during reset: {e}")

        logger.info("StateMachine reset to IDLE")
