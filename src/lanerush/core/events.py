"""
Event bus system for LANE RUSH.

Carries two kinds of traffic:
    - player intents queued by input collaborators and drained at the
      top of each frame
    - gameplay notifications (spawns, outcomes, state changes) emitted
      synchronously for renderers and feedback hooks
"""

from dataclasses import dataclass, field
from typing import Any, Callable
from enum import Enum, auto
from collections import defaultdict, deque
import logging
import time

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Built-in event types."""
    # Player intents
    SELECT_LANE = auto()
    NAVIGATE = auto()
    SELECT_POINT = auto()
    START = auto()
    TOGGLE_PAUSE = auto()
    FORCE_PAUSE = auto()
    REDUCED_MOTION = auto()

    # Gameplay notifications
    ENTITY_SPAWNED = auto()
    CAPTURE = auto()
    PENALTY_HIT = auto()
    MISS = auto()
    STATE_CHANGED = auto()
    RUN_WON = auto()
    RUN_LOST = auto()


INTENT_TYPES = frozenset({
    EventType.SELECT_LANE,
    EventType.NAVIGATE,
    EventType.SELECT_POINT,
    EventType.START,
    EventType.TOGGLE_PAUSE,
    EventType.FORCE_PAUSE,
    EventType.REDUCED_MOTION,
})


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: Event type (EventType enum or custom string)
        data: Event payload
        source: Component that emitted the event
        timestamp: Wall-clock creation time
    """
    type: EventType | str
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.time)

    @property
    def is_intent(self) -> bool:
        return self.type in INTENT_TYPES


Handler = Callable[[Event], None]


class EventBus:
    """
    Synchronous pub/sub bus with a frame-drained intent queue.

    Handlers run in subscription order on the caller's thread. Queued
    events wait until ``process_queue`` is called, which the session
    does exactly once at the top of every tick.
    """

    def __init__(self, history_limit: int = 100) -> None:
        self._handlers: dict[EventType | str, list[Handler]] = defaultdict(list)
        self._global_handlers: list[Handler] = []
        self._queue: deque[Event] = deque()
        self._event_history: deque[Event] = deque(maxlen=history_limit)

    def subscribe(
        self,
        event_type: EventType | str,
        handler: Handler
    ) -> Callable[[], None]:
        """
        Subscribe to an event type.

        Args:
            event_type: Type of event to listen for
            handler: Callback function

        Returns:
            Unsubscribe function
        """
        self._handlers[event_type].append(handler)
        logger.debug(f"Handler subscribed to {event_type}")

        def unsubscribe() -> None:
            if handler in self._handlers[event_type]:
                self._handlers[event_type].remove(handler)
                logger.debug(f"Handler unsubscribed from {event_type}")

        return unsubscribe

    def subscribe_all(self, handler: Handler) -> Callable[[], None]:
        """Subscribe to every event; returns an unsubscribe function."""
        self._global_handlers.append(handler)

        def unsubscribe() -> None:
            if handler in self._global_handlers:
                self._global_handlers.remove(handler)

        return unsubscribe

    def emit(self, event: Event) -> None:
        """Dispatch an event to its handlers immediately."""
        self._event_history.append(event)
        self._dispatch(event)

    def queue_event(self, event: Event) -> None:
        """Queue an event for the next ``process_queue`` call."""
        self._queue.append(event)

    @property
    def pending(self) -> int:
        return len(self._queue)

    def process_queue(self) -> int:
        """
        Dispatch everything queued so far.

        Events queued by handlers during processing wait for the next
        call, so one frame never chases its own tail.

        Returns:
            Number of events dispatched
        """
        count = len(self._queue)
        for _ in range(count):
            self.emit(self._queue.popleft())
        return count

    def clear_queue(self) -> None:
        self._queue.clear()

    def _dispatch(self, event: Event) -> None:
        handlers = self._handlers.get(event.type, []) + self._global_handlers

        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in event handler for {event.type}: {e}")

    def get_history(
        self,
        event_type: EventType | str | None = None,
        limit: int = 10
    ) -> list[Event]:
        """Get recent events from history."""
        history = list(self._event_history)
        if event_type is not None:
            history = [e for e in history if e.type == event_type]
        return history[-limit:]

    def clear_history(self) -> None:
        """Clear event history."""
        self._event_history.clear()


# Convenience functions for creating common intents
def select_lane_event(lane: int, source: str = "input") -> Event:
    """Create a direct lane selection intent."""
    return Event(EventType.SELECT_LANE, data={"lane": lane}, source=source)


def navigate_event(direction: str, source: str = "input") -> Event:
    """Create a relative lane navigation intent."""
    return Event(EventType.NAVIGATE, data={"direction": direction}, source=source)


def point_event(x: float, y: float, width: float, height: float, source: str = "pointer") -> Event:
    """Create a pointer quadrant selection intent."""
    return Event(
        EventType.SELECT_POINT,
        data={"x": x, "y": y, "width": width, "height": height},
        source=source,
    )
