"""Core framework components for LANE RUSH."""

from .clock import FrameClock
from .events import EventBus, Event, EventType
from .state import SessionState, StateMachine, Trigger

__all__ = [
    "FrameClock",
    "EventBus",
    "Event",
    "EventType",
    "SessionState",
    "StateMachine",
    "Trigger",
]
