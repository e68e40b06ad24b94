from __future__ import annotations

import logging

from lanerush.core.events import Event, EventBus, EventType, navigate_event, select_lane_event


def test_queued_events_wait_for_processing() -> None:
    bus = EventBus()
    seen = []
    bus.subscribe(EventType.SELECT_LANE, lambda e: seen.append(e.data["lane"]))

    bus.queue_event(select_lane_event(2))
    bus.queue_event(select_lane_event(1))
    assert seen == []
    assert bus.pending == 2

    assert bus.process_queue() == 2
    assert seen == [2, 1]
    assert bus.pending == 0


def test_events_queued_during_processing_wait_a_frame() -> None:
    bus = EventBus()
    seen = []

    def requeue(event: Event) -> None:
        seen.append(event.data["direction"])
        if event.data["direction"] == "up":
            bus.queue_event(navigate_event("down"))

    bus.subscribe(EventType.NAVIGATE, requeue)
    bus.queue_event(navigate_event("up"))

    assert bus.process_queue() == 1
    assert seen == ["up"]
    assert bus.process_queue() == 1
    assert seen == ["up", "down"]


def test_handler_errors_do_not_stop_dispatch() -> None:
    bus = EventBus()
    seen = []

    def broken(event: Event) -> None:
        raise ValueError("boom")

    bus.subscribe(EventType.CAPTURE, broken)
    bus.subscribe(EventType.CAPTURE, lambda e: seen.append(e))
    bus.emit(Event(EventType.CAPTURE))
    assert len(seen) == 1


def test_handler_errors_are_logged_at_error(caplog) -> None:
    bus = EventBus()

    def broken(event: Event) -> None:
        raise ValueError("boom")

    bus.subscribe(EventType.MISS, broken)
    with caplog.at_level(logging.DEBUG, logger="lanerush.core.events"):
        bus.emit(Event(EventType.MISS))

    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert len(errors) == 1
    assert "boom" in errors[0].getMessage()
    assert not [r for r in caplog.records if r.levelno == logging.WARNING]


def test_unsubscribe_and_global_handlers() -> None:
    bus = EventBus()
    typed, everything = [], []
    unsubscribe = bus.subscribe(EventType.MISS, typed.append)
    bus.subscribe_all(everything.append)

    bus.emit(Event(EventType.MISS))
    unsubscribe()
    bus.emit(Event(EventType.MISS))
    bus.emit(Event(EventType.START))

    assert len(typed) == 1
    assert len(everything) == 3


def test_history_is_bounded() -> None:
    bus = EventBus(history_limit=5)
    for _ in range(12):
        bus.emit(Event(EventType.MISS))
    bus.emit(Event(EventType.CAPTURE))

    assert len(bus.get_history(limit=100)) == 5
    assert len(bus.get_history(EventType.CAPTURE)) == 1
    bus.clear_history()
    assert bus.get_history() == []


def test_intent_classification() -> None:
    assert select_lane_event(0).is_intent
    assert not Event(EventType.CAPTURE).is_intent
