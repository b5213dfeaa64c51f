"""Tests for the event bus."""
from __future__ import annotations

import asyncio

from cleancatch.core.events import (
    Event,
    EventBus,
    EventType,
    arcade_event,
    button_press_event,
    difficulty_event,
    resize_event,
    tick_event,
)


class TestEmit:
    def test_subscriber_receives_event(self) -> None:
        bus = EventBus()
        received: list[Event] = []
        bus.subscribe(EventType.SCORE_CHANGED, received.append)

        bus.emit(Event(EventType.SCORE_CHANGED, data={"score": 1}))

        assert len(received) == 1
        assert received[0].data == {"score": 1}

    def test_other_types_not_delivered(self) -> None:
        bus = EventBus()
        received: list[Event] = []
        bus.subscribe(EventType.SCORE_CHANGED, received.append)

        bus.emit(Event(EventType.LIVES_CHANGED))

        assert received == []

    def test_unsubscribe(self) -> None:
        bus = EventBus()
        received: list[Event] = []
        unsubscribe = bus.subscribe(EventType.TICK, received.append)
        unsubscribe()

        bus.emit(tick_event(0.016, 1))

        assert received == []

    def test_string_event_types(self) -> None:
        bus = EventBus()
        received: list[Event] = []
        bus.subscribe("mute", received.append)

        bus.emit(Event("mute"))

        assert len(received) == 1

    def test_subscribe_all(self) -> None:
        bus = EventBus()
        received: list[Event] = []
        bus.subscribe_all(received.append)

        bus.emit(button_press_event())
        bus.emit(arcade_event("left"))

        assert [e.type for e in received] == [EventType.BUTTON_PRESS, EventType.ARCADE_LEFT]

    def test_failing_handler_does_not_stop_others(self) -> None:
        bus = EventBus()
        received: list[Event] = []

        def broken(event: Event) -> None:
            raise RuntimeError("boom")

        bus.subscribe(EventType.REPLAY, broken)
        bus.subscribe(EventType.REPLAY, received.append)

        bus.emit(Event(EventType.REPLAY))

        assert len(received) == 1

    def test_async_handlers_skipped_by_sync_emit(self) -> None:
        bus = EventBus()
        calls: list[str] = []

        async def handler(event: Event) -> None:
            calls.append("async")

        bus.subscribe(EventType.TICK, handler)
        bus.emit(tick_event(0.016, 0))

        assert calls == []


class TestQueue:
    def test_process_queue_runs_sync_and_async(self) -> None:
        calls: list[str] = []

        async def scenario() -> None:
            bus = EventBus()

            async def async_handler(event: Event) -> None:
                calls.append("async")

            bus.subscribe(EventType.ROUND_STARTED, async_handler)
            bus.subscribe(EventType.ROUND_STARTED, lambda e: calls.append("sync"))

            bus.queue_event(Event(EventType.ROUND_STARTED))
            await bus.process_queue()

        asyncio.run(scenario())

        assert sorted(calls) == ["async", "sync"]


class TestHistory:
    def test_history_is_bounded(self) -> None:
        bus = EventBus(history_limit=3)
        for frame in range(5):
            bus.emit(tick_event(0.016, frame))

        history = bus.get_history(limit=10)
        assert [e.data["frame"] for e in history] == [2, 3, 4]

    def test_history_filtered_by_type(self) -> None:
        bus = EventBus()
        bus.emit(tick_event(0.016, 0))
        bus.emit(Event(EventType.REPLAY))

        assert len(bus.get_history(EventType.REPLAY)) == 1

        bus.clear_history()
        assert bus.get_history() == []


class TestHelpers:
    def test_arcade_release_events(self) -> None:
        assert arcade_event("left", pressed=False).type is EventType.ARCADE_LEFT_RELEASE
        assert arcade_event("right", pressed=False).type is EventType.ARCADE_RIGHT_RELEASE
        assert arcade_event("right").type is EventType.ARCADE_RIGHT

    def test_difficulty_event_by_value_or_step(self) -> None:
        assert difficulty_event("hard").data == {"difficulty": "hard"}
        assert difficulty_event(step=-1).data == {"step": -1}

    def test_resize_event(self) -> None:
        event = resize_event(640, 480)
        assert event.type is EventType.RESIZE
        assert event.data == {"width": 640, "height": 480}
