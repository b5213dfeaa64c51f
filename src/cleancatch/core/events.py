"""
Event bus for Clean Catch.

The window publishes input and frame ticks, the round controller
publishes round and drop events, and the simulator, audio and any
test observer subscribe. Sync handlers run inline on ``emit``. Keyboard
and resize input is queued and the window drains it once per frame,
just before the frame's TICK.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Awaitable
from enum import Enum, auto
import asyncio
import inspect
import logging
import time
from collections import defaultdict, deque

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Events exchanged between window, round and presentation."""
    # Input
    BUTTON_PRESS = auto()
    ARCADE_LEFT = auto()
    ARCADE_RIGHT = auto()
    ARCADE_LEFT_RELEASE = auto()
    ARCADE_RIGHT_RELEASE = auto()
    DIFFICULTY_SELECT = auto()
    REPLAY = auto()
    RESIZE = auto()

    # Round lifecycle
    ROUND_STARTED = auto()
    ROUND_ENDED = auto()
    ROUND_RESET = auto()
    TIME_TICK = auto()

    # Drops and counters
    DROP_SPAWNED = auto()
    DROP_CAUGHT = auto()
    DROP_EXPIRED = auto()
    SCORE_CHANGED = auto()
    LIVES_CHANGED = auto()

    # Loop
    TICK = auto()
    SHUTDOWN = auto()


@dataclass
class Event:
    """A published event; ``type`` may also be a plain string for ad-hoc events."""
    type: EventType | str
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.time)


SyncHandler = Callable[[Event], None]
AsyncHandler = Callable[[Event], Awaitable[None]]
Handler = SyncHandler | AsyncHandler


class EventBus:
    """
    Pub/sub hub keyed by event type.

    ``emit`` delivers to sync handlers only and never raises: a failing
    handler is logged and the remaining handlers still run. Coroutine
    handlers are reached through the queue.
    """

    def __init__(self, history_limit: int = 100) -> None:
        self._handlers: dict[EventType | str, list[Handler]] = defaultdict(list)
        self._wildcard: list[Handler] = []
        self._pending: asyncio.Queue[Event] = asyncio.Queue()
        self._history: deque[Event] = deque(maxlen=history_limit)

    def subscribe(self, event_type: EventType | str, handler: Handler) -> Callable[[], None]:
        """Register ``handler`` for one event type; returns an unsubscribe callable."""
        return self._register(self._handlers[event_type], handler, event_type)

    def subscribe_all(self, handler: Handler) -> Callable[[], None]:
        """Register ``handler`` for every event; returns an unsubscribe callable."""
        return self._register(self._wildcard, handler, "*")

    def _register(self, bucket: list[Handler], handler: Handler, label: Any) -> Callable[[], None]:
        bucket.append(handler)
        logger.debug(f"Subscribed {getattr(handler, '__name__', handler)} to {label}")

        def unsubscribe() -> None:
            if handler in bucket:
                bucket.remove(handler)

        return unsubscribe

    def emit(self, event: Event) -> None:
        self._history.append(event)
        for handler in self._targets(event):
            if not inspect.iscoroutinefunction(handler):
                self._call(handler, event)

    def queue_event(self, event: Event) -> None:
        """Defer ``event`` until the next ``process_queue``; input waits for the frame boundary."""
        self._pending.put_nowait(event)

    async def process_queue(self) -> None:
        """Deliver every queued event to sync and async handlers."""
        while not self._pending.empty():
            event = self._pending.get_nowait()
            self._history.append(event)
            await self._deliver(event)
            self._pending.task_done()

    def _targets(self, event: Event) -> list[Handler]:
        # Copy so handlers may unsubscribe while being called
        return [*self._handlers.get(event.type, ()), *self._wildcard]

    def _call(self, handler: SyncHandler, event: Event) -> None:
        try:
            handler(event)
        except Exception as e:
            logger.error(f"Handler for {event.type} failed: {e}")

    async def _deliver(self, event: Event) -> None:
        coroutines = []
        for handler in self._targets(event):
            if inspect.iscoroutinefunction(handler):
                coroutines.append(handler(event))
            else:
                self._call(handler, event)

        if not coroutines:
            return
        for result in await asyncio.gather(*coroutines, return_exceptions=True):
            if isinstance(result, Exception):
                logger.error(f"Async handler for {event.type} failed: {result}")

    def get_history(self, event_type: EventType | str | None = None, limit: int = 10) -> list[Event]:
        """Most recent events, oldest first, optionally of one type."""
        events = [e for e in self._history if event_type is None or e.type == event_type]
        return events[-limit:]

    def clear_history(self) -> None:
        self._history.clear()


def button_press_event(source: str = "button") -> Event:
    return Event(EventType.BUTTON_PRESS, source=source)


def arcade_event(direction: str, pressed: bool = True, source: str = "arcade") -> Event:
    """Left/right key going down (``pressed``) or coming back up."""
    if direction == "left":
        event_type = EventType.ARCADE_LEFT if pressed else EventType.ARCADE_LEFT_RELEASE
    else:
        event_type = EventType.ARCADE_RIGHT if pressed else EventType.ARCADE_RIGHT_RELEASE
    return Event(event_type, source=source)


def difficulty_event(difficulty: str | None = None, step: int = 0, source: str = "keyboard") -> Event:
    """Pick a difficulty by value, or move the selection by ``step``."""
    data: dict[str, Any] = {"difficulty": difficulty} if difficulty is not None else {"step": step}
    return Event(EventType.DIFFICULTY_SELECT, data=data, source=source)


def resize_event(width: int, height: int, source: str = "window") -> Event:
    return Event(EventType.RESIZE, data={"width": width, "height": height}, source=source)


def tick_event(delta: float, frame: int) -> Event:
    """Frame tick; ``delta`` is in seconds."""
    return Event(EventType.TICK, data={"delta": delta, "frame": frame})
