"""Fixed-rate timers driven by frame deltas."""

import logging
from typing import Callable

logger = logging.getLogger(__name__)


class IntervalTimer:
    """Fires ``callback`` once per elapsed ``interval_ms``.

    Time only advances through ``advance``. A long frame fires the
    callback several times; cancelling from inside the callback stops
    any further firing in the same frame.
    """

    def __init__(self, name: str, interval_ms: float, callback: Callable[[], None]):
        if interval_ms <= 0:
            raise ValueError(f"Timer {name} needs a positive interval, got {interval_ms}")
        self.name = name
        self.interval_ms = interval_ms
        self._callback = callback
        self._accumulated = 0.0
        self._active = False
        self.fired = 0

    @property
    def active(self) -> bool:
        return self._active

    def start(self) -> None:
        self._accumulated = 0.0
        self._active = True
        self.fired = 0
        logger.debug(f"Timer {self.name} started ({self.interval_ms:.0f}ms)")

    def cancel(self) -> None:
        if self._active:
            logger.debug(f"Timer {self.name} cancelled after {self.fired} ticks")
        self._active = False
        self._accumulated = 0.0

    def advance(self, delta_ms: float) -> int:
        """Advance the timer, returning how many times it fired."""
        if not self._active:
            return 0

        self._accumulated += delta_ms
        count = 0
        while self._active and self._accumulated >= self.interval_ms:
            self._accumulated -= self.interval_ms
            self.fired += 1
            count += 1
            self._callback()
        return count
