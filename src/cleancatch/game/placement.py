"""Spawn placement: keeps new drops away from ones that just appeared."""

import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)


class RecentPositions:
    """Short-lived ledger of spawn x-coordinates.

    Entries expire ``ttl_ms`` after insertion, measured on the round
    clock passed in by the caller.
    """

    def __init__(self, ttl_ms: float = 1000.0):
        self.ttl_ms = ttl_ms
        self._entries: List[Tuple[float, float]] = []  # (x, expires_at_ms)

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, x: float, now_ms: float) -> None:
        self._entries.append((x, now_ms + self.ttl_ms))

    def prune(self, now_ms: float) -> None:
        """Drop entries whose time-to-live has run out."""
        self._entries = [(x, exp) for x, exp in self._entries if exp > now_ms]

    def positions(self, now_ms: Optional[float] = None) -> List[float]:
        if now_ms is not None:
            self.prune(now_ms)
        return [x for x, _ in self._entries]

    def clear(self) -> None:
        self._entries.clear()


@dataclass(frozen=True)
class Placement:
    """An accepted spawn position and how many draws it took."""

    x: float
    attempts: int


class PositionSampler:
    """Draws spawn x-coordinates with bounded retry.

    A candidate closer than ``min_distance`` to any recent position is
    redrawn; after ``max_attempts`` the last draw is accepted as is.
    """

    def __init__(
        self,
        ledger: RecentPositions,
        min_distance: float = 80.0,
        max_attempts: int = 10,
        rng: Optional[random.Random] = None,
    ):
        self.ledger = ledger
        self.min_distance = min_distance
        self.max_attempts = max(1, max_attempts)
        self._rng = rng or random.Random()

    def is_clear(self, x: float, recent: List[float]) -> bool:
        return all(abs(pos - x) >= self.min_distance for pos in recent)

    def sample(self, container_width: float, size: float, now_ms: float) -> Placement:
        span = max(0.0, container_width - size)
        recent = self.ledger.positions(now_ms)

        attempts = 0
        while True:
            x = self._rng.random() * span
            attempts += 1
            if self.is_clear(x, recent) or attempts >= self.max_attempts:
                break

        if not self.is_clear(x, recent):
            logger.debug(f"Placement gave up after {attempts} attempts, x={x:.1f}")

        self.ledger.add(x, now_ms)
        return Placement(x=x, attempts=attempts)
