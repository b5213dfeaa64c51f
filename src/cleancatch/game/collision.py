"""Fall and collision engine.

One pass per frame over the live drop collection. Each drop is checked
against the catcher's catch zone, then against the bottom of its fall;
finalized drops leave the collection in the same pass.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from cleancatch.game.drops import Drop, DropState, Rect, fall_progress

logger = logging.getLogger(__name__)

# Catch zone as fractions of the catcher box
CATCH_ZONE_DEPTH = 0.4   # top 40% of the catcher
CATCH_ZONE_WIDTH = 0.8   # left 80%, the right lip does not catch


def catches(drop_rect: Rect, catcher_rect: Rect) -> bool:
    """Zone rule: the drop's bottom edge lands in the catcher mouth."""
    zone_bottom = catcher_rect.top + CATCH_ZONE_DEPTH * catcher_rect.height
    zone_right = catcher_rect.left + CATCH_ZONE_WIDTH * catcher_rect.width

    horizontal = drop_rect.right > catcher_rect.left and drop_rect.left < zone_right
    vertical = catcher_rect.top <= drop_rect.bottom <= zone_bottom
    return horizontal and vertical


@dataclass(frozen=True)
class Resolution:
    """A drop leaving the FALLING state."""

    drop: Drop
    state: DropState

    @property
    def caught(self) -> bool:
        return self.state is DropState.CAUGHT


class FallEngine:
    """Owns the live drop collection."""

    def __init__(self, container_height: float):
        self.container_height = container_height
        self._drops: List[Drop] = []

    def __len__(self) -> int:
        return len(self._drops)

    @property
    def drops(self) -> Tuple[Drop, ...]:
        return tuple(self._drops)

    def add(self, drop: Drop) -> None:
        self._drops.append(drop)

    def is_live(self, drop: Drop) -> bool:
        return drop in self._drops

    def clear(self) -> None:
        self._drops.clear()

    def elapsed(self, drop: Drop, now_ms: float) -> float:
        return max(0.0, now_ms - drop.spawned_at_ms)

    def rect_of(self, drop: Drop, now_ms: float) -> Rect:
        return drop.rect_at(self.elapsed(drop, now_ms), self.container_height)

    def step(
        self,
        now_ms: float,
        catcher_rect: Rect,
        on_resolve: Optional[Callable[[Resolution], None]] = None,
        running: Optional[Callable[[], bool]] = None,
    ) -> List[Resolution]:
        """Resolve every drop that was caught or reached the bottom.

        ``on_resolve`` runs immediately for each resolution. ``running``
        is re-checked before every drop; once it returns False the pass
        stops and the remaining drops stay frozen where they are.
        """
        resolutions: List[Resolution] = []

        for drop in list(self._drops):
            if running is not None and not running():
                break
            if not self.is_live(drop) or not drop.is_falling:
                continue

            elapsed = self.elapsed(drop, now_ms)
            rect = drop.rect_at(elapsed, self.container_height)

            if catches(rect, catcher_rect):
                new_state = DropState.CAUGHT
            elif fall_progress(drop, elapsed) >= 1.0:
                new_state = DropState.EXPIRED
            else:
                continue

            if not drop.finalize(new_state):
                continue
            self._drops.remove(drop)

            resolution = Resolution(drop, new_state)
            resolutions.append(resolution)
            logger.debug(f"Drop {drop.drop_id} {new_state.name.lower()} ({drop.kind.name})")

            if on_resolve is not None:
                on_resolve(resolution)

        return resolutions
