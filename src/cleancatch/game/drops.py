"""Drop records and fall geometry."""

from dataclasses import dataclass, field
from enum import Enum, auto
from itertools import count


class DropKind(Enum):
    """What is falling. Only CLEAN is worth catching."""

    CLEAN = auto()
    BANANA = auto()
    DIRTY = auto()
    FLY = auto()
    SODA_CAN = auto()

    @property
    def is_good(self) -> bool:
        return self is DropKind.CLEAN

    @property
    def rotates(self) -> bool:
        return self in (DropKind.BANANA, DropKind.FLY, DropKind.SODA_CAN)


BAD_KINDS = (DropKind.BANANA, DropKind.DIRTY, DropKind.FLY, DropKind.SODA_CAN)


class DropState(Enum):
    """Drop lifecycle. CAUGHT and EXPIRED are terminal."""

    FALLING = auto()
    CAUGHT = auto()
    EXPIRED = auto()


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in container pixels (y grows downward)."""

    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height


_drop_ids = count(1)


@dataclass
class Drop:
    """A single falling object.

    Spawn attributes are fixed at construction; only ``state`` changes,
    and only once.
    """

    kind: DropKind
    spawn_x: float
    size: float
    rotation: int
    fall_duration_ms: float
    spawned_at_ms: float = 0.0
    state: DropState = DropState.FALLING
    drop_id: int = field(default_factory=lambda: next(_drop_ids))

    @property
    def is_falling(self) -> bool:
        return self.state is DropState.FALLING

    def finalize(self, state: DropState) -> bool:
        """Move out of FALLING. Returns False if already finalized."""
        if state is DropState.FALLING:
            raise ValueError("Cannot finalize a drop back to FALLING")
        if self.state is not DropState.FALLING:
            return False
        self.state = state
        return True

    def rect_at(self, elapsed_ms: float, container_height: float) -> Rect:
        """Bounding box after ``elapsed_ms`` of falling."""
        top = fall_position(self, elapsed_ms, container_height)
        return Rect(self.spawn_x, top, self.size, self.size)


def fall_progress(drop: Drop, elapsed_ms: float) -> float:
    """Fraction of the fall completed, clamped to [0, 1]."""
    if drop.fall_duration_ms <= 0:
        return 1.0
    return max(0.0, min(1.0, elapsed_ms / drop.fall_duration_ms))


def fall_position(drop: Drop, elapsed_ms: float, container_height: float) -> float:
    """Top edge of a drop after ``elapsed_ms``.

    Linear travel from just above the container (top = -size) to just
    below it (top = container_height).
    """
    start = -drop.size
    return start + (container_height - start) * fall_progress(drop, elapsed_ms)
