"""Player-controlled catcher."""

import logging

from cleancatch.game.drops import Rect

logger = logging.getLogger(__name__)


class CatcherController:
    """Tracks the catcher's horizontal position inside the container.

    The catcher sits ``bottom_margin`` pixels above the container floor
    and only ever moves along x.
    """

    def __init__(
        self,
        container_width: float,
        container_height: float,
        width: float = 120,
        height: float = 80,
        step: float = 8.0,
        bottom_margin: float = 20,
    ):
        self.container_width = container_width
        self.container_height = container_height
        self.width = width
        self.height = height
        self.step = step
        self.bottom_margin = bottom_margin
        self.x = 0.0
        self.center()

    @property
    def max_x(self) -> float:
        return max(0.0, self.container_width - self.width)

    @property
    def top(self) -> float:
        return self.container_height - self.height - self.bottom_margin

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.top, self.width, self.height)

    def center(self) -> None:
        self.x = self.max_x / 2

    def clamp(self) -> None:
        self.x = max(0.0, min(self.max_x, self.x))

    def resize(self, container_width: float, container_height: float) -> None:
        """Adopt new container dimensions and re-center."""
        self.container_width = container_width
        self.container_height = container_height
        self.center()
        logger.debug(f"Catcher re-centered at x={self.x:.1f} for {container_width}x{container_height}")

    def update(self, left_held: bool, right_held: bool, running: bool) -> None:
        """Advance one animation frame."""
        if not running:
            return
        if left_held:
            self.x = max(0.0, self.x - self.step)
        if right_held:
            self.x = min(self.max_x, self.x + self.step)
