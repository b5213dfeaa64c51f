"""
Container display backed by a numpy frame buffer.

The scene renderer paints straight into ``buffer``; the window turns it
into a pygame surface once per frame.
"""

import numpy as np
import pygame
from numpy.typing import NDArray

from ..core.interfaces import Display


def _blank(width: int, height: int) -> NDArray[np.uint8]:
    return np.zeros((height, width, 3), dtype=np.uint8)


class SimulatedDisplay(Display):
    """RGB frame buffer sized to the game container."""

    def __init__(self, width: int = 800, height: int = 600) -> None:
        self._pixels = _blank(width, height)

    @property
    def width(self) -> int:
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        return self._pixels.shape[0]

    @property
    def buffer(self) -> NDArray[np.uint8]:
        """Live buffer for in-place drawing."""
        return self._pixels

    def resize(self, width: int, height: int) -> None:
        if (width, height) != (self.width, self.height):
            self._pixels = _blank(width, height)

    def render(self) -> pygame.Surface:
        # surfarray expects x-major arrays
        return pygame.surfarray.make_surface(self._pixels.swapaxes(0, 1))
