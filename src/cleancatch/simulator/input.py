"""
Simulated input devices for the simulator.

Arrow keys map to two held-state keys; the round controller reads
``is_pressed`` every frame.
"""

import logging

from ..core.interfaces import InputDevice

logger = logging.getLogger(__name__)


class SimulatedKey(InputDevice):
    """
    A directional key with held state.

    The simulator window presses and releases it from keyboard
    KEYDOWN/KEYUP events, and releases it when the window loses focus.
    """

    def __init__(self, direction: str = "left") -> None:
        self.direction = direction
        self._pressed = False

    def is_pressed(self) -> bool:
        return self._pressed

    def press(self) -> None:
        if not self._pressed:
            self._pressed = True
            logger.debug(f"{self.direction} key down")

    def release(self) -> None:
        if self._pressed:
            self._pressed = False
            logger.debug(f"{self.direction} key up")
