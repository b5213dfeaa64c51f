"""
Abstract collaborators consumed by the game core.

The pygame simulator provides real implementations; tests provide
stubs. The core never imports pygame directly.
"""

from abc import ABC, abstractmethod

import numpy as np
from numpy.typing import NDArray

from .state import RoundOutcome


class Display(ABC):
    """Abstract base class for the frame buffer the scene is painted into."""

    @property
    @abstractmethod
    def width(self) -> int:
        """Display width in pixels."""
        ...

    @property
    @abstractmethod
    def height(self) -> int:
        """Display height in pixels."""
        ...

    @property
    @abstractmethod
    def buffer(self) -> NDArray[np.uint8]:
        """
        Live frame buffer, drawn into in place.

        Shape is (height, width, 3) with RGB values.
        """
        ...

    @abstractmethod
    def resize(self, width: int, height: int) -> None:
        """Reallocate the buffer for a new size."""
        ...


class InputDevice(ABC):
    """Abstract base class for a held-state input key."""

    @abstractmethod
    def is_pressed(self) -> bool:
        """Check if the key is currently held."""
        ...


class AudioCues(ABC):
    """Fire-and-forget sound triggers used by the round controller."""

    @abstractmethod
    def play_catch(self) -> None:
        """A good drop was caught."""
        ...

    @abstractmethod
    def play_miss(self) -> None:
        """A bad drop was caught and cost a life."""
        ...

    @abstractmethod
    def play_round_end(self, outcome: RoundOutcome) -> None:
        """The round finished."""
        ...


class SilentCues(AudioCues):
    """Cue sink used when no audio device is wired in."""

    def play_catch(self) -> None:
        pass

    def play_miss(self) -> None:
        pass

    def play_round_end(self, outcome: RoundOutcome) -> None:
        pass
