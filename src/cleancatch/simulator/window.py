"""
Desktop window for Clean Catch.

Owns the pygame display and queues keyboard and window events on the
event bus. Each frame drains that queue, emits one TICK and blits the
container buffer.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable

import pygame

from ..config.settings import Difficulty
from ..core.events import (
    Event,
    EventBus,
    EventType,
    arcade_event,
    button_press_event,
    difficulty_event,
    resize_event,
    tick_event,
)
from .display import SimulatedDisplay
from .input import SimulatedKey

logger = logging.getLogger(__name__)

DIFFICULTY_KEYS = {
    pygame.K_1: Difficulty.EASY,
    pygame.K_2: Difficulty.NORMAL,
    pygame.K_3: Difficulty.HARD,
}

QUIT_KEYS = (pygame.K_ESCAPE, pygame.K_q)


@dataclass
class WindowConfig:
    width: int = 800
    height: int = 600
    title: str = "Clean Catch"
    resizable: bool = True
    fps: int = 60

    # Resizes never shrink the container below this
    min_width: int = 320
    min_height: int = 320


class SimulatorWindow:
    """
    pygame window hosting the game container.

    Keys:
        LEFT / RIGHT     move the catcher while held
        1 / 2 / 3        Easy / Normal / Hard
        UP / DOWN        cycle difficulty
        SPACE / RETURN   start, or replay once the round ended
        R                replay
        M                mute
        ESC / Q          quit
    """

    def __init__(self, config: WindowConfig | None = None, event_bus: EventBus | None = None) -> None:
        self.config = config or WindowConfig()
        self.event_bus = event_bus or EventBus()

        self.display = SimulatedDisplay(self.config.width, self.config.height)
        self.left_key = SimulatedKey("left")
        self.right_key = SimulatedKey("right")

        self._surface: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._open = False
        self._frames = 0

        self._held: dict[int, tuple[SimulatedKey, str]] = {
            pygame.K_LEFT: (self.left_key, "left"),
            pygame.K_RIGHT: (self.right_key, "right"),
        }
        self._actions: dict[int, Callable[[], Event]] = {
            pygame.K_SPACE: lambda: button_press_event(source="keyboard"),
            pygame.K_RETURN: lambda: button_press_event(source="keyboard"),
            pygame.K_UP: lambda: difficulty_event(step=-1),
            pygame.K_DOWN: lambda: difficulty_event(step=1),
            pygame.K_r: lambda: Event(EventType.REPLAY, source="keyboard"),
            pygame.K_m: lambda: Event("mute", source="keyboard"),
        }
        for key, difficulty in DIFFICULTY_KEYS.items():
            self._actions[key] = lambda d=difficulty: difficulty_event(d.value)

    def _open_window(self) -> None:
        pygame.init()
        pygame.display.set_caption(self.config.title)

        flags = pygame.DOUBLEBUF | (pygame.RESIZABLE if self.config.resizable else 0)
        self._surface = pygame.display.set_mode((self.config.width, self.config.height), flags)
        self._clock = pygame.time.Clock()
        logger.info(f"Window opened at {self.config.width}x{self.config.height}")

    def _pump_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._open = False
            elif event.type == pygame.KEYDOWN:
                self._key_down(event.key)
            elif event.type == pygame.KEYUP:
                self._key_up(event.key)
            elif event.type == pygame.VIDEORESIZE:
                self._resize(event.w, event.h)
            elif event.type == pygame.WINDOWFOCUSLOST:
                # KEYUP never arrives for keys released while unfocused
                self.left_key.release()
                self.right_key.release()

    def _key_down(self, key: int) -> None:
        if key in QUIT_KEYS:
            self._open = False
        elif key in self._held:
            device, direction = self._held[key]
            device.press()
            self.event_bus.queue_event(arcade_event(direction, source="keyboard"))
        elif key in self._actions:
            self.event_bus.queue_event(self._actions[key]())

    def _key_up(self, key: int) -> None:
        if key in self._held:
            device, direction = self._held[key]
            device.release()
            self.event_bus.queue_event(arcade_event(direction, pressed=False, source="keyboard"))

    def _resize(self, width: int, height: int) -> None:
        width = max(self.config.min_width, width)
        height = max(self.config.min_height, height)
        self.display.resize(width, height)
        self.event_bus.queue_event(resize_event(width, height))
        logger.info(f"Container resized to {width}x{height}")

    def _present(self) -> None:
        if self._surface is None:
            return
        # set_mode may hand back a new surface after a resize
        self._surface = pygame.display.get_surface() or self._surface
        self._surface.fill((0, 0, 0))
        self._surface.blit(self.display.render(), (0, 0))
        pygame.display.flip()

    async def run(self) -> None:
        """Frame loop: collect input, apply it, TICK, present, throttle."""
        self._open_window()
        self._open = True

        while self._open:
            self._pump_events()
            await self.event_bus.process_queue()

            if self._clock is not None:
                self.event_bus.emit(tick_event(self._clock.get_time() / 1000.0, self._frames))

            self._present()
            if self._clock is not None:
                self._clock.tick(self.config.fps)
            self._frames += 1

            await asyncio.sleep(0)

        self.event_bus.emit(Event(EventType.SHUTDOWN, source="window"))
        pygame.quit()
        logger.info("Window closed")

    def stop(self) -> None:
        self._open = False
