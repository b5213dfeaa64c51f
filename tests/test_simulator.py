"""Tests for the simulator's display buffer, held keys, window input and wiring."""
from __future__ import annotations

import asyncio

import pygame
import pytest

from cleancatch.config.settings import AudioSettings, Difficulty, Settings
from cleancatch.core.events import EventBus, EventType, button_press_event, tick_event
from cleancatch.core.state import RoundState
from cleancatch.game.collision import CATCH_ZONE_DEPTH
from cleancatch.game.factory import BANANA_SIZES, DROP_SIZES
from cleancatch.simulator.display import SimulatedDisplay
from cleancatch.simulator.input import SimulatedKey
from cleancatch.simulator.main import MAX_FRAME_MS, CleanCatchSimulator
from cleancatch.simulator.window import SimulatorWindow


class MusicRecorder:
    """Stands in for the audio engine's music controls."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def start_music(self) -> None:
        self.calls.append("start")

    def stop_music(self) -> None:
        self.calls.append("stop")


@pytest.fixture
def simulator() -> CleanCatchSimulator:
    settings = Settings(_env_file=None, audio=AudioSettings(enabled=False))
    return CleanCatchSimulator(settings)


class TestSimulatedKey:
    def test_press_and_release(self) -> None:
        key = SimulatedKey("left")

        key.press()
        assert key.is_pressed()
        key.press()
        key.release()
        key.release()

        assert not key.is_pressed()


class TestSimulatedDisplay:
    def test_buffer_shape(self) -> None:
        display = SimulatedDisplay(320, 240)
        assert display.buffer.shape == (240, 320, 3)
        assert (display.width, display.height) == (320, 240)

    def test_resize(self) -> None:
        display = SimulatedDisplay(4, 4)
        display.resize(8, 6)
        assert display.buffer.shape == (6, 8, 3)
        assert (display.width, display.height) == (8, 6)


class TestWindowInput:
    def test_keys_wait_for_the_frame_boundary(self) -> None:
        async def scenario() -> list[EventType]:
            bus = EventBus()
            window = SimulatorWindow(event_bus=bus)

            window._key_down(pygame.K_SPACE)
            window._key_down(pygame.K_LEFT)

            assert window.left_key.is_pressed()
            assert bus.get_history() == []

            await bus.process_queue()
            return [e.type for e in bus.get_history()]

        assert asyncio.run(scenario()) == [EventType.BUTTON_PRESS, EventType.ARCADE_LEFT]

    def test_difficulty_keys(self) -> None:
        async def scenario() -> list[dict]:
            bus = EventBus()
            window = SimulatorWindow(event_bus=bus)
            window._key_down(pygame.K_3)
            window._key_down(pygame.K_UP)
            await bus.process_queue()
            return [e.data for e in bus.get_history(EventType.DIFFICULTY_SELECT)]

        assert asyncio.run(scenario()) == [{"difficulty": "hard"}, {"step": -1}]

    def test_resize_is_clamped_and_queued(self) -> None:
        bus = EventBus()
        window = SimulatorWindow(event_bus=bus)

        window._resize(100, 900)

        assert (window.display.width, window.display.height) == (320, 900)
        assert bus.get_history() == []


class TestSimulatorWiring:
    def test_music_follows_round_state(self, simulator: CleanCatchSimulator) -> None:
        music = MusicRecorder()
        simulator.audio = music

        simulator.event_bus.emit(button_press_event(source="keyboard"))
        assert simulator.controller.state is RoundState.RUNNING
        simulator.controller.replay()

        assert music.calls == ["start", "stop"]

    def test_stalled_frame_is_clamped(self, simulator: CleanCatchSimulator) -> None:
        simulator.controller.start_round()

        simulator.event_bus.emit(tick_event(1.0, 0))

        assert simulator.controller.clock_ms == MAX_FRAME_MS

    def test_clamped_frame_cannot_skip_the_catch_zone(self) -> None:
        settings = Settings(_env_file=None)
        height = settings.display.container_height
        zone = settings.display.catcher_height * CATCH_ZONE_DEPTH
        largest = max(BANANA_SIZES + DROP_SIZES)

        for difficulty in Difficulty:
            preset = settings.game.preset(difficulty)
            travel = (height + largest) / preset.fall_duration_ms * MAX_FRAME_MS
            assert travel < zone, difficulty
