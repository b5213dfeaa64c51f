"""Shared fixtures for Clean Catch tests."""
from __future__ import annotations

import random

import pytest

from cleancatch.config.settings import Difficulty, Settings
from cleancatch.core.events import EventBus
from cleancatch.core.interfaces import AudioCues
from cleancatch.core.state import RoundOutcome
from cleancatch.game.drops import Drop, DropKind
from cleancatch.game.round import RoundController


class RecordingCues(AudioCues):
    """Collects cue calls in order."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def play_catch(self) -> None:
        self.calls.append("catch")

    def play_miss(self) -> None:
        self.calls.append("miss")

    def play_round_end(self, outcome: RoundOutcome) -> None:
        self.calls.append(f"end:{outcome.name}")


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def cues() -> RecordingCues:
    return RecordingCues()


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def controller(settings: Settings, cues: RecordingCues, bus: EventBus, rng: random.Random) -> RoundController:
    return RoundController(settings=settings, cues=cues, event_bus=bus, rng=rng)


def drop_over_catcher(
    controller: RoundController,
    kind: DropKind,
    land_in_ms: float = 50.0,
    offset_x: float = 10.0,
) -> Drop:
    """Place a drop so its bottom edge enters the catch zone after ``land_in_ms``.

    The drop sits over the catcher's left side and is back-dated so that,
    ``land_in_ms`` after the current round clock, its bottom is 4px inside
    the catcher's mouth.
    """
    catcher = controller.catcher
    size = 60.0
    duration = controller.settings.game.preset(Difficulty.NORMAL).fall_duration_ms
    height = controller.container_height

    target_top = catcher.top + 4 - size
    progress = (target_top + size) / (height + size)
    spawned_at = controller.clock_ms + land_in_ms - progress * duration

    drop = Drop(
        kind=kind,
        spawn_x=catcher.x + offset_x,
        size=size,
        rotation=0,
        fall_duration_ms=duration,
        spawned_at_ms=spawned_at,
    )
    controller.engine.add(drop)
    return drop


@pytest.fixture
def place_drop(controller: RoundController):
    """Place a drop over the shared controller's catcher."""

    def _place(kind: DropKind, land_in_ms: float = 50.0, offset_x: float = 10.0) -> Drop:
        return drop_over_catcher(controller, kind, land_in_ms, offset_x)

    return _place
