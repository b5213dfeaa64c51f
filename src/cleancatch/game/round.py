"""Round controller: timers, scoring and the win/loss lifecycle.

Three timing sources mutate the round, all driven from ``update``:
the per-frame pass (catcher movement and collision), the spawn cadence
and the one-second countdown. Each runs to completion before the next
and re-checks the running flag first.
"""

import logging
import random
from dataclasses import asdict, dataclass
from typing import Optional, Tuple

from cleancatch.config.settings import Difficulty, DifficultyPreset, Settings, get_settings
from cleancatch.core.events import Event, EventBus, EventType
from cleancatch.core.interfaces import AudioCues, SilentCues
from cleancatch.core.state import RoundOutcome, RoundState, StateMachine
from cleancatch.game.catcher import CatcherController
from cleancatch.game.collision import FallEngine, Resolution
from cleancatch.game.drops import Drop
from cleancatch.game.factory import DropFactory
from cleancatch.game.timers import IntervalTimer

logger = logging.getLogger(__name__)

COUNTDOWN_INTERVAL_MS = 1000.0


@dataclass
class RoundStats:
    """Mutable per-round counters. Owned by the controller only."""

    score: int = 0
    lives: int = 3
    time_left: int = 30
    difficulty: Difficulty = Difficulty.NORMAL


@dataclass(frozen=True)
class RoundSummary:
    """Snapshot surfaced when a round ends."""

    outcome: RoundOutcome
    score: int
    lives: int
    time_left: int
    difficulty: Difficulty

    @property
    def won(self) -> bool:
        return self.outcome is RoundOutcome.WIN


class RoundController:
    """Owns one round's state and drives it frame by frame.

    Lifecycle:
        1. start_round(difficulty) - IDLE -> RUNNING
        2. update(delta_ms, ...)   - per-frame handlers
        3. (timer or lives)        - RUNNING -> ENDED
        4. replay()                - back to IDLE with fresh counters
        5. teardown()              - release everything
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        cues: Optional[AudioCues] = None,
        event_bus: Optional[EventBus] = None,
        rng: Optional[random.Random] = None,
        viewport_width: Optional[float] = None,
    ):
        self.settings = settings or get_settings()
        game = self.settings.game
        display = self.settings.display

        self.cues = cues or SilentCues()
        self.event_bus = event_bus
        self.state_machine = StateMachine()
        self._rng = rng or random.Random()

        self.container_width: float = display.container_width
        self.container_height: float = display.container_height
        self.viewport_width: float = viewport_width or display.container_width

        self.factory = DropFactory(game, rng=self._rng)
        self.engine = FallEngine(self.container_height)
        self.catcher = CatcherController(
            self.container_width,
            self.container_height,
            width=display.catcher_width,
            height=display.catcher_height,
            step=game.catcher_step,
            bottom_margin=display.catcher_bottom_margin,
        )

        self.selected_difficulty: Difficulty = game.default_difficulty
        self.stats = self._fresh_stats(self.selected_difficulty)
        self._preset: DifficultyPreset = game.preset(self.selected_difficulty)
        self._clock_ms = 0.0
        self._spawn_timer: Optional[IntervalTimer] = None
        self._countdown: Optional[IntervalTimer] = None
        self._summary: Optional[RoundSummary] = None

        logger.debug("RoundController created")

    # Read-only views

    @property
    def state(self) -> RoundState:
        return self.state_machine.state

    @property
    def is_running(self) -> bool:
        return self.state_machine.is_running

    @property
    def outcome(self) -> Optional[RoundOutcome]:
        return self.state_machine.context.outcome

    @property
    def drops(self) -> Tuple[Drop, ...]:
        return self.engine.drops

    @property
    def clock_ms(self) -> float:
        """Round clock; only advances while RUNNING."""
        return self._clock_ms

    @property
    def summary(self) -> Optional[RoundSummary]:
        return self._summary

    # Commands

    def select_difficulty(self, difficulty: Difficulty) -> bool:
        """Pick the difficulty for the next start. Only allowed while IDLE."""
        if self.state != RoundState.IDLE:
            return False
        self.selected_difficulty = difficulty
        self.stats.difficulty = difficulty
        logger.debug(f"Difficulty selected: {difficulty.value}")
        return True

    def start_round(self, difficulty: Optional[Difficulty] = None) -> bool:
        """Start a round. No-op if one is already running."""
        if self.is_running:
            logger.debug("Start ignored, round already running")
            return False
        if self.state != RoundState.IDLE:
            logger.warning(f"Start ignored in state {self.state.name}, replay first")
            return False

        difficulty = difficulty or self.selected_difficulty
        self.selected_difficulty = difficulty
        self._preset = self.settings.game.preset(difficulty)
        self._reset_round(difficulty)

        if not self.state_machine.transition(RoundState.RUNNING, difficulty=difficulty, outcome=None):
            return False

        self._spawn_timer = IntervalTimer("spawn", self._preset.spawn_interval_ms, self._on_spawn_tick)
        self._countdown = IntervalTimer("countdown", COUNTDOWN_INTERVAL_MS, self._on_countdown_tick)
        self._spawn_timer.start()
        self._countdown.start()

        logger.info(
            f"Round started: {difficulty.value}, spawn every {self._preset.spawn_interval_ms:.0f}ms, "
            f"fall {self._preset.fall_duration_ms:.0f}ms"
        )
        self._emit(EventType.ROUND_STARTED, difficulty=difficulty.value)
        return True

    def replay(self) -> None:
        """Return to IDLE with fresh counters, whatever happened before."""
        self._cancel_timers()
        if self.state != RoundState.IDLE:
            self.state_machine.transition(RoundState.IDLE, outcome=None)

        self._reset_round(self.selected_difficulty)
        self.catcher.center()
        logger.info("Round reset")
        self._emit(EventType.ROUND_RESET)

    def resize(
        self,
        container_width: float,
        container_height: float,
        viewport_width: Optional[float] = None,
    ) -> None:
        """Adopt a new container size and re-center the catcher."""
        self.container_width = container_width
        self.container_height = container_height
        self.viewport_width = viewport_width or container_width
        self.engine.container_height = container_height
        self.catcher.resize(container_width, container_height)
        logger.info(f"Container resized to {container_width}x{container_height}")

    def teardown(self) -> None:
        """Cancel timers and drop all round state."""
        self._cancel_timers()
        self.engine.clear()
        self.factory.ledger.clear()
        self.state_machine.reset()
        self._summary = None
        logger.debug("RoundController torn down")

    # Per-frame driver

    def update(self, delta_ms: float, left_held: bool = False, right_held: bool = False) -> None:
        """Advance one animation frame."""
        if not self.is_running:
            return

        self._clock_ms += delta_ms
        self.catcher.update(left_held, right_held, self.is_running)
        self.engine.step(
            self._clock_ms,
            self.catcher.rect,
            on_resolve=self._resolve,
            running=lambda: self.is_running,
        )

        if self._spawn_timer is not None:
            self._spawn_timer.advance(delta_ms)
        if self._countdown is not None:
            self._countdown.advance(delta_ms)

    # Handlers

    def _on_spawn_tick(self) -> None:
        if not self.is_running:
            return
        drop = self.factory.create(
            self._preset,
            viewport_width=self.viewport_width,
            container_width=self.container_width,
            now_ms=self._clock_ms,
        )
        self.engine.add(drop)
        self._emit(EventType.DROP_SPAWNED, drop_id=drop.drop_id, kind=drop.kind.name)

    def _on_countdown_tick(self) -> None:
        if not self.is_running:
            if self._countdown is not None:
                self._countdown.cancel()
            return

        self.stats.time_left = max(0, self.stats.time_left - 1)
        self._emit(EventType.TIME_TICK, time_left=self.stats.time_left)

        if self.stats.time_left <= 0 and self.stats.lives > 0:
            self._end_round(RoundOutcome.WIN)

    def _resolve(self, resolution: Resolution) -> None:
        drop = resolution.drop
        if not resolution.caught:
            self._emit(EventType.DROP_EXPIRED, drop_id=drop.drop_id, kind=drop.kind.name)
            return

        self._emit(EventType.DROP_CAUGHT, drop_id=drop.drop_id, kind=drop.kind.name)

        if drop.kind.is_good:
            self.stats.score += 1
            self.cues.play_catch()
            self._emit(EventType.SCORE_CHANGED, score=self.stats.score)
            return

        if self.stats.lives <= 0:
            return
        self.stats.lives -= 1
        self.cues.play_miss()
        self._emit(EventType.LIVES_CHANGED, lives=self.stats.lives)

        if self.stats.lives == 0:
            self._end_round(RoundOutcome.LOSS)

    def _end_round(self, outcome: RoundOutcome) -> None:
        if not self.is_running:
            return

        self._cancel_timers()
        if not self.state_machine.transition(RoundState.ENDED, outcome=outcome):
            return

        self._summary = RoundSummary(
            outcome=outcome,
            score=self.stats.score,
            lives=self.stats.lives,
            time_left=self.stats.time_left,
            difficulty=self.stats.difficulty,
        )
        logger.info(
            f"Round ended: {outcome.name} score={self.stats.score} lives={self.stats.lives} "
            f"time_left={self.stats.time_left}, {len(self.engine)} drops frozen"
        )
        self.cues.play_round_end(outcome)

        data = asdict(self._summary)
        data["outcome"] = outcome.name
        data["difficulty"] = self.stats.difficulty.value
        self._emit(EventType.ROUND_ENDED, **data)

    # Internals

    def _fresh_stats(self, difficulty: Difficulty) -> RoundStats:
        game = self.settings.game
        return RoundStats(
            score=0,
            lives=game.starting_lives,
            time_left=game.round_seconds,
            difficulty=difficulty,
        )

    def _reset_round(self, difficulty: Difficulty) -> None:
        self.stats = self._fresh_stats(difficulty)
        self.engine.clear()
        self.factory.ledger.clear()
        self._clock_ms = 0.0
        self._summary = None

    def _cancel_timers(self) -> None:
        if self._spawn_timer is not None:
            self._spawn_timer.cancel()
        if self._countdown is not None:
            self._countdown.cancel()

    def _emit(self, event_type: EventType, **data) -> None:
        if self.event_bus is None:
            return
        self.event_bus.emit(Event(event_type, data=data, source="round"))
