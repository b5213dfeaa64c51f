"""
Simulator entry point.

Runs Clean Catch in a desktop pygame window: the window feeds input and
frame ticks through the event bus, the round controller advances the
game, and the scene renderer paints the result.
"""

import asyncio
import logging
import sys

from dotenv import load_dotenv

from cleancatch.audio.engine import AudioEngine
from cleancatch.config.settings import Difficulty, Settings, get_settings
from cleancatch.core.events import Event, EventBus, EventType
from cleancatch.core.state import RoundState, StateContext
from cleancatch.game.round import RoundController
from cleancatch.graphics.scene import DIFFICULTY_ORDER, SceneRenderer
from cleancatch.main import setup_logging
from cleancatch.simulator.window import SimulatorWindow, WindowConfig

logger = logging.getLogger(__name__)

# Longest step a stalled frame may advance; keeps per-frame drop travel
# shorter than the catch zone is deep, even on Hard
MAX_FRAME_MS = 50.0
COUNTDOWN_WARNING_SECONDS = 5


class CleanCatchSimulator:
    """Main simulator application wiring window, game and audio."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        display = self.settings.display

        self.event_bus = EventBus()

        self.audio = AudioEngine(self.settings.audio)
        self.audio.init()

        self.window = SimulatorWindow(
            config=WindowConfig(
                width=display.container_width,
                height=display.container_height,
                resizable=display.resizable,
                fps=display.fps,
            ),
            event_bus=self.event_bus,
        )

        self.controller = RoundController(
            settings=self.settings,
            cues=self.audio,
            event_bus=self.event_bus,
        )
        self.renderer = SceneRenderer(self.controller)

        self._setup_event_handlers()
        logger.info("CleanCatchSimulator initialized")

    def _setup_event_handlers(self) -> None:
        """Route window input to the round controller."""
        self.event_bus.subscribe(EventType.TICK, self._on_tick)
        self.event_bus.subscribe(EventType.BUTTON_PRESS, self._on_button)
        self.event_bus.subscribe(EventType.DIFFICULTY_SELECT, self._on_difficulty)
        self.event_bus.subscribe(EventType.REPLAY, self._on_replay)
        self.event_bus.subscribe(EventType.RESIZE, self._on_resize)
        self.event_bus.subscribe("mute", self._on_mute)

        # Music follows the round lifecycle; countdown ticks follow the clock
        self.controller.state_machine.add_listener(self._on_state_change)
        self.event_bus.subscribe(EventType.TIME_TICK, self._on_time_tick)

    def _on_tick(self, event: Event) -> None:
        """Handle frame tick - update and render."""
        delta_ms = min(event.data.get("delta", 0.016) * 1000, MAX_FRAME_MS)

        self.controller.update(
            delta_ms,
            left_held=self.window.left_key.is_pressed(),
            right_held=self.window.right_key.is_pressed(),
        )
        self.renderer.render(self.window.display.buffer)

    def _on_button(self, event: Event) -> None:
        state = self.controller.state
        if state == RoundState.IDLE:
            self.controller.start_round()
        elif state == RoundState.ENDED:
            self.controller.replay()

    def _on_difficulty(self, event: Event) -> None:
        if self.controller.state != RoundState.IDLE:
            return

        if "difficulty" in event.data:
            difficulty = Difficulty(event.data["difficulty"])
        else:
            index = DIFFICULTY_ORDER.index(self.controller.selected_difficulty)
            index = (index + event.data.get("step", 1)) % len(DIFFICULTY_ORDER)
            difficulty = DIFFICULTY_ORDER[index]

        if self.controller.select_difficulty(difficulty):
            self.audio.play_click()

    def _on_replay(self, event: Event) -> None:
        self.controller.replay()

    def _on_resize(self, event: Event) -> None:
        width = event.data["width"]
        height = event.data["height"]
        self.controller.resize(width, height, viewport_width=width)

    def _on_mute(self, event: Event) -> None:
        self.audio.toggle_mute()

    def _on_state_change(self, old: RoundState, new: RoundState, context: StateContext) -> None:
        if new == RoundState.RUNNING:
            self.audio.start_music()
        elif old == RoundState.RUNNING:
            self.audio.stop_music()

    def _on_time_tick(self, event: Event) -> None:
        time_left = event.data.get("time_left", 0)
        if 0 < time_left <= COUNTDOWN_WARNING_SECONDS:
            self.audio.play_countdown_tick()

    async def run(self) -> None:
        """Run the simulator."""
        logger.info("Starting Clean Catch...")
        try:
            await self.window.run()
        finally:
            self.controller.teardown()
            self.audio.cleanup()


async def run(settings: Settings | None = None) -> None:
    """Build and run the simulator."""
    simulator = CleanCatchSimulator(settings)
    await simulator.run()


def main() -> None:
    """Main entry point for the simulator."""
    load_dotenv()
    settings = get_settings()
    setup_logging(settings.debug, settings.log_file)

    logger.info("Clean Catch Simulator Starting")
    logger.info("Controls:")
    logger.info("  LEFT/RIGHT    - Move catcher")
    logger.info("  1/2/3, UP/DN  - Pick difficulty")
    logger.info("  SPACE/ENTER   - Start / play again")
    logger.info("  R             - Replay")
    logger.info("  M             - Mute")
    logger.info("  ESC/Q         - Quit")

    try:
        asyncio.run(run(settings))
    except KeyboardInterrupt:
        logger.info("Simulator stopped by user")
    except Exception as e:
        logger.exception(f"Simulator error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
