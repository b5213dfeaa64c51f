"""
Main entry point for Clean Catch.

Launches the pygame simulator, or a headless autopilot round when
CLEANCATCH_ENV=headless (useful on machines without a display).
"""

import asyncio
import logging
import random
import sys
from pathlib import Path

from cleancatch.config.settings import Settings
from cleancatch.game.round import RoundController, RoundSummary

FRAME_MS = 1000.0 / 60


def setup_logging(debug: bool = False, log_file: Path | None = None) -> None:
    """Configure console logging and an optional per-run log file."""
    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if debug else logging.INFO)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file is not None:
        # Truncate on each run for fresh logs
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        logging.info(f"Logging to file: {log_file}")

    # Per-drop chatter only when debugging the loop itself
    logging.getLogger("cleancatch.game.collision").setLevel(logging.INFO)
    logging.getLogger("cleancatch.game.factory").setLevel(logging.INFO)


def autopilot(controller: RoundController) -> tuple[bool, bool]:
    """Steer toward the lowest clean drop; returns (left_held, right_held)."""
    catcher = controller.catcher
    targets = [d for d in controller.drops if d.kind.is_good]
    if not targets:
        return False, False

    now = controller.clock_ms
    target = max(targets, key=lambda d: controller.engine.rect_of(d, now).top)
    aim = target.spawn_x + target.size / 2 - catcher.width * 0.4
    if aim < catcher.x - catcher.step:
        return True, False
    if aim > catcher.x + catcher.step:
        return False, True
    return False, False


def run_headless(settings: Settings, seed: int | None = None) -> RoundSummary | None:
    """Play one round with the autopilot at a fixed 60fps step."""
    logger = logging.getLogger(__name__)
    controller = RoundController(settings=settings, rng=random.Random(seed))
    controller.start_round()

    max_frames = int((settings.game.round_seconds + 1) * 1000 / FRAME_MS)
    for _ in range(max_frames):
        if not controller.is_running:
            break
        left, right = autopilot(controller)
        controller.update(FRAME_MS, left_held=left, right_held=right)

    summary = controller.summary
    if summary is not None:
        logger.info(
            f"Headless round: {summary.outcome.name} score={summary.score} lives={summary.lives}"
        )
    controller.teardown()
    return summary


def main() -> None:
    """Main entry point."""
    from dotenv import load_dotenv

    # Load environment variables
    load_dotenv()
    settings = Settings()

    setup_logging(settings.debug, settings.log_file)
    logger = logging.getLogger(__name__)
    logger.info("Clean Catch starting...")

    try:
        if settings.env == "simulator":
            from cleancatch.simulator.main import run
            logger.info("Running in simulator mode")
            asyncio.run(run(settings))
        elif settings.env == "headless":
            logger.info("Running headless autopilot round")
            run_headless(settings)
        else:
            logger.error(f"Unknown environment: {settings.env}")
            sys.exit(1)

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("Clean Catch stopped")


if __name__ == "__main__":
    main()
