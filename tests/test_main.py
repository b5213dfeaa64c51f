"""Tests for the headless entry point."""
from __future__ import annotations

import logging
from pathlib import Path

from cleancatch.config.settings import Settings
from cleancatch.core.state import RoundOutcome
from cleancatch.game.drops import DropKind
from cleancatch.game.round import RoundController
from cleancatch.main import autopilot, run_headless, setup_logging


class TestHeadless:
    def test_round_always_finishes(self, settings: Settings) -> None:
        summary = run_headless(settings, seed=3)

        assert summary is not None
        assert summary.outcome in (RoundOutcome.WIN, RoundOutcome.LOSS)
        if summary.outcome is RoundOutcome.WIN:
            assert summary.time_left == 0
            assert summary.lives > 0
        else:
            assert summary.lives == 0

    def test_same_seed_same_result(self, settings: Settings) -> None:
        assert run_headless(settings, seed=11) == run_headless(settings, seed=11)


class TestAutopilot:
    def test_idle_without_targets(self, controller: RoundController) -> None:
        controller.start_round()
        assert autopilot(controller) == (False, False)

    def test_steers_toward_clean_drop(self, controller: RoundController, place_drop) -> None:
        controller.start_round()
        place_drop(DropKind.CLEAN, land_in_ms=1500, offset_x=-300)
        assert autopilot(controller) == (True, False)


class TestLogging:
    def test_log_file_receives_records(self, tmp_path: Path) -> None:
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        log_file = tmp_path / "run.log"
        try:
            setup_logging(log_file=log_file)
            logging.getLogger("cleancatch.game.round").info("round log line")
        finally:
            for handler in root.handlers[:]:
                if handler not in handlers:
                    handler.close()
                    root.removeHandler(handler)
            root.setLevel(level)

        assert "round log line" in log_file.read_text(encoding="utf-8")
